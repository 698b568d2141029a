from __future__ import annotations

from typing import Optional, Protocol

from aure.services.llm.types import EditorialInput, EditorialOutput, OutfitAnalysis, OutfitAnalysisInput


class LLMProvider(Protocol):
    async def generate_editorial(self, payload: EditorialInput, *, timeout_ms: int) -> EditorialOutput:
        ...

    async def analyze_outfit(self, payload: OutfitAnalysisInput, *, timeout_ms: int) -> Optional[OutfitAnalysis]:
        ...


class NullProvider:
    """Used when LLM is disabled; produces nothing so callers fall back."""

    name = "disabled"

    async def generate_editorial(self, payload: EditorialInput, *, timeout_ms: int) -> EditorialOutput:
        from aure.services.llm.types import LLMUsage

        return EditorialOutput(usage=LLMUsage(model=self.name, prompt_version=payload.prompt_version, cached=True))

    async def analyze_outfit(self, payload: OutfitAnalysisInput, *, timeout_ms: int) -> Optional[OutfitAnalysis]:
        return None
