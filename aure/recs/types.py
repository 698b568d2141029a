from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, FrozenSet, Optional, Tuple


@dataclass(frozen=True)
class ScoringContext:
    """What the user asked for in one session."""
    scent_directions: FrozenSet[str]
    mood: str
    occasion: str
    outfit_styles: Tuple[str, ...] = ()
    weather_bucket: Optional[str] = None


@dataclass(frozen=True)
class PerfumeProfile:
    """Catalog attributes the scorer reads."""
    perfume_id: str
    name: str
    house: str
    scent_family: str
    secondary_family: Optional[str] = None
    moods: Tuple[str, ...] = ()
    occasions: Tuple[str, ...] = ()
    outfit_styles: Tuple[str, ...] = ()
    ideal_temperature: Tuple[str, ...] = ()
    temperature_boost: Optional[float] = None
    aura_words: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Candidate:
    """An owned fragrance joined with its catalog row.

    ``perfume`` is None when the catalog row could not be found.
    """
    user_perfume_id: str
    perfume: Optional[PerfumeProfile]
    is_favorite: bool = False
    last_worn_at: Optional[datetime] = None


@dataclass
class ScoreBreakdown:
    terms: Dict[str, float] = field(default_factory=dict)
    total: float = 0.0

    def add(self, name: str, value: float) -> None:
        self.terms[name] = self.terms.get(name, 0.0) + value


@dataclass(frozen=True)
class RankedRecommendation:
    candidate: Candidate
    score: float
    breakdown: ScoreBreakdown

    @property
    def perfume(self) -> PerfumeProfile:
        if self.candidate.perfume is None:
            raise ValueError(f"candidate {self.candidate.user_perfume_id} has no catalog row")
        return self.candidate.perfume
