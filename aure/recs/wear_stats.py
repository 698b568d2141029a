"""Aggregates over a user's wear log.

The wear log is small per user, so everything is computed in memory from the full history.
"""
import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Any, Dict, Iterable, List, Optional, Sequence

MOST_WORN_LIMIT = 5


@dataclass(frozen=True)
class WearEntry:
    perfume_id: str
    perfume_name: str
    worn_at: datetime
    perfume_house: Optional[str] = None
    scent_family: Optional[str] = None


@dataclass
class FamilyShare:
    family: str
    count: int
    percentage: int


@dataclass
class MostWorn:
    perfume_id: str
    name: str
    house: Optional[str]
    count: int


@dataclass
class FavoritePerfume:
    name: str
    house: str
    wear_count: int


@dataclass
class WearStats:
    total_wears: int = 0
    current_streak: int = 0
    favorite_family: Optional[str] = None
    favorite_perfume: Optional[FavoritePerfume] = None
    family_breakdown: List[FamilyShare] = field(default_factory=list)
    family_counts: Dict[str, int] = field(default_factory=dict)
    most_worn: List[MostWorn] = field(default_factory=list)
    first_wear: Optional[datetime] = None
    last_wear: Optional[datetime] = None
    unique_perfumes: int = 0


def _utc(ts: datetime) -> datetime:
    return ts.replace(tzinfo=timezone.utc) if ts.tzinfo is None else ts


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def local_date(ts: datetime, tz: tzinfo) -> date:
    return _utc(ts).astimezone(tz).date()


def current_streak(timestamps: Iterable[datetime], *, today: date, tz: tzinfo = timezone.utc) -> int:
    """Consecutive local calendar days with a wear, ending today or yesterday."""
    days = sorted({local_date(ts, tz) for ts in timestamps}, reverse=True)
    if not days:
        return 0
    if days[0] not in (today, today - timedelta(days=1)):
        return 0
    streak = 1
    for newer, older in zip(days, days[1:]):
        if (newer - older).days != 1:
            break
        streak += 1
    return streak


def summarize(
    entries: Sequence[Any],
    *,
    today: Optional[date] = None,
    tz: tzinfo = timezone.utc,
) -> WearStats:
    """Build wear analytics from entries exposing perfume_id, perfume_name,
    perfume_house, scent_family and worn_at."""
    if not entries:
        return WearStats()
    today = today or datetime.now(tz).date()

    family_counts: Counter = Counter()
    for e in entries:
        if e.scent_family:
            family_counts[e.scent_family] += 1
    # Counter.most_common keeps first-seen order among equal counts
    ranked_families = family_counts.most_common()
    family_total = sum(family_counts.values())
    breakdown = [
        FamilyShare(family=fam, count=cnt, percentage=_round_half_up(cnt / family_total * 100))
        for fam, cnt in ranked_families
    ]

    perfume_counts: Counter = Counter()
    display: Dict[str, tuple[str, Optional[str]]] = {}
    for e in entries:
        pid = str(e.perfume_id)
        perfume_counts[pid] += 1
        display.setdefault(pid, (e.perfume_name, e.perfume_house))
    most_worn = [
        MostWorn(perfume_id=pid, name=display[pid][0], house=display[pid][1], count=cnt)
        for pid, cnt in perfume_counts.most_common(MOST_WORN_LIMIT)
    ]

    stamps = [_utc(e.worn_at) for e in entries]
    top = most_worn[0]
    return WearStats(
        total_wears=len(entries),
        current_streak=current_streak(stamps, today=today, tz=tz),
        favorite_family=ranked_families[0][0] if ranked_families else None,
        favorite_perfume=FavoritePerfume(name=top.name, house=top.house or "", wear_count=top.count),
        family_breakdown=breakdown,
        family_counts=dict(family_counts),
        most_worn=most_worn,
        first_wear=min(stamps),
        last_wear=max(stamps),
        unique_perfumes=len(perfume_counts),
    )
