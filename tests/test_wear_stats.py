from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from aure.recs.wear_stats import WearEntry, current_streak, summarize

TODAY = date(2026, 5, 20)


def _at(day: date, hour: int = 9) -> datetime:
    return datetime(day.year, day.month, day.day, hour, tzinfo=timezone.utc)


def test_streak_consecutive_days():
    stamps = [_at(TODAY), _at(TODAY - timedelta(days=1)), _at(TODAY - timedelta(days=2))]
    assert current_streak(stamps, today=TODAY) == 3


def test_streak_gap_breaks():
    assert current_streak([_at(TODAY), _at(TODAY - timedelta(days=3))], today=TODAY) == 1


def test_streak_stale():
    assert current_streak([_at(TODAY - timedelta(days=3))], today=TODAY) == 0


def test_streak_can_start_yesterday():
    stamps = [_at(TODAY - timedelta(days=1)), _at(TODAY - timedelta(days=2))]
    assert current_streak(stamps, today=TODAY) == 2


def test_streak_counts_days_not_wears():
    stamps = [_at(TODAY, 8), _at(TODAY, 20), _at(TODAY - timedelta(days=1))]
    assert current_streak(stamps, today=TODAY) == 2


def test_streak_uses_local_calendar():
    # 23:30 UTC on the 19th is already the 20th in London summer time
    late = datetime(2026, 5, 19, 23, 30, tzinfo=timezone.utc)
    assert current_streak([late], today=TODAY, tz=ZoneInfo("Europe/London")) == 1
    assert current_streak([late, _at(TODAY)], today=TODAY, tz=timezone.utc) == 2


def test_empty_history():
    stats = summarize([])
    assert stats.total_wears == 0
    assert stats.current_streak == 0
    assert stats.favorite_family is None
    assert stats.favorite_perfume is None
    assert stats.family_breakdown == []
    assert stats.most_worn == []
    assert stats.unique_perfumes == 0


def test_summary():
    entries = [
        WearEntry("p1", "Santal 33", _at(TODAY), "Le Labo", "woody"),
        WearEntry("p1", "Santal 33", _at(TODAY - timedelta(days=1)), "Le Labo", "woody"),
        WearEntry("p2", "Blanche", _at(TODAY - timedelta(days=2)), "Byredo", "fresh"),
        WearEntry("p3", "Mystery", _at(TODAY - timedelta(days=9)), None, None),
    ]
    stats = summarize(entries, today=TODAY)
    assert stats.total_wears == 4
    assert stats.current_streak == 3
    assert stats.favorite_family == "woody"
    assert stats.favorite_perfume.name == "Santal 33"
    assert stats.favorite_perfume.wear_count == 2
    assert [(f.family, f.count, f.percentage) for f in stats.family_breakdown] == [("woody", 2, 67), ("fresh", 1, 33)]
    assert stats.family_counts == {"woody": 2, "fresh": 1}
    assert [m.perfume_id for m in stats.most_worn] == ["p1", "p2", "p3"]
    assert stats.unique_perfumes == 3
    assert stats.first_wear == _at(TODAY - timedelta(days=9))
    assert stats.last_wear == _at(TODAY)


def test_most_worn_is_capped():
    entries = [WearEntry(f"p{i}", f"Perfume {i}", _at(TODAY - timedelta(days=i)), "House", "floral") for i in range(8)]
    stats = summarize(entries, today=TODAY)
    assert len(stats.most_worn) == 5
    assert stats.family_breakdown[0].percentage == 100
