from datetime import date, datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from aure.core.config import settings
from aure.models.models import Perfume, ScentSession, UserPerfume, UserPreferences, Vibe, WearLog
from aure.recs.editorial import aura_words
from aure.schemas.collection import UserPerfumeOut
from aure.schemas.perfumes import PerfumeNotes, PerfumeOut, WeatherPerformance
from aure.schemas.preferences import PreferencesOut
from aure.schemas.sessions import RecommendedPerfumeOut, SessionOut
from aure.schemas.vibes import VibeOut
from aure.schemas.wear import WearLogOut


def local_tz() -> ZoneInfo:
    return ZoneInfo(settings.LOCAL_TIMEZONE)


def local_today() -> date:
    return datetime.now(local_tz()).date()


def local_day_start_utc(day: date) -> datetime:
    """UTC instant at which ``day`` starts in the local zone."""
    return datetime(day.year, day.month, day.day, tzinfo=local_tz()).astimezone(timezone.utc)


def local_day_bounds_utc(day: date) -> tuple[datetime, datetime]:
    return local_day_start_utc(day), local_day_start_utc(day + timedelta(days=1))


def perfume_out(p: Perfume) -> PerfumeOut:
    wp = dict(p.weather_performance or {})
    return PerfumeOut(
        id=str(p.id),
        name=p.name,
        house=p.house,
        scent_family=p.scent_family,
        secondary_scent_family=p.secondary_scent_family,
        performance=p.performance,
        notes=PerfumeNotes.model_validate(p.notes or {}),
        aura_words=list(p.aura_words or []),
        outfit_styles=list(p.outfit_styles or []),
        occasions=list(p.occasions or []),
        moods=list(p.moods or []),
        weather_performance=WeatherPerformance.model_validate(wp),
        description=p.description,
        image_url=p.image_url,
        created_at=p.created_at,
    )


def user_perfume_out(up: UserPerfume, p: Optional[Perfume]) -> UserPerfumeOut:
    return UserPerfumeOut(
        id=str(up.id),
        perfume_id=str(up.perfume_id),
        nickname=up.nickname,
        personal_notes=up.personal_notes,
        disliked_notes=list(up.disliked_notes or []),
        is_favorite=bool(up.is_favorite),
        wear_count=up.wear_count or 0,
        last_worn_at=up.last_worn_at,
        created_at=up.created_at,
        perfume=perfume_out(p) if p else None,
    )


def session_out(
    s: ScentSession,
    owned: Optional[UserPerfume] = None,
    perfume: Optional[Perfume] = None,
) -> SessionOut:
    has_recommendation = s.recommended_user_perfume_id is not None
    rec = None
    words: list[str] = []
    if owned is not None and perfume is not None:
        words = aura_words(perfume.aura_words or [], s.mood)
        rec = RecommendedPerfumeOut(
            user_perfume_id=str(owned.id),
            perfume_id=str(perfume.id),
            name=perfume.name,
            house=perfume.house,
            scent_family=perfume.scent_family,
            image_url=perfume.image_url,
            aura_words=list(perfume.aura_words or []),
        )
    return SessionOut(
        id=str(s.id),
        status="completed" if s.completed_at is not None else "pending",
        has_recommendation=has_recommendation,
        outfit_styles=list(s.outfit_styles or []),
        mood=s.mood,
        scent_directions=list(s.scent_directions or []),
        occasion=s.occasion,
        weather=s.weather,
        recommended_user_perfume_id=str(s.recommended_user_perfume_id) if has_recommendation else None,
        recommendation_type=s.recommendation_type,
        match_score=s.match_score,
        editorial_explanation=s.editorial_explanation,
        affirmation=s.affirmation,
        copy_source=s.copy_source,
        aura_words=words,
        perfume=rec,
        completed_at=s.completed_at,
        created_at=s.created_at,
    )


def wear_out(w: WearLog) -> WearLogOut:
    return WearLogOut(
        id=str(w.id),
        perfume_id=str(w.perfume_id),
        perfume_name=w.perfume_name,
        perfume_house=w.perfume_house,
        scent_family=w.scent_family,
        session_id=str(w.session_id) if w.session_id else None,
        vibe_id=str(w.vibe_id) if w.vibe_id else None,
        notes=w.notes,
        worn_at=w.worn_at,
    )


def vibe_out(v: Vibe, outfit_image_url: Optional[str] = None, perfume_image_url: Optional[str] = None) -> VibeOut:
    return VibeOut(
        id=str(v.id),
        session_id=str(v.session_id),
        name=v.name,
        notes=v.notes,
        has_image=bool(v.has_image),
        outfit_image_key=v.outfit_image_key,
        outfit_image_url=outfit_image_url,
        perfume_name=v.perfume_name,
        perfume_house=v.perfume_house,
        scent_family=v.scent_family,
        perfume_image_url=perfume_image_url,
        aura_words=list(v.aura_words or []),
        mood=v.mood,
        occasion=v.occasion,
        created_at=v.created_at,
    )


def preferences_out(p: UserPreferences) -> PreferencesOut:
    return PreferencesOut(
        id=str(p.id),
        scent_preferences=p.scent_preferences,
        avoid_notes=p.avoid_notes,
        default_location=p.default_location,
        use_weather_context=bool(p.use_weather_context),
        created_at=p.created_at,
        updated_at=p.updated_at,
    )
