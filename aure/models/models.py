from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Integer, Float, Boolean, ForeignKey, DateTime, Text, JSON, Uuid, UniqueConstraint, Index
from sqlalchemy.sql import func
import uuid
from datetime import datetime, timezone
from aure.core.db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Perfume(Base):
    __tablename__ = "perfume"
    __table_args__ = (
        UniqueConstraint("name", "house", name="uq_perfume_name_house"),
        Index("ix_perfume_scent_family", "scent_family"),
        Index("ix_perfume_performance", "performance"),
    )
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(200))
    house: Mapped[str] = mapped_column(String(200))
    scent_family: Mapped[str] = mapped_column(String(16))
    secondary_scent_family: Mapped[str | None] = mapped_column(String(16), nullable=True)
    performance: Mapped[str] = mapped_column(String(16), default="balanced")
    # {"top": [...], "heart": [...], "base": [...]}
    notes: Mapped[dict] = mapped_column(JSON, default=lambda: {"top": [], "heart": [], "base": []})
    aura_words: Mapped[list[str]] = mapped_column(JSON, default=list)
    outfit_styles: Mapped[list[str]] = mapped_column(JSON, default=list)
    occasions: Mapped[list[str]] = mapped_column(JSON, default=list)
    moods: Mapped[list[str]] = mapped_column(JSON, default=list)
    # {"ideal_temperature": [...], "ideal_humidity": [...], "temperature_boost": float?, "humidity_boost": float?}
    weather_performance: Mapped[dict] = mapped_column(JSON, default=dict)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())


class UserPerfume(Base):
    __tablename__ = "user_perfume"
    __table_args__ = (
        UniqueConstraint("user_id", "perfume_id", name="uq_user_perfume_user_perfume"),
        Index("ix_user_perfume_user_favorite", "user_id", "is_favorite"),
    )
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(Text, index=True)
    # no FK: catalog rows can disappear and readers must cope with the orphan
    perfume_id: Mapped[uuid.UUID] = mapped_column(Uuid)
    nickname: Mapped[str | None] = mapped_column(Text, nullable=True)
    personal_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    disliked_notes: Mapped[list[str]] = mapped_column(JSON, default=list)
    is_favorite: Mapped[bool] = mapped_column(Boolean, default=False)
    wear_count: Mapped[int] = mapped_column(Integer, default=0)
    last_worn_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())


class ScentSession(Base):
    __tablename__ = "scent_session"
    __table_args__ = (Index("ix_scent_session_user_created", "user_id", "created_at"),)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(Text)
    outfit_styles: Mapped[list[str]] = mapped_column(JSON, default=list)
    mood: Mapped[str] = mapped_column(String(32))
    scent_directions: Mapped[list[str]] = mapped_column(JSON, default=list)
    occasion: Mapped[str] = mapped_column(String(32))
    # temperature, temperature_category, humidity, humidity_category, condition, location, is_manual
    weather: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    # outcome, written once and all together
    recommended_user_perfume_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    recommendation_type: Mapped[str | None] = mapped_column(String(32), nullable=True)
    match_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    editorial_explanation: Mapped[str | None] = mapped_column(Text, nullable=True)
    affirmation: Mapped[str | None] = mapped_column(Text, nullable=True)
    copy_source: Mapped[str | None] = mapped_column(String(16), nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())


class WearLog(Base):
    __tablename__ = "wear_log"
    __table_args__ = (Index("ix_wear_log_user_worn", "user_id", "worn_at"),)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(Text)
    perfume_id: Mapped[uuid.UUID] = mapped_column(Uuid)
    # snapshot of the catalog row at wear time
    perfume_name: Mapped[str] = mapped_column(String(200))
    perfume_house: Mapped[str | None] = mapped_column(String(200), nullable=True)
    scent_family: Mapped[str | None] = mapped_column(String(32), nullable=True)
    session_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    vibe_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    worn_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())


class Vibe(Base):
    __tablename__ = "vibe"
    __table_args__ = (Index("ix_vibe_user_created", "user_id", "created_at"),)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(Text)
    session_id: Mapped[uuid.UUID] = mapped_column(Uuid)
    name: Mapped[str] = mapped_column(String(120))
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    has_image: Mapped[bool] = mapped_column(Boolean, default=False)
    outfit_image_key: Mapped[str | None] = mapped_column(Text, nullable=True)
    # snapshot of the recommendation at save time
    perfume_name: Mapped[str] = mapped_column(String(200))
    perfume_house: Mapped[str] = mapped_column(String(200))
    scent_family: Mapped[str] = mapped_column(String(32))
    aura_words: Mapped[list[str]] = mapped_column(JSON, default=list)
    mood: Mapped[str] = mapped_column(String(32))
    occasion: Mapped[str] = mapped_column(String(32))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())


class UserPreferences(Base):
    __tablename__ = "user_preferences"
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(Text, unique=True)
    scent_preferences: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    avoid_notes: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    # {"city", "country", "lat", "lon"}
    default_location: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    use_weather_context: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())
