"""Database models."""

from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from booksphere.database import Base


class User(Base):
    """Reader profile. Accounts are managed elsewhere; this is the slice the core reads."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="reader")
    mood_sensitivity: Mapped[float | None] = mapped_column(Float, nullable=True)
    music_volume: Mapped[int] = mapped_column(Integer, nullable=False, default=70)
    dynamic_background: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    theme: Mapped[str] = mapped_column(String(10), nullable=False, default="light")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"


class Preset(Base):
    """Book-scoped, creator-owned configuration of mood transitions."""

    __tablename__ = "presets"
    __table_args__ = (
        Index(
            "uq_presets_one_default_per_book",
            "book_id",
            unique=True,
            sqlite_where=text("is_default = 1"),
            postgresql_where=text("is_default"),
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    creator_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    book_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    triggers: Mapped[list["MoodTrigger"]] = relationship(
        back_populates="preset", cascade="all, delete-orphan", passive_deletes=True
    )
    map_entries: Mapped[list["MoodMapEntry"]] = relationship(
        back_populates="preset", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Preset(id={self.id}, book_id={self.book_id}, name='{self.name}')>"


class MoodReference(Base):
    """Named mood with per-genre base tempo values."""

    __tablename__ = "mood_references"
    __table_args__ = (
        CheckConstraint("tempo_electronic BETWEEN 30 AND 200", name="ck_tempo_electronic"),
        CheckConstraint("tempo_classical BETWEEN 30 AND 200", name="ck_tempo_classical"),
        CheckConstraint("tempo_lofi BETWEEN 30 AND 200", name="ck_tempo_lofi"),
        CheckConstraint(
            "tempo_custom = 0 OR tempo_custom BETWEEN 30 AND 200", name="ck_tempo_custom"
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    mood_name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    tempo_electronic: Mapped[int] = mapped_column(Integer, nullable=False)
    tempo_classical: Mapped[int] = mapped_column(Integer, nullable=False)
    tempo_lofi: Mapped[int] = mapped_column(Integer, nullable=False)
    tempo_custom: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<MoodReference(id={self.id}, mood_name='{self.mood_name}')>"


class Background(Base):
    """Background image associated with a mood."""

    __tablename__ = "backgrounds"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    mood_id: Mapped[int] = mapped_column(ForeignKey("mood_references.id"), nullable=False)
    background_path: Mapped[str] = mapped_column(String(500), nullable=False)


class MoodMapEntry(Base):
    """Breakpoint at (chapter, page_fraction) switching a preset to a mood."""

    __tablename__ = "mood_map_entries"
    __table_args__ = (
        Index("ix_mood_map_entries_position", "preset_id", "chapter", "page_fraction"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    preset_id: Mapped[int] = mapped_column(
        ForeignKey("presets.id", ondelete="CASCADE"), nullable=False
    )
    chapter: Mapped[int] = mapped_column(Integer, nullable=False)
    page_fraction: Mapped[float] = mapped_column(Float, nullable=False)
    mood_id: Mapped[int | None] = mapped_column(ForeignKey("mood_references.id"), nullable=True)
    background_id: Mapped[int | None] = mapped_column(ForeignKey("backgrounds.id"), nullable=True)
    transition_type: Mapped[str | None] = mapped_column(String(20), nullable=True, default="fade")

    preset: Mapped["Preset"] = relationship(back_populates="map_entries")


class MoodTrigger(Base):
    """Priority-ordered trigger rule with a structured condition."""

    __tablename__ = "mood_triggers"
    __table_args__ = (
        CheckConstraint(
            "transition_duration BETWEEN 100 AND 10000", name="ck_trigger_transition_duration"
        ),
        CheckConstraint("priority BETWEEN 1 AND 100", name="ck_trigger_priority"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    preset_id: Mapped[int] = mapped_column(
        ForeignKey("presets.id", ondelete="CASCADE"), nullable=False, index=True
    )
    mood_id: Mapped[int] = mapped_column(ForeignKey("mood_references.id"), nullable=False)
    trigger_condition: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    music_track_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    background_image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    transition_duration: Mapped[int] = mapped_column(Integer, nullable=False, default=3000)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    preset: Mapped["Preset"] = relationship(back_populates="triggers")
    mood: Mapped["MoodReference"] = relationship()


class AuditLog(Base):
    """Append-only audit record."""

    __tablename__ = "audit_log"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    action: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    entity_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    entity_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    details: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
