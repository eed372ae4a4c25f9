from __future__ import annotations
from datetime import datetime
from typing import Literal, Optional, get_args

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import (
    String, Text, Integer, DateTime, Boolean, JSON,
    CheckConstraint, ForeignKey, Index, UniqueConstraint,
)
from sqlalchemy.sql import func
from sqlalchemy.sql.expression import text

from calmtunes.db import Base

UserRole = Literal["patient", "therapist", "admin"]
MoodLevel = Literal["very_low", "low", "neutral", "good", "excellent"]
MusicCategory = Literal[
    "calm", "energetic", "meditation", "nature", "classical", "ambient", "focus", "sleep"
]
ArtType = Literal["free_draw", "mandala", "guided_meditation", "emotion_expression", "stress_relief"]
StressLevel = Literal["very_stressed", "stressed", "neutral", "calm", "very_calm"]
RequestStatus = Literal["pending", "approved", "rejected"]
RelationshipStatus = Literal["active", "inactive", "ended"]

USER_ROLES = get_args(UserRole)
MOOD_LEVELS = get_args(MoodLevel)
MUSIC_CATEGORIES = get_args(MusicCategory)
ART_TYPES = get_args(ArtType)
STRESS_LEVELS = get_args(StressLevel)

MOOD_INTENSITY_MIN = 1
MOOD_INTENSITY_MAX = 10

# JSON 컬렉션 컬럼은 NULL 대신 빈 배열이 기본값
EMPTY_LIST = text("'[]'")


def one_of(column: str, values, nullable: bool = False) -> str:
    """CHECK 제약 조건용 "column in (...)" 식"""
    quoted = ",".join(f"'{v}'" for v in values)
    expr = f"{column} in ({quoted})"
    if nullable:
        expr += f" or {column} is null"
    return expr


def _created_at() -> Mapped[datetime]:
    return mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)


def _updated_at() -> Mapped[datetime]:
    return mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(one_of("role", USER_ROLES), name="ck_users_role"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    # 비밀번호는 소셜 로그인/시드 유저의 경우 나중에 설정
    password_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(
        String(20), default="patient", server_default="patient", nullable=False
    )
    profile_image: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = _created_at()
    updated_at: Mapped[datetime] = _updated_at()


class MoodEntry(Base):
    __tablename__ = "mood_entries"
    __table_args__ = (
        CheckConstraint(one_of("mood_level", MOOD_LEVELS), name="ck_mood_entries_mood_level"),
        CheckConstraint(
            f"mood_intensity between {MOOD_INTENSITY_MIN} and {MOOD_INTENSITY_MAX}",
            name="ck_mood_entries_intensity",
        ),
        Index("idx_mood_entries_user_created", "user_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", onupdate="CASCADE", ondelete="CASCADE"), nullable=False
    )
    mood_level: Mapped[str] = mapped_column(String(20), nullable=False)
    mood_intensity: Mapped[int] = mapped_column(Integer, default=5, server_default="5")
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    triggers: Mapped[list[str]] = mapped_column(JSON, default=list, server_default=EMPTY_LIST)
    activities: Mapped[list[str]] = mapped_column(JSON, default=list, server_default=EMPTY_LIST)
    created_at: Mapped[datetime] = _created_at()
    updated_at: Mapped[datetime] = _updated_at()


class MusicSession(Base):
    __tablename__ = "music_sessions"
    __table_args__ = (
        CheckConstraint(one_of("category", MUSIC_CATEGORIES), name="ck_music_sessions_category"),
        CheckConstraint(one_of("mood_before", MOOD_LEVELS, nullable=True), name="ck_music_sessions_mood_before"),
        CheckConstraint(one_of("mood_after", MOOD_LEVELS, nullable=True), name="ck_music_sessions_mood_after"),
        Index("idx_music_sessions_user_date", "user_id", "session_date"),
        Index("idx_music_sessions_category", "category"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", onupdate="CASCADE", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    artist: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    duration: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # seconds
    playlist_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    mood_before: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    mood_after: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    spotify_track_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    session_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    created_at: Mapped[datetime] = _created_at()
    updated_at: Mapped[datetime] = _updated_at()


class PanicSession(Base):
    __tablename__ = "panic_sessions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", onupdate="CASCADE", ondelete="CASCADE"), nullable=False
    )
    # 담당 치료사가 삭제되어도 세션 기록은 남김
    therapist_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id", onupdate="CASCADE", ondelete="SET NULL"), nullable=True
    )
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)  # milliseconds
    breathing_used: Mapped[bool] = mapped_column(Boolean, default=False, server_default=text("false"))
    emergency_contacts_used: Mapped[list[str]] = mapped_column(JSON, default=list, server_default=EMPTY_LIST)
    trigger_method: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    audio_recordings: Mapped[list[str]] = mapped_column(JSON, default=list, server_default=EMPTY_LIST)
    created_at: Mapped[datetime] = _created_at()
    updated_at: Mapped[datetime] = _updated_at()


class UserContact(Base):
    __tablename__ = "user_contacts"
    __table_args__ = (
        UniqueConstraint("user_id", "phone", name="uq_user_contacts_user_phone"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)
    type: Mapped[str] = mapped_column(String(50), default="personal", server_default="personal")
    created_at: Mapped[datetime] = _created_at()


class DrawingSession(Base):
    __tablename__ = "drawing_sessions"
    __table_args__ = (
        CheckConstraint(one_of("art_type", ART_TYPES), name="ck_drawing_sessions_art_type"),
        CheckConstraint(one_of("mood_before", STRESS_LEVELS, nullable=True), name="ck_drawing_sessions_mood_before"),
        CheckConstraint(one_of("mood_after", STRESS_LEVELS, nullable=True), name="ck_drawing_sessions_mood_after"),
        Index("idx_drawing_sessions_user_date", "user_id", "session_date"),
        Index("idx_drawing_sessions_art_type", "art_type"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", onupdate="CASCADE", ondelete="CASCADE"), nullable=False
    )
    session_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    art_type: Mapped[str] = mapped_column(
        String(30), default="free_draw", server_default="free_draw", nullable=False
    )
    duration: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # minutes
    mood_before: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    mood_after: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    tools_used: Mapped[list[str]] = mapped_column(JSON, default=list, server_default=EMPTY_LIST)
    colors_used: Mapped[list[str]] = mapped_column(JSON, default=list, server_default=EMPTY_LIST)
    canvas_size: Mapped[str] = mapped_column(String(20), default="800x600", server_default="800x600")
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False, server_default=text("false"))
    session_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    created_at: Mapped[datetime] = _created_at()
    updated_at: Mapped[datetime] = _updated_at()


class TherapistRequest(Base):
    __tablename__ = "therapist_requests"
    __table_args__ = (
        CheckConstraint(one_of("status", get_args(RequestStatus)), name="ck_therapist_requests_status"),
        UniqueConstraint("patient_id", "therapist_id", "status", name="uq_therapist_requests_pair_status"),
        Index("idx_therapist_requests_patient_id", "patient_id"),
        Index("idx_therapist_requests_therapist_id", "therapist_id"),
        Index("idx_therapist_requests_status", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    patient_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    therapist_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[str] = mapped_column(String(20), default="pending", server_default="pending", nullable=False)
    created_at: Mapped[datetime] = _created_at()
    responded_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)


class TherapistPatientRelationship(Base):
    __tablename__ = "therapist_patient_relationships"
    __table_args__ = (
        CheckConstraint(
            one_of("status", get_args(RelationshipStatus)),
            name="ck_therapist_patient_relationships_status",
        ),
        UniqueConstraint("therapist_id", "patient_id", name="uq_therapist_patient_pair"),
        Index("idx_therapist_patient_relationships_therapist_id", "therapist_id"),
        Index("idx_therapist_patient_relationships_patient_id", "patient_id"),
        Index("idx_therapist_patient_relationships_status", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    therapist_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    patient_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[str] = mapped_column(String(20), default="active", server_default="active", nullable=False)
    created_at: Mapped[datetime] = _created_at()
    updated_at: Mapped[datetime] = _updated_at()


class Notification(Base):
    __tablename__ = "notifications"
    __table_args__ = (
        Index("idx_notifications_user_id", "user_id"),
        Index("idx_notifications_type", "type"),
        Index("idx_notifications_is_read", "is_read"),
        Index("idx_notifications_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    is_read: Mapped[bool] = mapped_column(Boolean, default=False, server_default=text("false"))
    created_at: Mapped[datetime] = _created_at()
