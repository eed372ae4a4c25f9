"""
Demo data for the first patient so a therapist sees every section filled in:
drawing, music, mood, panic sessions and emergency contacts.

Each section is skipped when the patient already has rows in that table.
"""
from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncConnection

from calmtunes.logger import get_logger
from calmtunes.models import DrawingSession, MoodEntry, MusicSession, PanicSession, User, UserContact
from calmtunes.seeds import has_rows

logger = get_logger("seeds")

# days_ago 는 실행 시점 기준으로 session_date / created_at 계산
PATIENT_DRAWINGS = [
    {
        "session_name": "Stress Relief Session",
        "art_type": "mandala",
        "duration": 25,
        "mood_before": "stressed",
        "mood_after": "calm",
        "tools_used": ["brush", "pencil"],
        "colors_used": ["blue", "green", "purple"],
        "days_ago": 2,
    },
    {
        "session_name": "Emotion Expression",
        "art_type": "emotion_expression",
        "duration": 30,
        "mood_before": "very_stressed",
        "mood_after": "neutral",
        "tools_used": ["brush", "eraser"],
        "colors_used": ["red", "black", "yellow"],
        "days_ago": 5,
    },
]

PATIENT_MUSIC = [
    {
        "title": "Weightless", "artist": "Marconi Union", "category": "ambient", "duration": 480,
        "playlist_name": "Calm & Relaxing", "mood_before": "low", "mood_after": "good",
        "spotify_track_id": "spotify:track:123456789", "days_ago": 1,
    },
    {
        "title": "Clair de Lune", "artist": "Claude Debussy", "category": "classical", "duration": 300,
        "playlist_name": "Peaceful Piano", "mood_before": "neutral", "mood_after": "excellent",
        "spotify_track_id": "spotify:track:987654321", "days_ago": 3,
    },
    {
        "title": "River Flows in You", "artist": "Yiruma", "category": "meditation", "duration": 180,
        "playlist_name": "Meditation Music", "mood_before": "very_low", "mood_after": "good",
        "spotify_track_id": "spotify:track:456789123", "days_ago": 4,
    },
]

PATIENT_MOODS = [
    {
        "mood_level": "good",
        "mood_intensity": 3,
        "note": "Feeling good after morning meditation",
        "triggers": ["Work stress"],
        "activities": ["Meditation", "Exercise"],
        "days_ago": 1,
    },
    {
        "mood_level": "neutral",
        "mood_intensity": 2,
        "note": "Anxious about upcoming presentation",
        "triggers": ["Work deadline"],
        "activities": ["Deep breathing"],
        "days_ago": 6,
    },
]

PATIENT_PANIC = [
    {
        "duration": 4 * 60 * 1000,  # ms
        "breathing_used": True,
        "emergency_contacts_used": [],
        "trigger_method": "button",
        "days_ago": 2,
    },
    {
        "duration": 9 * 60 * 1000,
        "breathing_used": True,
        "emergency_contacts_used": ["Mom"],
        "trigger_method": "voice",
        "days_ago": 8,
    },
]

PATIENT_CONTACTS = [
    {"name": "Mom", "phone": "+1-555-0100", "type": "family"},
    {"name": "Dr. Lee", "phone": "+1-555-0199", "type": "therapist"},
]


async def first_patient_id(conn: AsyncConnection) -> Optional[int]:
    res = await conn.execute(
        select(User.id).where(User.role == "patient").order_by(User.id).limit(1)
    )
    return res.scalar_one_or_none()


def _dated(rows: list[dict], user_id: int, column: str, now: datetime) -> list[dict]:
    out = []
    for row in rows:
        row = dict(row)
        row[column] = now - timedelta(days=row.pop("days_ago"))
        row["user_id"] = user_id
        out.append(row)
    return out


async def _insert_once(conn: AsyncConnection, model, user_id: int, rows: list[dict]) -> int:
    table = model.__tablename__
    if await has_rows(conn, model, user_id):
        logger.info(f"✅ Patient {user_id} already has {table}")
        return 0
    await conn.execute(insert(model).values(rows))
    logger.info(f"✅ Added {len(rows)} {table} for patient {user_id}")
    return len(rows)


async def add_patient_test_data(conn: AsyncConnection, user_id: int) -> dict[str, int]:
    """Rows added per table ({table: count}); 0 where the table was already populated."""
    now = datetime.now(timezone.utc)
    contacts = [dict(c, user_id=user_id) for c in PATIENT_CONTACTS]
    return {
        DrawingSession.__tablename__: await _insert_once(
            conn, DrawingSession, user_id,
            [dict(r, canvas_size="800x600", is_completed=True) for r in _dated(PATIENT_DRAWINGS, user_id, "session_date", now)],
        ),
        MusicSession.__tablename__: await _insert_once(
            conn, MusicSession, user_id, _dated(PATIENT_MUSIC, user_id, "session_date", now)
        ),
        MoodEntry.__tablename__: await _insert_once(
            conn, MoodEntry, user_id, _dated(PATIENT_MOODS, user_id, "created_at", now)
        ),
        PanicSession.__tablename__: await _insert_once(
            conn, PanicSession, user_id, _dated(PATIENT_PANIC, user_id, "start_time", now)
        ),
        UserContact.__tablename__: await _insert_once(conn, UserContact, user_id, contacts),
    }
