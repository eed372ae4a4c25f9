from __future__ import annotations
import random
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncConnection

from calmtunes.logger import get_logger
from calmtunes.models import MoodEntry
from calmtunes.seeds import has_rows

logger = get_logger("seeds")

# (label, energy, note) -> 라벨은 mood_level 값으로 매핑해서 저장
SAMPLE_MOODS = [
    ("Happy", 8, "Had a great day at work!"),
    ("Calm", 6, "Peaceful evening with music"),
    ("Neutral", 5, "Regular day"),
    ("Sad", 3, "Feeling a bit down today"),
    ("Happy", 9, "Great workout session"),
    ("Calm", 7, "Meditated this morning"),
    ("Anxious", 4, "Work presentation tomorrow"),
]

LABEL_TO_LEVEL = {
    "Happy": "good",
    "Calm": "good",
    "Neutral": "neutral",
    "Sad": "low",
    "Anxious": "low",
}


async def seed_mood_entries(conn: AsyncConnection, user_id: int, rng: Optional[random.Random] = None) -> int:
    if await has_rows(conn, MoodEntry, user_id):
        logger.info(f"✅ Mood entries already present for user {user_id}")
        return 0

    rng = rng or random.Random()
    now = datetime.now(timezone.utc)
    rows = [
        {
            "user_id": user_id,
            "mood_level": LABEL_TO_LEVEL[label],
            "mood_intensity": energy,
            "note": note,
            "created_at": now - timedelta(days=rng.randrange(7)),
        }
        for label, energy, note in SAMPLE_MOODS
    ]
    await conn.execute(insert(MoodEntry).values(rows))
    logger.info(f"✅ Added {len(rows)} sample mood entries")
    return len(rows)
