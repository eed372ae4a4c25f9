from __future__ import annotations
import random
import string
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncConnection

from calmtunes.logger import get_logger
from calmtunes.models import MOOD_LEVELS, MusicSession
from calmtunes.seeds import has_rows

logger = get_logger("seeds")

SAMPLE_SONGS = [
    {"title": "Weightless", "artist": "Marconi Union", "category": "calm"},
    {"title": "Clair de Lune", "artist": "Debussy", "category": "classical"},
    {"title": "Forest Sounds", "artist": "Nature Recordings", "category": "nature"},
    {"title": "Deep Meditation", "artist": "Zen Music", "category": "meditation"},
    {"title": "Ocean Waves", "artist": "Relaxation Audio", "category": "ambient"},
    {"title": "Morning Energy", "artist": "Upbeat Mix", "category": "energetic"},
    {"title": "Focus Flow", "artist": "Concentration Music", "category": "focus"},
    {"title": "Sleep Journey", "artist": "Dream Sounds", "category": "sleep"},
    {"title": "Peaceful Mind", "artist": "Serenity Spa", "category": "calm"},
    {"title": "Mountain Stream", "artist": "Nature Ambience", "category": "nature"},
]


def _mood_pair(rng: random.Random) -> tuple[str, str]:
    # 세션 후 기분은 전 기분에서 한 단계 이내로만 변함
    before = rng.randrange(len(MOOD_LEVELS))
    after = min(len(MOOD_LEVELS) - 1, max(0, before + rng.randint(-1, 1)))
    return MOOD_LEVELS[before], MOOD_LEVELS[after]


def _track_id(rng: random.Random) -> str:
    suffix = "".join(rng.choices(string.ascii_lowercase + string.digits, k=13))
    return f"spotify:track:{suffix}"


async def seed_music_sessions(conn: AsyncConnection, user_id: int, rng: Optional[random.Random] = None) -> int:
    if await has_rows(conn, MusicSession, user_id):
        logger.info(f"✅ Music sessions already present for user {user_id}")
        return 0

    rng = rng or random.Random()
    now = datetime.now(timezone.utc)
    rows = []
    for _ in range(rng.randint(5, 12)):
        song = rng.choice(SAMPLE_SONGS)
        mood_before, mood_after = _mood_pair(rng)
        rows.append({
            "user_id": user_id,
            "title": song["title"],
            "artist": song["artist"],
            "category": song["category"],
            "duration": rng.randint(180, 479),  # 3-8 minutes
            "playlist_name": f"My Playlist {rng.randint(1, 5)}",
            "mood_before": mood_before,
            "mood_after": mood_after,
            "spotify_track_id": _track_id(rng),
            "session_date": now - timedelta(seconds=rng.uniform(0, 14 * 24 * 3600)),
        })

    await conn.execute(insert(MusicSession).values(rows))
    logger.info(f"✅ Added {len(rows)} music sessions for user {user_id}")
    return len(rows)
