from __future__ import annotations
import random
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncConnection

from calmtunes.logger import get_logger
from calmtunes.models import ART_TYPES, STRESS_LEVELS, DrawingSession
from calmtunes.seeds import has_rows

logger = get_logger("seeds")

DEFAULT_TOOLS = ["brush", "pencil", "eraser"]
DEFAULT_COLORS = ["blue", "green", "yellow", "red"]


async def seed_drawing_sessions(conn: AsyncConnection, user_id: int, rng: Optional[random.Random] = None) -> int:
    if await has_rows(conn, DrawingSession, user_id):
        logger.info(f"✅ Drawing sessions already present for user {user_id}")
        return 0

    rng = rng or random.Random()
    now = datetime.now(timezone.utc)
    rows = []
    for j in range(rng.randint(3, 7)):
        before = rng.randrange(len(STRESS_LEVELS))
        after = max(0, before + rng.randint(-1, 0))
        rows.append({
            "user_id": user_id,
            "session_name": f"Art Session {j + 1}",
            "art_type": rng.choice(ART_TYPES),
            "duration": rng.randint(15, 44),  # minutes
            "mood_before": STRESS_LEVELS[before],
            "mood_after": STRESS_LEVELS[after],
            "tools_used": list(DEFAULT_TOOLS),
            "colors_used": list(DEFAULT_COLORS),
            "canvas_size": "800x600",
            "is_completed": True,
            "session_date": now - timedelta(seconds=rng.uniform(0, 7 * 24 * 3600)),
        })

    await conn.execute(insert(DrawingSession).values(rows))
    logger.info(f"✅ Added {len(rows)} drawing sessions for user {user_id}")
    return len(rows)
