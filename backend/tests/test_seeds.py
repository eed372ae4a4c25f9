import random
from datetime import datetime

import pytest
import pytest_asyncio
from sqlalchemy import func, insert, select, update

from calmtunes.migrations import ALL_SCRIPTS
from calmtunes.models import (
    ART_TYPES, MOOD_LEVELS, MUSIC_CATEGORIES, DrawingSession, MoodEntry, MusicSession, PanicSession, User,
)
from calmtunes.runner import MigrationRunner
from calmtunes.seeds.admin import upsert_admin
from calmtunes.seeds.drawing import seed_drawing_sessions
from calmtunes.seeds.mood import SAMPLE_MOODS, seed_mood_entries
from calmtunes.seeds.music import seed_music_sessions
from calmtunes.seeds.patient_data import add_patient_test_data, first_patient_id
from calmtunes.seeds.users import (
    SAMPLE_PATIENTS, ensure_sample_patients, get_or_create_user, set_therapist_profile_image,
)
from calmtunes.services.auth_service import verify_password

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def migrated(database):
    result = await MigrationRunner(database).run(ALL_SCRIPTS)
    assert result.ok
    return database


async def count(conn, model, **filters):
    stmt = select(func.count()).select_from(model)
    for key, value in filters.items():
        stmt = stmt.where(getattr(model, key) == value)
    return (await conn.execute(stmt)).scalar_one()


async def test_get_or_create_user_is_idempotent(migrated):
    async with migrated.connect() as conn:
        first_id, created = await get_or_create_user(conn, "test@example.com", "Test User")
        again_id, created_again = await get_or_create_user(conn, "test@example.com", "Test User")
        assert (created, created_again) == (True, False)
        assert first_id == again_id
        assert await count(conn, User) == 1


async def test_sample_patients(migrated):
    async with migrated.connect() as conn:
        ids = await ensure_sample_patients(conn)
        assert ids == await ensure_sample_patients(conn)
        roles = (await conn.execute(select(User.role))).scalars().all()
    assert len(ids) == len(SAMPLE_PATIENTS)
    assert set(roles) == {"patient"}


async def test_music_seed_is_guarded(migrated):
    async with migrated.connect() as conn:
        user_id, _ = await get_or_create_user(conn, "patient1@example.com")
        added = await seed_music_sessions(conn, user_id, random.Random(7))
        assert 5 <= added <= 12
        assert await seed_music_sessions(conn, user_id, random.Random(7)) == 0
        assert await count(conn, MusicSession, user_id=user_id) == added

        rows = (await conn.execute(select(MusicSession))).mappings().all()
    for row in rows:
        assert row["category"] in MUSIC_CATEGORIES
        assert 180 <= row["duration"] < 480
        step = MOOD_LEVELS.index(row["mood_after"]) - MOOD_LEVELS.index(row["mood_before"])
        assert abs(step) <= 1
        assert row["spotify_track_id"].startswith("spotify:track:")


async def test_mood_seed_maps_labels_to_levels(migrated):
    async with migrated.connect() as conn:
        user_id, _ = await get_or_create_user(conn, "test@example.com")
        assert await seed_mood_entries(conn, user_id, random.Random(1)) == len(SAMPLE_MOODS)
        assert await seed_mood_entries(conn, user_id) == 0
        rows = (await conn.execute(
            select(MoodEntry.mood_level, MoodEntry.mood_intensity).order_by(MoodEntry.id)
        )).all()
    assert rows[0] == ("good", 8)
    assert rows[3] == ("low", 3)


async def test_drawing_seed(migrated):
    async with migrated.connect() as conn:
        user_id, _ = await get_or_create_user(conn, "patient2@example.com")
        added = await seed_drawing_sessions(conn, user_id, random.Random(3))
        rows = (await conn.execute(select(DrawingSession))).mappings().all()
    assert 3 <= added <= 7
    assert len(rows) == added
    assert all(r["art_type"] in ART_TYPES for r in rows)
    assert rows[0]["tools_used"] == ["brush", "pencil", "eraser"]
    assert rows[0]["is_completed"] is True


async def test_admin_upsert_keeps_one_row(migrated):
    async with migrated.connect() as conn:
        created = await upsert_admin(conn, "admin@calmtunes.com", "first-pass")
        assert created["role"] == "admin"

        # 첫 실행 이후 시간이 흐른 것처럼 updated_at을 과거로 돌림
        old = datetime(2000, 1, 1)
        await conn.execute(update(User).where(User.email == "admin@calmtunes.com").values(updated_at=old))
        before = (await conn.execute(select(User.created_at))).scalar_one()

        again = await upsert_admin(conn, "admin@calmtunes.com", "second-pass")
        row = (await conn.execute(select(User))).mappings().one()

    assert again["id"] == created["id"]
    assert row["created_at"] == before
    assert row["updated_at"] > old
    assert verify_password("second-pass", row["password_hash"])
    assert not verify_password("first-pass", row["password_hash"])


async def test_admin_upsert_promotes_existing_user(migrated):
    async with migrated.connect() as conn:
        await conn.execute(insert(User).values(email="boss@example.com", name="Boss", role="patient"))
        await upsert_admin(conn, "boss@example.com", "pw", name="Ignored Name")
        row = (await conn.execute(select(User.name, User.role))).one()
    # 이름은 그대로, 역할만 admin으로 갱신
    assert row == ("Boss", "admin")


async def test_patient_test_data_targets_first_patient(migrated):
    async with migrated.connect() as conn:
        assert await first_patient_id(conn) is None
        await get_or_create_user(conn, "dr.kim@example.com", "Dr. Kim", role="therapist")
        patient_id, _ = await get_or_create_user(conn, "patient1@example.com", "John Patient")
        await get_or_create_user(conn, "patient2@example.com", "Jane Patient")
        assert await first_patient_id(conn) == patient_id

        await seed_music_sessions(conn, patient_id, random.Random(3))
        music_before = await count(conn, MusicSession, user_id=patient_id)

        added = await add_patient_test_data(conn, patient_id)
        assert added["music_sessions"] == 0
        assert added["panic_sessions"] == 2
        assert await count(conn, MusicSession, user_id=patient_id) == music_before
        assert await count(conn, PanicSession, user_id=patient_id) == 2

        again = await add_patient_test_data(conn, patient_id)
        assert set(again.values()) == {0}


async def test_set_therapist_profile_image(migrated):
    async with migrated.connect() as conn:
        therapist_id, _ = await get_or_create_user(conn, "dr.kim@example.com", "Dr. Kim", role="therapist")
        patient_id, _ = await get_or_create_user(conn, "patient1@example.com", "John Patient")

        assert await set_therapist_profile_image(conn, "kim.jpg") == [therapist_id]
        images = dict((await conn.execute(select(User.id, User.profile_image))).all())
    assert images == {therapist_id: "kim.jpg", patient_id: None}
