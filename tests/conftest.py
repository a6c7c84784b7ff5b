from __future__ import annotations

from datetime import datetime
from itertools import count

import pytest
import pytest_asyncio

from photobot.config.settings import Settings
from photobot.database.models import Category, CategoryType, Photo, User
from photobot.database.session import Database

CRON_SECRET = "test-cron-secret"


@pytest.fixture
def settings() -> Settings:
    return Settings(bot_token="123:abc", bot_username="photobot_test", cron_secret=CRON_SECRET)


@pytest_asyncio.fixture
async def db(tmp_path):
    database = Database(f"sqlite+aiosqlite:///{tmp_path}/test.db")
    await database.init_models()
    yield database
    await database.close()


@pytest_asyncio.fixture
async def session(db):
    async with db.session() as s:
        yield s


@pytest.fixture
def make_user(session):
    seq = count(1000)

    async def _make(username: str | None = None) -> User:
        tg_id = next(seq)
        user = User(telegram_id=tg_id, username=username or f"user{tg_id}")
        session.add(user)
        await session.commit()
        return user

    return _make


@pytest.fixture
def make_category(session):
    async def _make(
        name: str = "Street",
        category_type: CategoryType = CategoryType.PERMANENT,
        *,
        is_active: bool = True,
        week_start_date: datetime | None = None,
    ) -> Category:
        cat = Category(
            name=name,
            category_type=category_type,
            is_active=is_active,
            week_start_date=week_start_date,
        )
        session.add(cat)
        await session.commit()
        return cat

    return _make


@pytest.fixture
def make_photo(session):
    seq = count(1)

    async def _make(
        user: User,
        category: Category,
        *,
        created_at: datetime,
        likes: int = 0,
        dislikes: int = 0,
    ) -> Photo:
        photo = Photo(
            user_id=user.id,
            category_id=category.id,
            file_id=f"file-{next(seq)}",
            likes_count=likes,
            dislikes_count=dislikes,
            net_score=likes - dislikes,
            created_at=created_at,
        )
        session.add(photo)
        await session.commit()
        return photo

    return _make
