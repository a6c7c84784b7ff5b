from dataclasses import replace

import pytest

from photobot.database.models import Admin, AdminRole
from photobot.database.repo.users import get_or_create_user
from photobot.services.auth import AuthService, verify_cron_secret
from photobot.services.errors import AuthorizationError


def test_verify_cron_secret_accepts_exact_bearer():
    verify_cron_secret("Bearer s3cret", "s3cret")


@pytest.mark.parametrize(
    "header, secret",
    [
        (None, "s3cret"),
        ("", "s3cret"),
        ("s3cret", "s3cret"),
        ("Bearer wrong", "s3cret"),
        ("Basic s3cret", "s3cret"),
        ("Bearer ", ""),
        ("Bearer anything", ""),
    ],
)
def test_verify_cron_secret_rejects(header, secret):
    with pytest.raises(AuthorizationError):
        verify_cron_secret(header, secret)


@pytest.mark.asyncio
async def test_get_or_create_user_refreshes_profile(session):
    first = await get_or_create_user(session, telegram_id=42, username="old", first_name="Ann")
    again = await get_or_create_user(session, telegram_id=42, username="new")

    assert again.id == first.id
    assert again.username == "new"
    assert again.first_name == "Ann"


@pytest.mark.asyncio
async def test_auth_roles(session, settings):
    auth = AuthService(replace(settings, root_admin_ids=(1,)))

    root = await auth.resolve_by_telegram(session, telegram_id=1)
    assert (root.is_root, root.is_admin, root.role) == (True, True, "root")

    plain = await auth.resolve_by_telegram(session, telegram_id=2)
    assert (plain.is_admin, plain.role) == (False, "user")

    user = await get_or_create_user(session, telegram_id=3)
    session.add(Admin(user_id=user.id, role=AdminRole.ADMIN))
    await session.commit()
    admin = await auth.resolve_by_telegram(session, telegram_id=3)
    assert (admin.is_root, admin.is_admin, admin.role) == (False, True, "admin")
