# photobot/services/auth.py
from __future__ import annotations

import hmac
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.config import Settings
from photobot.database.models import Admin, User
from photobot.database.repo.users import get_or_create_user
from photobot.services.errors import AuthorizationError


@dataclass(frozen=True, slots=True)
class AuthResult:
    is_root: bool
    is_admin: bool
    role: str  # "root" | "admin" | "user"


def verify_cron_secret(authorization: str | None, secret: str) -> None:
    """
    Expects `Authorization: Bearer <secret>`. An empty configured secret
    rejects everything.
    """
    if not secret:
        raise AuthorizationError("Cron secret is not configured")

    header = (authorization or "").strip()
    if not header.startswith("Bearer "):
        raise AuthorizationError("Missing bearer credential")

    token = header.removeprefix("Bearer ").strip()
    if not hmac.compare_digest(token.encode(), secret.encode()):
        raise AuthorizationError("Invalid bearer credential")


class AuthService:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    async def resolve(self, session: AsyncSession, user: User) -> AuthResult:
        # Root admins come from env, always takes precedence.
        if user.telegram_id in self.settings.root_admin_ids:
            return AuthResult(is_root=True, is_admin=True, role="root")

        res = await session.execute(select(Admin).where(Admin.user_id == user.id))
        admin = res.scalar_one_or_none()

        if admin is None:
            return AuthResult(is_root=False, is_admin=False, role="user")

        return AuthResult(
            is_root=False,
            is_admin=True,
            role=admin.role.value,
        )

    async def resolve_by_telegram(
        self,
        session: AsyncSession,
        telegram_id: int,
        username: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> AuthResult:
        if telegram_id in self.settings.root_admin_ids:
            return AuthResult(is_root=True, is_admin=True, role="root")

        user = await get_or_create_user(
            session,
            telegram_id=telegram_id,
            username=username,
            first_name=first_name,
            last_name=last_name,
        )
        return await self.resolve(session, user)
