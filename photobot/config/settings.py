# photobot/config/settings.py
from __future__ import annotations

import os
import re
from dataclasses import dataclass

from dotenv import load_dotenv


def _require(env: dict[str, str], key: str) -> str:
    v = env.get(key)
    if v is None or not v.strip():
        raise RuntimeError(f"Missing required environment variable: {key}")
    return v.strip()


def _to_int(value: str, key_name: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise RuntimeError(f"Invalid integer for {key_name}: {value!r}") from e


def _to_bool(value: str | None, default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_int_list(raw: str | None, key_name: str) -> list[int]:
    """
    Parses comma/space/newline separated ints.
    Accepts:
      "951258732"
      "951258732,123"
      "951258732 123"
      "[951258732, 123]"  (brackets ignored)
    """
    if not raw:
        return []

    cleaned = raw.strip().strip("[](){}").strip()
    if not cleaned:
        return []

    parts = [p for p in re.split(r"[,\s]+", cleaned) if p]

    out: list[int] = []
    for p in parts:
        p2 = p.strip().strip("'\"")
        if not p2:
            continue
        out.append(_to_int(p2, key_name))
    return out


@dataclass(frozen=True, slots=True)
class Settings:
    # --- required ---
    bot_token: str
    bot_username: str

    # --- optional ---
    database_url: str = "sqlite+aiosqlite:///./photobot.db"

    # --- security / admin ---
    root_admin_ids: tuple[int, ...] = ()
    cron_secret: str = ""  # empty = cron endpoints always reject

    # --- telegram targets ---
    group_id: int | None = None

    # --- http api (scheduler entry points) ---
    api_enabled: bool = True
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # --- ranking ---
    hall_of_fame_size: int = 10
    leaderboard_size: int = 10

    # --- scheduler / time ---
    timezone: str = "UTC"

    # --- environment ---
    environment: str = "production"  # production | development

    @property
    def is_dev(self) -> bool:
        return self.environment.lower() in {"dev", "development", "local"}

    @classmethod
    def load(cls) -> "Settings":
        """
        Loads from process env (and .env if present).
        Fails fast for required fields.
        """
        load_dotenv()
        env = os.environ

        bot_token = _require(env, "BOT_TOKEN")
        bot_username = _require(env, "BOT_USERNAME")

        database_url = (env.get("DATABASE_URL") or "sqlite+aiosqlite:///./photobot.db").strip()

        root_admin_ids = tuple(_parse_int_list(env.get("ROOT_ADMIN_IDS"), "ROOT_ADMIN_IDS"))
        cron_secret = (env.get("CRON_SECRET") or "").strip()

        group_id_raw = (env.get("GROUP_ID") or "").strip()
        group_id = _to_int(group_id_raw, "GROUP_ID") if group_id_raw else None

        api_port_raw = (env.get("API_PORT") or "").strip()
        hof_size_raw = (env.get("HALL_OF_FAME_SIZE") or "").strip()
        lb_size_raw = (env.get("LEADERBOARD_SIZE") or "").strip()

        timezone = (env.get("TIMEZONE") or "UTC").strip() or "UTC"
        environment = (env.get("ENVIRONMENT") or "production").strip() or "production"

        return cls(
            bot_token=bot_token,
            bot_username=bot_username,
            database_url=database_url,
            root_admin_ids=root_admin_ids,
            cron_secret=cron_secret,
            group_id=group_id,
            api_enabled=_to_bool(env.get("API_ENABLED"), True),
            api_host=(env.get("API_HOST") or "0.0.0.0").strip() or "0.0.0.0",
            api_port=_to_int(api_port_raw, "API_PORT") if api_port_raw else 8000,
            hall_of_fame_size=_to_int(hof_size_raw, "HALL_OF_FAME_SIZE") if hof_size_raw else 10,
            leaderboard_size=_to_int(lb_size_raw, "LEADERBOARD_SIZE") if lb_size_raw else 10,
            timezone=timezone,
            environment=environment,
        )
