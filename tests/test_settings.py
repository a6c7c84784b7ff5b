import pytest

from photobot.config.settings import Settings

ENV_KEYS = [
    "BOT_TOKEN",
    "BOT_USERNAME",
    "DATABASE_URL",
    "ROOT_ADMIN_IDS",
    "CRON_SECRET",
    "GROUP_ID",
    "API_ENABLED",
    "API_HOST",
    "API_PORT",
    "HALL_OF_FAME_SIZE",
    "LEADERBOARD_SIZE",
    "TIMEZONE",
    "ENVIRONMENT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr("photobot.config.settings.load_dotenv", lambda *a, **kw: False)
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults(monkeypatch):
    monkeypatch.setenv("BOT_TOKEN", "123:abc")
    monkeypatch.setenv("BOT_USERNAME", "photobot")

    s = Settings.load()

    assert s.database_url == "sqlite+aiosqlite:///./photobot.db"
    assert s.cron_secret == ""
    assert s.root_admin_ids == ()
    assert s.group_id is None
    assert s.api_enabled is True
    assert s.api_port == 8000
    assert s.hall_of_fame_size == 10
    assert s.timezone == "UTC"
    assert s.is_dev is False


def test_parsing(monkeypatch):
    monkeypatch.setenv("BOT_TOKEN", "123:abc")
    monkeypatch.setenv("BOT_USERNAME", "photobot")
    monkeypatch.setenv("ROOT_ADMIN_IDS", "[111, 222 333]")
    monkeypatch.setenv("GROUP_ID", "-100123")
    monkeypatch.setenv("API_ENABLED", "no")
    monkeypatch.setenv("API_PORT", "9000")
    monkeypatch.setenv("HALL_OF_FAME_SIZE", "5")
    monkeypatch.setenv("CRON_SECRET", " s3cret ")
    monkeypatch.setenv("TIMEZONE", "Europe/Berlin")
    monkeypatch.setenv("ENVIRONMENT", "development")

    s = Settings.load()

    assert s.root_admin_ids == (111, 222, 333)
    assert s.group_id == -100123
    assert s.api_enabled is False
    assert s.api_port == 9000
    assert s.hall_of_fame_size == 5
    assert s.cron_secret == "s3cret"
    assert s.timezone == "Europe/Berlin"
    assert s.is_dev is True


def test_missing_required(monkeypatch):
    monkeypatch.setenv("BOT_USERNAME", "photobot")
    with pytest.raises(RuntimeError, match="BOT_TOKEN"):
        Settings.load()


def test_invalid_integer(monkeypatch):
    monkeypatch.setenv("BOT_TOKEN", "123:abc")
    monkeypatch.setenv("BOT_USERNAME", "photobot")
    monkeypatch.setenv("API_PORT", "eighty")
    with pytest.raises(RuntimeError, match="API_PORT"):
        Settings.load()
