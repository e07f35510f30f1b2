"""Shared test fixtures.

src.main builds a module-level app at import time, so the required secrets
get harmless defaults here before anything imports it.
"""

import os
from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta

os.environ.setdefault("API_AUTH_TOKEN", "test-api-token")
os.environ.setdefault("ADMIN_PASSWORD", "test-admin-password")
os.environ.setdefault("ADMIN_SESSION_SECRET", "test-session-secret")
os.environ.setdefault("CAPTCHA_SECRET_KEY", "test-captcha-secret")
os.environ.setdefault("STORAGE_BACKEND", "memory")

import pytest
from httpx import ASGITransport, AsyncClient

from config.settings import Settings
from src.do_common.datetime_utils import iso_timestamp

API_TOKEN = "test-api-token"
ADMIN_PASSWORD = "test-admin-password"


class FakeCaptcha:
    """Accepts exactly the token "valid"; records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str | None]] = []

    async def verify(self, token: str, remote_ip: str | None = None) -> bool:
        self.calls.append((token, remote_ip))
        return token == "valid"


def make_settings(**overrides: object) -> Settings:
    values: dict[str, object] = dict(
        API_AUTH_TOKEN=API_TOKEN,
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        ADMIN_SESSION_SECRET="test-session-secret",
        CAPTCHA_SECRET_KEY="test-captcha-secret",
        STORAGE_BACKEND="memory",
        SECURE_COOKIES=False,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)  # type: ignore[arg-type]


def ticking_clock(start: datetime | None = None, step: timedelta = timedelta(seconds=1)) -> Callable[..., str]:
    """Stand-in for iso_timestamp(): each call is `step` later than the last."""
    current = [start or datetime(2025, 1, 1, tzinfo=UTC)]

    def _next(dt: datetime | None = None) -> str:
        value = iso_timestamp(current[0])
        current[0] += step
        return value

    return _next


@pytest.fixture
def settings_factory() -> Callable[..., Settings]:
    return make_settings


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def fake_captcha() -> FakeCaptcha:
    return FakeCaptcha()


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> Iterator[Callable[..., str]]:
    """Distinct, increasing offer timestamps for both ledger backings."""
    tick = ticking_clock()
    monkeypatch.setattr("src.do_ledger.infrastructure.kv_ledger.iso_timestamp", tick)
    monkeypatch.setattr("src.do_ledger.infrastructure.actor_ledger.iso_timestamp", tick)
    yield tick


@pytest.fixture
async def client(settings: Settings, fake_captcha: FakeCaptcha) -> AsyncClient:
    """Async HTTP client against an app with in-memory storage."""
    from src.main import create_app

    app = create_app(settings, captcha=fake_captcha)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
