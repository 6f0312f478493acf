from datetime import UTC, datetime, timedelta

import pytest

from src.domain.factories import RefreshTokenFactory, SessionFactory
from src.domain.utils import date_time
from src.domain.value_objects import (
    IpAddress,
    JwtToken,
    SessionId,
    UserAgent,
    UserId,
)


class FrozenClock:
    """Wall clock that only moves when told to"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock(monkeypatch):
    frozen = FrozenClock(datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC))
    monkeypatch.setattr(date_time, "utc_now", frozen)
    return frozen


@pytest.fixture
def jwt():
    """Build distinct, well-formed token values"""
    counter = {"n": 0}

    def _make() -> JwtToken:
        counter["n"] += 1
        return JwtToken.create(f"header.payload{counter['n']}.signature")

    return _make


@pytest.fixture
def make_session(jwt):
    def _make(
        user_id: UserId = None,
        ip: str = "10.0.0.1",
        user_agent: str = "Mozilla/5.0",
    ):
        session_id = SessionId.create()
        return SessionFactory.create_new(
            session_id=session_id,
            user_id=user_id or UserId.create(),
            user_agent=UserAgent.create(user_agent),
            ip_address=IpAddress.create(ip),
            refresh_token=RefreshTokenFactory.create_new(jwt(), session_id),
        )

    return _make
