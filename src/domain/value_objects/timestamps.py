"""
Timestamp Value Objects

Expiry is always evaluated against ``date_time.utc_now()`` at read time.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from src.domain.errors import ValidationFailure
from src.domain.utils import date_time


def _require_datetime(value, field_name: str) -> datetime:
    if not isinstance(value, datetime):
        raise ValidationFailure(f"{field_name} must be a datetime")
    return date_time.as_utc(value)


@dataclass(frozen=True, order=True)
class CreatedAt:
    value: datetime

    @classmethod
    def now(cls) -> "CreatedAt":
        return cls(date_time.utc_now())

    @classmethod
    def from_datetime(cls, value: datetime) -> "CreatedAt":
        return cls(_require_datetime(value, "CreatedAt"))


@dataclass(frozen=True, order=True)
class UpdatedAt:
    value: datetime

    @classmethod
    def now(cls) -> "UpdatedAt":
        return cls(date_time.utc_now())

    @classmethod
    def from_datetime(cls, value: datetime) -> "UpdatedAt":
        return cls(_require_datetime(value, "UpdatedAt"))


@dataclass(frozen=True, order=True)
class ExpiresAt:
    value: datetime

    @classmethod
    def create(cls, value: datetime) -> "ExpiresAt":
        """New expiry; must lie in the future"""
        value = _require_datetime(value, "ExpiresAt")
        if value <= date_time.utc_now():
            raise ValidationFailure("ExpiresAt must be in the future")
        return cls(value)

    @classmethod
    def after(cls, ttl: timedelta) -> "ExpiresAt":
        return cls.create(date_time.utc_now() + ttl)

    @classmethod
    def restore(cls, value: datetime) -> "ExpiresAt":
        """Expiry read back from storage, possibly already in the past"""
        return cls(_require_datetime(value, "ExpiresAt"))

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = now if now is not None else date_time.utc_now()
        return self.value < now


@dataclass(frozen=True)
class RevokedAt:
    value: Optional[datetime] = None

    @classmethod
    def none(cls) -> "RevokedAt":
        return cls(None)

    @classmethod
    def now(cls) -> "RevokedAt":
        return cls(date_time.utc_now())

    @classmethod
    def at(cls, value: datetime) -> "RevokedAt":
        return cls(_require_datetime(value, "RevokedAt"))

    def is_revoked(self) -> bool:
        return self.value is not None
