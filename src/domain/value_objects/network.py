"""
Client Context Value Objects

IP address and User-Agent recorded on every session.
"""

import ipaddress
from dataclasses import dataclass

from src.domain.constants import USER_AGENT_MAX_LENGTH
from src.domain.errors import ValidationFailure


@dataclass(frozen=True)
class IpAddress:
    value: str

    @classmethod
    def create(cls, raw: str) -> "IpAddress":
        try:
            parsed = ipaddress.ip_address(str(raw).strip())
        except ValueError as e:
            raise ValidationFailure("Invalid IP address", cause=e)
        return cls(str(parsed))

    def is_ipv4(self) -> bool:
        return ipaddress.ip_address(self.value).version == 4

    def is_ipv6(self) -> bool:
        return ipaddress.ip_address(self.value).version == 6

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class UserAgent:
    value: str

    @classmethod
    def create(cls, raw: str) -> "UserAgent":
        if not isinstance(raw, str) or not raw or len(raw) > USER_AGENT_MAX_LENGTH:
            raise ValidationFailure("Invalid UserAgent format")
        return cls(raw)

    def __str__(self) -> str:
        return self.value
