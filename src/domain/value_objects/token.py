"""
JwtToken Value Object

Opaque signed credential string. Only the three-segment shape is checked
here; signature verification belongs to the caller.
"""

import re
from dataclasses import dataclass

from src.domain.errors import ValidationFailure

JWT_TOKEN_REGEX = re.compile(r"^[A-Za-z0-9\-_]+\.[A-Za-z0-9\-_]+\.[A-Za-z0-9\-_]+$")


@dataclass(frozen=True)
class JwtToken:
    value: str

    @classmethod
    def create(cls, raw: str) -> "JwtToken":
        if not isinstance(raw, str):
            raise ValidationFailure("Invalid jwt-token format")
        normalized = raw.strip()
        if not JWT_TOKEN_REGEX.match(normalized):
            raise ValidationFailure("Invalid jwt-token format")
        return cls(normalized)

    def __repr__(self) -> str:
        # keep secrets out of logs and tracebacks
        return "JwtToken(value='***')"
