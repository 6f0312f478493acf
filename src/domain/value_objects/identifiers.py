"""
Identifier Value Objects

Opaque random 128-bit identifiers with value equality. Each subclass is its
own type, so a SessionId never compares equal to a CredentialId even when
they wrap the same UUID.
"""

from dataclasses import dataclass
from typing import Type, TypeVar
from uuid import UUID, uuid4

from src.domain.errors import ValidationFailure

T = TypeVar("T", bound="UUIDValue")


@dataclass(frozen=True)
class UUIDValue:
    value: UUID

    @classmethod
    def create(cls: Type[T]) -> T:
        return cls(uuid4())

    @classmethod
    def from_string(cls: Type[T], raw: str) -> T:
        """Rebuild an identifier from its canonical string form"""
        try:
            return cls(UUID(str(raw)))
        except (ValueError, AttributeError, TypeError) as e:
            raise ValidationFailure(f"Invalid {cls.__name__} format", cause=e)

    def __str__(self) -> str:
        return str(self.value)


class SessionId(UUIDValue):
    pass


class CredentialId(UUIDValue):
    """Identity of a refresh or access credential"""


class UserId(UUIDValue):
    pass
