"""
Auth Domain Errors

Every error raised by the auth domain carries a stable ``code`` so callers
can branch on it without matching on message text.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for all auth domain errors"""

    code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "cause": repr(self.cause) if self.cause is not None else None,
        }


class ValidationFailure(DomainError):
    """Malformed value-object input"""

    code = "VALIDATION_FAILURE"


class EntityCreationRejected(DomainError):
    """An aggregate could not be built because an invariant does not hold"""

    code = "ENTITY_CREATION_REJECTED"


class RotationRejected(DomainError):
    """Refresh token rotation is not allowed in the session's current state"""

    code = "ROTATION_REJECTED"


class CapacityExceeded(DomainError):
    """A bounded collection is already full"""

    code = "CAPACITY_EXCEEDED"


class ConcurrentModification(DomainError):
    """A write lost the race against another write to the same session"""

    code = "CONCURRENT_MODIFICATION"


class DomainServiceError(DomainError):
    """Uniform wrapper raised at the AuthService boundary"""

    code = "DOMAIN_SERVICE_ERROR"
