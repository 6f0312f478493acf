"""
Persistence Models

SQLModel tables backing the auth repository. Domain entities never inherit
from these; SqlAuthRepository maps between the two.
"""

from .records import RefreshTokenRecord, SessionRecord

__all__ = [
    "SessionRecord",
    "RefreshTokenRecord",
]
