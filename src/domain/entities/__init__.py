"""
Auth Domain Entities

Session aggregate and the time-bounded credentials it works with.
"""

from .access_token import AccessToken
from .credential import TimeBoundedCredential
from .refresh_token import RefreshToken
from .session import Session

__all__ = [
    "TimeBoundedCredential",
    "RefreshToken",
    "AccessToken",
    "Session",
]
