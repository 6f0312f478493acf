"""
Auth Domain Factories

The only places that decide credential lifetimes.
"""

from .access_token_factory import AccessTokenFactory
from .refresh_token_factory import RefreshTokenFactory
from .session_factory import SessionFactory

__all__ = [
    "AccessTokenFactory",
    "RefreshTokenFactory",
    "SessionFactory",
]
