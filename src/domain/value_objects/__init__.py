"""
Auth Domain Value Objects
"""

from .identifiers import CredentialId, SessionId, UserId
from .network import IpAddress, UserAgent
from .timestamps import CreatedAt, ExpiresAt, RevokedAt, UpdatedAt
from .token import JwtToken

__all__ = [
    # Identifiers
    "SessionId",
    "CredentialId",
    "UserId",
    # Client context
    "IpAddress",
    "UserAgent",
    # Time
    "CreatedAt",
    "UpdatedAt",
    "ExpiresAt",
    "RevokedAt",
    # Credentials
    "JwtToken",
]
