"""
RefreshToken Entity

Long-lived credential owned by exactly one Session.
"""

from typing import Optional

from src.domain.entities.credential import TimeBoundedCredential
from src.domain.value_objects import (
    CreatedAt,
    CredentialId,
    ExpiresAt,
    JwtToken,
    RevokedAt,
    SessionId,
)


class RefreshToken(TimeBoundedCredential):
    """
    RefreshToken entity - used to mint new access tokens.

    Business Rules:
    - Expires 7 days after creation (set by RefreshTokenFactory)
    - Rotated on every refresh; the previous token is revoked first
    """

    @classmethod
    def create(
        cls,
        id: CredentialId,
        session_id: SessionId,
        token: JwtToken,
        expires_at: ExpiresAt,
        created_at: Optional[CreatedAt] = None,
        revoked_at: Optional[RevokedAt] = None,
    ) -> "RefreshToken":
        return cls(
            id=id,
            session_id=session_id,
            token=token,
            expires_at=expires_at,
            created_at=created_at,
            revoked_at=revoked_at,
        )
