"""
AccessToken Entity

Short-lived bearer credential scoped to one session and its user.
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
    UserId,
)


class AccessToken(TimeBoundedCredential):
    """
    AccessToken entity - authorizes individual requests.

    Business Rules:
    - Expires 1 hour after creation (set by AccessTokenFactory)
    - Never persisted by the auth service
    """

    def __init__(
        self,
        id: CredentialId,
        session_id: SessionId,
        user_id: UserId,
        token: JwtToken,
        expires_at: ExpiresAt,
        created_at: Optional[CreatedAt] = None,
        revoked_at: Optional[RevokedAt] = None,
    ):
        super().__init__(
            id=id,
            session_id=session_id,
            token=token,
            expires_at=expires_at,
            created_at=created_at,
            revoked_at=revoked_at,
        )
        self._user_id = user_id

    @classmethod
    def create(
        cls,
        id: CredentialId,
        session_id: SessionId,
        user_id: UserId,
        token: JwtToken,
        expires_at: ExpiresAt,
        created_at: Optional[CreatedAt] = None,
        revoked_at: Optional[RevokedAt] = None,
    ) -> "AccessToken":
        return cls(
            id=id,
            session_id=session_id,
            user_id=user_id,
            token=token,
            expires_at=expires_at,
            created_at=created_at,
            revoked_at=revoked_at,
        )

    @property
    def user_id(self) -> UserId:
        return self._user_id
