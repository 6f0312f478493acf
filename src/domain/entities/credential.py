"""
Time-bounded Credential

Shared behaviour of refresh and access credentials: immutable identity,
a one-way revocation flag and an expiry observed against the wall clock.
"""

from typing import Optional

from src.domain.value_objects import (
    CreatedAt,
    CredentialId,
    ExpiresAt,
    JwtToken,
    RevokedAt,
    SessionId,
)


class TimeBoundedCredential:
    """
    Business Rules:
    - Expiry offset is fixed by the factory that mints the credential
    - Revocation happens at most once; repeat calls are no-ops
    - expired/active are recomputed on every read, never cached
    """

    def __init__(
        self,
        id: CredentialId,
        session_id: SessionId,
        token: JwtToken,
        expires_at: ExpiresAt,
        created_at: Optional[CreatedAt] = None,
        revoked_at: Optional[RevokedAt] = None,
    ):
        self._id = id
        self._session_id = session_id
        self._token = token
        self._expires_at = expires_at
        self._created_at = created_at or CreatedAt.now()
        self._revoked_at = revoked_at or RevokedAt.none()

    @property
    def id(self) -> CredentialId:
        return self._id

    @property
    def session_id(self) -> SessionId:
        return self._session_id

    @property
    def token(self) -> JwtToken:
        return self._token

    @property
    def expires_at(self) -> ExpiresAt:
        return self._expires_at

    @property
    def created_at(self) -> CreatedAt:
        return self._created_at

    @property
    def revoked_at(self) -> RevokedAt:
        return self._revoked_at

    @property
    def revoked(self) -> bool:
        return self._revoked_at.is_revoked()

    @property
    def expired(self) -> bool:
        return self._expires_at.is_expired()

    @property
    def active(self) -> bool:
        return not self.revoked and not self.expired

    def revoke(self) -> None:
        if not self._revoked_at.is_revoked():
            self._revoked_at = RevokedAt.now()

    def __eq__(self, other: object) -> bool:
        """Entity equality based on identity (id), not value."""
        if not isinstance(other, self.__class__):
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(id={self._id}, session_id={self._session_id}, "
            f"revoked={self.revoked})"
        )
