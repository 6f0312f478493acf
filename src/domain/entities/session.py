"""
Session Entity

Aggregate root of the auth domain. Owns exactly one current refresh token.
"""

from typing import Optional

from src.domain.entities.refresh_token import RefreshToken
from src.domain.errors import EntityCreationRejected, RotationRejected
from src.domain.value_objects import (
    CreatedAt,
    ExpiresAt,
    IpAddress,
    RevokedAt,
    SessionId,
    UpdatedAt,
    UserAgent,
    UserId,
)


class Session:
    """
    Session entity - authenticated client/device context bound to one user.

    Business Rules:
    - Created only with an active refresh token belonging to this session
    - expires_at is always the current refresh token's expires_at
    - Revocation is one-way and cascades to the refresh token
    - Rotation is rejected once the session is revoked
    - version is the persisted revision this instance was loaded at;
      repositories only write when the stored revision still matches

    Expiry is observed, never stored: only an explicit revoke() turns an
    expired session into a revoked one.
    """

    def __init__(
        self,
        id: SessionId,
        user_id: UserId,
        refresh_token: RefreshToken,
        ip_address: IpAddress,
        user_agent: UserAgent,
        created_at: Optional[CreatedAt] = None,
        updated_at: Optional[UpdatedAt] = None,
        revoked_at: Optional[RevokedAt] = None,
        version: int = 0,
    ):
        self._id = id
        self._user_id = user_id
        self._refresh_token = refresh_token
        self._ip_address = ip_address
        self._user_agent = user_agent
        self._created_at = created_at or CreatedAt.now()
        self._updated_at = updated_at or UpdatedAt(self._created_at.value)
        self._revoked_at = revoked_at or RevokedAt.none()
        self._version = version

    @classmethod
    def create(
        cls,
        id: SessionId,
        user_id: UserId,
        refresh_token: RefreshToken,
        ip_address: IpAddress,
        user_agent: UserAgent,
        created_at: Optional[CreatedAt] = None,
    ) -> "Session":
        """
        Build a new session.

        Raises:
            EntityCreationRejected: refresh token is inactive or belongs to
                another session
        """
        if not refresh_token.active:
            raise EntityCreationRejected(
                "Session cannot be created with an inactive refresh token"
            )
        if refresh_token.session_id != id:
            raise EntityCreationRejected(
                "Refresh token does not belong to this session"
            )
        return cls(
            id=id,
            user_id=user_id,
            refresh_token=refresh_token,
            ip_address=ip_address,
            user_agent=user_agent,
            created_at=created_at,
        )

    @classmethod
    def restore(
        cls,
        id: SessionId,
        user_id: UserId,
        refresh_token: RefreshToken,
        ip_address: IpAddress,
        user_agent: UserAgent,
        created_at: CreatedAt,
        updated_at: UpdatedAt,
        revoked_at: RevokedAt,
        version: int,
    ) -> "Session":
        """Rebuild a persisted session; tombstones are allowed"""
        return cls(
            id=id,
            user_id=user_id,
            refresh_token=refresh_token,
            ip_address=ip_address,
            user_agent=user_agent,
            created_at=created_at,
            updated_at=updated_at,
            revoked_at=revoked_at,
            version=version,
        )

    @property
    def id(self) -> SessionId:
        return self._id

    @property
    def user_id(self) -> UserId:
        return self._user_id

    @property
    def refresh_token(self) -> RefreshToken:
        return self._refresh_token

    @property
    def ip_address(self) -> IpAddress:
        return self._ip_address

    @property
    def user_agent(self) -> UserAgent:
        return self._user_agent

    @property
    def created_at(self) -> CreatedAt:
        return self._created_at

    @property
    def updated_at(self) -> UpdatedAt:
        return self._updated_at

    @property
    def revoked_at(self) -> RevokedAt:
        return self._revoked_at

    @property
    def version(self) -> int:
        return self._version

    @property
    def expires_at(self) -> ExpiresAt:
        return self._refresh_token.expires_at

    @property
    def revoked(self) -> bool:
        return self._revoked_at.is_revoked()

    @property
    def expired(self) -> bool:
        return self.expires_at.is_expired()

    @property
    def active(self) -> bool:
        return not self.revoked and self._refresh_token.active

    def revoke(self) -> None:
        if self.revoked:
            return
        self._refresh_token.revoke()
        self._revoked_at = RevokedAt.now()
        self._touch()

    def rotate_refresh_token(self, new_token: RefreshToken) -> None:
        """
        Replace the current refresh token, revoking the previous one.

        Raises:
            RotationRejected: session is revoked, or new_token is inactive or
                belongs to another session. No state changes in that case.
        """
        if self.revoked:
            raise RotationRejected("Cannot rotate refresh token of a revoked session")
        if new_token.session_id != self._id:
            raise RotationRejected("Refresh token does not belong to this session")
        if not new_token.active:
            raise RotationRejected("Cannot rotate to an inactive refresh token")

        self._refresh_token.revoke()
        self._refresh_token = new_token
        self._touch()

    def mark_saved(self) -> None:
        """Called by repositories after a successful conditional write"""
        self._version += 1

    def _touch(self) -> None:
        self._updated_at = UpdatedAt.now()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Session):
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return (
            f"Session(id={self._id}, user_id={self._user_id}, "
            f"revoked={self.revoked}, version={self._version})"
        )
