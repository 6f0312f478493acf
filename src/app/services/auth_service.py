"""
Auth Service

Creates, rotates and revokes sessions. The only component that talks to
the auth repository.
"""

import logging
from typing import Awaitable, Callable, Optional, TypeVar

from src.app.repositories.auth_repository import IAuthRepository
from src.app.services.dtos import TokenPair
from src.domain.collections import SessionCollection
from src.domain.entities.session import Session
from src.domain.errors import CapacityExceeded, DomainError, DomainServiceError
from src.domain.factories import AccessTokenFactory, RefreshTokenFactory, SessionFactory
from src.domain.value_objects import (
    CredentialId,
    IpAddress,
    JwtToken,
    SessionId,
    UserAgent,
    UserId,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AuthService:
    """
    Session lifecycle orchestration.

    Business Rules:
    - Any repository failure surfaces as DomainServiceError with the
      original exception as its cause
    - Expected absence is reported with None/False, never raised
    - Session ids are generated here because the session and its first
      refresh token share them
    - A user holds at most SessionCollection.CAPACITY active sessions; a
      login past that is rejected, nothing is evicted
    - Nothing is retried; retry policy belongs to the caller
    """

    def __init__(self, auth_repo: IAuthRepository):
        self.auth_repo = auth_repo

    async def _repo(self, operation: str, call: Callable[[], Awaitable[T]]) -> T:
        try:
            return await call()
        except DomainServiceError:
            raise
        except Exception as e:
            logger.error(f"Repository failure during {operation}: {e!r}")
            raise DomainServiceError(
                f"Failed to {operation}: repository error", cause=e
            ) from e

    async def create_session(
        self,
        user_agent: UserAgent,
        ip_address: IpAddress,
        user_id: UserId,
        token: JwtToken,
    ) -> Session:
        """
        Create a new session with a fresh refresh token.

        Args:
            user_agent: Client User-Agent
            ip_address: Client IP address
            user_id: Owner of the session
            token: Signed refresh token value

        Returns:
            The persisted Session

        Raises:
            DomainServiceError: the session could not be built or saved, or
                the user already holds the maximum number of active sessions
        """
        active_count = await self._repo(
            "create session",
            lambda: self.auth_repo.count_active_sessions_for_user(user_id),
        )
        if active_count >= SessionCollection.CAPACITY:
            logger.warning(f"User {user_id} already has {active_count} active sessions")
            capacity_error = CapacityExceeded(
                f"User {user_id} already has {SessionCollection.CAPACITY} active sessions"
            )
            raise DomainServiceError(
                f"Failed to create session: {capacity_error.message}",
                cause=capacity_error,
            ) from capacity_error

        session_id = SessionId.create()
        try:
            refresh_token = RefreshTokenFactory.create_new(token, session_id)
            session = SessionFactory.create_new(
                session_id=session_id,
                user_id=user_id,
                user_agent=user_agent,
                ip_address=ip_address,
                refresh_token=refresh_token,
            )
        except DomainError as e:
            raise DomainServiceError(
                f"Failed to create session: {e.message}", cause=e
            ) from e

        await self._repo(
            "create session", lambda: self.auth_repo.save_session(session)
        )

        logger.info(f"Session {session.id} created for user {user_id}")
        return session

    async def revoke_session(self, session_id: SessionId) -> bool:
        """
        Revoke one session.

        Returns:
            False when the session does not exist or is already revoked,
            True when it was revoked by this call
        """
        session = await self._repo(
            "revoke session", lambda: self.auth_repo.find_session_by_id(session_id)
        )
        if session is None or session.revoked:
            return False

        session.revoke()
        await self._repo(
            "revoke session", lambda: self.auth_repo.save_session(session)
        )

        logger.info(f"Session {session_id} revoked")
        return True

    async def revoke_all_sessions_for_user(self, user_id: UserId) -> bool:
        """
        Revoke every active session of a user.

        The repository's revoked count is cross-checked against the active
        count read just before. This is not a transaction: a mismatch means
        another write interleaved, and is reported as False.
        """
        active_count = await self._repo(
            "revoke all sessions",
            lambda: self.auth_repo.count_active_sessions_for_user(user_id),
        )
        revoked_count = await self._repo(
            "revoke all sessions",
            lambda: self.auth_repo.revoke_all_sessions_for_user(user_id),
        )

        if revoked_count != active_count:
            logger.warning(
                f"Revoked {revoked_count} sessions for user {user_id} "
                f"but {active_count} were active"
            )
            return False

        logger.info(f"Revoked {revoked_count} sessions for user {user_id}")
        return True

    async def rotate_refresh_token(self, token: JwtToken, session_id: SessionId) -> Session:
        """
        Replace a session's refresh token with a freshly minted one.

        Raises:
            DomainServiceError: session not found, rotation rejected by the
                session, or repository failure
        """
        session = await self._repo(
            "rotate refresh token", lambda: self.auth_repo.find_session_by_id(session_id)
        )
        if session is None:
            raise DomainServiceError(f"Session {session_id} not found")

        return await self._rotate(session, token)

    async def _rotate(self, session: Session, token: JwtToken) -> Session:
        try:
            new_token = RefreshTokenFactory.create_new(token, session.id)
            session.rotate_refresh_token(new_token)
        except DomainError as e:
            raise DomainServiceError(
                f"Cannot rotate refresh token of session {session.id}: {e.message}",
                cause=e,
            ) from e

        await self._repo(
            "rotate refresh token", lambda: self.auth_repo.save_session(session)
        )

        logger.info(f"Refresh token rotated for session {session.id}")
        return session

    async def refresh_session(
        self,
        refresh_token_id: CredentialId,
        refresh_token: JwtToken,
        access_token: JwtToken,
    ) -> TokenPair:
        """
        Exchange a refresh token for a new access/refresh token pair.

        Args:
            refresh_token_id: Id of the refresh token presented by the client
            refresh_token: Signed value for the replacement refresh token
            access_token: Signed value for the new access token

        Returns:
            TokenPair with the new access token and the rotated refresh token

        Raises:
            DomainServiceError: no session for the token, session inactive,
                or repository failure
        """
        session = await self._repo(
            "refresh session", lambda: self.auth_repo.find_session_by_token(refresh_token_id)
        )
        if session is None:
            raise DomainServiceError("No session found for refresh token")
        if not session.active:
            raise DomainServiceError(f"Session {session.id} is not active")

        session = await self._rotate(session, refresh_token)

        try:
            new_access_token = AccessTokenFactory.create_new(
                access_token, session.id, session.user_id
            )
        except DomainError as e:
            raise DomainServiceError(
                f"Failed to issue access token: {e.message}", cause=e
            ) from e

        return TokenPair(
            access_token=new_access_token,
            refresh_token=session.refresh_token,
        )

    async def get_session_by_id(self, session_id: SessionId) -> Optional[Session]:
        return await self._repo(
            "get session", lambda: self.auth_repo.find_session_by_id(session_id)
        )

    async def get_all_sessions_for_user(self, user_id: UserId) -> Optional[SessionCollection]:
        """Sessions of a user, or None when there are none"""
        sessions = await self._repo(
            "get sessions", lambda: self.auth_repo.find_all_sessions_for_user(user_id)
        )
        if sessions.count() == 0:
            return None
        return sessions

    async def revoke_expired_sessions(self) -> int:
        """Fold expiry into revocation for one batch of expired sessions"""
        sessions = await self._repo(
            "revoke expired sessions", lambda: self.auth_repo.find_expired_sessions()
        )
        count = sessions.revoke_expired()
        if count:
            await self._repo(
                "revoke expired sessions", lambda: self.auth_repo.save_sessions(sessions)
            )

        logger.info(f"Revoked {count} expired sessions")
        return count

    async def revoke_inactive_sessions(self) -> int:
        """Revoke one batch of sessions whose refresh token is no longer active"""
        sessions = await self._repo(
            "revoke inactive sessions", lambda: self.auth_repo.find_inactive_sessions()
        )
        count = sessions.revoke_inactive()
        if count:
            await self._repo(
                "revoke inactive sessions", lambda: self.auth_repo.save_sessions(sessions)
            )

        logger.info(f"Revoked {count} inactive sessions")
        return count
