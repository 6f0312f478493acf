from abc import ABC, abstractmethod
from typing import Optional

from src.domain.collections import SessionCollection
from src.domain.entities.session import Session
from src.domain.value_objects import CredentialId, SessionId, UserId


class IAuthRepository(ABC):
    """Auth repository interface - application layer"""

    @abstractmethod
    async def save_session(self, session: Session) -> None:
        """Insert or update a session together with its current refresh token"""
        pass

    @abstractmethod
    async def save_sessions(self, sessions: SessionCollection) -> None:
        """Persist every session of a collection"""
        pass

    @abstractmethod
    async def revoke_session(self, session_id: SessionId) -> None:
        """Mark a session and its refresh token revoked"""
        pass

    @abstractmethod
    async def revoke_all_sessions_for_user(self, user_id: UserId) -> int:
        """Revoke all active sessions for a user. Returns count of revoked sessions."""
        pass

    @abstractmethod
    async def count_active_sessions_for_user(self, user_id: UserId) -> int:
        """Count non-revoked sessions for a user"""
        pass

    @abstractmethod
    async def find_session_by_token(self, credential_id: CredentialId) -> Optional[Session]:
        """Find the session whose current refresh token has this id"""
        pass

    @abstractmethod
    async def find_session_by_id(self, session_id: SessionId) -> Optional[Session]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def find_all_sessions_for_user(self, user_id: UserId) -> SessionCollection:
        """
        Sessions of a user, at most SessionCollection.CAPACITY: unrevoked
        sessions first, then revoked ones, each newest first
        """
        pass

    @abstractmethod
    async def find_expired_sessions(self) -> SessionCollection:
        """Expired sessions that are not revoked yet, at most SessionCollection.CAPACITY"""
        pass

    @abstractmethod
    async def find_inactive_sessions(self) -> SessionCollection:
        """Inactive sessions that are not revoked yet, at most SessionCollection.CAPACITY"""
        pass
