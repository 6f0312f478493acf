import copy
from typing import Callable, Dict, List, Optional

from src.app.repositories.auth_repository import IAuthRepository
from src.domain.collections import SessionCollection
from src.domain.entities.session import Session
from src.domain.errors import ConcurrentModification
from src.domain.value_objects import CredentialId, SessionId, UserId


class InMemoryAuthRepository(IAuthRepository):
    """
    Auth repository kept in process memory.

    Stores deep copies so callers only change stored state through
    save_session/save_sessions, and applies the same version check as the
    SQL implementation.
    """

    def __init__(self):
        self._sessions: Dict[SessionId, Session] = {}

    def _select(
        self, predicate: Callable[[Session], bool], newest_first: bool = False
    ) -> SessionCollection:
        matches: List[Session] = [s for s in self._sessions.values() if predicate(s)]
        if newest_first:
            # unrevoked sessions rank ahead of tombstones
            matches.sort(key=lambda s: (not s.revoked, s.created_at.value), reverse=True)
        return SessionCollection.create(
            copy.deepcopy(s) for s in matches[: SessionCollection.CAPACITY]
        )

    def _store(self, session: Session) -> None:
        stored = self._sessions.get(session.id)
        stored_version = stored.version if stored is not None else 0
        if stored_version != session.version:
            raise ConcurrentModification(f"Session {session.id} was modified concurrently")
        snapshot = copy.deepcopy(session)
        snapshot.mark_saved()
        self._sessions[session.id] = snapshot

    async def save_session(self, session: Session) -> None:
        self._store(session)
        session.mark_saved()

    async def save_sessions(self, sessions: SessionCollection) -> None:
        for session in sessions:
            stored = self._sessions.get(session.id)
            if (stored.version if stored is not None else 0) != session.version:
                raise ConcurrentModification(
                    f"Session {session.id} was modified concurrently"
                )
        for session in sessions:
            self._store(session)
            session.mark_saved()

    async def revoke_session(self, session_id: SessionId) -> None:
        stored = self._sessions.get(session_id)
        if stored is not None and not stored.revoked:
            stored.revoke()
            stored.mark_saved()

    async def revoke_all_sessions_for_user(self, user_id: UserId) -> int:
        revoked = 0
        for stored in self._sessions.values():
            if stored.user_id == user_id and not stored.revoked:
                stored.revoke()
                stored.mark_saved()
                revoked += 1
        return revoked

    async def count_active_sessions_for_user(self, user_id: UserId) -> int:
        return sum(
            1
            for s in self._sessions.values()
            if s.user_id == user_id and not s.revoked
        )

    async def find_session_by_token(self, credential_id: CredentialId) -> Optional[Session]:
        for stored in self._sessions.values():
            if stored.refresh_token.id == credential_id:
                return copy.deepcopy(stored)
        return None

    async def find_session_by_id(self, session_id: SessionId) -> Optional[Session]:
        stored = self._sessions.get(session_id)
        return copy.deepcopy(stored) if stored is not None else None

    async def find_all_sessions_for_user(self, user_id: UserId) -> SessionCollection:
        return self._select(lambda s: s.user_id == user_id, newest_first=True)

    async def find_expired_sessions(self) -> SessionCollection:
        return self._select(lambda s: not s.revoked and s.expired)

    async def find_inactive_sessions(self) -> SessionCollection:
        return self._select(lambda s: not s.revoked and not s.active)
