"""
SessionCollection

Bounded in-memory set of sessions for one user scope.
"""

from typing import Dict, Iterable, Iterator, List, Optional

from src.domain.constants import MAX_SESSIONS_PER_USER
from src.domain.entities.session import Session
from src.domain.errors import CapacityExceeded, ValidationFailure
from src.domain.value_objects import IpAddress, SessionId, UserAgent


class SessionCollection:
    """
    Sessions keyed by SessionId, at most CAPACITY of them.

    Lookups are linear scans over at most CAPACITY sessions; no secondary
    indexes.

    Business Rules:
    - Adding past CAPACITY raises CapacityExceeded; nothing is evicted
    - Members keep insertion order (the order the repository returned them)
    - `active` only looks at the revoked flag, not at expiry; use
      Session.active when the refresh token's state matters
    """

    CAPACITY = MAX_SESSIONS_PER_USER

    def __init__(self, sessions: Optional[Iterable[Session]] = None):
        self._items: Dict[SessionId, Session] = {}
        for session in sessions or []:
            self.add(session)

    @classmethod
    def create(cls, sessions: Iterable[Session]) -> "SessionCollection":
        return cls(sessions)

    @classmethod
    def empty(cls) -> "SessionCollection":
        return cls()

    def add(self, session: Session) -> None:
        if session.id in self._items:
            raise ValidationFailure(f"Session with id {session.id} already exists")
        if len(self._items) >= self.CAPACITY:
            raise CapacityExceeded(
                f"Session collection already holds {self.CAPACITY} sessions"
            )
        self._items[session.id] = session

    def get_by_id(self, session_id: SessionId) -> Optional[Session]:
        return self._items.get(session_id)

    def has(self, session_id: SessionId) -> bool:
        return session_id in self._items

    def get_all(self) -> List[Session]:
        return list(self._items.values())

    def count(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Session]:
        return iter(list(self._items.values()))

    def revoke_expired(self) -> int:
        """Revoke every expired, not yet revoked session. Returns how many changed."""
        revoked = 0
        for session in self._items.values():
            if not session.revoked and session.expired:
                session.revoke()
                revoked += 1
        return revoked

    def revoke_inactive(self) -> int:
        """Revoke every inactive, not yet revoked session. Returns how many changed."""
        revoked = 0
        for session in self._items.values():
            if not session.revoked and not session.active:
                session.revoke()
                revoked += 1
        return revoked

    def sort_by_recent(self) -> List[Session]:
        # sorted() is stable, so equal timestamps keep insertion order
        return sorted(
            self._items.values(), key=lambda s: s.created_at.value, reverse=True
        )

    @property
    def most_recent(self) -> Optional[Session]:
        """Most recently created session; first encountered wins on equal timestamps"""
        latest = None
        for session in self._items.values():
            if latest is None or session.created_at.value > latest.created_at.value:
                latest = session
        return latest

    @property
    def active(self) -> List[Session]:
        return [s for s in self._items.values() if s.revoked is False]

    @property
    def active_count(self) -> int:
        return len(self.active)

    def get_by_ip(self, ip: IpAddress) -> List[Session]:
        return [s for s in self._items.values() if s.ip_address == ip]

    def get_by_user_agent(self, user_agent: UserAgent) -> List[Session]:
        return [s for s in self._items.values() if s.user_agent == user_agent]
