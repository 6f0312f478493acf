import logging
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.orm import sessionmaker
from sqlmodel import col, func, or_, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.models import RefreshTokenRecord, SessionRecord
from src.app.repositories.auth_repository import IAuthRepository
from src.domain.collections import SessionCollection
from src.domain.entities.refresh_token import RefreshToken
from src.domain.entities.session import Session
from src.domain.errors import ConcurrentModification
from src.domain.utils import date_time
from src.domain.value_objects import (
    CreatedAt,
    CredentialId,
    ExpiresAt,
    IpAddress,
    JwtToken,
    RevokedAt,
    SessionId,
    UpdatedAt,
    UserAgent,
    UserId,
)

logger = logging.getLogger(__name__)


def _revoked_at(value) -> RevokedAt:
    return RevokedAt.at(value) if value is not None else RevokedAt.none()


def _to_domain(record: SessionRecord, token_record: RefreshTokenRecord) -> Session:
    session_id = SessionId(record.id)
    refresh_token = RefreshToken.create(
        id=CredentialId(token_record.id),
        session_id=session_id,
        token=JwtToken(token_record.token),
        expires_at=ExpiresAt.restore(token_record.expires_at),
        created_at=CreatedAt.from_datetime(token_record.created_at),
        revoked_at=_revoked_at(token_record.revoked_at),
    )
    return Session.restore(
        id=session_id,
        user_id=UserId(record.user_id),
        refresh_token=refresh_token,
        ip_address=IpAddress(record.ip_address),
        user_agent=UserAgent(record.user_agent),
        created_at=CreatedAt.from_datetime(record.created_at),
        updated_at=UpdatedAt.from_datetime(record.updated_at),
        revoked_at=_revoked_at(record.revoked_at),
        version=record.version,
    )


def _to_token_record(token: RefreshToken) -> RefreshTokenRecord:
    return RefreshTokenRecord(
        id=token.id.value,
        session_id=token.session_id.value,
        token=token.token.value,
        created_at=token.created_at.value,
        expires_at=token.expires_at.value,
        revoked_at=token.revoked_at.value,
    )


class SqlAuthRepository(IAuthRepository):
    """
    Auth repository implementation using SQLModel.

    Each call runs in its own database session and commits before returning.
    Sessions are written with a conditional update on (id, version); a write
    against a stale version raises ConcurrentModification.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _joined(self):
        return select(SessionRecord, RefreshTokenRecord).join(
            RefreshTokenRecord,
            RefreshTokenRecord.id == SessionRecord.current_refresh_token_id,
        )

    async def _fetch_one(self, stmt) -> Optional[Session]:
        async with self.session_factory() as db:
            result = await db.execute(stmt)
            row = result.first()
        if row is None:
            return None
        return _to_domain(row[0], row[1])

    async def _fetch_collection(self, stmt) -> SessionCollection:
        async with self.session_factory() as db:
            result = await db.execute(stmt.limit(SessionCollection.CAPACITY))
            rows: List[Tuple[SessionRecord, RefreshTokenRecord]] = list(result.all())
        return SessionCollection.create(_to_domain(s, t) for s, t in rows)

    async def _write(self, db: AsyncSession, session: Session) -> None:
        if session.version == 0:
            db.add(
                SessionRecord(
                    id=session.id.value,
                    user_id=session.user_id.value,
                    current_refresh_token_id=session.refresh_token.id.value,
                    ip_address=session.ip_address.value,
                    user_agent=session.user_agent.value,
                    version=1,
                    created_at=session.created_at.value,
                    updated_at=session.updated_at.value,
                    revoked_at=session.revoked_at.value,
                )
            )
            await db.flush()
        else:
            stmt = (
                update(SessionRecord)
                .where(
                    SessionRecord.id == session.id.value,
                    SessionRecord.version == session.version,
                )
                .values(
                    current_refresh_token_id=session.refresh_token.id.value,
                    updated_at=session.updated_at.value,
                    revoked_at=session.revoked_at.value,
                    version=session.version + 1,
                )
                .execution_options(synchronize_session=False)
            )
            result = await db.execute(stmt)
            if result.rowcount == 0:
                logger.warning(
                    f"Stale write rejected for session {session.id} at version {session.version}"
                )
                raise ConcurrentModification(
                    f"Session {session.id} was modified concurrently"
                )

        token = session.refresh_token
        token_record = await db.get(RefreshTokenRecord, token.id.value)
        if token_record is None:
            db.add(_to_token_record(token))
        else:
            token_record.revoked_at = token.revoked_at.value
            db.add(token_record)
        await db.flush()

        # Tokens rotated out of the session are kept, revoked
        await db.execute(
            update(RefreshTokenRecord)
            .where(
                RefreshTokenRecord.session_id == session.id.value,
                RefreshTokenRecord.id != token.id.value,
                col(RefreshTokenRecord.revoked_at).is_(None),
            )
            .values(revoked_at=session.updated_at.value)
            .execution_options(synchronize_session=False)
        )

    async def _write_all(self, sessions: Iterable[Session]) -> None:
        sessions = list(sessions)
        async with self.session_factory() as db:
            for session in sessions:
                await self._write(db, session)
            await db.commit()
        for session in sessions:
            session.mark_saved()

    async def save_session(self, session: Session) -> None:
        await self._write_all([session])

    async def save_sessions(self, sessions: SessionCollection) -> None:
        await self._write_all(sessions)

    async def revoke_session(self, session_id: SessionId) -> None:
        now = date_time.utc_now()
        async with self.session_factory() as db:
            await db.execute(
                update(RefreshTokenRecord)
                .where(
                    RefreshTokenRecord.session_id == session_id.value,
                    col(RefreshTokenRecord.revoked_at).is_(None),
                )
                .values(revoked_at=now)
                .execution_options(synchronize_session=False)
            )
            await db.execute(
                update(SessionRecord)
                .where(
                    SessionRecord.id == session_id.value,
                    col(SessionRecord.revoked_at).is_(None),
                )
                .values(revoked_at=now, updated_at=now, version=SessionRecord.version + 1)
                .execution_options(synchronize_session=False)
            )
            await db.commit()

    async def revoke_all_sessions_for_user(self, user_id: UserId) -> int:
        """Revoke all active sessions for a user"""
        now = date_time.utc_now()
        active_ids = select(SessionRecord.id).where(
            SessionRecord.user_id == user_id.value,
            col(SessionRecord.revoked_at).is_(None),
        )
        async with self.session_factory() as db:
            await db.execute(
                update(RefreshTokenRecord)
                .where(
                    col(RefreshTokenRecord.session_id).in_(active_ids),
                    col(RefreshTokenRecord.revoked_at).is_(None),
                )
                .values(revoked_at=now)
                .execution_options(synchronize_session=False)
            )
            result = await db.execute(
                update(SessionRecord)
                .where(
                    SessionRecord.user_id == user_id.value,
                    col(SessionRecord.revoked_at).is_(None),
                )
                .values(revoked_at=now, updated_at=now, version=SessionRecord.version + 1)
                .execution_options(synchronize_session=False)
            )
            await db.commit()
        return result.rowcount

    async def count_active_sessions_for_user(self, user_id: UserId) -> int:
        stmt = select(func.count()).select_from(SessionRecord).where(
            SessionRecord.user_id == user_id.value,
            col(SessionRecord.revoked_at).is_(None),
        )
        async with self.session_factory() as db:
            result = await db.execute(stmt)
            return result.scalar_one()

    async def find_session_by_token(self, credential_id: CredentialId) -> Optional[Session]:
        """Only the current refresh token of a session matches; rotated-out ids do not"""
        return await self._fetch_one(
            self._joined().where(SessionRecord.current_refresh_token_id == credential_id.value)
        )

    async def find_session_by_id(self, session_id: SessionId) -> Optional[Session]:
        return await self._fetch_one(
            self._joined().where(SessionRecord.id == session_id.value)
        )

    async def find_all_sessions_for_user(self, user_id: UserId) -> SessionCollection:
        return await self._fetch_collection(
            self._joined()
            .where(SessionRecord.user_id == user_id.value)
            .order_by(
                col(SessionRecord.revoked_at).is_(None).desc(),
                col(SessionRecord.created_at).desc(),
            )
        )

    async def find_expired_sessions(self) -> SessionCollection:
        now = date_time.utc_now()
        return await self._fetch_collection(
            self._joined()
            .where(
                col(SessionRecord.revoked_at).is_(None),
                col(RefreshTokenRecord.expires_at) < now,
            )
            .order_by(col(RefreshTokenRecord.expires_at))
        )

    async def find_inactive_sessions(self) -> SessionCollection:
        now = date_time.utc_now()
        return await self._fetch_collection(
            self._joined()
            .where(
                col(SessionRecord.revoked_at).is_(None),
                or_(
                    col(RefreshTokenRecord.expires_at) < now,
                    col(RefreshTokenRecord.revoked_at).is_not(None),
                ),
            )
            .order_by(col(SessionRecord.updated_at))
        )
