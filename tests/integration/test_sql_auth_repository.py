"""
Integration tests for SqlAuthRepository against SQLite
"""

import pytest
from sqlmodel import select

from src.adapter.models import RefreshTokenRecord
from src.app.services.auth_service import AuthService
from src.domain.errors import CapacityExceeded, ConcurrentModification, DomainServiceError
from src.domain.value_objects import CredentialId, IpAddress, SessionId, UserAgent, UserId


async def _login(service, jwt, user_id, ip="10.0.0.1"):
    return await service.create_session(
        UserAgent.create("Mozilla/5.0"), IpAddress.create(ip), user_id, jwt()
    )


@pytest.mark.asyncio
async def test_save_and_load_session(clock, jwt, sql_repo):
    service = AuthService(sql_repo)
    user_id = UserId.create()
    session = await _login(service, jwt, user_id)

    loaded = await sql_repo.find_session_by_id(session.id)

    assert loaded == session
    assert loaded.user_id == user_id
    assert loaded.version == 1
    assert session.version == 1
    assert loaded.ip_address == IpAddress.create("10.0.0.1")
    assert loaded.refresh_token.id == session.refresh_token.id
    assert loaded.refresh_token.token == session.refresh_token.token
    assert loaded.expires_at == session.expires_at
    assert loaded.created_at == session.created_at
    assert loaded.active is True


@pytest.mark.asyncio
async def test_find_missing_session(sql_repo):
    assert await sql_repo.find_session_by_id(SessionId.create()) is None
    assert await sql_repo.find_session_by_token(CredentialId.create()) is None


@pytest.mark.asyncio
async def test_refresh_rotates_and_keeps_token_history(clock, jwt, sql_repo, session_factory):
    service = AuthService(sql_repo)
    session = await _login(service, jwt, UserId.create())
    first_token_id = session.refresh_token.id
    clock.advance(minutes=5)

    pair = await service.refresh_session(first_token_id, jwt(), jwt())

    loaded = await sql_repo.find_session_by_token(pair.refresh_token.id)
    assert loaded.id == session.id
    assert loaded.version == 2
    assert loaded.updated_at.value == clock.now
    assert await sql_repo.find_session_by_token(first_token_id) is None

    async with session_factory() as db:
        result = await db.execute(
            select(RefreshTokenRecord).where(RefreshTokenRecord.session_id == session.id.value)
        )
        records = {r.id: r for r in result.scalars().all()}
    assert len(records) == 2
    assert records[first_token_id.value].revoked_at is not None
    assert records[pair.refresh_token.id.value].revoked_at is None


@pytest.mark.asyncio
async def test_stale_save_is_rejected(clock, jwt, sql_repo):
    service = AuthService(sql_repo)
    session = await _login(service, jwt, UserId.create())

    first = await sql_repo.find_session_by_id(session.id)
    second = await sql_repo.find_session_by_id(session.id)
    first.revoke()
    await sql_repo.save_session(first)

    second.revoke()
    with pytest.raises(ConcurrentModification):
        await sql_repo.save_session(second)
    assert second.version == 1


@pytest.mark.asyncio
async def test_revoke_session_through_service(clock, jwt, sql_repo):
    service = AuthService(sql_repo)
    session = await _login(service, jwt, UserId.create())

    assert await service.revoke_session(session.id) is True
    assert await service.revoke_session(session.id) is False

    loaded = await service.get_session_by_id(session.id)
    assert loaded.revoked is True
    assert loaded.refresh_token.revoked is True
    with pytest.raises(DomainServiceError):
        await service.refresh_session(loaded.refresh_token.id, jwt(), jwt())


@pytest.mark.asyncio
async def test_repository_revoke_session(clock, jwt, sql_repo):
    service = AuthService(sql_repo)
    session = await _login(service, jwt, UserId.create())

    await sql_repo.revoke_session(session.id)

    loaded = await sql_repo.find_session_by_id(session.id)
    assert loaded.revoked is True
    assert loaded.refresh_token.revoked is True
    assert loaded.version == 2


@pytest.mark.asyncio
async def test_revoke_all_sessions_for_user(clock, jwt, sql_repo):
    service = AuthService(sql_repo)
    user_id = UserId.create()
    sessions = [await _login(service, jwt, user_id) for _ in range(3)]
    await service.revoke_session(sessions[0].id)
    bystander = await _login(service, jwt, UserId.create())

    assert await sql_repo.count_active_sessions_for_user(user_id) == 2
    assert await service.revoke_all_sessions_for_user(user_id) is True
    assert await sql_repo.count_active_sessions_for_user(user_id) == 0

    for s in sessions:
        loaded = await sql_repo.find_session_by_id(s.id)
        assert loaded.refresh_token.revoked is True
    assert (await sql_repo.find_session_by_id(bystander.id)).active is True


@pytest.mark.asyncio
async def test_find_all_sessions_for_user_ranks_live_sessions_first(clock, jwt, sql_repo):
    service = AuthService(sql_repo)
    user_id = UserId.create()
    live = await _login(service, jwt, user_id, ip="10.0.0.1")
    revoked = []
    for i in range(5):
        clock.advance(minutes=1)
        session = await _login(service, jwt, user_id, ip=f"10.0.0.{i + 2}")
        await service.revoke_session(session.id)
        revoked.append(session)

    sessions = await service.get_all_sessions_for_user(user_id)

    assert sessions.count() == 5
    assert sessions.active_count == 1
    assert sessions.most_recent.id == revoked[-1].id
    assert not sessions.has(revoked[0].id)
    assert [s.id for s in sessions.get_by_ip(IpAddress.create("10.0.0.1"))] == [live.id]
    assert await service.get_all_sessions_for_user(UserId.create()) is None


@pytest.mark.asyncio
async def test_login_past_capacity_is_rejected(clock, jwt, sql_repo):
    service = AuthService(sql_repo)
    user_id = UserId.create()
    for i in range(5):
        await _login(service, jwt, user_id, ip=f"10.0.0.{i + 1}")

    with pytest.raises(DomainServiceError) as exc_info:
        await _login(service, jwt, user_id)

    assert isinstance(exc_info.value.cause, CapacityExceeded)
    assert await sql_repo.count_active_sessions_for_user(user_id) == 5
    assert (await service.get_all_sessions_for_user(user_id)).count() == 5


@pytest.mark.asyncio
async def test_expired_sweep(clock, jwt, sql_repo):
    service = AuthService(sql_repo)
    old = [await _login(service, jwt, UserId.create()) for _ in range(2)]
    clock.advance(days=4)
    fresh = await _login(service, jwt, UserId.create())
    clock.advance(days=4)

    assert (await sql_repo.find_expired_sessions()).count() == 2
    assert await service.revoke_expired_sessions() == 2
    assert await service.revoke_expired_sessions() == 0

    for s in old:
        assert (await sql_repo.find_session_by_id(s.id)).revoked is True
    assert (await sql_repo.find_session_by_id(fresh.id)).revoked is False


@pytest.mark.asyncio
async def test_inactive_sweep(clock, jwt, sql_repo):
    service = AuthService(sql_repo)
    expired = await _login(service, jwt, UserId.create())
    clock.advance(days=8)
    live = await _login(service, jwt, UserId.create())

    assert await service.revoke_inactive_sessions() == 1

    assert (await sql_repo.find_session_by_id(expired.id)).revoked is True
    assert (await sql_repo.find_session_by_id(live.id)).active is True
    assert (await sql_repo.find_inactive_sessions()).count() == 0
