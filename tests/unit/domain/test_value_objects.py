"""
Unit tests for auth value objects
"""

from datetime import UTC, datetime, timedelta

import pytest

from src.domain.errors import ValidationFailure
from src.domain.value_objects import (
    CredentialId,
    ExpiresAt,
    IpAddress,
    JwtToken,
    RevokedAt,
    SessionId,
    UserAgent,
)


def test_identifiers_are_random_and_compare_by_value():
    a = SessionId.create()
    b = SessionId.create()

    assert a != b
    assert SessionId.from_string(str(a)) == a
    assert hash(SessionId.from_string(str(a))) == hash(a)


def test_identifiers_of_different_kinds_never_compare_equal():
    session_id = SessionId.create()

    assert CredentialId(session_id.value) != session_id


def test_identifier_from_malformed_string():
    with pytest.raises(ValidationFailure):
        SessionId.from_string("not-a-uuid")


def test_jwt_token_is_trimmed():
    token = JwtToken.create("  aaa.bbb.ccc \n")

    assert token.value == "aaa.bbb.ccc"
    assert "aaa" not in repr(token)


@pytest.mark.parametrize("raw", ["", "aaa.bbb", "aaa.bbb.ccc.ddd", "a a.b.c", None])
def test_jwt_token_rejects_malformed_values(raw):
    with pytest.raises(ValidationFailure):
        JwtToken.create(raw)


def test_ip_address_versions():
    assert IpAddress.create("192.168.1.10").is_ipv4()
    assert IpAddress.create("2001:db8::1").is_ipv6()
    assert IpAddress.create(" 10.0.0.1 ") == IpAddress.create("10.0.0.1")


def test_ip_address_rejects_garbage():
    with pytest.raises(ValidationFailure):
        IpAddress.create("999.1.1.1")


def test_user_agent_length_limit():
    assert UserAgent.create("a" * 500).value == "a" * 500
    with pytest.raises(ValidationFailure):
        UserAgent.create("a" * 501)
    with pytest.raises(ValidationFailure):
        UserAgent.create("")


def test_expires_at_must_be_in_the_future(clock):
    with pytest.raises(ValidationFailure):
        ExpiresAt.create(clock.now)

    expires_at = ExpiresAt.after(timedelta(minutes=5))
    assert expires_at.value == clock.now + timedelta(minutes=5)
    assert not expires_at.is_expired()


def test_expires_at_restore_accepts_past_values(clock):
    past = ExpiresAt.restore(clock.now - timedelta(days=1))

    assert past.is_expired()


def test_expires_at_restore_treats_naive_values_as_utc():
    naive = datetime(2026, 1, 1, 12, 0, 0)

    assert ExpiresAt.restore(naive).value == naive.replace(tzinfo=UTC)


def test_expires_at_is_evaluated_on_every_read(clock):
    expires_at = ExpiresAt.after(timedelta(seconds=10))
    assert not expires_at.is_expired()

    clock.advance(seconds=11)

    assert expires_at.is_expired()


def test_revoked_at_states(clock):
    assert not RevokedAt.none().is_revoked()
    assert RevokedAt.now().value == clock.now
    assert RevokedAt.at(clock.now).is_revoked()
