import pytest
from unittest.mock import AsyncMock, MagicMock

from src.domain.collections import SessionCollection


@pytest.fixture
def mock_auth_repo():
    repo = MagicMock()
    repo.save_session = AsyncMock()
    repo.save_sessions = AsyncMock()
    repo.revoke_session = AsyncMock()
    repo.revoke_all_sessions_for_user = AsyncMock(return_value=0)
    repo.count_active_sessions_for_user = AsyncMock(return_value=0)
    repo.find_session_by_token = AsyncMock(return_value=None)
    repo.find_session_by_id = AsyncMock(return_value=None)
    repo.find_all_sessions_for_user = AsyncMock(return_value=SessionCollection.empty())
    repo.find_expired_sessions = AsyncMock(return_value=SessionCollection.empty())
    repo.find_inactive_sessions = AsyncMock(return_value=SessionCollection.empty())
    return repo
