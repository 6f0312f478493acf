"""
Auth Domain Constants

Credential lifetimes are fixed here and never accepted from callers.
"""

from datetime import timedelta

REFRESH_TOKEN_TTL = timedelta(days=7)
ACCESS_TOKEN_TTL = timedelta(hours=1)

# Maximum number of sessions held per user
MAX_SESSIONS_PER_USER = 5

USER_AGENT_MAX_LENGTH = 500
