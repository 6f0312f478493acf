from src.domain.constants import ACCESS_TOKEN_TTL
from src.domain.entities.access_token import AccessToken
from src.domain.value_objects import (
    CredentialId,
    ExpiresAt,
    JwtToken,
    SessionId,
    UserId,
)


class AccessTokenFactory:
    """Mints access tokens that expire ACCESS_TOKEN_TTL after creation"""

    @staticmethod
    def create_new(token: JwtToken, session_id: SessionId, user_id: UserId) -> AccessToken:
        return AccessToken.create(
            id=CredentialId.create(),
            session_id=session_id,
            user_id=user_id,
            token=token,
            expires_at=ExpiresAt.after(ACCESS_TOKEN_TTL),
        )
