from src.domain.constants import REFRESH_TOKEN_TTL
from src.domain.entities.refresh_token import RefreshToken
from src.domain.value_objects import CredentialId, ExpiresAt, JwtToken, SessionId


class RefreshTokenFactory:
    """Mints refresh tokens that expire REFRESH_TOKEN_TTL after creation"""

    @staticmethod
    def create_new(token: JwtToken, session_id: SessionId) -> RefreshToken:
        return RefreshToken.create(
            id=CredentialId.create(),
            session_id=session_id,
            token=token,
            expires_at=ExpiresAt.after(REFRESH_TOKEN_TTL),
        )
