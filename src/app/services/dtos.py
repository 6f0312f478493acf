"""
Auth Service DTOs (Data Transfer Objects)
"""

from pydantic import BaseModel, ConfigDict

from src.domain.entities.access_token import AccessToken
from src.domain.entities.refresh_token import RefreshToken


class TokenPair(BaseModel):
    """Credentials issued by a session refresh"""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    access_token: AccessToken
    refresh_token: RefreshToken
