from src.domain.entities.refresh_token import RefreshToken
from src.domain.entities.session import Session
from src.domain.value_objects import IpAddress, SessionId, UserAgent, UserId


class SessionFactory:
    @staticmethod
    def create_new(
        session_id: SessionId,
        user_id: UserId,
        user_agent: UserAgent,
        ip_address: IpAddress,
        refresh_token: RefreshToken,
    ) -> Session:
        """
        Build a session around a freshly minted refresh token.

        The session's expiry is not set here: it is always read from the
        refresh token.

        Raises:
            EntityCreationRejected: refresh token is not usable for this session
        """
        return Session.create(
            id=session_id,
            user_id=user_id,
            refresh_token=refresh_token,
            ip_address=ip_address,
            user_agent=user_agent,
        )
