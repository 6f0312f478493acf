from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class SessionRecord(SQLModel, table=True):
    """
    Session row.

    Business Rules:
    - Never deleted; revoked rows stay as tombstones for audit
    - No expires_at column: expiry is read from the current refresh token
    - version guards conditional updates
    """

    __tablename__ = "sessions"

    id: UUID = Field(primary_key=True)

    user_id: UUID = Field(nullable=False, index=True)
    current_refresh_token_id: UUID = Field(nullable=False, index=True)

    ip_address: str = Field(max_length=45)
    user_agent: str = Field(max_length=500)

    version: int = Field(default=0, nullable=False)

    # Timestamps
    created_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
    updated_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
    revoked_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime(timezone=True), nullable=True)
    )

    __table_args__ = (
        Index("idx_session_user_created", "user_id", "created_at"),
        Index("idx_session_revoked_at", "revoked_at"),
    )


class RefreshTokenRecord(SQLModel, table=True):
    """
    Refresh token row.

    Rotated-out tokens are kept (revoked) so the chain of a session stays
    auditable.
    """

    __tablename__ = "refresh_tokens"

    id: UUID = Field(primary_key=True)

    session_id: UUID = Field(foreign_key="sessions.id", nullable=False, index=True)
    token: str = Field(nullable=False)

    # Timestamps
    created_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
    expires_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
    revoked_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime(timezone=True), nullable=True)
    )

    __table_args__ = (
        Index("idx_refresh_token_expires_at", "expires_at"),
    )
