from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.auth_repository import SqlAuthRepository
from src.adapter.repositories.memory_auth_repository import InMemoryAuthRepository
from src.app.repositories.auth_repository import IAuthRepository
from src.app.services.auth_service import AuthService
from src.logging_config import configure_logging

configure_logging(ApplicationConfig.LOG_LEVEL, ApplicationConfig.LOG_FORMAT)

engine = create_async_engine(
    ApplicationConfig.DB_URI, echo=ApplicationConfig.DB_ECHO, future=True
)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

_memory_repository = InMemoryAuthRepository()


async def init_db() -> None:
    """Create the auth tables if they do not exist"""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


def get_auth_repository() -> IAuthRepository:
    if ApplicationConfig.REPOSITORY_BACKEND == "memory":
        return _memory_repository
    return SqlAuthRepository(AsyncSessionLocal)


def get_auth_service() -> AuthService:
    return AuthService(get_auth_repository())
