from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from osas_connect.adapter.services.notification_dispatcher import LoggingNotificationDispatcher
from osas_connect.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from osas_connect.api.utils.jwt import verify_jwt
from osas_connect.app.services.notification_dispatcher import NotificationDispatcher

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()

_dispatcher = LoggingNotificationDispatcher()


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_notification_dispatcher() -> NotificationDispatcher:
    return _dispatcher


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """Claims of the bearer token; 401 when it does not verify"""
    payload = verify_jwt(credentials.credentials)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return payload
