from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from .auth import verify_token
from .config import Settings
from .db.session import get_session
from .errors import UnauthorizedError
from .repositories import FuelPurchaseRepository, UserRepository, VehicleRepository
from .schemas import Principal

bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    async for session in get_session(request.app.state.session_factory):
        yield session


async def get_current_principal(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> Principal:
    """Проверяет Bearer токен и сохраняет принципала в request.state."""
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise UnauthorizedError()
    principal = await verify_token(UserRepository(session), credentials.credentials, settings)
    request.state.principal = principal
    return principal


def get_user_repository(session: Annotated[AsyncSession, Depends(get_db_session)]) -> UserRepository:
    return UserRepository(session)


def get_vehicle_repository(
    principal: Annotated[Principal, Depends(get_current_principal)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> VehicleRepository:
    return VehicleRepository(session, principal.user_id)


def get_fuel_purchase_repository(
    principal: Annotated[Principal, Depends(get_current_principal)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> FuelPurchaseRepository:
    return FuelPurchaseRepository(session, principal.user_id)
