# pairchat/api/dependencies.py
from typing import AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from pairchat.domain.errors import AuthorizationError
from pairchat.gateways.activity_gateway import ActivityGateway
from pairchat.gateways.chat_gateway import ChatGateway
from pairchat.gateways.user_gateway import UserGateway
from pairchat.infrastructure import schemas
from pairchat.infrastructure.event_dispatcher import EventDispatcher
from pairchat.infrastructure.security import SecurityService
from pairchat.infrastructure.uow import UnitOfWork
from pairchat.interactors.activity_interactor import ActivityInteractor
from pairchat.interactors.chat_interactor import ChatInteractor
from pairchat.interactors.user_interactor import UserInteractor

bearer_scheme = HTTPBearer(auto_error=False)


def get_security_service(request: Request) -> SecurityService:
    return request.app.state.security_service


def get_event_dispatcher(request: Request) -> EventDispatcher:
    return request.app.state.event_dispatcher


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    async with request.app.state.database.transaction() as session:
        yield session


async def get_uow() -> UnitOfWork:
    return UnitOfWork()


async def get_user_gateway(
    session: AsyncSession = Depends(get_session), uow: UnitOfWork = Depends(get_uow)
):
    return UserGateway(session, uow)


async def get_chat_gateway(
    session: AsyncSession = Depends(get_session), uow: UnitOfWork = Depends(get_uow)
):
    return ChatGateway(session, uow)


async def get_activity_gateway(
    session: AsyncSession = Depends(get_session), uow: UnitOfWork = Depends(get_uow)
):
    return ActivityGateway(session, uow)


async def get_user_interactor(
    security_service: SecurityService = Depends(get_security_service),
    user_gateway: UserGateway = Depends(get_user_gateway),
    activity_gateway: ActivityGateway = Depends(get_activity_gateway),
):
    return UserInteractor(security_service, user_gateway, activity_gateway)


async def get_chat_interactor(
    chat_gateway: ChatGateway = Depends(get_chat_gateway),
    user_gateway: UserGateway = Depends(get_user_gateway),
):
    return ChatInteractor(chat_gateway, user_gateway)


async def get_activity_interactor(
    activity_gateway: ActivityGateway = Depends(get_activity_gateway),
):
    return ActivityInteractor(activity_gateway)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    user_interactor: UserInteractor = Depends(get_user_interactor),
) -> schemas.UserHead:
    token = credentials.credentials if credentials else None
    try:
        return await user_interactor.authenticate(token)
    except AuthorizationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
