# pairchat/gateways/user_gateway.py

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pairchat.domain.errors import ConstraintViolation
from pairchat.domain.results import NotFound, StorageFailure, storage_result
from pairchat.gateways.interfaces import IUserGateway
from pairchat.infrastructure import models
from pairchat.infrastructure.data_mappers import UserMapper
from pairchat.infrastructure.uow import UnitOfWork, UoWModel

USERNAME_IN_USE = "Username already in use"


class UserGateway(IUserGateway):
    def __init__(self, session: AsyncSession, uow: UnitOfWork):
        self.session = session
        self.uow = uow
        uow.mappers[models.User] = UserMapper(session)

    async def _find_by_username(self, username: str) -> models.User | None:
        stmt = select(models.User).filter(models.User.username == username)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    @storage_result
    async def insert_user(self, username: str, password_hash: str):
        if await self._find_by_username(username) is not None:
            return StorageFailure(ConstraintViolation(USERNAME_IN_USE))
        user = self.uow.register_new(
            models.User(username=username, password=password_hash, is_admin=False)
        )
        await self.uow.commit()
        return user

    @storage_result
    async def get_by_id(self, user_id: int):
        user = await self.session.get(models.User, user_id)
        return UoWModel(user, self.uow) if user else NotFound("User")

    @storage_result
    async def get_by_username(self, username: str):
        user = await self._find_by_username(username)
        return UoWModel(user, self.uow) if user else NotFound("User")

    @storage_result
    async def search_by_username_substring(self, query: str):
        stmt = (
            select(models.User)
            .filter(models.User.username.contains(query, autoescape=True))
            .order_by(models.User.username)
        )
        result = await self.session.execute(stmt)
        return [UoWModel(user, self.uow) for user in result.scalars().all()]

    @storage_result
    async def set_admin(self, user_id: int, is_admin: bool):
        user = await self.session.get(models.User, user_id)
        if user is None:
            return NotFound("User")
        wrapped = UoWModel(user, self.uow)
        wrapped.is_admin = is_admin
        await self.uow.commit()
        return wrapped
