# pairchat/infrastructure/data_mappers.py

from typing import Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from pairchat.infrastructure import models

ModelT = TypeVar("ModelT")


class SessionMapper(Generic[ModelT]):
    """Writes straight through the session and flushes, so generated ids
    and constraint violations surface at ``UnitOfWork.commit`` time."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert(self, model: ModelT):
        self.session.add(model)
        await self.session.flush()

    async def delete(self, model: ModelT):
        await self.session.delete(model)
        await self.session.flush()

    async def update(self, model: ModelT):
        await self.session.merge(model)
        await self.session.flush()


class UserMapper(SessionMapper[models.User]):
    pass


class ChatMapper(SessionMapper[models.Chat]):
    pass


class MessageMapper(SessionMapper[models.Message]):
    pass


class ActivityMapper(SessionMapper[models.Activity]):
    pass
