# pairchat/gateways/chat_gateway.py

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from pairchat.domain.entities import pair_key
from pairchat.domain.errors import ConstraintViolation
from pairchat.domain.results import NotFound, StorageFailure, storage_result
from pairchat.gateways.interfaces import IChatGateway
from pairchat.infrastructure import models
from pairchat.infrastructure.data_mappers import ChatMapper
from pairchat.infrastructure.uow import UnitOfWork, UoWModel

CHAT_ALREADY_OPEN = "You already have a chat opened with that user"
CHAT_WITH_SELF = "You can not start a chat with yourself."


class ChatGateway(IChatGateway):
    def __init__(self, session: AsyncSession, uow: UnitOfWork):
        self.session = session
        self.uow = uow
        uow.mappers[models.Chat] = ChatMapper(session)

    @storage_result
    async def insert_chat(self, owner: int, receiver: int, last_activity: int):
        if owner == receiver:
            return StorageFailure(ConstraintViolation(CHAT_WITH_SELF))
        key = pair_key(owner, receiver)
        stmt = select(models.Chat.id).filter(models.Chat.pair_key == key)
        if (await self.session.execute(stmt)).first() is not None:
            return StorageFailure(ConstraintViolation(CHAT_ALREADY_OPEN))
        chat = self.uow.register_new(
            models.Chat(
                owner=owner,
                receiver=receiver,
                pair_key=key,
                last_activity=last_activity,
            )
        )
        await self.uow.commit()
        return chat

    @storage_result
    async def get_by_id(self, chat_id: int):
        chat = await self.session.get(models.Chat, chat_id)
        return UoWModel(chat, self.uow) if chat else NotFound("Chat")

    @storage_result
    async def get_for_user_since(self, user_id: int, since: int):
        stmt = (
            select(models.Chat)
            .filter(
                or_(models.Chat.owner == user_id, models.Chat.receiver == user_id),
                models.Chat.last_activity >= since,
            )
            .order_by(models.Chat.last_activity.desc(), models.Chat.id)
        )
        result = await self.session.execute(stmt)
        return [UoWModel(chat, self.uow) for chat in result.scalars().all()]

    @storage_result
    async def delete_if_participant(self, user_id: int, chat_id: int):
        chat = await self.session.get(models.Chat, chat_id)
        if chat is None or user_id not in (chat.owner, chat.receiver):
            return False
        self.uow.register_deleted(chat)
        await self.uow.commit()
        return True

    @storage_result
    async def touch(self, chat_id: int, timestamp: int):
        chat = await self.session.get(models.Chat, chat_id)
        if chat is None:
            return NotFound("Chat")
        wrapped = UoWModel(chat, self.uow)
        wrapped.last_activity = max(chat.last_activity, timestamp)
        await self.uow.commit()
        return wrapped
