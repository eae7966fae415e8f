# pairchat/gateways/message_gateway.py

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pairchat.domain.results import storage_result
from pairchat.gateways.interfaces import IMessageGateway
from pairchat.infrastructure import models
from pairchat.infrastructure.data_mappers import MessageMapper
from pairchat.infrastructure.uow import UnitOfWork, UoWModel


class MessageGateway(IMessageGateway):
    def __init__(self, session: AsyncSession, uow: UnitOfWork):
        self.session = session
        self.uow = uow
        uow.mappers[models.Message] = MessageMapper(session)

    @storage_result
    async def insert_message(self, sender: int, chat: int, content: str, sent_at: int):
        message = self.uow.register_new(
            models.Message(sender=sender, chat=chat, content=content, sent_at=sent_at)
        )
        await self.uow.commit()
        return message

    @storage_result
    async def get_for_chat_since(self, chat_id: int, since: int):
        stmt = (
            select(models.Message)
            .filter(models.Message.chat == chat_id, models.Message.sent_at >= since)
            .order_by(models.Message.sent_at, models.Message.id)
        )
        result = await self.session.execute(stmt)
        return [UoWModel(message, self.uow) for message in result.scalars().all()]
