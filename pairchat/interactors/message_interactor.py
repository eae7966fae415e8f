# pairchat/interactors/message_interactor.py
from typing import List, NamedTuple

from pairchat.domain.entities import ActivityType, current_millis
from pairchat.gateways.interfaces import (
    IActivityGateway,
    IChatGateway,
    IMessageGateway,
)
from pairchat.infrastructure import schemas
from pairchat.interactors.chat_interactor import require_participant
from pairchat.interactors.validation import validate_message, validate_since


class SentMessage(NamedTuple):
    message: schemas.Message
    chat: schemas.Chat
    activity: schemas.Activity


class MessageInteractor:
    def __init__(
        self,
        message_gateway: IMessageGateway,
        chat_gateway: IChatGateway,
        activity_gateway: IActivityGateway,
    ):
        self.message_gateway = message_gateway
        self.chat_gateway = chat_gateway
        self.activity_gateway = activity_gateway

    async def send_message(
        self, sender_id: int, chat_id: int, content: str | None
    ) -> SentMessage:
        content = validate_message(content)
        chat = await require_participant(self.chat_gateway, sender_id, chat_id)
        now = current_millis()

        message = (
            await self.message_gateway.insert_message(sender_id, chat.id, content, now)
        ).unwrap()
        touched = (await self.chat_gateway.touch(chat.id, now)).unwrap(
            not_found="Chat not found"
        )
        activity = (
            await self.activity_gateway.insert_activity(
                sender_id, ActivityType.MESSAGE_SENT, now
            )
        ).unwrap()
        return SentMessage(
            message=schemas.Message.model_validate(message._model),
            chat=schemas.Chat.model_validate(touched._model),
            activity=schemas.Activity.model_validate(activity._model),
        )

    async def get_history(
        self, user_id: int, chat_id: int, since: int = 0
    ) -> List[schemas.Message]:
        since = validate_since(since)
        chat = await require_participant(self.chat_gateway, user_id, chat_id)
        messages = (
            await self.message_gateway.get_for_chat_since(chat.id, since)
        ).unwrap()
        return [schemas.Message.model_validate(message._model) for message in messages]
