# pairchat/interactors/chat_interactor.py
from typing import List

from pairchat.domain.entities import current_millis
from pairchat.domain.errors import AuthorizationError, NotFoundError, ValidationError
from pairchat.gateways.chat_gateway import CHAT_ALREADY_OPEN, CHAT_WITH_SELF
from pairchat.gateways.interfaces import IChatGateway, IUserGateway
from pairchat.infrastructure import schemas
from pairchat.interactors.validation import validate_id, validate_since

CHAT_NOT_FOUND = "Chat not found"
NOT_A_PARTICIPANT = "You are not a part of this chat"


async def require_participant(
    chat_gateway: IChatGateway, user_id: int, chat_id: int
) -> schemas.Chat:
    """Load a chat and make sure ``user_id`` is one of its two members."""
    chat = (await chat_gateway.get_by_id(validate_id(chat_id, "Chat"))).unwrap(
        not_found=CHAT_NOT_FOUND
    )
    chat = schemas.Chat.model_validate(chat._model)
    if not chat.has_participant(user_id):
        raise AuthorizationError(NOT_A_PARTICIPANT)
    return chat


class ChatInteractor:
    def __init__(self, chat_gateway: IChatGateway, user_gateway: IUserGateway):
        self.chat_gateway = chat_gateway
        self.user_gateway = user_gateway

    async def get_chats(self, user_id: int, since: int = 0) -> List[schemas.Chat]:
        chats = (
            await self.chat_gateway.get_for_user_since(user_id, validate_since(since))
        ).unwrap()
        return [schemas.Chat.model_validate(chat._model) for chat in chats]

    async def start_chat(self, owner_id: int, receiver_id: int) -> schemas.Chat:
        if owner_id == validate_id(receiver_id, "Receiver"):
            raise ValidationError(CHAT_WITH_SELF)
        (await self.user_gateway.get_by_id(receiver_id)).unwrap(
            not_found="User not found"
        )
        chat = (
            await self.chat_gateway.insert_chat(owner_id, receiver_id, current_millis())
        ).unwrap(conflict=CHAT_ALREADY_OPEN)
        return schemas.Chat.model_validate(chat._model)

    async def delete_chat(self, user_id: int, chat_id: int) -> None:
        deleted = (
            await self.chat_gateway.delete_if_participant(
                user_id, validate_id(chat_id, "Chat")
            )
        ).unwrap()
        if not deleted:
            raise NotFoundError(CHAT_NOT_FOUND)
