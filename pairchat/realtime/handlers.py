# pairchat/realtime/handlers.py
import logging

from pairchat.domain.errors import ApplicationError, UnknownStorageError, UNKNOWN_ERROR
from pairchat.domain.events import ActivityRecorded, MessageSent
from pairchat.gateways.activity_gateway import ActivityGateway
from pairchat.gateways.chat_gateway import ChatGateway
from pairchat.gateways.message_gateway import MessageGateway
from pairchat.gateways.user_gateway import UserGateway
from pairchat.infrastructure.database import Database
from pairchat.infrastructure.event_dispatcher import EventDispatcher
from pairchat.infrastructure.security import SecurityService
from pairchat.infrastructure.uow import UnitOfWork
from pairchat.interactors.message_interactor import MessageInteractor
from pairchat.interactors.user_interactor import UserInteractor
from pairchat.realtime.protocol import (
    GetChatHistoryRequest,
    GetChatHistoryResponse,
    GetUsersForSubstringRequest,
    GetUsersForSubstringResponse,
    InvalidFrame,
    Response,
    SendMessageRequest,
    SendMessageResponse,
    decode_request,
    response_kind,
)


class RealtimeHandlers:
    """Answers the requests of a websocket session.

    Each request runs in its own database transaction. Events are only
    dispatched after that transaction has committed.
    """

    def __init__(
        self,
        database: Database,
        security_service: SecurityService,
        event_dispatcher: EventDispatcher,
        logger: logging.Logger,
    ):
        self.database = database
        self.security_service = security_service
        self.event_dispatcher = event_dispatcher
        self.logger = logger
        self.routes = {
            GetUsersForSubstringRequest: self.search_users,
            SendMessageRequest: self.send_message,
            GetChatHistoryRequest: self.get_chat_history,
        }

    async def handle(self, user_id: int, raw: str) -> Response:
        try:
            request = decode_request(raw)
        except InvalidFrame as e:
            self.logger.debug(f"Undecodable frame from user {user_id}")
            return e.response

        try:
            return await self.routes[type(request)](user_id, request)
        except UnknownStorageError as e:
            self.logger.error(
                f"Storage failure handling {request.type} for user {user_id}",
                exc_info=e.cause,
            )
            return response_kind(request)(error=e.message)
        except ApplicationError as e:
            return response_kind(request)(error=e.message)
        except Exception:
            self.logger.exception(f"Unexpected error handling {request.type}")
            return response_kind(request)(error=UNKNOWN_ERROR)

    async def search_users(
        self, user_id: int, request: GetUsersForSubstringRequest
    ) -> GetUsersForSubstringResponse:
        async with self.database.transaction() as session:
            uow = UnitOfWork()
            interactor = UserInteractor(
                self.security_service,
                UserGateway(session, uow),
                ActivityGateway(session, uow),
            )
            users = await interactor.search_users(request.search)
        return GetUsersForSubstringResponse(users=users)

    async def send_message(
        self, user_id: int, request: SendMessageRequest
    ) -> SendMessageResponse:
        async with self.database.transaction() as session:
            uow = UnitOfWork()
            interactor = MessageInteractor(
                MessageGateway(session, uow),
                ChatGateway(session, uow),
                ActivityGateway(session, uow),
            )
            sent = await interactor.send_message(user_id, request.chat, request.message)

        await self.event_dispatcher.dispatch(
            MessageSent(
                recipient_id=sent.chat.other_participant(user_id),
                sender_id=user_id,
                chat_id=sent.chat.id,
                message_id=sent.message.id,
                content=request.message,
                sent_at=sent.message.sent_at,
            )
        )
        await self.event_dispatcher.dispatch(
            ActivityRecorded(
                activity_id=sent.activity.id,
                owner_id=sent.activity.owner,
                type=sent.activity.type,
                timestamp=sent.activity.timestamp,
            )
        )
        return SendMessageResponse()

    async def get_chat_history(
        self, user_id: int, request: GetChatHistoryRequest
    ) -> GetChatHistoryResponse:
        async with self.database.transaction() as session:
            uow = UnitOfWork()
            interactor = MessageInteractor(
                MessageGateway(session, uow),
                ChatGateway(session, uow),
                ActivityGateway(session, uow),
            )
            messages = await interactor.get_history(user_id, request.chat, request.since)
        return GetChatHistoryResponse(messages=messages)
