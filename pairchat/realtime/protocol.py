# pairchat/realtime/protocol.py
"""Frames exchanged over the dashboard websocket.

Every frame is a JSON object whose ``type`` field names its kind. Requests
are matched against :data:`REQUEST_KINDS` in order (user search, send
message, chat history) and each kind has exactly one response kind.
"""
import json
from typing import Literal, Union

from pydantic import ValidationError

from pairchat.domain.errors import INVALID_ARGUMENT
from pairchat.infrastructure.schemas import CamelModel, Message, UserHead


class GetUsersForSubstringRequest(CamelModel):
    type: Literal["GetUsersForSubstringRequest"] = "GetUsersForSubstringRequest"
    search: str


class GetUsersForSubstringResponse(CamelModel):
    type: Literal["GetUsersForSubstringResponse"] = "GetUsersForSubstringResponse"
    users: list[UserHead] = []
    error: str | None = None


class SendMessageRequest(CamelModel):
    type: Literal["SendMessageRequest"] = "SendMessageRequest"
    chat: int
    message: str


class SendMessageResponse(CamelModel):
    type: Literal["SendMessageResponse"] = "SendMessageResponse"
    error: str | None = None


class GetChatHistoryRequest(CamelModel):
    type: Literal["GetChatHistoryRequest"] = "GetChatHistoryRequest"
    chat: int
    since: int = 0


class GetChatHistoryResponse(CamelModel):
    type: Literal["GetChatHistoryResponse"] = "GetChatHistoryResponse"
    messages: list[Message] = []
    error: str | None = None


class ErrorResponse(CamelModel):
    type: Literal["ErrorResponse"] = "ErrorResponse"
    error: str | None = None


Request = Union[GetUsersForSubstringRequest, SendMessageRequest, GetChatHistoryRequest]
Response = Union[
    GetUsersForSubstringResponse,
    SendMessageResponse,
    GetChatHistoryResponse,
    ErrorResponse,
]

REQUEST_KINDS: tuple[tuple[type[CamelModel], type[CamelModel]], ...] = (
    (GetUsersForSubstringRequest, GetUsersForSubstringResponse),
    (SendMessageRequest, SendMessageResponse),
    (GetChatHistoryRequest, GetChatHistoryResponse),
)


class InvalidFrame(Exception):
    """Raised by :func:`decode_request`; ``response`` is what the client gets back."""

    def __init__(self, response: Response):
        super().__init__(response.error)
        self.response = response


def response_kind(request: Request) -> type[CamelModel]:
    for request_cls, response_cls in REQUEST_KINDS:
        if isinstance(request, request_cls):
            return response_cls
    raise TypeError(f"Unknown request kind {type(request).__name__}")


def decode_request(raw: str | bytes) -> Request:
    try:
        payload = json.loads(raw)
    except ValueError:
        raise InvalidFrame(ErrorResponse(error=INVALID_ARGUMENT))
    if not isinstance(payload, dict):
        raise InvalidFrame(ErrorResponse(error=INVALID_ARGUMENT))

    kind = payload.get("type")
    for request_cls, response_cls in REQUEST_KINDS:
        if kind != request_cls.model_fields["type"].default:
            continue
        try:
            return request_cls.model_validate(payload)
        except ValidationError:
            raise InvalidFrame(response_cls(error=INVALID_ARGUMENT))
    raise InvalidFrame(ErrorResponse(error=INVALID_ARGUMENT))


def encode_frame(frame: CamelModel) -> str:
    return frame.model_dump_json(by_alias=True)
