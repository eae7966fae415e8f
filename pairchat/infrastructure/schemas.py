# pairchat/infrastructure/schemas.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from pairchat.domain.entities import ActivityType


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class UserHead(CamelModel):
    id: int
    username: str
    is_admin: bool = False


class User(UserHead):
    password: str


class Chat(CamelModel):
    id: int
    owner: int
    receiver: int
    last_activity: int

    def has_participant(self, user_id: int) -> bool:
        return user_id in (self.owner, self.receiver)

    def other_participant(self, user_id: int) -> int:
        return self.receiver if user_id == self.owner else self.owner


class Message(CamelModel):
    id: int
    sender: int
    sent_at: int
    chat: int
    content: str


class Activity(CamelModel):
    id: int
    owner: int
    type: ActivityType
    timestamp: int


class AuthRequest(CamelModel):
    username: str | None = None
    password: str | None = None


class AuthResponse(CamelModel):
    access_token: str | None = None
    error: str | None = None


class ChatsResponse(CamelModel):
    chats: list[Chat] = []
    error: str | None = None


class StartChatRequest(CamelModel):
    receiver: int


class ChatResponse(CamelModel):
    chat: Chat | None = None
    error: str | None = None


class DeleteChatRequest(CamelModel):
    chat: int


class ErrorResponse(CamelModel):
    error: str | None = None


class ActivitiesResponse(CamelModel):
    activities: list[Activity] = []
    error: str | None = None


class HealthResponse(BaseModel):
    status: str
