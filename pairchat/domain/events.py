# pairchat/domain/events.py
from pydantic import BaseModel

from pairchat.domain.entities import ActivityType


class Event(BaseModel):
    pass


class MessageSent(Event):
    recipient_id: int
    sender_id: int
    chat_id: int
    message_id: int
    content: str
    sent_at: int


class ActivityRecorded(Event):
    activity_id: int
    owner_id: int
    type: ActivityType
    timestamp: int
