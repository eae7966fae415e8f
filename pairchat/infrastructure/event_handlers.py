# pairchat/infrastructure/event_handlers.py
import asyncio
import json
import logging

from pairchat.domain.events import ActivityRecorded, MessageSent
from pairchat.realtime.protocol import SendMessageRequest


class NotificationHandlers:
    """Turns committed domain events into frames for connected users."""

    def __init__(self, registry, logger: logging.Logger):
        self.registry = registry
        self.logger = logger

    async def notify_message_sent(self, event: MessageSent):
        # the recipient gets the request as the sender wrote it
        frame = SendMessageRequest(chat=event.chat_id, message=event.content)
        if not self.registry.deliver(event.recipient_id, frame):
            self.logger.debug(
                f"User {event.recipient_id} not reachable, message {event.message_id} stored only"
            )


class EventHandlers:
    def __init__(self, redis_client, logger: logging.Logger, timeout: float = 1.0):
        self.redis_client = redis_client
        self.logger = logger
        self.timeout = timeout

    async def publish_activity_recorded(self, event: ActivityRecorded):
        channel_name = f"activity:{event.type.value}"
        activity_json = json.dumps(
            {
                "id": event.activity_id,
                "owner": event.owner_id,
                "type": event.type.value,
                "timestamp": event.timestamp,
            }
        )
        try:
            await asyncio.wait_for(
                self.redis_client.publish(channel_name, activity_json), self.timeout
            )
        except asyncio.TimeoutError:
            self.logger.warning(
                f"Publishing activity {event.activity_id} timed out after {self.timeout}s"
            )
