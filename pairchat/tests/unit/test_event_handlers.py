# pairchat/tests/unit/test_event_handlers.py
import asyncio
import json
import logging
from unittest.mock import Mock

import pytest

from pairchat.domain.entities import ActivityType
from pairchat.domain.events import ActivityRecorded, MessageSent
from pairchat.infrastructure.event_handlers import EventHandlers, NotificationHandlers
from pairchat.infrastructure.redis_client import RedisClient
from pairchat.realtime.protocol import SendMessageRequest


@pytest.fixture
def test_logger():
    logger = logging.getLogger("test_event_handlers")
    logger.setLevel(logging.DEBUG)
    return logger


def message_sent(recipient_id=2):
    return MessageSent(
        recipient_id=recipient_id,
        sender_id=1,
        chat_id=7,
        message_id=3,
        content="hi",
        sent_at=1000,
    )


@pytest.mark.asyncio
async def test_message_sent_is_delivered_to_recipient(test_logger):
    registry = Mock()
    registry.deliver.return_value = True
    handlers = NotificationHandlers(registry, test_logger)

    await handlers.notify_message_sent(message_sent())

    registry.deliver.assert_called_once_with(
        2, SendMessageRequest(chat=7, message="hi")
    )


@pytest.mark.asyncio
async def test_offline_recipient_is_logged(test_logger, caplog):
    caplog.set_level(logging.DEBUG)
    registry = Mock()
    registry.deliver.return_value = False
    handlers = NotificationHandlers(registry, test_logger)

    await handlers.notify_message_sent(message_sent(recipient_id=5))

    assert "User 5 not reachable" in caplog.text


@pytest.mark.asyncio
async def test_activity_is_published_to_feed(test_logger, mock_redis):
    redis_client = RedisClient(host="localhost", port=6379, logger=test_logger)
    redis_client.client = mock_redis
    pubsub = mock_redis.pubsub()
    await pubsub.subscribe("activity:USER_LOGGED_IN")
    await pubsub.get_message(timeout=1)  # subscribe confirmation

    await EventHandlers(redis_client, test_logger).publish_activity_recorded(
        ActivityRecorded(
            activity_id=4, owner_id=1, type=ActivityType.USER_LOGGED_IN, timestamp=1000
        )
    )

    message = await pubsub.get_message(ignore_subscribe_messages=True, timeout=1)
    assert message is not None
    assert json.loads(message["data"]) == {
        "id": 4,
        "owner": 1,
        "type": "USER_LOGGED_IN",
        "timestamp": 1000,
    }
    await pubsub.aclose()


@pytest.mark.asyncio
async def test_slow_feed_does_not_hold_up_the_caller(test_logger, caplog):
    caplog.set_level(logging.WARNING)
    redis_client = Mock()

    async def stalled_publish(channel, message):
        await asyncio.sleep(10)

    redis_client.publish = stalled_publish
    handlers = EventHandlers(redis_client, test_logger, timeout=0.05)

    await asyncio.wait_for(
        handlers.publish_activity_recorded(
            ActivityRecorded(
                activity_id=9, owner_id=1, type=ActivityType.MESSAGE_SENT, timestamp=1000
            )
        ),
        timeout=2,
    )

    assert "Publishing activity 9 timed out" in caplog.text
