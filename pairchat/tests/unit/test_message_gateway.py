# pairchat/tests/unit/test_message_gateway.py
import pytest

from pairchat.domain.entities import ActivityType
from pairchat.gateways.activity_gateway import ActivityGateway
from pairchat.gateways.message_gateway import MessageGateway


@pytest.fixture
def message_gateway(db_session, uow):
    return MessageGateway(db_session, uow)


@pytest.fixture
def activity_gateway(db_session, uow):
    return ActivityGateway(db_session, uow)


async def test_insert_message(message_gateway):
    message = (await message_gateway.insert_message(1, 10, "hello", 1000)).value

    assert message.id is not None
    assert (message.sender, message.chat, message.content, message.sent_at) == (
        1,
        10,
        "hello",
        1000,
    )


async def test_history_is_ordered_and_filtered(message_gateway):
    later = (await message_gateway.insert_message(1, 10, "later", 3000)).value
    early = (await message_gateway.insert_message(2, 10, "early", 1000)).value
    same_time = (await message_gateway.insert_message(1, 10, "same", 3000)).value
    await message_gateway.insert_message(1, 11, "other chat", 2000)

    history = (await message_gateway.get_for_chat_since(10, 0)).value
    assert [m.id for m in history] == [early.id, later.id, same_time.id]

    recent = (await message_gateway.get_for_chat_since(10, 2000)).value
    assert [m.id for m in recent] == [later.id, same_time.id]


async def test_activities_filtered_by_type_and_since(activity_gateway):
    login = (
        await activity_gateway.insert_activity(1, ActivityType.USER_LOGGED_IN, 1000)
    ).value
    await activity_gateway.insert_activity(1, ActivityType.MESSAGE_SENT, 2000)
    late_login = (
        await activity_gateway.insert_activity(2, ActivityType.USER_LOGGED_IN, 5000)
    ).value

    logins = (
        await activity_gateway.get_by_type_since(ActivityType.USER_LOGGED_IN, 0)
    ).value
    assert [a.id for a in logins] == [login.id, late_login.id]

    recent = (
        await activity_gateway.get_by_type_since(ActivityType.USER_LOGGED_IN, 3000)
    ).value
    assert [a.id for a in recent] == [late_login.id]
    assert recent[0].type == "USER_LOGGED_IN"
