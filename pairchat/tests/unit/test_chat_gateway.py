# pairchat/tests/unit/test_chat_gateway.py
import pytest

from pairchat.domain.errors import ConstraintViolation
from pairchat.domain.results import NotFound, Ok, StorageFailure
from pairchat.gateways.chat_gateway import ChatGateway


@pytest.fixture
def chat_gateway(db_session, uow):
    return ChatGateway(db_session, uow)


@pytest.fixture
async def users(make_user):
    return [await make_user() for _ in range(3)]


class TestChatGateway:
    async def test_insert_chat(self, chat_gateway, users):
        alice, bob, _ = users
        result = await chat_gateway.insert_chat(alice.id, bob.id, 1000)

        assert isinstance(result, Ok)
        chat = result.value
        assert chat.id is not None
        assert (chat.owner, chat.receiver, chat.last_activity) == (alice.id, bob.id, 1000)

    async def test_pair_is_unique_in_both_directions(self, chat_gateway, users):
        alice, bob, _ = users
        await chat_gateway.insert_chat(alice.id, bob.id, 1000)

        same = await chat_gateway.insert_chat(alice.id, bob.id, 2000)
        reversed_pair = await chat_gateway.insert_chat(bob.id, alice.id, 2000)

        for result in (same, reversed_pair):
            assert isinstance(result, StorageFailure)
            assert isinstance(result.error, ConstraintViolation)
            assert result.error.message == "You already have a chat opened with that user"

    async def test_chat_with_self_is_rejected(self, chat_gateway, users):
        alice = users[0]
        result = await chat_gateway.insert_chat(alice.id, alice.id, 1000)
        assert isinstance(result, StorageFailure)
        assert result.error.message == "You can not start a chat with yourself."

    async def test_get_by_id(self, chat_gateway, users):
        alice, bob, _ = users
        chat = (await chat_gateway.insert_chat(alice.id, bob.id, 1000)).value

        assert (await chat_gateway.get_by_id(chat.id)).value.id == chat.id
        assert await chat_gateway.get_by_id(9999) == NotFound("Chat")

    async def test_get_for_user_since_is_conjunctive(self, chat_gateway, users):
        alice, bob, carol = users
        old = (await chat_gateway.insert_chat(alice.id, bob.id, 1000)).value
        recent = (await chat_gateway.insert_chat(carol.id, alice.id, 5000)).value
        (await chat_gateway.insert_chat(bob.id, carol.id, 9000)).value

        everything = (await chat_gateway.get_for_user_since(alice.id, 0)).value
        assert {chat.id for chat in everything} == {old.id, recent.id}

        since = (await chat_gateway.get_for_user_since(alice.id, 3000)).value
        assert [chat.id for chat in since] == [recent.id]

    async def test_delete_if_participant(self, chat_gateway, users):
        alice, bob, carol = users
        chat = (await chat_gateway.insert_chat(alice.id, bob.id, 1000)).value

        assert await chat_gateway.delete_if_participant(carol.id, chat.id) == Ok(False)
        assert await chat_gateway.delete_if_participant(bob.id, chat.id) == Ok(True)
        assert await chat_gateway.delete_if_participant(bob.id, chat.id) == Ok(False)
        assert await chat_gateway.get_by_id(chat.id) == NotFound("Chat")

    async def test_pair_can_chat_again_after_delete(self, chat_gateway, users):
        alice, bob, _ = users
        chat = (await chat_gateway.insert_chat(alice.id, bob.id, 1000)).value
        await chat_gateway.delete_if_participant(alice.id, chat.id)

        assert isinstance(await chat_gateway.insert_chat(bob.id, alice.id, 2000), Ok)

    async def test_touch_only_moves_forward(self, chat_gateway, users):
        alice, bob, _ = users
        chat = (await chat_gateway.insert_chat(alice.id, bob.id, 1000)).value

        assert (await chat_gateway.touch(chat.id, 4000)).value.last_activity == 4000
        assert (await chat_gateway.touch(chat.id, 2000)).value.last_activity == 4000
        assert await chat_gateway.touch(9999, 1) == NotFound("Chat")
