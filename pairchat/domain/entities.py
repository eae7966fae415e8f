# pairchat/domain/entities.py
import time
from enum import Enum

MAX_MESSAGE_LENGTH = 300
MIN_SEARCH_LENGTH = 3


class ActivityType(str, Enum):
    USER_LOGGED_IN = "USER_LOGGED_IN"
    MESSAGE_SENT = "MESSAGE_SENT"


def current_millis() -> int:
    return int(time.time() * 1000)


def pair_key(first_user_id: int, second_user_id: int) -> str:
    """Order-independent key of a two-user chat.

    ``pair_key(1, 2) == pair_key(2, 1)``; the chats table carries a unique
    index on it so the same two users can never hold two chats.
    """
    low, high = sorted((first_user_id, second_user_id))
    return f"{low}:{high}"
