# pairchat/tests/unit/test_validation.py
import pytest

from pairchat.domain.errors import ValidationError
from pairchat.interactors.validation import (
    validate_id,
    validate_message,
    validate_password,
    validate_search,
    validate_since,
    validate_username,
)


def test_search_counts_only_alphanumeric_characters():
    with pytest.raises(ValidationError) as exc_info:
        validate_search("__b__!+;'[]2")
    assert exc_info.value.message == (
        "Search query can not be less than 3 alphanumeric characters."
    )


def test_search_strips_symbols():
    assert validate_search("_a-b-c_") == "abc"


@pytest.mark.parametrize("query", ["", None, "ab", "  a b  "])
def test_search_too_short(query):
    with pytest.raises(ValidationError):
        validate_search(query)


def test_empty_message_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        validate_message("")
    assert exc_info.value.message == "Message can not be blank"


def test_whitespace_message_is_rejected():
    with pytest.raises(ValidationError):
        validate_message("   \n\t")


def test_message_length_boundary():
    assert validate_message("x" * 300) == "x" * 300
    with pytest.raises(ValidationError):
        validate_message("x" * 301)


def test_message_is_trimmed():
    assert validate_message("  hi  ") == "hi"


@pytest.mark.parametrize(
    "validator, message",
    [
        (validate_username, "Username is a required field"),
        (validate_password, "Password is a required field"),
    ],
)
@pytest.mark.parametrize("value", [None, "", "   "])
def test_credentials_are_required(validator, message, value):
    with pytest.raises(ValidationError) as exc_info:
        validator(value)
    assert exc_info.value.message == message


def test_negative_ids_are_rejected():
    assert validate_id(0) == 0
    with pytest.raises(ValidationError) as exc_info:
        validate_id(-1, "Chat")
    assert exc_info.value.message == "Chat can not be negative."
    with pytest.raises(ValidationError):
        validate_since(-5)
