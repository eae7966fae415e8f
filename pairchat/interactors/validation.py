# pairchat/interactors/validation.py
"""Input checks shared by the HTTP routes and the realtime session.

Every check either returns the normalized value or raises
:class:`~pairchat.domain.errors.ValidationError` with the text shown to the
client.
"""

from pairchat.domain.entities import MAX_MESSAGE_LENGTH, MIN_SEARCH_LENGTH
from pairchat.domain.errors import ValidationError


def validate_username(username: str | None) -> str:
    if username is None or not username.strip():
        raise ValidationError("Username is a required field")
    return username


def validate_password(password: str | None) -> str:
    if password is None or not password.strip():
        raise ValidationError("Password is a required field")
    return password


def validate_message(content: str | None) -> str:
    trimmed = (content or "").strip()
    if not trimmed:
        raise ValidationError("Message can not be blank")
    if len(trimmed) > MAX_MESSAGE_LENGTH:
        raise ValidationError(
            f"Message can not be longer than {MAX_MESSAGE_LENGTH} characters."
        )
    return trimmed


def validate_search(query: str | None) -> str:
    cleaned = "".join(ch for ch in (query or "") if ch.isalnum())
    if len(cleaned) < MIN_SEARCH_LENGTH:
        raise ValidationError(
            f"Search query can not be less than {MIN_SEARCH_LENGTH} alphanumeric characters."
        )
    return cleaned


def validate_id(value: int, field: str = "Id") -> int:
    if value < 0:
        raise ValidationError(f"{field} can not be negative.")
    return value


def validate_since(since: int) -> int:
    return validate_id(since, "Since")
