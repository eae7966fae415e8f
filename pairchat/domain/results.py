# pairchat/domain/results.py
import functools
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, TypeVar, Union

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from pairchat.domain.errors import (
    ApplicationError,
    ConstraintViolation,
    NotFoundError,
    UnknownStorageError,
)

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def unwrap(self, not_found: str | None = None, conflict: str | None = None) -> T:
        return self.value


@dataclass(frozen=True)
class NotFound:
    entity: str

    def unwrap(self, not_found: str | None = None, conflict: str | None = None):
        raise NotFoundError(not_found or f"{self.entity} not found")


@dataclass(frozen=True)
class StorageFailure:
    error: ApplicationError

    def unwrap(self, not_found: str | None = None, conflict: str | None = None):
        if conflict and isinstance(self.error, ConstraintViolation):
            raise ConstraintViolation(conflict) from self.error
        raise self.error


Result = Union[Ok[T], NotFound, StorageFailure]


def storage_result(
    func: Callable[..., Awaitable[Any]],
) -> Callable[..., Awaitable[Result]]:
    """Wrap a gateway coroutine so that it always returns a ``Result``.

    Plain return values become ``Ok``; results returned explicitly pass
    through untouched. SQLAlchemy errors never escape: integrity errors turn
    into a ``ConstraintViolation`` failure and everything else into an
    ``UnknownStorageError`` carrying the original exception.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> Result:
        try:
            value = await func(*args, **kwargs)
        except IntegrityError as e:
            return StorageFailure(ConstraintViolation(cause=e))
        except SQLAlchemyError as e:
            return StorageFailure(UnknownStorageError(e))
        if isinstance(value, (Ok, NotFound, StorageFailure)):
            return value
        return Ok(value)

    return wrapper
