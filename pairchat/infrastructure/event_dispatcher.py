# pairchat/infrastructure/event_dispatcher.py
import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable

from pairchat.domain.events import Event

Handler = Callable[[Event], Awaitable[None]]


class EventDispatcher:
    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.handlers: dict[str, list[Handler]] = defaultdict(list)
        self.logger = logger or logging.getLogger("PairChat")

    def register(self, event_type: str, handler: Handler) -> None:
        self.handlers[event_type].append(handler)

    async def dispatch(self, event: Event) -> None:
        # one failing handler neither skips the others nor fails the caller
        event_type = event.__class__.__name__
        for handler in self.handlers[event_type]:
            try:
                await handler(event)
            except Exception:
                self.logger.exception(f"Handler {handler!r} failed for {event_type}")
