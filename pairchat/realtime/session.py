# pairchat/realtime/session.py
import asyncio
import logging
from enum import Enum

from pairchat.domain.errors import TransportError
from pairchat.realtime.protocol import encode_frame


class SessionState(str, Enum):
    ACTIVE = "ACTIVE"
    CLOSED = "CLOSED"


class ConnectionSession:
    """One accepted websocket of one user.

    ``run`` drives two tasks: the receive loop answers requests strictly in
    arrival order, the send loop drains the bounded outbound queue. Both
    stop as soon as either of them fails or the session is closed, after
    which the session leaves the registry and closes its transport.
    """

    def __init__(
        self,
        user_id: int,
        transport,
        handlers,
        registry,
        logger: logging.Logger,
        queue_size: int = 64,
        send_timeout: float = 5.0,
    ):
        self.user_id = user_id
        self.transport = transport
        self.handlers = handlers
        self.registry = registry
        self.logger = logger
        self.send_timeout = send_timeout
        self.state = SessionState.ACTIVE
        self._outbound: asyncio.Queue = asyncio.Queue(maxsize=queue_size)
        self._closed = asyncio.Event()

    @property
    def closed(self) -> bool:
        return self.state is SessionState.CLOSED

    def push(self, frame) -> bool:
        """Queue a notification without waiting; full queues drop it."""
        if self.closed:
            return False
        try:
            self._outbound.put_nowait(frame)
        except asyncio.QueueFull:
            self.logger.warning(
                f"Outbound queue of user {self.user_id} is full, dropping {type(frame).__name__}"
            )
            return False
        return True

    async def run(self) -> None:
        tasks = [
            asyncio.create_task(self._receive_loop()),
            asyncio.create_task(self._send_loop()),
            asyncio.create_task(self._closed.wait()),
        ]
        try:
            await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in tasks:
                task.cancel()
            # registry entry and state are dropped before the first suspension,
            # so even a cancelled run leaves nothing behind
            await self.registry.remove(self.user_id, self)
            await self.close()
            results = await asyncio.gather(*tasks, return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    self.logger.error(
                        f"Session of user {self.user_id} failed", exc_info=result
                    )

    async def close(self) -> None:
        if self.closed:
            return
        self.state = SessionState.CLOSED
        self._closed.set()
        await self.transport.close()

    async def _receive_loop(self) -> None:
        while True:
            try:
                raw = await self.transport.receive()
            except TransportError as e:
                self.logger.info(f"Receive failed for user {self.user_id}: {e}")
                return
            response = await self.handlers.handle(self.user_id, raw)
            await self._outbound.put(response)

    async def _send_loop(self) -> None:
        while True:
            frame = await self._outbound.get()
            try:
                await asyncio.wait_for(
                    self.transport.send(encode_frame(frame)), self.send_timeout
                )
            except TransportError as e:
                self.logger.info(f"Send failed for user {self.user_id}: {e}")
                return
            except asyncio.TimeoutError:
                self.logger.warning(
                    f"Send to user {self.user_id} timed out after {self.send_timeout}s"
                )
                return
