# pairchat/realtime/registry.py
import asyncio
import logging
import threading
from typing import Dict, Optional, Protocol


class Session(Protocol):
    user_id: int

    def push(self, frame) -> bool: ...

    async def close(self) -> None: ...


class ConnectionRegistry:
    """Maps each signed-in user to their single live session.

    The lock only guards the mapping itself; closing a session happens after
    it is released, so a slow socket never blocks other users.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self._sessions: Dict[int, Session] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def get(self, user_id: int) -> Optional[Session]:
        with self._lock:
            return self._sessions.get(user_id)

    def is_online(self, user_id: int) -> bool:
        return self.get(user_id) is not None

    async def register(self, user_id: int, session: Session) -> Session:
        with self._lock:
            previous = self._sessions.get(user_id)
            self._sessions[user_id] = session

        if previous is not None and previous is not session:
            self.logger.info(f"User {user_id} connected again, closing previous session")
            await previous.close()
        else:
            self.logger.info(f"User {user_id} connected")
        return session

    async def remove(self, user_id: int, session: Optional[Session] = None) -> None:
        with self._lock:
            current = self._sessions.get(user_id)
            if current is None or (session is not None and current is not session):
                current = None
            else:
                del self._sessions[user_id]

        if current is not None:
            self.logger.info(f"User {user_id} disconnected")
            await current.close()

    def deliver(self, user_id: int, frame) -> bool:
        session = self.get(user_id)
        if session is None:
            return False
        return session.push(frame)

    async def close_all(self) -> None:
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        if sessions:
            self.logger.info(f"Closing {len(sessions)} live sessions")
        await asyncio.gather(*(session.close() for session in sessions))
