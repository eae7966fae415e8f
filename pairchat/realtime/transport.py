# pairchat/realtime/transport.py
from starlette.websockets import WebSocket, WebSocketDisconnect, WebSocketState

from pairchat.domain.errors import TransportError

SERVER_CLOSE_REASON = "Server requested to close this socket."


class WebSocketTransport:
    """Adapts a Starlette websocket to the text-frame interface a session uses.

    Every way the socket can fail surfaces as :class:`TransportError`.
    """

    def __init__(self, websocket: WebSocket):
        self.websocket = websocket

    async def receive(self) -> str:
        try:
            message = await self.websocket.receive()
        except (WebSocketDisconnect, RuntimeError) as e:
            raise TransportError(str(e)) from e
        if message["type"] == "websocket.disconnect":
            raise TransportError(f"Client disconnected ({message.get('code')})")
        if message.get("text") is not None:
            return message["text"]
        if message.get("bytes") is not None:
            return message["bytes"].decode("utf-8", errors="replace")
        raise TransportError(f"Unexpected websocket message {message['type']}")

    async def send(self, text: str) -> None:
        try:
            await self.websocket.send_text(text)
        except (WebSocketDisconnect, RuntimeError, OSError) as e:
            raise TransportError(str(e)) from e

    async def close(self, code: int = 1000, reason: str = SERVER_CLOSE_REASON) -> None:
        if (
            self.websocket.client_state != WebSocketState.CONNECTED
            or self.websocket.application_state != WebSocketState.CONNECTED
        ):
            return
        try:
            await self.websocket.close(code=code, reason=reason)
        except (RuntimeError, OSError):
            # the peer went away between the state check and the close frame
            pass
