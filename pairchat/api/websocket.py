# pairchat/api/websocket.py

from fastapi import APIRouter, WebSocket, status

from pairchat.domain.errors import AuthorizationError
from pairchat.gateways.activity_gateway import ActivityGateway
from pairchat.gateways.user_gateway import UserGateway
from pairchat.infrastructure.uow import UnitOfWork
from pairchat.interactors.user_interactor import NOT_LOGGED_IN, UserInteractor
from pairchat.realtime.session import ConnectionSession
from pairchat.realtime.transport import WebSocketTransport

router = APIRouter()


def extract_token(websocket: WebSocket) -> str | None:
    authorization = websocket.headers.get("authorization")
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials:
            return credentials.strip()
    return websocket.query_params.get("token")


@router.websocket("/ws")
async def dashboard_socket(websocket: WebSocket):
    state = websocket.app.state
    try:
        async with state.database.transaction() as session:
            uow = UnitOfWork()
            user_interactor = UserInteractor(
                state.security_service,
                UserGateway(session, uow),
                ActivityGateway(session, uow),
            )
            user = await user_interactor.authenticate(extract_token(websocket))
    except AuthorizationError:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason=NOT_LOGGED_IN)
        return

    await websocket.accept()
    connection = ConnectionSession(
        user.id,
        WebSocketTransport(websocket),
        state.realtime_handlers,
        state.registry,
        state.logger,
        queue_size=state.config.OUTBOUND_QUEUE_SIZE,
        send_timeout=state.config.SEND_TIMEOUT_SECONDS,
    )
    await state.registry.register(user.id, connection)
    await connection.run()
