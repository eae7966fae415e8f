# pairchat/api/auth.py

from fastapi import APIRouter, BackgroundTasks, Depends, status

from pairchat.api.dependencies import get_event_dispatcher, get_user_interactor
from pairchat.domain.events import ActivityRecorded
from pairchat.infrastructure import schemas
from pairchat.infrastructure.event_dispatcher import EventDispatcher
from pairchat.interactors.user_interactor import UserInteractor

router = APIRouter()


@router.post(
    "/register",
    response_model=schemas.AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    credentials: schemas.AuthRequest,
    user_interactor: UserInteractor = Depends(get_user_interactor),
):
    token = await user_interactor.register(credentials.username, credentials.password)
    return schemas.AuthResponse(access_token=token)


@router.post("/login", response_model=schemas.AuthResponse)
async def login(
    credentials: schemas.AuthRequest,
    background_tasks: BackgroundTasks,
    user_interactor: UserInteractor = Depends(get_user_interactor),
    event_dispatcher: EventDispatcher = Depends(get_event_dispatcher),
):
    token, activity = await user_interactor.login(
        credentials.username, credentials.password
    )
    # background tasks run once the request transaction has committed
    background_tasks.add_task(
        event_dispatcher.dispatch,
        ActivityRecorded(
            activity_id=activity.id,
            owner_id=activity.owner,
            type=activity.type,
            timestamp=activity.timestamp,
        ),
    )
    return schemas.AuthResponse(access_token=token)
