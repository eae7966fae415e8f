# pairchat/interactors/activity_interactor.py

from pairchat.domain.entities import ActivityType
from pairchat.domain.errors import AuthorizationError
from pairchat.gateways.interfaces import IActivityGateway
from pairchat.infrastructure import schemas
from pairchat.interactors.validation import validate_since

ADMIN_ONLY = "You must be an administrator to access this."


class ActivityInteractor:
    def __init__(self, activity_gateway: IActivityGateway):
        self.activity_gateway = activity_gateway

    async def get_activities(
        self, requester: schemas.UserHead, activity_type: ActivityType, since: int = 0
    ) -> list[schemas.Activity]:
        if not requester.is_admin:
            raise AuthorizationError(ADMIN_ONLY)
        activities = (
            await self.activity_gateway.get_by_type_since(
                activity_type, validate_since(since)
            )
        ).unwrap()
        return [
            schemas.Activity.model_validate(activity._model) for activity in activities
        ]
