# pairchat/api/activity.py

from fastapi import APIRouter, Depends, Query

from pairchat.api.dependencies import get_activity_interactor, get_current_user
from pairchat.domain.entities import ActivityType
from pairchat.infrastructure import schemas
from pairchat.interactors.activity_interactor import ActivityInteractor

router = APIRouter()


@router.get("/getActivity", response_model=schemas.ActivitiesResponse)
async def get_activity(
    activity_type: ActivityType = Query(..., alias="activityType"),
    since: int = Query(0),
    activity_interactor: ActivityInteractor = Depends(get_activity_interactor),
    current_user: schemas.UserHead = Depends(get_current_user),
):
    activities = await activity_interactor.get_activities(
        current_user, activity_type, since
    )
    return schemas.ActivitiesResponse(activities=activities)
