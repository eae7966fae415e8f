# pairchat/gateways/activity_gateway.py

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pairchat.domain.entities import ActivityType
from pairchat.domain.results import storage_result
from pairchat.gateways.interfaces import IActivityGateway
from pairchat.infrastructure import models
from pairchat.infrastructure.data_mappers import ActivityMapper
from pairchat.infrastructure.uow import UnitOfWork, UoWModel


class ActivityGateway(IActivityGateway):
    def __init__(self, session: AsyncSession, uow: UnitOfWork):
        self.session = session
        self.uow = uow
        uow.mappers[models.Activity] = ActivityMapper(session)

    @storage_result
    async def insert_activity(
        self, owner: int, activity_type: ActivityType, timestamp: int
    ):
        activity = self.uow.register_new(
            models.Activity(owner=owner, type=activity_type.value, timestamp=timestamp)
        )
        await self.uow.commit()
        return activity

    @storage_result
    async def get_by_type_since(self, activity_type: ActivityType, since: int):
        stmt = (
            select(models.Activity)
            .filter(
                models.Activity.type == activity_type.value,
                models.Activity.timestamp >= since,
            )
            .order_by(models.Activity.timestamp, models.Activity.id)
        )
        result = await self.session.execute(stmt)
        return [UoWModel(activity, self.uow) for activity in result.scalars().all()]
