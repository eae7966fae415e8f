# pairchat/infrastructure/seed.py
import logging

from pairchat.domain.results import NotFound
from pairchat.gateways.user_gateway import UserGateway
from pairchat.infrastructure.database import Database
from pairchat.infrastructure.uow import UnitOfWork


async def init_admin_user(
    database: Database, security_service, username: str, password: str, logger: logging.Logger
) -> int:
    """Make sure ``username`` exists and is an administrator; returns its id."""
    async with database.transaction() as session:
        user_gateway = UserGateway(session, UnitOfWork())
        result = await user_gateway.get_by_username(username)
        if isinstance(result, NotFound):
            user = (
                await user_gateway.insert_user(
                    username, security_service.get_password_hash(password)
                )
            ).unwrap()
            logger.info(f"Created admin user {username}")
        else:
            user = result.unwrap()
        if not user.is_admin:
            (await user_gateway.set_admin(user.id, True)).unwrap()
            logger.info(f"Granted admin rights to {username}")
        return user.id
