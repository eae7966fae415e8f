# pairchat/interactors/user_interactor.py

from pairchat.domain.entities import ActivityType, current_millis
from pairchat.domain.errors import AuthorizationError, ValidationError
from pairchat.domain.results import NotFound
from pairchat.gateways.interfaces import IActivityGateway, IUserGateway
from pairchat.gateways.user_gateway import USERNAME_IN_USE
from pairchat.infrastructure import schemas
from pairchat.infrastructure.security import SecurityService
from pairchat.interactors.validation import (
    validate_password,
    validate_search,
    validate_username,
)

NOT_LOGGED_IN = "You must be logged in to access this."


class UserInteractor:
    def __init__(
        self,
        security_service: SecurityService,
        user_gateway: IUserGateway,
        activity_gateway: IActivityGateway,
    ):
        self.security_service = security_service
        self.user_gateway = user_gateway
        self.activity_gateway = activity_gateway

    async def register(self, username: str | None, password: str | None) -> str:
        username = validate_username(username)
        password = validate_password(password)
        password_hash = self.security_service.get_password_hash(password)
        user = (await self.user_gateway.insert_user(username, password_hash)).unwrap(
            conflict=USERNAME_IN_USE
        )
        token, _ = self.security_service.create_access_token(user.id)
        return token

    async def login(
        self, username: str | None, password: str | None
    ) -> tuple[str, schemas.Activity]:
        username = validate_username(username)
        password = validate_password(password)
        user = (await self.user_gateway.get_by_username(username)).unwrap(
            not_found="Invalid username"
        )
        if not self.security_service.verify_password(password, user.password):
            raise ValidationError("Invalid password")

        activity = (
            await self.activity_gateway.insert_activity(
                user.id, ActivityType.USER_LOGGED_IN, current_millis()
            )
        ).unwrap()
        token, _ = self.security_service.create_access_token(user.id)
        return token, schemas.Activity.model_validate(activity._model)

    async def authenticate(self, token: str | None) -> schemas.UserHead:
        user_id = self.security_service.decode_access_token(token) if token else None
        if user_id is None:
            raise AuthorizationError(NOT_LOGGED_IN)
        result = await self.user_gateway.get_by_id(user_id)
        if isinstance(result, NotFound):
            raise AuthorizationError(NOT_LOGGED_IN)
        user = result.unwrap()
        return schemas.UserHead.model_validate(user._model)

    async def search_users(self, query: str | None) -> list[schemas.UserHead]:
        query = validate_search(query)
        users = (await self.user_gateway.search_by_username_substring(query)).unwrap()
        return [schemas.UserHead.model_validate(user._model) for user in users]
