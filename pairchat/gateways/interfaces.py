# pairchat/gateways/interfaces.py
from abc import ABC, abstractmethod
from typing import List

from pairchat.domain.entities import ActivityType
from pairchat.domain.results import Result
from pairchat.infrastructure.uow import UoWModel


class IUserGateway(ABC):
    @abstractmethod
    async def insert_user(self, username: str, password_hash: str) -> Result[UoWModel]:
        pass

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Result[UoWModel]:
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Result[UoWModel]:
        pass

    @abstractmethod
    async def search_by_username_substring(self, query: str) -> Result[List[UoWModel]]:
        pass

    @abstractmethod
    async def set_admin(self, user_id: int, is_admin: bool) -> Result[UoWModel]:
        pass


class IChatGateway(ABC):
    @abstractmethod
    async def insert_chat(
        self, owner: int, receiver: int, last_activity: int
    ) -> Result[UoWModel]:
        pass

    @abstractmethod
    async def get_by_id(self, chat_id: int) -> Result[UoWModel]:
        pass

    @abstractmethod
    async def get_for_user_since(self, user_id: int, since: int) -> Result[List[UoWModel]]:
        pass

    @abstractmethod
    async def delete_if_participant(self, user_id: int, chat_id: int) -> Result[bool]:
        pass

    @abstractmethod
    async def touch(self, chat_id: int, timestamp: int) -> Result[UoWModel]:
        pass


class IMessageGateway(ABC):
    @abstractmethod
    async def insert_message(
        self, sender: int, chat: int, content: str, sent_at: int
    ) -> Result[UoWModel]:
        pass

    @abstractmethod
    async def get_for_chat_since(self, chat_id: int, since: int) -> Result[List[UoWModel]]:
        pass


class IActivityGateway(ABC):
    @abstractmethod
    async def insert_activity(
        self, owner: int, activity_type: ActivityType, timestamp: int
    ) -> Result[UoWModel]:
        pass

    @abstractmethod
    async def get_by_type_since(
        self, activity_type: ActivityType, since: int
    ) -> Result[List[UoWModel]]:
        pass
