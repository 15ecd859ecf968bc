from abc import ABC, abstractmethod
from typing import Optional

from src.service.concert_booking.domain.entity.user_entity import User


class IUserRepo(ABC):
    @abstractmethod
    async def find_by_id(self, *, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    async def find_by_username(self, *, username: str) -> Optional[User]:
        pass

    @abstractmethod
    async def create(self, *, user: User) -> User:
        pass

    @abstractmethod
    async def update(self, *, user: User) -> User:
        """
        Overwrite username, credentials and role of an existing user.

        Raises:
            NotFoundError: No user with this id
            ConflictError: The new username is taken
        """
        pass
