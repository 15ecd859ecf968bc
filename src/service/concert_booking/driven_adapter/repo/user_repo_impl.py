from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.concert_booking.app.interface.i_user_repo import IUserRepo
from src.service.concert_booking.domain.entity.user_entity import User, UserRole
from src.service.concert_booking.driven_adapter.model.user_model import UserModel
from src.service.concert_booking.driven_adapter.repo.session_scope import SessionScopedRepo


class UserRepoImpl(SessionScopedRepo, IUserRepo):
    @staticmethod
    def _to_entity(db_user: UserModel) -> User:
        return User(
            id=db_user.id,
            username=db_user.username,
            password_hash=db_user.password_hash,
            salt=db_user.salt,
            role=UserRole(db_user.role),
            created_at=db_user.created_at,
            updated_at=db_user.updated_at,
        )

    @Logger.io
    async def find_by_id(self, *, user_id: str) -> Optional[User]:
        async with self._get_session() as session:
            db_user = await session.get(UserModel, user_id)
            return self._to_entity(db_user) if db_user else None

    @Logger.io
    async def find_by_username(self, *, username: str) -> Optional[User]:
        async with self._get_session() as session:
            result = await session.execute(select(UserModel).where(UserModel.username == username))
            db_user = result.scalar_one_or_none()
            return self._to_entity(db_user) if db_user else None

    @Logger.io
    async def create(self, *, user: User) -> User:
        async with self._get_session() as session:
            db_user = UserModel(
                id=user.id,
                username=user.username,
                password_hash=user.password_hash,
                salt=user.salt,
                role=user.role.value,
            )
            if user.created_at is not None:
                db_user.created_at = user.created_at
                db_user.updated_at = user.updated_at or user.created_at
            session.add(db_user)
            try:
                await session.flush()
            except IntegrityError as e:
                raise ConflictError(f'Username {user.username} already exists') from e
            await session.refresh(db_user)
            return self._to_entity(db_user)

    @Logger.io
    async def update(self, *, user: User) -> User:
        async with self._get_session() as session:
            db_user = await session.get(UserModel, user.id)
            if db_user is None:
                raise NotFoundError('User not found')

            db_user.username = user.username
            db_user.password_hash = user.password_hash
            db_user.salt = user.salt
            db_user.role = user.role.value
            db_user.updated_at = user.updated_at or datetime.now(timezone.utc)
            try:
                await session.flush()
            except IntegrityError as e:
                raise ConflictError(f'Username {user.username} already exists') from e
            return self._to_entity(db_user)
