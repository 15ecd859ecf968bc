"""
Caller identity and role guards

Authentication happens upstream: the gateway verifies the caller's token and
forwards the user id in `settings.USER_ID_HEADER`. This module only resolves
that id to a User and enforces roles.
"""

from dependency_injector.wiring import Provide, inject
from fastapi import Depends, Request
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import AuthenticationError, ForbiddenError
from src.service.concert_booking.app.interface.i_user_repo import IUserRepo
from src.service.concert_booking.domain.entity.user_entity import User, UserRole


class RoleAuthStrategy:
    @staticmethod
    def can_manage_concerts(user: User) -> bool:
        return user.role == UserRole.ADMIN

    @staticmethod
    def can_book(user: User) -> bool:
        return user.role == UserRole.USER

    @staticmethod
    def is_user(user: User) -> bool:
        return user.role == UserRole.USER


@inject
async def get_current_user(
    request: Request,
    user_repo: IUserRepo = Depends(Provide[Container.user_repo]),
) -> User:
    user_id = request.headers.get(settings.USER_ID_HEADER)
    if not user_id:
        raise AuthenticationError('Not authenticated')

    user = await user_repo.find_by_id(user_id=user_id)
    if user is None:
        raise AuthenticationError('User not found')
    return user


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if not RoleAuthStrategy.can_manage_concerts(current_user):
        raise ForbiddenError('Only admins can perform this action')
    return current_user


async def require_user(current_user: User = Depends(get_current_user)) -> User:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_user',
        attributes={'user.id': current_user.id, 'user.role': current_user.role.value},
    ):
        if not RoleAuthStrategy.can_book(current_user):
            raise ForbiddenError('Only users can perform this action')
        return current_user


async def require_admin_or_user(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role not in (UserRole.ADMIN, UserRole.USER):
        raise ForbiddenError("You don't have permission to perform this action")
    return current_user
