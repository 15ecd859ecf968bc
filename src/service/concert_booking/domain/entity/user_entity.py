from datetime import datetime, timezone
from enum import Enum
from typing import Optional

import attrs
import uuid_utils


class UserRole(str, Enum):
    ADMIN = 'ADMIN'
    USER = 'USER'


@attrs.frozen
class User:
    id: str
    username: str
    password_hash: str = attrs.field(repr=False)  # Opaque, owned by the auth service
    salt: str = attrs.field(repr=False)
    role: UserRole = UserRole.USER
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls, *, username: str, password_hash: str, salt: str, role: UserRole = UserRole.USER
    ) -> 'User':
        now = datetime.now(timezone.utc)
        return cls(
            id=str(uuid_utils.uuid7()),
            username=username,
            password_hash=password_hash,
            salt=salt,
            role=role,
            created_at=now,
            updated_at=now,
        )

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
