#!/usr/bin/env python3
"""
Seed Data Script
Populate the database with demo accounts and concerts

Features:
1. Create tables if they do not exist
2. Create one ADMIN and one USER account
3. Create the demo concerts

Notes:
- Safe to re-run: existing concert names are skipped; an existing account only
  gets its role restored if it has drifted
- Passwords are owned by the upstream auth service; the stored hash is a placeholder
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
import secrets

import attrs

from src.platform.config.di import container
from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine
from src.platform.logging.loguru_io import Logger
from src.service.concert_booking.domain.entity.user_entity import User, UserRole


@dataclass(frozen=True)
class UserConfig:
    username: str
    role: UserRole


@dataclass(frozen=True)
class ConcertConfig:
    name: str
    description: str
    total_seats: int


SEED_USERS = [
    UserConfig(username='admin', role=UserRole.ADMIN),
    UserConfig(username='user', role=UserRole.USER),
]

SEED_CONCERTS = [
    ConcertConfig(
        name='Taylor Swift Concert',
        description='The Eras Tour live in Bangkok',
        total_seats=3000,
    ),
    ConcertConfig(
        name='ลำไย ไหทองคำ',
        description='คอนเสิร์ตหมอลำ ลำไย ไหทองคำ',
        total_seats=1000,
    ),
    ConcertConfig(
        name='หมอลำซิ่ง',
        description='หมอลำซิ่ง มันส์ทั้งคืน',
        total_seats=500,
    ),
]


async def create_users() -> int:
    user_repo = container.user_repo()
    created = 0

    for config in SEED_USERS:
        existing = await user_repo.find_by_username(username=config.username)
        if existing is not None:
            if existing.role != config.role:
                await user_repo.update(
                    user=attrs.evolve(
                        existing, role=config.role, updated_at=datetime.now(timezone.utc)
                    )
                )
                Logger.base.info(f'   🔁 Restored {config.username} to {config.role.value}')
            else:
                Logger.base.info(f'   ⏭️  User {config.username} already exists')
            continue

        salt = secrets.token_hex(16)
        user = await user_repo.create(
            user=User.create(
                username=config.username,
                password_hash=secrets.token_hex(32),
                salt=salt,
                role=config.role,
            )
        )
        Logger.base.info(f'   ✅ Created {user.role.value}: ID={user.id}, Username={user.username}')
        created += 1

    return created


async def create_concerts() -> int:
    concert_repo = container.concert_repo()
    create_concert = container.create_concert_use_case()

    existing_names = {concert.name for concert in await concert_repo.find_all()}
    created = 0

    for config in SEED_CONCERTS:
        if config.name in existing_names:
            Logger.base.info(f'   ⏭️  Concert "{config.name}" already exists')
            continue

        concert = await create_concert.execute(
            name=config.name,
            description=config.description,
            total_seats=config.total_seats,
        )
        Logger.base.info(
            f'   ✅ Created concert: ID={concert.id}, Name={concert.name}, '
            f'Seats={concert.total_seats:,}'
        )
        created += 1

    return created


async def main() -> None:
    Logger.base.info('🌱 Starting data seeding...')

    try:
        await create_db_and_tables()

        Logger.base.info(f'👥 Creating {len(SEED_USERS)} users...')
        users_created = await create_users()

        Logger.base.info(f'🎫 Creating {len(SEED_CONCERTS)} concerts...')
        concerts_created = await create_concerts()

        Logger.base.info(
            f'✅ Seeding completed: {users_created} users, {concerts_created} concerts created'
        )
    finally:
        await dispose_engine()


if __name__ == '__main__':
    asyncio.run(main())
