"""
Cache keys for concert read models

Keys and invalidation patterns must stay in sync: every mutation of a concert
invalidates both `concert_pattern(id)` and `ALL_CONCERTS_PATTERN`.
"""

ALL_CONCERTS_KEY = 'concerts:all'
ALL_CONCERTS_PATTERN = 'concerts:*'


def concert_key(concert_id: str) -> str:
    return f'concert:{concert_id}'


def concert_pattern(concert_id: str) -> str:
    return f'concert:{concert_id}*'
