"""
UTC-aware DateTime column type.

PostgreSQL `timestamptz` hands back aware datetimes, but SQLite (used by the
integration tests) stores timestamps as text and returns them naive. Entities
assume aware UTC everywhere, so this type normalises both directions:

- bind: aware values are converted to UTC, naive values are taken as UTC
- result: naive values get `tzinfo=UTC`

## Usage

```python
created_at: Mapped[datetime] = mapped_column(UtcDateTime(), nullable=False)
```
"""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator


class UtcDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect: Any) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value: Optional[datetime], dialect: Any) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
