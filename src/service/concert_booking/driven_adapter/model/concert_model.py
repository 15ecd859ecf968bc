from datetime import datetime
from typing import Optional

from sqlalchemy import Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base
from src.platform.types.utc_datetime_type import UtcDateTime


class ConcertModel(Base):
    __tablename__ = 'concerts'

    id: Mapped[str] = mapped_column(String(36), primary_key=True)  # UUID7
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    total_seats: Mapped[int] = mapped_column(Integer, nullable=False)
    reserved_seats: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        UtcDateTime(), server_default=func.now(), nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        UtcDateTime(), server_default=func.now(), nullable=False
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(UtcDateTime(), nullable=True)

    def __repr__(self):
        return f'<ConcertModel(id={self.id}, name={self.name}, reserved={self.reserved_seats}/{self.total_seats})>'
