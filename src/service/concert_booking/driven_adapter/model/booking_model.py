from datetime import datetime

from sqlalchemy import ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base
from src.platform.types.utc_datetime_type import UtcDateTime


class BookingModel(Base):
    __tablename__ = 'bookings'
    __table_args__ = (
        UniqueConstraint('concert_id', 'user_id', name='uq_bookings_concert_id_user_id'),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)  # UUID7
    concert_id: Mapped[str] = mapped_column(
        String(36), ForeignKey('concerts.id'), nullable=False, index=True
    )
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey('users.id'), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(String(20), default='RESERVED', nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        UtcDateTime(), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        UtcDateTime(), server_default=func.now(), nullable=False
    )
