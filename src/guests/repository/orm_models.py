from datetime import datetime
from uuid import UUID

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy_utils import UUIDType

from src.config.table_names import TableNames
from src.models.base import Base, TimeStamp


class Guest(Base, TimeStamp):
    __tablename__ = TableNames.GUESTS.value

    invitation_code: Mapped[str] = mapped_column(String(8), nullable=False, unique=True, index=True)
    primary_guest: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    household_members: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    max_party_size: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    # Contact
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Mailing address
    street: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str | None] = mapped_column(String(255), nullable=True)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    zip: Mapped[str | None] = mapped_column(String(20), nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True, default="USA")

    def __repr__(self) -> str:
        return f"<Guest {self.primary_guest} ({self.invitation_code})>"


class RSVP(Base):
    __tablename__ = TableNames.RSVPS.value

    # unique: at most one RSVP per guest, enforced by the database
    guest_id: Mapped[UUID] = mapped_column(
        UUIDType(binary=False),
        ForeignKey(f"{TableNames.GUESTS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    attending: Mapped[bool] = mapped_column(Boolean, nullable=False)
    party_size: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # [{"name": ..., "meal": ...}, ...]
    attendees: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)
    dietary_restrictions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    special_requests: Mapped[str | None] = mapped_column(Text, nullable=True)

    submitted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(512), nullable=True)

    def __repr__(self) -> str:
        return f"<RSVP {self.uuid} guest={self.guest_id} attending={self.attending}>"
