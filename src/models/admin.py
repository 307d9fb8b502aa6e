from datetime import datetime

from sqlalchemy import DateTime, Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from src.admins.dtos import AdminRole
from src.config.table_names import TableNames
from src.models.base import Base, TimeStamp


class AdminUser(Base, TimeStamp):
    __tablename__ = TableNames.ADMINS.value

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        Enum(AdminRole, name="admin_role_enum", values_callable=lambda x: [e.value for e in x]),
        default=AdminRole.ADMIN,
        nullable=False,
    )
    last_login: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<AdminUser {self.email} ({self.role})>"
