"""Office staff and the login users linked to staff members or drivers."""

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from als.database import CloudBase


class StaffRow(CloudBase):
    __tablename__ = "staff"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    username: Mapped[str] = mapped_column(String(120), nullable=False)
    role: Mapped[str] = mapped_column(String(20), default="staff")
    position: Mapped[str | None] = mapped_column(String(120))
    registration_date: Mapped[str | None] = mapped_column(String(40))
    status: Mapped[str] = mapped_column(String(20), default="Ativo")
    status_since: Mapped[str | None] = mapped_column(String(40))
    photo: Mapped[str | None] = mapped_column(Text)
    last_login: Mapped[str | None] = mapped_column(String(40))
    email_corp: Mapped[str | None] = mapped_column(String(255))
    phone_corp: Mapped[str | None] = mapped_column(String(30))


class UserRow(CloudBase):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    username: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    password: Mapped[str | None] = mapped_column(String(255))
    display_name: Mapped[str | None] = mapped_column(String(255))
    role: Mapped[str] = mapped_column(String(20), default="staff")
    last_login: Mapped[str | None] = mapped_column(String(40))
    photo: Mapped[str | None] = mapped_column(Text)
    position: Mapped[str | None] = mapped_column(String(120))
    driver_id: Mapped[str | None] = mapped_column(String(64), index=True)
    staff_id: Mapped[str | None] = mapped_column(String(64), index=True)
    status: Mapped[str | None] = mapped_column(String(20))
    is_first_login: Mapped[bool | None] = mapped_column(Boolean)
    last_seen: Mapped[str | None] = mapped_column(String(40))
    is_online_visible: Mapped[bool | None] = mapped_column(Boolean)
