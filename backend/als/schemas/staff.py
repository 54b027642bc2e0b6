"""Pydantic schemas for staff members and login users."""

from typing import Literal

from als.schemas.base import CamelModel, Record
from als.schemas.driver import ActiveStatus

UserRole = Literal["admin", "staff", "driver", "motoboy"]


class Staff(Record):
    name: str
    username: str
    role: Literal["admin", "staff"] = "staff"
    position: str = ""
    registration_date: str = ""
    status: ActiveStatus = "Ativo"
    status_since: str = ""
    photo: str | None = None
    last_login: str | None = None
    email_corp: str | None = None
    phone_corp: str | None = None


class StaffSave(Staff):
    """Staff payload; a password creates or updates the linked user."""

    password: str | None = None


class User(Record):
    username: str
    password: str | None = None
    display_name: str = ""
    role: UserRole = "staff"
    last_login: str = ""
    photo: str | None = None
    position: str | None = None
    driver_id: str | None = None
    staff_id: str | None = None
    status: ActiveStatus | None = None
    is_first_login: bool | None = None
    last_seen: str | None = None
    is_online_visible: bool | None = None


class PresenceUpdate(CamelModel):
    is_visible: bool
