"""Pydantic schemas for drivers."""

from typing import Literal

from pydantic import Field

from als.schemas.base import CamelModel, Record

DriverType = Literal["Frota", "Externo", "Motoboy"]
ActiveStatus = Literal["Ativo", "Inativo"]


class DriverOperation(CamelModel):
    category: str
    client: str


class Driver(Record):
    name: str = Field(..., max_length=255)
    cpf: str = ""
    rg: str | None = None
    cnh: str | None = None
    cnh_pdf_url: str | None = None
    photo: str | None = None
    phone: str = ""
    email: str | None = None
    plate_horse: str = ""
    year_horse: str | None = None
    plate_trailer: str = ""
    year_trailer: str | None = None
    driver_type: DriverType = "Externo"
    status: ActiveStatus = "Ativo"
    status_last_change_date: str | None = None
    beneficiary_name: str | None = None
    beneficiary_phone: str | None = None
    beneficiary_email: str | None = None
    beneficiary_cnpj: str | None = None
    payment_preference: Literal["PIX", "TED"] | None = None
    whatsapp_group_name: str | None = None
    whatsapp_group_link: str | None = None
    registration_date: str | None = None
    operations: list[DriverOperation] = Field(default_factory=list)
    trips_count: int = 0
    generated_password: str | None = None
    has_access: bool | None = None


class DriverAccessRequest(CamelModel):
    password: str | None = None


class DriverCredentials(CamelModel):
    username: str
    password: str
