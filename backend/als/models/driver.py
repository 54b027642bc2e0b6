"""Driver: a truck driver (fleet or external) or a motorcycle courier."""

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from als.database import CloudBase


class DriverRow(CloudBase):
    __tablename__ = "drivers"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    photo: Mapped[str | None] = mapped_column(Text)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    cpf: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    rg: Mapped[str | None] = mapped_column(String(20))
    cnh: Mapped[str | None] = mapped_column(String(20))
    cnh_pdf_url: Mapped[str | None] = mapped_column(Text)
    phone: Mapped[str | None] = mapped_column(String(30))
    email: Mapped[str | None] = mapped_column(String(255))
    plate_horse: Mapped[str | None] = mapped_column(String(10))
    year_horse: Mapped[str | None] = mapped_column(String(10))
    plate_trailer: Mapped[str | None] = mapped_column(String(10))
    year_trailer: Mapped[str | None] = mapped_column(String(10))
    driver_type: Mapped[str] = mapped_column(String(20), default="Externo")
    status: Mapped[str] = mapped_column(String(20), default="Ativo")
    status_last_change_date: Mapped[str | None] = mapped_column(String(40))
    beneficiary_name: Mapped[str | None] = mapped_column(String(255))
    beneficiary_phone: Mapped[str | None] = mapped_column(String(30))
    beneficiary_email: Mapped[str | None] = mapped_column(String(255))
    beneficiary_cnpj: Mapped[str | None] = mapped_column(String(20))
    payment_preference: Mapped[str | None] = mapped_column(String(10), default="PIX")
    whatsapp_group_name: Mapped[str | None] = mapped_column(String(255))
    whatsapp_group_link: Mapped[str | None] = mapped_column(Text)
    registration_date: Mapped[str | None] = mapped_column(String(40))
    operations: Mapped[list] = mapped_column(JSON, default=list)
    trips_count: Mapped[int] = mapped_column(Integer, default=0)
    generated_password: Mapped[str | None] = mapped_column(String(255))
