"""Driver repository: camelCase driver record ↔ snake_case ``drivers`` table.

Writes normalise the record the way the office expects it in the cloud:
names in capitals, e-mails in lower case, empty optional fields as NULL and
the registration/status dates stamped when missing.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from als.models.driver import DriverRow
from als.repositories.base import CloudRepository
from als.schemas.driver import Driver
from als.utils.ids import utc_now_iso


def _upper(value: str | None) -> str | None:
    return value.upper() if value else None


def _lower(value: str | None) -> str | None:
    return value.lower() if value else None


def map_to_db(driver: Driver, now: str | None = None) -> dict[str, Any]:
    now = now or utc_now_iso()
    return {
        "id": driver.id,
        "photo": driver.photo or None,
        "name": (driver.name or "").upper(),
        "cpf": driver.cpf or "",
        "rg": driver.rg or None,
        "cnh": driver.cnh or None,
        "cnh_pdf_url": driver.cnh_pdf_url or None,
        "phone": driver.phone or None,
        "email": _lower(driver.email),
        "plate_horse": driver.plate_horse or None,
        "year_horse": driver.year_horse or None,
        "plate_trailer": driver.plate_trailer or None,
        "year_trailer": driver.year_trailer or None,
        "driver_type": driver.driver_type or "Externo",
        "status": driver.status or "Ativo",
        "status_last_change_date": driver.status_last_change_date or now,
        "beneficiary_name": _upper(driver.beneficiary_name),
        "beneficiary_phone": driver.beneficiary_phone or None,
        "beneficiary_email": _lower(driver.beneficiary_email),
        "beneficiary_cnpj": driver.beneficiary_cnpj or None,
        "payment_preference": driver.payment_preference or "PIX",
        "whatsapp_group_name": _upper(driver.whatsapp_group_name),
        "whatsapp_group_link": driver.whatsapp_group_link or None,
        "registration_date": driver.registration_date or now,
        "operations": [op.model_dump() for op in driver.operations],
        "trips_count": driver.trips_count or 0,
        "generated_password": driver.generated_password or None,
    }


def map_from_db(row: dict[str, Any]) -> Driver:
    return Driver(
        id=row["id"],
        photo=row.get("photo"),
        name=row.get("name") or "",
        cpf=row.get("cpf") or "",
        rg=row.get("rg"),
        cnh=row.get("cnh"),
        cnh_pdf_url=row.get("cnh_pdf_url"),
        phone=row.get("phone") or "",
        email=row.get("email"),
        plate_horse=row.get("plate_horse") or "",
        year_horse=row.get("year_horse"),
        plate_trailer=row.get("plate_trailer") or "",
        year_trailer=row.get("year_trailer"),
        driver_type=row.get("driver_type") or "Externo",
        status=row.get("status") or "Ativo",
        status_last_change_date=row.get("status_last_change_date"),
        beneficiary_name=row.get("beneficiary_name"),
        beneficiary_phone=row.get("beneficiary_phone"),
        beneficiary_email=row.get("beneficiary_email"),
        beneficiary_cnpj=row.get("beneficiary_cnpj"),
        payment_preference=row.get("payment_preference"),
        whatsapp_group_name=row.get("whatsapp_group_name"),
        whatsapp_group_link=row.get("whatsapp_group_link"),
        registration_date=row.get("registration_date"),
        operations=row.get("operations") or [],
        trips_count=row.get("trips_count") or 0,
        generated_password=row.get("generated_password"),
    )


class DriverRepository(CloudRepository[Driver]):
    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]):
        super().__init__(sessionmaker, DriverRow, Driver)

    def to_row(self, record: Driver) -> dict[str, Any]:
        return map_to_db(record)

    def from_row(self, row: DriverRow) -> Driver:
        return map_from_db({c: getattr(row, c) for c in self.columns})
