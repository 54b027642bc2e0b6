"""Turn a filled collection-order form into an operational trip.

Flow (POST /api/forms/collection-order):
  1. Resolve the driver, customer and destination port the form refers to
  2. Detect the operation category from the OS
  3. Refuse when a trip with the same OS exists, unless overwrite was asked
  4. Save the trip (reusing the existing id on overwrite)
  5. Link the category to the driver and the customer
"""

import logging
from typing import Any

from als.middleware.exceptions import DuplicateTripError, ResourceNotFoundError
from als.schemas.driver import Driver
from als.schemas.forms import CollectionOrderForm
from als.schemas.party import Customer, Port
from als.schemas.trip import Trip
from als.services.os_category import detect_category_from_os, sync_category_links
from als.services.storage import StorageFacade
from als.utils.ids import new_id, utc_now_iso

logger = logging.getLogger(__name__)

_TRIP_TYPES = {"EXPORTAÇÃO", "IMPORTAÇÃO", "COLETA", "ENTREGA", "CABOTAGEM"}


async def find_existing_trip(storage: StorageFacade, os_number: str) -> Trip | None:
    return storage.find_trip_by_os(await storage.get_trips(), os_number)


def map_collection_order_to_trip(
    form: CollectionOrderForm,
    driver: Driver,
    customer: Customer,
    category: str,
    destination: Port | None = None,
) -> dict[str, Any]:
    """Trip fields (camelCase) built from the form and the records it names."""
    trip_type = form.tipo_operacao if form.tipo_operacao in _TRIP_TYPES else "EXPORTAÇÃO"
    trip = {
        "os": form.os,
        "booking": form.booking,
        "ship": form.ship,
        "dateTime": form.horario_agendado or utc_now_iso(),
        "isLate": False,
        "type": trip_type,
        "category": category,
        "container": form.container,
        "tara": form.tara,
        "seal": form.seal,
        "customer": {
            "id": customer.id,
            "name": customer.name,
            "legalName": customer.legal_name,
            "cnpj": customer.cnpj,
            "city": customer.city,
            "state": customer.state,
        },
        "driver": {
            "id": driver.id,
            "name": driver.name,
            "plateHorse": driver.plate_horse,
            "plateTrailer": driver.plate_trailer,
            "status": "Pronto",
            "cpf": driver.cpf,
        },
        "status": "Pendente",
        "statusHistory": [],
        "advancePayment": {"status": "BLOQUEADO"},
        "balancePayment": {"status": "AGUARDANDO_DOCS"},
        "documents": [],
        # Kept so the form can be re-opened and edited later
        "ocFormData": form.snapshot(),
    }
    if destination is not None:
        trip["destination"] = {
            "id": destination.id,
            "name": destination.name,
            "legalName": destination.legal_name,
            "city": destination.city,
            "state": destination.state,
        }
    return trip


async def sync_trip(
    storage: StorageFacade,
    trip_data: dict[str, Any],
    existing_id: str | None = None,
) -> Trip:
    trip = Trip.model_validate({**trip_data, "id": existing_id or new_id("trip-sync")})
    return await storage.save_trip(trip)


async def submit_collection_order(
    storage: StorageFacade,
    form: CollectionOrderForm,
    overwrite: bool = False,
) -> Trip:
    driver = next((d for d in await storage.get_drivers() if d.id == form.driver_id), None)
    if driver is None:
        raise ResourceNotFoundError("Driver", form.driver_id or "<empty>")
    customer = next((c for c in await storage.get_customers() if c.id == form.remetente_id), None)
    if customer is None:
        raise ResourceNotFoundError("Customer", form.remetente_id or "<empty>")
    destination = None
    if form.destinatario_id:
        destination = next((p for p in await storage.get_ports() if p.id == form.destinatario_id), None)

    category = detect_category_from_os(form.os) or ""
    existing = await find_existing_trip(storage, form.os)
    if existing is not None and not overwrite:
        raise DuplicateTripError(existing)

    trip = await sync_trip(
        storage,
        map_collection_order_to_trip(form, driver, customer, category, destination),
        existing.id if existing else None,
    )
    logger.info(
        f"Trip {trip.id} synced from collection order",
        extra={"os": trip.os, "overwrite": existing is not None},
    )

    if category:
        await sync_category_links(storage, category, driver.id, customer.id)
    return trip

