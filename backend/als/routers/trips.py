"""Trips (operations board) router.

Endpoints:
    GET     /api/trips/                              List trips (filter by category)
    GET     /api/trips/queues                        Finance panel counters
    POST    /api/trips/                              Create a trip (409 on duplicate OS)
    PUT     /api/trips/{trip_id}                     Overwrite a trip (409 on duplicate OS)
    DELETE  /api/trips/{trip_id}                     Delete a trip
    POST    /api/trips/{trip_id}/status              Move the trip to a new status
    POST    /api/trips/{trip_id}/advance/release     Release the advance payment
    POST    /api/trips/{trip_id}/balance/release     Release the balance (?force=true)
    POST    /api/trips/{trip_id}/{which}/paid        Mark advance/balance as paid
    POST    /api/trips/{trip_id}/documents           Attach a document
"""

import logging
from typing import Literal

from fastapi import APIRouter, Depends, Query, Response

from als.deps import get_storage
from als.middleware.exceptions import ResourceNotFoundError
from als.schemas.trip import DocumentAttach, PaymentQueues, Trip, TripStatusUpdate
from als.services import payments
from als.services.storage import StorageFacade

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_trip(storage: StorageFacade, trip_id: str) -> Trip:
    trip = next((t for t in await storage.get_trips() if t.id == trip_id), None)
    if trip is None:
        raise ResourceNotFoundError("Trip", trip_id)
    return trip


# ── GET /api/trips/ ──────────────────────────────────────────

@router.get("/", response_model=list[Trip])
async def list_trips(
    category: str | None = Query(None),
    sub_category: str | None = Query(None, alias="subCategory"),
    storage: StorageFacade = Depends(get_storage),
):
    trips = await storage.get_trips()
    if category:
        trips = [t for t in trips if t.category.upper() == category.upper()]
    if sub_category:
        trips = [t for t in trips if (t.sub_category or "").upper() == sub_category.upper()]
    return trips


@router.get("/queues", response_model=PaymentQueues)
async def get_queues(storage: StorageFacade = Depends(get_storage)):
    return payments.payment_queues(await storage.get_trips())


# ── CRUD ─────────────────────────────────────────────────────

@router.post("/", response_model=Trip, status_code=201)
async def create_trip(body: Trip, storage: StorageFacade = Depends(get_storage)):
    return await storage.save_trip(body)


@router.put("/{trip_id}", response_model=Trip)
async def update_trip(trip_id: str, body: Trip, storage: StorageFacade = Depends(get_storage)):
    return await storage.save_trip(body, trip_id)


@router.delete("/{trip_id}", status_code=204)
async def delete_trip(trip_id: str, storage: StorageFacade = Depends(get_storage)):
    await storage.delete_trip(trip_id)
    return Response(status_code=204)


# ── Status & payments ────────────────────────────────────────

@router.post("/{trip_id}/status", response_model=Trip)
async def update_status(
    trip_id: str,
    body: TripStatusUpdate,
    storage: StorageFacade = Depends(get_storage),
):
    trip = await _get_trip(storage, trip_id)
    return await storage.save_trip(payments.update_status(trip, body.status, body.date_time))


@router.post("/{trip_id}/advance/release", response_model=Trip)
async def release_advance(trip_id: str, storage: StorageFacade = Depends(get_storage)):
    trip = await _get_trip(storage, trip_id)
    logger.info(f"Advance released for trip {trip_id}")
    return await storage.save_trip(payments.release_advance(trip))


@router.post("/{trip_id}/balance/release", response_model=Trip)
async def release_balance(
    trip_id: str,
    force: bool = Query(False),
    storage: StorageFacade = Depends(get_storage),
):
    trip = await _get_trip(storage, trip_id)
    updated = payments.release_balance(trip, force=force)
    logger.info(f"Balance released for trip {trip_id}", extra={"forced": force})
    return await storage.save_trip(updated)


@router.post("/{trip_id}/{which}/paid", response_model=Trip)
async def mark_paid(
    trip_id: str,
    which: Literal["advance", "balance"],
    storage: StorageFacade = Depends(get_storage),
):
    trip = await _get_trip(storage, trip_id)
    return await storage.save_trip(payments.mark_paid(trip, which))


@router.post("/{trip_id}/documents", response_model=Trip, status_code=201)
async def attach_document(
    trip_id: str,
    body: DocumentAttach,
    storage: StorageFacade = Depends(get_storage),
):
    trip = await _get_trip(storage, trip_id)
    updated = payments.attach_document(trip, body.type, body.file_name, body.url)
    return await storage.save_trip(updated)
