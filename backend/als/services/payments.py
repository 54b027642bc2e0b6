"""Trip status and the driver payment workflow.

Each trip carries two payments:

  advance  BLOQUEADO → LIBERAR → PAGO
  balance  AGUARDANDO_DOCS → LIBERAR → PAGO

The balance is only released after the advance, and only once the full
document set (``COMPLETO``) is attached unless finance forces it.

All functions return a new Trip; persisting it is left to the caller.
"""

from typing import Literal

from als.middleware.exceptions import ValidationFailedError
from als.schemas.trip import (
    PaymentQueues,
    PaymentStatus,
    StatusHistoryEntry,
    Trip,
    TripDocument,
)
from als.utils.ids import new_id, utc_now_iso

PaymentKind = Literal["advance", "balance"]

_FIELDS = {"advance": "advance_payment", "balance": "balance_payment"}


def release_advance(trip: Trip, now: str | None = None) -> Trip:
    advance = PaymentStatus(status="LIBERAR", liberated_at=now or utc_now_iso())
    return trip.model_copy(update={"advance_payment": advance})


def release_balance(trip: Trip, now: str | None = None, force: bool = False) -> Trip:
    if not trip.advance_payment.is_released:
        raise ValidationFailedError(
            "Balance cannot be released before the advance",
            error_code="ADVANCE_NOT_RELEASED",
        )
    if not trip.has_document("COMPLETO") and not force:
        raise ValidationFailedError(
            "Complete document set missing; release with force to override",
            error_code="DOCUMENTS_MISSING",
        )
    balance = PaymentStatus(status="LIBERAR", liberated_at=now or utc_now_iso())
    return trip.model_copy(update={"balance_payment": balance})


def mark_paid(trip: Trip, which: PaymentKind, paid_date: str | None = None) -> Trip:
    field = _FIELDS.get(which)
    if field is None:
        raise ValidationFailedError(f"Unknown payment: {which}")
    current: PaymentStatus = getattr(trip, field)
    paid = current.model_copy(update={"status": "PAGO", "paid_date": paid_date or utc_now_iso()})
    return trip.model_copy(update={field: paid})


def attach_document(
    trip: Trip,
    doc_type: str,
    file_name: str,
    url: str,
    now: str | None = None,
) -> Trip:
    document = TripDocument(
        id=new_id("doc"),
        type=doc_type,
        url=url,
        file_name=file_name,
        upload_date=now or utc_now_iso(),
    )
    return trip.model_copy(update={"documents": [*trip.documents, document]})


def update_status(trip: Trip, status: str, when: str | None = None) -> Trip:
    when = when or utc_now_iso()
    history = [*trip.status_history, StatusHistoryEntry(status=status, date_time=when)]
    return trip.model_copy(
        update={"status": status, "status_time": when, "status_history": history}
    )


def payment_queues(trips: list[Trip]) -> PaymentQueues:
    """Counters shown on the finance panel."""
    pending_advances = sum(1 for t in trips if not t.advance_payment.is_released)
    advanced = [t for t in trips if t.advance_payment.is_released]
    pending_balances = sum(1 for t in advanced if not t.balance_payment.is_released)
    blocked_balances = sum(1 for t in advanced if not t.has_document("COMPLETO"))
    return PaymentQueues(
        pending_advances=pending_advances,
        pending_balances=pending_balances,
        blocked_balances=blocked_balances,
    )
