"""Trip: one container movement identified by its order number (OS).

Nested parts of the record (driver/customer snapshots, payment states,
documents, status history, the collection-order form) are stored as JSON columns.
"""

from sqlalchemy import JSON, Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from als.database import CloudBase


class TripRow(CloudBase):
    __tablename__ = "trips"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    os: Mapped[str] = mapped_column(String(64), default="", index=True)
    booking: Mapped[str | None] = mapped_column(String(64))
    ship: Mapped[str | None] = mapped_column(String(120))
    date_time: Mapped[str | None] = mapped_column(String(40))
    status_time: Mapped[str | None] = mapped_column(String(40))
    is_late: Mapped[bool] = mapped_column(Boolean, default=False)
    type: Mapped[str] = mapped_column(String(20), default="EXPORTAÇÃO")
    category: Mapped[str | None] = mapped_column(String(120))
    sub_category: Mapped[str | None] = mapped_column(String(120))
    container: Mapped[str | None] = mapped_column(String(20))
    tara: Mapped[str | None] = mapped_column(String(20))
    seal: Mapped[str | None] = mapped_column(String(30))
    cva: Mapped[str | None] = mapped_column(String(64))
    customer: Mapped[dict] = mapped_column(JSON, default=dict)
    destination: Mapped[dict | None] = mapped_column(JSON)
    driver: Mapped[dict] = mapped_column(JSON, default=dict)
    status: Mapped[str] = mapped_column(String(40), default="Pendente")
    status_history: Mapped[list] = mapped_column(JSON, default=list)
    advance_payment: Mapped[dict] = mapped_column(JSON, default=dict)
    balance_payment: Mapped[dict] = mapped_column(JSON, default=dict)
    documents: Mapped[list] = mapped_column(JSON, default=list)
    oc_form_data: Mapped[dict | None] = mapped_column(JSON)
