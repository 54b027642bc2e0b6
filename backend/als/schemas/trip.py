"""Pydantic schemas for container trips."""

from typing import Any, Literal

from pydantic import Field

from als.schemas.base import CamelModel, Record

TripStatus = Literal[
    "Pendente",
    "Retirada de vazio",
    "Retirada de cheio",
    "Chegada no cliente",
    "Nota fiscal enviada",
    "Agendamento Porto/Depot",
    "Viagem concluída",
]
TripType = Literal["EXPORTAÇÃO", "IMPORTAÇÃO", "COLETA", "ENTREGA", "CABOTAGEM"]
PaymentState = Literal["BLOQUEADO", "LIBERAR", "PAGO", "AGUARDANDO_DOCS"]
DocumentType = Literal["COMPLETO", "NF", "OC", "MINUTA"]

# Payment states that count as "released" for the finance queues
RELEASED_STATES = ("LIBERAR", "PAGO")


class StatusHistoryEntry(CamelModel):
    status: TripStatus
    date_time: str


class PaymentStatus(CamelModel):
    status: PaymentState
    liberated_at: str | None = None
    paid_date: str | None = None

    @property
    def is_released(self) -> bool:
        return self.status in RELEASED_STATES


class TripDocument(CamelModel):
    id: str
    type: DocumentType
    url: str
    file_name: str
    upload_date: str


class TripCustomer(CamelModel):
    id: str = ""
    name: str = ""
    legal_name: str | None = None
    cnpj: str | None = None
    city: str = ""
    state: str | None = None


class TripDestination(CamelModel):
    id: str = ""
    name: str = ""
    legal_name: str | None = None
    city: str = ""
    state: str | None = None


class TripDriver(CamelModel):
    id: str = ""
    name: str = ""
    plate_horse: str = ""
    plate_trailer: str = ""
    status: str = ""
    cpf: str | None = None


class Trip(Record):
    os: str = ""
    booking: str = ""
    ship: str = ""
    date_time: str = ""
    status_time: str | None = None
    is_late: bool = False
    type: TripType = "EXPORTAÇÃO"
    category: str = ""
    sub_category: str | None = None
    container: str = ""
    tara: str | None = None
    seal: str | None = None
    cva: str | None = None
    customer: TripCustomer = Field(default_factory=TripCustomer)
    destination: TripDestination | None = None
    driver: TripDriver = Field(default_factory=TripDriver)
    status: TripStatus = "Pendente"
    status_history: list[StatusHistoryEntry] = Field(default_factory=list)
    advance_payment: PaymentStatus = Field(
        default_factory=lambda: PaymentStatus(status="BLOQUEADO")
    )
    balance_payment: PaymentStatus = Field(
        default_factory=lambda: PaymentStatus(status="AGUARDANDO_DOCS")
    )
    documents: list[TripDocument] = Field(default_factory=list)
    oc_form_data: dict[str, Any] | None = None

    def has_document(self, doc_type: str) -> bool:
        return any(d.type == doc_type for d in self.documents)


class TripStatusUpdate(CamelModel):
    status: TripStatus
    date_time: str | None = None


class DocumentAttach(CamelModel):
    type: DocumentType = "COMPLETO"
    file_name: str
    url: str


class PaymentQueues(CamelModel):
    pending_advances: int
    pending_balances: int
    blocked_balances: int
