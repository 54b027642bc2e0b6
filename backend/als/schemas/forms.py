"""Form payloads behind the printable documents.

Every free-text field is upper-cased on input, as the office prints all
documents in capitals. Record references (driver, sender, destination) and
dates are left untouched.
"""

from datetime import date
from typing import Any

from pydantic import Field, model_validator

from als.schemas.base import CamelModel
from als.services.carriers import lookup_carrier_by_container
from als.utils.masks import format_br_date, mask_seal

_UNTOUCHED = {"date", "driver_id", "remetente_id", "destinatario_id", "horario_agendado", "display_date"}


def _today() -> str:
    return date.today().isoformat()


def _today_br() -> str:
    return format_br_date(date.today())


class FormModel(CamelModel):
    date: str = Field(default_factory=_today)
    driver_id: str = ""
    remetente_id: str = ""
    destinatario_id: str = ""

    @model_validator(mode="after")
    def _normalize(self):
        for name in type(self).model_fields:
            value = getattr(self, name)
            if name not in _UNTOUCHED and isinstance(value, str):
                setattr(self, name, value.upper())
        self.apply_rules()
        return self

    def apply_rules(self) -> None:
        """Hook for per-form derived fields (runs after upper-casing)."""

    def fill_agency_from_container(self, container: str) -> None:
        carrier = lookup_carrier_by_container(container)
        if carrier:
            self.agencia = carrier.name

    def snapshot(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class CollectionOrderForm(FormModel):
    """Ordem de Coleta: dispatches a driver to collect a container."""

    os: str = ""
    container: str = ""
    tara: str = ""
    seal: str = ""
    genset: str = ""
    booking: str = ""
    ship: str = ""
    agencia: str = ""
    tipo: str = "40HC"
    padrao: str = "CARGA GERAL"
    tipo_operacao: str = "EXPORTAÇÃO"
    aut_coleta: str = ""
    embarcador: str = ""
    expedidor: str = ""
    horario_agendado: str = ""
    obs: str = ""
    display_date: str = Field(default_factory=_today_br)

    def apply_rules(self) -> None:
        self.fill_agency_from_container(self.container)
        self.seal = mask_seal(self.seal, self.agencia)
        if self.tipo == "40HR":
            self.padrao = "REEFER"


class PreStackingForm(FormModel):
    """Minuta de cheio: a loaded container delivered to a pre-stacking yard."""

    os: str = ""
    nf: str = ""
    container: str = ""
    tipo: str = "40HC"
    tara: str = ""
    seal: str = ""
    booking: str = ""
    aut_coleta: str = ""
    ship: str = ""
    agencia: str = ""
    display_date: str = Field(default_factory=_today_br)

    def apply_rules(self) -> None:
        self.fill_agency_from_container(self.container)
        self.seal = mask_seal(self.seal, self.agencia)


class EmptyReleaseForm(FormModel):
    """Minuta de liberação: release of empty containers to a driver."""

    booking: str = ""
    ship: str = ""
    agencia: str = ""
    pod: str = ""
    qtd_container: str = "01"
    tipo: str = "40HC"
    padrao: str = "CARGA GERAL"
    obs: str = ""
    manual_local: str = ""

    def apply_rules(self) -> None:
        if self.tipo == "40HR":
            self.padrao = "REEFER"


class EmptyReturnForm(FormModel):
    """Minuta de devolução: an empty container returned to a depot."""

    container: str = ""
    tipo: str = "40HC"
    ship: str = ""
    agencia: str = ""
    pod: str = "SANTOS"
    booking: str = ""
    manual_local: str = ""

    def apply_rules(self) -> None:
        self.fill_agency_from_container(self.container)
