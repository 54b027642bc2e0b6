"""Pydantic schemas for customers, ports and pre-stacking yards."""

from pydantic import Field

from als.schemas.base import Record


class Customer(Record):
    name: str = Field(..., max_length=255)
    legal_name: str | None = None
    cnpj: str = ""
    city: str = ""
    state: str = ""
    address: str | None = None
    neighborhood: str | None = None
    zip_code: str | None = None
    operations: list[str] = Field(default_factory=list)


class Port(Record):
    name: str = Field(..., max_length=255)
    legal_name: str | None = None
    city: str = ""
    state: str = ""
    cnpj: str = ""
    address: str = ""
    neighborhood: str | None = None
    zip_code: str | None = None


class PreStacking(Port):
    """A staging yard where loaded containers wait before port entry."""
