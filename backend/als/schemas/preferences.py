"""Per-user UI preferences (visible table columns per component)."""

from pydantic import Field

from als.schemas.base import CamelModel


class Preferences(CamelModel):
    visible_columns: dict[str, list[str]] = Field(default_factory=dict)


class ColumnPreference(CamelModel):
    component_id: str
    columns: list[str]
