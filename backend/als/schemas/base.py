"""Shared base for every record schema.

Field names are snake_case in Python (and in the cloud tables); the local
store and the HTTP API speak camelCase through the alias generator.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_local(self) -> dict:
        """camelCase JSON-safe dict, the shape kept in the local store."""
        return self.model_dump(by_alias=True, mode="json")


class Record(CamelModel):
    """A flat record addressed by a string id assigned at creation time."""

    id: str = ""
