"""Operation categories (e.g. Aliança, Mercosul) and their sub-categories."""

from als.schemas.base import Record


class Category(Record):
    name: str
    parent_id: str | None = None
