from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from als.database import CloudBase


class CategoryRow(CloudBase):
    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    parent_id: Mapped[str | None] = mapped_column(String(64))
