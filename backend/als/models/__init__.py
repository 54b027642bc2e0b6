"""Cloud tables, one per local collection.

Imported as a whole so CloudBase.metadata knows every table (Alembic,
create_cloud_tables).
"""

from als.models.driver import DriverRow
from als.models.party import CustomerRow, PortRow, PreStackingRow
from als.models.staff import StaffRow, UserRow
from als.models.trip import TripRow
from als.models.category import CategoryRow

__all__ = [
    "DriverRow",
    "CustomerRow", "PortRow", "PreStackingRow",
    "StaffRow", "UserRow",
    "TripRow",
    "CategoryRow",
]
