"""Storage facade: every collection read and written through one object.

Each collection lives in the local store (always) and, when a cloud database
is configured, in a mirrored cloud table.

Reads:
    cloud reachable → its rows replace the local copy and are returned
    otherwise       → the last local copy is returned

Writes:
    the local copy is updated first; the cloud write is best-effort, a failure
    is logged and flips the status indicator to offline (never retried).

Cross-collection rules kept here:
    - a trip may not reuse another trip's order number (OS)
    - deleting a driver or staff member removes the users linked to it
    - saving staff with a password creates/updates its linked user
"""

import json
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, TypeVar

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from als.config import settings
from als.database import CloudBase
from als.middleware.exceptions import (
    CloudPersistenceError,
    DuplicateTripError,
    ValidationFailedError,
)
from als.models import (
    CategoryRow,
    CustomerRow,
    DriverRow,
    PortRow,
    PreStackingRow,
    StaffRow,
    TripRow,
    UserRow,
)
from als.repositories.base import CloudRepository
from als.repositories.driver import DriverRepository
from als.schemas.base import Record
from als.schemas.category import Category
from als.schemas.driver import Driver
from als.schemas.party import Customer, Port, PreStacking
from als.schemas.preferences import Preferences
from als.schemas.staff import Staff, User
from als.schemas.system import BackupPayload, SyncStatus
from als.schemas.trip import Trip
from als.store.local import ALL_KEYS, Keys, LocalStore
from als.utils.ids import new_id, utc_now_iso

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)


@dataclass(frozen=True)
class Collection:
    name: str
    key: str
    schema: type[Record]
    model: type[CloudBase]
    id_prefix: str


DRIVERS = Collection("drivers", Keys.DRIVERS, Driver, DriverRow, "drv")
CUSTOMERS = Collection("customers", Keys.CUSTOMERS, Customer, CustomerRow, "cust")
PORTS = Collection("ports", Keys.PORTS, Port, PortRow, "port")
PRE_STACKING = Collection("pre_stacking", Keys.PRE_STACKING, PreStacking, PreStackingRow, "ps")
STAFF = Collection("staff", Keys.STAFF, Staff, StaffRow, "stf")
USERS = Collection("users", Keys.USERS, User, UserRow, "u")
TRIPS = Collection("trips", Keys.TRIPS, Trip, TripRow, "trip")
CATEGORIES = Collection("categories", Keys.CATEGORIES, Category, CategoryRow, "cat")

COLLECTIONS: dict[str, Collection] = {
    c.name: c
    for c in (DRIVERS, CUSTOMERS, PORTS, PRE_STACKING, STAFF, USERS, TRIPS, CATEGORIES)
}

# Raw backup values must decode to these JSON types
_MAP_KEYS = {Keys.PREFERENCES}

_SCHEMA_BY_KEY: dict[str, type[Record]] = {c.key: c.schema for c in COLLECTIONS.values()}


def _same_os(a: str, b: str) -> bool:
    return a.strip().upper() == b.strip().upper()


def _check_backup_records(key: str, value: list | dict) -> None:
    """Every record of a backup key must load back into its schema."""
    try:
        if key in _MAP_KEYS:
            for user_prefs in value.values():
                Preferences.model_validate(user_prefs)
        else:
            schema = _SCHEMA_BY_KEY[key]
            for item in value:
                schema.model_validate(item)
    except ValidationError as e:
        raise ValidationFailedError(
            f"Backup value for {key} holds an invalid record: {e.error_count()} error(s)"
        ) from e


class StorageFacade:
    def __init__(
        self,
        local: LocalStore,
        sessionmaker: async_sessionmaker[AsyncSession] | None = None,
    ):
        self.local = local
        self._sessionmaker = sessionmaker
        self._repos: dict[str, CloudRepository] = {}
        if sessionmaker is not None:
            for c in COLLECTIONS.values():
                if c is DRIVERS:
                    self._repos[c.name] = DriverRepository(sessionmaker)
                else:
                    self._repos[c.name] = CloudRepository(sessionmaker, c.model, c.schema)
        self._last_error: str | None = None
        self._last_sync_at: datetime | None = None

    # ── Cloud status ────────────────────────────────────────────

    def is_cloud_active(self) -> bool:
        return self._sessionmaker is not None

    def status(self) -> SyncStatus:
        return SyncStatus(
            cloud_configured=self.is_cloud_active(),
            online=self.is_cloud_active() and self._last_error is None,
            last_error=self._last_error,
            last_sync_at=self._last_sync_at,
        )

    def _mark_online(self) -> None:
        self._last_error = None
        self._last_sync_at = datetime.now(timezone.utc)

    def _mark_offline(self, exc: Exception) -> None:
        self._last_error = str(exc)
        logger.warning(f"Cloud unavailable, continuing local-only: {exc}")

    async def _mirror(self, collection: Collection, action: str, *args: Any) -> None:
        """Best-effort cloud write; failures are logged, never raised."""
        if not self.is_cloud_active():
            return
        repo = self._repos[collection.name]
        try:
            await getattr(repo, action)(*args)
        except CloudPersistenceError as e:
            self._mark_offline(e)
        else:
            self._mark_online()

    # ── Generic collection access ───────────────────────────────

    async def _load_local(self, collection: Collection) -> list[Record]:
        raw = await self.local.get_list(collection.key)
        return [collection.schema.model_validate(item) for item in raw]

    async def _store_local(self, collection: Collection, records: list[Record]) -> None:
        await self.local.set_list(collection.key, [r.to_local() for r in records])

    async def list_records(self, collection: Collection) -> list[Record]:
        if self.is_cloud_active():
            try:
                records = await self._repos[collection.name].fetch_all()
            except CloudPersistenceError as e:
                self._mark_offline(e)
            else:
                self._mark_online()
                await self._store_local(collection, records)
                return records
        return await self._load_local(collection)

    async def save(self, collection: Collection, record: R, record_id: str | None = None) -> R:
        """Insert or overwrite the record with this id; returns it with its id."""
        record_id = record_id or record.id or new_id(collection.id_prefix)
        record = record.model_copy(update={"id": record_id})

        current = await self._load_local(collection)
        for i, existing in enumerate(current):
            if existing.id == record_id:
                current[i] = record
                break
        else:
            current.append(record)
        await self._store_local(collection, current)

        await self._mirror(collection, "upsert", record)
        return record

    async def delete(self, collection: Collection, record_id: str) -> bool:
        current = await self._load_local(collection)
        remaining = [r for r in current if r.id != record_id]
        await self._store_local(collection, remaining)
        await self._mirror(collection, "delete", record_id)
        return len(remaining) != len(current)

    async def _delete_linked_users(self, field: str, value: str) -> int:
        users = await self._load_local(USERS)
        remaining = [u for u in users if getattr(u, field) != value]
        await self._store_local(USERS, remaining)
        await self._mirror(USERS, "delete_where", field, value)
        return len(users) - len(remaining)

    # ── Drivers ─────────────────────────────────────────────────

    async def get_drivers(self) -> list[Driver]:
        return await self.list_records(DRIVERS)

    async def save_driver(self, driver: Driver, driver_id: str | None = None) -> Driver:
        return await self.save(DRIVERS, driver, driver_id)

    async def delete_driver(self, driver_id: str) -> bool:
        """Delete a driver and every user whose ``driverId`` points at it."""
        deleted = await self.delete(DRIVERS, driver_id)
        removed = await self._delete_linked_users("driver_id", driver_id)
        if removed:
            logger.info("Removed %d user(s) linked to driver %s", removed, driver_id)
        return deleted

    # ── Customers, ports, pre-stacking ─────────────────────────

    async def get_customers(self) -> list[Customer]:
        return await self.list_records(CUSTOMERS)

    async def save_customer(self, customer: Customer, customer_id: str | None = None) -> Customer:
        return await self.save(CUSTOMERS, customer, customer_id)

    async def delete_customer(self, customer_id: str) -> bool:
        return await self.delete(CUSTOMERS, customer_id)

    async def get_ports(self) -> list[Port]:
        return await self.list_records(PORTS)

    async def save_port(self, port: Port, port_id: str | None = None) -> Port:
        return await self.save(PORTS, port, port_id)

    async def delete_port(self, port_id: str) -> bool:
        return await self.delete(PORTS, port_id)

    async def get_pre_stacking(self) -> list[PreStacking]:
        return await self.list_records(PRE_STACKING)

    async def save_pre_stacking(self, yard: PreStacking, yard_id: str | None = None) -> PreStacking:
        return await self.save(PRE_STACKING, yard, yard_id)

    async def delete_pre_stacking(self, yard_id: str) -> bool:
        return await self.delete(PRE_STACKING, yard_id)

    # ── Staff & users ───────────────────────────────────────────

    async def get_staff(self) -> list[Staff]:
        return await self.list_records(STAFF)

    async def save_staff(
        self,
        staff: Staff,
        staff_id: str | None = None,
        password: str | None = None,
    ) -> Staff:
        """Save a staff member; a password also creates/updates its login user."""
        staff = await self.save(STAFF, Staff.model_validate(staff.model_dump()), staff_id)
        if password is None:
            return staff

        users = await self._load_local(USERS)
        linked = next((u for u in users if u.staff_id == staff.id), None)
        user = User(
            id=linked.id if linked else f"u-stf-{staff.id}",
            username=staff.username,
            display_name=staff.name,
            role=staff.role,
            last_login=utc_now_iso(),
            staff_id=staff.id,
            password=password,
            photo=staff.photo,
        )
        await self.save(USERS, user)
        return staff

    async def delete_staff(self, staff_id: str) -> bool:
        deleted = await self.delete(STAFF, staff_id)
        await self._delete_linked_users("staff_id", staff_id)
        return deleted

    async def get_users(self) -> list[User]:
        return await self.list_records(USERS)

    async def save_user(self, user: User, user_id: str | None = None) -> User:
        return await self.save(USERS, user, user_id)

    async def delete_user(self, user_id: str) -> bool:
        return await self.delete(USERS, user_id)

    async def update_presence(self, user_id: str, is_visible: bool) -> User | None:
        users = await self._load_local(USERS)
        user = next((u for u in users if u.id == user_id), None)
        if user is None:
            return None
        user = user.model_copy(update={"last_seen": utc_now_iso(), "is_online_visible": is_visible})
        return await self.save(USERS, user)

    # ── Categories ──────────────────────────────────────────────

    async def get_categories(self) -> list[Category]:
        return await self.list_records(CATEGORIES)

    async def save_category(self, category: Category, category_id: str | None = None) -> Category:
        return await self.save(CATEGORIES, category, category_id)

    async def delete_category(self, category_id: str) -> bool:
        return await self.delete(CATEGORIES, category_id)

    # ── Trips ───────────────────────────────────────────────────

    async def get_trips(self) -> list[Trip]:
        return await self.list_records(TRIPS)

    @staticmethod
    def find_trip_by_os(trips: list[Trip], os_number: str, exclude_id: str | None = None) -> Trip | None:
        """Linear scan for a trip with this OS (trimmed, case-insensitive)."""
        if not os_number or not os_number.strip():
            return None
        for trip in trips:
            if trip.id != exclude_id and _same_os(trip.os, os_number):
                return trip
        return None

    async def save_trip(self, trip: Trip, trip_id: str | None = None) -> Trip:
        """Save a trip, refusing an OS already used by a different trip."""
        record_id = trip_id or trip.id or None
        existing = self.find_trip_by_os(await self._load_local(TRIPS), trip.os, exclude_id=record_id)
        if existing is not None:
            raise DuplicateTripError(existing)
        return await self.save(TRIPS, trip, record_id)

    async def delete_trip(self, trip_id: str) -> bool:
        return await self.delete(TRIPS, trip_id)

    # ── UI preferences (local only) ─────────────────────────────

    async def get_preferences(self, user_id: str) -> Preferences:
        prefs = await self.local.get_map(Keys.PREFERENCES)
        return Preferences.model_validate(prefs.get(user_id) or {})

    async def save_preference(self, user_id: str, component_id: str, columns: list[str]) -> Preferences:
        prefs = await self.local.get_map(Keys.PREFERENCES)
        user_prefs = prefs.setdefault(user_id, {"visibleColumns": {}})
        user_prefs.setdefault("visibleColumns", {})[component_id] = list(columns)
        await self.local.set_map(Keys.PREFERENCES, prefs)
        return Preferences.model_validate(user_prefs)

    # ── Backup / restore ────────────────────────────────────────

    async def export_backup(self) -> BackupPayload:
        """Raw local value of every key, exactly as stored."""
        return {key: await self.local.get_raw(key) for key in ALL_KEYS}

    @staticmethod
    def backup_filename(today: date | None = None) -> str:
        today = today or date.today()
        return f"{settings.backup_prefix}_{today.isoformat()}.json"

    async def import_backup(self, payload: Any) -> list[str]:
        """Write every present key of a backup back verbatim.

        The whole payload is checked before anything is written, so a
        malformed backup leaves the store untouched.
        """
        if not isinstance(payload, dict):
            raise ValidationFailedError("Backup must be a JSON object of collection keys")

        restored: dict[str, str] = {}
        for key in ALL_KEYS:
            raw = payload.get(key)
            if not raw:
                continue
            if not isinstance(raw, str):
                raise ValidationFailedError(f"Backup value for {key} must be a JSON string")
            try:
                value = json.loads(raw)
            except json.JSONDecodeError as e:
                raise ValidationFailedError(f"Backup value for {key} is not valid JSON") from e
            expected = dict if key in _MAP_KEYS else list
            if not isinstance(value, expected):
                raise ValidationFailedError(f"Backup value for {key} must be a JSON {expected.__name__}")
            _check_backup_records(key, value)
            restored[key] = raw

        for key, raw in restored.items():
            await self.local.set_raw(key, raw)
        logger.info("Backup restored: %s", ", ".join(restored) or "nothing")
        return list(restored)
