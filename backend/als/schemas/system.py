"""Schemas for backup/restore and the sync status indicator."""

from datetime import datetime

from als.schemas.base import CamelModel

# Local key → raw JSON string as stored (None when the key was never written)
BackupPayload = dict[str, str | None]


class SyncStatus(CamelModel):
    cloud_configured: bool
    online: bool
    last_error: str | None = None
    last_sync_at: datetime | None = None


class ImportResult(CamelModel):
    restored_keys: list[str]
