"""Backup and restore of the local store.

Endpoints:
    GET   /api/backup/export    Download every local key as one JSON file
    POST  /api/backup/import    Upload a backup file and restore it
"""

import json
import logging

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse

from als.deps import get_storage
from als.middleware.exceptions import ValidationFailedError
from als.schemas.system import ImportResult
from als.services.storage import StorageFacade

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/export")
async def export_backup(storage: StorageFacade = Depends(get_storage)):
    payload = await storage.export_backup()
    filename = storage.backup_filename()
    logger.info(f"Backup exported as {filename}")
    return JSONResponse(
        content=payload,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/import", response_model=ImportResult)
async def import_backup(
    file: UploadFile = File(...),
    storage: StorageFacade = Depends(get_storage),
):
    raw = await file.read()
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationFailedError("Backup file is not valid JSON") from e
    restored = await storage.import_backup(payload)
    return ImportResult(restored_keys=restored)
