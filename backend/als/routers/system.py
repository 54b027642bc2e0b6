"""System status router: the cloud sync indicator shown in the header.

Endpoints:
    GET  /api/system/status    Cloud configured / online, last error, last sync
"""

from fastapi import APIRouter, Depends

from als.deps import get_storage
from als.schemas.system import SyncStatus
from als.services.storage import StorageFacade

router = APIRouter()


@router.get("/status", response_model=SyncStatus)
async def get_status(storage: StorageFacade = Depends(get_storage)):
    return storage.status()
