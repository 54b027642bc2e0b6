"""Per-user UI preferences (visible table columns), kept in the local store only.

Endpoints:
    GET  /api/preferences/{user_id}    Preferences of a user (empty when unset)
    PUT  /api/preferences/{user_id}    Set the visible columns of one component
"""

from fastapi import APIRouter, Depends

from als.deps import get_storage
from als.schemas.preferences import ColumnPreference, Preferences
from als.services.storage import StorageFacade

router = APIRouter()


@router.get("/{user_id}", response_model=Preferences)
async def get_preferences(user_id: str, storage: StorageFacade = Depends(get_storage)):
    return await storage.get_preferences(user_id)


@router.put("/{user_id}", response_model=Preferences)
async def save_preference(
    user_id: str,
    body: ColumnPreference,
    storage: StorageFacade = Depends(get_storage),
):
    return await storage.save_preference(user_id, body.component_id, body.columns)
