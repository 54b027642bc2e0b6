"""Pre-stacking yard registry router.

Endpoints:
    GET     /api/pre-stacking/              List yards
    POST    /api/pre-stacking/              Register a yard
    PUT     /api/pre-stacking/{yard_id}     Overwrite a yard
    DELETE  /api/pre-stacking/{yard_id}     Delete a yard
"""

from fastapi import APIRouter, Depends, Response

from als.deps import get_storage
from als.schemas.party import PreStacking
from als.services.storage import StorageFacade

router = APIRouter()


@router.get("/", response_model=list[PreStacking])
async def list_yards(storage: StorageFacade = Depends(get_storage)):
    return await storage.get_pre_stacking()


@router.post("/", response_model=PreStacking, status_code=201)
async def create_yard(body: PreStacking, storage: StorageFacade = Depends(get_storage)):
    return await storage.save_pre_stacking(body)


@router.put("/{yard_id}", response_model=PreStacking)
async def update_yard(
    yard_id: str,
    body: PreStacking,
    storage: StorageFacade = Depends(get_storage),
):
    return await storage.save_pre_stacking(body, yard_id)


@router.delete("/{yard_id}", status_code=204)
async def delete_yard(yard_id: str, storage: StorageFacade = Depends(get_storage)):
    await storage.delete_pre_stacking(yard_id)
    return Response(status_code=204)
