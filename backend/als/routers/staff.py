"""Staff router.

Endpoints:
    GET     /api/staff/               List staff members
    POST    /api/staff/               Register a staff member (optional password)
    PUT     /api/staff/{staff_id}     Overwrite a staff member (optional password)
    DELETE  /api/staff/{staff_id}     Delete a staff member and its login user

A password in the body creates or updates the member's login user.
"""

from fastapi import APIRouter, Depends, Response

from als.deps import get_storage
from als.schemas.staff import Staff, StaffSave
from als.services.storage import StorageFacade

router = APIRouter()


@router.get("/", response_model=list[Staff])
async def list_staff(storage: StorageFacade = Depends(get_storage)):
    return await storage.get_staff()


@router.post("/", response_model=Staff, status_code=201)
async def create_staff(body: StaffSave, storage: StorageFacade = Depends(get_storage)):
    return await storage.save_staff(body, password=body.password)


@router.put("/{staff_id}", response_model=Staff)
async def update_staff(
    staff_id: str,
    body: StaffSave,
    storage: StorageFacade = Depends(get_storage),
):
    return await storage.save_staff(body, staff_id, password=body.password)


@router.delete("/{staff_id}", status_code=204)
async def delete_staff(staff_id: str, storage: StorageFacade = Depends(get_storage)):
    await storage.delete_staff(staff_id)
    return Response(status_code=204)
