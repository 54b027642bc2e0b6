"""Driver registry router.

Endpoints:
    GET     /api/drivers/                 List drivers
    POST    /api/drivers/                 Register a driver
    PUT     /api/drivers/{driver_id}      Overwrite a driver
    DELETE  /api/drivers/{driver_id}      Delete a driver and its login user
    POST    /api/drivers/{driver_id}/access   Grant access (create/refresh user)
    PUT     /api/drivers/{driver_id}/access   Change the driver's password
"""

from fastapi import APIRouter, Depends, Response

from als.deps import get_storage
from als.middleware.exceptions import ResourceNotFoundError, ValidationFailedError
from als.schemas.driver import Driver, DriverAccessRequest, DriverCredentials
from als.services.driver_access import sync_user_record, update_driver_password
from als.services.storage import StorageFacade

router = APIRouter()


async def _get_driver(storage: StorageFacade, driver_id: str) -> Driver:
    driver = next((d for d in await storage.get_drivers() if d.id == driver_id), None)
    if driver is None:
        raise ResourceNotFoundError("Driver", driver_id)
    return driver


@router.get("/", response_model=list[Driver])
async def list_drivers(storage: StorageFacade = Depends(get_storage)):
    return await storage.get_drivers()


@router.post("/", response_model=Driver, status_code=201)
async def create_driver(body: Driver, storage: StorageFacade = Depends(get_storage)):
    return await storage.save_driver(body)


@router.put("/{driver_id}", response_model=Driver)
async def update_driver(
    driver_id: str,
    body: Driver,
    storage: StorageFacade = Depends(get_storage),
):
    return await storage.save_driver(body, driver_id)


@router.delete("/{driver_id}", status_code=204)
async def delete_driver(driver_id: str, storage: StorageFacade = Depends(get_storage)):
    await storage.delete_driver(driver_id)
    return Response(status_code=204)


# ── Access ───────────────────────────────────────────────────

@router.post("/{driver_id}/access", response_model=DriverCredentials)
async def grant_access(
    driver_id: str,
    body: DriverAccessRequest | None = None,
    storage: StorageFacade = Depends(get_storage),
):
    """Create or refresh the driver's user; default password unless one is given."""
    driver = await _get_driver(storage, driver_id)
    credentials = await sync_user_record(
        storage, driver_id, driver, body.password if body else None
    )
    await storage.save_driver(
        driver.model_copy(update={"has_access": True, "generated_password": credentials.password})
    )
    return credentials


@router.put("/{driver_id}/access", response_model=DriverCredentials)
async def change_password(
    driver_id: str,
    body: DriverAccessRequest,
    storage: StorageFacade = Depends(get_storage),
):
    if not body.password:
        raise ValidationFailedError("A new password is required")
    driver = await _get_driver(storage, driver_id)
    if not await update_driver_password(storage, driver_id, body.password):
        raise ResourceNotFoundError("Driver user", driver_id)
    await storage.save_driver(driver.model_copy(update={"generated_password": body.password}))
    username = next(u.username for u in await storage.get_users() if u.driver_id == driver_id)
    return DriverCredentials(username=username, password=body.password)
