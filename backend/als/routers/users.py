"""Login users router.

Endpoints:
    GET     /api/users/                      List users
    POST    /api/users/                      Create a user
    PUT     /api/users/{user_id}             Overwrite a user
    DELETE  /api/users/{user_id}             Delete a user
    POST    /api/users/{user_id}/presence    Heartbeat: last seen + online visibility
"""

from fastapi import APIRouter, Depends, Response

from als.deps import get_storage
from als.middleware.exceptions import ResourceNotFoundError
from als.schemas.staff import PresenceUpdate, User
from als.services.storage import StorageFacade

router = APIRouter()


@router.get("/", response_model=list[User])
async def list_users(storage: StorageFacade = Depends(get_storage)):
    return await storage.get_users()


@router.post("/", response_model=User, status_code=201)
async def create_user(body: User, storage: StorageFacade = Depends(get_storage)):
    return await storage.save_user(body)


@router.put("/{user_id}", response_model=User)
async def update_user(user_id: str, body: User, storage: StorageFacade = Depends(get_storage)):
    return await storage.save_user(body, user_id)


@router.delete("/{user_id}", status_code=204)
async def delete_user(user_id: str, storage: StorageFacade = Depends(get_storage)):
    await storage.delete_user(user_id)
    return Response(status_code=204)


@router.post("/{user_id}/presence", response_model=User)
async def update_presence(
    user_id: str,
    body: PresenceUpdate,
    storage: StorageFacade = Depends(get_storage),
):
    user = await storage.update_presence(user_id, body.is_visible)
    if user is None:
        raise ResourceNotFoundError("User", user_id)
    return user
