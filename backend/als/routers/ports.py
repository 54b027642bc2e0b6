"""Port and terminal registry router.

Endpoints:
    GET     /api/ports/             List ports
    POST    /api/ports/             Register a port
    PUT     /api/ports/{port_id}    Overwrite a port
    DELETE  /api/ports/{port_id}    Delete a port
"""

from fastapi import APIRouter, Depends, Response

from als.deps import get_storage
from als.schemas.party import Port
from als.services.storage import StorageFacade

router = APIRouter()


@router.get("/", response_model=list[Port])
async def list_ports(storage: StorageFacade = Depends(get_storage)):
    return await storage.get_ports()


@router.post("/", response_model=Port, status_code=201)
async def create_port(body: Port, storage: StorageFacade = Depends(get_storage)):
    return await storage.save_port(body)


@router.put("/{port_id}", response_model=Port)
async def update_port(port_id: str, body: Port, storage: StorageFacade = Depends(get_storage)):
    return await storage.save_port(body, port_id)


@router.delete("/{port_id}", status_code=204)
async def delete_port(port_id: str, storage: StorageFacade = Depends(get_storage)):
    await storage.delete_port(port_id)
    return Response(status_code=204)
