"""Customer registry router.

Endpoints:
    GET     /api/customers/                 List customers
    POST    /api/customers/                 Register a customer (operations pre-filled from the name)
    PUT     /api/customers/{customer_id}    Overwrite a customer
    DELETE  /api/customers/{customer_id}    Delete a customer
"""

from fastapi import APIRouter, Depends, Response

from als.deps import get_storage
from als.schemas.party import Customer
from als.services.carriers import suggest_operations
from als.services.storage import StorageFacade

router = APIRouter()


@router.get("/", response_model=list[Customer])
async def list_customers(storage: StorageFacade = Depends(get_storage)):
    return await storage.get_customers()


@router.post("/", response_model=Customer, status_code=201)
async def create_customer(body: Customer, storage: StorageFacade = Depends(get_storage)):
    operations = suggest_operations(body.name, body.operations)
    return await storage.save_customer(body.model_copy(update={"operations": operations}))


@router.put("/{customer_id}", response_model=Customer)
async def update_customer(
    customer_id: str,
    body: Customer,
    storage: StorageFacade = Depends(get_storage),
):
    return await storage.save_customer(body, customer_id)


@router.delete("/{customer_id}", status_code=204)
async def delete_customer(customer_id: str, storage: StorageFacade = Depends(get_storage)):
    await storage.delete_customer(customer_id)
    return Response(status_code=204)
