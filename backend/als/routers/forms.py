"""Forms router: collection-order trip sync and printable PDFs.

Endpoints:
    POST  /api/forms/collection-order             Create/update the trip for an OS
    POST  /api/forms/collection-order/pdf         Ordem de Coleta PDF
    POST  /api/forms/pre-stacking/pdf             Minuta de cheio PDF
    POST  /api/forms/empty-release/pdf            Minuta de liberação de vazio PDF
    POST  /api/forms/empty-return/pdf             Minuta de devolução de vazio PDF

A collection order whose OS already has a trip answers 409 with the existing
trip in ``error.details.existing``; resend with ``?overwrite=true`` to update it.
"""

from urllib.parse import quote

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from als.deps import get_storage
from als.schemas.forms import (
    CollectionOrderForm,
    EmptyReleaseForm,
    EmptyReturnForm,
    PreStackingForm,
)
from als.schemas.trip import Trip
from als.services import documents
from als.services.storage import StorageFacade
from als.services.trip_sync import submit_collection_order

router = APIRouter()


def _pdf_response(doc: documents.RenderedDocument) -> Response:
    # RFC 5987 encoding keeps accented file names intact
    disposition = f"attachment; filename*=UTF-8''{quote(doc.filename)}"
    return Response(
        content=doc.content,
        media_type=doc.media_type,
        headers={"Content-Disposition": disposition},
    )


@router.post("/collection-order", response_model=Trip)
async def sync_collection_order(
    body: CollectionOrderForm,
    overwrite: bool = Query(False),
    storage: StorageFacade = Depends(get_storage),
):
    return await submit_collection_order(storage, body, overwrite=overwrite)


@router.post("/collection-order/pdf")
async def collection_order_pdf(
    body: CollectionOrderForm,
    storage: StorageFacade = Depends(get_storage),
):
    parties = await documents.resolve_parties(storage, body)
    return _pdf_response(documents.render_collection_order(body, parties))


@router.post("/pre-stacking/pdf")
async def pre_stacking_pdf(body: PreStackingForm, storage: StorageFacade = Depends(get_storage)):
    parties = await documents.resolve_parties(storage, body)
    return _pdf_response(documents.render_pre_stacking(body, parties))


@router.post("/empty-release/pdf")
async def empty_release_pdf(body: EmptyReleaseForm, storage: StorageFacade = Depends(get_storage)):
    parties = await documents.resolve_parties(storage, body)
    return _pdf_response(documents.render_empty_release(body, parties))


@router.post("/empty-return/pdf")
async def empty_return_pdf(body: EmptyReturnForm, storage: StorageFacade = Depends(get_storage)):
    parties = await documents.resolve_parties(storage, body)
    return _pdf_response(documents.render_empty_return(body, parties))
