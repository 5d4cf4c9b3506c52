from fastapi import APIRouter, Depends, HTTPException, Response

from idservice.application.use_cases.local_random_identifier_source import (
    LocalRandomIdentifierSource,
)
from idservice.core.config import settings
from idservice.core.exceptions import FormatError, InvalidAllocationRequestError
from idservice.presentation.api.v1.dependencies.identifiers import (
    get_local_identifier_source,
)
from idservice.presentation.api.v1.schemas.identifiers import (
    IdentifierDescription,
    RegisterIdsRequest,
    ReserveIdsRequest,
    ReserveIdsResponse,
)
from utils.sctid_utils import describe

router = APIRouter(prefix="/identifiers")


@router.post("/reserve", response_model=ReserveIdsResponse)
def reserve_ids(
    request: ReserveIdsRequest,
    source: LocalRandomIdentifierSource = Depends(get_local_identifier_source),
):
    """Reserve new identifiers verified absent from the component store."""
    if request.quantity > settings.max_reserve_quantity:
        raise InvalidAllocationRequestError(
            f"quantity may not exceed {settings.max_reserve_quantity}", field="quantity"
        )
    ids = source.reserve_ids(request.namespace_id, request.partition_id, request.quantity)
    return ReserveIdsResponse(
        namespace_id=request.namespace_id, partition_id=request.partition_id, ids=ids
    )


@router.post("/register", status_code=204)
def register_ids(
    request: RegisterIdsRequest,
    source: LocalRandomIdentifierSource = Depends(get_local_identifier_source),
):
    source.register_ids(request.namespace, request.ids)
    return Response(status_code=204)


@router.get("/{sctid}/validate", response_model=IdentifierDescription)
def validate_identifier(sctid: int):
    """Check an identifier's check digit and split it into its parts."""
    try:
        return IdentifierDescription(**describe(sctid))
    except FormatError as e:
        raise HTTPException(
            status_code=400, detail={"error": "Invalid identifier", "details": e.message}
        )
