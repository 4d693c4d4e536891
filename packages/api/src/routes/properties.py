# This project was developed with assistance from AI tools.
"""Property listing endpoints.

Browsing is open to anonymous callers, who only ever see approved listings.
The contract path is withheld from callers who may not open it.
"""

from db import Property, get_db
from db.enums import PropertyStatus, PropertyType
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from .. import schemas
from ..core import auth as guards
from ..middleware.auth import CurrentUser, OptionalUser
from ..schemas.auth import UserContext
from ..schemas.property import (
    PropertyCreate,
    PropertyFilters,
    PropertyListResponse,
    PropertyResponse,
    PropertyUpdate,
    StatusTransition,
)
from ..services import listing as listing_service
from ..services.storage import content_type_for, get_storage_service
from ._uploads import store_upload, store_uploads

router = APIRouter()


def _present(prop: Property, user: UserContext | None) -> PropertyResponse:
    response = PropertyResponse.model_validate(prop)
    if not guards.can_view_documents(user, prop):
        response.contract_document = None
    return response


def _filters(
    property_type: PropertyType | None = Query(default=None),
    state: str | None = Query(default=None),
    city: str | None = Query(default=None),
    min_price: int | None = Query(default=None, ge=0),
    max_price: int | None = Query(default=None, ge=0),
    status: PropertyStatus | None = Query(default=None),
    is_approved: bool | None = Query(default=None),
) -> PropertyFilters:
    return PropertyFilters(
        property_type=property_type,
        state=state,
        city=city,
        min_price=min_price,
        max_price=max_price,
        status=status,
        is_approved=is_approved,
    )


@router.post("", response_model=PropertyResponse, status_code=201)
async def create_property(
    user: CurrentUser,
    title: str = Form(...),
    address: str = Form(...),
    city: str = Form(...),
    state: str = Form(...),
    zip_code: str = Form(...),
    property_type: PropertyType = Form(...),
    contract_price: int = Form(...),
    arv: int = Form(...),
    repair_cost: int = Form(default=0),
    assignment_fee: int = Form(...),
    notes: str | None = Form(default=None),
    contract_document: UploadFile | None = File(default=None),
    images: list[UploadFile] | None = File(default=None),
    session: AsyncSession = Depends(get_db),
) -> PropertyResponse:
    """List a property for admin approval. Verified wholesalers only."""
    payload = PropertyCreate(
        title=title,
        address=address,
        city=city,
        state=state,
        zip_code=zip_code,
        property_type=property_type,
        contract_price=contract_price,
        arv=arv,
        repair_cost=repair_cost,
        assignment_fee=assignment_fee,
        notes=notes,
    )
    # Refuse before any file touches disk
    listing_service.check_can_list(user, payload)
    contract_path = await store_upload(contract_document, "contract_document")
    image_paths = await store_uploads(images, "images") if contract_path else []
    prop = await listing_service.create_property(session, user, payload, contract_path, image_paths)
    return _present(prop, user)


@router.get("", response_model=PropertyListResponse)
async def list_properties(
    user: OptionalUser,
    filters: PropertyFilters = Depends(_filters),
    session: AsyncSession = Depends(get_db),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=20, ge=1, le=100),
) -> PropertyListResponse:
    items, total = await listing_service.list_properties(
        session, user, filters, offset=offset, limit=limit
    )
    return PropertyListResponse(
        data=[_present(p, user) for p in items],
        pagination=schemas.Pagination(
            total=total,
            offset=offset,
            limit=limit,
            has_more=offset + limit < total,
        ),
    )


@router.get("/mine", response_model=list[PropertyResponse])
async def list_my_properties(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> list[PropertyResponse]:
    """The caller's listings, approved or not."""
    items = await listing_service.list_owner_properties(session, user)
    return [_present(p, user) for p in items]


@router.get("/{property_id}", response_model=PropertyResponse)
async def get_property(
    property_id: int,
    user: OptionalUser,
    session: AsyncSession = Depends(get_db),
) -> PropertyResponse:
    prop = await listing_service.get_property(session, user, property_id)
    return _present(prop, user)


@router.patch("/{property_id}", response_model=PropertyResponse)
async def update_property(
    property_id: int,
    patch: PropertyUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> PropertyResponse:
    prop = await listing_service.update_property(session, user, property_id, patch)
    return _present(prop, user)


@router.patch("/{property_id}/status", response_model=PropertyResponse)
async def transition_status(
    property_id: int,
    body: StatusTransition,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> PropertyResponse:
    """Mark under contract, or back to available if the contract fell through."""
    prop = await listing_service.transition_status(session, user, property_id, body.status)
    return _present(prop, user)


@router.get("/{property_id}/contract-document")
async def get_contract_document(
    property_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> Response:
    """Stream the listing's contract. Verified users, the owner and admins only."""
    path = await listing_service.get_contract_document(session, user, property_id)
    data = await get_storage_service().read(path)
    return Response(content=data, media_type=content_type_for(path))
