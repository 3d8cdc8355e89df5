from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.locations.location_schemas import (
    LocationCreate,
    LocationUpdate,
    LocationOut,
    LocationListData,
)
from app.services.locations.location_service import (
    list_locations,
    get_location,
    create_location,
    update_location,
    delete_location,
)
from app.utils.check_roles import require_permission
from app.utils.client_context import get_scoped_client, require_client
from app.utils.response import APIResponse, success_response
from app.utils.logger import get_logger

router = APIRouter(prefix="/locations", tags=["Locations"])
logger = get_logger(__name__)


@router.get("/", response_model=APIResponse[LocationListData])
async def list_locations_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("locations_list")),
    client_id: Optional[int] = Depends(get_scoped_client),
    search: str | None = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    sort_by: str = Query("created_at"),
    order: str = Query("desc"),
):
    data = await list_locations(
        db=db,
        client_id=client_id,
        search=search,
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        order=order,
    )
    return success_response("Locations fetched successfully", data)


@router.get("/{location_id}", response_model=APIResponse[LocationOut])
async def get_location_api(
    location_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("locations_read")),
    client_id: Optional[int] = Depends(get_scoped_client),
):
    data = await get_location(db, location_id, client_id)
    return success_response("Location fetched successfully", data)


@router.post(
    "/",
    response_model=APIResponse[LocationOut],
    status_code=status.HTTP_201_CREATED,
)
async def create_location_api(
    payload: LocationCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("locations_create")),
    client_id: int = Depends(require_client("create a location")),
):
    logger.info("Create location", extra={"client_id": client_id})
    data = await create_location(db, payload, client_id, user)
    return success_response("Location created successfully", data)


@router.put("/{location_id}", response_model=APIResponse[LocationOut])
async def update_location_api(
    location_id: int,
    payload: LocationUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("locations_update")),
    client_id: int = Depends(require_client("update a location")),
):
    data = await update_location(db, location_id, payload, client_id, user)
    return success_response("Location updated successfully", data)


@router.delete("/{location_id}", response_model=APIResponse)
async def delete_location_api(
    location_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("locations_delete")),
    client_id: int = Depends(require_client("delete a location")),
):
    await delete_location(db, location_id, client_id, user)
    return success_response("Location deleted successfully")
