from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.warehouses.exclusion_schemas import (
    ExclusionCreate,
    ExclusionUpdate,
    ExclusionOut,
    ExclusionListData,
    ExclusionCheckData,
)
from app.services.warehouses.exclusion_service import (
    list_exclusions,
    get_exclusion,
    create_exclusion,
    update_exclusion,
    delete_exclusion,
    check_slot,
)
from app.utils.check_roles import require_permission
from app.utils.client_context import get_scoped_client
from app.utils.response import APIResponse, success_response
from app.utils.logger import get_logger

router = APIRouter(prefix="/warehouse-exclusions", tags=["Warehouse Exclusions"])
logger = get_logger(__name__)


@router.get(
    "/warehouse/{warehouse_id}",
    response_model=APIResponse[ExclusionListData],
)
async def list_exclusions_api(
    warehouse_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("warehouse_exclusions_list")),
    client_id: Optional[int] = Depends(get_scoped_client),
):
    data = await list_exclusions(db, warehouse_id, client_id)
    return success_response("Warehouse exclusions fetched successfully", data)


@router.get(
    "/warehouse/{warehouse_id}/check",
    response_model=APIResponse[ExclusionCheckData],
)
async def check_slot_api(
    warehouse_id: int,
    aisle: Optional[str] = Query(None),
    bay: Optional[str] = Query(None),
    level: Optional[str] = Query(None),
    bin_: Optional[str] = Query(None, alias="bin"),
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("warehouse_exclusions_check")),
    client_id: Optional[int] = Depends(get_scoped_client),
):
    coordinate = {"aisle": aisle, "bay": bay, "level": level, "bin": bin_}
    data = await check_slot(db, warehouse_id, coordinate, client_id)
    return success_response("Slot checked", data)


@router.get("/{exclusion_id}", response_model=APIResponse[ExclusionOut])
async def get_exclusion_api(
    exclusion_id: int,
    warehouse_id: int = Query(..., alias="warehouseId"),
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("warehouse_exclusions_read")),
    client_id: Optional[int] = Depends(get_scoped_client),
):
    data = await get_exclusion(db, exclusion_id, warehouse_id, client_id)
    return success_response("Warehouse exclusion fetched successfully", data)


@router.post(
    "/",
    response_model=APIResponse[ExclusionOut],
    status_code=status.HTTP_201_CREATED,
)
async def create_exclusion_api(
    payload: ExclusionCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("warehouse_exclusions_create")),
    client_id: Optional[int] = Depends(get_scoped_client),
):
    logger.info("Create exclusion", extra={"warehouse_id": payload.warehouse_id})
    data = await create_exclusion(db, payload, client_id, user)
    return success_response("Warehouse exclusion created successfully", data)


@router.put("/{exclusion_id}", response_model=APIResponse[ExclusionOut])
async def update_exclusion_api(
    exclusion_id: int,
    payload: ExclusionUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("warehouse_exclusions_update")),
    client_id: Optional[int] = Depends(get_scoped_client),
):
    logger.info(
        "Update exclusion",
        extra={"exclusion_id": exclusion_id, "warehouse_id": payload.warehouse_id},
    )
    data = await update_exclusion(db, exclusion_id, payload, client_id, user)
    return success_response("Warehouse exclusion updated successfully", data)


@router.delete("/{exclusion_id}", response_model=APIResponse)
async def delete_exclusion_api(
    exclusion_id: int,
    warehouse_id: int = Query(..., alias="warehouseId"),
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("warehouse_exclusions_delete")),
    client_id: Optional[int] = Depends(get_scoped_client),
):
    await delete_exclusion(db, exclusion_id, warehouse_id, client_id, user)
    return success_response("Warehouse exclusion deleted successfully")
