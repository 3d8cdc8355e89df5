from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.warehouses.warehouse_schemas import (
    WarehouseCreate,
    WarehouseUpdate,
    WarehouseOut,
    WarehouseListData,
)
from app.services.warehouses.warehouse_service import (
    list_warehouses,
    get_warehouse,
    create_warehouse,
    update_warehouse,
    delete_warehouse,
)
from app.utils.check_roles import require_permission
from app.utils.client_context import get_scoped_client, require_client
from app.utils.response import APIResponse, success_response
from app.utils.logger import get_logger

router = APIRouter(prefix="/warehouses", tags=["Warehouses"])
logger = get_logger(__name__)


@router.get("/", response_model=APIResponse[WarehouseListData])
async def list_warehouses_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("warehouses_list")),
    client_id: Optional[int] = Depends(get_scoped_client),
    location_id: int | None = Query(None),
    search: str | None = Query(None, description="Search by name"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    sort_by: str = Query("created_at"),
    order: str = Query("desc"),
):
    data = await list_warehouses(
        db=db,
        client_id=client_id,
        location_id=location_id,
        search=search,
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        order=order,
    )
    return success_response("Warehouses fetched successfully", data)


@router.get("/{warehouse_id}", response_model=APIResponse[WarehouseOut])
async def get_warehouse_api(
    warehouse_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("warehouses_read")),
    client_id: Optional[int] = Depends(get_scoped_client),
):
    data = await get_warehouse(db, warehouse_id, client_id)
    return success_response("Warehouse fetched successfully", data)


@router.post(
    "/",
    response_model=APIResponse[WarehouseOut],
    status_code=status.HTTP_201_CREATED,
)
async def create_warehouse_api(
    payload: WarehouseCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("warehouses_create")),
    client_id: int = Depends(require_client("create a warehouse")),
):
    logger.info("Create warehouse", extra={"location_id": payload.location_id, "client_id": client_id})
    data = await create_warehouse(db, payload, client_id, user)
    return success_response("Warehouse created successfully", data)


@router.put("/{warehouse_id}", response_model=APIResponse[WarehouseOut])
async def update_warehouse_api(
    warehouse_id: int,
    payload: WarehouseUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("warehouses_update")),
    client_id: int = Depends(require_client("update a warehouse")),
):
    data = await update_warehouse(db, warehouse_id, payload, client_id, user)
    return success_response("Warehouse updated successfully", data)


@router.delete("/{warehouse_id}", response_model=APIResponse)
async def delete_warehouse_api(
    warehouse_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("warehouses_delete")),
    client_id: int = Depends(require_client("delete a warehouse")),
):
    await delete_warehouse(db, warehouse_id, client_id, user)
    return success_response("Warehouse deleted successfully")
