from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.orders.order_schemas import (
    OrderCreate,
    OrderUpdate,
    OrderOut,
    OrderListData,
)
from app.services.orders.order_service import (
    list_orders,
    get_order,
    create_order,
    update_order,
    delete_order,
)
from app.utils.check_roles import require_permission
from app.utils.client_context import get_scoped_client, require_client
from app.utils.response import APIResponse, success_response
from app.utils.logger import get_logger

router = APIRouter(prefix="/orders", tags=["Orders"])
logger = get_logger(__name__)


@router.get("/", response_model=APIResponse[OrderListData])
async def list_orders_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("orders_list")),
    client_id: Optional[int] = Depends(get_scoped_client),
    status_filter: str | None = Query(None, alias="status"),
    user_id: int | None = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    sort_by: str = Query("created_at"),
    order: str = Query("desc"),
):
    data = await list_orders(
        db=db,
        client_id=client_id,
        status=status_filter,
        user_id=user_id,
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        order=order,
    )
    return success_response("Orders fetched successfully", data)


@router.get("/{order_id}", response_model=APIResponse[OrderOut])
async def get_order_api(
    order_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("orders_read")),
    client_id: Optional[int] = Depends(get_scoped_client),
):
    data = await get_order(db, order_id, client_id)
    return success_response("Order fetched successfully", data)


@router.post(
    "/",
    response_model=APIResponse[OrderOut],
    status_code=status.HTTP_201_CREATED,
)
async def create_order_api(
    payload: OrderCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("orders_create")),
    client_id: int = Depends(require_client("create an order")),
):
    logger.info("Create order", extra={"client_id": client_id})
    data = await create_order(db, payload, client_id, user)
    return success_response("Order created successfully", data)


@router.put("/{order_id}", response_model=APIResponse[OrderOut])
async def update_order_api(
    order_id: int,
    payload: OrderUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("orders_update")),
    client_id: Optional[int] = Depends(get_scoped_client),
):
    data = await update_order(db, order_id, payload, client_id, user)
    return success_response("Order updated successfully", data)


@router.delete("/{order_id}", response_model=APIResponse)
async def delete_order_api(
    order_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("orders_delete")),
    client_id: Optional[int] = Depends(get_scoped_client),
):
    await delete_order(db, order_id, client_id, user)
    return success_response("Order deleted successfully")
