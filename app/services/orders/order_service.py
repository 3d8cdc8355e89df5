from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func, asc, desc

from app.models.orders.order_models import Order
from app.schemas.orders.order_schemas import (
    OrderCreate,
    OrderUpdate,
    OrderOut,
    OrderListData,
)
from app.core.exceptions import AppException, not_found
from app.constants.error_codes import ErrorCode
from app.constants.activity_codes import ActivityCode
from app.utils.activity_helpers import emit_activity, describe_changes
from app.utils.logger import get_logger

logger = get_logger(__name__)

ALLOWED_SORT_FIELDS = {
    "id": Order.id,
    "status": Order.status,
    "total": Order.total,
    "created_at": Order.created_at,
}


async def _get_order_for_client(
    db: AsyncSession,
    order_id: int,
    client_id: Optional[int],
) -> Order:
    stmt = select(Order).where(Order.id == order_id)
    if client_id is not None:
        stmt = stmt.where(Order.client_id == client_id)

    order = await db.scalar(stmt)
    if not order:
        raise not_found("Order not found", ErrorCode.ORDER_NOT_FOUND)
    return order


# =========================
# LIST ORDERS
# =========================
async def list_orders(
    *,
    db: AsyncSession,
    client_id: Optional[int],
    status: str | None,
    user_id: int | None,
    page: int,
    page_size: int,
    sort_by: str,
    order: str,
) -> OrderListData:
    filters = []
    if client_id is not None:
        filters.append(Order.client_id == client_id)
    if status:
        filters.append(Order.status == status)
    if user_id:
        filters.append(Order.user_id == user_id)

    sort_col = ALLOWED_SORT_FIELDS.get(sort_by)
    if sort_col is None:
        raise AppException(400, "Invalid sort field", ErrorCode.VALIDATION_ERROR)

    order_by = desc(sort_col) if order == "desc" else asc(sort_col)

    total = await db.scalar(
        select(func.count()).select_from(select(Order.id).where(*filters).subquery())
    )
    rows = (
        await db.execute(
            select(Order)
            .where(*filters)
            .order_by(order_by, Order.id)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
    ).scalars().all()

    return OrderListData(
        total=total or 0,
        items=[OrderOut.model_validate(o) for o in rows],
    )


# =========================
# GET ORDER
# =========================
async def get_order(db: AsyncSession, order_id: int, client_id: Optional[int]):
    order = await _get_order_for_client(db, order_id, client_id)
    return OrderOut.model_validate(order)


# =========================
# CREATE ORDER
# =========================
async def create_order(db: AsyncSession, payload: OrderCreate, client_id: int, user):
    order = Order(
        user_id=user.id,
        client_id=client_id,
        status=payload.status,
        total=payload.total,
    )
    db.add(order)
    await db.flush()

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.CREATE_ORDER,
        client_id=client_id,
        target_id=order.id,
    )

    await db.commit()
    await db.refresh(order)

    logger.info("Order created", extra={"order_id": order.id, "client_id": client_id})
    return OrderOut.model_validate(order)


# =========================
# UPDATE ORDER
# =========================
async def update_order(
    db: AsyncSession,
    order_id: int,
    payload: OrderUpdate,
    client_id: Optional[int],
    user,
):
    order = await _get_order_for_client(db, order_id, client_id)

    values = payload.model_dump(exclude_unset=True, exclude_none=True)
    if not values:
        raise AppException(400, "No changes provided", ErrorCode.VALIDATION_ERROR)

    for field, value in values.items():
        setattr(order, field, value)

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.UPDATE_ORDER,
        client_id=order.client_id,
        target_id=order.id,
        changes=describe_changes(values),
    )

    await db.commit()
    await db.refresh(order)
    return OrderOut.model_validate(order)


# =========================
# DELETE ORDER
# =========================
async def delete_order(
    db: AsyncSession,
    order_id: int,
    client_id: Optional[int],
    user,
):
    order = await _get_order_for_client(db, order_id, client_id)
    owner = order.client_id

    await db.execute(delete(Order).where(Order.id == order.id))

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.DELETE_ORDER,
        client_id=owner,
        target_id=order_id,
    )

    await db.commit()
    logger.info("Order deleted", extra={"order_id": order_id})
