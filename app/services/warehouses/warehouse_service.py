from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, asc, desc, delete

from app.models.locations.location_models import Location
from app.models.warehouses.warehouse_models import Warehouse, WarehouseExclusion
from app.schemas.warehouses.warehouse_schemas import (
    WarehouseCreate,
    WarehouseUpdate,
    WarehouseOut,
    WarehouseListData,
)
from app.core.exceptions import AppException, not_found
from app.constants.error_codes import ErrorCode
from app.constants.activity_codes import ActivityCode
from app.utils.activity_helpers import emit_activity, describe_changes
from app.utils.logger import get_logger

logger = get_logger(__name__)

ALLOWED_SORT_FIELDS = {
    "id": Warehouse.id,
    "name": Warehouse.name,
    "created_at": Warehouse.created_at,
}


# =====================================================
# MAPPER
# =====================================================
def _map_warehouse(wh: Warehouse) -> WarehouseOut:
    return WarehouseOut(
        id=wh.id,
        name=wh.name,
        location_id=wh.location_id,
        aisle_type=wh.aisle_type,
        aisle_count=wh.aisle_count,
        bay_type=wh.bay_type,
        bay_count=wh.bay_count,
        level_type=wh.level_type,
        level_count=wh.level_count,
        bin_type=wh.bin_type,
        bin_count=wh.bin_count,
        created_by=wh.created_by_id,
        updated_by=wh.updated_by_id,
        created_at=wh.created_at,
        updated_at=wh.updated_at,
    )


# =====================================================
# TENANT SCOPING
# =====================================================
def _scoped(stmt, client_id: Optional[int]):
    """Restrict a Warehouse query to the client that owns the warehouse's location."""
    if client_id is None:
        return stmt
    return stmt.join(Location, Location.id == Warehouse.location_id).where(
        Location.client_id == client_id
    )


async def get_warehouse_for_client(
    db: AsyncSession,
    warehouse_id: int,
    client_id: Optional[int],
) -> Warehouse:
    stmt = _scoped(select(Warehouse).where(Warehouse.id == warehouse_id), client_id)
    warehouse = (await db.execute(stmt)).scalars().first()
    if not warehouse:
        raise not_found("Warehouse not found", ErrorCode.WAREHOUSE_NOT_FOUND)
    return warehouse


async def _ensure_location_owned(db: AsyncSession, location_id: int, client_id: int):
    owned = await db.scalar(
        select(Location.id).where(
            Location.id == location_id,
            Location.client_id == client_id,
        )
    )
    if not owned:
        logger.warning(
            "Location not owned by client",
            extra={"location_id": location_id, "client_id": client_id},
        )
        raise not_found(
            "Location not found for the selected client",
            ErrorCode.LOCATION_NOT_FOUND,
        )


# =====================================================
# LIST WAREHOUSES
# =====================================================
async def list_warehouses(
    *,
    db: AsyncSession,
    client_id: Optional[int],
    location_id: int | None,
    search: str | None,
    page: int,
    page_size: int,
    sort_by: str,
    order: str,
) -> WarehouseListData:
    filters = []
    if location_id:
        filters.append(Warehouse.location_id == location_id)
    if search:
        filters.append(Warehouse.name.ilike(f"%{search}%"))

    sort_col = ALLOWED_SORT_FIELDS.get(sort_by)
    if sort_col is None:
        raise AppException(400, "Invalid sort field", ErrorCode.VALIDATION_ERROR)

    order_by = desc(sort_col) if order == "desc" else asc(sort_col)

    count_stmt = _scoped(select(Warehouse.id), client_id).where(*filters)
    total = await db.scalar(select(func.count()).select_from(count_stmt.subquery()))

    data_stmt = (
        _scoped(select(Warehouse), client_id)
        .where(*filters)
        .order_by(order_by, Warehouse.id)
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    rows = (await db.execute(data_stmt)).scalars().all()

    return WarehouseListData(total=total or 0, items=[_map_warehouse(w) for w in rows])


# =====================================================
# GET WAREHOUSE
# =====================================================
async def get_warehouse(db: AsyncSession, warehouse_id: int, client_id: Optional[int]):
    warehouse = await get_warehouse_for_client(db, warehouse_id, client_id)
    return _map_warehouse(warehouse)


# =====================================================
# CREATE WAREHOUSE
# =====================================================
async def create_warehouse(
    db: AsyncSession,
    payload: WarehouseCreate,
    client_id: int,
    user,
):
    # nothing is written unless the location belongs to the caller's client
    await _ensure_location_owned(db, payload.location_id, client_id)

    warehouse = Warehouse(
        **payload.model_dump(),
        created_by_id=user.id,
        updated_by_id=user.id,
    )
    db.add(warehouse)
    await db.flush()

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.CREATE_WAREHOUSE,
        client_id=client_id,
        target_name=warehouse.name,
    )

    await db.commit()
    await db.refresh(warehouse)

    logger.info(
        "Warehouse created",
        extra={"warehouse_id": warehouse.id, "location_id": warehouse.location_id},
    )
    return _map_warehouse(warehouse)


# =====================================================
# UPDATE WAREHOUSE
# =====================================================
async def update_warehouse(
    db: AsyncSession,
    warehouse_id: int,
    payload: WarehouseUpdate,
    client_id: int,
    user,
):
    warehouse = await get_warehouse_for_client(db, warehouse_id, client_id)

    values = payload.model_dump(exclude_unset=True)
    if values.get("name") is None:
        values.pop("name", None)
    if values.get("location_id") is None:
        values.pop("location_id", None)

    if not values:
        raise AppException(400, "No changes provided", ErrorCode.VALIDATION_ERROR)

    if "location_id" in values and values["location_id"] != warehouse.location_id:
        await _ensure_location_owned(db, values["location_id"], client_id)

    for field, value in values.items():
        setattr(warehouse, field, value)
    warehouse.updated_by_id = user.id

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.UPDATE_WAREHOUSE,
        client_id=client_id,
        target_name=warehouse.name,
        changes=describe_changes(payload.model_dump(mode="json", include=set(values))),
    )

    await db.commit()
    await db.refresh(warehouse)
    return _map_warehouse(warehouse)


# =====================================================
# DELETE WAREHOUSE
# =====================================================
async def delete_warehouse(
    db: AsyncSession,
    warehouse_id: int,
    client_id: int,
    user,
):
    warehouse = await get_warehouse_for_client(db, warehouse_id, client_id)
    name = warehouse.name

    # exclusions first, then the warehouse, in one transaction
    result = await db.execute(
        delete(WarehouseExclusion).where(WarehouseExclusion.warehouse_id == warehouse.id)
    )
    await db.execute(delete(Warehouse).where(Warehouse.id == warehouse.id))

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.DELETE_WAREHOUSE,
        client_id=client_id,
        target_name=name,
        exclusion_count=result.rowcount,
    )

    await db.commit()

    logger.info(
        "Warehouse deleted",
        extra={"warehouse_id": warehouse_id, "exclusions_deleted": result.rowcount},
    )
