from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, asc, desc, delete

from app.models.locations.location_models import Location
from app.models.warehouses.warehouse_models import Warehouse
from app.schemas.locations.location_schemas import (
    LocationCreate,
    LocationUpdate,
    LocationOut,
    LocationListData,
)
from app.core.exceptions import AppException, not_found
from app.constants.error_codes import ErrorCode
from app.constants.activity_codes import ActivityCode
from app.utils.activity_helpers import emit_activity, describe_changes
from app.utils.logger import get_logger

logger = get_logger(__name__)

ALLOWED_SORT_FIELDS = {
    "id": Location.id,
    "name": Location.name,
    "created_at": Location.created_at,
}


# =====================================================
# MAPPER
# =====================================================
def _map_location(loc: Location) -> LocationOut:
    return LocationOut(
        id=loc.id,
        name=loc.name,
        client_id=loc.client_id,
        created_by=loc.created_by_id,
        updated_by=loc.updated_by_id,
        created_at=loc.created_at,
        updated_at=loc.updated_at,
    )


async def get_location_for_client(
    db: AsyncSession,
    location_id: int,
    client_id: Optional[int],
) -> Location:
    stmt = select(Location).where(Location.id == location_id)
    if client_id is not None:
        stmt = stmt.where(Location.client_id == client_id)

    location = (await db.execute(stmt)).scalars().first()
    if not location:
        raise not_found("Location not found", ErrorCode.LOCATION_NOT_FOUND)
    return location


# =====================================================
# LIST LOCATIONS
# =====================================================
async def list_locations(
    *,
    db: AsyncSession,
    client_id: Optional[int],
    search: str | None,
    page: int,
    page_size: int,
    sort_by: str,
    order: str,
) -> LocationListData:
    filters = []
    if client_id is not None:
        filters.append(Location.client_id == client_id)
    if search:
        filters.append(Location.name.ilike(f"%{search}%"))

    sort_col = ALLOWED_SORT_FIELDS.get(sort_by)
    if sort_col is None:
        raise AppException(400, "Invalid sort field", ErrorCode.VALIDATION_ERROR)

    order_by = desc(sort_col) if order == "desc" else asc(sort_col)

    total = await db.scalar(
        select(func.count()).select_from(
            select(Location.id).where(*filters).subquery()
        )
    )

    rows = (
        await db.execute(
            select(Location)
            .where(*filters)
            .order_by(order_by, Location.id)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
    ).scalars().all()

    return LocationListData(total=total or 0, items=[_map_location(r) for r in rows])


# =====================================================
# GET LOCATION
# =====================================================
async def get_location(db: AsyncSession, location_id: int, client_id: Optional[int]):
    location = await get_location_for_client(db, location_id, client_id)
    return _map_location(location)


# =====================================================
# CREATE LOCATION
# =====================================================
async def create_location(
    db: AsyncSession,
    payload: LocationCreate,
    client_id: int,
    user,
):
    location = Location(
        name=payload.name,
        client_id=client_id,
        created_by_id=user.id,
        updated_by_id=user.id,
    )
    db.add(location)
    await db.flush()

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.CREATE_LOCATION,
        client_id=client_id,
        target_name=location.name,
    )

    await db.commit()
    await db.refresh(location)

    logger.info("Location created", extra={"location_id": location.id, "client_id": client_id})
    return _map_location(location)


# =====================================================
# UPDATE LOCATION
# =====================================================
async def update_location(
    db: AsyncSession,
    location_id: int,
    payload: LocationUpdate,
    client_id: int,
    user,
):
    location = await get_location_for_client(db, location_id, client_id)

    values = payload.model_dump(exclude_unset=True, exclude_none=True)
    if not values:
        raise AppException(400, "No changes provided", ErrorCode.VALIDATION_ERROR)

    for field, value in values.items():
        setattr(location, field, value)
    location.updated_by_id = user.id

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.UPDATE_LOCATION,
        client_id=location.client_id,
        target_name=location.name,
        changes=describe_changes(values),
    )

    await db.commit()
    await db.refresh(location)
    return _map_location(location)


# =====================================================
# DELETE LOCATION
# =====================================================
async def delete_location(
    db: AsyncSession,
    location_id: int,
    client_id: int,
    user,
):
    location = await get_location_for_client(db, location_id, client_id)

    warehouse_count = await db.scalar(
        select(func.count(Warehouse.id)).where(Warehouse.location_id == location.id)
    )
    if warehouse_count:
        raise AppException(
            409,
            "Location still has warehouses",
            ErrorCode.LOCATION_IN_USE,
            {"warehouse_count": warehouse_count},
        )

    name = location.name
    await db.execute(delete(Location).where(Location.id == location.id))

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.DELETE_LOCATION,
        client_id=client_id,
        target_name=name,
    )

    await db.commit()
    logger.info("Location deleted", extra={"location_id": location_id})
