from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete

from app.models.warehouses.warehouse_models import Warehouse, WarehouseExclusion
from app.schemas.warehouses.exclusion_schemas import (
    ExclusionCreate,
    ExclusionUpdate,
    ExclusionOut,
    ExclusionListData,
    ExclusionCheckData,
    PossibleValuesOut,
)
from app.services.warehouses.storage_core import (
    DIMENSIONS,
    RANGE_FIELDS,
    ExclusionRejection,
    possible_values,
    validate_exclusion,
    matching_rules,
    is_excluded,
)
from app.services.warehouses.warehouse_service import get_warehouse_for_client
from app.core.exceptions import AppException, not_found
from app.constants.error_codes import ErrorCode
from app.constants.activity_codes import ActivityCode
from app.utils.activity_helpers import emit_activity
from app.utils.logger import get_logger

logger = get_logger(__name__)


# =====================================================
# MAPPERS
# =====================================================
def _map_exclusion(rule: WarehouseExclusion) -> ExclusionOut:
    return ExclusionOut(
        id=rule.id,
        warehouse_id=rule.warehouse_id,
        aisle_from=rule.aisle_from,
        aisle_to=rule.aisle_to,
        bay_from=rule.bay_from,
        bay_to=rule.bay_to,
        level_from=rule.level_from,
        level_to=rule.level_to,
        bin_from=rule.bin_from,
        bin_to=rule.bin_to,
        created_at=rule.created_at,
        updated_at=rule.updated_at,
    )


def describe_ranges(rule) -> str:
    """Human form of a rule for the audit trail, e.g. "aisle 2, bin A-C"."""
    parts = []
    for dimension in DIMENSIONS:
        start = rule.get(f"{dimension}_from")
        end = rule.get(f"{dimension}_to")
        if start is None:
            continue
        if end is None or end == start:
            parts.append(f"{dimension} {start}")
        else:
            parts.append(f"{dimension} {start}-{end}")
    return ", ".join(parts) or "nothing"


def _rejected(rejection: ExclusionRejection) -> AppException:
    return AppException(
        400,
        rejection.message,
        rejection.error_code,
        {"dimension": rejection.dimension},
    )


def _client_of(warehouse: Warehouse) -> Optional[int]:
    return warehouse.location.client_id if warehouse.location else None


async def _get_rule(db: AsyncSession, exclusion_id: int, warehouse_id: int) -> WarehouseExclusion:
    rule = await db.scalar(
        select(WarehouseExclusion).where(
            WarehouseExclusion.id == exclusion_id,
            WarehouseExclusion.warehouse_id == warehouse_id,
        )
    )
    if not rule:
        raise not_found("Warehouse exclusion not found", ErrorCode.EXCLUSION_NOT_FOUND)
    return rule


async def _rules_for(db: AsyncSession, warehouse_id: int) -> list[WarehouseExclusion]:
    result = await db.execute(
        select(WarehouseExclusion)
        .where(WarehouseExclusion.warehouse_id == warehouse_id)
        .order_by(WarehouseExclusion.id)
    )
    return list(result.scalars().all())


# =====================================================
# LIST (+ POSSIBLE VALUES)
# =====================================================
async def list_exclusions(
    db: AsyncSession,
    warehouse_id: int,
    client_id: Optional[int],
) -> ExclusionListData:
    warehouse = await get_warehouse_for_client(db, warehouse_id, client_id)
    rules = await _rules_for(db, warehouse.id)

    return ExclusionListData(
        exclusions=[_map_exclusion(r) for r in rules],
        possible_values=PossibleValuesOut(**possible_values(warehouse)),
    )


# =====================================================
# GET
# =====================================================
async def get_exclusion(
    db: AsyncSession,
    exclusion_id: int,
    warehouse_id: int,
    client_id: Optional[int],
) -> ExclusionOut:
    warehouse = await get_warehouse_for_client(db, warehouse_id, client_id)
    rule = await _get_rule(db, exclusion_id, warehouse.id)
    return _map_exclusion(rule)


# =====================================================
# CREATE
# =====================================================
async def create_exclusion(
    db: AsyncSession,
    payload: ExclusionCreate,
    client_id: Optional[int],
    user,
) -> ExclusionOut:
    warehouse = await get_warehouse_for_client(db, payload.warehouse_id, client_id)

    fields = payload.model_dump(include=set(RANGE_FIELDS))

    # always against the configuration as stored now, not what the caller last saw
    rejection = validate_exclusion(fields, possible_values(warehouse))
    if rejection:
        logger.info(
            "Exclusion rejected",
            extra={"warehouse_id": warehouse.id, "reason": rejection.error_code.value},
        )
        raise _rejected(rejection)

    rule = WarehouseExclusion(
        warehouse_id=warehouse.id,
        **fields,
        created_by_id=user.id,
        updated_by_id=user.id,
    )
    db.add(rule)
    await db.flush()

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.CREATE_EXCLUSION,
        client_id=_client_of(warehouse),
        target_name=warehouse.name,
        ranges=describe_ranges(fields),
    )

    await db.commit()
    await db.refresh(rule)

    logger.info(
        "Exclusion created",
        extra={"exclusion_id": rule.id, "warehouse_id": warehouse.id},
    )
    return _map_exclusion(rule)


# =====================================================
# UPDATE
# =====================================================
async def update_exclusion(
    db: AsyncSession,
    exclusion_id: int,
    payload: ExclusionUpdate,
    client_id: Optional[int],
    user,
) -> ExclusionOut:
    warehouse = await get_warehouse_for_client(db, payload.warehouse_id, client_id)
    rule = await _get_rule(db, exclusion_id, warehouse.id)

    merged = {name: getattr(rule, name) for name in RANGE_FIELDS}
    merged.update(payload.model_dump(exclude_unset=True, include=set(RANGE_FIELDS)))

    rejection = validate_exclusion(merged, possible_values(warehouse))
    if rejection:
        raise _rejected(rejection)

    for field, value in merged.items():
        setattr(rule, field, value)
    rule.updated_by_id = user.id

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.UPDATE_EXCLUSION,
        client_id=_client_of(warehouse),
        target_name=warehouse.name,
        exclusion_id=rule.id,
        ranges=describe_ranges(merged),
    )

    await db.commit()
    await db.refresh(rule)
    return _map_exclusion(rule)


# =====================================================
# DELETE
# =====================================================
async def delete_exclusion(
    db: AsyncSession,
    exclusion_id: int,
    warehouse_id: int,
    client_id: Optional[int],
    user,
):
    warehouse = await get_warehouse_for_client(db, warehouse_id, client_id)
    rule = await _get_rule(db, exclusion_id, warehouse.id)

    await db.execute(delete(WarehouseExclusion).where(WarehouseExclusion.id == rule.id))

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.DELETE_EXCLUSION,
        client_id=_client_of(warehouse),
        target_name=warehouse.name,
        exclusion_id=exclusion_id,
    )

    await db.commit()
    logger.info(
        "Exclusion deleted",
        extra={"exclusion_id": exclusion_id, "warehouse_id": warehouse_id},
    )


# =====================================================
# CHECK A SLOT
# =====================================================
async def check_slot(
    db: AsyncSession,
    warehouse_id: int,
    coordinate: dict[str, Optional[str]],
    client_id: Optional[int],
) -> ExclusionCheckData:
    warehouse = await get_warehouse_for_client(db, warehouse_id, client_id)
    rules = await _rules_for(db, warehouse.id)

    values = possible_values(warehouse)
    matched = matching_rules(rules, coordinate, values)

    return ExclusionCheckData(
        warehouse_id=warehouse.id,
        coordinate=coordinate,
        excluded=is_excluded(rules, coordinate, values),
        matched_exclusion_ids=[r.id for r in matched],
    )
