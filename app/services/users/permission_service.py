from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete

from app.models.users.role_models import Permission
from app.schemas.users.permission_schemas import (
    PermissionOut,
    PermissionListData,
    PermissionSyncResult,
)
from app.constants.permissions import PERMISSION_DEFINITIONS
from app.constants.activity_codes import ActivityCode
from app.constants.error_codes import ErrorCode
from app.core.exceptions import not_found
from app.utils.activity_helpers import emit_activity
from app.utils.logger import get_logger

logger = get_logger(__name__)


async def list_permissions(db: AsyncSession, resource: str | None = None) -> PermissionListData:
    stmt = select(Permission).order_by(Permission.resource, Permission.name)
    if resource:
        stmt = stmt.where(Permission.resource == resource)

    items = (await db.execute(stmt)).scalars().all()
    return PermissionListData(
        total=len(items),
        items=[PermissionOut.model_validate(p) for p in items],
    )


async def get_permission(db: AsyncSession, permission_id: int) -> PermissionOut:
    permission = await db.get(Permission, permission_id)
    if not permission:
        raise not_found("Permission not found", ErrorCode.PERMISSION_NOT_FOUND)
    return PermissionOut.model_validate(permission)


# =====================================================
# SYNC
# =====================================================
async def apply_permission_table(db: AsyncSession) -> PermissionSyncResult:
    """Upsert the static table and drop permissions no route uses any more. Does not commit."""
    existing = {
        p.name: p for p in (await db.execute(select(Permission))).scalars().all()
    }

    created = updated = 0
    wanted = set()

    for definition in PERMISSION_DEFINITIONS:
        wanted.add(definition.action)
        permission = existing.get(definition.action)

        if permission is None:
            db.add(
                Permission(
                    name=definition.action,
                    resource=definition.resource,
                    description=definition.description,
                )
            )
            created += 1
            continue

        if (permission.resource, permission.description) != (definition.resource, definition.description):
            permission.resource = definition.resource
            permission.description = definition.description
            updated += 1

    orphans = [name for name in existing if name not in wanted]
    if orphans:
        await db.execute(delete(Permission).where(Permission.name.in_(orphans)))

    await db.flush()

    result = PermissionSyncResult(
        created=created,
        updated=updated,
        deleted=len(orphans),
        total=len(wanted),
    )
    logger.info(
        "Permissions synced",
        extra={"created_count": created, "updated_count": updated, "deleted_count": len(orphans)},
    )
    return result


async def sync_permissions(db: AsyncSession, user) -> PermissionSyncResult:
    result = await apply_permission_table(db)

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.SYNC_PERMISSIONS,
        count=result.total,
    )

    await db.commit()
    return result
