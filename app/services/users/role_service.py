from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, or_

from app.models.users.role_models import Role, Permission
from app.schemas.users.role_schemas import (
    RoleCreate,
    RoleUpdate,
    RoleOut,
    RolePermissionsPayload,
)
from app.schemas.users.permission_schemas import PermissionOut
from app.core.config import SYSTEM_ADMIN_ROLE
from app.core.exceptions import AppException, not_found
from app.constants.error_codes import ErrorCode
from app.constants.activity_codes import ActivityCode
from app.utils.activity_helpers import emit_activity, describe_changes
from app.utils.check_roles import is_system_admin
from app.utils.role_scope import (
    ClientScope,
    GlobalScope,
    RoleScope,
    describe_scope,
    role_scope,
    scope_client_id,
    scope_from_client,
)
from app.utils.logger import get_logger

logger = get_logger(__name__)


# =====================================================
# MAPPER
# =====================================================
def _map_role(role: Role) -> RoleOut:
    return RoleOut(
        id=role.id,
        name=role.name,
        description=role.description,
        client_id=role.client_id,
        scope=role_scope(role).label,
        permissions=[PermissionOut.model_validate(p) for p in role.permissions],
        created_at=role.created_at,
        updated_at=role.updated_at,
    )


def is_protected(role: Role) -> bool:
    return role.name == SYSTEM_ADMIN_ROLE and isinstance(role_scope(role), GlobalScope)


# =====================================================
# LOOKUPS
# =====================================================
async def _load_role(db: AsyncSession, role_id: int) -> Role:
    result = await db.execute(
        select(Role)
        .where(Role.id == role_id)
        .execution_options(populate_existing=True)
    )
    role = result.scalars().first()
    if not role:
        raise not_found("Role not found", ErrorCode.ROLE_NOT_FOUND)
    return role


async def _visible_role(db: AsyncSession, role_id: int, client_id: Optional[int]) -> Role:
    role = await _load_role(db, role_id)
    scope = role_scope(role)
    # roles of other clients look exactly like missing ones
    if client_id is not None and isinstance(scope, ClientScope) and scope.client_id != client_id:
        raise not_found("Role not found", ErrorCode.ROLE_NOT_FOUND)
    return role


def _ensure_can_manage(role: Role, user):
    if isinstance(role_scope(role), GlobalScope) and not is_system_admin(user):
        raise AppException(
            403,
            "Only the system administrator may change global roles",
            ErrorCode.PERMISSION_DENIED,
        )


async def _ensure_name_free(db: AsyncSession, name: str, scope: RoleScope, exclude_id: int | None = None):
    owner = scope_client_id(scope)
    stmt = select(Role.id).where(
        Role.name == name,
        Role.client_id.is_(None) if owner is None else Role.client_id == owner,
    )
    if exclude_id is not None:
        stmt = stmt.where(Role.id != exclude_id)

    if await db.scalar(stmt):
        raise AppException(
            409,
            f"Role '{name}' already exists ({describe_scope(scope)})",
            ErrorCode.ROLE_NAME_EXISTS,
        )


async def _resolve_permissions(db: AsyncSession, permission_ids: list[int]) -> list[Permission]:
    wanted = set(permission_ids)
    if not wanted:
        return []

    permissions = (
        await db.execute(select(Permission).where(Permission.id.in_(wanted)))
    ).scalars().all()

    missing = wanted - {p.id for p in permissions}
    if missing:
        raise AppException(
            400,
            "Unknown permission ids",
            ErrorCode.PERMISSION_NOT_FOUND,
            {"permission_ids": sorted(missing)},
        )
    return list(permissions)


# =====================================================
# LIST / GET
# =====================================================
async def list_roles(db: AsyncSession, client_id: Optional[int], user) -> list[RoleOut]:
    stmt = select(Role).order_by(Role.client_id.is_not(None), Role.name, Role.id)

    if client_id is not None:
        stmt = stmt.where(or_(Role.client_id.is_(None), Role.client_id == client_id))
    elif not is_system_admin(user):
        stmt = stmt.where(Role.client_id.is_(None))

    roles = (await db.execute(stmt)).scalars().all()
    return [_map_role(r) for r in roles]


async def get_role(db: AsyncSession, role_id: int, client_id: Optional[int]) -> RoleOut:
    return _map_role(await _visible_role(db, role_id, client_id))


# =====================================================
# CREATE
# =====================================================
async def create_role(db: AsyncSession, payload: RoleCreate, client_id: Optional[int], user) -> RoleOut:
    scope = scope_from_client(client_id)

    if isinstance(scope, GlobalScope) and not is_system_admin(user):
        raise AppException(
            403,
            "Only the system administrator may create global roles",
            ErrorCode.PERMISSION_DENIED,
        )

    await _ensure_name_free(db, payload.name, scope)

    role = Role(
        name=payload.name,
        description=payload.description,
        client_id=scope_client_id(scope),
    )
    role.permissions = await _resolve_permissions(db, payload.permission_ids)

    db.add(role)
    await db.flush()

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.CREATE_ROLE,
        client_id=scope_client_id(scope),
        target_name=role.name,
        scope=describe_scope(scope),
    )

    await db.commit()

    logger.info("Role created", extra={"role_id": role.id, "scope": describe_scope(scope)})
    return _map_role(await _load_role(db, role.id))


# =====================================================
# UPDATE
# =====================================================
async def update_role(
    db: AsyncSession,
    role_id: int,
    payload: RoleUpdate,
    client_id: Optional[int],
    user,
) -> RoleOut:
    role = await _visible_role(db, role_id, client_id)
    _ensure_can_manage(role, user)

    values = payload.model_dump(exclude_unset=True)
    if values.get("name") is None:
        values.pop("name", None)

    if not values:
        raise AppException(400, "No changes provided", ErrorCode.VALIDATION_ERROR)

    if "name" in values and values["name"] != role.name:
        if is_protected(role):
            raise AppException(400, "The system administrator role cannot be renamed", ErrorCode.ROLE_PROTECTED)
        await _ensure_name_free(db, values["name"], role_scope(role), exclude_id=role.id)

    for field, value in values.items():
        setattr(role, field, value)

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.UPDATE_ROLE,
        client_id=role.client_id,
        target_name=role.name,
        changes=describe_changes(values),
    )

    await db.commit()
    return _map_role(await _load_role(db, role.id))


# =====================================================
# ASSIGN PERMISSIONS
# =====================================================
async def assign_permissions(
    db: AsyncSession,
    role_id: int,
    payload: RolePermissionsPayload,
    client_id: Optional[int],
    user,
) -> RoleOut:
    role = await _visible_role(db, role_id, client_id)
    _ensure_can_manage(role, user)

    role.permissions = await _resolve_permissions(db, payload.permission_ids)

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.ASSIGN_ROLE_PERMISSIONS,
        client_id=role.client_id,
        target_name=role.name,
        count=len(role.permissions),
    )

    await db.commit()
    return _map_role(await _load_role(db, role.id))


# =====================================================
# DELETE
# =====================================================
async def delete_role(db: AsyncSession, role_id: int, client_id: Optional[int], user):
    role = await _visible_role(db, role_id, client_id)
    _ensure_can_manage(role, user)

    if is_protected(role):
        raise AppException(400, "The system administrator role cannot be deleted", ErrorCode.ROLE_PROTECTED)

    name, owner = role.name, role.client_id
    await db.execute(delete(Role).where(Role.id == role.id))

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.DELETE_ROLE,
        client_id=owner,
        target_name=name,
    )

    await db.commit()
    logger.info("Role deleted", extra={"role_id": role_id})
