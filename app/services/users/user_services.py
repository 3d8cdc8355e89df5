from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func

from app.models.users.user_models import User
from app.models.users.role_models import Role
from app.models.tenants.client_models import Client
from app.schemas.users.user_schemas import (
    UserCreateSchema,
    UserUpdateSchema,
    UserListFilters,
    UserOut,
    UserListData,
)
from app.core.security import hash_password
from app.utils.activity_helpers import emit_activity, describe_changes
from app.constants.activity_codes import ActivityCode
from app.core.exceptions import AppException, conflict, not_found
from app.constants.error_codes import ErrorCode
from app.utils.logger import get_logger

logger = get_logger(__name__)

SORT_MAP = {
    "created_at": User.created_at,
    "username": User.username,
    "last_login": User.last_login,
}


# =========================
# HELPERS
# =========================
def _map_user(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        username=user.username,
        role_id=user.role_id,
        role_name=user.role.name if user.role else None,
        client_ids=[c.id for c in user.clients],
        is_active=user.is_active,
        last_login=user.last_login,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


async def _load_user(db: AsyncSession, user_id: int) -> User:
    result = await db.execute(
        select(User)
        .where(User.id == user_id)
        .execution_options(populate_existing=True)
    )
    user = result.scalars().first()
    if not user:
        raise not_found("User not found", ErrorCode.USER_NOT_FOUND)
    return user


async def _ensure_username_free(db: AsyncSession, username: str, exclude_id: int | None = None):
    stmt = select(User.id).where(User.username == username)
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)
    if await db.scalar(stmt):
        raise conflict("Username already exists", ErrorCode.USER_USERNAME_EXISTS)


async def _ensure_role(db: AsyncSession, role_id: int):
    if not await db.scalar(select(Role.id).where(Role.id == role_id)):
        raise AppException(400, "Invalid role", ErrorCode.USER_ROLE_INVALID)


async def _resolve_clients(db: AsyncSession, client_ids: list[int]) -> list[Client]:
    wanted = set(client_ids)
    if not wanted:
        return []

    clients = (
        await db.execute(select(Client).where(Client.id.in_(wanted)))
    ).scalars().all()

    missing = wanted - {c.id for c in clients}
    if missing:
        raise AppException(
            400,
            "Unknown client ids",
            ErrorCode.USER_CLIENT_INVALID,
            {"client_ids": sorted(missing)},
        )
    return list(clients)


# =========================
# CREATE USER
# =========================
async def create_user(db: AsyncSession, payload: UserCreateSchema, admin: User) -> UserOut:
    await _ensure_username_free(db, payload.username)

    if payload.role_id is not None:
        await _ensure_role(db, payload.role_id)

    user = User(
        username=payload.username,
        password_hash=hash_password(payload.password),
        role_id=payload.role_id,
        is_active=payload.is_active,
        token_version=0,
    )
    user.clients = await _resolve_clients(db, payload.client_ids)

    db.add(user)
    await db.flush()

    await emit_activity(
        db,
        actor=admin,
        code=ActivityCode.CREATE_USER,
        target_name=user.username,
    )

    await db.commit()

    logger.info("User created", extra={"user_id": user.id})
    return _map_user(await _load_user(db, user.id))


# =========================
# LIST USERS
# =========================
async def list_users(
    db: AsyncSession,
    filters: UserListFilters,
    client_id: int | None,
) -> UserListData:
    base_stmt = select(User)

    # --------------------
    # Filters
    # --------------------
    if client_id is not None:
        base_stmt = base_stmt.where(User.clients.any(Client.id == client_id))

    if filters.search:
        base_stmt = base_stmt.where(User.username.ilike(f"%{filters.search}%"))

    if filters.role_id:
        base_stmt = base_stmt.where(User.role_id == filters.role_id)

    if filters.is_active is not None:
        base_stmt = base_stmt.where(User.is_active == filters.is_active)

    total = await db.scalar(select(func.count()).select_from(base_stmt.subquery()))

    # --------------------
    # Sorting (safe)
    # --------------------
    sort_col = SORT_MAP.get(filters.sort_by)
    if sort_col is None:
        raise AppException(400, "Invalid sort field", ErrorCode.VALIDATION_ERROR)

    sort_col = sort_col.desc() if filters.sort_order.lower() == "desc" else sort_col.asc()

    # --------------------
    # Pagination
    # --------------------
    offset = (filters.page - 1) * filters.page_size
    result = await db.execute(
        base_stmt.order_by(sort_col, User.id).limit(filters.page_size).offset(offset)
    )

    return UserListData(
        total=total or 0,
        page=filters.page,
        page_size=filters.page_size,
        items=[_map_user(u) for u in result.scalars().all()],
    )


# =========================
# GET USER BY ID
# =========================
async def get_user_by_id(db: AsyncSession, user_id: int) -> UserOut:
    return _map_user(await _load_user(db, user_id))


# =========================
# UPDATE USER
# =========================
async def update_user(
    db: AsyncSession,
    user_id: int,
    payload: UserUpdateSchema,
    admin: User,
) -> UserOut:
    user = await _load_user(db, user_id)
    values = payload.model_dump(exclude_unset=True)

    changes: dict = {}
    revoke_sessions = False

    if values.get("username") and values["username"] != user.username:
        await _ensure_username_free(db, values["username"], exclude_id=user.id)
        changes["username"] = values["username"]
        user.username = values["username"]

    if values.get("password"):
        user.password_hash = hash_password(values["password"])
        changes["password"] = "***"
        revoke_sessions = True

    if "role_id" in values and values["role_id"] != user.role_id:
        if values["role_id"] is not None:
            await _ensure_role(db, values["role_id"])
        user.role_id = values["role_id"]
        changes["role_id"] = values["role_id"]

    if values.get("client_ids") is not None:
        user.clients = await _resolve_clients(db, values["client_ids"])
        changes["client_ids"] = sorted(set(values["client_ids"]))

    if values.get("is_active") is not None and values["is_active"] != user.is_active:
        user.is_active = values["is_active"]
        changes["is_active"] = values["is_active"]
        revoke_sessions = revoke_sessions or not user.is_active

    if not changes:
        raise AppException(400, "No changes provided", ErrorCode.VALIDATION_ERROR)

    if revoke_sessions:
        user.token_version += 1

    await emit_activity(
        db,
        actor=admin,
        code=ActivityCode.UPDATE_USER,
        target_name=user.username,
        changes=describe_changes(changes),
    )

    await db.commit()

    logger.info("User updated", extra={"user_id": user.id, "fields": list(changes)})
    return _map_user(await _load_user(db, user.id))


# =========================
# DELETE USER
# =========================
async def delete_user(db: AsyncSession, user_id: int, admin: User):
    if user_id == admin.id:
        raise AppException(400, "You cannot delete your own account", ErrorCode.VALIDATION_ERROR)

    user = await _load_user(db, user_id)
    username = user.username

    await db.execute(delete(User).where(User.id == user.id))

    await emit_activity(
        db,
        actor=admin,
        code=ActivityCode.DELETE_USER,
        target_name=username,
    )

    await db.commit()
    logger.info("User deleted", extra={"user_id": user_id})
