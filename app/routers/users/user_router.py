from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.users.user_schemas import (
    UserCreateSchema,
    UserUpdateSchema,
    UserListFilters,
    UserOut,
    UserListData,
)
from app.services.users.user_services import (
    create_user,
    list_users,
    get_user_by_id,
    update_user,
    delete_user,
)
from app.utils.check_roles import require_permission
from app.utils.client_context import get_client_context
from app.utils.response import APIResponse, success_response
from app.utils.logger import get_logger

router = APIRouter(prefix="/users", tags=["Users"])
logger = get_logger(__name__)


@router.post(
    "/",
    response_model=APIResponse[UserOut],
    status_code=status.HTTP_201_CREATED,
)
async def create_user_api(
    payload: UserCreateSchema,
    db: AsyncSession = Depends(get_db),
    admin=Depends(require_permission("users_create")),
):
    logger.info("Create user request", extra={"username": payload.username})
    user = await create_user(db, payload, admin)
    return success_response("User created successfully", user)


@router.get("/", response_model=APIResponse[UserListData])
async def list_users_api(
    filters: UserListFilters = Depends(),
    db: AsyncSession = Depends(get_db),
    admin=Depends(require_permission("users_list")),
    client_id: Optional[int] = Depends(get_client_context),
):
    logger.info("List users request", extra={"search": filters.search, "client_id": client_id})
    users = await list_users(db, filters, client_id)
    return success_response("Users fetched", users)


@router.get("/{user_id}", response_model=APIResponse[UserOut])
async def get_user_api(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    admin=Depends(require_permission("users_read")),
):
    logger.info("Get user by id", extra={"user_id": user_id})
    user = await get_user_by_id(db, user_id)
    return success_response("User fetched", user)


@router.put("/{user_id}", response_model=APIResponse[UserOut])
async def update_user_api(
    user_id: int,
    payload: UserUpdateSchema,
    db: AsyncSession = Depends(get_db),
    admin=Depends(require_permission("users_update")),
):
    logger.info("Update user", extra={"user_id": user_id})
    user = await update_user(db, user_id, payload, admin)
    return success_response("User updated successfully", user)


@router.delete("/{user_id}", response_model=APIResponse)
async def delete_user_api(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    admin=Depends(require_permission("users_delete")),
):
    logger.info("Delete user", extra={"user_id": user_id})
    await delete_user(db, user_id, admin)
    return success_response("User deleted successfully")
