from typing import Optional, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.users.role_schemas import (
    RoleCreate,
    RoleUpdate,
    RoleOut,
    RolePermissionsPayload,
)
from app.services.users.role_service import (
    list_roles,
    get_role,
    create_role,
    update_role,
    assign_permissions,
    delete_role,
)
from app.utils.check_roles import require_permission
from app.utils.client_context import get_client_context
from app.utils.response import APIResponse, success_response
from app.utils.logger import get_logger

router = APIRouter(prefix="/roles", tags=["Roles"])
logger = get_logger(__name__)


@router.get("/", response_model=APIResponse[List[RoleOut]])
async def list_roles_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("roles_list")),
    client_id: Optional[int] = Depends(get_client_context),
):
    data = await list_roles(db, client_id, user)
    return success_response("Roles fetched successfully", data)


@router.get("/{role_id}", response_model=APIResponse[RoleOut])
async def get_role_api(
    role_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("roles_read")),
    client_id: Optional[int] = Depends(get_client_context),
):
    data = await get_role(db, role_id, client_id)
    return success_response("Role fetched successfully", data)


@router.post(
    "/",
    response_model=APIResponse[RoleOut],
    status_code=status.HTTP_201_CREATED,
)
async def create_role_api(
    payload: RoleCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("roles_create")),
    client_id: Optional[int] = Depends(get_client_context),
):
    logger.info("Create role", extra={"role_name": payload.name, "client_id": client_id})
    data = await create_role(db, payload, client_id, user)
    return success_response("Role created successfully", data)


@router.put("/{role_id}", response_model=APIResponse[RoleOut])
async def update_role_api(
    role_id: int,
    payload: RoleUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("roles_update")),
    client_id: Optional[int] = Depends(get_client_context),
):
    data = await update_role(db, role_id, payload, client_id, user)
    return success_response("Role updated successfully", data)


@router.post("/{role_id}/permissions", response_model=APIResponse[RoleOut])
async def assign_permissions_api(
    role_id: int,
    payload: RolePermissionsPayload,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("roles_manage_permissions")),
    client_id: Optional[int] = Depends(get_client_context),
):
    logger.info("Assign role permissions", extra={"role_id": role_id, "count": len(payload.permission_ids)})
    data = await assign_permissions(db, role_id, payload, client_id, user)
    return success_response("Role permissions updated successfully", data)


@router.delete("/{role_id}", response_model=APIResponse)
async def delete_role_api(
    role_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("roles_delete")),
    client_id: Optional[int] = Depends(get_client_context),
):
    await delete_role(db, role_id, client_id, user)
    return success_response("Role deleted successfully")
