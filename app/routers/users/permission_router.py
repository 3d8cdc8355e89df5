from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.users.permission_schemas import (
    PermissionOut,
    PermissionListData,
    PermissionSyncResult,
)
from app.services.users.permission_service import (
    list_permissions,
    get_permission,
    sync_permissions,
)
from app.utils.check_roles import require_permission, require_system_admin
from app.utils.response import APIResponse, success_response
from app.utils.logger import get_logger

router = APIRouter(prefix="/permissions", tags=["Permissions"])
logger = get_logger(__name__)


@router.get("/", response_model=APIResponse[PermissionListData])
async def list_permissions_api(
    resource: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("permissions_list")),
):
    data = await list_permissions(db, resource)
    return success_response("Permissions fetched successfully", data)


@router.post("/sync", response_model=APIResponse[PermissionSyncResult])
async def sync_permissions_api(
    db: AsyncSession = Depends(get_db),
    admin=Depends(require_system_admin),
):
    logger.info("Permission sync requested", extra={"user_id": admin.id})
    data = await sync_permissions(db, admin)
    return success_response("Permissions synced successfully", data)


@router.get("/{permission_id}", response_model=APIResponse[PermissionOut])
async def get_permission_api(
    permission_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("permissions_read")),
):
    data = await get_permission(db, permission_id)
    return success_response("Permission fetched successfully", data)
