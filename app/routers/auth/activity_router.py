# app/routers/auth/activity_router.py

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.auth.activity_schemas import UserActivityFilters, UserActivityListData
from app.services.auth.activity_service import list_user_activities
from app.utils.check_roles import require_permission
from app.utils.client_context import get_client_context
from app.utils.response import APIResponse, success_response
from app.utils.logger import get_logger

router = APIRouter(prefix="/activities", tags=["User Activities"])
logger = get_logger(__name__)


@router.get("/", response_model=APIResponse[UserActivityListData])
async def list_user_activities_api(
    filters: UserActivityFilters = Depends(),
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("activities_list")),
    client_id: Optional[int] = Depends(get_client_context),
):
    logger.info(
        "List user activities requested",
        extra={"filter_user_id": filters.user_id, "client_id": client_id},
    )

    result = await list_user_activities(db=db, filters=filters, client_id=client_id)

    return success_response(
        "User activities fetched successfully",
        result,
    )
