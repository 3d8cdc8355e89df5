from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.tenants.client_schemas import (
    ClientCreate,
    ClientUpdate,
    ClientOut,
    ClientListData,
)
from app.services.tenants.client_service import (
    list_clients,
    get_client,
    create_client,
    update_client,
    delete_client,
)
from app.utils.check_roles import require_system_admin
from app.utils.response import APIResponse, success_response
from app.utils.logger import get_logger

router = APIRouter(prefix="/clients", tags=["Clients"])
logger = get_logger(__name__)


@router.get("/", response_model=APIResponse[ClientListData])
async def list_clients_api(
    search: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    admin=Depends(require_system_admin),
):
    data = await list_clients(db, search)
    return success_response("Clients fetched successfully", data)


@router.get("/{client_id}", response_model=APIResponse[ClientOut])
async def get_client_api(
    client_id: int,
    db: AsyncSession = Depends(get_db),
    admin=Depends(require_system_admin),
):
    data = await get_client(db, client_id)
    return success_response("Client fetched successfully", data)


@router.post(
    "/",
    response_model=APIResponse[ClientOut],
    status_code=status.HTTP_201_CREATED,
)
async def create_client_api(
    payload: ClientCreate,
    db: AsyncSession = Depends(get_db),
    admin=Depends(require_system_admin),
):
    logger.info("Create client", extra={"client_name": payload.name})
    data = await create_client(db, payload, admin)
    return success_response("Client created successfully", data)


@router.put("/{client_id}", response_model=APIResponse[ClientOut])
async def update_client_api(
    client_id: int,
    payload: ClientUpdate,
    db: AsyncSession = Depends(get_db),
    admin=Depends(require_system_admin),
):
    data = await update_client(db, client_id, payload, admin)
    return success_response("Client updated successfully", data)


@router.delete("/{client_id}", response_model=APIResponse)
async def delete_client_api(
    client_id: int,
    db: AsyncSession = Depends(get_db),
    admin=Depends(require_system_admin),
):
    await delete_client(db, client_id, admin)
    return success_response("Client deleted successfully")
