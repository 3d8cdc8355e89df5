from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func

from app.models.tenants.client_models import Client
from app.models.locations.location_models import Location
from app.models.masters.product_models import Product
from app.models.orders.order_models import Order
from app.schemas.tenants.client_schemas import (
    ClientCreate,
    ClientUpdate,
    ClientOut,
    ClientListData,
)
from app.core.exceptions import AppException, conflict, not_found
from app.constants.error_codes import ErrorCode
from app.constants.activity_codes import ActivityCode
from app.utils.activity_helpers import emit_activity, describe_changes
from app.utils.logger import get_logger

logger = get_logger(__name__)


async def _get_client(db: AsyncSession, client_id: int) -> Client:
    client = await db.get(Client, client_id)
    if not client:
        raise not_found("Client not found", ErrorCode.CLIENT_NOT_FOUND)
    return client


async def _ensure_name_free(db: AsyncSession, name: str, exclude_id: int | None = None):
    stmt = select(Client.id).where(func.lower(Client.name) == name.lower())
    if exclude_id is not None:
        stmt = stmt.where(Client.id != exclude_id)
    if await db.scalar(stmt):
        raise conflict("Client name already exists", ErrorCode.CLIENT_NAME_EXISTS)


async def list_clients(db: AsyncSession, search: str | None = None) -> ClientListData:
    stmt = select(Client).order_by(Client.name)
    if search:
        stmt = stmt.where(Client.name.ilike(f"%{search}%"))

    clients = (await db.execute(stmt)).scalars().all()
    return ClientListData(
        total=len(clients),
        items=[ClientOut.model_validate(c) for c in clients],
    )


async def get_client(db: AsyncSession, client_id: int) -> ClientOut:
    return ClientOut.model_validate(await _get_client(db, client_id))


async def create_client(db: AsyncSession, payload: ClientCreate, user) -> ClientOut:
    await _ensure_name_free(db, payload.name)

    client = Client(name=payload.name)
    db.add(client)
    await db.flush()

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.CREATE_CLIENT,
        client_id=client.id,
        target_name=client.name,
    )

    await db.commit()
    await db.refresh(client)

    logger.info("Client created", extra={"client_id": client.id})
    return ClientOut.model_validate(client)


async def update_client(db: AsyncSession, client_id: int, payload: ClientUpdate, user) -> ClientOut:
    client = await _get_client(db, client_id)

    values = payload.model_dump(exclude_unset=True, exclude_none=True)
    if not values:
        raise AppException(400, "No changes provided", ErrorCode.VALIDATION_ERROR)

    if "name" in values:
        await _ensure_name_free(db, values["name"], exclude_id=client.id)

    for field, value in values.items():
        setattr(client, field, value)

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.UPDATE_CLIENT,
        client_id=client.id,
        target_name=client.name,
        changes=describe_changes(values),
    )

    await db.commit()
    await db.refresh(client)
    return ClientOut.model_validate(client)


async def delete_client(db: AsyncSession, client_id: int, user):
    client = await _get_client(db, client_id)

    usage = {
        "locations": await db.scalar(select(func.count(Location.id)).where(Location.client_id == client.id)),
        "products": await db.scalar(select(func.count(Product.id)).where(Product.client_id == client.id)),
        "orders": await db.scalar(select(func.count(Order.id)).where(Order.client_id == client.id)),
    }
    in_use = {k: v for k, v in usage.items() if v}
    if in_use:
        raise conflict("Client is still in use", ErrorCode.CLIENT_IN_USE, in_use)

    name = client.name
    await db.execute(delete(Client).where(Client.id == client.id))

    # audit row outlives the client; its client_id is not kept
    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.DELETE_CLIENT,
        target_name=name,
    )

    await db.commit()
    logger.info("Client deleted", extra={"client_id": client_id})
