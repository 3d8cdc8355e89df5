# app/services/masters/product_service.py

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func, asc, desc, or_
from sqlalchemy.exc import IntegrityError

from app.models.masters.product_models import Product
from app.schemas.masters.product_schemas import (
    ProductCreate,
    ProductUpdate,
    ProductOut,
    ProductListData,
)
from app.core.exceptions import AppException, conflict, not_found
from app.constants.error_codes import ErrorCode
from app.constants.activity_codes import ActivityCode
from app.utils.activity_helpers import emit_activity, describe_changes
from app.utils.logger import get_logger

logger = get_logger(__name__)

ALLOWED_SORT_FIELDS = {
    "name": Product.name,
    "sku": Product.sku,
    "code": Product.code,
    "created_at": Product.created_at,
}


def _map_product(product: Product) -> ProductOut:
    return ProductOut(
        id=product.id,
        sku=product.sku,
        code=product.code,
        barcode=product.barcode,
        name=product.name,
        description=product.description,
        width=product.width,
        height=product.height,
        depth=product.depth,
        client_id=product.client_id,

        created_by=product.created_by_id,
        updated_by=product.updated_by_id,

        created_at=product.created_at,
        updated_at=product.updated_at,
    )


async def _get_product_for_client(
    db: AsyncSession,
    product_id: int,
    client_id: Optional[int],
) -> Product:
    stmt = select(Product).where(Product.id == product_id)
    if client_id is not None:
        stmt = stmt.where(Product.client_id == client_id)

    product = await db.scalar(stmt)
    if not product:
        raise not_found("Product not found", ErrorCode.PRODUCT_NOT_FOUND)
    return product


async def _ensure_sku_free(db: AsyncSession, sku: str, exclude_id: int | None = None):
    stmt = select(Product.id).where(Product.sku == sku)
    if exclude_id is not None:
        stmt = stmt.where(Product.id != exclude_id)

    if await db.scalar(stmt):
        raise conflict("SKU already exists", ErrorCode.PRODUCT_SKU_EXISTS)


# ---------------- LIST ----------------
async def list_products(
    *,
    db: AsyncSession,
    client_id: Optional[int],
    search: str | None,
    page: int,
    page_size: int,
    sort_by: str,
    order: str,
) -> ProductListData:
    filters = []

    if client_id is not None:
        filters.append(Product.client_id == client_id)

    if search:
        filters.append(
            or_(
                Product.name.ilike(f"%{search}%"),
                Product.sku.ilike(f"%{search}%"),
                Product.code.ilike(f"%{search}%"),
                Product.barcode.ilike(f"%{search}%"),
            )
        )

    sort_col = ALLOWED_SORT_FIELDS.get(sort_by)
    if sort_col is None:
        raise AppException(400, "Invalid sort field", ErrorCode.VALIDATION_ERROR)

    order_by = desc(sort_col) if order == "desc" else asc(sort_col)

    rows = (
        await db.execute(
            select(Product)
            .where(*filters)
            .order_by(order_by, Product.id)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
    ).scalars().all()

    total = await db.scalar(
        select(func.count()).select_from(select(Product.id).where(*filters).subquery())
    )

    return ProductListData(total=total or 0, items=[_map_product(p) for p in rows])


# ---------------- GET ----------------
async def get_product(db: AsyncSession, product_id: int, client_id: Optional[int]):
    product = await _get_product_for_client(db, product_id, client_id)
    return _map_product(product)


# ---------------- CREATE ----------------
async def create_product(db: AsyncSession, payload: ProductCreate, client_id: int, user):
    await _ensure_sku_free(db, payload.sku)

    product = Product(
        **payload.model_dump(),
        client_id=client_id,
        created_by_id=user.id,
        updated_by_id=user.id,
    )
    db.add(product)

    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        # lost a race on the unique sku
        raise conflict("SKU already exists", ErrorCode.PRODUCT_SKU_EXISTS)

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.CREATE_PRODUCT,
        client_id=client_id,
        target_name=product.name,
        sku=product.sku,
    )

    await db.commit()
    await db.refresh(product)

    logger.info("Product created", extra={"product_id": product.id, "sku": product.sku})
    return _map_product(product)


# ---------------- UPDATE ----------------
async def update_product(
    db: AsyncSession,
    product_id: int,
    payload: ProductUpdate,
    client_id: Optional[int],
    user,
):
    product = await _get_product_for_client(db, product_id, client_id)

    values = payload.model_dump(exclude_unset=True)
    for required in ("sku", "code", "name"):
        if values.get(required, "") is None:
            values.pop(required)

    if not values:
        raise AppException(400, "No changes provided", ErrorCode.VALIDATION_ERROR)

    if "sku" in values and values["sku"] != product.sku:
        await _ensure_sku_free(db, values["sku"], exclude_id=product.id)

    for field, value in values.items():
        setattr(product, field, value)
    product.updated_by_id = user.id

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.UPDATE_PRODUCT,
        client_id=product.client_id,
        target_name=product.name,
        changes=describe_changes(values),
    )

    await db.commit()
    await db.refresh(product)
    return _map_product(product)


# ---------------- DELETE ----------------
async def delete_product(
    db: AsyncSession,
    product_id: int,
    client_id: Optional[int],
    user,
):
    product = await _get_product_for_client(db, product_id, client_id)
    name, sku, owner = product.name, product.sku, product.client_id

    await db.execute(delete(Product).where(Product.id == product.id))

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.DELETE_PRODUCT,
        client_id=owner,
        target_name=name,
        sku=sku,
    )

    await db.commit()
    logger.info("Product deleted", extra={"product_id": product_id})
