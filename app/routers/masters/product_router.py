# app/routers/masters/product_router.py

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.masters.product_schemas import (
    ProductCreate,
    ProductUpdate,
    ProductOut,
    ProductListData,
)
from app.services.masters.product_service import (
    create_product,
    list_products,
    get_product,
    update_product,
    delete_product,
)
from app.utils.check_roles import require_permission
from app.utils.client_context import get_scoped_client, require_client
from app.utils.response import APIResponse, success_response
from app.utils.logger import get_logger

router = APIRouter(prefix="/products", tags=["Products"])
logger = get_logger(__name__)


@router.post(
    "/",
    response_model=APIResponse[ProductOut],
    status_code=status.HTTP_201_CREATED,
)
async def create_product_api(
    payload: ProductCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("products_create")),
    client_id: int = Depends(require_client("create a product")),
):
    logger.info("Create product", extra={"sku": payload.sku})
    product = await create_product(db, payload, client_id, user)
    return success_response("Product created successfully", product)


@router.get("/", response_model=APIResponse[ProductListData])
async def list_products_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("products_list")),
    client_id: Optional[int] = Depends(get_scoped_client),
    search: str | None = Query(None, description="Search by name, SKU, code or barcode"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    sort_by: str = Query("created_at"),
    order: str = Query("desc"),
):
    logger.info("List products", extra={"search": search})
    data = await list_products(
        db=db,
        client_id=client_id,
        search=search,
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        order=order,
    )
    return success_response("Products fetched successfully", data)


@router.get("/{product_id}", response_model=APIResponse[ProductOut])
async def get_product_api(
    product_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("products_read")),
    client_id: Optional[int] = Depends(get_scoped_client),
):
    product = await get_product(db, product_id, client_id)
    return success_response("Product fetched successfully", product)


@router.put("/{product_id}", response_model=APIResponse[ProductOut])
async def update_product_api(
    product_id: int,
    payload: ProductUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("products_update")),
    client_id: Optional[int] = Depends(get_scoped_client),
):
    product = await update_product(db, product_id, payload, client_id, user)
    return success_response("Product updated successfully", product)


@router.delete("/{product_id}", response_model=APIResponse)
async def delete_product_api(
    product_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("products_delete")),
    client_id: Optional[int] = Depends(get_scoped_client),
):
    await delete_product(db, product_id, client_id, user)
    return success_response("Product deleted successfully")
