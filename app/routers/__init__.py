# app/routers/__init__.py

from .auth.auth_router import router as auth_router
from .auth.activity_router import router as activity_router

from .users.user_router import router as user_router
from .users.role_router import router as role_router
from .users.permission_router import router as permission_router

from .tenants.client_router import router as client_router
from .locations.location_router import router as location_router

from .warehouses.warehouse_router import router as warehouse_router
from .warehouses.exclusion_router import router as exclusion_router

from .masters.product_router import router as product_router
from .orders.order_router import router as order_router


__all__ = [
"auth_router",
"activity_router",

"user_router",
"role_router",
"permission_router",

"client_router",
"location_router",

"warehouse_router",
"exclusion_router",

"product_router",
"order_router",
]
