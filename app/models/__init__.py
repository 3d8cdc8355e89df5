# Tenants
from app.models.tenants.client_models import Client, user_clients

# Users and auth
from app.models.users.user_models import User
from app.models.users.role_models import Role, Permission, role_permissions

# Storage
from app.models.locations.location_models import Location
from app.models.warehouses.warehouse_models import Warehouse, WarehouseExclusion

# Masters
from app.models.masters.product_models import Product

# Orders
from app.models.orders.order_models import Order

# Support
from app.models.support.activity_models import UserActivity
