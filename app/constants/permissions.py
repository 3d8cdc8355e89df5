"""Declarative route -> permission table.

Routes guard themselves with ``require_permission(<action>)``; the sync job
writes this table into the ``permissions`` table. Routes restricted to the
system administrator (clients, permission sync) are not listed.
"""

from typing import NamedTuple


class PermissionDefinition(NamedTuple):
    method: str
    path: str
    resource: str
    action: str

    @property
    def description(self) -> str:
        return f"{self.method} {self.path}"


def _crud(resource: str, path: str) -> list[PermissionDefinition]:
    return [
        PermissionDefinition("GET", path, resource, f"{resource}_list"),
        PermissionDefinition("GET", f"{path}/{{id}}", resource, f"{resource}_read"),
        PermissionDefinition("POST", path, resource, f"{resource}_create"),
        PermissionDefinition("PUT", f"{path}/{{id}}", resource, f"{resource}_update"),
        PermissionDefinition("DELETE", f"{path}/{{id}}", resource, f"{resource}_delete"),
    ]


PERMISSION_DEFINITIONS: list[PermissionDefinition] = [
    *_crud("users", "/api/users"),

    *_crud("roles", "/api/roles"),
    PermissionDefinition("POST", "/api/roles/{id}/permissions", "roles", "roles_manage_permissions"),

    PermissionDefinition("GET", "/api/permissions", "permissions", "permissions_list"),
    PermissionDefinition("GET", "/api/permissions/{id}", "permissions", "permissions_read"),

    *_crud("locations", "/api/locations"),
    *_crud("warehouses", "/api/warehouses"),

    PermissionDefinition("GET", "/api/warehouse-exclusions/warehouse/{warehouseId}", "warehouse_exclusions", "warehouse_exclusions_list"),
    PermissionDefinition("GET", "/api/warehouse-exclusions/warehouse/{warehouseId}/check", "warehouse_exclusions", "warehouse_exclusions_check"),
    PermissionDefinition("GET", "/api/warehouse-exclusions/{id}", "warehouse_exclusions", "warehouse_exclusions_read"),
    PermissionDefinition("POST", "/api/warehouse-exclusions", "warehouse_exclusions", "warehouse_exclusions_create"),
    PermissionDefinition("PUT", "/api/warehouse-exclusions/{id}", "warehouse_exclusions", "warehouse_exclusions_update"),
    PermissionDefinition("DELETE", "/api/warehouse-exclusions/{id}", "warehouse_exclusions", "warehouse_exclusions_delete"),

    *_crud("products", "/api/products"),
    *_crud("orders", "/api/orders"),

    PermissionDefinition("GET", "/api/activities", "activities", "activities_list"),
]

PERMISSION_ACTIONS = frozenset(p.action for p in PERMISSION_DEFINITIONS)
