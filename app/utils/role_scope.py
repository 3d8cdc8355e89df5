"""Explicit global / per-client scope for roles.

A role row stores its scope as a nullable ``client_id``. Code that needs to
branch on scope goes through :func:`role_scope` instead of testing for None.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class GlobalScope:
    label = "global"


@dataclass(frozen=True)
class ClientScope:
    client_id: int
    label = "client"


RoleScope = Union[GlobalScope, ClientScope]


def role_scope(role) -> RoleScope:
    if role.client_id is None:
        return GlobalScope()
    return ClientScope(role.client_id)


def scope_from_client(client_id: Optional[int]) -> RoleScope:
    return GlobalScope() if client_id is None else ClientScope(client_id)


def scope_client_id(scope: RoleScope) -> Optional[int]:
    if isinstance(scope, ClientScope):
        return scope.client_id
    return None


def describe_scope(scope: RoleScope) -> str:
    if isinstance(scope, ClientScope):
        return f"client #{scope.client_id}"
    return "global"
