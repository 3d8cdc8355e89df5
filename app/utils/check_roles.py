from fastapi import Depends

from app.core.config import SYSTEM_ADMIN_ROLE
from app.core.exceptions import AppException
from app.constants.error_codes import ErrorCode
from app.utils.get_user import get_current_user
from app.utils.role_scope import GlobalScope, role_scope
from app.models.users.user_models import User


def is_system_admin(user: User) -> bool:
    role = user.role
    if role is None:
        return False
    return role.name == SYSTEM_ADMIN_ROLE and isinstance(role_scope(role), GlobalScope)


def granted_actions(user: User) -> set[str]:
    if user.role is None:
        return set()
    return {p.name for p in user.role.permissions}


def require_permission(action: str):
    async def permission_checker(user: User = Depends(get_current_user)):
        if is_system_admin(user):
            return user
        if action not in granted_actions(user):
            raise AppException(
                403,
                "Permission denied",
                ErrorCode.PERMISSION_DENIED,
                {"action": action},
            )
        return user
    return permission_checker


async def require_system_admin(user: User = Depends(get_current_user)):
    if not is_system_admin(user):
        raise AppException(
            403,
            "Only the system administrator may do this",
            ErrorCode.PERMISSION_DENIED,
        )
    return user
