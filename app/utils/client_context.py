from typing import Optional

from fastapi import Depends, Header

from app.core.exceptions import AppException
from app.constants.error_codes import ErrorCode
from app.models.users.user_models import User
from app.utils.check_roles import is_system_admin
from app.utils.get_user import get_current_user
from app.utils.logger import get_logger

logger = get_logger(__name__)

CLIENT_HEADER = "X-Client-Id"


def parse_client_id(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        value = int(raw.strip())
    except ValueError:
        return None
    return value if value > 0 else None


# =====================================================
# TENANT CONTEXT
# =====================================================
async def get_client_context(
    user: User = Depends(get_current_user),
    x_client_id: Optional[str] = Header(None, alias=CLIENT_HEADER),
) -> Optional[int]:
    """Selected client for this request, or None for the all-clients context."""
    client_id = parse_client_id(x_client_id)

    if client_id is None or is_system_admin(user):
        return client_id

    if client_id not in {c.id for c in user.clients}:
        logger.warning(
            "Client access denied",
            extra={"user_id": user.id, "client_id": client_id},
        )
        raise AppException(
            403,
            "You do not have access to this client",
            ErrorCode.CLIENT_ACCESS_DENIED,
        )

    return client_id


async def get_scoped_client(
    user: User = Depends(get_current_user),
    client_id: Optional[int] = Depends(get_client_context),
) -> Optional[int]:
    # only the system administrator may work across all clients
    if client_id is None and not is_system_admin(user):
        raise AppException(
            400,
            "Client must be selected",
            ErrorCode.CLIENT_CONTEXT_REQUIRED,
        )
    return client_id


def require_client(action: str):
    async def client_checker(
        client_id: Optional[int] = Depends(get_client_context),
    ) -> int:
        if client_id is None:
            raise AppException(
                400,
                f"Client must be selected to {action}.",
                ErrorCode.CLIENT_CONTEXT_REQUIRED,
            )
        return client_id
    return client_checker
