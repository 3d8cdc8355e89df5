from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.users.user_models import User
from app.schemas.auth.auth_schemas import AuthUserOut, LoginData, TokenData
from app.core.security import verify_password, create_access_token
from app.core.config import ACCESS_TOKEN_EXPIRE_MINUTES
from app.core.exceptions import AppException
from app.constants.error_codes import ErrorCode
from app.constants.activity_codes import ActivityCode
from app.utils.activity_helpers import emit_activity
from app.utils.check_roles import granted_actions, is_system_admin
from app.utils.logger import get_logger

logger = get_logger("auth.service")


def build_auth_user(user: User) -> AuthUserOut:
    return AuthUserOut(
        id=user.id,
        username=user.username,
        role_id=user.role_id,
        role_name=user.role.name if user.role else None,
        is_system_admin=is_system_admin(user),
        client_ids=[c.id for c in user.clients],
        permissions=sorted(granted_actions(user)),
        last_login=user.last_login,
    )


# =====================================================
# LOGIN
# =====================================================
async def login_user(db: AsyncSession, username: str, password: str) -> LoginData:
    logger.info("Authenticating user", extra={"username": username})

    result = await db.execute(
        select(User).where(User.username == username)
    )
    user = result.scalars().first()

    if not user or not verify_password(password, user.password_hash):
        logger.warning("Invalid credentials", extra={"username": username})
        raise AppException(
            401,
            "Invalid credentials",
            ErrorCode.AUTH_INVALID_CREDENTIALS,
        )

    if not user.is_active:
        logger.warning("Inactive user login blocked", extra={"username": username})
        raise AppException(
            403,
            "User account is inactive",
            ErrorCode.AUTH_USER_INACTIVE,
        )

    user.last_login = datetime.now(timezone.utc)

    access_token = create_access_token(
        user_id=user.id,
        username=user.username,
        role_id=user.role_id,
        token_version=user.token_version,
    )

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.LOGIN,
    )

    await db.commit()

    logger.info("Login successful", extra={"user_id": user.id})

    return LoginData(
        auth=TokenData(
            access_token=access_token,
            expires_in=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        ),
        user=build_auth_user(user),
    )


# =====================================================
# LOGOUT
# =====================================================
async def logout_user(db: AsyncSession, user: User):
    logger.info("Logging out user", extra={"user_id": user.id})

    # every token issued so far carries the old version
    user.token_version += 1

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.LOGOUT,
    )

    await db.commit()

    logger.info("Logout successful", extra={"user_id": user.id})
