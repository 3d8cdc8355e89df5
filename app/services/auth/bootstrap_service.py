"""Idempotent first-run seed: permissions, the system administrator role and its user."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.users.role_models import Role, Permission
from app.models.users.user_models import User
from app.core.config import (
    SYSTEM_ADMIN_ROLE,
    BOOTSTRAP_ADMIN_USERNAME,
    BOOTSTRAP_ADMIN_PASSWORD,
)
from app.core.security import hash_password
from app.services.users.permission_service import apply_permission_table
from app.utils.logger import get_logger

logger = get_logger(__name__)

LEGACY_ADMIN_ROLE = "admin"


async def _ensure_system_admin_role(db: AsyncSession) -> Role:
    role = await db.scalar(
        select(Role).where(Role.name == SYSTEM_ADMIN_ROLE, Role.client_id.is_(None))
    )

    if role is None:
        # older databases named it "admin"; it may also have been tied to a client
        role = await db.scalar(
            select(Role).where(Role.name == LEGACY_ADMIN_ROLE).order_by(Role.id)
        )
        if role is not None:
            logger.info("Renaming legacy admin role", extra={"role_id": role.id})
            role.name = SYSTEM_ADMIN_ROLE

    if role is None:
        role = Role(
            name=SYSTEM_ADMIN_ROLE,
            description="System administrator (all permissions, all clients)",
        )
        db.add(role)
        logger.info("System admin role created")

    role.client_id = None
    role.permissions = list(
        (await db.execute(select(Permission).order_by(Permission.id))).scalars().all()
    )
    await db.flush()
    return role


async def _ensure_admin_user(db: AsyncSession, role: Role) -> User:
    user = await db.scalar(
        select(User).where(User.username == BOOTSTRAP_ADMIN_USERNAME)
    )

    if user is None:
        user = User(
            username=BOOTSTRAP_ADMIN_USERNAME,
            password_hash=hash_password(BOOTSTRAP_ADMIN_PASSWORD),
            is_active=True,
            token_version=0,
        )
        db.add(user)
        logger.info("Bootstrap admin user created", extra={"username": BOOTSTRAP_ADMIN_USERNAME})

    user.role_id = role.id
    await db.flush()
    return user


async def seed_initial_data(db: AsyncSession) -> dict:
    sync = await apply_permission_table(db)
    role = await _ensure_system_admin_role(db)
    user = await _ensure_admin_user(db, role)

    await db.commit()

    summary = {
        "permissions": sync.total,
        "role_id": role.id,
        "admin_user_id": user.id,
    }
    logger.info("Initial data seeded", extra=summary)
    return summary
