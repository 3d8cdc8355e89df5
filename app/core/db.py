# app/core/db.py

import ssl
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import NullPool
from sqlalchemy import event

from app.core.config import (
    DATABASE_URL,
    DB_TYPE,
    DB_POOL_SIZE,
    DB_MAX_OVERFLOW,
    DB_POOL_TIMEOUT,
    DB_SSL_VERIFY,
    DB_ECHO_POOL,
    APP_ENV,
)

Base = declarative_base()


# =====================================================
# ENGINE
# =====================================================
def _connection_options() -> tuple[dict, dict]:
    """(connect_args, pool_args) for the configured backend."""
    if DB_TYPE == "postgres":
        ssl_ctx = ssl.create_default_context()
        if not DB_SSL_VERIFY:
            ssl_ctx.check_hostname = False
            ssl_ctx.verify_mode = ssl.CERT_NONE

        return {"ssl": ssl_ctx}, {
            "pool_size": DB_POOL_SIZE,
            "max_overflow": DB_MAX_OVERFLOW,
            "pool_timeout": DB_POOL_TIMEOUT,
            "pool_pre_ping": True,
        }

    if DB_TYPE == "sqlite":
        # aiosqlite connections are bound to the loop that opened them
        return {"check_same_thread": False}, {"poolclass": NullPool}

    return {}, {}


connect_args, pool_args = _connection_options()

engine = create_async_engine(
    DATABASE_URL,
    echo=False,
    echo_pool=DB_ECHO_POOL,
    connect_args=connect_args,
    **pool_args,
)

# warehouse and exclusion deletes rely on ON DELETE actions
if DB_TYPE == "sqlite":
    @event.listens_for(engine.sync_engine, "connect")
    def enable_sqlite_foreign_keys(dbapi_connection, _):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# =====================================================
# SESSION
# =====================================================
AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session


import app.models  # noqa


# =====================================================
# DEV ONLY: SCHEMA MANAGEMENT
# =====================================================
def _ensure_development(action: str):
    if APP_ENV != "development":
        raise RuntimeError(f"{action} is forbidden outside development")


async def init_models():
    _ensure_development("init_models()")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def reset_models():
    """Drop and recreate every table. Used by the test suite."""
    _ensure_development("reset_models()")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
