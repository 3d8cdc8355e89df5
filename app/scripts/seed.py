"""Seed permissions, the systemadmin role and the bootstrap admin user.

    python -m app.scripts.seed
"""

import asyncio

from app.core.db import AsyncSessionLocal
from app.core.logging import setup_logging
from app.services.auth.bootstrap_service import seed_initial_data
from app.utils.logger import get_logger

logger = get_logger(__name__)


async def main():
    async with AsyncSessionLocal() as session:
        summary = await seed_initial_data(session)
    logger.info("Seed complete", extra=summary)


if __name__ == "__main__":
    setup_logging()
    asyncio.run(main())
