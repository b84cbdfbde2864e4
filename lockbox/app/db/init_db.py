# lockbox/app/db/init_db.py
"""
Create database tables.

    python -m lockbox.app.db.init_db
"""
import asyncio
import logging
import sys
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine

from lockbox.app.db.base import Base, engine as default_engine

# Import models so Base.metadata knows every table
from lockbox.app.models import vault_item  # noqa: F401

logger = logging.getLogger(__name__)


async def init_models(engine: Optional[AsyncEngine] = None, drop: bool = False) -> None:
    engine = engine or default_engine
    try:
        async with engine.begin() as conn:
            if drop:
                await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ready")
    except Exception:
        logger.exception("Could not create database tables")
        raise


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    if sys.platform == "win32":
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())
    asyncio.run(init_models(drop="--drop" in sys.argv))
