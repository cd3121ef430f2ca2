"""
Periodic cleanup of expired sessions and password reset tokens.

Meant to be run from cron, e.g. hourly:
    python cleanup.py
"""

import asyncio
import logging

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.auth import CleanupExpiredUseCase
from src.depends import AsyncSessionLocal, engine, get_auth_config


async def run_cleanup():
    try:
        async with AsyncSessionLocal() as session:
            use_case = CleanupExpiredUseCase(SqlAlchemyUnitOfWork(session), get_auth_config())
            return await use_case.execute()
    finally:
        await engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=ApplicationConfig.LOG_LEVEL.upper())
    asyncio.run(run_cleanup())
