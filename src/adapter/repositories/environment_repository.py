from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.base import storage_operation
from src.app.repositories.environment_repository import IEnvironmentRepository
from src.domain.entities import Environment


class EnvironmentRepository(IEnvironmentRepository):
    """Environment repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, environment_id: UUID) -> Optional[Environment]:
        """Get environment by ID"""
        with storage_operation("ENVIRONMENT_GET_BY_ID", environment_id=environment_id):
            stmt = select(Environment).where(Environment.id == environment_id)
            result = await self.session.exec(stmt)
            return result.one_or_none()
