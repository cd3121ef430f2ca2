from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Environment


class IEnvironmentRepository(ABC):
    """Environment repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, environment_id: UUID) -> Optional[Environment]:
        """Get environment by ID"""
        pass
