"""
Shared lookups for the query classes.

The dataset is written by the ingestion pipeline only; nothing in this
package creates, updates or deletes rows.
"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from airsense.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class CRUDBase(Generic[ModelType]):
    """
    Primary-key lookups for one model.

    Args:
        model: Mapped class whose ``id`` attribute is the primary key
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        """
        Fetch one row by primary key.

        Returns:
            Model instance or None
        """
        result = await db.execute(select(self.model).where(self.model.id == id))
        return result.scalars().first()
