"""
Base database model with common functionality.

The tables are owned by the ingestion pipeline, so models map onto the
existing column names and carry no audit timestamps of their own.
"""

from airsense.database import Base


class BaseModel(Base):
    """
    Base model for all read-only AirSense tables.

    Subclasses declare their own primary key because each table names it
    differently (``id_municipio``, ``id_estacion``...); the attribute is
    always exposed as ``id``.
    """

    __abstract__ = True

    def __repr__(self) -> str:
        """String representation of the model instance."""
        return f"<{self.__class__.__name__}(id={self.id})>"
