"""
Base Pydantic schemas.

This module contains the base schema with the common configuration that
other schemas inherit from.
"""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    All other schemas should inherit from this class.
    """

    model_config = ConfigDict(from_attributes=True)
