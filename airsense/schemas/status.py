"""Status and health schemas."""

from typing import Optional

from airsense.schemas.base import BaseSchema


class HealthResponse(BaseSchema):
    status: str
    message: Optional[str] = None
