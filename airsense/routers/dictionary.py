"""
Dictionary router.

Static descriptions of each pollutant for the dictionary side panel.
"""

from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from airsense.config import settings
from airsense.crud.dictionary import dictionary as dictionary_crud
from airsense.database import get_db
from airsense.dependencies.rate_limit import limiter
from airsense.schemas.dictionary import DictionaryEntryResponse
from airsense.utils.cache import DICTIONARY_KEY, cache

router = APIRouter(tags=["Dictionary"])


@router.get("/diccionario", response_model=List[DictionaryEntryResponse])
@limiter.limit(settings.rate_limit)
async def get_dictionary(
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """Get every pollutant dictionary entry."""
    return await cache.get_or_load(DICTIONARY_KEY, lambda: dictionary_crud.get_all(db))
