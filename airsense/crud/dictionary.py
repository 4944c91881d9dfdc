"""Pollutant dictionary queries."""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from airsense.crud.base import CRUDBase
from airsense.models.dictionary_entry import DictionaryEntry


class CRUDDictionary(CRUDBase[DictionaryEntry]):
    """
    Queries for the DictionaryEntry model.
    """

    async def get_all(self, db: AsyncSession) -> List[dict]:
        """Get every dictionary entry, in the order they were curated."""
        result = await db.execute(
            select(
                DictionaryEntry.symbol.label("simbolo"),
                DictionaryEntry.name.label("nombre"),
                DictionaryEntry.color_hex.label("color_hex"),
                DictionaryEntry.what_is_it.label("que_es"),
                DictionaryEntry.causes.label("causas"),
                DictionaryEntry.consequences.label("consecuencias"),
            ).order_by(DictionaryEntry.id)
        )
        return [dict(row) for row in result.mappings().all()]


dictionary = CRUDDictionary(DictionaryEntry)
