from abc import ABC, abstractmethod
from typing import List
import logging

from models.job import RawJobRecord
from models.request import SourceQuery
from utils.data_utils import clean_text


class BaseSource(ABC):
    """Base class for job sources"""

    name = "base"

    def applies_to(self, location: str) -> bool:
        """
        Whether this source should be asked about a location

        Args:
            location: Location from the search request

        Returns:
            True if the source serves the location
        """
        return True

    async def search(self, query: SourceQuery) -> List[RawJobRecord]:
        """
        Fetch jobs for the query, never raising

        Args:
            query: The search criteria

        Returns:
            List of RawJobRecord objects, empty on any failure
        """
        try:
            return await self.fetch(query)
        except Exception as e:
            logging.error(f"{self.name} search error: {str(e)}")
            return []

    @abstractmethod
    async def fetch(self, query: SourceQuery) -> List[RawJobRecord]:
        """Provider specific lookup; may raise"""
        pass

    def clean_text(self, text: str) -> str:
        return clean_text(text)
