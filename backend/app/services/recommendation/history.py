"""
Interaction history interface read by the recommendation engine
"""
from abc import ABC, abstractmethod
from typing import List

from app.schemas.movie import CatalogMovie


class HistoryStore(ABC):
    """Snapshot reads of a user's liked and disliked movies"""

    @abstractmethod
    def get_liked(self, user_id: int) -> List[CatalogMovie]:
        pass

    @abstractmethod
    def get_disliked(self, user_id: int) -> List[CatalogMovie]:
        pass

    @abstractmethod
    def count_liked(self, user_id: int) -> int:
        pass

    @abstractmethod
    def count_disliked(self, user_id: int) -> int:
        pass
