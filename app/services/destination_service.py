"""
JetSet Backend - Destinations reference list
Static popular cities held in memory with an explicit TTL.
"""

import logging
import time
from typing import Callable, List, Optional

from app.config import settings
from app.models import Destination

logger = logging.getLogger(__name__)

POPULAR_DESTINATIONS = [
    ("LON", "London", "United Kingdom"),
    ("PAR", "Paris", "France"),
    ("NYC", "New York", "United States"),
    ("TYO", "Tokyo", "Japan"),
    ("ROM", "Rome", "Italy"),
    ("SYD", "Sydney", "Australia"),
    ("DXB", "Dubai", "United Arab Emirates"),
    ("SIN", "Singapore", "Singapore"),
    ("BCN", "Barcelona", "Spain"),
    ("AMS", "Amsterdam", "Netherlands"),
]

# City codes the search UI can send that are not in the popular list
EXTRA_CITY_INFO = {
    "BOM": ("Mumbai", "India"),
    "DEL": ("Delhi", "India"),
    "BLR": ("Bengaluru", "India"),
    "MAD": ("Madrid", "Spain"),
    "BER": ("Berlin", "Germany"),
}


class DestinationCache:
    """
    Process-lifetime cache of the destinations list.

    Not locked: a concurrent rebuild writes identical data.
    """

    def __init__(self, ttl_seconds: Optional[int] = None, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = settings.destinations_cache_ttl if ttl_seconds is None else ttl_seconds
        self._clock = clock
        self._destinations: Optional[List[Destination]] = None
        self._expires_at: float = 0.0

    def _load(self) -> List[Destination]:
        return [
            Destination(code=code, name=name, country=country)
            for code, name, country in POPULAR_DESTINATIONS
        ]

    def get_all(self) -> List[Destination]:
        now = self._clock()
        if self._destinations is None or now >= self._expires_at:
            logger.debug("Refreshing destinations cache")
            self._destinations = self._load()
            self._expires_at = now + self.ttl_seconds
        return self._destinations

    def lookup(self, code: str) -> Destination:
        """Destination for a city code; unknown codes get a synthesized entry."""
        code = (code or "").upper()
        for destination in self.get_all():
            if destination.code == code:
                return destination
        if code in EXTRA_CITY_INFO:
            name, country = EXTRA_CITY_INFO[code]
            return Destination(code=code, name=name, country=country)
        return Destination(code=code, name=code, country="Unknown")

    def invalidate(self) -> None:
        self._destinations = None
        self._expires_at = 0.0


# Singleton instance
destination_cache = DestinationCache()
