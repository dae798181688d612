"""
JetSet Backend - Flight Service
Flight Offers Search with the same degrade-to-placeholder policy as hotels.
"""

import logging
from typing import Any, Dict, List, Optional

from app.config import Settings, settings as default_settings
from app.models import DataSource
from app.services.amadeus_service import AmadeusService, amadeus_service
from app.services.mock_service import MockTravelService, mock_travel_service
from app.services.normalizer import normalize_flight_offer
from app.utils.dates import format_date

logger = logging.getLogger(__name__)

TRAVEL_CLASSES = {
    "economy": "ECONOMY",
    "premium": "PREMIUM_ECONOMY",
    "premium economy": "PREMIUM_ECONOMY",
    "premium_economy": "PREMIUM_ECONOMY",
    "business": "BUSINESS",
    "first": "FIRST",
}


def map_travel_class(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return TRAVEL_CLASSES.get(value.lower(), "ECONOMY")


class FlightService:
    def __init__(
        self,
        amadeus: AmadeusService,
        mock: MockTravelService,
        settings: Optional[Settings] = None,
    ):
        self.amadeus = amadeus
        self.mock = mock
        self.settings = settings or default_settings

    async def search_flights(
        self,
        origin: str,
        destination: str,
        depart_date: str,
        return_date: Optional[str] = None,
        travelers: int = 1,
        travel_class: Optional[str] = None,
        max_results: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Flight offers for a route; ``{"data": [...], "source": ...}``.

        Raises InvalidDateError for unparseable dates.
        """
        departure = format_date(depart_date)
        returning = format_date(return_date) if return_date else None
        logger.info(f"Searching flights {origin} -> {destination} on {departure} (return {returning}) for {travelers}")

        offers: List[Dict[str, Any]] = []
        try:
            raw_offers = await self.amadeus.flight_offers(
                origin,
                destination,
                departure,
                return_date=returning,
                adults=travelers,
                travel_class=map_travel_class(travel_class),
                max_results=max_results,
            )
            offers = [normalize_flight_offer(o) for o in raw_offers]
        except Exception as e:
            logger.warning(f"Flight search failed for {origin}-{destination}, using fallback data: {e}")

        if offers:
            return {"data": offers, "source": DataSource.AMADEUS.value}

        if not self.settings.enable_fallback_data:
            return {"data": [], "source": DataSource.AMADEUS.value}

        offers = self.mock.generate_flight_offers(
            origin, destination, departure, adults=travelers, return_date=returning
        )
        logger.info(f"Generated {len(offers)} placeholder flight offers for {origin}-{destination}")
        return {"data": offers, "source": DataSource.FALLBACK.value}


# Singleton instance
flight_service = FlightService(amadeus_service, mock_travel_service)
