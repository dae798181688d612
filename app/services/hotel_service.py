"""
JetSet Backend - Hotel Service

Search pipeline:

1. Hotel Lookup   - hotel ids for the destination city
2. Offer Fetcher  - priced offers for a batch of those hotels
3. Normalizer     - merge city metadata, add display fields

Any exception or empty result along the way is replaced by generated
placeholder hotels (when ``enable_fallback_data`` is on). There is no
retry and no distinction between transient and permanent failures.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from app.config import Settings, settings as default_settings
from app.models import DataSource, Destination, Hotel, HotelOffers, HotelSearchResult
from app.services.amadeus_service import AmadeusService, amadeus_service
from app.services.destination_service import DestinationCache, destination_cache
from app.services.errors import HotelNotFoundError, TravelServiceError
from app.services.mock_service import MockTravelService, mock_travel_service
from app.services.normalizer import (
    normalize_hotel, normalize_hotel_details, normalize_offer, prioritize_hotels
)
from app.utils.dates import format_date

logger = logging.getLogger(__name__)

# Ids produced by MockTravelService.generate_hotels, e.g. "par-3"
FALLBACK_HOTEL_ID = re.compile(r"^([a-z]{3})-(\d+)$")


class HotelService:
    """Hotel lookup, offers, details, availability and the search pipeline."""

    def __init__(
        self,
        amadeus: AmadeusService,
        destinations: DestinationCache,
        mock: MockTravelService,
        settings: Optional[Settings] = None,
    ):
        self.amadeus = amadeus
        self.destinations = destinations
        self.mock = mock
        self.settings = settings or default_settings

    def get_destinations(self) -> List[Destination]:
        return self.destinations.get_all()

    async def list_hotels(self, city_code: str) -> List[Dict[str, Any]]:
        """Raw Amadeus hotel list for a city."""
        logger.info(f"Getting hotels for city: {city_code}")
        return await self.amadeus.hotels_by_city(city_code)

    # ============================================================
    # Search / fallback pipeline
    # ============================================================

    async def search_hotels(
        self,
        destination: str,
        check_in_date: str,
        check_out_date: str,
        adults: int = 2,
    ) -> HotelSearchResult:
        """
        Hotels with offers in a city for the given stay.

        Raises InvalidDateError for unparseable dates; every other failure
        degrades to fallback data.
        """
        check_in = format_date(check_in_date)
        check_out = format_date(check_out_date)
        city = self.destinations.lookup(destination)

        logger.info(f"Searching hotels in {city.code} from {check_in} to {check_out} for {adults} adults")

        try:
            hotels = await self._search_upstream(city, check_in, check_out, adults)
        except Exception as e:
            logger.warning(f"Hotel search failed for {city.code}, using fallback data: {e}")
            hotels = []
        else:
            if hotels:
                logger.info(f"Search successful, found {len(hotels)} hotels in {city.code}")
                return HotelSearchResult(
                    data=hotels,
                    source=DataSource.AMADEUS,
                    checkInDate=check_in,
                    checkOutDate=check_out
                )
            logger.info(f"No hotels with offers in {city.code}, using fallback data")

        if not self.settings.enable_fallback_data:
            return HotelSearchResult(data=[], source=DataSource.AMADEUS, checkInDate=check_in, checkOutDate=check_out)

        hotels = self.mock.generate_hotels(city)
        logger.info(f"Generated {len(hotels)} placeholder hotels for {city.code}")
        return HotelSearchResult(
            data=hotels,
            source=DataSource.FALLBACK,
            checkInDate=check_in,
            checkOutDate=check_out
        )

    async def _search_upstream(
        self,
        city: Destination,
        check_in: str,
        check_out: str,
        adults: int,
    ) -> List[Hotel]:
        city_hotels = await self.amadeus.hotels_by_city(city.code)
        if not city_hotels:
            return []

        candidates = prioritize_hotels(city_hotels, limit=self.settings.hotel_offer_batch_size)
        by_id = {h["hotelId"]: h for h in candidates if h.get("hotelId")}

        offer_data = await self.amadeus.hotel_offers(
            list(by_id),
            check_in_date=check_in,
            check_out_date=check_out,
            adults=adults,
        )

        hotels = []
        for item in offer_data:
            if item.get("available") is False or not item.get("offers"):
                continue
            upstream = item.get("hotel") or {}
            raw = {**by_id.get(upstream.get("hotelId"), {}), **upstream}
            offers = [normalize_offer(o) for o in item["offers"]]
            hotels.append(normalize_hotel(raw, city, offers))

        return hotels[:self.settings.max_hotel_results]

    # ============================================================
    # Details / offers / availability
    # ============================================================

    async def get_hotel_details(self, hotel_id: str) -> Hotel:
        logger.info(f"Getting details for hotel ID: {hotel_id}")

        fallback = self._fallback_hotel(hotel_id)
        if fallback is not None:
            return normalize_hotel_details(fallback.model_dump(by_alias=True))

        try:
            raw = await self.amadeus.hotel_by_id(hotel_id)
        except TravelServiceError as e:
            raise HotelNotFoundError(f"Hotel not found: {e.message}") from e

        if not raw:
            raise HotelNotFoundError("Hotel not found")

        return normalize_hotel_details(raw)

    def _fallback_hotel(self, hotel_id: str) -> Optional[Hotel]:
        """Details for an id that came from generated placeholder data."""
        if not self.settings.enable_fallback_data:
            return None
        match = FALLBACK_HOTEL_ID.match(hotel_id)
        if not match:
            return None
        code, index = match.group(1), int(match.group(2))
        hotels = self.mock.generate_hotels(self.destinations.lookup(code))
        if index >= len(hotels):
            return None
        return hotels[index]

    async def get_hotel_offers(
        self,
        hotel_id: str,
        check_in_date: str,
        check_out_date: str,
        adults: int = 1,
        children: int = 0,
        best_rate_only: bool = False,
    ) -> HotelOffers:
        check_in = format_date(check_in_date)
        check_out = format_date(check_out_date)
        logger.info(f"Getting hotel offers for {hotel_id} ({check_in} - {check_out})")

        try:
            data = await self.amadeus.hotel_offers(
                [hotel_id],
                check_in_date=check_in,
                check_out_date=check_out,
                adults=adults,
                children=children,
                best_rate_only=best_rate_only,
            )
        except TravelServiceError as e:
            if not self.settings.enable_fallback_data:
                raise
            logger.warning(f"Offers unavailable for {hotel_id}, generating fallback offers: {e}")
            return HotelOffers(
                hotel={"hotelId": hotel_id},
                offers=self.mock.generate_offers(hotel_id, check_in, check_out),
                source=DataSource.FALLBACK
            )

        if not data:
            logger.info(f"No offers found for hotel: {hotel_id}")
            return HotelOffers(hotel=None, offers=[])

        hotel_data = data[0]
        offers = [normalize_offer(o) for o in hotel_data.get("offers") or []]
        logger.info(f"Found {len(offers)} offers for hotel {hotel_id}")
        return HotelOffers(hotel=hotel_data.get("hotel"), offers=offers)

    async def check_availability(
        self,
        destination: str,
        check_in_date: str,
        check_out_date: str,
        travelers: int = 1,
    ) -> Optional[HotelOffers]:
        """Best-rate offers of the first room-service hotel in a city, or None."""
        check_in = format_date(check_in_date)
        check_out = format_date(check_out_date)

        hotels = await self.amadeus.hotels_by_city(destination, amenities="ROOM_SERVICE")
        if not hotels:
            raise HotelNotFoundError("No hotels found in this location")

        hotel_id = hotels[0]["hotelId"]
        data = await self.amadeus.hotel_offers(
            [hotel_id],
            check_in_date=check_in,
            check_out_date=check_out,
            adults=travelers,
            best_rate_only=True,
        )
        if not data or not data[0].get("offers"):
            return None

        return HotelOffers(
            hotel=data[0].get("hotel"),
            offers=[normalize_offer(o) for o in data[0]["offers"]]
        )


# Singleton instance
hotel_service = HotelService(amadeus_service, destination_cache, mock_travel_service)
