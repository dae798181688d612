"""
JetSet Backend - Amadeus API Service
OAuth2 token handling and the Amadeus Self-Service endpoints we proxy:

- Token:         POST /v1/security/oauth2/token
- Hotel lookup:  GET  /v1/reference-data/locations/hotels/by-city
                 GET  /v1/reference-data/locations/hotels/by-hotels
- Hotel offers:  GET  /v3/shopping/hotel-offers
- Flight offers: GET  /v2/shopping/flight-offers

API Docs: https://developers.amadeus.com/self-service
"""

import httpx
import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence

from app.config import Settings, settings as default_settings
from app.services.errors import AmadeusAPIError, AmadeusAuthError

logger = logging.getLogger(__name__)


class AmadeusService:
    """
    Thin async client for the Amadeus Self-Service API.

    Every public call acquires a bearer token first. With
    ``amadeus_reuse_token`` enabled the token is cached until 60 seconds
    before it expires; otherwise a new one is requested per call.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or default_settings
        self.base_url = self.settings.amadeus_base_url.rstrip("/")
        self.api_key = self.settings.amadeus_api_key
        self.api_secret = self.settings.amadeus_api_secret
        self.access_token: Optional[str] = None
        self.token_expires: Optional[datetime] = None
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.settings.amadeus_timeout,
            transport=transport,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.api_secret)

    # ============================================================
    # Token Provider
    # ============================================================

    async def get_access_token(self) -> str:
        """Exchange API credentials for a bearer token (client_credentials)."""
        if not self.is_configured:
            raise AmadeusAuthError("Missing Amadeus API credentials")

        if (
            self.settings.amadeus_reuse_token
            and self.access_token
            and self.token_expires
            and datetime.now() < self.token_expires
        ):
            return self.access_token

        try:
            response = await self.client.post(
                "/v1/security/oauth2/token",
                data={
                    "grant_type": "client_credentials",
                    "client_id": self.api_key,
                    "client_secret": self.api_secret
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"}
            )
        except httpx.RequestError as e:
            logger.error(f"Amadeus auth request error: {e}")
            raise AmadeusAuthError(f"Failed to connect to Amadeus API: {e}") from e

        if response.status_code != 200:
            logger.error(f"Amadeus auth failed [{response.status_code}]: {response.text[:500]}")
            raise AmadeusAuthError("Failed to get access token from Amadeus")

        data = response.json()
        token = data.get("access_token")
        if not token:
            raise AmadeusAuthError("Amadeus token response did not contain an access token")

        self.access_token = token
        # Refresh 60 seconds before expiry
        self.token_expires = datetime.now() + timedelta(seconds=data.get("expires_in", 1799) - 60)

        logger.info("Amadeus OAuth2 token obtained successfully")
        return token

    async def _get(
        self,
        path: str,
        params: Dict[str, Any],
        accept: str = "application/json",
    ) -> Dict[str, Any]:
        token = await self.get_access_token()

        try:
            response = await self.client.get(
                path,
                params=params,
                headers={
                    "Authorization": f"Bearer {token}",
                    "Accept": accept
                }
            )
        except httpx.RequestError as e:
            logger.error(f"Amadeus request error on {path}: {e}")
            raise AmadeusAPIError(f"Failed to connect to Amadeus API: {e}") from e

        if response.status_code != 200:
            detail = _first_error_detail(response)
            logger.warning(f"Amadeus {path} failed [{response.status_code}]: {detail or response.text[:500]}")
            raise AmadeusAPIError(
                detail or f"Amadeus request failed with status {response.status_code}",
                status_code=response.status_code,
                detail=detail,
            )

        return response.json()

    # ============================================================
    # Hotel Lookup
    # ============================================================

    async def hotels_by_city(
        self,
        city_code: str,
        radius: Optional[int] = None,
        radius_unit: str = "KM",
        amenities: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """List the hotels Amadeus knows in a city."""
        params = {
            "cityCode": city_code.upper(),
            "radius": radius or self.settings.hotel_search_radius,
            "radiusUnit": radius_unit,
            "hotelSource": "ALL"
        }
        if amenities:
            params["amenities"] = amenities

        data = await self._get("/v1/reference-data/locations/hotels/by-city", params)
        hotels = data.get("data") or []
        logger.info(f"Amadeus returned {len(hotels)} hotels for city {city_code}")
        return hotels

    async def hotel_by_id(self, hotel_id: str) -> Optional[Dict[str, Any]]:
        """Look up a single hotel's reference data."""
        data = await self._get(
            "/v1/reference-data/locations/hotels/by-hotels",
            {"hotelIds": hotel_id}
        )
        hotels = data.get("data") or []
        return hotels[0] if hotels else None

    # ============================================================
    # Offer Fetcher
    # ============================================================

    async def hotel_offers(
        self,
        hotel_ids: Sequence[str],
        check_in_date: str,
        check_out_date: str,
        adults: int = 1,
        children: int = 0,
        room_quantity: int = 1,
        currency: Optional[str] = None,
        best_rate_only: bool = False,
    ) -> List[Dict[str, Any]]:
        """Priced room offers for one or more hotels over a date range."""
        if not hotel_ids:
            return []

        params = {
            "hotelIds": ",".join(hotel_ids),
            "checkInDate": check_in_date,
            "checkOutDate": check_out_date,
            "adults": adults,
            "roomQuantity": room_quantity,
            "currency": currency or self.settings.default_currency,
            "bestRateOnly": "true" if best_rate_only else "false"
        }
        if children:
            params["children"] = children

        data = await self._get(
            "/v3/shopping/hotel-offers",
            params,
            accept="application/vnd.amadeus+json"
        )
        return data.get("data") or []

    # ============================================================
    # Flights
    # ============================================================

    async def flight_offers(
        self,
        origin: str,
        destination: str,
        departure_date: str,
        return_date: Optional[str] = None,
        adults: int = 1,
        travel_class: Optional[str] = None,
        currency: Optional[str] = None,
        max_results: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Flight Offers Search"""
        params = {
            "originLocationCode": origin.upper(),
            "destinationLocationCode": destination.upper(),
            "departureDate": departure_date,
            "adults": adults,
            "currencyCode": currency or self.settings.default_currency,
            "max": max_results or self.settings.max_flight_results
        }
        if return_date:
            params["returnDate"] = return_date
        if travel_class:
            params["travelClass"] = travel_class.upper()

        data = await self._get("/v2/shopping/flight-offers", params)
        return data.get("data") or []

    async def close(self):
        """Close the HTTP client"""
        await self.client.aclose()


def _first_error_detail(response: httpx.Response) -> Optional[str]:
    """Pull ``errors[0].detail`` (or title) out of an Amadeus error body."""
    try:
        body = response.json()
    except ValueError:
        return None
    errors = body.get("errors") if isinstance(body, dict) else None
    if not errors:
        return None
    first = errors[0]
    return first.get("detail") or first.get("title")


# Singleton instance
amadeus_service = AmadeusService()
