"""
JetSet Backend - Response Normalizer
Reshapes Amadeus JSON into what the client renders: merges destination
metadata into hotels and adds display-only fields (formatted prices,
default amenities, placeholder images, flight summaries).
"""

import re
from typing import Any, Dict, Iterable, List, Optional

from app.models import DataSource, Destination, Hotel, Offer

DEFAULT_AMENITIES = ["WiFi", "Room Service", "Restaurant"]
PLACEHOLDER_IMAGE_URL = "https://source.unsplash.com/random/300x200/?hotel,{hotel_id}"

_DURATION_RE = re.compile(r"^PT(?:(\d+)H)?(?:(\d+)M)?$")


def format_price(total: Any, currency: Optional[str] = "USD") -> str:
    """'$123.45 USD' - the dollar sign is used for every currency."""
    return f"${float(total):.2f} {currency or 'USD'}"


def _text(block: Optional[Dict[str, Any]]) -> Optional[str]:
    if isinstance(block, dict):
        return block.get("text")
    return None


def _cancellation_text(policies: Optional[Dict[str, Any]]) -> Optional[str]:
    if not policies:
        return None
    cancellation = policies.get("cancellation")
    if cancellation is None and policies.get("cancellations"):
        cancellation = policies["cancellations"][0]
    if isinstance(cancellation, dict):
        return _text(cancellation.get("description"))
    return None


def normalize_offer(raw: Dict[str, Any], source: DataSource = DataSource.AMADEUS) -> Offer:
    """Add formattedPrice, roomDescription, cancellationPolicy, bedType, amenities."""
    room = raw.get("room") or {}
    price = dict(raw.get("price") or {})
    price["total"] = str(price.get("total") or price.get("base") or "0")
    price.setdefault("currency", "USD")

    return Offer.model_validate({
        **raw,
        "price": price,
        "formattedPrice": format_price(price["total"], price["currency"]),
        "roomDescription": _text(room.get("description")) or "Standard Room",
        "cancellationPolicy": _cancellation_text(raw.get("policies")) or "Cancellation policy not available",
        "bedType": (room.get("typeEstimated") or {}).get("bedType") or "Standard",
        "amenities": room.get("amenities") or [],
        "source": source,
    })


def cheapest_offer(offers: Iterable[Offer]) -> Optional[Offer]:
    priced = [o for o in offers if o.price and o.price.total]
    if not priced:
        return None
    return min(priced, key=lambda o: float(o.price.total))


def normalize_hotel(
    raw: Dict[str, Any],
    destination: Destination,
    offers: Optional[List[Offer]] = None,
    source: DataSource = DataSource.AMADEUS,
) -> Hotel:
    """Merge city metadata and display defaults into an upstream hotel."""
    hotel_id = raw.get("hotelId") or raw.get("id")
    name = raw.get("name") or f"Hotel {hotel_id}"
    images = raw.get("images") or [PLACEHOLDER_IMAGE_URL.format(hotel_id=hotel_id)]
    address = raw.get("address") or {}

    merged = {
        **raw,
        "hotelId": hotel_id,
        "name": name,
        "cityCode": destination.code,
        "cityName": destination.name,
        "country": destination.country,
        "location": raw.get("location") or f"{destination.name}, {destination.country}",
        "address": {"cityName": destination.name, **address},
        "amenities": raw.get("amenities") or list(DEFAULT_AMENITIES),
        "images": images,
        "image": raw.get("image") or images[0],
        "offers": offers or [],
        "source": source,
    }

    best = cheapest_offer(offers or [])
    if best is not None:
        merged["price"] = best.price.total
        merged["currency"] = best.price.currency
        merged["formattedPrice"] = best.formatted_price

    return Hotel.model_validate(merged)


def normalize_hotel_details(raw: Dict[str, Any]) -> Hotel:
    """Hotel reference data plus formattedAddress/phone/email/description."""
    address = raw.get("address")
    if address:
        parts = [", ".join(address.get("lines") or []), address.get("cityName") or "", address.get("countryName") or address.get("countryCode") or ""]
        formatted_address = ", ".join(part for part in parts if part) or "Address unavailable"
    else:
        formatted_address = "Address unavailable"

    description = raw.get("description")
    if isinstance(description, dict):
        description = _text(description)

    contact = raw.get("contact") or {}
    return Hotel.model_validate({
        **raw,
        "formattedAddress": formatted_address,
        "phone": contact.get("phone") or "Phone unavailable",
        "email": contact.get("email") or "Email unavailable",
        "description": description or "No description available",
    })


def is_test_property(hotel: Dict[str, Any]) -> bool:
    return "TEST" in (hotel.get("name") or "").upper()


def prioritize_hotels(hotels: List[Dict[str, Any]], limit: int = 15) -> List[Dict[str, Any]]:
    """Real properties first (stable), sandbox 'TEST' properties last, truncated."""
    ordered = sorted(hotels, key=is_test_property)
    return ordered[:limit]


# ============================================================
# Flights
# ============================================================

def parse_iso_duration(value: Optional[str]) -> Optional[int]:
    """'PT2H35M' -> 155"""
    if not value:
        return None
    match = _DURATION_RE.match(value)
    if not match:
        return None
    hours, minutes = match.groups()
    return int(hours or 0) * 60 + int(minutes or 0)


def normalize_flight_offer(raw: Dict[str, Any], source: DataSource = DataSource.AMADEUS) -> Dict[str, Any]:
    """Amadeus flight offer plus a flat summary of its outbound itinerary."""
    price = raw.get("price") or {}
    itineraries = raw.get("itineraries") or []
    segments = itineraries[0].get("segments", []) if itineraries else []

    validating = raw.get("validatingAirlineCodes") or []
    carrier = validating[0] if validating else (segments[0].get("carrierCode") if segments else None)

    summary: Dict[str, Any] = {
        "formattedPrice": format_price(price.get("total") or 0, price.get("currency")),
        "carrier": carrier,
        "stops": max(len(segments) - 1, 0),
        "durationMinutes": parse_iso_duration(itineraries[0].get("duration")) if itineraries else None,
        "isRoundTrip": len(itineraries) > 1,
        "dataSource": source.value,
    }
    if segments:
        summary["departure"] = segments[0].get("departure")
        summary["arrival"] = segments[-1].get("arrival")
        summary["flightNumber"] = f"{segments[0].get('carrierCode', '')}{segments[0].get('number', '')}"

    return {**raw, **summary}
