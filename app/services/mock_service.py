"""
JetSet Backend - Mock Data Service
Placeholder hotels, room offers and flight offers used when Amadeus
fails or returns nothing.
"""

from datetime import datetime, timedelta
from typing import List, Optional
import random

from app.models import DataSource, Destination, Hotel, Offer
from app.services.normalizer import normalize_flight_offer, normalize_hotel, normalize_offer
from app.utils.dates import count_nights, format_date, parse_date


HOTEL_NAME_TEMPLATES = [
    "{city} Grand Hotel",
    "{city} Plaza Resort",
    "Royal {city} Hotel",
    "{city} Luxury Suites",
    "{city} Executive Inn",
    "{city} Palace Hotel",
    "{city} Continental",
    "{city} International",
]

HOTEL_IMAGES = [
    "https://images.unsplash.com/photo-1566073771259-6a8506099945?ixlib=rb-4.0.3&auto=format&fit=crop&w=1470&q=80",
    "https://images.unsplash.com/photo-1551882547-ff40c63fe5fa?auto=format&fit=crop&w=1470&q=80",
    "https://images.unsplash.com/photo-1590490360182-c33d57733427?auto=format&fit=crop&w=1470&q=80",
    "https://images.unsplash.com/photo-1582719508461-905c673771fd?auto=format&fit=crop&w=1600&q=80",
    "https://images.unsplash.com/photo-1564501049412-61c2a3083791?auto=format&fit=crop&w=1470&q=80",
]

AMENITY_SETS = [
    ["WiFi", "Room Service", "Restaurant"],
    ["WiFi", "Pool", "Fitness Center"],
    ["WiFi", "Breakfast", "Parking"],
    ["WiFi", "Spa", "Bar"],
    ["WiFi", "Airport Shuttle", "Conference Room"],
]

ROOM_TYPES = ["STANDARD_ROOM", "DELUXE_ROOM", "EXECUTIVE_ROOM", "SUITE"]
BOARD_TYPES = ["ROOM_ONLY", "BREAKFAST_INCLUDED", "HALF_BOARD", "FULL_BOARD"]

CARRIERS = [
    ("AI", "Air India"),
    ("6E", "IndiGo"),
    ("UK", "Vistara"),
    ("BA", "British Airways"),
    ("LH", "Lufthansa"),
    ("AF", "Air France"),
    ("EK", "Emirates"),
    ("SQ", "Singapore Airlines"),
]


class MockTravelService:
    """Generates plausible placeholder travel data from static templates."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    # ============================================================
    # Hotels
    # ============================================================

    def generate_hotels(self, destination: Destination, count: Optional[int] = None) -> List[Hotel]:
        """
        5-8 placeholder hotels named after the destination.

        Draws are seeded from the city code, so a listing and a later
        details lookup agree on every hotel.
        """
        rng = random.Random(destination.code.upper())
        generated = rng.randint(5, 8)
        count = min(generated if count is None else count, len(HOTEL_NAME_TEMPLATES))

        hotels = []
        for i in range(count):
            image = HOTEL_IMAGES[i % len(HOTEL_IMAGES)]
            price = rng.random() * 300 + 100
            raw = {
                "hotelId": f"{destination.code.lower()}-{i}",
                "id": f"{destination.code.lower()}-{i}",
                "name": HOTEL_NAME_TEMPLATES[i].format(city=destination.name),
                "rating": round(rng.random() + 4, 1),
                "image": image,
                "images": [image],
                "amenities": list(AMENITY_SETS[i % len(AMENITY_SETS)]),
                "address": {
                    "cityName": destination.name,
                    "countryName": destination.country
                },
            }
            hotel = normalize_hotel(raw, destination, source=DataSource.FALLBACK)
            hotel.price = f"{price:.2f}"
            hotel.currency = "USD"
            hotel.formatted_price = f"${price:.2f} USD"
            hotels.append(hotel)

        return hotels

    def generate_offers(self, hotel_id: str, check_in_date: str, check_out_date: str) -> List[Offer]:
        """3-5 room offers with rising room category and price."""
        nights = count_nights(check_in_date, check_out_date)
        base_price = self.rng.randint(100, 399)
        offer_count = self.rng.randint(3, 5)

        offers = []
        for i in range(offer_count):
            room_type = ROOM_TYPES[i % len(ROOM_TYPES)]
            nightly = base_price * (1 + i * 0.2)
            total = nightly * nights
            raw = {
                "id": f"offer-{hotel_id}-{i}",
                "checkInDate": format_date(check_in_date),
                "checkOutDate": format_date(check_out_date),
                "roomType": room_type,
                "boardType": self.rng.choice(BOARD_TYPES),
                "price": {
                    "total": f"{total:.2f}",
                    "currency": "USD",
                    "base": f"{nightly:.2f}",
                    "taxes": f"{total * 0.1:.2f}"
                },
                "cancellable": self.rng.random() > 0.3,
                "room": {
                    "type": room_type,
                    "typeEstimated": {
                        "category": room_type,
                        "beds": 1 if i < 2 else 2,
                        "bedType": "KING" if i < 2 else "TWIN"
                    },
                    "description": {
                        "text": f"Spacious {room_type.replace('_', ' ', 1).lower()} with all amenities."
                    }
                },
            }
            offers.append(normalize_offer(raw, source=DataSource.FALLBACK))

        return offers

    # ============================================================
    # Flights
    # ============================================================

    def generate_flight_offers(
        self,
        origin: str,
        destination: str,
        departure_date: str,
        adults: int = 1,
        return_date: Optional[str] = None,
    ) -> List[dict]:
        """4-8 Amadeus-shaped flight offers between two airports."""
        depart_day = parse_date(departure_date)
        return_day = parse_date(return_date) if return_date else None
        offers = []

        for i in range(self.rng.randint(4, 8)):
            carrier_code, _ = self.rng.choice(CARRIERS)
            stops = self.rng.choices([0, 1], weights=[75, 25])[0]
            per_adult = self.rng.randint(80, 650)
            total = per_adult * adults * (2 if return_day else 1)

            itineraries = [self._itinerary(origin, destination, depart_day, carrier_code, stops)]
            if return_day:
                itineraries.append(self._itinerary(destination, origin, return_day, carrier_code, stops))

            raw = {
                "type": "flight-offer",
                "id": str(i + 1),
                "source": "GDS",
                "oneWay": return_day is None,
                "lastTicketingDate": depart_day.strftime("%Y-%m-%d"),
                "numberOfBookableSeats": self.rng.randint(1, 9),
                "itineraries": itineraries,
                "price": {
                    "currency": "USD",
                    "total": f"{total:.2f}",
                    "base": f"{total * 0.85:.2f}",
                    "grandTotal": f"{total:.2f}"
                },
                "validatingAirlineCodes": [carrier_code],
                "travelerPricings": [
                    {
                        "travelerId": str(n + 1),
                        "travelerType": "ADULT",
                        "price": {"currency": "USD", "total": f"{total / adults:.2f}"}
                    }
                    for n in range(adults)
                ],
            }
            offers.append(normalize_flight_offer(raw, source=DataSource.FALLBACK))

        return offers

    def _itinerary(self, origin: str, destination: str, day, carrier_code: str, stops: int) -> dict:
        hour = self.rng.randint(5, 21)
        minute = self.rng.choice([0, 15, 30, 45])
        departure = datetime(day.year, day.month, day.day, hour, minute)
        leg_minutes = self.rng.randint(70, 300)

        airports = [origin.upper()]
        if stops:
            airports.append(self.rng.choice(["DXB", "DOH", "FRA", "SIN", "IST"]))
        airports.append(destination.upper())

        segments = []
        current = departure
        for n in range(len(airports) - 1):
            arrival = current + timedelta(minutes=leg_minutes)
            segments.append({
                "departure": {"iataCode": airports[n], "at": current.strftime("%Y-%m-%dT%H:%M:%S")},
                "arrival": {"iataCode": airports[n + 1], "at": arrival.strftime("%Y-%m-%dT%H:%M:%S")},
                "carrierCode": carrier_code,
                "number": str(self.rng.randint(100, 9999)),
                "numberOfStops": 0,
            })
            current = arrival + timedelta(minutes=90)

        total_minutes = int((arrival - departure).total_seconds() // 60)
        return {
            "duration": f"PT{total_minutes // 60}H{total_minutes % 60}M",
            "segments": segments
        }


# Singleton instance
mock_travel_service = MockTravelService()
