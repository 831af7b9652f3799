"""Utilities for transforming Google Places records into result rows."""

import logging
from typing import Any, Dict, Iterable, List, Optional

from swedefinder.core.geo import GeoPoint
from swedefinder.core.swedishness import SwedishnessResult
from swedefinder.models import Business
from swedefinder.vendors import google_places

logger = logging.getLogger(__name__)

MISSING_ADDRESS = "Address not available"

_TYPE_CATEGORIES = {
    "restaurant": "restaurant",
    "food": "restaurant",
    "meal_takeaway": "restaurant",
    "meal_delivery": "restaurant",
    "cafe": "cafe",
    "bakery": "cafe",
    "bar": "bar",
    "night_club": "bar",
    "store": "shop",
    "shopping_mall": "shop",
    "clothing_store": "shop",
    "shoe_store": "shop",
    "jewelry_store": "shop",
    "supermarket": "shop",
    "grocery_or_supermarket": "shop",
    "convenience_store": "shop",
    "home_goods_store": "shop",
    "furniture_store": "shop",
    "hardware_store": "shop",
    "electronics_store": "shop",
    "book_store": "shop",
    "florist": "shop",
    "pet_store": "shop",
    "doctor": "health",
    "dentist": "health",
    "hospital": "health",
    "pharmacy": "health",
    "physiotherapist": "health",
    "veterinary_care": "health",
    "gym": "health",
    "health": "health",
    "hair_care": "beauty",
    "beauty_salon": "beauty",
    "spa": "beauty",
    "real_estate_agency": "real_estate",
    "general_contractor": "construction",
    "electrician": "construction",
    "plumber": "construction",
    "painter": "construction",
    "roofing_contractor": "construction",
    "car_dealer": "automotive",
    "car_rental": "automotive",
    "car_repair": "automotive",
    "car_wash": "automotive",
    "gas_station": "automotive",
    "school": "education",
    "university": "education",
    "library": "education",
    "bank": "finance",
    "accounting": "finance",
    "insurance_agency": "finance",
    "lawyer": "legal",
    "locksmith": "service",
    "moving_company": "service",
    "travel_agency": "service",
    "laundry": "service",
    "lodging": "service",
}


def map_types_to_category(types: Iterable[str]) -> str:
    for type_name in types or []:
        category = _TYPE_CATEGORIES.get(type_name)
        if category:
            return category
    return "other"


def place_location(place: Dict[str, Any]) -> Optional[GeoPoint]:
    location = (place.get("geometry") or {}).get("location") or {}
    lat, lng = location.get("lat"), location.get("lng")
    if lat is None or lng is None:
        return None
    try:
        return GeoPoint(lat=float(lat), lng=float(lng))
    except (TypeError, ValueError):
        logger.debug("Unparseable location for %s: %s", place.get("place_id"), location)
        return None


def review_texts(place: Dict[str, Any]) -> List[str]:
    texts = []
    for review in place.get("reviews") or []:
        text = review.get("text") if isinstance(review, dict) else None
        if isinstance(text, str) and text:
            texts.append(text)
    return texts


def to_business(place: Dict[str, Any], analysis: SwedishnessResult, api_key: Optional[str] = None) -> Business:
    """Flatten a (search + details) place record and its score into a Business row.

    Places without a usable location are expected to be filtered out before
    this is called; they are placed at (0, 0) rather than rejected.
    """
    location = place_location(place) or GeoPoint(0.0, 0.0)
    types = [str(t) for t in place.get("types") or []]

    photo = None
    photos = place.get("photos") or []
    first_photo = photos[0] if isinstance(photos, list) and photos and isinstance(photos[0], dict) else {}
    if api_key and isinstance(first_photo.get("photo_reference"), str):
        photo = google_places.photo_url(first_photo["photo_reference"], api_key)

    return Business(
        id=str(place.get("place_id") or ""),
        name=place.get("name") or "",
        address=place.get("formatted_address") or MISSING_ADDRESS,
        lat=location.lat,
        lng=location.lng,
        category=map_types_to_category(types),
        phone=place.get("international_phone_number") or place.get("formatted_phone_number"),
        website=place.get("website"),
        photo_url=photo,
        rating=place.get("rating"),
        total_ratings=place.get("user_ratings_total"),
        types=types,
        is_swedish=analysis.is_swedish,
        swedish_confidence=analysis.confidence,
        swedish_indicators=analysis.labels(),
    )


def rank_businesses(businesses: Iterable[Business]) -> List[Business]:
    """Swedish matches first, then by descending confidence; ties keep input order."""
    return sorted(businesses, key=lambda b: (not b.is_swedish, -b.swedish_confidence))
