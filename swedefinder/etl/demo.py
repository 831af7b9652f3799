"""Fixed sample places served when no Places API key is configured."""

from typing import Any, Dict, List

from swedefinder.core.geo import SearchArea
from swedefinder.core.swedishness import analyze
from swedefinder.etl.transform import rank_businesses, review_texts, to_business
from swedefinder.models import SearchResult


def _place(place_id, name, address, phone, website, rating, total, types, lat, lng) -> Dict[str, Any]:
    return {
        "place_id": place_id,
        "name": name,
        "formatted_address": address,
        "international_phone_number": phone,
        "website": website,
        "rating": rating,
        "user_ratings_total": total,
        "types": types,
        "geometry": {"location": {"lat": lat, "lng": lng}},
    }


DEMO_PLACES: List[Dict[str, Any]] = [
    _place(
        "demo-1", "Svenska Baren Torrevieja", "Calle del Mar 15, 03181 Torrevieja, Alicante, Spain",
        "+34 966 123 456", "https://svenskabaren.se", 4.5, 127, ["bar", "restaurant"], 37.9785, -0.6823,
    ),
    _place(
        "demo-2", "Stockholm Café", "Avenida Habaneras 22, 03182 Torrevieja, Alicante, Spain",
        "+34 965 789 012", None, 4.2, 89, ["cafe", "bakery"], 37.9812, -0.6801,
    ),
    _place(
        "demo-3", "Nordic Real Estate", "Plaza de la Constitución 5, 03181 Torrevieja, Spain",
        "+34 966 345 678", "https://nordicrealestate.com", 4.8, 45, ["real_estate_agency"], 37.9770, -0.6850,
    ),
    _place(
        "demo-4", "Scandinavian Hair Studio", "Calle Ramón Gallud 12, 03181 Torrevieja, Spain",
        "+34 965 234 567", None, 4.6, 72, ["hair_care", "beauty_salon"], 37.9798, -0.6795,
    ),
    _place(
        "demo-5", "Köttbullar & More", "Paseo Vista Alegre 8, 03182 Torrevieja, Spain",
        "+34 966 456 789", None, 4.3, 156, ["restaurant", "food"], 37.9755, -0.6888,
    ),
    _place(
        "demo-6", "Swedish Medical Center", "Calle Concordia 25, 03181 Torrevieja, Spain",
        "+34 965 567 890", "https://swedishmedical.es", 4.9, 234, ["doctor", "health"], 37.9802, -0.6778,
    ),
    _place(
        "demo-7", "Malmö Bygg & Renovering", "Calle Antonio Machado 18, 03183 Torrevieja, Spain",
        "+34 966 678 901", None, 4.4, 38, ["general_contractor", "construction"], 37.9720, -0.6910,
    ),
    _place(
        "demo-8", "Göteborg Auto Service", "Polígono Industrial, 03184 Torrevieja, Spain",
        "+34 965 789 123", None, 4.1, 67, ["car_repair", "automotive"], 37.9680, -0.7050,
    ),
]


def demo_result(area: SearchArea) -> SearchResult:
    """Score the sample places for ``area``; the area is echoed but not used to filter."""
    businesses = []
    for place in DEMO_PLACES:
        analysis = analyze(place["name"], place.get("formatted_address"), place.get("website"), review_texts(place))
        businesses.append(to_business(place, analysis))
    return SearchResult(area=area, businesses=rank_businesses(businesses))
