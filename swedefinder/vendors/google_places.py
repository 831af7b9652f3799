"""Client utilities for the Google Places API."""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from swedefinder.core.config import get_settings
from swedefinder.core.geo import GeoPoint

logger = logging.getLogger(__name__)

_BASE_URL = "https://maps.googleapis.com/maps/api/place"
MAX_NEARBY_RADIUS_M = 50_000
DETAIL_FIELDS = (
    "name",
    "formatted_address",
    "formatted_phone_number",
    "international_phone_number",
    "website",
    "rating",
    "user_ratings_total",
    "types",
    "geometry",
    "photos",
    "reviews",
)


def _build_session() -> requests.Session:
    session = requests.Session()
    retries = Retry(
        total=3,
        backoff_factor=0.5,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET",),
    )
    session.mount("https://", HTTPAdapter(max_retries=retries))
    return session


_SESSION = _build_session()


class GooglePlacesError(RuntimeError):
    """Raised when the Places API returns a non-successful response."""


def _get(endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
    response = _SESSION.get(f"{_BASE_URL}/{endpoint}", params=params, timeout=get_settings().request_timeout)
    response.raise_for_status()
    return response.json()


def nearby_search(location: GeoPoint, radius_m: float, keyword: Optional[str], api_key: str) -> List[Dict[str, Any]]:
    """Return raw nearby-search results around ``location``.

    The API rejects radii above 50 km, so larger areas are searched from
    their centre with the maximum radius and filtered locally afterwards.
    """
    params = {
        "location": f"{location.lat},{location.lng}",
        "radius": str(max(1, int(round(min(radius_m, MAX_NEARBY_RADIUS_M))))),
        "key": api_key,
    }
    if keyword:
        params["keyword"] = keyword

    payload = _get("nearbysearch/json", params)
    status = payload.get("status")
    if status not in {"OK", "ZERO_RESULTS"}:
        logger.error("nearby_search failed: status=%s, error_message=%s", status, payload.get("error_message"))
        raise GooglePlacesError(payload.get("error_message") or status)
    return payload.get("results") or []


def place_details(place_id: str, api_key: str) -> Optional[Dict[str, Any]]:
    params = {"place_id": place_id, "fields": ",".join(DETAIL_FIELDS), "key": api_key}
    payload = _get("details/json", params)
    status = payload.get("status")
    if status != "OK":
        logger.debug("place_details returned no result for %s: status=%s", place_id, status)
        return None
    return payload.get("result") or None


def photo_url(photo_reference: str, api_key: str, max_width: int = 400) -> str:
    query = urlencode({"maxwidth": max_width, "photo_reference": photo_reference, "key": api_key})
    return f"{_BASE_URL}/photo?{query}"
