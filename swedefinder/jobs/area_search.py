"""Find businesses inside a drawn area and score them for Swedishness."""

import argparse
import json
import logging
from typing import Any, Dict, List, Optional

from swedefinder.core.config import get_settings
from swedefinder.core.geo import (
    Circle,
    GeoPoint,
    Polygon,
    SearchArea,
    area_center,
    area_radius,
    contains,
)
from swedefinder.core.swedishness import analyze, swedish_search_terms
from swedefinder.etl.transform import place_location, rank_businesses, review_texts, to_business
from swedefinder.models import Business, SearchResult
from swedefinder.vendors import google_places

logger = logging.getLogger(__name__)


def _collect_places(area: SearchArea, api_key: str) -> Dict[str, Dict[str, Any]]:
    center = area_center(area)
    radius = area_radius(area)

    places: Dict[str, Dict[str, Any]] = {}
    # keyword searches first, then one general search; first seen wins
    for keyword in (*swedish_search_terms(), None):
        try:
            results = google_places.nearby_search(center, radius, keyword, api_key)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Nearby search failed for keyword=%r: %s", keyword, exc)
            continue

        logger.info("Fetched %d results for keyword=%r", len(results), keyword)
        for result in results:
            place_id = result.get("place_id")
            if not place_id:
                logger.debug("Skipping result without place_id: %s", result)
                continue
            places.setdefault(place_id, result)
    return places


def search_businesses_in_area(area: SearchArea, api_key: str, *, fetch_details: bool = True) -> List[Business]:
    places = _collect_places(area, api_key)

    businesses: List[Business] = []
    for place_id, place in places.items():
        point = place_location(place)
        if point is None or not contains(area, point):
            logger.debug("Skipping %s outside the search area", place_id)
            continue

        if fetch_details:
            try:
                details = google_places.place_details(place_id=place_id, api_key=api_key)
            except Exception as exc:  # noqa: BLE001
                logger.warning("Failed to fetch details for %s: %s", place_id, exc)
                details = None
            if details:
                place = {**place, **details}

        analysis = analyze(
            place.get("name") or "",
            place.get("formatted_address"),
            place.get("website"),
            review_texts(place),
        )
        businesses.append(to_business(place, analysis, api_key))

    ranked = rank_businesses(businesses)
    logger.info(
        "Completed area search: candidates=%d in_area=%d swedish=%d",
        len(places),
        len(ranked),
        sum(1 for b in ranked if b.is_swedish),
    )
    return ranked


def run_area_search(
    area: SearchArea,
    *,
    api_key: Optional[str] = None,
    fetch_details: Optional[bool] = None,
) -> SearchResult:
    settings = get_settings()
    api_key = api_key or settings.google_api_key
    if not api_key:
        raise RuntimeError("GOOGLE_PLACES_API_KEY is required")
    if fetch_details is None:
        fetch_details = settings.fetch_details

    businesses = search_businesses_in_area(area, api_key, fetch_details=fetch_details)
    return SearchResult(area=area, businesses=businesses)


def _parse_floats(raw: str, expected: int) -> List[float]:
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != expected:
        raise argparse.ArgumentTypeError(f"expected {expected} comma-separated numbers, got {raw!r}")
    try:
        return [float(p) for p in parts]
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number in {raw!r}") from None


def parse_circle_arg(raw: str) -> Circle:
    lat, lng, radius = _parse_floats(raw, 3)
    if radius <= 0:
        raise argparse.ArgumentTypeError("radius must be positive")
    return Circle(center=GeoPoint(lat, lng), radius_m=radius)


def parse_polygon_arg(raw: str) -> Polygon:
    vertices = tuple(GeoPoint(*_parse_floats(pair, 2)) for pair in raw.split(";") if pair.strip())
    if len(vertices) < 3:
        raise argparse.ArgumentTypeError("a polygon needs at least 3 vertices")
    return Polygon(vertices=vertices)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Search an area for Swedish businesses")
    shape = parser.add_mutually_exclusive_group(required=True)
    shape.add_argument("--circle", type=parse_circle_arg, help="LAT,LNG,RADIUS_M")
    shape.add_argument("--polygon", type=parse_polygon_arg, help='"LAT,LNG;LAT,LNG;LAT,LNG[;...]"')
    parser.add_argument(
        "--no-details",
        dest="fetch_details",
        action="store_false",
        default=None,
        help="Skip per-place detail lookups (no phone, website or reviews)",
    )
    parser.add_argument("--swedish-only", action="store_true", help="Only print businesses classified as Swedish")
    return parser


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    args = build_parser().parse_args()

    area = args.circle or args.polygon
    result = run_area_search(area, fetch_details=args.fetch_details)
    if args.swedish_only:
        result.businesses = [b for b in result.businesses if b.is_swedish]

    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
