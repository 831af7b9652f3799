"""Search area shapes and point-in-area tests.

Coordinates are plain WGS-84 degrees. Polygons are tested with even-odd ray
casting directly on (lat, lng) as if they were planar x/y, which is fine at
city scale but not near the poles or across the antimeridian.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Sequence, Tuple, Union

EARTH_RADIUS_M = 6_371_000.0


class InvalidAreaError(ValueError):
    """Raised when a search area payload cannot be turned into a shape."""


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float


@dataclass(frozen=True)
class Polygon:
    kind: ClassVar[str] = "polygon"
    vertices: Tuple[GeoPoint, ...]


@dataclass(frozen=True)
class Rectangle:
    """Four corners drawn with the rectangle tool; tested like any polygon."""

    kind: ClassVar[str] = "rectangle"
    vertices: Tuple[GeoPoint, ...]


@dataclass(frozen=True)
class Circle:
    kind: ClassVar[str] = "circle"
    center: GeoPoint
    radius_m: float


SearchArea = Union[Polygon, Rectangle, Circle]


def haversine_distance(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in metres on a spherical Earth."""
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def _in_ring(vertices: Sequence[GeoPoint], point: GeoPoint) -> bool:
    if len(vertices) < 3:
        return False

    inside = False
    j = len(vertices) - 1
    for i, vi in enumerate(vertices):
        vj = vertices[j]
        if (vi.lng > point.lng) != (vj.lng > point.lng):
            # the straddle check above guarantees vj.lng != vi.lng
            crossing = (vj.lat - vi.lat) * (point.lng - vi.lng) / (vj.lng - vi.lng) + vi.lat
            if point.lat < crossing:
                inside = not inside
        j = i
    return inside


def contains(area: SearchArea, point: GeoPoint) -> bool:
    """Return True when ``point`` lies inside ``area``.

    Points exactly on a polygon edge or vertex may land on either side.
    """
    if isinstance(area, Circle):
        return haversine_distance(area.center, point) <= area.radius_m
    return _in_ring(area.vertices, point)


def area_center(area: SearchArea) -> GeoPoint:
    """Circle centre, or the arithmetic centroid of the vertex ring."""
    if isinstance(area, Circle):
        return area.center
    if not area.vertices:
        return GeoPoint(0.0, 0.0)
    count = len(area.vertices)
    return GeoPoint(
        lat=sum(v.lat for v in area.vertices) / count,
        lng=sum(v.lng for v in area.vertices) / count,
    )


def area_radius(area: SearchArea) -> float:
    """Radius in metres of a circle around ``area_center`` covering the whole area."""
    if isinstance(area, Circle):
        return area.radius_m
    center = area_center(area)
    return max((haversine_distance(center, v) for v in area.vertices), default=0.0)


def _to_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise InvalidAreaError(f"{field} must be numeric")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidAreaError(f"{field} must be numeric") from None
    if not math.isfinite(number):
        raise InvalidAreaError(f"{field} must be finite")
    return number


def _parse_vertices(raw: Any) -> Tuple[GeoPoint, ...]:
    if not isinstance(raw, (list, tuple)):
        raise InvalidAreaError("coordinates must be a list of [lat, lng] pairs")
    vertices: List[GeoPoint] = []
    for index, pair in enumerate(raw):
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise InvalidAreaError(f"coordinates[{index}] must be a [lat, lng] pair")
        vertices.append(
            GeoPoint(
                lat=_to_float(pair[0], f"coordinates[{index}][0]"),
                lng=_to_float(pair[1], f"coordinates[{index}][1]"),
            )
        )
    return tuple(vertices)


def parse_search_area(payload: Dict[str, Any]) -> SearchArea:
    """Build a shape from the map client's ``{"type", "coordinates", "center", "radius"}`` payload."""
    if not isinstance(payload, dict):
        raise InvalidAreaError("area must be an object")

    kind = payload.get("type")
    if kind == Circle.kind:
        center = payload.get("center")
        if not isinstance(center, dict):
            raise InvalidAreaError("circle area requires a center")
        radius = _to_float(payload.get("radius"), "radius")
        if radius <= 0:
            raise InvalidAreaError("circle radius must be positive")
        return Circle(
            center=GeoPoint(
                lat=_to_float(center.get("lat"), "center.lat"),
                lng=_to_float(center.get("lng"), "center.lng"),
            ),
            radius_m=radius,
        )

    if kind in (Polygon.kind, Rectangle.kind):
        vertices = _parse_vertices(payload.get("coordinates"))
        if len(vertices) < 3:
            raise InvalidAreaError(f"{kind} area requires at least 3 vertices")
        if kind == Rectangle.kind:
            return Rectangle(vertices=vertices)
        return Polygon(vertices=vertices)

    raise InvalidAreaError(f"unsupported area type: {kind!r}")


def area_to_dict(area: SearchArea) -> Dict[str, Any]:
    """Inverse of :func:`parse_search_area`, used when echoing the area back."""
    if isinstance(area, Circle):
        return {
            "type": area.kind,
            "coordinates": [[area.center.lat, area.center.lng]],
            "center": {"lat": area.center.lat, "lng": area.center.lng},
            "radius": area.radius_m,
        }
    return {
        "type": area.kind,
        "coordinates": [[v.lat, v.lng] for v in area.vertices],
    }
