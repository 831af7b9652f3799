"""Result rows returned to the map client."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from swedefinder.core.geo import SearchArea, area_to_dict


@dataclass(slots=True)
class Business:
    """A place found inside the search area, with its Swedishness verdict."""

    id: str
    name: str
    address: str
    lat: float
    lng: float
    category: str = "other"
    phone: Optional[str] = None
    website: Optional[str] = None
    photo_url: Optional[str] = None
    rating: Optional[float] = None
    total_ratings: Optional[int] = None
    types: List[str] = field(default_factory=list)
    is_swedish: bool = False
    swedish_confidence: int = 0
    swedish_indicators: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "phone": self.phone,
            "website": self.website,
            "photoUrl": self.photo_url,
            "rating": self.rating,
            "totalRatings": self.total_ratings,
            "types": list(self.types),
            "category": self.category,
            "location": {"lat": self.lat, "lng": self.lng},
            "isSwedish": self.is_swedish,
            "swedishConfidence": self.swedish_confidence,
            "swedishIndicators": list(self.swedish_indicators),
        }


@dataclass(slots=True)
class SearchResult:
    area: SearchArea
    businesses: List[Business] = field(default_factory=list)

    @property
    def swedish_count(self) -> int:
        return sum(1 for b in self.businesses if b.is_swedish)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "businesses": [b.to_dict() for b in self.businesses],
            "total": len(self.businesses),
            "swedishCount": self.swedish_count,
            "searchArea": area_to_dict(self.area),
        }
