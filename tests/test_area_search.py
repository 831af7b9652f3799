import argparse
import json

import pytest

from swedefinder.core.config import Settings
from swedefinder.core.geo import Circle, GeoPoint, Polygon
from swedefinder.jobs import area_search
from swedefinder.models import Business, SearchResult
from swedefinder.vendors.google_places import GooglePlacesError

AREA = Circle(center=GeoPoint(37.9785, -0.6823), radius_m=1000)


def _result(place_id, name, lat, lng, **extra):
    result = {"place_id": place_id, "name": name, "geometry": {"location": {"lat": lat, "lng": lng}}}
    result.update(extra)
    return result


@pytest.fixture
def fake_places(monkeypatch):
    searches = []
    details_calls = []

    def fake_nearby_search(location, radius_m, keyword, api_key):
        searches.append((location, radius_m, keyword))
        if keyword == "svensk":
            return [
                _result("p1", "Svenska Baren", 37.9790, -0.6820),
                _result("far", "Svensk Fastighet", 38.1000, -0.6800),
            ]
        if keyword == "svenska":
            return [_result("p1", "Duplicate Name", 37.9790, -0.6820)]
        if keyword == "nordic":
            raise GooglePlacesError("OVER_QUERY_LIMIT")
        if keyword is None:
            return [
                {"name": "No Id", "geometry": {"location": {"lat": 37.9785, "lng": -0.6823}}},
                _result("p4", "Café Central", 37.9800, -0.6800),
                {"place_id": "nowhere", "name": "No Location"},
            ]
        return []

    def fake_place_details(place_id, api_key):
        details_calls.append(place_id)
        if place_id == "p1":
            return {"website": "https://svenskabaren.se", "reviews": [{"text": "Fantastisk fika"}]}
        raise RuntimeError("boom")

    monkeypatch.setattr(area_search.google_places, "nearby_search", fake_nearby_search)
    monkeypatch.setattr(area_search.google_places, "place_details", fake_place_details)
    return {"searches": searches, "details": details_calls}


def test_search_runs_keyword_searches_then_general(fake_places):
    area_search.search_businesses_in_area(AREA, "key")

    keywords = [kw for _, _, kw in fake_places["searches"]]
    assert keywords == [*area_search.swedish_search_terms(), None]
    location, radius, _ = fake_places["searches"][0]
    assert location == AREA.center
    assert radius == 1000


def test_search_dedupes_filters_and_ranks(fake_places):
    businesses = area_search.search_businesses_in_area(AREA, "key")

    assert [b.id for b in businesses] == ["p1", "p4"]
    swedish, plain = businesses
    # first sighting wins over the later duplicate
    assert swedish.name == "Svenska Baren"
    assert swedish.website == "https://svenskabaren.se"
    assert swedish.swedish_confidence == 100
    assert 'Keyword: "fika"' in swedish.swedish_indicators
    # details failure falls back to the search record
    assert plain.name == "Café Central"
    assert plain.is_swedish is False
    assert fake_places["details"] == ["p1", "p4"]


def test_search_without_details(fake_places):
    businesses = area_search.search_businesses_in_area(AREA, "key", fetch_details=False)

    assert fake_places["details"] == []
    assert [b.id for b in businesses] == ["p1", "p4"]
    assert businesses[0].swedish_confidence == 50


def test_search_uses_polygon_centroid(fake_places):
    square = Polygon(
        vertices=(
            GeoPoint(37.97, -0.69),
            GeoPoint(37.99, -0.69),
            GeoPoint(37.99, -0.67),
            GeoPoint(37.97, -0.67),
        )
    )

    businesses = area_search.search_businesses_in_area(square, "key", fetch_details=False)

    location, radius, _ = fake_places["searches"][0]
    assert location.lat == pytest.approx(37.98)
    assert location.lng == pytest.approx(-0.68)
    assert 1000 < radius < 2000
    assert [b.id for b in businesses] == ["p1", "p4"]


def test_run_area_search_requires_api_key(monkeypatch):
    monkeypatch.setattr(area_search, "get_settings", lambda: Settings(google_api_key=""))

    with pytest.raises(RuntimeError):
        area_search.run_area_search(AREA)


def test_run_area_search_uses_settings(monkeypatch):
    captured = {}

    def fake_search(area, api_key, *, fetch_details=True):
        captured.update(area=area, api_key=api_key, fetch_details=fetch_details)
        return []

    monkeypatch.setattr(area_search, "get_settings", lambda: Settings(google_api_key="abc", fetch_details=False))
    monkeypatch.setattr(area_search, "search_businesses_in_area", fake_search)

    result = area_search.run_area_search(AREA)

    assert captured == {"area": AREA, "api_key": "abc", "fetch_details": False}
    assert result.to_dict()["total"] == 0
    assert result.to_dict()["searchArea"]["type"] == "circle"


def test_build_parser_circle():
    args = area_search.build_parser().parse_args(["--circle", "59.33, 18.06, 500"])

    assert args.circle == Circle(center=GeoPoint(59.33, 18.06), radius_m=500.0)
    assert args.polygon is None
    assert args.fetch_details is None
    assert args.swedish_only is False


def test_build_parser_polygon_and_flags():
    args = area_search.build_parser().parse_args(
        ["--polygon", "0,0;0,1;1,1;", "--no-details", "--swedish-only"]
    )

    assert args.polygon == Polygon(vertices=(GeoPoint(0, 0), GeoPoint(0, 1), GeoPoint(1, 1)))
    assert args.fetch_details is False
    assert args.swedish_only is True


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["--circle", "1,2"],
        ["--circle", "1,2,-5"],
        ["--polygon", "0,0;0,1"],
        ["--polygon", "0,0;0,x;1,1"],
        ["--circle", "1,2,3", "--polygon", "0,0;0,1;1,1"],
    ],
)
def test_build_parser_rejects_bad_shapes(argv):
    with pytest.raises(SystemExit):
        area_search.build_parser().parse_args(argv)


def test_parse_circle_arg_errors_are_argparse_errors():
    with pytest.raises(argparse.ArgumentTypeError):
        area_search.parse_circle_arg("a,b,c")


def test_main_prints_only_swedish_businesses(monkeypatch, capsys):
    def fake_run_area_search(area, *, fetch_details=None):
        businesses = [
            Business(id="p1", name="Malmö Bygg", address="", lat=0, lng=0, is_swedish=True, swedish_confidence=40),
            Business(id="p2", name="Café Central", address="", lat=0, lng=0),
        ]
        return SearchResult(area=area, businesses=businesses)

    monkeypatch.setattr(area_search, "run_area_search", fake_run_area_search)
    monkeypatch.setattr("sys.argv", ["swedefinder-search", "--circle", "37.9785,-0.6823,1000", "--swedish-only"])

    area_search.main()

    out = capsys.readouterr().out
    data = json.loads(out)
    assert [b["id"] for b in data["businesses"]] == ["p1"]
    assert data["total"] == 1
    assert data["swedishCount"] == 1
    assert data["searchArea"]["type"] == "circle"
    assert "Malmö Bygg" in out
