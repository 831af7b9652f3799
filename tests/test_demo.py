from swedefinder.core.geo import Circle, GeoPoint
from swedefinder.etl import demo


def test_demo_result_scores_every_place():
    area = Circle(center=GeoPoint(37.9785, -0.6823), radius_m=2000)

    result = demo.demo_result(area)

    assert len(result.businesses) == len(demo.DEMO_PLACES) == 8
    assert result.swedish_count == 8
    assert result.area is area


def test_demo_result_uses_real_scores_and_ranking():
    result = demo.demo_result(Circle(center=GeoPoint(0, 0), radius_m=10))
    by_id = {b.id: b for b in result.businesses}

    assert result.businesses[0].id == "demo-1"
    assert by_id["demo-1"].swedish_confidence == 80
    assert by_id["demo-7"].swedish_indicators == ['Keyword: "malmö"', 'Swedish character: "ö"']
    assert by_id["demo-6"].swedish_confidence == 25
    assert by_id["demo-5"].category == "restaurant"
    confidences = [b.swedish_confidence for b in result.businesses]
    assert confidences == sorted(confidences, reverse=True)
