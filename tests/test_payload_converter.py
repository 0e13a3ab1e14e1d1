import json

import pytest

from gridmission import plan
from gridmission.models.mission import GeoPoint, ObstacleZone, SurveyConfig
from gridmission.modules.mission_planner.payload_converter import (
    MAV_CMD_NAV_TAKEOFF, MAV_CMD_NAV_WAYPOINT, PayloadConverter
)

@pytest.fixture
def half_blocked_plan(square_polygon, west_half_zone):
    config = SurveyConfig(
        name="Half blocked",
        survey_polygon=square_polygon,
        altitude=50,
        spacing_meters=50,
        overlap_fraction=0.6,
        obstacles=(west_half_zone,)
    )
    return plan(config)

def test_autopilot_waypoints_only_include_valid_points(half_blocked_plan):
    items = PayloadConverter().to_autopilot_waypoints(half_blocked_plan)

    assert len(items) == len(half_blocked_plan.valid_waypoints)
    assert [item["seq"] for item in items] == list(range(len(items)))

    plan_sequences = [item["plan_sequence"] for item in items]
    assert plan_sequences == sorted(plan_sequences)
    assert all(item["alt"] == 50 for item in items)

def test_survey_request(half_blocked_plan):
    request = PayloadConverter().to_survey_request(half_blocked_plan.config)

    assert request["name"] == "Half blocked"
    assert request["polygon"][1] == [0.0, 0.001]
    assert request["grid_spacing"] == 50
    assert request["overlap"] == 0.6
    assert request["grid_angle"] == 0.0

def test_geofence_requests():
    obstacles = [
        ObstacleZone.circle("apt", "Airport", GeoPoint(26.7606, 80.8893), 5000, max_altitude=150),
        ObstacleZone.polygon("res", "Residential", [GeoPoint(0, 0), GeoPoint(0, 1), GeoPoint(1, 1)]),
        ObstacleZone.circle("off", "Disabled", GeoPoint(0, 0), 10, enabled=False),
        ObstacleZone.circle("mast", "Power line", GeoPoint(26.85, 80.95), 100, max_altitude=50, cylinder=True)
    ]
    requests = PayloadConverter(circle_vertex_count=16).to_geofence_requests(obstacles)

    assert [r["name"] for r in requests] == ["Airport", "Residential", "Power line"]
    assert all(r["type"] == "exclusion" for r in requests)

    circle, polygon, cylinder = requests
    assert circle["shape"] == "circle"
    assert circle["radius"] == 5000
    assert circle["max_altitude"] == 150
    assert len(circle["vertices"]) == 16

    assert polygon["shape"] == "polygon"
    assert polygon["vertices"] == [[0, 0], [0, 1], [1, 1]]
    assert polygon["max_altitude"] is None

    assert cylinder["shape"] == "cylinder"
    assert cylinder["center"] == [26.85, 80.95]

def test_mission_record(half_blocked_plan):
    record = PayloadConverter().to_mission_record(half_blocked_plan, "vehicle-1", "operator-7")
    stats = half_blocked_plan.stats

    assert record["mission_name"] == "Half blocked"
    assert record["vehicle_id"] == "vehicle-1"
    assert record["operator_id"] == "operator-7"
    assert record["status"] == "draft"
    assert record["mission_stats"]["total_distance"] == pytest.approx(stats.total_distance_meters / 1000)
    assert record["mission_stats"]["flight_time"] == pytest.approx(stats.flight_time_seconds / 60)
    assert len(record["waypoints"]) == stats.valid_count

    first = record["waypoints"][0]
    assert first["label"] == "Waypoint 1"
    assert first["alt"] == "50m AGL"
    assert first["coords"].endswith("° E")

def test_qgc_plan(half_blocked_plan):
    document = PayloadConverter().to_qgc_plan(half_blocked_plan)
    items = document["mission"]["items"]

    assert document["fileType"] == "Plan"
    assert len(items) == len(half_blocked_plan.valid_waypoints) + 1
    assert items[0]["command"] == MAV_CMD_NAV_TAKEOFF
    assert all(item["command"] == MAV_CMD_NAV_WAYPOINT for item in items[1:])
    assert [item["doJumpId"] for item in items] == list(range(1, len(items) + 1))

    fence = document["geoFence"]
    assert fence["circles"] == []
    assert len(fence["polygons"]) == 1
    assert fence["polygons"][0]["inclusion"] is False

def test_qgc_plan_without_valid_waypoints(square_polygon, covering_circle):
    config = SurveyConfig("Blocked", square_polygon, altitude=50, spacing_meters=50,
                          obstacles=(covering_circle,))
    document = PayloadConverter().to_qgc_plan(plan(config))

    assert document["mission"]["items"] == []
    assert document["mission"]["plannedHomePosition"] == [0, 0, 0]
    assert document["geoFence"]["circles"][0]["circle"]["radius"] == 200.0

def test_export_qgc_json_round_trips(half_blocked_plan):
    text = PayloadConverter().export_qgc_json(half_blocked_plan)
    assert json.loads(text) == json.loads(json.dumps(PayloadConverter().to_qgc_plan(half_blocked_plan)))
