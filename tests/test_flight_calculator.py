import pytest

from gridmission.models.mission import GeoPoint, Position, Waypoint
from gridmission.modules.mission_planner.configuration import PlannerConfiguration
from gridmission.modules.mission_planner.flight_calculator import FlightCalculator

def _waypoint(sequence, lat, lon, valid=True):
    return Waypoint(sequence=sequence, position=Position(lat, lon, 50), line_index=0, valid=valid)

def test_flight_time_and_battery():
    calculator = FlightCalculator()

    assert calculator.estimate_flight_time(1000, 10) == pytest.approx(100)
    assert calculator.estimate_battery_usage(100, 0.2) == pytest.approx(20)

def test_battery_is_clamped():
    calculator = FlightCalculator()

    assert calculator.estimate_battery_usage(10000, 0.2) == 100.0
    assert calculator.estimate_battery_usage(0, 0.2) == 0.0

def test_non_positive_cruise_speed_rejected():
    with pytest.raises(ValueError):
        FlightCalculator().estimate_flight_time(100, 0)

def test_distance_uses_valid_waypoints_in_sequence_order():
    calculator = FlightCalculator()
    waypoints = [
        _waypoint(2, 0.0, 0.002),
        _waypoint(0, 0.0, 0.0),
        _waypoint(1, 0.0, 0.001, valid=False),
    ]

    expected = calculator.spatial_ops.haversine_distance(GeoPoint(0, 0), GeoPoint(0, 0.002))
    assert calculator.calculate_total_distance(waypoints) == pytest.approx(expected)

def test_distance_of_single_waypoint_is_zero():
    assert FlightCalculator().calculate_total_distance([_waypoint(0, 1.0, 1.0)]) == 0.0

def test_coverage_area_of_equatorial_square(square_polygon):
    area = FlightCalculator().calculate_coverage_area(square_polygon)
    assert area == pytest.approx(12321, rel=1e-3)

def test_geodesic_area_of_equatorial_square(square_polygon):
    area = FlightCalculator().calculate_geodesic_area(square_polygon)
    assert area == pytest.approx(12309, rel=0.01)

def test_statistics_block(square_polygon):
    calculator = FlightCalculator()
    waypoints = [_waypoint(0, 0.0, 0.0), _waypoint(1, 0.0, 0.001), _waypoint(2, 0.0005, 0.001, valid=False)]

    stats = calculator.calculate_mission_statistics(waypoints, [], square_polygon)

    assert stats.total_waypoints == 3
    assert stats.valid_count == 2
    assert stats.blocked_count == 1
    assert stats.line_count == 0
    assert stats.flight_time_seconds == pytest.approx(stats.total_distance_meters / 10)
    assert stats.battery_percent == pytest.approx(stats.flight_time_seconds * 0.2)

def test_vehicle_params_override_defaults(square_polygon):
    calculator = FlightCalculator(PlannerConfiguration(cruise_speed=5.0))
    waypoints = [_waypoint(0, 0.0, 0.0), _waypoint(1, 0.0, 0.001)]

    slow = calculator.calculate_mission_statistics(waypoints, [], square_polygon)
    fast = calculator.calculate_mission_statistics(waypoints, [], square_polygon, {"cruise_speed": 20.0})

    assert slow.flight_time_seconds == pytest.approx(4 * fast.flight_time_seconds)
