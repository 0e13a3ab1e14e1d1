import pytest

from gridmission.models.mission import GeoPoint, SurveyConfig, SweepDirection
from gridmission.modules.geofence_manager.spatial_operations import SpatialOperations
from gridmission.modules.mission_planner.configuration import PlannerConfiguration
from gridmission.modules.mission_planner.pattern_generator import PatternGenerator

U_SHAPE = (
    GeoPoint(0.0, 0.0), GeoPoint(0.0, 0.003), GeoPoint(0.003, 0.003), GeoPoint(0.003, 0.002),
    GeoPoint(0.001, 0.002), GeoPoint(0.001, 0.001), GeoPoint(0.003, 0.001), GeoPoint(0.003, 0.0)
)

def test_square_produces_three_lines_of_valid_waypoints(square_config):
    lines, waypoints = PatternGenerator().generate_survey_pattern(square_config)

    assert len(lines) == 3
    assert len(waypoints) == sum(len(line.waypoints) for line in lines)
    assert all(wp.valid for wp in waypoints)
    assert all(wp.position.alt == 50 for wp in waypoints)

def test_sequences_are_contiguous(square_config):
    lines, waypoints = PatternGenerator().generate_survey_pattern(square_config)

    assert [wp.sequence for wp in waypoints] == list(range(len(waypoints)))
    assert [line.line_index for line in lines] == list(range(len(lines)))

def test_directions_alternate(square_config):
    lines, _ = PatternGenerator().generate_survey_pattern(square_config)

    assert lines[0].direction is SweepDirection.FORWARD
    for current, following in zip(lines, lines[1:]):
        assert current.direction is not following.direction

def test_backward_lines_run_in_reverse(square_config):
    lines, _ = PatternGenerator().generate_survey_pattern(square_config)

    forward_lons = [wp.position.lon for wp in lines[0].waypoints]
    backward_lons = [wp.position.lon for wp in lines[1].waypoints]

    assert forward_lons == sorted(forward_lons)
    assert backward_lons == sorted(backward_lons, reverse=True)

def test_samples_never_farther_apart_than_spacing(large_square_config):
    ops = SpatialOperations()
    lines, _ = PatternGenerator().generate_survey_pattern(large_square_config)

    for line in lines:
        assert len(line.waypoints) >= 2
        for a, b in zip(line.waypoints, line.waypoints[1:]):
            assert ops.haversine_distance(a.position.point, b.position.point) <= 10 * 1.001

@pytest.mark.parametrize("angle", [0, 30, 45, 90, 135, 270])
def test_convex_polygon_waypoints_all_valid_at_any_heading(square_config, angle):
    config = SurveyConfig(
        name="Rotated",
        survey_polygon=square_config.survey_polygon,
        altitude=50,
        spacing_meters=20,
        sweep_angle_degrees=angle
    )
    lines, waypoints = PatternGenerator().generate_survey_pattern(config)

    assert len(lines) >= 2
    assert all(wp.valid for wp in waypoints)

def test_obstacle_blocks_covered_waypoints(square_config, west_half_zone):
    config = SurveyConfig(
        name="Half blocked",
        survey_polygon=square_config.survey_polygon,
        altitude=50,
        spacing_meters=50,
        obstacles=(west_half_zone,)
    )
    _, waypoints = PatternGenerator().generate_survey_pattern(config)

    west = [wp for wp in waypoints if wp.position.lon < 0.0005]
    east = [wp for wp in waypoints if wp.position.lon > 0.0005]

    assert west and east
    assert all(not wp.valid and wp.blocking_obstacle_id == "west" for wp in west)
    assert all(wp.valid and wp.blocking_obstacle_id is None for wp in east)

def test_degenerate_bounding_box_yields_nothing():
    flat = SurveyConfig(
        name="Flat",
        survey_polygon=(GeoPoint(0, 0), GeoPoint(0, 0.001), GeoPoint(0, 0.002)),
        altitude=50,
        spacing_meters=20
    )
    assert PatternGenerator().generate_survey_pattern(flat) == ((), ())

def test_collinear_polygon_yields_no_lines():
    collinear = SurveyConfig(
        name="Collinear",
        survey_polygon=(GeoPoint(0, 0), GeoPoint(0.001, 0.001), GeoPoint(0.002, 0.002)),
        altitude=50,
        spacing_meters=50
    )
    lines, waypoints = PatternGenerator().generate_survey_pattern(collinear)

    assert lines == ()
    assert waypoints == ()

def test_concave_polygon_uses_first_crossing_pair_by_default():
    config = SurveyConfig(name="U", survey_polygon=U_SHAPE, altitude=50, spacing_meters=50)
    _, waypoints = PatternGenerator().generate_survey_pattern(config)

    assert all(wp.valid for wp in waypoints)
    assert not any(wp.position.lat > 0.001 and wp.position.lon > 0.002 for wp in waypoints)

def test_concave_polygon_pairs_all_crossings_when_enabled():
    config = SurveyConfig(name="U", survey_polygon=U_SHAPE, altitude=50, spacing_meters=50)
    generator = PatternGenerator(PlannerConfiguration(pair_all_crossings=True))

    _, first_pair = PatternGenerator().generate_survey_pattern(config)
    _, waypoints = generator.generate_survey_pattern(config)

    assert len(waypoints) > len(first_pair)
    assert all(wp.valid for wp in waypoints)
    assert any(wp.position.lat > 0.001 and wp.position.lon > 0.002 for wp in waypoints)
    assert [wp.sequence for wp in waypoints] == list(range(len(waypoints)))
