from gridmission.models.mission import GeoPoint, ObstacleZone, SurveyConfig
from gridmission.modules.mission_planner.configuration import PlannerConfiguration
from gridmission.modules.mission_planner.mission_validator import MissionValidator

def test_valid_config(square_config):
    result = MissionValidator().validate_config(square_config)

    assert result.valid
    assert result.errors == []

def test_all_violations_are_collected():
    config = SurveyConfig(
        name=" ",
        survey_polygon=(GeoPoint(0, 0), GeoPoint(0, 1)),
        altitude=5,
        spacing_meters=200,
        overlap_fraction=1.5
    )
    result = MissionValidator().validate_config(config)

    assert not result.valid
    assert len(result.errors) == 5

def test_bounds_are_inclusive(square_polygon):
    for altitude, spacing in ((10, 10), (120, 100)):
        config = SurveyConfig("Edge", square_polygon, altitude=altitude, spacing_meters=spacing,
                              overlap_fraction=1.0)
        assert MissionValidator().validate_config(config).valid

def test_configured_limits_apply(square_config):
    validator = MissionValidator(PlannerConfiguration(max_altitude=40))
    result = validator.validate_config(square_config)

    assert not result.valid
    assert "Altitude" in result.errors[0]

def test_sweep_angle_outside_circle_warns(square_polygon):
    config = SurveyConfig("Angle", square_polygon, altitude=50, spacing_meters=50, sweep_angle_degrees=400)
    result = MissionValidator().validate_config(config)

    assert result.valid
    assert any("normalized to 40.0" in w for w in result.warnings)

def test_non_finite_sweep_angle_rejected(square_polygon):
    config = SurveyConfig("Angle", square_polygon, altitude=50, spacing_meters=50,
                          sweep_angle_degrees=float("nan"))
    assert not MissionValidator().validate_config(config).valid

def test_obstacle_problems_reported(square_polygon):
    obstacles = (
        ObstacleZone.circle("a", "A", GeoPoint(0, 0), 100),
        ObstacleZone.circle("a", "B", GeoPoint(0, 0), -5)
    )
    config = SurveyConfig("Obstacles", square_polygon, altitude=50, spacing_meters=50, obstacles=obstacles)
    result = MissionValidator().validate_config(config)

    assert not result.valid
    assert any("positive radius" in e for e in result.errors)
    assert any("Duplicate obstacle id" in e for e in result.errors)

def test_waypoint_limit_thresholds():
    validator = MissionValidator()

    under = validator.check_waypoint_limit(230)
    assert under.valid and under.warning is None and under.error is None

    near = validator.check_waypoint_limit(231)
    assert near.valid and near.warning is not None

    at_limit = validator.check_waypoint_limit(256)
    assert at_limit.valid and at_limit.warning is not None

    over = validator.check_waypoint_limit(257)
    assert not over.valid
    assert over.error is not None
    assert over.warning is not None
    assert over.max_allowed == 256

def test_waypoint_limit_custom_ceiling():
    check = MissionValidator().check_waypoint_limit(100, max_allowed=99)

    assert not check.valid
    assert check.max_allowed == 99
