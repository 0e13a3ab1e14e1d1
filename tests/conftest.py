"""Shared fixtures for gridmission tests"""

import pytest

from gridmission.models.mission import GeoPoint, ObstacleZone, SurveyConfig

@pytest.fixture
def square_polygon():
    """~111 m square at the equator"""
    return (
        GeoPoint(0.0, 0.0),
        GeoPoint(0.0, 0.001),
        GeoPoint(0.001, 0.001),
        GeoPoint(0.001, 0.0)
    )

@pytest.fixture
def square_config(square_polygon):
    return SurveyConfig(
        name="Square survey",
        survey_polygon=square_polygon,
        altitude=50,
        spacing_meters=50
    )

@pytest.fixture
def large_square_config():
    """~500 m square surveyed at 10 m spacing"""
    polygon = (
        GeoPoint(26.8500, 80.9500),
        GeoPoint(26.8500, 80.9550),
        GeoPoint(26.8545, 80.9550),
        GeoPoint(26.8545, 80.9500)
    )
    return SurveyConfig(
        name="Large survey",
        survey_polygon=polygon,
        altitude=60,
        spacing_meters=10
    )

@pytest.fixture
def covering_circle():
    return ObstacleZone.circle("cover", "Covering zone", GeoPoint(0.0005, 0.0005), 200.0)

@pytest.fixture
def west_half_zone():
    return ObstacleZone.polygon(
        "west",
        "West half",
        [GeoPoint(-0.001, -0.001), GeoPoint(-0.001, 0.0005),
         GeoPoint(0.002, 0.0005), GeoPoint(0.002, -0.001)],
        min_altitude=0,
        max_altitude=100
    )
