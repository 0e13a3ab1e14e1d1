"""
Models Package - Data types shared by the planning modules
"""

from gridmission.models.mission import (
    GeoPoint,
    Polygon,
    ObstacleKind,
    ObstacleZone,
    SurveyConfig,
    Position,
    Waypoint,
    SweepDirection,
    SweepLine,
    MissionStats,
    LimitCheck,
    MissionPlan
)

__all__ = [
    "GeoPoint",
    "Polygon",
    "ObstacleKind",
    "ObstacleZone",
    "SurveyConfig",
    "Position",
    "Waypoint",
    "SweepDirection",
    "SweepLine",
    "MissionStats",
    "LimitCheck",
    "MissionPlan"
]
