"""
gridmission - Coverage path planning for UAV survey missions

Turns a survey polygon and obstacle zones into an alternating-direction
grid of waypoints with mission statistics.
"""

from gridmission.exceptions import ConfigurationError, GridMissionError
from gridmission.models.mission import (
    GeoPoint,
    ObstacleKind,
    ObstacleZone,
    SurveyConfig,
    MissionPlan
)
from gridmission.modules.mission_planner.configuration import PlannerConfiguration
from gridmission.modules.mission_planner.mission_controller import MissionPlannerModule, plan

__all__ = [
    "ConfigurationError",
    "GridMissionError",
    "GeoPoint",
    "ObstacleKind",
    "ObstacleZone",
    "SurveyConfig",
    "MissionPlan",
    "PlannerConfiguration",
    "MissionPlannerModule",
    "plan"
]

# Version information
__version__ = "1.0.0"
__author__ = "SkyrouteX Development Team"
