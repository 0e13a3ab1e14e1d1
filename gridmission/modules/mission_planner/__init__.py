"""
Mission Planner Module Package - Survey mission planning and generation

This package provides survey planning capabilities:
- Mission planning entry points and validation
- Lawnmower sweep pattern generation
- Flight statistics and calculations
- Payload conversion for autopilot, geofence and mission-store services
- Predefined mission templates and obstacle presets
"""

from gridmission.modules.mission_planner.configuration import PlannerConfiguration, load_configuration
from gridmission.modules.mission_planner.mission_controller import MissionPlannerModule, plan
from gridmission.modules.mission_planner.mission_validator import MissionValidator
from gridmission.modules.mission_planner.pattern_generator import PatternGenerator
from gridmission.modules.mission_planner.flight_calculator import FlightCalculator
from gridmission.modules.mission_planner.payload_converter import PayloadConverter
from gridmission.modules.mission_planner.mission_templates import (
    adjust_template_for_region,
    create_obstacle_from_preset,
    get_all_templates,
    get_template,
    get_templates_by_category
)

__all__ = [
    "PlannerConfiguration",
    "load_configuration",
    "MissionPlannerModule",
    "plan",
    "MissionValidator",
    "PatternGenerator",
    "FlightCalculator",
    "PayloadConverter",
    "adjust_template_for_region",
    "create_obstacle_from_preset",
    "get_all_templates",
    "get_template",
    "get_templates_by_category"
]
