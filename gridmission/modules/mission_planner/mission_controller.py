"""
Mission Planner Module - Survey mission planning entry points

This module handles:
- Validating a survey configuration before planning
- Generating the sweep pattern and its statistics
- Reporting the waypoint ceiling check alongside the finished plan
- Planning independent configurations concurrently

plan() is a pure function of its inputs; the module keeps no state between
calls, so one instance may serve concurrent requests.
"""

import asyncio
from typing import List, Optional, Sequence

from gridmission.exceptions import ConfigurationError
from gridmission.models.mission import MissionPlan, SurveyConfig
from gridmission.modules.base_module import BaseModule, ModuleResult
from gridmission.modules.geofence_manager.obstacle_index import ObstacleIndex
from gridmission.modules.geofence_manager.spatial_operations import SpatialOperations
from gridmission.modules.mission_planner.configuration import PlannerConfiguration
from gridmission.modules.mission_planner.flight_calculator import FlightCalculator
from gridmission.modules.mission_planner.mission_validator import MissionValidator
from gridmission.modules.mission_planner.pattern_generator import PatternGenerator

class MissionPlannerModule(BaseModule):
    """Module for survey mission planning"""

    def __init__(self, configuration: Optional[PlannerConfiguration] = None):
        super().__init__("mission_planner", "survey_planner")
        self.configuration = configuration or PlannerConfiguration()
        self.spatial_ops = SpatialOperations()
        self.pattern_generator = PatternGenerator(self.configuration, self.spatial_ops)
        self.flight_calculator = FlightCalculator(self.configuration, self.spatial_ops)
        self.validator = MissionValidator(self.configuration)

    def plan(self, config: SurveyConfig) -> MissionPlan:
        """Validate and plan a survey mission.

        Raises ConfigurationError with every collected violation when the
        configuration is invalid. Geometric degeneracies never raise; they
        produce an empty or partially invalid plan.
        """

        validation = self.validator.validate_config(config)
        if not validation.valid:
            raise ConfigurationError(
                f"Survey configuration '{config.name}' is invalid", validation.errors
            )

        for warning in validation.warnings:
            self.logger.debug(f"'{config.name}': {warning}")

        return self._generate(config)

    async def plan_batch(self, configs: Sequence[SurveyConfig]) -> List[ModuleResult]:
        """Plan independent configurations concurrently, results in input order"""

        return list(await asyncio.gather(*(self.execute(config) for config in configs)))

    async def _validate_parameters(self, config: SurveyConfig, warnings: List[str]) -> None:
        """Validate survey configuration"""

        validation = self.validator.validate_config(config)
        for warning in validation.warnings:
            self._log_warning(f"'{config.name}': {warning}", warnings)

        if not validation.valid:
            raise ConfigurationError(
                f"Survey configuration '{config.name}' is invalid", validation.errors
            )

    async def _execute_implementation(self, config: SurveyConfig, warnings: List[str],
                                      errors: List[str]) -> MissionPlan:
        """Run the planner on a worker thread"""

        plan = await asyncio.to_thread(self._generate, config)

        limit = plan.limit_check
        if limit.warning:
            warnings.append(limit.warning)
        if limit.error:
            errors.append(limit.error)

        return plan

    def _generate(self, config: SurveyConfig) -> MissionPlan:
        """Generate pattern and statistics for an already validated config"""

        obstacle_index = ObstacleIndex(config.obstacles, self.spatial_ops)

        lines, waypoints = self.pattern_generator.generate_survey_pattern(config, obstacle_index)
        valid_waypoints = tuple(wp for wp in waypoints if wp.valid)

        stats = self.flight_calculator.calculate_mission_statistics(
            waypoints, lines, config.survey_polygon
        )

        limit_check = self.validator.check_waypoint_limit(len(waypoints))
        if not limit_check.valid:
            self._log_warning(f"'{config.name}': {limit_check.error}")
        elif limit_check.warning:
            self._log_warning(f"'{config.name}': {limit_check.warning}")

        self.logger.info(
            f"Planned '{config.name}': {stats.line_count} lines, {stats.total_waypoints} waypoints "
            f"({stats.valid_count} valid), {stats.total_distance_meters:.0f}m"
        )

        return MissionPlan(
            config=config,
            lines=lines,
            waypoints=waypoints,
            valid_waypoints=valid_waypoints,
            stats=stats,
            limit_check=limit_check
        )

def plan(config: SurveyConfig, configuration: Optional[PlannerConfiguration] = None) -> MissionPlan:
    """Plan a survey mission with a fresh planner module"""

    return MissionPlannerModule(configuration).plan(config)
