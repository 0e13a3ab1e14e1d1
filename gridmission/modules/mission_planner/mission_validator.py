"""
Mission Validator - Survey configuration and waypoint ceiling checks

Validation collects every violation instead of stopping at the first one,
so the caller can show the operator the full list in one pass.
"""

import math
from typing import Optional

from gridmission.models.mission import LimitCheck, SurveyConfig
from gridmission.modules.geofence_manager.zone_validator import ValidationResult, ZoneValidator
from gridmission.modules.mission_planner.configuration import PlannerConfiguration

class MissionValidator:
    """Validate survey configurations before planning"""

    def __init__(self, configuration: Optional[PlannerConfiguration] = None):
        self.configuration = configuration or PlannerConfiguration()
        self.zone_validator = ZoneValidator()

    def validate_config(self, config: SurveyConfig) -> ValidationResult:
        """Validate a survey configuration, collecting all violations"""

        cfg = self.configuration
        result = ValidationResult()

        if not config.name or not config.name.strip():
            result.add_error("Mission name must not be empty")

        if len(config.survey_polygon) < 3:
            result.add_error(
                f"Survey polygon must have at least 3 vertices (got {len(config.survey_polygon)})"
            )
        else:
            result.merge(self.zone_validator.validate_polygon(config.survey_polygon, "Survey polygon"))

        if not self._in_range(config.altitude, cfg.min_altitude, cfg.max_altitude):
            result.add_error(
                f"Altitude {config.altitude}m outside allowed range [{cfg.min_altitude}, {cfg.max_altitude}]"
            )

        if not self._in_range(config.spacing_meters, cfg.min_spacing, cfg.max_spacing):
            result.add_error(
                f"Grid spacing {config.spacing_meters}m outside allowed range [{cfg.min_spacing}, {cfg.max_spacing}]"
            )

        if not self._in_range(config.overlap_fraction, 0.0, 1.0):
            result.add_error(f"Overlap {config.overlap_fraction} outside allowed range [0, 1]")

        if not math.isfinite(config.sweep_angle_degrees):
            result.add_error("Sweep angle must be a finite number")
        elif not 0.0 <= config.sweep_angle_degrees < 360.0:
            result.warnings.append(
                f"Sweep angle {config.sweep_angle_degrees} will be normalized to "
                f"{config.sweep_angle_degrees % 360:.1f} degrees"
            )

        if config.obstacles:
            result.merge(self.zone_validator.validate_zones(config.obstacles))

        return result

    def check_waypoint_limit(self, waypoint_count: int,
                             max_allowed: Optional[int] = None) -> LimitCheck:
        """Compare a waypoint count against the autopilot ceiling.

        max_allowed defaults to the configured ceiling (256). Counts above it
        fail; counts above the warning ratio (90%) of it carry a warning,
        whether or not they also fail.
        """

        if max_allowed is None:
            max_allowed = self.configuration.max_waypoints
        ratio = self.configuration.waypoint_warning_ratio

        warning = None
        error = None

        if waypoint_count > max_allowed * ratio:
            warning = (
                f"Mission has {waypoint_count} waypoints, above {ratio:.0%} "
                f"of the {max_allowed} waypoint limit"
            )

        if waypoint_count > max_allowed:
            error = f"Mission has {waypoint_count} waypoints, exceeding the limit of {max_allowed}"

        return LimitCheck(
            valid=error is None,
            waypoint_count=waypoint_count,
            max_allowed=max_allowed,
            warning=warning,
            error=error
        )

    @staticmethod
    def _in_range(value: float, low: float, high: float) -> bool:
        return value is not None and math.isfinite(value) and low <= value <= high
