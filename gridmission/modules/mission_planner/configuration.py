"""
Planner Configuration - Tunable planner and vehicle parameters

This module provides:
- Default planner parameters (cruise speed, battery drain, waypoint ceiling)
- Validation limits for survey configuration
- Overrides from dicts, JSON files or the GRIDMISSION_CONFIG variable
"""

import json
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

from gridmission.utils.logger import get_logger

logger = get_logger(__name__)

CONFIG_ENV_VAR = "GRIDMISSION_CONFIG"

@dataclass(frozen=True)
class PlannerConfiguration:
    """Immutable planner parameters"""
    cruise_speed: float = 10.0               # m/s
    battery_drain_rate: float = 0.2          # percent per second of flight
    max_waypoints: int = 256                 # autopilot mission item ceiling
    waypoint_warning_ratio: float = 0.9
    probe_extension_meters: float = 5000.0   # probe overshoot past the bounding box
    edge_margin_meters: float = 0.05         # chord ends pulled inside the boundary
    pair_all_crossings: bool = False
    min_altitude: float = 10.0
    max_altitude: float = 120.0
    min_spacing: float = 10.0
    max_spacing: float = 100.0

    @classmethod
    def from_dict(cls, overrides: Optional[Dict[str, Any]] = None) -> "PlannerConfiguration":
        """Defaults updated with known keys from overrides"""

        if not overrides:
            return cls()

        known = {f.name for f in fields(cls)}
        accepted = {}
        for key, value in overrides.items():
            if key not in known:
                logger.warning(f"Ignoring unknown planner parameter '{key}'")
                continue
            accepted[key] = value

        return replace(cls(), **accepted)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

def load_configuration(file_path: Optional[Union[str, Path]] = None) -> PlannerConfiguration:
    """Load planner parameters from a JSON file.

    Falls back to the GRIDMISSION_CONFIG environment variable and then to
    the built-in defaults when no path is available.
    """

    if file_path is None:
        file_path = os.environ.get(CONFIG_ENV_VAR)

    if not file_path:
        return PlannerConfiguration()

    path = Path(file_path)
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Planner configuration in {path} must be a JSON object")

    logger.info(f"Loaded planner configuration from {path}")
    return PlannerConfiguration.from_dict(data)
