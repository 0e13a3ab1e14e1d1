"""
gridmission Modules Package - Core modules for survey mission planning

This package contains the planning modules:
- mission_planner: Sweep generation, statistics, validation and payloads
- geofence_manager: Spatial primitives, obstacle queries and zone validation
- base_module: Base class for planner modules
"""

from gridmission.modules.base_module import BaseModule, ModuleResult

__all__ = [
    "BaseModule",
    "ModuleResult"
]
