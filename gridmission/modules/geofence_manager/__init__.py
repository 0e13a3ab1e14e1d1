"""
Geofence Manager Module Package - Spatial primitives and obstacle handling

This package provides:
- Geodesic and planar spatial operations
- Altitude-aware obstacle zone queries
- Polygon and obstacle zone validation
"""

from gridmission.modules.geofence_manager.spatial_operations import SpatialOperations
from gridmission.modules.geofence_manager.obstacle_index import ObstacleIndex, BlockCheck
from gridmission.modules.geofence_manager.zone_validator import ZoneValidator, ValidationResult

__all__ = [
    "SpatialOperations",
    "ObstacleIndex",
    "BlockCheck",
    "ZoneValidator",
    "ValidationResult"
]
