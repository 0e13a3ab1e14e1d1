"""
Obstacle Index - Altitude-aware point queries against exclusion zones

Answers "is this point blocked at this altitude?" for a fixed list of
polygon, circle and cylinder obstacle zones. Zones are checked in input
order and the first match wins.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from gridmission.models.mission import GeoPoint, ObstacleKind, ObstacleZone
from gridmission.modules.geofence_manager.spatial_operations import SpatialOperations

@dataclass(frozen=True)
class BlockCheck:
    """Result of an obstacle query"""
    blocked: bool
    obstacle_id: Optional[str] = None

CLEAR = BlockCheck(blocked=False)

class ObstacleIndex:
    """Read-only index over obstacle zones"""

    def __init__(self, obstacles: Sequence[ObstacleZone],
                 spatial_ops: Optional[SpatialOperations] = None):
        self.spatial_ops = spatial_ops or SpatialOperations()
        self._obstacles: Tuple[ObstacleZone, ...] = tuple(obstacles)
        self._active: Tuple[ObstacleZone, ...] = tuple(o for o in self._obstacles if o.enabled)

    @property
    def obstacles(self) -> Tuple[ObstacleZone, ...]:
        return self._obstacles

    @property
    def active_obstacles(self) -> Tuple[ObstacleZone, ...]:
        return self._active

    def is_blocked(self, point: GeoPoint, altitude: float) -> BlockCheck:
        """Check point against enabled obstacles whose altitude band contains altitude"""

        for obstacle in self._active:
            if altitude < obstacle.min_altitude or altitude > obstacle.max_altitude:
                continue

            if self._contains(obstacle, point):
                return BlockCheck(blocked=True, obstacle_id=obstacle.id)

        return CLEAR

    def _contains(self, obstacle: ObstacleZone, point: GeoPoint) -> bool:
        if obstacle.kind is ObstacleKind.POLYGON:
            return self.spatial_ops.point_in_polygon(point, obstacle.vertices)

        # circle and cylinder zones
        if obstacle.center is None or not obstacle.radius_meters:
            return False
        return self.spatial_ops.point_in_circle(point, obstacle.center, obstacle.radius_meters)
