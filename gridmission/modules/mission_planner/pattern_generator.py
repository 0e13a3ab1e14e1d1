"""
Survey Pattern Generation - Boustrophedon sweep lines over a survey polygon

This module generates:
- Parallel sweep lines across the survey polygon at the configured heading
- Entry/exit chords from probe-vs-boundary intersections
- Evenly sampled waypoints along each chord
- Obstacle-aware validity flags and alternating line directions

All geometry is done in a local equirectangular frame centred on the
polygon's bounding box. For the default heading (sweep angle 0) the line
anchors step north by meters_to_degrees_lat(spacing), i.e. plain latitude
stepping across the bounding box. Lines are centred in the cross-track extent,
ceil(extent / spacing) of them, so the outermost lines sit up to half a
spacing inside the bounding box instead of on it; a line lying on the
boundary would only produce boundary waypoints whose validity is undefined.
"""

import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from gridmission.models.mission import (
    GeoPoint, Position, SurveyConfig, SweepDirection, SweepLine, Waypoint
)
from gridmission.modules.geofence_manager.obstacle_index import ObstacleIndex
from gridmission.modules.geofence_manager.spatial_operations import SpatialOperations
from gridmission.modules.mission_planner.configuration import PlannerConfiguration
from gridmission.utils.logger import get_logger

HIT_TOLERANCE_DEG = 1e-10

Chord = Tuple[GeoPoint, GeoPoint]

class PatternGenerator:
    """Generates lawnmower survey patterns"""

    def __init__(self, configuration: Optional[PlannerConfiguration] = None,
                 spatial_ops: Optional[SpatialOperations] = None):
        self.configuration = configuration or PlannerConfiguration()
        self.spatial_ops = spatial_ops or SpatialOperations()
        self.logger = get_logger(__name__)

    def generate_survey_pattern(self, config: SurveyConfig,
                                obstacle_index: Optional[ObstacleIndex] = None
                                ) -> Tuple[Tuple[SweepLine, ...], Tuple[Waypoint, ...]]:
        """Generate sweep lines and the flattened waypoint sequence.

        Lines whose probe misses the polygon are skipped, so line indices and
        directions only advance on emitted lines. A degenerate polygon (zero
        width or height bounding box) produces no lines.
        """

        polygon = config.survey_polygon
        if len(polygon) < 3:
            return (), ()

        bbox = self.spatial_ops.calculate_bounding_box(polygon)
        if bbox["min_lat"] == bbox["max_lat"] or bbox["min_lon"] == bbox["max_lon"]:
            self.logger.debug(f"Survey '{config.name}' has a degenerate bounding box, no sweep lines")
            return (), ()

        if obstacle_index is None:
            obstacle_index = ObstacleIndex(config.obstacles, self.spatial_ops)

        center = GeoPoint(
            lat=(bbox["min_lat"] + bbox["max_lat"]) / 2,
            lon=(bbox["min_lon"] + bbox["max_lon"]) / 2
        )

        # Sweep lines run perpendicular to the flight heading
        line_angle = (config.sweep_angle_degrees + 90) % 360
        along = self._unit_vector(line_angle)
        across = self._unit_vector(config.sweep_angle_degrees % 360)

        corners = [
            GeoPoint(bbox["min_lat"], bbox["min_lon"]),
            GeoPoint(bbox["min_lat"], bbox["max_lon"]),
            GeoPoint(bbox["max_lat"], bbox["max_lon"]),
            GeoPoint(bbox["max_lat"], bbox["min_lon"])
        ]
        corner_offsets = [self.spatial_ops.local_offset_meters(center, c) for c in corners]
        cross_track = [n * across[0] + e * across[1] for n, e in corner_offsets]
        half_diagonal = max(math.hypot(n, e) for n, e in corner_offsets)
        reach = half_diagonal + self.configuration.probe_extension_meters

        offsets = self._line_offsets(min(cross_track), max(cross_track), config.spacing_meters)

        # Each probe is independent of the others; order is restored below
        probed = []
        for offset in offsets:
            chords = self._probe_line(center, offset, across, along, reach, polygon)
            if not chords:
                self.logger.debug(f"Sweep at offset {offset:.1f}m misses the survey polygon")
                continue
            probed.append(chords)

        lines: List[SweepLine] = []
        waypoints: List[Waypoint] = []
        direction = SweepDirection.FORWARD
        sequence = 0

        for line_index, chords in enumerate(probed):
            if direction is SweepDirection.BACKWARD:
                chords = [(exit_point, entry) for entry, exit_point in reversed(chords)]

            line_waypoints = []
            for entry, exit_point in chords:
                for point in self._sample_chord(entry, exit_point, config.spacing_meters):
                    line_waypoints.append(self._make_waypoint(
                        point, sequence, line_index, config.altitude, polygon, obstacle_index
                    ))
                    sequence += 1

            lines.append(SweepLine(
                line_index=line_index,
                waypoints=tuple(line_waypoints),
                direction=direction
            ))
            waypoints.extend(line_waypoints)
            direction = direction.flipped()

        self.logger.debug(
            f"Survey '{config.name}': {len(offsets)} probes, {len(lines)} lines, {len(waypoints)} waypoints"
        )

        return tuple(lines), tuple(waypoints)

    def _line_offsets(self, min_offset: float, max_offset: float, spacing: float) -> List[float]:
        """Cross-track line positions, centred in [min_offset, max_offset]"""

        extent = max_offset - min_offset
        count = max(1, int(math.ceil(extent / spacing)))
        first = min_offset + (extent - (count - 1) * spacing) / 2
        return [float(v) for v in first + spacing * np.arange(count)]

    def _probe_line(self, center: GeoPoint, offset: float,
                    across: Tuple[float, float], along: Tuple[float, float],
                    reach: float, polygon: Sequence[GeoPoint]) -> List[Chord]:
        """Intersect one probe with the polygon boundary and pair the crossings"""

        anchor_north = offset * across[0]
        anchor_east = offset * across[1]

        start = self.spatial_ops.offset_point(
            center, anchor_north - reach * along[0], anchor_east - reach * along[1]
        )
        end = self.spatial_ops.offset_point(
            center, anchor_north + reach * along[0], anchor_east + reach * along[1]
        )

        hits = []
        n = len(polygon)
        for i in range(n):
            hit = self.spatial_ops.segment_intersection(start, end, polygon[i], polygon[(i + 1) % n])
            if hit is not None:
                hits.append(hit)

        hits.sort(key=lambda p: self._distance_from(start, p))

        # A probe through a vertex crosses both adjacent edges at one point
        distinct: List[GeoPoint] = []
        for hit in hits:
            if distinct and (abs(hit.lat - distinct[-1].lat) < HIT_TOLERANCE_DEG and
                             abs(hit.lon - distinct[-1].lon) < HIT_TOLERANCE_DEG):
                continue
            distinct.append(hit)

        if len(distinct) < 2:
            return []

        if not self.configuration.pair_all_crossings:
            return [(distinct[0], distinct[1])]

        return [(distinct[i], distinct[i + 1]) for i in range(0, len(distinct) - 1, 2)]

    def _sample_chord(self, entry: GeoPoint, exit_point: GeoPoint, spacing: float) -> List[GeoPoint]:
        """Evenly spaced samples from entry to exit, at least two, never farther apart than spacing"""

        length = self.spatial_ops.haversine_distance(entry, exit_point)
        if length == 0:
            return [entry, exit_point]

        margin = min(self.configuration.edge_margin_meters, length / 4)
        usable = length - 2 * margin
        count = max(2, int(math.ceil(usable / spacing)) + 1)

        fractions = np.linspace(margin / length, 1 - margin / length, count)
        lats = entry.lat + fractions * (exit_point.lat - entry.lat)
        lons = entry.lon + fractions * (exit_point.lon - entry.lon)

        return [GeoPoint(float(lat), float(lon)) for lat, lon in zip(lats, lons)]

    def _make_waypoint(self, point: GeoPoint, sequence: int, line_index: int, altitude: float,
                       polygon: Sequence[GeoPoint], obstacle_index: ObstacleIndex) -> Waypoint:
        inside = self.spatial_ops.point_in_polygon(point, polygon)
        check = obstacle_index.is_blocked(point, altitude)

        return Waypoint(
            sequence=sequence,
            position=Position(lat=point.lat, lon=point.lon, alt=altitude),
            line_index=line_index,
            valid=inside and not check.blocked,
            blocking_obstacle_id=check.obstacle_id
        )

    def _distance_from(self, origin: GeoPoint, point: GeoPoint) -> float:
        north, east = self.spatial_ops.local_offset_meters(origin, point)
        return math.hypot(north, east)

    @staticmethod
    def _unit_vector(bearing_degrees: float) -> Tuple[float, float]:
        """(north, east) components of a compass bearing"""
        rad = math.radians(bearing_degrees)
        return math.cos(rad), math.sin(rad)
