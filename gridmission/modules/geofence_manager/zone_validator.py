"""
Zone Validator - Validate survey polygons and obstacle zones

This module provides:
- Coordinate range and vertex count checks
- Polygon geometry checks (zero area, self-intersection) using Shapely
- Obstacle variant consistency (polygon vs. circle/cylinder fields)
- Altitude band checks and duplicate id detection
"""

from dataclasses import dataclass, field
from typing import List, Sequence

from shapely.geometry import Polygon as ShapelyPolygon
from shapely.validation import explain_validity

from gridmission.models.mission import GeoPoint, ObstacleZone
from gridmission.modules.geofence_manager.spatial_operations import SpatialOperations

@dataclass
class ValidationResult:
    """Validation outcome with all collected problems"""
    valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        self.errors.append(message)
        self.valid = False

    def merge(self, other: "ValidationResult") -> None:
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        self.valid = self.valid and other.valid

class ZoneValidator:
    """Validate polygons and obstacle zones"""

    def __init__(self):
        self.spatial_ops = SpatialOperations()

        self.min_vertices = 3
        self.max_vertices = 1000
        self.min_segment_length = 1.0  # meters

    def validate_polygon(self, polygon: Sequence[GeoPoint], label: str = "Polygon") -> ValidationResult:
        """Validate a polygon ring given as GeoPoints"""

        result = ValidationResult()

        if len(polygon) < self.min_vertices:
            result.add_error(f"{label} must have at least {self.min_vertices} vertices (got {len(polygon)})")
            return result

        if len(polygon) > self.max_vertices:
            result.warnings.append(f"{label} has many vertices ({len(polygon)}), consider simplifying")

        for i, point in enumerate(polygon):
            if not -90.0 <= point.lat <= 90.0:
                result.add_error(f"{label} vertex {i} latitude {point.lat} out of range [-90, 90]")
            if not -180.0 <= point.lon <= 180.0:
                result.add_error(f"{label} vertex {i} longitude {point.lon} out of range [-180, 180]")

        if not result.valid:
            return result

        self._check_geometry(polygon, label, result)
        return result

    def _check_geometry(self, polygon: Sequence[GeoPoint], label: str, result: ValidationResult) -> None:
        """Shapely-backed shape checks; these only ever warn"""

        shape = ShapelyPolygon([(p.lon, p.lat) for p in polygon])

        if shape.area == 0:
            result.warnings.append(f"{label} has zero area")
            return

        if not shape.is_valid:
            result.warnings.append(f"{label} is not a simple polygon: {explain_validity(shape)}")

        for i in range(len(polygon)):
            a = polygon[i]
            b = polygon[(i + 1) % len(polygon)]
            segment_length = self.spatial_ops.haversine_distance(a, b)
            if segment_length < self.min_segment_length:
                result.warnings.append(f"{label} has a very short edge ({segment_length:.2f}m) at vertex {i}")

    def validate_zone(self, zone: ObstacleZone) -> ValidationResult:
        """Validate a single obstacle zone"""

        result = ValidationResult()
        label = f"Obstacle '{zone.id or zone.name}'"

        if not zone.id:
            result.add_error(f"{label} has no id")

        if zone.kind.is_radial:
            if zone.center is None:
                result.add_error(f"{label} ({zone.kind.value}) requires a center")
            elif not (-90.0 <= zone.center.lat <= 90.0 and -180.0 <= zone.center.lon <= 180.0):
                result.add_error(f"{label} center is out of coordinate range")
            if zone.radius_meters is None or zone.radius_meters <= 0:
                result.add_error(f"{label} ({zone.kind.value}) requires a positive radius")
            if zone.vertices:
                result.warnings.append(f"{label} vertices are ignored for {zone.kind.value} zones")
        else:
            result.merge(self.validate_polygon(zone.vertices, label))
            if zone.center is not None or zone.radius_meters is not None:
                result.warnings.append(f"{label} center/radius are ignored for polygon zones")

        self._validate_altitude_constraints(zone, label, result)

        if not zone.enabled:
            result.warnings.append(f"{label} is disabled and will not block waypoints")

        return result

    def validate_zones(self, zones: Sequence[ObstacleZone]) -> ValidationResult:
        """Validate all zones and check id uniqueness"""

        result = ValidationResult()
        seen_ids = set()

        for zone in zones:
            result.merge(self.validate_zone(zone))

            if zone.id in seen_ids:
                result.add_error(f"Duplicate obstacle id: {zone.id}")
            seen_ids.add(zone.id)

        return result

    def _validate_altitude_constraints(self, zone: ObstacleZone, label: str,
                                       result: ValidationResult) -> None:
        if zone.min_altitude > zone.max_altitude:
            result.add_error(f"{label} minimum altitude must not exceed maximum altitude")

        if zone.min_altitude < 0:
            result.warnings.append(f"{label} has a negative minimum altitude")
