"""
Mission Models - Typed survey configuration, obstacle zones and mission plans

The surrounding ground-control application exchanges loosely shaped payloads
(dicts with "lat"/"lng" keys, [lat, lon] pairs, string obstacle types). The
from_dict() constructors in this module are the only place those shapes are
interpreted; everything downstream works with the frozen dataclasses below.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from gridmission.exceptions import ConfigurationError

def _first_present(payload: Dict[str, Any], keys: Sequence[str], default: Any = None) -> Any:
    for key in keys:
        if key in payload and payload[key] is not None:
            return payload[key]
    return default

def _as_float(value: Any, label: str, errors: List[str]) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        errors.append(f"{label} must be a number, got {value!r}")
        return None

def _as_bool(value: Any, label: str, errors: List[str]) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    errors.append(f"{label} must be a boolean, got {value!r}")
    return None

@dataclass(frozen=True)
class GeoPoint:
    """Geographic point in decimal degrees"""
    lat: float
    lon: float

    @classmethod
    def from_any(cls, value: Any) -> "GeoPoint":
        """Parse a point from a dict or a [lat, lon] pair"""

        if isinstance(value, GeoPoint):
            return value

        if isinstance(value, dict):
            lat = _first_present(value, ("lat", "latitude"))
            lon = _first_present(value, ("lon", "lng", "longitude"))
        elif isinstance(value, (list, tuple)) and len(value) >= 2:
            lat, lon = value[0], value[1]
        else:
            raise ConfigurationError(f"Cannot interpret {value!r} as a point")

        if lat is None or lon is None:
            raise ConfigurationError(f"Point {value!r} is missing latitude or longitude")

        try:
            return cls(lat=float(lat), lon=float(lon))
        except (TypeError, ValueError):
            raise ConfigurationError(f"Point {value!r} has non-numeric coordinates")

    def to_tuple(self) -> Tuple[float, float]:
        return (self.lat, self.lon)

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lon": self.lon}

Polygon = Tuple[GeoPoint, ...]

class ObstacleKind(Enum):
    """Obstacle zone geometry variants"""
    POLYGON = "polygon"
    CIRCLE = "circle"
    CYLINDER = "cylinder"

    @property
    def is_radial(self) -> bool:
        return self in (ObstacleKind.CIRCLE, ObstacleKind.CYLINDER)

@dataclass(frozen=True)
class ObstacleZone:
    """Exclusion zone with an altitude band.

    Polygon zones carry ``vertices``; circle and cylinder zones carry
    ``center`` and ``radius_meters``. The two cylinder/circle kinds are
    checked identically in plan view and differ only in how a geofence
    service is asked to register them.
    """
    id: str
    name: str
    kind: ObstacleKind
    vertices: Polygon = ()
    center: Optional[GeoPoint] = None
    radius_meters: Optional[float] = None
    min_altitude: float = 0.0
    max_altitude: float = math.inf
    enabled: bool = True

    def __post_init__(self):
        object.__setattr__(self, "vertices", tuple(self.vertices))

    @classmethod
    def polygon(cls, zone_id: str, name: str, vertices: Sequence[GeoPoint],
                min_altitude: float = 0.0, max_altitude: float = math.inf,
                enabled: bool = True) -> "ObstacleZone":
        return cls(id=zone_id, name=name, kind=ObstacleKind.POLYGON,
                   vertices=tuple(vertices), min_altitude=min_altitude,
                   max_altitude=max_altitude, enabled=enabled)

    @classmethod
    def circle(cls, zone_id: str, name: str, center: GeoPoint, radius_meters: float,
               min_altitude: float = 0.0, max_altitude: float = math.inf,
               enabled: bool = True, cylinder: bool = False) -> "ObstacleZone":
        kind = ObstacleKind.CYLINDER if cylinder else ObstacleKind.CIRCLE
        return cls(id=zone_id, name=name, kind=kind, center=center,
                   radius_meters=radius_meters, min_altitude=min_altitude,
                   max_altitude=max_altitude, enabled=enabled)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ObstacleZone":
        """Build a zone from an application payload"""

        errors: List[str] = []

        raw_kind = _first_present(payload, ("kind", "type"))
        try:
            kind = ObstacleKind(str(raw_kind).lower())
        except ValueError:
            raise ConfigurationError(f"Unknown obstacle type: {raw_kind!r}")

        zone_id = str(_first_present(payload, ("id",), ""))
        name = str(_first_present(payload, ("name",), zone_id))

        vertices: Tuple[GeoPoint, ...] = ()
        center = None
        radius = None

        if kind is ObstacleKind.POLYGON:
            vertices = tuple(GeoPoint.from_any(v) for v in payload.get("vertices") or [])
        else:
            raw_center = payload.get("center")
            if raw_center is not None:
                center = GeoPoint.from_any(raw_center)
            raw_radius = _first_present(payload, ("radius_meters", "radiusMeters", "radius"))
            if raw_radius is not None:
                radius = _as_float(raw_radius, f"Obstacle {zone_id} radius", errors)

        min_alt = _first_present(payload, ("min_altitude", "minAltitude"), 0.0)
        max_alt = _first_present(payload, ("max_altitude", "maxAltitude"), math.inf)
        min_alt = _as_float(min_alt, f"Obstacle {zone_id} min altitude", errors)
        max_alt = _as_float(max_alt, f"Obstacle {zone_id} max altitude", errors)
        enabled = _as_bool(payload.get("enabled", True), f"Obstacle {zone_id} enabled", errors)

        if errors:
            raise ConfigurationError(f"Invalid obstacle {zone_id!r}", errors)

        return cls(
            id=zone_id,
            name=name,
            kind=kind,
            vertices=vertices,
            center=center,
            radius_meters=radius,
            min_altitude=min_alt,
            max_altitude=max_alt,
            enabled=enabled
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "kind": self.kind.value,
            "vertices": [v.to_dict() for v in self.vertices],
            "center": self.center.to_dict() if self.center else None,
            "radius_meters": self.radius_meters,
            "min_altitude": self.min_altitude,
            "max_altitude": self.max_altitude if math.isfinite(self.max_altitude) else None,
            "enabled": self.enabled
        }

@dataclass(frozen=True)
class SurveyConfig:
    """Survey mission input. Immutable once planning starts."""
    name: str
    survey_polygon: Polygon
    altitude: float
    spacing_meters: float
    overlap_fraction: float = 0.0
    sweep_angle_degrees: float = 0.0
    obstacles: Tuple[ObstacleZone, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "survey_polygon", tuple(self.survey_polygon))
        object.__setattr__(self, "obstacles", tuple(self.obstacles))

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "SurveyConfig":
        """Build a config from an application payload.

        Accepts both the planner form ({"surveyArea": {"vertices": [...]},
        "gridSpacing": ..., "gridAngle": ...}) and the API request form
        ({"polygon": [[lat, lon], ...], "grid_spacing": ...}).
        """

        errors: List[str] = []

        survey_area = payload.get("surveyArea")
        if isinstance(survey_area, dict):
            raw_polygon = survey_area.get("vertices")
        else:
            raw_polygon = _first_present(payload, ("survey_polygon", "surveyPolygon", "polygon"))

        polygon: Tuple[GeoPoint, ...] = ()
        if raw_polygon is None:
            errors.append("Survey polygon is missing")
        else:
            try:
                polygon = tuple(GeoPoint.from_any(v) for v in raw_polygon)
            except ConfigurationError as e:
                errors.extend(e.errors)

        altitude = _first_present(payload, ("altitude",))
        spacing = _first_present(payload, ("spacing_meters", "spacingMeters", "gridSpacing", "grid_spacing"))
        if altitude is None:
            errors.append("Altitude is missing")
        if spacing is None:
            errors.append("Grid spacing is missing")

        altitude = _as_float(altitude, "Altitude", errors) if altitude is not None else None
        spacing = _as_float(spacing, "Grid spacing", errors) if spacing is not None else None
        overlap = _as_float(
            _first_present(payload, ("overlap_fraction", "overlapFraction", "overlap"), 0.0),
            "Overlap", errors
        )
        angle = _as_float(
            _first_present(payload, ("sweep_angle_degrees", "sweepAngleDegrees", "gridAngle", "grid_angle"), 0.0),
            "Grid angle", errors
        )

        obstacles = []
        for raw in payload.get("obstacles") or []:
            try:
                obstacles.append(ObstacleZone.from_dict(raw))
            except ConfigurationError as e:
                errors.extend(e.errors)

        if errors:
            raise ConfigurationError("Invalid survey configuration", errors)

        return cls(
            name=str(payload.get("name", "")),
            survey_polygon=polygon,
            altitude=altitude,
            spacing_meters=spacing,
            overlap_fraction=overlap,
            sweep_angle_degrees=angle,
            obstacles=tuple(obstacles)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "survey_polygon": [p.to_dict() for p in self.survey_polygon],
            "altitude": self.altitude,
            "spacing_meters": self.spacing_meters,
            "overlap_fraction": self.overlap_fraction,
            "sweep_angle_degrees": self.sweep_angle_degrees,
            "obstacles": [o.to_dict() for o in self.obstacles]
        }

@dataclass(frozen=True)
class Position:
    """3D waypoint position, altitude in meters above takeoff"""
    lat: float
    lon: float
    alt: float

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.lat, self.lon)

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lon": self.lon, "alt": self.alt}

@dataclass(frozen=True)
class Waypoint:
    """Single survey waypoint"""
    sequence: int
    position: Position
    line_index: int
    valid: bool
    blocking_obstacle_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sequence": self.sequence,
            "position": self.position.to_dict(),
            "line_index": self.line_index,
            "valid": self.valid,
            "blocking_obstacle_id": self.blocking_obstacle_id
        }

class SweepDirection(Enum):
    """Traversal direction of a sweep line"""
    FORWARD = "forward"
    BACKWARD = "backward"

    def flipped(self) -> "SweepDirection":
        if self is SweepDirection.FORWARD:
            return SweepDirection.BACKWARD
        return SweepDirection.FORWARD

@dataclass(frozen=True)
class SweepLine:
    """One pass of the lawnmower pattern"""
    line_index: int
    waypoints: Tuple[Waypoint, ...]
    direction: SweepDirection

    def to_dict(self) -> Dict[str, Any]:
        return {
            "line_index": self.line_index,
            "direction": self.direction.value,
            "waypoints": [wp.to_dict() for wp in self.waypoints]
        }

@dataclass(frozen=True)
class MissionStats:
    """Derived mission statistics"""
    total_waypoints: int
    valid_count: int
    blocked_count: int
    total_distance_meters: float
    flight_time_seconds: float
    battery_percent: float
    line_count: int
    coverage_area_sq_meters: float
    geodesic_area_sq_meters: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_waypoints": self.total_waypoints,
            "valid_count": self.valid_count,
            "blocked_count": self.blocked_count,
            "total_distance_meters": self.total_distance_meters,
            "flight_time_seconds": self.flight_time_seconds,
            "battery_percent": self.battery_percent,
            "line_count": self.line_count,
            "coverage_area_sq_meters": self.coverage_area_sq_meters,
            "geodesic_area_sq_meters": self.geodesic_area_sq_meters
        }

@dataclass(frozen=True)
class LimitCheck:
    """Waypoint count against the autopilot ceiling"""
    valid: bool
    waypoint_count: int
    max_allowed: int
    warning: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "waypoint_count": self.waypoint_count,
            "max_allowed": self.max_allowed,
            "warning": self.warning,
            "error": self.error
        }

@dataclass(frozen=True)
class MissionPlan:
    """Complete planner output, owned by the caller"""
    config: SurveyConfig
    lines: Tuple[SweepLine, ...]
    waypoints: Tuple[Waypoint, ...]
    valid_waypoints: Tuple[Waypoint, ...]
    stats: MissionStats
    limit_check: Optional[LimitCheck] = field(default=None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "config": self.config.to_dict(),
            "lines": [line.to_dict() for line in self.lines],
            "waypoints": [wp.to_dict() for wp in self.waypoints],
            "valid_waypoints": [wp.to_dict() for wp in self.valid_waypoints],
            "stats": self.stats.to_dict(),
            "limit_check": self.limit_check.to_dict() if self.limit_check else None
        }
