"""
Flight Calculator - Mission statistics for generated survey patterns

This module provides:
- Flight distance over the valid, sequence-ordered waypoints
- Flight time and linear battery consumption estimates
- Survey coverage area (planar shoelace and WGS84 geodesic)

The battery figure is a coarse linear heuristic, not a power model. The
shoelace coverage area scales square degrees by the polygon's mean latitude
and drifts for large areas or near the poles; the geodesic area does not.
"""

import math
from typing import Any, Dict, Optional, Sequence

import numpy as np
import pyproj

from gridmission.models.mission import GeoPoint, MissionStats, SweepLine, Waypoint
from gridmission.modules.geofence_manager.spatial_operations import (
    METERS_PER_DEGREE, SpatialOperations
)
from gridmission.modules.mission_planner.configuration import PlannerConfiguration

class FlightCalculator:
    """Calculate flight statistics for a waypoint sequence"""

    def __init__(self, configuration: Optional[PlannerConfiguration] = None,
                 spatial_ops: Optional[SpatialOperations] = None):
        configuration = configuration or PlannerConfiguration()
        self.spatial_ops = spatial_ops or SpatialOperations()
        self.geod = pyproj.Geod(ellps="WGS84")

        # Default vehicle performance parameters
        self.default_params = {
            "cruise_speed": configuration.cruise_speed,              # m/s
            "battery_drain_rate": configuration.battery_drain_rate   # percent per second
        }

    def calculate_mission_statistics(self, waypoints: Sequence[Waypoint],
                                     lines: Sequence[SweepLine],
                                     survey_polygon: Sequence[GeoPoint],
                                     vehicle_params: Optional[Dict[str, Any]] = None) -> MissionStats:
        """Calculate the full statistics block for a plan"""

        params = self.default_params.copy()
        if vehicle_params:
            params.update(vehicle_params)

        valid_count = sum(1 for wp in waypoints if wp.valid)

        total_distance = self.calculate_total_distance(waypoints)
        flight_time = self.estimate_flight_time(total_distance, params["cruise_speed"])
        battery = self.estimate_battery_usage(flight_time, params["battery_drain_rate"])

        return MissionStats(
            total_waypoints=len(waypoints),
            valid_count=valid_count,
            blocked_count=len(waypoints) - valid_count,
            total_distance_meters=total_distance,
            flight_time_seconds=flight_time,
            battery_percent=battery,
            line_count=len(lines),
            coverage_area_sq_meters=self.calculate_coverage_area(survey_polygon),
            geodesic_area_sq_meters=self.calculate_geodesic_area(survey_polygon)
        )

    def calculate_total_distance(self, waypoints: Sequence[Waypoint]) -> float:
        """Sum of great-circle legs between consecutive valid waypoints"""

        flown = sorted((wp for wp in waypoints if wp.valid), key=lambda wp: wp.sequence)

        total_distance = 0.0
        for current, following in zip(flown, flown[1:]):
            total_distance += self.spatial_ops.haversine_distance(
                current.position.point, following.position.point
            )

        return total_distance

    def estimate_flight_time(self, distance_meters: float, cruise_speed: float) -> float:
        """Flight time in seconds at constant cruise speed"""

        if cruise_speed <= 0:
            raise ValueError("Cruise speed must be positive")
        return distance_meters / cruise_speed

    def estimate_battery_usage(self, flight_time_seconds: float, drain_rate: float) -> float:
        """Battery percentage used, clamped to [0, 100]"""

        return min(100.0, max(0.0, flight_time_seconds * drain_rate))

    def calculate_coverage_area(self, polygon: Sequence[GeoPoint]) -> float:
        """Shoelace area scaled from square degrees at the mean latitude"""

        if len(polygon) < 3:
            return 0.0

        area_sq_deg = self.spatial_ops.shoelace_area_sq_degrees(polygon)
        mean_lat = float(np.mean([p.lat for p in polygon]))

        meters_per_degree_lat = METERS_PER_DEGREE
        meters_per_degree_lon = METERS_PER_DEGREE * math.cos(math.radians(mean_lat))

        return area_sq_deg * meters_per_degree_lat * meters_per_degree_lon

    def calculate_geodesic_area(self, polygon: Sequence[GeoPoint]) -> float:
        """Polygon area on the WGS84 ellipsoid in square meters"""

        if len(polygon) < 3:
            return 0.0

        lons = [p.lon for p in polygon]
        lats = [p.lat for p in polygon]
        area, _ = self.geod.polygon_area_perimeter(lons, lats)
        return abs(area)
