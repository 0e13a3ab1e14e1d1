"""
Spatial Operations - Geodesic and planar primitives for survey planning

This module provides:
- Great-circle distance, bearing and destination point
- Degree/meter conversions with latitude correction
- Point-in-polygon and point-in-circle tests
- Planar segment intersection for sweep probing
- Bounding box, centroid, area and circle approximation helpers

Distances use a spherical Earth (haversine). Segment intersection works in
plain (lon, lat) degrees, which is an acceptable approximation for survey
areas under roughly 50 km across.
"""

import math
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from geopy.distance import great_circle

from gridmission.models.mission import GeoPoint

EARTH_RADIUS_M = 6371000.0
METERS_PER_DEGREE = 111000.0
POLE_LATITUDE_LIMIT = 89.9  # degrees; longitude scale is frozen beyond this
PARALLEL_EPSILON = 1e-12

class SpatialOperations:
    """Spatial operations for survey planning and obstacle checks"""

    def __init__(self):
        self.earth_radius = EARTH_RADIUS_M
        self._earth_radius_km = EARTH_RADIUS_M / 1000.0
        self._min_cos_latitude = math.cos(math.radians(POLE_LATITUDE_LIMIT))

    def haversine_distance(self, a: GeoPoint, b: GeoPoint) -> float:
        """Great-circle distance between two points in meters"""

        return great_circle(a.to_tuple(), b.to_tuple(), radius=self._earth_radius_km).meters

    def bearing(self, a: GeoPoint, b: GeoPoint) -> float:
        """Initial bearing from a to b in degrees [0, 360)"""

        lat1_rad = math.radians(a.lat)
        lat2_rad = math.radians(b.lat)
        delta_lon_rad = math.radians(b.lon - a.lon)

        y = math.sin(delta_lon_rad) * math.cos(lat2_rad)
        x = (math.cos(lat1_rad) * math.sin(lat2_rad) -
             math.sin(lat1_rad) * math.cos(lat2_rad) * math.cos(delta_lon_rad))

        bearing_deg = math.degrees(math.atan2(y, x))

        # atan2 can return -0.0 or values that round to 360.0
        normalized = (bearing_deg + 360) % 360
        return 0.0 if normalized >= 360.0 else normalized

    def destination(self, origin: GeoPoint, distance_meters: float,
                    bearing_degrees: float) -> GeoPoint:
        """Point reached travelling distance_meters from origin along bearing_degrees"""

        if distance_meters < 0:
            distance_meters = -distance_meters
            bearing_degrees = bearing_degrees + 180

        point = great_circle(radius=self._earth_radius_km).destination(
            origin.to_tuple(), bearing_degrees % 360, distance=distance_meters / 1000.0
        )
        return GeoPoint(point.latitude, point.longitude)

    def meters_to_degrees_lat(self, meters: float) -> float:
        """Convert meters to degrees latitude"""
        return meters / METERS_PER_DEGREE

    def meters_to_degrees_lon(self, meters: float, latitude: float) -> float:
        """Convert meters to degrees longitude at given latitude"""

        cos_lat = max(math.cos(math.radians(latitude)), self._min_cos_latitude)
        return meters / (METERS_PER_DEGREE * cos_lat)

    def point_in_polygon(self, point: GeoPoint, polygon: Sequence[GeoPoint]) -> bool:
        """Even-odd ray casting test. Points exactly on an edge may go either way."""

        n = len(polygon)
        if n < 3:
            return False

        inside = False
        j = n - 1
        for i in range(n):
            yi, xi = polygon[i].lat, polygon[i].lon
            yj, xj = polygon[j].lat, polygon[j].lon

            if (yi > point.lat) != (yj > point.lat):
                x_cross = (xj - xi) * (point.lat - yi) / (yj - yi) + xi
                if point.lon < x_cross:
                    inside = not inside
            j = i

        return inside

    def point_in_circle(self, point: GeoPoint, center: GeoPoint, radius_meters: float) -> bool:
        return self.haversine_distance(point, center) <= radius_meters

    def segment_intersection(self, p1: GeoPoint, p2: GeoPoint,
                             p3: GeoPoint, p4: GeoPoint) -> Optional[GeoPoint]:
        """Intersection of segments p1-p2 and p3-p4 in planar (lon, lat) space"""

        x1, y1 = p1.lon, p1.lat
        x2, y2 = p2.lon, p2.lat
        x3, y3 = p3.lon, p3.lat
        x4, y4 = p4.lon, p4.lat

        denom = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
        if abs(denom) < PARALLEL_EPSILON:
            return None

        t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denom
        u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / denom

        if 0 <= t <= 1 and 0 <= u <= 1:
            return GeoPoint(lat=y1 + t * (y2 - y1), lon=x1 + t * (x2 - x1))

        return None

    def calculate_bounding_box(self, polygon: Sequence[GeoPoint]) -> Dict[str, float]:
        """Axis-aligned bounding box of a polygon"""

        if not polygon:
            return {"min_lat": 0.0, "max_lat": 0.0, "min_lon": 0.0, "max_lon": 0.0}

        lats = [p.lat for p in polygon]
        lons = [p.lon for p in polygon]

        return {
            "min_lat": min(lats),
            "max_lat": max(lats),
            "min_lon": min(lons),
            "max_lon": max(lons)
        }

    def polygon_centroid(self, polygon: Sequence[GeoPoint]) -> GeoPoint:
        """Vertex mean of a polygon"""

        if not polygon:
            return GeoPoint(0.0, 0.0)

        coords = np.array([p.to_tuple() for p in polygon], dtype=float)
        lat, lon = coords.mean(axis=0)
        return GeoPoint(float(lat), float(lon))

    def shoelace_area_sq_degrees(self, polygon: Sequence[GeoPoint]) -> float:
        """Planar polygon area in square degrees"""

        if len(polygon) < 3:
            return 0.0

        lons = np.array([p.lon for p in polygon], dtype=float)
        lats = np.array([p.lat for p in polygon], dtype=float)

        area = np.dot(lons, np.roll(lats, -1)) - np.dot(np.roll(lons, -1), lats)
        return float(abs(area) / 2.0)

    def create_circular_polygon(self, center: GeoPoint, radius_meters: float,
                                num_points: int = 32) -> List[GeoPoint]:
        """Open ring of points approximating a circle"""

        polygon_coords = []
        for i in range(num_points):
            bearing = 360.0 * i / num_points
            polygon_coords.append(self.destination(center, radius_meters, bearing))

        return polygon_coords

    def local_offset_meters(self, origin: GeoPoint, point: GeoPoint) -> Tuple[float, float]:
        """(north, east) offset of point from origin in an equirectangular frame"""

        north = (point.lat - origin.lat) * METERS_PER_DEGREE
        east = (point.lon - origin.lon) / self.meters_to_degrees_lon(1.0, origin.lat)
        return north, east

    def offset_point(self, origin: GeoPoint, north_meters: float, east_meters: float) -> GeoPoint:
        """Inverse of local_offset_meters"""

        return GeoPoint(
            lat=origin.lat + self.meters_to_degrees_lat(north_meters),
            lon=origin.lon + self.meters_to_degrees_lon(east_meters, origin.lat)
        )
