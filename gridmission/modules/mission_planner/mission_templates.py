"""
Mission Templates - Predefined survey configurations and obstacle presets

Templates are stored in the same loose payload shape the ground-control UI
sends and go through SurveyConfig.from_dict, so they exercise the same
boundary parsing as live requests.
"""

from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Union

from gridmission.exceptions import ConfigurationError
from gridmission.models.mission import GeoPoint, ObstacleZone, SurveyConfig
from gridmission.modules.geofence_manager.spatial_operations import SpatialOperations

def _rectangle(south: float, west: float, north: float, east: float) -> List[Dict[str, float]]:
    return [
        {"lat": south, "lng": west},
        {"lat": north, "lng": west},
        {"lat": north, "lng": east},
        {"lat": south, "lng": east}
    ]

TEMPLATE_PAYLOADS = {
    "BORDER_SURVEILLANCE_NEPAL": {
        "name": "India-Nepal Border Survey",
        "surveyArea": {"vertices": [
            {"lat": 27.4728, "lng": 80.3439},
            {"lat": 27.4928, "lng": 80.3639},
            {"lat": 27.4928, "lng": 80.4239},
            {"lat": 27.4728, "lng": 80.4039}
        ]},
        "altitude": 80, "gridSpacing": 50, "overlap": 0.6, "gridAngle": 45,
        "obstacles": []
    },
    "BORDER_SURVEILLANCE_PAKISTAN": {
        "name": "India-Pakistan Border Survey",
        "surveyArea": {"vertices": [
            {"lat": 24.8607, "lng": 70.6403},
            {"lat": 24.8807, "lng": 70.6603},
            {"lat": 24.8807, "lng": 70.7203},
            {"lat": 24.8607, "lng": 70.7003}
        ]},
        "altitude": 100, "gridSpacing": 60, "overlap": 0.5, "gridAngle": 0,
        "obstacles": []
    },
    "LUCKNOW_CITY_CENTER": {
        "name": "Lucknow City Center Survey",
        "surveyArea": {"vertices": _rectangle(26.8467, 80.9362, 26.8567, 80.9562)},
        "altitude": 60, "gridSpacing": 20, "overlap": 0.8, "gridAngle": 0,
        "obstacles": [{
            "id": "lucknow-airport",
            "name": "Chaudhary Charan Singh Airport",
            "type": "circle",
            "enabled": True,
            "center": {"lat": 26.7606, "lng": 80.8893},
            "radius": 5000,
            "minAltitude": 0,
            "maxAltitude": 150
        }]
    },
    "KANPUR_INDUSTRIAL": {
        "name": "Kanpur Industrial Zone Survey",
        "surveyArea": {"vertices": _rectangle(26.4499, 80.3219, 26.4599, 80.3419)},
        "altitude": 50, "gridSpacing": 25, "overlap": 0.7, "gridAngle": 0,
        "obstacles": []
    },
    "AGRICULTURAL_SURVEY": {
        "name": "Agricultural Field Survey",
        "surveyArea": {"vertices": _rectangle(26.8000, 80.9000, 26.8100, 80.9200)},
        "altitude": 40, "gridSpacing": 15, "overlap": 0.75, "gridAngle": 0,
        "obstacles": []
    },
    "HIGHWAY_CORRIDOR": {
        "name": "Highway Corridor Inspection",
        "surveyArea": {"vertices": [
            {"lat": 26.8467, "lng": 80.9462},
            {"lat": 26.8567, "lng": 80.9462},
            {"lat": 26.8667, "lng": 80.9562},
            {"lat": 26.8567, "lng": 80.9562}
        ]},
        "altitude": 50, "gridSpacing": 30, "overlap": 0.7, "gridAngle": 45,
        "obstacles": []
    },
    "RAILWAY_INSPECTION": {
        "name": "Railway Track Inspection",
        "surveyArea": {"vertices": [
            {"lat": 26.8400, "lng": 80.9400},
            {"lat": 26.8500, "lng": 80.9400},
            {"lat": 26.8600, "lng": 80.9500},
            {"lat": 26.8500, "lng": 80.9500}
        ]},
        "altitude": 35, "gridSpacing": 20, "overlap": 0.8, "gridAngle": 30,
        "obstacles": []
    },
    "COASTAL_SURVEILLANCE": {
        "name": "Coastal Area Surveillance",
        "surveyArea": {"vertices": _rectangle(8.7284, 77.7596, 8.7384, 77.7796)},
        "altitude": 70, "gridSpacing": 40, "overlap": 0.6, "gridAngle": 0,
        "obstacles": []
    },
    "DISASTER_ASSESSMENT": {
        "name": "Disaster Assessment Survey",
        "surveyArea": {"vertices": _rectangle(26.8467, 80.9462, 26.8567, 80.9662)},
        "altitude": 45, "gridSpacing": 15, "overlap": 0.85, "gridAngle": 0,
        "obstacles": []
    }
}

TEMPLATE_CATEGORIES = {
    "border": ["BORDER_SURVEILLANCE_NEPAL", "BORDER_SURVEILLANCE_PAKISTAN"],
    "urban": ["LUCKNOW_CITY_CENTER", "KANPUR_INDUSTRIAL"],
    "agriculture": ["AGRICULTURAL_SURVEY"],
    "infrastructure": ["HIGHWAY_CORRIDOR", "RAILWAY_INSPECTION"],
    "coastal": ["COASTAL_SURVEILLANCE"],
    "emergency": ["DISASTER_ASSESSMENT"]
}

OBSTACLE_PRESETS = {
    "AIRPORT_5KM": {
        "id": "airport-5km", "name": "Airport Restricted Zone (5km)", "type": "circle",
        "radius": 5000, "minAltitude": 0, "maxAltitude": 150
    },
    "MILITARY_BASE": {
        "id": "military-base", "name": "Military Installation", "type": "polygon",
        "minAltitude": 0, "maxAltitude": 200
    },
    "POWER_LINES": {
        "id": "power-lines", "name": "High Voltage Power Lines", "type": "cylinder",
        "radius": 100, "minAltitude": 0, "maxAltitude": 50
    },
    "RESIDENTIAL_AREA": {
        "id": "residential", "name": "Residential Area", "type": "polygon",
        "minAltitude": 0, "maxAltitude": 60
    },
    "WATER_BODY": {
        "id": "water-body", "name": "Water Body / River", "type": "polygon",
        "minAltitude": 0, "maxAltitude": 30
    }
}

def get_all_templates() -> Dict[str, SurveyConfig]:
    return {name: SurveyConfig.from_dict(payload) for name, payload in TEMPLATE_PAYLOADS.items()}

def get_template(name: str) -> Optional[SurveyConfig]:
    payload = TEMPLATE_PAYLOADS.get(name)
    return SurveyConfig.from_dict(payload) if payload else None

def get_templates_by_category(category: str) -> List[SurveyConfig]:
    names = TEMPLATE_CATEGORIES.get(category.lower(), [])
    return [SurveyConfig.from_dict(TEMPLATE_PAYLOADS[name]) for name in names]

def create_obstacle_from_preset(preset_name: str,
                                location: Union[GeoPoint, Sequence[GeoPoint]],
                                custom_name: Optional[str] = None,
                                zone_id: Optional[str] = None) -> Optional[ObstacleZone]:
    """Place a preset obstacle.

    Circle and cylinder presets take a single center point; polygon presets
    take the vertex list. Unknown presets return None.
    """

    preset = OBSTACLE_PRESETS.get(preset_name)
    if preset is None:
        return None

    payload = dict(preset)
    if custom_name:
        payload["name"] = custom_name
    if zone_id:
        payload["id"] = zone_id

    is_point = isinstance(location, GeoPoint)
    if payload["type"] == "polygon":
        if is_point:
            raise ConfigurationError(f"Preset {preset_name} needs a vertex list, not a single point")
        payload["vertices"] = [p.to_dict() for p in location]
    else:
        if not is_point:
            raise ConfigurationError(f"Preset {preset_name} needs a single center point")
        payload["center"] = location.to_dict()

    return ObstacleZone.from_dict(payload)

def adjust_template_for_region(template: SurveyConfig, center: GeoPoint,
                               scale_area: float = 1.0) -> SurveyConfig:
    """Move a template's survey area (and obstacles) to a new center, optionally scaled"""

    original = SpatialOperations().polygon_centroid(template.survey_polygon)
    lat_offset = center.lat - original.lat
    lon_offset = center.lon - original.lon

    def shift(point: GeoPoint) -> GeoPoint:
        return GeoPoint(point.lat + lat_offset, point.lon + lon_offset)

    moved = [shift(p) for p in template.survey_polygon]
    if scale_area != 1.0:
        moved = [
            GeoPoint(center.lat + (p.lat - center.lat) * scale_area,
                     center.lon + (p.lon - center.lon) * scale_area)
            for p in moved
        ]

    obstacles = []
    for obstacle in template.obstacles:
        obstacles.append(replace(
            obstacle,
            vertices=tuple(shift(v) for v in obstacle.vertices),
            center=shift(obstacle.center) if obstacle.center else None
        ))

    return replace(template, survey_polygon=tuple(moved), obstacles=tuple(obstacles))
