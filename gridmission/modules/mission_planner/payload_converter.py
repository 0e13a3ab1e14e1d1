"""
Payload Converter - Translate mission plans for external collaborators

This module provides:
- Autopilot waypoint lists (ordered {seq, lat, lon, alt})
- Survey-creation and geofence-registration request bodies
- Mission-store records
- QGroundControl plan documents with obstacle geofences

Only valid waypoints are exported for flight; blocked or out-of-area points
stay in the MissionPlan for display but never reach the autopilot.
"""

import json
import math
from typing import Any, Dict, List, Optional, Sequence

from gridmission.models.mission import MissionPlan, ObstacleZone, SurveyConfig, Waypoint
from gridmission.modules.geofence_manager.spatial_operations import SpatialOperations

MAV_CMD_NAV_WAYPOINT = 16
MAV_CMD_NAV_TAKEOFF = 22
MAV_FRAME_GLOBAL = 0
MAV_FRAME_GLOBAL_RELATIVE_ALT = 3

class PayloadConverter:
    """Converts mission plans and obstacles to collaborator payloads"""

    def __init__(self, circle_vertex_count: int = 32):
        self.spatial_ops = SpatialOperations()
        self.circle_vertex_count = circle_vertex_count

    def to_autopilot_waypoints(self, plan: MissionPlan) -> List[Dict[str, Any]]:
        """Valid waypoints renumbered from 0 in flight order"""

        ordered = sorted(plan.valid_waypoints, key=lambda wp: wp.sequence)
        return [
            {
                "seq": index,
                "lat": wp.position.lat,
                "lon": wp.position.lon,
                "alt": wp.position.alt,
                "plan_sequence": wp.sequence
            }
            for index, wp in enumerate(ordered)
        ]

    def to_survey_request(self, config: SurveyConfig) -> Dict[str, Any]:
        """Survey mission creation request body"""

        return {
            "name": config.name,
            "polygon": [[p.lat, p.lon] for p in config.survey_polygon],
            "altitude": config.altitude,
            "grid_spacing": config.spacing_meters,
            "overlap": config.overlap_fraction,
            "grid_angle": config.sweep_angle_degrees
        }

    def to_geofence_requests(self, obstacles: Sequence[ObstacleZone]) -> List[Dict[str, Any]]:
        """One exclusion geofence request per enabled obstacle"""

        requests = []
        for obstacle in obstacles:
            if not obstacle.enabled:
                continue

            request = {
                "name": obstacle.name,
                "type": "exclusion",
                "shape": obstacle.kind.value,
                "min_altitude": obstacle.min_altitude,
                "max_altitude": obstacle.max_altitude if math.isfinite(obstacle.max_altitude) else None
            }

            if obstacle.kind.is_radial:
                ring = self.spatial_ops.create_circular_polygon(
                    obstacle.center, obstacle.radius_meters, self.circle_vertex_count
                )
                request["center"] = [obstacle.center.lat, obstacle.center.lon]
                request["radius"] = obstacle.radius_meters
                request["vertices"] = [[p.lat, p.lon] for p in ring]
            else:
                request["vertices"] = [[p.lat, p.lon] for p in obstacle.vertices]

            requests.append(request)

        return requests

    def to_mission_record(self, plan: MissionPlan, vehicle_id: str, operator_id: str,
                          created_by: str = "grid_planner") -> Dict[str, Any]:
        """Mission-store record for a generated survey"""

        stats = plan.stats
        waypoints = []
        for index, item in enumerate(self.to_autopilot_waypoints(plan)):
            waypoints.append({
                "id": f"wp-{index}",
                "label": f"Waypoint {index + 1}",
                "coords": self._format_coords(item["lat"], item["lon"]),
                "alt": f"{item['alt']:g}m AGL",
                "lat": item["lat"],
                "lon": item["lon"],
                "altitude": item["alt"],
                "sequence": item["seq"]
            })

        return {
            "mission_name": plan.config.name,
            "mission_type": "Grid Survey",
            "mission_stats": {
                "total_distance": stats.total_distance_meters / 1000,  # km
                "flight_time": stats.flight_time_seconds / 60,         # minutes
                "battery_usage": stats.battery_percent
            },
            "waypoints": waypoints,
            "created_by": created_by,
            "notes": f"Grid survey mission with {stats.valid_count} waypoints",
            "vehicle_id": vehicle_id,
            "operator_id": operator_id,
            "status": "draft"
        }

    def to_qgc_plan(self, plan: MissionPlan, cruise_speed: float = 10.0,
                    hover_speed: float = 5.0) -> Dict[str, Any]:
        """QGroundControl .plan document for the valid waypoints"""

        flown = sorted(plan.valid_waypoints, key=lambda wp: wp.sequence)

        items = []
        if flown:
            items.append(self._create_takeoff_item(flown[0]))
        for wp in flown:
            items.append(self._convert_waypoint_to_qgc_item(wp, len(items) + 1))

        home = [flown[0].position.lat, flown[0].position.lon, 0] if flown else [0, 0, 0]

        return {
            "fileType": "Plan",
            "geoFence": self._create_geofence(plan.config.obstacles),
            "groundStation": "QGroundControl",
            "mission": {
                "cruiseSpeed": cruise_speed,
                "firmwareType": 12,  # ArduPilot
                "globalPlanAltitudeMode": 1,  # Relative altitude
                "hoverSpeed": hover_speed,
                "items": items,
                "plannedHomePosition": home,
                "vehicleType": 2,  # MultiRotor
                "version": 2
            },
            "rallyPoints": {
                "points": [],
                "version": 2
            },
            "version": 1
        }

    def export_qgc_json(self, plan: MissionPlan, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_qgc_plan(plan), indent=indent)

    def _convert_waypoint_to_qgc_item(self, waypoint: Waypoint, jump_id: int) -> Dict[str, Any]:
        position = waypoint.position
        return {
            "AMSLAltAboveTerrain": None,
            "Altitude": position.alt,
            "AltitudeMode": 1,  # Relative
            "autoContinue": True,
            "command": MAV_CMD_NAV_WAYPOINT,
            "doJumpId": jump_id,
            "frame": MAV_FRAME_GLOBAL_RELATIVE_ALT,
            "params": [0, 0, 0, None, position.lat, position.lon, position.alt],
            "type": "SimpleItem"
        }

    def _create_takeoff_item(self, first_waypoint: Waypoint) -> Dict[str, Any]:
        position = first_waypoint.position
        return {
            "AMSLAltAboveTerrain": None,
            "Altitude": position.alt,
            "AltitudeMode": 1,
            "autoContinue": True,
            "command": MAV_CMD_NAV_TAKEOFF,
            "doJumpId": 1,
            "frame": MAV_FRAME_GLOBAL_RELATIVE_ALT,
            "params": [15, 0, 0, None, position.lat, position.lon, position.alt],
            "type": "SimpleItem"
        }

    def _create_geofence(self, obstacles: Sequence[ObstacleZone]) -> Dict[str, Any]:
        circles = []
        polygons = []

        for obstacle in obstacles:
            if not obstacle.enabled:
                continue
            if obstacle.kind.is_radial:
                circles.append({
                    "circle": {
                        "center": [obstacle.center.lat, obstacle.center.lon],
                        "radius": obstacle.radius_meters
                    },
                    "inclusion": False,
                    "version": 1
                })
            else:
                polygons.append({
                    "inclusion": False,
                    "polygon": [[p.lat, p.lon] for p in obstacle.vertices],
                    "version": 1
                })

        return {"circles": circles, "polygons": polygons, "version": 2}

    @staticmethod
    def _format_coords(lat: float, lon: float) -> str:
        lat_hemisphere = "N" if lat >= 0 else "S"
        lon_hemisphere = "E" if lon >= 0 else "W"
        return f"{abs(lat):.6f}° {lat_hemisphere}, {abs(lon):.6f}° {lon_hemisphere}"
