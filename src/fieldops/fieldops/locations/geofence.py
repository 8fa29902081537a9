"""Great-circle distance checks against a location's geofence."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from .model import JobLocation

EARTH_RADIUS_M = 6371000


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance in metres between two points on Earth."""

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = math.sin(delta_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def distance_from(location: JobLocation, point: Coordinate) -> Optional[float]:
    """None when the location has no coordinates on file."""

    if not location.has_coordinates:
        return None
    return haversine_distance(float(location.latitude), float(location.longitude), point.latitude, point.longitude)


def inside_geofence(location: JobLocation, point: Coordinate) -> bool:
    distance = distance_from(location, point)
    # No coordinates means no fence to leave.
    if distance is None:
        return True
    return distance <= location.radius
