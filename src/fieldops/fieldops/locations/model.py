from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from ..core.constants import DEFAULT_COUNTRY, DEFAULT_GEOFENCE_RADIUS_M


@dataclass(frozen=True)
class LocationContact:
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    contact_role: Optional[str] = None
    is_primary: bool = False
    contact_id: Optional[int] = None
    location_id: Optional[int] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class JobLocation:
    """A pool site employees are dispatched to.

    `radius` is the geofence radius in metres around (latitude, longitude).
    `supervisor_name` is only filled on reads joined with users.
    """

    name: str
    location_id: Optional[int] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = DEFAULT_COUNTRY
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius: int = DEFAULT_GEOFENCE_RADIUS_M
    pool_type: Optional[str] = None
    pool_size: Optional[str] = None
    lockbox_code: Optional[str] = None
    supervisor_id: Optional[int] = None
    pool_depth_feet: Optional[int] = None
    pool_depth_inches: Optional[int] = None
    has_wading_pool: bool = False
    wading_pool_size_gallons: Optional[int] = None
    has_spa: bool = False
    spa_size_gallons: Optional[int] = None
    notes: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    supervisor_name: Optional[str] = None
    contacts: Tuple[LocationContact, ...] = field(default_factory=tuple)

    json_properties = ("full_address", "display_pool_depth")

    @property
    def full_address(self) -> str:
        state_zip = " ".join(p for p in (self.state, self.zip_code) if p)
        return ", ".join(p for p in (self.address, self.city, state_zip, self.country) if p)

    @property
    def display_pool_depth(self) -> str:
        if self.pool_depth_feet is None:
            return "Not specified"
        return f"{self.pool_depth_feet}' {self.pool_depth_inches or 0}\""

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None
