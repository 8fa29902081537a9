from __future__ import annotations

import dataclasses
import logging
import re
from typing import Optional, Sequence

from ..common.datetime_utils import now_utc
from ..common.validators import optional_text, require_non_empty
from ..core.constants import MAX_LOCKBOX_LENGTH
from ..core.exceptions import NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import JobLocation, LocationContact
from .repository import LocationRepository

logger = logging.getLogger(__name__)

_LOCKBOX_RE = re.compile(rf"[A-Za-z0-9]{{1,{MAX_LOCKBOX_LENGTH}}}")


class LocationService:
    """Use case: maintain job sites, their geofence and contacts."""

    def __init__(self, locations: LocationRepository, users: UserRepository):
        self._locations = locations
        self._users = users

    def list_all(self, *, active_only: bool = False) -> Sequence[JobLocation]:
        return self._locations.list_all(active_only=active_only)

    def get(self, location_id: int) -> JobLocation:
        location = self._locations.get_by_id(int(location_id))
        if not location:
            raise NotFoundError("Location not found")
        return location

    def create(self, location: JobLocation, contacts: Sequence[LocationContact] = ()) -> int:
        location = self._validated(location)
        contacts = self._validated_contacts(contacts)
        location = dataclasses.replace(location, created_at=location.created_at or now_utc())

        location_id = self._locations.create(location, contacts)
        logger.info("Created location %s (%s) with %d contacts", location_id, location.name, len(contacts))
        return location_id

    def update(self, location_id: int, location: JobLocation, contacts: Sequence[LocationContact] = ()) -> None:
        if location.location_id is not None and int(location.location_id) != int(location_id):
            raise ValidationError("Location id mismatch")

        location = dataclasses.replace(self._validated(location), location_id=int(location_id))
        contacts = self._validated_contacts(contacts)
        if not self._locations.update(location, contacts):
            raise NotFoundError("Location not found")
        logger.info("Updated location %s, contacts replaced (%d)", location_id, len(contacts))

    def delete(self, location_id: int) -> None:
        if not self._locations.delete(int(location_id)):
            raise NotFoundError("Location not found")
        logger.info("Deleted location %s", location_id)

    def _validated(self, location: JobLocation) -> JobLocation:
        name = require_non_empty(location.name, "Name")
        if int(location.radius) <= 0:
            raise ValidationError("Radius must be greater than zero")

        lockbox = optional_text(location.lockbox_code)
        if lockbox is not None and not _LOCKBOX_RE.fullmatch(lockbox):
            raise ValidationError(f"Lockbox code must be up to {MAX_LOCKBOX_LENGTH} letters or digits")

        if (location.latitude is None) != (location.longitude is None):
            raise ValidationError("Latitude and longitude must be given together")

        if location.supervisor_id is not None and not self._users.get_by_id(int(location.supervisor_id)):
            raise ValidationError("Supervisor does not exist")

        return dataclasses.replace(location, name=name, lockbox_code=lockbox)

    @staticmethod
    def _validated_contacts(contacts: Optional[Sequence[LocationContact]]) -> list[LocationContact]:
        contacts = list(contacts or [])
        if sum(1 for c in contacts if c.is_primary) > 1:
            raise ValidationError("Only one contact can be primary")
        return contacts
