from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import JobLocation, LocationContact


class LocationRepository(Protocol):
    def get_by_id(self, location_id: int) -> Optional[JobLocation]:
        """Location with contacts and supervisor name."""

        raise NotImplementedError

    def list_all(self, *, active_only: bool = False) -> Sequence[JobLocation]:
        raise NotImplementedError

    def create(self, location: JobLocation, contacts: Sequence[LocationContact]) -> int:
        raise NotImplementedError

    def update(self, location: JobLocation, contacts: Sequence[LocationContact]) -> bool:
        """Update the row and replace its contacts wholesale."""

        raise NotImplementedError

    def delete(self, location_id: int) -> bool:
        raise NotImplementedError
