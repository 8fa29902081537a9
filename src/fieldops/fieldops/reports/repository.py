from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import ChemicalReading, ReportPhoto, ServiceTechReport


class ReportRepository(Protocol):
    def create_report(self, report: ServiceTechReport) -> int:
        raise NotImplementedError

    def add_reading(self, reading: ChemicalReading) -> int:
        """Insert one reading in its own statement."""

        raise NotImplementedError

    def add_photo(self, photo: ReportPhoto) -> int:
        raise NotImplementedError

    def exists(self, report_id: int) -> bool:
        raise NotImplementedError

    def get_report(self, report_id: int) -> Optional[ServiceTechReport]:
        """Report with its readings and photos."""

        raise NotImplementedError

    def list_for_user(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[ServiceTechReport]:
        """Reports with start <= service_date < end, newest first, without children."""

        raise NotImplementedError
