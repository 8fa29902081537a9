from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import SiteEvaluation


class EvaluationRepository(Protocol):
    def create(self, evaluation: SiteEvaluation) -> int:
        raise NotImplementedError

    def get_by_id(self, evaluation_id: int) -> Optional[SiteEvaluation]:
        raise NotImplementedError

    def list_for_user(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[SiteEvaluation]:
        """Evaluations with start <= evaluation_date < end, newest first."""

        raise NotImplementedError
