"""Plan-based quota policy for note creation."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..models.tenant import Plan

DEFAULT_FREE_PLAN_NOTE_LIMIT = 3


class NoteGate(str, Enum):
    """Whether a tenant may create another note right now."""

    UNDER_LIMIT = "UNDER_LIMIT"
    AT_LIMIT = "AT_LIMIT"


@dataclass(frozen=True)
class QuotaPolicy:
    """Maps (plan, current note count) to a gate state.

    Stateless: the count is always read from the store at evaluation time.
    """

    free_plan_limit: int = DEFAULT_FREE_PLAN_NOTE_LIMIT

    def limit_for(self, plan: Plan) -> Optional[int]:
        """Note cap for a plan; None means unlimited."""
        if Plan(plan) is Plan.FREE:
            return self.free_plan_limit
        return None

    def evaluate(self, plan: Plan, note_count: int) -> NoteGate:
        limit = self.limit_for(plan)
        if limit is not None and note_count >= limit:
            return NoteGate.AT_LIMIT
        return NoteGate.UNDER_LIMIT
