"""Mutable state shared by the placement stages of one generation pass."""

from collections import defaultdict
from collections.abc import Iterable

from .models import Day, PlacementWarning, Session
from .occupancy import OccupancyLedger
from .preferences import PreferenceStore
from .registry import ResourceRegistry


class PlacementContext:
    """Ledger, emitted sessions and warnings of one generation pass.

    Lab and lecture placement both read and write the same ledger, so no two
    courses can double-book a teacher or a room. A new context (and ledger)
    is created for every pass.
    """

    def __init__(
        self,
        registry: ResourceRegistry,
        preferences: PreferenceStore,
        course_ids: Iterable[str],
    ) -> None:
        self.registry = registry
        self.preferences = preferences
        self.ledger = OccupancyLedger()
        self.sessions: dict[str, list[Session]] = {cid: [] for cid in course_ids}
        self.warnings: list[PlacementWarning] = []
        # teacher -> sessions across all courses, for load limit checks
        self._teacher_sessions: dict[str, list[Session]] = defaultdict(list)

    def emit(self, course_id: str, session: Session) -> None:
        """Record a placed session. Occupancy is written separately."""
        self.sessions.setdefault(course_id, []).append(session)
        if session.teacher:
            self._teacher_sessions[session.teacher].append(session)

    def teacher_sessions(self, teacher: str) -> list[Session]:
        return self._teacher_sessions.get(teacher, [])

    def passes_teacher_constraints(self, teacher: str, day: Day, starts: list[str]) -> bool:
        """Check a teacher's blocked slots and load limits for a placement."""
        return self.preferences.passes_hard_constraints(
            teacher,
            day,
            starts,
            self.teacher_sessions(teacher),
            self.registry.slot_duration,
        )

    def warn(self, warning: PlacementWarning) -> None:
        self.warnings.append(warning)
