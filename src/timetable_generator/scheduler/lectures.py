"""Lecture placement with optional co-scheduled electives.

Subjects of a course are placed in a random (seedable) order. Each lecture
goes to the best-ranked free slot: candidates are every (day, slot) that
passes the ledger and the teachers' hard limits, ranked by preference
bonus, then by how few lectures of the subject that day already has, then
by a day order that rotates with every placement.
"""

import logging
import random
from collections import Counter
from dataclasses import dataclass

from .constants import ATTEMPT_CAP_FACTOR, DEFAULT_TOP_CANDIDATES
from .context import PlacementContext
from .models import Course, Day, PlacementWarning, Session, ShortfallReason, Subject, TimeSlot
from .utils import rotate, shuffled

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LectureCandidate:
    """A slot where a lecture (and its elective, if any) fits."""

    day: Day
    slot: TimeSlot
    room: str
    elective_room: str | None
    bonus: int


class LectureScheduler:
    """Places theory lectures for every course."""

    def __init__(
        self,
        context: PlacementContext,
        rng: random.Random,
        max_attempts: int | None = None,
        top_candidates: int = DEFAULT_TOP_CANDIDATES,
    ) -> None:
        """Initialize the lecture scheduler.

        Args:
            context: Shared placement state
            rng: Random source for the subject order
            max_attempts: Attempt cap per subject, defaults to
                          days x slots x ATTEMPT_CAP_FACTOR
            top_candidates: Ranked candidates tried per attempt
        """
        self.context = context
        self.ledger = context.ledger
        self.registry = context.registry
        self.preferences = context.preferences
        self.room_manager = context.registry.rooms
        self.rng = rng
        if max_attempts is None:
            max_attempts = (
                len(self.registry.days) * len(self.registry.time_slots) * ATTEMPT_CAP_FACTOR
            )
        self.max_attempts = max_attempts
        self.top_candidates = max(1, top_candidates)

    def schedule(self, courses: list[Course]) -> None:
        """Place the lectures of all courses."""
        for course in courses:
            self.schedule_course(course)

    def schedule_course(self, course: Course) -> None:
        """Place the lectures of one course, subjects in shuffled order."""
        for subject in shuffled(course.lecture_subjects, self.rng):
            self.schedule_subject(course, subject)

    def schedule_subject(self, course: Course, subject: Subject) -> int:
        """Place ``lectures_per_week`` lectures of a subject.

        Args:
            course: Course the subject belongs to
            subject: Subject to place

        Returns:
            Number of lectures placed
        """
        required = subject.lectures_per_week
        placed = 0
        attempts = 0
        reason = ShortfallReason.ATTEMPTS_EXHAUSTED

        while placed < required and attempts < self.max_attempts:
            attempts += 1
            candidates = self.rank_candidates(course, subject, placed + attempts)
            if not candidates:
                reason = self._no_candidate_reason(subject)
                break
            if self.try_place_class(course, subject, candidates):
                placed += 1

        if placed < required:
            if reason == ShortfallReason.NO_ROOM_AVAILABLE:
                details = "not enough classrooms"
            elif reason == ShortfallReason.NO_SLOT_AVAILABLE:
                details = "no free slot left"
            else:
                details = f"attempt cap of {self.max_attempts} reached"
            warning = PlacementWarning(
                course_id=course.id,
                course_label=course.label,
                subject=subject.name,
                kind="lecture",
                reason=reason,
                required=required,
                placed=placed,
                details=details,
            )
            logger.warning(warning.message)
            self.context.warn(warning)

        return placed

    def rank_candidates(
        self, course: Course, subject: Subject, rotation: int
    ) -> list[LectureCandidate]:
        """Collect and rank every slot where the subject's lecture fits.

        Args:
            course: Course being scheduled
            subject: Subject being placed
            rotation: Day order offset used as a tie-breaker

        Returns:
            Candidates, best first
        """
        days = rotate(self.registry.days, rotation)
        day_rank = {day: i for i, day in enumerate(days)}
        per_day = Counter(
            s.day
            for s in self.context.sessions.get(course.id, [])
            if s.subject == subject.name and not s.is_lab
        )

        candidates = []
        for day in days:
            for slot in self.registry.teaching_slots:
                candidate = self._build_candidate(course, subject, day, slot)
                if candidate is not None:
                    candidates.append(candidate)

        candidates.sort(
            key=lambda c: (
                -c.bonus,
                per_day[c.day],
                day_rank[c.day],
                self.registry.slot_index(c.slot.start),
            )
        )
        return candidates

    def _build_candidate(
        self, course: Course, subject: Subject, day: Day, slot: TimeSlot
    ) -> LectureCandidate | None:
        """Check one slot against the ledger and hard limits."""
        start = slot.start
        teacher = subject.teacher

        if not self.ledger.is_course_free(course.id, day, start):
            return None
        if not self.ledger.is_teacher_free(teacher, day, start):
            return None
        if not self.context.passes_teacher_constraints(teacher, day, [start]):
            return None

        room = self.room_manager.find_classroom(self.ledger, day, start)
        if room is None:
            return None

        bonus = self.preferences.calculate_preference_bonus(teacher, day, start, subject.name)
        elective_room = None

        if subject.has_elective_pairing:
            elective_teacher = subject.elective_teacher
            if elective_teacher == teacher:
                return None
            if not self.ledger.is_teacher_free(elective_teacher, day, start):
                return None
            if not self.context.passes_teacher_constraints(elective_teacher, day, [start]):
                return None
            elective_room = self.room_manager.find_classroom(
                self.ledger, day, start, exclude=[room]
            )
            if elective_room is None:
                return None
            bonus += self.preferences.calculate_preference_bonus(
                elective_teacher, day, start, subject.elective_subject_name
            )

        return LectureCandidate(
            day=day, slot=slot, room=room, elective_room=elective_room, bonus=bonus
        )

    def try_place_class(
        self, course: Course, subject: Subject, candidates: list[LectureCandidate]
    ) -> bool:
        """Commit the first of the top-ranked candidates that is still free.

        Every resource (teacher, room, course cell and, for an elective
        pairing, the elective teacher and a second classroom) is checked
        before anything is written.

        Returns:
            True if a lecture was placed
        """
        for candidate in candidates[: self.top_candidates]:
            if not self._is_candidate_free(course, subject, candidate):
                continue
            self._commit(course, subject, candidate)
            return True
        return False

    def _is_candidate_free(
        self, course: Course, subject: Subject, candidate: LectureCandidate
    ) -> bool:
        day, start = candidate.day, candidate.slot.start
        if not self.ledger.is_free(subject.teacher, candidate.room, course.id, None, day, start):
            return False
        if subject.has_elective_pairing:
            if candidate.elective_room is None or candidate.elective_room == candidate.room:
                return False
            if not self.ledger.is_teacher_free(subject.elective_teacher, day, start):
                return False
            if not self.ledger.is_room_free(candidate.elective_room, day, start):
                return False
        return True

    def _commit(self, course: Course, subject: Subject, candidate: LectureCandidate) -> None:
        """Emit the lecture (and its elective) and occupy their cells."""
        day, slot = candidate.day, candidate.slot

        self.context.emit(
            course.id,
            Session(
                day=day,
                start=slot.start,
                end=slot.end,
                subject=subject.name,
                teacher=subject.teacher,
                room=candidate.room,
                is_elective=subject.is_elective,
            ),
        )
        self.ledger.occupy(subject.teacher, candidate.room, course.id, None, day, slot.start)
        logger.debug(
            f"Placed {subject.name} for {course.label} on {day.value} {slot.start} "
            f"in {candidate.room}"
        )

        if subject.has_elective_pairing:
            self.context.emit(
                course.id,
                Session(
                    day=day,
                    start=slot.start,
                    end=slot.end,
                    subject=subject.elective_subject_name,
                    teacher=subject.elective_teacher,
                    room=candidate.elective_room,
                    is_elective=True,
                    parent_subject=subject.name,
                ),
            )
            self.ledger.occupy(
                subject.elective_teacher, candidate.elective_room, course.id, None, day, slot.start
            )
            logger.debug(
                f"Placed elective {subject.elective_subject_name} alongside {subject.name} "
                f"on {day.value} {slot.start} with {subject.elective_teacher} "
                f"in {candidate.elective_room}"
            )

    def _no_candidate_reason(self, subject: Subject) -> ShortfallReason:
        needed = 2 if subject.has_elective_pairing else 1
        if len(self.room_manager.classrooms) < needed:
            return ShortfallReason.NO_ROOM_AVAILABLE
        return ShortfallReason.NO_SLOT_AVAILABLE
