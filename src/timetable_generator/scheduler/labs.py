"""Lab placement: parallel two-slot lab sessions across the batches of a course.

Each lab round places one lab per batch, all batches at the same day and
slot pair, each in its own lab room. Subjects rotate across batches and
rounds: batch ``bi`` in round ``r`` takes ``lab_subjects[(bi + r) % n]``.
A round is staged for one candidate day/slot pair at a time and written to
the ledger only when every batch fits.
"""

import logging
from dataclasses import dataclass

from .constants import LAB_SESSION_SLOTS
from .context import PlacementContext
from .models import Course, Day, PlacementWarning, Session, ShortfallReason, Subject, TimeSlot
from .utils import lab_slot_pairs, rotate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LabAssignment:
    """A staged lab for one batch, not yet committed."""

    course_id: str
    subject: Subject
    batch: str
    teacher: str
    room: str
    day: Day
    slots: tuple[TimeSlot, TimeSlot]


class LabScheduler:
    """Places lab rounds for every course."""

    def __init__(self, context: PlacementContext) -> None:
        self.context = context
        self.ledger = context.ledger
        self.registry = context.registry
        self.room_manager = context.registry.rooms

    def schedule(self, courses: list[Course]) -> None:
        """Place all lab rounds of all courses."""
        for course in courses:
            self.schedule_course(course)

    def schedule_course(self, course: Course) -> int:
        """Place the lab rounds of one course.

        Args:
            course: Course to schedule

        Returns:
            Number of rounds placed
        """
        lab_subjects = course.lab_subjects
        batches = course.batches
        if not lab_subjects or not batches:
            return 0

        rounds = lab_subjects[0].labs_per_week or len(batches)
        placed_rounds = 0

        for round_idx in range(rounds):
            plan = self._find_round_plan(course, lab_subjects, round_idx)
            if plan is None:
                self._warn_round(course, lab_subjects, round_idx)
                continue

            self._commit(plan)
            placed_rounds += 1
            first, second = plan[0].slots
            logger.info(
                f"Assigned labs for course {course.label} on {plan[0].day.value} "
                f"({first.start} - {second.end}): "
                + ", ".join(f"{a.subject.name} - {a.batch}@{a.room}" for a in plan)
            )

        return placed_rounds

    def _find_round_plan(
        self, course: Course, lab_subjects: list[Subject], round_idx: int
    ) -> list[LabAssignment] | None:
        """Find the first day/slot pair where every batch can have its lab.

        Days are tried starting at offset ``round_idx`` so different rounds
        prefer different days.
        """
        pairs = lab_slot_pairs(self.registry.time_slots)
        for day in rotate(self.registry.days, round_idx):
            for pair in pairs:
                plan = self._stage_round(course, lab_subjects, round_idx, day, pair)
                if plan is not None:
                    return plan
        return None

    def _stage_round(
        self,
        course: Course,
        lab_subjects: list[Subject],
        round_idx: int,
        day: Day,
        pair: tuple[TimeSlot, TimeSlot],
    ) -> list[LabAssignment] | None:
        """Stage one lab per batch at a day/slot pair without touching the ledger.

        Teachers and rooms taken by an earlier batch of the same stage count
        as busy.

        Returns:
            The staged assignments, or None if any batch cannot be placed
        """
        starts = [slot.start for slot in pair]
        claimed_teachers: set[str] = set()
        claimed_rooms: set[str] = set()
        plan: list[LabAssignment] = []

        for batch_idx, batch in enumerate(course.batches):
            subject = lab_subjects[(batch_idx + round_idx) % len(lab_subjects)]
            teacher = subject.teacher

            if teacher and teacher in claimed_teachers:
                return None
            if not all(self.ledger.is_teacher_free(teacher, day, s) for s in starts):
                return None
            if not all(self.ledger.is_batch_free(course.id, batch, day, s) for s in starts):
                return None
            if not self.context.passes_teacher_constraints(teacher, day, starts):
                return None

            room = self.room_manager.find_lab_room(
                self.ledger,
                day,
                starts,
                preferred=subject.lab_room_no,
                exclude=claimed_rooms,
            )
            if room is None:
                return None

            if not self.ledger.are_free(teacher, room, course.id, batch, day, starts):
                return None

            plan.append(
                LabAssignment(
                    course_id=course.id,
                    subject=subject,
                    batch=batch,
                    teacher=teacher,
                    room=room,
                    day=day,
                    slots=pair,
                )
            )
            if teacher:
                claimed_teachers.add(teacher)
            claimed_rooms.add(room)

        return plan or None

    def _commit(self, plan: list[LabAssignment]) -> None:
        """Emit sessions and occupy cells for every staged lab of a round."""
        for assignment in plan:
            for slot in assignment.slots:
                self.context.emit(
                    assignment.course_id,
                    Session(
                        day=assignment.day,
                        start=slot.start,
                        end=slot.end,
                        subject=assignment.subject.name,
                        teacher=assignment.teacher,
                        room=assignment.room,
                        is_lab=True,
                        batch=assignment.batch,
                    ),
                )
                self.ledger.occupy(
                    assignment.teacher,
                    assignment.room,
                    assignment.course_id,
                    assignment.batch,
                    assignment.day,
                    slot.start,
                )

    def _warn_round(self, course: Course, lab_subjects: list[Subject], round_idx: int) -> None:
        """Record an unplaced lab round."""
        batch_count = len(course.batches)
        round_subjects = {
            lab_subjects[(bi + round_idx) % len(lab_subjects)].name for bi in range(batch_count)
        }

        usable_rooms = {room.name for room in self.room_manager.labs}
        for subject in lab_subjects:
            preferred = self.room_manager.get_room(subject.lab_room_no)
            if preferred is not None and preferred.is_lab:
                usable_rooms.add(preferred.name)

        if len(usable_rooms) < batch_count:
            reason = ShortfallReason.NO_ROOM_AVAILABLE
            details = f"{len(usable_rooms)} lab room(s) for {batch_count} parallel batches"
        else:
            reason = ShortfallReason.NO_SLOT_AVAILABLE
            details = "no day/slot pair fits every batch"

        warning = PlacementWarning(
            course_id=course.id,
            course_label=course.label,
            subject=", ".join(sorted(round_subjects)),
            kind="lab",
            reason=reason,
            required=batch_count * LAB_SESSION_SLOTS,
            placed=0,
            details=details,
            round=round_idx,
        )
        logger.warning(warning.message)
        self.context.warn(warning)
