"""Occupancy tracking for timetable generation."""

from collections import defaultdict
from collections.abc import Iterable

from .models import Day

Cell = tuple[Day, str]


class OccupancyLedger:
    """Tracks which teachers, rooms, courses and batches are busy.

    The ledger keeps four independent schedules, each mapping a resource to
    the set of (day, slot start) cells it occupies:
    - teachers: teacher name -> cells
    - rooms: room name -> cells
    - courses: course id -> cells (any session of the course)
    - batches: (course id, batch) -> cells (lab sessions of that batch)

    Cells only ever go from free to occupied. A ledger lives for exactly one
    generation pass; callers must check every resource of a placement with
    ``is_free`` before calling ``occupy``.
    """

    def __init__(self) -> None:
        self._teachers: dict[str, set[Cell]] = defaultdict(set)
        self._rooms: dict[str, set[Cell]] = defaultdict(set)
        self._courses: dict[str, set[Cell]] = defaultdict(set)
        self._batches: dict[tuple[str, str], set[Cell]] = defaultdict(set)

    def is_teacher_free(self, teacher: str | None, day: Day, start: str) -> bool:
        """Check if a teacher has no session at the given cell.

        An empty teacher name never conflicts.
        """
        if not teacher:
            return True
        return (day, start) not in self._teachers.get(teacher, ())

    def is_room_free(self, room: str | None, day: Day, start: str) -> bool:
        """Check if a room is unoccupied at the given cell."""
        if not room:
            return True
        return (day, start) not in self._rooms.get(room, ())

    def is_course_free(self, course_id: str, day: Day, start: str) -> bool:
        """Check if a course has no session (of any batch) at the given cell."""
        return (day, start) not in self._courses.get(course_id, ())

    def is_batch_free(self, course_id: str, batch: str, day: Day, start: str) -> bool:
        """Check if a batch of a course has no session at the given cell."""
        return (day, start) not in self._batches.get((course_id, batch), ())

    def is_free(
        self,
        teacher: str | None,
        room: str | None,
        course_id: str,
        batch: str | None,
        day: Day,
        start: str,
    ) -> bool:
        """Check if a session can be placed at the given cell.

        Teacher and room must be free. When a batch is given only that
        batch's cell is checked, otherwise the course-wide cell.

        Args:
            teacher: Teacher name (None or empty to skip)
            room: Room name (None or empty to skip)
            course_id: Course id
            batch: Batch name for lab sessions, None for whole-course sessions
            day: Day of the week
            start: Slot start time

        Returns:
            True if every required cell is unoccupied
        """
        if not self.is_teacher_free(teacher, day, start):
            return False
        if not self.is_room_free(room, day, start):
            return False
        if batch:
            return self.is_batch_free(course_id, batch, day, start)
        return self.is_course_free(course_id, day, start)

    def are_free(
        self,
        teacher: str | None,
        room: str | None,
        course_id: str,
        batch: str | None,
        day: Day,
        starts: Iterable[str],
    ) -> bool:
        """Check ``is_free`` for several slots of the same day."""
        return all(self.is_free(teacher, room, course_id, batch, day, s) for s in starts)

    def occupy(
        self,
        teacher: str | None,
        room: str | None,
        course_id: str,
        batch: str | None,
        day: Day,
        start: str,
    ) -> None:
        """Mark the cells used by a placed session as occupied.

        The course-wide cell is always marked, so whole-course sessions
        cannot overlap any batch's lab.
        """
        cell = (day, start)
        if teacher:
            self._teachers[teacher].add(cell)
        if room:
            self._rooms[room].add(cell)
        if batch:
            self._batches[(course_id, batch)].add(cell)
        self._courses[course_id].add(cell)

    def teacher_cells(self, teacher: str) -> set[Cell]:
        """Get a copy of the cells a teacher occupies."""
        return set(self._teachers.get(teacher, ()))

    def room_cells(self, room: str) -> set[Cell]:
        """Get a copy of the cells in which a room is occupied."""
        return set(self._rooms.get(room, ()))
