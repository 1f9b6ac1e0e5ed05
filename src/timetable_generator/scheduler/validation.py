"""Pre-generation validation of the infrastructure configuration."""

import logging

from ..exceptions import LabBatchMismatchError, NoCoursesError
from .models import Infrastructure
from .rooms import RoomManager
from .utils import generate_time_slots, parse_working_days

logger = logging.getLogger(__name__)


def validate_infrastructure(infrastructure: Infrastructure) -> list[str]:
    """Validate a configuration before any placement happens.

    Fatal problems raise; everything else is returned (and logged) as a
    warning message.

    Args:
        infrastructure: Configuration to validate

    Returns:
        List of non-fatal warning messages

    Raises:
        NoCoursesError: If no course is defined
        LabBatchMismatchError: If a lab subject's labsPerWeek differs from
                               its course's batch count
        InvalidTimeSettingsError: If the time settings or working days are malformed
    """
    courses = infrastructure.courses
    if not courses:
        raise NoCoursesError()

    for course in courses:
        batch_count = len(course.batches)
        for subject in course.lab_subjects:
            if subject.labs_per_week != batch_count:
                raise LabBatchMismatchError(
                    course=course.label,
                    subject=subject.name,
                    batch_count=batch_count,
                    labs_per_week=subject.labs_per_week,
                )

    generate_time_slots(infrastructure.time_settings)
    parse_working_days(infrastructure.working_days)

    warnings = _collect_warnings(infrastructure)
    for message in warnings:
        logger.warning(message)
    return warnings


def _collect_warnings(infrastructure: Infrastructure) -> list[str]:
    """Find configuration oddities that do not stop generation."""
    warnings: list[str] = []
    known_teachers = set(infrastructure.all_teachers)
    room_manager = RoomManager(infrastructure.all_rooms)

    seen_ids: set[str] = set()
    for course in infrastructure.courses:
        if course.id in seen_ids:
            warnings.append(f"Duplicate course id '{course.id}' ({course.label})")
        seen_ids.add(course.id)

        for subject in course.subjects:
            teachers = [subject.teacher]
            if subject.has_elective_pairing:
                teachers.append(subject.elective_teacher)
            for teacher in teachers:
                if not teacher:
                    warnings.append(f"Subject '{subject.name}' in {course.label} has no teacher")
                elif teacher not in known_teachers:
                    warnings.append(
                        f"Teacher '{teacher}' of '{subject.name}' in {course.label} "
                        "is not in the teacher list"
                    )

            if subject.is_elective and not subject.has_elective_pairing:
                warnings.append(
                    f"Elective '{subject.name}' in {course.label} has no elective "
                    "subject/teacher; it is scheduled as a plain lecture"
                )

            if subject.lab_room_no and room_manager.get_room(subject.lab_room_no) is None:
                warnings.append(
                    f"Lab room '{subject.lab_room_no}' of '{subject.name}' is not a known room"
                )

        if course.lab_subjects and not course.batches:
            warnings.append(f"{course.label} has lab subjects but no batches; labs are skipped")

    needs_classroom = any(c.lecture_subjects for c in infrastructure.courses)
    needs_lab = any(c.lab_subjects and c.batches for c in infrastructure.courses)
    if needs_classroom and not room_manager.classrooms:
        warnings.append("No classroom (C) rooms defined; no lecture can be placed")
    if needs_lab and not room_manager.labs:
        warnings.append("No lab (L) rooms defined")

    return warnings
