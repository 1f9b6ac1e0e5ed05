"""Assembles placed sessions into the final schedule structure."""

from collections import defaultdict

from .constants import LAB_SESSION_SLOTS
from .context import PlacementContext
from .models import Course, CourseSchedule, ScheduleResult, ScheduleStatistics, Session


def aggregate_schedule(
    courses: list[Course],
    context: PlacementContext,
    seed: int | None = None,
    elapsed_seconds: float = 0.0,
) -> ScheduleResult:
    """Build the per-course result of a generation pass.

    Every configured course appears, even with no sessions. Sessions are
    returned as placed, without further validation.
    """
    schedules = {
        course.id: CourseSchedule(
            course_id=course.id,
            classes=list(context.sessions.get(course.id, [])),
        )
        for course in courses
    }

    sessions = [s for schedule in schedules.values() for s in schedule.classes]
    statistics = compute_statistics(courses, sessions)
    statistics.generation_time_seconds = elapsed_seconds

    return ScheduleResult(
        schedules=schedules,
        warnings=list(context.warnings),
        statistics=statistics,
        time_slots=list(context.registry.time_slots),
        seed=seed,
    )


def compute_statistics(courses: list[Course], sessions: list[Session]) -> ScheduleStatistics:
    """Count placed sessions against what the courses require."""
    by_day: dict[str, int] = defaultdict(int)
    by_room: dict[str, int] = defaultdict(int)
    lecture_sessions = 0
    lab_sessions = 0
    elective_sessions = 0

    for session in sessions:
        by_day[session.day.value] += 1
        by_room[session.room] += 1
        if session.is_lab:
            lab_sessions += 1
        elif session.parent_subject is not None:
            elective_sessions += 1
        else:
            lecture_sessions += 1

    required_lectures = 0
    required_labs = 0
    for course in courses:
        required_lectures += sum(s.lectures_per_week for s in course.lecture_subjects)
        lab_subjects = course.lab_subjects
        if lab_subjects and course.batches:
            rounds = lab_subjects[0].labs_per_week or len(course.batches)
            required_labs += rounds * len(course.batches) * LAB_SESSION_SLOTS

    return ScheduleStatistics(
        total_sessions=len(sessions),
        lecture_sessions=lecture_sessions,
        lab_sessions=lab_sessions,
        elective_sessions=elective_sessions,
        required_lecture_slots=required_lectures,
        required_lab_slots=required_labs,
        by_day=dict(by_day),
        by_room=dict(by_room),
    )
