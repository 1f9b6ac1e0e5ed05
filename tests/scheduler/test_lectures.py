"""Tests for lecture placement with paired electives."""

import random

from timetable_generator.scheduler.labs import LabScheduler
from timetable_generator.scheduler.lectures import LectureScheduler
from timetable_generator.scheduler.models import Day, ShortfallReason

MATHEMATICS = {"name": "Mathematics", "teacher": "Ms. Iyer", "lecturesPerWeek": 3}
OPEN_ELECTIVE = {
    "name": "Open Elective",
    "teacher": "Mr. Khan",
    "lecturesPerWeek": 2,
    "isElective": True,
    "electiveSubjectName": "Economics",
    "electiveTeacher": "Dr. Sen",
}
TEACHING_STARTS = ("09:00", "10:00", "11:00", "13:00", "14:00", "15:00")


def _scheduler(context, seed=0, **kwargs):
    return LectureScheduler(context, random.Random(seed), **kwargs)


class TestScheduleSubject:
    """Tests for LectureScheduler.schedule_subject."""

    def test_places_all_lectures(self, make_course, make_infrastructure, make_context):
        course = make_course(subjects=[MATHEMATICS])
        context = make_context(make_infrastructure([course]))

        placed = _scheduler(context).schedule_subject(course, course.subjects[0])

        assert placed == 3
        sessions = context.sessions[course.id]
        assert len(sessions) == 3
        assert all(not s.is_lab and s.room.endswith("(C)") for s in sessions)
        assert context.warnings == []

    def test_lectures_spread_across_days(self, make_course, make_infrastructure, make_context):
        course = make_course(subjects=[MATHEMATICS])
        context = make_context(make_infrastructure([course]))

        _scheduler(context).schedule_subject(course, course.subjects[0])

        days = [s.day for s in context.sessions[course.id]]
        assert len(set(days)) == 3

    def test_preferred_slot_wins(
        self, make_course, make_infrastructure, make_context, preference_store
    ):
        course = make_course(subjects=[dict(MATHEMATICS, lecturesPerWeek=1)])
        context = make_context(make_infrastructure([course]), preference_store)
        preference_store.update("Ms. Iyer", preferred_slots=["Wednesday 11:00"])

        _scheduler(context).schedule_subject(course, course.subjects[0])

        session = context.sessions[course.id][0]
        assert (session.day, session.start, session.end) == (Day.WEDNESDAY, "11:00", "12:00")

    def test_blocked_slots_never_used(
        self, make_course, make_infrastructure, make_context, preference_store
    ):
        course = make_course(subjects=[dict(MATHEMATICS, lecturesPerWeek=2)])
        context = make_context(make_infrastructure([course]), preference_store)
        blocked = [f"{day.value} {start}" for day in Day for start in TEACHING_STARTS]
        blocked.remove("Monday 09:00")
        preference_store.update("Ms. Iyer", blocked_slots=blocked)

        placed = _scheduler(context).schedule_subject(course, course.subjects[0])

        assert placed == 1
        session = context.sessions[course.id][0]
        assert (session.day, session.start) == (Day.MONDAY, "09:00")

        warning = context.warnings[0]
        assert warning.kind == "lecture"
        assert warning.reason == ShortfallReason.NO_SLOT_AVAILABLE
        assert (warning.placed, warning.required) == (1, 2)
        assert "(1/2)" in warning.message

    def test_attempt_cap(self, make_course, make_infrastructure, make_context):
        course = make_course(subjects=[MATHEMATICS])
        context = make_context(make_infrastructure([course]))

        placed = _scheduler(context, max_attempts=1).schedule_subject(course, course.subjects[0])

        assert placed == 1
        assert context.warnings[0].reason == ShortfallReason.ATTEMPTS_EXHAUSTED

    def test_default_attempt_cap(self, make_course, make_infrastructure, make_context):
        context = make_context(make_infrastructure([make_course(subjects=[MATHEMATICS])]))
        # 5 days x 7 slots (recess included) x 2
        assert _scheduler(context).max_attempts == 70

    def test_no_classrooms(self, make_course, make_infrastructure, make_context):
        course = make_course(subjects=[MATHEMATICS])
        context = make_context(make_infrastructure([course], rooms=["Lab 1 (L)"]))

        placed = _scheduler(context).schedule_subject(course, course.subjects[0])

        assert placed == 0
        assert context.warnings[0].reason == ShortfallReason.NO_ROOM_AVAILABLE

    def test_zero_lectures_is_skipped(self, make_course, make_infrastructure, make_context):
        lab_only = {"name": "Workshop", "teacher": "Mr. Pai", "lecturesPerWeek": 0}
        course = make_course(subjects=[lab_only])
        context = make_context(make_infrastructure([course]))

        _scheduler(context).schedule_course(course)

        assert context.sessions[course.id] == []
        assert context.warnings == []


class TestElectivePairing:
    """Tests for electives co-scheduled with their parent lecture."""

    def test_elective_shares_cell_with_parent(
        self, make_course, make_infrastructure, make_context
    ):
        course = make_course(subjects=[OPEN_ELECTIVE])
        context = make_context(make_infrastructure([course]))

        placed = _scheduler(context).schedule_subject(course, course.subjects[0])

        assert placed == 2
        sessions = context.sessions[course.id]
        parents = [s for s in sessions if s.parent_subject is None]
        electives = [s for s in sessions if s.parent_subject == "Open Elective"]
        assert len(parents) == 2
        assert len(electives) == 2
        for parent in parents:
            pair = [e for e in electives if (e.day, e.start) == (parent.day, parent.start)]
            assert len(pair) == 1
            assert pair[0].subject == "Economics"
            assert pair[0].teacher == "Dr. Sen"
            assert pair[0].room != parent.room
            assert pair[0].is_elective
            assert parent.is_elective

    def test_elective_needs_two_classrooms(
        self, make_course, make_infrastructure, make_context
    ):
        course = make_course(subjects=[OPEN_ELECTIVE])
        context = make_context(make_infrastructure([course], rooms=["101 (C)"]))

        placed = _scheduler(context).schedule_subject(course, course.subjects[0])

        assert placed == 0
        assert context.sessions[course.id] == []
        assert context.warnings[0].reason == ShortfallReason.NO_ROOM_AVAILABLE

    def test_elective_teacher_blocked(
        self, make_course, make_infrastructure, make_context, preference_store
    ):
        course = make_course(subjects=[dict(OPEN_ELECTIVE, lecturesPerWeek=1)])
        context = make_context(make_infrastructure([course]), preference_store)
        preference_store.update("Dr. Sen", preferred_days=["Friday"])
        blocked = [f"Friday {start}" for start in TEACHING_STARTS if start != "14:00"]
        preference_store.update("Dr. Sen", blocked_slots=blocked)

        _scheduler(context).schedule_subject(course, course.subjects[0])

        assert {(s.day, s.start) for s in context.sessions[course.id]} == {(Day.FRIDAY, "14:00")}

    def test_elective_without_pairing_is_plain_lecture(
        self, make_course, make_infrastructure, make_context
    ):
        unpaired = {"name": "Design Thinking", "teacher": "Mr. Khan", "lecturesPerWeek": 2, "isElective": True}
        course = make_course(subjects=[unpaired])
        context = make_context(make_infrastructure([course], rooms=["101 (C)"]))

        placed = _scheduler(context).schedule_subject(course, course.subjects[0])

        assert placed == 2
        assert all(s.parent_subject is None for s in context.sessions[course.id])


class TestRankCandidates:
    """Tests for LectureScheduler.rank_candidates."""

    def test_best_bonus_first(
        self, make_course, make_infrastructure, make_context, preference_store
    ):
        course = make_course(subjects=[MATHEMATICS])
        context = make_context(make_infrastructure([course]), preference_store)
        preference_store.update("Ms. Iyer", preferred_days=["Thursday"])

        candidates = _scheduler(context).rank_candidates(course, course.subjects[0], rotation=0)

        assert len(candidates) == 30
        assert {c.day for c in candidates[:6]} == {Day.THURSDAY}
        assert candidates[0].slot.start == "09:00"
        bonuses = [c.bonus for c in candidates]
        assert bonuses == sorted(bonuses, reverse=True)

    def test_rotation_breaks_ties(self, make_course, make_infrastructure, make_context):
        course = make_course(subjects=[MATHEMATICS])
        context = make_context(make_infrastructure([course]))
        scheduler = _scheduler(context)

        assert scheduler.rank_candidates(course, course.subjects[0], 0)[0].day == Day.MONDAY
        assert scheduler.rank_candidates(course, course.subjects[0], 2)[0].day == Day.WEDNESDAY

    def test_recess_is_never_a_candidate(self, make_course, make_infrastructure, make_context):
        course = make_course(subjects=[MATHEMATICS])
        context = make_context(make_infrastructure([course]))

        candidates = _scheduler(context).rank_candidates(course, course.subjects[0], 0)

        assert all(c.slot.start != "12:00" for c in candidates)


class TestLecturesAfterLabs:
    """Tests for lectures placed into a ledger that already holds labs."""

    def test_lectures_do_not_overlap_labs(self, sample_infrastructure, make_context):
        context = make_context(sample_infrastructure)
        courses = sample_infrastructure.courses

        LabScheduler(context).schedule(courses)
        _scheduler(context, seed=7).schedule(courses)

        sessions = context.sessions["cse-3"]
        lab_cells = {(s.day, s.start) for s in sessions if s.is_lab}
        lecture_cells = [(s.day, s.start) for s in sessions if not s.is_lab and s.parent_subject is None]
        assert lab_cells
        assert len(lecture_cells) == len(set(lecture_cells))
        assert not lab_cells & set(lecture_cells)

    def test_shared_teacher_not_double_booked(self, sample_infrastructure, make_context):
        context = make_context(sample_infrastructure)
        courses = sample_infrastructure.courses

        LabScheduler(context).schedule(courses)
        _scheduler(context, seed=3).schedule(courses)

        all_sessions = context.sessions["cse-3"] + context.sessions["ece-5"]
        teacher_cells = [(s.teacher, s.day, s.start) for s in all_sessions]
        assert len(teacher_cells) == len(set(teacher_cells))
