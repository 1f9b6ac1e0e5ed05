"""Tests for TimetableEngine end-to-end generation."""

from collections import defaultdict

import pytest

from timetable_generator.exceptions import (
    InvalidTimeSettingsError,
    LabBatchMismatchError,
    NoCoursesError,
)
from timetable_generator.scheduler.config import GeneratorSettings
from timetable_generator.scheduler.engine import TimetableEngine, generate_all
from timetable_generator.scheduler.models import Day, Infrastructure, ShortfallReason
from timetable_generator.scheduler.preferences import PreferenceStore


@pytest.fixture
def seeded_engine():
    return TimetableEngine(settings=GeneratorSettings(seed=42))


@pytest.fixture
def result(seeded_engine, sample_infrastructure):
    return seeded_engine.generate_all(sample_infrastructure)


class TestGenerateAll:
    """Tests for TimetableEngine.generate_all on the sample configuration."""

    def test_every_course_present(self, result):
        assert set(result.schedules) == {"cse-3", "ece-5"}

    def test_everything_placed(self, result):
        assert result.warnings == []
        stats = result.statistics
        assert stats.lab_sessions == stats.required_lab_slots == 8
        assert stats.lecture_sessions == stats.required_lecture_slots == 17
        assert stats.elective_sessions == 2
        assert stats.placement_rate == 1.0

    def test_seed_recorded(self, result):
        assert result.seed == 42

    def test_random_seed_recorded(self, sample_infrastructure):
        result = TimetableEngine().generate_all(sample_infrastructure)
        assert isinstance(result.seed, int)

    def test_time_slots_included(self, result):
        assert [s.start for s in result.time_slots if s.is_recess] == ["12:00"]


class TestScheduleProperties:
    """Invariants every generated timetable must satisfy."""

    def test_no_teacher_double_booking(self, result):
        cells = [(s.teacher, s.day, s.start) for s in result.sessions]
        assert len(cells) == len(set(cells))

    def test_no_room_double_booking(self, result):
        cells = [(s.room, s.day, s.start) for s in result.sessions]
        assert len(cells) == len(set(cells))

    def test_no_batch_double_booking(self, result):
        for course_id, schedule in result.schedules.items():
            lectures = [(s.day, s.start) for s in schedule.classes if not s.is_lab and s.parent_subject is None]
            labs = [(s.batch, s.day, s.start) for s in schedule.classes if s.is_lab]
            assert len(lectures) == len(set(lectures)), course_id
            assert len(labs) == len(set(labs)), course_id
            assert not {(d, t) for _, d, t in labs} & set(lectures), course_id

    def test_each_batch_gets_all_lab_sessions(self, result):
        per_batch = defaultdict(int)
        for session in result.classes_for("cse-3"):
            if session.is_lab:
                per_batch[session.batch] += 1
        # labsPerWeek x 2 slots
        assert per_batch == {"A1": 4, "A2": 4}

    def test_consecutive_limit_respected(self, result):
        starts = defaultdict(set)
        for session in result.sessions:
            hour, minute = map(int, session.start.split(":"))
            starts[(session.teacher, session.day)].add(hour * 60 + minute)
        for minutes in starts.values():
            for start in minutes:
                run = 1
                while start + run * 60 in minutes:
                    run += 1
                assert run <= 3

    def test_labs_in_parallel_consecutive_pairs(self, result):
        labs = [s for s in result.classes_for("cse-3") if s.is_lab]
        by_cell = defaultdict(set)
        for session in labs:
            by_cell[(session.day, session.start)].add(session.batch)
        assert all(batches == {"A1", "A2"} for batches in by_cell.values())

        by_batch_day = defaultdict(list)
        for session in labs:
            by_batch_day[(session.batch, session.day)].append(session)
        for sessions in by_batch_day.values():
            first, second = sorted(sessions, key=lambda s: s.start)
            assert first.end == second.start
            assert first.room == second.room
            assert first.subject == second.subject

    def test_lab_sessions_use_lab_rooms(self, result):
        for session in result.sessions:
            if session.is_lab:
                assert session.room.endswith("(L)")
            else:
                assert session.room.endswith("(C)")

    def test_electives_paired_with_parent(self, result):
        classes = result.classes_for("cse-3")
        parents = [s for s in classes if s.subject == "Open Elective"]
        electives = [s for s in classes if s.parent_subject == "Open Elective"]
        assert len(parents) == len(electives) == 2
        assert {(s.day, s.start) for s in parents} == {(s.day, s.start) for s in electives}

    def test_lectures_spread_over_days(self, result):
        by_subject = defaultdict(list)
        for session in result.classes_for("cse-3"):
            if not session.is_lab and session.parent_subject is None:
                by_subject[session.subject].append(session.day)
        for subject, days in by_subject.items():
            assert len(days) == len(set(days)), subject

    def test_no_session_in_recess(self, result):
        assert all(s.start != "12:00" for s in result.sessions)

    def test_same_seed_same_timetable(self, sample_infrastructure):
        first = generate_all(sample_infrastructure, seed=11)
        second = generate_all(sample_infrastructure, seed=11)
        assert first.schedule_map() == second.schedule_map()


class TestPreferencesInGeneration:
    """Tests for teacher preferences applied during a full pass."""

    def test_blocked_day_respected(self, sample_infrastructure):
        store = PreferenceStore()
        blocked = [f"Monday {t}" for t in ("09:00", "10:00", "11:00", "13:00", "14:00", "15:00")]
        store.update("Dr. Rao", blocked_slots=blocked)

        result = TimetableEngine(store, GeneratorSettings(seed=5)).generate_all(sample_infrastructure)

        rao = [s for s in result.sessions if s.teacher == "Dr. Rao"]
        assert rao
        assert all(s.day != Day.MONDAY for s in rao)

    def test_daily_limit_respected(self, sample_infrastructure):
        store = PreferenceStore()
        store.update("Ms. Iyer", max_daily_classes=2)

        result = TimetableEngine(store, GeneratorSettings(seed=5)).generate_all(sample_infrastructure)

        per_day = defaultdict(int)
        for session in result.sessions:
            if session.teacher == "Ms. Iyer":
                per_day[session.day] += 1
        assert max(per_day.values()) <= 2


class TestShortfalls:
    """Tests for partial timetables with warnings."""

    def test_single_lab_subject_with_two_batches(self, make_course, make_infrastructure):
        physics = {
            "name": "Physics",
            "teacher": "Dr. Rao",
            "requiresLab": True,
            "labsPerWeek": 2,
        }
        course = make_course(subjects=[physics], batches=["A1", "A2"])
        infrastructure = make_infrastructure(
            [course], rooms=["101 (C)", "Lab 1 (L)", "Lab 2 (L)"]
        )

        result = generate_all(infrastructure, seed=1)

        assert result.classes_for(course.id) == []
        assert len(result.warnings) == 2
        assert all(w.kind == "lab" for w in result.warnings)
        assert all(w.reason == ShortfallReason.NO_SLOT_AVAILABLE for w in result.warnings)

    def test_single_lab_subject_without_enough_lab_rooms(self, make_course, make_infrastructure):
        physics = {
            "name": "Physics",
            "teacher": "Dr. Rao",
            "requiresLab": True,
            "labsPerWeek": 2,
        }
        course = make_course(subjects=[physics], batches=["A1", "A2"])
        infrastructure = make_infrastructure([course], rooms=["101 (C)", "Lab 1 (L)"])

        result = generate_all(infrastructure, seed=1)

        assert result.warnings
        assert result.warnings[0].reason == ShortfallReason.NO_ROOM_AVAILABLE
        assert result.statistics.lab_sessions == 0

    def test_lab_room_name_shared_with_classroom(self, sample_infrastructure_data):
        sample_infrastructure_data["allRooms"].append("Physics Lab (C)")
        infrastructure = Infrastructure.from_dict(sample_infrastructure_data)

        result = generate_all(infrastructure, seed=1)

        lab_rooms = {s.room for s in result.sessions if s.is_lab}
        assert lab_rooms == {"Physics Lab (L)", "Chemistry Lab (L)"}

    def test_more_lectures_than_slots(self, make_course, make_infrastructure):
        heavy = {"name": "Mathematics", "teacher": "Ms. Iyer", "lecturesPerWeek": 40}
        course = make_course(subjects=[heavy])

        result = generate_all(make_infrastructure([course]), seed=1)

        # 5 lectures a day at most (daily limit)
        assert result.statistics.lecture_sessions == 25
        warning = result.warnings[0]
        assert warning.kind == "lecture"
        assert warning.placed == 25
        assert warning.required == 40
        assert result.statistics.placement_rate == pytest.approx(25 / 40)

    def test_course_without_sessions_still_listed(self, make_course, make_infrastructure):
        empty = make_course("mech-1", subjects=[])
        result = generate_all(make_infrastructure([empty]), seed=1)
        assert result.classes_for("mech-1") == []
        assert "mech-1" in result.schedule_map()


class TestConfigurationErrors:
    """Tests for configurations rejected before placement."""

    def test_no_courses(self):
        with pytest.raises(NoCoursesError):
            TimetableEngine().generate_all(Infrastructure())

    def test_lab_batch_mismatch(self, sample_infrastructure_data):
        sample_infrastructure_data["courses"][0]["subjects"][0]["labsPerWeek"] = 3
        infrastructure = Infrastructure.from_dict(sample_infrastructure_data)

        with pytest.raises(LabBatchMismatchError, match="Mismatch in 'CSE \\(Sem 3\\)' -> 'Physics'"):
            TimetableEngine().generate_all(infrastructure)

    def test_invalid_time_settings(self, sample_infrastructure_data):
        sample_infrastructure_data["timeSettings"]["collegeEndTime"] = "08:00"
        infrastructure = Infrastructure.from_dict(sample_infrastructure_data)

        with pytest.raises(InvalidTimeSettingsError):
            TimetableEngine().generate_all(infrastructure)
