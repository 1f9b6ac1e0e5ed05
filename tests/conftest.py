"""Test fixtures for timetable generator tests."""

import json

import pytest

from timetable_generator.scheduler.context import PlacementContext
from timetable_generator.scheduler.models import Course, Infrastructure, Subject, TimeSettings
from timetable_generator.scheduler.preferences import PreferenceStore
from timetable_generator.scheduler.registry import ResourceRegistry


@pytest.fixture
def default_time_settings():
    """09:00-16:00, 60 minute recess at 12:00, 60 minute lectures."""
    return TimeSettings()


@pytest.fixture
def make_course():
    """Factory for courses built from subject dictionaries."""

    def _make(course_id="cse-3", subjects=None, batches=None, branch="CSE", semester="3"):
        return Course(
            id=course_id,
            branch=branch,
            semester=semester,
            subjects=[Subject.from_dict(s) for s in subjects or []],
            batches=list(batches or []),
        )

    return _make


@pytest.fixture
def make_infrastructure():
    """Factory for infrastructures; teachers default to every subject teacher."""

    def _make(courses, rooms=None, teachers=None, time_settings=None, working_days=None):
        if teachers is None:
            teachers = []
            for course in courses:
                for subject in course.subjects:
                    teachers.append(subject.teacher)
                    if subject.elective_teacher:
                        teachers.append(subject.elective_teacher)
        return Infrastructure(
            all_teachers=list(dict.fromkeys(teachers)),
            all_rooms=rooms if rooms is not None else ["101 (C)", "102 (C)", "103 (C)"],
            courses=courses,
            time_settings=time_settings or TimeSettings(),
            working_days=working_days or [],
        )

    return _make


@pytest.fixture
def sample_infrastructure_data():
    """A saved college configuration with labs, lectures and an elective."""
    return {
        "allTeachers": ["Dr. Rao", "Prof. Mehta", "Ms. Iyer", "Mr. Khan", "Dr. Sen"],
        "allRooms": ["101 (C)", "102 (C)", "103 (C)", "Physics Lab (L)", "Chemistry Lab (L)"],
        "timeSettings": {
            "collegeStartTime": "09:00",
            "collegeEndTime": "16:00",
            "recessStartTime": "12:00",
            "recessDuration": 60,
            "lectureDuration": 60,
        },
        "courses": [
            {
                "id": "cse-3",
                "branch": "CSE",
                "semester": "3",
                "batches": ["A1", "A2"],
                "subjects": [
                    {
                        "name": "Physics",
                        "teacher": "Dr. Rao",
                        "lecturesPerWeek": 3,
                        "requiresLab": True,
                        "labsPerWeek": 2,
                        "labRoomNo": "Physics Lab",
                    },
                    {
                        "name": "Chemistry",
                        "teacher": "Prof. Mehta",
                        "lecturesPerWeek": 3,
                        "requiresLab": True,
                        "labsPerWeek": 2,
                        "labRoomNo": "Chemistry Lab",
                    },
                    {"name": "Mathematics", "teacher": "Ms. Iyer", "lecturesPerWeek": 4},
                    {
                        "name": "Open Elective",
                        "teacher": "Mr. Khan",
                        "lecturesPerWeek": 2,
                        "isElective": True,
                        "electiveSubjectName": "Economics",
                        "electiveTeacher": "Dr. Sen",
                    },
                ],
            },
            {
                "id": "ece-5",
                "branch": "ECE",
                "semester": "5",
                "batches": [],
                "subjects": [
                    {"name": "Signals", "teacher": "Ms. Iyer", "lecturesPerWeek": 3},
                    {"name": "Circuits", "teacher": "Dr. Rao", "lecturesPerWeek": 2},
                ],
            },
        ],
    }


@pytest.fixture
def sample_infrastructure(sample_infrastructure_data):
    return Infrastructure.from_dict(sample_infrastructure_data)


@pytest.fixture
def infrastructure_file(tmp_path, sample_infrastructure_data):
    """Write the sample configuration to a temporary JSON file."""
    path = tmp_path / "infrastructure.json"
    path.write_text(json.dumps(sample_infrastructure_data), encoding="utf-8")
    return path


@pytest.fixture
def preference_store():
    return PreferenceStore()


@pytest.fixture
def make_context():
    """Factory for a fresh placement context over an infrastructure."""

    def _make(infrastructure, preferences=None):
        return PlacementContext(
            ResourceRegistry.from_infrastructure(infrastructure),
            preferences if preferences is not None else PreferenceStore(),
            [c.id for c in infrastructure.courses],
        )

    return _make
