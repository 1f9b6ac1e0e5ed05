"""Timetable Generator - constraint-based college timetable generation.

This module builds weekly timetables for college courses: parallel lab
sessions for student batches, theory lectures with optional co-scheduled
electives, and teacher preferences used to rank free slots.

Example usage:
    from timetable_generator import TimetableEngine, GeneratorSettings, load_infrastructure

    infrastructure = load_infrastructure("infrastructure.json")
    engine = TimetableEngine(settings=GeneratorSettings(seed=7))
    result = engine.generate_all(infrastructure)

    for course_id, schedule in result.schedules.items():
        print(course_id, len(schedule.classes))

    for warning in result.warnings:
        print(warning.message)
"""

from .exceptions import (
    ConfigurationError,
    InvalidTimeSettingsError,
    LabBatchMismatchError,
    NoCoursesError,
    SchedulerError,
)
from .scheduler import (
    ConfigLoader,
    Course,
    GeneratorSettings,
    Infrastructure,
    PreferenceStore,
    ScheduleResult,
    Session,
    Subject,
    TeacherPreference,
    TimeSettings,
    TimetableEngine,
    export_schedule_json,
    generate_all,
    load_infrastructure,
)

__version__ = "0.1.0"

__all__ = [
    # Engine
    "TimetableEngine",
    "generate_all",
    "GeneratorSettings",
    "ConfigLoader",
    # Models
    "Infrastructure",
    "Course",
    "Subject",
    "Session",
    "TimeSettings",
    "ScheduleResult",
    # Preferences
    "PreferenceStore",
    "TeacherPreference",
    # Import/export
    "load_infrastructure",
    "export_schedule_json",
    # Exceptions
    "SchedulerError",
    "ConfigurationError",
    "NoCoursesError",
    "LabBatchMismatchError",
    "InvalidTimeSettingsError",
]
