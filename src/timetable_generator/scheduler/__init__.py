"""College timetable generation engine.

This package assigns course subjects (lectures, parallel lab batches and
paired electives) to a weekly grid of time slots without double-booking
teachers, rooms or student batches, ranking free slots by teacher
preferences.

Main classes:
- TimetableEngine: Runs one generation pass (labs, then lectures)
- OccupancyLedger: Teacher / room / course / batch occupancy
- PreferenceStore: Teacher preferences and slot scoring
- ConfigLoader: Loads configuration from a data directory

Usage:
    from timetable_generator.scheduler import TimetableEngine, GeneratorSettings

    engine = TimetableEngine(preferences, GeneratorSettings(seed=42))
    result = engine.generate_all(infrastructure)
"""

from .aggregator import aggregate_schedule, compute_statistics
from .config import ConfigLoader, GeneratorSettings
from .constants import (
    CLASSROOM_MARKER,
    DEFAULT_TIME_SETTINGS,
    DEFAULT_WORKING_DAYS,
    LAB_MARKER,
    PREFERENCE_WEIGHTS,
)
from .context import PlacementContext
from .engine import TimetableEngine, generate_all
from .exporter import export_schedule_json, load_infrastructure
from .labs import LabScheduler
from .lectures import LectureScheduler
from .models import (
    Course,
    CourseSchedule,
    Day,
    Infrastructure,
    PlacementWarning,
    Room,
    RoomKind,
    ScheduleResult,
    ScheduleStatistics,
    Session,
    ShortfallReason,
    Subject,
    TimeSettings,
    TimeSlot,
)
from .occupancy import OccupancyLedger
from .preferences import PreferenceStore, TeacherPreference
from .registry import ResourceRegistry
from .reports import preference_satisfaction, teaching_load
from .rooms import RoomManager
from .utils import generate_time_slots
from .validation import validate_infrastructure

__all__ = [
    # Engine
    "TimetableEngine",
    "generate_all",
    "LabScheduler",
    "LectureScheduler",
    "PlacementContext",
    "aggregate_schedule",
    "compute_statistics",
    "validate_infrastructure",
    # Resources
    "OccupancyLedger",
    "ResourceRegistry",
    "RoomManager",
    "generate_time_slots",
    # Preferences
    "PreferenceStore",
    "TeacherPreference",
    # Configuration
    "ConfigLoader",
    "GeneratorSettings",
    "export_schedule_json",
    "load_infrastructure",
    # Models
    "Course",
    "CourseSchedule",
    "Day",
    "Infrastructure",
    "PlacementWarning",
    "Room",
    "RoomKind",
    "ScheduleResult",
    "ScheduleStatistics",
    "Session",
    "ShortfallReason",
    "Subject",
    "TimeSettings",
    "TimeSlot",
    # Reports
    "preference_satisfaction",
    "teaching_load",
    # Constants
    "CLASSROOM_MARKER",
    "DEFAULT_TIME_SETTINGS",
    "DEFAULT_WORKING_DAYS",
    "LAB_MARKER",
    "PREFERENCE_WEIGHTS",
]
