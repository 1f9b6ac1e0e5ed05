"""Data models for the timetable generation engine."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from ..exceptions import ConfigurationError, InvalidTimeSettingsError
from .constants import CLASSROOM_MARKER, DEFAULT_TIME_SETTINGS, LAB_MARKER


class Day(str, Enum):
    """Days of the week. Working days are a configurable subset."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


class RoomKind(str, Enum):
    """Room type, derived from the marker suffix on the room name."""

    CLASSROOM = "classroom"
    LAB = "lab"
    UNKNOWN = "unknown"


class ShortfallReason(str, Enum):
    """Reasons why a lab round or lecture could not be fully placed."""

    NO_ROOM_AVAILABLE = "no_room_available"
    NO_SLOT_AVAILABLE = "no_slot_available"
    ATTEMPTS_EXHAUSTED = "attempts_exhausted"


@dataclass(frozen=True)
class Room:
    """A room that sessions can be placed in."""

    name: str
    kind: RoomKind

    @classmethod
    def from_name(cls, name: str) -> "Room":
        """Classify a room by its "(C)" / "(L)" marker."""
        lowered = name.lower()
        if LAB_MARKER.lower() in lowered:
            kind = RoomKind.LAB
        elif CLASSROOM_MARKER.lower() in lowered:
            kind = RoomKind.CLASSROOM
        else:
            kind = RoomKind.UNKNOWN
        return cls(name=name, kind=kind)

    @property
    def is_lab(self) -> bool:
        return self.kind == RoomKind.LAB

    @property
    def is_classroom(self) -> bool:
        return self.kind == RoomKind.CLASSROOM


@dataclass(frozen=True)
class TimeSlot:
    """One slot of the working day, identified by its start time."""

    start: str
    end: str
    is_recess: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"start": self.start, "end": self.end, "isRecess": self.is_recess}


@dataclass
class TimeSettings:
    """College timings used to build the slot grid."""

    college_start_time: str = DEFAULT_TIME_SETTINGS["collegeStartTime"]
    college_end_time: str = DEFAULT_TIME_SETTINGS["collegeEndTime"]
    recess_start_time: str = DEFAULT_TIME_SETTINGS["recessStartTime"]
    recess_duration: int = DEFAULT_TIME_SETTINGS["recessDuration"]
    lecture_duration: int = DEFAULT_TIME_SETTINGS["lectureDuration"]

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "TimeSettings":
        """Create TimeSettings from the camelCase configuration mapping.

        Missing or empty values fall back to the defaults.

        Raises:
            InvalidTimeSettingsError: If a duration is not a whole number
        """
        merged = dict(DEFAULT_TIME_SETTINGS)
        for key, value in (data or {}).items():
            if value not in (None, ""):
                merged[key] = value

        for key in ("recessDuration", "lectureDuration"):
            try:
                merged[key] = int(merged[key])
            except (TypeError, ValueError):
                raise InvalidTimeSettingsError(
                    f"'{merged[key]}' is not a number of minutes", key
                ) from None

        return cls(
            college_start_time=str(merged["collegeStartTime"]),
            college_end_time=str(merged["collegeEndTime"]),
            recess_start_time=str(merged["recessStartTime"]),
            recess_duration=merged["recessDuration"],
            lecture_duration=merged["lectureDuration"],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "collegeStartTime": self.college_start_time,
            "collegeEndTime": self.college_end_time,
            "recessStartTime": self.recess_start_time,
            "recessDuration": self.recess_duration,
            "lectureDuration": self.lecture_duration,
        }


def _as_int(value: Any, key: str) -> int:
    """Coerce form-style values ("3", None, 3.0) to int.

    Raises:
        ConfigurationError: If the value is not a whole number
    """
    if value in (None, ""):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{key} must be a whole number, got '{value}'") from None


@dataclass
class Subject:
    """A subject taught in a course."""

    name: str
    teacher: str
    lectures_per_week: int = 0
    requires_lab: bool = False
    labs_per_week: int = 0
    lab_room_no: str | None = None
    is_elective: bool = False
    elective_subject_name: str | None = None
    elective_teacher: str | None = None
    specialization: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Subject":
        """Create a Subject from a course configuration entry."""
        name = data["name"]
        return cls(
            name=name,
            teacher=data.get("teacher", ""),
            lectures_per_week=_as_int(data.get("lecturesPerWeek"), f"lecturesPerWeek of '{name}'"),
            requires_lab=bool(data.get("requiresLab", False)),
            labs_per_week=_as_int(data.get("labsPerWeek"), f"labsPerWeek of '{name}'"),
            lab_room_no=data.get("labRoomNo") or None,
            is_elective=bool(data.get("isElective", False)),
            elective_subject_name=data.get("electiveSubjectName") or None,
            elective_teacher=data.get("electiveTeacher") or None,
            specialization=data.get("specialization") or None,
        )

    @property
    def has_elective_pairing(self) -> bool:
        """True if an elective must be co-scheduled with every lecture."""
        return bool(self.is_elective and self.elective_teacher and self.elective_subject_name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "teacher": self.teacher,
            "lecturesPerWeek": self.lectures_per_week,
            "requiresLab": self.requires_lab,
            "labsPerWeek": self.labs_per_week,
            "labRoomNo": self.lab_room_no,
            "isElective": self.is_elective,
            "electiveSubjectName": self.elective_subject_name,
            "electiveTeacher": self.elective_teacher,
            "specialization": self.specialization,
        }


@dataclass
class Course:
    """A branch/semester course owning its subjects and batches."""

    id: str
    branch: str = ""
    semester: str = ""
    subjects: list[Subject] = field(default_factory=list)
    batches: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Course":
        """Create a Course from a configuration entry."""
        return cls(
            id=str(data["id"]),
            branch=data.get("branch", ""),
            semester=str(data.get("semester", "")),
            subjects=[Subject.from_dict(s) for s in data.get("subjects") or []],
            batches=[str(b) for b in data.get("batches") or []],
        )

    @property
    def label(self) -> str:
        """Human-readable course name, e.g. 'CSE (Sem 3)'."""
        return f"{self.branch} (Sem {self.semester})"

    @property
    def lab_subjects(self) -> list[Subject]:
        return [s for s in self.subjects if s.requires_lab]

    @property
    def lecture_subjects(self) -> list[Subject]:
        return [s for s in self.subjects if s.lectures_per_week > 0]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "branch": self.branch,
            "semester": self.semester,
            "subjects": [s.to_dict() for s in self.subjects],
            "batches": list(self.batches),
        }


@dataclass(frozen=True)
class Session:
    """A placed class occupying one slot."""

    day: Day
    start: str
    end: str
    subject: str
    teacher: str
    room: str
    is_lab: bool = False
    batch: str | None = None
    is_elective: bool = False
    parent_subject: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Session":
        return cls(
            day=Day(data["day"]),
            start=data["start"],
            end=data["end"],
            subject=data["subject"],
            teacher=data["teacher"],
            room=data["room"],
            is_lab=data.get("isLab", False),
            batch=data.get("batch"),
            is_elective=data.get("isElective", False),
            parent_subject=data.get("parentSubject"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase session mapping consumed by renderers."""
        result: dict[str, Any] = {
            "day": self.day.value,
            "start": self.start,
            "end": self.end,
            "subject": self.subject,
            "teacher": self.teacher,
            "room": self.room,
            "isLab": self.is_lab,
        }
        if self.batch is not None:
            result["batch"] = self.batch
        if not self.is_lab:
            result["isElective"] = self.is_elective
        if self.parent_subject is not None:
            result["parentSubject"] = self.parent_subject
        return result


@dataclass
class PlacementWarning:
    """A lab round or lecture requirement that could not be fully placed."""

    course_id: str
    course_label: str
    subject: str
    kind: str  # "lab" or "lecture"
    reason: ShortfallReason
    required: int
    placed: int
    details: str = ""
    round: int | None = None

    @property
    def message(self) -> str:
        if self.kind == "lab":
            return f"Could not assign labs for course {self.course_label} round {self.round}: {self.details}"
        return (
            f"Couldn't place all lectures for {self.subject} "
            f"({self.placed}/{self.required}) in course {self.course_label}: {self.details}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "course_id": self.course_id,
            "course": self.course_label,
            "subject": self.subject,
            "kind": self.kind,
            "reason": self.reason.value,
            "required": self.required,
            "placed": self.placed,
            "round": self.round,
            "details": self.details,
        }


@dataclass
class CourseSchedule:
    """Placed sessions of one course."""

    course_id: str
    classes: list[Session] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"classes": [c.to_dict() for c in self.classes]}


@dataclass
class ScheduleStatistics:
    """Statistics about the generated timetable."""

    total_sessions: int = 0
    lecture_sessions: int = 0
    lab_sessions: int = 0
    elective_sessions: int = 0
    required_lecture_slots: int = 0
    required_lab_slots: int = 0
    by_day: dict[str, int] = field(default_factory=dict)
    by_room: dict[str, int] = field(default_factory=dict)
    generation_time_seconds: float = 0.0

    @property
    def placement_rate(self) -> float:
        required = self.required_lecture_slots + self.required_lab_slots
        placed = self.lecture_sessions + self.lab_sessions
        return placed / required if required > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_sessions": self.total_sessions,
            "lecture_sessions": self.lecture_sessions,
            "lab_sessions": self.lab_sessions,
            "elective_sessions": self.elective_sessions,
            "required_lecture_slots": self.required_lecture_slots,
            "required_lab_slots": self.required_lab_slots,
            "placement_rate": self.placement_rate,
            "by_day": self.by_day,
            "by_room": self.by_room,
            "generation_time_seconds": self.generation_time_seconds,
        }


@dataclass
class ScheduleResult:
    """Result of one generation pass."""

    schedules: dict[str, CourseSchedule] = field(default_factory=dict)
    warnings: list[PlacementWarning] = field(default_factory=list)
    statistics: ScheduleStatistics = field(default_factory=ScheduleStatistics)
    time_slots: list[TimeSlot] = field(default_factory=list)
    generation_date: str = field(default_factory=lambda: datetime.now().isoformat())
    seed: int | None = None

    @property
    def sessions(self) -> list[Session]:
        """All placed sessions across courses."""
        return [s for schedule in self.schedules.values() for s in schedule.classes]

    def classes_for(self, course_id: str) -> list[Session]:
        schedule = self.schedules.get(course_id)
        return schedule.classes if schedule else []

    def schedule_map(self) -> dict[str, dict[str, Any]]:
        """The ``{courseId: {classes: [...]}}`` mapping handed to renderers."""
        return {cid: schedule.to_dict() for cid, schedule in self.schedules.items()}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "generation_date": self.generation_date,
            "seed": self.seed,
            "time_slots": [t.to_dict() for t in self.time_slots],
            "schedules": self.schedule_map(),
            "warnings": [w.to_dict() for w in self.warnings],
            "statistics": self.statistics.to_dict(),
        }


@dataclass
class Infrastructure:
    """Everything one generation pass consumes."""

    all_teachers: list[str] = field(default_factory=list)
    all_rooms: list[str] = field(default_factory=list)
    courses: list[Course] = field(default_factory=list)
    time_settings: TimeSettings = field(default_factory=TimeSettings)
    working_days: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Infrastructure":
        """Create Infrastructure from the saved college configuration."""
        return cls(
            all_teachers=list(data.get("allTeachers") or []),
            all_rooms=list(data.get("allRooms") or []),
            courses=[Course.from_dict(c) for c in data.get("courses") or []],
            time_settings=TimeSettings.from_dict(data.get("timeSettings")),
            working_days=list(data.get("workingDays") or []),
        )

    def get_course(self, course_id: str) -> Course | None:
        for course in self.courses:
            if course.id == course_id:
                return course
        return None

    def to_dict(self) -> dict[str, Any]:
        result = {
            "allTeachers": list(self.all_teachers),
            "allRooms": list(self.all_rooms),
            "courses": [c.to_dict() for c in self.courses],
            "timeSettings": self.time_settings.to_dict(),
        }
        if self.working_days:
            result["workingDays"] = list(self.working_days)
        return result
