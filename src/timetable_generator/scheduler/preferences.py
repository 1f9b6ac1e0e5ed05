"""Teacher preferences: hard limits and soft slot scoring."""

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from .constants import (
    DEFAULT_MAX_CONSECUTIVE_CLASSES,
    DEFAULT_MAX_DAILY_CLASSES,
    DEFAULT_MAX_WEEKLY_HOURS,
    DEFAULT_TIME_SETTINGS,
    MAX_SUBJECT_SCORE,
    MIN_SUBJECT_SCORE,
    NEUTRAL_SUBJECT_SCORE,
    PREFERENCE_WEIGHTS,
)
from .models import Day, Session
from .utils import shift_time, slot_key

logger = logging.getLogger(__name__)

# camelCase JSON key -> TeacherPreference attribute
_JSON_FIELDS = {
    "preferredSlots": "preferred_slots",
    "blockedSlots": "blocked_slots",
    "preferredDays": "preferred_days",
    "maxConsecutiveClasses": "max_consecutive_classes",
    "maxDailyClasses": "max_daily_classes",
    "maxWeeklyHours": "max_weekly_hours",
    "subjectPreferences": "subject_preferences",
}


@dataclass
class TeacherPreference:
    """Scheduling preferences of a single teacher.

    Slots are keyed as "Day HH:MM", e.g. "Monday 09:00".
    """

    name: str
    preferred_slots: list[str] = field(default_factory=list)
    blocked_slots: list[str] = field(default_factory=list)
    preferred_days: list[str] = field(default_factory=list)
    max_consecutive_classes: int = DEFAULT_MAX_CONSECUTIVE_CLASSES
    max_daily_classes: int = DEFAULT_MAX_DAILY_CLASSES
    max_weekly_hours: int = DEFAULT_MAX_WEEKLY_HOURS
    subject_preferences: dict[str, int] = field(default_factory=dict)
    enabled: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TeacherPreference":
        """Create from a stored entry ``{name, preferences: {...}, enabled}``."""
        prefs = data.get("preferences", {})
        kwargs: dict[str, Any] = {}
        for json_key, attr in _JSON_FIELDS.items():
            if json_key in prefs and prefs[json_key] is not None:
                kwargs[attr] = prefs[json_key]
        return cls(name=data["name"], enabled=data.get("enabled", True), **kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "preferences": {
                json_key: getattr(self, attr) for json_key, attr in _JSON_FIELDS.items()
            },
            "enabled": self.enabled,
        }


class PreferenceStore:
    """Teacher preference store and slot scoring.

    Entries are created with defaults the first time a teacher is looked up,
    so every teacher has preferences. Disabled entries never block a slot and
    score 0.
    """

    def __init__(self, preferences: Iterable[TeacherPreference] = ()) -> None:
        self._preferences: dict[str, TeacherPreference] = {p.name: p for p in preferences}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "PreferenceStore":
        """Create from the stored ``{"teachers": [...]}`` mapping."""
        entries = (data or {}).get("teachers", [])
        return cls(TeacherPreference.from_dict(entry) for entry in entries)

    @classmethod
    def load(cls, path: Path | str) -> "PreferenceStore":
        """Load preferences from a JSON file. A missing file gives an empty store."""
        path = Path(path)
        if not path.exists():
            logger.info(f"No teacher preferences at {path}, using defaults")
            return cls()
        with open(path, encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    def save(self, path: Path | str) -> None:
        """Save preferences to a JSON file."""
        output = Path(path)
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, ensure_ascii=False, indent=2)
        logger.info(f"Teacher preferences saved to {output}")

    def to_dict(self) -> dict[str, Any]:
        return {"teachers": [p.to_dict() for p in self._preferences.values()]}

    def __contains__(self, teacher: str) -> bool:
        return teacher in self._preferences

    def __len__(self) -> int:
        return len(self._preferences)

    @property
    def teachers(self) -> list[TeacherPreference]:
        return list(self._preferences.values())

    def get(self, teacher: str) -> TeacherPreference:
        """Get the preferences of a teacher, creating defaults on first lookup."""
        pref = self._preferences.get(teacher)
        if pref is None:
            pref = TeacherPreference(name=teacher)
            self._preferences[teacher] = pref
        return pref

    def update(self, teacher: str, **updates: Any) -> TeacherPreference:
        """Update preference fields of a teacher.

        Raises:
            ValueError: If an update names an unknown field
        """
        pref = self.get(teacher)
        known = {f.name for f in fields(TeacherPreference)} - {"name"}
        for key, value in updates.items():
            if key not in known:
                raise ValueError(f"Unknown preference field '{key}'")
            setattr(pref, key, value)
        return pref

    def is_slot_blocked(self, teacher: str, day: Day | str, start: str) -> bool:
        pref = self.get(teacher)
        if not pref.enabled:
            return False
        return slot_key(day, start) in pref.blocked_slots

    def is_slot_preferred(self, teacher: str, day: Day | str, start: str) -> bool:
        pref = self.get(teacher)
        if not pref.enabled:
            return False
        return slot_key(day, start) in pref.preferred_slots

    def is_day_preferred(self, teacher: str, day: Day | str) -> bool:
        """Check if a day is preferred. No preferred days means every day is."""
        pref = self.get(teacher)
        if not pref.enabled:
            return False
        if not pref.preferred_days:
            return True
        day_name = day.value if isinstance(day, Day) else day
        return day_name in pref.preferred_days

    def subject_score(self, teacher: str, subject: str) -> int:
        """Get a teacher's affinity for a subject on the 0-10 scale (5 = neutral)."""
        score = self.get(teacher).subject_preferences.get(subject, NEUTRAL_SUBJECT_SCORE)
        return max(MIN_SUBJECT_SCORE, min(MAX_SUBJECT_SCORE, int(score)))

    def calculate_preference_bonus(
        self, teacher: str, day: Day | str, start: str, subject: str
    ) -> int:
        """Score a candidate slot for a teacher and subject.

        - blocked slot: PREFERENCE_WEIGHTS["blocked_slot"] (effective rejection)
        - preferred slot: +30
        - preferred day (or no day restriction): +15
        - subject affinity: (score - 5) * 2, i.e. -10..+10

        Returns:
            Integer bonus; 0 for disabled preferences
        """
        pref = self.get(teacher)
        if not pref.enabled:
            return 0

        if self.is_slot_blocked(teacher, day, start):
            return PREFERENCE_WEIGHTS["blocked_slot"]

        bonus = 0
        if self.is_slot_preferred(teacher, day, start):
            bonus += PREFERENCE_WEIGHTS["preferred_slot"]
        if self.is_day_preferred(teacher, day):
            bonus += PREFERENCE_WEIGHTS["preferred_day"]

        score = self.subject_score(teacher, subject)
        bonus += (score - NEUTRAL_SUBJECT_SCORE) * PREFERENCE_WEIGHTS["subject_multiplier"]
        return bonus

    def violates_consecutive_limit(
        self,
        teacher: str,
        day: Day | str,
        start: str,
        sessions: Iterable[Session],
        slot_duration: int = DEFAULT_TIME_SETTINGS["lectureDuration"],
        pending_starts: Iterable[str] = (),
    ) -> bool:
        """Check if teaching at ``start`` makes a run longer than allowed.

        Walks backward and forward one slot duration at a time, counting
        contiguous slots the teacher already teaches that day, plus the
        candidate itself.

        Args:
            teacher: Teacher name
            day: Day of the week
            start: Candidate slot start
            sessions: Sessions placed so far (any course)
            slot_duration: Slot length in minutes
            pending_starts: Starts the same placement will also take

        Returns:
            True if the run length would exceed max_consecutive_classes
        """
        pref = self.get(teacher)
        if not pref.enabled:
            return False

        busy = _teacher_starts(teacher, day, sessions) | set(pending_starts)

        count = 1
        for step in (-slot_duration, slot_duration):
            current = shift_time(start, step)
            while current is not None and current in busy:
                count += 1
                current = shift_time(current, step)

        return count > pref.max_consecutive_classes

    def violates_daily_limit(
        self,
        teacher: str,
        day: Day | str,
        sessions: Iterable[Session],
        new_slots: int = 1,
    ) -> bool:
        """Check if adding ``new_slots`` classes exceeds the daily limit."""
        pref = self.get(teacher)
        if not pref.enabled:
            return False

        existing = len(_teacher_starts(teacher, day, sessions))
        return existing + new_slots > pref.max_daily_classes

    def passes_hard_constraints(
        self,
        teacher: str,
        day: Day,
        starts: list[str],
        sessions: list[Session],
        slot_duration: int,
    ) -> bool:
        """Check blocked slots, the consecutive limit and the daily limit.

        ``starts`` are all slots one placement gives the teacher (one for a
        lecture, two for a lab).
        """
        if not teacher:
            return True
        for start in starts:
            if self.is_slot_blocked(teacher, day, start):
                return False
        if self.violates_daily_limit(teacher, day, sessions, new_slots=len(starts)):
            return False
        for i, start in enumerate(starts):
            others = starts[:i] + starts[i + 1 :]
            if self.violates_consecutive_limit(
                teacher, day, start, sessions, slot_duration, pending_starts=others
            ):
                return False
        return True


def _teacher_starts(teacher: str, day: Day | str, sessions: Iterable[Session]) -> set[str]:
    """Slot starts a teacher already teaches on a day."""
    return {s.start for s in sessions if s.teacher == teacher and s.day == day}
