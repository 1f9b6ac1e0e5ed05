"""Utility functions for timetable generation."""

import random
import re
from collections.abc import Iterable, Sequence
from typing import TypeVar

from ..exceptions import InvalidTimeSettingsError
from .constants import DEFAULT_WORKING_DAYS
from .models import Day, TimeSettings, TimeSlot

T = TypeVar("T")

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def time_to_minutes(value: str, field: str | None = None) -> int:
    """Convert an "HH:MM" 24-hour string to minutes after midnight.

    Args:
        value: Time string like "09:00" or "9:30"
        field: Settings field name, used in the error message

    Returns:
        Minutes after midnight

    Raises:
        InvalidTimeSettingsError: If the string is not a valid time
    """
    match = _TIME_PATTERN.match(str(value).strip())
    if not match:
        raise InvalidTimeSettingsError(f"'{value}' is not an HH:MM time", field)

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeSettingsError(f"'{value}' is out of range", field)
    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """Convert minutes after midnight to an "HH:MM" string."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def shift_time(value: str, minutes: int) -> str | None:
    """Move a time string by a number of minutes.

    Returns None when the result leaves the day.
    """
    shifted = time_to_minutes(value) + minutes
    if shifted < 0 or shifted >= 24 * 60:
        return None
    return minutes_to_time(shifted)


def generate_time_slots(settings: TimeSettings) -> list[TimeSlot]:
    """Build the ordered slot grid for one working day.

    Lecture slots span exactly ``lecture_duration`` minutes. A lecture slot
    that would overlap the recess is skipped; the recess itself is emitted
    once as a display slot marked ``is_recess`` and slot generation resumes
    at the recess end. No slot ends after the college end time.

    Example:
        09:00-16:00 with a 60 minute recess at 12:00 and 60 minute lectures
        gives 09:00, 10:00, 11:00, 12:00 (recess), 13:00, 14:00, 15:00.

    Args:
        settings: College timings

    Returns:
        List of TimeSlot objects in increasing start order

    Raises:
        InvalidTimeSettingsError: If the timings are malformed
    """
    start = time_to_minutes(settings.college_start_time, "collegeStartTime")
    end = time_to_minutes(settings.college_end_time, "collegeEndTime")
    recess_start = time_to_minutes(settings.recess_start_time, "recessStartTime")
    duration = settings.lecture_duration

    if duration <= 0:
        raise InvalidTimeSettingsError("must be a positive number of minutes", "lectureDuration")
    if settings.recess_duration < 0:
        raise InvalidTimeSettingsError("must not be negative", "recessDuration")
    if end <= start:
        raise InvalidTimeSettingsError("college end time must be after start time", "collegeEndTime")

    recess_end = recess_start + settings.recess_duration
    has_recess = settings.recess_duration > 0

    slots: list[TimeSlot] = []
    current = start
    while current + duration <= end:
        overlaps_recess = has_recess and current < recess_end and current + duration > recess_start
        if overlaps_recess:
            if recess_end > end:
                break
            slots.append(
                TimeSlot(
                    start=minutes_to_time(max(current, recess_start)),
                    end=minutes_to_time(recess_end),
                    is_recess=True,
                )
            )
            current = recess_end
            continue

        slots.append(
            TimeSlot(
                start=minutes_to_time(current),
                end=minutes_to_time(current + duration),
            )
        )
        current += duration

    return slots


def lab_slot_pairs(time_slots: Sequence[TimeSlot]) -> list[tuple[TimeSlot, TimeSlot]]:
    """Get consecutive slot pairs usable for a two-slot lab.

    Pairs touching a recess slot are excluded.
    """
    pairs = []
    for first, second in zip(time_slots, time_slots[1:]):
        if first.is_recess or second.is_recess:
            continue
        pairs.append((first, second))
    return pairs


def parse_working_days(names: Iterable[str] | None = None) -> list[Day]:
    """Convert day names to Day values, keeping week order.

    Args:
        names: Day names like "Monday" (case-insensitive). None means the
               default Monday-Friday week.

    Returns:
        Ordered list of Day values without duplicates
    """
    if not names:
        names = DEFAULT_WORKING_DAYS

    lookup = {day.value.lower(): day for day in Day}
    selected = set()
    for name in names:
        day = lookup.get(str(name).strip().lower())
        if day is None:
            raise InvalidTimeSettingsError(f"unknown day '{name}'", "workingDays")
        selected.add(day)

    return [day for day in Day if day in selected]


def rotate(items: Sequence[T], offset: int) -> list[T]:
    """Rotate a sequence so that it starts at ``offset`` (modulo length)."""
    if not items:
        return []
    offset %= len(items)
    return list(items[offset:]) + list(items[:offset])


def shuffled(items: Iterable[T], rng: random.Random) -> list[T]:
    """Return a uniformly shuffled copy of ``items`` using ``rng``."""
    result = list(items)
    rng.shuffle(result)
    return result


def slot_key(day: Day | str, start: str) -> str:
    """Build a preference slot key like "Monday 09:00"."""
    day_name = day.value if isinstance(day, Day) else day
    return f"{day_name} {start}"
