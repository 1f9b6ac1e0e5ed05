"""Teaching load and preference satisfaction reports."""

from collections import defaultdict
from collections.abc import Iterable

import pandas as pd

from .constants import LAB_SESSION_SLOTS, SATISFACTION_GRADES
from .models import Infrastructure, Session
from .preferences import PreferenceStore

TEACHING_LOAD_COLUMNS = [
    "teacher",
    "lecture_hours",
    "lab_hours",
    "elective_hours",
    "total_hours",
    "max_weekly_hours",
    "overloaded",
]

SATISFACTION_COLUMNS = [
    "teacher",
    "total_classes",
    "preferred_slots_used",
    "blocked_slots_violated",
    "preferred_days_used",
    "satisfaction_score",
    "grade",
]


def teaching_load(
    infrastructure: Infrastructure,
    preferences: PreferenceStore | None = None,
) -> pd.DataFrame:
    """Compute the configured weekly teaching hours per teacher.

    Hours per subject: lecturesPerWeek for the teacher, labsPerWeek x 2 for
    lab subjects, and lecturesPerWeek again for the elective teacher of an
    elective pairing.

    Args:
        infrastructure: Course configuration
        preferences: Used for each teacher's max weekly hours

    Returns:
        DataFrame with TEACHING_LOAD_COLUMNS, heaviest load first
    """
    preferences = preferences if preferences is not None else PreferenceStore()
    rows: list[dict] = []

    for course in infrastructure.courses:
        for subject in course.subjects:
            teacher = subject.teacher or "Undefined Teacher"
            lab_hours = subject.labs_per_week * LAB_SESSION_SLOTS if subject.requires_lab else 0
            rows.append(
                {
                    "teacher": teacher,
                    "lecture_hours": subject.lectures_per_week,
                    "lab_hours": lab_hours,
                    "elective_hours": 0,
                }
            )
            if subject.is_elective and subject.elective_teacher:
                rows.append(
                    {
                        "teacher": subject.elective_teacher,
                        "lecture_hours": 0,
                        "lab_hours": 0,
                        "elective_hours": subject.lectures_per_week,
                    }
                )

    if not rows:
        return pd.DataFrame(columns=TEACHING_LOAD_COLUMNS)

    df = pd.DataFrame(rows).groupby("teacher", as_index=False, sort=False).sum()
    df["total_hours"] = df["lecture_hours"] + df["lab_hours"] + df["elective_hours"]
    df["max_weekly_hours"] = [preferences.get(t).max_weekly_hours for t in df["teacher"]]
    df["overloaded"] = df["total_hours"] > df["max_weekly_hours"]

    df = df.sort_values("total_hours", ascending=False, kind="stable").reset_index(drop=True)
    return df[TEACHING_LOAD_COLUMNS]


def satisfaction_grade(score: int) -> str:
    """Map a 0-100 satisfaction score to a grade."""
    for threshold, grade in SATISFACTION_GRADES:
        if score >= threshold:
            return grade
    return SATISFACTION_GRADES[-1][1]


def preference_satisfaction(
    preferences: PreferenceStore,
    sessions: Iterable[Session],
) -> pd.DataFrame:
    """Report how well placed sessions match each enabled teacher's preferences.

    The score is the share of (preferred slot, preferred day) hits over
    two per class, as a rounded percentage.

    Args:
        preferences: Teacher preference store
        sessions: Placed sessions, typically ``ScheduleResult.sessions``

    Returns:
        DataFrame with SATISFACTION_COLUMNS, one row per enabled teacher
    """
    by_teacher: dict[str, list[Session]] = defaultdict(list)
    for session in sessions:
        by_teacher[session.teacher].append(session)

    rows = []
    for pref in preferences.teachers:
        if not pref.enabled:
            continue

        teacher = pref.name
        classes = by_teacher.get(teacher, [])
        total = len(classes)
        preferred_slots = sum(preferences.is_slot_preferred(teacher, c.day, c.start) for c in classes)
        blocked = sum(preferences.is_slot_blocked(teacher, c.day, c.start) for c in classes)
        preferred_days = sum(preferences.is_day_preferred(teacher, c.day) for c in classes)

        score = 0
        if total > 0:
            score = int((preferred_slots + preferred_days) / (total * 2) * 100 + 0.5)

        rows.append(
            {
                "teacher": teacher,
                "total_classes": total,
                "preferred_slots_used": preferred_slots,
                "blocked_slots_violated": blocked,
                "preferred_days_used": preferred_days,
                "satisfaction_score": score,
                "grade": satisfaction_grade(score),
            }
        )

    return pd.DataFrame(rows, columns=SATISFACTION_COLUMNS)
