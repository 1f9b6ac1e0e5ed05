"""Custom exceptions for the timetable generator."""


class SchedulerError(Exception):
    """Base exception for timetable generation errors."""

    pass


class ConfigurationError(SchedulerError):
    """Input configuration cannot be scheduled."""

    pass


class NoCoursesError(ConfigurationError):
    """No courses were defined."""

    def __init__(self):
        super().__init__("No courses defined. Define at least one course before generating.")


class LabBatchMismatchError(ConfigurationError):
    """A lab subject's weekly lab count does not match the course's batches."""

    def __init__(
        self,
        course: str,
        subject: str,
        batch_count: int,
        labs_per_week: int,
    ):
        self.course = course
        self.subject = subject
        self.batch_count = batch_count
        self.labs_per_week = labs_per_week
        super().__init__(
            f"Mismatch in '{course}' -> '{subject}': "
            f"batches: {batch_count}, labsPerWeek: {labs_per_week}. "
            "Each lab subject should have labsPerWeek equal to the number of batches."
        )


class InvalidTimeSettingsError(ConfigurationError):
    """Time settings cannot produce a valid slot grid."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        location = f" ({field})" if field else ""
        super().__init__(f"Invalid time settings{location}: {message}")
