"""Timetable generation engine."""

import logging
import random
import time

from .aggregator import aggregate_schedule
from .config import GeneratorSettings
from .context import PlacementContext
from .labs import LabScheduler
from .lectures import LectureScheduler
from .models import Infrastructure, ScheduleResult
from .preferences import PreferenceStore
from .registry import ResourceRegistry
from .validation import validate_infrastructure

logger = logging.getLogger(__name__)


class TimetableEngine:
    """Generates timetables for all courses in one synchronous pass.

    A pass validates the configuration, builds a fresh occupancy ledger,
    places labs, then lectures, then aggregates sessions per course. The
    only state kept between passes is the preference store. Passes must
    not run concurrently on the same engine.
    """

    def __init__(
        self,
        preferences: PreferenceStore | None = None,
        settings: GeneratorSettings | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            preferences: Teacher preference store (defaults for everyone if None)
            settings: Search settings (seed, attempt cap, candidate count)
        """
        self.preferences = preferences if preferences is not None else PreferenceStore()
        self.settings = settings or GeneratorSettings()

    def validate(self, infrastructure: Infrastructure) -> list[str]:
        """Validate a configuration. See ``validate_infrastructure``."""
        return validate_infrastructure(infrastructure)

    def generate_all(self, infrastructure: Infrastructure) -> ScheduleResult:
        """Generate timetables for every course.

        Args:
            infrastructure: Teachers, rooms, courses and time settings

        Returns:
            ScheduleResult with per-course sessions, warnings and statistics

        Raises:
            ConfigurationError: If the configuration is invalid. Nothing is
                                placed in that case.
        """
        started = time.perf_counter()
        self.validate(infrastructure)

        seed = self.settings.seed
        if seed is None:
            seed = random.SystemRandom().getrandbits(32)
        rng = random.Random(seed)

        courses = infrastructure.courses
        registry = ResourceRegistry.from_infrastructure(infrastructure)
        context = PlacementContext(registry, self.preferences, [c.id for c in courses])

        logger.info(
            f"Generating timetables for {len(courses)} course(s): "
            f"{len(registry.teachers)} teachers, {len(registry.days)} days x "
            f"{len(registry.teaching_slots)} slots, seed {seed}"
        )

        logger.info("Scheduling labs (parallel across batches)...")
        LabScheduler(context).schedule(courses)

        logger.info("Scheduling lectures (with elective support)...")
        LectureScheduler(
            context,
            rng,
            max_attempts=self.settings.max_attempts,
            top_candidates=self.settings.top_candidates,
        ).schedule(courses)

        result = aggregate_schedule(
            courses,
            context,
            seed=seed,
            elapsed_seconds=time.perf_counter() - started,
        )

        if result.warnings:
            logger.warning(f"Timetables generated with {len(result.warnings)} placement warning(s)")
        else:
            logger.info("Timetables generated successfully")
        return result


def generate_all(
    infrastructure: Infrastructure,
    preferences: PreferenceStore | None = None,
    seed: int | None = None,
) -> ScheduleResult:
    """Generate timetables with default settings and an optional seed."""
    engine = TimetableEngine(preferences, GeneratorSettings(seed=seed))
    return engine.generate_all(infrastructure)
