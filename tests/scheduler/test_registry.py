"""Tests for ResourceRegistry class."""

from timetable_generator.scheduler.models import Day, Infrastructure, TimeSettings
from timetable_generator.scheduler.registry import ResourceRegistry


class TestResourceRegistry:
    """Tests for ResourceRegistry.from_infrastructure."""

    def test_from_sample(self, sample_infrastructure):
        registry = ResourceRegistry.from_infrastructure(sample_infrastructure)

        assert registry.teachers == ["Dr. Rao", "Prof. Mehta", "Ms. Iyer", "Mr. Khan", "Dr. Sen"]
        assert [r.name for r in registry.rooms.labs] == ["Physics Lab (L)", "Chemistry Lab (L)"]
        assert registry.days == [Day.MONDAY, Day.TUESDAY, Day.WEDNESDAY, Day.THURSDAY, Day.FRIDAY]
        assert registry.slot_duration == 60

    def test_duplicate_teachers_dropped(self):
        infrastructure = Infrastructure(all_teachers=["T1", "T2", "T1"])
        assert ResourceRegistry.from_infrastructure(infrastructure).teachers == ["T1", "T2"]

    def test_teaching_slots_skip_recess(self, sample_infrastructure):
        registry = ResourceRegistry.from_infrastructure(sample_infrastructure)

        assert len(registry.time_slots) == 7
        assert [s.start for s in registry.teaching_slots] == [
            "09:00",
            "10:00",
            "11:00",
            "13:00",
            "14:00",
            "15:00",
        ]

    def test_slot_index(self, make_infrastructure):
        settings = TimeSettings(lecture_duration=45, recess_duration=0)
        registry = ResourceRegistry.from_infrastructure(
            make_infrastructure([], time_settings=settings, working_days=["Saturday"])
        )

        assert registry.days == [Day.SATURDAY]
        assert registry.slot_index("09:45") == 1
        assert registry.slot_index("12:10") is None
