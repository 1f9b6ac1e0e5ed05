"""Enumerable scheduling resources for one generation pass."""

from dataclasses import dataclass, field

from .models import Day, Infrastructure, TimeSlot
from .rooms import RoomManager
from .utils import generate_time_slots, parse_working_days


@dataclass
class ResourceRegistry:
    """Teachers, rooms, working days and the slot grid."""

    teachers: list[str]
    rooms: RoomManager
    days: list[Day]
    time_slots: list[TimeSlot]
    slot_duration: int
    _slot_index: dict[str, int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._slot_index = {slot.start: i for i, slot in enumerate(self.time_slots)}

    @classmethod
    def from_infrastructure(cls, infrastructure: Infrastructure) -> "ResourceRegistry":
        """Build the registry, generating the slot grid from time settings.

        Raises:
            InvalidTimeSettingsError: If the time settings are malformed
        """
        settings = infrastructure.time_settings
        return cls(
            teachers=list(dict.fromkeys(infrastructure.all_teachers)),
            rooms=RoomManager(infrastructure.all_rooms),
            days=parse_working_days(infrastructure.working_days),
            time_slots=generate_time_slots(settings),
            slot_duration=settings.lecture_duration,
        )

    @property
    def teaching_slots(self) -> list[TimeSlot]:
        """Slots that sessions can be placed in (recess excluded)."""
        return [slot for slot in self.time_slots if not slot.is_recess]

    def slot_index(self, start: str) -> int | None:
        """Position of a slot in the day, or None for unknown start times."""
        return self._slot_index.get(start)
