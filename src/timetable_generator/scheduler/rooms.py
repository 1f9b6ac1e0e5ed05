"""Room management for timetable generation."""

import logging
from collections.abc import Iterable, Sequence

from .constants import CLASSROOM_MARKER, LAB_MARKER
from .models import Day, Room
from .occupancy import OccupancyLedger

logger = logging.getLogger(__name__)


def strip_room_marker(name: str) -> str:
    """Remove a trailing "(C)" / "(L)" marker, e.g. "Lab 1 (L)" -> "Lab 1"."""
    stripped = name.strip()
    for marker in (CLASSROOM_MARKER, LAB_MARKER):
        if stripped.lower().endswith(marker.lower()):
            return stripped[: -len(marker)].strip()
    return stripped


class RoomManager:
    """Finds free rooms of the right type.

    Rooms are typed by their name marker: "(C)" for classrooms, "(L)" for
    labs. Occupancy lives in the OccupancyLedger; this class only decides
    which room to try, in declaration order.
    """

    def __init__(self, room_names: Iterable[str]) -> None:
        """Initialize the room manager.

        Args:
            room_names: Room names with type markers. Duplicates and blanks
                        are dropped, declaration order is kept.
        """
        unique = dict.fromkeys(n.strip() for n in room_names if n and n.strip())
        self.rooms = [Room.from_name(name) for name in unique]
        self._by_name = {room.name: room for room in self.rooms}
        # Lab rooms win base-name collisions, e.g. "Physics Lab (C)" vs "Physics Lab (L)"
        self._by_base_name = {
            strip_room_marker(room.name).lower(): room
            for room in sorted(self.rooms, key=lambda r: r.is_lab)
        }

        untyped = [r.name for r in self.rooms if not r.is_lab and not r.is_classroom]
        if untyped:
            logger.warning(f"Rooms without a (C)/(L) marker are never used: {', '.join(untyped)}")

    @property
    def classrooms(self) -> list[Room]:
        return [r for r in self.rooms if r.is_classroom]

    @property
    def labs(self) -> list[Room]:
        return [r for r in self.rooms if r.is_lab]

    def get_room(self, name: str | None) -> Room | None:
        """Resolve a room by exact name or by its name without marker."""
        if not name:
            return None
        room = self._by_name.get(name.strip())
        if room is not None:
            return room
        return self._by_base_name.get(strip_room_marker(name).lower())

    def find_classroom(
        self,
        ledger: OccupancyLedger,
        day: Day,
        start: str,
        exclude: Iterable[str] = (),
    ) -> str | None:
        """Find the first classroom free at the given cell.

        Args:
            ledger: Current occupancy
            day: Day of the week
            start: Slot start time
            exclude: Room names already claimed by the same placement

        Returns:
            Room name, or None if every classroom is busy
        """
        excluded = set(exclude)
        for room in self.classrooms:
            if room.name in excluded:
                continue
            if ledger.is_room_free(room.name, day, start):
                return room.name
        return None

    def find_lab_room(
        self,
        ledger: OccupancyLedger,
        day: Day,
        starts: Sequence[str],
        preferred: str | None = None,
        exclude: Iterable[str] = (),
    ) -> str | None:
        """Find a lab room free for all the given slots.

        The preferred room (a subject's lab room number) is tried first if
        it is a lab, then every "(L)" room in declaration order.

        Args:
            ledger: Current occupancy
            day: Day of the week
            starts: Slot start times the lab needs
            preferred: Preferred room name, with or without marker
            exclude: Room names already claimed by the same placement

        Returns:
            Room name, or None if no lab room is free
        """
        excluded = set(exclude)

        def usable(room: Room) -> bool:
            if room.name in excluded:
                return False
            return all(ledger.is_room_free(room.name, day, s) for s in starts)

        preferred_room = self.get_room(preferred)
        if preferred_room is not None and preferred_room.is_lab and usable(preferred_room):
            return preferred_room.name

        for room in self.labs:
            if usable(room):
                return room.name
        return None
