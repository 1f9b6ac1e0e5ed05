"""Load and export functions for generation inputs and results."""

import json
from pathlib import Path

from .models import Infrastructure, ScheduleResult


def export_schedule_json(result: ScheduleResult, output_path: Path | str) -> None:
    """Export schedule result to JSON file.

    Args:
        result: ScheduleResult to export
        output_path: Path to output JSON file
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with open(output, "w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, ensure_ascii=False, indent=2)


def load_infrastructure(input_path: Path | str) -> Infrastructure:
    """Load the college configuration (teachers, rooms, courses, timings).

    Args:
        input_path: Path to infrastructure JSON file

    Returns:
        Infrastructure object
    """
    with open(input_path, encoding="utf-8") as f:
        return Infrastructure.from_dict(json.load(f))
