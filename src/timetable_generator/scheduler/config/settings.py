"""Generator settings."""

from dataclasses import dataclass
from typing import Any

from ..constants import DEFAULT_TOP_CANDIDATES


@dataclass
class GeneratorSettings:
    """Tuning knobs of the placement search.

    Attributes:
        seed: Seed for the subject shuffle. None picks a fresh seed per run,
              which is recorded in the result so the run can be reproduced.
        max_attempts: Lecture placement attempt cap per subject. None means
                      days x slots x 2.
        top_candidates: Ranked candidates tried per lecture attempt.
    """

    seed: int | None = None
    max_attempts: int | None = None
    top_candidates: int = DEFAULT_TOP_CANDIDATES

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "GeneratorSettings":
        data = data or {}
        return cls(
            seed=data.get("seed"),
            max_attempts=data.get("maxAttempts"),
            top_candidates=data.get("topCandidates", DEFAULT_TOP_CANDIDATES),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "seed": self.seed,
            "maxAttempts": self.max_attempts,
            "topCandidates": self.top_candidates,
        }
