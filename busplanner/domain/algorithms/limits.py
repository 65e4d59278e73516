from __future__ import annotations

from dataclasses import dataclass

MAX_WALKING_DISTANCE_M = 1500.0
MAX_TRANSFER_DISTANCE_M = 600.0
MAX_TRANSFERS = 2


@dataclass(frozen=True, slots=True)
class SearchLimits:
    """Acceptance thresholds for the itinerary search.

    - max_walking_m: walk from the origin to a boarding stop, from an
      alighting stop to the destination, and for the walking-only shortcut.
    - max_transfer_m: walk between two stops of different lines.
    - max_transfers: deepest tier searched (0, 1 or 2).
    """

    max_walking_m: float = MAX_WALKING_DISTANCE_M
    max_transfer_m: float = MAX_TRANSFER_DISTANCE_M
    max_transfers: int = MAX_TRANSFERS

    def __post_init__(self) -> None:
        if self.max_walking_m < 0 or self.max_transfer_m < 0:
            raise ValueError("Distance thresholds must be non-negative")
        if not (0 <= self.max_transfers <= MAX_TRANSFERS):
            raise ValueError(
                f"max_transfers must be between 0 and {MAX_TRANSFERS}, "
                f"got {self.max_transfers}"
            )


DEFAULT_LIMITS = SearchLimits()
