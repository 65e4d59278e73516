from __future__ import annotations

from dataclasses import dataclass, field

from .route import TransitLine


@dataclass(frozen=True, slots=True)
class TransitCatalog:
    """Read-only snapshot of the bus network handed to the planner.

    Loading and validating the catalog is the job of a catalog repository; an
    empty catalog is valid and simply yields no bus itineraries.
    """

    lines: tuple[TransitLine, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.lines)

    def line_by_id(self, line_id: str) -> TransitLine | None:
        return next((line for line in self.lines if line.line_id == line_id), None)
