from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from busplanner.domain.exceptions import MalformedEntryError
from busplanner.domain.models import GeoPoint, Stop, TransitCatalog, TransitLine

logger = logging.getLogger(__name__)


def _text(raw: Any) -> str | None:
    if raw is None:
        return None
    value = str(raw).strip()
    return value or None


def _stop_from_dict(raw: Mapping[str, Any], *, line_id: str, index: int) -> Stop:
    try:
        lat = float(raw["lat"])
        lon = float(raw["lon"])
        location = GeoPoint(lat=lat, lon=lon)
    except (KeyError, TypeError, ValueError) as exc:
        raise MalformedEntryError(
            f"Line {line_id!r}: stop #{index} has invalid coordinates ({exc})"
        ) from exc

    stop_id = _text(raw.get("id")) or f"{line_id}:{index}"
    name = _text(raw.get("name")) or "Bus Stop"
    return Stop(id=stop_id, name=name, location=location)


def line_from_dict(raw: Mapping[str, Any]) -> TransitLine:
    """Decode one line document.

    A line without stops is kept; the planner skips it at search time.
    """

    if not isinstance(raw, Mapping):
        raise MalformedEntryError(f"Line entry must be an object, got {raw!r}")

    line_id = _text(raw.get("id"))
    if line_id is None:
        raise MalformedEntryError(f"Line entry without id: {dict(raw)!r}")

    raw_stops = raw.get("stops") or []
    if not isinstance(raw_stops, list):
        raise MalformedEntryError(f"Line {line_id!r}: 'stops' must be a list")

    stops = []
    for index, raw_stop in enumerate(raw_stops):
        if not isinstance(raw_stop, Mapping):
            raise MalformedEntryError(
                f"Line {line_id!r}: stop #{index} must be an object"
            )
        stops.append(_stop_from_dict(raw_stop, line_id=line_id, index=index))

    return TransitLine(
        line_id=line_id,
        name=_text(raw.get("name")),
        stops=tuple(stops),
        color=_text(raw.get("color")),
    )


def catalog_from_dict(raw: Mapping[str, Any]) -> TransitCatalog:
    if not isinstance(raw, Mapping):
        raise MalformedEntryError("Catalog document must be a JSON object")
    raw_lines = raw.get("lines") or []
    if not isinstance(raw_lines, list):
        raise MalformedEntryError("Catalog 'lines' must be a list")
    lines: list[TransitLine] = []
    for index, raw_line in enumerate(raw_lines):
        try:
            lines.append(line_from_dict(raw_line))
        except MalformedEntryError as exc:
            logger.warning("Skipping catalog line #%d: %s", index, exc)
    return TransitCatalog(lines=tuple(lines))


def catalog_from_json(data: str | bytes) -> TransitCatalog:
    try:
        raw = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedEntryError(f"Catalog is not valid JSON: {exc}") from exc
    return catalog_from_dict(raw)


def catalog_to_dict(catalog: TransitCatalog) -> dict[str, Any]:
    return {
        "lines": [
            {
                "id": line.line_id,
                "name": line.name,
                "color": line.color,
                "stops": [
                    {"id": s.id, "name": s.name, **s.location.to_dict()}
                    for s in line.stops
                ],
            }
            for line in catalog.lines
        ]
    }
