from __future__ import annotations

import logging

import pytest

from busplanner.domain.algorithms.double_transfer import find_double_transfer_route
from busplanner.domain.algorithms.limits import SearchLimits
from busplanner.domain.algorithms.planner import (
    needs_double_transfer_fallback,
    plan_itineraries,
)
from busplanner.domain.algorithms.ranking import ranking_key
from busplanner.domain.exceptions import InputError
from busplanner.domain.models import (
    GeoPoint,
    Itinerary,
    Stop,
    TransitCatalog,
    TransitLine,
    TravelMode,
)


def _line(line_id: str, *coords: tuple[float, float]) -> TransitLine:
    return TransitLine(
        line_id=line_id,
        stops=tuple(
            Stop(id=f"{line_id}-{i}", name=f"Stop {i}", location=GeoPoint(lat, lon))
            for i, (lat, lon) in enumerate(coords)
        ),
    )


LINE_1 = _line("1", (0.0, 0.0), (0.0, 0.01), (0.0, 0.02))
LINE_2 = _line("2", (0.001, 0.02), (0.001, 0.03), (0.001, 0.04))
LINE_3 = _line("3", (0.002, 0.04), (0.002, 0.05), (0.002, 0.06))

ORIGIN = GeoPoint(lat=0.0, lon=0.0)


class _CountingDoubleSearch:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self, *args, **kwargs) -> Itinerary | None:
        self.calls += 1
        return find_double_transfer_route(*args, **kwargs)


def test_plan_direct_line_between_two_stops() -> None:
    a = GeoPoint(lat=0.0, lon=0.0)
    b = GeoPoint(lat=0.0, lon=0.01)
    catalog = TransitCatalog(lines=(_line("A", (0.0, 0.0), (0.0, 0.01)),))

    result = plan_itineraries(catalog, a, b)

    bus = [it for it in result if not it.is_walking_only]
    assert len(bus) == 1
    assert bus[0].transfer_count == 0
    assert bus[0].total_walking_m == pytest.approx(0.0, abs=1e-6)
    assert bus[0].segments[0].in_line_distance_m == pytest.approx(1110.0, rel=0.01)
    # Least walking ranks first.
    assert result[0] is bus[0]


def test_plan_always_offers_walking_when_destination_is_close() -> None:
    destination = GeoPoint(lat=0.0, lon=0.005)

    for catalog in (TransitCatalog(), TransitCatalog(lines=(LINE_1, LINE_2))):
        result = plan_itineraries(catalog, ORIGIN, destination)
        walking = [it for it in result if it.is_walking_only]
        assert len(walking) == 1
        assert walking[0].transfer_count == 0
        assert walking[0].segments[0].mode is TravelMode.WALK


def test_plan_finds_single_transfer_between_lines_sharing_a_stop() -> None:
    destination = GeoPoint(lat=0.001, lon=0.04)
    catalog = TransitCatalog(lines=(LINE_1, LINE_2))

    result = plan_itineraries(catalog, ORIGIN, destination)

    assert any(it.transfer_count == 1 for it in result)
    assert all(
        len(it.segments) == it.transfer_count + 1
        for it in result
        if not it.is_walking_only
    )


def test_plan_returns_empty_list_when_nothing_is_reachable() -> None:
    catalog = TransitCatalog(lines=(LINE_1, LINE_2, LINE_3))

    result = plan_itineraries(
        catalog, GeoPoint(lat=10.0, lon=10.0), GeoPoint(lat=10.5, lon=10.5)
    )

    assert result == []


def test_plan_empty_catalog_far_points_is_not_an_error() -> None:
    assert plan_itineraries(TransitCatalog(), ORIGIN, GeoPoint(lat=1.0, lon=1.0)) == []


def test_plan_result_is_sorted_by_ranking_key() -> None:
    extra = _line("4", (0.0, 0.0), (0.0, 0.02), (0.001, 0.04))
    catalog = TransitCatalog(lines=(LINE_1, LINE_2, extra))

    result = plan_itineraries(catalog, ORIGIN, GeoPoint(lat=0.001, lon=0.04))

    assert len(result) >= 2
    for x, y in zip(result, result[1:]):
        assert ranking_key(x) <= ranking_key(y)


def test_double_transfer_fallback_runs_when_nothing_walkable_was_found() -> None:
    destination = GeoPoint(lat=0.002, lon=0.06)
    catalog = TransitCatalog(lines=(LINE_1, LINE_2, LINE_3))
    search = _CountingDoubleSearch()

    result = plan_itineraries(
        catalog, ORIGIN, destination, double_transfer_search=search
    )

    # Every ordered triple of distinct lines is tried.
    assert search.calls == 6
    assert [it.transfer_count for it in result] == [2]
    assert [s.line.line_id for s in result[0].segments] == ["1", "2", "3"]


def test_double_transfer_tier_skipped_when_walkable_candidate_exists() -> None:
    destination = GeoPoint(lat=0.001, lon=0.04)
    catalog = TransitCatalog(lines=(LINE_1, LINE_2, LINE_3))
    search = _CountingDoubleSearch()

    result = plan_itineraries(
        catalog, ORIGIN, destination, double_transfer_search=search
    )

    assert search.calls == 0
    assert any(it.transfer_count == 1 for it in result)


def test_double_transfer_tier_skipped_for_walking_distance_trip() -> None:
    search = _CountingDoubleSearch()

    plan_itineraries(
        TransitCatalog(),
        ORIGIN,
        GeoPoint(lat=0.0, lon=0.005),
        double_transfer_search=search,
    )

    assert search.calls == 0


def test_max_transfers_limits_search_depth() -> None:
    destination = GeoPoint(lat=0.002, lon=0.06)
    catalog = TransitCatalog(lines=(LINE_1, LINE_2, LINE_3))
    search = _CountingDoubleSearch()

    result = plan_itineraries(
        catalog,
        ORIGIN,
        destination,
        limits=SearchLimits(max_transfers=1),
        double_transfer_search=search,
    )

    assert result == []
    assert search.calls == 0


def test_needs_fallback_only_when_all_candidates_walk_too_far() -> None:
    o = GeoPoint(lat=0.0, lon=0.0)
    near = Itinerary(origin=o, destination=o, total_walking_m=1500.0)
    far = Itinerary(origin=o, destination=o, total_walking_m=1500.1)

    assert needs_double_transfer_fallback([])
    assert needs_double_transfer_fallback([far])
    assert not needs_double_transfer_fallback([far, near])


def test_malformed_line_is_skipped_and_search_continues(
    caplog: pytest.LogCaptureFixture,
) -> None:
    a = GeoPoint(lat=0.0, lon=0.0)
    b = GeoPoint(lat=0.0, lon=0.01)
    good = _line("good", (0.0, 0.0), (0.0, 0.01))
    empty = TransitLine(line_id="empty")
    catalog = TransitCatalog(lines=(empty, good))

    with caplog.at_level(logging.WARNING):
        result = plan_itineraries(catalog, a, b)

    assert any(
        it.segments[0].line.line_id == "good" for it in result if not it.is_walking_only
    )
    assert "empty" in caplog.text


def test_unexpected_failure_on_one_line_is_isolated(
    caplog: pytest.LogCaptureFixture,
) -> None:
    a = GeoPoint(lat=0.0, lon=0.0)
    b = GeoPoint(lat=0.0, lon=0.01)
    good = _line("good", (0.0, 0.0), (0.0, 0.01))
    broken = TransitLine(line_id="broken", stops=(object(),))  # type: ignore[arg-type]
    catalog = TransitCatalog(lines=(broken, good))

    with caplog.at_level(logging.ERROR):
        result = plan_itineraries(catalog, a, b)

    assert any(not it.is_walking_only for it in result)
    assert "broken" in caplog.text


@pytest.mark.parametrize("catalog", [None, [LINE_1], {"lines": []}])
def test_invalid_catalog_raises_input_error(catalog: object) -> None:
    with pytest.raises(InputError):
        plan_itineraries(
            catalog, ORIGIN, GeoPoint(lat=0.0, lon=0.01)  # type: ignore[arg-type]
        )


def test_input_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        plan_itineraries(None, ORIGIN, ORIGIN)  # type: ignore[arg-type]


def test_should_stop_ends_search_and_keeps_found_candidates(
    caplog: pytest.LogCaptureFixture,
) -> None:
    a = GeoPoint(lat=0.0, lon=0.0)
    b = GeoPoint(lat=0.0, lon=0.01)
    catalog = TransitCatalog(lines=(_line("A", (0.0, 0.0), (0.0, 0.01)),))

    with caplog.at_level(logging.WARNING):
        result = plan_itineraries(catalog, a, b, should_stop=lambda: True)

    assert len(result) == 1
    assert result[0].is_walking_only
    assert "stopped early" in caplog.text


def test_should_stop_is_checked_between_lines() -> None:
    destination = GeoPoint(lat=0.002, lon=0.06)
    catalog = TransitCatalog(lines=(LINE_1, LINE_2, LINE_3))
    search = _CountingDoubleSearch()
    polls = {"n": 0}

    def _stop_after_direct_tier() -> bool:
        polls["n"] += 1
        return polls["n"] > len(catalog.lines)

    result = plan_itineraries(
        catalog,
        ORIGIN,
        destination,
        should_stop=_stop_after_direct_tier,
        double_transfer_search=search,
    )

    assert result == []
    assert search.calls == 0


def test_completed_search_does_not_report_an_early_stop(
    caplog: pytest.LogCaptureFixture,
) -> None:
    destination = GeoPoint(lat=0.002, lon=0.06)
    catalog = TransitCatalog(lines=(LINE_1, LINE_2, LINE_3))
    polls = {"n": 0}

    def _count_polls() -> bool:
        polls["n"] += 1
        return False

    plan_itineraries(catalog, ORIGIN, destination, should_stop=_count_polls)
    full_search_polls = polls["n"]

    def _deadline_right_after_search() -> bool:
        polls["n"] += 1
        return polls["n"] > full_search_polls

    polls["n"] = 0
    with caplog.at_level(logging.WARNING):
        result = plan_itineraries(
            catalog, ORIGIN, destination, should_stop=_deadline_right_after_search
        )

    assert [it.transfer_count for it in result] == [2]
    assert "stopped early" not in caplog.text


def test_stopless_line_is_reported_once(caplog: pytest.LogCaptureFixture) -> None:
    destination = GeoPoint(lat=0.002, lon=0.06)
    empty = TransitLine(line_id="empty")
    catalog = TransitCatalog(lines=(empty, LINE_1, LINE_2, LINE_3))
    search = _CountingDoubleSearch()

    with caplog.at_level(logging.WARNING):
        result = plan_itineraries(
            catalog, ORIGIN, destination, double_transfer_search=search
        )

    assert [it.transfer_count for it in result] == [2]
    # Only triples of the three usable lines are tried.
    assert search.calls == 6
    empty_warnings = [r for r in caplog.records if "'empty'" in r.getMessage()]
    assert len(empty_warnings) == 1
