"""Tests for the cross-reference index builder."""

import logging

import pytest

from mbta_board.models.transit import PredictionsResponse
from mbta_board.processing.indexer import CrossReferenceIndexer, build_index

from payloads import route, schedule, stop, trip


def included(*entities):
    return PredictionsResponse.model_validate({"data": [], "included": list(entities)}).included


class TestCrossReferenceIndexer:
    """Test cases for CrossReferenceIndexer."""

    @pytest.fixture
    def indexer(self):
        """Create a fresh indexer for each test."""
        return CrossReferenceIndexer()

    def test_commuter_rail_routes(self, indexer):
        """Only routes with the commuter rail type code are collected."""
        index = indexer.process(included(
            route("CR-Lowell", route_type=2),
            route("Red", route_type=1),
            route("39", route_type=3),
        ))

        assert index.commuter_rail_routes == {"CR-Lowell"}
        assert index.is_commuter_rail("CR-Lowell")
        assert not index.is_commuter_rail("Red")
        assert not index.is_commuter_rail(None)

    def test_custom_route_type(self):
        """The commuter rail code is configurable."""
        index = build_index(included(route("Red", route_type=1)), commuter_rail_route_type=1)
        assert index.commuter_rail_routes == {"Red"}

    def test_stop_platform_codes(self, indexer):
        """Stops map to their platform code, missing codes to an empty string."""
        index = indexer.process(included(
            stop("BNT-0000-04", "4"),
            stop("BNT-0000", None),
            stop("BNT-0000-B", ""),
        ))

        assert index.track_of == {"BNT-0000-04": "4", "BNT-0000": "", "BNT-0000-B": ""}

    def test_trip_headsigns(self, indexer):
        """Trips map to their headsign and direction."""
        index = indexer.process(included(
            trip("T1", "Newburyport", direction_id=0),
            trip("T2", "North Station", direction_id=1),
        ))

        assert index.destination_of == {"T1": "Newburyport", "T2": "North Station"}
        assert index.direction_id_of == {"T1": 0, "T2": 1}

    def test_schedule_departure_times(self, indexer):
        """Schedules map to their departure time."""
        index = indexer.process(included(schedule("SCH1", "2023-01-01T16:30:00-05:00")))
        assert index.scheduled_departure_of == {"SCH1": "2023-01-01T16:30:00-05:00"}

    def test_other_kinds_are_ignored(self, indexer):
        """Entities of other kinds are skipped without error."""
        index = indexer.process(included(
            {"type": "vehicle", "id": "V1", "attributes": {"label": "1701"}},
            {"type": "alert", "id": "A1"},
            stop("S1", "2"),
        ))

        assert index.track_of == {"S1": "2"}
        assert index.commuter_rail_routes == set()
        assert index.destination_of == {}
        assert indexer.skipped_count == 2
        assert indexer.processed_count == 1

    def test_order_independent(self):
        """Entity order in the side-list does not change the index."""
        entities = [route("CR-Lowell"), stop("S1", "3"), trip("T1", "Lowell")]

        forward = build_index(included(*entities))
        backward = build_index(included(*reversed(entities)))

        assert forward == backward

    def test_direction_name(self):
        """Direction names resolve through the trip's direction id."""
        index = build_index(included(
            route("CR-Lowell", direction_names=("Outbound", "Inbound")),
            trip("T1", "Lowell", direction_id=0),
            trip("T2", "North Station", direction_id=1),
            trip("T3", "Somewhere", direction_id=5),
        ))

        assert index.direction_name("CR-Lowell", "T1") == "Outbound"
        assert index.direction_name("CR-Lowell", "T2") == "Inbound"
        assert index.direction_name("CR-Lowell", "T3") is None
        assert index.direction_name("CR-Lowell", "missing") is None
        assert index.direction_name("missing", "T1") is None

    def test_empty_side_list(self, indexer):
        """An empty side-list yields empty indexes."""
        index = indexer.process([])

        assert index.commuter_rail_routes == set()
        assert index.track_of == {}
        assert index.destination_of == {}

    def test_tally_logged_when_pass_ends(self, caplog):
        """Leaving the with block logs what the pass kept and passed over."""
        with caplog.at_level(logging.DEBUG, logger="mbta_board.processing.base"):
            build_index(included(stop("S1", "2"), {"type": "alert", "id": "A1"}))

        assert "CrossReferenceIndexer pass done" in caplog.text
        assert "kept 1, passed over 1, failed 0" in caplog.text
