"""Tests for the MBTA payload models."""

import pytest
from pydantic import ValidationError

from mbta_board.models.transit import (
    ApiErrorEnvelope, OtherResource, PredictionsResponse, RouteResource,
    ScheduleResource, StopResource, TripResource
)


class TestPredictionsResponse:
    """Test cases for decoding a predictions payload."""

    def test_included_entities_are_typed_by_tag(self, predictions_payload):
        """Each included entity decodes to the model for its type tag."""
        response = PredictionsResponse.model_validate(predictions_payload)

        kinds = {type(entity) for entity in response.included}
        assert kinds == {RouteResource, StopResource, TripResource, ScheduleResource}

        route = next(e for e in response.included if e.id == "CR-Providence")
        assert route.attributes.type == 2
        assert route.attributes.direction_names == ["Outbound", "Inbound"]

    def test_unknown_included_kind_falls_back(self):
        """Included kinds the board does not use decode without error."""
        response = PredictionsResponse.model_validate({
            "data": [],
            "included": [
                {"type": "vehicle", "id": "y1234", "attributes": {"label": "1234"}},
                {"type": "facility", "id": "f1"},
            ],
        })

        assert all(isinstance(e, OtherResource) for e in response.included)
        assert [e.type for e in response.included] == ["vehicle", "facility"]

    def test_relationship_ids(self, predictions_payload):
        """Relationship ids are exposed on the primary record."""
        response = PredictionsResponse.model_validate(predictions_payload)
        record = response.data[0]

        assert record.route_id == "CR-Providence"
        assert record.stop_id == "NEC-2287-10"
        assert record.trip_id == "CR-Weekday-Fall-22-701"
        assert record.schedule_id == "schedule-CR-Weekday-Fall-22-701-NEC-2287-1"

    def test_null_relationship(self, predictions_payload):
        """A null relationship yields no id."""
        response = PredictionsResponse.model_validate(predictions_payload)
        red_line = response.data[1]

        assert red_line.schedule_id is None

    def test_missing_relationships_and_included(self):
        """Records without relationships or an included list still decode."""
        response = PredictionsResponse.model_validate({
            "data": [{"type": "prediction", "id": "p1", "attributes": {}}],
        })

        assert response.included == []
        assert response.data[0].route_id is None
        assert response.data[0].attributes.departure_time is None

    def test_blank_strings_read_as_missing(self):
        """Empty and absent attribute values are the same state."""
        response = PredictionsResponse.model_validate({
            "data": [{
                "type": "prediction",
                "id": "p1",
                "attributes": {"departure_time": "", "status": "  "},
            }],
            "included": [{"type": "stop", "id": "S1", "attributes": {"platform_code": ""}}],
        })

        assert response.data[0].attributes.departure_time is None
        assert response.data[0].attributes.status is None
        assert response.included[0].attributes.platform_code is None

    def test_null_nested_objects_read_as_empty(self):
        """A null attributes or relationships object decodes like an absent one."""
        response = PredictionsResponse.model_validate({
            "data": [
                {"type": "prediction", "id": "p1", "attributes": None, "relationships": None},
                {"type": "prediction", "id": "p2", "relationships": {"route": None}},
            ],
            "included": [
                {"type": "stop", "id": "S1", "attributes": None},
                {"type": "route", "id": "R1", "attributes": None},
                {"type": "trip", "id": "T1", "attributes": None},
                {"type": "schedule", "id": "SCH1", "attributes": None},
            ],
        })

        assert response.data[0].attributes.departure_time is None
        assert response.data[0].route_id is None
        assert response.data[1].route_id is None
        stop, route, trip, schedule = response.included
        assert stop.attributes.platform_code is None
        assert route.attributes.type is None
        assert trip.attributes.headsign is None
        assert schedule.attributes.departure_time is None

    def test_data_is_required(self):
        """A payload without primary records is rejected."""
        with pytest.raises(ValidationError):
            PredictionsResponse.model_validate({"included": []})

    def test_models_are_read_only(self, predictions_payload):
        """Decoded payloads cannot be mutated."""
        response = PredictionsResponse.model_validate(predictions_payload)

        with pytest.raises(ValidationError):
            response.data[0].attributes.status = "Cancelled"


class TestApiErrorEnvelope:
    """Test cases for decoding the API error envelope."""

    def test_error_entry_fields(self):
        """Status, code, detail and source parameter are read."""
        envelope = ApiErrorEnvelope.model_validate({
            "errors": [{
                "status": "400",
                "code": "bad_request",
                "detail": "Invalid filter",
                "source": {"parameter": "filter[stop]"},
            }]
        })

        entry = envelope.errors[0]
        assert entry.status == "400"
        assert entry.code == "bad_request"
        assert entry.detail == "Invalid filter"
        assert entry.source.parameter == "filter[stop]"
