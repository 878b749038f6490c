"""Tests for entity serialization in both wire formats."""

import inspect

import pytest

from postnl.core.domain import entities, responses
from postnl.core.domain import requests as request_entities
from postnl.core.domain.api_mode import ApiMode
from postnl.core.domain.entities import (
    Address,
    CutOffTime,
    GetLocationsResult,
    Location,
    PhaseCode,
    ProductOption,
    ResponseLocation,
    Shipment,
    Weekday,
)
from postnl.core.domain.requests import CurrentStatus, GetTimeframes
from postnl.core.domain.responses import CurrentStatusResponse, ResponseTimeframes
from postnl.core.domain.schema import Entity, FieldKind, deserialize, schema_of, serialize
from postnl.core.errors import DeserializationError
from support import TIMEFRAMES_PAYLOAD


def _shipment():
    return Shipment(
        barcode="3SDEVC816223392",
        reference="order-1",
        phase_code=PhaseCode.DELIVERY,
        addresses=[
            Address(address_type="01", city="Utrecht", countrycode="NL", house_nr="3", zipcode="3521AB"),
            Address(address_type="02", city="Hoofddorp", countrycode="NL", house_nr="42", zipcode="2132WT"),
        ],
        product_options=[ProductOption(characteristic="118", option="006")],
        product_code_delivery="3085",
    )


class TestSchemaTable:
    """Tests for the static per-entity schema table."""

    def test_table_is_ordered_and_cached(self):
        first = schema_of(Shipment)
        assert first is schema_of(Shipment)
        assert [f.wire for f in first][:3] == ["Addresses", "Amounts", "Barcode"]

    def test_array_rows_know_their_item_tag(self):
        rows = {f.name: f for f in schema_of(Shipment)}
        assert rows["addresses"].kind is FieldKind.ARRAY
        assert rows["addresses"].item == "Address"
        assert rows["addresses"].item_kind is FieldKind.ENTITY
        assert rows["phase_code"].kind is FieldKind.ENUM

    def test_request_id_is_not_a_wire_field(self):
        assert "id" not in {f.name for f in schema_of(CurrentStatus)}


class TestSerializeRest:
    """Tests for serialization to REST JSON."""

    def test_unset_fields_are_omitted(self):
        data = serialize(Shipment(reference="order-1"), ApiMode.REST)
        assert data == {"Reference": "order-1"}

    def test_reference_only_status_has_no_barcode(self):
        request = CurrentStatus(shipment=Shipment(reference="order-1"))
        data = serialize(request, ApiMode.REST)
        assert "Barcode" not in data["Shipment"]
        assert data["Shipment"]["Reference"] == "order-1"
        assert "id" not in data

    def test_arrays_are_plain_lists(self):
        data = serialize(_shipment(), ApiMode.REST)
        assert [a["AddressType"] for a in data["Addresses"]] == ["01", "02"]
        assert data["ProductOptions"] == [{"Characteristic": "118", "Option": "006"}]

    def test_scalars_keep_native_types(self):
        assert serialize(CutOffTime(day=Weekday.ALL, time="17:00:00", available=True)) == {
            "Day": "00",
            "Time": "17:00:00",
            "Available": True,
        }
        assert serialize(Shipment(phase_code=PhaseCode.SORTING)) == {"PhaseCode": 2}


class TestSerializeLegacy:
    """Tests for serialization to the SOAP tree."""

    def test_keys_carry_the_prefix(self):
        data = serialize(Shipment(barcode="3S1"), ApiMode.LEGACY, prefix="domain")
        assert data == {"domain:Barcode": "3S1"}

    def test_entity_arrays_are_wrapped_per_item(self):
        data = serialize(_shipment(), ApiMode.LEGACY, prefix="domain")
        wrapped = data["domain:Addresses"]["domain:Address"]
        assert len(wrapped) == 2
        assert wrapped[0]["domain:City"] == "Utrecht"

    def test_scalar_arrays_use_the_array_namespace(self):
        location = Location(postalcode="2132WT", delivery_options=["PG", "PGE"])
        data = serialize(location, ApiMode.LEGACY, prefix="domain")
        assert data["domain:DeliveryOptions"] == {"arr:string": ["PG", "PGE"]}

    def test_values_are_text(self):
        data = serialize(CutOffTime(day=Weekday.MONDAY, available=False), ApiMode.LEGACY, prefix="domain")
        assert data == {"domain:Day": "01", "domain:Available": "false"}
        assert serialize(Shipment(phase_code=PhaseCode.DELIVERY), ApiMode.LEGACY) == {"PhaseCode": "4"}

    def test_legacy_name_is_used_when_declared(self):
        response = CurrentStatusResponse(shipments=[])
        assert "Shipment" in serialize(response, ApiMode.REST)
        assert "Shipments" in serialize(response, ApiMode.LEGACY)


class TestDeserialize:
    """Tests for reading wire payloads into entities."""

    def test_singleton_array_becomes_a_one_element_list(self):
        shipment = deserialize({"Addresses": {"City": "Utrecht"}}, Shipment)
        assert len(shipment.addresses) == 1
        assert shipment.addresses[0].city == "Utrecht"

    def test_wrapped_scalar_array(self):
        location = deserialize({"DeliveryOptions": {"string": "PG"}}, Location)
        assert location.delivery_options == ["PG"]

    def test_prefixes_attributes_and_case_are_ignored(self):
        payload = {
            "@xmlns:a": "http://example.org",
            "a:BARCODE": "3S1",
            "a:Reference": "order-1",
            "Unknown": "ignored",
        }
        shipment = deserialize(payload, Shipment)
        assert shipment.barcode == "3S1"
        assert shipment.reference == "order-1"

    def test_numbers_are_read_as_text_for_text_fields(self):
        location = deserialize({"Address": {"HouseNr": 22}, "LocationCode": 161457}, ResponseLocation)
        assert location.address.house_nr == "22"
        assert location.location_code == "161457"

    def test_booleans_and_enums_from_text(self):
        cut_off = deserialize({"Day": "03", "Available": "true"}, CutOffTime)
        assert cut_off.day is Weekday.WEDNESDAY
        assert cut_off.available is True
        assert deserialize({"PhaseCode": "3"}, Shipment).phase_code is PhaseCode.DISTRIBUTION

    def test_legacy_field_name_is_accepted(self):
        response = deserialize({"Shipments": {"CurrentStatusResponseShipment": {"Barcode": "3S1"}}}, CurrentStatusResponse)
        assert [s.barcode for s in response.shipments] == ["3S1"]

    def test_nested_wrappers(self):
        result = deserialize(TIMEFRAMES_PAYLOAD, ResponseTimeframes)
        assert [t.date for t in result.timeframes] == ["14-11-2016", "15-11-2016"]
        assert [w.from_ for w in result.timeframes[0].timeframes] == ["09:15:00", "17:30:00"]
        assert result.timeframes[0].timeframes[1].options == ["Evening"]
        assert len(result.timeframes[1].timeframes) == 1
        assert result.reason_no_timeframes[0].code == "05"

    def test_invalid_boolean(self):
        with pytest.raises(DeserializationError) as excinfo:
            deserialize({"Available": "maybe"}, CutOffTime)
        assert excinfo.value.entity == "CutOffTime"
        assert excinfo.value.field == "available"

    def test_object_where_a_scalar_is_expected(self):
        with pytest.raises(DeserializationError):
            deserialize({"Barcode": {"nested": "value"}}, Shipment)

    def test_scalar_where_an_object_is_expected(self):
        with pytest.raises(DeserializationError):
            deserialize({"Dimension": "10"}, Shipment)

    def test_payload_must_be_an_object(self):
        with pytest.raises(DeserializationError):
            deserialize(["not", "an", "object"], Shipment)


class TestRoundTrip:
    """serialize -> deserialize gives back an equal entity in both modes."""

    @pytest.mark.parametrize("mode", [ApiMode.REST, ApiMode.LEGACY])
    def test_shipment(self, mode):
        original = _shipment()
        restored = deserialize(serialize(original, mode, prefix="domain"), Shipment)
        assert restored.model_dump(exclude_none=True) == original.model_dump(exclude_none=True)

    @pytest.mark.parametrize("mode", [ApiMode.REST, ApiMode.LEGACY])
    def test_response_location(self, mode):
        original = ResponseLocation(
            name="Primera Hoofddorp",
            distance=244,
            latitude=52.3027,
            longitude=4.6896,
            delivery_options=["PG", "DO"],
            address=Address(city="Hoofddorp", house_nr="22"),
        )
        restored = deserialize(serialize(original, mode), ResponseLocation)
        assert restored == original

    @pytest.mark.parametrize("mode", [ApiMode.REST, ApiMode.LEGACY])
    def test_request_without_correlation_id(self, mode):
        original = GetTimeframes(timeframe=[])
        restored = deserialize(serialize(original, mode, prefix="domain"), GetTimeframes)
        assert restored.model_dump(exclude={"id"}) == original.model_dump(exclude={"id"})
        assert restored.timeframe == []


class TestRepeatedElements:
    """Arrays the SOAP API repeats without a wrapper tag."""

    def _result(self):
        return GetLocationsResult(
            response_location=[ResponseLocation(name="A", distance=10), ResponseLocation(name="B", distance=20)]
        )

    def test_legacy_repeats_the_element(self):
        data = serialize(self._result(), ApiMode.LEGACY, prefix="domain")
        assert list(data) == ["domain:ResponseLocation"]
        locations = data["domain:ResponseLocation"]
        assert [loc["domain:Name"] for loc in locations] == ["A", "B"]

    @pytest.mark.parametrize("mode", [ApiMode.REST, ApiMode.LEGACY])
    def test_round_trip(self, mode):
        original = self._result()
        assert deserialize(serialize(original, mode, prefix="domain"), GetLocationsResult) == original

    def test_single_element_collapsed_by_xml(self):
        result = deserialize({"ResponseLocation": {"Name": "A", "Distance": "10"}}, GetLocationsResult)
        assert result.response_location == [ResponseLocation(name="A", distance=10)]


def _entity_types():
    found = []
    for module in (entities, request_entities, responses):
        for _, member in inspect.getmembers(module, inspect.isclass):
            if issubclass(member, Entity) and member.__module__ == module.__name__:
                found.append(member)
    return found


def _sample(field, kind, tp, index, size):
    if kind is FieldKind.ENTITY:
        return _populated(tp, size)
    if kind is FieldKind.BOOL:
        return index % 2 == 0
    if kind is FieldKind.ENUM:
        members = list(tp)
        return members[index % len(members)]
    if tp is int:
        return 10 + index
    if tp is float:
        return 52.5 + index
    return f"{field.name}-{index}"


def _populated(entity_type, size):
    """Every wire field set; arrays hold `size` elements."""
    values = {}
    for field in schema_of(entity_type):
        if field.kind is FieldKind.ARRAY:
            values[field.name] = [_sample(field, field.item_kind, field.type, i, size) for i in range(size)]
        else:
            values[field.name] = _sample(field, field.kind, field.type, 0, size)
    return entity_type(**values)


class TestRoundTripEveryEntity:
    @pytest.mark.parametrize("size", [1, 2])
    @pytest.mark.parametrize("mode", [ApiMode.REST, ApiMode.LEGACY])
    @pytest.mark.parametrize("entity_type", _entity_types(), ids=lambda t: t.__name__)
    def test_round_trip(self, entity_type, mode, size):
        original = _populated(entity_type, size)
        restored = deserialize(serialize(original, mode, prefix="domain"), entity_type)
        assert type(restored) is entity_type
        assert restored.model_dump(exclude={"id"}) == original.model_dump(exclude={"id"})

    def test_every_module_contributes(self):
        names = {t.__name__ for t in _entity_types()}
        assert {"Shipment", "GetLocationsResult", "CurrentStatus", "RequestEntity", "CheckoutResponse"} <= names
