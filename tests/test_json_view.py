from __future__ import annotations

import json
from datetime import date
from enum import Enum

import pytest

from keyedcache import InvalidTypeError, JSONView, MissingRequiredKeysError


class MockJSONKey(str, Enum):
    NAME = "name"
    NUMBER = "number"
    BOOL = "bool"
    INVALID_KEY = "invalid_key"


class UserKey(str, Enum):
    NAME = "name"
    ADDRESS = "address"
    TAGS = "tags"


class AddressKey(str, Enum):
    CITY = "city"
    GEO = "geo"


class GeoKey(str, Enum):
    LAT = "lat"
    LNG = "lng"


ADDRESS = {
    "street": "Kulas Light",
    "suite": "Apt. 556",
    "city": "Gwenborough",
    "zipcode": "92998-3874",
    "geo": {"lat": "-37.3159", "lng": "81.1496"},
}


def _mock_bytes() -> bytes:
    return json.dumps({"name": "Twitch", "number": 5, "bool": False}).encode("utf-8")


def test_round_trip_scalars() -> None:
    view = JSONView.from_bytes(_mock_bytes(), MockJSONKey)

    assert view.resolve(MockJSONKey.NAME, str) == "Twitch"
    assert view.resolve(MockJSONKey.NUMBER, int) == 5
    assert view.resolve(MockJSONKey.BOOL, bool) is False
    assert view.get(MockJSONKey.INVALID_KEY, bool) is None
    assert view.get(MockJSONKey.INVALID_KEY) is None

    view.set(MockJSONKey.NAME, "Leif")
    assert view.resolve(MockJSONKey.NAME, str) == "Leif"


def test_unknown_fields_are_dropped() -> None:
    view = JSONView.from_bytes(b'{"name": "x", "extra": 1, "NAME": "upper"}', MockJSONKey)
    assert view.snapshot() == {MockJSONKey.NAME: "x"}


def test_null_fields_are_absent() -> None:
    view = JSONView.from_bytes(b'{"name": null, "number": 1}', MockJSONKey)
    assert not view.contains(MockJSONKey.NAME)
    assert view.contains(MockJSONKey.NUMBER)


DEEPLY_NESTED = b"[" * 200_000 + b"]" * 200_000


@pytest.mark.parametrize(
    "data",
    [b"", b"not json", b"[1, 2]", b'"text"', b"\xff\xfe\x00", pytest.param(b'{"name": ' + DEEPLY_NESTED + b"}", id="deeply-nested")],
)
def test_bad_input_yields_empty_view(data: bytes) -> None:
    view = JSONView.from_bytes(data, MockJSONKey)
    assert len(view) == 0
    with pytest.raises(MissingRequiredKeysError):
        view.require(MockJSONKey.NAME)


def test_array_from_skips_non_objects() -> None:
    data = json.dumps([{"name": "a"}, 3, "x", None, {"name": "b", "other": True}]).encode()
    views = JSONView.array_from(data, MockJSONKey)
    assert [v.resolve(MockJSONKey.NAME, str) for v in views] == ["a", "b"]


@pytest.mark.parametrize("data", [b"{", b'{"name": "a"}', pytest.param(DEEPLY_NESTED, id="deeply-nested")])
def test_array_from_bad_input_is_empty(data: bytes) -> None:
    assert JSONView.array_from(data, MockJSONKey) == []


def test_resolve_type_mismatch() -> None:
    view = JSONView.from_bytes(_mock_bytes(), MockJSONKey)
    with pytest.raises(InvalidTypeError) as exc_info:
        view.resolve(MockJSONKey.NAME, int)
    assert exc_info.value.actual_value == "Twitch"
    assert view.get(MockJSONKey.BOOL, int) is None


def test_values_in_cache_and_require() -> None:
    view = JSONView.from_bytes(_mock_bytes(), MockJSONKey)
    assert view.values_in_cache(str) == {MockJSONKey.NAME: "Twitch"}
    assert view.values_in_cache(int) == {MockJSONKey.NUMBER: 5}
    assert view.require(MockJSONKey.NAME, MockJSONKey.NUMBER) is view
    with pytest.raises(MissingRequiredKeysError) as exc_info:
        view.require_all([MockJSONKey.NAME, MockJSONKey.INVALID_KEY])
    assert exc_info.value.keys == {MockJSONKey.INVALID_KEY}


def test_set_rejects_foreign_keys() -> None:
    view = JSONView(MockJSONKey)
    with pytest.raises(TypeError):
        view.set(AddressKey.CITY, "x")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        JSONView(MockJSONKey, {"name": "x"})  # type: ignore[dict-item]


def test_keyed_by_must_be_enum() -> None:
    with pytest.raises(TypeError):
        JSONView.from_bytes(b"{}", str)  # type: ignore[type-var]


def test_nested_extraction_matches_independent_parse() -> None:
    user = JSONView.from_mapping({"name": "Leanne Graham", "address": ADDRESS}, UserKey)
    expected = JSONView.from_bytes(json.dumps(ADDRESS).encode(), AddressKey)

    address = user.json(UserKey.ADDRESS, AddressKey)
    assert address is not None
    assert address.resolve(AddressKey.CITY, str) == expected.resolve(AddressKey.CITY, str)

    geo = address.json(AddressKey.GEO, GeoKey)
    expected_geo = expected.json(AddressKey.GEO, GeoKey)
    assert geo is not None and expected_geo is not None
    assert geo.resolve(GeoKey.LAT, str) == expected_geo.resolve(GeoKey.LAT, str) == "-37.3159"


def test_json_on_non_object_is_none() -> None:
    user = JSONView.from_mapping({"name": "x", "tags": ["a"]}, UserKey)
    assert user.json(UserKey.NAME, AddressKey) is None
    assert user.json(UserKey.TAGS, AddressKey) is None
    assert user.json(UserKey.ADDRESS, AddressKey) is None


def test_child_view_does_not_share_storage() -> None:
    user = JSONView.from_mapping({"address": ADDRESS}, UserKey)
    address = user.json(UserKey.ADDRESS, AddressKey)
    assert address is not None

    address.set(AddressKey.CITY, "Elsewhere")
    address.remove(AddressKey.GEO)

    parent_address = user.resolve(UserKey.ADDRESS, dict)
    assert parent_address["city"] == "Gwenborough"
    assert "geo" in parent_address


def test_array_of_objects() -> None:
    user = JSONView.from_mapping(
        {"tags": [{"city": "a"}, 1, {"city": "b", "zipcode": "z"}], "name": "x"},
        UserKey,
    )
    cities = user.array(UserKey.TAGS, AddressKey)
    assert cities is not None
    assert [c.resolve(AddressKey.CITY, str) for c in cities] == ["a", "b"]
    assert user.array(UserKey.NAME, AddressKey) is None
    assert user.array(UserKey.ADDRESS, AddressKey) is None


def test_to_json_uses_member_values() -> None:
    view = JSONView.from_bytes(_mock_bytes(), MockJSONKey)
    view.remove(MockJSONKey.BOOL)
    assert json.loads(view.to_json()) == {"name": "Twitch", "number": 5}


def test_numbers_narrow_to_float() -> None:
    view = JSONView.from_bytes(_mock_bytes(), MockJSONKey)
    assert view.resolve(MockJSONKey.NUMBER, float) == 5.0


def test_nested_values_that_are_not_json_read_as_absent() -> None:
    user = JSONView(UserKey)
    user.set(UserKey.ADDRESS, {"city": "x", "since": date(2020, 1, 1)})
    user.set(UserKey.TAGS, [{"city": "a"}, {(1, 2): "tuple key"}])
    assert user.json(UserKey.ADDRESS, AddressKey) is None
    assert user.array(UserKey.TAGS, AddressKey) is None

    circular: dict = {"city": "loop"}
    circular["self"] = circular
    user.set(UserKey.ADDRESS, circular)
    assert user.json(UserKey.ADDRESS, AddressKey) is None


def test_huge_json_number_is_not_a_float() -> None:
    view = JSONView.from_bytes(b'{"number": 1' + b"0" * 400 + b"}", MockJSONKey)
    assert view.get(MockJSONKey.NUMBER, float) is None
    assert view.get(MockJSONKey.NUMBER, int) == 10**400
    assert view.values_in_cache(float) == {}
