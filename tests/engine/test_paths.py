import pytest

from formcore.engine.paths import (
    MISSING,
    PathSegment,
    PathSyntaxError,
    parse_path,
    resolve_path,
    set_path,
)


def _record() -> dict:
    return {
        "taxpayer": {"firstName": "John", "ssn": "123456789", "middleInitial": None},
        "dependents": [
            {"firstName": "Emily", "monthsLived": 12},
            {"firstName": "Michael", "monthsLived": 12},
        ],
        "income": {"w2Forms": [{"wages": 80000}, {"wages": 45000}]},
    }


def test_parse_path_segments():
    assert parse_path("$.dependents[1].firstName") == (
        PathSegment(name="dependents", index=1),
        PathSegment(name="firstName"),
    )
    assert parse_path("$.income.w2Forms[*]")[-1] == PathSegment(name="w2Forms", wildcard=True)
    assert parse_path("$") == ()


def test_parse_path_requires_root_marker():
    with pytest.raises(PathSyntaxError):
        parse_path("taxpayer.ssn")
    with pytest.raises(ValueError):
        resolve_path("taxpayer.ssn", _record())


def test_parse_path_rejects_segments_after_wildcard():
    with pytest.raises(PathSyntaxError):
        parse_path("$.dependents[*].firstName")


def test_resolve_nested_property_and_index():
    record = _record()
    assert resolve_path("$.taxpayer.firstName", record) == "John"
    assert resolve_path("$.dependents[1].firstName", record) == "Michael"
    assert resolve_path("$.income.w2Forms[0].wages", record) == 80000


def test_resolve_root_returns_record():
    record = _record()
    assert resolve_path("$", record) is record


def test_resolve_wildcard_returns_whole_list():
    record = _record()
    assert resolve_path("$.dependents[*]", record) is record["dependents"]


def test_resolve_missing_values_never_raise():
    record = _record()
    assert resolve_path("$.spouse.ssn", record) is MISSING
    assert resolve_path("$.taxpayer.ssn.digits", record) is MISSING
    assert resolve_path("$.dependents[5].firstName", record) is MISSING
    assert resolve_path("$.taxpayer[0]", record) is MISSING
    assert resolve_path("$.taxpayer.middleInitial.value", record) is MISSING


def test_resolve_null_is_distinct_from_missing():
    record = _record()
    assert resolve_path("$.taxpayer.middleInitial", record) is None
    assert not MISSING
    assert repr(MISSING) == "MISSING"


def test_plain_digit_segment_indexes_lists():
    assert resolve_path("$.dependents.0.firstName", _record()) == "Emily"


def test_set_then_resolve_round_trip():
    for path in ("$.taxpayer.ssn", "$.spouse.ssn", "$.a.b[2].c", "$.items[3]", "$.x.y.z"):
        record = _record()
        set_path(path, record, "value")
        assert resolve_path(path, record) == "value"


def test_set_creates_intermediates_and_mutates_in_place():
    record = {}
    returned = set_path("$.dependents[1].name", record, "Michael")
    assert returned is record
    assert record == {"dependents": [None, {"name": "Michael"}]}


def test_set_rejects_wildcards_and_root():
    with pytest.raises(PathSyntaxError):
        set_path("$.dependents[*]", {}, 1)
    with pytest.raises(PathSyntaxError):
        set_path("$", {}, 1)


def test_set_through_scalar_raises_type_error():
    with pytest.raises(TypeError):
        set_path("$.taxpayer.ssn.digits", _record(), "1")


def test_digit_segments_round_trip_through_lists():
    record = {"a": [1, 2]}
    set_path("$.a.0", record, 9)
    assert record == {"a": [9, 2]}
    assert resolve_path("$.a.0", record) == 9

    record = {"a": [{"b": 1}]}
    set_path("$.a.0.b", record, 5)
    assert resolve_path("$.a.0.b", record) == 5

    record = {"a": []}
    set_path("$.a.1.b", record, "x")
    assert record == {"a": [None, {"b": "x"}]}
    assert resolve_path("$.a.1.b", record) == "x"

    for path in ("$.a.0", "$.a.0.b"):
        record = {}
        set_path(path, record, "value")
        assert resolve_path(path, record) == "value"
