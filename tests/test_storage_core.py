from types import SimpleNamespace

import pytest

from app.constants.error_codes import ErrorCode
from app.services.warehouses.storage_core import (
    alphabetic_label,
    generate_sequence,
    is_excluded,
    matching_rules,
    possible_values,
    rule_matches,
    validate_exclusion,
)

EMPTY_VALUES = {"aisle": [], "bay": [], "level": [], "bin": []}


def _values(**overrides):
    return {**EMPTY_VALUES, **overrides}


# ---------------- SEQUENCER ----------------
def test_numeric_sequence():
    assert generate_sequence("numeric", 5) == ["1", "2", "3", "4", "5"]


@pytest.mark.parametrize(
    "count, last",
    [(1, "A"), (26, "Z"), (27, "AA"), (28, "AB"), (52, "AZ"), (53, "BA"), (702, "ZZ"), (703, "AAA")],
)
def test_alphabetic_boundaries(count, last):
    seq = generate_sequence("alphabetic", count)
    assert len(seq) == count
    assert seq[-1] == last


def test_alphabetic_27_ends_with_z_then_aa():
    assert generate_sequence("alphabetic", 27)[-2:] == ["Z", "AA"]


@pytest.mark.parametrize(
    "dimension_type, count",
    [
        (None, 3),
        ("", 3),
        ("numeric", None),
        ("numeric", 0),
        ("alphabetic", -4),
        ("hexagonal", 3),
        ("numeric", "3"),
        ("alphabetic", 2.5),
    ],
)
def test_degenerate_config_gives_empty_sequence(dimension_type, count):
    assert generate_sequence(dimension_type, count) == []


@pytest.mark.parametrize("dimension_type", ["numeric", "alphabetic"])
def test_length_matches_count(dimension_type):
    for count in range(1, 80):
        assert len(generate_sequence(dimension_type, count)) == count


def test_alphabetic_order_is_strict_and_unique():
    seq = generate_sequence("alphabetic", 800)
    assert len(set(seq)) == len(seq)
    # shorter labels first, then lexicographic within a length
    assert seq == sorted(seq, key=lambda label: (len(label), label))


def test_sequence_is_deterministic():
    assert generate_sequence("alphabetic", 40) == generate_sequence("alphabetic", 40)


def test_alphabetic_label():
    assert [alphabetic_label(n) for n in (1, 2, 26, 27)] == ["A", "B", "Z", "AA"]


def test_possible_values_reads_each_dimension():
    warehouse = SimpleNamespace(
        aisle_type="numeric", aisle_count=3,
        bay_type=None, bay_count=None,
        level_type="alphabetic", level_count=0,
        bin_type="alphabetic", bin_count=26,
    )
    values = possible_values(warehouse)
    assert values["aisle"] == ["1", "2", "3"]
    assert values["bay"] == []
    assert values["level"] == []
    assert values["bin"][0] == "A" and values["bin"][-1] == "Z"


# ---------------- VALIDATOR ----------------
def test_all_null_rule_rejected_regardless_of_config():
    rule = {name: None for name in ("aisle_from", "aisle_to", "bay_from", "bay_to")}
    rejection = validate_exclusion(rule, _values(aisle=["1", "2"]))
    assert rejection.error_code is ErrorCode.EXCLUSION_EMPTY

    assert validate_exclusion({}, EMPTY_VALUES).error_code is ErrorCode.EXCLUSION_EMPTY


def test_to_without_from_is_vacuous():
    rejection = validate_exclusion({"aisle_to": "2"}, _values(aisle=["1", "2", "3"]))
    assert rejection.error_code is ErrorCode.EXCLUSION_EMPTY


def test_to_without_from_rejected_next_to_other_dimensions():
    rejection = validate_exclusion(
        {"aisle_from": "1", "bay_to": "99"},
        _values(aisle=["1", "2", "3"], bay=["1", "2"]),
    )
    assert rejection.error_code is ErrorCode.EXCLUSION_TO_WITHOUT_FROM
    assert rejection.dimension == "bay"


def test_unknown_value_rejected():
    rejection = validate_exclusion({"aisle_from": "9"}, _values(aisle=["1", "2", "3"]))
    assert rejection.error_code is ErrorCode.EXCLUSION_UNKNOWN_VALUE
    assert rejection.dimension == "aisle"
    assert "'9'" in rejection.message


def test_unknown_to_rejected():
    rejection = validate_exclusion(
        {"aisle_from": "1", "aisle_to": "4"}, _values(aisle=["1", "2", "3"])
    )
    assert rejection.error_code is ErrorCode.EXCLUSION_UNKNOWN_VALUE


def test_inverted_range_rejected():
    rejection = validate_exclusion(
        {"aisle_from": "3", "aisle_to": "1"}, _values(aisle=["1", "2", "3"])
    )
    assert rejection.error_code is ErrorCode.EXCLUSION_RANGE_INVERTED
    assert rejection.dimension == "aisle"


@pytest.mark.parametrize("start, end", [("1", "3"), ("2", "2"), ("2", None)])
def test_ascending_equal_and_single_ranges_accepted(start, end):
    rule = {"aisle_from": start, "aisle_to": end}
    assert validate_exclusion(rule, _values(aisle=["1", "2", "3"])) is None


def test_alphabetic_order_is_positional_not_lexicographic():
    values = _values(bin=generate_sequence("alphabetic", 30))
    # "Z" < "AA" by position even though "AA" < "Z" as strings
    assert validate_exclusion({"bin_from": "Z", "bin_to": "AA"}, values) is None
    assert validate_exclusion({"bin_from": "AA", "bin_to": "Z"}, values).error_code is ErrorCode.EXCLUSION_RANGE_INVERTED


def test_partial_constraint_accepted():
    assert validate_exclusion({"bin_from": "A"}, _values(bin=["A", "B"])) is None


def test_first_failing_dimension_is_reported():
    rejection = validate_exclusion(
        {"aisle_from": "1", "bay_from": "X", "bin_from": "Q"},
        _values(aisle=["1"], bay=["1"], bin=["A"]),
    )
    assert rejection.dimension == "bay"


def test_validator_reads_objects_as_well_as_mappings():
    rule = SimpleNamespace(
        aisle_from="2", aisle_to=None, bay_from=None, bay_to=None,
        level_from=None, level_to=None, bin_from=None, bin_to=None,
    )
    assert validate_exclusion(rule, _values(aisle=["1", "2"])) is None


# ---------------- MATCHING ----------------
VALUES = _values(aisle=["1", "2", "3"], bin=generate_sequence("alphabetic", 26))


def test_unconstrained_dimension_matches_everything():
    rule = {"aisle_from": "2"}
    assert rule_matches(rule, {"aisle": "2", "bin": "Q"}, VALUES)
    assert rule_matches(rule, {"aisle": "2", "bin": None}, VALUES)
    assert not rule_matches(rule, {"aisle": "3", "bin": "Q"}, VALUES)


def test_rule_is_and_across_dimensions():
    rule = {"aisle_from": "2", "bin_from": "A", "bin_to": "C"}
    assert rule_matches(rule, {"aisle": "2", "bin": "B"}, VALUES)
    assert not rule_matches(rule, {"aisle": "2", "bin": "D"}, VALUES)
    assert not rule_matches(rule, {"aisle": "1", "bin": "B"}, VALUES)


def test_rule_set_is_or_across_rules():
    rules = [
        SimpleNamespace(id=1, aisle_from="1", aisle_to=None, bay_from=None, bay_to=None,
                        level_from=None, level_to=None, bin_from=None, bin_to=None),
        SimpleNamespace(id=2, aisle_from=None, aisle_to=None, bay_from=None, bay_to=None,
                        level_from=None, level_to=None, bin_from="Z", bin_to=None),
    ]
    assert is_excluded(rules, {"aisle": "1", "bin": "A"}, VALUES)
    assert is_excluded(rules, {"aisle": "3", "bin": "Z"}, VALUES)
    assert not is_excluded(rules, {"aisle": "3", "bin": "A"}, VALUES)
    assert [r.id for r in matching_rules(rules, {"aisle": "1", "bin": "Z"}, VALUES)] == [1, 2]


def test_stale_labels_match_nothing():
    shrunk = _values(aisle=["1", "2"])
    assert not rule_matches({"aisle_from": "1", "aisle_to": "3"}, {"aisle": "1"}, shrunk)
    assert not rule_matches({"aisle_from": "1"}, {"aisle": "7"}, shrunk)


def test_sequencer_accepts_enum_members():
    from app.models.enums.dimension_type import DimensionType

    assert generate_sequence(DimensionType.numeric, 2) == ["1", "2"]
    assert generate_sequence(DimensionType.alphabetic, 2) == ["A", "B"]
