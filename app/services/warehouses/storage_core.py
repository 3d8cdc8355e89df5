"""Storage-slot addressing for warehouses.

A warehouse addresses its slots as aisle / bay / level / bin. Each dimension
is independently labelled either numerically ("1", "2", ...) or alphabetically
("A" ... "Z", "AA", "AB", ...). The label sequences produced here define the
canonical order of every dimension; exclusion ranges are compared by position
in these sequences, never by string order.

Everything in this module is pure and never raises.
"""

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from app.constants.error_codes import ErrorCode
from app.models.enums.dimension_type import DimensionType

DIMENSIONS = ("aisle", "bay", "level", "bin")

RANGE_FIELDS = tuple(
    f"{dimension}_{end}" for dimension in DIMENSIONS for end in ("from", "to")
)

PossibleValues = dict[str, list[str]]


# =====================================================
# SEQUENCER
# =====================================================
def alphabetic_label(position: int) -> str:
    """1 -> "A", 26 -> "Z", 27 -> "AA" (bijective base-26)."""
    label = ""
    n = position
    while n > 0:
        n -= 1
        label = chr(ord("A") + n % 26) + label
        n //= 26
    return label


def generate_sequence(dimension_type, count) -> list[str]:
    if not dimension_type or not isinstance(count, int) or count <= 0:
        return []

    try:
        dimension_type = DimensionType(dimension_type)
    except ValueError:
        return []

    if dimension_type is DimensionType.numeric:
        return [str(i) for i in range(1, count + 1)]

    return [alphabetic_label(i) for i in range(1, count + 1)]


# =====================================================
# WAREHOUSE CONFIGURATION
# =====================================================
def possible_values(warehouse) -> PossibleValues:
    """Recomputed on every call; the warehouse row is the only source of truth."""
    return {
        dimension: generate_sequence(
            getattr(warehouse, f"{dimension}_type"),
            getattr(warehouse, f"{dimension}_count"),
        )
        for dimension in DIMENSIONS
    }


# =====================================================
# VALIDATOR
# =====================================================
@dataclass(frozen=True)
class ExclusionRejection:
    error_code: ErrorCode
    message: str
    dimension: Optional[str] = None


def _field(rule, name):
    if isinstance(rule, Mapping):
        return rule.get(name)
    return getattr(rule, name, None)


def validate_exclusion(rule, values: PossibleValues) -> Optional[ExclusionRejection]:
    """Return None when the rule may be stored, otherwise the first reason it may not.

    `rule` is either a mapping or an object exposing the eight range fields.
    """
    # a `to` without its `from` constrains nothing
    if all(_field(rule, f"{dimension}_from") is None for dimension in DIMENSIONS):
        return ExclusionRejection(
            ErrorCode.EXCLUSION_EMPTY,
            "An exclusion must constrain at least one dimension",
        )

    for dimension in DIMENSIONS:
        start = _field(rule, f"{dimension}_from")
        end = _field(rule, f"{dimension}_to")

        if start is None:
            if end is not None:
                return ExclusionRejection(
                    ErrorCode.EXCLUSION_TO_WITHOUT_FROM,
                    f"'{end}' is set as the end of a {dimension} range that has no start",
                    dimension,
                )
            continue

        sequence = values.get(dimension, [])

        if start not in sequence:
            return ExclusionRejection(
                ErrorCode.EXCLUSION_UNKNOWN_VALUE,
                f"Unknown value '{start}' for dimension {dimension}",
                dimension,
            )

        if end is None:
            continue

        if end not in sequence:
            return ExclusionRejection(
                ErrorCode.EXCLUSION_UNKNOWN_VALUE,
                f"Unknown value '{end}' for dimension {dimension}",
                dimension,
            )

        if sequence.index(end) < sequence.index(start):
            return ExclusionRejection(
                ErrorCode.EXCLUSION_RANGE_INVERTED,
                f"'{end}' precedes '{start}' for dimension {dimension}",
                dimension,
            )

    return None


# =====================================================
# MATCHING
# =====================================================
def _dimension_matches(rule, dimension: str, value: Optional[str], sequence: list[str]) -> bool:
    start = _field(rule, f"{dimension}_from")
    if start is None:
        return True

    end = _field(rule, f"{dimension}_to")
    if end is None:
        end = start

    # Rules written against an older configuration may reference labels that
    # no longer exist; such a bound matches nothing.
    if value not in sequence or start not in sequence or end not in sequence:
        return False

    position = sequence.index(value)
    return sequence.index(start) <= position <= sequence.index(end)


def rule_matches(rule, coordinate: Mapping[str, Optional[str]], values: PossibleValues) -> bool:
    return all(
        _dimension_matches(rule, dimension, coordinate.get(dimension), values.get(dimension, []))
        for dimension in DIMENSIONS
    )


def matching_rules(rules: Iterable, coordinate: Mapping[str, Optional[str]], values: PossibleValues) -> list:
    return [rule for rule in rules if rule_matches(rule, coordinate, values)]


def is_excluded(rules: Iterable, coordinate: Mapping[str, Optional[str]], values: PossibleValues) -> bool:
    return any(rule_matches(rule, coordinate, values) for rule in rules)
