"""Dispatch table of the comparisons each value type supports.

Every supported (value type, operator) pair maps to an ``OperatorRule``. Negative
operators (NOT_EQUALS, NOT_CONTAINS, EMPTY) are expressed through the positive
operator they negate, so the compiler decides how "not matching" treats objects
without a value: a plain column also matches when NULL, a to-many relation or an
attribute matches when no related row matches.
"""

from typing import Callable

from attrs import define
from django.db.models import Q

from inventory_filters.api.data import Operator, ValueType
from inventory_filters.exceptions import UnsupportedOperator

__all__ = ["OperatorRule", "OPERATOR_TABLE", "get_rule", "supported_operators"]


def _lookup(lookup: str) -> Callable:
    """Build a comparison against a fixed Django lookup (e.g., 'gte')."""

    def build(path: str, value, case_sensitive: bool = True) -> Q:
        return Q(**{f"{path}__{lookup}": value})

    return build


def _text_lookup(lookup: str) -> Callable:
    """Build a string comparison using the case-insensitive lookup variant when requested."""

    def build(path: str, value, case_sensitive: bool = True) -> Q:
        name = lookup if case_sensitive else f"i{lookup}"
        return Q(**{f"{path}__{name}": value})

    return build


def _present(path: str, value=None, case_sensitive: bool = True) -> Q:
    return Q(**{f"{path}__isnull": False})


@define(frozen=True)
class OperatorRule:
    """How one operator compares values of one type.

    Attributes:
        operator: The requested operator.
        positive: The operator evaluated by ``build``; equals ``operator`` unless negated.
        negated: True when the match of ``positive`` must be negated.
        build: Callable ``(path, value, case_sensitive) -> Q`` for a single value.
    """

    operator: Operator
    positive: Operator
    negated: bool
    build: Callable

    @property
    def presence_only(self) -> bool:
        """True for EMPTY and NOT_EMPTY, which ignore the value."""
        return self.positive is Operator.NOT_EMPTY


NEGATIONS = {
    Operator.NOT_EQUALS: Operator.EQUALS,
    Operator.NOT_CONTAINS: Operator.CONTAINS,
    Operator.EMPTY: Operator.NOT_EMPTY,
}

_STRING_BUILDERS = {
    Operator.EQUALS: _text_lookup("exact"),
    Operator.CONTAINS: _text_lookup("contains"),
    Operator.STARTS_WITH: _text_lookup("startswith"),
    Operator.ENDS_WITH: _text_lookup("endswith"),
    Operator.NOT_EMPTY: _present,
}

_ORDERED_BUILDERS = {
    Operator.EQUALS: _lookup("exact"),
    Operator.GREATER: _lookup("gt"),
    Operator.GREATER_OR_EQUAL: _lookup("gte"),
    Operator.LESSER: _lookup("lt"),
    Operator.LESSER_OR_EQUAL: _lookup("lte"),
    Operator.NOT_EMPTY: _present,
}

_EQUALITY_BUILDERS = {
    Operator.EQUALS: _lookup("exact"),
    Operator.NOT_EMPTY: _present,
}

_BUILDERS_BY_TYPE = {
    ValueType.STRING: _STRING_BUILDERS,
    ValueType.NUMBER: _ORDERED_BUILDERS,
    ValueType.DATE: _ORDERED_BUILDERS,
    ValueType.DATETIME: _ORDERED_BUILDERS,
    ValueType.TIME: _ORDERED_BUILDERS,
    ValueType.BOOLEAN: _EQUALITY_BUILDERS,
    ValueType.ENUM: _EQUALITY_BUILDERS,
}


def _build_table() -> dict:
    table = {}
    for value_type, builders in _BUILDERS_BY_TYPE.items():
        for operator in Operator:
            positive = NEGATIONS.get(operator, operator)
            if positive in builders:
                table[(value_type, operator)] = OperatorRule(
                    operator=operator,
                    positive=positive,
                    negated=operator in NEGATIONS,
                    build=builders[positive],
                )
    return table


OPERATOR_TABLE = _build_table()


def get_rule(value_type: ValueType, operator: Operator, field_identifier: str = "") -> OperatorRule:
    """Return the rule applying an operator to a value type.

    Raises:
        UnsupportedOperator: If the value type does not support the operator.
    """
    try:
        return OPERATOR_TABLE[(value_type, operator)]
    except KeyError:
        raise UnsupportedOperator(field_identifier, operator, value_type) from None


def supported_operators(value_type: ValueType) -> list[Operator]:
    """List the operators a value type supports, in declaration order."""
    return [operator for operator in Operator if (value_type, operator) in OPERATOR_TABLE]
