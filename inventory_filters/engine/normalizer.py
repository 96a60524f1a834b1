"""Validation and value coercion of raw filter criteria.

A criterion is normalized in three steps: its field identifier is resolved to a
descriptor (intrinsic fields through the registry, attributes through the
resolver), its operator is checked against the field's value type, and its raw
value is coerced into typed values the compiler can hand to the ORM.
"""

import json
import logging
import math
from datetime import date, datetime, time
from typing import Union

from attrs import define
from django.conf import settings
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime, parse_time

from inventory_filters.api.data import (
    NO_MATCH,
    AttributeDescriptor,
    FieldDescriptor,
    FieldSource,
    FilterCriterion,
    Operator,
    ValueType,
)
from inventory_filters.engine import resolver
from inventory_filters.engine.operators import OperatorRule, get_rule
from inventory_filters.engine.registry import FieldRegistry, field_registry
from inventory_filters.exceptions import UnsupportedOperator, ValueCoercionError

logger = logging.getLogger(__name__)

__all__ = ["NormalizedCriterion", "normalize", "coerce_value"]


@define(frozen=True)
class NormalizedCriterion:
    """A criterion ready to be compiled.

    Attributes:
        source: Where the field is stored.
        descriptor: The resolved field or attribute descriptor.
        rule: The comparison rule of the operator for the field's value type.
        values: Coerced values; empty for EMPTY/NOT_EMPTY. May contain NO_MATCH.
    """

    source: FieldSource
    descriptor: Union[FieldDescriptor, AttributeDescriptor]
    rule: OperatorRule
    values: tuple = ()

    @property
    def operator(self) -> Operator:
        return self.rule.operator

    @property
    def is_attribute(self) -> bool:
        return self.source is not FieldSource.PROPERTY


def _coerce_string(value):
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ValueError("expected a string")


def _coerce_number(value):
    if isinstance(value, bool):
        raise ValueError("expected a number")
    if isinstance(value, str):
        text = value.strip()
        try:
            value = int(text)
        except ValueError:
            value = float(text)
    if not isinstance(value, (int, float)):
        raise ValueError("expected a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError("expected a finite number")
    return value


def _coerce_boolean(value):
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ValueError("expected true or false")


def _coerce_date(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        parsed = parse_date(value.strip())
        if parsed is None:
            parsed_datetime = parse_datetime(value.strip())
            parsed = parsed_datetime.date() if parsed_datetime else None
        if parsed is not None:
            return parsed
    raise ValueError("expected a date (YYYY-MM-DD)")


def _make_aware(value: datetime) -> datetime:
    if settings.USE_TZ and timezone.is_naive(value):
        return timezone.make_aware(value)
    return value


def _coerce_datetime(value):
    if isinstance(value, datetime):
        return _make_aware(value)
    if isinstance(value, date):
        return _make_aware(datetime.combine(value, time.min))
    if isinstance(value, str):
        parsed = parse_datetime(value.strip())
        if parsed is None:
            parsed_date = parse_date(value.strip())
            parsed = datetime.combine(parsed_date, time.min) if parsed_date else None
        if parsed is not None:
            return _make_aware(parsed)
    raise ValueError("expected a date-time (ISO 8601)")


def _coerce_time(value):
    if isinstance(value, time):
        return value
    if isinstance(value, str):
        parsed = parse_time(value.strip())
        if parsed is not None:
            return parsed
    raise ValueError("expected a time (HH:MM[:SS])")


_COERCERS = {
    ValueType.STRING: _coerce_string,
    ValueType.NUMBER: _coerce_number,
    ValueType.BOOLEAN: _coerce_boolean,
    ValueType.DATE: _coerce_date,
    ValueType.DATETIME: _coerce_datetime,
    ValueType.TIME: _coerce_time,
}


def _coerce_enum(descriptor: FieldDescriptor, value):
    if not isinstance(value, str):
        raise ValueError("expected an enum code")
    if value in descriptor.enum_codes:
        return value
    logger.warning(f"Unknown code {value!r} for {descriptor.resource} field {descriptor.id}, it matches no objects")
    return NO_MATCH


def coerce_value(descriptor, value, field_identifier: str = ""):
    """Coerce a single raw value to the descriptor's value type.

    Raises:
        ValueCoercionError: If the value cannot be represented in that type.
    """
    value_type = ValueType.BOOLEAN if descriptor.has_existence_override else descriptor.value_type
    try:
        if value_type is ValueType.ENUM:
            return _coerce_enum(descriptor, value)
        return _COERCERS[value_type](value)
    except ValueError as exc:
        raise ValueCoercionError(field_identifier, value, str(exc)) from None


def _raw_values(field_identifier: str, operator: Operator, value) -> list:
    """Turn a raw value (scalar, list or JSON list literal) into a list of scalars."""
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("[") and text.endswith("]"):
            # Not a JSON list: keep it as a plain string value such as "[draft]".
            try:
                value = json.loads(text)
            except json.JSONDecodeError:
                return [value]

    if not isinstance(value, (list, tuple)):
        return [value]
    if not value:
        raise ValueCoercionError(field_identifier, value, "at least one value is required")
    if len(value) > 1 and not operator.accepts_multiple_values:
        raise ValueCoercionError(
            field_identifier, value, f"condition {operator.value} accepts a single value"
        )
    for item in value:
        if item is None or isinstance(item, (list, tuple, dict)):
            raise ValueCoercionError(field_identifier, value, "list items must be scalar values")
    return list(value)


def _resolve_descriptor(resource: str, criterion: FilterCriterion, registry: FieldRegistry):
    if criterion.source is FieldSource.PROPERTY:
        return registry.lookup(resource, criterion.field_identifier)
    return resolver.resolve(resource, criterion.source.attribute_kind, criterion.field_identifier)


def normalize(resource: str, criterion, registry: FieldRegistry = None) -> NormalizedCriterion:
    """Validate a criterion and coerce its value.

    Args:
        resource: Resource the search is rooted at.
        criterion: A FilterCriterion or its camelCase wire dictionary.
        registry: Field registry to resolve intrinsic fields with. Defaults to the
            application registry.

    Returns:
        NormalizedCriterion: The validated criterion.

    Raises:
        UnknownField: The field does not exist or cannot be filtered.
        MalformedIdentifier: An attribute identifier cannot be parsed.
        UnsupportedOperator: The operator does not apply to the field.
        ValueCoercionError: The value does not fit the field's type.
    """
    if isinstance(criterion, dict):
        criterion = FilterCriterion.from_dict(criterion)

    registry = registry or field_registry
    identifier = criterion.field_identifier
    descriptor = _resolve_descriptor(resource, criterion, registry)

    if descriptor.has_existence_override and not criterion.operator.accepts_multiple_values:
        raise UnsupportedOperator(identifier, criterion.operator, descriptor.value_type)
    rule = get_rule(descriptor.value_type, criterion.operator, identifier)

    if rule.presence_only:
        values = ()
    elif criterion.value is None:
        raise ValueCoercionError(identifier, None, f"condition {criterion.operator.value} requires a value")
    else:
        values = tuple(
            coerce_value(descriptor, item, identifier)
            for item in _raw_values(identifier, criterion.operator, criterion.value)
        )

    logger.debug(f"Normalized {criterion.source.value} criterion {identifier} {rule.operator.value} {values!r}")
    return NormalizedCriterion(source=criterion.source, descriptor=descriptor, rule=rule, values=values)
