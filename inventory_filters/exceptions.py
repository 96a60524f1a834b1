"""Exceptions raised while compiling search filters.

Validation errors describe a bad request and are surfaced to the caller as-is;
they are never worth retrying. Errors from the database itself are not wrapped
and propagate as raised by Django.
"""


class FilterValidationError(ValueError):
    """Base class for every error caused by an invalid filter criterion."""


class UnknownField(FilterValidationError):
    """The field identifier does not resolve to a filterable field."""

    def __init__(self, resource: str, field_identifier: str, reason: str = ""):
        self.resource = resource
        self.field_identifier = field_identifier
        message = f"Unknown filter field '{field_identifier}' for resource '{resource}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnsupportedOperator(FilterValidationError):
    """The operator cannot be applied to the field's value type."""

    def __init__(self, field_identifier: str, operator, value_type=None):
        self.field_identifier = field_identifier
        self.operator = operator
        self.value_type = value_type
        operator_name = getattr(operator, "value", operator)
        if value_type is None:
            message = f"Unsupported condition '{operator_name}' for field '{field_identifier}'"
        else:
            message = (
                f"Condition '{operator_name}' is not supported for field "
                f"'{field_identifier}' of type {getattr(value_type, 'value', value_type)}"
            )
        super().__init__(message)


class MalformedIdentifier(FilterValidationError):
    """An attribute identifier is not of the form ``name|contentType``."""

    def __init__(self, field_identifier, reason: str = ""):
        self.field_identifier = field_identifier
        message = f"Malformed field identifier '{field_identifier}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ValueCoercionError(FilterValidationError):
    """A raw filter value could not be converted to the field's value type."""

    def __init__(self, field_identifier: str, value, reason: str = ""):
        self.field_identifier = field_identifier
        self.value = value
        message = f"Invalid value {value!r} for field '{field_identifier}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class SecurityFilterError(Exception):
    """The authorization decision is missing or malformed.

    Raised instead of falling back to an unrestricted query.
    """
