"""Restriction of a compiled predicate to the objects a caller is authorized to see."""

import logging

from django.core.exceptions import FieldDoesNotExist, ValidationError
from django.db.models import Q

from inventory_filters.api.data import SecurityFilter
from inventory_filters.engine.compiler import CompiledPredicate
from inventory_filters.engine.mapping import get_model_field
from inventory_filters.exceptions import SecurityFilterError

logger = logging.getLogger(__name__)

__all__ = ["security_condition", "apply"]


def _checked_ids(model, field: str, object_ids) -> list:
    """Convert object ids to values of the id field, sorted.

    Without a model the ids are only sorted.
    """
    if model is None:
        return sorted(object_ids)
    try:
        target = get_model_field(model, field)
    except FieldDoesNotExist as exc:
        raise SecurityFilterError(f"{model._meta.label} has no object id field '{field}'") from exc

    checked = []
    for object_id in sorted(object_ids):
        try:
            checked.append(target.to_python(object_id))
        except ValidationError as exc:
            raise SecurityFilterError(
                f"Object id {object_id!r} is not a valid '{field}' of {model._meta.label}"
            ) from exc
    return checked


def security_condition(security_filter: SecurityFilter, id_field: str, model=None) -> Q:
    """Build the visibility condition of an authorization decision.

    Args:
        security_filter: The caller's authorization decision.
        id_field: Field holding the object id on the model being filtered.
        model: Model being filtered. When given, every object id must be a valid
            value of the id field.

    Returns:
        Q: ``id in allowed`` when restricted (matching nothing for an empty
        allow-list), ``id not in denied`` when something is denied, otherwise an
        empty condition.

    Raises:
        SecurityFilterError: If the decision is missing or not a SecurityFilter, or an
            object id does not fit the id field.
    """
    if not isinstance(security_filter, SecurityFilter):
        raise SecurityFilterError(f"A SecurityFilter is required, got {type(security_filter).__name__}")

    field = f"{security_filter.parent_link}__{id_field}" if security_filter.parent_link else id_field
    if security_filter.restricted:
        return Q(**{f"{field}__in": _checked_ids(model, field, security_filter.allowed_ids)})
    if security_filter.denied_ids:
        return ~Q(**{f"{field}__in": _checked_ids(model, field, security_filter.denied_ids)})
    return Q()


def apply(predicate: CompiledPredicate, security_filter: SecurityFilter) -> CompiledPredicate:
    """AND the caller's visibility condition into a compiled predicate.

    The result never matches more objects than ``predicate``.
    """
    condition = security_condition(security_filter, predicate.mapping.id_field, predicate.model)
    logger.debug(f"Applying security filter to {predicate.resource} search: {security_filter}")
    return predicate.and_condition(condition)
