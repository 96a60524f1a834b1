"""Public API for searching and bulk-modifying inventory objects by filter criteria.

Every operation compiles the request's criteria into a single predicate, narrows
it with the caller's security filter and lets the database do the rest. Callers
resolve the security filter first, e.g. with
``inventory_filters.api.permissions.get_security_filter``.
"""

import logging
from typing import Iterable, Optional

from django.conf import settings
from django.core.paginator import EmptyPage, Paginator
from django.db import DatabaseError, transaction

from inventory_filters.api.data import (
    FieldSource,
    Operator,
    SearchFieldData,
    SearchFieldGroupData,
    SearchResultData,
    SecurityFilter,
    ValueType,
)
from inventory_filters.engine import overlay, resolver
from inventory_filters.engine.compiler import CompiledPredicate, compile_filters
from inventory_filters.engine.operators import supported_operators
from inventory_filters.engine.registry import field_registry
from inventory_filters.exceptions import ValueCoercionError

logger = logging.getLogger(__name__)

__all__ = [
    "build_predicate",
    "search_objects",
    "get_searchable_fields",
    "bulk_update_objects",
    "bulk_delete_objects",
]


def build_predicate(resource: str, filters: Iterable) -> CompiledPredicate:
    """Compile filter criteria for a resource without any security restriction.

    Args:
        resource: Resource name (e.g., 'certificate').
        filters: FilterCriterion objects or camelCase wire dictionaries.

    Returns:
        CompiledPredicate: The combined predicate.
    """
    return compile_filters(resource, filters)


def _secured_predicate(resource: str, filters: Iterable, security_filter: SecurityFilter) -> CompiledPredicate:
    return overlay.apply(build_predicate(resource, filters or []), security_filter)


def search_objects(
    resource: str,
    filters: Iterable,
    security_filter: SecurityFilter,
    page_number: int = 1,
    items_per_page: int = 10,
    fields: Optional[list[str]] = None,
    order_by: Optional[list[str]] = None,
) -> SearchResultData:
    """Return one page of the objects matching the filters that the caller may see.

    Issues one count statement and one page statement.

    Args:
        resource: Resource name (e.g., 'certificate').
        filters: Criteria, implicitly ANDed.
        security_filter: The caller's authorization decision.
        page_number: 1-based page number. Pages past the end are empty.
        items_per_page: Page size, capped by INVENTORY_FILTERS_MAX_PAGE_SIZE.
        fields: When given, items are dictionaries of these fields instead of model instances.
        order_by: Ordering of the results. Defaults to primary key order.

    Returns:
        SearchResultData: The page of items and the total count.
    """
    if not isinstance(page_number, int) or isinstance(page_number, bool) or page_number < 1:
        raise ValueCoercionError("pageNumber", page_number, "must be a positive integer")
    if not isinstance(items_per_page, int) or isinstance(items_per_page, bool) or items_per_page < 1:
        raise ValueCoercionError("itemsPerPage", items_per_page, "must be a positive integer")
    items_per_page = min(items_per_page, settings.INVENTORY_FILTERS_MAX_PAGE_SIZE)

    predicate = _secured_predicate(resource, filters, security_filter)
    queryset = predicate.queryset().order_by(*(order_by or ["pk"]))
    if fields:
        queryset = queryset.values(*fields)

    paginator = Paginator(queryset, items_per_page)
    try:
        items = list(paginator.page(page_number).object_list)
    except EmptyPage:
        items = []

    logger.debug(f"Search on {resource} page {page_number} returned {len(items)} of {paginator.count} objects")
    return SearchResultData(
        items=items,
        total_items=paginator.count,
        page_number=page_number,
        items_per_page=items_per_page,
        total_pages=paginator.num_pages if paginator.count else 0,
    )


def _property_field(descriptor) -> SearchFieldData:
    if descriptor.has_existence_override:
        return SearchFieldData(
            identifier=descriptor.id,
            label=descriptor.label,
            type=ValueType.BOOLEAN,
            conditions=[Operator.EQUALS, Operator.NOT_EQUALS],
            settable=descriptor.settable,
        )
    return SearchFieldData(
        identifier=descriptor.id,
        label=descriptor.label,
        type=descriptor.value_type,
        conditions=supported_operators(descriptor.value_type),
        values=descriptor.enum_codes or None,
        multiple_values=descriptor.value_type is ValueType.ENUM or descriptor.multivalued_relation,
        settable=descriptor.settable,
    )


def _attribute_fields(resource: str, source: FieldSource) -> list[SearchFieldData]:
    descriptors = sorted(
        resolver.discover_filterable(resource, source.attribute_kind),
        key=lambda descriptor: (descriptor.name, descriptor.content_type.value),
    )
    return [
        SearchFieldData(
            identifier=descriptor.identifier,
            label=descriptor.name,
            type=descriptor.value_type,
            conditions=supported_operators(descriptor.value_type),
        )
        for descriptor in descriptors
    ]


def get_searchable_fields(resource: str) -> list[SearchFieldGroupData]:
    """List the fields a resource can be searched by, grouped by source.

    Intrinsic properties come from the field registry. Metadata and custom
    attributes are discovered from the attribute store, one entry per observed
    (name, content type) pair.

    Args:
        resource: Resource name (e.g., 'certificate').

    Returns:
        list of SearchFieldGroupData: Property, metadata and custom attribute groups.
    """
    return [
        SearchFieldGroupData(
            source=FieldSource.PROPERTY,
            fields=[_property_field(descriptor) for descriptor in field_registry.list_for_resource(resource)],
        ),
        SearchFieldGroupData(source=FieldSource.METADATA, fields=_attribute_fields(resource, FieldSource.METADATA)),
        SearchFieldGroupData(source=FieldSource.CUSTOM, fields=_attribute_fields(resource, FieldSource.CUSTOM)),
    ]


def _primary_key_batches(queryset, batch_size: int):
    """Yield primary keys of the queryset in ascending chunks.

    Each chunk is read after the previous one was processed, starting after its
    last key, so objects modified by a chunk never shift later chunks.
    """
    last_pk = None
    while True:
        batch = queryset.order_by("pk")
        if last_pk is not None:
            batch = batch.filter(pk__gt=last_pk)
        pks = list(batch.values_list("pk", flat=True)[:batch_size])
        if not pks:
            return
        yield pks
        last_pk = pks[-1]


def _batch_size(batch_size: Optional[int]) -> int:
    if batch_size is None:
        batch_size = settings.INVENTORY_FILTERS_BATCH_SIZE
    if batch_size < 1:
        raise ValueCoercionError("batchSize", batch_size, "must be a positive integer")
    return batch_size


def bulk_update_objects(
    resource: str,
    filters: Iterable,
    security_filter: SecurityFilter,
    values: dict,
    batch_size: Optional[int] = None,
) -> int:
    """Set column values on every matching object the caller may see.

    Objects are updated in primary key chunks, each in its own transaction, so a
    failure leaves earlier chunks committed and the call can simply be retried.

    Args:
        resource: Resource name (e.g., 'certificate').
        filters: Criteria selecting the objects.
        security_filter: The caller's authorization decision.
        values: Model field names and the values to set.
        batch_size: Chunk size. Defaults to INVENTORY_FILTERS_BATCH_SIZE.

    Returns:
        int: The number of updated objects.
    """
    if not values:
        raise ValueCoercionError("values", values, "at least one field to update is required")

    predicate = _secured_predicate(resource, filters, security_filter)
    manager = predicate.model._default_manager
    updated = 0
    for pks in _primary_key_batches(predicate.queryset(), _batch_size(batch_size)):
        try:
            with transaction.atomic():
                updated += manager.filter(pk__in=pks).update(**values)
        except DatabaseError as e:
            logger.error(f"Bulk update of {resource} failed after {updated} objects: {e}")
            raise
        logger.info(f"Bulk update of {resource}: {updated} objects updated")
    return updated


def bulk_delete_objects(
    resource: str,
    filters: Iterable,
    security_filter: SecurityFilter,
    batch_size: Optional[int] = None,
) -> int:
    """Delete every matching object the caller may see, in primary key chunks.

    Args:
        resource: Resource name (e.g., 'certificate').
        filters: Criteria selecting the objects.
        security_filter: The caller's authorization decision.
        batch_size: Chunk size. Defaults to INVENTORY_FILTERS_BATCH_SIZE.

    Returns:
        int: The number of deleted objects, not counting cascaded rows.
    """
    predicate = _secured_predicate(resource, filters, security_filter)
    model = predicate.model
    deleted = 0
    for pks in _primary_key_batches(predicate.queryset(), _batch_size(batch_size)):
        try:
            with transaction.atomic():
                _, per_model = model._default_manager.filter(pk__in=pks).delete()
        except DatabaseError as e:
            logger.error(f"Bulk delete of {resource} failed after {deleted} objects: {e}")
            raise
        deleted += per_model.get(model._meta.label, 0)
        logger.info(f"Bulk delete of {resource}: {deleted} objects deleted")
    return deleted
