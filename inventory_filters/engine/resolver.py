"""Resolution of user-defined attribute identifiers against the attribute store.

Attribute identifiers have the form ``name|CONTENT_TYPE``. Attribute names may
themselves contain ``|``, so the content type is everything after the last one.
"""

import logging

from inventory_filters.api.data import (
    ATTRIBUTE_CONTENT_TYPES,
    ATTRIBUTE_IDENTIFIER_SEPARATOR,
    AttributeDescriptor,
)
from inventory_filters.constants.enums import AttributeContentType, AttributeKind
from inventory_filters.exceptions import MalformedIdentifier, UnknownField
from inventory_filters.models import AttributeContent

logger = logging.getLogger(__name__)

__all__ = ["parse_identifier", "resolve", "discover_filterable"]


def parse_identifier(identifier: str) -> tuple[str, AttributeContentType]:
    """Split an attribute identifier into its name and content type.

    Args:
        identifier: Identifier such as 'color|STRING'.

    Returns:
        tuple: The attribute name and its content type.

    Raises:
        MalformedIdentifier: If either part is empty or the content type is unknown.
    """
    if not isinstance(identifier, str):
        raise MalformedIdentifier(identifier, "identifier must be a string")

    name, separator, content_type = identifier.rpartition(ATTRIBUTE_IDENTIFIER_SEPARATOR)
    if not separator:
        raise MalformedIdentifier(identifier, "expected 'name|contentType'")
    if not name:
        raise MalformedIdentifier(identifier, "attribute name is empty")
    if not content_type:
        raise MalformedIdentifier(identifier, "content type is empty")

    try:
        return name, AttributeContentType(content_type.upper())
    except ValueError:
        raise MalformedIdentifier(identifier, f"unknown content type '{content_type}'") from None


def resolve(resource: str, kind: AttributeKind, identifier: str) -> AttributeDescriptor:
    """Resolve an attribute identifier into a filterable descriptor.

    The store is not queried: an attribute nobody has set yet still compiles, it
    simply matches no rows.

    Args:
        resource: Resource whose objects carry the attribute.
        kind: Attribute kind (METADATA or CUSTOM).
        identifier: Identifier such as 'color|STRING'.

    Returns:
        AttributeDescriptor: The resolved descriptor.

    Raises:
        MalformedIdentifier: If the identifier cannot be parsed.
        UnknownField: If the content type cannot be filtered (e.g., SECRET).
    """
    name, content_type = parse_identifier(identifier)
    if content_type not in ATTRIBUTE_CONTENT_TYPES:
        raise UnknownField(resource, identifier, f"attributes of type {content_type.value} are not filterable")
    return AttributeDescriptor(resource=resource, kind=AttributeKind(kind), name=name, content_type=content_type)


def discover_filterable(resource: str, kind: AttributeKind) -> set[AttributeDescriptor]:
    """Find the filterable attributes observed for a resource.

    Each distinct (name, content type) pair yields its own descriptor; the same name
    stored with two content types is offered twice.

    Args:
        resource: Resource whose attributes to list.
        kind: Attribute kind (METADATA or CUSTOM).

    Returns:
        set of AttributeDescriptor: One descriptor per observed pair.
    """
    pairs = (
        AttributeContent.objects.filter(
            resource=resource,
            kind=kind,
            content_type__in=[content_type.value for content_type in ATTRIBUTE_CONTENT_TYPES],
        )
        .values_list("name", "content_type")
        .distinct()
    )
    descriptors = {
        AttributeDescriptor(
            resource=resource,
            kind=AttributeKind(kind),
            name=name,
            content_type=AttributeContentType(content_type),
        )
        for name, content_type in pairs
    }
    logger.debug(f"Discovered {len(descriptors)} filterable {kind} attributes for {resource}")
    return descriptors
