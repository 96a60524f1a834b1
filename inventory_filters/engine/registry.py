"""Registry of the intrinsic fields each resource can be filtered by.

The registry is populated exactly once, from the declarative field table, when the
Django application is ready. After that it only serves reads, so lookups need no
locking.

Usage:
    from inventory_filters.engine.registry import field_registry
    descriptor = field_registry.lookup("certificate", "COMMON_NAME")
"""

import logging
from types import MappingProxyType
from typing import Iterable, Optional

from django.core.exceptions import ImproperlyConfigured

from inventory_filters.api.data import FieldDescriptor
from inventory_filters.exceptions import UnknownField

logger = logging.getLogger(__name__)


class FieldRegistry:
    """Immutable, per-resource index of field descriptors."""

    def __init__(self):
        self._fields: Optional[MappingProxyType] = None
        self._ordered: Optional[MappingProxyType] = None

    @property
    def initialized(self) -> bool:
        return self._fields is not None

    def initialize(self, descriptors: Iterable[FieldDescriptor]) -> None:
        """Build the registry from field descriptors.

        Args:
            descriptors: Field descriptors in declaration order.

        Raises:
            ImproperlyConfigured: If the registry was already initialized or a
                (resource, field id) pair is declared twice.
        """
        if self.initialized:
            raise ImproperlyConfigured("The field registry is already initialized.")

        fields = {}
        ordered = {}
        for descriptor in descriptors:
            key = (descriptor.resource, descriptor.id)
            if key in fields:
                raise ImproperlyConfigured(f"Duplicate filter field {descriptor.id} for resource {descriptor.resource}")
            fields[key] = descriptor
            ordered.setdefault(descriptor.resource, []).append(descriptor)

        self._ordered = MappingProxyType({resource: tuple(items) for resource, items in ordered.items()})
        self._fields = MappingProxyType(fields)
        logger.info(f"Field registry initialized with {len(fields)} fields for {len(ordered)} resources")

    def _check_initialized(self):
        if not self.initialized:
            raise ImproperlyConfigured("The field registry is not initialized yet.")

    def lookup(self, resource: str, field_id: str) -> FieldDescriptor:
        """Return the descriptor of a resource's field.

        Raises:
            UnknownField: If the resource has no such field.
        """
        self._check_initialized()
        try:
            return self._fields[(resource, field_id)]
        except KeyError:
            raise UnknownField(resource, field_id) from None

    def list_for_resource(self, resource: str) -> list[FieldDescriptor]:
        """Return the resource's fields in declaration order."""
        self._check_initialized()
        return list(self._ordered.get(resource, ()))

    def resources(self) -> list[str]:
        self._check_initialized()
        return list(self._ordered)


field_registry = FieldRegistry()
