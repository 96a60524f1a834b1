"""
inventory_filters Django application initialization.
"""

from django.apps import AppConfig
from django.conf import settings
from django.db.backends.signals import connection_created


def enable_case_sensitive_like(sender, connection, **kwargs):
    """Make LIKE comparisons case-sensitive on SQLite connections.

    SQLite's LIKE ignores case by default, which would make CONTAINS, STARTS_WITH
    and ENDS_WITH behave differently than on other databases.
    """
    if connection.vendor == "sqlite" and getattr(settings, "INVENTORY_FILTERS_CASE_SENSITIVE", True):
        with connection.cursor() as cursor:
            cursor.execute("PRAGMA case_sensitive_like = ON;")


class InventoryFiltersConfig(AppConfig):
    """
    Configuration for the inventory_filters Django application.
    """

    name = "inventory_filters"
    verbose_name = "Inventory Filters"
    default_auto_field = "django.db.models.BigAutoField"

    def ready(self):
        """Initialization layer for the inventory_filters app."""
        from inventory_filters.constants.fields import FIELD_TABLE
        from inventory_filters.engine.registry import field_registry

        # ready() may run more than once (e.g., in some test runners).
        if not field_registry.initialized:
            field_registry.initialize(FIELD_TABLE)

        connection_created.connect(enable_case_sensitive_like, dispatch_uid="inventory_filters_case_sensitive_like")
