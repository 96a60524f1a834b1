"""Initialization for the casbin_adapter Django application.

This overrides the default AppConfig, which builds an enforcer and queries the
policy table as soon as the app is ready. That fails whenever the database is
not migrated yet (e.g., while running the first migrations).

See inventory_filters/engine/enforcer.py for the lazily built enforcer.
"""

from django.apps import AppConfig


class CasbinAdapterConfig(AppConfig):
    name = "casbin_adapter"

    def ready(self):
        """Initialize the casbin_adapter app without touching the database."""
