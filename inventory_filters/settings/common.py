"""
Common settings for the inventory_filters app.
"""

import os

from inventory_filters import ROOT_DIRECTORY


def plugin_settings(settings):
    """
    Configure default settings for inventory filters.

    Values already defined by the project are kept.

    Args:
        settings: The Django settings object
    """
    # Add external third-party apps to INSTALLED_APPS
    casbin_adapter_app = "inventory_filters.engine.apps.CasbinAdapterConfig"
    if casbin_adapter_app not in settings.INSTALLED_APPS:
        settings.INSTALLED_APPS.append(casbin_adapter_app)

    # Add Casbin configuration
    if not getattr(settings, "CASBIN_MODEL", None):
        settings.CASBIN_MODEL = os.path.join(ROOT_DIRECTORY, "engine", "config", "model.conf")

    # Search configuration
    if not hasattr(settings, "INVENTORY_FILTERS_RESOURCE_MODELS"):
        settings.INVENTORY_FILTERS_RESOURCE_MODELS = {}
    if not hasattr(settings, "INVENTORY_FILTERS_CASE_SENSITIVE"):
        settings.INVENTORY_FILTERS_CASE_SENSITIVE = True
    if not getattr(settings, "INVENTORY_FILTERS_BATCH_SIZE", None):
        settings.INVENTORY_FILTERS_BATCH_SIZE = 1000
    if not getattr(settings, "INVENTORY_FILTERS_MAX_PAGE_SIZE", None):
        settings.INVENTORY_FILTERS_MAX_PAGE_SIZE = 1000
