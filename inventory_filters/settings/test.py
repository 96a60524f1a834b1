"""
Test settings for the inventory_filters app.
"""

from inventory_filters.settings import common


def plugin_settings(settings):
    """
    Configure settings for running the test suite against the stub inventory models.

    Args:
        settings: The Django settings object
    """
    common.plugin_settings(settings)

    stubs_app = "inventory_filters.tests.stubs"
    if stubs_app not in settings.INSTALLED_APPS:
        settings.INSTALLED_APPS.append(stubs_app)

    settings.INVENTORY_FILTERS_RESOURCE_MODELS = {
        "certificate": {"model": "stubs.Certificate", "id_field": "uuid"},
        "cryptographicKey": {
            "model": "stubs.CryptographicKeyItem",
            "id_field": "uuid",
            "attribute_owner_field": "key_id",
        },
        "discovery": {"model": "stubs.Discovery", "id_field": "uuid"},
        "entity": {"model": "stubs.EntityInstance", "id_field": "uuid"},
        "location": {"model": "stubs.Location", "id_field": "uuid"},
    }
