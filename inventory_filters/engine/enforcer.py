"""
Casbin enforcer deciding which inventory objects a subject may act on.

Policies are stored in the casbin_adapter Django table and evaluated with the
model in ``engine/config/model.conf``. Objects are named ``<resource>^<uuid>`` and
``<resource>^*`` names every object of a resource.

Usage:
    from inventory_filters.engine.enforcer import AuthzEnforcer
    enforcer = AuthzEnforcer.get_enforcer()
    allowed = enforcer.enforce("user^alice", "act^list", "certificate^*")

Requires the `CASBIN_MODEL` setting.
"""

import logging

from casbin import FastEnforcer
from casbin_adapter.adapter import Adapter
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)


class AuthzEnforcer:
    """Lazily built, process-wide enforcer backed by the database.

    The enforcer is only created on first use so that importing the app never
    queries the database (e.g., while running migrations).
    """

    _enforcer = None

    @classmethod
    def get_enforcer(cls) -> FastEnforcer:
        """Return the shared enforcer, creating it and loading policies on first call.

        Raises:
            ImproperlyConfigured: If the CASBIN_MODEL setting is missing.
        """
        if cls._enforcer is None:
            model = getattr(settings, "CASBIN_MODEL", None)
            if not model:
                raise ImproperlyConfigured("CASBIN_MODEL must point to the Casbin model configuration.")
            enforcer = FastEnforcer(model, Adapter(), enable_log=False)
            enforcer.enable_auto_save(True)
            cls._enforcer = enforcer
            logger.info(f"Casbin enforcer loaded {len(enforcer.get_policy())} policies from the database")
        return cls._enforcer

    @classmethod
    def reset(cls) -> None:
        """Drop the shared enforcer so the next call reloads policies."""
        cls._enforcer = None
