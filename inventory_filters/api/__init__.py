"""Public API for inventory search filters.

Callers build a security filter for the requesting subject with
``api.permissions.get_security_filter`` and hand it, together with the search
criteria, to the functions in ``api.search``.
"""
