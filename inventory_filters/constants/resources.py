"""
Resource names used to key the field catalog, the attribute store and
authorization policies.
"""

CERTIFICATE = "certificate"
CRYPTOGRAPHIC_KEY = "cryptographicKey"
DISCOVERY = "discovery"
ENTITY = "entity"
LOCATION = "location"
GROUP = "group"
RA_PROFILE = "raProfile"
TOKEN_PROFILE = "tokenProfile"
TOKEN = "token"
USER = "user"

FILTERABLE_RESOURCES = [
    CERTIFICATE,
    CRYPTOGRAPHIC_KEY,
    DISCOVERY,
    ENTITY,
    LOCATION,
]
