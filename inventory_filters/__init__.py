"""
Search filters for the certificate and key inventory.

Compiles search criteria over intrinsic properties and user-defined attributes
into authorization-restricted Django ORM predicates.
"""

import os

__version__ = "0.4.0"

ROOT_DIRECTORY = os.path.dirname(os.path.abspath(__file__))
