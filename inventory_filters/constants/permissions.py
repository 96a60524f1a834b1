"""
Action names checked when building a security filter for a resource listing.
"""

LIST = "list"
DETAIL = "detail"
UPDATE = "update"
DELETE = "delete"
