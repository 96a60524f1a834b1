"""Data classes and enums for representing filter criteria, field catalogs and authorization decisions."""

import re
from enum import Enum
from typing import Any, ClassVar, Optional
from uuid import UUID

from attrs import define, field

from inventory_filters.constants.enums import AttributeContentType, AttributeKind
from inventory_filters.exceptions import MalformedIdentifier, SecurityFilterError, UnsupportedOperator

__all__ = [
    "FieldSource",
    "Operator",
    "ValueType",
    "NO_MATCH",
    "FieldDescriptor",
    "AttributeDescriptor",
    "FilterCriterion",
    "SecurityFilter",
    "SearchFieldData",
    "SearchFieldGroupData",
    "SearchResultData",
    "SubjectData",
    "UserData",
    "RoleData",
    "ActionData",
    "ObjectData",
]

AUTHZ_POLICY_ATTRIBUTES_SEPARATOR = "^"
ATTRIBUTE_IDENTIFIER_SEPARATOR = "|"

_LOOKUP_PATH_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class FieldSource(Enum):
    """Where the value of a filter field is stored."""

    PROPERTY = "PROPERTY"
    METADATA = "METADATA"
    CUSTOM = "CUSTOM"

    @classmethod
    def parse(cls, value) -> "FieldSource":
        """Parse a wire value (e.g. 'PROPERTY', 'meta') into a FieldSource.

        Raises:
            MalformedIdentifier: If the value names no known source.
        """
        if isinstance(value, cls):
            return value
        aliases = {"META": cls.METADATA, "INTRINSIC": cls.PROPERTY}
        key = str(value).strip().upper()
        if key in aliases:
            return aliases[key]
        try:
            return cls(key)
        except ValueError:
            raise MalformedIdentifier(value, "unknown field source") from None

    @property
    def attribute_kind(self) -> Optional[str]:
        """The attribute store kind for attribute sources, None for properties."""
        if self is FieldSource.PROPERTY:
            return None
        return AttributeKind(self.value)


class Operator(Enum):
    """Filter conditions accepted in search requests."""

    EQUALS = "EQUALS"
    NOT_EQUALS = "NOT_EQUALS"
    GREATER = "GREATER"
    GREATER_OR_EQUAL = "GREATER_OR_EQUAL"
    LESSER = "LESSER"
    LESSER_OR_EQUAL = "LESSER_OR_EQUAL"
    CONTAINS = "CONTAINS"
    NOT_CONTAINS = "NOT_CONTAINS"
    STARTS_WITH = "STARTS_WITH"
    ENDS_WITH = "ENDS_WITH"
    EMPTY = "EMPTY"
    NOT_EMPTY = "NOT_EMPTY"

    @classmethod
    def parse(cls, value, field_identifier: str = "") -> "Operator":
        """Parse a wire value into an Operator.

        Raises:
            UnsupportedOperator: If the value names no known condition.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise UnsupportedOperator(field_identifier, value) from None

    @property
    def accepts_multiple_values(self) -> bool:
        return self in (Operator.EQUALS, Operator.NOT_EQUALS)


class ValueType(Enum):
    """Value type of a filterable field."""

    STRING = "STRING"
    NUMBER = "NUMBER"
    DATE = "DATE"
    DATETIME = "DATETIME"
    TIME = "TIME"
    BOOLEAN = "BOOLEAN"
    ENUM = "ENUM"


# Attribute content types that can be filtered, with the value type they compare as
# and the attribute store column holding the value.
ATTRIBUTE_CONTENT_TYPES = {
    AttributeContentType.STRING: (ValueType.STRING, "string_value"),
    AttributeContentType.TEXT: (ValueType.STRING, "string_value"),
    AttributeContentType.CODEBLOCK: (ValueType.STRING, "string_value"),
    AttributeContentType.INTEGER: (ValueType.NUMBER, "number_value"),
    AttributeContentType.FLOAT: (ValueType.NUMBER, "number_value"),
    AttributeContentType.BOOLEAN: (ValueType.BOOLEAN, "boolean_value"),
    AttributeContentType.DATE: (ValueType.DATE, "date_value"),
    AttributeContentType.TIME: (ValueType.TIME, "time_value"),
    AttributeContentType.DATETIME: (ValueType.DATETIME, "datetime_value"),
}


class _NoMatch:
    """Normalized value of an enum code that names no member. Matches no stored value."""

    _instance: ClassVar[Optional["_NoMatch"]] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "NO_MATCH"

    def __bool__(self):
        return False


NO_MATCH = _NoMatch()


@define(frozen=True)
class FieldDescriptor:
    """A filterable intrinsic field of a resource.

    Attributes:
        id: Field identifier used in search requests (e.g., 'COMMON_NAME').
        resource: Resource the field belongs to (the query root).
        label: Human-readable label for field catalogs.
        value_type: How values of this field compare.
        property_name: Name of the field on the model owning it.
        join_path: Relation names traversed from the root model to the owning model.
        related_resource: Resource owning the field when reached through a join.
        enum_class: TextChoices class holding the allowed codes of an ENUM field.
        multivalued_relation: True when the join path crosses a to-many relation.
        exists_value: When set, the field is a BOOLEAN meaning "a related row whose
            property equals this value exists".
        settable: True when bulk update flows may reassign the field.
    """

    id: str
    resource: str
    label: str
    value_type: ValueType
    property_name: str
    join_path: tuple = field(default=(), converter=tuple)
    related_resource: Optional[str] = None
    enum_class: Any = None
    multivalued_relation: bool = False
    exists_value: Any = None
    settable: bool = False

    @property
    def lookup_path(self) -> str:
        """Django lookup path from the root model to the field (e.g., 'groups__name')."""
        return "__".join((*self.join_path, self.property_name))

    @property
    def has_existence_override(self) -> bool:
        return self.exists_value is not None

    @property
    def enum_codes(self) -> list[str]:
        if self.enum_class is None:
            return []
        return [member.value for member in self.enum_class]


@define(frozen=True)
class AttributeDescriptor:
    """A filterable attribute discovered in the attribute store.

    Attributes:
        resource: Resource whose objects carry the attribute.
        kind: Attribute store kind (METADATA or CUSTOM).
        name: Attribute name as defined by users.
        content_type: Content type the values are stored with.
    """

    resource: str
    kind: AttributeKind
    name: str
    content_type: AttributeContentType

    @property
    def identifier(self) -> str:
        """Composite identifier used in search requests (e.g., 'color|STRING')."""
        return f"{self.name}{ATTRIBUTE_IDENTIFIER_SEPARATOR}{self.content_type.value}"

    @property
    def value_type(self) -> ValueType:
        return ATTRIBUTE_CONTENT_TYPES[self.content_type][0]

    @property
    def value_column(self) -> str:
        return ATTRIBUTE_CONTENT_TYPES[self.content_type][1]

    @property
    def enum_class(self):
        return None

    @property
    def has_existence_override(self) -> bool:
        return False


@define(frozen=True)
class FilterCriterion:
    """A single (field, operator, value) search condition.

    Attributes:
        source: Where the field is stored.
        field_identifier: Plain field id for properties, 'name|contentType' for attributes.
        operator: The condition to apply.
        value: Scalar, list of scalars, or None for EMPTY/NOT_EMPTY.
    """

    source: FieldSource
    field_identifier: str
    operator: Operator
    value: Any = None

    @classmethod
    def from_dict(cls, data: dict) -> "FilterCriterion":
        """Build a criterion from its camelCase wire representation.

        Args:
            data: Dictionary with 'fieldSource', 'fieldIdentifier', 'condition' and 'value'.

        Returns:
            FilterCriterion: The parsed criterion.
        """
        identifier = data.get("fieldIdentifier")
        if not isinstance(identifier, str) or not identifier:
            raise MalformedIdentifier(identifier, "field identifier is required")
        return cls(
            source=FieldSource.parse(data.get("fieldSource", FieldSource.PROPERTY.value)),
            field_identifier=identifier,
            operator=Operator.parse(data.get("condition"), identifier),
            value=data.get("value"),
        )

    def to_dict(self) -> dict:
        return {
            "fieldSource": self.source.value,
            "fieldIdentifier": self.field_identifier,
            "condition": self.operator.value,
            "value": self.value,
        }


def _to_id_set(value) -> frozenset:
    """Convert a collection of object ids into a frozenset of strings."""
    if value is None or isinstance(value, (str, bytes)):
        raise SecurityFilterError(f"Object ids must be a collection, got {value!r}")
    try:
        items = list(value)
    except TypeError:
        raise SecurityFilterError(f"Object ids must be a collection, got {value!r}") from None
    for item in items:
        if not isinstance(item, (str, UUID)) or not str(item):
            raise SecurityFilterError(f"Invalid object id {item!r}")
    return frozenset(str(item) for item in items)


def _validate_restricted(instance, attribute, value):
    if not isinstance(value, bool):
        raise SecurityFilterError(f"'{attribute.name}' must be a boolean, got {value!r}")


def _validate_parent_link(instance, attribute, value):
    if value is None:
        return
    if not isinstance(value, str) or not all(_LOOKUP_PATH_RE.match(part) for part in value.split("__")):
        raise SecurityFilterError(f"Invalid parent link {value!r}")


@define(frozen=True)
class SecurityFilter:
    """Authorization decision restricting which objects a caller may see.

    Attributes:
        allowed_ids: Objects explicitly allowed.
        denied_ids: Objects explicitly denied.
        restricted: True when only the allowed objects are visible.
        parent_link: Relation whose target decides visibility instead of the
            object itself (e.g., 'key' for key items inheriting from their key).
    """

    allowed_ids: frozenset = field(factory=frozenset, converter=_to_id_set)
    denied_ids: frozenset = field(factory=frozenset, converter=_to_id_set)
    restricted: bool = field(default=False, validator=_validate_restricted)
    parent_link: Optional[str] = field(default=None, validator=_validate_parent_link)

    @classmethod
    def unrestricted(cls, parent_link: Optional[str] = None) -> "SecurityFilter":
        """A decision allowing every object, used for internal system access."""
        return cls(parent_link=parent_link)

    def __str__(self):
        """Human readable string representation of the decision."""
        if self.restricted:
            return f"only {len(self.allowed_ids)} allowed objects"
        if self.denied_ids:
            return f"all except {len(self.denied_ids)} denied objects"
        return "all objects"


@define
class SearchFieldData:
    """A field offered to clients building search requests."""

    identifier: str
    label: str
    type: ValueType
    conditions: list[Operator] = field(factory=list)
    values: Optional[list[str]] = None
    multiple_values: bool = False
    settable: bool = False


@define
class SearchFieldGroupData:
    """Searchable fields of one source (properties, metadata or custom attributes)."""

    source: FieldSource
    fields: list[SearchFieldData] = field(factory=list)


@define
class SearchResultData:
    """A page of matching objects plus the total count."""

    items: list = field(factory=list)
    total_items: int = 0
    page_number: int = 1
    items_per_page: int = 10
    total_pages: int = 0


class AuthzBaseClass:
    """Base class for all authz classes.

    Attributes:
        SEPARATOR: The separator between the namespace and the identifier.
        NAMESPACE: The namespace prefix for the data type (e.g., 'user', 'act').
    """

    SEPARATOR: ClassVar[str] = AUTHZ_POLICY_ATTRIBUTES_SEPARATOR
    NAMESPACE: ClassVar[str] = None


@define
class AuthZData(AuthzBaseClass):
    """Base class for all authz data classes.

    Attributes:
        external_key: The ID for the object outside of the authz system (e.g., username).
        namespaced_key: The ID for the object within the authz system (e.g., 'user^john_doe').
    """

    external_key: str = ""
    namespaced_key: str = ""

    def __attrs_post_init__(self):
        """Derive whichever of external_key and namespaced_key was not provided."""
        namespace = self.get_namespace()
        if not namespace:
            return

        if self.external_key and not self.namespaced_key:
            self.namespaced_key = f"{namespace}{self.SEPARATOR}{self.external_key}"

        if not self.external_key and self.namespaced_key:
            self.external_key = self.namespaced_key.split(self.SEPARATOR, 1)[1]

        if not self.external_key and not self.namespaced_key:
            raise ValueError("Either external_key or namespaced_key must be provided.")

    def get_namespace(self) -> str:
        return self.NAMESPACE

    def __repr__(self):
        return self.namespaced_key


@define(repr=False)
class SubjectData(AuthZData):
    """A subject is an entity that can be granted permissions (e.g., 'sub^generic')."""

    NAMESPACE: ClassVar[str] = "sub"


@define(repr=False)
class UserData(SubjectData):
    """A user subject (e.g., 'user^john_doe')."""

    NAMESPACE: ClassVar[str] = "user"

    @property
    def username(self) -> str:
        return self.external_key

    def __str__(self):
        return self.username


@define(repr=False)
class RoleData(AuthZData):
    """A role grouping permissions (e.g., 'role^auditor')."""

    NAMESPACE: ClassVar[str] = "role"


@define(repr=False)
class ActionData(AuthZData):
    """An action performed on a resource (e.g., 'act^list')."""

    NAMESPACE: ClassVar[str] = "act"

    @property
    def name(self) -> str:
        """The human-readable name of the action (e.g., 'List')."""
        return self.external_key.replace("_", " ").title()

    def __str__(self):
        return self.name


WILDCARD_OBJECT = "*"


@define(repr=False)
class ObjectData(AuthZData):
    """An inventory object as named in policies (e.g., 'certificate^<uuid>').

    The namespace is the resource, so every resource gets its own policy keys.
    Use WILDCARD_OBJECT as external_key to name every object of the resource.
    """

    resource: str = ""

    def get_namespace(self) -> str:
        return self.resource

    @property
    def object_id(self) -> str:
        return self.external_key

    @property
    def is_wildcard(self) -> bool:
        return self.external_key == WILDCARD_OBJECT
