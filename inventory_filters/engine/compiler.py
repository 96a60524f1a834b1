"""Compilation of normalized filter criteria into a Django ORM predicate.

Each criterion becomes one ``Q`` fragment and the fragments are ANDed. How a
fragment treats objects that have no value for the field depends on where the
value lives:

- A column on the root model, or on a to-one relation: negative operators also
  match when the value is NULL or the relation is missing.
- A to-many relation: the fragment is an EXISTS subquery correlated on the root
  primary key; negative operators become NOT EXISTS, so an object with no related
  rows satisfies NOT_EQUALS but never EQUALS.
- An attribute: the fragment is an EXISTS subquery over the attribute store
  correlated on the owning object's uuid.

Compilation never touches the database.
"""

import logging
from typing import Iterable, Optional

from attrs import define
from django.conf import settings
from django.db.models import Exists, OuterRef, Q

from inventory_filters.api.data import NO_MATCH, FieldDescriptor, Operator, ValueType
from inventory_filters.engine.mapping import ResourceMapping, get_model_field, get_resource_mapping
from inventory_filters.engine.normalizer import NormalizedCriterion, normalize
from inventory_filters.engine.registry import FieldRegistry
from inventory_filters.models import AttributeContent

logger = logging.getLogger(__name__)

__all__ = ["CompiledPredicate", "PredicateCompiler", "compile_filters"]

# Fragments are ANDed cheapest first: plain columns, then relation subqueries,
# then attribute store subqueries.
DIRECT_COST = 0
RELATION_COST = 1
ATTRIBUTE_COST = 2

INTEGER_FIELD_TYPES = frozenset(
    {
        "IntegerField",
        "BigIntegerField",
        "SmallIntegerField",
        "PositiveIntegerField",
        "PositiveBigIntegerField",
        "PositiveSmallIntegerField",
        "AutoField",
        "BigAutoField",
        "SmallAutoField",
    }
)


@define(frozen=True)
class CompiledPredicate:
    """A boolean condition over the root model of a resource.

    Attributes:
        resource: Resource the predicate is rooted at.
        mapping: Model and id paths of the resource.
        condition: The compiled condition. An empty ``Q()`` matches every object.
    """

    resource: str
    mapping: ResourceMapping
    condition: Q

    @property
    def model(self):
        return self.mapping.model

    def queryset(self, base=None):
        """Return the queryset of objects matching the predicate.

        Args:
            base: Queryset of the root model to narrow. Defaults to all objects.
        """
        if base is None:
            base = self.model._default_manager.all()
        return base.filter(self.condition)

    def as_sql(self) -> tuple:
        """Return the parameterized SQL selecting the matching objects and its parameters.

        Raises:
            EmptyResultSet: If the predicate can never match.
        """
        return self.queryset().query.sql_with_params()

    def and_condition(self, condition: Q) -> "CompiledPredicate":
        """Return a copy of the predicate also requiring ``condition``."""
        return CompiledPredicate(resource=self.resource, mapping=self.mapping, condition=self.condition & condition)


def _integral_or_no_match(value):
    """Replace a number no integer column can equal with NO_MATCH."""
    if isinstance(value, float) and not value.is_integer():
        return NO_MATCH
    return value


def _match_any(rule, path: str, values, case_sensitive: bool) -> Optional[Q]:
    """OR the positive comparisons of every value, skipping NO_MATCH.

    Returns None when no value can match.
    """
    match = None
    for value in values:
        if value is NO_MATCH:
            continue
        term = rule.build(path, value, case_sensitive=case_sensitive)
        match = term if match is None else match | term
    return match


class PredicateCompiler:
    """Compile criteria for one resource into a CompiledPredicate.

    Usage:
        compiler = PredicateCompiler("certificate")
        predicate = compiler.compile([{"fieldSource": "PROPERTY", ...}])
        certificates = predicate.queryset()
    """

    def __init__(self, resource: str, registry: FieldRegistry = None, case_sensitive: bool = None):
        self.resource = resource
        self.registry = registry
        self.mapping = get_resource_mapping(resource)
        if case_sensitive is None:
            case_sensitive = getattr(settings, "INVENTORY_FILTERS_CASE_SENSITIVE", True)
        self.case_sensitive = case_sensitive

    @property
    def match_nothing(self) -> Q:
        return Q(pk__in=[])

    def compile(self, criteria: Iterable) -> CompiledPredicate:
        """Normalize and compile criteria into a single predicate.

        Args:
            criteria: FilterCriterion objects or camelCase wire dictionaries,
                implicitly ANDed. An empty list matches every object.

        Returns:
            CompiledPredicate: The combined predicate.
        """
        normalized = [normalize(self.resource, criterion, self.registry) for criterion in criteria]
        fragments = sorted(
            (self.compile_criterion(criterion) for criterion in normalized),
            key=lambda fragment: fragment[0],
        )

        condition = Q()
        for _, fragment in fragments:
            condition &= fragment

        logger.debug(f"Compiled {len(normalized)} criteria for {self.resource}: {condition}")
        return CompiledPredicate(resource=self.resource, mapping=self.mapping, condition=condition)

    def compile_criterion(self, criterion: NormalizedCriterion) -> tuple[int, Q]:
        """Compile one normalized criterion.

        Returns:
            tuple: The fragment's cost rank and its condition.
        """
        if criterion.is_attribute:
            return ATTRIBUTE_COST, self._compile_attribute(criterion)

        descriptor: FieldDescriptor = criterion.descriptor
        if descriptor.has_existence_override:
            return RELATION_COST, self._compile_existence(criterion)
        if descriptor.multivalued_relation:
            return RELATION_COST, self._compile_relation(criterion)
        return DIRECT_COST, self._compile_direct(criterion)

    def _is_integer_column(self, lookup_path: str) -> bool:
        field = get_model_field(self.mapping.model, lookup_path)
        return field.get_internal_type() in INTEGER_FIELD_TYPES

    def _comparable_values(self, criterion: NormalizedCriterion) -> tuple:
        """Return the values to compare, dropping numbers an integer column can never equal.

        Django rounds a float towards zero before comparing it with an integer column,
        so EQUALS(1.5) would otherwise match 1.
        """
        descriptor: FieldDescriptor = criterion.descriptor
        if (
            criterion.rule.positive is not Operator.EQUALS
            or descriptor.value_type is not ValueType.NUMBER
            or not self._is_integer_column(descriptor.lookup_path)
        ):
            return criterion.values
        return tuple(_integral_or_no_match(value) for value in criterion.values)

    def _positive_match(self, criterion: NormalizedCriterion, path: str) -> Optional[Q]:
        if criterion.rule.presence_only:
            return criterion.rule.build(path)
        return _match_any(criterion.rule, path, self._comparable_values(criterion), self.case_sensitive)

    def _compile_direct(self, criterion: NormalizedCriterion) -> Q:
        path = criterion.descriptor.lookup_path
        if criterion.operator is Operator.EMPTY:
            return Q(**{f"{path}__isnull": True})

        positive = self._positive_match(criterion, path)
        if not criterion.rule.negated:
            return positive if positive is not None else self.match_nothing
        if positive is None:
            return Q()
        return ~positive | Q(**{f"{path}__isnull": True})

    def _membership(self, subquery, positive: Optional[Q], negated: bool) -> Q:
        """EXISTS of a matching row, or NOT EXISTS for negated operators."""
        if positive is None:
            return Q() if negated else self.match_nothing
        exists = Q(Exists(subquery.filter(positive)))
        return ~exists if negated else exists

    def _correlated_roots(self):
        model = self.mapping.model
        return model._default_manager.filter(pk=OuterRef("pk"))

    def _compile_relation(self, criterion: NormalizedCriterion) -> Q:
        positive = self._positive_match(criterion, criterion.descriptor.lookup_path)
        return self._membership(self._correlated_roots(), positive, criterion.rule.negated)

    def _compile_existence(self, criterion: NormalizedCriterion) -> Q:
        descriptor: FieldDescriptor = criterion.descriptor
        exists = Q(
            Exists(self._correlated_roots().filter(**{descriptor.lookup_path: descriptor.exists_value}))
        )

        condition = None
        for value in criterion.values:
            wanted = value if criterion.operator is Operator.EQUALS else not value
            term = exists if wanted else ~exists
            if condition is None:
                condition = term
            elif criterion.operator is Operator.EQUALS:
                condition = condition | term
            else:
                condition = condition & term
        return condition

    def _compile_attribute(self, criterion: NormalizedCriterion) -> Q:
        descriptor = criterion.descriptor
        subquery = AttributeContent.objects.filter(
            resource=descriptor.resource,
            kind=descriptor.kind,
            name=descriptor.name,
            content_type=descriptor.content_type,
            object_uuid=OuterRef(self.mapping.attribute_owner_field),
        )
        if criterion.rule.presence_only:
            positive = Q()
        else:
            positive = _match_any(criterion.rule, descriptor.value_column, criterion.values, self.case_sensitive)
        return self._membership(subquery, positive, criterion.rule.negated)


def compile_filters(resource: str, criteria: Iterable, registry: FieldRegistry = None) -> CompiledPredicate:
    """Compile criteria for a resource with the configured case sensitivity."""
    return PredicateCompiler(resource, registry=registry).compile(criteria)
