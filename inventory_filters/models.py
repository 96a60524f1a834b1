"""
Database models for the inventory attribute store.

Users can define metadata and custom attributes for any inventory object. Their
values are kept in a single generic table, keyed by the object's uuid, so filters
over attributes are compiled into correlated subqueries against it.
"""

from django.db import models

from inventory_filters.constants.enums import AttributeContentType, AttributeKind


class AttributeContent(models.Model):
    """A single attribute value stored against an inventory object.

    An object carrying a multi-valued attribute has one row per value. Exactly one
    of the typed value columns is populated, chosen by ``content_type``.
    """

    resource = models.CharField(max_length=64)
    object_uuid = models.UUIDField(db_index=True)
    kind = models.CharField(max_length=16, choices=AttributeKind.choices)
    name = models.CharField(max_length=255)
    content_type = models.CharField(max_length=16, choices=AttributeContentType.choices)

    string_value = models.TextField(blank=True, null=True)
    number_value = models.FloatField(blank=True, null=True)
    boolean_value = models.BooleanField(blank=True, null=True)
    date_value = models.DateField(blank=True, null=True)
    time_value = models.TimeField(blank=True, null=True)
    datetime_value = models.DateTimeField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Attribute Content"
        verbose_name_plural = "Attribute Contents"
        indexes = [
            models.Index(
                fields=["resource", "kind", "name", "content_type"],
                name="attr_content_definition_idx",
            ),
        ]

    def __str__(self):
        return f"{self.resource}:{self.object_uuid} {self.name}|{self.content_type}"
