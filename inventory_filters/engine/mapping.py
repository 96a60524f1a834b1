"""Mapping of inventory resources to the Django models queries are rooted at."""

from attrs import define
from django.apps import apps
from django.conf import settings
from django.core.exceptions import FieldDoesNotExist, ImproperlyConfigured
from django.db.models.constants import LOOKUP_SEP


@define(frozen=True)
class ResourceMapping:
    """Where a resource's objects live.

    Attributes:
        resource: Resource name (e.g., 'certificate').
        model: Root Django model of the resource's queries.
        id_field: Field holding the object id used by authorization and the attribute store.
        attribute_owner_field: Lookup path, from the root model, to the id attribute
            rows are stored against. Equals ``id_field`` unless the root inherits its
            attributes from a parent (e.g., 'key_id' for key items).
    """

    resource: str
    model: type
    id_field: str
    attribute_owner_field: str


def get_resource_mapping(resource: str) -> ResourceMapping:
    """Resolve a resource to its model using the INVENTORY_FILTERS_RESOURCE_MODELS setting.

    Args:
        resource: Resource name.

    Returns:
        ResourceMapping: The model and id paths of the resource.

    Raises:
        ImproperlyConfigured: If the resource or its model is not configured.
    """
    config = getattr(settings, "INVENTORY_FILTERS_RESOURCE_MODELS", None) or {}
    try:
        entry = config[resource]
        app_label, model_name = entry["model"].split(".", 1)
    except (KeyError, ValueError, AttributeError, TypeError) as exc:
        raise ImproperlyConfigured(
            f"INVENTORY_FILTERS_RESOURCE_MODELS has no valid 'app_label.ModelName' entry for '{resource}'"
        ) from exc

    try:
        model = apps.get_model(app_label, model_name, require_ready=False)
    except LookupError as exc:
        raise ImproperlyConfigured(f"Model {entry['model']} for resource '{resource}' is not installed") from exc

    id_field = entry.get("id_field", "uuid")
    return ResourceMapping(
        resource=resource,
        model=model,
        id_field=id_field,
        attribute_owner_field=entry.get("attribute_owner_field", id_field),
    )


def get_model_field(model, lookup_path: str):
    """Return the model field a lookup path ends at, following relations from ``model``.

    Raises:
        FieldDoesNotExist: If a step of the path names no field or continues past a
            plain column.
    """
    field = None
    for name in lookup_path.split(LOOKUP_SEP):
        if model is None:
            raise FieldDoesNotExist(f"'{lookup_path}' continues past the column '{field.name}'")
        field = model._meta.get_field(name)
        model = field.related_model
    return field
