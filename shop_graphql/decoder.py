"""
Entity Decoder — Turns one raw polymorphic object into its concrete shape.

The generic field mapper cannot populate a field whose type is chosen by a
discriminator, so decoding runs in four steps:

  1. Set aside the nested polymorphic sub-object, if the family has one
     (e.g. a webhook subscription's "endpoint").
  2. Resolve the shape: of the entity itself (media), or of the set-aside
     sub-object (webhook subscriptions, whose top-level shape is fixed).
  3. Allocate the target shape and map the remaining fields onto it.
  4. Map the sub-object onto its resolved shape and attach it to the parent.

The raw map is never modified, so decoding the same map twice yields equal
results.
"""

from typing import Any

from .errors import DecodeError, MissingRequiredSubobject
from .field_mapper import attribute_for, map_fields
from .raw import expect_mapping
from .registry import EntityFamily
from .resolver import resolve_shape


def decode_entity(fields: Any, family: EntityFamily) -> Any:
    """Decode a raw object of the given family.

    Args:
        fields: The raw field map of one entity.
        family: The entity family (MEDIA_FAMILY, WEBHOOK_SUBSCRIPTION_FAMILY, ...).

    Returns:
        An instance of exactly the shape selected by the resolver, or for
        families with a fixed root shape, that shape with its polymorphic
        field populated.

    Raises:
        DecodeError: Any subclass; see errors.py.
    """
    fields = expect_mapping(fields, family.name)

    if family.nested_field is None:
        shape = resolve_shape(fields, family)
        return map_fields(fields, shape)

    nested_key = family.nested_field
    nested = fields.get(nested_key)
    if nested is None:
        raise MissingRequiredSubobject(
            f"{family.name} requires '{nested_key}' to be queried"
        )

    try:
        nested = expect_mapping(nested, nested_key)
        nested_shape = resolve_shape(nested, family, id_source=fields)
    except DecodeError as exc:
        exc.add_context(nested_key)
        raise

    remainder = {key: value for key, value in fields.items() if key != nested_key}
    entity = map_fields(remainder, family.root_shape)

    attribute = attribute_for(family.root_shape, nested_key)
    try:
        setattr(entity, attribute, map_fields(nested, nested_shape))
    except DecodeError as exc:
        exc.add_context(nested_key)
        raise
    return entity

