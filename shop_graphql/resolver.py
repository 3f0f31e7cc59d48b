"""
Discriminator Resolver — Picks the concrete shape for a polymorphic payload.

The API tags polymorphic values in two ways, tried in this order:

  1. An explicit "__typename" field on the object itself.
  2. The type fragment of the object's global id, e.g.
     "gid://shopify/MediaImage/1072273166" -> "MediaImage".

The discriminator string is then looked up in the family's registry.
Resolution is a pure function of its inputs and the registry.
"""

import re
from typing import Any, Dict, Optional

from .errors import MalformedIdentifier, UndeterminedType
from .registry import EntityFamily


def extract_gid_typename(gid: str, pattern: re.Pattern) -> str:
    """Extract the type fragment from a global id.

    Args:
        gid: The global id string (e.g. "gid://shopify/Video/123").
        pattern: Compiled regex whose single capture group is the type.

    Returns:
        The captured type fragment (e.g. "Video").

    Raises:
        MalformedIdentifier: If the id does not match the pattern.
    """
    match = pattern.search(gid)
    if match is None or not match.group(1):
        raise MalformedIdentifier(f"malformed gid '{gid}'")
    return match.group(1)


def resolve_discriminator(
    fields: Dict[str, Any],
    family: EntityFamily,
    id_source: Optional[Dict[str, Any]] = None,
) -> str:
    """Find the discriminator string for a raw field map.

    Args:
        fields: The raw object being discriminated.
        family: The entity family supplying field names and GID pattern.
        id_source: Object whose id is used for the GID fallback; defaults to
            fields. Nested sub-objects fall back on their parent's id.

    Raises:
        MalformedIdentifier: If the fallback id is not a well-formed GID.
        UndeterminedType: If neither a discriminator nor an id is present.
    """
    discriminator = fields.get(family.discriminator_field)
    if isinstance(discriminator, str):
        return discriminator

    ids = fields if id_source is None else id_source
    gid = ids.get(family.id_field)
    if isinstance(gid, str):
        return extract_gid_typename(gid, family.gid_pattern)

    raise UndeterminedType(
        f"cannot determine {family.registry.family} type: "
        f"neither '{family.discriminator_field}' nor '{family.id_field}' present"
    )


def resolve_shape(
    fields: Dict[str, Any],
    family: EntityFamily,
    id_source: Optional[Dict[str, Any]] = None,
) -> type:
    """Resolve a raw field map to the registered shape class.

    Raises:
        UnknownDiscriminator: If the discriminator is not registered, plus
            anything resolve_discriminator() raises.
    """
    return family.registry.lookup(resolve_discriminator(fields, family, id_source))
