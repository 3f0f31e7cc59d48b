"""
Shape Registry — Which discriminator strings select which concrete shapes.

An EntityFamily bundles everything the resolver and decoder need for one
polymorphic domain: the registry of shapes, the name of the explicit
discriminator field, the id field and GID pattern used as a fallback, and,
for families whose top-level shape is fixed, the shape and the name of the
nested field that is polymorphic instead.

Families are immutable and independent; derive a variant with a different
GID pattern through EntityFamily.with_gid_pattern().
"""

import dataclasses
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Optional, Union

from .errors import UnknownDiscriminator
from .models import (
    ExternalVideo,
    MediaImage,
    Model3d,
    Video,
    WebhookEventBridgeEndpoint,
    WebhookHttpEndpoint,
    WebhookPubSubEndpoint,
    WebhookSubscription,
)
from .settings import DEFAULT_GID_PATTERN


class ShapeRegistry:
    """Read-only mapping from discriminator string to shape class."""

    def __init__(self, family: str, shapes: Dict[str, type]):
        self.family = family
        self._shapes = MappingProxyType(dict(shapes))

    @classmethod
    def of(cls, family: str, *shapes: type) -> "ShapeRegistry":
        """Build a registry keyed by each shape's TYPENAME."""
        return cls(family, {shape.TYPENAME: shape for shape in shapes})

    def lookup(self, discriminator: str) -> type:
        shape = self._shapes.get(discriminator)
        if shape is None:
            raise UnknownDiscriminator(self.family, discriminator)
        return shape

    def names(self) -> List[str]:
        return sorted(self._shapes)

    def __contains__(self, discriminator: object) -> bool:
        return discriminator in self._shapes

    def __len__(self) -> int:
        return len(self._shapes)


@dataclass(frozen=True)
class EntityFamily:
    """One independent instantiation of the discriminate-then-map algorithm.

    Attributes:
        name: Label used in messages (e.g. "Media").
        registry: Discriminator -> shape lookup.
        gid_pattern: Regex with exactly one capture group yielding the type
            fragment of a global id.
        discriminator_field: Explicit discriminator key, normally "__typename".
        id_field: Key holding the global id used as the fallback discriminator.
        root_shape: Fixed top-level shape when only a nested field is
            polymorphic; None when the entity itself is polymorphic.
        nested_field: Raw key of the polymorphic sub-object (with root_shape).
    """

    name: str
    registry: ShapeRegistry
    gid_pattern: Union[str, re.Pattern] = DEFAULT_GID_PATTERN
    discriminator_field: str = "__typename"
    id_field: str = "id"
    root_shape: Optional[type] = None
    nested_field: Optional[str] = None

    def __post_init__(self):
        pattern = self.gid_pattern
        if isinstance(pattern, str):
            pattern = re.compile(pattern)
            object.__setattr__(self, "gid_pattern", pattern)
        if pattern.groups != 1:
            raise ValueError(
                f"GID pattern for {self.name} must have exactly one capture group, "
                f"got {pattern.groups}: {pattern.pattern!r}"
            )
        if (self.root_shape is None) != (self.nested_field is None):
            raise ValueError(f"{self.name}: root_shape and nested_field must be set together")

    def with_gid_pattern(self, pattern: Union[str, re.Pattern]) -> "EntityFamily":
        return dataclasses.replace(self, gid_pattern=pattern)


MEDIA_FAMILY = EntityFamily(
    name="Media",
    registry=ShapeRegistry.of("Media", MediaImage, Video, ExternalVideo, Model3d),
)

WEBHOOK_SUBSCRIPTION_FAMILY = EntityFamily(
    name="WebhookSubscription",
    registry=ShapeRegistry.of(
        "WebhookSubscriptionEndpoint",
        WebhookHttpEndpoint,
        WebhookEventBridgeEndpoint,
        WebhookPubSubEndpoint,
    ),
    root_shape=WebhookSubscription,
    nested_field="endpoint",
)
