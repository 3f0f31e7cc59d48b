"""
Decode Errors — The failure taxonomy of the polymorphic decoder.

Every error raised while projecting a raw GraphQL document onto typed shapes
derives from DecodeError. Errors are raised at the point of failure and
propagate unchanged to the caller; each layer they pass through prepends its
location, so the final message names the exact element that failed:

    UnknownDiscriminator: unknown WebhookSubscriptionEndpoint type 'Unicorn'
        (at webhookSubscriptions.edges[1].node.endpoint)

Taxonomy:
  MalformedIdentifier       A GID does not match the family's GID pattern
  UndeterminedType          No __typename and no id to discriminate with
  UnknownDiscriminator      A discriminator was found but is not registered
  StructuralMappingFailed   A present field cannot be converted to its type
  MissingRequiredSubobject  A mandatory polymorphic sub-object is absent
  MissingContainer          The connection wrapper key is absent
  MalformedElement          A list element or wrapper has the wrong shape
"""

from typing import List, Optional


class DecodeError(Exception):
    """Base class for all decode failures.

    Attributes:
        message: The failure description without location.
        path: Location segments from the document root to the failing element.
    """

    def __init__(self, message: str, path: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.path = list(path or [])

    def add_context(self, location: str) -> "DecodeError":
        """Prepend a location segment (a key or "key[index]")."""
        self.path.insert(0, location)
        return self

    @property
    def location(self) -> str:
        location = ""
        for segment in self.path:
            if location and not segment.startswith("["):
                location += "."
            location += segment
        return location

    def __str__(self) -> str:
        if self.path:
            return f"{self.message} (at {self.location})"
        return self.message


class MalformedIdentifier(DecodeError):
    pass


class UndeterminedType(DecodeError):
    pass


class UnknownDiscriminator(DecodeError):
    def __init__(self, family: str, discriminator: str, path: Optional[List[str]] = None):
        super().__init__(f"unknown {family} type '{discriminator}'", path)
        self.family = family
        self.discriminator = discriminator


class StructuralMappingFailed(DecodeError):
    pass


class MissingRequiredSubobject(DecodeError):
    pass


class MissingContainer(DecodeError):
    pass


class MalformedElement(DecodeError):
    pass
