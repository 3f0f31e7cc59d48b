"""
Models — The concrete shapes raw GraphQL documents are decoded into.

Two polymorphic families are modelled:

  Media                        MediaImage | Video | ExternalVideo | Model3d
  WebhookSubscriptionEndpoint  WebhookHttpEndpoint | WebhookEventBridgeEndpoint
                               | WebhookPubSubEndpoint

Shapes are pydantic models sharing the Shape configuration: fields are read
from their camelCase GraphQL names, unknown keys are ignored, and scalar
fields use strict types so a boolean never passes as a number. Each concrete
shape records its GraphQL type name in TYPENAME and exposes it as `kind`, so
callers can branch on the variant without isinstance checks.

Connection, Edge and PageInfo carry the cursor-pagination envelope around
decoded entities.
"""

import dataclasses
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, StrictBool, StrictInt, StrictStr, model_validator
from pydantic.alias_generators import to_camel


class Shape(BaseModel):
    """Base configuration for every decoded shape."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    TYPENAME: ClassVar[str] = ""
    # Raw keys whose concrete type is chosen by a discriminator; the field
    # mapper leaves them to the entity decoder.
    POLYMORPHIC_FIELDS: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # null reads like an absent key: the field keeps its default
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @property
    def kind(self) -> str:
        return self.TYPENAME


class PageInfo(Shape):
    has_next_page: StrictBool = False
    has_previous_page: StrictBool = False
    start_cursor: Optional[StrictStr] = None
    end_cursor: Optional[StrictStr] = None


class Image(Shape):
    id: Optional[StrictStr] = None
    url: Optional[StrictStr] = None
    alt_text: Optional[StrictStr] = None
    width: Optional[StrictInt] = None
    height: Optional[StrictInt] = None


class MediaPreviewImage(Shape):
    status: Optional[StrictStr] = None
    image: Optional[Image] = None


class Media(Shape):
    """Fields shared by every media shape."""

    TYPENAME: ClassVar[str] = "Media"

    id: Optional[StrictStr] = None
    alt: Optional[StrictStr] = None
    media_content_type: Optional[StrictStr] = None
    status: Optional[StrictStr] = None
    preview: Optional[MediaPreviewImage] = None


class MediaImage(Media):
    TYPENAME: ClassVar[str] = "MediaImage"

    image: Optional[Image] = None
    mime_type: Optional[StrictStr] = None


class VideoSource(Shape):
    url: Optional[StrictStr] = None
    mime_type: Optional[StrictStr] = None
    format: Optional[StrictStr] = None
    width: Optional[StrictInt] = None
    height: Optional[StrictInt] = None


class Video(Media):
    TYPENAME: ClassVar[str] = "Video"

    # milliseconds
    duration: Optional[StrictInt] = None
    filename: Optional[StrictStr] = None
    original_source: Optional[VideoSource] = None
    sources: List[VideoSource] = []


class ExternalVideo(Media):
    TYPENAME: ClassVar[str] = "ExternalVideo"

    embed_url: Optional[StrictStr] = None
    host: Optional[StrictStr] = None
    origin_url: Optional[StrictStr] = None


class Model3dSource(Shape):
    url: Optional[StrictStr] = None
    mime_type: Optional[StrictStr] = None
    format: Optional[StrictStr] = None
    filesize: Optional[StrictInt] = None


class Model3d(Media):
    TYPENAME: ClassVar[str] = "Model3d"

    filename: Optional[StrictStr] = None
    original_source: Optional[Model3dSource] = None
    sources: List[Model3dSource] = []


class WebhookSubscriptionEndpoint(Shape):
    """Base of the endpoint variants a webhook subscription delivers to."""

    TYPENAME: ClassVar[str] = "WebhookSubscriptionEndpoint"


class WebhookHttpEndpoint(WebhookSubscriptionEndpoint):
    TYPENAME: ClassVar[str] = "WebhookHttpEndpoint"

    callback_url: Optional[StrictStr] = None


class WebhookEventBridgeEndpoint(WebhookSubscriptionEndpoint):
    TYPENAME: ClassVar[str] = "WebhookEventBridgeEndpoint"

    arn: Optional[StrictStr] = None


class WebhookPubSubEndpoint(WebhookSubscriptionEndpoint):
    TYPENAME: ClassVar[str] = "WebhookPubSubEndpoint"

    pub_sub_project: Optional[StrictStr] = None
    pub_sub_topic: Optional[StrictStr] = None


class WebhookSubscription(Shape):
    TYPENAME: ClassVar[str] = "WebhookSubscription"
    POLYMORPHIC_FIELDS: ClassVar[Tuple[str, ...]] = ("endpoint",)

    id: Optional[StrictStr] = None
    topic: Optional[StrictStr] = None
    format: Optional[StrictStr] = None
    include_fields: List[StrictStr] = []
    metafield_namespaces: List[StrictStr] = []
    created_at: Optional[StrictStr] = None
    updated_at: Optional[StrictStr] = None
    endpoint: Optional[WebhookSubscriptionEndpoint] = None


@dataclass
class Edge:
    cursor: str = ""
    node: Any = None


@dataclass
class Connection:
    """One page of a paginated connection.

    edges and nodes are decoded independently and are each empty when the
    payload did not select them. When both are selected, edges[i].node and
    nodes[i] describe the same entity.
    """

    edges: List[Edge] = field(default_factory=list)
    nodes: List[Any] = field(default_factory=list)
    page_info: Optional[PageInfo] = None

    def entities(self) -> List[Any]:
        """The decoded entities of this page, from edges if selected, else nodes."""
        if self.edges:
            return [edge.node for edge in self.edges if edge.node is not None]
        return list(self.nodes)


def to_dict(value: Any) -> Any:
    """Convert a decoded value back into a JSON-compatible tree.

    Keys use their GraphQL names; shapes with a TYPENAME carry it under
    "__typename", so the output can be decoded again. Polymorphic fields are
    serialized from their runtime variant, not their declared base.
    """
    if isinstance(value, Shape):
        result: Dict[str, Any] = {}
        if value.TYPENAME:
            result["__typename"] = value.TYPENAME
        for name, info in type(value).model_fields.items():
            result[info.alias or name] = to_dict(getattr(value, name))
        return result
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            to_camel(f.name): to_dict(getattr(value, f.name))
            for f in dataclasses.fields(value)
        }
    if isinstance(value, list):
        return [to_dict(item) for item in value]
    if isinstance(value, dict):
        return {key: to_dict(item) for key, item in value.items()}
    return value
