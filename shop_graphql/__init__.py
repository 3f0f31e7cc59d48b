"""
shop-graphql — Polymorphic decoding of shop Admin GraphQL responses.

GraphQL interface and union fields (media, webhook endpoints) cannot be mapped
onto a fixed record type: the concrete variant is only known from a
discriminator in the data itself. This package resolves that discriminator and
decodes each value into its concrete pydantic shape.

  errors.py           Decode error taxonomy (DecodeError and subclasses)
  raw.py              Checked accessors over the parsed JSON tree
  field_mapper.py     Generic field map -> shape validation (pydantic)
  models.py           Concrete shapes, Connection, Edge, PageInfo
  registry.py         Shape registries and entity families
  resolver.py         __typename / GID discriminator resolution
  decoder.py          Single-entity polymorphic decode
  connection.py       Connection (edges/nodes/pageInfo) unwrapping
  graphql_queries.py  Read-only query documents
  shop_client.py      requests-based Admin API client with pagination
  orchestrator.py     Configured export pipeline
"""

from .connection import decode_connection_json, decode_edge, unwrap_connection
from .decoder import decode_entity
from .errors import (
    DecodeError,
    MalformedElement,
    MalformedIdentifier,
    MissingContainer,
    MissingRequiredSubobject,
    StructuralMappingFailed,
    UndeterminedType,
    UnknownDiscriminator,
)
from .field_mapper import map_fields
from .models import (
    Connection,
    Shape,
    Edge,
    ExternalVideo,
    Media,
    MediaImage,
    Model3d,
    PageInfo,
    Video,
    WebhookEventBridgeEndpoint,
    WebhookHttpEndpoint,
    WebhookPubSubEndpoint,
    WebhookSubscription,
    WebhookSubscriptionEndpoint,
    to_dict,
)
from .registry import MEDIA_FAMILY, WEBHOOK_SUBSCRIPTION_FAMILY, EntityFamily, ShapeRegistry
from .resolver import extract_gid_typename, resolve_shape
from .shop_client import ShopGraphQLClient
from .orchestrator import ExportOrchestrator

__version__ = "0.1.0"
