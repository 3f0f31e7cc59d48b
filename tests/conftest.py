"""Shared fixtures: test-only shape families mirroring the production ones."""

import json
import os
from typing import ClassVar, Optional

import pytest

from shop_graphql.models import Shape, WebhookSubscription, WebhookSubscriptionEndpoint
from shop_graphql.registry import EntityFamily, ShapeRegistry

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")

APP_GID_PATTERN = r"gid://app/(\w+)/\d+"


def load_fixture(name):
    with open(os.path.join(FIXTURES_DIR, name)) as f:
        return json.load(f)["data"]


class ImageShape(Shape):
    TYPENAME: ClassVar[str] = "Image"

    id: Optional[str] = None
    url: Optional[str] = None


class VideoShape(Shape):
    TYPENAME: ClassVar[str] = "Video"

    id: Optional[str] = None
    duration: Optional[int] = None


class HttpEndpoint(WebhookSubscriptionEndpoint):
    TYPENAME: ClassVar[str] = "HttpEndpoint"

    url: Optional[str] = None


CONTENT_FAMILY = EntityFamily(
    name="Content",
    registry=ShapeRegistry.of("Content", ImageShape, VideoShape),
    gid_pattern=APP_GID_PATTERN,
)

APP_WEBHOOK_FAMILY = EntityFamily(
    name="WebhookSubscription",
    registry=ShapeRegistry("Endpoint", {"HttpEndpoint": HttpEndpoint, "Webhook": HttpEndpoint}),
    gid_pattern=APP_GID_PATTERN,
    root_shape=WebhookSubscription,
    nested_field="endpoint",
)


@pytest.fixture
def webhook_data():
    return load_fixture("webhook_subscriptions_response.json")


@pytest.fixture
def media_data():
    return load_fixture("product_media_response.json")
