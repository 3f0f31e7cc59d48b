"""Tests for shop_graphql.resolver and shop_graphql.registry."""

import re

import pytest

from shop_graphql.errors import MalformedIdentifier, UndeterminedType, UnknownDiscriminator
from shop_graphql.models import MediaImage, Video, WebhookHttpEndpoint
from shop_graphql.registry import MEDIA_FAMILY, WEBHOOK_SUBSCRIPTION_FAMILY, EntityFamily, ShapeRegistry
from shop_graphql.resolver import extract_gid_typename, resolve_discriminator, resolve_shape

from conftest import CONTENT_FAMILY, ImageShape, VideoShape


# ---------------------------------------------------------------------------
# GID extraction
# ---------------------------------------------------------------------------

def test_extract_gid_typename_basic():
    pattern = MEDIA_FAMILY.gid_pattern
    assert extract_gid_typename("gid://shopify/MediaImage/1072273166", pattern) == "MediaImage"
    assert extract_gid_typename("gid://shopify/Video/1", pattern) == "Video"
    assert extract_gid_typename("gid://shopify/Model3d/42", pattern) == "Model3d"


def test_extract_gid_typename_is_deterministic():
    pattern = re.compile(r"gid://app/(\w+)/\d+")
    results = {extract_gid_typename("gid://app/Video/123", pattern) for _ in range(5)}
    assert results == {"Video"}


@pytest.mark.parametrize("gid", [
    "",
    "Video/123",
    "gid://shopify/Video/",
    "gid://shopify//123",
    "gid://other/Video/123",
    "MQ==",
])
def test_extract_gid_typename_malformed(gid):
    with pytest.raises(MalformedIdentifier) as exc_info:
        extract_gid_typename(gid, MEDIA_FAMILY.gid_pattern)
    assert gid in str(exc_info.value)


# ---------------------------------------------------------------------------
# Discriminator precedence
# ---------------------------------------------------------------------------

def test_resolve_by_typename():
    assert resolve_shape({"__typename": "Image", "url": "x"}, CONTENT_FAMILY) is ImageShape


def test_resolve_by_gid():
    assert resolve_shape({"id": "gid://app/Video/123"}, CONTENT_FAMILY) is VideoShape


def test_typename_takes_precedence_over_gid():
    fields = {"__typename": "Image", "id": "gid://app/Video/123"}
    assert resolve_shape(fields, CONTENT_FAMILY) is ImageShape


def test_non_string_typename_falls_back_to_gid():
    fields = {"__typename": 7, "id": "gid://app/Video/123"}
    assert resolve_discriminator(fields, CONTENT_FAMILY) == "Video"


def test_id_source_used_for_fallback():
    endpoint = {"callbackUrl": "https://hooks.example.com"}
    parent = {"id": "gid://shopify/WebhookHttpEndpoint/9"}
    shape = resolve_shape(endpoint, WEBHOOK_SUBSCRIPTION_FAMILY, id_source=parent)
    assert shape is WebhookHttpEndpoint


def test_undetermined_type():
    with pytest.raises(UndeterminedType):
        resolve_shape({"url": "x"}, CONTENT_FAMILY)


def test_non_string_id_is_undetermined():
    with pytest.raises(UndeterminedType):
        resolve_shape({"id": 123}, CONTENT_FAMILY)


def test_malformed_gid_fails():
    with pytest.raises(MalformedIdentifier):
        resolve_shape({"id": "not-a-gid"}, CONTENT_FAMILY)


def test_unknown_discriminator():
    with pytest.raises(UnknownDiscriminator) as exc_info:
        resolve_shape({"__typename": "Unicorn"}, CONTENT_FAMILY)
    assert exc_info.value.discriminator == "Unicorn"
    assert exc_info.value.family == "Content"


def test_production_media_family_resolves_every_variant():
    for name in MEDIA_FAMILY.registry.names():
        assert resolve_shape({"__typename": name}, MEDIA_FAMILY).TYPENAME == name
    assert resolve_shape({"id": "gid://shopify/MediaImage/1"}, MEDIA_FAMILY) is MediaImage


# ---------------------------------------------------------------------------
# Registry and family construction
# ---------------------------------------------------------------------------

def test_registry_lookup_and_membership():
    registry = ShapeRegistry.of("Media", MediaImage, Video)
    assert registry.lookup("Video") is Video
    assert "MediaImage" in registry
    assert "Unicorn" not in registry
    assert len(registry) == 2
    assert registry.names() == ["MediaImage", "Video"]


def test_registry_copies_its_input():
    shapes = {"Video": Video}
    registry = ShapeRegistry("Media", shapes)
    shapes["MediaImage"] = MediaImage
    assert "MediaImage" not in registry


@pytest.mark.parametrize("pattern", [r"gid://app/\w+/\d+", r"gid://(\w+)/(\w+)/\d+"])
def test_family_rejects_pattern_without_single_group(pattern):
    with pytest.raises(ValueError):
        EntityFamily(name="Content", registry=CONTENT_FAMILY.registry, gid_pattern=pattern)


def test_family_requires_root_shape_with_nested_field():
    with pytest.raises(ValueError):
        EntityFamily(name="Broken", registry=CONTENT_FAMILY.registry, nested_field="endpoint")


def test_with_gid_pattern_leaves_original_untouched():
    derived = MEDIA_FAMILY.with_gid_pattern(r"gid://app/(\w+)/\d+")
    assert derived.gid_pattern.pattern == r"gid://app/(\w+)/\d+"
    assert MEDIA_FAMILY.gid_pattern.pattern != derived.gid_pattern.pattern
    assert derived.registry is MEDIA_FAMILY.registry
