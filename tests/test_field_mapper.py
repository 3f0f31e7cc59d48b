"""Tests for shop_graphql.field_mapper."""

import copy
from typing import Any, Dict, List, Optional

import pytest
from pydantic import Field, StrictBool, StrictFloat, StrictInt, StrictStr

from shop_graphql.errors import StructuralMappingFailed
from shop_graphql.field_mapper import attribute_for, map_fields, populate
from shop_graphql.models import Image, PageInfo, Shape, Video, VideoSource, WebhookSubscription


class Sample(Shape):
    name: StrictStr = ""
    count: StrictInt = 0
    ratio: StrictFloat = 0.0
    enabled: StrictBool = False
    tags: List[StrictStr] = []
    attributes: Dict[str, StrictInt] = {}
    extra: Any = None
    source_url: Optional[StrictStr] = Field(default="unset", alias="src")


def test_maps_camel_case_keys():
    info = map_fields(
        {"hasNextPage": True, "hasPreviousPage": False, "endCursor": "abc"}, PageInfo
    )
    assert info == PageInfo(has_next_page=True, has_previous_page=False, end_cursor="abc")


def test_explicit_alias():
    sample = map_fields({"src": "https://cdn.example.com/a.png", "sourceUrl": "ignored"}, Sample)
    assert sample.source_url == "https://cdn.example.com/a.png"


def test_attribute_for_alias():
    assert attribute_for(Sample, "src") == "source_url"
    assert attribute_for(Video, "originalSource") == "original_source"
    with pytest.raises(TypeError):
        attribute_for(Video, "missing")


def test_unknown_keys_ignored_and_absent_keys_default():
    sample = map_fields({"name": "a", "__typename": "Sample", "unrelated": [1, 2]}, Sample)
    assert sample.name == "a"
    assert sample.count == 0
    assert sample.tags == []
    assert sample.source_url == "unset"


def test_null_keeps_defaults():
    sample = map_fields({"src": None, "tags": None, "count": None, "extra": None}, Sample)
    assert sample.source_url == "unset"
    assert sample.tags == []
    assert sample.count == 0
    assert sample.extra is None


def test_scalar_values():
    sample = map_fields(
        {"count": 3, "ratio": 2.5, "enabled": True, "attributes": {"a": 1}, "extra": {"x": [1]}},
        Sample,
    )
    assert sample.count == 3
    assert sample.ratio == 2.5
    assert sample.enabled is True
    assert sample.attributes == {"a": 1}
    assert sample.extra == {"x": [1]}


@pytest.mark.parametrize("fields", [
    {"count": "3"},
    {"count": True},
    {"count": 2.5},
    {"count": 3.0},
    {"enabled": "true"},
    {"enabled": 1},
    {"name": 5},
    {"tags": "a,b"},
    {"tags": ["a", 1]},
    {"attributes": []},
])
def test_impossible_conversion_fails(fields):
    with pytest.raises(StructuralMappingFailed):
        map_fields(fields, Sample)


def test_nested_shapes_and_lists():
    video = map_fields(
        {
            "duration": 1000,
            "originalSource": {"url": "https://cdn.example.com/v.mp4", "width": 640},
            "sources": [{"format": "mp4"}, {"format": "m3u8", "height": 480}],
        },
        Video,
    )
    assert video.original_source == VideoSource(url="https://cdn.example.com/v.mp4", width=640)
    assert [s.format for s in video.sources] == ["mp4", "m3u8"]
    assert video.sources[1].height == 480


def test_failure_names_shape_and_list_location():
    with pytest.raises(StructuralMappingFailed) as exc_info:
        map_fields({"sources": [{"height": 1}, {"height": "tall"}]}, Video)
    exc = exc_info.value
    assert exc.location == "sources[1].height"
    assert "Video" in exc.message
    assert "integer" in exc.message


def test_failure_inside_optional_nested_shape_keeps_location():
    with pytest.raises(StructuralMappingFailed) as exc_info:
        map_fields({"originalSource": {"width": "wide"}}, Video)
    assert exc_info.value.location == "originalSource.width"


def test_nested_shape_requires_object():
    with pytest.raises(StructuralMappingFailed) as exc_info:
        map_fields({"originalSource": "https://cdn.example.com/v.mp4"}, Video)
    assert exc_info.value.location == "originalSource"


def test_polymorphic_fields_are_skipped():
    subscription = map_fields(
        {"id": "gid://shopify/WebhookSubscription/1", "endpoint": {"callbackUrl": "x"}},
        WebhookSubscription,
    )
    assert subscription.id == "gid://shopify/WebhookSubscription/1"
    assert subscription.endpoint is None


def test_input_is_not_mutated():
    raw = {"sources": [{"format": "mp4"}], "duration": 1, "filename": None}
    snapshot = copy.deepcopy(raw)
    map_fields(raw, Video)
    assert raw == snapshot


def test_round_trip_on_known_fields():
    raw = {"id": "gid://shopify/ImageSource/1", "url": "https://cdn.example.com/i.png",
           "altText": "front", "width": 10, "height": 20, "unknown": "dropped"}
    image = map_fields(raw, Image)
    known = {"id": image.id, "url": image.url, "altText": image.alt_text,
             "width": image.width, "height": image.height}
    assert known == {k: v for k, v in raw.items() if k != "unknown"}


def test_populate_in_place():
    info = PageInfo(end_cursor="old", has_next_page=True)
    result = populate(info, {"endCursor": "new"})
    assert result is info
    assert info.end_cursor == "new"
    assert info.has_next_page is True


def test_map_fields_rejects_non_model():
    with pytest.raises(TypeError):
        map_fields({}, dict)
