"""
Connection Unwrapper — Decodes a paginated connection of polymorphic entities.

A connection payload looks like:

    {
      "webhookSubscriptions": {
        "edges": [ { "cursor": "eyJs...", "node": { ...entity... } } ],
        "nodes": [ { ...entity... } ],
        "pageInfo": { "hasNextPage": true, "endCursor": "eyJs..." }
      }
    }

Every element of "edges" and "nodes" is polymorphic, so each one goes through
the full resolve-then-map pipeline of decode_entity() instead of the generic
field mapper. "pageInfo" is never polymorphic and is mapped directly.

Edges and nodes are independent: either, both or neither may be present, and
an absent list decodes as an empty one. A single malformed element fails the
whole connection; no partial result is returned.
"""

import json
from typing import Any, Callable, Dict, List, Optional, Union

from .decoder import decode_entity
from .errors import DecodeError, MissingContainer
from .field_mapper import map_fields
from .models import Connection, Edge, PageInfo
from .raw import expect_mapping, optional_list, optional_mapping, optional_string
from .registry import EntityFamily


def decode_edge(raw_edge: Any, family: EntityFamily) -> Edge:
    """Decode one {cursor, node} edge.

    An absent cursor reads as ""; a present one, null included, must be a
    string. An absent or null node (a cursor-only
    selection) leaves Edge.node as None.

    Raises:
        MalformedElement: If the edge is not an object or its cursor is not a string.
    """
    edge = expect_mapping(raw_edge, "edge")
    cursor = optional_string(edge, "cursor")
    node = None
    if edge.get("node") is not None:
        try:
            node = decode_entity(edge["node"], family)
        except DecodeError as exc:
            exc.add_context("node")
            raise
    return Edge(cursor=cursor, node=node)


def unwrap_connection(
    document: Any,
    container_key: Optional[str],
    family: EntityFamily,
) -> Connection:
    """Decode the connection held under document[container_key].

    Args:
        document: The parsed GraphQL "data" object (or any object holding the
            connection).
        container_key: Key of the connection inside document, or None when the
            document is itself the connection.
        family: Entity family of the connection's elements.

    Returns:
        A Connection with edges, nodes and page_info decoded.

    Raises:
        MissingContainer: If container_key is absent or not an object.
        DecodeError: Any failure decoding an element, with its location.
    """
    document = expect_mapping(document, "document")
    if container_key is None:
        data = document
    else:
        data = document.get(container_key)
        if not isinstance(data, dict):
            raise MissingContainer(f"missing connection '{container_key}'")

    try:
        return Connection(
            edges=_decode_elements(data, "edges", lambda raw: decode_edge(raw, family)),
            nodes=_decode_elements(data, "nodes", lambda raw: decode_entity(raw, family)),
            page_info=_decode_page_info(data),
        )
    except DecodeError as exc:
        if container_key is not None:
            exc.add_context(container_key)
        raise


def decode_connection_json(
    payload: Union[str, bytes],
    container_key: Optional[str],
    family: EntityFamily,
) -> Connection:
    """Parse serialized JSON and unwrap the connection it holds.

    Raises:
        json.JSONDecodeError: If payload is not valid JSON.
    """
    return unwrap_connection(json.loads(payload), container_key, family)


def _decode_elements(
    data: Dict[str, Any],
    key: str,
    decode: Callable[[Any], Any],
) -> List[Any]:
    decoded = []
    try:
        for index, raw in enumerate(optional_list(data, key)):
            try:
                decoded.append(decode(raw))
            except DecodeError as exc:
                exc.add_context(f"[{index}]")
                raise
    except DecodeError as exc:
        exc.add_context(key)
        raise
    return decoded


def _decode_page_info(data: Dict[str, Any]) -> Optional[PageInfo]:
    try:
        raw = optional_mapping(data, "pageInfo")
        if raw is None:
            return None
        return map_fields(raw, PageInfo)
    except DecodeError as exc:
        exc.add_context("pageInfo")
        raise
