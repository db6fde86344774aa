"""Load and dump graph documents.

A graph document is a JSON object with ``nodes`` and ``edges`` arrays. Two
entry shapes are accepted:

- the plain shape: ``{"id", "typeTag", "attributes"}`` and
  ``{"sourceId", "sourceHandle", "targetId", "targetHandle"}``
- the editor's wire shape: ``{"id", "data": {"nodeType", ...}}`` and
  ``{"source", "sourceHandle", "target", "targetHandle"}``

Only structural problems raise ``GraphLoadError``. A dangling edge or an
unknown type tag is still a loadable graph.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pagegraph.exceptions import GraphLoadError
from pagegraph.graph.core import Edge, Node

# Editor-only keys that are not node attributes
_EDITOR_DATA_KEYS = frozenset({"nodeType", "onDataChange"})


def _node_from_dict(entry: Any, index: int, source: str | None) -> Node:
    if not isinstance(entry, Mapping):
        raise GraphLoadError(f"nodes[{index}] must be an object, got {type(entry).__name__}", source=source)

    node_id = entry.get("id")
    if node_id is None or node_id == "":
        raise GraphLoadError(f"nodes[{index}] has no 'id'", source=source)

    if "typeTag" in entry:
        type_tag = entry["typeTag"]
        attributes = entry.get("attributes") or {}
    else:
        data = entry.get("data") or {}
        if not isinstance(data, Mapping):
            raise GraphLoadError(f"nodes[{index}].data must be an object", source=source)
        type_tag = data.get("nodeType")
        attributes = {k: v for k, v in data.items() if k not in _EDITOR_DATA_KEYS}

    if not isinstance(type_tag, str) or not type_tag:
        raise GraphLoadError(
            f"nodes[{index}] (id '{node_id}') has no type tag ('typeTag' or 'data.nodeType')",
            source=source,
        )
    if not isinstance(attributes, Mapping):
        raise GraphLoadError(f"nodes[{index}].attributes must be an object", source=source)

    return Node(id=str(node_id), type_tag=type_tag, attributes=dict(attributes))


def _edge_from_dict(entry: Any, index: int, source: str | None) -> Edge:
    if not isinstance(entry, Mapping):
        raise GraphLoadError(f"edges[{index}] must be an object, got {type(entry).__name__}", source=source)

    source_id = entry.get("sourceId", entry.get("source"))
    target_id = entry.get("targetId", entry.get("target"))
    if source_id is None or target_id is None:
        raise GraphLoadError(f"edges[{index}] needs both a source and a target id", source=source)

    return Edge(
        source_id=str(source_id),
        source_handle=entry.get("sourceHandle") or "",
        target_id=str(target_id),
        target_handle=entry.get("targetHandle") or "",
    )


def graph_from_dict(data: Any, *, source: str | None = None) -> tuple[list[Node], list[Edge]]:
    """Parse a graph document into ordered node and edge lists.

    Args:
        data: Decoded JSON document
        source: Optional description used in error messages

    Raises:
        GraphLoadError: If the document is not structurally a graph
    """
    if not isinstance(data, Mapping):
        raise GraphLoadError(f"graph document must be an object, got {type(data).__name__}", source=source)

    raw_nodes = data.get("nodes", [])
    raw_edges = data.get("edges", [])
    if not isinstance(raw_nodes, list) or not isinstance(raw_edges, list):
        raise GraphLoadError("'nodes' and 'edges' must be arrays", source=source)

    nodes = [_node_from_dict(entry, i, source) for i, entry in enumerate(raw_nodes)]
    edges = [_edge_from_dict(entry, i, source) for i, entry in enumerate(raw_edges)]
    return nodes, edges


def load_graph(path: str | Path) -> tuple[list[Node], list[Edge]]:
    """Read a graph document from a JSON file.

    Raises:
        GraphLoadError: If the file is missing, not JSON, or not a graph
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise GraphLoadError(f"cannot read file: {e.strerror or e}", source=str(path)) from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise GraphLoadError(f"invalid JSON at line {e.lineno}, column {e.colno}: {e.msg}", source=str(path)) from e

    return graph_from_dict(data, source=str(path))


def graph_to_dict(nodes: Iterable[Node], edges: Iterable[Edge]) -> dict[str, list[dict[str, Any]]]:
    """Serialise nodes and edges to the plain document shape."""
    return {
        "nodes": [
            {"id": node.id, "typeTag": node.type_tag, "attributes": dict(node.attributes)}
            for node in nodes
        ],
        "edges": [
            {
                "sourceId": edge.source_id,
                "sourceHandle": edge.source_handle,
                "targetId": edge.target_id,
                "targetHandle": edge.target_handle,
            }
            for edge in edges
        ],
    }
