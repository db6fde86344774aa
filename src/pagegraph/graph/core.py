"""Graph model: nodes, edges and the lookup index the compiler walks."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import networkx as nx

# Handle names. An edge's handles encode what the connection means.
CHILDREN = "children"
PARENT = "parent"
STYLE = "style"
STYLE_OUT = "style_out"
EVENT = "event"
ELEMENT_IN = "element_in"
ACTION_IN = "action_in"
ACTION_OUT = "action_out"

_CATEGORY_PREFIXES = (
    ("html_", "html"),
    ("css_", "css"),
    ("js_", "javascript"),
)


def category_of(type_tag: str) -> str | None:
    """Derive a node category from its type tag namespace.

    Examples:
        >>> category_of("html_div")
        'html'
        >>> category_of("js_event_on_click")
        'javascript'
        >>> category_of("svg_circle") is None
        True
    """
    for prefix, category in _CATEGORY_PREFIXES:
        if type_tag.startswith(prefix):
            return category
    return None


@dataclass(frozen=True)
class Node:
    """A typed node placed by the editor.

    Attributes:
        id: Unique identity within a graph
        type_tag: Catalogue tag, e.g. 'html_button' or 'js_action_alert'
        attributes: Field values keyed by the editor's field names
    """

    id: str
    type_tag: str
    attributes: Mapping[str, Any] = field(default_factory=dict)

    @property
    def category(self) -> str | None:
        """'html', 'css', 'javascript', or None for foreign tags."""
        return category_of(self.type_tag)

    def get(self, name: str, default: Any = None) -> Any:
        """Attribute value by field name."""
        return self.attributes.get(name, default)


@dataclass(frozen=True)
class Edge:
    """A directed connection between two node ports.

    Attributes:
        source_id: Id of the node the edge leaves
        source_handle: Output port name, e.g. 'children', 'action_out'
        target_id: Id of the node the edge enters
        target_handle: Input port name, e.g. 'parent', 'style'
    """

    source_id: str
    source_handle: str
    target_id: str
    target_handle: str


class PageGraph:
    """Read-only index over one snapshot of nodes and edges.

    PageGraph never mutates its input. Lookups preserve the order in which
    nodes and edges were supplied, which is what makes compilation
    deterministic.

    Malformed input is kept out of the index instead of rejected:

    - a node whose id was already seen is recorded in ``duplicate_nodes``
    - an edge whose source or target is missing is recorded in
      ``dangling_edges`` and behaves as if it did not exist

    Example:
        >>> g = PageGraph(
        ...     [Node("1", "html_div"), Node("2", "html_p")],
        ...     [Edge("1", "children", "2", "parent")],
        ... )
        >>> [e.target_id for e in g.out_edges("1", CHILDREN)]
        ['2']
    """

    def __init__(self, nodes: Iterable[Node], edges: Iterable[Edge]) -> None:
        self.duplicate_nodes: list[Node] = []
        self.dangling_edges: list[Edge] = []
        self._nodes = self._build_nodes_dict(nodes)
        self._nx_graph = self._build_graph(edges)

    def _build_nodes_dict(self, nodes: Iterable[Node]) -> dict[str, Node]:
        """Index nodes by id; the first node with a given id wins."""
        result: dict[str, Node] = {}
        for node in nodes:
            if node.id in result:
                self.duplicate_nodes.append(node)
                continue
            result[node.id] = node
        return result

    def _build_graph(self, edges: Iterable[Edge]) -> nx.MultiDiGraph:
        """Build a MultiDiGraph keyed by input edge position.

        Parallel edges are legal (two style edges from the same CSS node), so
        every edge gets its own key and remembers its input position.
        """
        G = nx.MultiDiGraph()
        for node in self._nodes.values():
            G.add_node(node.id, type_tag=node.type_tag, category=node.category)

        for order, edge in enumerate(edges):
            if edge.source_id not in self._nodes or edge.target_id not in self._nodes:
                self.dangling_edges.append(edge)
                continue
            G.add_edge(
                edge.source_id,
                edge.target_id,
                key=order,
                order=order,
                edge=edge,
            )
        return G

    @property
    def nx_graph(self) -> nx.MultiDiGraph:
        """Underlying NetworkX graph (valid edges only)."""
        return self._nx_graph

    @property
    def nodes(self) -> list[Node]:
        """Nodes in input order, duplicates removed."""
        return list(self._nodes.values())

    @property
    def edges(self) -> list[Edge]:
        """Valid edges in input order."""
        data = sorted(self._nx_graph.edges(data=True), key=lambda e: e[2]["order"])
        return [attrs["edge"] for _, _, attrs in data]

    def node(self, node_id: str) -> Node | None:
        """Node by id, or None if it does not exist."""
        return self._nodes.get(node_id)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def out_edges(self, node_id: str, handle: str | None = None) -> list[Edge]:
        """Outgoing edges of a node in input order, optionally by source handle."""
        if node_id not in self._nodes:
            return []
        data = self._nx_graph.out_edges(node_id, data=True)
        return _ordered(data, lambda e: handle is None or e.source_handle == handle)

    def in_edges(self, node_id: str, handle: str | None = None) -> list[Edge]:
        """Incoming edges of a node in input order, optionally by target handle."""
        if node_id not in self._nodes:
            return []
        data = self._nx_graph.in_edges(node_id, data=True)
        return _ordered(data, lambda e: handle is None or e.target_handle == handle)

    def successors(self, node_id: str, handle: str) -> list[Node]:
        """Target nodes of the outgoing edges on ``handle``, in edge order."""
        return [self._nodes[e.target_id] for e in self.out_edges(node_id, handle)]

    def predecessors(self, node_id: str, handle: str) -> list[Node]:
        """Source nodes of the incoming edges on ``handle``, in edge order."""
        return [self._nodes[e.source_id] for e in self.in_edges(node_id, handle)]

    def __repr__(self) -> str:
        return f"PageGraph({len(self._nodes)} nodes, {self._nx_graph.number_of_edges()} edges)"


def _ordered(data: Iterable[tuple[str, str, dict[str, Any]]], keep) -> list[Edge]:
    """Restore input order of edges returned by NetworkX and filter them."""
    ordered = sorted(data, key=lambda e: e[2]["order"])
    return [attrs["edge"] for _, _, attrs in ordered if keep(attrs["edge"])]
