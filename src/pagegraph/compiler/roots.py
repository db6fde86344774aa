"""Root resolution: the HTML nodes compilation starts from."""

from __future__ import annotations

from pagegraph.graph.core import PARENT, Node, PageGraph
from pagegraph.nodes.payloads import HtmlElement, parse_payload

NO_ROOT_MESSAGE = (
    "The visual plan must contain at least one root HTML node "
    "(a node without a parent connection) to begin generation."
)


def is_html_element(node: Node | None) -> bool:
    """True for nodes whose tag is a catalogue HTML element."""
    return node is not None and isinstance(parse_payload(node), HtmlElement)


def find_roots(graph: PageGraph) -> list[Node]:
    """HTML nodes with no incoming ``parent`` edge, in input order.

    Dangling parent edges do not count, so a node whose only parent is
    missing is a root.
    """
    return [
        node
        for node in graph.nodes
        if is_html_element(node) and not graph.in_edges(node.id, PARENT)
    ]
