"""Node catalogue, typed payloads and the node factory."""

from pagegraph.nodes.catalogue import (
    CATEGORIES,
    NODE_LIBRARY,
    NodeDefinition,
    Port,
    definitions_for,
    get_definition,
)
from pagegraph.nodes.factory import NodeFactory
from pagegraph.nodes.payloads import (
    Action,
    CssDeclaration,
    Delay,
    EventTrigger,
    HtmlElement,
    UnknownNode,
    parse_payload,
)

__all__ = [
    "CATEGORIES",
    "NODE_LIBRARY",
    "NodeDefinition",
    "Port",
    "definitions_for",
    "get_definition",
    "NodeFactory",
    "Action",
    "CssDeclaration",
    "Delay",
    "EventTrigger",
    "HtmlElement",
    "UnknownNode",
    "parse_payload",
]
