"""Graph package - node/edge model, lookup index and document loading."""

from pagegraph.graph.core import (
    ACTION_IN,
    ACTION_OUT,
    CHILDREN,
    ELEMENT_IN,
    EVENT,
    PARENT,
    STYLE,
    STYLE_OUT,
    Edge,
    Node,
    PageGraph,
    category_of,
)
from pagegraph.graph.io import graph_from_dict, graph_to_dict, load_graph

__all__ = [
    "ACTION_IN",
    "ACTION_OUT",
    "CHILDREN",
    "ELEMENT_IN",
    "EVENT",
    "PARENT",
    "STYLE",
    "STYLE_OUT",
    "Edge",
    "Node",
    "PageGraph",
    "category_of",
    "graph_from_dict",
    "graph_to_dict",
    "load_graph",
]
