"""pagegraph - compile visual node graphs into HTML, CSS and JavaScript."""

from pagegraph.compiler import (
    NO_ROOT_MESSAGE,
    CompileOptions,
    Diagnostic,
    DiagnosticKind,
    Diagnostics,
    compile_graph,
    find_roots,
)
from pagegraph.exceptions import GraphLoadError, UnknownNodeTypeError
from pagegraph.graph import (
    Edge,
    Node,
    PageGraph,
    graph_from_dict,
    graph_to_dict,
    load_graph,
)
from pagegraph.nodes import NODE_LIBRARY, NodeFactory, get_definition

__all__ = [
    # Compilation
    "compile_graph",
    "find_roots",
    "CompileOptions",
    "NO_ROOT_MESSAGE",
    # Diagnostics
    "Diagnostic",
    "DiagnosticKind",
    "Diagnostics",
    # Graph model
    "Node",
    "Edge",
    "PageGraph",
    "graph_from_dict",
    "graph_to_dict",
    "load_graph",
    # Catalogue
    "NODE_LIBRARY",
    "NodeFactory",
    "get_definition",
    # Errors
    "GraphLoadError",
    "UnknownNodeTypeError",
]
