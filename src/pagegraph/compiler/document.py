"""Document assembler and the ``compile_graph`` entry point.

The assembled document is the only output of compilation. Its preamble,
file headers and fence labels are read by the downstream generation step,
so their wording is fixed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pagegraph.compiler.css import render_css
from pagegraph.compiler.diagnostics import DiagnosticKind, Diagnostics, ensure_diagnostics
from pagegraph.compiler.html import render_html
from pagegraph.compiler.js import render_js
from pagegraph.compiler.options import CompileOptions
from pagegraph.compiler.roots import NO_ROOT_MESSAGE, find_roots
from pagegraph.graph.core import Edge, Node, PageGraph
from pagegraph.nodes.payloads import UnknownNode, parse_payload

logger = logging.getLogger(__name__)

JS_HEADER = "/* --- JavaScript Logic --- */\n"
JS_READY_OPEN = "document.addEventListener('DOMContentLoaded', () => {\n"
JS_READY_CLOSE = "});\n"
NO_LOGIC_COMMENT = "// No JavaScript logic defined in the visual plan.\n"

CLOSING_INSTRUCTION = (
    "Please generate the three files exactly as described. The application should be a "
    "polished, functional, and visually appealing translation of this plan. Ensure the "
    "final result is a 'SOOOOOOO GOOOOOD' quality product."
)


def wrap_js(logic: str) -> str:
    """Script body: the logic inside one page-ready block, or a placeholder."""
    if not logic.strip():
        return JS_HEADER + NO_LOGIC_COMMENT
    return JS_HEADER + JS_READY_OPEN + logic + JS_READY_CLOSE


def _file_section(path: str, instruction: str, fence: str, body: str) -> str:
    return f"### File: `{path}`\n{instruction}\n```{fence}\n{body}```\n\n"


def assemble_document(html: str, css: str, js: str, options: CompileOptions | None = None) -> str:
    """Concatenate the generated bodies into the final document.

    Args:
        html: HTML body, including its section marker
        css: CSS body, including base styles
        js: Script body, already wrapped by ``wrap_js``
        options: Target file paths (defaults to ``public/...``)
    """
    options = options or CompileOptions()
    preamble = (
        "Generate a comprehensive, single-page web application based on the following "
        "detailed plan. The application's structure, styling, and interactivity are "
        "explicitly defined below. Create three files: "
        f"`{options.html_path}`, `{options.css_path}`, and `{options.js_path}`.\n\n"
    )
    html_instruction = (
        "This file should contain the following HTML structure. "
        f"It must link to `{options.css_link}` and `{options.js_link}`."
    )
    return "".join(
        [
            preamble,
            _file_section(options.html_path, html_instruction, "html", html),
            _file_section(options.css_path, "This file should contain the following CSS rules.", "css", css),
            _file_section(
                options.js_path, "This file should contain the following JavaScript logic.", "javascript", js
            ),
            CLOSING_INSTRUCTION,
        ]
    )


def _report_graph_problems(graph: PageGraph, diagnostics: Diagnostics) -> None:
    for node in graph.duplicate_nodes:
        diagnostics.report(
            DiagnosticKind.DUPLICATE_NODE,
            f"node id '{node.id}' is used more than once; the later {node.type_tag} node was ignored",
            node_id=node.id,
        )
    for edge in graph.dangling_edges:
        diagnostics.report(
            DiagnosticKind.DANGLING_EDGE,
            f"edge {edge.source_id}.{edge.source_handle} -> {edge.target_id}.{edge.target_handle} "
            f"points at a missing node and was ignored",
            edge=edge,
        )
    for node in graph.nodes:
        if isinstance(parse_payload(node), UnknownNode):
            diagnostics.report(
                DiagnosticKind.UNKNOWN_TYPE,
                f"node '{node.id}' has unknown type '{node.type_tag}' and contributes nothing",
                node_id=node.id,
            )


def compile_graph(
    nodes: Iterable[Node],
    edges: Iterable[Edge],
    *,
    options: CompileOptions | None = None,
    diagnostics: Diagnostics | None = None,
) -> str:
    """Compile a node graph into the three-file generation document.

    Compilation is pure and deterministic: the same graph always yields the
    same text, and the input is never modified. Malformed graphs never raise;
    whatever cannot be compiled is skipped and reported to ``diagnostics``.

    Args:
        nodes: Nodes in editor order
        edges: Edges in editor order
        options: Target file paths named in the document
        diagnostics: Optional collector for skipped items

    Returns:
        The assembled document, or ``NO_ROOT_MESSAGE`` when the graph has no
        root HTML node

    Example:
        >>> doc = compile_graph([Node("1", "html_p", {"childrenText": "Hi"})], [])
        >>> "<p>Hi</p>" in doc
        True
    """
    diagnostics = ensure_diagnostics(diagnostics)
    graph = PageGraph(nodes, edges)
    _report_graph_problems(graph, diagnostics)

    roots = find_roots(graph)
    if not roots:
        diagnostics.report(DiagnosticKind.NO_ROOT, "graph has no root HTML node")
        return NO_ROOT_MESSAGE

    html = render_html(graph, roots, diagnostics=diagnostics)
    css = render_css(graph, diagnostics=diagnostics)
    js = wrap_js(render_js(graph, diagnostics=diagnostics))

    logger.debug("compiled %r from %d roots with %d diagnostics", graph, len(roots), len(diagnostics))
    return assemble_document(html, css, js, options)
