"""Rule builder: one CSS rule per styled HTML element."""

from __future__ import annotations

from pagegraph.compiler.diagnostics import DiagnosticKind, Diagnostics, ensure_diagnostics
from pagegraph.graph.core import STYLE, PageGraph
from pagegraph.nodes.payloads import CssDeclaration, HtmlElement, parse_payload

CSS_HEADER = "/* --- CSS Styles --- */\n"

BASE_STYLES = (
    "body {\n"
    "  font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Helvetica, Arial, sans-serif;\n"
    "  margin: 0;\n"
    "  padding: 2rem;\n"
    "  background-color: #f8f9fa;\n"
    "}\n\n"
)

NO_RULES_COMMENT = "/* No CSS rules defined in the visual plan. */\n"


def _declarations(graph: PageGraph, element_node_id: str, diagnostics: Diagnostics) -> list[str]:
    """Declaration lines from the CSS nodes styling one element, in edge order."""
    lines: list[str] = []
    for source in graph.predecessors(element_node_id, STYLE):
        declaration = parse_payload(source)
        if not isinstance(declaration, CssDeclaration):
            continue
        if not declaration.is_complete:
            diagnostics.report(
                DiagnosticKind.INCOMPLETE_DECLARATION,
                f"CSS node '{source.id}' has no property or no value and was skipped",
                node_id=source.id,
            )
            continue
        lines.append(f"  {declaration.name}: {declaration.value};")
    return lines


def render_css(graph: PageGraph, *, diagnostics: Diagnostics | None = None) -> str:
    """Stylesheet body: base styles, then one ``#id`` rule per styled element.

    An element qualifies when it has a non-empty ``id`` and at least one
    incoming ``style`` edge. Rules follow node order, not traversal order. A
    qualifying element whose declarations were all skipped emits no rule.
    """
    diagnostics = ensure_diagnostics(diagnostics)
    parts = [CSS_HEADER, BASE_STYLES]

    qualifying = []
    for node in graph.nodes:
        element = parse_payload(node)
        if isinstance(element, HtmlElement) and element.id and graph.in_edges(node.id, STYLE):
            qualifying.append((node, element))

    if not qualifying:
        parts.append(NO_RULES_COMMENT)
        return "".join(parts)

    for node, element in qualifying:
        lines = _declarations(graph, node.id, diagnostics)
        if not lines:
            continue
        parts.append(f"#{element.id} {{\n" + "\n".join(lines) + "\n}\n\n")

    return "".join(parts)
