"""Tree builder: render HTML element nodes and their structural children."""

from __future__ import annotations

from collections.abc import Iterable

from pagegraph.compiler.diagnostics import DiagnosticKind, Diagnostics, ensure_diagnostics, revisit_kind
from pagegraph.graph.core import CHILDREN, Node, PageGraph
from pagegraph.nodes.payloads import HtmlElement, parse_payload

INDENT = "  "
HTML_HEADER = "<!-- --- HTML Structure --- -->\n"


def format_attributes(element: HtmlElement) -> str:
    """Markup attribute string in fixed order, each with a leading space.

    Example:
        >>> format_attributes(HtmlElement("video", id="v", src="a.mp4", controls=True))
        ' id="v" src="a.mp4" controls'
    """
    parts = [f' {key}="{value}"' for key, value in element.markup_attributes()]
    if element.controls:
        parts.append(" controls")
    return "".join(parts)


def render_tree(
    graph: PageGraph,
    node_id: str,
    depth: int = 0,
    *,
    diagnostics: Diagnostics | None = None,
    rendered: dict[str, str | None] | None = None,
) -> str:
    """Render one HTML node and everything below it as indented markup.

    A node with outgoing ``children`` edges opens its tag on its own line,
    renders each child one level deeper and closes at its own indentation.
    A node without children renders inline with its text content. Children
    always win over text.

    Missing or non-HTML nodes render as empty text. ``rendered`` maps the ids
    already emitted in this compilation to the parent they were emitted
    under; reaching one of them again (a cycle, or a second parent edge)
    skips that branch. The walk keeps its own stack, so nesting depth is not
    bounded by the interpreter's recursion limit.

    Args:
        graph: Graph index
        node_id: Node to render
        depth: Indentation level, two spaces per level
        diagnostics: Optional collector for skipped items
        rendered: Ids already rendered; shared across roots of one document

    Returns:
        Markup text ending in a newline, or "" when nothing was rendered
    """
    diagnostics = ensure_diagnostics(diagnostics)
    if rendered is None:
        rendered = {}

    parts: list[str] = []
    # entries are (node_id, parent_id, depth) to visit, or closing tag text
    stack: list[tuple[str, str | None, int] | str] = [(node_id, None, depth)]
    while stack:
        entry = stack.pop()
        if isinstance(entry, str):
            parts.append(entry)
            continue
        current, parent, level = entry
        parts.append(_open(graph, current, parent, level, diagnostics, rendered, stack))
    return "".join(parts)


def _open(
    graph: PageGraph,
    node_id: str,
    parent_id: str | None,
    depth: int,
    diagnostics: Diagnostics,
    rendered: dict[str, str | None],
    stack: list,
) -> str:
    """Markup emitted on entering ``node_id``; schedules its children and closing tag."""
    node = graph.node(node_id)
    if node is None:
        diagnostics.report(DiagnosticKind.DANGLING_EDGE, f"HTML node '{node_id}' does not exist", node_id=node_id)
        return ""

    element = parse_payload(node)
    if not isinstance(element, HtmlElement):
        diagnostics.report(
            DiagnosticKind.NOT_HTML,
            f"node '{node_id}' ({node.type_tag}) is not an HTML element and was left out of the tree",
            node_id=node_id,
        )
        return ""

    if node_id in rendered:
        kind = revisit_kind(rendered, node_id, parent_id)
        if kind is DiagnosticKind.CYCLE:
            message = f"HTML node '{node_id}' is its own ancestor; the repeated branch was skipped"
        else:
            message = f"HTML node '{node_id}' was already rendered under another parent; the branch was skipped"
        diagnostics.report(kind, message, node_id=node_id)
        return ""
    rendered[node_id] = parent_id

    indent = INDENT * depth
    open_tag = f"{indent}<{element.tag}{format_attributes(element)}>"
    child_edges = graph.out_edges(node_id, CHILDREN)

    if not child_edges:
        return f"{open_tag}{element.text}</{element.tag}>\n"

    stack.append(f"{indent}</{element.tag}>\n")
    for edge in reversed(child_edges):
        stack.append((edge.target_id, node_id, depth + 1))
    return open_tag + "\n"


def render_html(
    graph: PageGraph,
    roots: Iterable[Node],
    *,
    diagnostics: Diagnostics | None = None,
) -> str:
    """HTML body for the document: the section marker plus every root tree."""
    diagnostics = ensure_diagnostics(diagnostics)
    rendered: dict[str, str | None] = {}
    trees = [render_tree(graph, root.id, 0, diagnostics=diagnostics, rendered=rendered) for root in roots]
    return HTML_HEADER + "".join(trees)
