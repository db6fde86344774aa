"""Logic compiler: event nodes and their action chains to JavaScript.

Each event node owns one or more action chains (one per outgoing
``action_out`` edge). A chain is walked along ``action_out`` -> ``action_in``
edges and every action node becomes one statement.

The delay action changes the shape of the output. Its successor chain is
compiled as a nested block inside ``setTimeout`` and the outer walk ends at
the delay node: actions are never resumed after the timeout block. Existing
graphs are built around this nested-and-terminated shape, so it is kept.
"""

from __future__ import annotations

import re

from pagegraph.compiler.diagnostics import DiagnosticKind, Diagnostics, ensure_diagnostics, revisit_kind
from pagegraph.graph.core import ACTION_OUT, ELEMENT_IN, Node, PageGraph
from pagegraph.nodes.payloads import (
    AddClass,
    Alert,
    ConsoleLog,
    Delay,
    EventTrigger,
    FetchApi,
    HtmlElement,
    Payload,
    Redirect,
    RemoveClass,
    SetAttribute,
    SetCssProperty,
    SetText,
    ToggleClass,
    parse_payload,
)

DEFAULT_INDENT = "  "

_UNSAFE_IDENTIFIER_RE = re.compile(r"[^A-Za-z0-9_]")

_JS_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
}


def js_string(value: str) -> str:
    """Single-quoted JavaScript string literal.

    Example:
        >>> js_string("it's")
        "'it\\\\'s'"
    """
    return "'" + "".join(_JS_ESCAPES.get(ch, ch) for ch in value) + "'"


def element_variable(element_id: str) -> str:
    """JavaScript variable name holding the element with ``element_id``.

    Example:
        >>> element_variable("main-button")
        'element_main_button'
    """
    return "element_" + _UNSAFE_IDENTIFIER_RE.sub("_", element_id)


def _query(selector: str) -> str:
    return f"document.querySelector({js_string(selector)})"


def action_statement(action: Payload) -> str | None:
    """The single statement an action compiles to, or None for non-actions.

    Delay is not handled here; it wraps a nested chain instead.
    """
    if isinstance(action, Alert):
        return f"alert({js_string(action.message)});"
    if isinstance(action, ConsoleLog):
        return f"console.log({js_string(action.message)});"
    if isinstance(action, ToggleClass):
        return f"{_query(action.selector)}?.classList.toggle({js_string(action.class_name)});"
    if isinstance(action, AddClass):
        return f"{_query(action.selector)}?.classList.add({js_string(action.class_name)});"
    if isinstance(action, RemoveClass):
        return f"{_query(action.selector)}?.classList.remove({js_string(action.class_name)});"
    if isinstance(action, SetText):
        return f"{_query(action.selector)}.textContent = {js_string(action.text)};"
    if isinstance(action, SetAttribute):
        return (
            f"{_query(action.selector)}?.setAttribute("
            f"{js_string(action.attribute)}, {js_string(action.value)});"
        )
    if isinstance(action, SetCssProperty):
        return f"{_query(action.selector)}.style.{action.property} = {js_string(action.value)};"
    if isinstance(action, FetchApi):
        return f"fetch({js_string(action.url)}).then(res => res.json()).then(data => console.log(data));"
    if isinstance(action, Redirect):
        return f"window.location.href = {js_string(action.url)};"
    return None


class _ChainCompiler:
    """Walks action chains for one event node.

    Chains are walked with an explicit work stack instead of recursion, so
    long runs of nested delays are not bounded by the interpreter's
    recursion limit. A work item is either a chain to walk,
    ``(start_id, previous_id, level)``, or a finished line of text.
    """

    def __init__(self, graph: PageGraph, indent: str, diagnostics: Diagnostics) -> None:
        self._graph = graph
        self._indent = indent
        self._diagnostics = diagnostics

    def compile(self, start_id: str, level: int, visited: dict[str, str | None]) -> list[str]:
        """Statement lines for the chain starting at ``start_id``.

        The first outgoing ``action_out`` edge of each action continues the
        walk. Any further outgoing edges start parallel chains, compiled at
        the same level once this chain has ended. ``visited`` maps each
        emitted action to the action it followed; it is shared by the whole
        branch and stops the walk on cycles.
        """
        lines: list[str] = []
        stack: list[tuple[str, str | None, int] | str] = [(start_id, None, level)]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                lines.append(item)
                continue
            follow_up = self._walk(*item, visited, lines)
            stack.extend(reversed(follow_up))
        return lines

    def _walk(
        self,
        start_id: str,
        previous_id: str | None,
        level: int,
        visited: dict[str, str | None],
        lines: list[str],
    ) -> list:
        """Emit one linear chain into ``lines``; return the work that follows it, in order."""
        graph = self._graph
        pad = self._indent * level
        nested: list = []
        forks: list = []

        current, previous = start_id, previous_id
        while True:
            node = graph.node(current)
            if node is None:
                break
            if current in visited:
                self._report_revisit(current, previous, visited)
                break
            visited[current] = previous

            payload = parse_payload(node)
            next_edges = graph.out_edges(current, ACTION_OUT)

            if isinstance(payload, Delay):
                nested = self._open_delay(node, payload, next_edges, level, lines)
                # the delay consumes the rest of this branch
                break

            statement = action_statement(payload)
            if statement is not None:
                lines.append(pad + statement)

            if not next_edges:
                break
            forks.extend((edge.target_id, edge.source_id, level) for edge in next_edges[1:])
            previous, current = current, next_edges[0].target_id

        return nested + forks

    def _open_delay(self, node: Node, delay: Delay, next_edges, level: int, lines: list[str]) -> list:
        """Emit the ``setTimeout`` opening; return the nested chain and the closing line."""
        if not next_edges:
            return []
        for edge in next_edges[1:]:
            self._diagnostics.report(
                DiagnosticKind.UNREACHABLE_ACTION,
                f"action '{edge.target_id}' follows delay '{node.id}' on a second edge and is never emitted",
                node_id=edge.target_id,
                edge=edge,
            )
        pad = self._indent * level
        lines.append(f"{pad}setTimeout(() => {{")
        return [(next_edges[0].target_id, node.id, level + 1), f"{pad}}}, {delay.delay});"]

    def _report_revisit(self, node_id: str, previous_id: str | None, visited: dict[str, str | None]) -> None:
        kind = revisit_kind(visited, node_id, previous_id)
        if kind is DiagnosticKind.CYCLE:
            message = f"action '{node_id}' is part of a cycle; the chain stops here"
        else:
            message = f"action '{node_id}' was already emitted on another path; the chain stops here"
        self._diagnostics.report(kind, message, node_id=node_id)


def _bound_element(graph: PageGraph, event_node: Node) -> HtmlElement | None:
    """Element an event is attached to: the source of its first ``element_in`` edge."""
    sources = graph.predecessors(event_node.id, ELEMENT_IN)
    if not sources:
        return None
    element = parse_payload(sources[0])
    if not isinstance(element, HtmlElement) or not element.id:
        return None
    return element


def _unique_variable(element_id: str, taken: set[str]) -> str:
    """Element variable name not yet declared in this script.

    Example:
        >>> _unique_variable("go", {"element_go"})
        'element_go_2'
    """
    base = element_variable(element_id)
    name = base
    suffix = 2
    while name in taken:
        name = f"{base}_{suffix}"
        suffix += 1
    taken.add(name)
    return name


def _compile_event(
    graph: PageGraph,
    event_node: Node,
    event: EventTrigger,
    indent: str,
    diagnostics: Diagnostics,
    variables: set[str],
) -> str:
    element = None
    if not event.is_load:
        element = _bound_element(graph, event_node)
        if element is None:
            diagnostics.report(
                DiagnosticKind.UNBOUND_EVENT,
                f"event '{event_node.id}' ({event.kind}) is not bound to an HTML element with an id",
                node_id=event_node.id,
            )
            return ""

    # load actions sit inside the ready wrapper; others inside guard + listener
    level = 1 if event.is_load else 3
    chains = _ChainCompiler(graph, indent, diagnostics)
    lines: list[str] = []
    for edge in graph.out_edges(event_node.id, ACTION_OUT):
        lines.extend(chains.compile(edge.target_id, level, {}))

    if not lines:
        diagnostics.report(
            DiagnosticKind.EMPTY_CHAIN,
            f"event '{event_node.id}' ({event.kind}) has no actions",
            node_id=event_node.id,
        )
        return ""

    body = "".join(f"{line}\n" for line in lines)
    if element is None:
        return f"\n{indent}/* On page load actions */\n{body}"

    var = _unique_variable(element.id, variables)
    return (
        f"\n{indent}const {var} = document.getElementById({js_string(element.id)});\n"
        f"{indent}if ({var}) {{\n"
        f"{indent * 2}{var}.addEventListener({js_string(event.kind)}, () => {{\n"
        f"{body}"
        f"{indent * 2}}});\n"
        f"{indent}}}\n"
    )


def render_js(
    graph: PageGraph,
    base_indent: str = DEFAULT_INDENT,
    *,
    diagnostics: Diagnostics | None = None,
) -> str:
    """JavaScript logic for every event node, in node order.

    The result is meant to be placed inside a page-ready wrapper; it is empty
    when no event produced any statement. Every listener declares its own
    element variable; a second listener on the same element, or on an id
    that sanitises to the same name, gets a numbered variable.
    """
    diagnostics = ensure_diagnostics(diagnostics)
    variables: set[str] = set()
    parts = []
    for node in graph.nodes:
        event = parse_payload(node)
        if isinstance(event, EventTrigger):
            parts.append(_compile_event(graph, node, event, base_indent, diagnostics, variables))
    return "".join(parts)
