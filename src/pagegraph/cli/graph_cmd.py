"""Graph CLI commands: ls, inspect, tree."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from pagegraph.cli._config import load_config
from pagegraph.cli._format import format_attributes, print_json, print_lines, print_table
from pagegraph.compiler import Diagnostics, compile_graph, find_roots
from pagegraph.compiler.html import format_attributes as markup_attributes
from pagegraph.exceptions import GraphLoadError
from pagegraph.graph import CHILDREN, Edge, Node, PageGraph
from pagegraph.graph import load_graph as read_graph_file
from pagegraph.nodes import get_definition
from pagegraph.nodes.payloads import HtmlElement, parse_payload

app = typer.Typer(help="Inspect graph documents.")


def _read(path: Path) -> tuple[list[Node], list[Edge]]:
    try:
        return read_graph_file(path)
    except GraphLoadError as e:
        print(f"Error: {e}")
        raise typer.Exit(1) from e


def load_graph(target: str) -> tuple[list[Node], list[Edge]]:
    """Load a graph by JSON file path or [tool.pagegraph.graphs] name."""
    path = Path(target)
    if path.suffix == ".json" or path.is_file():
        return _read(path)

    config = load_config()
    registered = config.graph_path(target)
    if registered is None:
        print(f"Error: '{target}' is neither a graph file nor registered in [tool.pagegraph.graphs]")
        print("Hint: Pass a JSON file path or register the graph in pyproject.toml:")
        print(f'  [tool.pagegraph.graphs]\n  {target} = "graphs/{target}.json"')
        raise typer.Exit(1)
    return _read(registered)


@app.command("ls")
def graph_ls(
    as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    output: Annotated[str | None, typer.Option("--output", help="Write JSON to file")] = None,
):
    """List registered graphs from [tool.pagegraph.graphs]."""
    config = load_config()

    if as_json:
        print_json("graph.ls", {"graphs": config.graphs}, output)
        return

    if not config.graphs:
        print("\n  No graphs registered in pyproject.toml.")
        print("  Add entries under [tool.pagegraph.graphs]:")
        print('    [tool.pagegraph.graphs]\n    landing = "graphs/landing.json"')
        return

    headers = ["Name", "File"]
    rows = [[name, path] for name, path in sorted(config.graphs.items())]
    lines = print_table(headers, rows)

    print(f"\n  Registered graphs ({len(config.graphs)}):\n")
    print_lines(lines)


@app.command("inspect")
def graph_inspect(
    target: Annotated[str, typer.Argument(help="Graph JSON file or registered name")],
    as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    output: Annotated[str | None, typer.Option("--output", help="Write JSON to file")] = None,
):
    """Show graph structure (nodes, edges, roots, skipped items)."""
    nodes, edges = load_graph(target)
    graph = PageGraph(nodes, edges)
    roots = [root.id for root in find_roots(graph)]
    diagnostics = Diagnostics()
    compile_graph(nodes, edges, diagnostics=diagnostics)

    if as_json:
        data = {
            "nodes": [
                {
                    "id": node.id,
                    "type": node.type_tag,
                    "category": node.category,
                    "attributes": dict(node.attributes),
                }
                for node in graph.nodes
            ],
            "node_count": len(graph),
            "edge_count": len(edges),
            "roots": roots,
            "diagnostics": [
                {"kind": item.kind.value, "message": item.message, "node_id": item.node_id}
                for item in diagnostics
            ],
        }
        print_json("graph.inspect", data, output)
        return

    print(f"\nGraph: {target} | {len(graph)} nodes | {len(edges)} edges\n")

    headers = ["Node", "Type", "Label", "Attributes"]
    rows = []
    for node in graph.nodes:
        definition = get_definition(node.type_tag)
        label = definition.label if definition else "(unknown)"
        rows.append([node.id, node.type_tag, label, format_attributes(dict(node.attributes))])
    print_lines(print_table(headers, rows))

    print(f"\n  Roots: {', '.join(roots) if roots else '—'}")
    if diagnostics:
        print(f"  Skipped items ({len(diagnostics)}):")
        for item in diagnostics:
            print(f"    {item}")

    print(f"\n  For JSON: pagegraph graph inspect {target} --json")


def _tree_label(node: Node, element: HtmlElement) -> str:
    from rich.markup import escape

    return f"[bold]{escape(f'<{element.tag}{markup_attributes(element)}>')}[/bold] [dim]{node.id}[/dim]"


def _add_children(graph: PageGraph, root_branch, root_id: str, seen: set[str]) -> None:
    stack = [(root_branch, root_id)]
    while stack:
        branch, node_id = stack.pop()
        added = []
        for child in graph.successors(node_id, CHILDREN):
            element = parse_payload(child)
            if not isinstance(element, HtmlElement) or child.id in seen:
                continue
            seen.add(child.id)
            added.append((branch.add(_tree_label(child, element)), child.id))
        stack.extend(reversed(added))


@app.command("tree")
def graph_tree(
    target: Annotated[str, typer.Argument(help="Graph JSON file or registered name")],
):
    """Show the HTML element tree under each root."""
    from rich.console import Console
    from rich.tree import Tree

    nodes, edges = load_graph(target)
    graph = PageGraph(nodes, edges)
    roots = find_roots(graph)
    console = Console()

    if not roots:
        console.print("[yellow]No root HTML node (every element has a parent connection).[/yellow]")
        raise typer.Exit(1)

    seen: set[str] = set()
    for root in roots:
        element = parse_payload(root)
        seen.add(root.id)
        tree = Tree(_tree_label(root, element))
        _add_children(graph, tree, root.id, seen)
        console.print(tree)
