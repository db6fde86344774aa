"""CLI commands for compiling graphs and browsing the node catalogue.

Provides `pagegraph compile` and `pagegraph catalogue` as top-level commands.
"""

from __future__ import annotations

import logging
import sys
from typing import Annotated

import typer

from pagegraph.cli._config import load_config
from pagegraph.cli._format import print_json, print_lines, print_table
from pagegraph.cli.graph_cmd import load_graph
from pagegraph.compiler import Diagnostics, compile_graph
from pagegraph.nodes import CATEGORIES, NODE_LIBRARY, definitions_for


def _diagnostics_to_list(diagnostics: Diagnostics) -> list[dict[str, str | None]]:
    return [
        {"kind": item.kind.value, "message": item.message, "node_id": item.node_id}
        for item in diagnostics
    ]


def register_commands(app: typer.Typer) -> None:
    """Register `compile` and `catalogue` as top-level commands on the app."""

    @app.command("compile")
    def compile_cmd(
        target: Annotated[str, typer.Argument(help="Graph JSON file or registered name")],
        output: Annotated[str | None, typer.Option("--output", "-o", help="Write the document to a file")] = None,
        as_json: Annotated[bool, typer.Option("--json", help="Output document and diagnostics as JSON")] = False,
        show_diagnostics: Annotated[
            bool, typer.Option("--diagnostics", help="List skipped items on stderr")
        ] = False,
        verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    ):
        """Compile a graph into the HTML/CSS/JS generation document."""
        if verbose:
            logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s", stream=sys.stderr)

        nodes, edges = load_graph(target)
        options = load_config().to_options()
        diagnostics = Diagnostics()
        document = compile_graph(nodes, edges, options=options, diagnostics=diagnostics)

        if as_json:
            data = {
                "document": document,
                "diagnostics": _diagnostics_to_list(diagnostics),
            }
            print_json("compile", data, output)
            return

        if output:
            with open(output, "w", encoding="utf-8") as f:
                f.write(document)
            print(f"Wrote document to {output} ({len(document.encode()) / 1024:.1f}KB)")
        else:
            print(document)

        if show_diagnostics:
            print(f"\n{len(diagnostics)} skipped item(s)", file=sys.stderr)
            for item in diagnostics:
                print(f"  {item}", file=sys.stderr)

    @app.command("catalogue")
    def catalogue_cmd(
        category: Annotated[
            str | None, typer.Option("--category", "-c", help="Only 'html', 'css' or 'javascript' nodes")
        ] = None,
        as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
        output: Annotated[str | None, typer.Option("--output", help="Write JSON to file")] = None,
    ):
        """List the node types available to graphs."""
        if category is not None and category not in CATEGORIES:
            print(f"Error: Unknown category '{category}'. Use one of: {', '.join(CATEGORIES)}")
            raise typer.Exit(1)

        definitions = definitions_for(category) if category else list(NODE_LIBRARY)

        if as_json:
            data = [
                {
                    "type": d.type_tag,
                    "label": d.label,
                    "category": d.category,
                    "description": d.description,
                    "defaults": d.default_data,
                    "handles": list(d.handles),
                }
                for d in definitions
            ]
            print_json("catalogue", data, output)
            return

        headers = ["Type", "Label", "Category", "Description"]
        rows = [[d.type_tag, d.label, d.category, d.description] for d in definitions]
        print(f"\n  Node types ({len(rows)}):\n")
        print_lines(print_table(headers, rows))
