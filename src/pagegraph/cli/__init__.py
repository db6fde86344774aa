"""pagegraph CLI: compile and inspect node graphs.

Entry point for the `pagegraph` command. Requires ``pip install pagegraph[cli]``.

Commands:
    compile         Compile a graph into the generation document
    catalogue       List available node types
    graph ls        List registered graphs from pyproject.toml
    graph inspect   Show graph nodes, roots and skipped items
    graph tree      Show the HTML element tree
"""

from __future__ import annotations


def _require_typer():
    """Check that typer is available."""
    try:
        import typer  # noqa: F401
    except ImportError:
        import sys

        print("Error: typer is required for the CLI. Install with: pip install pagegraph[cli]", file=sys.stderr)
        raise SystemExit(1) from None


def create_app():
    """Create the Typer app with all subcommands."""
    _require_typer()

    import typer

    from pagegraph.cli.compile_cmd import register_commands
    from pagegraph.cli.graph_cmd import app as graph_app

    app = typer.Typer(
        name="pagegraph",
        help="Compile visual node graphs into HTML, CSS and JavaScript.",
        no_args_is_help=True,
    )
    app.add_typer(graph_app, name="graph")
    register_commands(app)

    return app


def main():
    """CLI entry point."""
    app = create_app()
    app()
