"""Exceptions raised at pagegraph's boundaries.

The compiler itself never raises for a malformed graph. These errors are only
raised while loading graph files or creating nodes from the catalogue.
"""

from __future__ import annotations


class GraphLoadError(Exception):
    """A graph document could not be turned into nodes and edges.

    Raised for structural problems in the input file (invalid JSON, entries
    that are not mappings, nodes without an id or type tag). Problems inside a
    well-formed graph, such as dangling edges, are not errors.

    Attributes:
        source: Path or description of the document being loaded
        message: Human-readable error message
    """

    def __init__(self, message: str, *, source: str | None = None) -> None:
        self.source = source
        self.message = message
        super().__init__(self._format())

    def _format(self) -> str:
        if self.source is None:
            return self.message
        return f"{self.source}: {self.message}"


class UnknownNodeTypeError(Exception):
    """Requested type tag is not part of the node catalogue.

    Attributes:
        type_tag: The tag that was requested
        message: Human-readable error message
    """

    def __init__(self, type_tag: str, message: str | None = None) -> None:
        self.type_tag = type_tag
        self.message = message or self._default_message()
        super().__init__(self.message)

    def _default_message(self) -> str:
        return (
            f"Unknown node type: '{self.type_tag}'\n\n"
            f"  -> Type tags must come from the node catalogue\n\n"
            f"How to fix:\n"
            f"  Run 'pagegraph catalogue' to list the available types"
        )
