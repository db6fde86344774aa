"""Diagnostics: a record of everything the compiler skipped.

Compilation never fails on a malformed graph. Whatever cannot be compiled is
dropped, and each drop is reported here so callers and tests can tell a clean
compilation from a degraded one without parsing the generated text.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum

from pagegraph.graph.core import Edge

logger = logging.getLogger(__name__)


class DiagnosticKind(Enum):
    """Why something was left out of the output."""

    NO_ROOT = "no_root"
    DANGLING_EDGE = "dangling_edge"
    DUPLICATE_NODE = "duplicate_node"
    UNKNOWN_TYPE = "unknown_type"
    NOT_HTML = "not_html"
    CYCLE = "cycle"
    ALREADY_EMITTED = "already_emitted"
    INCOMPLETE_DECLARATION = "incomplete_declaration"
    UNBOUND_EVENT = "unbound_event"
    EMPTY_CHAIN = "empty_chain"
    UNREACHABLE_ACTION = "unreachable_action"


@dataclass(frozen=True)
class Diagnostic:
    """One skipped item.

    Attributes:
        kind: Category of the problem
        message: Human-readable description
        node_id: Node the problem concerns, if any
        edge: Edge the problem concerns, if any
    """

    kind: DiagnosticKind
    message: str
    node_id: str | None = None
    edge: Edge | None = None

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"


class Diagnostics:
    """Ordered collector passed through one compilation.

    Every report is also logged at DEBUG level on this module's logger.
    """

    def __init__(self) -> None:
        self._items: list[Diagnostic] = []

    def report(
        self,
        kind: DiagnosticKind,
        message: str,
        *,
        node_id: str | None = None,
        edge: Edge | None = None,
    ) -> None:
        """Record a skipped item."""
        item = Diagnostic(kind, message, node_id=node_id, edge=edge)
        self._items.append(item)
        logger.debug("%s", item)

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        """All diagnostics of one kind, in report order."""
        return [item for item in self._items if item.kind == kind]

    @property
    def kinds(self) -> set[DiagnosticKind]:
        return {item.kind for item in self._items}

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"Diagnostics({len(self._items)} items)"


def ensure_diagnostics(diagnostics: Diagnostics | None) -> Diagnostics:
    """Use the caller's collector, or a private one when none was given."""
    return diagnostics if diagnostics is not None else Diagnostics()


def revisit_kind(parents: Mapping[str, str | None], node_id: str, via: str | None) -> DiagnosticKind:
    """Classify reaching an already emitted node again.

    ``parents`` maps every emitted node to the node it was emitted under.
    Walking up from ``via`` (the node the repeated edge leaves) tells a true
    cycle, where ``node_id`` is one of its own ancestors, from a second path
    into a shared node.
    """
    current = via
    while current is not None:
        if current == node_id:
            return DiagnosticKind.CYCLE
        current = parents.get(current)
    return DiagnosticKind.ALREADY_EMITTED
