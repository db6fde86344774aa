"""Session-scoped node creation with catalogue defaults."""

from __future__ import annotations

from typing import Any

from pagegraph.exceptions import UnknownNodeTypeError
from pagegraph.graph.core import Node
from pagegraph.nodes.catalogue import get_definition


class NodeFactory:
    """Create nodes the way the editor's palette does.

    Each factory owns its own counter, so two editing sessions never share
    id state. Node ids are the counter value as a string. Element ids
    (the ``id`` attribute) are filled from the label and counter when the
    catalogue entry has an ``id`` field and the caller did not supply one.

    Example:
        >>> factory = NodeFactory()
        >>> node = factory.create("html_button")
        >>> node.id, node.attributes["id"]
        ('1', 'button-1')
    """

    def __init__(self, start: int = 1) -> None:
        self._next = start

    @property
    def next_id(self) -> str:
        """Id the next created node will receive."""
        return str(self._next)

    def _take_id(self) -> str:
        node_id = str(self._next)
        self._next += 1
        return node_id

    def create(self, type_tag: str, **overrides: Any) -> Node:
        """Create a node of ``type_tag`` with defaults merged with ``overrides``.

        Raises:
            UnknownNodeTypeError: If the tag is not in the catalogue
        """
        definition = get_definition(type_tag)
        if definition is None:
            raise UnknownNodeTypeError(type_tag)

        node_id = self._take_id()
        attributes: dict[str, Any] = dict(definition.default_data)
        if "id" in attributes and "id" not in overrides:
            # only the first space is replaced, matching the editor's ids
            slug = definition.label.lower().replace(" ", "-", 1)
            attributes["id"] = f"{slug}-{node_id}"
        attributes.update(overrides)
        return Node(id=node_id, type_tag=type_tag, attributes=attributes)
