"""Typed node payloads.

The editor stores node fields as a free-form attribute bag. The compiler
never reads that bag directly: ``parse_payload`` turns each node into exactly
one of the frozen dataclasses below, so every field the builders touch is
present and already normalised to text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pagegraph.graph.core import Node
from pagegraph.nodes.catalogue import get_definition

EVENT_PREFIX = "js_event_on_"
DELAY_TAG = "js_action_set_timeout"


def format_value(value: Any) -> str:
    """Render an attribute value the way the generated JavaScript would.

    Examples:
        >>> format_value(None)
        ''
        >>> format_value(1000.0)
        '1000'
        >>> format_value(True)
        'true'
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _text(node: Node, name: str) -> str:
    value = node.get(name)
    # false-y booleans are treated as absent, like an empty field
    if value is False:
        return ""
    return format_value(value)


@dataclass(frozen=True)
class HtmlElement:
    """An HTML element node."""

    tag: str
    id: str = ""
    class_name: str = ""
    src: str = ""
    alt: str = ""
    href: str = ""
    for_id: str = ""
    placeholder: str = ""
    type: str = ""
    value: str = ""
    controls: bool = False
    text: str = ""

    def markup_attributes(self) -> list[tuple[str, str]]:
        """Non-empty markup attributes in their fixed output order."""
        ordered = [
            ("id", self.id),
            ("class", self.class_name),
            ("src", self.src),
            ("alt", self.alt),
            ("href", self.href),
            ("for", self.for_id),
            ("placeholder", self.placeholder),
            ("type", self.type),
            ("value", self.value),
        ]
        return [(key, value) for key, value in ordered if value]


@dataclass(frozen=True)
class CssDeclaration:
    """A single CSS declaration: property ``name`` and its ``value``."""

    name: str = ""
    value: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.name) and bool(self.value)


@dataclass(frozen=True)
class EventTrigger:
    """A JavaScript event; ``kind`` is the DOM event name."""

    kind: str

    @property
    def is_load(self) -> bool:
        return self.kind == "load"


class Action:
    """Base class for action payloads."""


@dataclass(frozen=True)
class Alert(Action):
    message: str = ""


@dataclass(frozen=True)
class ConsoleLog(Action):
    message: str = ""


@dataclass(frozen=True)
class ToggleClass(Action):
    selector: str = ""
    class_name: str = ""


@dataclass(frozen=True)
class AddClass(Action):
    selector: str = ""
    class_name: str = ""


@dataclass(frozen=True)
class RemoveClass(Action):
    selector: str = ""
    class_name: str = ""


@dataclass(frozen=True)
class SetText(Action):
    selector: str = ""
    text: str = ""


@dataclass(frozen=True)
class SetAttribute(Action):
    selector: str = ""
    attribute: str = ""
    value: str = ""


@dataclass(frozen=True)
class SetCssProperty(Action):
    selector: str = ""
    property: str = ""
    value: str = ""


@dataclass(frozen=True)
class FetchApi(Action):
    url: str = ""


@dataclass(frozen=True)
class Redirect(Action):
    url: str = ""


@dataclass(frozen=True)
class Delay(Action):
    """Defers the rest of its chain; ``delay`` is in milliseconds."""

    delay: str = "0"


@dataclass(frozen=True)
class UnknownNode:
    """Anything outside the catalogue. Contributes nothing to the output."""

    type_tag: str


Payload = HtmlElement | CssDeclaration | EventTrigger | Action | UnknownNode


def _parse_html(node: Node, default_tag: str) -> HtmlElement:
    return HtmlElement(
        tag=_text(node, "tag") or default_tag,
        id=_text(node, "id"),
        class_name=_text(node, "className"),
        src=_text(node, "src"),
        alt=_text(node, "alt"),
        href=_text(node, "href"),
        for_id=_text(node, "forId"),
        placeholder=_text(node, "placeholder"),
        type=_text(node, "type"),
        value=_text(node, "value"),
        controls=bool(node.get("controls")),
        text=_text(node, "childrenText"),
    )


def _parse_selector_class(cls: type, node: Node) -> Action:
    return cls(selector=_text(node, "selector"), class_name=_text(node, "className"))


_ACTION_PARSERS = {
    "js_action_alert": lambda n: Alert(message=_text(n, "message")),
    "js_action_console_log": lambda n: ConsoleLog(message=_text(n, "message")),
    "js_action_toggle_class": lambda n: _parse_selector_class(ToggleClass, n),
    "js_action_add_class": lambda n: _parse_selector_class(AddClass, n),
    "js_action_remove_class": lambda n: _parse_selector_class(RemoveClass, n),
    "js_action_set_text": lambda n: SetText(selector=_text(n, "selector"), text=_text(n, "text")),
    "js_action_set_attribute": lambda n: SetAttribute(
        selector=_text(n, "selector"),
        attribute=_text(n, "attribute"),
        value=_text(n, "value"),
    ),
    "js_action_set_css_property": lambda n: SetCssProperty(
        selector=_text(n, "selector"),
        property=_text(n, "property"),
        value=_text(n, "value"),
    ),
    "js_action_fetch_api": lambda n: FetchApi(url=_text(n, "url")),
    "js_action_redirect": lambda n: Redirect(url=_text(n, "url")),
    DELAY_TAG: lambda n: Delay(delay=_text(n, "delay") or "0"),
}


def parse_payload(node: Node) -> Payload:
    """Map a node onto its typed payload.

    Unknown tags, including tags whose namespace looks valid but which are not
    in the catalogue, become ``UnknownNode``.

    Example:
        >>> parse_payload(Node("1", "js_action_alert", {"message": "hi"}))
        Alert(message='hi')
    """
    definition = get_definition(node.type_tag)
    if definition is None:
        return UnknownNode(node.type_tag)

    if definition.category == "html":
        return _parse_html(node, definition.default_data.get("tag", ""))
    if definition.category == "css":
        return CssDeclaration(name=_text(node, "property"), value=_text(node, "value"))
    if node.type_tag.startswith(EVENT_PREFIX):
        return EventTrigger(kind=node.type_tag[len(EVENT_PREFIX) :])

    parser = _ACTION_PARSERS.get(node.type_tag)
    if parser is None:
        return UnknownNode(node.type_tag)
    return parser(node)
