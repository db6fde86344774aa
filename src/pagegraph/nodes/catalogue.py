"""Node catalogue: every type tag the visual editor can place on the canvas.

Each definition carries the tag's category, a display label, default
attribute values and the ports (handles) it exposes. The compiler only
recognises tags listed here; anything else is treated as an unknown node.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from pagegraph.graph.core import (
    ACTION_IN,
    ACTION_OUT,
    CHILDREN,
    ELEMENT_IN,
    EVENT,
    PARENT,
    STYLE,
    STYLE_OUT,
)

NodeCategory = Literal["html", "css", "javascript"]

CATEGORIES: tuple[NodeCategory, ...] = ("html", "css", "javascript")


@dataclass(frozen=True)
class Port:
    """A named connection point on a node.

    Attributes:
        kind: "source" for outgoing ports, "target" for incoming ones
        handle: Handle name carried by edges attached to this port
    """

    kind: Literal["source", "target"]
    handle: str


@dataclass(frozen=True)
class NodeDefinition:
    """Catalogue entry for one type tag.

    Attributes:
        type_tag: Globally unique tag, e.g. 'html_div', 'js_action_alert'
        label: Human-readable name shown in the palette
        category: One of 'html', 'css', 'javascript'
        description: One-line summary
        default_data: Attribute values a freshly created node starts with
        ports: Handles the node exposes
    """

    type_tag: str
    label: str
    category: NodeCategory
    description: str
    default_data: dict[str, Any] = field(default_factory=dict)
    ports: tuple[Port, ...] = ()

    @property
    def handles(self) -> tuple[str, ...]:
        """Handle names of all ports, in declaration order."""
        return tuple(port.handle for port in self.ports)


_PARENT = Port("target", PARENT)
_CHILDREN = Port("source", CHILDREN)
_STYLE = Port("target", STYLE)
_EVENT = Port("source", EVENT)
_STYLE_OUT = Port("source", STYLE_OUT)
_ELEMENT_IN = Port("target", ELEMENT_IN)
_ACTION_IN = Port("target", ACTION_IN)
_ACTION_OUT = Port("source", ACTION_OUT)

_CONTAINER_PORTS = (_PARENT, _CHILDREN, _STYLE, _EVENT)
_LEAF_PORTS = (_PARENT, _STYLE, _EVENT)
_EVENT_PORTS = (_ELEMENT_IN, _ACTION_OUT)
_ACTION_PORTS = (_ACTION_IN, _ACTION_OUT)


def _html(
    type_tag: str,
    label: str,
    description: str,
    ports: tuple[Port, ...],
    **defaults: Any,
) -> NodeDefinition:
    data = {"tag": defaults.pop("tag"), "id": "", "className": ""}
    data.update(defaults)
    return NodeDefinition(type_tag, label, "html", description, data, ports)


def _css(type_tag: str, label: str, description: str, prop: str, value: str) -> NodeDefinition:
    return NodeDefinition(
        type_tag, label, "css", description, {"property": prop, "value": value}, (_STYLE_OUT,)
    )


def _js(
    type_tag: str,
    label: str,
    description: str,
    ports: tuple[Port, ...],
    **defaults: Any,
) -> NodeDefinition:
    return NodeDefinition(type_tag, label, "javascript", description, dict(defaults), ports)


_HEADINGS = tuple(
    _html(
        f"html_h{level}",
        f"Header {level}",
        f"Level {level} heading.",
        _LEAF_PORTS,
        tag=f"h{level}",
        childrenText=f"Heading {level}",
    )
    for level in range(1, 7)
)

HTML_NODES: tuple[NodeDefinition, ...] = (
    # Containers
    _html("html_div", "Div Container", "Generic container.", _CONTAINER_PORTS, tag="div"),
    _html("html_span", "Span", "Inline text container.", _LEAF_PORTS, tag="span", childrenText="span text"),
    _html("html_header", "Header", "Header for a page/section.", _CONTAINER_PORTS, tag="header"),
    _html("html_footer", "Footer", "Footer for a page/section.", _CONTAINER_PORTS, tag="footer"),
    _html("html_main", "Main", "Main content of the body.", _CONTAINER_PORTS, tag="main"),
    _html("html_nav", "Nav", "Navigation links container.", _CONTAINER_PORTS, tag="nav"),
    _html("html_section", "Section", "A thematic section.", _CONTAINER_PORTS, tag="section"),
    _html("html_article", "Article", "A self-contained article.", _CONTAINER_PORTS, tag="article"),
    _html("html_aside", "Aside", "Content aside from main.", _CONTAINER_PORTS, tag="aside"),
    # Text content
    *_HEADINGS,
    _html("html_p", "Paragraph", "A paragraph of text.", _LEAF_PORTS, tag="p", childrenText="Lorem ipsum..."),
    _html("html_a", "Link", "A hyperlink.", _LEAF_PORTS, tag="a", childrenText="Click here", href="#"),
    _html(
        "html_blockquote",
        "Blockquote",
        "A quote section.",
        (_PARENT, _CHILDREN, _STYLE),
        tag="blockquote",
        childrenText="A famous quote.",
    ),
    _html("html_pre", "Preformatted", "Preformatted text block.", (_PARENT, _CHILDREN, _STYLE), tag="pre"),
    _html("html_code", "Code", "Inline code snippet.", (_PARENT, _STYLE), tag="code", childrenText="const x = 1;"),
    # Lists
    _html("html_ul", "Unordered List", "A bulleted list.", (_PARENT, _CHILDREN, _STYLE), tag="ul"),
    _html("html_ol", "Ordered List", "A numbered list.", (_PARENT, _CHILDREN, _STYLE), tag="ol"),
    _html("html_li", "List Item", "An item in a list.", _LEAF_PORTS, tag="li", childrenText="List item"),
    # Forms
    _html("html_form", "Form", "A container for form inputs.", _CONTAINER_PORTS, tag="form"),
    _html(
        "html_input_text",
        "Text Input",
        "A text input field.",
        _LEAF_PORTS,
        tag="input",
        type="text",
        placeholder="Enter text...",
    ),
    _html(
        "html_label",
        "Label",
        "A label for a form input.",
        (_PARENT, _STYLE),
        tag="label",
        forId="",
        childrenText="My Label",
    ),
    _html(
        "html_textarea",
        "Textarea",
        "A multiline text input.",
        _LEAF_PORTS,
        tag="textarea",
        placeholder="Enter details...",
    ),
    _html("html_button", "Button", "An interactive button.", _LEAF_PORTS, tag="button", childrenText="Click Me"),
    _html(
        "html_input_submit",
        "Submit Button",
        "A form submission button.",
        _LEAF_PORTS,
        tag="input",
        type="submit",
        value="Submit",
    ),
    # Media
    _html(
        "html_img",
        "Image",
        "An image element.",
        _LEAF_PORTS,
        tag="img",
        src="https://source.unsplash.com/random/200x200",
        alt="A random image",
    ),
    _html("html_video", "Video", "A video player.", (_PARENT, _STYLE), tag="video", src="", controls=True),
    _html("html_audio", "Audio", "An audio player.", (_PARENT, _STYLE), tag="audio", src="", controls=True),
)

CSS_NODES: tuple[NodeDefinition, ...] = (
    # Layout
    _css("css_display", "Display", "Sets element display type.", "display", "block"),
    _css("css_position", "Position", "Sets element positioning.", "position", "relative"),
    _css("css_top", "Top", "Sets top position.", "top", "0px"),
    _css("css_left", "Left", "Sets left position.", "left", "0px"),
    _css("css_z_index", "Z-Index", "Sets stack order.", "z-index", "1"),
    # Box model
    _css("css_width", "Width", "Sets element width.", "width", "100px"),
    _css("css_height", "Height", "Sets element height.", "height", "100px"),
    _css("css_padding", "Padding", "Sets padding.", "padding", "10px"),
    _css("css_margin", "Margin", "Sets margin.", "margin", "10px"),
    # Flexbox
    _css("css_flex_direction", "Flex Direction", "Sets flex direction.", "flex-direction", "row"),
    _css("css_justify_content", "Justify Content", "Aligns flex items.", "justify-content", "flex-start"),
    _css("css_align_items", "Align Items", "Aligns flex items.", "align-items", "stretch"),
    _css("css_gap", "Gap", "Sets gap between items.", "gap", "10px"),
    # Typography
    _css("css_color", "Font Color", "Sets text color.", "color", "#000000"),
    _css("css_font_family", "Font Family", "Sets font.", "font-family", "sans-serif"),
    _css("css_font_size", "Font Size", "Sets font size.", "font-size", "16px"),
    _css("css_font_weight", "Font Weight", "Sets font weight.", "font-weight", "400"),
    _css("css_text_align", "Text Align", "Sets text alignment.", "text-align", "left"),
    # Background and border
    _css("css_background_color", "Background Color", "Sets background color.", "background-color", "#ffffff"),
    _css("css_background_image", "Background Image", "Sets background image.", "background-image", "url()"),
    _css("css_border", "Border", "Sets border.", "border", "1px solid #000"),
    _css("css_border_radius", "Border Radius", "Sets corner radius.", "border-radius", "5px"),
    # Effects
    _css("css_box_shadow", "Box Shadow", "Adds a shadow.", "box-shadow", "2px 2px 5px rgba(0,0,0,0.2)"),
    _css("css_opacity", "Opacity", "Sets transparency.", "opacity", "1"),
    _css("css_transform", "Transform", "Applies 2D/3D transform.", "transform", "rotate(0deg)"),
    _css("css_transition", "Transition", "Sets transition effects.", "transition", "all 0.3s ease"),
    _css("css_cursor", "Cursor", "Sets the mouse cursor.", "cursor", "pointer"),
)

JAVASCRIPT_NODES: tuple[NodeDefinition, ...] = (
    # Events
    _js("js_event_on_click", "On Click", "Triggers on mouse click.", _EVENT_PORTS),
    _js("js_event_on_mouseover", "On Mouse Over", "Triggers on mouse enter.", _EVENT_PORTS),
    _js("js_event_on_mouseout", "On Mouse Out", "Triggers on mouse leave.", _EVENT_PORTS),
    _js("js_event_on_change", "On Change", "Triggers on input change.", _EVENT_PORTS),
    _js("js_event_on_submit", "On Submit", "Triggers on form submit.", _EVENT_PORTS),
    _js("js_event_on_load", "On Load", "Triggers when page loads.", (_ACTION_OUT,)),
    _js("js_event_on_keydown", "On Key Down", "Triggers when a key is pressed.", _EVENT_PORTS),
    # Actions
    _js("js_action_alert", "Show Alert", "Shows a browser alert.", _ACTION_PORTS, message="Hello, Vortex!"),
    _js(
        "js_action_console_log",
        "Console Log",
        "Logs to the console.",
        _ACTION_PORTS,
        message="Logged from visual builder.",
    ),
    _js(
        "js_action_toggle_class",
        "Toggle CSS Class",
        "Toggles a CSS class.",
        _ACTION_PORTS,
        selector="",
        className="active",
    ),
    _js("js_action_add_class", "Add CSS Class", "Adds a CSS class.", _ACTION_PORTS, selector="", className="active"),
    _js(
        "js_action_remove_class",
        "Remove CSS Class",
        "Removes a CSS class.",
        _ACTION_PORTS,
        selector="",
        className="active",
    ),
    _js("js_action_set_text", "Set Element Text", "Changes element text.", _ACTION_PORTS, selector="", text="New text"),
    _js(
        "js_action_set_attribute",
        "Set Attribute",
        "Sets an element attribute.",
        _ACTION_PORTS,
        selector="",
        attribute="href",
        value="#",
    ),
    _js(
        "js_action_set_css_property",
        "Set CSS Property",
        "Changes a CSS property.",
        _ACTION_PORTS,
        selector="",
        property="backgroundColor",
        value="red",
    ),
    _js("js_action_fetch_api", "Fetch API", "Makes a network request.", _ACTION_PORTS, url="https://api.example.com/data"),
    _js("js_action_redirect", "Redirect", "Redirects to a new URL.", _ACTION_PORTS, url="https://www.google.com"),
    _js("js_action_set_timeout", "Set Timeout", "Delays next action.", _ACTION_PORTS, delay=1000),
)

NODE_LIBRARY: tuple[NodeDefinition, ...] = HTML_NODES + CSS_NODES + JAVASCRIPT_NODES

_BY_TAG: dict[str, NodeDefinition] = {definition.type_tag: definition for definition in NODE_LIBRARY}


def get_definition(type_tag: str) -> NodeDefinition | None:
    """Look up the catalogue entry for a type tag, or None if unknown."""
    return _BY_TAG.get(type_tag)


def definitions_for(category: NodeCategory) -> list[NodeDefinition]:
    """All catalogue entries of one category, in palette order."""
    return [definition for definition in NODE_LIBRARY if definition.category == category]
