"""Tests for the CSS rule builder."""

from pagegraph.compiler import DiagnosticKind, Diagnostics
from pagegraph.compiler.css import BASE_STYLES, CSS_HEADER, NO_RULES_COMMENT, render_css
from pagegraph.graph import PageGraph
from tests.builders import node, style


def _rules(css: str) -> str:
    assert css.startswith(CSS_HEADER + BASE_STYLES)
    return css[len(CSS_HEADER + BASE_STYLES):]


class TestRenderCss:
    def test_base_styles_always_present(self):
        css = render_css(PageGraph([], []))
        assert css == CSS_HEADER + BASE_STYLES + NO_RULES_COMMENT

    def test_one_rule_per_styled_element(self):
        g = PageGraph(
            [
                node("1", "html_p", id="x"),
                node("c", "css_color", property="color", value="red"),
                node("f", "css_font_size", property="font-size", value="12px"),
            ],
            [style("c", "1"), style("f", "1")],
        )
        rules = _rules(render_css(g))
        assert rules == "#x {\n  color: red;\n  font-size: 12px;\n}\n\n"
        assert " ".join(rules.split()) == "#x { color: red; font-size: 12px; }"
        assert [line for line in rules.splitlines() if line.startswith("#")] == ["#x {"]

    def test_rules_follow_node_order(self):
        g = PageGraph(
            [
                node("c1", "css_color", property="color", value="red"),
                node("b", "html_p", id="second"),
                node("a", "html_p", id="first"),
                node("c2", "css_color", property="color", value="blue"),
            ],
            [style("c1", "a"), style("c2", "b")],
        )
        rules = _rules(render_css(g))
        assert rules.index("#second") < rules.index("#first")

    def test_element_without_id_gets_no_rule(self):
        g = PageGraph(
            [node("1", "html_p", id=""), node("c", "css_color", property="color", value="red")],
            [style("c", "1")],
        )
        assert _rules(render_css(g)) == NO_RULES_COMMENT

    def test_element_without_style_edges_gets_no_rule(self):
        g = PageGraph([node("1", "html_p", id="x")], [])
        assert _rules(render_css(g)) == NO_RULES_COMMENT

    def test_non_css_sources_are_ignored(self):
        g = PageGraph(
            [
                node("1", "html_p", id="x"),
                node("j", "js_action_alert", message="no"),
                node("c", "css_color", property="color", value="red"),
            ],
            [style("j", "1"), style("c", "1")],
        )
        assert _rules(render_css(g)) == "#x {\n  color: red;\n}\n\n"

    def test_incomplete_declarations_are_reported(self):
        diagnostics = Diagnostics()
        g = PageGraph(
            [
                node("1", "html_p", id="x"),
                node("c", "css_color", property="color", value=""),
                node("w", "css_width", property="width", value="10px"),
            ],
            [style("c", "1"), style("w", "1")],
        )
        assert _rules(render_css(g, diagnostics=diagnostics)) == "#x {\n  width: 10px;\n}\n\n"
        assert [d.node_id for d in diagnostics.of_kind(DiagnosticKind.INCOMPLETE_DECLARATION)] == ["c"]

    def test_only_incomplete_declarations_emit_nothing(self):
        g = PageGraph(
            [node("1", "html_p", id="x"), node("c", "css_color", property="color")],
            [style("c", "1")],
        )
        assert _rules(render_css(g)) == ""

    def test_one_css_node_can_style_many_elements(self):
        g = PageGraph(
            [node("a", "html_p", id="a"), node("b", "html_p", id="b"), node("c", "css_color", property="color", value="red")],
            [style("c", "a"), style("c", "b")],
        )
        rules = _rules(render_css(g))
        assert rules == "#a {\n  color: red;\n}\n\n#b {\n  color: red;\n}\n\n"
