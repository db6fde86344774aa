"""Tests for the logic compiler: events, action chains and delays."""

import pytest

from pagegraph.compiler import DiagnosticKind, Diagnostics
from pagegraph.compiler.js import action_statement, element_variable, js_string, render_js
from pagegraph.graph import PageGraph
from pagegraph.nodes.payloads import (
    AddClass,
    Alert,
    ConsoleLog,
    Delay,
    FetchApi,
    HtmlElement,
    Redirect,
    RemoveClass,
    SetAttribute,
    SetCssProperty,
    SetText,
    ToggleClass,
)
from tests.builders import bind, node, then


def _log(node_id, message):
    return node(node_id, "js_action_console_log", message=message)


class TestHelpers:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("hi", "'hi'"),
            ("it's", "'it\\'s'"),
            ("a\\b", "'a\\\\b'"),
            ("two\nlines", "'two\\nlines'"),
            ("", "''"),
        ],
    )
    def test_js_string(self, value, expected):
        assert js_string(value) == expected

    @pytest.mark.parametrize(
        "element_id, expected",
        [("go", "element_go"), ("main-button", "element_main_button"), ("a.b c", "element_a_b_c")],
    )
    def test_element_variable(self, element_id, expected):
        assert element_variable(element_id) == expected


class TestActionStatement:
    @pytest.mark.parametrize(
        "action, expected",
        [
            (Alert("hi"), "alert('hi');"),
            (ConsoleLog("x"), "console.log('x');"),
            (ToggleClass("#m", "open"), "document.querySelector('#m')?.classList.toggle('open');"),
            (AddClass(".a", "on"), "document.querySelector('.a')?.classList.add('on');"),
            (RemoveClass(".a", "on"), "document.querySelector('.a')?.classList.remove('on');"),
            (SetText("#t", "Hello"), "document.querySelector('#t').textContent = 'Hello';"),
            (SetAttribute("img", "src", "b.png"), "document.querySelector('img')?.setAttribute('src', 'b.png');"),
            (SetCssProperty("#box", "color", "red"), "document.querySelector('#box').style.color = 'red';"),
            (
                FetchApi("https://x.test/d"),
                "fetch('https://x.test/d').then(res => res.json()).then(data => console.log(data));",
            ),
            (Redirect("/home"), "window.location.href = '/home';"),
        ],
    )
    def test_templates(self, action, expected):
        assert action_statement(action) == expected

    def test_non_actions(self):
        assert action_statement(Delay("10")) is None
        assert action_statement(HtmlElement("p")) is None


class TestEvents:
    def test_click_listener(self):
        g = PageGraph(
            [
                node("b", "html_button", id="go"),
                node("e", "js_event_on_click"),
                node("a", "js_action_alert", message="hi"),
            ],
            [bind("b", "e"), then("e", "a")],
        )
        assert render_js(g) == (
            "\n"
            "  const element_go = document.getElementById('go');\n"
            "  if (element_go) {\n"
            "    element_go.addEventListener('click', () => {\n"
            "      alert('hi');\n"
            "    });\n"
            "  }\n"
        )

    def test_load_event_needs_no_element(self):
        g = PageGraph([node("e", "js_event_on_load"), _log("a", "ready")], [then("e", "a")])
        assert render_js(g) == "\n  /* On page load actions */\n  console.log('ready');\n"

    def test_custom_base_indent(self):
        g = PageGraph([node("e", "js_event_on_load"), _log("a", "x")], [then("e", "a")])
        assert render_js(g, "    ") == "\n    /* On page load actions */\n    console.log('x');\n"

    def test_events_follow_node_order(self):
        g = PageGraph(
            [
                node("e2", "js_event_on_load"),
                node("b", "html_button", id="go"),
                node("e1", "js_event_on_click"),
                _log("x", "second"),
                _log("y", "first"),
            ],
            [bind("b", "e1"), then("e1", "y"), then("e2", "x")],
        )
        out = render_js(g)
        assert out.index("'second'") < out.index("'first'")

    def test_unbound_event_is_skipped(self):
        diagnostics = Diagnostics()
        g = PageGraph([node("e", "js_event_on_click"), _log("a", "x")], [then("e", "a")])
        assert render_js(g, diagnostics=diagnostics) == ""
        assert [d.node_id for d in diagnostics.of_kind(DiagnosticKind.UNBOUND_EVENT)] == ["e"]

    def test_element_without_id_cannot_bind(self):
        diagnostics = Diagnostics()
        g = PageGraph(
            [node("b", "html_button", id=""), node("e", "js_event_on_click"), _log("a", "x")],
            [bind("b", "e"), then("e", "a")],
        )
        assert render_js(g, diagnostics=diagnostics) == ""
        assert diagnostics.kinds == {DiagnosticKind.UNBOUND_EVENT}

    def test_event_without_actions_is_skipped(self):
        diagnostics = Diagnostics()
        g = PageGraph([node("b", "html_button", id="go"), node("e", "js_event_on_click")], [bind("b", "e")])
        assert render_js(g, diagnostics=diagnostics) == ""
        assert diagnostics.kinds == {DiagnosticKind.EMPTY_CHAIN}

    def test_first_element_edge_wins(self):
        g = PageGraph(
            [
                node("b1", "html_button", id="one"),
                node("b2", "html_button", id="two"),
                node("e", "js_event_on_click"),
                _log("a", "x"),
            ],
            [bind("b1", "e"), bind("b2", "e"), then("e", "a")],
        )
        out = render_js(g)
        assert "getElementById('one')" in out
        assert "'two'" not in out


    def test_each_listener_declares_its_own_variable(self):
        g = PageGraph(
            [
                node("b", "html_button", id="go"),
                node("e1", "js_event_on_click"),
                node("e2", "js_event_on_mouseover"),
                _log("x", "click"),
                _log("y", "over"),
            ],
            [bind("b", "e1"), bind("b", "e2"), then("e1", "x"), then("e2", "y")],
        )
        out = render_js(g)
        assert out.count("const element_go = ") == 1
        assert "const element_go_2 = document.getElementById('go');" in out
        assert "element_go_2.addEventListener('mouseover'" in out

    def test_ids_that_sanitise_alike_get_distinct_variables(self):
        g = PageGraph(
            [
                node("b1", "html_button", id="a-b"),
                node("b2", "html_button", id="a_b"),
                node("e1", "js_event_on_click"),
                node("e2", "js_event_on_click"),
                _log("x", "1"),
                _log("y", "2"),
            ],
            [bind("b1", "e1"), bind("b2", "e2"), then("e1", "x"), then("e2", "y")],
        )
        out = render_js(g)
        assert "const element_a_b = document.getElementById('a-b');" in out
        assert "const element_a_b_2 = document.getElementById('a_b');" in out


class TestChains:
    def _load(self, nodes, edges, diagnostics=None):
        g = PageGraph([node("e", "js_event_on_load"), *nodes], edges)
        out = render_js(g, diagnostics=diagnostics)
        return out.removeprefix("\n  /* On page load actions */\n")

    def test_chain_in_edge_order(self):
        out = self._load([_log("a", "1"), _log("b", "2"), _log("c", "3")], [then("e", "a"), then("a", "b"), then("b", "c")])
        assert out == "  console.log('1');\n  console.log('2');\n  console.log('3');\n"

    def test_delay_nests_the_rest_of_the_chain(self):
        out = self._load(
            [_log("a", "a"), node("d", "js_action_set_timeout", delay=500), _log("b", "b")],
            [then("e", "a"), then("a", "d"), then("d", "b")],
        )
        assert out == (
            "  console.log('a');\n"
            "  setTimeout(() => {\n"
            "    console.log('b');\n"
            "  }, 500);\n"
        )

    def test_nested_delays_add_one_level_each(self):
        out = self._load(
            [
                node("d1", "js_action_set_timeout", delay=100),
                node("d2", "js_action_set_timeout", delay=200),
                _log("a", "late"),
            ],
            [then("e", "d1"), then("d1", "d2"), then("d2", "a")],
        )
        assert out == (
            "  setTimeout(() => {\n"
            "    setTimeout(() => {\n"
            "      console.log('late');\n"
            "    }, 200);\n"
            "  }, 100);\n"
        )

    def test_delay_without_successor_emits_nothing(self):
        diagnostics = Diagnostics()
        g = PageGraph(
            [node("e", "js_event_on_load"), node("d", "js_action_set_timeout", delay=100)],
            [then("e", "d")],
        )
        assert render_js(g, diagnostics=diagnostics) == ""
        assert diagnostics.kinds == {DiagnosticKind.EMPTY_CHAIN}

    def test_second_edge_out_of_delay_is_unreachable(self):
        diagnostics = Diagnostics()
        out = self._load(
            [node("d", "js_action_set_timeout", delay=10), _log("a", "kept"), _log("b", "lost")],
            [then("e", "d"), then("d", "a"), then("d", "b")],
            diagnostics,
        )
        assert "'kept'" in out
        assert "'lost'" not in out
        assert [d.node_id for d in diagnostics.of_kind(DiagnosticKind.UNREACHABLE_ACTION)] == ["b"]

    def test_forks_follow_the_main_chain(self):
        out = self._load(
            [_log("a", "a"), _log("b", "b"), _log("c", "c"), _log("f", "fork")],
            [then("e", "a"), then("a", "b"), then("a", "f"), then("b", "c")],
        )
        assert out == (
            "  console.log('a');\n"
            "  console.log('b');\n"
            "  console.log('c');\n"
            "  console.log('fork');\n"
        )

    def test_several_chains_from_one_event(self):
        out = self._load([_log("a", "a"), _log("b", "b")], [then("e", "a"), then("e", "b")])
        assert out == "  console.log('a');\n  console.log('b');\n"

    def test_cycle_stops_the_walk(self):
        diagnostics = Diagnostics()
        out = self._load([_log("a", "a"), _log("b", "b")], [then("e", "a"), then("a", "b"), then("b", "a")], diagnostics)
        assert out == "  console.log('a');\n  console.log('b');\n"
        assert [d.node_id for d in diagnostics.of_kind(DiagnosticKind.CYCLE)] == ["a"]
        assert not diagnostics.of_kind(DiagnosticKind.ALREADY_EMITTED)

    def test_diamond_is_not_a_cycle(self):
        diagnostics = Diagnostics()
        out = self._load(
            [_log("a", "a"), _log("b", "b"), _log("c", "c")],
            [then("e", "a"), then("a", "b"), then("b", "c"), then("a", "c")],
            diagnostics,
        )
        assert out == "  console.log('a');\n  console.log('b');\n  console.log('c');\n"
        assert [d.node_id for d in diagnostics.of_kind(DiagnosticKind.ALREADY_EMITTED)] == ["c"]
        assert not diagnostics.of_kind(DiagnosticKind.CYCLE)

    def test_long_run_of_delays(self):
        count = 600
        delays = [node(f"d{i}", "js_action_set_timeout", delay=10) for i in range(count)]
        edges = [then("e", "d0")]
        edges += [then(f"d{i}", f"d{i + 1}") for i in range(count - 1)]
        edges.append(then(f"d{count - 1}", "a"))

        out = self._load([*delays, node("a", "js_action_alert", message="x")], edges)

        lines = out.splitlines()
        assert len(lines) == 2 * count + 1
        assert lines[count] == "  " * (count + 1) + "alert('x');"
        assert lines[0] == "  setTimeout(() => {"
        assert lines[-1] == "  }, 10);"

    def test_fork_before_delay_follows_the_timeout_block(self):
        out = self._load(
            [_log("a", "a"), node("d", "js_action_set_timeout", delay=5), _log("b", "b"), _log("f", "fork")],
            [then("e", "a"), then("a", "d"), then("a", "f"), then("d", "b")],
        )
        assert out == (
            "  console.log('a');\n"
            "  setTimeout(() => {\n"
            "    console.log('b');\n"
            "  }, 5);\n"
            "  console.log('fork');\n"
        )

    def test_non_action_nodes_are_passed_through(self):
        out = self._load(
            [node("x", "html_p"), _log("a", "after")],
            [then("e", "x"), then("x", "a")],
        )
        assert out == "  console.log('after');\n"

    def test_escaped_messages(self):
        out = self._load([node("a", "js_action_alert", message="it's")], [then("e", "a")])
        assert out == "  alert('it\\'s');\n"
