"""Tests for the graph model: Node, Edge, PageGraph."""

import networkx as nx
import pytest

from pagegraph.graph import CHILDREN, PARENT, STYLE, Edge, Node, PageGraph, category_of
from tests.builders import child, node, style


class TestCategory:
    @pytest.mark.parametrize(
        "type_tag, expected",
        [
            ("html_div", "html"),
            ("css_color", "css"),
            ("js_event_on_click", "javascript"),
            ("js_action_alert", "javascript"),
            ("svg_circle", None),
            ("", None),
        ],
    )
    def test_category_from_namespace(self, type_tag, expected):
        assert category_of(type_tag) == expected

    def test_node_category_property(self):
        assert Node("1", "html_p").category == "html"

    def test_node_get_default(self):
        n = node("1", "html_p", childrenText="hi")
        assert n.get("childrenText") == "hi"
        assert n.get("missing") is None
        assert n.get("missing", "x") == "x"


class TestPageGraphIndex:
    def test_nodes_keep_input_order(self):
        g = PageGraph([node("b", "html_p"), node("a", "html_p"), node("c", "html_p")], [])
        assert [n.id for n in g.nodes] == ["b", "a", "c"]

    def test_lookup(self):
        p = node("1", "html_p")
        g = PageGraph([p], [])
        assert g.node("1") is p
        assert g.node("2") is None
        assert "1" in g
        assert "2" not in g
        assert len(g) == 1

    def test_nx_graph_is_multidigraph(self):
        g = PageGraph([node("1", "html_div"), node("2", "html_p")], [child("1", "2")])
        assert isinstance(g.nx_graph, nx.MultiDiGraph)
        assert g.nx_graph.number_of_edges() == 1

    def test_out_edges_filtered_by_handle(self):
        edges = [child("1", "2"), style("1", "2")]
        g = PageGraph([node("1", "html_div"), node("2", "html_p")], edges)
        assert g.out_edges("1", CHILDREN) == [edges[0]]
        assert g.out_edges("1") == edges

    def test_in_edges_filtered_by_handle(self):
        edges = [child("1", "2"), style("3", "2")]
        g = PageGraph([node("1", "html_div"), node("2", "html_p"), node("3", "css_color")], edges)
        assert g.in_edges("2", PARENT) == [edges[0]]
        assert g.in_edges("2", STYLE) == [edges[1]]

    def test_in_edges_follow_input_order_across_sources(self):
        """NetworkX groups edges by neighbour; the index restores input order."""
        edges = [style("x", "el"), style("y", "el"), style("x", "el")]
        g = PageGraph([node("el", "html_p"), node("x", "css_color"), node("y", "css_gap")], edges)
        assert [n.id for n in g.predecessors("el", STYLE)] == ["x", "y", "x"]

    def test_out_edges_follow_input_order_across_targets(self):
        edges = [child("p", "b"), child("p", "a"), child("p", "b")]
        g = PageGraph([node("p", "html_div"), node("a", "html_p"), node("b", "html_p")], edges)
        assert [n.id for n in g.successors("p", CHILDREN)] == ["b", "a", "b"]

    def test_missing_node_has_no_edges(self):
        g = PageGraph([node("1", "html_div")], [])
        assert g.out_edges("nope") == []
        assert g.in_edges("nope") == []

    def test_string_id_is_not_iterated_as_characters(self):
        g = PageGraph([node("a", "html_div"), node("b", "html_p")], [child("a", "b")])
        assert g.out_edges("ab") == []


class TestMalformedInput:
    def test_duplicate_ids_first_wins(self):
        first = node("1", "html_div")
        second = node("1", "html_p")
        g = PageGraph([first, second], [])
        assert g.node("1") is first
        assert g.duplicate_nodes == [second]
        assert len(g) == 1

    def test_dangling_edges_are_dropped(self):
        dangling = child("1", "ghost")
        g = PageGraph([node("1", "html_div")], [dangling])
        assert g.dangling_edges == [dangling]
        assert g.out_edges("1") == []
        assert g.edges == []
        assert "ghost" not in g.nx_graph

    def test_edges_property_preserves_order(self):
        edges = [child("2", "3"), child("1", "2")]
        g = PageGraph([node(i, "html_div") for i in "123"], edges)
        assert g.edges == edges

    def test_input_is_not_mutated(self):
        nodes = [node("1", "html_div"), node("2", "html_p")]
        edges = [child("1", "2"), child("1", "ghost")]
        nodes_before = list(nodes)
        edges_before = list(edges)
        PageGraph(nodes, edges)
        assert nodes == nodes_before
        assert edges == edges_before

    def test_repr(self):
        g = PageGraph([node("1", "html_div")], [])
        assert repr(g) == "PageGraph(1 nodes, 0 edges)"


class TestEdge:
    def test_edges_are_frozen(self):
        edge = Edge("1", CHILDREN, "2", PARENT)
        with pytest.raises(AttributeError):
            edge.source_id = "3"

    def test_edges_compare_by_value(self):
        assert Edge("1", CHILDREN, "2", PARENT) == child("1", "2")
