"""Tests for rebuilding diagrams from graphs."""

import logging

from umlgen.graph.elements import GraphEdge, GraphNode
from umlgen.graph.node_types import NodeShape
from umlgen.graph.reverse import graph_to_diagram
from umlgen.graph.transformer import transform
from umlgen.schema.models import DiagramKind, diagram_to_dict


def _round_trip(diagram: dict) -> dict:
    graph = transform(diagram)
    return diagram_to_dict(graph_to_diagram(graph.nodes, graph.edges, diagram["type"]))


class TestRoundTrip:
    def test_class(self, blog_class_diagram):
        assert _round_trip(blog_class_diagram) == blog_class_diagram

    def test_use_case(self, use_case_diagram):
        assert _round_trip(use_case_diagram) == use_case_diagram

    def test_activity(self, activity_diagram):
        assert _round_trip(activity_diagram) == activity_diagram

    def test_state_machine(self, state_machine_diagram):
        assert _round_trip(state_machine_diagram) == state_machine_diagram

    def test_component(self, component_diagram):
        assert _round_trip(component_diagram) == component_diagram

    def test_sequence_messages_come_back_in_order(self, sequence_diagram):
        rebuilt = _round_trip(sequence_diagram)

        assert rebuilt["participants"] == sequence_diagram["participants"]
        assert rebuilt["messages"] == sorted(
            sequence_diagram["messages"], key=lambda m: m["order"]
        )

    def test_transform_again_gives_same_graph(self, all_kind_diagrams):
        for diagram in all_kind_diagrams:
            graph = transform(diagram)
            rebuilt = graph_to_diagram(graph.nodes, graph.edges, diagram["type"])
            assert transform(rebuilt) == graph


class TestEditedGraphs:
    def test_new_class_node_gets_defaults(self):
        nodes = [GraphNode(id="n1", type=NodeShape.CLASS, data={"name": "New"})]

        diagram = graph_to_diagram(nodes, [], DiagramKind.CLASS)

        assert diagram_to_dict(diagram) == {
            "type": "class",
            "classes": [{"id": "n1", "name": "New", "attributes": [], "operations": []}],
            "relationships": [],
        }

    def test_drawn_class_edge_defaults_to_association(self):
        nodes = [
            GraphNode(id="a", type=NodeShape.CLASS, data={"name": "A"}),
            GraphNode(id="b", type=NodeShape.CLASS, data={"name": "B"}),
        ]
        edges = [GraphEdge(id="e", source="a", target="b", label="uses")]

        diagram = graph_to_diagram(nodes, edges, "class")

        assert diagram.relationships[0].type == "association"
        assert diagram.relationships[0].label == "uses"

    def test_invalid_relation_falls_back(self):
        edges = [GraphEdge(id="e", source="a", target="b", data={"edgeType": "bogus"})]

        diagram = graph_to_diagram([], edges, DiagramKind.COMPONENT)

        assert diagram.dependencies[0].type == "dependency"

    def test_state_edge_label_becomes_trigger(self):
        edges = [GraphEdge(id="e", source="a", target="b", label="tick")]

        diagram = graph_to_diagram([], edges, DiagramKind.STATE_MACHINE)

        transition = diagram.state_transitions[0]
        assert (transition.trigger, transition.guard, transition.action) == ("tick", None, None)

    def test_activity_edge_label_without_data(self):
        edges = [GraphEdge(id="e", source="a", target="b", label="next")]

        diagram = graph_to_diagram([], edges, DiagramKind.ACTIVITY)

        assert diagram.transitions[0].label == "next"
        assert diagram.transitions[0].guard is None

    def test_sequence_order_falls_back_to_position(self):
        edges = [
            GraphEdge(id="x", source="a", target="b"),
            GraphEdge(id="y", source="b", target="a", data={"order": True}),
        ]

        diagram = graph_to_diagram([], edges, DiagramKind.SEQUENCE)

        assert [(m.id, m.order, m.type) for m in diagram.messages] == [
            ("x", 0, "sync"),
            ("y", 1, "sync"),
        ]

    def test_malformed_interfaces_are_dropped(self, caplog):
        nodes = [
            GraphNode(
                id="c",
                type=NodeShape.COMPONENT,
                data={
                    "name": "C",
                    "interfaces": [
                        {"id": "i", "name": "I", "type": "required"},
                        {"id": "j", "name": "J", "type": "sideways"},
                    ],
                },
            )
        ]

        with caplog.at_level(logging.WARNING, logger="umlgen"):
            diagram = graph_to_diagram(nodes, [], DiagramKind.COMPONENT)

        assert [i.id for i in diagram.components[0].interfaces] == ["i"]
        assert "interface" in caplog.text

    def test_foreign_shapes_are_skipped(self, caplog):
        nodes = [
            GraphNode(id="s", type=NodeShape.STATE, data={"name": "S", "isInitial": True}),
            GraphNode(id="c", type=NodeShape.CLASS, data={"name": "C"}),
        ]

        with caplog.at_level(logging.WARNING, logger="umlgen"):
            diagram = graph_to_diagram(nodes, [], DiagramKind.STATE_MACHINE)

        assert [s.id for s in diagram.states] == ["s"]
        assert diagram.states[0].is_initial is True
        assert "Skipping 1 node(s)" in caplog.text

    def test_positions_are_ignored(self):
        node = GraphNode(id="a", type=NodeShape.ACTOR, data={"name": "A"}).moved_to(40, 90)

        diagram = graph_to_diagram([node], [], DiagramKind.USE_CASE)

        assert diagram_to_dict(diagram)["actors"] == [{"id": "a", "name": "A"}]
