"""
Test suite for knowledge graph sanitization and extraction.

System role: Verification of untrusted graph output handling
"""

import json
import math

import pytest

from second_brain.core.exceptions import GenerationFailure, MalformedProviderOutput, QuotaExceeded
from second_brain.core.knowledge_graph import (
    KnowledgeGraphExtractor,
    minimal_graph,
    parse_graph_json,
    sanitize_graph,
)


def assert_edges_reference_nodes(graph) -> None:
    node_ids = {node.id for node in graph.nodes}
    for edge in graph.edges:
        assert edge.source in node_ids
        assert edge.target in node_ids


class TestMinimalGraph:
    def test_title_wins(self) -> None:
        graph = minimal_graph("My Note", "some text")

        assert len(graph.nodes) == 1
        assert graph.nodes[0].id == "root"
        assert graph.nodes[0].label == "My Note"
        assert (graph.nodes[0].position.x, graph.nodes[0].position.y) == (0.0, 0.0)
        assert graph.edges == []

    def test_text_prefix_is_capped(self) -> None:
        graph = minimal_graph(None, "word " * 30)

        assert len(graph.nodes[0].label) <= 40

    def test_untitled_fallback(self) -> None:
        assert minimal_graph(None, "").nodes[0].label == "Untitled"


class TestParseGraphJson:
    def test_fenced_block_is_accepted(self) -> None:
        raw = '```json\n{"nodes": [], "edges": []}\n```'

        assert parse_graph_json(raw) == {"nodes": [], "edges": []}

    def test_invalid_json_is_malformed(self) -> None:
        with pytest.raises(MalformedProviderOutput):
            parse_graph_json("Sure! Here is your graph:")

    def test_non_object_is_malformed(self) -> None:
        with pytest.raises(MalformedProviderOutput):
            parse_graph_json("[1, 2, 3]")


class TestSanitizeGraph:
    def test_keeps_valid_graph(self) -> None:
        raw = {
            "nodes": [{"id": "1", "label": "A"}, {"id": "2", "label": "B"}],
            "edges": [{"id": "e1", "source": "1", "target": "2", "label": "links"}],
        }

        result = sanitize_graph(raw)

        assert [n.id for n in result.graph.nodes] == ["1", "2"]
        assert result.graph.edges[0].label == "links"
        assert result.dropped == []

    def test_drops_invalid_nodes_with_reasons(self) -> None:
        raw = {
            "nodes": [
                {"id": "1", "label": "A"},
                {"label": "no id"},
                {"id": "2"},
                {"id": "1", "label": "dup"},
                "junk",
            ],
            "edges": [],
        }

        result = sanitize_graph(raw)

        assert [n.label for n in result.graph.nodes] == ["A"]
        reasons = {d.index: d.reason for d in result.dropped}
        assert reasons == {1: "missing id", 2: "missing label", 3: "duplicate id", 4: "not an object"}

    def test_numeric_ids_are_stringified(self) -> None:
        raw = {
            "nodes": [{"id": 1, "label": "A"}, {"id": 2, "label": "B"}],
            "edges": [{"source": 1, "target": 2}],
        }

        graph = sanitize_graph(raw).graph

        assert graph.edges[0].source == "1"
        assert graph.edges[0].target == "2"

    def test_missing_positions_use_circle_layout(self) -> None:
        raw = {"nodes": [{"id": str(i), "label": f"N{i}"} for i in range(4)], "edges": []}

        nodes = sanitize_graph(raw).graph.nodes

        for node in nodes:
            assert math.isclose(math.hypot(node.position.x, node.position.y), 200.0)
        assert math.isclose(nodes[0].position.x, 200.0)
        assert math.isclose(nodes[1].position.y, 200.0)

    def test_layout_index_counts_kept_nodes_only(self) -> None:
        raw = {"nodes": [{"id": "x"}, {"id": "a", "label": "A"}, {"id": "b", "label": "B"}]}

        nodes = sanitize_graph(raw).graph.nodes

        assert math.isclose(nodes[0].position.x, 200.0)
        assert math.isclose(nodes[1].position.x, -200.0)

    def test_provided_positions_are_kept(self) -> None:
        raw = {"nodes": [{"id": "a", "label": "A", "position": {"x": 5, "y": -3}}]}

        node = sanitize_graph(raw).graph.nodes[0]

        assert (node.position.x, node.position.y) == (5.0, -3.0)

    def test_edge_defaults_and_dangling_edges(self) -> None:
        raw = {
            "nodes": [{"id": "a", "label": "A"}, {"id": "b", "label": "B"}],
            "edges": [
                {"source": "a", "target": "b"},
                {"source": "a", "target": "ghost"},
                {"source": "ghost", "target": "b"},
                {"target": "b"},
            ],
        }

        result = sanitize_graph(raw)

        assert len(result.graph.edges) == 1
        edge = result.graph.edges[0]
        assert edge.id == "edge-0"
        assert edge.label == ""
        reasons = [d.reason for d in result.dropped if d.item == "edge"]
        assert reasons == ["unknown target", "unknown source", "missing source or target"]
        assert_edges_reference_nodes(result.graph)

    def test_edges_need_two_nodes(self) -> None:
        raw = {"nodes": [{"id": "a", "label": "A"}], "edges": [{"source": "a", "target": "a"}]}

        result = sanitize_graph(raw)

        assert result.graph.edges == []
        assert result.dropped[0].reason == "fewer than two nodes"

    def test_zero_kept_nodes_gives_minimal_graph(self) -> None:
        result = sanitize_graph({"nodes": [{"label": "x"}], "edges": []}, fallback_label="Title")

        assert [(n.id, n.label) for n in result.graph.nodes] == [("root", "Title")]

    def test_wrong_shape_is_malformed(self) -> None:
        with pytest.raises(MalformedProviderOutput):
            sanitize_graph({"edges": []})
        with pytest.raises(MalformedProviderOutput):
            sanitize_graph({"nodes": [], "edges": "nope"})


LONG_TEXT = "Photosynthesis converts light energy into chemical energy in plants."


class TestKnowledgeGraphExtractor:
    async def test_empty_text_returns_minimal_graph_without_model_call(self, fake_generator) -> None:
        graph = await KnowledgeGraphExtractor(fake_generator).extract_graph("")

        assert [(n.id, n.label) for n in graph.nodes] == [("root", "Untitled")]
        assert fake_generator.structured_calls == []

    async def test_short_text_uses_title(self, fake_generator) -> None:
        graph = await KnowledgeGraphExtractor(fake_generator).extract_graph("tiny", title="Biology")

        assert graph.nodes[0].label == "Biology"
        assert fake_generator.structured_calls == []

    async def test_model_graph_is_sanitized(self, fake_generator) -> None:
        fake_generator.structured_output = json.dumps(
            {
                "nodes": [{"id": "1", "label": "Photosynthesis"}, {"id": "2", "label": "Light"}],
                "edges": [
                    {"source": "1", "target": "2", "label": "uses"},
                    {"source": "1", "target": "9"},
                ],
            }
        )

        graph = await KnowledgeGraphExtractor(fake_generator).extract_graph(LONG_TEXT)

        assert len(graph.nodes) == 2
        assert len(graph.edges) == 1
        assert_edges_reference_nodes(graph)
        assert fake_generator.structured_calls[0][1] == LONG_TEXT

    async def test_malformed_output_is_recovered(self, fake_generator) -> None:
        fake_generator.structured_output = "not json"

        graph = await KnowledgeGraphExtractor(fake_generator).extract_graph(LONG_TEXT, title="Plants")

        assert [(n.id, n.label) for n in graph.nodes] == [("root", "Plants")]

    async def test_malformed_output_raises_without_recovery(self, fake_generator) -> None:
        fake_generator.structured_output = "not json"
        extractor = KnowledgeGraphExtractor(fake_generator, recover_malformed=False)

        with pytest.raises(MalformedProviderOutput):
            await extractor.extract_graph(LONG_TEXT)

    @pytest.mark.parametrize("error", [QuotaExceeded(retry_after=3), GenerationFailure("down")])
    async def test_provider_errors_propagate(self, fake_generator, error) -> None:
        fake_generator.fail_with = error

        with pytest.raises(type(error)):
            await KnowledgeGraphExtractor(fake_generator).extract_graph(LONG_TEXT)
