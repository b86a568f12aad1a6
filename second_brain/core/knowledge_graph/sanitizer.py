"""
Sanitization of model-generated knowledge graphs.

Provider output is untrusted: it is parsed, checked item by item, and
reduced to a graph whose edges only reference kept nodes. Every kept or
dropped item is recorded with a reason.

Dependencies: json, math, second_brain.core.exceptions
System role: Validation layer between the generator and API responses
"""

import json
import math
import re
from typing import Any

from second_brain.core.document_processing import normalize_whitespace
from second_brain.core.exceptions import MalformedProviderOutput

from .schema import GraphEdge, GraphNode, KnowledgeGraph, Position, SanitizeDecision, SanitizedGraph

ROOT_NODE_ID = "root"
DEFAULT_LABEL = "Untitled"
MAX_LABEL_PREFIX = 40
LAYOUT_RADIUS = 200.0

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*(.*?)\s*```$", re.DOTALL)


def minimal_graph(title: str | None = None, text: str | None = None) -> KnowledgeGraph:
    """Single root node labelled with the title, the text prefix, or "Untitled"."""
    label = normalize_whitespace(title) or normalize_whitespace(text)[:MAX_LABEL_PREFIX].strip()
    return KnowledgeGraph(
        nodes=[GraphNode(id=ROOT_NODE_ID, label=label or DEFAULT_LABEL, position=Position())],
        edges=[],
    )


def parse_graph_json(raw: str | None) -> dict[str, Any]:
    """
    Parse model output into a graph payload.

    Accepts bare JSON or JSON inside a fenced code block.

    Raises:
        MalformedProviderOutput: Not JSON, or not an object
    """
    text = (raw or "").strip()
    fenced = _FENCE_RE.match(text)
    if fenced:
        text = fenced.group(1)

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedProviderOutput("Model returned invalid JSON", raw_output=raw) from e

    if not isinstance(payload, dict):
        raise MalformedProviderOutput("Graph payload must be a JSON object", raw_output=raw)
    return payload


def _present(value: Any) -> bool:
    return value is not None and str(value).strip() != ""


def _position(value: Any) -> Position | None:
    if not isinstance(value, dict):
        return None
    x, y = value.get("x"), value.get("y")
    if isinstance(x, (int, float)) and isinstance(y, (int, float)) and not isinstance(x, bool):
        return Position(x=float(x), y=float(y))
    return None


def sanitize_graph(raw: Any, fallback_label: str | None = None) -> SanitizedGraph:
    """
    Reduce a raw graph payload to a consistent KnowledgeGraph.

    Nodes need an id and a label; the first occurrence of an id wins.
    Nodes without a usable position are laid out on a circle of radius 200
    by their index among kept nodes. Edges need a source and target that
    name kept nodes and are only kept when at least two nodes survive.

    Args:
        raw: Decoded provider payload
        fallback_label: Label of the minimal graph used when no node survives

    Returns:
        SanitizedGraph: Graph and per-item decisions

    Raises:
        MalformedProviderOutput: Payload is not an object with a nodes list
    """
    if not isinstance(raw, dict) or not isinstance(raw.get("nodes"), list):
        raise MalformedProviderOutput("Graph payload must contain a nodes list")
    raw_edges = raw.get("edges", [])
    if raw_edges is None:
        raw_edges = []
    if not isinstance(raw_edges, list):
        raise MalformedProviderOutput("Graph edges must be a list")

    decisions: list[SanitizeDecision] = []
    kept: list[tuple[str, str, Position | None]] = []
    seen: set[str] = set()

    for index, node in enumerate(raw["nodes"]):
        reason = None
        if not isinstance(node, dict):
            reason = "not an object"
        elif not _present(node.get("id")):
            reason = "missing id"
        elif not _present(node.get("label")):
            reason = "missing label"
        elif str(node["id"]) in seen:
            reason = "duplicate id"

        if reason:
            decisions.append(SanitizeDecision(item="node", index=index, kept=False, reason=reason))
            continue

        node_id = str(node["id"])
        seen.add(node_id)
        kept.append((node_id, str(node["label"]), _position(node.get("position"))))
        decisions.append(SanitizeDecision(item="node", index=index, kept=True, reason="valid"))

    if not kept:
        for index in range(len(raw_edges)):
            decisions.append(SanitizeDecision(item="edge", index=index, kept=False, reason="no nodes kept"))
        return SanitizedGraph(graph=minimal_graph(fallback_label), decisions=decisions)

    count = len(kept)
    nodes = []
    for index, (node_id, label, position) in enumerate(kept):
        if position is None:
            angle = 2 * math.pi * index / count
            position = Position(x=math.cos(angle) * LAYOUT_RADIUS, y=math.sin(angle) * LAYOUT_RADIUS)
        nodes.append(GraphNode(id=node_id, label=label, position=position))

    edges = []
    for index, edge in enumerate(raw_edges):
        reason = None
        if count < 2:
            reason = "fewer than two nodes"
        elif not isinstance(edge, dict):
            reason = "not an object"
        elif not _present(edge.get("source")) or not _present(edge.get("target")):
            reason = "missing source or target"
        elif str(edge["source"]) not in seen:
            reason = "unknown source"
        elif str(edge["target"]) not in seen:
            reason = "unknown target"

        if reason:
            decisions.append(SanitizeDecision(item="edge", index=index, kept=False, reason=reason))
            continue

        edges.append(
            GraphEdge(
                id=str(edge["id"]) if _present(edge.get("id")) else f"edge-{index}",
                source=str(edge["source"]),
                target=str(edge["target"]),
                label=str(edge.get("label") or ""),
            )
        )
        decisions.append(SanitizeDecision(item="edge", index=index, kept=True, reason="valid"))

    return SanitizedGraph(graph=KnowledgeGraph(nodes=nodes, edges=edges), decisions=decisions)
