"""
Layout Engine - Hierarchical radial placement.

Places the focal resource at the canvas center, its direct neighbors
evenly on an inner ring, their own unplaced neighbors in small arcs on
an outer ring (each arc centered on its parent's angle), and anything
left over on a far overflow circle.

The engine is pure: input nodes are never mutated, and the same input
always produces the same output. Ring membership is derived per pass
and never stored on the nodes.
"""

import math
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..domain.models import GraphNode, GraphEdge, RenderEdge
from ..domain.enums import Ring
from ..domain.errors import MissingRootError

logger = logging.getLogger(__name__)


@dataclass
class LayoutSettings:
    """Radii and arc tuning for the radial layout (logical units / radians)."""
    ring1_radius: float = 200.0
    ring2_radius: float = 380.0
    ring2_jitter: float = 20.0
    overflow_radius: float = 500.0
    max_arc: float = math.pi / 4      # Ring-2 arcs never fan out past this
    arc_per_child: float = math.pi / 12


@dataclass
class RingAssignment:
    """Result of the ring walk for one layout pass."""
    root_id: str
    ring1: List[str] = field(default_factory=list)
    # (ring-1 index of the parent, child ids in placement order)
    ring2_groups: List[Tuple[int, List[str]]] = field(default_factory=list)
    overflow: List[str] = field(default_factory=list)

    def as_mapping(self) -> Dict[str, Ring]:
        rings = {self.root_id: Ring.ROOT}
        for node_id in self.ring1:
            rings[node_id] = Ring.RING1
        for _, children in self.ring2_groups:
            for node_id in children:
                rings[node_id] = Ring.RING2
        for node_id in self.overflow:
            rings[node_id] = Ring.OVERFLOW
        return rings


def _index_nodes(nodes: List[GraphNode]) -> Dict[str, GraphNode]:
    by_id: Dict[str, GraphNode] = {}
    for node in nodes:
        by_id.setdefault(node.id, node)
    return by_id


def _unplaced_neighbors(
    node_id: str,
    edges: List[GraphEdge],
    known: Dict[str, GraphNode],
    placed: set,
) -> List[str]:
    """Neighbors of node_id in edge discovery order, skipping placed and unknown ids."""
    result: List[str] = []
    for edge in edges:
        if not edge.touches(node_id):
            continue
        other = edge.other_end(node_id)
        if other in placed or other not in known or other in result:
            continue
        result.append(other)
    return result


def assign_rings(
    nodes: List[GraphNode],
    edges: List[GraphEdge],
    root_id: str,
) -> RingAssignment:
    """
    Walk the graph outward from the root and sort every node into a ring.

    Raises:
        MissingRootError: If root_id is not in the node list
    """
    known = _index_nodes(nodes)
    if root_id not in known:
        raise MissingRootError(root_id)

    assignment = RingAssignment(root_id=root_id)
    placed = {root_id}

    assignment.ring1 = _unplaced_neighbors(root_id, edges, known, placed)
    placed.update(assignment.ring1)

    for index, parent_id in enumerate(assignment.ring1):
        children = _unplaced_neighbors(parent_id, edges, known, placed)
        if not children:
            continue
        assignment.ring2_groups.append((index, children))
        placed.update(children)

    assignment.overflow = [node_id for node_id in known if node_id not in placed]
    return assignment


def compute_rings(
    nodes: List[GraphNode],
    edges: List[GraphEdge],
    root_id: str,
) -> Dict[str, Ring]:
    """Map every node id to its ring for this graph."""
    return assign_rings(nodes, edges, root_id).as_mapping()


def compute_layout(
    nodes: List[GraphNode],
    edges: List[GraphEdge],
    root_id: str,
    canvas_width: float,
    canvas_height: float,
    settings: Optional[LayoutSettings] = None,
) -> List[GraphNode]:
    """
    Compute positions for every node.

    Args:
        nodes: Graph nodes (not modified)
        edges: Graph edges, treated as undirected adjacency
        root_id: ID of the focal node
        canvas_width: Logical canvas width; the root goes at its center
        canvas_height: Logical canvas height
        settings: Radii and arc tuning (defaults if None)

    Returns:
        Positioned copies of the input nodes, in input order. Duplicate
        ids keep their first occurrence.

    Raises:
        MissingRootError: If root_id is not in the node list
    """
    settings = settings or LayoutSettings()
    assignment = assign_rings(nodes, edges, root_id)

    cx = canvas_width / 2
    cy = canvas_height / 2
    positions: Dict[str, Tuple[float, float]] = {root_id: (cx, cy)}

    def polar(radius: float, angle: float) -> Tuple[float, float]:
        return cx + radius * math.cos(angle), cy + radius * math.sin(angle)

    # Ring 1: evenly spaced, insertion order
    ring1_count = len(assignment.ring1)
    angle_step = (2 * math.pi / ring1_count) if ring1_count else 0.0
    for i, node_id in enumerate(assignment.ring1):
        positions[node_id] = polar(settings.ring1_radius, i * angle_step)

    # Ring 2: arc centered on the parent's angle, alternating radial jitter
    for parent_index, children in assignment.ring2_groups:
        parent_angle = parent_index * angle_step
        k = len(children)
        arc = min(settings.max_arc, k * settings.arc_per_child)
        start = parent_angle - arc / 2
        step = arc / (k - 1) if k > 1 else 0.0
        for j, node_id in enumerate(children):
            jitter = settings.ring2_jitter if j % 2 == 0 else -settings.ring2_jitter
            positions[node_id] = polar(settings.ring2_radius + jitter, start + j * step)

    # Overflow: far circle, simple index order
    total = len(assignment.overflow)
    for i, node_id in enumerate(assignment.overflow):
        positions[node_id] = polar(settings.overflow_radius, (i / total) * 2 * math.pi)

    logger.debug(
        "Layout for %s: ring1=%d ring2=%d overflow=%d",
        root_id,
        ring1_count,
        sum(len(c) for _, c in assignment.ring2_groups),
        total,
    )

    dangling = count_dangling_edges(nodes, edges)
    if dangling:
        logger.warning("Dropping %d edge(s) that reference unknown nodes", dangling)

    result: List[GraphNode] = []
    seen = set()
    for node in nodes:
        if node.id in seen:
            continue
        seen.add(node.id)
        x, y = positions[node.id]
        result.append(node.placed_at(x, y))
    return result


def count_dangling_edges(nodes: List[GraphNode], edges: List[GraphEdge]) -> int:
    known = {n.id for n in nodes}
    return sum(
        1 for e in edges
        if e.source_id not in known or e.target_id not in known
    )


def resolve_edges(nodes: List[GraphNode], edges: List[GraphEdge]) -> List[RenderEdge]:
    """
    Resolve edges to coordinate pairs for the renderer.

    Edges whose endpoints are missing or unplaced are dropped.
    """
    by_id = _index_nodes(nodes)
    resolved: List[RenderEdge] = []
    for edge in edges:
        source = by_id.get(edge.source_id)
        target = by_id.get(edge.target_id)
        if source is None or target is None:
            continue
        if not source.is_placed or not target.is_placed:
            continue
        resolved.append(RenderEdge(
            source_id=edge.source_id,
            target_id=edge.target_id,
            x1=source.x,
            y1=source.y,
            x2=target.x,
            y2=target.y,
            label=edge.relationship_label,
        ))
    return resolved
