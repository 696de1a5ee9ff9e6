"""
Presentation helpers for the dependency graph canvas.

Pure functions (no Qt) deciding node sizes, label detail and hit testing.
"""

from typing import Dict, List, Optional, Tuple

from depgraph_core.domain.models import GraphNode, Point
from depgraph_core.domain.enums import Ring


# Node radius (logical units) per ring
NODE_RADIUS = {
    Ring.ROOT: 35.0,
    Ring.RING1: 25.0,
    Ring.RING2: 20.0,
    Ring.OVERFLOW: 20.0,
}

# Service tag -> short glyph drawn inside the node
SERVICE_GLYPHS = {
    "ec2": "EC2",
    "vpc": "VPC",
    "s3": "S3",
    "iam": "IAM",
    "rds": "RDS",
    "lambda": "λ",
    "cloudwatch": "CW",
    "kms": "KMS",
    "volume": "EBS",
    "subnet": "SN",
    "security-group": "SG",
}


def node_radius(ring: Optional[Ring]) -> float:
    return NODE_RADIUS.get(ring, NODE_RADIUS[Ring.OVERFLOW])


def service_glyph(node: GraphNode) -> str:
    """Glyph for a node, looked up by category first, then service."""
    glyph = SERVICE_GLYPHS.get(node.category.lower()) or SERVICE_GLYPHS.get(node.service_tag.lower())
    if glyph:
        return glyph
    return node.service_tag[:3].upper()


def truncate_label(text: str, max_chars: int = 15, keep_chars: int = 12) -> str:
    """Shorten long display names: 'a-very-long-resource' -> 'a-very-long-...'."""
    if len(text) > max_chars:
        return text[:keep_chars] + "..."
    return text


def show_node_labels(zoom: float, min_zoom: float = 0.4) -> bool:
    return zoom > min_zoom


def show_edge_labels(zoom: float, min_zoom: float = 0.6) -> bool:
    return zoom > min_zoom


LOADING_MESSAGES = {
    1: "Discovering direct relationships...",
    2: "Analyzing extended dependency chain...",
}


def loading_message(depth: int) -> str:
    return LOADING_MESSAGES.get(depth, LOADING_MESSAGES[2])


def legend_entries(depth: int) -> List[Tuple[Ring, str]]:
    """Legend rows (ring, caption); the second level is listed only for extended graphs."""
    entries = [
        (Ring.ROOT, "Selected Resource"),
        (Ring.RING1, "Dependency Level 1"),
    ]
    if depth > 1:
        entries.append((Ring.RING2, "Dependency Level 2"))
    return entries


def node_at(
    nodes: List[GraphNode],
    point: Point,
    rings: Dict[str, Ring],
) -> Optional[str]:
    """
    Find the node whose circle contains a logical point.

    Nodes are drawn in list order, so the last match is the topmost.
    """
    hit: Optional[str] = None
    for node in nodes:
        if not node.is_placed:
            continue
        radius = node_radius(rings.get(node.id))
        if (point.x - node.x) ** 2 + (point.y - node.y) ** 2 <= radius ** 2:
            hit = node.id
    return hit
