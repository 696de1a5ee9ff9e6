"""
Domain models (DTOs) for DepGraph.

These are pure data classes with no UI or provider dependencies.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, List, Dict, Any


UNKNOWN = "unknown"


@dataclass(frozen=True)
class Point:
    """A 2-D point in either screen or logical space."""
    x: float
    y: float


@dataclass
class GraphNode:
    """A resource in the dependency graph."""
    id: str                      # Unique within a graph
    display_name: str
    category: str                # Resource type, e.g. "instance", "bucket"
    service_tag: str             # Owning service, e.g. "ec2", "s3"

    # Position (set by layout, overwritten by drag)
    x: Optional[float] = None
    y: Optional[float] = None

    @property
    def is_placed(self) -> bool:
        return self.x is not None and self.y is not None

    @property
    def position(self) -> Optional[Point]:
        if not self.is_placed:
            return None
        return Point(self.x, self.y)

    def placed_at(self, x: float, y: float) -> "GraphNode":
        """Return a copy of this node at (x, y)."""
        return replace(self, x=x, y=y)

    @classmethod
    def from_provider(cls, row: Dict[str, Any]) -> "GraphNode":
        """
        Normalize a provider row ``{id, name, type, service}``.

        Raises:
            ValueError: If the row has no id
        """
        node_id = row.get("id")
        if node_id is None or str(node_id) == "":
            raise ValueError(f"Graph node row has no id: {row!r}")
        node_id = str(node_id)
        return cls(
            id=node_id,
            display_name=str(row.get("name") or node_id),
            category=str(row.get("type") or UNKNOWN),
            service_tag=str(row.get("service") or UNKNOWN),
        )


@dataclass(frozen=True)
class GraphEdge:
    """A relationship between two resources. Direction is informational only."""
    source_id: str
    target_id: str
    relationship_label: str = ""

    def touches(self, node_id: str) -> bool:
        return self.source_id == node_id or self.target_id == node_id

    def other_end(self, node_id: str) -> str:
        """Return the id at the opposite end from ``node_id``."""
        return self.target_id if self.source_id == node_id else self.source_id

    @classmethod
    def from_provider(cls, row: Dict[str, Any]) -> "GraphEdge":
        """
        Normalize a provider row ``{source, target, relationship}``.

        Raises:
            ValueError: If either endpoint is missing
        """
        source = row.get("source")
        target = row.get("target")
        if source is None or target is None:
            raise ValueError(f"Graph edge row is missing an endpoint: {row!r}")
        return cls(
            source_id=str(source),
            target_id=str(target),
            relationship_label=str(row.get("relationship") or ""),
        )


@dataclass
class GraphData:
    """Ordered node and edge lists as returned by a provider."""
    nodes: List[GraphNode] = field(default_factory=list)
    edges: List[GraphEdge] = field(default_factory=list)

    @property
    def node_ids(self) -> List[str]:
        return [n.id for n in self.nodes]

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    @classmethod
    def from_provider(
        cls,
        node_rows: List[Dict[str, Any]],
        edge_rows: List[Dict[str, Any]],
    ) -> "GraphData":
        """
        Build graph data from raw provider rows.

        Duplicate node ids keep their first occurrence.
        """
        nodes: List[GraphNode] = []
        seen = set()
        for row in node_rows:
            node = GraphNode.from_provider(row)
            if node.id in seen:
                continue
            seen.add(node.id)
            nodes.append(node)

        edges = [GraphEdge.from_provider(row) for row in edge_rows]
        return cls(nodes=nodes, edges=edges)


@dataclass
class ViewportState:
    """Pan offset (screen units) and zoom scale of the canvas."""
    pan_x: float = 0.0
    pan_y: float = 0.0
    zoom: float = 1.0

    def copy(self) -> "ViewportState":
        return replace(self)


@dataclass
class DragState:
    """Node drag in progress (transient, cleared on pointer-up)."""
    dragged_node_id: Optional[str] = None
    has_moved: bool = False


@dataclass
class PanState:
    """Canvas pan in progress (transient, cleared on pointer-up)."""
    is_panning: bool = False
    last_pointer: Optional[Point] = None


@dataclass(frozen=True)
class RenderEdge:
    """An edge resolved to endpoint coordinates for drawing."""
    source_id: str
    target_id: str
    x1: float
    y1: float
    x2: float
    y2: float
    label: str = ""

    @property
    def midpoint(self) -> Point:
        return Point((self.x1 + self.x2) / 2, (self.y1 + self.y2) / 2)
