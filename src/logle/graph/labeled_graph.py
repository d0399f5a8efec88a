from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Node:
    id: int
    type: str
    value: str


@dataclass
class Edge:
    source: int
    target: int
    label: str
    attributes: Dict[str, str] = field(default_factory=dict)


class LabeledGraph:
    """
    Directed graph whose nodes carry a (type, value) label and whose edges
    carry a text label plus free-form string attributes.

    Nodes are unique per (type, value) and edges per (source, target, label).
    Ids are assigned in insertion order so exports are deterministic.
    """

    def __init__(self) -> None:
        self._nodes: List[Node] = []
        self._node_index: Dict[Tuple[str, str], int] = {}
        self._edges: List[Edge] = []
        self._edge_index: Dict[Tuple[int, int, str], int] = {}

    def add_node(self, node_type: str, value: str) -> int:
        key = (node_type, value)
        existing = self._node_index.get(key)
        if existing is not None:
            return existing
        node_id = len(self._nodes)
        self._nodes.append(Node(id=node_id, type=node_type, value=value))
        self._node_index[key] = node_id
        return node_id

    def add_edge(self, source: int, target: int, label: str, **attributes: str) -> bool:
        for node_id in (source, target):
            if not 0 <= node_id < len(self._nodes):
                raise KeyError(f"Unknown node id: {node_id}")
        key = (source, target, label)
        if key in self._edge_index:
            return False
        self._edge_index[key] = len(self._edges)
        self._edges.append(
            Edge(source=source, target=target, label=label, attributes={k: str(v) for k, v in attributes.items()})
        )
        return True

    def get_edge(self, source: int, target: int, label: str) -> Optional[Edge]:
        idx = self._edge_index.get((source, target, label))
        return self._edges[idx] if idx is not None else None

    def find_node(self, node_type: str, value: str) -> Optional[int]:
        return self._node_index.get((node_type, value))

    @property
    def nodes(self) -> List[Node]:
        return list(self._nodes)

    @property
    def edges(self) -> List[Edge]:
        return list(self._edges)

    @property
    def num_nodes(self) -> int:
        return len(self._nodes)

    @property
    def num_edges(self) -> int:
        return len(self._edges)

    @property
    def is_empty(self) -> bool:
        return not self._nodes
