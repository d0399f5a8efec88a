from __future__ import annotations

from .labeled_graph import LabeledGraph


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


class GraphExporter:
    """Renders a LabeledGraph as GraphViz DOT or as proto-style text."""

    def __init__(self, graph: LabeledGraph) -> None:
        self._graph = graph

    def as_dot(self, name: str = "G") -> str:
        lines = [f'digraph "{_escape(name)}" {{']
        for node in self._graph.nodes:
            label = _escape(f"{node.type}: {node.value}")
            lines.append(f'  n{node.id} [label="{label}"];')
        for edge in self._graph.edges:
            label = edge.label
            if edge.attributes:
                details = ", ".join(f"{k}={v}" for k, v in sorted(edge.attributes.items()))
                label = f"{label} ({details})"
            lines.append(f'  n{edge.source} -> n{edge.target} [label="{_escape(label)}"];')
        lines.append("}")
        return "\n".join(lines) + "\n"

    def as_pbtxt(self) -> str:
        lines: list[str] = []
        for node in self._graph.nodes:
            lines.append("node {")
            lines.append(f"  id: {node.id}")
            lines.append(f'  type: "{_escape(node.type)}"')
            lines.append(f'  value: "{_escape(node.value)}"')
            lines.append("}")
        for edge in self._graph.edges:
            lines.append("edge {")
            lines.append(f"  source: {edge.source}")
            lines.append(f"  target: {edge.target}")
            lines.append(f'  label: "{_escape(edge.label)}"')
            for key, value in sorted(edge.attributes.items()):
                lines.append(f'  attribute {{ key: "{_escape(key)}" value: "{_escape(value)}" }}')
            lines.append("}")
        return "\n".join(lines) + "\n" if lines else ""
