from __future__ import annotations

from typing import Any, List, Optional, Tuple

from ..inputs import JsonDocument
from ..models import AnalysisOptions
from ..status import Status
from .base import BUILD_BEFORE_INIT_ERR, Analyzer

DEFAULT_RELATION = "depends_on"


def _extract_relations(value: Any) -> Tuple[Optional[List[dict]], str]:
    """Return (relations, error). Accepts a list or {"relations": [...]}."""
    if isinstance(value, dict):
        if "relations" not in value:
            return None, "Curio document must contain a 'relations' list."
        value = value["relations"]
    if not isinstance(value, list):
        return None, "Curio document must be a list of relations."

    relations: List[dict] = []
    for i, rel in enumerate(value):
        if not isinstance(rel, dict):
            return None, f"relation[{i}] must be an object."
        for key in ("source", "target"):
            v = rel.get(key)
            if not isinstance(v, str) or not v.strip():
                return None, f"relation[{i}].{key} must be a non-empty string."
        label = rel.get("relation", DEFAULT_RELATION)
        if not isinstance(label, str) or not label.strip():
            return None, f"relation[{i}].relation must be a non-empty string."
        relations.append({"source": rel["source"], "target": rel["target"], "relation": label})
    return relations, ""


class CurioAnalyzer(Analyzer):
    """Builds a dependency graph between data streams from a Curio JSON document."""

    name = "curio"
    description = "Dependency graph between streams, from a whole JSON document."
    input_kinds = ("json_file",)
    output_formats = ("dot",)

    def __init__(self) -> None:
        super().__init__()
        self._relations: List[dict] = []

    def initialize(self, source: Optional[JsonDocument]) -> Status:
        if source is None:
            return Status.invalid_argument("No JSON document provided to the Curio analyzer.")
        if not source.ok:
            return Status.invalid_argument(source.error or "Invalid JSON document.")
        relations, err = _extract_relations(source.value)
        if relations is None:
            return Status.invalid_argument(err)
        self._relations = relations
        self._initialized = True
        return Status.OK

    def build(self) -> Status:
        if not self._initialized:
            return Status.internal(BUILD_BEFORE_INIT_ERR)
        for rel in self._relations:
            src = self.graph.add_node("stream", rel["source"])
            dst = self.graph.add_node("stream", rel["target"])
            self.graph.add_edge(src, dst, rel["relation"])
        return Status.OK

    def dependency_graph_as_dot(self) -> str:
        if self.graph.is_empty:
            return ""
        return self._exporter().as_dot(name="curio")

    def render(self, options: AnalysisOptions) -> str:
        return self.dependency_graph_as_dot()
