from __future__ import annotations

from typing import Any, ClassVar, Tuple

from ..graph import GraphExporter, LabeledGraph
from ..models import AnalysisOptions
from ..status import Status

BUILD_BEFORE_INIT_ERR = "Analyzer must be initialized before the graph is built."


class Analyzer:
    """
    Two-phase analysis pipeline: initialize(input), then build().

    After a successful build the graph can be rendered as text. An empty
    string from render() means there is nothing to write.
    """

    name: ClassVar[str] = ""
    description: ClassVar[str] = ""
    input_kinds: ClassVar[Tuple[str, ...]] = ()
    output_formats: ClassVar[Tuple[str, ...]] = ("dot",)

    def __init__(self) -> None:
        self.graph = LabeledGraph()
        self._initialized = False

    def initialize(self, source: Any) -> Status:  # pragma: no cover - interface
        raise NotImplementedError

    def build(self) -> Status:  # pragma: no cover - interface
        raise NotImplementedError

    def render(self, options: AnalysisOptions) -> str:  # pragma: no cover - interface
        raise NotImplementedError

    def _exporter(self) -> GraphExporter:
        return GraphExporter(self.graph)

    @classmethod
    def describe(cls) -> dict[str, object]:
        return {
            "name": cls.name,
            "description": cls.description,
            "input_kinds": list(cls.input_kinds),
            "output_formats": list(cls.output_formats),
        }
