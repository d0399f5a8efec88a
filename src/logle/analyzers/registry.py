from __future__ import annotations

from typing import Callable, Dict, Type

from ..models import AnalysisOptions
from .access import AccessAnalyzer
from .base import Analyzer
from .curio import CurioAnalyzer
from .plaso import PlasoAnalyzer

AnalyzerFactory = Callable[[AnalysisOptions], Analyzer]


class AnalyzerRegistry:
    """
    Maps analyzer selectors to analyzer classes and builds fresh instances.

    Factories receive the run's options so analyzers can pick up their own
    settings (e.g. plaso's show_all_sources).
    """

    def __init__(self) -> None:
        self._classes: Dict[str, Type[Analyzer]] = {}
        self._factories: Dict[str, AnalyzerFactory] = {}
        self._register_builtin()

    def _register_builtin(self) -> None:
        self.register(CurioAnalyzer, lambda options: CurioAnalyzer())
        self.register(AccessAnalyzer, lambda options: AccessAnalyzer())
        self.register(PlasoAnalyzer, lambda options: PlasoAnalyzer(options.show_all_sources))

    def register(self, analyzer_cls: Type[Analyzer], factory: AnalyzerFactory | None = None) -> None:
        if not analyzer_cls.name:
            raise ValueError("Analyzer name must be provided.")
        self._classes[analyzer_cls.name] = analyzer_cls
        self._factories[analyzer_cls.name] = factory or (lambda options: analyzer_cls())

    def list_analyzers(self) -> list[str]:
        return sorted(self._classes)

    def __contains__(self, name: object) -> bool:
        return name in self._classes

    def create(self, name: str, options: AnalysisOptions) -> Analyzer:
        try:
            factory = self._factories[name]
        except KeyError as exc:
            raise KeyError(self._unknown_analyzer_msg(name)) from exc
        return factory(options)

    def describe_analyzer(self, name: str) -> dict[str, object]:
        try:
            return self._classes[name].describe()
        except KeyError as exc:
            raise KeyError(self._unknown_analyzer_msg(name)) from exc

    def _unknown_analyzer_msg(self, name: str) -> str:
        available = ", ".join(self.list_analyzers()) or "none"
        return f"Unknown analyzer '{name}'. Available analyzers: {available}."
