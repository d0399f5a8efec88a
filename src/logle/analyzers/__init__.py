from .access import AccessAnalyzer
from .base import Analyzer
from .curio import CurioAnalyzer
from .plaso import PlasoAnalyzer
from .registry import AnalyzerRegistry

__all__ = ["AccessAnalyzer", "Analyzer", "AnalyzerRegistry", "CurioAnalyzer", "PlasoAnalyzer"]
