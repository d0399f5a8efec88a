from .exporter import GraphExporter
from .labeled_graph import Edge, LabeledGraph, Node

__all__ = ["Edge", "GraphExporter", "LabeledGraph", "Node"]
