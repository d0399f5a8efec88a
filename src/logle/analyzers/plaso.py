from __future__ import annotations

from typing import Any, Iterable, List, Optional, Union

from ..inputs import JsonDocument, JsonStreamError, JsonStreamReader
from ..models import AnalysisOptions
from ..status import Status
from .base import BUILD_BEFORE_INIT_ERR, Analyzer

UNKNOWN_SOURCE = "unknown"

PlasoInput = Union[JsonDocument, JsonStreamReader]


def _document_events(value: Any) -> Optional[List[Any]]:
    """Events from a psort JSON document: {"event_0": {...}, ...} or a list."""
    if isinstance(value, dict):
        return list(value.values())
    if isinstance(value, list):
        return list(value)
    return None


def _event_file(event: dict) -> str:
    for key in ("filename", "display_name"):
        v = event.get(key)
        if isinstance(v, str) and v.strip():
            return v.strip()
    return ""


class PlasoAnalyzer(Analyzer):
    """
    Builds a timeline graph from Plaso (log2timeline) events.

    Events are ordered by timestamp and chained with `precedes` edges. Each
    event is tied to the file it was extracted from. Events with no file are
    dropped unless `show_all_sources` is set, in which case they hang off a
    node for their event source.
    """

    name = "plaso"
    description = "Timeline graph of Plaso events, from a JSON document or a JSON stream."
    input_kinds = ("json_file", "json_stream_file")
    output_formats = ("dot", "pbtxt")

    def __init__(self, show_all_sources: bool = False) -> None:
        super().__init__()
        self.show_all_sources = show_all_sources
        self._events: List[dict] = []

    def initialize(self, source: Optional[PlasoInput]) -> Status:
        if source is None:
            return Status.invalid_argument("No JSON input provided to the Plaso analyzer.")

        events: Optional[Iterable[Any]]
        if isinstance(source, JsonDocument):
            if not source.ok:
                return Status.invalid_argument(source.error or "Invalid JSON document.")
            events = _document_events(source.value)
            if events is None:
                return Status.invalid_argument("Plaso JSON document must be an object or a list of events.")
        else:
            events = source

        collected: List[dict] = []
        try:
            for i, event in enumerate(events):
                if not isinstance(event, dict):
                    return Status.invalid_argument(f"Plaso event {i} is not a JSON object.")
                collected.append(event)
        except JsonStreamError as e:
            return Status.invalid_argument(str(e))

        self._events = collected
        self._initialized = True
        return Status.OK

    def build(self) -> Status:
        if not self._initialized:
            return Status.internal(BUILD_BEFORE_INIT_ERR)

        timed: List[tuple[int, int, dict]] = []
        for i, event in enumerate(self._events):
            ts = event.get("timestamp")
            if isinstance(ts, bool) or not isinstance(ts, int):
                return Status.invalid_argument(f"Plaso event {i} has no integer timestamp.")
            timed.append((ts, i, event))
        timed.sort(key=lambda t: (t[0], t[1]))

        previous: Optional[int] = None
        for ts, i, event in timed:
            filename = _event_file(event)
            if not filename and not self.show_all_sources:
                continue

            desc = str(event.get("timestamp_desc") or "event")
            data_type = str(event.get("data_type") or "unknown")
            node = self.graph.add_node("event", f"{ts} {desc} [{data_type}] #{i}")
            if filename:
                self.graph.add_edge(node, self.graph.add_node("file", filename), "touches")
            else:
                source = str(event.get("source_short") or UNKNOWN_SOURCE)
                self.graph.add_edge(node, self.graph.add_node("source", source), "from_source")
            if previous is not None:
                self.graph.add_edge(previous, node, "precedes")
            previous = node
        return Status.OK

    def plaso_graph_dot(self) -> str:
        if self.graph.is_empty:
            return ""
        return self._exporter().as_dot(name="plaso")

    def plaso_graph_pbtxt(self) -> str:
        if self.graph.is_empty:
            return ""
        return self._exporter().as_pbtxt()

    def render(self, options: AnalysisOptions) -> str:
        if options.has_output_dot_file():
            return self.plaso_graph_dot()
        if options.has_output_pbtxt_file():
            return self.plaso_graph_pbtxt()
        return ""
