from __future__ import annotations

from pathlib import Path

from logle.analyzers import AccessAnalyzer, AnalyzerRegistry, CurioAnalyzer, PlasoAnalyzer
from logle.inputs import InputAcquirer, JsonDocument
from logle.models import AnalysisOptions
from logle.status import Code


# -------------------------------
# Curio
# -------------------------------

def test_curio_builds_dependency_graph() -> None:
    doc = JsonDocument(
        value={
            "relations": [
                {"source": "raw_logs", "target": "sessions"},
                {"source": "raw_logs", "target": "sessions"},
                {"source": "sessions", "target": "report", "relation": "feeds"},
            ]
        }
    )
    analyzer = CurioAnalyzer()
    assert analyzer.initialize(doc).ok
    assert analyzer.build().ok
    assert analyzer.graph.num_nodes == 3
    assert analyzer.graph.num_edges == 2

    dot = analyzer.render(AnalysisOptions(output_pbtxt_file="ignored.pbtxt"))
    assert dot.startswith('digraph "curio" {')
    assert 'label="stream: raw_logs"' in dot
    assert 'label="feeds"' in dot


def test_curio_rejects_missing_or_malformed_documents() -> None:
    assert CurioAnalyzer().initialize(None).code == Code.INVALID_ARGUMENT

    broken = JsonDocument(value=None, error="Invalid JSON in x.json: Expecting value")
    status = CurioAnalyzer().initialize(broken)
    assert status.code == Code.INVALID_ARGUMENT
    assert "x.json" in status.message

    assert CurioAnalyzer().initialize(JsonDocument(value=42)).code == Code.INVALID_ARGUMENT
    assert CurioAnalyzer().initialize(JsonDocument(value={"streams": []})).code == Code.INVALID_ARGUMENT
    status = CurioAnalyzer().initialize(JsonDocument(value=[{"source": "a"}]))
    assert status.code == Code.INVALID_ARGUMENT
    assert "relation[0].target" in status.message


def test_build_before_initialize_is_internal() -> None:
    for analyzer in (CurioAnalyzer(), AccessAnalyzer(), PlasoAnalyzer()):
        assert analyzer.build().code == Code.INTERNAL


def test_curio_empty_document_renders_nothing() -> None:
    analyzer = CurioAnalyzer()
    assert analyzer.initialize(JsonDocument(value=[])).ok
    assert analyzer.build().ok
    assert analyzer.render(AnalysisOptions(output_dot_file="out.dot")) == ""


# -------------------------------
# Access
# -------------------------------

def _csv_parser(tmp_path: Path, text: str):
    path = tmp_path / "access.csv"
    path.write_text(text, encoding="utf-8")
    status, parser = InputAcquirer().csv_parser(str(path))
    assert status.ok
    return parser


def test_access_counts_repeated_accesses(tmp_path: Path) -> None:
    parser = _csv_parser(
        tmp_path,
        "Timestamp,Actor,Account,Action\n"
        "2015-01-02T09:00:00,alice,bob@example.com,read\n"
        "2015-01-01T10:00:00,alice,bob@example.com,read\n"
        "2015-01-01T11:00:00,carol,bob@example.com,\n",
    )
    analyzer = AccessAnalyzer()
    assert analyzer.initialize(parser).ok
    assert parser.closed
    assert analyzer.build().ok

    g = analyzer.graph
    alice = g.find_node("actor", "alice")
    bob = g.find_node("account", "bob@example.com")
    carol = g.find_node("actor", "carol")
    edge = g.get_edge(alice, bob, "read")
    assert edge.attributes == {
        "count": "2",
        "first_seen": "2015-01-01T10:00:00",
        "last_seen": "2015-01-02T09:00:00",
    }
    assert g.get_edge(carol, bob, "access").attributes["count"] == "1"

    dot = analyzer.render(AnalysisOptions())
    assert dot.startswith('digraph "access" {')
    assert "count=2" in dot


def test_access_requires_actor_and_account_columns(tmp_path: Path) -> None:
    parser = _csv_parser(tmp_path, "user,resource\nalice,bob\n")
    status = AccessAnalyzer().initialize(parser)
    assert status.code == Code.INVALID_ARGUMENT
    assert "actor" in status.message


def test_access_blank_actor_names_line(tmp_path: Path) -> None:
    parser = _csv_parser(tmp_path, "actor,account\nalice,bob\n,bob\n")
    analyzer = AccessAnalyzer()
    assert analyzer.initialize(parser).ok
    status = analyzer.build()
    assert status.code == Code.INVALID_ARGUMENT
    assert "line 3" in status.message


def test_access_unparseable_csv(tmp_path: Path) -> None:
    parser = _csv_parser(tmp_path, "actor,account\nalice,bob\nalice,bob,x,y\n")
    assert AccessAnalyzer().initialize(parser).code == Code.INVALID_ARGUMENT


# -------------------------------
# Plaso
# -------------------------------

EVENTS = {
    "event_0": {"timestamp": 20, "timestamp_desc": "Last Written", "data_type": "fs:stat", "filename": "/etc/passwd"},
    "event_1": {"timestamp": 10, "timestamp_desc": "Creation Time", "data_type": "fs:stat", "display_name": "OS:/etc/hosts"},
    "event_2": {"timestamp": 30, "data_type": "syslog:line", "source_short": "LOG"},
}


def test_plaso_orders_events_and_drops_sourceless_ones() -> None:
    analyzer = PlasoAnalyzer()
    assert analyzer.initialize(JsonDocument(value=EVENTS)).ok
    assert analyzer.build().ok

    g = analyzer.graph
    values = [n.value for n in g.nodes if n.type == "event"]
    assert values == ["10 Creation Time [fs:stat] #1", "20 Last Written [fs:stat] #0"]
    assert g.find_node("file", "OS:/etc/hosts") is not None
    assert g.find_node("source", "LOG") is None
    first = g.find_node("event", values[0])
    second = g.find_node("event", values[1])
    assert g.get_edge(first, second, "precedes") is not None


def test_plaso_show_all_sources_keeps_every_event() -> None:
    analyzer = PlasoAnalyzer(show_all_sources=True)
    assert analyzer.initialize(JsonDocument(value=list(EVENTS.values()))).ok
    assert analyzer.build().ok
    log = analyzer.graph.find_node("source", "LOG")
    assert log is not None
    assert len([n for n in analyzer.graph.nodes if n.type == "event"]) == 3


def test_plaso_render_picks_one_format() -> None:
    analyzer = PlasoAnalyzer()
    analyzer.initialize(JsonDocument(value=EVENTS))
    analyzer.build()
    both = AnalysisOptions(output_dot_file="g.dot", output_pbtxt_file="g.pbtxt")
    assert analyzer.render(both).startswith('digraph "plaso"')
    assert analyzer.render(AnalysisOptions(output_pbtxt_file="g.pbtxt")).startswith("node {")
    assert analyzer.render(AnalysisOptions()) == ""


def test_plaso_build_fails_without_timestamp() -> None:
    analyzer = PlasoAnalyzer()
    assert analyzer.initialize(JsonDocument(value=[{"timestamp": "yesterday", "filename": "a"}])).ok
    status = analyzer.build()
    assert status.code == Code.INVALID_ARGUMENT
    assert "timestamp" in status.message


def test_plaso_rejects_non_object_events() -> None:
    assert PlasoAnalyzer().initialize(JsonDocument(value=[1, 2])).code == Code.INVALID_ARGUMENT
    assert PlasoAnalyzer().initialize(JsonDocument(value="events")).code == Code.INVALID_ARGUMENT


# -------------------------------
# Registry
# -------------------------------

def test_registry_lists_and_describes() -> None:
    reg = AnalyzerRegistry()
    assert reg.list_analyzers() == ["curio", "mail", "plaso"]
    desc = reg.describe_analyzer("plaso")
    assert desc["input_kinds"] == ["json_file", "json_stream_file"]
    assert desc["output_formats"] == ["dot", "pbtxt"]
    assert "mail" in reg
    assert "bogus" not in reg


def test_registry_passes_plaso_options() -> None:
    reg = AnalyzerRegistry()
    opts = AnalysisOptions(analyzer="plaso", plaso_options={"show_all_sources": True})
    analyzer = reg.create("plaso", opts)
    assert isinstance(analyzer, PlasoAnalyzer)
    assert analyzer.show_all_sources is True


def test_access_rejects_columns_that_differ_only_by_case(tmp_path: Path) -> None:
    parser = _csv_parser(tmp_path, "actor,Actor,account\nalice,bob,carol\n")
    status = AccessAnalyzer().initialize(parser)
    assert status.code == Code.INVALID_ARGUMENT
    assert "duplicate columns" in status.message
    assert parser.closed
