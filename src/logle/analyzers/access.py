from __future__ import annotations

from typing import Optional

import pandas as pd

from ..inputs import CSVParseError, CSVParser
from ..models import AnalysisOptions
from ..status import Status
from .base import BUILD_BEFORE_INIT_ERR, Analyzer

REQUIRED_COLUMNS = ("actor", "account")
OPTIONAL_COLUMNS = ("action", "timestamp")
DEFAULT_ACTION = "access"


class AccessAnalyzer(Analyzer):
    """
    Builds an account access graph from CSV access records.

    Each row says that `actor` touched `account`, optionally with an `action`
    and a `timestamp`. Repeated (actor, account, action) rows collapse into one
    edge that counts the accesses and keeps the first/last timestamps seen.
    """

    name = "mail"
    description = "Account access graph, from CSV access records."
    input_kinds = ("csv_file",)
    output_formats = ("dot",)

    def __init__(self) -> None:
        super().__init__()
        self._records: Optional[pd.DataFrame] = None

    def initialize(self, source: Optional[CSVParser]) -> Status:
        if source is None:
            return Status.invalid_argument("No CSV parser provided to the access analyzer.")
        try:
            df = source.read()
        except CSVParseError as e:
            return Status.invalid_argument(f"Could not parse CSV input: {e}")

        lowered = [c.lower() for c in df.columns]
        duplicated = sorted({c for c in lowered if lowered.count(c) > 1})
        if duplicated:
            return Status.invalid_argument(f"CSV input has duplicate columns (case-insensitive): {duplicated}")
        df.columns = lowered
        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            return Status.invalid_argument(f"CSV input is missing required columns: {missing}")

        keep = [c for c in REQUIRED_COLUMNS + OPTIONAL_COLUMNS if c in df.columns]
        self._records = df[keep]
        self._initialized = True
        return Status.OK

    def build(self) -> Status:
        if not self._initialized or self._records is None:
            return Status.internal(BUILD_BEFORE_INIT_ERR)

        has_action = "action" in self._records.columns
        has_time = "timestamp" in self._records.columns
        # Header is line 1, so data rows start at line 2.
        for line_no, row in enumerate(self._records.to_dict(orient="records"), start=2):
            actor = str(row["actor"]).strip()
            account = str(row["account"]).strip()
            if not actor or not account:
                return Status.invalid_argument(f"CSV row on line {line_no} has an empty actor or account.")
            action = (str(row["action"]).strip() if has_action else "") or DEFAULT_ACTION
            when = str(row["timestamp"]).strip() if has_time else ""

            src = self.graph.add_node("actor", actor)
            dst = self.graph.add_node("account", account)
            if self.graph.add_edge(src, dst, action, count="1"):
                edge = self.graph.get_edge(src, dst, action)
                if when:
                    edge.attributes["first_seen"] = when
                    edge.attributes["last_seen"] = when
                continue

            edge = self.graph.get_edge(src, dst, action)
            edge.attributes["count"] = str(int(edge.attributes["count"]) + 1)
            if when:
                first = edge.attributes.get("first_seen", when)
                last = edge.attributes.get("last_seen", when)
                edge.attributes["first_seen"] = min(first, when)
                edge.attributes["last_seen"] = max(last, when)
        return Status.OK

    def access_graph_as_dot(self) -> str:
        if self.graph.is_empty:
            return ""
        return self._exporter().as_dot(name="access")

    def render(self, options: AnalysisOptions) -> str:
        return self.access_graph_as_dot()
