"""Selects an analyzer, feeds it its input, and writes the rendered graph.

A run goes through four steps and stops at the first failure:

  1. validate the analyzer selector
  2. acquire input, initialize and build the analyzer, render its graph
  3. stop without writing anything if the rendered text is empty
  4. write the text to each configured output file
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Tuple

from .analyzers import Analyzer, AnalyzerRegistry
from .inputs import InputAcquirer
from .models import AnalysisOptions, InputFileCase
from .outputs import FileWriter
from .status import Status

logger = logging.getLogger(__name__)

INVALID_ANALYZER_ERR = (
    "Invalid analysis. The analysis must be one of 'curio', 'mail', or 'plaso'."
)
CURIO_NEEDS_JSON_ERR = "The Curio analyzer requires a JSON input file."
MAIL_NEEDS_CSV_ERR = "The access analyzer requires a CSV input file."
INVALID_PLASO_INPUT_ERR = (
    "Unsupported input parameter. Plaso analyzer supports only json_file and json_stream_file."
)

RunResult = Tuple[Status, str]


def _initialize_build_render(analyzer: Analyzer, source: object, options: AnalysisOptions) -> RunResult:
    status = analyzer.initialize(source)
    if not status.ok:
        return status, ""
    status = analyzer.build()
    if not status.ok:
        return status, ""
    return Status.OK, analyzer.render(options)


class Frontend:
    """Runs one analysis per call. Holds no per-run state."""

    def __init__(
        self,
        acquirer: Optional[InputAcquirer] = None,
        writer: Optional[FileWriter] = None,
        registry: Optional[AnalyzerRegistry] = None,
    ) -> None:
        self.acquirer = acquirer or InputAcquirer()
        self.writer = writer or FileWriter()
        self.registry = registry or AnalyzerRegistry()
        self._runners: Dict[str, Callable[[AnalysisOptions], RunResult]] = {
            "curio": self._run_curio,
            "mail": self._run_mail,
            "plaso": self._run_plaso,
        }

    def run(self, options: AnalysisOptions) -> Status:
        runner = self._runners.get(options.analyzer) if options.has_analyzer() else None
        if runner is None:
            logger.warning("rejected analyzer selector %r", options.analyzer)
            return Status.invalid_argument(INVALID_ANALYZER_ERR)

        logger.info("running analyzer '%s'", options.analyzer)
        status, output_graph = runner(options)
        if not status.ok:
            logger.warning("analyzer '%s' failed: %s", options.analyzer, status)
            return status
        if output_graph == "":
            logger.info("analyzer '%s' produced no output; nothing written", options.analyzer)
            return status
        return self._persist(options, output_graph)

    def _persist(self, options: AnalysisOptions, output_graph: str) -> Status:
        # Every destination is attempted; the first failure is reported.
        result = Status.OK
        for path in options.output_destinations():
            status = self.writer.write(path, output_graph)
            if status.ok:
                logger.info("wrote %s", path)
                continue
            logger.warning("could not write %s: %s", path, status)
            if result.ok:
                result = status
        return result

    def _run_curio(self, options: AnalysisOptions) -> RunResult:
        if not options.has_json_file():
            return Status.invalid_argument(CURIO_NEEDS_JSON_ERR), ""
        status, document = self.acquirer.json_document(options.json_file)
        if not status.ok:
            return status, ""
        analyzer = self.registry.create("curio", options)
        return _initialize_build_render(analyzer, document, options)

    def _run_mail(self, options: AnalysisOptions) -> RunResult:
        if not options.has_csv_file():
            return Status.invalid_argument(MAIL_NEEDS_CSV_ERR), ""
        status, parser = self.acquirer.csv_parser(options.csv_file)
        if not status.ok:
            return status, ""
        with parser:
            analyzer = self.registry.create("mail", options)
            return _initialize_build_render(analyzer, parser, options)

    def _run_plaso(self, options: AnalysisOptions) -> RunResult:
        case = options.input_file_case
        if case == InputFileCase.JSON_FILE:
            status, document = self.acquirer.json_document(options.json_file)
            if not status.ok:
                return status, ""
            analyzer = self.registry.create("plaso", options)
            return _initialize_build_render(analyzer, document, options)
        if case == InputFileCase.JSON_STREAM_FILE:
            status, reader = self.acquirer.json_stream(options.json_stream_file)
            if not status.ok:
                return status, ""
            with reader:
                analyzer = self.registry.create("plaso", options)
                return _initialize_build_render(analyzer, reader, options)
        return Status.external(INVALID_PLASO_INPUT_ERR), ""


def run(options: AnalysisOptions) -> Status:
    """Run the analysis described by `options` with the default collaborators."""
    return Frontend().run(options)
