from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError

from .analyzers import AnalyzerRegistry
from .frontend import Frontend
from .models import AnalysisOptions
from .status import Code, Status
from .utils import setup_logging

app = typer.Typer(add_completion=False, help="logle: run an analyzer and export its graph")

EXIT_CODES = {
    Code.OK: 0,
    Code.INVALID_ARGUMENT: 2,
    Code.EXTERNAL: 3,
    Code.INTERNAL: 4,
}

# ---- Analyzer commands ----
analyzers_app = typer.Typer(help="Inspect available analyzers.")
app.add_typer(analyzers_app, name="analyzers")


@analyzers_app.command("list")
def list_analyzers() -> None:
    """List available analyzers with a one-line description."""
    registry = AnalyzerRegistry()
    for name in registry.list_analyzers():
        meta = registry.describe_analyzer(name)
        typer.echo(f"{name}: {meta['description']}")


@analyzers_app.command("describe")
def describe_analyzer(
    analyzer: str = typer.Option(..., "--analyzer", help="Analyzer name to describe")
) -> None:
    """Show metadata for an analyzer as JSON with sorted keys."""
    registry = AnalyzerRegistry()
    try:
        meta = registry.describe_analyzer(analyzer)
    except KeyError as exc:
        typer.echo(exc.args[0], err=True)
        raise typer.Exit(code=1)
    typer.echo(json.dumps(meta, indent=2, sort_keys=True))


def _fail(status: Status) -> None:
    typer.echo(f"ERROR: {status}", err=True)
    raise typer.Exit(code=EXIT_CODES[status.code])


@app.command()
def run(
    config: Optional[Path] = typer.Option(None, "--config", help="JSON file with analysis options"),
    analyzer: Optional[str] = typer.Option(None, "--analyzer", help="curio|mail|plaso"),
    csv_file: Optional[str] = typer.Option(None, "--csv-file", help="CSV input file"),
    json_file: Optional[str] = typer.Option(None, "--json-file", help="JSON input file"),
    json_stream_file: Optional[str] = typer.Option(None, "--json-stream-file", help="Newline-delimited JSON input file"),
    show_all_sources: Optional[bool] = typer.Option(
        None, "--show-all-sources/--no-show-all-sources", help="Plaso: keep events not tied to a file"
    ),
    output_dot_file: Optional[str] = typer.Option(None, "--output-dot-file", help="Write a GraphViz DOT graph here"),
    output_pbtxt_file: Optional[str] = typer.Option(None, "--output-pbtxt-file", help="Write a text-proto graph here"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress to stderr"),
):
    """
    Run one analyzer on its input and write the resulting graph.

    Command-line flags override values read from --config.
    """
    if verbose:
        setup_logging(logging.INFO)

    values: dict[str, Any] = {}
    if config is not None:
        try:
            loaded = AnalysisOptions.from_file(config)
        except OSError:
            _fail(Status.external(f"Error opening file: {config}"))
        except (ValueError, ValidationError) as e:
            _fail(Status.invalid_argument(f"Invalid configuration in {config}: {e}"))
        values = loaded.model_dump(exclude_none=True)

    overrides = {
        "analyzer": analyzer,
        "csv_file": csv_file,
        "json_file": json_file,
        "json_stream_file": json_stream_file,
        "output_dot_file": output_dot_file,
        "output_pbtxt_file": output_pbtxt_file,
    }
    if any(overrides[k] is not None for k in ("csv_file", "json_file", "json_stream_file")):
        # A flag-given input replaces whichever input the config file named.
        for key in ("csv_file", "json_file", "json_stream_file"):
            values.pop(key, None)
    values.update({k: v for k, v in overrides.items() if v is not None})
    if show_all_sources is not None:
        values["plaso_options"] = {"show_all_sources": show_all_sources}

    try:
        options = AnalysisOptions(**values)
    except ValidationError as e:
        _fail(Status.invalid_argument(str(e)))

    status = Frontend().run(options)
    if not status.ok:
        _fail(status)
    typer.echo("Run complete.")
