from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator

from .utils import read_json


class InputFileCase(str, Enum):
    """Which member of the input-source oneof is populated."""
    CSV_FILE = "csv_file"
    JSON_FILE = "json_file"
    JSON_STREAM_FILE = "json_stream_file"
    NOT_SET = "not_set"


_INPUT_FIELDS = (InputFileCase.CSV_FILE, InputFileCase.JSON_FILE, InputFileCase.JSON_STREAM_FILE)


class PlasoOptions(BaseModel):
    """
    Options for the timeline (plaso) analyzer.

    show_all_sources: keep events that cannot be tied to a file and attach them
    to a node for their event source instead of dropping them.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    show_all_sources: bool = False


class AnalysisOptions(BaseModel):
    """
    Configuration for a single front-end run.

    analyzer: "curio" | "mail" | "plaso". Validated by the dispatcher, not here,
      so that a bad selector is reported as INVALID_ARGUMENT.
    csv_file / json_file / json_stream_file: input oneof, at most one set
    plaso_options: extra options for the plaso analyzer
    output_dot_file / output_pbtxt_file: optional destinations
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    analyzer: Optional[str] = None
    csv_file: Optional[str] = None
    json_file: Optional[str] = None
    json_stream_file: Optional[str] = None
    plaso_options: Optional[PlasoOptions] = None
    output_dot_file: Optional[str] = None
    output_pbtxt_file: Optional[str] = None

    @model_validator(mode="after")
    def _check_single_input(self) -> "AnalysisOptions":
        present = [case.value for case in _INPUT_FIELDS if getattr(self, case.value) is not None]
        if len(present) > 1:
            raise ValueError(f"At most one input file may be set, got: {', '.join(present)}.")
        return self

    @property
    def input_file_case(self) -> InputFileCase:
        for case in _INPUT_FIELDS:
            if getattr(self, case.value) is not None:
                return case
        return InputFileCase.NOT_SET

    # Input fields count as present even when empty; opening "" fails later.
    def has_analyzer(self) -> bool:
        return self.analyzer is not None

    def has_csv_file(self) -> bool:
        return self.csv_file is not None

    def has_json_file(self) -> bool:
        return self.json_file is not None

    def has_json_stream_file(self) -> bool:
        return self.json_stream_file is not None

    def has_output_dot_file(self) -> bool:
        return bool(self.output_dot_file)

    def has_output_pbtxt_file(self) -> bool:
        return bool(self.output_pbtxt_file)

    @property
    def show_all_sources(self) -> bool:
        return self.plaso_options.show_all_sources if self.plaso_options is not None else False

    def output_destinations(self) -> list[str]:
        """Non-empty destinations in persist order (DOT first)."""
        return [p for p in (self.output_dot_file, self.output_pbtxt_file) if p]

    @classmethod
    def from_file(cls, path: Path) -> "AnalysisOptions":
        """Load options from a JSON file. Comments are allowed."""
        return cls.model_validate(read_json(path))
