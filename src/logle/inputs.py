from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import IO, Any, Callable, Iterator, Optional, Tuple

import pandas as pd

from .status import Status
from .utils import loads_json

logger = logging.getLogger(__name__)

OPEN_FILE_ERR = "Error opening file: "

Opener = Callable[[str], IO[str]]


def _open_text(path: str) -> IO[str]:
    return open(path, "r", encoding="utf-8", newline="")


class CSVParseError(ValueError):
    """Raised when a CSV input cannot be parsed into a table."""


class JsonStreamError(ValueError):
    """Raised when a line of a JSON stream is not valid JSON."""

    def __init__(self, line_no: int, detail: str) -> None:
        super().__init__(f"Invalid JSON on line {line_no}: {detail}")
        self.line_no = line_no


class _OwnedHandle:
    """Base for wrappers that take ownership of an open text handle."""

    def __init__(self, handle: IO[str]) -> None:
        self._handle: Optional[IO[str]] = handle

    @property
    def closed(self) -> bool:
        return self._handle is None

    def close(self) -> None:
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class CSVParser(_OwnedHandle):
    """
    Tabular parser over an open CSV handle.

    The whole table is read with pandas: header-driven, every cell kept as a
    string, no NA coercion. The handle is closed once `read()` returns or raises.
    """

    def read(self) -> pd.DataFrame:
        if self._handle is None:
            raise CSVParseError("CSV parser is already closed.")
        try:
            df = pd.read_csv(self._handle, dtype=str, keep_default_na=False, skipinitialspace=True)
        except pd.errors.EmptyDataError:
            df = pd.DataFrame()
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            raise CSVParseError(str(e)) from e
        finally:
            self.close()
        df.columns = [str(c).strip() for c in df.columns]
        return df


class JsonStreamReader(_OwnedHandle):
    """
    Incremental reader for newline-delimited JSON.

    Yields one decoded value per non-blank line. The handle is closed when the
    stream is exhausted or a line fails to decode.
    """

    def __iter__(self) -> Iterator[Any]:
        if self._handle is None:
            return
        try:
            for line_no, line in enumerate(self._handle, start=1):
                if not line.strip():
                    continue
                try:
                    yield json.loads(line)
                except json.JSONDecodeError as e:
                    raise JsonStreamError(line_no, e.msg) from e
        finally:
            self.close()


@dataclass(frozen=True)
class JsonDocument:
    """
    A whole JSON document parsed in memory.

    value: decoded tree, or None when parsing failed
    error: parse error description; None on success
    source: path the document was read from
    """
    value: Any
    error: Optional[str] = None
    source: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None


class InputAcquirer:
    """
    Opens input files and wraps them for the analyzers.

    On open failure an EXTERNAL status naming the path is returned and no
    handle is handed out. On success the wrapper owns the handle.
    """

    def __init__(self, opener: Opener | None = None) -> None:
        self._opener = opener or _open_text

    def _open(self, path: str) -> Tuple[Status, Optional[IO[str]]]:
        try:
            handle = self._opener(path)
        except (OSError, ValueError) as e:
            logger.debug("open failed for %s: %s", path, e)
            return Status.external(f"{OPEN_FILE_ERR}{path}"), None
        return Status.OK, handle

    def csv_parser(self, path: str) -> Tuple[Status, Optional[CSVParser]]:
        status, handle = self._open(path)
        if not status.ok:
            return status, None
        return Status.OK, CSVParser(handle)

    def json_document(self, path: str) -> Tuple[Status, Optional[JsonDocument]]:
        """
        Read and parse a whole JSON document, ignoring comments.

        Parse failures are not reported through the status: the returned
        document carries the error and the analyzer decides what to do.
        """
        status, handle = self._open(path)
        if not status.ok:
            return status, None
        try:
            text = handle.read()
        except (OSError, UnicodeDecodeError) as e:
            return Status.OK, JsonDocument(value=None, error=f"Error reading {path}: {e}", source=path)
        finally:
            handle.close()
        try:
            value = loads_json(text)
        except json.JSONDecodeError as e:
            logger.debug("JSON parse failed for %s: %s", path, e)
            return Status.OK, JsonDocument(value=None, error=f"Invalid JSON in {path}: {e}", source=path)
        return Status.OK, JsonDocument(value=value, source=path)

    def json_stream(self, path: str) -> Tuple[Status, Optional[JsonStreamReader]]:
        status, handle = self._open(path)
        if not status.ok:
            return status, None
        return Status.OK, JsonStreamReader(handle)
