from __future__ import annotations

import logging
from typing import IO, Callable

from .status import Status

logger = logging.getLogger(__name__)


def _open_for_write(path: str) -> IO[str]:
    return open(path, "w", encoding="utf-8", newline="")


class FileWriter:
    """
    Writes a complete text blob to a destination file.

    Returns:
      - OK if the file could be opened, written and closed
      - EXTERNAL if opening or closing failed
      - INTERNAL if writing failed after the file was opened
    """

    def __init__(self, opener: Callable[[str], IO[str]] | None = None) -> None:
        self._opener = opener or _open_for_write

    def write(self, path: str, contents: str) -> Status:
        try:
            out_file = self._opener(path)
        except (OSError, ValueError):
            return Status.external(f"Error opening file: {path}")

        try:
            out_file.write(contents)
            out_file.flush()
        except (OSError, ValueError) as e:
            # Unencodable text raises UnicodeEncodeError, a ValueError.
            try:
                out_file.close()
            except (OSError, ValueError) as close_err:
                logger.debug("close after failed write also failed for %s: %s", path, close_err)
            logger.debug("write failed for %s: %s", path, e)
            return Status.internal(f"Error writing to file: {path}")

        # Closed explicitly so that a failing close is reported.
        try:
            out_file.close()
        except OSError:
            return Status.external(f"Error closing file: {path}")
        return Status.OK
