from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.INFO, name: str = "logle") -> logging.Logger:
    """Attach a console handler to the package logger. Safe to call repeatedly."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if not any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger


def strip_json_comments(text: str) -> str:
    """
    Remove // line comments and /* */ block comments from JSON text.

    String literals are left untouched, including any comment markers inside
    them. Newlines inside block comments are kept so that decode errors still
    point at the right line.
    """
    out: list[str] = []
    i = 0
    n = len(text)
    in_string = False
    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue
        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            stop = n if end == -1 else end + 2
            out.append("\n" * text.count("\n", i, stop))
            i = stop
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def loads_json(text: str) -> Any:
    return json.loads(strip_json_comments(text))


def read_json(path: Path) -> Any:
    return loads_json(Path(path).read_text(encoding="utf-8"))
