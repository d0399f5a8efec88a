"""logle: run log and record analyzers and export their graphs."""

import logging

from .frontend import Frontend, run
from .models import AnalysisOptions, InputFileCase, PlasoOptions
from .status import Code, Status

__all__ = ["AnalysisOptions", "Code", "Frontend", "InputFileCase", "PlasoOptions", "Status", "run"]

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
