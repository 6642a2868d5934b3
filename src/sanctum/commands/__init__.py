"""CLI commands for sanctum."""

from .calendar import calendar
from .cycle import cycle
from .deload import deload
from .export import export
from .import_data import import_data
from .init import init
from .program import program
from .reset import reset
from .rest import rest
from .serve import serve
from .status import status
from .units import units
from .volume import volume
from .workout import workout

__all__ = [
    "calendar",
    "cycle",
    "deload",
    "export",
    "import_data",
    "init",
    "program",
    "reset",
    "rest",
    "serve",
    "status",
    "units",
    "volume",
    "workout",
]
