"""Command line interface for envgate."""

from .report import CheckReport
from .run_check import main

__all__ = ["main", "CheckReport"]
