"""Reading rosters and scales from disk."""

from . import csv
from . import scales

__all__ = ["csv", "scales"]
