"""A package for deriving averages, letter grades, classifications and GPA from student grades."""

from .core import (
    Grade,
    Grades,
    InvalidGradeError,
    Roster,
    Student,
    Students,
)

from .calculator import GradeCalculator
from .statistics import CohortStatistics, cohort_statistics

from . import io
from . import plot
from . import reports
from . import scales
from . import statistics
from . import strategies
from . import _util

if _util.in_jupyter_notebook():
    from .overview import overview  # type: ignore

__all__ = [
    "Grade",
    "Grades",
    "InvalidGradeError",
    "Roster",
    "Student",
    "Students",
    "GradeCalculator",
    "CohortStatistics",
    "cohort_statistics",
    "io",
    "plot",
    "reports",
    "scales",
    "statistics",
    "strategies",
]
