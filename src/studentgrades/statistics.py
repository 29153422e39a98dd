"""Statistics about a cohort of students."""

import collections.abc
import concurrent.futures
import dataclasses
import logging
import math
import typing

import numpy as np
import pandas as pd

from . import scales as _scales
from ._util import format_fixed as _format_fixed, parse_number as _parse_number
from .core import Grade, Roster
from .scales import Band
from .strategies import WeightedAverage, available_strategies

logger = logging.getLogger(__name__)

Population = typing.Union[
    Roster,
    typing.Mapping[typing.Any, typing.Iterable[Grade]],
    typing.Iterable[typing.Tuple[typing.Any, typing.Iterable[Grade]]],
]


# CohortStatistics ---------------------------------------------------------------------


@dataclasses.dataclass
class CohortStatistics:
    """How a cohort of students is spread across the classification bands.

    Attributes
    ----------
    total_students : int
        Every student in the cohort, including those without grades.
    students_with_grades : int
        The students whose average was classified into a band. A student with
        grades whose average cannot be parsed is left out of this count (and of
        `counts`), so it can be less than the number of students with at least
        one grade. Such students still count in `total_students`.
    counts : pd.Series
        The number of students in each band, indexed by band label with the
        highest band first. Sums to `students_with_grades`.
    total_grades : int
        The number of grade records across the cohort.
    score_total : float
        The sum of every raw score across the cohort.

    """

    total_students: int
    students_with_grades: int
    counts: pd.Series
    total_grades: int = 0
    score_total: float = 0.0

    def __eq__(self, other):
        if not isinstance(other, CohortStatistics):
            return NotImplemented
        return (
            self.total_students == other.total_students
            and self.students_with_grades == other.students_with_grades
            and self.counts.equals(other.counts)
            and self.total_grades == other.total_grades
            and self.score_total == other.score_total
        )

    @property
    def percentages(self) -> typing.Optional[pd.Series]:
        """The share of graded students in each band, as a number from 0 to 100.

        This is `None` when no student has grades.

        """
        if self.students_with_grades == 0:
            return None

        pct = self.counts / self.students_with_grades * 100
        pct.name = "Percentage"
        return pct

    def percentage_labels(self) -> typing.Optional[pd.Series]:
        """The percentages rendered with one decimal and a trailing %, e.g. "50.0%"."""
        pct = self.percentages
        if pct is None:
            return None
        return pct.map(lambda x: f"{_format_fixed(x, 1)}%")

    @property
    def mean_score(self) -> typing.Optional[float]:
        """The unweighted mean of every raw score, or `None` if there are no grades."""
        if self.total_grades == 0:
            return None
        return self.score_total / self.total_grades


def _empty_counts(scale) -> pd.Series:
    counts = pd.Series(0, index=_scales.labels(scale), dtype=int)
    counts.index.name = "Band"
    counts.name = "Frequency"
    return counts


def _as_pairs(population: Population) -> typing.List[tuple]:
    if isinstance(population, Roster):
        return list(population.population())
    if isinstance(population, collections.abc.Mapping):
        return list(population.items())
    return list(population)


def _aggregate(pairs, scale) -> CohortStatistics:
    """Aggregate one chunk of (student, grades) pairs."""
    counts = _empty_counts(scale)
    students_with_grades = 0
    total_grades = 0
    scores = []

    average_strategy = WeightedAverage()

    for student, grades in pairs:
        grades = list(grades)
        if not grades:
            continue

        average = _parse_number(average_strategy.compute(grades))
        if average is None:
            logger.warning("Skipping %r: could not classify their average.", student)
            continue

        students_with_grades += 1
        total_grades += len(grades)
        scores.extend(g.score for g in grades)
        counts[_scales.find_band(average, scale).label] += 1

    return CohortStatistics(
        total_students=len(pairs),
        students_with_grades=students_with_grades,
        counts=counts,
        total_grades=total_grades,
        score_total=math.fsum(scores),
    )


# public functions =====================================================================


def combine_statistics(*parts: CohortStatistics) -> CohortStatistics:
    """Merge the statistics of disjoint groups of students.

    The counts of each group are added together, so the result is the same
    as if the groups had been aggregated as one cohort.

    Raises
    ------
    ValueError
        If no statistics are given, or if they do not share the same bands.

    """
    if not parts:
        raise ValueError("Must provide at least one set of statistics.")

    index = parts[0].counts.index
    for part in parts[1:]:
        if not part.counts.index.equals(index):
            raise ValueError("Cannot combine statistics computed with different scales.")

    counts = sum((p.counts for p in parts[1:]), parts[0].counts.copy())

    return CohortStatistics(
        total_students=sum(p.total_students for p in parts),
        students_with_grades=sum(p.students_with_grades for p in parts),
        counts=counts,
        total_grades=sum(p.total_grades for p in parts),
        score_total=math.fsum(p.score_total for p in parts),
    )


def cohort_statistics(
    population: Population,
    *,
    scale: typing.Optional[typing.Sequence[Band]] = None,
    max_workers: typing.Optional[int] = None,
) -> CohortStatistics:
    """Classify every student of a cohort by their weighted average.

    Students without grades count toward the size of the cohort but are
    not classified and are left out of the percentages. A student whose
    average cannot be parsed is skipped with a warning.

    Parameters
    ----------
    population
        A :class:`Roster`, a mapping from students to their grades, or an
        iterable of ``(student, grades)`` pairs.
    scale : Sequence[Band]
        Default: :attr:`studentgrades.scales.DEFAULT_SCALE`.
    max_workers : Optional[int]
        If greater than one, the cohort is split into this many chunks which
        are aggregated in a thread pool and then combined. Default: aggregate
        serially.

    Returns
    -------
    CohortStatistics

    Raises
    ------
    ValueError
        If the provided scale is invalid.

    """
    if scale is None:
        scale = _scales.DEFAULT_SCALE
    else:
        _scales.check_scale(scale)

    pairs = _as_pairs(population)

    if max_workers is None or max_workers <= 1 or len(pairs) <= 1:
        return _aggregate(pairs, scale)

    chunks = [
        [pairs[i] for i in ix]
        for ix in np.array_split(np.arange(len(pairs)), min(max_workers, len(pairs)))
    ]
    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        parts = list(executor.map(lambda chunk: _aggregate(chunk, scale), chunks))

    return combine_statistics(*parts)


def band_distribution(
    labels: pd.Series, scale: typing.Optional[typing.Sequence[Band]] = None
) -> pd.Series:
    """Counts the frequency of each band label.

    Parameters
    ----------
    labels : pd.Series
        Band labels, such as those produced by
        :func:`studentgrades.scales.map_scores_to_bands`. Labels that are not
        in the scale (e.g., "Không xếp loại") are ignored.
    scale : Sequence[Band]
        Default: :attr:`studentgrades.scales.DEFAULT_SCALE`.

    Returns
    -------
    pd.Series
        The count of each band, from the highest band to the lowest.

    """
    counts = labels.value_counts().reindex(_scales.labels(scale))
    counts.index.name = "Band"
    counts.name = "Frequency"
    return counts.fillna(0).astype(int)


def rank(averages: pd.Series) -> pd.Series:
    """The rank of each student according to their average, 1 being the highest."""
    sorted_averages = averages.sort_values(ascending=False, kind="stable").to_frame()
    sorted_averages["rank"] = np.arange(1, len(sorted_averages) + 1)
    return sorted_averages["rank"]


def outcomes(
    population: Population, *, scale: typing.Optional[typing.Sequence[Band]] = None
) -> pd.DataFrame:
    """A table summarizing each student's results.

    Parameters
    ----------
    population
        See :func:`cohort_statistics`.
    scale : Sequence[Band]
        Default: :attr:`studentgrades.scales.DEFAULT_SCALE`.

    Returns
    -------
    pd.DataFrame
        One row per student, with the number of grades, one column per
        strategy (named after the strategy) and the student's rank by
        weighted average. Sorted by rank.

    Raises
    ------
    ValueError
        If the same student appears more than once.

    """
    strategies = available_strategies(scale)
    pairs = _as_pairs(population)

    rows = {}
    for student, grades in pairs:
        if student in rows:
            raise ValueError(f"Student {student!r} appears more than once.")
        grades = list(grades)
        row = {"grades": len(grades)}
        for strategy in strategies:
            row[strategy.name] = strategy.compute(grades)
        rows[student] = row

    table = pd.DataFrame.from_dict(
        rows, orient="index", columns=["grades"] + [s.name for s in strategies]
    )

    averages = table[WeightedAverage.name].map(_parse_number).astype(float)
    table["rank"] = rank(averages)
    return table.sort_values(by="rank")
