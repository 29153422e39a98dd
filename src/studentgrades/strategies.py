"""Strategies for turning a student's grades into a single summary value.

Every strategy is stateless and pure: :meth:`Strategy.compute` reads only
its arguments and returns a string for any collection of grades, including
an empty one. The set of strategies is fixed; see :data:`STRATEGIES`.

"""

import abc
import math
import typing

from ._util import format_fixed as _format_fixed, parse_number as _parse_number
from .core import Grade
from .scales import Band, DEFAULT_SCALE, UNCLASSIFIED, check_scale, find_band

Scale = typing.Sequence[Band]


class Strategy(abc.ABC):
    """Computes one summary value from a collection of grades.

    Parameters
    ----------
    scale : Optional[Sequence[Band]]
        The classification scale used by table-driven strategies.
        Default: :attr:`studentgrades.scales.DEFAULT_SCALE`.

    """

    #: a human-readable name, shown next to the result
    name: str = ""

    def __init__(self, scale: typing.Optional[Scale] = None):
        if scale is None:
            scale = DEFAULT_SCALE
        else:
            check_scale(scale)
        self.scale = scale

    @abc.abstractmethod
    def compute(self, grades: typing.Iterable[Grade]) -> str:
        """Compute the summary value of the grades, formatted as a string."""

    def __repr__(self):
        return f"{self.__class__.__name__}()"

    def __eq__(self, other):
        return type(self) is type(other) and self.scale == other.scale

    def __hash__(self):
        return hash((type(self), tuple(self.scale)))


class WeightedAverage(Strategy):
    """The coefficient-weighted average score.

    The result has exactly two decimals, e.g. ``"7.85"``. When the
    coefficients sum to zero (in particular, when there are no grades) the
    result is ``"0.0"``.

    """

    name = "Điểm Trung Bình"

    def compute(self, grades):
        grades = list(grades)
        total_coefficient = math.fsum(g.coefficient for g in grades)
        if total_coefficient == 0:
            return "0.0"

        total_weighted = math.fsum(g.weighted_score for g in grades)
        return _format_fixed(total_weighted / total_coefficient, 2)


class _AverageBandStrategy(Strategy):
    """Classifies the formatted weighted average with the scale."""

    #: the result when there are no grades
    empty_result = ""

    def compute(self, grades):
        grades = list(grades)
        if not grades:
            return self.empty_result

        # the band is chosen from the average as formatted, so 8.495 rounds
        # to "8.50" and lands in the top band
        average = _parse_number(WeightedAverage().compute(grades))
        if average is None:
            return self.empty_result

        return self._result(find_band(average, self.scale))

    @abc.abstractmethod
    def _result(self, band: Band) -> str:
        ...


class LetterGrade(_AverageBandStrategy):
    """The letter grade of the weighted average. ``"F"`` when there are no grades."""

    name = "Điểm Chữ"
    empty_result = "F"

    def _result(self, band):
        return band.letter


class Classification(_AverageBandStrategy):
    """The classification label of the weighted average.

    When there are no grades, the result is :data:`~studentgrades.scales.UNCLASSIFIED`.

    """

    name = "Xếp Loại"
    empty_result = UNCLASSIFIED

    def _result(self, band):
        return band.label


class GPA(Strategy):
    """The grade point average on the 4.0 scale.

    Each grade is converted to a grade point on its own, using its score as
    if it were an average, and the grade points are then averaged with the
    coefficients as weights. This is *not* the same as classifying the
    overall weighted average: scores of 8.6 and 7.1 give a GPA of 3.50, even
    though their average of 7.85 is in the 3.0 band.

    The result has two decimals. When there are no grades, it is ``"0.00"``.

    """

    name = "GPA (4.0 Scale)"

    def compute(self, grades):
        grades = list(grades)
        total_coefficient = math.fsum(g.coefficient for g in grades)
        if total_coefficient == 0:
            return "0.00"

        total_points = math.fsum(
            find_band(g.score, self.scale).gpa_point * g.coefficient for g in grades
        )
        return _format_fixed(total_points / total_coefficient, 2)


#: the available strategies, in display order
STRATEGIES: typing.Tuple[typing.Type[Strategy], ...] = (
    WeightedAverage,
    LetterGrade,
    Classification,
    GPA,
)


def available_strategies(scale: typing.Optional[Scale] = None) -> typing.List[Strategy]:
    """One instance of every strategy, in display order.

    Parameters
    ----------
    scale : Optional[Sequence[Band]]
        Passed to each strategy. Default: the default scale.

    """
    return [cls(scale) for cls in STRATEGIES]
