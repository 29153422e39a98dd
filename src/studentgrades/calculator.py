"""Computing metrics with a selectable strategy."""

import collections
import contextlib
import threading
import typing

from .core import Grade
from .strategies import Scale, Strategy, WeightedAverage, available_strategies


class GradeCalculator:
    """Computes a metric of a student's grades with the currently selected strategy.

    Parameters
    ----------
    strategy : Optional[Strategy]
        The initially selected strategy. Default: :class:`WeightedAverage`.
    scale : Optional[Sequence[Band]]
        The scale given to the strategies listed by
        :meth:`available_strategies`. Default: the default scale.

    Notes
    -----
    The selected strategy is the only mutable state. When several threads
    share one calculator, either pass the strategy explicitly with
    :meth:`compute_with`, or select and compute inside :meth:`using` so that
    no other thread can change the selection in between.

    Example
    -------

    .. code:: python

        calculator = GradeCalculator()
        calculator.compute(grades)                       # "7.85"
        calculator.compute_with(strategies.GPA(), grades)  # "3.50"

        with calculator.using(strategies.LetterGrade()) as calc:
            calc.compute(grades)                         # "B"

    """

    def __init__(
        self,
        strategy: typing.Optional[Strategy] = None,
        *,
        scale: typing.Optional[Scale] = None,
    ):
        self._strategy = WeightedAverage() if strategy is None else strategy
        self._scale = scale
        self._lock = threading.RLock()

    @property
    def strategy(self) -> Strategy:
        """The selected strategy."""
        with self._lock:
            return self._strategy

    @strategy.setter
    def strategy(self, strategy: Strategy):
        self.set_strategy(strategy)

    @property
    def strategy_name(self) -> str:
        """The name of the selected strategy."""
        return self.strategy.name

    def set_strategy(self, strategy: Strategy):
        """Select the strategy used by :meth:`compute`."""
        if not isinstance(strategy, Strategy):
            raise TypeError(f"Expected a Strategy, got {type(strategy).__name__}.")

        with self._lock:
            self._strategy = strategy

    def compute(self, grades: typing.Iterable[Grade]) -> str:
        """Compute the metric of the grades using the selected strategy."""
        with self._lock:
            return self._strategy.compute(grades)

    def compute_with(self, strategy: Strategy, grades: typing.Iterable[Grade]) -> str:
        """Compute the metric using `strategy`, leaving the selection unchanged."""
        return strategy.compute(grades)

    def compute_all(self, grades: typing.Iterable[Grade]) -> typing.Dict[str, str]:
        """Compute every available metric.

        Returns
        -------
        OrderedDict
            Mapping each strategy's name to its result, in display order.

        """
        grades = list(grades)
        return collections.OrderedDict(
            (strategy.name, strategy.compute(grades))
            for strategy in self.available_strategies()
        )

    def available_strategies(self) -> typing.List[Strategy]:
        """One instance of each strategy: average, letter, classification, GPA."""
        return available_strategies(self._scale)

    @contextlib.contextmanager
    def using(self, strategy: Strategy):
        """Temporarily select `strategy`, holding the calculator's lock.

        The previous selection is restored on exit, even if an exception is
        raised inside the block.

        """
        with self._lock:
            previous = self._strategy
            self.set_strategy(strategy)
            try:
                yield self
            finally:
                self._strategy = previous
