"""Types for representing a student's grade records."""

import dataclasses
import typing

import pandas as pd


class InvalidGradeError(ValueError):
    """Raised when a grade record is outside of the allowed range."""


@dataclasses.dataclass(frozen=True)
class Grade:
    """A single scored grade in one subject.

    Attributes
    ----------
    subject : str
        The name of the subject.
    score : float
        The score, between 0 and 10 (inclusive).
    coefficient : float
        The weight of the subject. Must be positive; usually between 1 and 4.
    semester : str
        The semester in which the grade was earned.
    year : int
        The year in which the grade was earned.

    Instances are immutable. The score range is not checked on construction;
    call :meth:`validate` before handing a grade to the rest of the library.

    """

    subject: str
    score: float
    coefficient: float = 1.0
    semester: str = ""
    year: int = 0

    @property
    def weighted_score(self) -> float:
        """The score multiplied by the coefficient."""
        return self.score * self.coefficient

    def validate(self) -> "Grade":
        """Check that the score and coefficient are in range.

        Returns
        -------
        Grade
            This grade, so that the call can be chained.

        Raises
        ------
        InvalidGradeError
            If the score is not between 0 and 10 or the coefficient is not
            positive.

        """
        if not 0 <= self.score <= 10:
            raise InvalidGradeError(
                f"Score for {self.subject!r} must be between 0 and 10, got {self.score}."
            )

        if not self.coefficient > 0:
            raise InvalidGradeError(
                f"Coefficient for {self.subject!r} must be positive, got {self.coefficient}."
            )

        return self


class Grades(typing.Sequence[Grade]):
    """A sequence of :class:`Grade` instances belonging to one student.

    The order of the grades carries no meaning, and the same grade may
    appear more than once. An empty collection means the student has no
    grades yet.

    """

    def __init__(self, grades: typing.Iterable[Grade] = ()):
        self._grades = tuple(grades)

    def __getitem__(self, ix):
        return self._grades[ix]

    def __len__(self):
        return len(self._grades)

    def __eq__(self, other):
        if isinstance(other, Grades):
            return self._grades == other._grades
        return NotImplemented

    def __repr__(self):
        return f"Grades({list(self._grades)!r})"

    def by_semester(self, semester: str, year: typing.Optional[int] = None) -> "Grades":
        """The grades earned in a semester.

        Parameters
        ----------
        semester : str
            The semester to keep.
        year : Optional[int]
            If given, only grades from this year are kept as well.

        Returns
        -------
        Grades

        """
        return Grades(
            g
            for g in self._grades
            if g.semester == semester and (year is None or g.year == year)
        )

    def to_frame(self) -> pd.DataFrame:
        """A table with one row per grade.

        Returns
        -------
        pd.DataFrame
            With columns ``subject``, ``score``, ``coefficient``,
            ``semester``, ``year`` and ``weighted_score``.

        """
        columns = ["subject", "score", "coefficient", "semester", "year"]
        table = pd.DataFrame(
            [dataclasses.astuple(g) for g in self._grades], columns=columns
        )
        table["weighted_score"] = table["score"] * table["coefficient"]
        return table
