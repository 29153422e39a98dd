"""Read student and grade tables exported as CSV."""

import logging
import pathlib as _pathlib
from typing import Union

import pandas as _pd

from studentgrades.core import Grade, Roster, Student

logger = logging.getLogger(__name__)

STUDENT_COLUMNS = ["student_id", "full_name"]
OPTIONAL_STUDENT_COLUMNS = ["email", "phone", "major"]
GRADE_COLUMNS = ["student_id", "subject", "score", "coefficient", "semester", "year"]


def _require_columns(table: _pd.DataFrame, columns, path):
    missing = [c for c in columns if c not in table.columns]
    if missing:
        raise ValueError(f"{path} is missing the columns {missing}.")


def _optional(value):
    # empty cells are read as NaN
    if _pd.isna(value):
        return None
    return str(value)


def read_students(path: Union[str, _pathlib.Path], *, standardize_pids=True) -> Roster:
    """Read a CSV of students into a :class:`Roster` with no grades.

    Parameters
    ----------
    path : str or pathlib.Path
        The CSV to read. It must have the columns ``student_id`` and
        ``full_name``; ``email``, ``phone`` and ``major`` are read if present.
    standardize_pids : bool
        Whether to strip whitespace and uppercase the student ids. Default: True.

    Returns
    -------
    Roster

    Raises
    ------
    ValueError
        If a required column is missing, or if a row has a blank or
        duplicate student id.

    """
    table = _pd.read_csv(path, dtype=str)
    _require_columns(table, STUDENT_COLUMNS, path)

    if standardize_pids:
        table["student_id"] = table["student_id"].str.strip().str.upper()

    roster = Roster()
    for _, row in table.iterrows():
        roster.add_student(
            Student(
                _optional(row["student_id"]),
                _optional(row["full_name"]),
                **{c: _optional(row.get(c)) for c in OPTIONAL_STUDENT_COLUMNS},
            )
        )

    logger.debug("Read %d students from %s.", len(roster), path)
    return roster


def read_grades(
    path: Union[str, _pathlib.Path], roster: Roster, *, standardize_pids=True
) -> Roster:
    """Read a CSV of grades and record them in a roster.

    Parameters
    ----------
    path : str or pathlib.Path
        The CSV to read, with the columns ``student_id``, ``subject``,
        ``score``, ``coefficient``, ``semester`` and ``year``.
    roster : Roster
        The roster to add the grades to. It is modified in place.
    standardize_pids : bool
        Whether to strip whitespace and uppercase the student ids. Default: True.

    Returns
    -------
    Roster
        The same roster, for convenience.

    Raises
    ------
    ValueError
        If a required column is missing.
    InvalidGradeError
        If a score is not between 0 and 10 or a coefficient is not positive.
    KeyError
        If a grade belongs to a student who is not in the roster.

    """
    table = _pd.read_csv(path, dtype={"student_id": str, "subject": str, "semester": str})
    _require_columns(table, GRADE_COLUMNS, path)

    if standardize_pids:
        table["student_id"] = table["student_id"].str.strip().str.upper()

    table["semester"] = table["semester"].fillna("")

    # check every row before recording any
    pending = []
    for row in table.itertuples(index=False):
        if row.student_id not in roster:
            raise KeyError(f"No student with id {row.student_id!r} in the roster.")
        grade = Grade(
            subject=row.subject,
            score=float(row.score),
            coefficient=float(row.coefficient),
            semester=row.semester,
            year=int(row.year),
        ).validate()
        pending.append((row.student_id, grade))

    for pid, grade in pending:
        roster.add_grade(pid, grade)

    logger.debug("Read %d grades from %s.", len(table), path)
    return roster


def read(
    students_path: Union[str, _pathlib.Path],
    grades_path: Union[str, _pathlib.Path],
    *,
    standardize_pids=True,
) -> Roster:
    """Read a roster from a CSV of students and a CSV of their grades.

    See :func:`read_students` and :func:`read_grades` for the expected columns.

    Returns
    -------
    Roster

    """
    roster = read_students(students_path, standardize_pids=standardize_pids)
    return read_grades(grades_path, roster, standardize_pids=standardize_pids)
