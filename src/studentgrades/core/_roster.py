"""An in-memory store of students and their grades."""

import typing

from ._grades import Grade, Grades
from ._student import Student, Students


class Roster:
    """Students and their grade records, keyed by the student's pid.

    This is the store that the rest of the library reads from: it can list
    all students and fetch the grades of any one of them. Everything is held
    in memory; loading a roster from disk is the job of :mod:`studentgrades.io`.

    Parameters
    ----------
    students : Iterable[Student]
        The initial students. Default: none.

    Example
    -------

    .. code:: python

        roster = studentgrades.Roster()
        roster.add_student(studentgrades.Student("SV001", "Nguyễn Văn An"))
        roster.add_grade("SV001", studentgrades.Grade("Toán", 8.5, 2.0, "HK1", 2024))
        roster.grades_of("SV001")

    """

    def __init__(self, students: typing.Iterable[Student] = ()):
        self._students: typing.Dict[str, Student] = {}
        self._grades: typing.Dict[str, typing.List[Grade]] = {}
        for student in students:
            self.add_student(student)

    def __len__(self):
        return len(self._students)

    def __contains__(self, student):
        return _pid(student) in self._students

    @property
    def students(self) -> Students:
        """All students, in the order they were added."""
        return Students(list(self._students.values()))

    def add_student(self, student: Student):
        """Add a student with no grades.

        Raises
        ------
        ValueError
            If the pid or the name is blank, or if a student with the same
            pid is already in the roster.

        """
        if not str(student.pid or "").strip():
            raise ValueError("Student pid cannot be empty.")

        if not str(student.name or "").strip():
            raise ValueError("Student name cannot be empty.")

        if student.pid in self._students:
            raise ValueError(f"Student pid already exists: {student.pid}")

        self._students[student.pid] = student
        self._grades[student.pid] = []

    def remove_student(self, student):
        """Remove a student and all of their grades.

        Raises
        ------
        KeyError
            If the student is not in the roster.

        """
        pid = self._lookup(student)
        del self._students[pid]
        del self._grades[pid]

    def add_grade(self, student, grade: Grade):
        """Record a grade for a student after validating it.

        Raises
        ------
        KeyError
            If the student is not in the roster.
        InvalidGradeError
            If the grade's score or coefficient is out of range.

        """
        pid = self._lookup(student)
        self._grades[pid].append(grade.validate())

    def grades_of(self, student) -> Grades:
        """All grades recorded for a student (possibly none).

        Parameters
        ----------
        student : Union[Student, str]
            The student or their pid.

        Raises
        ------
        KeyError
            If the student is not in the roster.

        """
        return Grades(self._grades[self._lookup(student)])

    def find(self, pattern: str) -> Student:
        """Find a student by a substring of their name. See :meth:`Students.find`."""
        return self.students.find(pattern)

    def population(self) -> typing.Iterator[typing.Tuple[Student, Grades]]:
        """Yield each student along with their grades."""
        for pid, student in self._students.items():
            yield student, Grades(self._grades[pid])

    def _lookup(self, student) -> str:
        pid = _pid(student)
        if pid not in self._students:
            raise KeyError(f"Student not found: {pid}")
        return pid


def _pid(student) -> str:
    if isinstance(student, Student):
        return student.pid
    return student
