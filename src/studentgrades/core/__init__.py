from ._grades import Grade, Grades, InvalidGradeError
from ._student import Student, Students
from ._roster import Roster

__all__ = [
    "Grade",
    "Grades",
    "InvalidGradeError",
    "Student",
    "Students",
    "Roster",
]
