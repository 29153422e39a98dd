"""Represents a student in the cohort."""

import typing


class Student:
    """Represents a student.

    Attributes
    ----------
    pid : str
        The student's business identifier (e.g., "SV001").
    name : Optional[str]
        The student's full name. If not available, this will be `None`.
    email : Optional[str]
    phone : Optional[str]
    major : Optional[str]

    When a :class:`Student` instance is printed, the student's name is displayed if
    available; however, when two :class:`Student` instances are compared for equality,
    the :code:`.pid` attribute is used. A student also compares equal to their
    bare pid, so either can be used as a key into a :class:`Roster`.

    """

    def __init__(self, pid, name=None, *, email=None, phone=None, major=None):
        self.pid = pid
        self.name = name
        self.email = email
        self.phone = phone
        self.major = major

    def __repr__(self):
        return f"<{self.display_name}>"

    @property
    def display_name(self) -> str:
        """The name, if available; the pid otherwise."""
        return self.name if self.name is not None else str(self.pid)

    def __hash__(self):
        return hash(self.pid)

    def __eq__(self, other):
        """Equality checks always use the pid."""
        if isinstance(other, Student):
            return other.pid == self.pid
        else:
            return self.pid == other

    def __lt__(self, other):
        if isinstance(other, Student):
            return self.pid < other.pid
        else:
            return self.pid < other


class Students(typing.Sequence[Student]):
    """A sequence of :class:`Student` instances.

    This behaves like a list of :class:`Student` instances, but also allows
    looking students up by pid or by (part of) their name.

    """

    def __init__(self, students: typing.Sequence[Student]):
        self._students = list(students)

    def __getitem__(self, ix):
        return self._students[ix]

    def __len__(self):
        return len(self._students)

    def search(self, pattern: str) -> typing.List[Student]:
        """All students whose name contains `pattern`, ignoring case.

        Students without a name never match.

        """
        pattern = pattern.lower()
        return [
            s
            for s in self._students
            if s.name is not None and pattern in s.name.lower()
        ]

    def find(self, pattern: str) -> Student:
        """Finds the single student whose name contains `pattern`.

        Parameters
        ----------
        pattern : str
            A case-insensitive substring of the student's name.

        Returns
        -------
        Student
            The matching student.

        Raises
        ------
        ValueError
            If no student matches, or if more than one student matches.

        """
        matches = self.search(pattern)

        if not matches:
            raise ValueError(f"No names matched {pattern}.")

        if len(matches) > 1:
            raise ValueError(f'More than one name matched "{pattern}": {matches}')

        return matches[0]

    def get(self, pid) -> typing.Optional[Student]:
        """The student with the given pid, or None."""
        for student in self._students:
            if student.pid == pid:
                return student
        return None

    def by_major(self, major: str) -> "Students":
        """The students enrolled in `major`."""
        return Students([s for s in self._students if s.major == major])
