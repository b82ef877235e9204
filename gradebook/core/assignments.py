"""Assignment definitions and collections of them."""

from collections.abc import Sequence
import logging
import math
import typing

import pandas as pd

from .grades import Grade

logger = logging.getLogger(__name__)


def _clean_name(name, what="Assignment"):
    if name is None or not str(name).strip():
        raise ValueError(f"{what} name cannot be empty.")
    return str(name).strip()


class Assignment:
    """A single piece of graded work, such as "homework 01" or "midterm".

    Holds the assignment's definition along with the grades every student has
    received on it, keyed by username.

    Parameters
    ----------
    name : str
        The assignment's name. Surrounding whitespace is removed.
    points_possible : float
        The maximum number of points. Must be positive.
    due_date : Optional[str]
        The due date. Stored as given.
    category_name : Optional[str]
        The name of the grading category the assignment belongs to.
    group_name : Optional[str]
        A free-form grouping label. Defaults to the name of `group`, if given.
    group : Optional[Group]
        The group of students who share this assignment.

    Attributes
    ----------
    due_date : Optional[str]
    category_name : Optional[str]
    group_name : Optional[str]
    group : Optional[Group]
    description : str
        Defaults to the empty string.

    Raises
    ------
    ValueError
        If the name is empty or the points possible is not a positive, finite
        number.

    Notes
    -----
    Assignments compare by identity, so that an assignment remains a valid
    dictionary key after being renamed. :class:`Course` ensures that names
    are unique within a course.

    """

    def __init__(
        self,
        name: str,
        points_possible: float,
        due_date: typing.Optional[str] = None,
        category_name: typing.Optional[str] = None,
        group_name: typing.Optional[str] = None,
        group=None,
    ):
        self._name = _clean_name(name)
        self._points_possible = self._check_points(points_possible)
        self.due_date = due_date
        self.category_name = category_name
        if group_name is None and group is not None:
            group_name = group.name
        self.group_name = group_name
        self.group = group
        self.description = ""
        self._is_graded = False
        self._grades: dict[str, Grade] = {}

    @staticmethod
    def _check_points(points):
        if points is None or not math.isfinite(points) or points <= 0:
            raise ValueError("Assignment points must be a positive number.")
        return float(points)

    def __repr__(self):
        return (
            f"Assignment(name={self._name!r}, points_possible={self._points_possible!r}, "
            f"category_name={self.category_name!r}, is_graded={self._is_graded!r})"
        )

    # properties -----------------------------------------------------------------------

    @property
    def name(self) -> str:
        """The assignment's name. Can be changed, but never to an empty string."""
        return self._name

    @name.setter
    def name(self, value):
        self._name = _clean_name(value)

    @property
    def points_possible(self) -> float:
        """The maximum number of points. Can be changed, but must stay positive."""
        return self._points_possible

    @points_possible.setter
    def points_possible(self, value):
        self._points_possible = self._check_points(value)

    @property
    def is_graded(self) -> bool:
        """Whether the assignment counts toward averages."""
        return self._is_graded

    @is_graded.setter
    def is_graded(self, value):
        self._is_graded = bool(value)

    def mark_graded(self):
        """Mark the assignment as graded."""
        self._is_graded = True

    # grades ---------------------------------------------------------------------------

    def add_grade(self, username: str, grade: Grade):
        """Record (or replace) a student's grade on this assignment.

        A missing username or grade is logged and ignored.

        """
        if not username or grade is None:
            logger.info(
                "Ignoring grade for assignment %r: missing username or grade.",
                self._name,
            )
            return
        self._grades[username] = grade

    def grade_for(self, username: str) -> typing.Optional[Grade]:
        """The student's grade, or `None` if nothing has been recorded."""
        if not username:
            return None
        return self._grades.get(username)

    def has_submission(self, username: str) -> bool:
        """Whether a grade has been recorded for the student."""
        return bool(username) and username in self._grades

    def remove_grade(self, username: str):
        """Forget the student's grade. Does nothing if there is none."""
        self._grades.pop(username, None)

    @property
    def grades(self) -> dict[str, Grade]:
        """A copy of the mapping from usernames to grades."""
        return dict(self._grades)

    def clear_grades(self):
        """Forget every grade recorded for this assignment."""
        self._grades.clear()
        logger.info("Cleared all grades for assignment %r.", self._name)

    # statistics -----------------------------------------------------------------------

    def _scores(self) -> pd.Series:
        return pd.Series(
            {username: g.points_earned for username, g in self._grades.items()},
            dtype=float,
        )

    def average_score(self) -> float:
        """The mean points earned over all recorded grades; 0.0 if there are none."""
        scores = self._scores()
        if scores.empty:
            return 0.0
        return float(scores.mean())

    def median_score(self) -> float:
        """The median points earned over all recorded grades; 0.0 if there are none."""
        scores = self._scores()
        if scores.empty:
            return 0.0
        return float(scores.median())


class Assignments(Sequence[Assignment]):
    """A sequence of assignments.

    Behaves essentially like a standard Python list of :class:`Assignment`
    objects, but has some additional methods which make it faster to select
    groups of assignments.

    """

    def __init__(self, assignments: typing.Iterable[Assignment] = ()):
        self._assignments = list(assignments)

    def __contains__(self, element):
        return any(element is a for a in self._assignments)

    def __len__(self):
        return len(self._assignments)

    def __iter__(self):
        return iter(self._assignments)

    def __eq__(self, other):
        return list(self) == list(other)

    def __add__(self, other):
        """Concatenates :class:`Assignments`."""
        return Assignments(self._assignments + list(other))

    def __getitem__(self, index):
        return self._assignments[index]

    def __repr__(self):
        return f"Assignments(names={self.names})"

    @property
    def names(self) -> list[str]:
        """The names of the assignments, in order."""
        return [a.name for a in self._assignments]

    def find(self, name: str) -> Assignment:
        """Look up an assignment by its exact name.

        Raises
        ------
        KeyError
            If no assignment has that name.

        """
        for assignment in self._assignments:
            if assignment.name == name:
                return assignment
        raise KeyError(f"No assignment named {name!r}.")

    def graded(self) -> "Assignments":
        """Only those assignments that are marked as graded."""
        return self.__class__(a for a in self._assignments if a.is_graded)

    def ungraded(self) -> "Assignments":
        """Only those assignments that are not marked as graded."""
        return self.__class__(a for a in self._assignments if not a.is_graded)

    def starting_with(self, prefix: str) -> "Assignments":
        """Only those assignments whose name starts with the prefix."""
        return self.__class__(a for a in self._assignments if a.name.startswith(prefix))

    def in_category(self, category_name: str) -> "Assignments":
        """Only those assignments in the category, ignoring case."""
        if category_name is None:
            return self.__class__()
        wanted = category_name.lower()
        return self.__class__(
            a
            for a in self._assignments
            if a.category_name is not None and a.category_name.lower() == wanted
        )

    def in_group(self, group_name: str) -> "Assignments":
        """Only those assignments whose group label matches exactly."""
        if group_name is None:
            return self.__class__()
        return self.__class__(a for a in self._assignments if a.group_name == group_name)
