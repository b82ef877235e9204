"""Weighted grading categories."""

import typing

import pandas as pd

from .assignments import Assignment, Assignments, _clean_name
from .grades import Grade


class GradingCategory:
    """A weighted group of assignments, such as "homework" or "exams".

    The weight and the number of dropped assignments are fixed when the
    category is created; to change the grading policy, replace the category.

    Parameters
    ----------
    name : str
        The category's name. Must not be empty.
    weight : float
        The fraction of the final grade that the category is worth, between 0
        and 1.
    drop_count : int
        The number of lowest-scoring assignments dropped for each student.
        Default: 0.

    Raises
    ------
    ValueError
        If the name is empty, the weight is not between 0 and 1, or the drop
        count is negative or not a whole number.

    """

    def __init__(self, name: str, weight: float, drop_count: int = 0):
        name = _clean_name(name, what="Category")

        if weight is None or not 0 <= weight <= 1:
            raise ValueError("Category weight must be between 0 and 1.")

        if drop_count is None or drop_count < 0:
            raise ValueError("Drop count must be non-negative.")

        if not float(drop_count).is_integer():
            raise ValueError("Drop count must be a whole number.")

        self._name = name
        self._weight = float(weight)
        self._drop_count = int(drop_count)
        self._assignments: list[Assignment] = []

    def __repr__(self):
        return (
            f"GradingCategory(name={self._name!r}, weight={self._weight!r}, "
            f"drop_count={self._drop_count!r})"
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def weight(self) -> float:
        return self._weight

    @property
    def drop_count(self) -> int:
        return self._drop_count

    @property
    def assignments(self) -> Assignments:
        """A copy of the member assignments, in the order they were added."""
        return Assignments(self._assignments)

    def add_assignment(self, assignment: Assignment):
        """Add a member. `None` and assignments already present are ignored."""
        if assignment is None or assignment in self.assignments:
            return
        self._assignments.append(assignment)

    def remove_assignment(self, assignment: Assignment):
        """Remove a member. Does nothing if it is not a member."""
        self._assignments = [a for a in self._assignments if a is not assignment]

    def dropped(
        self, student_grades: typing.Mapping[Assignment, Grade]
    ) -> Assignments:
        """Determine which of a student's assignments are dropped.

        Only graded members with a recorded score are considered; the rest are
        never dropped. These are sorted by points earned, lowest first, and the
        first `drop_count` of them are dropped. The sort is stable, so ties are
        broken by the order in which assignments were added to the category.

        Parameters
        ----------
        student_grades : Mapping[Assignment, Grade]
            The student's grades, keyed by assignment.

        Returns
        -------
        Assignments
            The dropped assignments, lowest score first. Empty if the drop count
            is zero. If the drop count is at least the number of eligible
            assignments, all of them are dropped.

        """
        eligible = [
            a for a in self._assignments if a.is_graded and a in student_grades
        ]

        n = min(self._drop_count, len(eligible))
        if n == 0:
            return Assignments()

        scores = pd.Series(
            [student_grades[a].points_earned for a in eligible], dtype=float
        )
        lowest = scores.sort_values(kind="stable").index[:n]
        return Assignments(eligible[ix] for ix in lowest)
