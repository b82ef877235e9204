"""Grading by total points."""

import pandas as pd

from ._base import GradeCalculator, _points_earned


class PointsBasedCalculator(GradeCalculator):
    """Final grade is total points earned over total points possible.

    Every graded assignment in the course counts. A graded assignment the
    student has no score for counts as zero points earned; it is not excluded.
    Ungraded assignments are ignored entirely.

    Example
    -------
    >>> course.grade_calculator = PointsBasedCalculator()
    >>> course.final_average(student)
    85.0

    """

    def final_average(self, course, student) -> float:
        if course is None or student is None:
            return 0.0

        graded = course.assignments.graded()

        possible = pd.Series([a.points_possible for a in graded], dtype=float)
        earned = pd.Series([_points_earned(student, a) for a in graded], dtype=float)

        possible_total = possible.sum()
        if possible_total == 0:
            return 0.0

        return float(earned.sum() / possible_total * 100)
