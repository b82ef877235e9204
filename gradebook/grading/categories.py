"""Grading by weighted categories, with lowest scores dropped."""

import numpy as np
import pandas as pd

from ..core.assignments import Assignments
from ._base import GradeCalculator, _points_earned


class CategoryBasedCalculator(GradeCalculator):
    """Final grade is a weighted sum of category percentages.

    Within each category, the student's lowest scores are dropped according to
    the category's drop count (see :meth:`GradingCategory.dropped`), and the
    percentage is the points earned over the points possible on the remaining
    graded assignments. Each category percentage is multiplied by the
    category's weight and the results are added up.

    A category with no remaining graded assignments has no percentage. It is
    skipped: it adds nothing to the total, and its weight is *not* handed to
    the other categories, so the result can never reach 100 while a category
    is empty. Pass ``renormalize=True`` to instead divide the total by the sum
    of the weights that contributed.

    The course must have :attr:`Course.uses_categories` set; otherwise the
    result is always 0.0.

    Parameters
    ----------
    renormalize : bool
        Whether to rescale by the weights of contributing categories.
        Default: False.

    """

    def __init__(self, renormalize: bool = False):
        self.renormalize = renormalize

    def __repr__(self):
        return f"CategoryBasedCalculator(renormalize={self.renormalize!r})"

    def dropped(self, course, student) -> dict[str, Assignments]:
        """The assignments dropped for the student, keyed by category name."""
        if course is None or student is None:
            return {}

        grades = student.grades
        return {
            name: category.dropped(grades)
            for name, category in course.grading_categories.items()
        }

    def category_scores(self, course, student) -> pd.Series:
        """The student's percentage in each category, after drops.

        Returns
        -------
        pandas.Series
            Indexed by category name. Categories with nothing to grade are
            `NaN`.

        """
        if course is None or student is None:
            return pd.Series(dtype=float)

        grades = student.grades
        scores = {}
        for name, category in course.grading_categories.items():
            dropped = category.dropped(grades)
            kept = [
                a for a in category.assignments if a.is_graded and a not in dropped
            ]

            possible = sum(a.points_possible for a in kept)
            if possible == 0:
                scores[name] = np.nan
                continue

            earned = sum(_points_earned(student, a) for a in kept)
            scores[name] = earned / possible * 100

        return pd.Series(scores, dtype=float)

    def final_average(self, course, student) -> float:
        if course is None or student is None or not course.uses_categories:
            return 0.0

        scores = self.category_scores(course, student)
        if scores.empty:
            return 0.0

        weights = pd.Series(
            {name: c.weight for name, c in course.grading_categories.items()},
            dtype=float,
        )[scores.index]

        contributing = scores.notna()
        total = (scores[contributing] * weights[contributing]).sum()

        if self.renormalize:
            weight_total = weights[contributing].sum()
            if weight_total == 0:
                return 0.0
            total = total / weight_total

        return float(total)
