import pandas as pd
import numpy as np

from .core import Course
from .scales import DEFAULT_SCALE


def rank(scores) -> pd.Series:
    """The rank of each student according to score.

    Parameters
    ----------
    scores : pd.Series
        A series containing overall scores.

    Returns
    -------
    pd.Series
        A Series of the same size as `scores` containing the integer rank of
        each student in the class.

    """
    sorted_scores = scores.sort_values(ascending=False, kind="stable").to_frame()
    sorted_scores["rank"] = np.arange(1, len(sorted_scores) + 1)
    return sorted_scores["rank"]


def percentile(scores) -> pd.Series:
    """The percentile of each student according to score.

    Parameters
    ----------
    scores : pd.Series
        The scores used to compute the percentile.

    Returns
    -------
    pd.Series
        A Series of the same size as `scores` in which each entry is the
        student's percentile in the class, as a number between 0 and 1.

    """
    ranks = rank(scores)
    s = 1 - ((ranks - 1) / len(ranks))
    s.name = "percentile"
    return s


def average_gpa(letter_grades, scale=None, include_failing=True) -> float:
    """Compute the average GPA.

    Parameters
    ----------
    letter_grades : pd.Series
        A Series containing the letter grades.
    scale : Optional[GradeScale]
        Supplies the GPA points of each letter. Default: :attr:`DEFAULT_SCALE`.
    include_failing : bool
        Whether or not to include grades in the scale's lowest tier.
        Default: True.

    Returns
    -------
    float
        The average GPA, or 0.0 if there are no grades.

    """
    if scale is None:
        scale = DEFAULT_SCALE

    if not include_failing:
        letter_grades = letter_grades[letter_grades != scale.lowest.letter]

    if len(letter_grades) == 0:
        return 0.0

    return float(letter_grades.map(scale.gpa_value).mean())


def letter_grade_distribution(letters, scale=None) -> pd.Series:
    """Counts the frequency of each letter grade.

    Parameters
    ----------
    letters : pd.Series
        The letter grades.
    scale : Optional[GradeScale]
        Supplies the possible letters. Default: :attr:`DEFAULT_SCALE`.

    Returns
    -------
    pd.Series
        The count of each letter grade. The letters are guaranteed to be in
        order, from highest to lowest.

    """
    if scale is None:
        scale = DEFAULT_SCALE

    counts = letters.value_counts().reindex(scale.letters)
    counts.index.name = "Letter"
    counts.name = "Frequency"
    return counts.fillna(0).astype(int)


def assignment_statistics(course: Course) -> pd.DataFrame:
    """The mean and median points earned on each assignment.

    Returns
    -------
    pd.DataFrame
        One row per assignment, with columns "points possible", "mean" and
        "median". Assignments nobody has a score for have 0.0 in both.

    """
    assignments = course.assignments
    return pd.DataFrame(
        {
            "points possible": [a.points_possible for a in assignments],
            "mean": [a.average_score() for a in assignments],
            "median": [a.median_score() for a in assignments],
        },
        index=pd.Index(assignments.names, name="assignment"),
    )


def outcomes(course: Course) -> pd.DataFrame:
    """Compute a table summarizing student outcomes.

    Parameters
    ----------
    course : Course
        The course used to compute outcomes.

    Returns
    -------
    pd.DataFrame
        A table with one row per student, and columns for overall score,
        letter grade, rank, and percentile. Sorted by score, from highest to
        lowest.

    """
    scores = course.overall_scores
    statistics = pd.DataFrame(
        {
            "overall score": scores,
            "letter": course.letter_grades,
            "rank": rank(scores),
            "percentile": percentile(scores),
        }
    )

    return statistics.sort_values(by="overall score", ascending=False, kind="stable")
