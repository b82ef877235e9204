"""A package for computing course averages, letter grades and GPAs."""

from .core import (
    Grade,
    Assignment,
    Assignments,
    GradingCategory,
    Group,
    Student,
    Students,
    Course,
    CourseOptions,
)

from .grading import (
    GradeCalculator,
    PointsBasedCalculator,
    CategoryBasedCalculator,
)

from .scales import (
    DEFAULT_SCALE,
    GradeScale,
    Tier,
    map_scores_to_letter_grades,
)

from .events import ChangeEvent

from . import grading
from . import summarize
from . import io

__all__ = [
    "Grade",
    "Assignment",
    "Assignments",
    "GradingCategory",
    "Group",
    "Student",
    "Students",
    "Course",
    "CourseOptions",
    "GradeCalculator",
    "PointsBasedCalculator",
    "CategoryBasedCalculator",
    "DEFAULT_SCALE",
    "GradeScale",
    "Tier",
    "map_scores_to_letter_grades",
    "ChangeEvent",
    "grading",
    "summarize",
    "io",
]
