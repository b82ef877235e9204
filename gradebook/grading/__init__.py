"""Strategies for computing a student's percentage in a course."""

from ._base import GradeCalculator
from .points import PointsBasedCalculator
from .categories import CategoryBasedCalculator

__all__ = [
    "GradeCalculator",
    "PointsBasedCalculator",
    "CategoryBasedCalculator",
]
