"""A single recorded score."""

import dataclasses
import math
import typing


@dataclasses.dataclass(frozen=True)
class Grade:
    """The points a student earned on an assignment, with optional feedback.

    Grades are values: recording a new score replaces the old :class:`Grade`
    rather than modifying it.

    Attributes
    ----------
    points_earned : float
        The raw number of points earned. Never negative or NaN.
    feedback : Optional[str]
        Free-text feedback from the instructor, or `None`.

    Raises
    ------
    ValueError
        If `points_earned` is negative, NaN or infinite.

    """

    points_earned: float
    feedback: typing.Optional[str] = None

    def __post_init__(self):
        if not math.isfinite(self.points_earned):
            raise ValueError("Points earned must be a finite number.")

        if self.points_earned < 0:
            raise ValueError("Points earned cannot be negative.")

        object.__setattr__(self, "points_earned", float(self.points_earned))

    def __str__(self):
        return f"{self.points_earned} points"
