"""Mapping percentages to letter grades and GPA points."""

import typing

import pandas as pd


class Tier(typing.NamedTuple):
    """One row of a grading scale."""

    min_percentage: float
    gpa_value: float
    letter: str


# helper functions =====================================================================


def _check_that_scale_monotonically_decreases(tiers):
    prev = float("inf")
    for tier in tiers:
        if tier.min_percentage >= prev:
            raise ValueError("Scale is not monotonically decreasing.")
        prev = tier.min_percentage


# GradeScale ===========================================================================


class GradeScale:
    """An ordered table converting percentages to letters and GPA points.

    Tiers are evaluated from the highest threshold to the lowest. The lowest
    tier is a catch-all: any percentage below every other threshold, including
    a negative one, falls into it.

    Parameters
    ----------
    tiers : Iterable[Tier or tuple]
        The tiers, highest threshold first. Each is a
        ``(min_percentage, gpa_value, letter)`` triple.

    Raises
    ------
    ValueError
        If there are no tiers, or the thresholds do not strictly decrease.

    """

    def __init__(self, tiers):
        tiers = [Tier(float(m), float(g), str(letter)) for m, g, letter in tiers]

        if not tiers:
            raise ValueError("A scale needs at least one tier.")

        _check_that_scale_monotonically_decreases(tiers)
        self._tiers = tuple(tiers)

    def __repr__(self):
        return f"GradeScale({list(self._tiers)!r})"

    def __eq__(self, other):
        if not isinstance(other, GradeScale):
            return False
        return self._tiers == other._tiers

    def __hash__(self):
        return hash(self._tiers)

    def __iter__(self):
        return iter(self._tiers)

    def __len__(self):
        return len(self._tiers)

    @property
    def letters(self) -> list[str]:
        """The letters, from best to worst."""
        return [tier.letter for tier in self._tiers]

    @property
    def lowest(self) -> Tier:
        """The catch-all tier."""
        return self._tiers[-1]

    def from_percentage(self, percentage: float) -> Tier:
        """The tier a percentage falls into.

        Parameters
        ----------
        percentage : float
            A course percentage, nominally between 0 and 100.

        Returns
        -------
        Tier
            The first tier whose minimum is at most `percentage`; the lowest
            tier if there is none.

        """
        for tier in self._tiers:
            if percentage >= tier.min_percentage:
                return tier
        else:
            return self.lowest

    def from_letter(self, letter: typing.Optional[str]) -> Tier:
        """The tier with the given letter, ignoring case.

        An unknown letter, or `None`, resolves to the lowest tier rather than
        raising.

        """
        if letter is not None:
            wanted = letter.upper()
            for tier in self._tiers:
                if tier.letter.upper() == wanted:
                    return tier
        return self.lowest

    def has_letter(self, letter: typing.Optional[str]) -> bool:
        """Whether the letter appears in the scale, ignoring case."""
        if letter is None:
            return False
        return letter.upper() in {t.letter.upper() for t in self._tiers}

    def gpa_value(self, letter: typing.Optional[str]) -> float:
        """The GPA points for a letter, via :meth:`from_letter`."""
        return self.from_letter(letter).gpa_value


# common scales ========================================================================

DEFAULT_SCALE = GradeScale(
    [
        (90, 4.0, "A"),
        (80, 3.0, "B"),
        (70, 2.0, "C"),
        (60, 1.0, "D"),
        (0, 0.0, "E"),
    ]
)
"""The default grading scale."""


# public functions =====================================================================


def map_scores_to_letter_grades(scores, scale=None):
    """Map each percentage to a letter grade.

    Parameters
    ----------
    scores : pandas.Series
        A series containing percentages between 0 and 100.
    scale : Optional[GradeScale]
        The scale to use. Default: :attr:`DEFAULT_SCALE`.

    Returns
    -------
    pandas.Series
        A series containing the resulting letter grades.

    """
    if scale is None:
        scale = DEFAULT_SCALE

    def _map(score):
        return scale.from_percentage(score).letter

    return pd.Series(scores, dtype=float).apply(_map).astype(object)
