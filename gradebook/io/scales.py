"""Read and write grading scales.

A scale file is a simple CSV with no headers. The first column contains the
letter grade, the second contains the minimum percentage, and the third
contains the GPA points. The order of the rows matters: the best letter comes
first!

"""

from typing import Union
import pathlib as _pathlib

from ..scales import GradeScale


def write(path: Union[str, _pathlib.Path], scale: GradeScale):
    """Writes a grading scale to disk.

    Parameters
    ----------
    path : pathlib.Path or str
        The path where the scale will be written.
    scale : GradeScale
        The scale to write.

    """
    path = _pathlib.Path(path)

    with path.open("w") as fileobj:
        for tier in scale:
            fileobj.write(f"{tier.letter},{tier.min_percentage},{tier.gpa_value}\n")


def read(path: Union[str, _pathlib.Path]) -> GradeScale:
    """Reads a grading scale from the file.

    Parameters
    ----------
    path : pathlib.Path or str
        The path where the scale is stored.

    Returns
    -------
    GradeScale
        The scale. Blank lines are ignored.

    Raises
    ------
    ValueError
        If a line does not have three fields, or the thresholds are not
        decreasing.

    """
    path = _pathlib.Path(path)

    with path.open() as fileobj:
        lines = [line for line in fileobj.readlines() if line.strip()]

    def parse_line(line):
        fields = [f.strip() for f in line.split(",")]
        if len(fields) != 3:
            raise ValueError(f"Expected letter,min_percentage,gpa_value; got {line!r}.")
        letter, cutoff, gpa = fields
        return (float(cutoff), float(gpa), letter)

    return GradeScale(map(parse_line, lines))
