"""Read a course roster from a CSV file."""

import pandas as pd

from ..core import Student, Students


def _value(row, column):
    if column not in row or pd.isna(row[column]):
        return None
    value = str(row[column]).strip()
    return value or None


def read(path, *, standardize_usernames=True) -> Students:
    """Read students from a CSV with one row per student.

    The file must have a ``username`` column. The columns ``first name``,
    ``last name`` and ``student id`` are used if present. Column names are
    matched ignoring case and surrounding whitespace. Rows without a username
    are skipped.

    Parameters
    ----------
    path : str or pathlib.Path
        Path to the CSV file that will be read.
    standardize_usernames : bool
        Whether to lowercase usernames. Default: True.

    Returns
    -------
    Students
        The students, in file order. A username appearing twice is kept once.

    Raises
    ------
    ValueError
        If there is no ``username`` column.

    """
    table = pd.read_csv(path, dtype=str)
    table.columns = [c.strip().lower() for c in table.columns]

    if "username" not in table.columns:
        raise ValueError("The roster has no 'username' column.")

    students = {}
    for _, row in table.iterrows():
        username = _value(row, "username")
        if username is None:
            continue

        if standardize_usernames:
            username = username.lower()

        if username in students:
            continue

        students[username] = Student(
            username,
            first_name=_value(row, "first name"),
            last_name=_value(row, "last name"),
            student_id=_value(row, "student id"),
        )

    return Students(students.values())
