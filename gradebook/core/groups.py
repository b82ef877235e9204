"""Named groups of students, such as project teams."""

from .assignments import _clean_name


class Group:
    """A named set of students who share group assignments.

    Membership is checked by username, like :class:`Student` equality.

    Parameters
    ----------
    name : str
        The group's name. Must not be empty.

    Raises
    ------
    ValueError
        If the name is empty.

    """

    def __init__(self, name: str):
        self._name = _clean_name(name, what="Group")
        self._members = []

    def __repr__(self):
        return f"Group({self._name!r}, members={len(self._members)})"

    def __contains__(self, student):
        return self.contains(student)

    def __len__(self):
        return len(self._members)

    @property
    def name(self) -> str:
        return self._name

    @property
    def members(self) -> list:
        """A copy of the members, in the order they joined."""
        return list(self._members)

    def add_member(self, student) -> bool:
        """Add a student. Returns `False` if `None` or already a member."""
        if student is None or student in self._members:
            return False
        self._members.append(student)
        return True

    def remove_member(self, student) -> bool:
        """Remove a student. Returns `False` if they were not a member."""
        if student is None or student not in self._members:
            return False
        self._members.remove(student)
        return True

    def contains(self, student) -> bool:
        return student is not None and student in self._members

