"""Represents a student and their academic record."""

import logging
import typing

from ..events import Observable
from ..scales import DEFAULT_SCALE
from .assignments import Assignment
from .grades import Grade

logger = logging.getLogger(__name__)


class Student(Observable):
    """Represents a student.

    A student keeps their own copy of every grade they receive, the courses
    they are taking and have completed, and the letter grade finalized for
    each completed course.

    Parameters
    ----------
    username : str
        The unique identifier of the student.
    first_name : Optional[str]
    last_name : Optional[str]
    student_id : Optional[str]
        An institutional ID, if different from the username.

    When a :class:`Student` instance is printed, the student's name is
    displayed if available; however, when two :class:`Student` instances are
    compared for equality, the :code:`.username` attribute is used.

    """

    def __init__(self, username, first_name=None, last_name=None, student_id=None):
        super().__init__()
        if username is None or not str(username).strip():
            raise ValueError("Username cannot be empty.")

        self.username = str(username).strip()
        self.first_name = first_name
        self.last_name = last_name
        self.student_id = student_id

        self._current_courses = []
        self._completed_courses = []
        self._grades: dict[Assignment, Grade] = {}
        self._final_grades = {}

    @property
    def name(self) -> typing.Optional[str]:
        """The student's full name, or `None` if no name is known."""
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) if parts else None

    def __repr__(self):
        """String representation uses name, if available; username otherwise."""
        if self.name is not None:
            s = self.name
        else:
            s = self.username

        return f"<{s}>"

    def __hash__(self):
        return hash(self.username)

    def __eq__(self, other):
        """Equality checks always use the username."""
        if isinstance(other, Student):
            return other.username == self.username
        else:
            return self.username == other

    def __lt__(self, other):
        """Less-than checks always use the username."""
        if isinstance(other, Student):
            return self.username < other.username
        else:
            return self.username < other

    # courses --------------------------------------------------------------------------

    @property
    def current_courses(self) -> list:
        """A copy of the courses the student is taking."""
        return list(self._current_courses)

    @property
    def completed_courses(self) -> list:
        """A copy of the courses the student has completed."""
        return list(self._completed_courses)

    def enroll_in_course(self, course):
        """Start taking a course. Also adds the student to the course's roster.

        Enrolling twice does nothing. A course the student has already completed
        cannot be taken again.

        """
        if course is None or course in self._current_courses:
            return

        if course in self._completed_courses:
            logger.info("%s has already completed %s.", self, course)
            return

        self._current_courses.append(course)
        course.enroll_student(self)

    def _leave_course(self, course):
        if course in self._current_courses:
            self._current_courses.remove(course)

    def complete_course(self, course) -> typing.Optional[str]:
        """Finish a course and permanently record its letter grade.

        The course's grade calculator computes the final percentage, and the
        course's scale converts it to a letter. The letter is not recomputed if
        grades change afterwards.

        Parameters
        ----------
        course : Course
            A course the student is currently taking.

        Returns
        -------
        Optional[str]
            The stored letter, or `None` if the student was not taking the course.

        """
        if course is None or course not in self._current_courses:
            logger.info("%s is not currently taking %s; cannot complete it.", self, course)
            return None

        self._current_courses.remove(course)
        self._completed_courses.append(course)
        self._notify("course_completed", None, course)

        percentage = course.final_average(self)
        letter = course.scale.from_percentage(percentage).letter
        self._final_grades[course] = letter
        self._notify("final_grade_assigned", None, letter)

        return letter

    def final_grade_for(self, course) -> typing.Optional[str]:
        """The finalized letter for a course, or `None`."""
        return self._final_grades.get(course)

    @property
    def final_grades(self) -> dict:
        """A copy of the mapping from completed courses to finalized letters."""
        return dict(self._final_grades)

    def set_final_grade(self, course, letter: str) -> bool:
        """Overrule the finalized letter for a completed course.

        Returns
        -------
        bool
            Whether the letter was stored. It is not if the course has not been
            completed.

        Raises
        ------
        ValueError
            If the letter is not on the course's scale.

        """
        if course is None or course not in self._completed_courses:
            logger.info("%s has not completed %s; not assigning a grade.", self, course)
            return False

        if not course.scale.has_letter(letter):
            raise ValueError(f"{letter!r} is not a letter grade on the scale.")

        old = self._final_grades.get(course)
        new = course.scale.from_letter(letter).letter
        self._final_grades[course] = new
        self._notify("final_grade_assigned", old, new)
        return True

    def calculate_gpa(self) -> float:
        """The average GPA points over completed courses with a finalized letter.

        Completed courses without a letter are left out entirely. Returns 0.0
        if there are no such courses.

        """
        points = [
            course.scale.gpa_value(self._final_grades[course])
            for course in self._completed_courses
            if self._final_grades.get(course) is not None
        ]

        if not points:
            return 0.0

        return sum(points) / len(points)

    def final_average(self, course) -> float:
        """The student's current percentage in the course."""
        if course is None:
            return 0.0
        return course.final_average(self)

    # grades ---------------------------------------------------------------------------

    @property
    def grades(self) -> dict[Assignment, Grade]:
        """A copy of the mapping from assignments to the student's grades."""
        return dict(self._grades)

    def add_grade(self, assignment: Assignment, grade: Grade):
        """Record a grade, replacing any earlier one.

        The grade is stored both here and on the assignment.

        """
        if assignment is None or grade is None:
            logger.info("Ignoring grade for %s: missing assignment or grade.", self)
            return

        old = self._grades.get(assignment)
        self._grades[assignment] = grade
        assignment.add_grade(self.username, grade)
        self._notify("grade_added", old, grade)

    def grade_for_assignment(self, assignment: Assignment) -> typing.Optional[Grade]:
        """The grade for the assignment, or `None` if there is none."""
        return self._grades.get(assignment)

    def remove_grade_for_assignment(self, assignment: Assignment):
        """Forget the grade for the assignment, here and on the assignment."""
        old = self._grades.pop(assignment, None)
        if old is None:
            return

        assignment.remove_grade(self.username)
        self._notify("grade_removed", old, None)

    def feedback_by_course(self, course) -> dict[str, str]:
        """Feedback on the course's assignments, keyed by assignment name."""
        feedback = {}
        for assignment in course.assignments:
            grade = self._grades.get(assignment)
            if grade is not None and grade.feedback is not None:
                feedback[assignment.name] = grade.feedback
        return feedback

    # conversions ----------------------------------------------------------------------

    @staticmethod
    def letter_grade(percentage: float, scale=None) -> str:
        """Convert a percentage to a letter. Default scale: :attr:`DEFAULT_SCALE`."""
        scale = DEFAULT_SCALE if scale is None else scale
        return scale.from_percentage(percentage).letter

    @staticmethod
    def convert_to_gpa(percentage: float, scale=None) -> float:
        """Convert a percentage to GPA points. Default scale: :attr:`DEFAULT_SCALE`."""
        scale = DEFAULT_SCALE if scale is None else scale
        return scale.from_percentage(percentage).gpa_value


class Students(typing.Sequence[Student]):
    """A sequence of :class:`Student` instances.

    This behaves like a list of :class:`Student` instances, but also provides a
    :meth:`find` method that allows you to look up a student by (part of) their
    name.

    """

    def __init__(self, students: typing.Iterable[Student]):
        self._students = list(students)

    def __getitem__(self, ix):
        return self._students[ix]

    def __len__(self):
        return len(self._students)

    def __repr__(self):
        return f"Students({self._students!r})"

    def find(self, pattern: str) -> Student:
        """Finds a student from a substring of their name.

        The search is case-insensitive.

        Parameters
        ----------
        pattern : str
            A pattern to search for in the student's name. All students whose
            (lowercased) names contain this pattern as a substring will be
            considered matches.

        Returns
        -------
        Student
            The matching student.

        Raises
        ------
        ValueError
            If no student matches, or if more than one student matches.

        """

        def is_match(student):
            if student.name is None:
                return False
            return pattern.lower() in student.name.lower()

        matches = [s for s in self._students if is_match(s)]

        if len(matches) == 0:
            raise ValueError(f"No names matched {pattern}.")

        if len(matches) > 1:
            raise ValueError(f'More than one name matched "{pattern}": {matches}')

        return matches[0]
