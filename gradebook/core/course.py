"""Core type for a course and its grading configuration."""

import dataclasses
import logging
import math
import typing

import numpy as np
import pandas as pd

from ..events import Observable
from ..grading._base import GradeCalculator
from ..scales import DEFAULT_SCALE, GradeScale, map_scores_to_letter_grades
from .assignments import Assignment, Assignments
from .categories import GradingCategory
from .grades import Grade
from .student import Student, Students

logger = logging.getLogger(__name__)


# CourseOptions ------------------------------------------------------------------------


@dataclasses.dataclass
class CourseOptions:
    """Configures the behavior of a :class:`Course`.

    Attributes
    ----------
    allow_extra_credit: bool
        If `True`, grading category weights are allowed to sum to beyond one,
        effectively allowing extra credit. If `False`, adding a category that
        pushes the total weight above one raises `ValueError`. Default: `True`.

    """

    allow_extra_credit: bool = True


# Course ===============================================================================


class Course(Observable):
    """A course: its roster, assignments, grading categories and grading policy.

    Parameters
    ----------
    name : str
    course_id : str
    semester : str
    uses_categories : bool
        Whether the course is graded by weighted categories. Calculators consult
        this flag; when it is `False`, category data is ignored. Default: False.
    grade_calculator : Optional[GradeCalculator]
        The policy used to compute averages. If `None`, every average is 0.0
        until one is set.
    scale : Optional[GradeScale]
        Converts percentages to letters when a student completes the course.
        Default: :attr:`gradebook.scales.DEFAULT_SCALE`.
    opts : Optional[CourseOptions]
        Options configuring the behavior of the course.

    Raises
    ------
    ValueError
        If the name, course ID or semester is missing.

    Notes
    -----
    Every attribute that returns a collection returns a copy; modifying it
    does not modify the course. Structural changes are announced to listeners
    registered with :meth:`add_listener`.

    """

    def __init__(
        self,
        name,
        course_id,
        semester,
        uses_categories=False,
        grade_calculator=None,
        scale=None,
        opts=None,
    ):
        super().__init__()
        if name is None or course_id is None or semester is None:
            raise ValueError("Course name, ID and semester are required.")

        self.name = name
        self.course_id = course_id
        self.semester = semester
        self.uses_categories = uses_categories
        self.opts = opts if opts is not None else CourseOptions()
        self.scale = scale if scale is not None else DEFAULT_SCALE
        self.grade_calculator = grade_calculator

        self._students: dict[str, Student] = {}
        self._assignments: list[Assignment] = []
        self._categories: dict[str, GradingCategory] = {}

    def __repr__(self):
        return f"<Course {self.course_id} ({self.semester})>"

    def __str__(self):
        return self.name

    # configuration --------------------------------------------------------------------

    @property
    def scale(self) -> GradeScale:
        """The scale used to finalize letter grades."""
        return self._scale

    @scale.setter
    def scale(self, value):
        if not isinstance(value, GradeScale):
            raise TypeError("The scale must be a GradeScale.")
        self._scale = value

    @property
    def grade_calculator(self):
        """The active grading policy, or `None`.

        No check is made that the calculator agrees with
        :attr:`uses_categories`.

        """
        return self._grade_calculator

    @grade_calculator.setter
    def grade_calculator(self, value):
        if value is not None and not isinstance(value, GradeCalculator):
            raise TypeError("Must be a GradeCalculator or None.")
        self._grade_calculator = value

    # roster ---------------------------------------------------------------------------

    @property
    def students(self) -> Students:
        """A copy of the enrolled students, in order of enrollment."""
        return Students(self._students.values())

    def is_enrolled(self, student) -> bool:
        return student is not None and student.username in self._students

    def enroll_student(self, student: Student):
        """Add a student to the roster. Enrolling twice does nothing."""
        if student is None or student.username in self._students:
            return

        if self in student.completed_courses:
            logger.info("%s has already completed %s.", student, self)
            return

        self._students[student.username] = student
        student.enroll_in_course(self)
        self._notify("student_enrolled", None, student)

    def remove_student(self, student: Student):
        """Take a student off the roster. Unknown students are ignored."""
        if student is None or student.username not in self._students:
            return

        removed = self._students.pop(student.username)
        removed._leave_course(self)
        self._notify("student_removed", removed, None)

    # assignments and categories -------------------------------------------------------

    @property
    def assignments(self) -> Assignments:
        """A copy of the course's assignments, in the order they were added."""
        return Assignments(self._assignments)

    @property
    def grading_categories(self) -> dict[str, GradingCategory]:
        """A copy of the mapping from category names to categories."""
        return dict(self._categories)

    def add_assignment(self, assignment: Assignment) -> bool:
        """Add an assignment to the course.

        The assignment also joins the grading category named by its
        :attr:`Assignment.category_name`, if the course has one.

        Returns
        -------
        bool
            `False` if the assignment was `None`, or an assignment of the same
            name already exists.

        """
        if assignment is None:
            return False

        if assignment.name in self.assignments.names:
            logger.warning(
                "%s already has an assignment named %r.", self, assignment.name
            )
            return False

        self._assignments.append(assignment)

        category = self._categories.get(assignment.category_name)
        if category is not None:
            category.add_assignment(assignment)
        elif self.uses_categories:
            logger.warning(
                "Added assignment %r to %s, but category %r was not found.",
                assignment.name,
                self,
                assignment.category_name,
            )

        self._notify("assignment_added", None, assignment)
        return True

    def remove_assignment(self, assignment: Assignment) -> bool:
        """Remove an assignment and every grade recorded for it.

        The assignment is removed from each grading category, then from the
        course, then its grades are cleared from the assignment itself and from
        every enrolled student.

        Returns
        -------
        bool
            `False` if the assignment is not in the course.

        """
        if assignment is None or assignment not in self.assignments:
            return False

        for category in self._categories.values():
            category.remove_assignment(assignment)

        self._assignments = [a for a in self._assignments if a is not assignment]

        assignment.clear_grades()
        for student in self._students.values():
            student.remove_grade_for_assignment(assignment)

        self._notify("assignment_removed", assignment, None)
        return True

    def add_grading_category(self, category: GradingCategory) -> bool:
        """Add a grading category. The first category with a given name wins.

        Returns
        -------
        bool
            `False` if the category was `None` or its name is taken.

        Raises
        ------
        ValueError
            If the category weights would sum to more than one and
            :attr:`CourseOptions.allow_extra_credit` has been turned off.

        """
        if category is None or category.name in self._categories:
            return False

        total = sum(c.weight for c in self._categories.values()) + category.weight
        if (
            not self.opts.allow_extra_credit
            and total > 1
            and not math.isclose(total, 1)
        ):
            raise ValueError("Category weights must sum to <= 1.")

        self._categories[category.name] = category
        self._notify("category_added", None, category)
        return True

    def clear_grading_categories(self):
        """Remove every grading category."""
        self._categories.clear()

    # grading --------------------------------------------------------------------------

    def record_grade(
        self,
        student: Student,
        assignment: Assignment,
        points_earned: float,
        feedback: typing.Optional[str] = None,
    ) -> typing.Optional[Grade]:
        """Record a student's score on an assignment and mark it as graded.

        Returns
        -------
        Optional[Grade]
            The new grade, or `None` if the student is not enrolled or the
            assignment is not in the course.

        Raises
        ------
        ValueError
            If `points_earned` is negative.

        """
        if not self.is_enrolled(student):
            logger.info("%s is not enrolled in %s; grade not recorded.", student, self)
            return None

        if assignment is None or assignment not in self.assignments:
            logger.info("%r is not in %s; grade not recorded.", assignment, self)
            return None

        grade = Grade(points_earned, feedback)
        student.add_grade(assignment, grade)
        assignment.mark_graded()
        self._notify("grade_recorded", None, grade)
        return grade

    def grade_for(self, student: Student, assignment: Assignment) -> typing.Optional[Grade]:
        """The student's grade on the assignment; `None` if not enrolled or unscored."""
        if not self.is_enrolled(student):
            logger.info("%s is not enrolled in %s.", student, self)
            return None
        return student.grade_for_assignment(assignment)

    def final_average(self, student: Student) -> float:
        """The student's percentage, computed by the active grade calculator.

        Returns 0.0 if no calculator has been set.

        """
        if self._grade_calculator is None:
            logger.info("No grade calculator set for %s.", self)
            return 0.0
        return self._grade_calculator.final_average(self, student)

    # lookups --------------------------------------------------------------------------

    def grades_for_student(self, student: Student) -> dict[Assignment, Grade]:
        """The student's grades on this course's assignments only."""
        if student is None:
            return {}

        result = {}
        for assignment in self._assignments:
            grade = student.grade_for_assignment(assignment)
            if grade is not None:
                result[assignment] = grade
        return result

    def ungraded_assignments_for_student(self, student: Student) -> Assignments:
        """Assignments the student has no score for."""
        if student is None:
            return Assignments()
        return Assignments(
            a for a in self._assignments if student.grade_for_assignment(a) is None
        )

    def ungraded_assignments(self) -> Assignments:
        """Assignments not yet marked as graded."""
        return self.assignments.ungraded()

    def group_assignments(self, group_name: str) -> Assignments:
        """Assignments with the given group label."""
        return self.assignments.in_group(group_name)

    def group_assignments_for_student(self, student: Student) -> Assignments:
        """Assignments whose :attr:`Assignment.group` includes the student."""
        if student is None:
            return Assignments()
        return Assignments(
            a for a in self._assignments if a.group is not None and student in a.group
        )

    def assignments_by_category(self, category_name: str) -> Assignments:
        """Assignments whose category name matches, ignoring case."""
        return self.assignments.in_category(category_name)

    def students_sorted_by_name(self, by_last_name=False, ascending=True) -> list[Student]:
        """The roster sorted by first or last name, ignoring case."""

        def key(student):
            name = student.last_name if by_last_name else student.first_name
            return (name or "").lower()

        return sorted(self._students.values(), key=key, reverse=not ascending)

    def students_sorted_by_assignment_grade(
        self, assignment: Assignment, ascending=True
    ) -> list[Student]:
        """The roster sorted by score on one assignment.

        Students without a score sort as lowest. Returns an empty list if the
        assignment is `None`.

        """
        if assignment is None:
            return []

        def key(student):
            grade = assignment.grade_for(student.username)
            return grade.points_earned if grade is not None else -math.inf

        return sorted(self._students.values(), key=key, reverse=not ascending)

    # tables ---------------------------------------------------------------------------

    @property
    def points_possible(self) -> pd.Series:
        """Points possible for each assignment, indexed by assignment name."""
        return pd.Series(
            [a.points_possible for a in self._assignments],
            index=[a.name for a in self._assignments],
            dtype=float,
        )

    @property
    def points_earned(self) -> pd.DataFrame:
        """Points earned, one row per student and one column per assignment.

        The index contains usernames. Unscored entries are `NaN`.

        """
        columns = [a.name for a in self._assignments]
        rows = []
        for student in self._students.values():
            row = []
            for assignment in self._assignments:
                grade = student.grade_for_assignment(assignment)
                row.append(np.nan if grade is None else grade.points_earned)
            rows.append(row)

        return pd.DataFrame(
            rows, index=list(self._students), columns=columns, dtype=float
        )

    @property
    def overall_scores(self) -> pd.Series:
        """Each student's current percentage, indexed by username."""
        return pd.Series(
            {
                username: self.final_average(student)
                for username, student in self._students.items()
            },
            dtype=float,
        )

    @property
    def letter_grades(self) -> pd.Series:
        """The letter each student would receive now, indexed by username."""
        return map_scores_to_letter_grades(self.overall_scores, scale=self.scale)
