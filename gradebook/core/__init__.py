from .grades import Grade
from .assignments import Assignment, Assignments
from .categories import GradingCategory
from .groups import Group
from .student import Student, Students
from .course import Course, CourseOptions

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
]
