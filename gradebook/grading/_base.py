import abc


class GradeCalculator(abc.ABC):
    """A policy for turning a student's scores in a course into a percentage.

    Calculators hold no per-course state, so a single instance can be shared
    between courses.

    """

    @abc.abstractmethod
    def final_average(self, course, student) -> float:
        """Compute the student's percentage in the course.

        Parameters
        ----------
        course : Course
            The course supplying assignments and categories.
        student : Student
            The student supplying scores.

        Returns
        -------
        float
            A percentage, nominally between 0 and 100. Missing data of any kind
            yields 0.0 rather than an exception.

        """

    def __repr__(self):
        return f"{self.__class__.__name__}()"


def _points_earned(student, assignment) -> float:
    """Points the student earned on the assignment; 0 if there is no score."""
    grade = student.grade_for_assignment(assignment)
    if grade is None:
        return 0.0
    return grade.points_earned
