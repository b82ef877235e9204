import logging
import math

import pandas as pd
import pytest

import gradebook
from util import make_category_course, assert_course_is_sound


def _course(**kwargs):
    return gradebook.Course("Intro to Programming", "CS101", "Fall", **kwargs)


# construction -------------------------------------------------------------------------


def test_course_requires_name_id_and_semester():
    with pytest.raises(ValueError):
        gradebook.Course(None, "CS101", "Fall")


def test_defaults():
    # when
    course = _course()

    # then
    assert not course.uses_categories
    assert course.grade_calculator is None
    assert course.scale == gradebook.DEFAULT_SCALE
    assert course.opts == gradebook.CourseOptions()
    assert str(course) == "Intro to Programming"


def test_grade_calculator_must_be_a_calculator():
    with pytest.raises(TypeError):
        _course(grade_calculator=lambda course, student: 100.0)


def test_grade_calculator_can_be_swapped():
    # given
    course = _course()
    points = gradebook.PointsBasedCalculator()

    # when
    course.grade_calculator = points

    # then
    assert course.grade_calculator is points


def test_calculator_is_not_checked_against_uses_categories():
    course = _course(uses_categories=False)
    course.grade_calculator = gradebook.CategoryBasedCalculator()
    assert isinstance(course.grade_calculator, gradebook.CategoryBasedCalculator)


def test_final_average_without_calculator_is_zero(caplog):
    # given
    course = _course()
    student = gradebook.Student("jdoe")
    course.enroll_student(student)

    # when
    with caplog.at_level(logging.INFO, logger="gradebook"):
        average = course.final_average(student)

    # then
    assert average == 0.0
    assert "No grade calculator" in caplog.text


# roster -------------------------------------------------------------------------------


def test_enroll_student_is_idempotent():
    # given
    course = _course()
    student = gradebook.Student("jdoe")

    # when
    course.enroll_student(student)
    course.enroll_student(student)
    course.enroll_student(gradebook.Student("jdoe"))
    course.enroll_student(None)

    # then
    assert list(course.students) == [student]
    assert student.current_courses == [course]
    assert_course_is_sound(course)


def test_remove_student():
    # given
    course = _course()
    student = gradebook.Student("jdoe")
    course.enroll_student(student)

    # when
    course.remove_student(student)
    course.remove_student(student)

    # then
    assert list(course.students) == []
    assert student.current_courses == []


def test_students_returns_a_copy():
    # given
    course = _course()
    course.enroll_student(gradebook.Student("jdoe"))

    # when
    students = list(course.students)
    students.append(gradebook.Student("intruder"))

    # then
    assert len(course.students) == 1


def test_students_sorted_by_name():
    # given
    course = _course()
    for username, first, last in [("c", "carol", "Adams"), ("a", "Alice", "Young"), ("b", "bob", "Miller")]:
        course.enroll_student(gradebook.Student(username, first, last))

    # then
    assert [s.username for s in course.students_sorted_by_name()] == ["a", "b", "c"]
    assert [s.username for s in course.students_sorted_by_name(ascending=False)] == ["c", "b", "a"]
    assert [s.username for s in course.students_sorted_by_name(by_last_name=True)] == ["c", "b", "a"]


def test_students_sorted_by_assignment_grade_puts_unscored_lowest():
    # given
    course = _course()
    hw = gradebook.Assignment("hw 01", 10)
    course.add_assignment(hw)
    for username, points in [("a", 7), ("b", None), ("c", 3)]:
        student = gradebook.Student(username)
        course.enroll_student(student)
        if points is not None:
            course.record_grade(student, hw, points)

    # then
    assert [s.username for s in course.students_sorted_by_assignment_grade(hw)] == ["b", "c", "a"]
    assert [
        s.username for s in course.students_sorted_by_assignment_grade(hw, ascending=False)
    ] == ["a", "c", "b"]
    assert course.students_sorted_by_assignment_grade(None) == []


# assignments --------------------------------------------------------------------------


def test_add_assignment_joins_matching_category():
    # given
    course = _course(uses_categories=True)
    course.add_grading_category(gradebook.GradingCategory("Homework", 0.5))
    hw = gradebook.Assignment("hw 01", 10, category_name="Homework")

    # when
    added = course.add_assignment(hw)

    # then
    assert added
    assert course.assignments.names == ["hw 01"]
    assert course.grading_categories["Homework"].assignments.names == ["hw 01"]
    assert_course_is_sound(course)


def test_add_assignment_with_unknown_category_warns(caplog):
    # given
    course = _course(uses_categories=True)
    hw = gradebook.Assignment("hw 01", 10, category_name="Homework")

    # when
    with caplog.at_level(logging.WARNING, logger="gradebook"):
        course.add_assignment(hw)

    # then
    assert course.assignments.names == ["hw 01"]
    assert "not found" in caplog.text


def test_add_assignment_rejects_duplicate_names():
    # given
    course = _course()
    course.add_assignment(gradebook.Assignment("hw 01", 10))

    # when
    added = course.add_assignment(gradebook.Assignment("hw 01", 20))

    # then
    assert not added
    assert len(course.assignments) == 1
    assert course.assignments[0].points_possible == 10.0


def test_remove_assignment_cascades():
    # given
    course, student = make_category_course()
    other = gradebook.Student("asmith")
    course.enroll_student(other)
    hw = course.assignments.find("hw 01")
    course.record_grade(other, hw, 10)

    # when
    removed = course.remove_assignment(hw)

    # then
    assert removed
    assert "hw 01" not in course.assignments.names
    assert "hw 01" not in course.grading_categories["Homework"].assignments.names
    assert student.grade_for_assignment(hw) is None
    assert other.grade_for_assignment(hw) is None
    assert hw.grades == {}
    assert_course_is_sound(course)


def test_remove_assignment_changes_the_average():
    # given
    course, student = make_category_course()

    # when
    course.remove_assignment(course.assignments.find("hw 03"))

    # then
    # homework is now 8/10 after dropping the 6
    assert course.final_average(student) == pytest.approx(0.5 * 80 + 0.5 * 85)


def test_remove_unknown_assignment_is_a_no_op():
    # given
    course = _course()
    course.add_assignment(gradebook.Assignment("hw 01", 10))

    # then
    assert not course.remove_assignment(gradebook.Assignment("hw 01", 10))
    assert len(course.assignments) == 1


def test_assignments_returns_a_copy():
    # given
    course = _course()
    course.add_assignment(gradebook.Assignment("hw 01", 10))

    # when
    assignments = list(course.assignments)
    assignments.clear()

    # then
    assert len(course.assignments) == 1


# categories ---------------------------------------------------------------------------


def test_add_grading_category_first_write_wins():
    # given
    course = _course(uses_categories=True)
    first = gradebook.GradingCategory("Homework", 0.25)

    # when
    course.add_grading_category(first)
    added = course.add_grading_category(gradebook.GradingCategory("Homework", 0.5))

    # then
    assert not added
    assert course.grading_categories["Homework"] is first


def test_category_weights_may_exceed_one_by_default():
    # given
    course = _course(
        uses_categories=True, grade_calculator=gradebook.CategoryBasedCalculator()
    )
    student = gradebook.Student("jdoe")
    course.enroll_student(student)

    # when
    course.add_grading_category(gradebook.GradingCategory("Homework", 0.6))
    course.add_grading_category(gradebook.GradingCategory("Exams", 0.6))

    hw = gradebook.Assignment("hw 01", 10, category_name="Homework")
    exam = gradebook.Assignment("midterm", 10, category_name="Exams")
    course.add_assignment(hw)
    course.add_assignment(exam)
    course.record_grade(student, hw, 10)
    course.record_grade(student, exam, 5)

    # then
    assert list(course.grading_categories) == ["Homework", "Exams"]
    assert course.final_average(student) == pytest.approx(0.6 * 100 + 0.6 * 50)


def test_category_weights_cannot_exceed_one_without_extra_credit():
    # given
    course = _course(
        uses_categories=True, opts=gradebook.CourseOptions(allow_extra_credit=False)
    )
    course.add_grading_category(gradebook.GradingCategory("Homework", 0.7))

    # when/then
    with pytest.raises(ValueError):
        course.add_grading_category(gradebook.GradingCategory("Exams", 0.5))
    assert list(course.grading_categories) == ["Homework"]


def test_category_weights_summing_to_one_are_allowed_without_extra_credit():
    # given
    course = _course(
        uses_categories=True, opts=gradebook.CourseOptions(allow_extra_credit=False)
    )

    # when
    for name, weight in [("a", 0.1), ("b", 0.2), ("c", 0.7)]:
        course.add_grading_category(gradebook.GradingCategory(name, weight))

    # then
    assert len(course.grading_categories) == 3


def test_grading_categories_returns_a_copy():
    # given
    course = _course(uses_categories=True)
    course.add_grading_category(gradebook.GradingCategory("Homework", 0.5))

    # when
    course.grading_categories.clear()

    # then
    assert list(course.grading_categories) == ["Homework"]


def test_clear_grading_categories():
    # given
    course, _ = make_category_course()

    # when
    course.clear_grading_categories()

    # then
    assert course.grading_categories == {}


# grades -------------------------------------------------------------------------------


def test_record_grade_stores_both_copies_and_marks_graded():
    # given
    course = _course()
    student = gradebook.Student("jdoe")
    course.enroll_student(student)
    hw = gradebook.Assignment("hw 01", 10)
    course.add_assignment(hw)

    # when
    grade = course.record_grade(student, hw, 9, "great")

    # then
    assert grade == gradebook.Grade(9, "great")
    assert student.grade_for_assignment(hw) == grade
    assert hw.grade_for("jdoe") == grade
    assert hw.is_graded


def test_record_grade_rejects_negative_points():
    # given
    course = _course()
    student = gradebook.Student("jdoe")
    course.enroll_student(student)
    hw = gradebook.Assignment("hw 01", 10)
    course.add_assignment(hw)

    # when/then
    with pytest.raises(ValueError):
        course.record_grade(student, hw, -1)
    assert student.grade_for_assignment(hw) is None
    assert not hw.is_graded


def test_record_grade_for_unenrolled_student_is_ignored():
    # given
    course = _course()
    hw = gradebook.Assignment("hw 01", 10)
    course.add_assignment(hw)
    student = gradebook.Student("jdoe")

    # when
    grade = course.record_grade(student, hw, 9)

    # then
    assert grade is None
    assert student.grades == {}
    assert course.grade_for(student, hw) is None


def test_record_grade_for_foreign_assignment_is_ignored():
    # given
    course = _course()
    student = gradebook.Student("jdoe")
    course.enroll_student(student)

    # then
    assert course.record_grade(student, gradebook.Assignment("hw 01", 10), 9) is None


def test_grades_for_student_only_includes_this_course():
    # given
    course, student = make_category_course()
    elsewhere = gradebook.Assignment("essay", 10)
    student.add_grade(elsewhere, gradebook.Grade(5))

    # when
    grades = course.grades_for_student(student)

    # then
    assert [a.name for a in grades] == ["hw 01", "hw 02", "hw 03", "quiz 01", "quiz 02"]
    assert course.grades_for_student(None) == {}


def test_ungraded_assignment_lookups():
    # given
    course, student = make_category_course()
    final = gradebook.Assignment("final", 100, category_name="Quizzes", group_name="exams")
    course.add_assignment(final)

    # then
    assert course.ungraded_assignments_for_student(student).names == ["final"]
    assert course.ungraded_assignments().names == ["final"]
    assert course.group_assignments("exams").names == ["final"]
    assert course.assignments_by_category("quizzes").names == ["quiz 01", "quiz 02", "final"]


# tables -------------------------------------------------------------------------------


def test_points_earned_and_possible_tables():
    # given
    course = _course(grade_calculator=gradebook.PointsBasedCalculator())
    hw1 = gradebook.Assignment("hw 01", 10)
    hw2 = gradebook.Assignment("hw 02", 20)
    course.add_assignment(hw1)
    course.add_assignment(hw2)
    jdoe = gradebook.Student("jdoe")
    asmith = gradebook.Student("asmith")
    course.enroll_student(jdoe)
    course.enroll_student(asmith)
    course.record_grade(jdoe, hw1, 10)
    course.record_grade(jdoe, hw2, 20)
    course.record_grade(asmith, hw1, 5)

    # when
    earned = course.points_earned
    possible = course.points_possible

    # then
    assert list(earned.index) == ["jdoe", "asmith"]
    assert list(earned.columns) == ["hw 01", "hw 02"]
    assert earned.loc["jdoe", "hw 02"] == 20
    assert math.isnan(earned.loc["asmith", "hw 02"])
    assert list(possible) == [10.0, 20.0]

    assert course.overall_scores.to_dict() == pytest.approx(
        {"jdoe": 100.0, "asmith": 5 / 30 * 100}
    )
    assert course.letter_grades.to_dict() == {"jdoe": "A", "asmith": "E"}


def test_tables_for_an_empty_course():
    course = _course()
    assert course.points_earned.shape == (0, 0)
    assert isinstance(course.overall_scores, pd.Series)
    assert len(course.letter_grades) == 0


# events -------------------------------------------------------------------------------


def test_structural_changes_notify_listeners():
    # given
    course = _course(uses_categories=True)
    events = []
    course.add_listener(events.append)
    student = gradebook.Student("jdoe")
    hw = gradebook.Assignment("hw 01", 10, category_name="Homework")

    # when
    course.add_grading_category(gradebook.GradingCategory("Homework", 1))
    course.enroll_student(student)
    course.add_assignment(hw)
    course.record_grade(student, hw, 7)
    course.remove_assignment(hw)
    course.remove_student(student)

    # then
    assert [e.name for e in events] == [
        "category_added",
        "student_enrolled",
        "assignment_added",
        "grade_recorded",
        "assignment_removed",
        "student_removed",
    ]
    assert events[1].new_value is student
    assert events[4].old_value is hw
    assert all(e.source is course for e in events)


def test_removed_listener_is_not_notified():
    # given
    course = _course()
    events = []
    course.add_listener(events.append)

    # when
    course.remove_listener(events.append)
    course.enroll_student(gradebook.Student("jdoe"))

    # then
    assert events == []


# groups -------------------------------------------------------------------------------


def test_group_assignments_for_student():
    # given
    course = _course()
    jdoe = gradebook.Student("jdoe")
    asmith = gradebook.Student("asmith")
    course.enroll_student(jdoe)
    course.enroll_student(asmith)

    team = gradebook.Group("team a")
    team.add_member(jdoe)
    course.add_assignment(gradebook.Assignment("project", 50, group=team))
    course.add_assignment(gradebook.Assignment("hw 01", 10, group_name="team a"))

    # then
    assert course.group_assignments_for_student(jdoe).names == ["project"]
    assert course.group_assignments_for_student(asmith).names == []
    assert course.group_assignments_for_student(None).names == []
    assert course.group_assignments("team a").names == ["project", "hw 01"]
