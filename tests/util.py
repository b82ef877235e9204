import gradebook


def assert_course_is_sound(course):
    assignments = list(course.assignments)
    for category in course.grading_categories.values():
        for assignment in category.assignments:
            assert any(assignment is a for a in assignments)

    for student in course.students:
        assert course in student.current_courses or course in student.completed_courses
        assert not (
            course in student.current_courses and course in student.completed_courses
        )


def make_category_course(quizzes_graded=True):
    """Homework (weight .5, drop 1) scored 8, 6, 9 out of 10; quizzes (weight .5)
    scored 18, 16 out of 20."""
    course = gradebook.Course(
        "Intro to Programming",
        "CS101",
        "Fall",
        uses_categories=True,
        grade_calculator=gradebook.CategoryBasedCalculator(),
    )
    course.add_grading_category(gradebook.GradingCategory("Homework", 0.5, 1))
    course.add_grading_category(gradebook.GradingCategory("Quizzes", 0.5, 0))

    student = gradebook.Student("jdoe", "Jane", "Doe")
    course.enroll_student(student)

    for name, score in [("hw 01", 8), ("hw 02", 6), ("hw 03", 9)]:
        hw = gradebook.Assignment(name, 10, category_name="Homework")
        course.add_assignment(hw)
        course.record_grade(student, hw, score)

    for name, score in [("quiz 01", 18), ("quiz 02", 16)]:
        quiz = gradebook.Assignment(name, 20, category_name="Quizzes")
        course.add_assignment(quiz)
        course.record_grade(student, quiz, score)
        if not quizzes_graded:
            quiz.is_graded = False

    return course, student
