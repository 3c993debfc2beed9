"""Tests for the enrollment engine (F2)."""

import pytest

from registrar.core.audit import AuditLevel
from registrar.core.enrollment import EnrollmentEngine, EnrollmentStatus
from registrar.core.errors import (
    AlreadyGradedError,
    CapacityExceededError,
    CourseFullError,
    CourseNotFoundError,
    DuplicateEnrollmentError,
    EnrollmentNotFoundError,
    InvalidGradeError,
    InvalidTransitionError,
    RecordLimitError,
    StudentNotFoundError,
)
from registrar.core.ids import IdKind


def _live_count(records, course_id):
    return sum(1 for e in records.engine.enrollments_by_course(course_id) if e.is_live)


class TestEnroll:
    """Tests for EnrollmentEngine.enroll."""

    def test_enroll_creates_pending_record(self, records, alice, cs101):
        enrollment = records.engine.enroll(alice.student_id, cs101.course_id)

        assert enrollment.enrollment_id == 7001
        assert enrollment.student_id == alice.student_id
        assert enrollment.course_id == cs101.course_id
        assert enrollment.status == EnrollmentStatus.PENDING
        assert enrollment.grade is None
        assert enrollment.letter_grade is None
        assert enrollment.credit_points is None
        assert cs101.current_enrollment == 1

    def test_capacity_and_duplicate_scenario(self, records):
        """Student 1001 fills a one-seat course, retries, then 1002 is turned away."""
        first = records.registry.add_student(name="First")
        course = records.catalog.add_course(code="SEM1", name="Seminar", credits=1, max_capacity=1)
        assert (first.student_id, course.course_id) == (1001, 5001)

        records.engine.enroll(1001, 5001)
        assert course.current_enrollment == 1

        with pytest.raises(DuplicateEnrollmentError):
            records.engine.enroll(1001, 5001)

        second = records.registry.add_student(name="Second")
        assert second.student_id == 1002
        with pytest.raises(CapacityExceededError) as exc_info:
            records.engine.enroll(1002, 5001)

        assert isinstance(exc_info.value, CourseFullError)
        assert course.current_enrollment == 1
        assert len(records.engine) == 1

    def test_duplicate_is_idempotent_failure(self, records, alice, cs101):
        """A rejected duplicate changes nothing, however often it is retried."""
        original = records.engine.enroll(alice.student_id, cs101.course_id)

        for _ in range(3):
            with pytest.raises(DuplicateEnrollmentError) as exc_info:
                records.engine.enroll(alice.student_id, cs101.course_id)
            assert exc_info.value.enrollment_id == original.enrollment_id

        assert cs101.current_enrollment == 1
        assert len(records.engine) == 1
        assert records.allocator.peek(IdKind.ENROLLMENT) == 7002

    def test_duplicate_is_audited_as_warning(self, records, alice, cs101):
        records.engine.enroll(alice.student_id, cs101.course_id)
        with pytest.raises(DuplicateEnrollmentError):
            records.engine.enroll(alice.student_id, cs101.course_id)

        entry = records.audit.entries()[-1]
        assert entry.level == AuditLevel.WARNING
        assert entry.operation == "Enrollment"
        assert entry.details.startswith("Duplicate enrollment attempt")

    def test_unknown_student(self, records, cs101):
        with pytest.raises(StudentNotFoundError):
            records.engine.enroll(9999, cs101.course_id)
        assert cs101.current_enrollment == 0
        assert records.audit.entries()[-1].level == AuditLevel.ERROR

    def test_inactive_student_cannot_enroll(self, records, alice, cs101):
        records.registry.deactivate_student(alice.student_id)
        with pytest.raises(StudentNotFoundError):
            records.engine.enroll(alice.student_id, cs101.course_id)

    def test_unknown_course(self, records, alice):
        with pytest.raises(CourseNotFoundError):
            records.engine.enroll(alice.student_id, 5999)
        assert len(records.engine) == 0

    def test_enrollment_limit(self, records, alice, bob, cs101):
        engine = EnrollmentEngine(
            registry=records.registry,
            catalog=records.catalog,
            allocator=records.allocator,
            audit=records.audit,
            max_enrollments=1,
        )
        engine.enroll(alice.student_id, cs101.course_id)
        with pytest.raises(RecordLimitError):
            engine.enroll(bob.student_id, cs101.course_id)
        assert cs101.current_enrollment == 1

    def test_success_is_audited(self, records, alice, cs101):
        records.engine.enroll(alice.student_id, cs101.course_id)
        entry = records.audit.entries()[-1]
        assert entry.level == AuditLevel.SUCCESS
        assert entry.details == f"Enrolled student {alice.student_id} in course {cs101.course_id}"


class TestRecordGrade:
    """Tests for EnrollmentEngine.record_grade."""

    @pytest.mark.parametrize(
        "grade,letter,points",
        [
            (100, "A", 4.0),
            (90, "A", 4.0),
            (89.999, "B", 3.0),
            (80, "B", 3.0),
            (79.999, "C", 2.0),
            (60, "D", 1.0),
            (59.999, "F", 0.0),
            (0, "F", 0.0),
        ],
    )
    def test_grade_conversion(self, records, alice, cs101, grade, letter, points):
        enrollment = records.engine.enroll(alice.student_id, cs101.course_id)
        records.engine.record_grade(enrollment.enrollment_id, grade)

        assert enrollment.status == EnrollmentStatus.COMPLETED
        assert enrollment.grade == pytest.approx(grade)
        assert enrollment.letter_grade == letter
        assert enrollment.credit_points == points
        assert enrollment.graded_at

    @pytest.mark.parametrize("grade", [-1, 101, -0.001, 100.5])
    def test_out_of_range(self, records, alice, cs101, grade):
        enrollment = records.engine.enroll(alice.student_id, cs101.course_id)
        with pytest.raises(InvalidGradeError):
            records.engine.record_grade(enrollment.enrollment_id, grade)
        assert enrollment.status == EnrollmentStatus.PENDING
        assert enrollment.grade is None

    def test_invalid_grade_checked_before_lookup(self, records):
        with pytest.raises(InvalidGradeError):
            records.engine.record_grade(7999, 150)

    def test_unknown_enrollment(self, records):
        with pytest.raises(EnrollmentNotFoundError):
            records.engine.record_grade(7999, 80)
        entry = records.audit.entries()[-1]
        assert entry.level == AuditLevel.ERROR
        assert entry.operation == "Record Grade"

    def test_regrade_rejected(self, records, alice, cs101):
        """A grade is written once; the first value stays."""
        enrollment = records.engine.enroll(alice.student_id, cs101.course_id)
        records.engine.record_grade(enrollment.enrollment_id, 85)

        with pytest.raises(AlreadyGradedError):
            records.engine.record_grade(enrollment.enrollment_id, 95)
        assert enrollment.grade == 85.0
        assert enrollment.letter_grade == "B"

    def test_grading_keeps_seat(self, records, alice, cs101):
        enrollment = records.engine.enroll(alice.student_id, cs101.course_id)
        records.engine.record_grade(enrollment.enrollment_id, 75)
        assert cs101.current_enrollment == 1

    def test_success_is_audited(self, records, alice, cs101):
        enrollment = records.engine.enroll(alice.student_id, cs101.course_id)
        records.engine.record_grade(enrollment.enrollment_id, 87.5)
        entry = records.audit.entries()[-1]
        assert entry.details == f"Recorded grade 87.50 for enrollment {enrollment.enrollment_id}"


class TestDropEnrollment:
    """Tests for EnrollmentEngine.drop_enrollment."""

    def test_drop_frees_seat_and_pair(self, records, alice, cs101):
        enrollment = records.engine.enroll(alice.student_id, cs101.course_id)
        records.engine.drop_enrollment(enrollment.enrollment_id)

        assert enrollment.status == EnrollmentStatus.DROPPED
        assert enrollment.dropped_at
        assert cs101.current_enrollment == 0
        assert records.engine.live_enrollment(alice.student_id, cs101.course_id) is None

        again = records.engine.enroll(alice.student_id, cs101.course_id)
        assert again.enrollment_id != enrollment.enrollment_id
        assert cs101.current_enrollment == 1
        assert len(records.engine.enrollments_by_student(alice.student_id)) == 2

    def test_drop_full_course_lets_next_student_in(self, records, alice, bob):
        course = records.catalog.add_course(code="SEM1", name="Seminar", credits=1, max_capacity=1)
        enrollment = records.engine.enroll(alice.student_id, course.course_id)
        with pytest.raises(CourseFullError):
            records.engine.enroll(bob.student_id, course.course_id)

        records.engine.drop_enrollment(enrollment.enrollment_id)
        records.engine.enroll(bob.student_id, course.course_id)
        assert course.current_enrollment == 1

    def test_drop_twice(self, records, alice, cs101):
        enrollment = records.engine.enroll(alice.student_id, cs101.course_id)
        records.engine.drop_enrollment(enrollment.enrollment_id)
        with pytest.raises(InvalidTransitionError):
            records.engine.drop_enrollment(enrollment.enrollment_id)
        assert cs101.current_enrollment == 0

    def test_cannot_drop_completed(self, records, alice, cs101):
        enrollment = records.engine.enroll(alice.student_id, cs101.course_id)
        records.engine.record_grade(enrollment.enrollment_id, 90)
        with pytest.raises(InvalidTransitionError):
            records.engine.drop_enrollment(enrollment.enrollment_id)
        assert enrollment.status == EnrollmentStatus.COMPLETED

    def test_cannot_grade_dropped(self, records, alice, cs101):
        enrollment = records.engine.enroll(alice.student_id, cs101.course_id)
        records.engine.drop_enrollment(enrollment.enrollment_id)
        with pytest.raises(InvalidTransitionError):
            records.engine.record_grade(enrollment.enrollment_id, 90)
        assert enrollment.grade is None


class TestActiveStatus:
    """ACTIVE enrollments grade and drop like PENDING ones."""

    @pytest.fixture
    def active(self, records, alice, cs101):
        enrollment = records.engine.enroll(alice.student_id, cs101.course_id)
        enrollment.status = EnrollmentStatus.ACTIVE
        return enrollment

    def test_active_is_distinct_and_live(self, active):
        assert EnrollmentStatus.ACTIVE not in (
            EnrollmentStatus.PENDING,
            EnrollmentStatus.COMPLETED,
            EnrollmentStatus.DROPPED,
        )
        assert active.is_live
        assert not active.is_completed
        assert active.to_dict()["status"] == "active"
        assert EnrollmentStatus.ACTIVE.label == "Active"

    def test_active_blocks_duplicate(self, records, alice, cs101, active):
        with pytest.raises(DuplicateEnrollmentError):
            records.engine.enroll(alice.student_id, cs101.course_id)

    def test_active_to_completed(self, records, alice, cs101, active):
        records.engine.record_grade(active.enrollment_id, 72)

        assert active.status == EnrollmentStatus.COMPLETED
        assert active.letter_grade == "C"
        assert active.credit_points == 2.0
        assert cs101.current_enrollment == 1
        assert records.engine.live_enrollment(alice.student_id, cs101.course_id) is active

    def test_active_to_dropped(self, records, alice, cs101, active):
        records.engine.drop_enrollment(active.enrollment_id)

        assert active.status == EnrollmentStatus.DROPPED
        assert active.dropped_at
        assert cs101.current_enrollment == 0
        assert records.engine.live_enrollment(alice.student_id, cs101.course_id) is None

        again = records.engine.enroll(alice.student_id, cs101.course_id)
        assert again.status == EnrollmentStatus.PENDING
        assert cs101.current_enrollment == 1


class TestCounterConsistency:
    """current_enrollment always equals the recount of live enrollments."""

    def test_recount_after_mixed_operations(self, records):
        students = [records.registry.add_student(name=f"S{i}") for i in range(6)]
        courses = [
            records.catalog.add_course(code=f"C{i}", name=f"Course {i}", credits=3, max_capacity=4)
            for i in range(3)
        ]

        created = []
        for i, student in enumerate(students):
            for course in courses[: 1 + i % 3]:
                try:
                    created.append(records.engine.enroll(student.student_id, course.course_id))
                except CourseFullError:
                    pass

        for n, enrollment in enumerate(created):
            if n % 3 == 0:
                records.engine.record_grade(enrollment.enrollment_id, 50 + n)
            elif n % 3 == 1:
                records.engine.drop_enrollment(enrollment.enrollment_id)

        for course in courses:
            assert course.current_enrollment == _live_count(records, course.course_id)
            assert 0 <= course.current_enrollment <= course.max_capacity


class TestLookups:
    """Tests for enrollment queries."""

    def test_by_student_and_course(self, records, alice, bob, cs101):
        math = records.catalog.add_course(code="MA101", name="Calculus", credits=4, max_capacity=10)
        records.engine.enroll(alice.student_id, cs101.course_id)
        records.engine.enroll(alice.student_id, math.course_id)
        records.engine.enroll(bob.student_id, math.course_id)

        assert len(records.engine.enrollments_by_student(alice.student_id)) == 2
        assert len(records.engine.enrollments_by_course(math.course_id)) == 2
        assert records.engine.enrollments_by_student(9999) == []

    def test_to_dict_uses_status_value(self, records, alice, cs101):
        enrollment = records.engine.enroll(alice.student_id, cs101.course_id)
        data = enrollment.to_dict()
        assert data["status"] == "pending"
        assert data["grade"] is None
