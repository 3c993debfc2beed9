"""Tests for the student registry (F1)."""

import pytest

from registrar.core.audit import AuditLevel, AuditLog
from registrar.core.errors import RecordLimitError, StudentNotFoundError
from registrar.core.ids import IdentityAllocator
from registrar.core.students import StudentRegistry


@pytest.fixture
def registry():
    return StudentRegistry(allocator=IdentityAllocator(), audit=AuditLog())


class TestAddStudent:
    """Tests for StudentRegistry.add_student."""

    def test_assigns_sequential_ids(self, registry):
        first = registry.add_student(name="Alice")
        second = registry.add_student(name="Bob")
        assert (first.student_id, second.student_id) == (1001, 1002)

    def test_new_student_is_active(self, registry):
        student = registry.add_student(name="Alice", admission_year=2023)
        assert student.is_active
        assert student.admission_year == 2023
        assert student.registration_date

    def test_success_is_audited(self, registry):
        registry.add_student(name="Alice")
        entry = registry.audit.entries()[-1]
        assert entry.level == AuditLevel.SUCCESS
        assert entry.operation == "Add Student"
        assert entry.details == "Added student: Alice (ID: 1001)"

    def test_invalid_email_warns_but_stores(self, registry):
        """Malformed contact details are kept and flagged in the log."""
        student = registry.add_student(name="Alice", email="not-an-email")
        assert student.email == "not-an-email"
        warnings = [e for e in registry.audit.entries() if e.level == AuditLevel.WARNING]
        assert warnings[0].details == "Invalid email format: not-an-email"

    def test_invalid_phone_warns(self, registry):
        registry.add_student(name="Alice", phone="123")
        warnings = [e for e in registry.audit.entries() if e.level == AuditLevel.WARNING]
        assert len(warnings) == 1
        assert "phone" in warnings[0].details

    def test_empty_contact_fields_not_flagged(self, registry):
        registry.add_student(name="Alice")
        assert all(e.level != AuditLevel.WARNING for e in registry.audit.entries())

    def test_limit(self):
        registry = StudentRegistry(allocator=IdentityAllocator(), max_students=2)
        registry.add_student(name="A")
        registry.add_student(name="B")

        with pytest.raises(RecordLimitError) as exc_info:
            registry.add_student(name="C")

        assert exc_info.value.message == "Maximum student limit reached (2)"
        assert len(registry) == 2
        assert registry.audit.entries()[-1].level == AuditLevel.ERROR


class TestLookup:
    """Tests for find/get/search."""

    def test_find_student(self, registry):
        student = registry.add_student(name="Alice")
        assert registry.find_student(student.student_id) is student

    def test_find_unknown(self, registry):
        with pytest.raises(StudentNotFoundError):
            registry.find_student(9999)

    def test_find_skips_inactive_but_get_does_not(self, registry):
        student = registry.add_student(name="Alice")
        registry.deactivate_student(student.student_id)

        with pytest.raises(StudentNotFoundError):
            registry.find_student(student.student_id)
        assert registry.get_student(student.student_id) is student

    def test_search_is_case_sensitive_substring(self, registry):
        registry.add_student(name="Alice Smith")
        registry.add_student(name="Bob Smithers")
        registry.add_student(name="Carol")

        assert [s.name for s in registry.search_by_name("Smith")] == [
            "Alice Smith",
            "Bob Smithers",
        ]
        assert registry.search_by_name("smith") == []

    def test_search_excludes_inactive(self, registry):
        student = registry.add_student(name="Alice")
        registry.deactivate_student(student.student_id)
        assert registry.search_by_name("Alice") == []


class TestDeactivate:
    """Tests for soft delete."""

    def test_deactivate_and_reactivate(self, registry):
        student = registry.add_student(name="Alice")
        registry.deactivate_student(student.student_id)
        assert registry.active_count() == 0
        assert len(registry) == 1
        assert registry.list_students() == []
        assert registry.list_students(include_inactive=True) == [student]

        registry.reactivate_student(student.student_id)
        assert registry.active_count() == 1

    def test_deactivate_unknown_is_audited(self, registry):
        with pytest.raises(StudentNotFoundError):
            registry.deactivate_student(4242)
        entry = registry.audit.entries()[-1]
        assert entry.level == AuditLevel.WARNING
        assert entry.operation == "Deactivate Student"
