from datetime import date

import pytest

from student_clinic.exceptions import InvalidStateError, NotFoundError, ValidationError
from student_clinic.models.sick_leave import SickLeaveStatus, duration_days
from student_clinic.schemas.sick_leave import SickLeaveCreate
from student_clinic.services import sick_leave as leave_service


def _leave(db, student_id, start="2025-01-01", end="2025-01-03", reason="Fever"):
    data = SickLeaveCreate(student_id=student_id, start_date=start, end_date=end, reason=reason)
    return leave_service.create_sick_leave(db, data, created_by="staff-1")


def test_duration_counts_both_ends():
    assert duration_days(date(2025, 1, 1), date(2025, 1, 3)) == 3
    assert duration_days(date(2025, 1, 1), date(2025, 1, 1)) == 1


def test_status_parsing_accepts_case_and_legacy_names():
    assert SickLeaveStatus("Approved") is SickLeaveStatus.APPROVED
    assert SickLeaveStatus("active") is SickLeaveStatus.PENDING
    assert SickLeaveStatus("completed") is SickLeaveStatus.APPROVED
    assert SickLeaveStatus("cancelled") is SickLeaveStatus.REJECTED
    with pytest.raises(ValueError):
        SickLeaveStatus("archived")


def test_new_leave_is_pending(db, make_student):
    student = make_student()

    leave = _leave(db, student.id)

    assert leave.status is SickLeaveStatus.PENDING
    assert leave.duration_days == 3
    assert leave.student_name == "Budi Santoso"


def test_end_before_start_is_rejected(db, make_student):
    student = make_student()
    with pytest.raises(ValidationError):
        _leave(db, student.id, start="2025-01-05", end="2025-01-03")


def test_unknown_student(db):
    with pytest.raises(NotFoundError):
        _leave(db, "missing")


def test_approved_leave_cannot_be_rejected(db, make_student):
    leave = _leave(db, make_student().id)

    leave_service.transition_sick_leave(db, leave.id, SickLeaveStatus.APPROVED)
    with pytest.raises(InvalidStateError):
        leave_service.transition_sick_leave(db, leave.id, SickLeaveStatus.REJECTED)

    assert leave_service.get_sick_leave(db, leave.id).status is SickLeaveStatus.APPROVED


def test_cannot_move_back_to_pending(db, make_student):
    leave = _leave(db, make_student().id)
    with pytest.raises(InvalidStateError):
        leave_service.transition_sick_leave(db, leave.id, SickLeaveStatus.PENDING)


def test_list_filters_and_order(db, make_student):
    budi = make_student()
    dewi = make_student(full_name="Dewi Lestari")
    early = _leave(db, budi.id, start="2025-01-01", end="2025-01-02")
    late = _leave(db, dewi.id, start="2025-02-01", end="2025-02-02")
    leave_service.transition_sick_leave(db, early.id, SickLeaveStatus.REJECTED)

    assert [leave.id for leave in leave_service.list_sick_leaves(db)] == [late.id, early.id]
    pending = leave_service.list_sick_leaves(db, status=SickLeaveStatus.PENDING)
    assert [leave.id for leave in pending] == [late.id]
    assert [leave.id for leave in leave_service.list_sick_leaves(db, student_id=budi.id)] == [early.id]


@pytest.mark.parametrize("student_ref", ["", "   "])
def test_student_is_required(db, student_ref):
    with pytest.raises(ValidationError) as excinfo:
        _leave(db, student_ref)
    assert excinfo.value.message == "Student is required"


def test_reason_is_required(db, make_student):
    with pytest.raises(ValidationError) as excinfo:
        _leave(db, make_student().id, reason="  ")
    assert excinfo.value.message == "Reason is required"
