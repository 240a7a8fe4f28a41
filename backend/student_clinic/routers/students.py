from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Optional

from ..database import get_db
from ..schemas.auth import CurrentUser
from ..schemas.student import StudentCreate, StudentUpdate, StudentEnvelope, StudentListEnvelope
from ..services import students as student_service
from ..utils.deps import get_current_user
from ..utils.errors import failure_boundary

router = APIRouter(prefix="/students", tags=["students"])

#Register a new student
@router.post("", response_model=StudentEnvelope)
def register_student(
    student_data: StudentCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Register a student and assign the next record number."""
    with failure_boundary("create student", db):
        student = student_service.register_student(db, student_data)
    return StudentEnvelope(student=student)

#List students, newest first
@router.get("", response_model=StudentListEnvelope)
def list_students(
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    with failure_boundary("get students", db):
        students = student_service.list_students(db, search=search)
    return StudentListEnvelope(students=students)

#Get student details
@router.get("/{student_id}", response_model=StudentEnvelope)
def get_student(
    student_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    with failure_boundary("get student", db):
        student = student_service.get_student(db, student_id)
    return StudentEnvelope(student=student)

#Update student info
@router.put("/{student_id}", response_model=StudentEnvelope)
def update_student(
    student_id: str,
    student_update: StudentUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Merge the supplied fields over the stored student."""
    with failure_boundary("update student", db):
        student = student_service.update_student(db, student_id, student_update)
    return StudentEnvelope(student=student)
