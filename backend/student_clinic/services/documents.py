"""Printable documents rendered from stored records.

Both renderers are pure: they read the objects they are given and return a
self-contained HTML page that opens the browser's print dialog on load.
"""
from datetime import date
from typing import Optional

from jinja2 import Environment, PackageLoader, select_autoescape

from ..config import settings
from ..models.medical_record import MedicalRecord
from ..models.sick_leave import SickLeave
from ..models.student import Student

_env = Environment(
    loader=PackageLoader("student_clinic", "templates"),
    autoescape=select_autoescape(["html"]),
)


def _format_date(value: Optional[date]) -> str:
    return value.strftime("%d %B %Y") if value else ""


_env.filters["long_date"] = _format_date


def render_permission_letter(
    record: MedicalRecord,
    student: Student,
    issued_on: Optional[date] = None,
    clinic_name: Optional[str] = None,
) -> str:
    template = _env.get_template("permission_letter.html")
    return template.render(
        record=record,
        student=student,
        issued_on=issued_on or date.today(),
        clinic_name=clinic_name or settings.clinic_name,
    )


def render_sick_leave_certificate(
    leave: SickLeave,
    student: Student,
    issued_on: Optional[date] = None,
    clinic_name: Optional[str] = None,
) -> str:
    template = _env.get_template("sick_leave_certificate.html")
    return template.render(
        leave=leave,
        student=student,
        issued_on=issued_on or date.today(),
        clinic_name=clinic_name or settings.clinic_name,
    )
