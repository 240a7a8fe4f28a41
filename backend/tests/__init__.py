# tests/__init__.py
# Request bodies shared by the service and API tests.


def student_payload(**overrides):
    payload = {
        "full_name": "Budi Santoso",
        "institution_id": "NIS-2024",
        "date_of_birth": "2010-05-01",
        "gender": "male",
        "grade": "8B",
        "emergency_contact_name": "Siti Santoso",
        "emergency_contact_phone": "+62 812 3456 7890",
    }
    payload.update(overrides)
    return payload
