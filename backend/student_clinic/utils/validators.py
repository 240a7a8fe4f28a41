import re
from typing import Optional

#Shared sanitisers used by the request schemas' field validators.
class SecureTextValidator:
    _TAGS = re.compile(r"<[^>]*>")
    _CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
    _WHITESPACE = re.compile(r"\s+")
    _PHONE = re.compile(r"^\+?[0-9][0-9\s\-()]{4,19}$")
    _CODE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9 ./_-]*$")

    MAX_NAME_LENGTH = 200
    MAX_NOTES_LENGTH = 5000

    @classmethod
    def _strip_markup(cls, value: str) -> str:
        value = cls._TAGS.sub("", value)
        return cls._CONTROL_CHARS.sub("", value)

    @classmethod
    def sanitize_name(cls, value: str) -> str:
        """Single-line text: markup removed, whitespace collapsed."""
        value = cls._WHITESPACE.sub(" ", cls._strip_markup(value)).strip()
        if len(value) > cls.MAX_NAME_LENGTH:
            raise ValueError(f"Must be at most {cls.MAX_NAME_LENGTH} characters")
        return value

    @classmethod
    def sanitize_notes(cls, value: str) -> str:
        value = cls._strip_markup(value).strip()
        if len(value) > cls.MAX_NOTES_LENGTH:
            raise ValueError(f"Must be at most {cls.MAX_NOTES_LENGTH} characters")
        return value

    @classmethod
    def validate_phone_field(cls, value: str) -> str:
        value = value.strip()
        if not cls._PHONE.match(value):
            raise ValueError("Invalid phone number")
        return value

    @classmethod
    def validate_code_field(cls, value: str) -> str:
        #institution ids and record numbers
        value = value.strip()
        if value and not cls._CODE.match(value):
            raise ValueError("May only contain letters, digits, spaces and . / _ -")
        return value


def optional_text(value: Optional[str]) -> Optional[str]:
    #blank optional fields are stored as NULL
    if value is None:
        return None
    value = SecureTextValidator.sanitize_notes(value)
    return value or None
