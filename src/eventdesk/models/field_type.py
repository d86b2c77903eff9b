"""Enums for registration form fields"""

from enum import Enum


class FieldType(str, Enum):
    """Enum for form field types"""

    TEXT = "text"
    TEXTAREA = "textarea"
    EMAIL = "email"
    TEL = "tel"
    SELECT = "select"
    RADIO = "radio"
    CHECKBOX = "checkbox"

    @property
    def is_choice(self) -> bool:
        return self in CHOICE_TYPES

    @property
    def is_multi_choice(self) -> bool:
        return self == FieldType.CHECKBOX


CHOICE_TYPES = frozenset({FieldType.SELECT, FieldType.RADIO, FieldType.CHECKBOX})

# Implicit choice appended to option lists when a field has an "Other" option
OTHER_OPTION = "Other"
