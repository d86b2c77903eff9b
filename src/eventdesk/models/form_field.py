"""FormField model for registration form questions"""

import uuid
from typing import List, Optional

from pydantic import field_validator, model_validator

from eventdesk.models.base import CamelModel
from eventdesk.models.field_type import FieldType


class FormField(CamelModel):
    """One question in a registration form.

    ``options`` and ``has_other_option`` only carry meaning for choice
    variants and are cleared whenever the field is a non-choice type.
    """

    id: str
    type: FieldType = FieldType.TEXT
    label: str = ""
    placeholder: Optional[str] = None
    required: bool = False
    options: Optional[List[str]] = None
    has_other_option: bool = False

    @field_validator("has_other_option", mode="before")
    @classmethod
    def _none_is_false(cls, v):
        return False if v is None else v

    @model_validator(mode="after")
    def _drop_choice_attributes(self):
        if not self.type.is_choice:
            self.options = None
            self.has_other_option = False
        return self


def generate_field_id(existing=()) -> str:
    """Generate a short random field id that is not already in ``existing``"""
    taken = set(existing)
    while True:
        field_id = uuid.uuid4().hex[:8]
        if field_id not in taken:
            return field_id
