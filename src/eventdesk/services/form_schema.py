"""Form schema operations: editing field lists, rendering and answer checks.

Every ``FieldType`` has exactly one renderer and one answer validator,
registered in ``RENDERERS`` and ``VALIDATORS``. Callers dispatch through
``render_field`` / ``validate_answer`` instead of inspecting types ad hoc.
"""

import re
from typing import Any, Callable, Dict, List, Optional

from eventdesk.errors import ValidationError
from eventdesk.models.base import CamelModel
from eventdesk.models.field_type import OTHER_OPTION, FieldType
from eventdesk.models.form_field import FormField, generate_field_id

DEFAULT_FIELD_LABEL = "New question"
MAX_TEXT_LENGTH = 250
MAX_TEXTAREA_LENGTH = 5000

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_PHONE_RE = re.compile(r"^\+?[0-9(][0-9\s().-]{5,}$")


class RenderedField(CamelModel):
    """Input descriptor handed to clients that draw the registration form"""

    id: str
    label: str
    placeholder: Optional[str] = None
    required: bool = False
    widget: str
    input_type: Optional[str] = None
    options: List[str] = []
    other_option: Optional[str] = None


# Editing


def add_field(fields: List[FormField]) -> List[FormField]:
    """Append a new optional single-line text question"""
    new_field = FormField(
        id=generate_field_id(f.id for f in fields),
        type=FieldType.TEXT,
        label=DEFAULT_FIELD_LABEL,
        required=False,
    )
    return [*fields, new_field]


def update_field(
    fields: List[FormField], field_id: str, changes: Dict[str, Any]
) -> List[FormField]:
    """Merge ``changes`` into the field with ``field_id``.

    Missing ids are a no-op. The id itself is immutable, so an ``id`` key in
    ``changes`` is ignored.
    """
    changes = {k: v for k, v in changes.items() if k != "id"}
    return [f.merged(changes) if f.id == field_id else f for f in fields]


def remove_field(fields: List[FormField], field_id: str) -> List[FormField]:
    """Drop the field with ``field_id``; missing ids are a no-op"""
    return [f for f in fields if f.id != field_id]


def parse_options(raw_csv: str) -> List[str]:
    """Split an admin-typed comma separated option list.

    Entries are trimmed and blank entries (e.g. from a trailing comma) are
    dropped.
    """
    if not raw_csv:
        return []
    return [part.strip() for part in raw_csv.split(",") if part.strip()]


def check_schema(fields: List[FormField]) -> None:
    """Verify a field list can be rendered.

    Raises:
        ValidationError: duplicate ids or a choice field without options
    """
    errors = []
    seen = set()
    for field in fields:
        if field.id in seen:
            errors.append({"field_id": field.id, "message": "Duplicate field id"})
        seen.add(field.id)
        if field.type.is_choice and not field.options:
            errors.append(
                {
                    "field_id": field.id,
                    "message": f"{field.label or field.id} needs at least one option",
                }
            )
    if errors:
        raise ValidationError("Registration form is incomplete", errors=errors)


# Rendering


def _choices(field: FormField) -> List[str]:
    options = list(field.options or [])
    if field.has_other_option:
        options.append(OTHER_OPTION)
    return options


def _render_input(input_type: str) -> Callable[[FormField], RenderedField]:
    def render(field: FormField) -> RenderedField:
        return RenderedField(
            id=field.id,
            label=field.label,
            placeholder=field.placeholder,
            required=field.required,
            widget="input",
            input_type=input_type,
        )

    return render


def _render_textarea(field: FormField) -> RenderedField:
    return RenderedField(
        id=field.id,
        label=field.label,
        placeholder=field.placeholder,
        required=field.required,
        widget="textarea",
    )


def _render_choice(widget: str) -> Callable[[FormField], RenderedField]:
    def render(field: FormField) -> RenderedField:
        return RenderedField(
            id=field.id,
            label=field.label,
            required=field.required,
            widget=widget,
            options=_choices(field),
            other_option=OTHER_OPTION if field.has_other_option else None,
        )

    return render


RENDERERS: Dict[FieldType, Callable[[FormField], RenderedField]] = {
    FieldType.TEXT: _render_input("text"),
    FieldType.TEXTAREA: _render_textarea,
    FieldType.EMAIL: _render_input("email"),
    FieldType.TEL: _render_input("tel"),
    FieldType.SELECT: _render_choice("select"),
    FieldType.RADIO: _render_choice("radio"),
    FieldType.CHECKBOX: _render_choice("checkbox"),
}


def render_field(field: FormField) -> RenderedField:
    """Describe how a field is drawn; "Other" is appended when enabled"""
    return RENDERERS[field.type](field)


def render_form(fields: List[FormField]) -> List[RenderedField]:
    check_schema(fields)
    return [render_field(f) for f in fields]


# Answer validation


def _validate_text(max_length: int):
    def validate(field: FormField, value: Any, other_text: str) -> Optional[str]:
        if not isinstance(value, str):
            return f"{field.label} must be text"
        if len(value) > max_length:
            return f"{field.label} must be fewer than {max_length} characters"
        return None

    return validate


def _validate_email(field: FormField, value: Any, other_text: str) -> Optional[str]:
    if not isinstance(value, str) or not _EMAIL_RE.match(value.strip()):
        return f"{field.label} must be a valid email address"
    return None


def _validate_phone(field: FormField, value: Any, other_text: str) -> Optional[str]:
    if not isinstance(value, str) or not _PHONE_RE.match(value.strip()):
        return f"{field.label} must be a valid phone number"
    return None


def _validate_single_choice(
    field: FormField, value: Any, other_text: str
) -> Optional[str]:
    if not isinstance(value, str):
        return f"{field.label} accepts a single option"
    if value not in _choices(field):
        return f"Invalid option for {field.label}"
    if value == OTHER_OPTION and not other_text.strip():
        return f"Please specify a value for {field.label}"
    return None


def _validate_multi_choice(
    field: FormField, value: Any, other_text: str
) -> Optional[str]:
    if not isinstance(value, list):
        return f"{field.label} accepts a list of options"
    allowed = _choices(field)
    if any(v not in allowed for v in value):
        return f"Invalid option for {field.label}"
    if len(set(value)) != len(value):
        return f"Options for {field.label} must not repeat"
    if OTHER_OPTION in value and not other_text.strip():
        return f"Please specify a value for {field.label}"
    return None


VALIDATORS: Dict[FieldType, Callable[[FormField, Any, str], Optional[str]]] = {
    FieldType.TEXT: _validate_text(MAX_TEXT_LENGTH),
    FieldType.TEXTAREA: _validate_text(MAX_TEXTAREA_LENGTH),
    FieldType.EMAIL: _validate_email,
    FieldType.TEL: _validate_phone,
    FieldType.SELECT: _validate_single_choice,
    FieldType.RADIO: _validate_single_choice,
    FieldType.CHECKBOX: _validate_multi_choice,
}


def is_blank(value: Any) -> bool:
    """True for missing, whitespace-only or empty multi-choice answers"""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def validate_answer(
    field: FormField, value: Any, other_text: str = ""
) -> Optional[str]:
    """Return an error message for a non-blank answer, or None when valid.

    Blank answers are not checked here; required-ness is enforced by the
    registration assembler.
    """
    if is_blank(value):
        return None
    return VALIDATORS[field.type](field, value, other_text or "")
