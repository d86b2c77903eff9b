"""Registration assembler: draft form state to a finalized answer record"""

import logging
from typing import Dict, List, Optional

from eventdesk.errors import ValidationError
from eventdesk.models.field_type import OTHER_OPTION
from eventdesk.models.form_field import FormField
from eventdesk.models.project_config import TermsConfig
from eventdesk.models.registration import AnswerValue, RegistrationDraft
from eventdesk.services.form_schema import is_blank, validate_answer

logger = logging.getLogger(__name__)

PRIVACY_AGREEMENT_ID = "privacy"


def compose_other(other_text: str) -> str:
    return f"{OTHER_OPTION}: {other_text.strip()}"


class RegistrationAssembler:
    """Collects answers for a form and turns them into a registration record.

    The assembler only edits its draft through the setter methods;
    ``validate`` and ``finalize`` never modify it.
    """

    def __init__(
        self,
        fields: List[FormField],
        terms: Optional[TermsConfig] = None,
        draft: Optional[RegistrationDraft] = None,
    ):
        self.fields = list(fields)
        self.terms = terms or TermsConfig()
        self.draft = draft.model_copy(deep=True) if draft else RegistrationDraft()
        self._by_id = {f.id: f for f in self.fields}

    def set_value(self, field_id: str, value: AnswerValue) -> None:
        field = self._by_id.get(field_id)
        if field is not None and field.type.is_multi_choice:
            if isinstance(value, str):
                value = [value] if value else []
            # Ordered set: keep first occurrence
            value = list(dict.fromkeys(value))
        self.draft.values[field_id] = value

    def toggle_choice(self, field_id: str, option: str, selected: bool) -> None:
        """Add or remove ``option`` from a multi-choice answer"""
        current = self.draft.values.get(field_id)
        choices = list(current) if isinstance(current, list) else []
        if selected and option not in choices:
            choices.append(option)
        elif not selected:
            choices = [c for c in choices if c != option]
        self.draft.values[field_id] = choices

    def set_other_text(self, field_id: str, text: str) -> None:
        self.draft.other_text[field_id] = text

    def set_agreement(
        self, privacy: Optional[bool] = None, marketing: Optional[bool] = None
    ) -> None:
        if privacy is not None:
            self.draft.privacy_agreed = privacy
        if marketing is not None:
            self.draft.marketing_agreed = marketing

    def validate(self) -> None:
        """Check required answers, per-type answer rules and consent.

        Raises:
            ValidationError: with one entry per failed condition
        """
        errors = []
        for field in self.fields:
            value = self.draft.values.get(field.id)
            if is_blank(value):
                if field.required:
                    errors.append(
                        {"field_id": field.id, "message": f"{field.label} is required"}
                    )
                continue
            message = validate_answer(
                field, value, self.draft.other_text.get(field.id, "")
            )
            if message:
                errors.append({"field_id": field.id, "message": message})

        if self.terms.require_privacy and not self.draft.privacy_agreed:
            errors.append(
                {
                    "field_id": PRIVACY_AGREEMENT_ID,
                    "message": "You must agree to the collection and use of personal information",
                }
            )

        if errors:
            logger.info(f"Registration draft failed validation: {len(errors)} problem(s)")
            raise ValidationError(
                "; ".join(e["message"] for e in errors), errors=errors
            )

    def finalize(self) -> Dict[str, AnswerValue]:
        """Build the answers mapping for persistence.

        A selected "Other" choice becomes ``"Other: <free text>"``; for
        multi-choice answers only that entry is replaced and selection order
        is kept. Every other answer is passed through unchanged; ids outside
        the schema are left out.
        """
        answers: Dict[str, AnswerValue] = {}
        for field in self.fields:
            if field.id not in self.draft.values:
                continue
            value = self.draft.values[field.id]

            other_text = self.draft.other_text.get(field.id, "")
            compose = field.has_other_option and bool(other_text.strip())

            if isinstance(value, list):
                answers[field.id] = [
                    compose_other(other_text) if compose and v == OTHER_OPTION else v
                    for v in value
                ]
            elif compose and value == OTHER_OPTION:
                answers[field.id] = compose_other(other_text)
            else:
                answers[field.id] = value
        return answers

    def assemble(self) -> Dict[str, AnswerValue]:
        """Validate, then finalize. Nothing is returned for an invalid draft."""
        self.validate()
        return self.finalize()
