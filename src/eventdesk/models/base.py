"""Base model for records exchanged with clients as camelCase JSON"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from eventdesk.errors import ValidationError


def pydantic_errors(exc: PydanticValidationError) -> List[dict]:
    """Flatten a pydantic error into ``{"field_id", "message"}`` entries"""
    return [
        {
            "field_id": ".".join(str(part) for part in err["loc"]) or None,
            "message": err["msg"],
        }
        for err in exc.errors()
    ]


class CamelModel(BaseModel):
    """Pydantic model with snake_case attributes and camelCase JSON keys.

    Accepts either spelling on input; dumps camelCase with ``by_alias=True``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @classmethod
    def key_aliases(cls) -> Dict[str, str]:
        """Map both attribute names and camelCase aliases to the alias"""
        aliases = {}
        for name, info in cls.model_fields.items():
            alias = info.alias or name
            aliases[name] = alias
            aliases[alias] = alias
        return aliases

    def merged(self, patch: Dict[str, Any]):
        """Return a validated copy with ``patch`` shallow-merged in.

        Keys absent from ``patch`` keep their current value. Unknown keys and
        invalid values raise ``ValidationError``.
        """
        aliases = self.key_aliases()
        unknown = sorted(key for key in patch if key not in aliases)
        if unknown:
            raise ValidationError(
                f"Unknown setting(s): {', '.join(unknown)}",
                errors=[
                    {"field_id": key, "message": "Unknown setting"} for key in unknown
                ],
            )

        data = self.model_dump(by_alias=True)
        for key, value in patch.items():
            data[aliases[key]] = value

        try:
            return type(self).model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid {type(self).__name__} values", errors=pydantic_errors(e)
            )
