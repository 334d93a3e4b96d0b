"""
Base Model Components and Mixins

- WireModel: snake_case fields in Python, camelCase attribute names in the table
- TimestampMixin: normalises ``date`` fields to the canonical stored timestamp
"""

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from ..keys import normalize_timestamp


class WireModel(BaseModel):
    """
    Base for every domain model.

    Field names are snake_case; ``model_dump(by_alias=True)`` produces the
    camelCase attribute names used in stored records. Models accept either
    spelling on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    def to_payload(self, exclude=None) -> dict:
        """Dump the model with wire names, omitting unset optional values."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude=exclude)


class TimestampMixin(BaseModel):
    """
    Mixin keeping ``date`` fields in the one format range queries rely on.

    Accepts datetime objects or ISO-8601 strings and stores
    ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC, which sorts lexicographically in
    chronological order.
    """

    @field_validator('date', mode='before', check_fields=False)
    @classmethod
    def normalize_date(cls, v):
        if v is None:
            return v
        return normalize_timestamp(v)
