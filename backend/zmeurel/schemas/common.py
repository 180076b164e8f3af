"""Fields shared by every farm record response, and the PATCH body base."""

from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, model_validator


class RecordOut(BaseModel):
    """id/tenant_id/display_id/created_at are assigned once and never change."""
    id: str
    tenant_id: str
    display_id: str
    created_at: datetime

    model_config = {"from_attributes": True}


class RecordUpdate(BaseModel):
    """Partial update body: omitted fields keep their stored value.

    Fields named in ``not_nullable`` map to NOT NULL columns; sending them
    as an explicit ``null`` is a validation error rather than a write.
    """
    not_nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_null_required(self):
        nulls = [
            name for name in self.not_nullable
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulls:
            raise ValueError(f"{', '.join(nulls)} cannot be null")
        return self


class NextDisplayIdOut(BaseModel):
    entity: str
    display_id: str
