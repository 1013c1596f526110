from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, Field, field_validator

ID_FIELD = "id"


class Record(BaseModel):
    """
    Internal envelope for one document. `fields` never carries the reserved id;
    the flattened form is what callers and the persisted JSON see:
      { "<field>": <value>, ..., "id": "<id>" }
    """

    id: str = Field(min_length=1)
    fields: dict[str, Any] = Field(default_factory=dict)

    @field_validator("fields")
    @classmethod
    def _no_reserved_id(cls, value: dict[str, Any]) -> dict[str, Any]:
        if ID_FIELD in value:
            raise ValueError("fields must not contain the reserved 'id' key")
        return value

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "Record":
        fields = {k: v for k, v in doc.items() if k != ID_FIELD}
        return cls.model_validate({"id": doc.get(ID_FIELD), "fields": fields})

    def to_document(self) -> dict[str, Any]:
        return {**self.fields, ID_FIELD: self.id}
