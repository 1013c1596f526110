from __future__ import annotations

import pytest
from pydantic import ValidationError

from docstore.records import Record


def test_envelope_flattens_with_id():
    rec = Record.from_document({"name": "Ada", "id": "abc"})
    assert rec.id == "abc"
    assert rec.fields == {"name": "Ada"}
    assert rec.to_document() == {"name": "Ada", "id": "abc"}


def test_fields_cannot_carry_id():
    with pytest.raises(ValidationError):
        Record(id="abc", fields={"id": "other"})


def test_id_is_required():
    with pytest.raises(ValidationError):
        Record.from_document({"name": "Ada"})
    with pytest.raises(ValidationError):
        Record(id="", fields={})
