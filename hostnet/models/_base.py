"""Shared base for snapshot models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class SnapshotModel(BaseModel):
    """Immutable value snapshot with a canonical compact text form.

    ``str()`` renders compact JSON using the public key names, in field
    declaration order. That order is part of the rendering contract, so
    fields must never be reordered.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def __str__(self) -> str:
        return self.model_dump_json(by_alias=True)
