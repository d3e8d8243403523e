"""Canonical text rendering of snapshot models and sequences of them."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel


def render(items: Iterable[BaseModel]) -> str:
    """Render a sequence of models as a compact JSON list, preserving order."""
    return "[" + ",".join(str(item) for item in items) + "]"


def to_dict(model: BaseModel) -> dict[str, Any]:
    """Plain dict with the public key names, in rendering order."""
    return model.model_dump(mode="json", by_alias=True)


def to_json(items: Iterable[BaseModel], indent: int | None = None) -> str:
    """JSON document of ``items``; compact unless ``indent`` is given."""
    if indent is None:
        return render(items)
    return json.dumps([to_dict(item) for item in items], indent=indent)
