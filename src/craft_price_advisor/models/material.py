from __future__ import annotations

import uuid
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

MaterialField = Literal["name", "cost"]


def new_material_id() -> str:
    return uuid.uuid4().hex


class MaterialEntry(BaseModel):
    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: str = Field(default_factory=new_material_id)
    name: str = ""
    cost: str = Field(default="", description="Cost as typed into the form; parsed leniently")


__all__ = ["MaterialEntry", "MaterialField", "new_material_id"]
