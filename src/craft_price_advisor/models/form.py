from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..cost_calculator import compute_base_cost
from .advice import ImagePayload
from .material import MaterialEntry

FormField = Literal["item_name", "item_description", "hours", "minutes", "hourly_rate"]

DEFAULT_HOURLY_RATE = "20"


def _initial_materials() -> tuple[MaterialEntry, ...]:
    return (MaterialEntry(),)


class PricingForm(BaseModel):
    """Snapshot of everything the maker has typed into the form.

    The record is immutable; every user action produces a new instance
    (see ``form_actions``). Numeric inputs are kept as the raw text so the
    form can round-trip whatever was typed.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    item_name: str = ""
    item_description: str = ""
    materials: tuple[MaterialEntry, ...] = Field(default_factory=_initial_materials, min_length=1)
    hours: str = ""
    minutes: str = ""
    hourly_rate: str = DEFAULT_HOURLY_RATE
    item_image: ImagePayload | None = None

    @property
    def base_cost(self) -> float:
        return compute_base_cost(self.materials, self.hours, self.minutes, self.hourly_rate)


__all__ = ["PricingForm", "FormField", "DEFAULT_HOURLY_RATE"]
