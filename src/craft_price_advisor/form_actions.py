from __future__ import annotations

import logging
from typing import get_args

from .models.advice import ImagePayload
from .models.form import FormField, PricingForm
from .models.material import MaterialEntry, MaterialField

logger = logging.getLogger(__name__)

_MATERIAL_FIELDS = frozenset(get_args(MaterialField))
_FORM_FIELDS = frozenset(get_args(FormField))


def add_material(form: PricingForm) -> PricingForm:
    return form.model_copy(update={"materials": (*form.materials, MaterialEntry())})


def edit_material(form: PricingForm, index: int, field: str, value: str) -> PricingForm:
    if field not in _MATERIAL_FIELDS:
        raise ValueError(f"Unknown material field: {field}")
    materials = list(form.materials)
    current = materials[_checked_index(materials, index)]
    materials[index] = current.model_copy(update={field: value})
    return form.model_copy(update={"materials": tuple(materials)})


def remove_material(form: PricingForm, index: int) -> PricingForm:
    """Drop the material at ``index``; the last remaining row is never removed."""
    if len(form.materials) <= 1:
        logger.debug("Ignoring removal of the only material row")
        return form
    materials = list(form.materials)
    del materials[_checked_index(materials, index)]
    return form.model_copy(update={"materials": tuple(materials)})


def update_field(form: PricingForm, field: str, value: str) -> PricingForm:
    if field not in _FORM_FIELDS:
        raise ValueError(f"Unknown form field: {field}")
    return form.model_copy(update={field: value})


def set_item_image(form: PricingForm, image: ImagePayload | None) -> PricingForm:
    return form.model_copy(update={"item_image": image})


def can_submit(form: PricingForm) -> bool:
    return bool(form.item_name.strip()) and bool(form.item_description.strip()) and form.base_cost > 0


def _checked_index(materials: list[MaterialEntry], index: int) -> int:
    # Negative indexes would silently address rows from the end.
    if not 0 <= index < len(materials):
        raise IndexError(f"Material index out of range: {index}")
    return index


__all__ = ["add_material", "edit_material", "remove_material", "update_field", "set_item_image", "can_submit"]
