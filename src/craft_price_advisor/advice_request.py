from __future__ import annotations

import base64
from dataclasses import dataclass

from google.genai import types

from .cost_calculator import parse_amount, total_material_cost
from .models.advice import RESPONSE_SCHEMA, ImagePayload, PricingAdviceResponse, PricingRequest
from .models.form import PricingForm


@dataclass(frozen=True)
class AdviceRequest:
    prompt: str
    contents: list[types.Part]
    response_schema: type[PricingAdviceResponse] = RESPONSE_SCHEMA


def build_pricing_request(form: PricingForm, image: ImagePayload | None = None) -> PricingRequest:
    return PricingRequest(
        item_name=form.item_name,
        item_description=form.item_description,
        materials=form.materials,
        hours=form.hours,
        minutes=form.minutes,
        hourly_rate=form.hourly_rate,
        base_cost=form.base_cost,
        item_image=image if image is not None else form.item_image,
    )


def build_prompt(request: PricingRequest) -> str:
    material_lines = "\n".join(
        f"    - {material.name}: ${parse_amount(material.cost):.2f}" for material in request.materials
    )
    material_total = total_material_cost(request.materials)
    time_spent = f"{request.hours.strip() or 0} hours and {request.minutes.strip() or 0} minutes"

    return f"""As an expert e-commerce consultant specializing in handcrafted goods, provide a detailed pricing analysis for the following item.

**Item Details:**
- **Name:** {request.item_name}
- **Description:** {request.item_description}

**Cost Analysis:**
- **Materials Used:**
{material_lines}
- **Total Material Cost:** ${material_total:.2f}
- **Time Spent:** {time_spent}
- **Crafter's Desired Hourly Rate:** ${parse_amount(request.hourly_rate):.2f}
- **Calculated Base Cost (Materials + Labor):** ${request.base_cost:.2f}

Based on all this information (and the provided image, if any), please generate a pricing suggestion. Consider the item's uniqueness, potential market, quality suggested by the description, and overall appeal. Provide a thoughtful rationale and actionable marketing tips.
"""


def build_advice_request(request: PricingRequest) -> AdviceRequest:
    """Assemble the content parts for one submission.

    The photo, when present, goes before the text prompt.
    """
    prompt = build_prompt(request)
    contents: list[types.Part] = []
    if request.item_image is not None:
        contents.append(
            types.Part.from_bytes(
                data=base64.b64decode(request.item_image.data),
                mime_type=request.item_image.mime_type,
            )
        )
    contents.append(types.Part.from_text(text=prompt))
    return AdviceRequest(prompt=prompt, contents=contents)


__all__ = ["AdviceRequest", "build_pricing_request", "build_prompt", "build_advice_request"]
