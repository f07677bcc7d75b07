from __future__ import annotations

from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .material import MaterialEntry


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ImagePayload(_CamelModel):
    mime_type: str
    data: str = Field(description="Base64 encoding of the complete image file")


class PricingRequest(_CamelModel):
    item_name: str
    item_description: str
    materials: Sequence[MaterialEntry]
    hours: str
    minutes: str
    hourly_rate: str
    base_cost: float
    item_image: ImagePayload | None = None


class SuggestedPrices(_CamelModel):
    low_end: float = Field(description="A budget-friendly price point to attract entry-level buyers.")
    market_rate: float = Field(description="A fair market price, balancing cost, effort, and value.")
    high_end: float = Field(description="A premium price for high-quality craftsmanship or unique appeal.")


class PricingAdviceResponse(_CamelModel):
    """Structured output requested from the model.

    The same class is sent as the response schema and used to validate the
    returned text.
    """

    suggested_prices: SuggestedPrices
    pricing_rationale: str = Field(
        description=(
            "A detailed explanation for the suggested prices, considering materials, labor, "
            "market trends, and the item's perceived value from its description and photo."
        )
    )
    marketing_suggestions: list[str] = Field(
        description="A list of 3-4 actionable marketing tips to help sell the item, tailored to the product type."
    )


class ProfitAnalysis(_CamelModel):
    low_end_profit: float
    market_rate_profit: float
    high_end_profit: float


class PricingSuggestion(PricingAdviceResponse):
    base_cost: float
    profit_analysis: ProfitAnalysis


RESPONSE_SCHEMA = PricingAdviceResponse


__all__ = [
    "ImagePayload",
    "PricingRequest",
    "SuggestedPrices",
    "PricingAdviceResponse",
    "ProfitAnalysis",
    "PricingSuggestion",
    "RESPONSE_SCHEMA",
]
