from __future__ import annotations

import logging

from pydantic import ValidationError

from .errors import AdviceParseError
from .models.advice import RESPONSE_SCHEMA, PricingAdviceResponse, PricingSuggestion, ProfitAnalysis

logger = logging.getLogger(__name__)


def parse_advice(raw_text: str) -> PricingAdviceResponse:
    """Validate the model's JSON against the advice schema.

    Raises:
        AdviceParseError: malformed JSON or missing/invalid fields.
    """
    text = _strip_code_fence(raw_text)
    try:
        return RESPONSE_SCHEMA.model_validate_json(text)
    except ValidationError as exc:
        logger.error(
            "Pricing advice did not match the response schema",
            extra={"response": raw_text[:500], "error_count": exc.error_count()},
        )
        raise AdviceParseError(f"Invalid pricing advice response: {exc}") from exc


def assemble_suggestion(raw_text: str, *, base_cost: float) -> PricingSuggestion:
    advice = parse_advice(raw_text)
    prices = advice.suggested_prices
    profit = ProfitAnalysis(
        low_end_profit=prices.low_end - base_cost,
        market_rate_profit=prices.market_rate - base_cost,
        high_end_profit=prices.high_end - base_cost,
    )
    return PricingSuggestion(
        **advice.model_dump(),
        base_cost=base_cost,
        profit_analysis=profit,
    )


def _strip_code_fence(text: str) -> str:
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


__all__ = ["parse_advice", "assemble_suggestion"]
