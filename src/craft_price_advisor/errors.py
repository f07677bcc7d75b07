from __future__ import annotations


class PricingAdvisorError(Exception):
    """Base class for failures raised while producing pricing advice."""


class ImageEncodingError(PricingAdvisorError):
    """The uploaded photo could not be read in full."""


class AdviceServiceError(PricingAdvisorError):
    """The generative model returned no usable response."""


class AdviceParseError(PricingAdvisorError, ValueError):
    """The model response did not match the pricing advice schema."""


class InvalidTransition(PricingAdvisorError):
    pass


__all__ = [
    "PricingAdvisorError",
    "ImageEncodingError",
    "AdviceServiceError",
    "AdviceParseError",
    "InvalidTransition",
]
