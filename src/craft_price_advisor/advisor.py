from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Protocol

from .advice_request import AdviceRequest, build_advice_request, build_pricing_request
from .form_actions import can_submit
from .image_encoder import ImageUpload, encode_image, has_image
from .logging_config import set_trace_id
from .models.form import PricingForm
from .models.view import ViewState, begin_submission, complete_submission, fail_submission
from .result_assembler import assemble_suggestion

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = (
    "An error occurred while fetching pricing advice. Please check your inputs and try again."
)


class AdviceClient(Protocol):
    def generate_advice(self, advice_request: AdviceRequest) -> str:
        ...


class PricingAdvisor:
    """Runs one form submission from photo encoding through to the rendered result."""

    def __init__(self, *, client: AdviceClient, error_message: str = GENERIC_ERROR_MESSAGE) -> None:
        self._client = client
        self._error_message = error_message

    @property
    def error_message(self) -> str:
        return self._error_message

    async def submit(
        self,
        form: PricingForm,
        *,
        image_file: ImageUpload | None = None,
        previous: ViewState | None = None,
    ) -> ViewState:
        """Request pricing advice for ``form``.

        A form that is not ready for submission leaves ``previous`` untouched.
        Every failure after that point is logged and reported through the
        generic error message.

        Args:
            form: Current form contents
            image_file: Newly uploaded photo; replaces the one already on the form
            previous: State shown before this submission

        Returns:
            The success or error state for this submission
        """
        if previous is None:
            previous = ViewState()
        if not can_submit(form):
            logger.debug("Submission blocked by incomplete form")
            return previous

        set_trace_id(uuid.uuid4().hex)
        state = begin_submission(previous)
        base_cost = form.base_cost
        logger.info(
            "Requesting pricing advice",
            extra={
                "item_name": form.item_name,
                "materials": len(form.materials),
                "base_cost": round(base_cost, 2),
                "with_image": form.item_image is not None or has_image(image_file),
            },
        )

        try:
            image = form.item_image
            if has_image(image_file):
                image = await encode_image(image_file)
            pricing_request = build_pricing_request(form, image=image)
            advice_request = build_advice_request(pricing_request)
            raw_text = await asyncio.to_thread(self._client.generate_advice, advice_request)
            suggestion = assemble_suggestion(raw_text, base_cost=pricing_request.base_cost)
        except Exception as exc:
            logger.error(
                "Failed to fetch pricing advice",
                exc_info=True,
                extra={"error_type": type(exc).__name__},
            )
            return fail_submission(state, self._error_message)

        return complete_submission(state, suggestion)


__all__ = ["PricingAdvisor", "AdviceClient", "GENERIC_ERROR_MESSAGE"]
