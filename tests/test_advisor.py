import asyncio
import base64
import json
from pathlib import Path

import pytest

from craft_price_advisor.advisor import GENERIC_ERROR_MESSAGE, PricingAdvisor
from craft_price_advisor.errors import InvalidTransition
from craft_price_advisor.models.advice import ImagePayload
from craft_price_advisor.models.form import PricingForm
from craft_price_advisor.models.material import MaterialEntry
from craft_price_advisor.models.view import ViewState, ViewStatus, begin_submission

SCARF_ADVICE = (Path(__file__).resolve().parents[1] / "data" / "responses" / "scarf_advice.json").read_text(
    encoding="utf-8"
)


class FakeAdviceClient:
    def __init__(self, *, text: str = SCARF_ADVICE, error: Exception | None = None) -> None:
        self.requests = []
        self._text = text
        self._error = error

    def generate_advice(self, advice_request) -> str:
        self.requests.append(advice_request)
        if self._error:
            raise self._error
        return self._text


class FakeUpload:
    def __init__(self, data: bytes, *, fail: bool = False) -> None:
        self.filename = "scarf.png"
        self.content_type = "image/png"
        self._data = data
        self._fail = fail

    async def read(self, size: int = -1) -> bytes:
        if self._fail:
            raise OSError("read failed")
        return self._data


def scarf_form(**overrides) -> PricingForm:
    values = {
        "item_name": "Scarf",
        "item_description": "Hand-knitted wool scarf",
        "materials": (MaterialEntry(name="Yarn", cost="10.00"),),
        "hours": "2",
        "minutes": "30",
        "hourly_rate": "20",
    }
    values.update(overrides)
    return PricingForm(**values)


def test_scarf_submission_end_to_end():
    client = FakeAdviceClient()
    state = asyncio.run(PricingAdvisor(client=client).submit(scarf_form()))

    assert state.status is ViewStatus.success
    assert state.error is None
    assert state.result.base_cost == pytest.approx(60.0)
    profit = state.result.profit_analysis
    assert (profit.low_end_profit, profit.market_rate_profit, profit.high_end_profit) == pytest.approx((-10, 20, 60))
    assert len(client.requests) == 1


def test_blocked_form_keeps_previous_state_and_skips_the_call():
    client = FakeAdviceClient()
    advisor = PricingAdvisor(client=client)
    previous = ViewState(status=ViewStatus.error, error="earlier failure")

    state = asyncio.run(advisor.submit(scarf_form(item_description="  "), previous=previous))

    assert state is previous
    assert client.requests == []


def test_malformed_response_clears_prior_result():
    advisor = PricingAdvisor(client=FakeAdviceClient())
    success = asyncio.run(advisor.submit(scarf_form()))

    broken = PricingAdvisor(client=FakeAdviceClient(text=json.dumps({"pricingRationale": "x"})))
    state = asyncio.run(broken.submit(scarf_form(), previous=success))

    assert state.status is ViewStatus.error
    assert state.result is None
    assert state.error == GENERIC_ERROR_MESSAGE


def test_service_failure_surfaces_generic_error():
    client = FakeAdviceClient(error=ConnectionError("network down"))
    state = asyncio.run(PricingAdvisor(client=client).submit(scarf_form()))

    assert state.status is ViewStatus.error
    assert state.error == GENERIC_ERROR_MESSAGE
    assert len(client.requests) == 1


def test_image_is_encoded_before_the_request_is_built():
    client = FakeAdviceClient()
    upload = FakeUpload(b"\x89PNG fake")

    state = asyncio.run(PricingAdvisor(client=client).submit(scarf_form(), image_file=upload))

    assert state.status is ViewStatus.success
    image_part, text_part = client.requests[0].contents
    assert image_part.inline_data.data == b"\x89PNG fake"
    assert "Scarf" in text_part.text


def test_photo_carried_on_the_form_is_sent():
    client = FakeAdviceClient()
    image = ImagePayload(mime_type="image/jpeg", data=base64.b64encode(b"jpeg bytes").decode("ascii"))

    state = asyncio.run(PricingAdvisor(client=client).submit(scarf_form(item_image=image)))

    assert state.status is ViewStatus.success
    image_part, _ = client.requests[0].contents
    assert image_part.inline_data.mime_type == "image/jpeg"
    assert image_part.inline_data.data == b"jpeg bytes"


def test_new_upload_replaces_the_carried_photo():
    client = FakeAdviceClient()
    image = ImagePayload(mime_type="image/jpeg", data=base64.b64encode(b"old").decode("ascii"))

    asyncio.run(PricingAdvisor(client=client).submit(scarf_form(item_image=image), image_file=FakeUpload(b"new")))

    image_part, _ = client.requests[0].contents
    assert image_part.inline_data.mime_type == "image/png"
    assert image_part.inline_data.data == b"new"

def test_image_read_failure_never_reaches_the_client():
    client = FakeAdviceClient()
    state = asyncio.run(
        PricingAdvisor(client=client).submit(scarf_form(), image_file=FakeUpload(b"", fail=True))
    )

    assert state.status is ViewStatus.error
    assert state.error == GENERIC_ERROR_MESSAGE
    assert client.requests == []


def test_new_submission_from_success_clears_the_old_result():
    success = asyncio.run(PricingAdvisor(client=FakeAdviceClient()).submit(scarf_form()))
    loading = begin_submission(success)

    assert loading.status is ViewStatus.loading
    assert loading.result is None
    assert loading.error is None


def test_only_one_submission_can_be_in_flight():
    loading = begin_submission(ViewState())
    with pytest.raises(InvalidTransition):
        begin_submission(loading)
