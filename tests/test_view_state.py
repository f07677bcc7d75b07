import pytest

from craft_price_advisor.errors import InvalidTransition
from craft_price_advisor.models.advice import PricingSuggestion
from craft_price_advisor.models.view import (
    ViewState,
    ViewStatus,
    begin_submission,
    complete_submission,
    fail_submission,
)


def suggestion() -> PricingSuggestion:
    return PricingSuggestion(
        suggested_prices={"low_end": 5, "market_rate": 8, "high_end": 12},
        pricing_rationale="Fair for the effort.",
        marketing_suggestions=["a", "b", "c"],
        base_cost=6,
        profit_analysis={"low_end_profit": -1, "market_rate_profit": 2, "high_end_profit": 6},
    )


def test_idle_to_success():
    state = complete_submission(begin_submission(ViewState()), suggestion())
    assert state.status is ViewStatus.success
    assert state.result.suggested_prices.high_end == 12


def test_error_to_loading_clears_message():
    failed = fail_submission(begin_submission(ViewState()), "nope")
    assert failed.status is ViewStatus.error

    retry = begin_submission(failed)
    assert retry.status is ViewStatus.loading
    assert retry.error is None


@pytest.mark.parametrize("status", [ViewStatus.idle, ViewStatus.success, ViewStatus.error])
def test_results_only_land_while_loading(status):
    state = ViewState(status=status)
    with pytest.raises(InvalidTransition):
        complete_submission(state, suggestion())
    with pytest.raises(InvalidTransition):
        fail_submission(state, "late")
