from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from ..errors import InvalidTransition
from .advice import PricingSuggestion


class ViewStatus(str, Enum):
    idle = "IDLE"
    loading = "LOADING"
    success = "SUCCESS"
    error = "ERROR"


class ViewState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: ViewStatus = ViewStatus.idle
    result: PricingSuggestion | None = None
    error: str | None = None


def begin_submission(state: ViewState) -> ViewState:
    """Enter loading, dropping whatever the previous submission left behind."""
    if state.status is ViewStatus.loading:
        raise InvalidTransition("A submission is already in flight")
    return ViewState(status=ViewStatus.loading)


def complete_submission(state: ViewState, result: PricingSuggestion) -> ViewState:
    _require_loading(state, "complete")
    return ViewState(status=ViewStatus.success, result=result)


def fail_submission(state: ViewState, message: str) -> ViewState:
    _require_loading(state, "fail")
    return ViewState(status=ViewStatus.error, error=message)


def _require_loading(state: ViewState, action: str) -> None:
    if state.status is not ViewStatus.loading:
        raise InvalidTransition(f"Cannot {action} a submission from {state.status.value}")


__all__ = [
    "ViewStatus",
    "ViewState",
    "begin_submission",
    "complete_submission",
    "fail_submission",
]
