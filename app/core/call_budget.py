"""Per-request ceilings for external provider calls."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum


class CallType(StrEnum):
    """External call categories tracked per request."""

    PLACES_SEARCH = "places_search"
    PLACE_DETAILS = "place_details"
    ROUTES = "routes"


CALL_BUDGET_LIMITS: dict[CallType, int] = {
    CallType.PLACES_SEARCH: 3,
    CallType.PLACE_DETAILS: 6,
    CallType.ROUTES: 2,
}


class CallBudgetExceededError(RuntimeError):
    """Raised when a call would exceed its per-request ceiling."""


@dataclass(frozen=True, slots=True)
class CallBudget:
    """Counters of external calls already spent in one request."""

    places_search: int = 0
    place_details: int = 0
    routes: int = 0

    def used(self, call_type: CallType) -> int:
        return getattr(self, call_type.value)


@dataclass(frozen=True, slots=True)
class BudgetCheckResult:
    allowed: bool
    current_count: int
    limit: int
    reason: str | None = None


def can_make_call(budget: CallBudget, call_type: CallType) -> BudgetCheckResult:
    """Check whether one more call of ``call_type`` fits within its ceiling."""
    current = budget.used(call_type)
    limit = CALL_BUDGET_LIMITS[call_type]
    if current >= limit:
        return BudgetCheckResult(
            allowed=False,
            current_count=current,
            limit=limit,
            reason=f"{call_type.value} budget exhausted: {current}/{limit} calls used",
        )
    return BudgetCheckResult(allowed=True, current_count=current, limit=limit)


def increment_call_budget(budget: CallBudget, call_type: CallType) -> CallBudget:
    """Return a new budget with one more call recorded.

    Raises:
        CallBudgetExceededError: the ceiling for ``call_type`` is already reached.
    """
    check = can_make_call(budget, call_type)
    if not check.allowed:
        raise CallBudgetExceededError(check.reason)
    return replace(budget, **{call_type.value: check.current_count + 1})


def remaining_calls(budget: CallBudget) -> dict[CallType, int]:
    return {call_type: limit - budget.used(call_type) for call_type, limit in CALL_BUDGET_LIMITS.items()}


def is_budget_exhausted(budget: CallBudget) -> bool:
    """True only when every call type has hit its ceiling."""
    return all(budget.used(call_type) >= limit for call_type, limit in CALL_BUDGET_LIMITS.items())


def format_budget_usage(budget: CallBudget) -> str:
    return ", ".join(
        [
            f"Places Search: {budget.places_search}/{CALL_BUDGET_LIMITS[CallType.PLACES_SEARCH]}",
            f"Place Details: {budget.place_details}/{CALL_BUDGET_LIMITS[CallType.PLACE_DETAILS]}",
            f"Routes: {budget.routes}/{CALL_BUDGET_LIMITS[CallType.ROUTES]}",
        ]
    )
