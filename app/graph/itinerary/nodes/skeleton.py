"""Itinerary skeleton node."""

from __future__ import annotations

from langchain_core.runnables import RunnableConfig
from pydantic import ValidationError

from app.core.logger import get_logger
from app.graph.itinerary.state import ItineraryState
from app.graph.itinerary.utils import load_request, resolve_policy, resolve_time_window
from app.services.skeleton_service import build_skeleton, validate_skeleton

logger = get_logger(__name__)


def create_skeleton(state: ItineraryState, config: RunnableConfig) -> ItineraryState:
    """Resolve the time window and build the time/budget skeleton."""
    raw_request = state.get("itinerary_request")
    if not raw_request:
        return {**state, "error": "itinerary_request is required to build a skeleton."}

    try:
        request = load_request(raw_request)
    except ValidationError as exc:
        logger.error("ItineraryRequest validation failed: %s", exc)
        return {**state, "error": "itinerary_request is malformed."}

    start_time, end_time = resolve_time_window(request)
    skeleton = build_skeleton(request.budget, start_time, end_time, policy=resolve_policy(config))
    if not validate_skeleton(skeleton):
        logger.warning("Skeleton budget shares do not add up: template=%s", skeleton.template.value)

    return {
        **state,
        "start_time": start_time,
        "end_time": end_time,
        "skeleton": skeleton,
        "warnings": [],
    }
