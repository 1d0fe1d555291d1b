"""Itinerary graph workflow."""

from langgraph.graph import END, StateGraph

from app.graph.itinerary.nodes import (
    assemble_plans,
    compose_swap_menu,
    create_skeleton,
    finalize_itinerary,
    pick_finalists,
)
from app.graph.itinerary.state import ItineraryState


def _create_itinerary_workflow() -> StateGraph:
    """Build the itinerary construction workflow."""
    workflow = StateGraph(ItineraryState)

    workflow.add_node("build_skeleton", create_skeleton)
    workflow.add_node("select_finalists", pick_finalists)
    workflow.add_node("generate_variants", assemble_plans)
    workflow.add_node("build_swap_menu", compose_swap_menu)
    workflow.add_node("finalize_itinerary", finalize_itinerary)

    workflow.set_entry_point("build_skeleton")
    workflow.add_edge("build_skeleton", "select_finalists")
    workflow.add_edge("select_finalists", "generate_variants")
    workflow.add_edge("generate_variants", "build_swap_menu")
    workflow.add_edge("build_swap_menu", "finalize_itinerary")
    workflow.add_edge("finalize_itinerary", END)

    return workflow


compiled_itinerary_graph = _create_itinerary_workflow().compile()
