"""Itinerary graph nodes."""

from app.graph.itinerary.nodes.finalists import pick_finalists
from app.graph.itinerary.nodes.finalize import finalize_itinerary
from app.graph.itinerary.nodes.skeleton import create_skeleton
from app.graph.itinerary.nodes.swap_menu import compose_swap_menu
from app.graph.itinerary.nodes.variants import assemble_plans

__all__ = ["create_skeleton", "pick_finalists", "assemble_plans", "compose_swap_menu", "finalize_itinerary"]
