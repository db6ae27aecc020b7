"""
Graph package for the LangGraph chat workflow.
"""

from clinic_bot.graph.builder import build_graph, create_llm_service
from clinic_bot.graph.nodes import GraphNodes
from clinic_bot.graph.edges import (
    Handler,
    INTENT_ROUTES,
    route,
    route_after_classifier,
)

__all__ = [
    "build_graph",
    "create_llm_service",
    "GraphNodes",
    "Handler",
    "INTENT_ROUTES",
    "route",
    "route_after_classifier",
]
