"""
Per-turn performance metrics.
Tracks node latency, model calls and token usage for one chat turn.
"""

import time
import inspect
import functools
from typing import Any, Callable
from contextvars import ContextVar

from clinic_bot.utils.logger import get_logger

logger = get_logger(__name__)

# Metrics of the turn being handled (per asyncio task)
metrics_ctx: ContextVar[dict[str, Any] | None] = ContextVar("metrics", default=None)


class MetricsTracker:
    """
    Collects metrics for one turn and binds them to the current context
    so nodes and services can record into them without plumbing.
    """

    def __init__(self):
        self.metrics = {
            "node_timings": {},
            "llm_calls": {"count": 0, "failures": 0},
            "tokens": {"input": 0, "output": 0, "total": 0},
            "total_time": 0.0,
            "start_time": time.time(),
        }
        metrics_ctx.set(self.metrics)

    def finalize(self, **context: Any) -> dict[str, Any]:
        """
        Computes totals, logs them as ``turn_metrics`` and unbinds the tracker.

        Args:
            **context: Extra fields for the log line (e.g. intent)

        Returns:
            Dictionary with all collected metrics
        """
        self.metrics["total_time"] = time.time() - self.metrics["start_time"]

        node_summary = {}
        for node_name, timings in self.metrics["node_timings"].items():
            node_summary[node_name] = {
                "total_time": sum(
                    t["end"] - t["start"] for t in timings if t["end"] is not None
                ),
                "call_count": len(timings),
            }
        self.metrics["node_summary"] = node_summary

        logger.info(
            "turn_metrics",
            total_time=self.metrics["total_time"],
            llm_calls=self.metrics["llm_calls"]["count"],
            llm_failures=self.metrics["llm_calls"]["failures"],
            total_tokens=self.metrics["tokens"]["total"],
            node_summary=node_summary,
            **context,
        )
        metrics_ctx.set(None)
        return self.metrics


def start_node_timing(node_name: str) -> None:
    metrics = metrics_ctx.get()
    if metrics is None:
        return
    metrics["node_timings"].setdefault(node_name, []).append(
        {"start": time.time(), "end": None}
    )


def end_node_timing(node_name: str) -> float | None:
    """
    Closes the open timing of ``node_name``.

    Returns:
        Elapsed time or None if metrics are not initialized
    """
    metrics = metrics_ctx.get()
    if metrics is None or node_name not in metrics["node_timings"]:
        return None

    timings = metrics["node_timings"][node_name]
    if not timings or timings[-1]["end"] is not None:
        return None

    timings[-1]["end"] = time.time()
    elapsed = timings[-1]["end"] - timings[-1]["start"]
    logger.debug("node_completed", node=node_name, elapsed=elapsed)
    return elapsed


def record_llm_call(
    input_tokens: int = 0, output_tokens: int = 0, failed: bool = False
) -> None:
    """Adds one model call (and its token usage) to the current turn."""
    metrics = metrics_ctx.get()
    if metrics is None:
        return
    metrics["llm_calls"]["count"] += 1
    if failed:
        metrics["llm_calls"]["failures"] += 1
    metrics["tokens"]["input"] += input_tokens
    metrics["tokens"]["output"] += output_tokens
    metrics["tokens"]["total"] += input_tokens + output_tokens


def timed_node(node_name: str) -> Callable:
    """Decorator timing a graph node (sync or async) under ``node_name``."""

    def decorator(func: Callable) -> Callable:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                start_node_timing(node_name)
                try:
                    return await func(*args, **kwargs)
                finally:
                    end_node_timing(node_name)

            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start_node_timing(node_name)
            try:
                return func(*args, **kwargs)
            finally:
                end_node_timing(node_name)

        return wrapper

    return decorator
