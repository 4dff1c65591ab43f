"""
Lightweight in-process metrics: counters and duration histograms for
upstream catalog calls, roadmap generation and fallbacks.

Exposed as a JSON snapshot on /metrics.
"""

import time
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import Dict, Any

from careerquest.utils.logger import get_logger

logger = get_logger("metrics")

_counters: Dict[str, int] = defaultdict(int)
_histograms: Dict[str, list] = defaultdict(list)

MAX_HISTOGRAM_SAMPLES = 500  # Rolling window


def inc(name: str, value: int = 1) -> None:
    """Increment a counter."""
    _counters[name] += value


def observe(name: str, value: float) -> None:
    """Record a histogram observation (e.g., duration)."""
    bucket = _histograms[name]
    bucket.append(value)
    if len(bucket) > MAX_HISTOGRAM_SAMPLES:
        _histograms[name] = bucket[-MAX_HISTOGRAM_SAMPLES:]


@asynccontextmanager
async def track_duration(service: str, operation: str = "call"):
    """
    Track call duration and success/failure.

    Usage:
        async with track_duration("onet", "proxy"):
            response = await client.get(...)
    """
    start = time.monotonic()
    try:
        yield
    except Exception:
        duration_ms = (time.monotonic() - start) * 1000
        observe(f"{service}.{operation}.duration_ms", duration_ms)
        inc(f"{service}.{operation}.error")
        logger.warning(
            "metrics.call",
            extra={
                "service": service,
                "operation": operation,
                "duration_ms": round(duration_ms, 1),
                "status": "error",
            },
        )
        raise
    duration_ms = (time.monotonic() - start) * 1000
    observe(f"{service}.{operation}.duration_ms", duration_ms)
    inc(f"{service}.{operation}.success")
    logger.debug(
        "metrics.call",
        extra={
            "service": service,
            "operation": operation,
            "duration_ms": round(duration_ms, 1),
            "status": "success",
        },
    )


def get_snapshot() -> Dict[str, Any]:
    """Return a snapshot of all counters and histogram summaries."""
    summaries = {}
    for name, samples in _histograms.items():
        if samples:
            sorted_s = sorted(samples)
            last = len(sorted_s) - 1
            summaries[name] = {
                "count": len(sorted_s),
                "p50": round(sorted_s[int(len(sorted_s) * 0.5)], 1),
                "p95": round(sorted_s[min(int(len(sorted_s) * 0.95), last)], 1),
                "max": round(sorted_s[-1], 1),
            }
    return {"counters": dict(_counters), "histograms": summaries}


def reset() -> None:
    """Reset all metrics (useful for testing)."""
    _counters.clear()
    _histograms.clear()
