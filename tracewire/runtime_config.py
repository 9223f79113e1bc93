"""Runtime configuration state management.

Values can be set programmatically or loaded from the environment:
- TRACEWIRE_LATENCY_BUCKETS: JSON array of ascending latency boundaries (seconds)
- TRACEWIRE_TRACE_FORMATS: comma separated inbound formats ("b3", "b3multi")
"""

from __future__ import annotations

import json
import logging
import os
from typing import List, Optional, Sequence

from tracewire.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_LATENCY_BUCKET_BOUNDARIES = (
    1e-5,  # 10us
    1e-4,  # 100us
    1e-3,  # 1ms
    1e-2,  # 10ms
    1e-1,  # 100ms
    1,     # 1s
    10,    # 10s
    60,    # 1min
)

KNOWN_TRACE_FORMATS = ("b3", "b3multi")

# Global runtime configuration state
_config = {
    "latency_bucket_boundaries": list(DEFAULT_LATENCY_BUCKET_BOUNDARIES),
    "trace_formats": list(KNOWN_TRACE_FORMATS),
}


def set_latency_bucket_boundaries(value: Sequence[float]) -> None:
    boundaries = list(value)
    if any(prev >= nxt for prev, nxt in zip(boundaries, boundaries[1:])):
        raise ConfigError(
            "Latency bucket boundaries must be strictly ascending",
            {"boundaries": boundaries},
        )
    _config["latency_bucket_boundaries"] = boundaries


def get_latency_bucket_boundaries() -> List[float]:
    return list(_config["latency_bucket_boundaries"])


def set_trace_formats(value: Sequence[str]) -> None:
    formats = [str(v).strip().lower() for v in value if str(v).strip()]
    unknown = [f for f in formats if f not in KNOWN_TRACE_FORMATS]
    if unknown:
        raise ConfigError("Unknown trace formats", {"formats": unknown})
    _config["trace_formats"] = formats


def get_trace_formats() -> List[str]:
    return list(_config["trace_formats"])


def reset() -> None:
    """Restore the default configuration."""
    _config["latency_bucket_boundaries"] = list(DEFAULT_LATENCY_BUCKET_BOUNDARIES)
    _config["trace_formats"] = list(KNOWN_TRACE_FORMATS)


def load_from_env(environ: Optional[dict] = None) -> None:
    """
    Apply TRACEWIRE_* environment overrides.

    Raises:
        ConfigError: if a variable is present but malformed
    """
    env = os.environ if environ is None else environ

    raw_buckets = env.get("TRACEWIRE_LATENCY_BUCKETS")
    if raw_buckets:
        try:
            buckets = json.loads(raw_buckets)
        except ValueError as e:
            raise ConfigError(
                "TRACEWIRE_LATENCY_BUCKETS is not valid JSON", {"error": str(e)}
            ) from e
        if not isinstance(buckets, list) or not all(
            isinstance(b, (int, float)) and not isinstance(b, bool) for b in buckets
        ):
            raise ConfigError(
                "TRACEWIRE_LATENCY_BUCKETS must be a JSON array of numbers",
                {"value": raw_buckets},
            )
        set_latency_bucket_boundaries(buckets)
        logger.debug("Latency buckets overridden from env: %s", buckets)

    raw_formats = env.get("TRACEWIRE_TRACE_FORMATS")
    if raw_formats:
        set_trace_formats(raw_formats.split(","))
        logger.debug("Trace formats overridden from env: %s", raw_formats)
