"""Metric helpers recorded as short Opik traces."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from app.observability.tracing import trace

logger = logging.getLogger(__name__)


def log_metric(name: str, value: float | int, metadata: Optional[Dict[str, Any]] = None) -> None:
    """Record ``value`` under ``metric:<name>``; no-op when Opik is disabled."""
    payload: Dict[str, Any] = dict(metadata or {})
    payload["value"] = value
    with trace(f"metric:{name}", metadata=payload):
        logger.debug("metric %s=%s", name, value)
