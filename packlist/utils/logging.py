"""Structured logging for packing-list computations."""

import logging
from typing import Any

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"

_configured = False


def configure_logging(level: str | int = "INFO") -> None:
    """Attach a stream handler to the ``packlist`` logger namespace once."""
    global _configured
    if _configured:
        return

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger("packlist")
    root.setLevel(level)
    root.addHandler(handler)
    _configured = True


class StructuredEngineLogger:
    """Structured logger for packing-list derivations."""

    def log_computation(
        self,
        rule_count: int,
        instance_count: int,
        latency_ms: float,
        cache_hit: bool = False,
        zero_match_rules: list[str] | None = None,
    ) -> None:
        """Log one packing-list computation with structured data."""
        log_data: dict[str, Any] = {
            "rule_count": rule_count,
            "instance_count": instance_count,
            "latency_ms": round(latency_ms, 2),
            "cache_hit": cache_hit,
        }

        if zero_match_rules:
            log_data["zero_match_rules"] = zero_match_rules

        outcome = "cache_hit" if cache_hit else "computed"
        logger.info(f"Packing list {outcome}: {instance_count} instances", extra={"structured": log_data})

    def log_rejected(self, rule_ids: list[str], codes: list[str]) -> None:
        """Log a computation refused because of blocking rule violations."""
        log_data: dict[str, Any] = {"rule_ids": rule_ids, "codes": codes}
        logger.warning(f"Packing list rejected: {len(codes)} blocking violations", extra={"structured": log_data})
