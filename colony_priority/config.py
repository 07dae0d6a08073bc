"""Engine configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PriorityConfig:
    """Immutable configuration for the scoring engine and its service."""

    # Evaluation
    strict: bool = False          # re-raise pipeline errors instead of falling back
    include_hauling_urgent: bool = False

    # Service
    host: str = "0.0.0.0"
    port: int = 8000
    cache_size: int = 4096        # exported tiers kept per fingerprint; 0 disables

    # Logging
    log_level: str = "INFO"
