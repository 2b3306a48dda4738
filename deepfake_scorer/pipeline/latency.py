"""
Latency Policy Module
======================

Model inference takes longer for bigger files. The modeled delay lives
here as an optional policy applied by the caller around the engine,
never inside the scoring math.

Example Usage:
    >>> policy = SimulatedLatency(scale=0.01)   # 1% of the modeled delay
    >>> policy.apply(artifact)                  # sleeps, returns seconds
"""

from __future__ import annotations

import time
from typing import Any, Callable, Protocol

from deepfake_scorer.preprocessing.artifact import ArtifactDescriptor, BYTES_PER_MB
from deepfake_scorer.utils.logging import get_logger

logger = get_logger(__name__)

BASE_MS = 3000
PER_MB_MS = 100
MAX_MS = 8000


def estimate_processing_time_ms(
    size_bytes: int,
    base_ms: float = BASE_MS,
    per_mb_ms: float = PER_MB_MS,
    max_ms: float = MAX_MS,
) -> int:
    """
    Modeled processing time for an artifact, in milliseconds.

    ``min(base + size_MiB * per_mb, max)``; deterministic so it can be
    reported in results without breaking reproducibility.
    """
    return int(min(base_ms + (size_bytes / BYTES_PER_MB) * per_mb_ms, max_ms))


class LatencyPolicy(Protocol):
    """Waits (or not) before an artifact is scored."""

    def apply(self, artifact: ArtifactDescriptor) -> float:
        ...


class NoLatency:
    """Score immediately."""

    def apply(self, artifact: ArtifactDescriptor) -> float:
        return 0.0

    def __repr__(self) -> str:
        return "NoLatency()"


class SimulatedLatency:
    """
    Sleep for the modeled processing time of each artifact.

    Attributes:
        base_ms: Fixed part of the delay.
        per_mb_ms: Delay added per MiB of artifact size.
        max_ms: Upper bound of the modeled delay.
        scale: Multiplier on the modeled delay (0 disables sleeping).
        sleep: Sleep function, injectable for tests.
    """

    def __init__(
        self,
        base_ms: float = BASE_MS,
        per_mb_ms: float = PER_MB_MS,
        max_ms: float = MAX_MS,
        scale: float = 1.0,
        sleep: Callable[[float], Any] = time.sleep,
    ) -> None:
        if scale < 0:
            raise ValueError(f"Latency scale must be non-negative, got {scale}")
        self.base_ms = base_ms
        self.per_mb_ms = per_mb_ms
        self.max_ms = max_ms
        self.scale = scale
        self._sleep = sleep

    def delay_seconds(self, artifact: ArtifactDescriptor) -> float:
        modeled = estimate_processing_time_ms(
            artifact.size_bytes, self.base_ms, self.per_mb_ms, self.max_ms
        )
        return modeled * self.scale / 1000.0

    def apply(self, artifact: ArtifactDescriptor) -> float:
        delay = self.delay_seconds(artifact)
        if delay > 0:
            logger.debug(f"Simulating {delay:.3f}s of processing for {artifact.name}")
            self._sleep(delay)
        return delay

    def __repr__(self) -> str:
        return (
            f"SimulatedLatency(base_ms={self.base_ms}, per_mb_ms={self.per_mb_ms}, "
            f"max_ms={self.max_ms}, scale={self.scale})"
        )
