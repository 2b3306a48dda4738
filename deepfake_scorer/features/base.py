"""
Feature Score Primitives
=========================

Shared types for the seven feature extractors:
    - Feature: the analyzed signals, in evaluation order
    - EyeBlinkPattern: closed set of blink pattern labels
    - FeatureScore: one extractor's immutable output
    - SeededNoise: deterministic uniform draws standing in for model noise

Each extractor owns one noise stream, keyed by the artifact hash and the
feature's stream id, so adding draws to one extractor never shifts the
values another extractor sees.

Example Usage:
    >>> noise = SeededNoise(artifact_hash("clip.mp4", 1024))
    >>> u = noise.draws(Feature.TEXTURE, 1)[0]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Protocol, Tuple

import numpy as np


class Feature(Enum):
    """Analyzed signals, declared in evaluation order."""
    FRAME_DISTORTION = "frame_distortion"
    EYE_BLINK = "eye_blink"
    TEXTURE = "texture"
    TEMPORAL = "temporal"
    ARTIFACTS = "artifacts"
    LIP_SYNC = "lip_sync"
    LIGHTING = "lighting"

    @property
    def stream_id(self) -> int:
        """Noise stream index; 0 is reserved for model selection."""
        return list(Feature).index(self) + 1


class EyeBlinkPattern(Enum):
    """Eye blink pattern labels."""
    NATURAL = "natural"
    IRREGULAR = "irregular"
    ABSENT = "absent"


@dataclass(frozen=True)
class FeatureScore:
    """
    Output of a single feature extractor.

    Attributes:
        feature: Which signal produced the score.
        suspicion: Manipulation suspicion in [0, 1].
        reasons: Human-readable anomaly descriptions (possibly empty).
        pattern: Eye blink label, only set by the eye blink extractor.
        metrics: Extra presentation sub-scores keyed by output field name.
    """
    feature: Feature
    suspicion: float
    reasons: Tuple[str, ...] = ()
    pattern: Optional[EyeBlinkPattern] = None
    metrics: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not 0.0 <= self.suspicion <= 1.0:
            raise ValueError(
                f"{self.feature.value} suspicion {self.suspicion} outside [0, 1]"
            )
        object.__setattr__(self, "reasons", tuple(self.reasons))
        object.__setattr__(self, "metrics", MappingProxyType(dict(self.metrics)))


class NoiseSource(Protocol):
    """Anything that hands out uniform [0, 1) draws per feature."""

    def draws(self, feature: Optional[Feature], count: int) -> np.ndarray:
        ...


class SeededNoise:
    """
    Deterministic noise keyed by artifact hash.

    Args:
        artifact_hash: Signed 32-bit artifact hash; its magnitude seeds
            the generators.
    """

    def __init__(self, artifact_hash: int) -> None:
        self.entropy = abs(int(artifact_hash))

    def generator(self, feature: Optional[Feature]) -> np.random.Generator:
        stream = feature.stream_id if feature is not None else 0
        return np.random.default_rng([self.entropy, stream])

    def draws(self, feature: Optional[Feature], count: int) -> np.ndarray:
        return self.generator(feature).random(count)

    def __repr__(self) -> str:
        return f"SeededNoise(entropy={self.entropy})"


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp ``value`` to [low, high] and return a plain float."""
    return float(np.clip(value, low, high))


def round_half_up(value: float) -> int:
    """Round half away from zero for non-negative values (Math.round)."""
    return int(np.floor(value + 0.5))
