"""
Temporal consistency extractor.

Simulates frame-to-frame consistency analysis (flicker, blending mask
movement) for a video artifact.
"""

from __future__ import annotations

from deepfake_scorer.features.base import (
    Feature,
    FeatureScore,
    NoiseSource,
    clamp,
    round_half_up,
)
from deepfake_scorer.features.keywords import has_strong_ai_keywords

TEMPORAL_THRESHOLD = 0.6


def extract_temporal(
    filename: str, size_bytes: int, seed: float, noise: NoiseSource
) -> FeatureScore:
    """Temporal inconsistencies between consecutive frames."""
    (u,) = noise.draws(Feature.TEMPORAL, 1)
    if has_strong_ai_keywords(filename):
        suspicion = clamp(0.5 + 0.3 * seed + 0.2 * u)
    else:
        suspicion = clamp(0.1 * seed + 0.15 * u)

    reasons = ()
    if suspicion > TEMPORAL_THRESHOLD:
        reasons = (
            f"Temporal inconsistencies between consecutive frames "
            f"({round_half_up(suspicion * 100)}% suspicion)",
        )
    return FeatureScore(Feature.TEMPORAL, suspicion, reasons)
