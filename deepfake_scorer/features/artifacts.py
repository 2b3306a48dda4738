"""
Encoding Artifact Extractor
============================

Simulates three encoding-level analyses and folds them into one feature:
    - Compression artifacts, nudged by file size
    - Edge artifacts around face boundaries
    - Frequency-domain (DCT/spectral) anomalies

Unusually small files suggest heavy re-encoding by a generation pipeline;
very large files get a smaller bump for potential quality inconsistencies.
The three sub-scores are kept as metrics for the result record.
"""

from __future__ import annotations

import numpy as np

from deepfake_scorer.features.base import Feature, FeatureScore, NoiseSource, clamp
from deepfake_scorer.features.keywords import has_strong_ai_keywords
from deepfake_scorer.preprocessing.artifact import BYTES_PER_MB

SMALL_FILE_MB = 2
LARGE_FILE_MB = 100
SMALL_FILE_BUMP = 0.2
LARGE_FILE_BUMP = 0.1


def size_bump(size_bytes: int) -> float:
    """Compression suspicion added for unusually small or large files."""
    size_mb = size_bytes / BYTES_PER_MB
    if size_mb < SMALL_FILE_MB:
        return SMALL_FILE_BUMP
    if size_mb > LARGE_FILE_MB:
        return LARGE_FILE_BUMP
    return 0.0


def extract_artifacts(
    filename: str, size_bytes: int, seed: float, noise: NoiseSource
) -> FeatureScore:
    """Compression, edge and frequency-domain artifacts."""
    u_compression, u_edge, u_frequency = noise.draws(Feature.ARTIFACTS, 3)
    bump = size_bump(size_bytes)

    if has_strong_ai_keywords(filename):
        compression = clamp(0.5 + 0.2 * seed + 0.1 * u_compression + bump)
        edge = clamp(0.5 + 0.3 * u_edge)
        frequency = clamp(0.45 + 0.2 * seed + 0.2 * u_frequency)
    else:
        compression = clamp(0.05 + 0.1 * u_compression + bump)
        edge = clamp(0.05 + 0.15 * u_edge)
        frequency = clamp(0.05 + 0.1 * seed + 0.1 * u_frequency)

    suspicion = clamp(np.mean([compression, edge, frequency]))
    return FeatureScore(
        Feature.ARTIFACTS,
        suspicion,
        metrics={
            "compression": compression,
            "edge": edge,
            "frequency": frequency,
        },
    )
