"""
Feature Extraction Module
==========================

Seven simulated analyzers, each producing a bounded suspicion score:

Components:
    - Frame distortion, eye blink, texture, lip sync, lighting (facial)
    - Temporal consistency (temporal)
    - Compression / edge / frequency artifacts (artifacts)

EXTRACTORS lists them in evaluation order; detection reasons appear in
this order.

Example Usage:
    >>> from deepfake_scorer.features import EXTRACTORS, SeededNoise
    >>> noise = SeededNoise(artifact_hash)
    >>> scores = [fn("clip.mp4", size, seed, noise) for fn in EXTRACTORS.values()]
"""

from types import MappingProxyType

from deepfake_scorer.features.base import (
    EyeBlinkPattern,
    Feature,
    FeatureScore,
    NoiseSource,
    SeededNoise,
)
from deepfake_scorer.features.facial import (
    extract_eye_blink,
    extract_frame_distortion,
    extract_lighting,
    extract_lip_sync,
    extract_texture,
)
from deepfake_scorer.features.temporal import extract_temporal
from deepfake_scorer.features.artifacts import extract_artifacts
from deepfake_scorer.features.keywords import (
    has_strong_ai_keywords,
    matched_ai_keywords,
    matched_authentic_signals,
)

EXTRACTORS = MappingProxyType({
    Feature.FRAME_DISTORTION: extract_frame_distortion,
    Feature.EYE_BLINK: extract_eye_blink,
    Feature.TEXTURE: extract_texture,
    Feature.TEMPORAL: extract_temporal,
    Feature.ARTIFACTS: extract_artifacts,
    Feature.LIP_SYNC: extract_lip_sync,
    Feature.LIGHTING: extract_lighting,
})

__all__ = [
    "EXTRACTORS",
    "EyeBlinkPattern",
    "Feature",
    "FeatureScore",
    "NoiseSource",
    "SeededNoise",
    "has_strong_ai_keywords",
    "matched_ai_keywords",
    "matched_authentic_signals",
]
