"""
Aggregator / Classifier Module
===============================

Combines the seven feature suspicions into a final score and classifies
it in three bands:

    final <= 0.3         authentic, confidence = (1 - final) * 100
    0.3 < final <= 0.6   authentic (dead band), confidence mapped to [60, 90]
    final > 0.6          deepfake, confidence = final * 100

The middle band never flags an artifact: ambiguous signal leans authentic
with a graded confidence. Detection reasons are only reported for
deepfake verdicts, in feature evaluation order, at most five.

Example Usage:
    >>> from deepfake_scorer.classifier.aggregator import classify
    >>> verdict = classify(feature_scores, bias=0.1)
    >>> verdict.is_deepfake, verdict.confidence_percent
    (True, 74)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

from deepfake_scorer.classifier.weights import DEFAULT_WEIGHTS, WeightTable
from deepfake_scorer.features.base import (
    Feature,
    FeatureScore,
    clamp,
    round_half_up,
)
from deepfake_scorer.utils.logging import get_logger

logger = get_logger(__name__)

AUTHENTIC_CEILING = 0.3
DEEPFAKE_FLOOR = 0.6
MAX_REASONS = 5


@dataclass(frozen=True)
class Classification:
    """
    Verdict of the aggregator.

    Attributes:
        is_deepfake: True only when the final score exceeds 0.6.
        confidence_percent: Confidence in the verdict, in [0, 100].
        reasons: At most five detection reasons (empty unless deepfake).
        final_score: Clamped weighted blend plus bias.
    """
    is_deepfake: bool
    confidence_percent: int
    reasons: Tuple[str, ...]
    final_score: float

    @property
    def label(self) -> str:
        return "DEEPFAKE" if self.is_deepfake else "AUTHENTIC"


def final_score(
    features: Sequence[FeatureScore],
    bias: float,
    weights: WeightTable = DEFAULT_WEIGHTS,
) -> float:
    """Clamped weighted blend of the feature suspicions plus ``bias``."""
    by_feature = _index(features)
    blended = weights.blend([by_feature[f].suspicion for f in Feature])
    return clamp(blended + bias)


def confidence_for(score: float) -> int:
    """Confidence percentage for a final score, following the three bands."""
    if score <= AUTHENTIC_CEILING:
        confidence = round_half_up((1 - score) * 100)
    elif score <= DEEPFAKE_FLOOR:
        confidence = round_half_up(((DEEPFAKE_FLOOR - score) / 0.3) * 30 + 60)
    else:
        confidence = round_half_up(score * 100)
    return min(max(confidence, 0), 100)


def classify(
    features: Sequence[FeatureScore],
    bias: float,
    weights: WeightTable = DEFAULT_WEIGHTS,
) -> Classification:
    """
    Classify a full set of feature scores.

    Args:
        features: One FeatureScore per Feature.
        bias: Filename bias in [-0.2, 0.2].
        weights: Blend weights.

    Returns:
        Classification with verdict, confidence and reasons.

    Raises:
        ValueError: If a feature is missing or duplicated.
    """
    score = final_score(features, bias, weights)
    is_deepfake = score > DEEPFAKE_FLOOR

    reasons: Tuple[str, ...] = ()
    if is_deepfake:
        by_feature = _index(features)
        collected = [r for f in Feature for r in by_feature[f].reasons]
        reasons = tuple(collected[:MAX_REASONS])

    result = Classification(
        is_deepfake=is_deepfake,
        confidence_percent=confidence_for(score),
        reasons=reasons,
        final_score=score,
    )
    logger.debug(
        f"Classified final_score={score:.4f} bias={bias:+.2f} -> "
        f"{result.label} ({result.confidence_percent}%)"
    )
    return result


def _index(features: Sequence[FeatureScore]) -> Dict[Feature, FeatureScore]:
    by_feature: Dict[Feature, FeatureScore] = {}
    for score in features:
        if score.feature in by_feature:
            raise ValueError(f"Duplicate score for feature {score.feature.value}")
        by_feature[score.feature] = score
    missing = [f.value for f in Feature if f not in by_feature]
    if missing:
        raise ValueError(f"Missing scores for features: {missing}")
    return by_feature
