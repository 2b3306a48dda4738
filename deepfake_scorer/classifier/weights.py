"""
Feature Weight Table
=====================

Fixed blend weights for the seven feature suspicions. The table is
validated once at construction: every feature present, no negative
weight, and a total of 1.0 within 1e-9.

Example Usage:
    >>> from deepfake_scorer.classifier.weights import DEFAULT_WEIGHTS
    >>> DEFAULT_WEIGHTS[Feature.FRAME_DISTORTION]
    0.25
    >>> DEFAULT_WEIGHTS.blend([...seven suspicions in Feature order...])
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, Mapping, Sequence

import numpy as np

from deepfake_scorer.features.base import Feature
from deepfake_scorer.utils.exceptions import WeightTableError

WEIGHT_TOLERANCE = 1e-9


@dataclass(frozen=True)
class WeightTable:
    """
    Immutable mapping from feature to non-negative weight.

    Attributes:
        weights: Weight per feature; must cover every Feature.

    Raises:
        WeightTableError: If a feature is missing, a weight is negative,
            or the weights do not sum to 1.0.
    """
    weights: Mapping[Feature, float]

    def __post_init__(self) -> None:
        missing = [f.value for f in Feature if f not in self.weights]
        if missing:
            raise WeightTableError(
                f"Weight table is missing features: {missing}",
                details={"missing": missing},
            )
        negative = {f.value: w for f, w in self.weights.items() if w < 0}
        if negative:
            raise WeightTableError(
                f"Weights must be non-negative: {negative}",
                details={"negative": negative},
            )
        total = float(sum(self.weights.values()))
        if abs(total - 1.0) > WEIGHT_TOLERANCE:
            raise WeightTableError(
                f"Weights must sum to 1.0, got {total!r}", total=total
            )
        frozen = {f: float(self.weights[f]) for f in Feature}
        object.__setattr__(self, "weights", MappingProxyType(frozen))

    def __getitem__(self, feature: Feature) -> float:
        return self.weights[feature]

    def __iter__(self) -> Iterator[Feature]:
        return iter(self.weights)

    def __len__(self) -> int:
        return len(self.weights)

    @property
    def total(self) -> float:
        return float(sum(self.weights.values()))

    def vector(self) -> np.ndarray:
        """Weights as an array in Feature declaration order."""
        return np.array([self.weights[f] for f in Feature], dtype=np.float64)

    def blend(self, suspicions: Sequence[float]) -> float:
        """Weighted sum of suspicions given in Feature declaration order."""
        values = np.asarray(suspicions, dtype=np.float64)
        if values.shape != (len(Feature),):
            raise ValueError(
                f"Expected {len(Feature)} suspicions, got shape {values.shape}"
            )
        return float(np.dot(self.vector(), values))


DEFAULT_WEIGHTS = WeightTable({
    Feature.FRAME_DISTORTION: 0.25,
    Feature.EYE_BLINK: 0.20,
    Feature.TEXTURE: 0.15,
    Feature.TEMPORAL: 0.15,
    Feature.ARTIFACTS: 0.10,
    Feature.LIP_SYNC: 0.10,
    Feature.LIGHTING: 0.05,
})
