"""
Classification Module
======================

Turns feature scores into a verdict.

Components:
    - WeightTable / DEFAULT_WEIGHTS: Validated blend weights
    - filename_bias: Bounded keyword-driven adjustment
    - classify: Weighted blend, three-band thresholding, reasons

Example Usage:
    >>> from deepfake_scorer.classifier import classify, filename_bias
    >>> verdict = classify(scores, filename_bias("clip.mp4"))
"""

from deepfake_scorer.classifier.weights import DEFAULT_WEIGHTS, WeightTable
from deepfake_scorer.classifier.bias import filename_bias
from deepfake_scorer.classifier.aggregator import (
    Classification,
    classify,
    confidence_for,
    final_score,
)

__all__ = [
    "DEFAULT_WEIGHTS",
    "WeightTable",
    "filename_bias",
    "Classification",
    "classify",
    "confidence_for",
    "final_score",
]
