"""
Filename bias adjuster.

A small additive nudge on top of the weighted feature blend: +0.1 per
strong AI keyword, -0.05 per authentic signal, clamped to [-0.2, 0.2] so
no number of keyword matches can dominate the feature scores.
"""

from __future__ import annotations

from deepfake_scorer.features.base import clamp
from deepfake_scorer.features.keywords import (
    matched_ai_keywords,
    matched_authentic_signals,
)

AI_KEYWORD_BIAS = 0.1
AUTHENTIC_SIGNAL_BIAS = -0.05
MAX_BIAS = 0.2


def filename_bias(filename: str) -> float:
    """Keyword-driven score adjustment in [-0.2, 0.2]."""
    raw = (
        AI_KEYWORD_BIAS * len(matched_ai_keywords(filename))
        + AUTHENTIC_SIGNAL_BIAS * len(matched_authentic_signals(filename))
    )
    return clamp(raw, -MAX_BIAS, MAX_BIAS)
