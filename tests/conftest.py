"""
Shared fixtures for the scoring engine tests.
"""

import copy
from typing import Dict, Optional

import numpy as np
import pytest

from deepfake_scorer.features.base import Feature, FeatureScore
from deepfake_scorer.pipeline.engine import ScoringEngine
from deepfake_scorer.pipeline.latency import NoLatency
from deepfake_scorer.pipeline.detector import VideoAnalyzer
from deepfake_scorer.utils.config import Config, DEFAULT_CONFIG


class ConstantNoise:
    """Noise source returning the same value for every draw."""

    def __init__(self, value: float) -> None:
        self.value = value
        self.calls = []

    def draws(self, feature: Optional[Feature], count: int) -> np.ndarray:
        self.calls.append((feature, count))
        return np.full(count, self.value)


def make_scores(values: Dict[Feature, float], default: float = 0.0, reasons=True):
    """One FeatureScore per Feature, with a reason on every score above 0.6."""
    scores = []
    for feature in Feature:
        suspicion = values.get(feature, default)
        feature_reasons = ()
        if reasons and suspicion > 0.6:
            feature_reasons = (f"{feature.value} anomaly",)
        scores.append(FeatureScore(feature, suspicion, feature_reasons))
    return scores


@pytest.fixture
def engine():
    return ScoringEngine()


@pytest.fixture
def config():
    return Config(copy.deepcopy(DEFAULT_CONFIG))


@pytest.fixture
def analyzer(config):
    return VideoAnalyzer(config=config, latency=NoLatency())


@pytest.fixture
def video_file(tmp_path):
    path = tmp_path / "original_interview.mov"
    path.write_bytes(b"\x00" * 2048)
    return path
