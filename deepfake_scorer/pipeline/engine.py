"""
Scoring Engine Module
======================

The deepfake-likelihood scoring engine: a deterministic, single-pass
pipeline from artifact metadata to an AnalysisResult.

    artifact (name, size)
        -> seed (rolling hash)
        -> seven feature extractors (shared seed, one noise stream each)
        -> weighted blend + filename bias
        -> three-band classification
        -> AnalysisResult

The engine holds no mutable state. One instance can be shared across
threads, and the same artifact always yields the same result.

Example Usage:
    >>> from deepfake_scorer.pipeline.engine import ScoringEngine
    >>> engine = ScoringEngine()
    >>> result = engine.score(ArtifactDescriptor("family_vacation.mp4", 52428800))
    >>> result.is_deepfake
    False
"""

from __future__ import annotations

from typing import Callable, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from deepfake_scorer.classifier.aggregator import Classification, classify
from deepfake_scorer.classifier.bias import filename_bias
from deepfake_scorer.classifier.weights import DEFAULT_WEIGHTS, WeightTable
from deepfake_scorer.features import EXTRACTORS
from deepfake_scorer.features.base import Feature, FeatureScore, NoiseSource, SeededNoise
from deepfake_scorer.pipeline.latency import estimate_processing_time_ms
from deepfake_scorer.pipeline.result import AnalysisResult, assemble_result
from deepfake_scorer.preprocessing.artifact import ArtifactDescriptor
from deepfake_scorer.preprocessing.seed import artifact_hash, seed
from deepfake_scorer.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MODEL_VERSIONS: Tuple[str, ...] = (
    "FaceForensics++_v2.1",
    "DFDCNet_v1.3",
    "CelebDF_Detector_v2.0",
    "XceptionNet_DeepFake_v1.8",
    "EfficientNet_B4_Deepfake_v2.2",
    "ResNet50_Temporal_v1.5",
)
DEFAULT_MODEL_COUNT = 3

Extractor = Callable[[str, int, float, NoiseSource], FeatureScore]


class ScoringEngine:
    """
    Deterministic deepfake-likelihood scorer.

    Attributes:
        weights: Blend weights for the feature suspicions.
        noise_factory: Builds the noise source from the artifact hash.
        model_versions: Pool of informational model labels.
        model_count: Number of labels reported per result.

    Example:
        >>> engine = ScoringEngine()
        >>> engine.score(ArtifactDescriptor("ai_generated_output.mp4", 1048576)).label
        'DEEPFAKE'
    """

    def __init__(
        self,
        weights: WeightTable = DEFAULT_WEIGHTS,
        noise_factory: Callable[[int], NoiseSource] = SeededNoise,
        model_versions: Sequence[str] = DEFAULT_MODEL_VERSIONS,
        model_count: int = DEFAULT_MODEL_COUNT,
        extractors: Optional[Mapping[Feature, Extractor]] = None,
    ) -> None:
        self.weights = weights
        self.noise_factory = noise_factory
        self.model_versions = tuple(model_versions)
        self.model_count = max(0, min(model_count, len(self.model_versions)))
        self._extractors = dict(extractors if extractors is not None else EXTRACTORS)

        missing = [f.value for f in Feature if f not in self._extractors]
        if missing:
            raise ValueError(f"No extractor registered for features: {missing}")

    def extract_features(
        self, artifact: ArtifactDescriptor, noise: Optional[NoiseSource] = None
    ) -> List[FeatureScore]:
        """
        Run every extractor in evaluation order.

        Args:
            artifact: Validated artifact descriptor.
            noise: Noise source; built from the artifact hash when omitted.

        Returns:
            One FeatureScore per Feature, in Feature order.
        """
        if noise is None:
            noise = self.noise_factory(artifact_hash(artifact.name, artifact.size_bytes))
        artifact_seed = seed(artifact.name, artifact.size_bytes)
        filename = artifact.filename

        scores = []
        for feature in Feature:
            score = self._extractors[feature](
                filename, artifact.size_bytes, artifact_seed, noise
            )
            if score.feature is not feature:
                raise ValueError(
                    f"Extractor for {feature.value} returned {score.feature.value}"
                )
            scores.append(score)
        return scores

    def classify(self, artifact: ArtifactDescriptor) -> Classification:
        """Verdict, confidence and reasons without the full result record."""
        features = self.extract_features(artifact)
        return classify(features, filename_bias(artifact.filename), self.weights)

    def score(self, artifact: ArtifactDescriptor) -> AnalysisResult:
        """
        Score one artifact.

        Args:
            artifact: Validated artifact descriptor.

        Returns:
            The AnalysisResult for the artifact.
        """
        noise = self.noise_factory(artifact_hash(artifact.name, artifact.size_bytes))
        features = self.extract_features(artifact, noise)
        bias = filename_bias(artifact.filename)
        classification = classify(features, bias, self.weights)

        result = assemble_result(
            features,
            classification,
            model_versions=self._select_models(noise),
            processing_time_ms=estimate_processing_time_ms(artifact.size_bytes),
        )
        logger.debug(
            f"Scored {artifact.name!r} ({artifact.size_bytes} bytes): "
            f"final_score={classification.final_score:.4f} -> {result}"
        )
        return result

    def _select_models(self, noise: NoiseSource) -> Tuple[str, ...]:
        if not self.model_count:
            return ()
        order = np.argsort(noise.draws(None, len(self.model_versions)), kind="stable")
        return tuple(self.model_versions[i] for i in order[: self.model_count])

    def __repr__(self) -> str:
        factory = getattr(self.noise_factory, "__name__", self.noise_factory)
        return f"ScoringEngine(noise_factory={factory!r}, model_count={self.model_count})"
