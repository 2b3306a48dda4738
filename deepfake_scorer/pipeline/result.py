"""
Analysis Result Module
=======================

The output record of the scoring engine and the assembler that builds it
from feature scores and a classification. Field names of ``to_dict()``
are the compatibility surface consumed by the UI and API layers.

Example Usage:
    >>> result = engine.score(artifact)
    >>> json.dumps(result.to_dict())
    '{"isDeepfake": false, "confidence": 83, ...}'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple

from deepfake_scorer.classifier.aggregator import Classification
from deepfake_scorer.features.base import EyeBlinkPattern, Feature, FeatureScore


@dataclass(frozen=True)
class AnalysisDetails:
    """
    Per-metric breakdown of an analysis.

    Attributes:
        facial_inconsistencies: Frame distortion suspicion.
        temporal_anomalies: Temporal inconsistency suspicion.
        compression_artifacts: Compression sub-score.
        eye_blink_pattern: Eye blink label.
        lip_sync_accuracy: 1 - lip-sync suspicion.
        skin_texture_analysis: Texture suspicion.
        lighting_consistency: 1 - lighting suspicion.
        edge_artifacts: Edge sub-score.
        frequency_domain_analysis: Frequency sub-score.
        neural_network_confidence: Verdict confidence as a fraction.
    """
    facial_inconsistencies: float
    temporal_anomalies: float
    compression_artifacts: float
    eye_blink_pattern: EyeBlinkPattern
    lip_sync_accuracy: float
    skin_texture_analysis: float
    lighting_consistency: float
    edge_artifacts: float
    frequency_domain_analysis: float
    neural_network_confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "facialInconsistencies": self.facial_inconsistencies,
            "temporalAnomalies": self.temporal_anomalies,
            "compressionArtifacts": self.compression_artifacts,
            "eyeBlinkPattern": self.eye_blink_pattern.value,
            "lipSyncAccuracy": self.lip_sync_accuracy,
            "skinTextureAnalysis": self.skin_texture_analysis,
            "lightingConsistency": self.lighting_consistency,
            "edgeArtifacts": self.edge_artifacts,
            "frequencyDomainAnalysis": self.frequency_domain_analysis,
            "neuralNetworkConfidence": self.neural_network_confidence,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """
    Verdict for one artifact.

    Attributes:
        is_deepfake: Whether the artifact is classified as manipulated.
        confidence: Confidence percentage in [0, 100].
        detection_reasons: At most five reasons, earliest feature first.
        analysis_details: Per-metric breakdown.
        model_versions: Informational model labels.
        processing_time: Modeled processing time in milliseconds.
    """
    is_deepfake: bool
    confidence: int
    detection_reasons: Tuple[str, ...]
    analysis_details: AnalysisDetails
    model_versions: Tuple[str, ...]
    processing_time: int

    def __post_init__(self) -> None:
        if not 0 <= self.confidence <= 100:
            raise ValueError(f"Confidence {self.confidence} outside [0, 100]")
        if len(self.detection_reasons) > 5:
            raise ValueError(
                f"At most 5 detection reasons allowed, got {len(self.detection_reasons)}"
            )

    @property
    def label(self) -> str:
        return "DEEPFAKE" if self.is_deepfake else "AUTHENTIC"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON-serializable output record."""
        return {
            "isDeepfake": self.is_deepfake,
            "confidence": self.confidence,
            "detectionReasons": list(self.detection_reasons),
            "analysisDetails": self.analysis_details.to_dict(),
            "modelVersions": list(self.model_versions),
            "processingTime": self.processing_time,
        }

    def __str__(self) -> str:
        return f"AnalysisResult({self.label}, confidence={self.confidence}%)"


def assemble_result(
    features: Sequence[FeatureScore],
    classification: Classification,
    model_versions: Sequence[str],
    processing_time_ms: int,
) -> AnalysisResult:
    """
    Pack feature scores and a classification into an AnalysisResult.

    Lip-sync and lighting are reported as accuracy / consistency, i.e.
    the complement of their suspicion.
    """
    by_feature = {score.feature: score for score in features}
    artifacts = by_feature[Feature.ARTIFACTS]

    details = AnalysisDetails(
        facial_inconsistencies=by_feature[Feature.FRAME_DISTORTION].suspicion,
        temporal_anomalies=by_feature[Feature.TEMPORAL].suspicion,
        compression_artifacts=artifacts.metrics.get("compression", artifacts.suspicion),
        eye_blink_pattern=by_feature[Feature.EYE_BLINK].pattern or EyeBlinkPattern.NATURAL,
        lip_sync_accuracy=1.0 - by_feature[Feature.LIP_SYNC].suspicion,
        skin_texture_analysis=by_feature[Feature.TEXTURE].suspicion,
        lighting_consistency=1.0 - by_feature[Feature.LIGHTING].suspicion,
        edge_artifacts=artifacts.metrics.get("edge", artifacts.suspicion),
        frequency_domain_analysis=artifacts.metrics.get("frequency", artifacts.suspicion),
        neural_network_confidence=classification.confidence_percent / 100,
    )

    return AnalysisResult(
        is_deepfake=classification.is_deepfake,
        confidence=classification.confidence_percent,
        detection_reasons=tuple(classification.reasons),
        analysis_details=details,
        model_versions=tuple(model_versions),
        processing_time=int(processing_time_ms),
    )
