"""
Pipeline Module
================

End-to-end scoring of video artifacts.

Components:
    - ScoringEngine: Pure, deterministic artifact -> AnalysisResult
    - VideoAnalyzer: Caller boundary (limits, latency, timeouts, batches)
    - AnalysisResult: Output record and its JSON surface
    - NoLatency / SimulatedLatency: Optional processing delay policies
    - InMemoryRegistry: Prior verdicts keyed by artifact fingerprint

Example Usage:
    >>> from deepfake_scorer.pipeline import VideoAnalyzer
    >>> analyzer = VideoAnalyzer()
    >>> analyzer.analyze("clip.mp4", 5 * 1024 * 1024).to_dict()
"""

from deepfake_scorer.pipeline.engine import ScoringEngine
from deepfake_scorer.pipeline.result import AnalysisDetails, AnalysisResult
from deepfake_scorer.pipeline.latency import (
    NoLatency,
    SimulatedLatency,
    estimate_processing_time_ms,
)
from deepfake_scorer.pipeline.registry import (
    InMemoryRegistry,
    RegistryRecord,
    VerdictRegistry,
    artifact_fingerprint,
)
from deepfake_scorer.pipeline.detector import BatchEntry, VideoAnalyzer, create_analyzer

__all__ = [
    "ScoringEngine",
    "AnalysisDetails",
    "AnalysisResult",
    "NoLatency",
    "SimulatedLatency",
    "estimate_processing_time_ms",
    "BatchEntry",
    "VideoAnalyzer",
    "create_analyzer",
    "InMemoryRegistry",
    "RegistryRecord",
    "VerdictRegistry",
    "artifact_fingerprint",
]
