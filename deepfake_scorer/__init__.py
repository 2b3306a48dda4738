"""
Deepfake Likelihood Scoring Engine
===================================

A deterministic, content-blind scorer that estimates whether a video
artifact is a deepfake from its name and size alone.

This package provides:
    - A reproducible per-artifact seed (UTF-16 rolling hash)
    - Seven simulated feature analyzers with keyword-gated scoring
    - A bounded filename bias and a fixed weight table
    - Three-band classification with a conservative dead band
    - A caller-side analyzer with optional latency, timeouts and batches

Example Usage:
    >>> from deepfake_scorer import VideoAnalyzer
    >>> analyzer = VideoAnalyzer()
    >>> result = analyzer.analyze("ai_generated_output.mp4", 1048576)
    >>> result.is_deepfake
    True

Architecture:
    ScoringEngine is a pure function object with no global state; callers
    construct it (or a VideoAnalyzer around it) and may share it freely
    across threads.
"""

__version__ = "1.0.0"
__author__ = "Deepfake Detection Team"

from deepfake_scorer.utils.config import Config, load_config
from deepfake_scorer.utils.logging import setup_logging, get_logger
from deepfake_scorer.preprocessing.artifact import ArtifactDescriptor
from deepfake_scorer.pipeline.engine import ScoringEngine
from deepfake_scorer.pipeline.detector import VideoAnalyzer
from deepfake_scorer.pipeline.result import AnalysisResult

__all__ = [
    "Config",
    "load_config",
    "setup_logging",
    "get_logger",
    "ArtifactDescriptor",
    "ScoringEngine",
    "VideoAnalyzer",
    "AnalysisResult",
    "__version__",
]
