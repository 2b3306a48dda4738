"""
Utility modules for the deepfake scoring engine.

This package provides common utilities used across the engine:
    - config: Configuration loading and management
    - logging: Console/file/JSON logging setup
    - exceptions: Custom exception hierarchy
"""

from deepfake_scorer.utils.config import Config, load_config, get_default_config
from deepfake_scorer.utils.logging import setup_logging, get_logger
from deepfake_scorer.utils.exceptions import (
    DeepfakeScorerError,
    ConfigurationError,
    ValidationError,
    InvalidInputError,
    ScoringError,
    WeightTableError,
    AnalysisError,
    AnalysisTimeoutError,
)

__all__ = [
    "Config",
    "load_config",
    "get_default_config",
    "setup_logging",
    "get_logger",
    "DeepfakeScorerError",
    "ConfigurationError",
    "ValidationError",
    "InvalidInputError",
    "ScoringError",
    "WeightTableError",
    "AnalysisError",
    "AnalysisTimeoutError",
]
