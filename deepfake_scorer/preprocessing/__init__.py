"""
Preprocessing Module
=====================

Turns raw upload metadata into the inputs the scoring engine needs.

Components:
    - ArtifactDescriptor: Validated (name, size) pair
    - artifact_hash / seed: Reproducible per-artifact seed

Example Usage:
    >>> from deepfake_scorer.preprocessing import ArtifactDescriptor, seed
    >>> artifact = ArtifactDescriptor("clip.mp4", 1024)
    >>> s = seed(artifact.name, artifact.size_bytes)
"""

from deepfake_scorer.preprocessing.artifact import ArtifactDescriptor
from deepfake_scorer.preprocessing.seed import artifact_hash, seed

__all__ = [
    "ArtifactDescriptor",
    "artifact_hash",
    "seed",
]
