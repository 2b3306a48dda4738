"""
Artifact Descriptor Module
===========================

The engine is content blind: an artifact is identified only by its name
and its size in bytes. This module defines that descriptor and validates
it at the boundary, before any scoring happens.

Example Usage:
    >>> from deepfake_scorer.preprocessing.artifact import ArtifactDescriptor
    >>> artifact = ArtifactDescriptor("clip.mp4", 5 * 1024 * 1024)
    >>> artifact.size_mb
    5.0
    >>> ArtifactDescriptor.from_path("videos/clip.mp4")  # stat only
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

from deepfake_scorer.utils.exceptions import InvalidInputError

MAX_SIZE_BYTES = 2 ** 64 - 1
BYTES_PER_MB = 1024 * 1024


@dataclass(frozen=True)
class ArtifactDescriptor:
    """
    Metadata of a video artifact.

    Attributes:
        name: File name as supplied by the uploader (case preserved).
        size_bytes: Size in bytes, an unsigned 64-bit integer.

    Raises:
        InvalidInputError: If the name is missing or the size is not a
            non-negative 64-bit integer.
    """
    name: str
    size_bytes: int

    def __post_init__(self) -> None:
        if self.name is None:
            raise InvalidInputError("Artifact name is required", field="name")
        if not isinstance(self.name, str):
            raise InvalidInputError(
                f"Artifact name must be a string, got {type(self.name).__name__}",
                field="name",
                value=self.name,
            )
        if not self.name.strip():
            raise InvalidInputError("Artifact name must not be empty", field="name")

        # bool is an int subclass but never a meaningful size
        if isinstance(self.size_bytes, bool) or not isinstance(self.size_bytes, int):
            raise InvalidInputError(
                f"Artifact size must be an integer, "
                f"got {type(self.size_bytes).__name__}",
                field="size_bytes",
                value=self.size_bytes,
            )
        if self.size_bytes < 0:
            raise InvalidInputError(
                "Artifact size must not be negative",
                field="size_bytes",
                value=self.size_bytes,
            )
        if self.size_bytes > MAX_SIZE_BYTES:
            raise InvalidInputError(
                "Artifact size exceeds the unsigned 64-bit range",
                field="size_bytes",
                value=self.size_bytes,
            )

    @property
    def size_mb(self) -> float:
        """Size in mebibytes."""
        return self.size_bytes / BYTES_PER_MB

    @property
    def filename(self) -> str:
        """Lowercased name used by the keyword-driven extractors."""
        return self.name.lower()

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "ArtifactDescriptor":
        """
        Build a descriptor from a file on disk.

        Only the basename and ``os.stat`` size are read; file contents are
        never opened.

        Raises:
            InvalidInputError: If the path does not exist or is not a file.
        """
        path = Path(path)
        try:
            stat = os.stat(path)
        except FileNotFoundError as e:
            raise InvalidInputError(
                f"Video file not found: {path}",
                field="path",
                value=str(path),
                cause=e,
            )
        except OSError as e:
            raise InvalidInputError(
                f"Cannot stat video file {path}: {e}",
                field="path",
                value=str(path),
                cause=e,
            )
        if not path.is_file():
            raise InvalidInputError(
                f"Not a regular file: {path}", field="path", value=str(path)
            )
        return cls(name=path.name, size_bytes=stat.st_size)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "sizeBytes": self.size_bytes}
