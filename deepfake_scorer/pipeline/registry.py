"""
Verdict Registry Module
========================

Lookup of prior verdicts by artifact identity. Confident deepfake verdicts
are registered so that a re-upload of the same artifact (same name and
size) is answered from the registry instead of being scored again.

Components:
    - artifact_fingerprint: 0x-prefixed, 64 hex digit artifact identity
    - VerdictRegistry: Interface a registry backend must provide
    - InMemoryRegistry: Process-local registry backed by a dict

Example Usage:
    >>> from deepfake_scorer.pipeline.registry import InMemoryRegistry
    >>> registry = InMemoryRegistry()
    >>> analyzer = VideoAnalyzer(registry=registry)
    >>> analyzer.analyze("ai_generated_output.mp4", 1048576)
    >>> len(registry)
    1
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional, Protocol

from deepfake_scorer.pipeline.result import AnalysisResult
from deepfake_scorer.preprocessing.artifact import ArtifactDescriptor
from deepfake_scorer.preprocessing.seed import artifact_hash
from deepfake_scorer.utils.logging import get_logger

logger = get_logger(__name__)

AUTO_REGISTER_CONFIDENCE = 80
FINGERPRINT_DIGITS = 64
DETECTED_BY = "deepfake-scorer"


def artifact_fingerprint(name: str, size_bytes: int) -> str:
    """
    Identity of an artifact: the rolling hash magnitude in hex.

    Example:
        >>> artifact_fingerprint("a", 1)
        '0x0000000000000000000000000000000000000000000000000000000000000bf0'
    """
    return "0x" + format(abs(artifact_hash(name, size_bytes)), "x").zfill(
        FINGERPRINT_DIGITS
    )


def should_register(
    result: AnalysisResult, min_confidence: int = AUTO_REGISTER_CONFIDENCE
) -> bool:
    """Whether a verdict is confident enough to be registered."""
    return result.is_deepfake and result.confidence >= min_confidence


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class RegistryRecord:
    """
    A registered verdict.

    Attributes:
        fingerprint: Artifact fingerprint the record is keyed by.
        registration_id: Short identifier derived from the fingerprint.
        name: Artifact name at registration time.
        size_bytes: Artifact size at registration time.
        result: The registered verdict.
        registered_at: UTC registration timestamp (ISO 8601).
        detected_by: Name of the registering system.
    """
    fingerprint: str
    registration_id: str
    name: str
    size_bytes: int
    result: AnalysisResult
    registered_at: str
    detected_by: str = DETECTED_BY

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.registration_id,
            "hash": self.fingerprint,
            "fileName": self.name,
            "sizeBytes": self.size_bytes,
            "detectedBy": self.detected_by,
            "registrationDate": self.registered_at,
            "result": self.result.to_dict(),
        }


# =============================================================================
# Registry Interface
# =============================================================================

class VerdictRegistry(Protocol):
    """Store of prior verdicts, queried by artifact fingerprint."""

    def lookup(self, fingerprint: str) -> Optional[RegistryRecord]:
        ...

    def register(
        self, artifact: ArtifactDescriptor, result: AnalysisResult
    ) -> RegistryRecord:
        ...


class InMemoryRegistry:
    """
    Registry held in a dictionary for the lifetime of the process.

    Safe to share between the threads of a batch. Registering an artifact
    that is already present replaces its record.
    """

    def __init__(self) -> None:
        self._records: Dict[str, RegistryRecord] = {}
        self._lock = threading.Lock()

    def lookup(self, fingerprint: str) -> Optional[RegistryRecord]:
        with self._lock:
            return self._records.get(fingerprint)

    def register(
        self, artifact: ArtifactDescriptor, result: AnalysisResult
    ) -> RegistryRecord:
        fingerprint = artifact_fingerprint(artifact.name, artifact.size_bytes)
        record = RegistryRecord(
            fingerprint=fingerprint,
            registration_id=f"FAKE-{fingerprint[-8:].upper()}",
            name=artifact.name,
            size_bytes=artifact.size_bytes,
            result=result,
            registered_at=datetime.now(timezone.utc).isoformat(),
        )
        with self._lock:
            self._records[fingerprint] = record
        logger.info(f"Registered {artifact.name} as {record.registration_id}")
        return record

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
        logger.info("Verdict registry cleared")

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __iter__(self) -> Iterator[RegistryRecord]:
        with self._lock:
            return iter(list(self._records.values()))

    def __repr__(self) -> str:
        return f"InMemoryRegistry(records={len(self)})"
