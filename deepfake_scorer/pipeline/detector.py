"""
Video Analyzer Module
======================

The caller-side boundary around the scoring engine. It owns everything
the pure engine deliberately does not:
    - Input validation against configured limits
    - Optional simulated latency
    - Per-call timeouts
    - Concurrent batch analysis
    - Prior verdict lookup and registration of confident deepfakes
    - Logging of verdicts

Example Usage:
    >>> from deepfake_scorer.pipeline.detector import VideoAnalyzer
    >>> analyzer = VideoAnalyzer()
    >>> result = analyzer.analyze("family_vacation.mp4", 52428800)
    >>> print(result)
    AnalysisResult(AUTHENTIC, confidence=...%)
"""

from __future__ import annotations

from concurrent.futures import (
    ThreadPoolExecutor,
    TimeoutError as FutureTimeoutError,
    as_completed,
)
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from deepfake_scorer.pipeline.engine import DEFAULT_MODEL_VERSIONS, ScoringEngine
from deepfake_scorer.pipeline.latency import LatencyPolicy, NoLatency, SimulatedLatency
from deepfake_scorer.pipeline.registry import (
    AUTO_REGISTER_CONFIDENCE,
    InMemoryRegistry,
    RegistryRecord,
    VerdictRegistry,
    artifact_fingerprint,
    should_register,
)
from deepfake_scorer.pipeline.result import AnalysisResult
from deepfake_scorer.preprocessing.artifact import MAX_SIZE_BYTES, ArtifactDescriptor
from deepfake_scorer.utils.config import Config, get_default_config, load_config
from deepfake_scorer.utils.exceptions import (
    AnalysisTimeoutError,
    DeepfakeScorerError,
    InvalidInputError,
)
from deepfake_scorer.utils.logging import get_logger, log_execution_time

logger = get_logger(__name__)

BatchInput = Union[ArtifactDescriptor, Tuple[str, int], str, Path]


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class BatchEntry:
    """
    Outcome of one artifact in a batch.

    Attributes:
        name: Artifact name (or the offending input when it was rejected).
        size_bytes: Artifact size, if known.
        result: Analysis result on success.
        error: Error dictionary on failure.
    """
    name: str
    size_bytes: Optional[int] = None
    result: Optional[AnalysisResult] = None
    error: Optional[Dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.result is not None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "sizeBytes": self.size_bytes}
        if self.result is not None:
            data["result"] = self.result.to_dict()
        if self.error is not None:
            data["error"] = self.error
        return data


# =============================================================================
# Video Analyzer
# =============================================================================

class VideoAnalyzer:
    """
    Configured entry point for scoring video artifacts.

    Attributes:
        config: Analyzer configuration.
        engine: The pure scoring engine.
        latency: Latency policy applied before scoring.
        timeout: Per-call timeout in seconds (None disables it).
        max_workers: Thread pool size for batch analysis.
        max_size_bytes: Largest accepted artifact size.
        registry: Prior verdict registry (None disables lookups).
        auto_register_confidence: Smallest deepfake confidence registered.

    Example:
        >>> analyzer = VideoAnalyzer(latency=SimulatedLatency(scale=0.001))
        >>> analyzer.analyze_path("videos/interview.mov").is_deepfake
        False
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        config_path: Optional[Union[str, Path]] = None,
        engine: Optional[ScoringEngine] = None,
        latency: Optional[LatencyPolicy] = None,
        timeout: Optional[float] = None,
        max_workers: Optional[int] = None,
        registry: Optional[VerdictRegistry] = None,
    ) -> None:
        """
        Initialize the analyzer.

        Args:
            config: Configuration object; takes precedence over config_path.
            config_path: Path to a YAML configuration file.
            engine: Scoring engine override.
            latency: Latency policy override.
            timeout: Timeout override in seconds.
            max_workers: Batch thread pool size override.
            registry: Verdict registry override. Without one, an in-memory
                registry is created when ``registry.enabled`` is set.
        """
        if config is None:
            config = load_config(config_path) if config_path else get_default_config()
        self.config = config

        self.engine = engine or ScoringEngine(
            model_versions=config.get("models.versions") or DEFAULT_MODEL_VERSIONS,
            model_count=int(config.get("models.count", 3)),
        )
        self.latency = latency if latency is not None else self._latency_from_config()
        self.timeout = timeout if timeout is not None else config.get(
            "analysis.timeout_seconds"
        )
        self.max_workers = int(
            max_workers
            if max_workers is not None
            else config.get("analysis.max_workers", 4)
        )
        self.max_size_bytes = int(
            config.get("validation.max_size_bytes", MAX_SIZE_BYTES)
        )
        if registry is None and config.get("registry.enabled", False):
            registry = InMemoryRegistry()
        self.registry = registry
        self.auto_register_confidence = int(
            config.get("registry.auto_register_confidence", AUTO_REGISTER_CONFIDENCE)
        )

        if self.timeout is not None and self.timeout <= 0:
            raise InvalidInputError(
                "Timeout must be positive", field="timeout", value=self.timeout
            )
        _check_workers(self.max_workers)

        logger.info(
            f"VideoAnalyzer initialized: latency={self.latency!r}, "
            f"timeout={self.timeout}, max_workers={self.max_workers}, "
            f"registry={self.registry!r}"
        )

    def _latency_from_config(self) -> LatencyPolicy:
        if not self.config.get("latency.enabled", False):
            return NoLatency()
        return SimulatedLatency(
            base_ms=self.config.get("latency.base_ms", 3000),
            per_mb_ms=self.config.get("latency.per_mb_ms", 100),
            max_ms=self.config.get("latency.max_ms", 8000),
            scale=self.config.get("latency.scale", 1.0),
        )

    # -------------------------------------------------------------------------
    # Single artifact
    # -------------------------------------------------------------------------

    def validate(self, artifact: ArtifactDescriptor) -> ArtifactDescriptor:
        """
        Apply the configured size limit.

        Raises:
            InvalidInputError: If the artifact is larger than max_size_bytes.
        """
        if artifact.size_bytes > self.max_size_bytes:
            raise InvalidInputError(
                f"Artifact size {artifact.size_bytes} exceeds the maximum of "
                f"{self.max_size_bytes} bytes",
                field="size_bytes",
                value=artifact.size_bytes,
            )
        return artifact

    def analyze(self, name: str, size_bytes: int) -> AnalysisResult:
        """
        Analyze an artifact given its metadata.

        Raises:
            InvalidInputError: If the metadata is rejected.
            AnalysisTimeoutError: If the call exceeds the timeout.
        """
        return self.analyze_artifact(ArtifactDescriptor(name, size_bytes))

    def analyze_path(self, path: Union[str, Path]) -> AnalysisResult:
        """Analyze a file on disk by name and size; contents are not read."""
        return self.analyze_artifact(ArtifactDescriptor.from_path(path))

    @log_execution_time()
    def analyze_artifact(self, artifact: ArtifactDescriptor) -> AnalysisResult:
        """
        Analyze a validated artifact descriptor.

        A verdict already in the registry is returned without scoring.
        New deepfake verdicts at or above the auto-register confidence
        are added to the registry.

        Raises:
            InvalidInputError: If the artifact exceeds the size limit.
            AnalysisTimeoutError: If the call exceeds the timeout.
        """
        self.validate(artifact)

        record = self.check_registry(artifact)
        if record is not None:
            logger.info(
                f"Registry match: {artifact.name} -> {record.registration_id} "
                f"({record.result.label}, {record.result.confidence}%)"
            )
            return record.result

        logger.info(f"Analyzing: {artifact.name} ({artifact.size_mb:.2f} MB)")

        if self.timeout is None:
            result = self._run(artifact)
        else:
            result = self._run_with_timeout(artifact, self.timeout)

        logger.info(
            f"Analysis complete: {artifact.name} -> {result.label} "
            f"({result.confidence}%, {len(result.detection_reasons)} reasons)"
        )

        if self.registry is not None and should_register(
            result, self.auto_register_confidence
        ):
            self.registry.register(artifact, result)
        return result

    def check_registry(
        self, artifact: ArtifactDescriptor
    ) -> Optional[RegistryRecord]:
        """Return the registered record for an artifact, if any."""
        if self.registry is None:
            return None
        return self.registry.lookup(
            artifact_fingerprint(artifact.name, artifact.size_bytes)
        )

    def _run(self, artifact: ArtifactDescriptor) -> AnalysisResult:
        self.latency.apply(artifact)
        return self.engine.score(artifact)

    def _run_with_timeout(
        self, artifact: ArtifactDescriptor, timeout: float
    ) -> AnalysisResult:
        executor = ThreadPoolExecutor(max_workers=1)
        future = executor.submit(self._run, artifact)
        try:
            return future.result(timeout=timeout)
        except FutureTimeoutError as e:
            future.cancel()
            raise AnalysisTimeoutError(
                f"Analysis of {artifact.name} timed out after {timeout}s",
                artifact_name=artifact.name,
                timeout=timeout,
                cause=e,
            )
        finally:
            executor.shutdown(wait=False)

    # -------------------------------------------------------------------------
    # Batch
    # -------------------------------------------------------------------------

    def analyze_batch(
        self,
        items: Iterable[BatchInput],
        max_workers: Optional[int] = None,
        on_complete: Optional[Callable[[BatchEntry], None]] = None,
    ) -> List[BatchEntry]:
        """
        Analyze many artifacts concurrently.

        Each item may be an ArtifactDescriptor, a (name, size) tuple, or a
        path. Failures are recorded on the entry instead of aborting the
        batch. Entries keep the input order.

        Args:
            items: Artifacts to analyze.
            max_workers: Thread pool size override.
            on_complete: Called with each entry as soon as it finishes.

        Returns:
            One BatchEntry per input item.
        """
        items = list(items)
        workers = max_workers if max_workers is not None else self.max_workers
        _check_workers(workers)
        entries: List[Optional[BatchEntry]] = [None] * len(items)

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(self._analyze_entry, item): index
                for index, item in enumerate(items)
            }
            for future in as_completed(futures):
                entry = future.result()
                entries[futures[future]] = entry
                if on_complete is not None:
                    on_complete(entry)

        failed = sum(1 for e in entries if not e.ok)
        flagged = sum(1 for e in entries if e.ok and e.result.is_deepfake)
        logger.info(
            f"Batch complete: {len(entries)} artifacts, "
            f"{flagged} flagged, {failed} failed"
        )
        return entries

    def _analyze_entry(self, item: BatchInput) -> BatchEntry:
        name, size = _describe(item)
        try:
            artifact = _to_artifact(item)
            return BatchEntry(
                name=artifact.name,
                size_bytes=artifact.size_bytes,
                result=self.analyze_artifact(artifact),
            )
        except DeepfakeScorerError as e:
            logger.warning(f"Analysis failed for {name}: {e}")
            return BatchEntry(name=name, size_bytes=size, error=e.to_dict())


def _check_workers(workers: int) -> None:
    if workers < 1:
        raise InvalidInputError(
            "max_workers must be at least 1", field="max_workers", value=workers
        )


def _describe(item: BatchInput) -> Tuple[str, Optional[int]]:
    if isinstance(item, ArtifactDescriptor):
        return item.name, item.size_bytes
    if isinstance(item, tuple) and len(item) == 2:
        size = item[1] if isinstance(item[1], int) else None
        return str(item[0]), size
    return str(item), None


def _to_artifact(item: BatchInput) -> ArtifactDescriptor:
    if isinstance(item, ArtifactDescriptor):
        return item
    if isinstance(item, tuple):
        if len(item) != 2:
            raise InvalidInputError(
                "Batch tuples must be (name, size_bytes)", field="item", value=item
            )
        return ArtifactDescriptor(item[0], item[1])
    if isinstance(item, (str, Path)):
        return ArtifactDescriptor.from_path(item)
    raise InvalidInputError(
        f"Unsupported batch item type: {type(item).__name__}",
        field="item",
        value=item,
    )


# =============================================================================
# Service Factory
# =============================================================================

def create_analyzer(config: Optional[Dict[str, Any]] = None) -> VideoAnalyzer:
    """
    Factory function to create a VideoAnalyzer from a plain dictionary.

    Args:
        config: Configuration dictionary, merged over the defaults.

    Returns:
        Configured VideoAnalyzer instance.
    """
    merged = get_default_config()
    if config:
        merged.update(config)
    return VideoAnalyzer(config=merged)
