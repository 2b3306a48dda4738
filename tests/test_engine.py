"""
Scoring Engine Tests
=====================

End-to-end tests for the deterministic scoring engine: reference
scenarios, reproducibility and output invariants.
"""

import json

import pytest

from conftest import ConstantNoise
from deepfake_scorer.classifier.bias import filename_bias
from deepfake_scorer.features.base import EyeBlinkPattern, Feature, FeatureScore
from deepfake_scorer.features import EXTRACTORS
from deepfake_scorer.pipeline.engine import DEFAULT_MODEL_VERSIONS, ScoringEngine
from deepfake_scorer.pipeline.latency import estimate_processing_time_ms
from deepfake_scorer.preprocessing.artifact import ArtifactDescriptor

MB = 1024 * 1024

SAMPLE_NAMES = [
    "family_vacation.mp4",
    "ai_generated_output.mp4",
    "original_interview.mov",
    "VID_20240317_101500.mp4",
    "stylegan_face_swap.webm",
    "wedding_speech_final.mov",
    "sora_demo.mp4",
    "vidéo_😀.mp4",
    "mountain_timelapse.mkv",
    "x",
]
SAMPLE_SIZES = [0, 1, 2 * MB - 1, 2 * MB, 50 * MB, 100 * MB + 1, 5 * 1024 * MB]


class TestReferenceScenarios:
    """Test the documented end-to-end behavior."""

    def test_plain_home_video_is_authentic(self, engine):
        """Test a keyword-free name scores authentic."""
        result = engine.score(ArtifactDescriptor("family_vacation.mp4", 50 * MB))
        assert result.is_deepfake is False
        assert 60 <= result.confidence <= 100
        assert result.detection_reasons == ()

    def test_ai_named_small_file_is_deepfake(self, engine):
        """Test AI keywords and a small size flag the artifact."""
        artifact = ArtifactDescriptor("ai_generated_output.mp4", 1 * MB)
        verdict = engine.classify(artifact)
        result = engine.score(artifact)

        assert verdict.final_score > 0.6
        assert result.is_deepfake is True
        assert 1 <= len(result.detection_reasons) <= 5
        assert result.confidence == int(verdict.final_score * 100 + 0.5)

    def test_original_large_file_is_authentic(self, engine):
        """Test authentic keywords keep a large file in the low band."""
        artifact = ArtifactDescriptor("original_interview.mov", 200 * MB)
        verdict = engine.classify(artifact)
        result = engine.score(artifact)

        assert verdict.final_score <= 0.3
        assert result.is_deepfake is False
        assert result.confidence == int((1 - verdict.final_score) * 100 + 0.5)

    def test_independent_engines_agree(self):
        """Test separate engine instances give identical output."""
        artifact = ArtifactDescriptor("wedding_speech_final.mov", 73 * MB)
        first = ScoringEngine().score(artifact)
        second = ScoringEngine().score(artifact)

        assert first == second
        assert json.dumps(first.to_dict()) == json.dumps(second.to_dict())


class TestDeterminism:
    """Test reproducibility across repeated calls."""

    @pytest.mark.parametrize("name", SAMPLE_NAMES)
    def test_repeatable(self, engine, name):
        artifact = ArtifactDescriptor(name, 12 * MB)
        assert engine.score(artifact) == engine.score(artifact)

    def test_sensitive_to_size(self, engine):
        """Test size is part of the artifact identity."""
        a = engine.extract_features(ArtifactDescriptor("clip.mp4", 10 * MB))
        b = engine.extract_features(ArtifactDescriptor("clip.mp4", 10 * MB + 1))
        assert a != b

    def test_processing_time_is_modeled(self, engine):
        """Test processing time follows the size model."""
        assert engine.score(ArtifactDescriptor("clip.mp4", 1 * MB)).processing_time == 3100
        assert engine.score(ArtifactDescriptor("clip.mp4", 200 * MB)).processing_time == 8000
        assert estimate_processing_time_ms(0) == 3000


class TestOutputInvariants:
    """Test range invariants of every result."""

    @pytest.mark.parametrize("size", SAMPLE_SIZES)
    @pytest.mark.parametrize("name", SAMPLE_NAMES)
    def test_result_ranges(self, engine, name, size):
        result = engine.score(ArtifactDescriptor(name, size))
        details = result.analysis_details

        assert 0 <= result.confidence <= 100
        assert len(result.detection_reasons) <= 5
        if not result.is_deepfake:
            assert result.detection_reasons == ()
        for value in (
            details.facial_inconsistencies,
            details.temporal_anomalies,
            details.compression_artifacts,
            details.lip_sync_accuracy,
            details.skin_texture_analysis,
            details.lighting_consistency,
            details.edge_artifacts,
            details.frequency_domain_analysis,
            details.neural_network_confidence,
        ):
            assert 0.0 <= value <= 1.0
        assert isinstance(details.eye_blink_pattern, EyeBlinkPattern)
        assert details.neural_network_confidence == result.confidence / 100

    @pytest.mark.parametrize("name", SAMPLE_NAMES)
    def test_model_versions(self, engine, name):
        """Test three distinct labels drawn from the pool."""
        versions = engine.score(ArtifactDescriptor(name, 5 * MB)).model_versions
        assert len(versions) == 3
        assert len(set(versions)) == 3
        assert set(versions) <= set(DEFAULT_MODEL_VERSIONS)

    def test_inverted_presentation_fields(self, engine):
        """Test lip-sync and lighting are reported as accuracy."""
        artifact = ArtifactDescriptor("deepfake_demo.mp4", 5 * MB)
        features = {s.feature: s for s in engine.extract_features(artifact)}
        details = engine.score(artifact).analysis_details

        assert details.lip_sync_accuracy == pytest.approx(
            1 - features[Feature.LIP_SYNC].suspicion
        )
        assert details.lighting_consistency == pytest.approx(
            1 - features[Feature.LIGHTING].suspicion
        )
        assert details.facial_inconsistencies == features[Feature.FRAME_DISTORTION].suspicion

    def test_json_surface(self, engine):
        """Test the serialized record uses the documented keys."""
        data = engine.score(ArtifactDescriptor("clip.mp4", MB)).to_dict()
        assert set(data) == {
            "isDeepfake",
            "confidence",
            "detectionReasons",
            "analysisDetails",
            "modelVersions",
            "processingTime",
        }
        assert set(data["analysisDetails"]) == {
            "facialInconsistencies",
            "temporalAnomalies",
            "compressionArtifacts",
            "eyeBlinkPattern",
            "lipSyncAccuracy",
            "skinTextureAnalysis",
            "lightingConsistency",
            "edgeArtifacts",
            "frequencyDomainAnalysis",
            "neuralNetworkConfidence",
        }
        json.dumps(data)


class TestKeywordGate:
    """Test how filename keywords drive the score."""

    @pytest.mark.parametrize("size", [1 * MB, 50 * MB, 500 * MB])
    @pytest.mark.parametrize("value", [0.0, 0.5, 0.999])
    def test_keywords_raise_final_score(self, size, value):
        """Test an AI keyword adds at least the keyword bias to the score."""
        engine = ScoringEngine(noise_factory=lambda h: ConstantNoise(value))
        plain = engine.classify(ArtifactDescriptor("holiday.mp4", size))
        flagged = engine.classify(ArtifactDescriptor("holiday_deepfake.mp4", size))

        assert flagged.final_score >= min(plain.final_score + 0.1, 1.0)
        if flagged.final_score < 1.0:
            assert flagged.final_score > plain.final_score

    @pytest.mark.parametrize(
        "name",
        [
            "family_vacation.mp4",
            "original_interview.mov",
            "VID_20240317_101500.mp4",
            "wedding_speech_final.mov",
            "vidéo_😀.mp4",
            "x",
        ],
    )
    @pytest.mark.parametrize("size", [MB, 50 * MB, 500 * MB])
    def test_keyword_prefix_raises_seeded_score(self, name, size):
        """Test prefixing a name with an AI keyword raises its seeded score."""
        engine = ScoringEngine()
        plain = engine.classify(ArtifactDescriptor(name, size))
        flagged = engine.classify(ArtifactDescriptor("deepfake_" + name, size))

        assert flagged.final_score >= min(plain.final_score + 0.1, 1.0)

    @pytest.mark.parametrize("value", [0.0, 0.5, 0.999])
    def test_benign_names_never_flagged(self, value):
        """Test keyword-free names stay authentic for any draws."""
        engine = ScoringEngine(noise_factory=lambda h: ConstantNoise(value))
        for size in SAMPLE_SIZES:
            verdict = engine.classify(ArtifactDescriptor("holiday.mp4", size))
            assert verdict.is_deepfake is False

    @pytest.mark.parametrize("value", [0.0, 0.5, 0.999])
    def test_two_keywords_always_flagged(self, value):
        """Test two AI keywords flag the artifact for any draws."""
        engine = ScoringEngine(noise_factory=lambda h: ConstantNoise(value))
        for size in SAMPLE_SIZES:
            artifact = ArtifactDescriptor("synthetic_deepfake.mp4", size)
            assert filename_bias(artifact.filename) == pytest.approx(0.2)
            assert engine.classify(artifact).is_deepfake is True

    def test_uppercase_keywords_match(self, engine):
        """Test keyword matching ignores case."""
        verdict = engine.classify(ArtifactDescriptor("SYNTHETIC_DEEPFAKE.MP4", MB))
        assert verdict.is_deepfake is True


class TestEngineConfiguration:
    """Test engine construction options."""

    def test_injected_noise(self):
        """Test a constant noise source drives model selection order."""
        engine = ScoringEngine(noise_factory=lambda h: ConstantNoise(0.5))
        result = engine.score(ArtifactDescriptor("clip.mp4", MB))
        assert result.model_versions == DEFAULT_MODEL_VERSIONS[:3]

    def test_model_count_bounded(self):
        """Test the label count is clamped to the pool size."""
        artifact = ArtifactDescriptor("clip.mp4", MB)
        assert len(ScoringEngine(model_count=10).score(artifact).model_versions) == 6
        assert ScoringEngine(model_count=0).score(artifact).model_versions == ()

    def test_missing_extractor(self):
        """Test every feature needs an extractor."""
        extractors = dict(EXTRACTORS)
        del extractors[Feature.LIGHTING]
        with pytest.raises(ValueError):
            ScoringEngine(extractors=extractors)

    def test_mismatched_extractor(self):
        """Test an extractor must report its own feature."""
        extractors = dict(EXTRACTORS)
        extractors[Feature.LIGHTING] = lambda *args: FeatureScore(Feature.TEXTURE, 0.1)
        engine = ScoringEngine(extractors=extractors)
        with pytest.raises(ValueError):
            engine.score(ArtifactDescriptor("clip.mp4", MB))

    def test_repr(self, engine):
        assert "SeededNoise" in repr(engine)
