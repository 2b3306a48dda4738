"""
Feature Extractor Tests
========================

Tests for the seven simulated analyzers. A constant noise source pins
every draw so the scoring formulas can be checked exactly.
"""

import numpy as np
import pytest

from conftest import ConstantNoise
from deepfake_scorer.features import EXTRACTORS
from deepfake_scorer.features.artifacts import extract_artifacts, size_bump
from deepfake_scorer.features.base import (
    EyeBlinkPattern,
    Feature,
    FeatureScore,
    SeededNoise,
    clamp,
    round_half_up,
)
from deepfake_scorer.features.facial import (
    extract_eye_blink,
    extract_frame_distortion,
    extract_lighting,
    extract_lip_sync,
    extract_texture,
)
from deepfake_scorer.features.temporal import extract_temporal

MB = 1024 * 1024
AI_NAME = "deepfake_clip.mp4"
PLAIN_NAME = "holiday.mp4"


class TestPrimitives:
    """Test shared helpers and types."""

    def test_clamp(self):
        """Test clamping to the unit interval and custom bounds."""
        assert clamp(1.5) == 1.0
        assert clamp(-0.1) == 0.0
        assert clamp(0.3, -0.2, 0.2) == 0.2
        assert isinstance(clamp(np.float64(0.5)), float)

    @pytest.mark.parametrize(
        "value,expected", [(0.5, 1), (1.49, 1), (2.5, 3), (74.5, 75), (0.0, 0)]
    )
    def test_round_half_up(self, value, expected):
        """Test halves round up rather than to even."""
        assert round_half_up(value) == expected

    def test_feature_order_and_streams(self):
        """Test evaluation order and distinct noise streams."""
        assert [f.value for f in Feature] == [
            "frame_distortion",
            "eye_blink",
            "texture",
            "temporal",
            "artifacts",
            "lip_sync",
            "lighting",
        ]
        assert [f.stream_id for f in Feature] == [1, 2, 3, 4, 5, 6, 7]

    def test_feature_score_rejects_out_of_range(self):
        """Test suspicion must lie in [0, 1]."""
        with pytest.raises(ValueError):
            FeatureScore(Feature.TEXTURE, 1.01)
        with pytest.raises(ValueError):
            FeatureScore(Feature.TEXTURE, -0.01)

    def test_feature_score_is_immutable(self):
        """Test scores and their metrics cannot be modified."""
        score = FeatureScore(Feature.ARTIFACTS, 0.5, metrics={"edge": 0.4})
        with pytest.raises(Exception):
            score.suspicion = 0.9
        with pytest.raises(TypeError):
            score.metrics["edge"] = 0.9


class TestSeededNoise:
    """Test the deterministic noise source."""

    def test_same_hash_same_draws(self):
        """Test identical hashes reproduce identical draws."""
        a = SeededNoise(12345).draws(Feature.TEXTURE, 3)
        b = SeededNoise(12345).draws(Feature.TEXTURE, 3)
        np.testing.assert_array_equal(a, b)

    def test_sign_of_hash_ignored(self):
        """Test the hash magnitude keys the generator."""
        np.testing.assert_array_equal(
            SeededNoise(-777).draws(Feature.LIGHTING, 2),
            SeededNoise(777).draws(Feature.LIGHTING, 2),
        )

    def test_streams_are_independent(self):
        """Test features draw from separate streams."""
        noise = SeededNoise(42)
        assert noise.draws(Feature.TEXTURE, 1)[0] != noise.draws(Feature.TEMPORAL, 1)[0]

    def test_draws_in_unit_interval(self):
        """Test draws are uniform values in [0, 1)."""
        draws = SeededNoise(2 ** 31).draws(None, 1000)
        assert draws.min() >= 0.0
        assert draws.max() < 1.0


class TestFacialExtractors:
    """Test the facial signal extractors."""

    def test_frame_distortion_suspicious(self):
        """Test the suspicious branch and its reason."""
        score = extract_frame_distortion(AI_NAME, MB, 0.5, ConstantNoise(0.5))
        assert score.feature is Feature.FRAME_DISTORTION
        assert score.suspicion == pytest.approx(0.8)
        assert score.reasons == (
            "Facial landmark distortion across frames (80% suspicion)",
        )

    def test_frame_distortion_benign(self):
        """Test the benign branch stays low and silent."""
        score = extract_frame_distortion(PLAIN_NAME, MB, 0.5, ConstantNoise(0.5))
        assert score.suspicion == pytest.approx(0.125)
        assert score.reasons == ()

    @pytest.mark.parametrize(
        "seed,u,pattern,suspicion",
        [
            (0.2, 0.0, EyeBlinkPattern.ABSENT, 0.8),
            (0.6, 0.6, EyeBlinkPattern.IRREGULAR, 0.72),
            (1.0, 0.9, EyeBlinkPattern.NATURAL, 0.48),
        ],
    )
    def test_eye_blink_suspicious_bands(self, seed, u, pattern, suspicion):
        """Test blink bands on the suspicious branch."""
        score = extract_eye_blink(AI_NAME, MB, seed, ConstantNoise(u))
        assert score.pattern is pattern
        assert score.suspicion == pytest.approx(suspicion)

    @pytest.mark.parametrize(
        "seed,u,pattern,suspicion",
        [
            (0.05, 0.0, EyeBlinkPattern.ABSENT, 0.6),
            (0.2, 0.1, EyeBlinkPattern.IRREGULAR, 0.36),
            (0.9, 0.5, EyeBlinkPattern.NATURAL, 0.125),
        ],
    )
    def test_eye_blink_benign_bands(self, seed, u, pattern, suspicion):
        """Test blink bands on the benign branch."""
        score = extract_eye_blink(PLAIN_NAME, MB, seed, ConstantNoise(u))
        assert score.pattern is pattern
        assert score.suspicion == pytest.approx(suspicion)
        assert score.reasons == ()

    def test_eye_blink_reason_names_pattern(self):
        """Test the blink reason includes the pattern label."""
        score = extract_eye_blink(AI_NAME, MB, 0.2, ConstantNoise(0.0))
        assert score.reasons == ("Abnormal eye blink pattern (absent) (80% suspicion)",)

    def test_texture(self):
        """Test texture branches and reason."""
        score = extract_texture(AI_NAME, MB, 0.4, ConstantNoise(0.5))
        assert score.suspicion == pytest.approx(0.75)
        assert score.reasons == ("Unnatural skin texture patterns (75% suspicion)",)

        benign = extract_texture(PLAIN_NAME, MB, 0.4, ConstantNoise(0.5))
        assert benign.suspicion == pytest.approx(0.14)
        assert benign.reasons == ()

    def test_lip_sync_threshold(self):
        """Test lip-sync only reports mismatch above 0.7."""
        high = extract_lip_sync(AI_NAME, MB, 0.4, ConstantNoise(0.5))
        assert high.suspicion == pytest.approx(0.75)
        assert high.reasons == ("Poor audio-visual lip synchronization (75% mismatch)",)

        moderate = extract_lip_sync(AI_NAME, MB, 0.2, ConstantNoise(0.2))
        assert moderate.suspicion == pytest.approx(0.64)
        assert moderate.reasons == ()

    def test_lighting_never_reports(self):
        """Test lighting contributes a score but no reason."""
        score = extract_lighting(AI_NAME, MB, 1.0, ConstantNoise(0.99))
        assert score.suspicion == pytest.approx(0.45 + 0.25 + 0.198)
        assert score.reasons == ()

        benign = extract_lighting(PLAIN_NAME, MB, 1.0, ConstantNoise(0.0))
        assert benign.suspicion == pytest.approx(0.05)


class TestTemporalExtractor:
    """Test the temporal consistency extractor."""

    def test_suspicious(self):
        score = extract_temporal(AI_NAME, MB, 0.5, ConstantNoise(0.5))
        assert score.suspicion == pytest.approx(0.75)
        assert score.reasons == (
            "Temporal inconsistencies between consecutive frames (75% suspicion)",
        )

    def test_benign(self):
        score = extract_temporal(PLAIN_NAME, MB, 1.0, ConstantNoise(1.0))
        assert score.suspicion == pytest.approx(0.25)
        assert score.reasons == ()


class TestArtifactExtractor:
    """Test the encoding artifact extractor."""

    @pytest.mark.parametrize(
        "size,bump",
        [
            (0, 0.2),
            (2 * MB - 1, 0.2),
            (2 * MB, 0.0),
            (100 * MB, 0.0),
            (100 * MB + 1, 0.1),
        ],
    )
    def test_size_bump(self, size, bump):
        """Test size bands for the compression bump."""
        assert size_bump(size) == bump

    def test_suspicious_mean_of_sub_scores(self):
        """Test the suspicion is the mean of the three sub-scores."""
        score = extract_artifacts(AI_NAME, 50 * MB, 0.5, ConstantNoise(0.5))
        assert score.metrics["compression"] == pytest.approx(0.65)
        assert score.metrics["edge"] == pytest.approx(0.65)
        assert score.metrics["frequency"] == pytest.approx(0.65)
        assert score.suspicion == pytest.approx(0.65)
        assert score.reasons == ()

    def test_small_file_raises_compression(self):
        """Test small files push compression suspicion up."""
        score = extract_artifacts(PLAIN_NAME, 1, 0.0, ConstantNoise(0.0))
        assert score.metrics["compression"] == pytest.approx(0.25)
        assert score.suspicion == pytest.approx((0.25 + 0.05 + 0.05) / 3)

    def test_compression_clamped(self):
        """Test the bump cannot push compression above 1."""
        score = extract_artifacts(AI_NAME, 1, 1.0, ConstantNoise(1.5))
        assert score.metrics["compression"] == 1.0


class TestExtractorRegistry:
    """Test properties shared by every extractor."""

    def test_registry_covers_every_feature(self):
        """Test the registry is complete and in evaluation order."""
        assert list(EXTRACTORS) == list(Feature)

    @pytest.mark.parametrize("value", [0.0, 0.25, 0.5, 0.999999])
    @pytest.mark.parametrize("name", [AI_NAME, PLAIN_NAME])
    @pytest.mark.parametrize("seed", [0.0, 0.5, 1.0])
    def test_scores_bounded(self, name, seed, value):
        """Test every extractor stays in [0, 1] across inputs."""
        for feature, extract in EXTRACTORS.items():
            score = extract(name, 1, seed, ConstantNoise(value))
            assert score.feature is feature
            assert 0.0 <= score.suspicion <= 1.0

    def test_extractors_use_own_stream(self):
        """Test each extractor draws only from its own stream."""
        for feature, extract in EXTRACTORS.items():
            noise = ConstantNoise(0.5)
            extract(AI_NAME, MB, 0.5, noise)
            assert {f for f, _ in noise.calls} == {feature}

    def test_suspicious_branch_dominates(self):
        """Test AI keywords score higher than plain names for equal draws."""
        for extract in EXTRACTORS.values():
            for value in (0.0, 0.5, 0.99):
                ai = extract(AI_NAME, 50 * MB, 0.5, ConstantNoise(value))
                plain = extract(PLAIN_NAME, 50 * MB, 0.5, ConstantNoise(value))
                assert ai.suspicion >= plain.suspicion
