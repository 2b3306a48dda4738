"""
Keyword and Filename Bias Tests
================================
"""

import pytest

from deepfake_scorer.classifier.bias import filename_bias
from deepfake_scorer.features.keywords import (
    has_strong_ai_keywords,
    matched_ai_keywords,
    matched_authentic_signals,
)


class TestKeywordMatching:
    """Test keyword detection in filenames."""

    def test_strong_keywords_detected(self):
        """Test AI keywords are found case-insensitively."""
        assert has_strong_ai_keywords("My_DeepFake_Test.MP4")
        assert matched_ai_keywords("ai_generated_output.mp4") == ("ai", "generated")

    def test_substring_matching(self):
        """Test short keywords also match inside longer words."""
        assert has_strong_ai_keywords("mountain_view.mp4")

    def test_no_keywords(self):
        """Test ordinary names carry no keywords."""
        assert not has_strong_ai_keywords("family_vacation.mp4")
        assert matched_authentic_signals("family_vacation.mp4") == ()

    def test_authentic_keywords(self):
        """Test authentic keywords are matched."""
        assert matched_authentic_signals("original_camera_recording.mov") == (
            "original",
            "camera",
            "recording",
        )

    @pytest.mark.parametrize(
        "name", ["VID_20240101.mp4", "IMG_0042.mov", "DSC00123.mp4", "MOV_0001.mp4"]
    )
    def test_camera_prefixes(self, name):
        """Test camera-style default names count as authentic."""
        assert matched_authentic_signals(name)

    def test_prefix_only_at_start_of_basename(self):
        """Test prefixes are not matched mid-name."""
        assert matched_authentic_signals("my_vid_clip.mp4") == ()
        assert matched_authentic_signals("uploads/vid_clip.mp4") == ("vid_",)


class TestFilenameBias:
    """Test the bounded filename bias."""

    def test_neutral_name(self):
        """Test names without signals have zero bias."""
        assert filename_bias("family_vacation.mp4") == 0.0

    def test_positive_bias(self):
        """Test AI keywords raise the bias by 0.1 each."""
        assert filename_bias("gan_clip.mp4") == pytest.approx(0.1)
        assert filename_bias("ai_generated_output.mp4") == pytest.approx(0.2)

    def test_negative_bias(self):
        """Test authentic signals lower the bias by 0.05 each."""
        assert filename_bias("original_interview.mov") == pytest.approx(-0.05)

    def test_bias_clamped(self):
        """Test many matches never exceed the bounds."""
        ai_name = "ai_generated_synthetic_deepfake_sora_runway.mp4"
        assert filename_bias(ai_name) == pytest.approx(0.2)

        authentic_name = "vid_real_authentic_original_camera_phone_recording.mov"
        assert filename_bias(authentic_name) == pytest.approx(-0.2)

    def test_mixed_signals(self):
        """Test positive and negative matches offset each other."""
        # "deepfake" and "fake" both match
        assert filename_bias("real_deepfake.mp4") == pytest.approx(0.15)
