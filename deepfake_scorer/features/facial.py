"""
Facial Signal Extractors
=========================

Simulated facial analysis. Five extractors stand in for model outputs:
    - Frame distortion (facial landmark drift across frames)
    - Eye blink pattern
    - Skin texture consistency
    - Lip-sync accuracy
    - Lighting consistency

Every extractor is a pure function of (filename, size, seed, noise). The
strong AI keyword gate picks between a suspicious branch that scores high
and a benign branch that scores low; both are clamped to [0, 1].

Example Usage:
    >>> from deepfake_scorer.features.facial import extract_eye_blink
    >>> score = extract_eye_blink("clip.mp4", 1024, 0.42, noise)
    >>> score.pattern
    <EyeBlinkPattern.NATURAL: 'natural'>
"""

from __future__ import annotations

from deepfake_scorer.features.base import (
    EyeBlinkPattern,
    Feature,
    FeatureScore,
    NoiseSource,
    clamp,
    round_half_up,
)
from deepfake_scorer.features.keywords import has_strong_ai_keywords

FRAME_DISTORTION_THRESHOLD = 0.6
EYE_BLINK_THRESHOLD = 0.6
TEXTURE_THRESHOLD = 0.6
LIP_SYNC_THRESHOLD = 0.7

# (absent cutoff, irregular cutoff) on the blended blink value
SUSPICIOUS_BLINK_BANDS = (0.5, 0.8)
BENIGN_BLINK_BANDS = (0.05, 0.2)


def _percent(value: float) -> int:
    return round_half_up(value * 100)


def extract_frame_distortion(
    filename: str, size_bytes: int, seed: float, noise: NoiseSource
) -> FeatureScore:
    """Facial landmark distortion across frames."""
    (u,) = noise.draws(Feature.FRAME_DISTORTION, 1)
    if has_strong_ai_keywords(filename):
        suspicion = clamp(0.6 + 0.2 * seed + 0.2 * u)
    else:
        suspicion = clamp(0.1 * seed + 0.15 * u)

    reasons = ()
    if suspicion > FRAME_DISTORTION_THRESHOLD:
        reasons = (
            f"Facial landmark distortion across frames "
            f"({_percent(suspicion)}% suspicion)",
        )
    return FeatureScore(Feature.FRAME_DISTORTION, suspicion, reasons)


def extract_eye_blink(
    filename: str, size_bytes: int, seed: float, noise: NoiseSource
) -> FeatureScore:
    """
    Eye blink pattern analysis.

    The seed blended with one draw selects a band: the lowest band means
    no blinking at all, the middle band irregular blinking. The suspicious
    branch lands in the low bands most of the time, the benign branch
    rarely does.
    """
    u_band, u_score = noise.draws(Feature.EYE_BLINK, 2)
    blink = (seed + u_band) / 2

    if has_strong_ai_keywords(filename):
        absent_cutoff, irregular_cutoff = SUSPICIOUS_BLINK_BANDS
        if blink < absent_cutoff:
            pattern, suspicion = EyeBlinkPattern.ABSENT, 0.8 + 0.2 * u_score
        elif blink < irregular_cutoff:
            pattern, suspicion = EyeBlinkPattern.IRREGULAR, 0.6 + 0.2 * u_score
        else:
            pattern, suspicion = EyeBlinkPattern.NATURAL, 0.3 + 0.2 * u_score
    else:
        absent_cutoff, irregular_cutoff = BENIGN_BLINK_BANDS
        if blink < absent_cutoff:
            pattern, suspicion = EyeBlinkPattern.ABSENT, 0.6 + 0.1 * u_score
        elif blink < irregular_cutoff:
            pattern, suspicion = EyeBlinkPattern.IRREGULAR, 0.35 + 0.1 * u_score
        else:
            pattern, suspicion = EyeBlinkPattern.NATURAL, 0.05 + 0.15 * u_score
    suspicion = clamp(suspicion)

    reasons = ()
    if suspicion > EYE_BLINK_THRESHOLD:
        reasons = (
            f"Abnormal eye blink pattern ({pattern.value}) "
            f"({_percent(suspicion)}% suspicion)",
        )
    return FeatureScore(Feature.EYE_BLINK, suspicion, reasons, pattern=pattern)


def extract_texture(
    filename: str, size_bytes: int, seed: float, noise: NoiseSource
) -> FeatureScore:
    """Skin texture consistency."""
    (u,) = noise.draws(Feature.TEXTURE, 1)
    if has_strong_ai_keywords(filename):
        suspicion = clamp(0.55 + 0.25 * seed + 0.2 * u)
    else:
        suspicion = clamp(0.05 + 0.1 * seed + 0.1 * u)

    reasons = ()
    if suspicion > TEXTURE_THRESHOLD:
        reasons = (
            f"Unnatural skin texture patterns ({_percent(suspicion)}% suspicion)",
        )
    return FeatureScore(Feature.TEXTURE, suspicion, reasons)


def extract_lip_sync(
    filename: str, size_bytes: int, seed: float, noise: NoiseSource
) -> FeatureScore:
    """
    Audio-visual lip synchronization.

    Suspicion is the mismatch; the result assembler reports the
    complementary accuracy.
    """
    (u,) = noise.draws(Feature.LIP_SYNC, 1)
    if has_strong_ai_keywords(filename):
        suspicion = clamp(0.55 + 0.25 * seed + 0.2 * u)
    else:
        suspicion = clamp(0.05 + 0.1 * seed + 0.1 * u)

    reasons = ()
    if suspicion > LIP_SYNC_THRESHOLD:
        reasons = (
            f"Poor audio-visual lip synchronization "
            f"({_percent(suspicion)}% mismatch)",
        )
    return FeatureScore(Feature.LIP_SYNC, suspicion, reasons)


def extract_lighting(
    filename: str, size_bytes: int, seed: float, noise: NoiseSource
) -> FeatureScore:
    """Lighting inconsistency across facial features. Never reported as a reason."""
    (u,) = noise.draws(Feature.LIGHTING, 1)
    if has_strong_ai_keywords(filename):
        suspicion = clamp(0.45 + 0.25 * seed + 0.2 * u)
    else:
        suspicion = clamp(0.05 + 0.15 * u)
    return FeatureScore(Feature.LIGHTING, suspicion)
