"""
Filename keyword sets.

Strong AI keywords gate every extractor between its suspicious and benign
branch and feed the positive filename bias. Authentic signals only feed the
negative bias. Matching is case-insensitive substring matching, so short
keywords such as "ai" also match inside longer words ("mountain").
"""

from __future__ import annotations

import posixpath
from typing import Tuple

STRONG_AI_KEYWORDS: Tuple[str, ...] = (
    "ai",
    "generated",
    "synthetic",
    "deepfake",
    "fake",
    "artificial",
    "gan",
    "stylegan",
    "midjourney",
    "stable",
    "sora",
    "runway",
    "synthesia",
    "neural",
    "diffusion",
)

AUTHENTIC_KEYWORDS: Tuple[str, ...] = (
    "real",
    "authentic",
    "original",
    "camera",
    "phone",
    "recording",
)

# Default names written by cameras and phones
AUTHENTIC_PREFIXES: Tuple[str, ...] = (
    "vid_",
    "img_",
    "dsc",
    "mov_",
)


def matched_ai_keywords(filename: str) -> Tuple[str, ...]:
    """Strong AI keywords contained in ``filename``."""
    lowered = filename.lower()
    return tuple(k for k in STRONG_AI_KEYWORDS if k in lowered)


def has_strong_ai_keywords(filename: str) -> bool:
    return any(k in filename.lower() for k in STRONG_AI_KEYWORDS)


def matched_authentic_signals(filename: str) -> Tuple[str, ...]:
    """Authentic keywords and camera-style prefixes found in ``filename``."""
    lowered = filename.lower()
    basename = posixpath.basename(lowered.replace("\\", "/"))
    signals = [k for k in AUTHENTIC_KEYWORDS if k in lowered]
    signals.extend(p for p in AUTHENTIC_PREFIXES if basename.startswith(p))
    return tuple(signals)
