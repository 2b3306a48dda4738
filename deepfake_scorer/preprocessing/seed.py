"""
Artifact Seed Module
=====================

Derives a reproducible seed from artifact identity (name + size) so that
repeated analysis of the same artifact yields the same sub-scores.

The hash is the classic 31-multiplier rolling hash over UTF-16 code units
with signed 32-bit wraparound, so any client that hashes UTF-16 code units
the same way derives the same seed.

Characters outside the Basic Multilingual Plane contribute their two
surrogate code units, so hashing by Unicode code point (or UTF-8 bytes)
would give different seeds.

Example Usage:
    >>> from deepfake_scorer.preprocessing.seed import artifact_hash, seed
    >>> artifact_hash("a", 1)
    3056
    >>> seed("a", 1) == 3056 / 2147483647
    True
"""

from __future__ import annotations

from typing import Iterator

INT32_MAX = 2 ** 31 - 1
_UINT32_MASK = 0xFFFFFFFF


def utf16_code_units(text: str) -> Iterator[int]:
    """Yield the UTF-16 code units of ``text``."""
    data = text.encode("utf-16-le", errors="surrogatepass")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def _to_int32(value: int) -> int:
    value &= _UINT32_MASK
    return value - 0x100000000 if value & 0x80000000 else value


def artifact_hash(name: str, size_bytes: int) -> int:
    """
    Signed 32-bit rolling hash of ``name`` followed by the decimal size.

    Args:
        name: Artifact name, case preserved.
        size_bytes: Artifact size in bytes.

    Returns:
        Hash value in [-2**31, 2**31 - 1].
    """
    h = 0
    for unit in utf16_code_units(f"{name}{size_bytes}"):
        h = _to_int32((h << 5) - h + unit)
    return h


def seed(name: str, size_bytes: int) -> float:
    """
    Normalized seed in [0, 1] for an artifact.

    ``abs(h) / 2147483647``; the single value ``h == -2**31`` would land
    just above 1.0 and is clamped.
    """
    return min(abs(artifact_hash(name, size_bytes)) / INT32_MAX, 1.0)
