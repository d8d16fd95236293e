from __future__ import annotations

from typing import Sequence

from .pitch import PitchSet


def transpose(semitones: int, pitches: Sequence[int]) -> PitchSet:
    """Shift every pitch by ``semitones``, keeping voice order."""
    return tuple(p + int(semitones) for p in pitches)
