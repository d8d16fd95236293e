from __future__ import annotations

import re
from typing import Dict, FrozenSet, List, Sequence, Tuple

from .errors import InvalidNote, UnknownQuality
from .pitch import PitchSet, note_to_semi, pitchnum

# Chord qualities as semitone offsets above the root, ascending
QUALITIES: Dict[str, Tuple[int, ...]] = {
    "": (0, 4, 7),
    "m": (0, 3, 7),
    "dim": (0, 3, 6),
    "aug": (0, 4, 8),
    "sus2": (0, 2, 7),
    "sus4": (0, 5, 7),
    "6": (0, 4, 7, 9),
    "m6": (0, 3, 7, 9),
    "7": (0, 4, 7, 10),
    "m7": (0, 3, 7, 10),
    "maj7": (0, 4, 7, 11),
    "M7": (0, 4, 7, 11),
    "m7b5": (0, 3, 6, 10),
    "dim7": (0, 3, 6, 9),
    "7sus4": (0, 5, 7, 10),
    "add9": (0, 4, 7, 14),
    "9": (0, 4, 7, 10, 14),
}

# Qualities the seventh-chord Neo-Riemannian operators apply to
SEVENTH_QUALITIES = frozenset({"7", "m7b5"})
# Qualities P/R/L and their compounds apply to
TRIAD_QUALITIES = frozenset({"", "m"})


def build_chord(note: str, octave: int, quality: str = "") -> PitchSet:
    """Return the close-position pitch numbers of ``note``+``quality``.

    Examples:
      ("C", 4, "") -> (60, 64, 67)
      ("C", 4, "7") -> (60, 64, 67, 70)
    """
    if quality not in QUALITIES:
        raise UnknownQuality(f"unknown chord quality '{quality}'")
    root = pitchnum(f"{note}{int(octave)}")
    chord = tuple(root + i for i in QUALITIES[quality])
    if chord[-1] > 127:
        raise InvalidNote(f"{note}{octave}{quality} reaches pitch {chord[-1]}, outside 0..127")
    return chord


# Interval sets recognised by the namer, with the suffix it prints.
# Suffixes use the namer's own spelling ("o" for diminished, "6/9"), which
# normalize_chord_name() tidies up for display.
_NAMES: List[Tuple[FrozenSet[int], str]] = [
    (frozenset({0, 4, 7}), ""),
    (frozenset({0, 3, 7}), "m"),
    (frozenset({0, 3, 6}), " o"),
    (frozenset({0, 4, 8}), "+"),
    (frozenset({0, 2, 7}), "sus2"),
    (frozenset({0, 5, 7}), "sus4"),
    (frozenset({0, 4, 10}), "7"),
    (frozenset({0, 4, 7, 10}), "7"),
    (frozenset({0, 3, 7, 10}), "m7"),
    (frozenset({0, 4, 7, 11}), "maj7"),
    (frozenset({0, 3, 6, 10}), "m7b5"),
    (frozenset({0, 3, 6, 9}), "o7"),
    (frozenset({0, 3, 7, 11}), "m maj7"),
    (frozenset({0, 4, 8, 10}), "+7"),
    (frozenset({0, 5, 7, 10}), "7sus4"),
    (frozenset({0, 4, 7, 9}), "6"),
    (frozenset({0, 3, 7, 9}), "m6"),
    (frozenset({0, 2, 4, 7}), "add9"),
    (frozenset({0, 2, 4, 7, 9}), "6/9"),
    (frozenset({0, 2, 4, 7, 10}), "9"),
]


def chord_name(names: Sequence[str]) -> str:
    """Best-effort chord symbol for bare note names, first name in the bass.

    A root-position match wins; otherwise the first voice that roots a known
    chord is used and the bass is appended after a slash. Unrecognised sets
    fall back to ``"<bass>?"``.
    """
    if not names:
        return "?"
    bass = names[0]
    pcs = [note_to_semi(n) for n in names]
    for i, root in enumerate(pcs):
        rel = frozenset((pc - root) % 12 for pc in pcs)
        for shape, suffix in _NAMES:
            if rel == shape:
                label = f"{names[i]}{suffix}"
                return label if i == 0 else f"{label}/{bass}"
    return f"{bass}?"


# Applied in order, each to its first occurrence only
_NAME_RULES: List[Tuple[re.Pattern, str]] = [
    (re.compile(r"\s+"), ""),
    (re.compile(r"-6"), "6"),
    (re.compile(r"o"), "dim"),
    (re.compile(r"^(.+)/(\d+)$"), r"\1\2"),
]


def normalize_chord_name(name: str) -> str:
    for pattern, repl in _NAME_RULES:
        name = pattern.sub(repl, name, count=1)
    return name
