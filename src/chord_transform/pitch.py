from __future__ import annotations

import re
from typing import Tuple

from .errors import InvalidNote

PitchSet = Tuple[int, ...]

_NOTE_TO_SEMI = {
    "C": 0, "B#": 0,
    "C#": 1, "Db": 1,
    "D": 2,
    "D#": 3, "Eb": 3,
    "E": 4, "Fb": 4,
    "F": 5, "E#": 5,
    "F#": 6, "Gb": 6,
    "G": 7,
    "G#": 8, "Ab": 8,
    "A": 9,
    "A#": 10, "Bb": 10,
    "B": 11, "Cb": 11,
}

_SEMI_TO_NAME = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

_NAME_RE = re.compile(r"^([A-G][#b]?)(-?\d)$")


def note_to_semi(note: str) -> int:
    """Pitch class (0-11) of a bare note name like ``Eb`` or ``F#``."""
    raw = (note or "").strip().replace("♭", "b").replace("♯", "#")
    if raw not in _NOTE_TO_SEMI:
        raise InvalidNote(f"unknown note '{note}'")
    return _NOTE_TO_SEMI[raw]


def pitchnum(name: str) -> int:
    """Return the pitch number of an ISO note name (middle C, ``C4``, is 60).

    Examples:
      C4 -> 60, Bb3 -> 58, B#3 -> 60
    """
    m = _NAME_RE.match((name or "").strip())
    if not m:
        raise InvalidNote(f"'{name}' is not a valid note name")
    note, octave = m.group(1), int(m.group(2))
    # B#/Cb cross the octave boundary: B#3 is C4, Cb4 is B3
    num = 12 * (octave + 1) + _NOTE_TO_SEMI[note]
    if note in ("B#", "Cb"):
        num += 12 if note == "B#" else -12
    if not 0 <= num <= 127:
        raise InvalidNote(f"'{name}' is outside the pitch range 0..127")
    return num


def pitchname(num: int) -> str:
    """ISO name (sharps) for a pitch number: 61 -> C#4."""
    if not 0 <= num <= 127:
        raise InvalidNote(f"pitch number {num} is outside 0..127")
    return f"{_SEMI_TO_NAME[num % 12]}{num // 12 - 1}"


def strip_octave(name: str) -> str:
    """Drop the octave from a named pitch: ``D#4`` -> ``D#``."""
    m = _NAME_RE.match(name)
    return m.group(1) if m else name