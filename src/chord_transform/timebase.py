from __future__ import annotations

"""
Timebase utilities for laying chords out on a MIDI tick grid.

Assumes PPQ (ticks per quarter note) and 4/4 time.
"""

# Note values in quarter notes, using the short names MIDI scores use
NOTE_VALUES = {
    "wn": 4.0,
    "dhn": 3.0,
    "hn": 2.0,
    "dqn": 1.5,
    "qn": 1.0,
    "en": 0.5,
}


def ticks_per_beat(ppq: int) -> int:
    """Ticks per quarter note (beat)."""
    return int(ppq)


def duration_ticks(value: str, ppq: int) -> int:
    """Length of a named note value in ticks: ``wn`` at ppq=480 -> 1920."""
    try:
        quarters = NOTE_VALUES[value]
    except KeyError:
        raise ValueError(f"unknown note value '{value}' (expected one of: {', '.join(NOTE_VALUES)})") from None
    return int(round(quarters * ticks_per_beat(ppq)))
