"""Neo-Riemannian transformations on triads and seventh chords.

Triads (major or minor, any inversion) support the parallel, relative and
leading-tone exchanges plus the compound operators built from them:

- ``P``: major -> third down a semitone; minor -> third up a semitone
- ``R``: major -> fifth up a tone; minor -> root down a tone
- ``L``: major -> root down a semitone; minor -> fifth up a semitone
- ``N`` (Nebenverwandt) = RLP, ``S`` (slide) = LPR, ``H`` (hexatonic pole) = LPL

Dominant and half-diminished seventh chords support the Childs operators
``S{f}{m}`` and ``C{f}{m}``: the dyad with interval class ``f`` is held and
the dyad with interval class ``m`` moves a semitone per voice, in similar
motion for ``S`` (dominant <-> half-diminished) and contrary motion for ``C``
(chord type kept). Which voices move, and which way, is fixed by their role
in the source chord (see ``_SEVENTH_MOVES``).

The six ``S`` operators and ``C65`` are their own inverses. ``C32`` moves the
root down a minor third and ``C34`` moves it up one, so they undo each other.

Voice order is never changed: each voice keeps its index and only moves by
the interval the operator prescribes.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from .errors import InvalidOperator
from .pitch import PitchSet

MAJOR = (0, 4, 7)
MINOR = (0, 3, 7)
DOMINANT_SEVENTH = (0, 4, 7, 10)
HALF_DIMINISHED_SEVENTH = (0, 3, 6, 10)

TRIAD_OPS = ("P", "R", "L", "N", "S", "H")
SEVENTH_OPS = ("S23", "S32", "S34", "S43", "S56", "S65", "C32", "C34", "C65")

# Compound single-letter operators, applied left to right
_COMPOUNDS = {"N": "RLP", "S": "LPR", "H": "LPL"}

# (interval above the root that moves, semitone offset) per triad quality
_TRIAD_MOVES: Dict[str, Dict[Tuple[int, ...], Tuple[int, int]]] = {
    "P": {MAJOR: (4, -1), MINOR: (3, +1)},
    "R": {MAJOR: (7, +2), MINOR: (0, -2)},
    "L": {MAJOR: (0, -1), MINOR: (7, +1)},
}

# {interval above the root: semitone offset} for the two moving voices,
# per source chord. From C7: S23 -> C half-dim, S32 -> C# half-dim,
# S34 -> G half-dim, S43 -> F# half-dim, S56 -> A half-dim,
# S65 -> Bb half-dim, C32 -> A7, C34 -> Eb7, C65 -> F#7.
_SEVENTH_MOVES: Dict[str, Dict[Tuple[int, ...], Dict[int, int]]] = {
    "S23": {DOMINANT_SEVENTH: {4: -1, 7: -1}, HALF_DIMINISHED_SEVENTH: {3: +1, 6: +1}},
    "S32": {DOMINANT_SEVENTH: {0: +1, 10: +1}, HALF_DIMINISHED_SEVENTH: {0: -1, 10: -1}},
    "S34": {DOMINANT_SEVENTH: {0: +1, 4: +1}, HALF_DIMINISHED_SEVENTH: {6: -1, 10: -1}},
    "S43": {DOMINANT_SEVENTH: {7: -1, 10: -1}, HALF_DIMINISHED_SEVENTH: {0: +1, 3: +1}},
    "S56": {DOMINANT_SEVENTH: {4: -1, 10: -1}, HALF_DIMINISHED_SEVENTH: {0: +1, 6: +1}},
    "S65": {DOMINANT_SEVENTH: {0: +1, 7: +1}, HALF_DIMINISHED_SEVENTH: {3: -1, 10: -1}},
    "C32": {DOMINANT_SEVENTH: {0: +1, 10: -1}, HALF_DIMINISHED_SEVENTH: {0: +1, 10: -1}},
    "C34": {DOMINANT_SEVENTH: {0: +1, 4: -1}, HALF_DIMINISHED_SEVENTH: {6: +1, 10: -1}},
    "C65": {DOMINANT_SEVENTH: {0: +1, 7: -1}, HALF_DIMINISHED_SEVENTH: {3: +1, 10: -1}},
}


def tokenize(name: str) -> List[str]:
    """Split a multi-letter operator name into single-letter operators."""
    return list(name)


def chord_shape(pitches: Sequence[int], shapes: Sequence[Tuple[int, ...]]) -> Optional[Tuple[int, Tuple[int, ...]]]:
    """Find ``(root index, shape)`` when ``pitches`` spell one of ``shapes``.

    The shape is compared as a pitch-class set relative to each voice taken
    as the root, so inversions and open voicings are recognised.
    """
    pcs = [p % 12 for p in pitches]
    for i, root in enumerate(pcs):
        rel = sorted((pc - root) % 12 for pc in pcs)
        for shape in shapes:
            if tuple(rel) == shape:
                return i, shape
    return None


def _move_roles(pitches: PitchSet, root_idx: int, moves: Dict[int, int]) -> PitchSet:
    root = pitches[root_idx] % 12
    return tuple(p + moves.get((p - root) % 12, 0) for p in pitches)


def _triad_step(op: str, pitches: PitchSet) -> PitchSet:
    found = chord_shape(pitches, (MAJOR, MINOR)) if len(pitches) == 3 else None
    if found is None:
        raise InvalidOperator(f"{op} needs a major or minor triad, got {list(pitches)}")
    root_idx, shape = found
    target, delta = _TRIAD_MOVES[op][shape]
    return _move_roles(pitches, root_idx, {target: delta})


def _seventh(op: str, pitches: PitchSet) -> PitchSet:
    shapes = (DOMINANT_SEVENTH, HALF_DIMINISHED_SEVENTH)
    found = chord_shape(pitches, shapes) if len(pitches) == 4 else None
    if found is None:
        raise InvalidOperator(
            f"{op} needs a dominant or half-diminished seventh chord, got {list(pitches)}"
        )
    root_idx, shape = found
    return _move_roles(pitches, root_idx, _SEVENTH_MOVES[op][shape])


def transform(op, pitches: Sequence[int]) -> PitchSet:
    """Apply a Neo-Riemannian operator, or a list of them in order.

    ``op`` is either a single operator name (``"P"``, ``"N"``, ``"S23"``) or
    a sequence of names as returned by :func:`tokenize`.
    """
    chord = tuple(pitches)
    if not isinstance(op, str):
        for sub in op:
            chord = transform(sub, chord)
        return chord

    if op in TRIAD_OPS:
        if op in _COMPOUNDS:
            return transform(tokenize(_COMPOUNDS[op]), chord)
        return _triad_step(op, chord)
    if op in SEVENTH_OPS:
        return _seventh(op, chord)
    raise InvalidOperator(f"unknown Neo-Riemannian operator '{op}'")
