from __future__ import annotations

from .errors import CardinalityMismatch
from .neo_riemann import tokenize, transform
from .pitch import PitchSet
from .tokens import TokenKind, TransformToken
from .transpose import transpose


def apply_token(token: TransformToken, origin: PitchSet, current: PitchSet) -> PitchSet:
    """Return the chord that follows ``current`` under ``token``.

    ``O`` yields ``origin`` and ``I`` yields ``current`` unchanged; both are
    tuples, so handing them back does not expose either to mutation.
    """
    if token.kind is TokenKind.ORIGIN:
        return origin
    if token.kind is TokenKind.IDENTITY:
        return current

    if token.kind is TokenKind.TRANSPOSE:
        chord = transpose(token.semitones, current)
    elif token.is_composite:
        chord = transform(tokenize(token.name), current)
    else:
        chord = transform(token.name, current)

    if len(chord) != len(current):
        raise CardinalityMismatch(len(current), len(chord), str(token))
    return chord
