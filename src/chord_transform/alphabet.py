from __future__ import annotations

import random
from typing import List, Sequence, Tuple

from .chords import SEVENTH_QUALITIES
from .neo_riemann import SEVENTH_OPS
from .tokens import IDENTITY, ORIGIN, TransformToken, neo_riemann_token, transpose_token

TRIAD_BASE = ("P", "R", "L")
# Ordered arrangements of P, R, L without repetition
TRIAD_PAIRS = ("PR", "PL", "RP", "RL", "LP", "LR")
TRIAD_TRIPLES = ("PRL", "PLR", "RPL", "RLP", "LPR", "LRP")


def build_alphabet(config) -> Tuple[TransformToken, ...]:
    """All tokens a random transform sequence may draw from.

    The order is fixed (O, I, positive then negative transpositions, then
    the Neo-Riemannian family) so a seeded sampler is reproducible.
    """
    tokens: List[TransformToken] = [ORIGIN, IDENTITY]

    if "T" in config.allowed:
        bound = int(config.semitones)
        tokens.extend(transpose_token(k) for k in range(1, bound + 1))
        tokens.extend(transpose_token(-k) for k in range(1, bound + 1))

    if "N" in config.allowed:
        if config.chord_quality in SEVENTH_QUALITIES:
            names: Sequence[str] = SEVENTH_OPS
        else:
            names = TRIAD_BASE + TRIAD_PAIRS + TRIAD_TRIPLES
        tokens.extend(neo_riemann_token(n) for n in names)

    return tuple(tokens)


def sample_transforms(
    alphabet: Sequence[TransformToken], count: int, rng: random.Random
) -> List[TransformToken]:
    """Draw ``count`` tokens uniformly, with replacement, in draw order."""
    return [rng.choice(alphabet) for _ in range(int(count))]
