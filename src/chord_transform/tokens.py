from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, List, Union

from .errors import InvalidOperator


class TokenKind(Enum):
    ORIGIN = auto()
    IDENTITY = auto()
    TRANSPOSE = auto()
    NEO_RIEMANN = auto()


_TRANSPOSE_RE = re.compile(r"^T(-?\d+)$")


@dataclass(frozen=True)
class TransformToken:
    """One parsed step of a transform sequence.

    ``O`` returns to the starting chord, ``I`` keeps the current chord,
    ``T<n>`` transposes by ``n`` semitones and any other name is a
    Neo-Riemannian operator.
    """

    kind: TokenKind
    semitones: int = 0
    name: str = ""

    @property
    def is_composite(self) -> bool:
        # "PRL" is applied as P, R, L; "S23" and single letters are atomic
        return (
            self.kind is TokenKind.NEO_RIEMANN
            and len(self.name) > 1
            and not any(ch.isdigit() for ch in self.name)
        )

    def __str__(self) -> str:
        if self.kind is TokenKind.ORIGIN:
            return "O"
        if self.kind is TokenKind.IDENTITY:
            return "I"
        if self.kind is TokenKind.TRANSPOSE:
            return f"T{self.semitones}"
        return self.name


ORIGIN = TransformToken(TokenKind.ORIGIN)
IDENTITY = TransformToken(TokenKind.IDENTITY)


def transpose_token(semitones: int) -> TransformToken:
    return TransformToken(TokenKind.TRANSPOSE, semitones=int(semitones))


def neo_riemann_token(name: str) -> TransformToken:
    return TransformToken(TokenKind.NEO_RIEMANN, name=name)


def parse_token(raw: Union[str, TransformToken]) -> TransformToken:
    if isinstance(raw, TransformToken):
        return raw
    text = str(raw).strip()
    if not text:
        raise InvalidOperator("empty transform token")
    if text == "O":
        return ORIGIN
    if text == "I":
        return IDENTITY
    m = _TRANSPOSE_RE.match(text)
    if m:
        return transpose_token(int(m.group(1)))
    return neo_riemann_token(text)


def parse_tokens(raw: Iterable[Union[str, TransformToken]]) -> List[TransformToken]:
    return [parse_token(t) for t in raw]


def format_tokens(tokens: Iterable[TransformToken]) -> str:
    return ",".join(str(t) for t in tokens)
