from __future__ import annotations


class ChordTransformError(ValueError):
    """Base class for every failure raised while building a progression."""


class InvalidConfiguration(ChordTransformError):
    pass


class InvalidNote(InvalidConfiguration):
    pass


class UnknownQuality(InvalidConfiguration):
    pass


class InvalidOperator(ChordTransformError):
    pass


class CardinalityMismatch(ChordTransformError):
    def __init__(self, expected: int, got: int, op: str = "") -> None:
        where = f" after {op}" if op else ""
        super().__init__(f"expected {expected} pitches{where}, got {got}")
        self.expected = expected
        self.got = got
        self.op = op
