from __future__ import annotations

import pytest

from chord_transform.errors import InvalidOperator
from chord_transform.neo_riemann import SEVENTH_OPS, tokenize, transform

C_MAJOR = (60, 64, 67)
C_MINOR = (60, 63, 67)
C7 = (60, 64, 67, 70)
C_HALF_DIM = (60, 63, 66, 70)


def test_plr_on_major_and_minor():
    assert transform("P", C_MAJOR) == (60, 63, 67)
    assert transform("R", C_MAJOR) == (60, 64, 69)
    assert transform("L", C_MAJOR) == (59, 64, 67)
    assert transform("P", C_MINOR) == (60, 64, 67)
    assert transform("R", C_MINOR) == (58, 63, 67)
    assert transform("L", C_MINOR) == (60, 63, 68)


def test_plr_keeps_voice_order_in_inversion():
    # first inversion C/E: only the third moves under P
    assert transform("P", (64, 67, 72)) == (63, 67, 72)


@pytest.mark.parametrize("op", ["P", "R", "L"])
def test_plr_are_involutions(op):
    assert transform(op, transform(op, C_MAJOR)) == C_MAJOR
    assert transform(op, transform(op, C_MINOR)) == C_MINOR


def test_compound_operators():
    # N: C -> f, S: C -> c#, H: C -> g#
    assert transform("N", C_MAJOR) == (60, 65, 68)
    assert transform("S", C_MAJOR) == (61, 64, 68)
    assert transform("H", C_MAJOR) == (59, 63, 68)
    assert transform(tokenize("RLP"), C_MAJOR) == transform("N", C_MAJOR)


def test_tokenize_splits_letters():
    assert tokenize("PRL") == ["P", "R", "L"]
    assert tokenize("LP") == ["L", "P"]


def test_seventh_operators():
    assert transform("S23", C7) == (60, 63, 66, 70)  # C half-diminished
    assert transform("S65", C7) == (61, 64, 68, 70)  # Bb half-diminished
    assert transform("C65", C7) == (61, 64, 66, 70)  # F#7
    assert transform("C32", C7) == (61, 64, 67, 69)  # A7
    assert transform("C34", C7) == (61, 63, 67, 70)  # Eb7


@pytest.mark.parametrize("op", [op for op in SEVENTH_OPS if op not in ("C32", "C34")])
@pytest.mark.parametrize("chord", [C7, C_HALF_DIM])
def test_seventh_operators_are_involutions(op, chord):
    once = transform(op, chord)
    assert len(once) == 4
    assert once != chord
    assert transform(op, once) == chord


def test_seventh_operators_from_half_diminished():
    assert transform("S23", C_HALF_DIM) == C7
    assert transform("C32", C_HALF_DIM) == (61, 63, 66, 69)  # Eb half-diminished
    assert transform("C34", C_HALF_DIM) == (60, 63, 67, 69)  # A half-diminished
    assert transform("C65", C_HALF_DIM) == (60, 64, 66, 69)  # F# half-diminished


@pytest.mark.parametrize("chord", [C7, C_HALF_DIM])
def test_minor_third_operators_undo_each_other(chord):
    assert transform("C34", transform("C32", chord)) == chord
    assert transform("C32", transform("C34", chord)) == chord


def test_seventh_operators_are_voicing_independent():
    # second inversion and an open voicing pick the same voices as root position
    assert transform("C32", (67, 70, 72, 76)) == (67, 69, 73, 76)
    assert transform("S34", (48, 67, 70, 76)) == (49, 67, 70, 77)


def test_c32_twice_is_c65():
    assert transform(["C32", "C32"], C7) == transform("C65", C7)


def test_invalid_operators():
    with pytest.raises(InvalidOperator):
        transform("X", C_MAJOR)
    with pytest.raises(InvalidOperator):
        transform("S99", C7)
    with pytest.raises(InvalidOperator):
        transform("P", C7)
    with pytest.raises(InvalidOperator):
        transform("S23", C_MAJOR)
    with pytest.raises(InvalidOperator):
        transform("P", (60, 63, 66))  # diminished triad
