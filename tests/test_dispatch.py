from __future__ import annotations

import pytest

from chord_transform import dispatch
from chord_transform.dispatch import apply_token
from chord_transform.errors import CardinalityMismatch, InvalidOperator
from chord_transform.neo_riemann import transform
from chord_transform.tokens import parse_token

ORIGIN = (60, 64, 67)


def test_origin_and_identity():
    current = (62, 65, 69)
    assert apply_token(parse_token("O"), ORIGIN, current) == ORIGIN
    assert apply_token(parse_token("I"), ORIGIN, current) == current


def test_transpose_and_inverse():
    up = apply_token(parse_token("T5"), ORIGIN, ORIGIN)
    assert up == (65, 69, 72)
    assert apply_token(parse_token("T-5"), ORIGIN, up) == ORIGIN


def test_composite_applies_letters_in_order():
    step = ORIGIN
    for letter in "PRL":
        step = transform(letter, step)
    assert apply_token(parse_token("PRL"), ORIGIN, ORIGIN) == step
    # order matters
    assert apply_token(parse_token("PRL"), ORIGIN, ORIGIN) != apply_token(parse_token("RPL"), ORIGIN, ORIGIN)


def test_composite_consumes_each_previous_output(monkeypatch):
    calls = []

    def fake_transform(op, pitches):
        if not isinstance(op, str):
            chord = tuple(pitches)
            for sub in op:
                chord = fake_transform(sub, chord)
            return chord
        calls.append((op, tuple(pitches)))
        return tuple(p + 1 for p in pitches)

    monkeypatch.setattr(dispatch, "transform", fake_transform)
    assert apply_token(parse_token("PRL"), ORIGIN, ORIGIN) == (63, 67, 70)
    assert calls == [("P", (60, 64, 67)), ("R", (61, 65, 68)), ("L", (62, 66, 69))]


def test_seventh_token_is_atomic():
    c7 = (60, 64, 67, 70)
    assert apply_token(parse_token("S23"), c7, c7) == transform("S23", c7)


def test_unknown_operator_raises():
    with pytest.raises(InvalidOperator):
        apply_token(parse_token("Q"), ORIGIN, ORIGIN)


def test_cardinality_mismatch(monkeypatch):
    monkeypatch.setattr(dispatch, "transform", lambda op, pitches: tuple(pitches)[:2])
    with pytest.raises(CardinalityMismatch) as exc:
        apply_token(parse_token("P"), ORIGIN, ORIGIN)
    assert exc.value.expected == 3
    assert exc.value.got == 2
