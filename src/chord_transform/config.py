from __future__ import annotations

import dataclasses
import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from .chords import QUALITIES, SEVENTH_QUALITIES, TRIAD_QUALITIES, build_chord
from .errors import InvalidConfiguration, InvalidOperator
from .tokens import TransformToken, parse_tokens

FORMATS = ("ISO", "midinum")
FAMILIES = ("T", "N")

_NOTE_RE = re.compile(r"^[A-G][#b]?$")

Transforms = Union[int, Tuple[TransformToken, ...]]


def _positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise InvalidConfiguration(f"{value!r} is not a valid {name}")
    try:
        n = int(value)
    except (TypeError, ValueError):
        raise InvalidConfiguration(f"{value!r} is not a valid {name}") from None
    if n < 1:
        raise InvalidConfiguration(f"{value!r} is not a valid {name}")
    return n


@dataclass(frozen=True)
class RunConfig:
    """Inputs for one progression run.

    ``transforms`` is either an explicit token sequence or the number of
    tokens to draw at random from the alphabet. ``max_steps`` only bounds
    the circular walk.
    """

    base_note: str = "C"
    base_octave: int = 4
    chord_quality: str = ""
    format: str = "ISO"
    semitones: int = 7
    max_steps: int = 4
    allowed: Tuple[str, ...] = FAMILIES
    transforms: Transforms = 4
    seed: Optional[int] = None
    verbose: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.base_note, str) or not _NOTE_RE.match(self.base_note):
            raise InvalidConfiguration(f"{self.base_note!r} is not a valid note")
        octave = _positive_int("octave", self.base_octave)
        if not 1 <= octave <= 8:
            raise InvalidConfiguration(f"{self.base_octave!r} is not a valid octave")
        if self.chord_quality not in QUALITIES:
            raise InvalidConfiguration(f"unknown chord quality {self.chord_quality!r}")
        if self.format not in FORMATS:
            raise InvalidConfiguration(f"{self.format!r} is not a valid format")
        allowed = tuple(self.allowed)
        bad = [a for a in allowed if a not in FAMILIES]
        if bad:
            raise InvalidConfiguration(f"unknown transform families: {', '.join(map(str, bad))}")

        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "base_octave", octave)
        object.__setattr__(self, "semitones", _positive_int("number of semitones", self.semitones))
        object.__setattr__(self, "max_steps", _positive_int("maximum", self.max_steps))
        object.__setattr__(self, "allowed", allowed)
        object.__setattr__(self, "transforms", _coerce_transforms(self.transforms))
        if self.seed is not None:
            object.__setattr__(self, "seed", int(self.seed))
        object.__setattr__(self, "verbose", bool(self.verbose))

        # the starting chord must fit the MIDI range
        build_chord(self.base_note, self.base_octave, self.chord_quality)
        if self.is_random and "N" in self.allowed:
            nr_qualities = TRIAD_QUALITIES | SEVENTH_QUALITIES
            if self.chord_quality not in nr_qualities:
                raise InvalidConfiguration(
                    f"Neo-Riemannian transforms need one of the qualities "
                    f"{sorted(nr_qualities)}, got {self.chord_quality!r}; "
                    f"use allowed=[\"T\"] for other chords"
                )

    @property
    def is_random(self) -> bool:
        return isinstance(self.transforms, int)

    def replace(self, **changes: Any) -> "RunConfig":
        return dataclasses.replace(self, **changes)


def _coerce_transforms(value: Any) -> Transforms:
    if isinstance(value, (list, tuple)):
        if not value:
            raise InvalidConfiguration("transforms must not be empty")
        try:
            return tuple(parse_tokens(value))
        except InvalidOperator as e:
            raise InvalidConfiguration(f"{value!r} is not a valid transform: {e}") from e
    return _positive_int("transform", value)


def run_config_from_dict(raw: Dict[str, Any]) -> RunConfig:
    # Map JSON keys onto RunConfig fields; unknown keys ignored
    kw: Dict[str, Any] = {}
    for key, attr in (
        ("base_note", "base_note"),
        ("base_octave", "base_octave"),
        ("chord_quality", "chord_quality"),
        ("format", "format"),
        ("semitones", "semitones"),
        ("max", "max_steps"),
        ("max_steps", "max_steps"),
        ("allowed", "allowed"),
        ("transforms", "transforms"),
        ("seed", "seed"),
        ("verbose", "verbose"),
    ):
        if key in raw:
            kw[attr] = raw[key]
    if "allowed" in kw:
        allowed = kw["allowed"]
        if isinstance(allowed, str):
            allowed = [a for a in re.split(r"[\s,]+", allowed) if a]
        if not isinstance(allowed, Sequence):
            raise InvalidConfiguration(f"{allowed!r} is not valid")
        kw["allowed"] = tuple(allowed)
    if "chord_quality" in kw and kw["chord_quality"] is not None:
        kw["chord_quality"] = str(kw["chord_quality"])
    return RunConfig(**kw)


def load_run_config(path: str) -> RunConfig:
    with open(path, "r") as f:
        raw = json.load(f)
    if not isinstance(raw, dict):
        raise InvalidConfiguration(f"{path}: expected a JSON object")
    return run_config_from_dict(raw)
