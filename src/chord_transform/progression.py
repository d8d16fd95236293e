"""Linear and circular chord progressions built from transform tokens.

Both walks start from the chord given by the run configuration and feed
each token through :func:`apply_token`. The linear walk consumes the
sequence once, in order. The circular walk treats the sequence as a
necklace: it reads the token under a position that moves one place forward
or backward at random after every step, for ``config.max_steps`` steps.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Union

from .alphabet import build_alphabet, sample_transforms
from .chords import build_chord, chord_name, normalize_chord_name
from .config import RunConfig
from .dispatch import apply_token
from .observers import ConsoleTrace
from .pitch import PitchSet, pitchname, strip_octave
from .tokens import TransformToken


@dataclass(frozen=True)
class ProgressionStep:
    pitches: PitchSet
    notes: tuple
    token: TransformToken
    chord: str
    position: Optional[int] = None  # necklace index, circular walk only


StepObserver = Callable[[int, ProgressionStep], None]


@dataclass
class ProgressionResult:
    steps: List[ProgressionStep] = field(default_factory=list)
    transforms: List[TransformToken] = field(default_factory=list)
    format: str = "ISO"

    @property
    def generated(self) -> List[Union[List[str], List[int]]]:
        """Per-step chords in the configured format (note names or numbers)."""
        if self.format == "ISO":
            return [list(s.notes) for s in self.steps]
        return [list(s.pitches) for s in self.steps]

    @property
    def chords(self) -> List[str]:
        return [s.chord for s in self.steps]

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[ProgressionStep]:
        return iter(self.steps)


def resolve_transforms(config: RunConfig, rng: random.Random) -> List[TransformToken]:
    """The explicit sequence, or ``config.transforms`` random alphabet draws."""
    if config.is_random:
        return sample_transforms(build_alphabet(config), config.transforms, rng)
    return list(config.transforms)


def _render(token: TransformToken, pitches: PitchSet, position: Optional[int] = None) -> ProgressionStep:
    notes = tuple(pitchname(p) for p in pitches)
    name = normalize_chord_name(chord_name([strip_octave(n) for n in notes]))
    return ProgressionStep(pitches=pitches, notes=notes, token=token, chord=name, position=position)


def _setup(config: RunConfig, rng: Optional[random.Random], observer: Optional[StepObserver]):
    rng = rng if rng is not None else random.Random(config.seed)
    origin = build_chord(config.base_note, config.base_octave, config.chord_quality)
    transforms = resolve_transforms(config, rng)
    if observer is None and config.verbose:
        observer = ConsoleTrace()
    # observers may also want the initial conditions
    start = getattr(observer, "start", None)
    if start is not None:
        start(config, transforms)
    return rng, origin, transforms, observer


def generate(
    config: RunConfig,
    rng: Optional[random.Random] = None,
    observer: Optional[StepObserver] = None,
) -> ProgressionResult:
    """Apply every token of the transform sequence in order."""
    rng, origin, transforms, observer = _setup(config, rng, observer)
    result = ProgressionResult(transforms=transforms, format=config.format)

    current = origin
    for i, token in enumerate(transforms, start=1):
        current = apply_token(token, origin, current)
        step = _render(token, current)
        result.steps.append(step)
        if observer is not None:
            observer(i, step)
    return result


def circular(
    config: RunConfig,
    rng: Optional[random.Random] = None,
    observer: Optional[StepObserver] = None,
) -> ProgressionResult:
    """Random walk of ``config.max_steps`` steps around the token necklace."""
    rng, origin, transforms, observer = _setup(config, rng, observer)
    result = ProgressionResult(transforms=transforms, format=config.format)

    current = origin
    posn = 0
    for i in range(1, config.max_steps + 1):
        index = posn % len(transforms)
        token = transforms[index]
        current = apply_token(token, origin, current)
        step = _render(token, current, position=index)
        result.steps.append(step)
        if observer is not None:
            observer(i, step)
        posn += rng.choice((1, -1))
    return result


WALKS = {
    "linear": generate,
    "circular": circular,
}


def run(
    config: RunConfig,
    walk: str = "linear",
    rng: Optional[random.Random] = None,
    observer: Optional[StepObserver] = None,
) -> ProgressionResult:
    try:
        fn = WALKS[walk]
    except KeyError:
        raise ValueError(f"unknown walk '{walk}' (expected one of: {', '.join(WALKS)})") from None
    return fn(config, rng=rng, observer=observer)
