from __future__ import annotations

import csv
import os
import sys
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, TextIO

from .tokens import TransformToken, format_tokens

if TYPE_CHECKING:
    from .progression import ProgressionStep, StepObserver

LOG_FIELDS = ["step", "token", "position", "pitches", "notes", "chord"]


class ConsoleTrace:
    """Print the initial conditions and one line per step.

    Linear steps print as ``1. P: [60, 63, 67]   ['C4', 'D#4', 'G4']   Cm``;
    circular steps also show the necklace position, ``2. P (1): ...``.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream

    def _print(self, text: str) -> None:
        print(text, file=self.stream or sys.stdout)

    def start(self, config, transforms: Sequence[TransformToken]) -> None:
        self._print(f"Initial: {config.base_note}{config.base_octave} {config.chord_quality}")
        self._print(f"Transforms: {format_tokens(transforms)}")

    def __call__(self, i: int, step: ProgressionStep) -> None:
        where = f" ({step.position})" if step.position is not None else ""
        self._print(
            f"{i}. {step.token}{where}: {list(step.pitches)}   {list(step.notes)}   {step.chord}"
        )


class StepLog:
    """Collect one row per step and write them as CSV."""

    def __init__(self) -> None:
        self.rows: List[Dict[str, Any]] = []

    def __call__(self, i: int, step: ProgressionStep) -> None:
        self.rows.append({
            "step": i,
            "token": str(step.token),
            "position": "" if step.position is None else step.position,
            "pitches": " ".join(str(p) for p in step.pitches),
            "notes": " ".join(step.notes),
            "chord": step.chord,
        })

    def write(self, log_path: str) -> None:
        directory = os.path.dirname(log_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(log_path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=LOG_FIELDS)
            writer.writeheader()
            writer.writerows(self.rows)


class _Chain:
    def __init__(self, observers: Sequence[StepObserver]) -> None:
        self.observers = list(observers)

    def start(self, config, transforms: Sequence[TransformToken]) -> None:
        for obs in self.observers:
            start = getattr(obs, "start", None)
            if start is not None:
                start(config, transforms)

    def __call__(self, i: int, step: ProgressionStep) -> None:
        for obs in self.observers:
            obs(i, step)


def chain(*observers: Optional[StepObserver]) -> Optional[StepObserver]:
    """Fan a step out to several observers; ``None`` entries are skipped."""
    live = [o for o in observers if o is not None]
    if not live:
        return None
    if len(live) == 1:
        return live[0]
    return _Chain(live)
