from __future__ import annotations

import argparse
import os
from typing import Any, Dict, List

from .config import RunConfig, load_run_config
from .errors import ChordTransformError
from .midi_writer import write_progression
from .observers import ConsoleTrace, StepLog, chain
from .progression import WALKS, run
from .timebase import NOTE_VALUES


def _transforms_arg(raw: str):
    raw = raw.strip()
    if raw.isdigit():
        return int(raw)
    return [t.strip() for t in raw.split(",") if t.strip()]


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    kw: Dict[str, Any] = {}
    for attr, value in (
        ("base_note", args.base_note),
        ("base_octave", args.base_octave),
        ("chord_quality", args.quality),
        ("format", args.format),
        ("semitones", args.semitones),
        ("max_steps", args.max),
        ("seed", args.seed),
    ):
        if value is not None:
            kw[attr] = value
    if args.allowed is not None:
        kw["allowed"] = tuple(a.strip() for a in args.allowed.split(",") if a.strip())
    if args.transforms is not None:
        kw["transforms"] = _transforms_arg(args.transforms)
    if args.verbose:
        kw["verbose"] = True
    return kw


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate transposed and Neo-Riemannian chord progressions")
    parser.add_argument("--config", default=None, help="Path to JSON run config")
    parser.add_argument("--walk", choices=sorted(WALKS), default="linear", help="Linear pass or circular random walk")
    parser.add_argument("--base-note", default=None, help="Starting note, e.g. C, Bb, F#")
    parser.add_argument("--base-octave", type=int, default=None, help="Starting octave (1-8)")
    parser.add_argument("--quality", default=None, help="Chord quality: '' (major), m, 7, ...")
    parser.add_argument("--format", choices=["ISO", "midinum"], default=None, help="Print note names or pitch numbers")
    parser.add_argument("--semitones", type=int, default=None, help="+/- bound on random T transforms")
    parser.add_argument("--max", type=int, default=None, help="Number of circular steps")
    parser.add_argument("--allowed", default=None, help="Comma-separated transform families (T,N)")
    parser.add_argument(
        "--transforms",
        default=None,
        help="Comma-separated tokens (e.g. 'O,P,T2,PRL') or a count of random transforms",
    )
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for repeatable runs")
    parser.add_argument("--verbose", action="store_true", help="Trace every step")
    parser.add_argument("--log", default=None, help="Optional CSV path for a per-step log")
    parser.add_argument("--out", default=None, help="Optional MIDI path for the progression")
    parser.add_argument("--bpm", type=float, default=100.0)
    parser.add_argument("--duration", choices=sorted(NOTE_VALUES), default="wn", help="Note value per chord in the MIDI file")
    args = parser.parse_args(argv)

    try:
        cfg = load_run_config(args.config) if args.config else RunConfig()
        overrides = _overrides(args)
        if overrides:
            cfg = cfg.replace(**overrides)

        step_log = StepLog() if args.log else None
        observer = chain(ConsoleTrace() if cfg.verbose else None, step_log)
        result = run(cfg, walk=args.walk, observer=observer)
    except ChordTransformError as e:
        parser.error(str(e))

    for step, chord in zip(result, result.generated):
        print(f"{step.token}\t{step.chord}\t{' '.join(str(c) for c in chord)}")

    if step_log is not None:
        step_log.write(args.log)
        print(f"Wrote {args.log} ({len(step_log.rows)} steps)")

    if args.out:
        os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)
        n = write_progression(
            [s.pitches for s in result],
            out_path=args.out,
            bpm=args.bpm,
            value=args.duration,
        )
        print(f"Wrote {args.out} ({len(result)} chords, {n} notes, bpm={args.bpm})")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
