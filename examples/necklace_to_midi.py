"""Example: walk a PLR necklace around a C minor triad and write it to MIDI."""
import random

from chord_transform import RunConfig, circular
from chord_transform.midi_writer import write_progression
from chord_transform.observers import ConsoleTrace


def example_necklace():
    cfg = RunConfig(
        base_note="C",
        base_octave=4,
        chord_quality="m",
        transforms=["P", "L", "R", "T-5", "PRL", "O"],
        max_steps=16,
    )
    res = circular(cfg, rng=random.Random(2024), observer=ConsoleTrace())
    print(" | ".join(res.chords))

    n = write_progression([s.pitches for s in res], "output_necklace.mid", bpm=72, value="hn")
    print(f"Wrote output_necklace.mid ({n} notes)")


def example_random_sevenths():
    cfg = RunConfig(base_note="Bb", base_octave=3, chord_quality="7", allowed=("N",), transforms=8, seed=7)
    for step in circular(cfg.replace(max_steps=8)):
        print(step.token, step.chord, step.notes)


if __name__ == "__main__":
    example_necklace()
    example_random_sevenths()
