from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

from mido import Message, MetaMessage, MidiFile, MidiTrack, bpm2tempo

from .timebase import duration_ticks


@dataclass
class MidiEvent:
    note: int
    vel: int
    start_abs_tick: int
    dur_tick: int
    channel: int = 0


def chord_events(
    chords: Iterable[Sequence[int]],
    ppq: int = 480,
    value: str = "wn",
    vel: int = 96,
    channel: int = 0,
) -> List[MidiEvent]:
    """Lay chords out back to back as block chords of one note value each."""
    dur = duration_ticks(value, ppq)
    events: List[MidiEvent] = []
    for i, chord in enumerate(chords):
        start = i * dur
        for note in chord:
            events.append(MidiEvent(note=int(note), vel=vel, start_abs_tick=start, dur_tick=dur, channel=channel))
    return events


def write_midi(events: List[MidiEvent], ppq: int, bpm: float, out_path: str) -> None:
    """
    Write a single-track MIDI file using absolute tick scheduling.
    Steps:
      - create track, set tempo meta
      - sort by (start_abs_tick, note_off before note_on)
      - delta-encode times
    """
    mid = MidiFile(type=1)
    mid.ticks_per_beat = int(ppq)

    track = MidiTrack()
    mid.tracks.append(track)
    track.append(MetaMessage("set_tempo", tempo=bpm2tempo(bpm), time=0))

    msgs = []
    for ev in events:
        start = ev.start_abs_tick
        end = ev.start_abs_tick + max(1, ev.dur_tick)
        msgs.append((start, 1, Message("note_on", note=ev.note, velocity=ev.vel, channel=ev.channel, time=0)))
        msgs.append((end, 0, Message("note_off", note=ev.note, velocity=0, channel=ev.channel, time=0)))

    # Chord changes share a tick: release the old chord before striking the next
    msgs.sort(key=lambda t: (t[0], t[1]))

    last_t = 0
    for abs_t, _prio, msg in msgs:
        msg.time = max(0, abs_t - last_t)
        track.append(msg)
        last_t = abs_t

    mid.save(out_path)


def write_progression(chords: Iterable[Sequence[int]], out_path: str, bpm: float = 100.0, ppq: int = 480, value: str = "wn") -> int:
    """Render chords (lists of pitch numbers) to ``out_path``; returns the event count."""
    events = chord_events(chords, ppq=ppq, value=value)
    write_midi(events, ppq=ppq, bpm=bpm, out_path=out_path)
    return len(events)
