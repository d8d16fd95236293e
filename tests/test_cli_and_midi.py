from __future__ import annotations

import csv
import json
from pathlib import Path

import mido
import pytest

from chord_transform.cli import main as cli_main
from chord_transform.midi_writer import chord_events, write_progression
from chord_transform.timebase import duration_ticks


def test_duration_ticks():
    assert duration_ticks("wn", 480) == 1920
    assert duration_ticks("qn", 480) == 480
    assert duration_ticks("dhn", 480) == 1440
    with pytest.raises(ValueError):
        duration_ticks("xx", 480)


def test_chord_events_back_to_back():
    events = chord_events([(60, 64, 67), (62, 65, 69)], ppq=480, value="hn")
    assert len(events) == 6
    assert {e.start_abs_tick for e in events[:3]} == {0}
    assert {e.start_abs_tick for e in events[3:]} == {960}
    assert all(e.dur_tick == 960 for e in events)


def test_write_progression_midi(tmp_path: Path):
    out = tmp_path / "prog.mid"
    n = write_progression([(60, 64, 67), (60, 64, 67), (62, 65, 69)], out_path=str(out), bpm=90, ppq=480)
    assert n == 9

    mid = mido.MidiFile(str(out))
    assert mid.ticks_per_beat == 480
    tempos = [msg.tempo for tr in mid.tracks for msg in tr if msg.type == "set_tempo"]
    assert abs(60_000_000 / tempos[0] - 90) < 1e-2

    on_msgs = [msg for tr in mid.tracks for msg in tr if msg.type == "note_on" and msg.velocity > 0]
    assert len(on_msgs) == 9

    # a repeated chord is released before it is struck again
    t = 0
    sounding = set()
    for msg in mid.tracks[0]:
        t += msg.time
        if msg.type == "note_on":
            assert msg.note not in sounding
            sounding.add(msg.note)
        elif msg.type == "note_off":
            sounding.discard(msg.note)
    assert t == 3 * 1920


def test_cli_explicit_linear(capsys):
    assert cli_main(["--transforms", "O,P,T2"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "O\tC\tC4 E4 G4",
        "P\tCm\tC4 D#4 G4",
        "T2\tDm\tD4 F4 A4",
    ]


def test_cli_midinum_circular_verbose(capsys):
    assert cli_main(["--walk", "circular", "--transforms", "I,P,T2", "--max", "6", "--format", "midinum", "--seed", "4", "--verbose"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Initial: C4 "
    assert out[1] == "Transforms: I,P,T2"
    assert out[2].startswith("1. I (0): [60, 64, 67]")
    results = [line for line in out if "\t" in line]
    assert len(results) == 6
    assert results[0] == "I\tC\t60 64 67"


def test_cli_config_log_and_midi(tmp_path: Path, capsys):
    cfg = {
        "base_note": "C",
        "base_octave": 4,
        "chord_quality": "7",
        "transforms": ["I", "T1", "T2", "T3"],
    }
    cfg_path = tmp_path / "cfg.json"
    cfg_path.write_text(json.dumps(cfg))
    log_path = tmp_path / "logs" / "steps.csv"
    out_path = tmp_path / "out" / "prog.mid"

    assert cli_main(["--config", str(cfg_path), "--log", str(log_path), "--out", str(out_path)]) == 0
    assert "C7\tC4 E4 G4 A#4" in capsys.readouterr().out

    with log_path.open() as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 4
    assert set(rows[0].keys()) == {"step", "token", "position", "pitches", "notes", "chord"}
    assert rows[0]["pitches"] == "60 64 67 70"
    assert rows[3]["token"] == "T3"
    assert rows[0]["position"] == ""

    mid = mido.MidiFile(str(out_path))
    on_msgs = [msg for tr in mid.tracks for msg in tr if msg.type == "note_on" and msg.velocity > 0]
    assert len(on_msgs) == 16


def test_cli_reports_bad_config():
    with pytest.raises(SystemExit) as exc:
        cli_main(["--base-note", "H"])
    assert exc.value.code == 2
    with pytest.raises(SystemExit) as exc:
        cli_main(["--quality", "7", "--transforms", "P"])
    assert exc.value.code == 2
