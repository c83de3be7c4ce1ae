"""Tests for loading melodies from MIDI files."""

import mido
import pytest

from pianotiles.melody_loader import MelodyLoadError, load_melody
from pianotiles.models import MelodyEvent


def _write_midi(path, notes, ticks_per_beat=480):
    """notes: list of (pitch, start_tick, length_ticks)."""
    mid = mido.MidiFile(ticks_per_beat=ticks_per_beat)
    track = mido.MidiTrack()
    mid.tracks.append(track)

    events = []
    for pitch, start, length in notes:
        events.append((start, 1, mido.Message("note_on", note=pitch, velocity=80)))
        events.append((start + length, 0, mido.Message("note_off", note=pitch, velocity=0)))
    events.sort(key=lambda e: (e[0], e[1]))

    now = 0
    for tick, _, msg in events:
        track.append(msg.copy(time=tick - now))
        now = tick
    mid.save(str(path))
    return path


def test_gaps_become_beats(tmp_path):
    path = _write_midi(tmp_path / "tune.mid", [(60, 0, 480), (62, 480, 960)])
    assert load_melody(path) == [MelodyEvent("C4", 1.0), MelodyEvent("D4", 2.0)]


def test_rests_extend_the_previous_note(tmp_path):
    path = _write_midi(tmp_path / "tune.mid", [(60, 0, 240), (64, 960, 480)])
    assert load_melody(path) == [MelodyEvent("C4", 2.0), MelodyEvent("E4", 1.0)]


def test_chords_keep_the_top_note(tmp_path):
    path = _write_midi(tmp_path / "tune.mid", [(60, 0, 480), (64, 0, 480), (67, 480, 480)])
    assert [e.note for e in load_melody(path)] == ["E4", "G4"]


def test_out_of_range_notes_are_dropped(tmp_path):
    path = _write_midi(tmp_path / "tune.mid", [(30, 0, 480), (60, 480, 480), (100, 960, 480)])
    assert load_melody(path, midi_range=(48, 84)) == [MelodyEvent("C4", 1.0)]


def test_nothing_playable_raises(tmp_path):
    path = _write_midi(tmp_path / "tune.mid", [(30, 0, 480)])
    with pytest.raises(MelodyLoadError):
        load_melody(path, midi_range=(48, 84))


def test_unsupported_extension(tmp_path):
    with pytest.raises(MelodyLoadError, match="Unsupported"):
        load_melody(tmp_path / "tune.txt")


def test_corrupt_file(tmp_path):
    path = tmp_path / "broken.mid"
    path.write_bytes(b"not a midi file")
    with pytest.raises(MelodyLoadError, match="broken.mid"):
        load_melody(path)
