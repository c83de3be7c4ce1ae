"""Tests for the note catalog."""

import pytest

from pianotiles.catalog import (
    NoteCatalog,
    NoteParseError,
    build_definitions,
    midi_to_frequency,
    midi_to_note_name,
    parse_note,
)
from pianotiles.models import KeySpec


def test_parse_note():
    assert parse_note("C4").midi == 60
    assert parse_note("A4").midi == 69
    assert parse_note("C#4").midi == 61
    assert parse_note("B0").midi == 23


@pytest.mark.parametrize("name", ["H4", "C", "c4", "Cb4", "C##4", "C10", ""])
def test_malformed_note_names_raise(name):
    with pytest.raises(NoteParseError):
        parse_note(name)


def test_malformed_table_is_fatal_at_build():
    with pytest.raises(NoteParseError):
        build_definitions([KeySpec("A", "X4")])


def test_a440():
    assert midi_to_frequency(69) == pytest.approx(440.0)
    assert midi_to_frequency(81) == pytest.approx(880.0)
    assert midi_to_frequency(60) == pytest.approx(261.6256, rel=1e-5)


def test_catalog_size_and_bands():
    catalog = NoteCatalog()
    # 12 keys in three bands, plus the top-edge key in its HIGH band only
    assert len(catalog) == 12 * 3 + 1
    assert ";_HIGH" in catalog
    assert ";_MID" not in catalog
    assert ";_LOW" not in catalog


def test_octave_shifts_and_labels():
    catalog = NoteCatalog()
    low, mid, high = catalog.get("A_LOW"), catalog.get("A_MID"), catalog.get("A_HIGH")
    assert (low.note_name, mid.note_name, high.note_name) == ("C3", "C4", "C5")
    assert (low.label, mid.label, high.label) == ("A-", "A", "A+")
    assert catalog.get(";_HIGH").note_name == "C6"
    assert catalog.get(";_HIGH").midi_number == 84


def test_sorted_by_midi_and_round_trips():
    defs = list(NoteCatalog())
    assert [d.midi_number for d in defs] == sorted(d.midi_number for d in defs)
    for d in defs:
        assert parse_note(d.note_name).midi == d.midi_number


def test_frequency_increases_with_midi():
    defs = list(NoteCatalog())
    freqs = [d.frequency_hz for d in defs]
    assert all(a < b for a, b in zip(freqs, freqs[1:]))


def test_logical_keys_are_unique():
    defs = list(NoteCatalog())
    assert len({d.logical_key for d in defs}) == len(defs)


def test_accidentals_are_flagged():
    catalog = NoteCatalog()
    assert catalog.get("W_MID").is_accidental
    assert catalog.get("W_MID").note_name == "C#4"
    assert not catalog.get("S_MID").is_accidental


def test_find_note_and_range():
    catalog = NoteCatalog()
    assert catalog.find_note("G4").logical_key == "J_MID"
    assert catalog.find_note("C7") is None
    assert catalog.midi_range == (48, 84)


def test_midi_to_note_name():
    assert midi_to_note_name(60) == "C4"
    assert midi_to_note_name(70) == "A#4"
