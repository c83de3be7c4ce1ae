"""Note catalog — every playable note derived from the physical key table."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from pianotiles.keymap import TOP_EDGE_KEY, logical_key, normalize_key
from pianotiles.models import KeySpec, NoteDefinition, OctaveBand

NOTE_OFFSETS: dict[str, int] = {
    "C": 0, "C#": 1, "D": 2, "D#": 3, "E": 4, "F": 5,
    "F#": 6, "G": 7, "G#": 8, "A": 9, "A#": 10, "B": 11,
}
NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

_NOTE_RE = re.compile(r"^([A-G])(#?)(\d)$")

PHYSICAL_KEYS: list[KeySpec] = [
    # White keys
    KeySpec("A", "C4"),
    KeySpec("S", "D4"),
    KeySpec("D", "E4"),
    KeySpec("F", "F4"),
    KeySpec("J", "G4"),
    KeySpec("K", "A4"),
    KeySpec("L", "B4"),
    KeySpec(";", "C5"),
    # Black keys
    KeySpec("W", "C#4"),
    KeySpec("E", "D#4"),
    KeySpec("T", "F#4"),
    KeySpec("I", "G#4"),
    KeySpec("O", "A#4"),
]

_LABEL_SUFFIX = {OctaveBand.LOW: "-", OctaveBand.MID: "", OctaveBand.HIGH: "+"}


class NoteParseError(ValueError):
    """Raised when a note name does not match LETTER[#]OCTAVE."""


@dataclass(frozen=True)
class ParsedNote:
    letter: str
    accidental: str
    octave: int
    midi: int


def parse_note(name: str) -> ParsedNote:
    match = _NOTE_RE.match(name)
    if match is None:
        raise NoteParseError(f"Invalid note format: {name!r}")
    letter, accidental, octave_str = match.groups()
    octave = int(octave_str)
    midi = (octave + 1) * 12 + NOTE_OFFSETS[letter + accidental]
    return ParsedNote(letter=letter, accidental=accidental, octave=octave, midi=midi)


def midi_to_frequency(midi: int) -> float:
    """Equal-tempered frequency, A4 (MIDI 69) = 440 Hz."""
    return 440.0 * 2 ** ((midi - 69) / 12)


def midi_to_note_name(midi: int) -> str:
    return f"{NOTE_NAMES[midi % 12]}{midi // 12 - 1}"


def _make_definition(spec: KeySpec, band: OctaveBand) -> NoteDefinition:
    parsed = parse_note(spec.note)
    shift = band.octave_shift
    base_label = spec.label if spec.label is not None else spec.key
    midi = parsed.midi + shift * 12
    return NoteDefinition(
        logical_key=logical_key(normalize_key(spec.key), band),
        label=base_label + _LABEL_SUFFIX[band],
        note_name=f"{parsed.letter}{parsed.accidental}{parsed.octave + shift}",
        midi_number=midi,
        frequency_hz=midi_to_frequency(midi),
        is_accidental=parsed.accidental == "#",
    )


def build_definitions(specs: Iterable[KeySpec] = PHYSICAL_KEYS) -> list[NoteDefinition]:
    """Expand each key into its octave bands, sorted by MIDI number.

    The top-edge key only gets its HIGH variant; its MID and LOW slots
    are covered by the A row wrapping upward.
    """
    defs: list[NoteDefinition] = []
    for spec in specs:
        if spec.key == TOP_EDGE_KEY:
            defs.append(_make_definition(spec, OctaveBand.HIGH))
            continue
        for band in (OctaveBand.LOW, OctaveBand.MID, OctaveBand.HIGH):
            defs.append(_make_definition(spec, band))
    return sorted(defs, key=lambda d: d.midi_number)


class NoteCatalog:
    """Read-only lookup over the built note definitions."""

    def __init__(self, specs: Iterable[KeySpec] = PHYSICAL_KEYS) -> None:
        self._definitions = build_definitions(specs)
        self._by_key: dict[str, NoteDefinition] = {}
        for definition in self._definitions:
            if definition.logical_key in self._by_key:
                raise ValueError(f"Duplicate logical key: {definition.logical_key}")
            self._by_key[definition.logical_key] = definition

    def __iter__(self) -> Iterator[NoteDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def get(self, key: str) -> NoteDefinition | None:
        return self._by_key.get(key)

    def find_note(self, note_name: str) -> NoteDefinition | None:
        """First definition sounding the given note name."""
        for definition in self._definitions:
            if definition.note_name == note_name:
                return definition
        return None

    @property
    def midi_range(self) -> tuple[int, int]:
        return self._definitions[0].midi_number, self._definitions[-1].midi_number
