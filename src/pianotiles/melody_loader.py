"""Load a melody line from a standard MIDI file."""

from __future__ import annotations

import logging
from pathlib import Path

import mido

from pianotiles.catalog import midi_to_note_name
from pianotiles.models import MelodyEvent

logger = logging.getLogger(__name__)


class MelodyLoadError(Exception):
    """Raised when a melody file cannot be parsed."""


def load_melody(
    file_path: str | Path,
    midi_range: tuple[int, int] | None = None,
) -> list[MelodyEvent]:
    """Read a MIDI file and return its top line as (note, beats) events.

    Args:
        file_path: Path to a .mid or .midi file.
        midi_range: Inclusive (low, high) MIDI numbers to keep; notes
            outside it are dropped.

    Raises:
        MelodyLoadError: If the file cannot be parsed or has no usable notes.
    """
    path = Path(file_path)
    if path.suffix.lower() not in (".mid", ".midi"):
        raise MelodyLoadError(f"Unsupported file format: {path.suffix}")
    try:
        mid = mido.MidiFile(str(path))
    except Exception as exc:
        raise MelodyLoadError(f"Failed to load {path.name}: {exc}") from exc

    onsets, lengths = _collect_onsets(mid)

    dropped = 0
    if midi_range is not None:
        low, high = midi_range
        kept = {tick: pitch for tick, pitch in onsets.items() if low <= pitch <= high}
        dropped = len(onsets) - len(kept)
        onsets = kept
    if dropped:
        logger.warning("Dropped %d notes outside the playable range in %s", dropped, path.name)
    if not onsets:
        raise MelodyLoadError(f"No playable notes in {path.name}")

    ticks = sorted(onsets)
    tpb = mid.ticks_per_beat
    events: list[MelodyEvent] = []
    for i, tick in enumerate(ticks):
        if i + 1 < len(ticks):
            span = ticks[i + 1] - tick
        else:
            span = lengths.get(tick) or tpb
        events.append(MelodyEvent(note=midi_to_note_name(onsets[tick]), beats=span / tpb))
    return events


def _collect_onsets(mid: mido.MidiFile) -> tuple[dict[int, int], dict[int, int]]:
    """Map onset tick -> highest pitch starting there, and tick -> its length."""
    onsets: dict[int, int] = {}
    lengths: dict[int, int] = {}
    for track in mid.tracks:
        abs_tick = 0
        pending: dict[int, int] = {}  # pitch -> onset tick
        for msg in track:
            abs_tick += msg.time
            if msg.type == "note_on" and msg.velocity > 0:
                pending[msg.note] = abs_tick
                if msg.note >= onsets.get(abs_tick, -1):
                    onsets[abs_tick] = msg.note
            elif msg.type in ("note_off", "note_on") and msg.note in pending:
                start = pending.pop(msg.note)
                if onsets.get(start) == msg.note:
                    lengths[start] = abs_tick - start
    return onsets, lengths
