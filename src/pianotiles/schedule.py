"""Melody scheduling — turns (note, beats) events into a frame-indexed spawn list."""

from __future__ import annotations

from collections.abc import Sequence

from pianotiles.models import MelodyEvent, Schedule, ScheduleEntry

# "Twinkle Twinkle Little Star"
DEFAULT_MELODY: list[MelodyEvent] = [
    MelodyEvent(note, beats)
    for line in (
        ["C4", "C4", "G4", "G4", "A4", "A4", "G4"],
        ["F4", "F4", "E4", "E4", "D4", "D4", "C4"],
        ["G4", "G4", "F4", "F4", "E4", "E4", "D4"],
        ["G4", "G4", "F4", "F4", "E4", "E4", "D4"],
        ["C4", "C4", "G4", "G4", "A4", "A4", "G4"],
        ["F4", "F4", "E4", "E4", "D4", "D4", "C4"],
    )
    for note, beats in zip(line, [1, 1, 1, 1, 1, 1, 2])
]


def frames_per_beat(bpm: float, frame_rate: float) -> int:
    if bpm <= 0:
        raise ValueError(f"bpm must be positive, got {bpm}")
    return max(1, round(frame_rate * 60.0 / bpm))


def travel_frames(fpb: int, travel_beats: float) -> int:
    """Frames a tile takes to fall from spawn height to the hit line."""
    return max(1, round(fpb * travel_beats))


def fall_speed(travel_distance: float, n_frames: int) -> float:
    """World units per frame so a tile covers the distance in exactly n_frames."""
    return travel_distance / max(1, n_frames)


def build_schedule(
    events: Sequence[MelodyEvent],
    bpm: float,
    frame_rate: float,
    travel_beats: float,
) -> Schedule:
    """Compute spawn frames so each tile reaches the hit line on its beat.

    Spawn frames that would fall before frame 0 shift the whole schedule
    later; arrivals are delayed, never advanced.
    """
    fpb = frames_per_beat(bpm, frame_rate)
    n_travel = travel_frames(fpb, travel_beats)

    raw: list[tuple[int, str]] = []
    hit_frame = 0.0
    for event in events:
        raw.append((round(hit_frame) - n_travel, event.note))
        hit_frame += event.beats * fpb

    min_frame = min((frame for frame, _ in raw), default=0)
    offset = -min_frame if min_frame < 0 else 0

    # sorted() is stable, so ties keep melody order
    entries = sorted(
        (ScheduleEntry(frame=frame + offset, note=note) for frame, note in raw),
        key=lambda e: e.frame,
    )
    return Schedule(entries=entries, frames_per_beat=fpb, travel_frames=n_travel)
