"""Keyboard layout in world space, derived from the note catalog."""

from __future__ import annotations

from collections.abc import Iterable

from pianotiles.config import (
    BLACK_KEY_HEIGHT,
    BLACK_KEY_WIDTH,
    WHITE_KEY_GAP,
    WHITE_KEY_HEIGHT,
    WHITE_KEY_WIDTH,
)
from pianotiles.models import KeyLayout, NoteDefinition

_NATURAL_ORDER = ["C", "D", "E", "F", "G", "A", "B"]


def next_natural(note_name: str) -> str:
    """C4 -> D4, B4 -> C5."""
    letter, octave = note_name[0], int(note_name[1:])
    idx = _NATURAL_ORDER.index(letter)
    next_octave = octave + 1 if letter == "B" else octave
    return f"{_NATURAL_ORDER[(idx + 1) % 7]}{next_octave}"


def build_layouts(definitions: Iterable[NoteDefinition], scene_scale: float) -> list[KeyLayout]:
    """Place every key; white keys first, then black keys (drawn on top).

    The keyboard is centred horizontally, 1.8 * scene_scale wide and
    0.8 * scene_scale tall, with its bottom edge at -0.9 * scene_scale.
    """
    defs = sorted(definitions, key=lambda d: d.midi_number)
    whites = [d for d in defs if not d.is_accidental]
    blacks = [d for d in defs if d.is_accidental]
    pitch = WHITE_KEY_WIDTH + WHITE_KEY_GAP

    layouts: list[KeyLayout] = []
    natural_x: dict[str, float] = {}
    for i, d in enumerate(whites):
        layouts.append(KeyLayout(d, i * pitch, WHITE_KEY_HEIGHT * 0.5, WHITE_KEY_WIDTH, WHITE_KEY_HEIGHT))
        natural_x[d.note_name] = i * pitch

    for d in blacks:
        natural = d.note_name.replace("#", "")
        base_x = natural_x.get(natural)
        if base_x is None:
            continue
        neighbour_x = natural_x.get(next_natural(natural), base_x + pitch)
        layouts.append(KeyLayout(
            d,
            base_x + 0.5 * (neighbour_x - base_x),
            WHITE_KEY_HEIGHT - BLACK_KEY_HEIGHT * 0.5,
            BLACK_KEY_WIDTH,
            BLACK_KEY_HEIGHT,
        ))

    if not layouts:
        return layouts

    left = min(k.center_x - k.width * 0.5 for k in layouts)
    right = max(k.center_x + k.width * 0.5 for k in layouts)
    bottom = min(k.center_y - k.height * 0.5 for k in layouts)
    top = max(k.center_y + k.height * 0.5 for k in layouts)

    offset_x = (left + right) * 0.5
    for k in layouts:
        k.center_x -= offset_x
        k.center_y -= WHITE_KEY_HEIGHT * 0.5

    width_span, height_span = right - left, top - bottom
    scale_x = scene_scale * 1.8 / width_span if width_span > 0 else 1.0
    scale_y = scene_scale * 0.8 / height_span if height_span > 0 else 1.0
    for k in layouts:
        k.center_x *= scale_x
        k.width *= scale_x
        k.center_y *= scale_y
        k.height *= scale_y

    delta_y = -scene_scale * 0.9 - min(k.center_y - k.height * 0.5 for k in layouts)
    for k in layouts:
        k.center_y += delta_y

    return layouts


def tile_height(layouts: list[KeyLayout], fallback: float) -> float:
    """Representative tile height: twice the width of the first natural key."""
    if not layouts:
        return fallback
    reference = next((k for k in layouts if not k.definition.is_accidental), layouts[0])
    return reference.width * 2
