"""Physical key normalization and octave-band resolution."""

from __future__ import annotations

from pianotiles.models import OctaveBand

SPACE = " "
ENTER = "Enter"
TOP_EDGE_KEY = ";"
WRAP_KEY = "A"


def normalize_key(value: str) -> str:
    """Return the canonical form of a raw key value.

    Unknown values come back unchanged; lookups on them simply miss.
    """
    if not value:
        return value
    if value in ("Space", "Spacebar", SPACE):
        return SPACE
    if value == ENTER:
        return ENTER
    if len(value) == 1 and value.isascii() and value.isalpha():
        return value.upper()
    if value == ":":
        return ";"
    return value


def resolve_band(base: str, shift_held: bool, space_held: bool) -> tuple[str, OctaveBand]:
    """Pick the (base key, octave band) a press refers to.

    Shift raises one band and Space lowers one. The top-edge key wraps
    onto the next C up from the A row.
    """
    if base == TOP_EDGE_KEY:
        if shift_held:
            return TOP_EDGE_KEY, OctaveBand.HIGH
        if space_held:
            return WRAP_KEY, OctaveBand.MID
        return WRAP_KEY, OctaveBand.HIGH

    if shift_held:
        return base, OctaveBand.HIGH
    if space_held:
        return base, OctaveBand.LOW
    return base, OctaveBand.MID


def logical_key(base: str, band: OctaveBand) -> str:
    return base + band.suffix


def resolve_logical_key(base: str, shift_held: bool = False, space_held: bool = False) -> str:
    return logical_key(*resolve_band(base, shift_held, space_held))
