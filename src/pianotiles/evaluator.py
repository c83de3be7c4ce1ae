"""Hit evaluation — compare a key press against the tiles inside the hit band."""

from __future__ import annotations

from collections.abc import Iterable

from pianotiles.models import ActiveTile, HitBand


def in_band(tile: ActiveTile, band: HitBand) -> bool:
    return band.bottom <= tile.y <= band.top


def is_missed(tile: ActiveTile, band: HitBand) -> bool:
    """A tile is missed once its bottom edge drops below the band's bottom edge."""
    return tile.bottom < band.bottom


def find_hit(tiles: Iterable[ActiveTile], band: HitBand, pressed_key: str) -> ActiveTile | None:
    """Return the lowest in-band tile whose logical key matches, or None.

    Exact ties keep the first tile found.
    """
    best: ActiveTile | None = None
    lowest_y = float("inf")
    for tile in tiles:
        if tile.logical_key != pressed_key or not in_band(tile, band):
            continue
        if tile.y < lowest_y:
            lowest_y = tile.y
            best = tile
    return best
