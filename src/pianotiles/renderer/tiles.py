"""Falling tiles and the hit band."""

from __future__ import annotations

from collections.abc import Iterable

import pygame

from pianotiles.evaluator import in_band
from pianotiles.models import ActiveTile, HitBand, Variant
from pianotiles.renderer.colors import (
    BLACK_KEY_ACTIVE,
    HIT_BAND,
    TILE,
    TILE_ACTIVE,
    WHITE_KEY,
    WHITE_KEY_ACTIVE,
)
from pianotiles.renderer.viewport import Viewport

# (idle, inside the band)
_STYLE = {
    Variant.TILE: (TILE, TILE_ACTIVE),
    Variant.NATURAL: (WHITE_KEY, WHITE_KEY_ACTIVE),
    Variant.ACCIDENTAL: (TILE, BLACK_KEY_ACTIVE),
}


def tile_color(tile: ActiveTile, lit: bool) -> tuple[int, int, int]:
    idle, active = _STYLE[tile.variant]
    return active if lit else idle


def render_hit_band(surface: pygame.Surface, band: HitBand, width: float, viewport: Viewport) -> None:
    rect = viewport.rect(0.0, band.center_y, width, band.height)
    overlay = pygame.Surface(rect.size, pygame.SRCALPHA)
    overlay.fill((*HIT_BAND, 70))
    surface.blit(overlay, rect.topleft)
    pygame.draw.rect(surface, HIT_BAND, rect, width=2)


def render_tiles(
    surface: pygame.Surface,
    tiles: Iterable[ActiveTile],
    viewport: Viewport,
    band: HitBand | None = None,
) -> None:
    """Draw each tile; tiles currently inside the band are highlighted."""
    for tile in tiles:
        lit = band is not None and in_band(tile, band)
        rect = viewport.rect(tile.x, tile.y, tile.width, tile.height)
        pygame.draw.rect(surface, tile_color(tile, lit), rect, border_radius=3)
