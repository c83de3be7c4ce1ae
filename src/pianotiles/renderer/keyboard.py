"""Render the playable keyboard at the bottom of the screen."""

from __future__ import annotations

from collections.abc import Iterable

import pygame

from pianotiles.models import KeyState, Variant
from pianotiles.renderer.colors import (
    BLACK_KEY,
    BLACK_KEY_ACTIVE,
    KEY_LABEL_DARK,
    KEY_LABEL_LIGHT,
    WHITE_KEY,
    WHITE_KEY_ACTIVE,
)
from pianotiles.renderer.viewport import Viewport

_STYLE = {
    Variant.NATURAL: (WHITE_KEY, WHITE_KEY_ACTIVE, KEY_LABEL_DARK),
    Variant.ACCIDENTAL: (BLACK_KEY, BLACK_KEY_ACTIVE, KEY_LABEL_LIGHT),
}


def render_keyboard(surface: pygame.Surface, keys: Iterable[KeyState], viewport: Viewport) -> None:
    """Draw natural keys first, then accidentals on top, each with its label."""
    font = pygame.font.SysFont("monospace", 14)
    ordered = sorted(keys, key=lambda k: k.variant == Variant.ACCIDENTAL)
    for state in ordered:
        layout = state.layout
        base, active, label_color = _STYLE[state.variant]
        rect = viewport.rect(layout.center_x, layout.center_y, layout.width, layout.height)
        pygame.draw.rect(surface, active if state.pressed else base, rect)
        if state.variant == Variant.NATURAL:
            pygame.draw.rect(surface, BLACK_KEY, rect, width=1)

        text = font.render(layout.definition.label, True, label_color)
        surface.blit(text, (rect.centerx - text.get_width() // 2, rect.bottom - text.get_height() - 6))
