"""Heads-up display — title, score and status."""

from __future__ import annotations

import pygame

from pianotiles.renderer.colors import HUD_DIM, HUD_TEXT


def render_hud(
    surface: pygame.Surface,
    active: bool,
    score: int,
    last_score: int | None,
    difficulty: str,
    held_labels: list[str],
) -> None:
    font = pygame.font.SysFont("monospace", 20)
    small = pygame.font.SysFont("monospace", 16)

    if active:
        status = f"Score: {score}"
    elif last_score is not None:
        status = f"Last score: {last_score}  |  Press Enter to play again"
    else:
        status = "Press Enter to start game, or just play piano freely"

    lines = [
        (font, "Piano Tiles", HUD_TEXT),
        (small, status, HUD_TEXT),
        (small, f"Difficulty: {difficulty} (Up/Down)", HUD_DIM),
    ]
    if held_labels:
        lines.append((small, "Holding: " + " ".join(held_labels), HUD_DIM))

    y = 10
    for f, line, color in lines:
        text = f.render(line, True, color)
        surface.blit(text, (10, y))
        y += text.get_height() + 6
