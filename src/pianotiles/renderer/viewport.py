"""World-to-screen transform. World space is y-up, centred on the window."""

from __future__ import annotations

import pygame


class Viewport:
    def __init__(self, screen_size: tuple[int, int], scene_scale: float) -> None:
        self.width, self.height = screen_size
        self.scale = self.height / (2 * scene_scale)

    def to_screen(self, x: float, y: float) -> tuple[float, float]:
        return self.width / 2 + x * self.scale, self.height / 2 - y * self.scale

    def rect(self, center_x: float, center_y: float, width: float, height: float) -> pygame.Rect:
        """Screen rect for a world-space box given by its centre and size."""
        left, top = self.to_screen(center_x - width / 2, center_y + height / 2)
        return pygame.Rect(int(left), int(top), max(1, int(width * self.scale)), max(1, int(height * self.scale)))
