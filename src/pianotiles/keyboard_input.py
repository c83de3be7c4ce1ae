"""Computer keyboard capture — pygame key events to raw key presses."""

from __future__ import annotations

from dataclasses import dataclass

import pygame

_NAMED_KEYS = {
    pygame.K_RETURN: "Enter",
    pygame.K_KP_ENTER: "Enter",
    pygame.K_SPACE: "Space",
    pygame.K_SEMICOLON: ";",
}


@dataclass
class KeyPress:
    raw_key: str
    shift_held: bool
    space_held: bool
    is_down: bool


def raw_key_name(key: int) -> str:
    """Raw key string for a pygame key code ("a", ";", "Enter", ...)."""
    if key in _NAMED_KEYS:
        return _NAMED_KEYS[key]
    return pygame.key.name(key)


class KeyboardInput:
    """Queues key presses with the modifier state they happened under."""

    def __init__(self) -> None:
        self._events: list[KeyPress] = []
        self._space_held = False

    def feed_event(self, event: pygame.event.Event) -> None:
        """Call from the game loop for each pygame event."""
        if event.type not in (pygame.KEYDOWN, pygame.KEYUP):
            return
        is_down = event.type == pygame.KEYDOWN
        shift = bool(getattr(event, "mod", 0) & pygame.KMOD_SHIFT)
        if event.key == pygame.K_SPACE:
            self._space_held = is_down
        self._events.append(KeyPress(
            raw_key=raw_key_name(event.key),
            shift_held=shift,
            space_held=self._space_held,
            is_down=is_down,
        ))

    @property
    def space_held(self) -> bool:
        return self._space_held

    def poll(self) -> KeyPress | None:
        if self._events:
            return self._events.pop(0)
        return None

    def close(self) -> None:
        self._events.clear()
        self._space_held = False
