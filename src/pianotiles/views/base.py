"""View protocol, ViewContext and ViewAction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, Protocol, runtime_checkable

import pygame

from pianotiles.models import MelodyEvent
from pianotiles.schedule import DEFAULT_MELODY
from pianotiles.settings import GameSettings

if TYPE_CHECKING:
    from pianotiles.audio import AudioVoiceManager
    from pianotiles.keyboard_input import KeyboardInput


@dataclass
class ViewContext:
    """Shared state passed to views on entry."""

    screen_size: tuple[int, int]
    audio: AudioVoiceManager | None
    keyboard_input: KeyboardInput | None = None
    settings: GameSettings = field(default_factory=GameSettings)
    melody: list[MelodyEvent] = field(default_factory=lambda: list(DEFAULT_MELODY))


@dataclass
class ViewAction:
    """Command returned by views to the app loop."""

    kind: Literal["quit"]


@runtime_checkable
class View(Protocol):
    """A full-screen game state."""

    name: str
    display_name: str

    def on_enter(self, context: ViewContext) -> None: ...
    def on_exit(self) -> None: ...
    def handle_event(self, event: pygame.event.Event) -> ViewAction | None: ...
    def update(self, dt: float) -> ViewAction | None: ...
    def draw(self, surface: pygame.Surface) -> None: ...
