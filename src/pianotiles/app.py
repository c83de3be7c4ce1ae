"""Top-level application: initializes pygame, owns the gameplay view and runs the loop."""

from __future__ import annotations

import logging

import pygame

from pianotiles.config import FPS, WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
from pianotiles.keyboard_input import KeyboardInput
from pianotiles.models import MelodyEvent
from pianotiles.schedule import DEFAULT_MELODY
from pianotiles.settings import GameSettings
from pianotiles.views.base import ViewContext
from pianotiles.views.tiles_view import TilesView

logger = logging.getLogger(__name__)


class App:
    def __init__(
        self,
        settings: GameSettings | None = None,
        melody: list[MelodyEvent] | None = None,
        audio_enabled: bool = True,
    ) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        self.clock = pygame.time.Clock()
        self.settings = settings or GameSettings()

        # Audio is optional; without it the game is visual-only
        self.audio = self._try_audio(self.settings) if audio_enabled else None
        self._keyboard_input = KeyboardInput()

        context = ViewContext(
            screen_size=(WINDOW_WIDTH, WINDOW_HEIGHT),
            audio=self.audio,
            keyboard_input=self._keyboard_input,
            settings=self.settings,
            melody=list(melody or DEFAULT_MELODY),
        )
        self.view = TilesView()
        self.view.on_enter(context)

    def run(self) -> None:
        running = True
        while running:
            dt = self.clock.tick(FPS) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                else:
                    self._keyboard_input.feed_event(event)
                    if self.view.handle_event(event) is not None:
                        running = False
            if running and self.view.update(dt) is not None:
                running = False
            self.view.draw(self.screen)
            pygame.display.flip()

        self._cleanup()
        pygame.quit()

    def _cleanup(self) -> None:
        self.view.on_exit()
        self._keyboard_input.close()
        if self.audio:
            self.audio.shutdown()

    @staticmethod
    def _try_audio(settings: GameSettings):
        try:
            from pianotiles.audio import AudioVoiceManager, PygameMixer
            return AudioVoiceManager(
                PygameMixer(),
                base_url=settings.sample_base_url,
                master_gain=settings.master_gain,
                attack_seconds=settings.attack_seconds,
                release_seconds=settings.release_seconds,
            )
        except Exception as exc:
            logger.warning("Audio unavailable, continuing without sound: %s", exc)
            return None
