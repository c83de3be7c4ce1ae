"""Piano tiles gameplay view — adapts a GameSession to the pygame loop."""

from __future__ import annotations

import pygame

from pianotiles.config import DIFFICULTY_OPTIONS, FPS, SCENE_SCALE
from pianotiles.errors import ErrorReporter
from pianotiles.models import KeyState
from pianotiles.renderer import colors as colors_mod
from pianotiles.renderer.hud import render_hud
from pianotiles.renderer.keyboard import render_keyboard
from pianotiles.renderer.tiles import render_hit_band, render_tiles
from pianotiles.renderer.viewport import Viewport
from pianotiles.session import GameSession
from pianotiles.views.base import ViewAction, ViewContext


class TilesView:
    name = "tiles"
    display_name = "Piano Tiles"

    def __init__(self) -> None:
        self._context: ViewContext | None = None
        self._session: GameSession | None = None
        self._viewport: Viewport | None = None
        self._difficulty_index = 1
        self._keyboard_width = 0.0

    @property
    def session(self) -> GameSession | None:
        return self._session

    def on_enter(self, context: ViewContext) -> None:
        self._context = context
        settings = context.settings
        self._session = GameSession(
            audio=context.audio,
            melody=context.melody,
            bpm=settings.bpm,
            frame_rate=FPS,
            scene_scale=SCENE_SCALE,
            errors=ErrorReporter(limit=1),
        )
        self._difficulty_index = settings.difficulty_index()
        self._session.set_difficulty(self._difficulty_index)
        self._viewport = Viewport(context.screen_size, SCENE_SCALE)
        self._keyboard_width = _span(self._session.key_states.values())
        if context.audio:
            context.audio.preload(self._session.catalog)

    def on_exit(self) -> None:
        if self._session:
            self._session.stop()
        if self._context and self._context.audio:
            self._context.audio.stop_all()

    def handle_event(self, event: pygame.event.Event) -> ViewAction | None:
        if event.type != pygame.KEYDOWN:
            return None
        if event.key == pygame.K_ESCAPE:
            return ViewAction(kind="quit")
        if event.key == pygame.K_UP:
            self._change_difficulty(+1)
        elif event.key == pygame.K_DOWN:
            self._change_difficulty(-1)
        return None

    def _change_difficulty(self, step: int) -> None:
        self._difficulty_index = min(len(DIFFICULTY_OPTIONS) - 1, max(0, self._difficulty_index + step))
        if self._session:
            self._session.set_difficulty(self._difficulty_index)
        if self._context:
            self._context.settings.difficulty = DIFFICULTY_OPTIONS[self._difficulty_index][0]

    def update(self, dt: float) -> ViewAction | None:
        session = self._session
        if session is None or self._context is None:
            return None

        source = self._context.keyboard_input
        if source is not None:
            while (press := source.poll()) is not None:
                if press.is_down:
                    session.key_down(press.raw_key, press.shift_held, press.space_held)
                else:
                    session.key_up(press.raw_key, press.shift_held, press.space_held)

        # One tick per rendered frame; dt is not used for tile motion
        session.tick()

        if self._context.audio:
            self._context.audio.update()
        return None

    def draw(self, surface: pygame.Surface) -> None:
        session = self._session
        viewport = self._viewport
        if session is None or viewport is None:
            return

        surface.fill(colors_mod.BG)
        if session.hit_band is not None:
            render_hit_band(surface, session.hit_band, self._keyboard_width, viewport)
        render_tiles(surface, session.tiles, viewport, session.hit_band)
        render_keyboard(surface, session.key_states.values(), viewport)
        render_hud(
            surface,
            active=session.active,
            score=session.score,
            last_score=session.last_score,
            difficulty=DIFFICULTY_OPTIONS[self._difficulty_index][0],
            held_labels=session.active_labels(),
        )


def _span(keys) -> float:
    states: list[KeyState] = list(keys)
    if not states:
        return 0.0
    left = min(s.layout.center_x - s.layout.width / 2 for s in states)
    right = max(s.layout.center_x + s.layout.width / 2 for s in states)
    return right - left
