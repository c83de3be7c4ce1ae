"""Game session — tile spawning, falling, hit/miss scoring and key handling."""

from __future__ import annotations

import logging
import random
from collections import deque
from collections.abc import Sequence

from pianotiles.audio import AudioVoiceManager, Voice
from pianotiles.catalog import NoteCatalog
from pianotiles.config import (
    DEFAULT_BPM,
    DEFAULT_FALL_SPEED,
    DEFAULT_TRAVEL_BEATS,
    DIFFICULTY_OPTIONS,
    FPS,
    SCENE_SCALE,
)
from pianotiles.errors import ErrorReporter
from pianotiles.evaluator import find_hit, is_missed
from pianotiles.keymap import ENTER, normalize_key, resolve_logical_key
from pianotiles.layout import build_layouts, tile_height
from pianotiles.models import (
    ActiveTile,
    HitBand,
    KeyState,
    MelodyEvent,
    ScheduleEntry,
    TickResult,
)
from pianotiles.schedule import DEFAULT_MELODY, build_schedule, fall_speed

logger = logging.getLogger(__name__)


def difficulty_beats(index: float) -> int:
    """Travel beats for a difficulty index; the index is rounded and clamped."""
    idx = min(len(DIFFICULTY_OPTIONS) - 1, max(0, round(index)))
    return DIFFICULTY_OPTIONS[idx][1]


class GameSession:
    """Owns the play state between Enter presses.

    Idle -> Active on start(), Active -> Idle on stop() or when the melody
    has been fully spawned and every tile is gone. The host calls tick()
    once per rendered frame and forwards key presses to key_down/key_up.
    """

    def __init__(
        self,
        catalog: NoteCatalog | None = None,
        audio: AudioVoiceManager | None = None,
        melody: Sequence[MelodyEvent] = DEFAULT_MELODY,
        bpm: float = DEFAULT_BPM,
        frame_rate: float = FPS,
        travel_beats: float = DEFAULT_TRAVEL_BEATS,
        scene_scale: float = SCENE_SCALE,
        errors: ErrorReporter | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.catalog = catalog or NoteCatalog()
        self.audio = audio
        self.melody = list(melody)
        self.bpm = bpm
        self.frame_rate = frame_rate
        self.travel_beats = travel_beats
        self.scene_scale = scene_scale
        self.errors = errors or ErrorReporter()
        self._rng = rng or random.Random()

        self.active = False
        self.score = 0
        self.last_score: int | None = None
        self.frame_counter = 0
        self.fall_speed = DEFAULT_FALL_SPEED
        self.travel_frames = 1
        self.hit_band: HitBand | None = None
        self.tiles: list[ActiveTile] = []
        self._schedule: deque[ScheduleEntry] = deque()

        self.key_states: dict[str, KeyState] = {
            layout.definition.logical_key: KeyState(layout)
            for layout in build_layouts(self.catalog, scene_scale)
        }
        self._physical_to_logical: dict[str, str] = {}
        self._voices: dict[str, Voice] = {}

    # -- configuration -------------------------------------------------

    def set_travel_beats(self, beats: float) -> None:
        """Takes effect at the next start()."""
        self.travel_beats = beats

    def set_difficulty(self, index: float) -> None:
        self.set_travel_beats(difficulty_beats(index))

    # -- geometry ------------------------------------------------------

    @property
    def spawn_y(self) -> float:
        return self.scene_scale

    @property
    def tile_height(self) -> float:
        layouts = [state.layout for state in self.key_states.values()]
        return tile_height(layouts, fallback=0.1 * self.scene_scale)

    @property
    def pending_spawns(self) -> int:
        return len(self._schedule)

    # -- lifecycle -----------------------------------------------------

    def start(self) -> None:
        self.active = True
        self.score = 0
        self.frame_counter = 0
        self.tiles.clear()

        band_height = self.tile_height
        lift = band_height / 3
        self.hit_band = HitBand(center_y=-band_height * 0.5 + lift, height=band_height)

        schedule = build_schedule(self.melody, self.bpm, self.frame_rate, self.travel_beats)
        self._schedule = deque(schedule.entries)
        self.travel_frames = schedule.travel_frames
        travel_distance = self.spawn_y - self.hit_band.center_y
        if travel_distance > 0:
            self.fall_speed = fall_speed(travel_distance, schedule.travel_frames)
        else:
            self.travel_frames = 1

        logger.info(
            "Session started: %d notes, %d frames/beat, %d travel frames",
            len(self._schedule), schedule.frames_per_beat, self.travel_frames,
        )

    def stop(self) -> None:
        if self.active:
            logger.info("Session stopped with score %d", self.score)
            self.last_score = self.score
        self.active = False
        self.score = 0
        self.hit_band = None
        self.tiles.clear()
        self._schedule.clear()

    def toggle(self) -> None:
        if self.active:
            self.stop()
        else:
            self.start()

    # -- per frame -----------------------------------------------------

    def tick(self) -> TickResult:
        """Advance one frame. Errors are reported and the frame is dropped."""
        result = TickResult()
        if not self.active:
            return result
        try:
            self._advance(result)
        except Exception as exc:
            self.errors.report(exc)
        return result

    def _advance(self, result: TickResult) -> None:
        self.frame_counter += 1
        # An entry for frame f is released on tick f + 1 and lands on f + travel_frames
        while self._schedule and self._schedule[0].frame < self.frame_counter:
            entry = self._schedule.popleft()
            tile = self._spawn_tile(entry.note, entry.frame)
            if tile is not None:
                result.spawned.append(tile)

        band = self.hit_band
        for tile in self.tiles:
            tile.y = self._tile_y(tile)
            if band is not None and is_missed(tile, band):
                result.missed.append(tile)

        if result.missed:
            missed_ids = {id(t) for t in result.missed}
            self.tiles = [t for t in self.tiles if id(t) not in missed_ids]
            self.score -= len(result.missed)

        if self._finished():
            self.stop()
            result.stopped = True

    def _finished(self) -> bool:
        return self.active and not self._schedule and not self.tiles

    def _tile_y(self, tile: ActiveTile) -> float:
        # Measured from the band centre so the arrival frame lands on it exactly
        remaining = self.travel_frames - (self.frame_counter - tile.spawn_frame)
        center = self.hit_band.center_y if self.hit_band is not None else 0.0
        return center + self.fall_speed * remaining

    def _spawn_tile(self, note: str, spawn_frame: int = 0) -> ActiveTile | None:
        if not self.key_states:
            return None
        definition = self.catalog.find_note(note)
        state = self.key_states.get(definition.logical_key) if definition is not None else None
        if state is None:
            logger.warning("No key plays %s; spawning on a random key", note)
            state = self._rng.choice(list(self.key_states.values()))
        layout = state.layout
        tile = ActiveTile(
            definition=layout.definition,
            x=layout.center_x,
            y=self.spawn_y,
            width=layout.width,
            height=layout.width * 2,
            spawn_frame=spawn_frame,
        )
        self.tiles.append(tile)
        return tile

    # -- input ---------------------------------------------------------

    def try_hit(self, key: str) -> ActiveTile | None:
        """Score the lowest matching tile in the hit band, if any.

        Hitting the last tile of a fully spawned melody ends the session.
        """
        if not self.active or self.hit_band is None:
            return None
        tile = find_hit(self.tiles, self.hit_band, key)
        if tile is not None:
            self.score += 1
            self.tiles.remove(tile)
            if self._finished():
                self.stop()
        return tile

    def key_down(self, raw_key: str, shift_held: bool = False, space_held: bool = False) -> bool:
        """Handle a key press. Returns True if the press was consumed."""
        base = normalize_key(raw_key)
        if not base:
            return False

        if base == ENTER:
            self.toggle()
            return True

        key = resolve_logical_key(base, shift_held, space_held)
        state = self.key_states.get(key)
        if state is None:
            return False

        self.try_hit(key)

        existing = self._voices.pop(key, None)
        if existing is not None:
            existing.stop()

        state.pressed = True
        self._physical_to_logical[base] = key
        self._play(key, state)
        return True

    def key_up(self, raw_key: str, shift_held: bool = False, space_held: bool = False) -> bool:
        base = normalize_key(raw_key)
        key = self._physical_to_logical.pop(base, None)
        if key is None:
            return False
        state = self.key_states.get(key)
        if state is None:
            return False

        state.pressed = False
        voice = self._voices.pop(key, None)
        if voice is not None:
            voice.stop()
        return True

    def _play(self, key: str, state: KeyState) -> None:
        if self.audio is None:
            return
        voice: Voice | None = None

        def on_ended() -> None:
            if self._voices.get(key) is voice:
                del self._voices[key]

        voice = self.audio.play(state.layout.definition, on_ended)
        if voice is not None:
            self._voices[key] = voice

    # -- status --------------------------------------------------------

    def voice_for(self, key: str) -> Voice | None:
        return self._voices.get(key)

    def active_labels(self) -> list[str]:
        return [s.layout.definition.label for s in self.key_states.values() if s.pressed]
