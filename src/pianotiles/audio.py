"""Sampled piano playback via pygame.mixer, with samples fetched over HTTP."""

from __future__ import annotations

import io
import logging
import re
import threading
import time
import urllib.request
from collections.abc import Callable, Iterable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Protocol
from urllib.parse import quote

import pygame

from pianotiles.config import (
    ATTACK_SECONDS,
    MASTER_GAIN,
    MIXER_CHANNELS,
    RELEASE_SECONDS,
    SAMPLE_BASE_URL,
    SAMPLE_EXTENSION,
    SAMPLE_FETCH_TIMEOUT,
)
from pianotiles.models import NoteDefinition

logger = logging.getLogger(__name__)

GAIN_FLOOR = 0.0001
MIN_RELEASE_SECONDS = 0.05
STOP_PADDING_SECONDS = 0.02

_NOTE_RE = re.compile(r"^([A-Ga-g])(#?)(\d)$")
_FLATS = {"C": "Db", "D": "Eb", "F": "Gb", "G": "Ab", "A": "Bb"}


def normalize_note(note: str) -> str:
    """Cache key for a note: letter, optional sharp, octave ("c#4" -> "C#4")."""
    match = _NOTE_RE.match(note)
    if match is None:
        return note.upper()
    letter, accidental, octave = match.groups()
    return f"{letter.upper()}{accidental}{octave}"


def sample_urls(note_key: str, base_url: str, extension: str) -> list[str]:
    """Candidate sample URLs for a note, in the order they are tried.

    Sample hosts disagree on how to spell sharps, so a sharp note expands
    to several names including its flat enharmonic.
    """
    match = _NOTE_RE.match(note_key)
    if match is None:
        names = [note_key.upper()]
    else:
        letter, accidental, octave = match.groups()
        letter = letter.upper()
        if accidental:
            names = [f"{letter}s{octave}", f"{letter}sharp{octave}", f"{letter}#{octave}"]
            if letter in _FLATS:
                names.append(f"{_FLATS[letter]}{octave}")
        else:
            names = [f"{letter}{octave}"]
    return [f"{base_url}/{quote(name, safe='')}.{extension}" for name in names]


def fetch_url(url: str, timeout: float = SAMPLE_FETCH_TIMEOUT) -> bytes:
    with urllib.request.urlopen(url, timeout=timeout) as response:
        return response.read()


class Output(Protocol):
    """A sound playing on one mixer channel."""

    def set_volume(self, volume: float) -> None: ...
    def stop(self) -> None: ...
    def is_playing(self) -> bool: ...


class Mixer(Protocol):
    def decode(self, data: bytes) -> Any: ...
    def start(self, sample: Any) -> Output | None: ...


class _ChannelOutput:
    def __init__(self, channel: pygame.mixer.Channel, sound: pygame.mixer.Sound) -> None:
        self._channel = channel
        self._sound = sound

    def _owns_channel(self) -> bool:
        return self._channel.get_sound() is self._sound

    def set_volume(self, volume: float) -> None:
        if self._owns_channel():
            self._channel.set_volume(volume)

    def stop(self) -> None:
        if self._owns_channel():
            self._channel.stop()

    def is_playing(self) -> bool:
        return self._channel.get_busy() and self._owns_channel()


class PygameMixer:
    """Mixer backed by pygame.mixer; samples are decoded from raw file bytes."""

    def __init__(self, channels: int = MIXER_CHANNELS) -> None:
        if not pygame.mixer.get_init():
            pygame.mixer.init()
        pygame.mixer.set_num_channels(channels)

    def decode(self, data: bytes) -> pygame.mixer.Sound:
        return pygame.mixer.Sound(file=io.BytesIO(data))

    def start(self, sample: pygame.mixer.Sound) -> Output | None:
        channel = sample.play()
        if channel is None:
            return None
        return _ChannelOutput(channel, sample)


class Voice:
    """One playing sample with an attack/release gain envelope."""

    def __init__(
        self,
        output: Output,
        clock: Callable[[], float],
        attack_seconds: float = ATTACK_SECONDS,
        release_seconds: float = RELEASE_SECONDS,
        master_gain: float = 1.0,
        on_ended: Callable[[], None] | None = None,
    ) -> None:
        self._output = output
        self._clock = clock
        self._attack = attack_seconds
        self._release = max(MIN_RELEASE_SECONDS, release_seconds)
        self._master = master_gain
        self._on_ended = on_ended
        self._started_at = clock()
        self._release_at: float | None = None
        self._release_from = GAIN_FLOOR
        self._stop_at: float | None = None
        self._ended = False
        output.set_volume(GAIN_FLOOR * master_gain)

    @property
    def stopping(self) -> bool:
        return self._release_at is not None

    @property
    def ended(self) -> bool:
        return self._ended

    def gain_at(self, now: float) -> float:
        if self._release_at is None:
            if self._attack <= 0:
                return 1.0
            t = (now - self._started_at) / self._attack
            return min(1.0, GAIN_FLOOR + (1.0 - GAIN_FLOOR) * max(0.0, t))
        if self._release_from <= GAIN_FLOOR:
            return GAIN_FLOOR
        t = min(1.0, max(0.0, (now - self._release_at) / self._release))
        return self._release_from * (GAIN_FLOOR / self._release_from) ** t

    def stop(self) -> None:
        """Fade out over the release time, then stop. Repeated calls do nothing."""
        if self._release_at is not None or self._ended:
            return
        now = self._clock()
        current = self.gain_at(now)
        self._release_from = current
        self._release_at = now
        self._stop_at = now + self._release + STOP_PADDING_SECONDS
        self._output.set_volume(current * self._master)

    def update(self, now: float) -> bool:
        """Advance the envelope. Returns True once the voice has ended."""
        if self._ended:
            return True
        if self._stop_at is not None and now >= self._stop_at:
            self._output.stop()
            self._finish()
        elif not self._output.is_playing():
            self._finish()
        else:
            self._output.set_volume(self.gain_at(now) * self._master)
        return self._ended

    def _finish(self) -> None:
        self._ended = True
        if self._on_ended is not None:
            self._on_ended()


class AudioVoiceManager:
    """Loads piano samples in the background and plays overlapping voices.

    Samples are keyed by normalized note name. Concurrent requests for one
    note share a single in-flight future, and URLs that failed once are
    never fetched again.
    """

    def __init__(
        self,
        mixer: Mixer | None,
        base_url: str = SAMPLE_BASE_URL,
        extension: str = SAMPLE_EXTENSION,
        master_gain: float = MASTER_GAIN,
        attack_seconds: float = ATTACK_SECONDS,
        release_seconds: float = RELEASE_SECONDS,
        fetch: Callable[[str, float], bytes] = fetch_url,
        timeout: float = SAMPLE_FETCH_TIMEOUT,
        executor: Executor | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._mixer = mixer
        self.base_url = base_url.rstrip("/")
        self.extension = extension
        self.master_gain = master_gain
        self.attack_seconds = attack_seconds
        self.release_seconds = release_seconds
        self._fetch = fetch
        self._timeout = timeout
        self._executor = executor or ThreadPoolExecutor(max_workers=4, thread_name_prefix="sample-loader")
        self._clock = clock
        self._lock = threading.RLock()
        self._buffers: dict[str, Any] = {}
        self._pending: dict[str, Future] = {}
        self._failed_urls: set[str] = set()
        self._warned: set[str] = set()
        self._voices: list[Voice] = []

    @property
    def enabled(self) -> bool:
        return self._mixer is not None

    def is_loaded(self, note: str) -> bool:
        with self._lock:
            return normalize_note(note) in self._buffers

    @property
    def failed_urls(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._failed_urls)

    @property
    def active_voices(self) -> list[Voice]:
        return list(self._voices)

    def preload(self, definitions: Iterable[NoteDefinition]) -> list[Future]:
        """Start loading every distinct note. Failures only mean silence later."""
        keys = dict.fromkeys(normalize_note(d.note_name) for d in definitions)
        return [self.request_sample(key) for key in keys]

    def request_sample(self, note_key: str) -> Future:
        with self._lock:
            if note_key in self._buffers or self._mixer is None:
                done: Future = Future()
                done.set_result(self._buffers.get(note_key))
                return done
            pending = self._pending.get(note_key)
            if pending is not None:
                return pending
            future = self._executor.submit(self._load, note_key)
            # Inline executors finish before we get here; nothing is pending then
            if not future.done():
                self._pending[note_key] = future
            return future

    def _load(self, note_key: str) -> Any:
        sample = None
        try:
            sample = self._load_first_available(note_key)
            return sample
        finally:
            with self._lock:
                if sample is not None:
                    self._buffers[note_key] = sample
                self._pending.pop(note_key, None)

    def _load_first_available(self, note_key: str) -> Any:
        for url in sample_urls(note_key, self.base_url, self.extension):
            with self._lock:
                if url in self._failed_urls:
                    continue
            try:
                data = self._fetch(url, self._timeout)
                return self._mixer.decode(data)
            except Exception as exc:
                with self._lock:
                    first_failure = url not in self._failed_urls
                    self._failed_urls.add(url)
                if first_failure:
                    logger.warning("Failed to load sample %s: %s", url, exc)
        logger.debug("No sample available for %s", note_key)
        return None

    def play(self, definition: NoteDefinition, on_ended: Callable[[], None] | None = None) -> Voice | None:
        """Start a voice for the note if its sample is cached.

        Otherwise a background load is kicked off for the next press and
        this press stays silent.
        """
        if self._mixer is None:
            return None

        note_key = normalize_note(definition.note_name)
        with self._lock:
            sample = self._buffers.get(note_key)
        if sample is None:
            self.request_sample(note_key)
            if note_key not in self._warned:
                self._warned.add(note_key)
                logger.warning("Sample not ready for %r", note_key)
            return None

        output = self._mixer.start(sample)
        if output is None:
            logger.debug("No free mixer channel for %s", note_key)
            return None
        voice = Voice(
            output,
            self._clock,
            attack_seconds=self.attack_seconds,
            release_seconds=self.release_seconds,
            master_gain=self.master_gain,
            on_ended=on_ended,
        )
        self._voices.append(voice)
        return voice

    def update(self) -> None:
        """Call each frame to advance envelopes and deliver end notifications."""
        now = self._clock()
        self._voices = [v for v in self._voices if not v.update(now)]

    def stop_all(self) -> None:
        for voice in self._voices:
            voice.stop()

    def shutdown(self) -> None:
        self.stop_all()
        self._executor.shutdown(wait=False, cancel_futures=True)
