"""Shared fakes for audio-related tests."""

from __future__ import annotations

from concurrent.futures import Executor, Future

import pytest

from pianotiles.audio import AudioVoiceManager


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class FakeOutput:
    def __init__(self, sample) -> None:
        self.sample = sample
        self.volumes: list[float] = []
        self.playing = True
        self.stopped = False

    def set_volume(self, volume: float) -> None:
        self.volumes.append(volume)

    def stop(self) -> None:
        self.playing = False
        self.stopped = True

    def is_playing(self) -> bool:
        return self.playing


class FakeMixer:
    def __init__(self) -> None:
        self.outputs: list[FakeOutput] = []

    def decode(self, data: bytes):
        if data == b"corrupt":
            raise ValueError("cannot decode")
        return ("sample", data)

    def start(self, sample) -> FakeOutput:
        output = FakeOutput(sample)
        self.outputs.append(output)
        return output


class InlineExecutor(Executor):
    """Runs submitted work immediately on the calling thread."""

    def submit(self, fn, /, *args, **kwargs):
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except BaseException as exc:
            future.set_exception(exc)
        return future


class DeferredExecutor(Executor):
    """Holds submitted work until run_all() is called."""

    def __init__(self) -> None:
        self.jobs: list[tuple[Future, object, tuple]] = []

    def submit(self, fn, /, *args, **kwargs):
        future = Future()
        self.jobs.append((future, fn, args))
        return future

    def run_all(self) -> None:
        jobs, self.jobs = self.jobs, []
        for future, fn, args in jobs:
            future.set_result(fn(*args))


class FakeFetcher:
    """Serves every URL with sample bytes unless told to fail it."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.failing: set[str] = set()
        self.fail_all = False

    def __call__(self, url: str, timeout: float) -> bytes:
        self.calls.append(url)
        if self.fail_all or url in self.failing:
            raise OSError(f"HTTP 404 for {url}")
        return b"mp3-bytes"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mixer() -> FakeMixer:
    return FakeMixer()


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def deferred() -> DeferredExecutor:
    return DeferredExecutor()


@pytest.fixture
def audio(mixer, fetcher, clock) -> AudioVoiceManager:
    return AudioVoiceManager(
        mixer,
        base_url="https://samples.test/piano",
        fetch=fetcher,
        executor=InlineExecutor(),
        clock=clock,
        master_gain=1.0,
        attack_seconds=0.01,
        release_seconds=0.5,
    )


@pytest.fixture
def inline() -> InlineExecutor:
    return InlineExecutor()
