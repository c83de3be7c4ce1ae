"""Core data models shared across the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class OctaveBand(Enum):
    LOW = ("_LOW", -1)
    MID = ("_MID", 0)
    HIGH = ("_HIGH", 1)

    @property
    def suffix(self) -> str:
        return self.value[0]

    @property
    def octave_shift(self) -> int:
        return self.value[1]


class Variant(Enum):
    """How a key or tile is drawn; independent of the note it plays."""

    NATURAL = auto()
    ACCIDENTAL = auto()
    TILE = auto()


@dataclass(frozen=True)
class KeySpec:
    """A physical key bound to a base note name."""

    key: str
    note: str
    label: str | None = None


@dataclass(frozen=True)
class NoteDefinition:
    """A playable note: one per physical key and octave band."""

    logical_key: str  # e.g. "A_MID"
    label: str
    note_name: str  # e.g. "C#4"
    midi_number: int
    frequency_hz: float
    is_accidental: bool


@dataclass(frozen=True)
class MelodyEvent:
    note: str
    beats: float


@dataclass(frozen=True)
class ScheduleEntry:
    frame: int  # spawn frame, >= 0
    note: str


@dataclass
class Schedule:
    entries: list[ScheduleEntry] = field(default_factory=list)
    frames_per_beat: int = 1
    travel_frames: int = 1


@dataclass
class KeyLayout:
    """World-space rectangle of one keyboard key (centre + size)."""

    definition: NoteDefinition
    center_x: float
    center_y: float
    width: float
    height: float

    @property
    def variant(self) -> Variant:
        return Variant.ACCIDENTAL if self.definition.is_accidental else Variant.NATURAL


@dataclass
class KeyState:
    layout: KeyLayout
    pressed: bool = False

    @property
    def variant(self) -> Variant:
        return self.layout.variant


@dataclass(eq=False)
class ActiveTile:
    """A falling tile, owned by the session until it is hit or missed."""

    definition: NoteDefinition
    x: float
    y: float  # vertical centre
    width: float
    height: float
    spawn_frame: int = 0  # schedule frame the tile was released on
    variant: Variant = Variant.TILE

    @property
    def logical_key(self) -> str:
        return self.definition.logical_key

    @property
    def bottom(self) -> float:
        return self.y - self.height * 0.5


@dataclass(frozen=True)
class HitBand:
    center_y: float
    height: float

    @property
    def top(self) -> float:
        return self.center_y + self.height * 0.5

    @property
    def bottom(self) -> float:
        return self.center_y - self.height * 0.5


@dataclass
class TickResult:
    """What changed during one frame; polled by the view."""

    spawned: list[ActiveTile] = field(default_factory=list)
    missed: list[ActiveTile] = field(default_factory=list)
    stopped: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.spawned or self.missed or self.stopped)
