import math
from enum import Enum
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from constants import (
    METER_MAX, FRUSTRATION_TICK_INTERVAL, HAPPINESS_TICK_INTERVAL, INITIAL_HAPPINESS,
    DEFAULT_FRAME_SIZE, VIEWPORT_MAX_W, VIEWPORT_MAX_H, FOLLOW_TOLERANCE,
)


class Mood(Enum):
    """
    Exclusive top-level behavior of the pet.
    Accepts the old sketch tags ('walk', 'happy', ...) so hosts can pass strings.
    """
    WANDER = "wander"
    SLEEP = "sleep"
    HAPPY = "happy"
    ANGRY = "angry"
    CELEBRATE = "celebrate"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized == "walk":
                return cls.WANDER
            for member in cls:
                if member.value == normalized or member.name.lower() == normalized:
                    return member
        return super()._missing_(value)


# Higher wins when two moods could be active at once.
MOOD_PRIORITY = {
    Mood.CELEBRATE: 5,
    Mood.HAPPY: 4,
    Mood.ANGRY: 3,
    Mood.SLEEP: 2,
    Mood.WANDER: 1,
}


@dataclass
class Meters:
    """Two bounded meters decaying one point per fixed interval of simulated time."""
    frustration: float = 0.0
    happiness: float = INITIAL_HAPPINESS
    frustration_timer: float = 0.0
    happiness_timer: float = 0.0

    def __post_init__(self):
        self.frustration = self.clamp(self.frustration)
        self.happiness = self.clamp(self.happiness)

    def clamp(self, value):
        return max(0.0, min(METER_MAX, value))

    def add_frustration(self, amount: float):
        if math.isfinite(amount):
            self.frustration = self.clamp(self.frustration + amount)

    def add_happiness(self, amount: float):
        if math.isfinite(amount):
            self.happiness = self.clamp(self.happiness + amount)

    def set_frustration(self, value: float):
        if math.isfinite(value):
            self.frustration = self.clamp(value)

    def tick(self, dt: float, pressed: bool):
        """Accumulator decay: at most one point per elapsed interval, remainder carried over."""
        if not pressed and self.frustration > 0:
            self.frustration_timer += dt
            while self.frustration_timer >= FRUSTRATION_TICK_INTERVAL and self.frustration > 0:
                self.frustration = self.clamp(self.frustration - 1)
                self.frustration_timer -= FRUSTRATION_TICK_INTERVAL
            if self.frustration <= 0:
                self.frustration_timer = 0.0

        if self.happiness > 0:
            self.happiness_timer += dt
            while self.happiness_timer >= HAPPINESS_TICK_INTERVAL and self.happiness > 0:
                self.happiness = self.clamp(self.happiness - 1)
                self.happiness_timer -= HAPPINESS_TICK_INTERVAL
            if self.happiness <= 0:
                self.happiness_timer = 0.0


@dataclass
class FollowTarget:
    x: float
    y: float
    tolerance: float = FOLLOW_TOLERANCE
    speed: Optional[float] = None
    active: bool = True

    def is_valid(self):
        return math.isfinite(self.x) and math.isfinite(self.y)


@dataclass
class PressState:
    active: bool = False
    remaining_boost_time: float = 0.0

    def start(self, seconds: float):
        self.active = True
        self.remaining_boost_time = seconds

    def tick(self, dt: float) -> bool:
        """Counts the boost down. Returns True on the tick it runs out."""
        if self.remaining_boost_time <= 0:
            return False
        self.remaining_boost_time -= dt
        if self.remaining_boost_time <= 0:
            self.remaining_boost_time = 0.0
            self.active = False
            return True
        return False


@dataclass
class FrameSet:
    """Frame count, playback rate and native pixel sizes of one animation."""
    frame_count: int = 1
    fps: float = 12.0
    sizes: List[Tuple[int, int]] = field(default_factory=list)

    @property
    def safe_count(self):
        return max(int(self.frame_count), 1)

    @property
    def duration(self):
        return self.safe_count / self.fps if self.fps > 0 else 0.0

    def frame_at(self, clock: float, fps: Optional[float] = None) -> int:
        rate = self.fps if fps is None else fps
        if rate <= 0 or not math.isfinite(clock):
            return 0
        return int(math.floor(clock * rate)) % self.safe_count

    def size_of(self, index: int) -> Tuple[int, int]:
        if not self.sizes:
            return DEFAULT_FRAME_SIZE
        w, h = self.sizes[index % len(self.sizes)]
        return (w or DEFAULT_FRAME_SIZE[0], h or DEFAULT_FRAME_SIZE[1])


@dataclass
class BoundingBox:
    x: float = 0.0
    y: float = 0.0
    w: float = 0.0
    h: float = 0.0

    @classmethod
    def from_center(cls, cx, cy, w, h):
        return cls(cx - w / 2, cy - h / 2, w, h)

    def contains(self, px, py):
        return self.x <= px <= self.x + self.w and self.y <= py <= self.y + self.h

    def overlaps(self, other: "BoundingBox"):
        return (self.x < other.x + other.w and other.x < self.x + self.w and
                self.y < other.y + other.h and other.y < self.y + self.h)


@dataclass(frozen=True)
class Pose:
    """Everything the renderer needs to draw one frame of the pet."""
    mood: Mood
    position: Tuple[float, float]
    rotation: float
    frame_index: int
    bounding_box: BoundingBox
    facing_left: bool = False


def fit_scale(frame_w, frame_h, viewport_w, viewport_h, max_upscale):
    """Scale that keeps a frame within half the width and 35% of the height of the viewport."""
    frame_w = frame_w or DEFAULT_FRAME_SIZE[0]
    frame_h = frame_h or DEFAULT_FRAME_SIZE[1]
    if viewport_w <= 0 or viewport_h <= 0:
        return max_upscale
    return min(viewport_w * VIEWPORT_MAX_W / frame_w, viewport_h * VIEWPORT_MAX_H / frame_h, max_upscale)
