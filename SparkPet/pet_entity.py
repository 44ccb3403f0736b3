import math
import random
from typing import Callable, Dict, Optional

from models import Mood, MOOD_PRIORITY, Meters, FollowTarget, PressState, FrameSet, BoundingBox, Pose, fit_scale
from constants import (
    SCREEN_WIDTH, SCREEN_HEIGHT, PET_NAME,
    BASE_SPEED, MAX_SPEED, SMOOTHNESS, MOVING_THRESHOLD, IDLE_ANIM_RATE,
    WANDER_CHANGE_START, WANDER_CHANGE_RANGE, WANDER_BOUNCE_RANGE, WANDER_BIG_TURN_CHANCE,
    BOUNCE_DAMPING, BOUNCE_SIDE_DAMPING, BOUNCE_JITTER,
    DISPLAY_SCALE, MAX_UPSCALE,
    WALK_FPS, PRESSED_FPS, SLEEP_FPS, HAPPY_FPS, ANGRY_FPS,
    PRESS_SPEED_MULTIPLIER, PRESS_BOOST_SECONDS,
    METER_MAX, FRUSTRATION_PER_CLICK, FEED_HAPPINESS_GAIN,
    SLEEP_AFTER_SECONDS, ANGRY_SECONDS, ANGRY_RESIDUAL_FRUSTRATION,
    CELEBRATE_DURATION, CELEBRATE_PEAK, CELEBRATE_ROTATIONS,
    FOLLOW_TOLERANCE,
)


def _finite(*values):
    for v in values:
        if isinstance(v, bool) or not isinstance(v, (int, float)) or not math.isfinite(v):
            return False
    return True


def default_frames() -> Dict[Mood, FrameSet]:
    happy = FrameSet(frame_count=1, fps=HAPPY_FPS)
    return {
        Mood.WANDER: FrameSet(frame_count=1, fps=WALK_FPS),
        Mood.SLEEP: FrameSet(frame_count=1, fps=SLEEP_FPS),
        Mood.HAPPY: happy,
        Mood.ANGRY: FrameSet(frame_count=1, fps=ANGRY_FPS),
        Mood.CELEBRATE: happy,
    }


class CreatureController:
    """
    Movement, animation cursor, mood state machine and meters of one pet.

    The host calls tick(dt) once per frame, draws current_pose() and forwards
    input events. Nothing in here reads the clock, draws or raises on bad input.
    """

    def __init__(self, x, y, frames=None, viewport=(SCREEN_WIDTH, SCREEN_HEIGHT),
                 name=PET_NAME, rng: Optional[random.Random] = None,
                 message_callback: Optional[Callable[[str], None]] = None):
        self.name = name
        self.rng = rng or random.Random()
        self.message_callback = message_callback

        # Position + motion
        self.x, self.y = float(x), float(y)
        self.vx, self.vy = 0.0, 0.0
        self.viewport_width, self.viewport_height = SCREEN_WIDTH, SCREEN_HEIGHT
        self.set_viewport(*viewport)

        # Animation sets, one per mood (celebrate borrows happy unless given its own)
        self.frames = default_frames()
        if frames:
            for mood, frame_set in frames.items():
                self.frames[Mood(mood)] = frame_set
            if Mood.CELEBRATE not in {Mood(m) for m in frames}:
                self.frames[Mood.CELEBRATE] = self.frames[Mood.HAPPY]
        self.pressed_fps = PRESSED_FPS

        # Mood state
        self.mood = Mood.WANDER
        self.meters = Meters()
        self.anim_clock = 0.0
        self.frame_index = 0
        self.mood_timer = 0.0
        self.mood_duration = 0.0
        self.idle_time = 0.0
        self.sleep_after = SLEEP_AFTER_SECONDS
        self.angry_duration = ANGRY_SECONDS
        self.rotation = 0.0
        self._celebrate_start = (self.x, self.y)
        self._celebrate_peak = 0.0
        self._celebrate_rotations = 0.0

        # Wander steering
        self.facing_direction = self.rng.uniform(0, math.tau)
        self.turn_timer = 0.0
        self.change_interval = self.rng.uniform(*WANDER_CHANGE_START)
        self.base_speed = BASE_SPEED
        self.speed_multiplier = 1.0
        self.max_speed = MAX_SPEED
        self.smoothness = SMOOTHNESS

        # Input
        self.press = PressState()
        self.follow_target: Optional[FollowTarget] = None
        self.just_arrived = False

        self.bounding_box = BoundingBox()
        self._update_bounding_box()

    # ------------------------------------------------------------------
    # Mood transitions
    # ------------------------------------------------------------------
    def transition_to(self, new_mood: Mood, duration: float = 0.0):
        old_mood = self.mood
        self.mood = new_mood
        self.anim_clock = 0.0
        self.frame_index = 0
        self.mood_timer = 0.0
        self.mood_duration = duration

        if new_mood != Mood.WANDER:
            self.vx, self.vy = 0.0, 0.0

        if old_mood != new_mood and self.message_callback:
            if new_mood == Mood.SLEEP:
                self.message_callback(f"{self.name} curled up and fell asleep.")
            elif old_mood == Mood.SLEEP and new_mood == Mood.WANDER:
                self.message_callback(f"{self.name} woke up!")
            elif new_mood == Mood.ANGRY:
                self.message_callback(f"{self.name} is furious! Leave it alone for a bit.")
            elif old_mood == Mood.ANGRY:
                self.message_callback(f"{self.name} calmed down, but is still a little sour.")
            elif new_mood == Mood.HAPPY:
                self.message_callback(f"{self.name} is happy!")
            elif new_mood == Mood.CELEBRATE:
                self.message_callback(f"{self.name} jumps for joy!")

    def _accepts_triggers(self):
        # Celebrate cannot be interrupted and anger blocks everything; triggers are dropped.
        return self.mood not in (Mood.CELEBRATE, Mood.ANGRY)

    def _release_press(self):
        self.press = PressState()
        self.speed_multiplier = 1.0

    def _record_activity(self):
        self.idle_time = 0.0
        if self.mood == Mood.SLEEP:
            self.transition_to(Mood.WANDER)

    # ------------------------------------------------------------------
    # Input events
    # ------------------------------------------------------------------
    def on_pointer_down(self, x, y) -> bool:
        """Hit-tests the pet. A hit counts as a click: boost, wake up, +10 frustration."""
        if not self._accepts_triggers() or not _finite(x, y):
            return False
        if not self.bounding_box.contains(x, y):
            return False
        self._record_activity()
        self.press.start(PRESS_BOOST_SECONDS)
        self.speed_multiplier = PRESS_SPEED_MULTIPLIER
        self.meters.add_frustration(FRUSTRATION_PER_CLICK)
        return True

    def notify_activity(self):
        self._record_activity()

    def feed(self, duration: Optional[float] = None) -> bool:
        if not self._accepts_triggers():
            return False
        self._record_activity()
        self.meters.add_happiness(FEED_HAPPINESS_GAIN)
        self._start_happy(duration)
        return True

    def trigger_happy_once(self) -> bool:
        if not self._accepts_triggers():
            return False
        self._start_happy(None)
        return True

    def _start_happy(self, duration):
        if not _finite(duration) or duration <= 0:
            duration = self.frames[Mood.HAPPY].duration
        self._release_press()
        self.transition_to(Mood.HAPPY, duration)

    def celebrate(self, duration=CELEBRATE_DURATION, peak=CELEBRATE_PEAK, rotations=CELEBRATE_ROTATIONS) -> bool:
        """Jump and spin in place, landing exactly where it started."""
        if not self._accepts_triggers():
            return False
        if not _finite(duration, peak, rotations) or duration <= 0:
            return False
        self.idle_time = 0.0
        self._celebrate_start = (self.x, self.y)
        self._celebrate_peak = float(peak)
        self._celebrate_rotations = float(rotations)
        self._release_press()
        self.transition_to(Mood.CELEBRATE, float(duration))
        return True

    def request_follow(self, x, y, tolerance=None, speed=None) -> bool:
        if not _finite(x, y):
            self.follow_target = None
            return False
        if not self._accepts_triggers():
            return False
        if not _finite(tolerance) or tolerance < 0:
            tolerance = FOLLOW_TOLERANCE
        if not _finite(speed) or speed <= 0:
            speed = None
        self._record_activity()
        self.follow_target = FollowTarget(float(x), float(y), float(tolerance), speed)
        return True

    def cancel_follow(self):
        self.follow_target = None

    def is_following(self):
        return self.follow_target is not None and self.follow_target.active

    def set_viewport(self, width, height):
        if _finite(width, height) and width > 0 and height > 0:
            self.viewport_width, self.viewport_height = width, height

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_frustration(self):
        return self.meters.frustration

    def get_happiness(self):
        return self.meters.happiness

    def get_mood(self):
        return self.mood

    def current_pose(self) -> Pose:
        box = self.bounding_box
        return Pose(
            mood=self.mood,
            position=(self.x, self.y),
            rotation=self.rotation,
            frame_index=self.frame_index,
            bounding_box=BoundingBox(box.x, box.y, box.w, box.h),
            facing_left=self.vx < -MOVING_THRESHOLD,
        )

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------
    def tick(self, dt):
        """Advances the simulation by dt seconds. Zero, negative or non-finite dt does nothing."""
        if not _finite(dt) or dt <= 0:
            return

        self.just_arrived = False
        self.idle_time += dt
        if self.press.tick(dt):
            self.speed_multiplier = 1.0

        self.meters.tick(dt, self.press.active)

        if self.mood == Mood.CELEBRATE:
            self._update_celebrate(dt)
        elif self.mood == Mood.HAPPY:
            self._update_happy(dt)
        elif self.mood == Mood.ANGRY:
            self._update_angry(dt)
        else:
            if self.meters.frustration >= METER_MAX and MOOD_PRIORITY[self.mood] < MOOD_PRIORITY[Mood.ANGRY]:
                self.meters.set_frustration(0.0)
                self.meters.frustration_timer = 0.0
                self._release_press()
                self.transition_to(Mood.ANGRY, self.angry_duration)
                self._advance_mood_animation(0.0)
            elif self.idle_time >= self.sleep_after:
                if self.mood != Mood.SLEEP:
                    self.transition_to(Mood.SLEEP)
                self._update_sleep(dt)
            else:
                if self.mood == Mood.SLEEP:
                    self.transition_to(Mood.WANDER)
                self._update_wander(dt)

        self._update_bounding_box()

    def _advance_mood_animation(self, dt):
        self.anim_clock += dt
        self.frame_index = self.frames[self.mood].frame_at(self.anim_clock)

    def _update_celebrate(self, dt):
        self.mood_timer += dt
        self._advance_mood_animation(dt)
        start_x, start_y = self._celebrate_start
        t = min(1.0, self.mood_timer / self.mood_duration)
        self.x = start_x
        self.y = start_y - self._celebrate_peak * math.sin(math.pi * t)
        self.rotation = math.tau * self._celebrate_rotations * t

        if self.mood_timer >= self.mood_duration:
            # Land on the stored coordinates, not on whatever sin(pi) rounded to.
            self.x, self.y = start_x, start_y
            self.rotation = 0.0
            self.transition_to(Mood.WANDER)

    def _update_happy(self, dt):
        self.vx, self.vy = 0.0, 0.0
        self.mood_timer += dt
        self._advance_mood_animation(dt)
        if self.mood_timer >= self.mood_duration:
            self.transition_to(Mood.WANDER)

    def _update_angry(self, dt):
        self.vx, self.vy = 0.0, 0.0
        self.mood_timer += dt
        self._advance_mood_animation(dt)
        if self.mood_timer >= self.mood_duration:
            self.transition_to(Mood.WANDER)
            self.meters.set_frustration(ANGRY_RESIDUAL_FRUSTRATION)

    def _update_sleep(self, dt):
        self.vx, self.vy = 0.0, 0.0
        self.anim_clock += dt
        self.frame_index = self.frames[Mood.SLEEP].frame_at(self.anim_clock, SLEEP_FPS)

    def _update_wander(self, dt):
        if self.follow_target is not None and self.follow_target.active:
            self._update_follow(dt)
        else:
            self._update_free_wander(dt)
        self._advance_walk_animation(dt)

    def _steer(self, target_vx, target_vy, dt):
        t = 1 - math.exp(-self.smoothness * dt)
        self.vx += (target_vx - self.vx) * t
        self.vy += (target_vy - self.vy) * t

    def _arrive(self):
        self.follow_target = None
        self.vx, self.vy = 0.0, 0.0
        self.just_arrived = True

    def _update_follow(self, dt):
        target = self.follow_target
        if not target.is_valid():
            self.follow_target = None
            self.vx, self.vy = 0.0, 0.0
            return

        dx, dy = target.x - self.x, target.y - self.y
        if math.hypot(dx, dy) <= target.tolerance:
            self._arrive()
            return

        # No wall bounce while chasing; the thing being chased is kept on screen by its owner.
        angle = math.atan2(dy, dx)
        self.facing_direction = angle
        speed = (target.speed or self.base_speed) * self.speed_multiplier
        self._steer(math.cos(angle) * speed, math.sin(angle) * speed, dt)
        self.x += self.vx * dt
        self.y += self.vy * dt

        if math.hypot(target.x - self.x, target.y - self.y) <= target.tolerance:
            self._arrive()

    def _update_free_wander(self, dt):
        self.turn_timer += dt
        if self.turn_timer >= self.change_interval:
            self.turn_timer = 0.0
            self.change_interval = self.rng.uniform(*WANDER_CHANGE_RANGE)
            if self.rng.random() < WANDER_BIG_TURN_CHANCE:
                self.facing_direction = self.rng.uniform(0, math.tau)
            else:
                self.facing_direction += self.rng.uniform(-math.pi / 3, math.pi / 3)

        target_speed = self.base_speed * self.speed_multiplier
        self._steer(math.cos(self.facing_direction) * target_speed,
                    math.sin(self.facing_direction) * target_speed, dt)

        speed = math.hypot(self.vx, self.vy)
        if speed > self.max_speed:
            s = self.max_speed / speed
            self.vx *= s
            self.vy *= s

        self.x += self.vx * dt
        self.y += self.vy * dt
        self._collide_with_edges()

    def _collide_with_edges(self):
        half_w, half_h = self._half_extent()
        left, right = half_w, max(half_w, self.viewport_width - half_w)
        top, bottom = half_h, max(half_h, self.viewport_height - half_h)
        bounced = False

        if self.x < left:
            self.x = left
            self.vx = abs(self.vx) * BOUNCE_DAMPING
            self.vy *= BOUNCE_SIDE_DAMPING
            self.facing_direction = math.pi - self.facing_direction
            bounced = True
        elif self.x > right:
            self.x = right
            self.vx = -abs(self.vx) * BOUNCE_DAMPING
            self.vy *= BOUNCE_SIDE_DAMPING
            self.facing_direction = math.pi - self.facing_direction
            bounced = True

        if self.y < top:
            self.y = top
            self.vy = abs(self.vy) * BOUNCE_DAMPING
            self.vx *= BOUNCE_SIDE_DAMPING
            self.facing_direction = -self.facing_direction
            bounced = True
        elif self.y > bottom:
            self.y = bottom
            self.vy = -abs(self.vy) * BOUNCE_DAMPING
            self.vx *= BOUNCE_SIDE_DAMPING
            self.facing_direction = -self.facing_direction
            bounced = True

        if bounced:
            self.facing_direction += self.rng.uniform(-BOUNCE_JITTER, BOUNCE_JITTER)
            self.turn_timer = 0.0
            self.change_interval = self.rng.uniform(*WANDER_BOUNCE_RANGE)

    def _advance_walk_animation(self, dt):
        walk = self.frames[Mood.WANDER]
        moving = math.hypot(self.vx, self.vy) > MOVING_THRESHOLD
        fps = self.pressed_fps if self.press.active else walk.fps
        self.anim_clock += dt * (1.0 if moving else IDLE_ANIM_RATE)
        self.frame_index = walk.frame_at(self.anim_clock, fps)

    # ------------------------------------------------------------------
    # Sizing
    # ------------------------------------------------------------------
    def _half_extent(self):
        frame_w, frame_h = self.frames[self.mood].size_of(self.frame_index)
        scale = fit_scale(frame_w, frame_h, self.viewport_width, self.viewport_height, MAX_UPSCALE) * DISPLAY_SCALE
        return frame_w * scale * 0.5, frame_h * scale * 0.5

    def _update_bounding_box(self):
        half_w, half_h = self._half_extent()
        self.bounding_box = BoundingBox.from_center(self.x, self.y, half_w * 2, half_h * 2)
