import os
import sys
import math
import pygame
from constants import *
from models import Mood, FrameSet
from pet_entity import CreatureController
from toys import ElectricBall, ElectricPlate

# Per-mood frame folders under ASSET_DIR: (folder, file prefix, fixed count or None to scan)
FRAME_SOURCES = {
    Mood.WANDER: ("walk", WALK_PREFIX, WALK_FRAME_COUNT),
    Mood.SLEEP: ("sleep", "SparkSleep", None),
    Mood.HAPPY: ("happy", "SparkHappy", None),
    Mood.ANGRY: ("angry", "SparkAngry", None),
}
FRAME_FPS = {Mood.WANDER: WALK_FPS, Mood.SLEEP: SLEEP_FPS, Mood.HAPPY: HAPPY_FPS, Mood.ANGRY: ANGRY_FPS}
MAX_SCAN_FRAMES = 400


def _placeholder(size, color, text, font):
    surf = pygame.Surface(size, pygame.SRCALPHA)
    surf.fill(color)
    label = font.render(text, True, COLOR_TEXT)
    surf.blit(label, label.get_rect(center=(size[0] // 2, size[1] // 2)))
    return surf


def load_frames(asset_dir, folder, prefix, count, font, max_size):
    """
    Loads prefix0001.png, prefix0002.png, ... from asset_dir/folder.
    With a fixed count, missing files become grey placeholders so indexing stays stable;
    without one, loading stops at the first missing file.
    """
    frames = []
    limit = count if count is not None else MAX_SCAN_FRAMES
    for i in range(1, limit + 1):
        path = os.path.join(asset_dir, folder, f"{prefix}{i:0{FRAME_PAD}d}.png")
        try:
            img = pygame.image.load(path)
        except (pygame.error, OSError):
            if count is None:
                break
            img = _placeholder((64, 64), COLOR_PLACEHOLDER, f"missing {i}", font)
        frames.append(img)

    if not frames:
        print(f"Warning: no frames found in {os.path.join(asset_dir, folder)}")
        frames = [_placeholder((160, 160), COLOR_MISSING, "NO FRAMES", font)]

    # Downscale large frames for performance
    for i, img in enumerate(frames):
        w, h = img.get_size()
        if w > max_size or h > max_size:
            ratio = max_size / max(w, h)
            frames[i] = pygame.transform.scale(img, (max(1, round(w * ratio)), max(1, round(h * ratio))))
    return frames


def load_first_image(asset_dir, candidates):
    """Tries each candidate path in turn; returns None if none of them load."""
    for rel in candidates:
        path = os.path.join(asset_dir, rel)
        try:
            img = pygame.image.load(path)
            print(f"Loaded {path}")
            return img
        except (pygame.error, OSError):
            continue
    print(f"Warning: none of {candidates} found in {asset_dir}")
    return None


class GameEngine:
    """Window, input and drawing around one CreatureController."""

    def __init__(self, asset_dir=ASSET_DIR):
        pygame.init()
        try:
            self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT), pygame.RESIZABLE)
        except pygame.error:
            # Some headless drivers do not support resizable windows; fall back
            self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("SparkPet")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 20)
        self.messages = []

        width, height = self.screen.get_size()
        max_frame = int(min(width, height) * FRAME_MAX_FRACTION)
        self.frames = {}
        frame_sets = {}
        for mood, (folder, prefix, count) in FRAME_SOURCES.items():
            images = load_frames(asset_dir, folder, prefix, count, self.font, max_frame)
            self.frames[mood] = images
            frame_sets[mood] = FrameSet(len(images), FRAME_FPS[mood], [img.get_size() for img in images])
        self.frames[Mood.CELEBRATE] = self.frames[Mood.HAPPY]

        self.pet = CreatureController(width / 2, height / 2, frames=frame_sets, viewport=(width, height),
                                      name=PET_NAME, message_callback=self.add_game_message)

        self.ball = ElectricBall(self.pet, load_first_image(asset_dir, BALL_CANDIDATES))
        self.plate = ElectricPlate(self.pet, load_first_image(asset_dir, PLATE_CANDIDATES))
        self.ball.layout(width, height)
        self.plate.layout(width, height, self.frames[Mood.WANDER][0].get_size())

    def add_game_message(self, message):
        print(message)
        self.messages.append(message)
        self.messages = self.messages[-4:]

    def handle_event(self, event):
        """Returns False when the app should stop."""
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.VIDEORESIZE:
            self.pet.set_viewport(event.w, event.h)
            self.ball.layout(event.w, event.h)
            self.plate.layout(event.w, event.h, self.frames[Mood.WANDER][0].get_size())
        elif event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_ESCAPE, pygame.K_q):
                return False
            if event.key == pygame.K_c:
                self.pet.celebrate()
            elif event.key == pygame.K_f:
                self.pet.feed()
            elif event.key == pygame.K_h:
                self.pet.trigger_happy_once()
            else:
                self.pet.notify_activity()
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if not self.plate.handle_press(event.pos) and not self.ball.handle_click(event.pos):
                self.pet.on_pointer_down(*event.pos)
        elif event.type == pygame.MOUSEMOTION:
            self.plate.handle_drag(event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.plate.handle_release()
        return True

    def step(self):
        """Process a single loop iteration (useful for headless tests). Returns False to stop."""
        for event in pygame.event.get():
            if not self.handle_event(event):
                return False

        dt = min(self.clock.tick(FPS) / 1000.0, 0.1) * TIME_SCALE_FACTOR
        self.pet.tick(dt)
        if self.pet.just_arrived:
            self.pet.trigger_happy_once()

        self.draw()
        pygame.display.flip()
        return True

    def draw_pet(self):
        pose = self.pet.current_pose()
        images = self.frames[pose.mood]
        img = images[pose.frame_index % len(images)]
        box = pose.bounding_box
        img = pygame.transform.scale(img, (max(1, int(box.w)), max(1, int(box.h))))
        if pose.facing_left:
            img = pygame.transform.flip(img, True, False)
        if pose.rotation:
            # pygame rotates counter-clockwise; the pet spins clockwise
            img = pygame.transform.rotate(img, -math.degrees(pose.rotation))
        self.screen.blit(img, img.get_rect(center=(round(pose.position[0]), round(pose.position[1]))))

    def draw_bar(self, x, y, value, color, label):
        pygame.draw.rect(self.screen, COLOR_UI_BAR_BG, (x, y, 120, 10))
        pygame.draw.rect(self.screen, color, (x, y, int(120 * value / METER_MAX), 10))
        text = self.font.render(f"{label}: {int(value)}", True, COLOR_TEXT)
        self.screen.blit(text, (x, y - 16))

    def draw(self):
        self.screen.fill(COLOR_BG)
        self.plate.draw(self.screen, self.font)
        self.ball.draw(self.screen, self.font)
        self.draw_pet()

        self.draw_bar(8, 24, self.pet.get_frustration(), COLOR_FRUSTRATION, "Frustration")
        self.draw_bar(140, 24, self.pet.get_happiness(), COLOR_HAPPY, "Happiness")
        mood = self.font.render(f"mood: {self.pet.get_mood().value}", True, COLOR_TEXT)
        self.screen.blit(mood, (272, 8))
        for i, message in enumerate(self.messages):
            surf = self.font.render(message, True, COLOR_TEXT)
            self.screen.blit(surf, (8, self.screen.get_height() - 20 * (len(self.messages) - i)))

    def run(self):
        running = True
        while running:
            running = self.step()
        pygame.quit()


def main():
    print("Starting SparkPet...")
    engine = GameEngine()
    try:
        engine.run()
    except KeyboardInterrupt:
        pygame.quit()
    print("Exiting SparkPet.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
