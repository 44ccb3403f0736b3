import pygame
from constants import (
    BALL_FOLLOW_TOLERANCE, FEED_HAPPY_SECONDS,
    COLOR_BALL, COLOR_BALL_ARMED, COLOR_PLATE, COLOR_TEXT,
)
from models import BoundingBox


def _touches_pet(rect, pet):
    return BoundingBox(rect.x, rect.y, rect.width, rect.height).overlaps(pet.bounding_box)


class ElectricBall:
    """
    Click the ball to arm it, then click anywhere to send the pet there.
    """
    def __init__(self, pet, image=None):
        self.pet = pet
        self.image = image
        self.rect = pygame.Rect(0, 0, 84, 84)
        self.armed = False
        self.visible = True

    def layout(self, screen_width, screen_height):
        self.rect.center = (round(screen_width * 0.1), round(screen_height - self.rect.height / 2 - 26))
        self.armed = False
        self.visible = True

    def handle_click(self, pos):
        """Returns True if the click was used by the ball."""
        if self.armed:
            self.armed = False
            self.pet.request_follow(pos[0], pos[1], tolerance=BALL_FOLLOW_TOLERANCE)
            return True
        if self.visible and self.rect.collidepoint(pos):
            self.armed = True
            self.pet.notify_activity()
            return True
        return False

    def draw(self, surface, font):
        if not self.visible:
            return
        if self.image:
            surface.blit(pygame.transform.scale(self.image, self.rect.size), self.rect)
        else:
            pygame.draw.ellipse(surface, COLOR_BALL, self.rect)
            label = font.render("Ball", True, (0, 0, 0))
            surface.blit(label, label.get_rect(center=self.rect.center))
        if self.armed:
            pygame.draw.ellipse(surface, COLOR_BALL_ARMED, self.rect.inflate(12, 12), 2)


class ElectricPlate:
    """
    Drag the plate onto the pet to feed it. The plate snaps back to its rest spot after feeding.
    """
    def __init__(self, pet, image=None):
        self.pet = pet
        self.image = image
        self.rect = pygame.Rect(0, 0, 96, 48)
        self.rest_pos = (0, 0)
        self.held = False
        self.offset = (0, 0)
        self.just_fed = False
        self.screen_rect = pygame.Rect(0, 0, 0, 0)

    def layout(self, screen_width, screen_height, ref_size=(96, 48)):
        margin, lift = 32, 12
        self.rect.size = (max(48, round(ref_size[0] * 0.65)), max(36, round(ref_size[1] * 0.65)))
        self.rest_pos = (round(screen_width - margin - self.rect.width / 2),
                         round(screen_height - margin - self.rect.height / 2 - lift))
        self.rect.center = self.rest_pos
        self.screen_rect = pygame.Rect(0, 0, screen_width, screen_height)
        self.held = False

    def handle_press(self, pos):
        if not self.rect.collidepoint(pos):
            return False
        self.held = True
        self.offset = (pos[0] - self.rect.centerx, pos[1] - self.rect.centery)
        self.just_fed = False
        self.pet.notify_activity()
        return True

    def handle_drag(self, pos):
        if not self.held:
            return False
        self.rect.center = (pos[0] - self.offset[0], pos[1] - self.offset[1])
        if self.screen_rect.width and self.screen_rect.height:
            self.rect.clamp_ip(self.screen_rect)
        if not self.just_fed and _touches_pet(self.rect, self.pet):
            self._feed()
        return True

    def handle_release(self):
        if not self.held:
            return False
        if _touches_pet(self.rect, self.pet):
            self._feed()
        self.held = False
        return True

    def _feed(self):
        # A pet that refuses food (angry, mid-jump) still gets the plate back on the shelf.
        self.pet.feed(FEED_HAPPY_SECONDS)
        self.rect.center = self.rest_pos
        self.held = False
        self.just_fed = True

    def draw(self, surface, font):
        if self.image:
            surface.blit(pygame.transform.scale(self.image, self.rect.size), self.rect)
        else:
            pygame.draw.rect(surface, COLOR_PLATE, self.rect, border_radius=8)
            label = font.render("Plate", True, COLOR_TEXT)
            surface.blit(label, label.get_rect(center=self.rect.center))
