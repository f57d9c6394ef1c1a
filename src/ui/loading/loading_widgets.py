"""
loading_widgets.py
------------------
Visual content shown by the loading screen presenter.

- ImageIndicator: full-screen image loaded from the configured asset
- ThrobberWidget: procedural spinner used when the asset is unavailable
"""

import math

import pygame

from src.core.runtime.game_settings import LoadingScreen


class ImageIndicator:
    """Full-screen loading image."""

    def __init__(self, surface, screen_size):
        self.surface = pygame.transform.smoothscale(surface, screen_size)
        self.rect = self.surface.get_rect(topleft=(0, 0))

    @classmethod
    def from_file(cls, path, screen_size):
        """
        Load the indicator from disk.

        Raises:
            FileNotFoundError: asset missing
            pygame.error: asset present but unreadable
        """
        image = pygame.image.load(path)
        if pygame.display.get_surface() is not None:
            image = image.convert_alpha()
        return cls(image, screen_size)

    def update(self, dt: float):
        pass

    def draw(self, draw_manager, layer: int):
        draw_manager.queue_draw(self.surface, self.rect, layer)


class ThrobberWidget:
    """Ring of dots with a rotating bright head."""

    def __init__(self, screen_size, radius=LoadingScreen.THROBBER_RADIUS,
                 dot_count=LoadingScreen.THROBBER_DOTS, speed=LoadingScreen.THROBBER_SPEED):
        self.screen_size = screen_size
        self.radius = radius
        self.dot_count = dot_count
        self.speed = speed
        self.angle = 0.0

        self.background = pygame.Surface(screen_size)
        self.background.fill(LoadingScreen.BACKGROUND_COLOR)
        self.background_rect = self.background.get_rect(topleft=(0, 0))

    def update(self, dt: float):
        self.angle = (self.angle + dt * self.speed * 2 * math.pi) % (2 * math.pi)

    def dot_positions(self):
        """Centers of each dot, starting at the rotating head."""
        cx, cy = self.screen_size[0] // 2, self.screen_size[1] // 2
        step = 2 * math.pi / self.dot_count
        return [
            (int(cx + math.cos(self.angle - i * step) * self.radius),
             int(cy + math.sin(self.angle - i * step) * self.radius))
            for i in range(self.dot_count)
        ]

    def draw(self, draw_manager, layer: int):
        draw_manager.queue_draw(self.background, self.background_rect, layer)

        r, g, b = LoadingScreen.THROBBER_COLOR
        for i, (x, y) in enumerate(self.dot_positions()):
            fade = 1.0 - i / self.dot_count
            size = max(int(6 * fade) + 2, 2)
            color = (int(r * fade), int(g * fade), int(b * fade))
            rect = pygame.Rect(0, 0, size * 2, size * 2)
            rect.center = (x, y)
            draw_manager.queue_shape("circle", rect, color, layer=layer)
