"""The game window: pixel-perfect scaling, drawing and keyboard input."""

import math

import pygame

from . import logs
from .events import Event

WIDTH = 240
HEIGHT = 208
FRAME_RATE = 60


def initial_scale(screen_width: int, screen_height: int) -> int:
    """Largest whole scale that fits the screen, one step smaller, at least 1."""
    return max(min(screen_width // WIDTH, screen_height // HEIGHT) - 1, 1)


def fitted_scale(width: int, height: int) -> int:
    """Whole scale closest to a window size chosen by the user, at least 1."""
    average = (width / WIDTH + height / HEIGHT) / 2
    return max(math.floor(average + 0.5), 1)


class Window:
    """A resizable window showing a 240x208 scene at a whole-number scale."""

    def __init__(self, title: str = "BattleCity client"):
        pygame.display.init()
        sizes = pygame.display.get_desktop_sizes()
        self.scale = initial_scale(*sizes[0]) if sizes else 1
        pygame.display.set_mode((WIDTH * self.scale, HEIGHT * self.scale), pygame.RESIZABLE)
        pygame.display.set_caption(title)
        self.canvas = pygame.Surface((WIDTH, HEIGHT))
        self._clock = pygame.time.Clock()
        self._open = True
        logs.debug(
            f"Window created ({WIDTH * self.scale}x{HEIGHT * self.scale} scale={self.scale})"
        )

    def is_open(self) -> bool:
        """Whether the window is still shown."""
        return self._open

    def close(self) -> None:
        """Close the window; further drawing does nothing."""
        if self._open:
            pygame.display.quit()
            self._open = False

    def _resize(self, width: int, height: int) -> None:
        self.scale = fitted_scale(width, height)
        new_size = (WIDTH * self.scale, HEIGHT * self.scale)
        if new_size != (width, height):
            pygame.display.set_mode(new_size, pygame.RESIZABLE)
        logs.debug(f"Window resized to {new_size[0]}x{new_size[1]} (scale={self.scale})")

    def poll_event(self) -> Event:
        """Handle pending window events and return the buttons held down."""
        event = Event()
        if not self._open:
            return event

        for raw in pygame.event.get():
            if raw.type == pygame.QUIT:
                self.close()
                logs.info("Window closed")
                return event
            if raw.type == pygame.VIDEORESIZE:
                self._resize(raw.w, raw.h)

        if not pygame.key.get_focused():
            return event

        keys = pygame.key.get_pressed()
        first, second = event.player1, event.player2
        first.up = bool(keys[pygame.K_w])
        first.left = bool(keys[pygame.K_a])
        first.down = bool(keys[pygame.K_s])
        first.right = bool(keys[pygame.K_d])
        first.shoot = bool(keys[pygame.K_LSHIFT] or keys[pygame.K_SPACE])

        second.up = bool(keys[pygame.K_UP])
        second.left = bool(keys[pygame.K_LEFT])
        second.down = bool(keys[pygame.K_DOWN])
        second.right = bool(keys[pygame.K_RIGHT])
        second.shoot = bool(keys[pygame.K_RSHIFT])

        if keys[pygame.K_r]:
            first.reset = second.reset = True
        if keys[pygame.K_ESCAPE]:
            first.esc = second.esc = True
        return event

    def clear(self) -> None:
        """Fill the scene with black."""
        self.canvas.fill((0, 0, 0))

    def draw(self, drawable) -> None:
        """Draw the sprites of a drawable onto the scene."""
        for sprite in drawable.sprites:
            area = pygame.Rect(sprite.rect) if sprite.rect is not None else None
            position = (int(sprite.position.x), int(sprite.position.y))
            self.canvas.blit(sprite.texture, position, area)

    def display(self) -> None:
        """Show the scene scaled to the window, at most 60 times a second."""
        if not self._open:
            return
        surface = pygame.display.get_surface()
        scaled = pygame.transform.scale(self.canvas, (WIDTH * self.scale, HEIGHT * self.scale))
        surface.blit(scaled, (0, 0))
        pygame.display.flip()
        self._clock.tick(FRAME_RATE)