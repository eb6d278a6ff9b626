"""Sprites that show game objects, one drawable per object on screen."""

import abc
import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

import pygame

from . import logs
from .base import Vector2
from .enums import ObjectType
from .paths import absolute_path

# A texture rectangle: (left, top, width, height).
TextureRect = Tuple[int, int, int, int]

_EMPTY_RECT: TextureRect = (0, 0, 0, 0)


@dataclass
class Sprite:
    """A part of a texture placed at a position; ``rect`` None means the whole texture."""

    texture: object
    rect: Optional[TextureRect] = None
    position: Vector2 = field(default_factory=Vector2)


class TextureCache:
    """Loads images from ``<resources>/graphics`` once and hands out the same surface."""

    def __init__(self, resources_dir=None):
        self._dir = resources_dir if resources_dir is not None else absolute_path("resources")
        self._textures: dict = {}

    def load(self, name: str):
        """Return the texture called ``name``; raises RuntimeError when it cannot be read."""
        cached = self._textures.get(name)
        if cached is not None:
            return cached
        path = os.path.join(self._dir, "graphics", name)
        try:
            texture = pygame.image.load(path)
        except (pygame.error, OSError) as exc:
            raise RuntimeError(f'Cannot load "resources/graphics/{name}" texture') from exc
        self._textures[name] = texture
        return texture


class Drawable(abc.ABC):
    """Sprites of one object, drawn in ascending ``layer`` order."""

    TEXTURE = ""
    LAYER = 0
    NAME = ""

    def __init__(self, textures: TextureCache):
        self.layer = self.LAYER
        self.texture = textures.load(self.TEXTURE)
        self.sprites = self._initial_sprites()
        logs.debug(f'Drawable "{self.NAME}" created')

    def _initial_sprites(self) -> list:
        return [Sprite(self.texture)]

    @abc.abstractmethod
    def update(self, obj) -> None:
        """Bring the sprites in line with the object's position and state."""


class GameOverDrawable(Drawable):
    """The "game over" label."""

    TEXTURE = "GameOver.png"
    LAYER = 201
    NAME = "GameOver"

    def update(self, obj) -> None:
        self.sprites[0].position = obj.position


class LeftTanksDrawable(Drawable):
    """A two-column stack of small tank icons, one per enemy left."""

    TEXTURE = "TankSmall.png"
    LAYER = 210
    NAME = "LeftTanks"

    def _initial_sprites(self) -> list:
        return []

    def update(self, obj) -> None:
        count = obj.state
        del self.sprites[count:]
        self.sprites.extend(Sprite(self.texture) for _ in range(count - len(self.sprites)))
        for index, sprite in enumerate(self.sprites):
            sprite.position = obj.position + Vector2((index % 2) * 8, (index // 2) * 8)


class PlayerLivesDrawable(Drawable):
    """A single digit with the lives left."""

    TEXTURE = "Numbers.png"
    LAYER = 210
    NAME = "PlayerLives"

    def update(self, obj) -> None:
        sprite = self.sprites[0]
        sprite.rect = (obj.state * 8, 0, 8, 8)
        sprite.position = obj.position


class StageNumberDrawable(Drawable):
    """Two digits of the stage number, counted from one; a leading zero is hidden."""

    TEXTURE = "Numbers.png"
    LAYER = 210
    NAME = "StageNumber"

    def _initial_sprites(self) -> list:
        return [Sprite(self.texture), Sprite(self.texture)]

    def update(self, obj) -> None:
        shown = obj.state + 1
        upper, lower = divmod(shown, 10)
        tens, ones = self.sprites
        tens.rect = (upper * 8, 0, 8, 8) if upper else _EMPTY_RECT
        ones.rect = (lower * 8, 0, 8, 8)
        tens.position = obj.position
        ones.position = obj.position + Vector2(8, 0)


class BorderDrawable(Drawable):
    """The statistics background; only the right-hand border places it."""

    TEXTURE = "StatsBackground.png"
    LAYER = 200
    NAME = "Border"

    def _initial_sprites(self) -> list:
        return [Sprite(self.texture, position=Vector2(-208, -208))]

    def update(self, obj) -> None:
        if obj.state != 1:
            return
        self.sprites[0].position = obj.position


class BrickDrawable(Drawable):
    """Four brick quarters; knocked-out quarters turn blank."""

    TEXTURE = "Blocks.png"
    NAME = "Brick"

    def _initial_sprites(self) -> list:
        return [Sprite(self.texture, (index * 4, 0, 4, 4)) for index in range(4)]

    def update(self, obj) -> None:
        state = obj.state
        for index, sprite in enumerate(self.sprites):
            if not (state >> index) & 1:
                sprite.rect = (20, 0, 4, 4)
            sprite.position = obj.position + Vector2((index % 2) * 4, (index // 2) * 4)


class BushDrawable(Drawable):
    """Foliage drawn above tanks."""

    TEXTURE = "Blocks.png"
    LAYER = 20
    NAME = "Bush"

    def update(self, obj) -> None:
        sprite = self.sprites[0]
        sprite.rect = (8, 4, 8, 8)
        sprite.position = obj.position


class EagleDrawable(Drawable):
    """The eagle, whole or fallen."""

    TEXTURE = "Eagle.png"
    NAME = "Eagle"

    def update(self, obj) -> None:
        sprite = self.sprites[0]
        sprite.rect = (obj.state * 16, 0, 16, 16)
        sprite.position = obj.position


class TankSpawnerDrawable(Drawable):
    """The spawn star; six animation frames play back as 0 1 2 3 2 1."""

    TEXTURE = "Spawn.png"
    LAYER = 1
    NAME = "TankSpawner"

    _FRAME_IMAGES = {4: 2, 5: 1}

    def update(self, obj) -> None:
        frame = self._FRAME_IMAGES.get(obj.state, obj.state)
        sprite = self.sprites[0]
        sprite.rect = (frame * 16, 0, 16, 16)
        sprite.position = obj.position


class WallDrawable(Drawable):
    """A steel tile."""

    TEXTURE = "Blocks.png"
    NAME = "Wall"

    def update(self, obj) -> None:
        sprite = self.sprites[0]
        sprite.rect = (0, 4, 8, 8)
        sprite.position = obj.position


class WaterDrawable(Drawable):
    """An animated water tile."""

    TEXTURE = "Blocks.png"
    NAME = "Water"

    def update(self, obj) -> None:
        sprite = self.sprites[0]
        sprite.rect = (obj.state * 8, 12, 8, 8)
        sprite.position = obj.position


class BulletDrawable(Drawable):
    """A bullet facing its direction of flight."""

    TEXTURE = "Bullets.png"
    LAYER = 10
    NAME = "Bullet"

    def update(self, obj) -> None:
        sprite = self.sprites[0]
        sprite.rect = (obj.state * 4, 0, 4, 4)
        sprite.position = obj.position


class ExplosionDrawable(Drawable):
    """An explosion frame centred on the object's position."""

    TEXTURE = "Explosion.png"
    LAYER = 30
    NAME = "Explosion"

    def update(self, obj) -> None:
        sprite = self.sprites[0]
        sprite.rect = (obj.state * 32, 0, 32, 32)
        sprite.position = obj.position - Vector2(16, 16)


class TankDrawable(Drawable):
    """A player or enemy tank, picked by type, colour, wheel phase and rotation."""

    TEXTURE = "Tanks.png"
    NAME = "PlayerTank"

    def update(self, obj) -> None:
        state = obj.state
        # [type][type][][color][color][wheelState][rotation][rotation]
        tank_type = state >> 6
        color = (state >> 3) & 3
        wheel = (state >> 2) & 1
        rotation = state & 3

        top = tank_type * 16
        if obj.type != ObjectType.PLAYER_TANK:
            top += 64
        sprite = self.sprites[0]
        sprite.rect = (color * 128 + rotation * 32 + wheel * 16, top, 16, 16)
        sprite.position = obj.position


_DRAWABLES = {
    ObjectType.PLAYER_TANK: TankDrawable,
    ObjectType.ENEMY_TANK: TankDrawable,
    ObjectType.BRICK: BrickDrawable,
    ObjectType.WALL: WallDrawable,
    ObjectType.BORDER: BorderDrawable,
    ObjectType.BULLET: BulletDrawable,
    ObjectType.BUSH: BushDrawable,
    ObjectType.EAGLE: EagleDrawable,
    ObjectType.EXPLOSION: ExplosionDrawable,
    ObjectType.SPAWNER: TankSpawnerDrawable,
    ObjectType.WATER: WaterDrawable,
    ObjectType.GAME_OVER: GameOverDrawable,
    ObjectType.STAGE_NUMBER: StageNumberDrawable,
    ObjectType.PLAYER_LIVES: PlayerLivesDrawable,
    ObjectType.LEFT_TANKS: LeftTanksDrawable,
}


def drawable_for(object_type: ObjectType, textures: TextureCache) -> Optional[Drawable]:
    """Create the drawable for an object type, or None when the type is not drawn."""
    cls = _DRAWABLES.get(object_type)
    return None if cls is None else cls(textures)