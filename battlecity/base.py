"""Base game objects: geometry, collisions and movement."""

import itertools
from dataclasses import dataclass

from .enums import ObjectRotation, ObjectType

_ID_LIMIT = 1 << 16
_id_counter = itertools.count()


def _next_id() -> int:
    return next(_id_counter) % _ID_LIMIT


@dataclass(frozen=True)
class Vector2:
    """A 2D point or size."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vector2") -> "Vector2":
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x - other.x, self.y - other.y)


class GameObject:
    """An object on the playfield with an axis-aligned bounding box."""

    def __init__(self, type: ObjectType, position: Vector2, size: Vector2):
        self.id = _next_id()
        self.type = type
        self.position = position
        self.size = size
        self.collision = True
        self.collision_layer = 0
        self.destroyed = False

    @property
    def state(self) -> int:
        """Object-specific state byte sent to clients."""
        return 0

    def soft_collides(self, other: "GameObject") -> bool:
        """Whether the two boxes overlap, both alive and collidable."""
        if self.destroyed or other.destroyed:
            return False
        if not self.collision or not other.collision:
            return False
        a, b = self, other
        return not (
            a.position.x + a.size.x <= b.position.x
            or a.position.x >= b.position.x + b.size.x
            or a.position.y + a.size.y <= b.position.y
            or a.position.y >= b.position.y + b.size.y
        )

    def hard_collides(self, other: "GameObject") -> bool:
        """Overlap that counts only against objects on the same or a lower layer."""
        if self.collision_layer < other.collision_layer:
            return False
        return self.soft_collides(other)

    def soft_collisions(self, objects) -> list:
        """Objects other than this one that overlap it."""
        return [obj for obj in objects if obj.id != self.id and self.soft_collides(obj)]

    def hard_collisions(self, objects) -> list:
        """Objects other than this one that block it."""
        return [obj for obj in objects if obj.id != self.id and self.hard_collides(obj)]

    def think(self, game, event) -> None:
        """Advance this object by one simulation step."""

    def destroy(self, game, bullet_rotation: ObjectRotation) -> None:
        """React to being hit by a bullet travelling in ``bullet_rotation``."""


class MovableObject(GameObject):
    """An object that moves one pixel at a time at ``speed`` pixels per second."""

    def __init__(
        self,
        type: ObjectType,
        position: Vector2,
        size: Vector2,
        speed: float,
        rotation: ObjectRotation = ObjectRotation.UP,
    ):
        super().__init__(type, position, size)
        self.rotation = rotation
        self.speed = speed
        self._last_move_time = -1.0

    _STEPS = {
        ObjectRotation.UP: Vector2(0, -1),
        ObjectRotation.LEFT: Vector2(-1, 0),
        ObjectRotation.DOWN: Vector2(0, 1),
        ObjectRotation.RIGHT: Vector2(1, 0),
    }

    def move(self, game, do_move: bool = True) -> int:
        """Move for the time elapsed since the last move; return pixels moved."""
        if not do_move or self._last_move_time == -1 or self.speed == 0:
            self._last_move_time = game.time
            return 0

        step = self._STEPS[self.rotation]
        interval = 1 / self.speed
        moved = 0
        while game.time >= self._last_move_time + interval:
            self.position = self.position + step
            self._last_move_time += interval
            moved += 1
        return moved


class NetworkObject(GameObject):
    """An object rebuilt on the client from its wire representation."""

    def __init__(
        self,
        id: int,
        type: ObjectType,
        destroyed: bool,
        x: int,
        y: int,
        state: int,
    ):
        super().__init__(type, Vector2(float(x), float(y)), Vector2(0, 0))
        self.id = id
        self.destroyed = destroyed
        self._state = state

    @property
    def state(self) -> int:
        return self._state