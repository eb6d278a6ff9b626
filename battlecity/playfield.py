"""Playfield objects: blocks, borders, the eagle and tank spawners."""

from .base import GameObject, Vector2
from .enums import ObjectRotation, ObjectType
from .interface import PlayerLives
from .tanks import EnemyTank, PlayerTank

_NO_FRAME = 0xFF
_BORDER_POSITIONS = (
    Vector2(0, -208),
    Vector2(208, 0),
    Vector2(0, 208),
    Vector2(-208, 0),
)
# Quarters of a brick hit first by a bullet travelling in each direction.
_BRICK_FRONT = {
    ObjectRotation.UP: 0b1100,
    ObjectRotation.LEFT: 0b1010,
    ObjectRotation.DOWN: 0b0011,
    ObjectRotation.RIGHT: 0b0101,
}
_BONUS_TANKS = (3, 10, 17)


class Block(GameObject):
    """An 8x8 tile of the playfield."""

    def __init__(self, type: ObjectType, position: Vector2):
        super().__init__(type, position, Vector2(8, 8))


class Border(GameObject):
    """One of the four solid areas surrounding the playfield."""

    def __init__(self, border_num: int):
        if not 0 <= border_num < len(_BORDER_POSITIONS):
            raise ValueError(f"border number must be 0..3, got {border_num}")
        super().__init__(
            ObjectType.BORDER, _BORDER_POSITIONS[border_num], Vector2(208, 208)
        )
        self.border_num = border_num

    @property
    def state(self) -> int:
        return self.border_num


class Brick(Block):
    """A brick tile made of four quarters that bullets knock out."""

    def __init__(self, position: Vector2):
        super().__init__(ObjectType.BRICK, position)
        self._state = 0b1111

    @property
    def state(self) -> int:
        return self._state

    def destroy(self, game, bullet_rotation: ObjectRotation) -> None:
        front = _BRICK_FRONT[ObjectRotation(bullet_rotation)]
        if self._state & front:
            self._state &= 0b1111 ^ front
        else:
            self._state &= front
        if self._state == 0:
            self.destroyed = True


class Bush(Block):
    """Foliage that hides tanks but does not block them."""

    def __init__(self, position: Vector2):
        super().__init__(ObjectType.BUSH, position)
        self.collision = False


class Wall(Block):
    """An indestructible steel tile."""

    def __init__(self, position: Vector2):
        super().__init__(ObjectType.WALL, position)


class Water(Block):
    """Animated water that blocks tanks but not bullets."""

    def __init__(self, position: Vector2):
        super().__init__(ObjectType.WATER, position)
        self._current_frame = 0

    @property
    def state(self) -> int:
        return self._current_frame

    def think(self, game, event) -> None:
        self._current_frame = int(game.time * 2) % 2 + 1


class Eagle(GameObject):
    """The base players defend; state 1 once it has been hit."""

    def __init__(self, position: Vector2):
        super().__init__(ObjectType.EAGLE, position, Vector2(16, 16))
        self._hit = False

    @property
    def state(self) -> int:
        return int(self._hit)

    def destroy(self, game, bullet_rotation: ObjectRotation) -> None:
        self._hit = True


class TankSpawner(GameObject):
    """Plays the spawn animation and then places a player or enemy tank."""

    ANIMATION_TIME = 64.0 / 60
    FRAME_TIME = 1.0 / 12
    FRAMES = 6
    MAX_LIVES = 99

    def __init__(self, position: Vector2, spawn_object: ObjectType, spawner_num: int):
        if spawn_object not in (ObjectType.PLAYER_TANK, ObjectType.ENEMY_TANK):
            raise ValueError("spawn_object expected to be PLAYER_TANK or ENEMY_TANK")
        super().__init__(ObjectType.SPAWNER, position, Vector2(16, 16))
        self.spawn_object = spawn_object
        self.spawner_num = spawner_num
        self.collision = False
        self._animation_start = -1.0
        self._frame_change = -1.0
        self._current_frame = _NO_FRAME
        # Players only
        self.spawns_left = 3
        self.spawned_tank = None
        self.lives_indicator = None
        # Enemies only
        self._next_tank_num = spawner_num

    @property
    def _for_player(self) -> bool:
        return self.spawn_object == ObjectType.PLAYER_TANK

    @property
    def state(self) -> int:
        return self._current_frame

    def add_life(self) -> None:
        """Give the player one more spawn, up to the limit."""
        self.spawns_left = min(self.spawns_left + 1, self.MAX_LIVES)
        if self.lives_indicator is not None:
            self.lives_indicator.set_state(self.spawns_left)

    def think(self, game, event) -> None:
        now = game.time
        if self._animation_start == -1:
            if self._for_player:
                self._animation_start = now
            else:
                self._animation_start = now + game.period * self.spawner_num

        if self._for_player and self.lives_indicator is None:
            self.lives_indicator = PlayerLives(self.spawner_num)
            self.lives_indicator.set_state(self.spawns_left)
            game.add_object(self.lives_indicator)

        if self._animation_start > now:
            return
        if self._animation_start + self.ANIMATION_TIME > now:
            self._animate(now)
            return

        self._frame_change = -1.0
        self._current_frame = _NO_FRAME

        if self._for_player:
            if self.spawned_tank is None:
                self.spawned_tank = PlayerTank(self.position, self.spawner_num)
                game.add_object(self.spawned_tank)
                self.spawns_left -= 1
                self.lives_indicator.set_state(self.spawns_left)
        else:
            self._spawn_enemy(game)

        if self.spawned_tank is not None and self.spawned_tank.destroyed:
            self.spawned_tank = None
            self._animation_start = now + self.ANIMATION_TIME
            if self.spawns_left == 0:
                self.destroyed = True

    def _animate(self, now: float) -> None:
        if self._frame_change == -1:
            self._frame_change = now
            self._current_frame = 0
        while self._frame_change + self.FRAME_TIME < now:
            self._current_frame = (self._current_frame + 1) % self.FRAMES
            self._frame_change += self.FRAME_TIME

    def _spawn_enemy(self, game) -> None:
        tanks = game.tanks
        if self._next_tank_num < len(tanks):
            has_bonus = self._next_tank_num in _BONUS_TANKS
            game.add_object(
                EnemyTank(
                    self.position, tanks[self._next_tank_num], has_bonus, game.rng
                )
            )
        self._animation_start += game.period * 3
        self._next_tank_num += 3
        if self._next_tank_num >= len(tanks):
            self.destroyed = True