"""Tanks, their bullets and explosions."""

import math
import random

from .base import GameObject, MovableObject, Vector2
from .enums import ObjectRotation, ObjectType
from .events import Event, PressedButtons


def _c_mod(value: float, modulus: int) -> int:
    """Remainder of the truncated value, with the sign of the dividend."""
    return int(math.fmod(int(value), modulus))


def _snap(coordinate: float) -> float:
    """Align a coordinate to the 8-pixel grid, rounding to the nearer line."""
    if _c_mod(coordinate, 8) > 4:
        coordinate += 8
    return coordinate - _c_mod(coordinate, 8)


class Explosion(GameObject):
    """A short explosion animation.

    Small: frames 0, 1, 2 at 0.05 s each. Big: frames 0, 1, 2, 3, 4, 2 at 0.1 s each.
    """

    def __init__(self, position: Vector2, is_big: bool):
        super().__init__(ObjectType.EXPLOSION, position, Vector2(16, 16))
        self.is_big = is_big
        self.collision = False
        self._current_frame = 0
        self._played_frames = 0
        self._last_frame_change = -1.0

    @property
    def state(self) -> int:
        return self._current_frame

    def think(self, game, event) -> None:
        if self._last_frame_change == -1:
            self._last_frame_change = game.time

        frame_time = 0.1 if self.is_big else 0.05
        total_frames = 6 if self.is_big else 3

        while game.time >= self._last_frame_change + frame_time:
            self._last_frame_change += frame_time
            self._played_frames += 1
            self._current_frame += 1
            if self._played_frames >= total_frames:
                self.destroyed = True
                return
            if self._current_frame >= 5:
                self._current_frame = 2


class Bullet(MovableObject):
    """A bullet flying from a tank."""

    _OFFSETS = {
        ObjectRotation.UP: Vector2(6, -4),
        ObjectRotation.LEFT: Vector2(-4, 6),
        ObjectRotation.DOWN: Vector2(6, 16),
        ObjectRotation.RIGHT: Vector2(16, 6),
    }

    def __init__(
        self,
        tank_position: Vector2,
        rotation: ObjectRotation,
        belongs_to_enemy: bool,
        is_fast: bool,
        is_powerful: bool,
    ):
        super().__init__(
            ObjectType.BULLET,
            tank_position + self._OFFSETS[rotation],
            Vector2(4, 4),
            240 if is_fast else 120,
            rotation,
        )
        self.belongs_to_enemy = belongs_to_enemy
        self.is_powerful = is_powerful
        self.collision_layer = 2

    @property
    def state(self) -> int:
        return int(self.rotation)

    def _ignores(self, obj: GameObject) -> bool:
        if obj.type == ObjectType.ENEMY_TANK:
            return self.belongs_to_enemy
        if obj.type == ObjectType.PLAYER_TANK:
            return not self.belongs_to_enemy
        if obj.type == ObjectType.BULLET:
            return obj.belongs_to_enemy == self.belongs_to_enemy
        return obj.type == ObjectType.WATER

    def think(self, game, event) -> None:
        self.move(game)

        hit = False
        with_explosion = False
        for obj in self.hard_collisions(game.objects):
            if self._ignores(obj):
                continue
            obj.destroy(game, self.rotation)
            hit = True
            if obj.type != ObjectType.BULLET:
                with_explosion = True

        if hit:
            self.destroyed = True
            if with_explosion:
                centre = self.position + Vector2(self.size.x / 2, self.size.y / 2)
                game.add_object(Explosion(centre, False))

    def destroy(self, game, bullet_rotation: ObjectRotation) -> None:
        self.destroyed = True


class Tank(MovableObject):
    """Common behaviour of player and enemy tanks."""

    SHOT_COOLDOWN = (64.0 / 60) / 4

    def __init__(self, type: ObjectType, position: Vector2):
        super().__init__(type, position, Vector2(16, 16), 45)
        self.tank_type = 0
        self.has_bonus = False
        self.lives = 0
        self.max_bullets = 1
        self.fast_bullets = False
        self.powerful_bullets = False
        self.last_shot_time = -1.0
        self.bullets: list = []
        self.failed_to_move = False
        self._wheel_state = False
        if self.type == ObjectType.ENEMY_TANK:
            self.speed = 60 if self.tank_type == 1 else 30
        self.collision_layer = 1

    @property
    def state(self) -> int:
        """Bits: [type][type][][color][color][wheel][rotation][rotation]."""
        return (
            (self.tank_type << 6) | (int(self._wheel_state) << 2) | int(self.rotation)
        ) & 0xFF

    def _pressed(self, game, event: Event) -> PressedButtons:
        if self.type != ObjectType.PLAYER_TANK:
            return event.player1
        if not self.has_bonus or not game.two_players:
            pressed = event.player1
            if not game.two_players:
                pressed = pressed | event.player2
            return pressed
        return event.player2

    def think(self, game, event: Event) -> None:
        pressed = self._pressed(game, event)

        if pressed.up or pressed.down or pressed.left or pressed.right:
            x, y = self.position.x, self.position.y
            if pressed.up:
                x, rotation = _snap(x), ObjectRotation.UP
            elif pressed.left:
                y, rotation = _snap(y), ObjectRotation.LEFT
            elif pressed.down:
                x, rotation = _snap(x), ObjectRotation.DOWN
            else:
                y, rotation = _snap(y), ObjectRotation.RIGHT
            old_position = Vector2(x, y)
            self.position = old_position
            self.rotation = rotation

            collisions = len(self.hard_collisions(game.objects))
            moved = self.move(game)

            self.failed_to_move = False
            if moved % 2:
                self._wheel_state = not self._wheel_state
            if len(self.hard_collisions(game.objects)) > collisions:
                self.position = old_position
                self.failed_to_move = True
        else:
            self.move(game, False)

        if pressed.shoot:
            self.shoot(game)

        self.bullets = [bullet for bullet in self.bullets if not bullet.destroyed]

    def destroy(self, game, bullet_rotation: ObjectRotation) -> None:
        if self.lives == 0:
            centre = self.position + Vector2(self.size.x / 2, self.size.y / 2)
            game.add_object(Explosion(centre, True))
            self.destroyed = True
            return
        self.lives -= 1

    def shoot(self, game) -> None:
        """Fire a bullet unless too many are in flight or the gun is cooling down."""
        if len(self.bullets) >= self.max_bullets:
            return
        if self.last_shot_time + self.SHOT_COOLDOWN > game.time:
            return
        self.last_shot_time = game.time

        bullet = Bullet(
            self.position,
            self.rotation,
            self.type == ObjectType.ENEMY_TANK,
            self.fast_bullets,
            self.powerful_bullets,
        )
        game.add_object(bullet)
        self.bullets.append(bullet)


class PlayerTank(Tank):
    """A tank driven by a player; player 1 uses the second player's controls."""

    def __init__(self, position: Vector2, player_num: int):
        super().__init__(ObjectType.PLAYER_TANK, position)
        self.has_bonus = bool(player_num)

    @property
    def state(self) -> int:
        return (super().state | (int(self.has_bonus) << 3)) & 0xFF


class EnemyTank(Tank):
    """A computer-driven tank.

    Types: 0 simple, 1 fast, 2 fast bullets, 3 heavy (three extra lives).
    """

    def __init__(
        self,
        position: Vector2,
        tank_type: int,
        has_bonus: bool = False,
        rng=None,
    ):
        super().__init__(ObjectType.ENEMY_TANK, position)
        self.tank_type = tank_type
        self.has_bonus = has_bonus
        if tank_type == 1:
            self.speed = 60
        elif tank_type == 2:
            self.fast_bullets = True
        elif tank_type == 3:
            self.lives = 3

        self._rng = rng if rng is not None else random
        self._event = Event()
        self._event.player1.down = True
        self._color = 0b10
        self._bonus_blink_time = -1.0
        self._lives_change_time = -1.0

    @property
    def state(self) -> int:
        return (super().state | (self._color << 3)) & 0xFF

    def change_color(self, game) -> None:
        """Advance the colour blinking that shows bonus and remaining lives."""
        if self._bonus_blink_time == -1:
            self._bonus_blink_time = game.time
        if self._lives_change_time == -1:
            self._lives_change_time = game.time

        if self.has_bonus:
            while self._bonus_blink_time + 1.0 / 6 < game.time:
                self._color = 0b10 if self._color == 0b11 else 0b11
                self._bonus_blink_time += 1.0 / 6

        if self._color != 0b11:
            while self._lives_change_time + 1.0 / 60 < game.time:
                if self.lives == 0:
                    self._color = 0b10
                elif self.lives == 1:
                    # Yellow - green
                    self._color = 0b01 if self._color == 0b00 else 0b00
                elif self.lives == 2:
                    # White - yellow
                    self._color = 0b00 if self._color == 0b10 else 0b10
                else:
                    # White - green
                    self._color = 0b01 if self._color == 0b10 else 0b10
                self._lives_change_time += 1.0 / 60

    def think(self, game, event: Event) -> None:
        aligned = (
            _c_mod(self.position.x, 8) == 0 and _c_mod(self.position.y, 8) == 0
        )
        if aligned and self._rng.randrange(16) == 0:
            self._change_direction()
        elif self.failed_to_move:
            if self._rng.randrange(4) == 0:
                if _c_mod(self.position.x, 8) or _c_mod(self.position.y, 8):
                    self._rotate_clockwise()
                    self._rotate_clockwise()
                else:
                    self._change_direction()
        if not self.bullets and self._rng.randrange(32) == 0:
            self._event.player1.shoot = True

        super().think(game, self._event)
        self._event.player1.shoot = False

        self.change_color(game)

    def _change_direction(self) -> None:
        if self._rng.randrange(2):
            self._rotate_clockwise()
        else:
            self._rotate_counter_clockwise()

    def _rotate_clockwise(self) -> None:
        buttons = self._event.player1
        if buttons.up:
            buttons.up, buttons.right = False, True
        elif buttons.right:
            buttons.right, buttons.down = False, True
        elif buttons.down:
            buttons.down, buttons.left = False, True
        elif buttons.left:
            buttons.left, buttons.up = False, True

    def _rotate_counter_clockwise(self) -> None:
        for _ in range(3):
            self._rotate_clockwise()