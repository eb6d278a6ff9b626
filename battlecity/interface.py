"""On-screen interface objects: game over label, counters and stage number."""

from .base import GameObject, MovableObject, Vector2
from .enums import ObjectRotation, ObjectType


class GameOver(MovableObject):
    """The "game over" label that rises from the bottom and stops mid-screen."""

    STOP_Y = 96

    def __init__(self):
        super().__init__(
            ObjectType.GAME_OVER,
            Vector2(88, 208),
            Vector2(32, 16),
            60,
            ObjectRotation.UP,
        )
        self.collision = False

    def think(self, game, event) -> None:
        self.move(game)
        if self.position.y == self.STOP_Y:
            self.speed = 0


class LeftTanks(GameObject):
    """Counter of enemy tanks still waiting to spawn."""

    def __init__(self, tanks_num: int):
        super().__init__(ObjectType.LEFT_TANKS, Vector2(216, 8), Vector2(16, 80))
        self._state = tanks_num & 0xFF
        self.collision = False

    @property
    def state(self) -> int:
        return self._state

    def remove_tank(self) -> None:
        """Take one tank off the counter."""
        self._state = (self._state - 1) & 0xFF


class PlayerLives(GameObject):
    """Remaining lives of one player."""

    def __init__(self, player_num: int):
        position = Vector2(224, 152) if player_num == 1 else Vector2(224, 128)
        super().__init__(ObjectType.PLAYER_LIVES, position, Vector2(8, 8))
        self._state = 0
        self.collision = False

    @property
    def state(self) -> int:
        return self._state

    def set_state(self, state: int) -> None:
        """Set the number of lives shown."""
        self._state = state & 0xFF


class StageNumber(GameObject):
    """Number of the stage being played."""

    def __init__(self):
        super().__init__(ObjectType.STAGE_NUMBER, Vector2(216, 184), Vector2(16, 8))
        self._state = 0
        self.collision = False

    @property
    def state(self) -> int:
        return self._state

    def think(self, game, event) -> None:
        self._state = game.stage & 0xFF