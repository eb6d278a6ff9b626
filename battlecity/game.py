"""One stage of the game: loading, object bookkeeping and the fixed-step loop."""

import os
import random
import string
from time import monotonic

from . import logs
from .enums import ObjectType
from .events import Event
from .interface import GameOver, LeftTanks, StageNumber
from .paths import absolute_path
from .playfield import Border, Brick, Bush, Eagle, TankSpawner, Wall, Water

STEP = 1.0 / 60
LAYOUT_ROWS = 26
TILE = 8


class StageLoadError(RuntimeError):
    """The stage files could not be read."""


class Game:
    """The state of one stage and its simulation at 60 steps per second."""

    def __init__(
        self,
        stage: int,
        two_players: bool,
        homebrew: bool = True,
        resources_dir=None,
        clock=None,
    ):
        self.stage = stage
        self.two_players = two_players
        self.homebrew = homebrew
        self.player_spawners = 0
        self.game_over = False
        self.finished = False
        self.paused = False
        self.rng = random.Random()

        self._objects: list = []
        self._tanks: list = []
        self._game_over_label = False
        self._finished_time = -1.0
        self._last_think = 0.0
        if clock is None:
            start = monotonic()
            clock = lambda: monotonic() - start  # noqa: E731
        self._clock = clock

        base = resources_dir if resources_dir is not None else absolute_path("resources")
        stages = os.path.join(base, "stages")
        try:
            with open(os.path.join(stages, f"stage{stage}.layout"), encoding="utf-8") as f:
                rows = f.read().splitlines()
            with open(os.path.join(stages, f"stage{stage}.tanks"), encoding="utf-8") as f:
                tank_lines = f.read().splitlines()
        except OSError as exc:
            raise StageLoadError(f"Failed to load data for stage {stage}") from exc

        self._load_layout(rows[:LAYOUT_ROWS])
        self._tanks = [
            int(ch) if ch in string.digits else 0
            for ch in (tank_lines[0] if tank_lines else "")
        ]

        self._objects.extend(Border(num) for num in range(4))
        self._objects.append(StageNumber())
        self._left_tanks = LeftTanks(len(self._tanks))
        self._objects.append(self._left_tanks)

        logs.info(f"Game started, stage {stage}")

    def _load_layout(self, rows) -> None:
        simple = {"b": Brick, "p": Brick, "w": Wall, "B": Bush, "W": Water, "e": Eagle}
        for row_index, row in enumerate(rows):
            enemy_spawner_num = 1
            for col, tile in enumerate(row):
                from .base import Vector2

                position = Vector2(col * TILE, row_index * TILE)
                if tile in simple:
                    self._objects.append(simple[tile](position))
                elif tile == "s":
                    enemy_spawner_num = (enemy_spawner_num + 1) % 3
                    self._objects.append(
                        TankSpawner(position, ObjectType.ENEMY_TANK, enemy_spawner_num)
                    )
                elif tile == "1" or (tile == "2" and self.two_players):
                    self._objects.append(
                        TankSpawner(position, ObjectType.PLAYER_TANK, int(tile) - 1)
                    )
                    self.player_spawners += 1

    @property
    def objects(self) -> list:
        """A snapshot of the objects in play."""
        return list(self._objects)

    @property
    def tanks(self) -> list:
        """Enemy tank types of this stage, in spawn order."""
        return list(self._tanks)

    def add_object(self, obj) -> None:
        """Put an object into play; enemy tanks are taken off the counter."""
        self._objects.append(obj)
        if obj.type == ObjectType.ENEMY_TANK:
            self._left_tanks.remove_tank()

    @property
    def time(self) -> float:
        """Simulated time of the last step, in seconds."""
        return self._last_think

    @property
    def period(self) -> float:
        """Interval between enemy spawns, in seconds."""
        return (190 - self.stage * 4 - (2 if self.two_players else 0) * 20) / 60.0

    def think(self, event: Event) -> None:
        """Drop destroyed objects and run the steps due by the clock."""
        tanks_left = 0
        spawners_left = 0
        alive = []
        for obj in self._objects:
            if obj.type == ObjectType.EAGLE:
                if obj.state:
                    self.game_over = True
            elif obj.type == ObjectType.ENEMY_TANK:
                tanks_left += 1
            elif obj.type == ObjectType.SPAWNER:
                if obj.spawn_object == ObjectType.PLAYER_TANK:
                    spawners_left += 1
                else:
                    tanks_left += 1
            if not obj.destroyed:
                alive.append(obj)
        self._objects = alive
        if spawners_left == 0:
            self.game_over = True

        if self.game_over:
            event = Event()
            if not self._game_over_label:
                self.add_object(GameOver())
                self._game_over_label = True

        while self._clock() + STEP > self._last_think:
            if not self.paused:
                for obj in list(self._objects):
                    if not obj.destroyed:
                        obj.think(self, event)

                if tanks_left == 0:
                    if self._finished_time == -1:
                        self._finished_time = self.time
                    if self._finished_time + self.period * 2 < self.time:
                        self.finished = True
                else:
                    self._finished_time = -1.0
            self._last_think += STEP