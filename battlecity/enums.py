"""Enumerations shared by the simulation, the renderer and the wire format."""

from enum import IntEnum


class ObjectRotation(IntEnum):
    """Direction an object faces."""

    UP = 0
    LEFT = 1
    DOWN = 2
    RIGHT = 3


class ObjectType(IntEnum):
    """Kind of a game object; the value is sent over the network as one byte."""

    NONE = 0
    BORDER = 1
    BRICK = 2
    WALL = 3
    BUSH = 4
    WATER = 5
    EAGLE = 6
    PROTECTION = 7
    SPAWNER = 10
    PLAYER_TANK = 11
    ENEMY_TANK = 12
    BULLET = 20
    EXPLOSION = 30
    # Interface objects
    GAME_OVER = 101
    LEFT_TANKS = 102
    PLAYER_LIVES = 103
    STAGE_NUMBER = 104
    # Service markers
    NEW_STAGE = 254
    NETWORK_TERMINATOR = 255