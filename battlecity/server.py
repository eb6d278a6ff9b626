"""The two-player game server."""

import argparse

from . import logs
from .base import GameObject, Vector2
from .enums import ObjectType
from .game import Game
from .network import DEFAULT_PORT, ServerNetwork
from .serializer import bytes_to_event, object_to_bytes

VERSION = "1.0"


class FrameEncoder:
    """Encodes objects, skipping those whose bytes did not change since last sent."""

    def __init__(self):
        self._previous: dict = {}

    def encode(self, objects) -> list:
        """Return the records that must be sent for this frame, in object order."""
        records = []
        for obj in objects:
            record = object_to_bytes(obj)
            if self._previous.get(obj.id) != record:
                records.append(record)
            if obj.destroyed:
                self._previous.pop(obj.id, None)
            else:
                self._previous[obj.id] = record
        return records


def _marker(object_type: ObjectType) -> bytes:
    return object_to_bytes(GameObject(object_type, Vector2(0, 0), Vector2(0, 0)))


def terminator_bytes() -> bytes:
    """Record that ends the objects of one frame."""
    return _marker(ObjectType.NETWORK_TERMINATOR)


def new_stage_bytes() -> bytes:
    """Record telling clients that a new stage has started."""
    return _marker(ObjectType.NEW_STAGE)


def _serve(server: ServerNetwork, resources_dir) -> None:
    stage = 0
    game = Game(stage, True, resources_dir=resources_dir)
    encoder = FrameEncoder()
    while True:
        for record in encoder.encode(game.objects):
            server.send(record)
        server.send(terminator_bytes())

        first, second = server.receive(1)
        event = bytes_to_event(first, second)

        game.think(event)
        reset = event.player1.reset or event.player2.reset
        if game.finished or reset:
            stage = 0 if reset else (stage + 1) & 0xFF
            game = Game(stage, True, resources_dir=resources_dir)
            server.send(new_stage_bytes())


def main(argv=None) -> int:
    """Wait for two players and run the game until something breaks."""
    parser = argparse.ArgumentParser(prog="battlecity-server")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--resources", default=None, help="resources directory")
    args = parser.parse_args(argv)

    logs.message("Started server")
    logs.message(f"Version: {VERSION}")
    logs.message("")

    try:
        with ServerNetwork(args.port) as server:
            _serve(server, args.resources)
    except RuntimeError as exc:
        logs.message("")
        logs.error("Something critical went wrong :(")
        logs.error(str(exc))

    logs.message("")
    logs.message("Terminated. Goodbye!")
    return 0