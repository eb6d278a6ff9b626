"""The game client: plays locally or shows a game run by the server."""

import argparse

from . import logs
from .drawables import TextureCache, drawable_for
from .enums import ObjectType
from .game import Game
from .network import DEFAULT_PORT, ClientNetwork
from .paths import absolute_path
from .serializer import OBJECT_SIZE, bytes_to_object, event_to_bytes

VERSION = "1.0"


class Scene:
    """Drawables of the objects on screen, keyed by object id."""

    def __init__(self, textures: TextureCache):
        self._textures = textures
        self._drawables: dict = {}

    def __len__(self) -> int:
        return len(self._drawables)

    def __contains__(self, object_id) -> bool:
        return object_id in self._drawables

    def apply(self, obj) -> None:
        """Create, update or drop the drawable of ``obj``."""
        if obj.destroyed:
            self._drawables.pop(obj.id, None)
            return
        drawable = self._drawables.get(obj.id)
        if drawable is None:
            drawable = drawable_for(obj.type, self._textures)
            if drawable is None:
                logs.warning("No drawable assigned to object")
                return
            self._drawables[obj.id] = drawable
        drawable.update(obj)

    def clear(self) -> None:
        """Forget every drawable."""
        self._drawables.clear()

    def ordered(self) -> list:
        """Drawables in drawing order: by layer, then by object id."""
        by_id = sorted(self._drawables.items(), key=lambda item: item[0])
        return [drawable for _, drawable in sorted(by_id, key=lambda item: item[1].layer)]


def _read_config(path: str):
    try:
        with open(path, encoding="utf-8") as file:
            words = file.read().split()
    except OSError:
        return None
    return words[0] if words else ""


def _receive_frame(client: ClientNetwork, scene: Scene) -> None:
    while True:
        obj = bytes_to_object(client.receive(OBJECT_SIZE))
        if obj.type == ObjectType.NETWORK_TERMINATOR:
            return
        if obj.type == ObjectType.NEW_STAGE:
            scene.clear()
            continue
        scene.apply(obj)


def _run(window, scene: Scene, game, client, resources_dir) -> None:
    stage = 0
    while window.is_open():
        window.clear()
        if game is None:
            _receive_frame(client, scene)
        else:
            for obj in game.objects:
                scene.apply(obj)

        for drawable in scene.ordered():
            window.draw(drawable)
        window.display()

        event = window.poll_event()
        if game is None:
            client.send(event_to_bytes(event))
            continue
        game.think(event)
        if game.finished or event.player1.reset:
            stage = 0 if event.player1.reset else (stage + 1) & 0xFF
            game = Game(stage, False, resources_dir=resources_dir)
            scene.clear()


def main(argv=None) -> int:
    """Open the window and play until it is closed or something breaks."""
    parser = argparse.ArgumentParser(prog="battlecity")
    parser.add_argument("--config", default=None, help="file holding the server address")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--resources", default=None, help="resources directory")
    args = parser.parse_args(argv)

    logs.message("Started client")
    logs.message(f"Version: {VERSION}")
    logs.message("")

    game = None
    client = None
    window = None
    try:
        config = args.config if args.config is not None else absolute_path("client.config")
        address = _read_config(config)
        if address is None:
            logs.info("Config file not found, starting local game")
            game = Game(0, False, resources_dir=args.resources)
        else:
            client = ClientNetwork(address, args.port)

        from .window import Window

        window = Window(f"BattleCity client [{VERSION}]")
        _run(window, Scene(TextureCache(args.resources)), game, client, args.resources)
    except (RuntimeError, ValueError) as exc:
        logs.message("")
        logs.error("Something critical went wrong :(")
        logs.error(str(exc))
    finally:
        if window is not None:
            window.close()
        if client is not None:
            client.close()

    logs.message("")
    logs.message("Terminated. Goodbye!")
    return 0