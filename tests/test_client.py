import socket
import sys

import pygame
import pytest

from battlecity import client
from battlecity.base import NetworkObject, Vector2
from battlecity.drawables import TextureCache
from battlecity.enums import ObjectType

_TEXTURES = (
    "GameOver.png",
    "TankSmall.png",
    "Numbers.png",
    "StatsBackground.png",
    "Blocks.png",
    "Eagle.png",
    "Spawn.png",
    "Bullets.png",
    "Explosion.png",
    "Tanks.png",
)


@pytest.fixture(autouse=True)
def log_dir(monkeypatch, tmp_path):
    monkeypatch.setattr(sys, "argv", [str(tmp_path / "client")])
    return tmp_path


@pytest.fixture
def scene(tmp_path):
    graphics = tmp_path / "resources" / "graphics"
    graphics.mkdir(parents=True)
    for name in _TEXTURES:
        pygame.image.save(pygame.Surface((8, 8)), str(graphics / name))
    return client.Scene(TextureCache(str(tmp_path / "resources")))


def _free_port():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_apply_creates_and_positions_drawable(scene):
    scene.apply(NetworkObject(5, ObjectType.BRICK, False, 16, 24, 0b1111))
    assert 5 in scene
    assert scene.ordered()[0].sprites[0].position == Vector2(16, 24)


def test_apply_updates_existing_drawable(scene):
    scene.apply(NetworkObject(5, ObjectType.WALL, False, 16, 24, 0))
    first = scene.ordered()[0]
    scene.apply(NetworkObject(5, ObjectType.WALL, False, 32, 24, 0))
    assert len(scene) == 1
    assert scene.ordered()[0] is first
    assert first.sprites[0].position == Vector2(32, 24)


def test_destroyed_object_is_removed(scene):
    scene.apply(NetworkObject(5, ObjectType.BRICK, False, 16, 24, 0b1111))
    scene.apply(NetworkObject(5, ObjectType.BRICK, True, 16, 24, 0))
    assert 5 not in scene
    assert len(scene) == 0


def test_undrawn_type_is_skipped(scene, capsys):
    scene.apply(NetworkObject(7, ObjectType.NONE, False, 0, 0, 0))
    assert len(scene) == 0
    assert "[WARNING] No drawable assigned to object" in capsys.readouterr().out


def test_ordered_by_layer(scene):
    scene.apply(NetworkObject(1, ObjectType.BUSH, False, 0, 0, 0))
    scene.apply(NetworkObject(2, ObjectType.BULLET, False, 0, 0, 0))
    scene.apply(NetworkObject(3, ObjectType.WALL, False, 0, 0, 0))
    assert [drawable.layer for drawable in scene.ordered()] == [0, 10, 20]


def test_clear_forgets_everything(scene):
    scene.apply(NetworkObject(1, ObjectType.WALL, False, 0, 0, 0))
    scene.apply(NetworkObject(2, ObjectType.BRICK, False, 8, 0, 15))
    scene.clear()
    assert len(scene) == 0
    assert scene.ordered() == []


def test_main_reports_unreachable_server(log_dir):
    config = log_dir / "client.config"
    config.write_text("127.0.0.1\n", encoding="utf-8")
    port = _free_port()
    assert client.main(["--config", str(config), "--port", str(port)]) == 0
    text = (log_dir / "latest.log").read_text(encoding="utf-8")
    assert f"Failed to connect to 127.0.0.1:{port}" in text
    assert text.rstrip().endswith("Terminated. Goodbye!")


def test_main_local_game_without_stage(log_dir):
    code = client.main(["--resources", str(log_dir / "none")])
    assert code == 0
    text = (log_dir / "latest.log").read_text(encoding="utf-8")
    assert "[INFO] Config file not found, starting local game" in text
    assert "[ERROR] Failed to load data for stage 0" in text