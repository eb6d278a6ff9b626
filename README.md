# battlecity

A tank battle arcade game on a 26 × 26 tile playfield. Steer your tank through
brick, steel, bushes and water, guard the eagle, and destroy the waves of enemy
tanks that come out of the spawners. Once every enemy tank of a stage is gone,
the next stage starts. If the eagle is hit, or every player spawner has used up
its lives, a "game over" label rises onto the screen and input is ignored until
the game is restarted.

The game runs in two ways:

* **Local game**: one window, one machine, a single-player game.
* **Network game**: a server runs the simulation for two players, and each
  player connects to it with a client.

## Installation

```
pip install .
```

This installs the `battlecity-client` and `battlecity-server` commands.
Rendering and keyboard input use pygame.

## Game data

Stages and graphics are read from a `resources` directory. By default it is
looked for next to the running program (see `battlecity.paths.absolute_path`);
both commands take `--resources DIR` to point elsewhere:

```
resources/
    stages/
        stage0.layout
        stage0.tanks
        stage1.layout
        stage1.tanks
        ...
    graphics/
        Blocks.png  Bullets.png  Eagle.png  Explosion.png  GameOver.png
        Numbers.png  Spawn.png  StatsBackground.png  Tanks.png  TankSmall.png
```

A `.layout` file is read for its first 26 rows. Each character is one 8 × 8
tile:

| Character | Tile                                         |
|-----------|----------------------------------------------|
| `b`       | brick (shot away a quarter at a time)        |
| `w`       | steel wall                                   |
| `B`       | bush (tanks drive under it)                  |
| `W`       | water (blocks tanks, not bullets)            |
| `e`       | eagle                                        |
| `p`       | protection around the eagle (a brick tile)   |
| `s`       | enemy spawner                                |
| `1`       | player 1 spawner                             |
| `2`       | player 2 spawner (two-player games only)     |

Any other character, `i` included, leaves the tile empty.

A `.tanks` file has one line of digits. Each digit is the type of one enemy
tank, in order of arrival: `0` a simple tank, `1` a fast tank, `2` a tank with
fast bullets, `3` a heavy tank that takes four hits. Tanks number 3, 10 and 17
(counted from 0) blink to mark a bonus.

If a stage's files cannot be read, the program stops with an error
(`battlecity.game.StageLoadError`). Messages go to the console and to
`latest.log` next to the running program; set the environment variable
`BATTLECITY_DEBUG` to also get debug lines.

## Playing a local game

```
battlecity-client
```

If there is no `client.config` file (next to the program, or the file given
with `--config FILE`), the client starts a local single-player game from
stage 0.

## Playing over the network

On the server machine:

```
battlecity-server
```

The server listens on TCP port 61000 (change it with `--port`) and waits for
two players to connect before it starts the game.

On each player's machine, put the server's address alone in `client.config`
(or any file passed with `--config`), then run:

```
battlecity-client
```

The client connects to port 61000, or the one given with `--port`. The server
sends only the objects that changed since the previous frame; clients send back
their pressed keys once per frame. In a network game, the first connected
player is player 1 and the second is player 2; each client's keys from both
columns below are merged into one set, and the restart key is taken from the
first client.

## Controls

| Action | Player 1               | Player 2     |
|--------|------------------------|--------------|
| Up     | W                      | ↑            |
| Left   | A                      | ←            |
| Down   | S                      | ↓            |
| Right  | D                      | →            |
| Shoot  | Left Shift or Space    | Right Shift  |

`R` restarts from stage 0. In a single-player local game, either set of keys
controls your tank.

The window can be resized. It snaps to a whole multiple of the game's
240 × 208 pixel screen, so the pixels stay sharp.

## What the game does not do

* There are no bonus pick-ups: bonus tanks blink, but destroying them gives
  nothing.
* Ice (`i`) is not a tile; eagle protection is plain brick.
* `Esc` is read from the keyboard and sent to the server, but does nothing.
* The simulation can be paused through `Game.paused`, but no key does so.
* The network game is for exactly two players; the local game for one.

## Using the package from Python

The simulation does not depend on the window, so it can be driven directly:

```python
from battlecity.events import Event
from battlecity.game import Game

game = Game(0, False, resources_dir="path/to/resources")
game.think(Event())
for obj in game.objects:
    print(obj.type, obj.position, obj.state)
```

`Game` also takes a `clock` callable returning seconds, which decides how many
1/60 s steps each `think` runs.

The wire format lives in `battlecity.serializer`. `object_to_bytes` and
`bytes_to_object` convert one 7-byte object record: id (two bytes), type,
destroyed flag, x, y and state. `event_to_bytes` and `bytes_to_event` convert
the one-byte key state. `battlecity.network` has `ClientNetwork` and
`ServerNetwork`, both usable as context managers.

## Running the tests

```
pip install .[test]
pytest
```