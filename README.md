# spacegame

A small top-down space game built on pygame. It opens on a menu where you
can start a new game, change the display quality and volume, or quit. In the
game you steer a ship with the arrow keys over a tiled background, next to
an asteroid. A camera eases after the ship. An overlay shows health,
experience and time, and experience goes up by one every second.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Playing

```
spacegame
```

Options:

- `--assets DIR`: the assets directory. The default is `game/assets`.
- `--width N`, `--height N`: the window size. The default is 1280 x 720.
- `--frames N`: stop after N frames.

When you start a game, it loads these files from the assets directory. It
stops with `FileNotFoundError` if any of them is missing:

- `images/bg_black.png`: the background tile
- `images/sheet.xml`: the main sprite sheet, with the image named by its
  `imagePath` attribute
- `images/spaceShooter2_spritesheet.xml`: the extended sprite sheet
- `fonts/kenvector_future.ttf` and `fonts/kenvector_future_thin.ttf`: the
  overlay fonts
- `audio/sfx_laser1.ogg`: the laser sound

The main sheet must hold sprites named `playerShip1_blue` and
`meteorBrown_big1`. The menu buttons show icons from
`textures/Game Icons/` when those files exist. The menu text uses pygame's
default font.

Controls:

- Arrow keys: move the ship. It turns to face the direction it moves in.
- Mouse: hover over and click menu buttons.

The default settings are medium display quality and volume 7.

## What the game does not do

It has no shooting, no collisions and no scoring. Health never changes.
The time row of the overlay always shows `00 : 00`. The laser sound is
checked for but never played. The display quality and volume settings are
stored, but they do not change how the game looks or sounds.

## Sprite indices

Sprite sheets are XML texture atlases. `spacegame.spritesheet` reads every
`*.xml` file in an images directory. It maps each sub-texture name to its
index in the atlas. The name has `.png` removed, `-` and spaces turned into
`_`, and is upper-cased:

```python
from spacegame.spritesheet import spritesheet_indices

indices = spritesheet_indices("game/assets/images")
indices["sheet"]["PLAYERSHIP1_BLUE"]
```

`render_indices(images_dir)` renders the same tables as Python source, with
one class per atlas and one constant per sprite.
`write_indices(assets_dir)` writes that source to
`<assets_dir>/generated/spritesheet_asset_indices.py`, reading from
`<assets_dir>/images`. It returns the path it wrote.

## Serving the web build

```
spacegame-server
```

This serves GET and HEAD requests from `game/dist`. A path that is not found
there gets `game/dist/index.html` with a 404 status. Paths under `/assets`
come from `game/assets`. A missing asset gets a plain 404.

Options:

- `--host`: the host to listen on. The default is `127.0.0.1`.
- `--port`: the port to listen on. The default is `8000`.
- `--dist`: the web build directory.
- `--assets`: the assets directory.