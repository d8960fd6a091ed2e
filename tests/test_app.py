import os
import shutil
from pathlib import Path

import pygame
import pytest

from spacegame.app import Game, SpriteSheet, main
from spacegame.menu import main_menu_screen
from spacegame.player import CAMERA_SCALE
from spacegame.state import GameState, MenuState

SHEET_XML = """<TextureAtlas imagePath="sheet.png">
    <SubTexture name="laserBlue01.png" x="0" y="0" width="8" height="8"/>
    <SubTexture name="meteorBrown_big1.png" x="8" y="0" width="8" height="8"/>
    <SubTexture name="playerShip1_blue.png" x="16" y="0" width="8" height="8"/>
</TextureAtlas>
"""


@pytest.fixture
def headless(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")


@pytest.fixture
def assets(tmp_path):
    root = tmp_path / "assets"
    images = root / "images"
    images.mkdir(parents=True)
    (root / "audio").mkdir()
    (root / "fonts").mkdir()
    (root / "audio" / "sfx_laser1.ogg").write_bytes(b"OggS")
    pygame.image.save(pygame.Surface((16, 16)), str(images / "bg_black.png"))
    pygame.image.save(pygame.Surface((24, 8)), str(images / "sheet.png"))
    (images / "sheet.xml").write_text(SHEET_XML, encoding="utf-8")
    (images / "spaceShooter2_spritesheet.xml").write_text(SHEET_XML, encoding="utf-8")
    font = Path(os.path.dirname(pygame.__file__)) / pygame.font.get_default_font()
    shutil.copy(font, root / "fonts" / "kenvector_future.ttf")
    shutil.copy(font, root / "fonts" / "kenvector_future_thin.ttf")
    return root


def _sheet():
    image = pygame.Surface((20, 10))
    image.fill((255, 0, 0), pygame.Rect(10, 0, 10, 10))
    return SpriteSheet(image, [(0, 0, 10, 10), (10, 0, 10, 10)], ["a.png", "b-c d.png"])


def test_sprite_returns_region_of_atlas():
    sheet = _sheet()
    sprite = sheet.sprite(1)
    assert sprite.get_size() == (10, 10)
    assert sprite.get_at((0, 0))[:3] == (255, 0, 0)
    assert sheet.sprite(0).get_at((0, 0))[:3] == (0, 0, 0)


def test_sheet_indices_use_constant_names():
    assert _sheet().indices == {"A": 0, "B_C_D": 1}


@pytest.mark.parametrize("index", [2, -1])
def test_sprite_out_of_range(index):
    with pytest.raises(IndexError):
        _sheet().sprite(index)


def test_sheet_names_must_match_rects():
    with pytest.raises(ValueError):
        SpriteSheet(pygame.Surface((4, 4)), [(0, 0, 2, 2)], ["a.png", "b.png"])


def test_run_starts_in_main_menu(headless, tmp_path):
    game = Game(assets_dir=tmp_path, max_frames=2)
    game.run()
    assert game.menu.game_state is GameState.MENU
    assert game.menu.menu_state is MenuState.MAIN
    assert [b.label for b in game.menu.screen.buttons] == [
        b.label for b in main_menu_screen().buttons
    ]


def test_run_loads_assets_and_enters_game(headless, assets):
    game = Game(assets_dir=assets, max_frames=3)
    game.menu.game_state = GameState.LOADING
    game.run()
    assert game.menu.game_state is GameState.GAME
    assert game.camera.scale == CAMERA_SCALE
    assert game.sheet.indices["PLAYERSHIP1_BLUE"] == 2
    assert game.sheet.indices["METEORBROWN_BIG1"] == 1
    assert game.asteroids == [(0.0, 0.0, 1.0)]
    assert (game.player.x, game.player.y) == (0.0, 0.0)
    assert game.overlay.lines()[0] == "HP:  100 / 100"
    assert game.score == 0


def test_run_with_missing_assets_raises(headless, tmp_path):
    game = Game(assets_dir=tmp_path / "nothing", max_frames=2)
    game.menu.game_state = GameState.LOADING
    with pytest.raises(FileNotFoundError):
        game.run()


def test_run_with_sheet_missing_player_sprite(headless, assets):
    xml = SHEET_XML.replace("playerShip1_blue.png", "other.png")
    (assets / "images" / "sheet.xml").write_text(xml, encoding="utf-8")
    game = Game(assets_dir=assets, max_frames=3)
    game.menu.game_state = GameState.LOADING
    with pytest.raises(ValueError):
        game.run()


def test_main_runs_limited_frames(headless, assets):
    assert main(["--assets", str(assets), "--frames", "2", "--width", "320", "--height", "240"]) == 0