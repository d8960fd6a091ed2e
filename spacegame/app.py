"""The game application: asset loading, state transitions, update and drawing."""

from __future__ import annotations

import argparse
import math
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path

import pygame

from spacegame.menu import (
    BUTTON_FONT_SIZE,
    ICON_LEFT,
    ICON_WIDTH,
    SCREEN_SIZE,
    TITLE_FONT_SIZE,
    Menu,
)
from spacegame.overlay import (
    FONT_SIZE,
    HEALTH_ROW,
    XP_ROW,
    Experience,
    Health,
    Overlay,
    XpTimer,
)
from spacegame.player import CAMERA_SCALE, Camera, Direction, Player
from spacegame.spritesheet import constant_name
from spacegame.state import CRIMSON, TEXT_COLOR, GameState, Interaction

ASSETS_DIR = "game/assets"
AUDIO_LASER = "audio/sfx_laser1.ogg"
BACKGROUND_IMAGE = "images/bg_black.png"
MAIN_SHEET = "images/sheet.xml"
EXTENDED_SHEET = "images/spaceShooter2_spritesheet.xml"
FONT_THIN = "fonts/kenvector_future_thin.ttf"
FONT_NORMAL = "fonts/kenvector_future.ttf"
ASSET_PATHS = (
    AUDIO_LASER,
    BACKGROUND_IMAGE,
    MAIN_SHEET,
    EXTENDED_SHEET,
    FONT_THIN,
    FONT_NORMAL,
)

PLAYER_SPRITE = "PLAYERSHIP1_BLUE"
ASTEROID_SPRITE = "METEORBROWN_BIG1"
CLEAR_COLOR = (43, 43, 43)
CAPTION = "Space Game"
FPS = 60

_KEYMAP = {
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_UP: Direction.UP,
}

Rect = tuple[int, int, int, int]


@dataclass
class SpriteSheet:
    """An atlas image with the rectangles of its sprites, in atlas order."""

    image: pygame.Surface
    rects: list[Rect]
    names: list[str] = field(default_factory=list)
    indices: dict[str, int] = field(init=False, default_factory=dict)

    def __post_init__(self) -> None:
        if self.names and len(self.names) != len(self.rects):
            raise ValueError("names and rects differ in length")
        self.indices = {constant_name(name): index for index, name in enumerate(self.names)}

    def sprite(self, index: int) -> pygame.Surface:
        """Return the sprite at ``index`` as a view into the atlas image."""
        if not 0 <= index < len(self.rects):
            raise IndexError(f"sprite sheet has no sprite {index}")
        return self.image.subsurface(pygame.Rect(self.rects[index]))


def _load_sheet(xml_path: Path) -> SpriteSheet:
    try:
        root = ET.parse(xml_path).getroot()
    except ET.ParseError as exc:
        raise ValueError(f"could not parse texture atlas {xml_path}: {exc}") from exc
    image_path = root.get("imagePath")
    if image_path is None:
        raise ValueError(f"texture atlas {xml_path} has no imagePath")
    names: list[str] = []
    rects: list[Rect] = []
    for entry in root.findall("SubTexture"):
        try:
            rect = tuple(int(entry.get(key)) for key in ("x", "y", "width", "height"))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"bad SubTexture entry in {xml_path}") from exc
        names.append(entry.get("name", ""))
        rects.append(rect)
    image = pygame.image.load(str(xml_path.parent / image_path))
    if pygame.display.get_surface() is not None:
        image = image.convert_alpha()
    return SpriteSheet(image, rects, names)


def _sprite_index(sheet: SpriteSheet, constant: str) -> int:
    try:
        return sheet.indices[constant]
    except KeyError:
        raise ValueError(f"sprite sheet has no sprite {constant}") from None


@dataclass
class Game:
    """The whole game: menu, loading, and the in-game world."""

    assets_dir: str | Path = ASSETS_DIR
    size: tuple[int, int] = SCREEN_SIZE
    max_frames: int | None = None
    fps: int = FPS
    menu: Menu = field(default_factory=Menu)
    player: Player = field(default_factory=Player)
    camera: Camera = field(default_factory=lambda: Camera(scale=1.0))
    health: Health = field(default_factory=Health)
    experience: Experience = field(default_factory=Experience)
    overlay: Overlay = field(default_factory=Overlay)
    xp_timer: XpTimer = field(default_factory=XpTimer)
    score: int = 0
    background_scroll: float = 1.0
    asteroids: list[tuple[float, float, float]] = field(default_factory=list)
    sheet: SpriteSheet | None = None
    extended_sheet: SpriteSheet | None = None
    background: pygame.Surface | None = None
    laser_sound: Path | None = None

    def __post_init__(self) -> None:
        self.menu.size = self.size
        self._entered: GameState | None = None
        self._fonts: dict[str, pygame.font.Font] = {}
        self._menu_fonts: dict[float, pygame.font.Font] = {}
        self._icons: dict[str, pygame.Surface | None] = {}
        self._shown: dict[str, tuple[int, int]] = {}
        self._player_sprite = 0
        self._asteroid_sprite = 0

    def run(self) -> None:
        """Open the window and run the game loop until quit."""
        pygame.init()
        try:
            window = pygame.display.set_mode(self.size)
            pygame.display.set_caption(CAPTION)
            clock = pygame.time.Clock()
            frames = 0
            running = True
            while running:
                dt = clock.tick(self.fps) / 1000.0
                self._sync_state()
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    else:
                        self._handle_event(event)
                if self.menu.quit_requested:
                    running = False
                self._update(dt)
                self._draw(window)
                pygame.display.flip()
                frames += 1
                if self.max_frames is not None and frames >= self.max_frames:
                    running = False
        finally:
            pygame.quit()

    def _sync_state(self) -> None:
        while self._entered is not self.menu.game_state:
            self._entered = self.menu.game_state
            self._on_enter(self._entered)

    def _on_enter(self, state: GameState) -> None:
        if state is GameState.MENU:
            self.menu.enter()
        elif state is GameState.LOADING:
            self._load_assets()
            self.menu.game_state = GameState.GAME
        elif state is GameState.GAME:
            self._spawn_world()

    def _load_assets(self) -> None:
        root = Path(self.assets_dir)
        missing = [str(root / path) for path in ASSET_PATHS if not (root / path).is_file()]
        if missing:
            raise FileNotFoundError("missing assets: " + ", ".join(missing))
        background = pygame.image.load(str(root / BACKGROUND_IMAGE))
        if pygame.display.get_surface() is not None:
            background = background.convert()
        self.background = background
        self.sheet = _load_sheet(root / MAIN_SHEET)
        self.extended_sheet = _load_sheet(root / EXTENDED_SHEET)
        self._fonts = {
            "thin": pygame.font.Font(str(root / FONT_THIN), int(FONT_SIZE)),
            "normal": pygame.font.Font(str(root / FONT_NORMAL), int(FONT_SIZE)),
        }
        self.laser_sound = root / AUDIO_LASER

    def _spawn_world(self) -> None:
        if self.sheet is None:
            raise RuntimeError("assets are not loaded")
        self._asteroid_sprite = _sprite_index(self.sheet, ASTEROID_SPRITE)
        self._player_sprite = _sprite_index(self.sheet, PLAYER_SPRITE)
        self.asteroids.append((0.0, 0.0, 1.0))
        self.player = Player()
        self.camera.scale = CAMERA_SCALE
        self.overlay = Overlay()
        self._shown = {}

    def _handle_event(self, event: pygame.event.Event) -> None:
        if self.menu.game_state is not GameState.MENU:
            return
        if event.type == pygame.MOUSEMOTION:
            self._pointer(event.pos, bool(event.buttons[0]))
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._pointer(event.pos, True)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self._pointer(event.pos, False)

    def _pointer(self, pos: tuple[int, int], down: bool) -> None:
        screen = self.menu.screen
        if screen is None:
            return
        target = self.menu.button_at(pos)
        active = Interaction.PRESSED if down else Interaction.HOVERED
        for index, button in enumerate(screen.controls):
            if self.menu.screen is not screen:
                break
            wanted = active if index == target else Interaction.NONE
            if button.interaction is not wanted:
                self.menu.set_interaction(index, wanted)

    def _update(self, dt: float) -> None:
        if self.menu.game_state is not GameState.GAME:
            return
        keys = pygame.key.get_pressed()
        pressed = [direction for key, direction in _KEYMAP.items() if keys[key]]
        self.player.move(pressed, dt)
        self.camera.follow(self.player, dt)
        self.xp_timer.tick(dt, self.experience)
        self._refresh_overlay()

    def _refresh_overlay(self) -> None:
        for row, resource, value in (
            (HEALTH_ROW, self.health, (self.health.current, self.health.max)),
            (XP_ROW, self.experience, (self.experience.current, self.experience.target)),
        ):
            if self._shown.get(row) != value:
                self.overlay.apply(row, resource.ui_updates())
                self._shown[row] = value

    def _to_screen(self, x: float, y: float) -> tuple[float, float]:
        width, height = self.size
        return (
            width / 2 + (x - self.camera.x) / self.camera.scale,
            height / 2 - (y - self.camera.y) / self.camera.scale,
        )

    def _draw(self, window: pygame.Surface) -> None:
        window.fill(CLEAR_COLOR)
        if self.menu.game_state is GameState.GAME:
            self._draw_world(window)
            self._draw_overlay(window)
        elif self.menu.screen is not None:
            self._draw_menu(window)

    def _draw_world(self, window: pygame.Surface) -> None:
        if self.background is not None:
            tile_w, tile_h = self.background.get_size()
            if tile_w and tile_h:
                off_x = int(self.camera.x / self.camera.scale * self.background_scroll) % tile_w
                off_y = int(-self.camera.y / self.camera.scale * self.background_scroll) % tile_h
                width, height = self.size
                for ty in range(-off_y, height, tile_h):
                    for tx in range(-off_x, width, tile_w):
                        window.blit(self.background, (tx, ty))
        if self.sheet is None:
            return
        sprites = [(x, y, z, self._asteroid_sprite, 0.0) for x, y, z in self.asteroids]
        player = self.player
        sprites.append((player.x, player.y, player.z, self._player_sprite, player.rotation))
        for x, y, _, index, rotation in sorted(sprites, key=lambda item: item[2]):
            image = pygame.transform.rotozoom(
                self.sheet.sprite(index), math.degrees(rotation), 1.0 / self.camera.scale
            )
            window.blit(image, image.get_rect(center=self._to_screen(x, y)))

    def _draw_overlay(self, window: pygame.Surface) -> None:
        font = self._fonts.get("normal")
        if font is None:
            return
        y = 0
        for spans in self.overlay.rows.values():
            x = 0
            for text, color in spans:
                rendered = font.render(text, True, color)
                window.blit(rendered, (x, y))
                x += rendered.get_width()
            y += font.get_linesize()

    def _menu_font(self, size: float) -> pygame.font.Font:
        if size not in self._menu_fonts:
            self._menu_fonts[size] = pygame.font.Font(None, int(size))
        return self._menu_fonts[size]

    def _icon(self, relative: str) -> pygame.Surface | None:
        if relative not in self._icons:
            path = Path(self.assets_dir) / relative
            icon = None
            if path.is_file():
                try:
                    loaded = pygame.image.load(str(path))
                except pygame.error:
                    loaded = None
                if loaded is not None and loaded.get_width():
                    height = round(loaded.get_height() * ICON_WIDTH / loaded.get_width())
                    icon = pygame.transform.smoothscale(loaded, (ICON_WIDTH, height))
            self._icons[relative] = icon
        return self._icons[relative]

    def _draw_menu(self, window: pygame.Surface) -> None:
        screen = self.menu.screen
        if screen.panel is not None:
            pygame.draw.rect(window, CRIMSON, pygame.Rect(screen.panel))
        if screen.title is not None and screen.title_rect is not None:
            text = self._menu_font(TITLE_FONT_SIZE).render(screen.title, True, TEXT_COLOR)
            window.blit(text, text.get_rect(center=pygame.Rect(screen.title_rect).center))
        if screen.option_label and screen.label_rect is not None:
            text = self._menu_font(BUTTON_FONT_SIZE).render(
                screen.option_label, True, TEXT_COLOR
            )
            window.blit(text, text.get_rect(center=pygame.Rect(screen.label_rect).center))
        for button in screen.controls:
            if button.rect is None:
                continue
            rect = pygame.Rect(button.rect)
            pygame.draw.rect(window, button.color, rect)
            if button.icon is not None:
                icon = self._icon(button.icon)
                if icon is not None:
                    window.blit(icon, icon.get_rect(midleft=(rect.left + ICON_LEFT, rect.centery)))
            if button.label:
                text = self._menu_font(BUTTON_FONT_SIZE).render(button.label, True, TEXT_COLOR)
                window.blit(text, text.get_rect(center=rect.center))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Play the space game.")
    parser.add_argument("--assets", default=ASSETS_DIR)
    parser.add_argument("--width", type=int, default=SCREEN_SIZE[0])
    parser.add_argument("--height", type=int, default=SCREEN_SIZE[1])
    parser.add_argument("--frames", type=int, default=None)
    args = parser.parse_args(argv)
    Game(
        assets_dir=args.assets,
        size=(args.width, args.height),
        max_frames=args.frames,
    ).run()
    return 0