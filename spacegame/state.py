"""Game-wide states, settings and menu button colouring."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


def _srgb(r: float, g: float, b: float) -> tuple[int, int, int]:
    return round(r * 255), round(g * 255), round(b * 255)


TEXT_COLOR = _srgb(0.9, 0.9, 0.9)
NORMAL_BUTTON = _srgb(0.15, 0.15, 0.15)
HOVERED_BUTTON = _srgb(0.25, 0.25, 0.25)
HOVERED_PRESSED_BUTTON = _srgb(0.25, 0.65, 0.25)
PRESSED_BUTTON = _srgb(0.35, 0.75, 0.35)
CRIMSON = (220, 20, 60)

DEFAULT_VOLUME = 7


class GameState(Enum):
    """Top-level state of the application."""

    MENU = auto()
    LOADING = auto()
    GAME = auto()

    @classmethod
    def default(cls) -> GameState:
        return cls.MENU


class MenuState(Enum):
    """Which menu screen is shown."""

    MAIN = auto()
    SETTINGS = auto()
    SETTINGS_DISPLAY = auto()
    SETTINGS_SOUND = auto()
    DISABLED = auto()

    @classmethod
    def default(cls) -> MenuState:
        return cls.DISABLED


class DisplayQuality(Enum):
    """Display quality setting."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def label(self) -> str:
        return self.value


class Interaction(Enum):
    """Pointer interaction with a button."""

    PRESSED = auto()
    HOVERED = auto()
    NONE = auto()


class MenuButtonAction(Enum):
    """Actions that menu buttons trigger."""

    PLAY = auto()
    SETTINGS = auto()
    SETTINGS_DISPLAY = auto()
    SETTINGS_SOUND = auto()
    BACK_TO_MAIN_MENU = auto()
    BACK_TO_SETTINGS = auto()
    QUIT = auto()


@dataclass
class Settings:
    """User settings changed through the menu."""

    display_quality: DisplayQuality = DisplayQuality.MEDIUM
    volume: int = DEFAULT_VOLUME

    def __post_init__(self) -> None:
        if not isinstance(self.display_quality, DisplayQuality):
            raise TypeError("display_quality must be a DisplayQuality")
        if isinstance(self.volume, bool) or not isinstance(self.volume, int):
            raise TypeError("volume must be an integer")
        if self.volume < 0:
            raise ValueError("volume must not be negative")


def button_color(interaction: Interaction, selected: bool) -> tuple[int, int, int]:
    """Return the background colour of a button for its interaction state."""
    if interaction is Interaction.PRESSED:
        return PRESSED_BUTTON
    if interaction is Interaction.HOVERED:
        return HOVERED_PRESSED_BUTTON if selected else HOVERED_BUTTON
    return PRESSED_BUTTON if selected else NORMAL_BUTTON