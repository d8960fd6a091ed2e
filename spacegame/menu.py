"""Menu screens, their buttons and the transitions between them."""

from __future__ import annotations

from dataclasses import dataclass, field

from spacegame.state import (
    NORMAL_BUTTON,
    DisplayQuality,
    GameState,
    Interaction,
    MenuButtonAction,
    MenuState,
    Settings,
    button_color,
)

SCREEN_SIZE = (1280, 720)
TITLE = "Bevy Game Menu UI"
TITLE_FONT_SIZE = 67.0
TITLE_MARGIN = 50
BUTTON_FONT_SIZE = 33.0
BUTTON_MARGIN = 20
BUTTON_HEIGHT = 65
MAIN_BUTTON_WIDTH = 300
SETTINGS_BUTTON_WIDTH = 200
QUALITY_BUTTON_WIDTH = 150
VOLUME_BUTTON_WIDTH = 30
ICON_WIDTH = 30
ICON_LEFT = 10
ICON_DIR = "textures/Game Icons"
VOLUME_LEVELS = range(10)
TEXT_WIDTH_RATIO = 0.6

Rect = tuple[int, int, int, int]
Setting = DisplayQuality | int


def _text_width(text: str, font_size: float) -> int:
    return round(len(text) * font_size * TEXT_WIDTH_RATIO)


@dataclass
class Button:
    """A clickable menu button."""

    label: str
    width: int
    height: int = BUTTON_HEIGHT
    action: MenuButtonAction | None = None
    setting: Setting | None = None
    icon: str | None = None
    selected: bool = False
    interaction: Interaction = Interaction.NONE
    color: tuple[int, int, int] = NORMAL_BUTTON
    rect: Rect | None = None


@dataclass
class Screen:
    """One menu screen: an optional title, an optional row of options and buttons."""

    state: MenuState
    buttons: list[Button]
    title: str | None = None
    option_label: str | None = None
    options: list[Button] = field(default_factory=list)
    panel: Rect | None = None
    title_rect: Rect | None = None
    label_rect: Rect | None = None

    @property
    def controls(self) -> list[Button]:
        """All buttons, option buttons first."""
        return [*self.options, *self.buttons]

    @property
    def selected(self) -> Button | None:
        """The option button marked as the current setting, if any."""
        return next((button for button in self.options if button.selected), None)

    def _layout(self, size: tuple[int, int]) -> None:
        screen_w, screen_h = size
        m = BUTTON_MARGIN
        title_w = title_h = 0
        if self.title is not None:
            title_w = _text_width(self.title, TITLE_FONT_SIZE) + 2 * TITLE_MARGIN
            title_h = round(TITLE_FONT_SIZE) + 2 * TITLE_MARGIN
        label_w = row_w = row_h = 0
        if self.options:
            label_w = _text_width(self.option_label or "", BUTTON_FONT_SIZE)
            row_w = label_w + sum(b.width + 2 * m for b in self.options)
            row_h = max(b.height + 2 * m for b in self.options)
        widths = [title_w, row_w, *(b.width + 2 * m for b in self.buttons)]
        content_w = max(widths)
        content_h = title_h + row_h + sum(b.height + 2 * m for b in self.buttons)
        left = (screen_w - content_w) // 2
        top = (screen_h - content_h) // 2
        self.panel = (left, top, content_w, content_h)

        y = top
        if self.title is not None:
            x = left + (content_w - title_w) // 2 + TITLE_MARGIN
            self.title_rect = (x, y + TITLE_MARGIN, title_w - 2 * TITLE_MARGIN,
                               round(TITLE_FONT_SIZE))
            y += title_h
        if self.options:
            x = left + (content_w - row_w) // 2
            self.label_rect = (x, y + (row_h - round(BUTTON_FONT_SIZE)) // 2,
                               label_w, round(BUTTON_FONT_SIZE))
            x += label_w
            for button in self.options:
                button.rect = (x + m, y + (row_h - button.height) // 2,
                               button.width, button.height)
                x += button.width + 2 * m
            y += row_h
        for button in self.buttons:
            x = left + (content_w - (button.width + 2 * m)) // 2 + m
            button.rect = (x, y + m, button.width, button.height)
            y += button.height + 2 * m


def main_menu_screen() -> Screen:
    """The main menu: new game, settings and quit."""
    entries = [
        ("New Game", MenuButtonAction.PLAY, "right.png"),
        ("Settings", MenuButtonAction.SETTINGS, "wrench.png"),
        ("Quit", MenuButtonAction.QUIT, "exitRight.png"),
    ]
    buttons = [
        Button(label, MAIN_BUTTON_WIDTH, action=action, icon=f"{ICON_DIR}/{icon}")
        for label, action, icon in entries
    ]
    return Screen(MenuState.MAIN, buttons, title=TITLE)


def settings_menu_screen() -> Screen:
    """The settings menu with its two sub-menus and a back button."""
    entries = [
        (MenuButtonAction.SETTINGS_DISPLAY, "Display"),
        (MenuButtonAction.SETTINGS_SOUND, "Sound"),
        (MenuButtonAction.BACK_TO_MAIN_MENU, "Back"),
    ]
    buttons = [Button(text, SETTINGS_BUTTON_WIDTH, action=action) for action, text in entries]
    return Screen(MenuState.SETTINGS, buttons)


def _back_to_settings() -> Button:
    return Button("Back", SETTINGS_BUTTON_WIDTH, action=MenuButtonAction.BACK_TO_SETTINGS)


def display_settings_screen(settings: Settings) -> Screen:
    """One button per display quality, the current one selected."""
    options = [
        Button(
            quality.label,
            QUALITY_BUTTON_WIDTH,
            setting=quality,
            selected=settings.display_quality is quality,
        )
        for quality in DisplayQuality
    ]
    return Screen(
        MenuState.SETTINGS_DISPLAY,
        [_back_to_settings()],
        option_label="Display Quality",
        options=options,
    )


def sound_settings_screen(settings: Settings) -> Screen:
    """One button per volume level, the current one selected."""
    options = [
        Button("", VOLUME_BUTTON_WIDTH, setting=level, selected=settings.volume == level)
        for level in VOLUME_LEVELS
    ]
    return Screen(
        MenuState.SETTINGS_SOUND,
        [_back_to_settings()],
        option_label="Volume",
        options=options,
    )


def screen_for(menu_state: MenuState, settings: Settings) -> Screen | None:
    """Build the screen shown in ``menu_state``; ``None`` when the menu is off."""
    if menu_state is MenuState.MAIN:
        return main_menu_screen()
    if menu_state is MenuState.SETTINGS:
        return settings_menu_screen()
    if menu_state is MenuState.SETTINGS_DISPLAY:
        return display_settings_screen(settings)
    if menu_state is MenuState.SETTINGS_SOUND:
        return sound_settings_screen(settings)
    return None


@dataclass
class Menu:
    """The menu's current screen, and the states and settings it drives."""

    settings: Settings = field(default_factory=Settings)
    size: tuple[int, int] = SCREEN_SIZE
    game_state: GameState = field(default_factory=GameState.default)
    menu_state: MenuState = field(default_factory=MenuState.default)
    screen: Screen | None = None
    quit_requested: bool = False

    def enter(self) -> None:
        """Show the main menu."""
        self._switch(MenuState.MAIN)

    def _switch(self, state: MenuState) -> None:
        self.menu_state = state
        self.screen = screen_for(state, self.settings)
        if self.screen is not None:
            self.screen._layout(self.size)

    def button_at(self, pos: tuple[float, float]) -> int | None:
        """Index of the button under ``pos``, or ``None``."""
        if self.screen is None:
            return None
        px, py = pos
        for index, button in enumerate(self.screen.controls):
            if button.rect is None:
                continue
            x, y, w, h = button.rect
            if x <= px < x + w and y <= py < y + h:
                return index
        return None

    def set_interaction(
        self, index: int, interaction: Interaction
    ) -> MenuButtonAction | None:
        """Change a button's interaction and react to it.

        Returns the action triggered by pressing the button, if any.
        """
        if self.screen is None:
            raise RuntimeError("no menu screen is shown")
        controls = self.screen.controls
        if not 0 <= index < len(controls):
            raise IndexError(f"no button {index} on this screen")
        button = controls[index]
        if button.interaction is interaction:
            return None
        button.interaction = interaction
        pressed = interaction is Interaction.PRESSED
        if pressed and button.setting is not None:
            self._choose(button)
        button.color = button_color(interaction, button.selected)
        if pressed and button.action is not None and self.game_state is GameState.MENU:
            self._perform(button.action)
            return button.action
        return None

    def _choose(self, button: Button) -> None:
        previous = self.screen.selected
        if previous is None:
            return
        setting = button.setting
        if isinstance(setting, DisplayQuality):
            if self.settings.display_quality is setting:
                return
            self.settings.display_quality = setting
        else:
            if self.settings.volume == setting:
                return
            self.settings.volume = setting
        previous.color = NORMAL_BUTTON
        previous.selected = False
        button.selected = True

    def _perform(self, action: MenuButtonAction) -> None:
        if action is MenuButtonAction.QUIT:
            self.quit_requested = True
        elif action is MenuButtonAction.PLAY:
            self.game_state = GameState.LOADING
            self._switch(MenuState.DISABLED)
        elif action is MenuButtonAction.SETTINGS:
            self._switch(MenuState.SETTINGS)
        elif action is MenuButtonAction.SETTINGS_DISPLAY:
            self._switch(MenuState.SETTINGS_DISPLAY)
        elif action is MenuButtonAction.SETTINGS_SOUND:
            self._switch(MenuState.SETTINGS_SOUND)
        elif action is MenuButtonAction.BACK_TO_MAIN_MENU:
            self._switch(MenuState.MAIN)
        elif action is MenuButtonAction.BACK_TO_SETTINGS:
            self._switch(MenuState.SETTINGS)