"""In-game heads-up display: health, experience and time."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple


def _srgb(r: float, g: float, b: float) -> tuple[int, int, int]:
    return round(r * 255), round(g * 255), round(b * 255)


FONT_SIZE = 33.0
TEXT_COLOR = _srgb(0.5, 0.5, 1.0)
DYNAMIC_VALUE_COLOR = _srgb(0.5, 1.0, 0.5)
STATIC_VALUE_COLOR = _srgb(1.0, 0.5, 0.5)
PLAIN_COLOR = (255, 255, 255)

HEALTH_ROW = "health"
XP_ROW = "xp"
TIME_ROW = "time"

Span = tuple[str, tuple[int, int, int]]


class UiUpdate(NamedTuple):
    """New text for the span at ``index`` of an overlay row."""

    index: int
    text: str


@dataclass
class Health:
    current: int = 100
    max: int = 100

    def ui_updates(self) -> list[UiUpdate]:
        return [UiUpdate(1, f"{self.current:3}"), UiUpdate(3, str(self.max))]


@dataclass
class Experience:
    current: int = 0
    target: int = 10

    def ui_updates(self) -> list[UiUpdate]:
        return [UiUpdate(1, f"{self.current:3}"), UiUpdate(3, str(self.target))]


def _row(label: str, first: str, separator: str, second: str, first_color) -> list[Span]:
    return [
        (label, TEXT_COLOR),
        (first, first_color),
        (separator, PLAIN_COLOR),
        (second, STATIC_VALUE_COLOR),
    ]


def _initial_rows() -> dict[str, list[Span]]:
    return {
        HEALTH_ROW: _row("HP:  ", "100", " / ", "100", DYNAMIC_VALUE_COLOR),
        XP_ROW: _row("XP:  ", "  0", " / ", "10", DYNAMIC_VALUE_COLOR),
        TIME_ROW: _row("Time: ", "00", " : ", "00", STATIC_VALUE_COLOR),
    }


@dataclass
class Overlay:
    """Rows of coloured text spans shown over the game."""

    rows: dict[str, list[Span]] = field(default_factory=_initial_rows)

    def apply(self, row: str, updates: list[UiUpdate]) -> None:
        """Replace the text of spans in ``row``, keeping their colours."""
        spans = self.rows[row]
        for update in updates:
            if not 0 <= update.index < len(spans):
                raise IndexError(f"row {row!r} has no span {update.index}")
            _, color = spans[update.index]
            spans[update.index] = (update.text, color)

    def lines(self) -> list[str]:
        """Return the plain text of each row, top to bottom."""
        return ["".join(text for text, _ in spans) for spans in self.rows.values()]


@dataclass
class XpTimer:
    """Grants one experience point each time ``interval`` seconds pass."""

    interval: float = 1.0
    elapsed: float = 0.0

    def __post_init__(self) -> None:
        if self.interval <= 0:
            raise ValueError("interval must be positive")

    def tick(self, dt: float, experience: Experience) -> bool:
        """Advance by ``dt`` seconds; return whether experience was granted."""
        if dt < 0:
            raise ValueError("dt must not be negative")
        self.elapsed += dt
        if self.elapsed < self.interval:
            return False
        self.elapsed %= self.interval
        experience.current += 1
        return True