"""Output sinks: where positioned runs end up."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from blockflow.types import RGBColor, RunKind

if TYPE_CHECKING:
    from blockflow.fonts import GlyphMetrics


@dataclass(frozen=True)
class TextStyle:
    """Font, size and color a text run is drawn with."""

    metrics: GlyphMetrics
    size: float
    color: RGBColor = (0.0, 0.0, 0.0)

    @property
    def font_name(self) -> str:
        return self.metrics.name


class OutputSink(Protocol):
    """
    Consumer of positioned content.

    Coordinates are in layout space (y-down). Translations accumulate until
    the scope they were applied in is closed.
    """

    def open_scope(self) -> int:
        """Save the current transform state. Returns a handle for close_scope()."""
        ...

    def close_scope(self, handle: int) -> None:
        """Restore the state saved by the matching open_scope()."""
        ...

    def translate(self, dx: float, dy: float) -> None:
        """Shift subsequent content by (dx, dy)."""
        ...

    def set_word_space(self, value: float) -> None:
        """Extra width added to each space glyph of subsequent text."""
        ...

    def place_text(self, text: str, origin: tuple[float, float], style: TextStyle) -> None:
        """Draw text with its baseline starting at origin."""
        ...

    def place_graphic(self, graphic: Any, position: tuple[float, float], size: tuple[float, float]) -> None:
        """Draw a graphic with its top-left corner at position."""
        ...


@dataclass(frozen=True)
class Placement:
    """A run as it landed on the page, in absolute layout coordinates."""

    kind: RunKind
    content: Any
    x: float  # left edge
    y: float  # baseline for text, top edge for graphics
    width: float = 0.0
    height: float = 0.0
    word_space: float = 0.0
    style: TextStyle | None = None


class RecordingSink:
    """Sink that records absolute placements instead of drawing them."""

    def __init__(self) -> None:
        self.placements: list[Placement] = []
        self._origin = (0.0, 0.0)
        self._word_space = 0.0
        self._stack: list[tuple[tuple[float, float], float]] = []

    def open_scope(self) -> int:
        self._stack.append((self._origin, self._word_space))
        return len(self._stack)

    def close_scope(self, handle: int) -> None:
        if handle != len(self._stack):
            raise RuntimeError(f"Scope {handle} closed out of order (depth {len(self._stack)})")
        self._origin, self._word_space = self._stack.pop()

    def translate(self, dx: float, dy: float) -> None:
        x, y = self._origin
        self._origin = (x + dx, y + dy)

    def set_word_space(self, value: float) -> None:
        self._word_space = value

    def place_text(self, text: str, origin: tuple[float, float], style: TextStyle) -> None:
        x, y = self._absolute(origin)
        self.placements.append(Placement(
            kind="text",
            content=text,
            x=x,
            y=y,
            width=style.metrics.width(text, style.size) + text.count(" ") * self._word_space,
            height=style.metrics.line_height(style.size),
            word_space=self._word_space,
            style=style,
        ))

    def place_graphic(self, graphic: Any, position: tuple[float, float], size: tuple[float, float]) -> None:
        x, y = self._absolute(position)
        self.placements.append(Placement(
            kind="graphic",
            content=graphic,
            x=x,
            y=y,
            width=size[0],
            height=size[1],
        ))

    @property
    def texts(self) -> list[str]:
        """Text contents in placement order."""
        return [p.content for p in self.placements if p.kind == "text"]

    def _absolute(self, point: tuple[float, float]) -> tuple[float, float]:
        return (self._origin[0] + point[0], self._origin[1] + point[1])
