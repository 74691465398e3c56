"""Pytest configuration for blockflow."""

import logging
from dataclasses import dataclass, field

import pytest

from blockflow.composition import BlockComposer
from blockflow.render.sink import RecordingSink
from blockflow.utils.dimensions import Frame


@dataclass(frozen=True)
class FixedMetrics:
    """
    Deterministic glyph metrics for layout tests.

    At size 10 every character advances 10pt unless overridden; widths scale
    linearly with the size. Ascent is 0.8 and line height 1.0 of the size.
    """

    name: str = "Fixed"
    advance: float = 10.0
    overrides: tuple[tuple[str, float], ...] = field(default_factory=tuple)

    def ascent(self, size: float) -> float:
        return 0.8 * size

    def line_height(self, size: float) -> float:
        return float(size)

    def width(self, text: str, size: float) -> float:
        widths = dict(self.overrides)
        return sum(widths.get(c, self.advance) for c in text) * size / 10


@dataclass(frozen=True)
class Box:
    """Graphic stand-in with a natural size."""

    name: str
    size: tuple[float, float]


@pytest.fixture(autouse=True)
def configure_logging():
    """Keep test output quiet unless something goes wrong."""
    root_logger = logging.getLogger()
    previous_level = root_logger.level
    root_logger.setLevel(logging.WARNING)
    yield
    root_logger.setLevel(previous_level)


@pytest.fixture
def metrics():
    return FixedMetrics()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def composer(sink, metrics):
    """Composer over fixed metrics at size 10 (10pt per character, 10pt rows)."""
    return BlockComposer(sink, metrics, 10)


@pytest.fixture
def make_frame():
    def _make(width: float = 100.0, height: float = 200.0, x: float = 0.0, y: float = 0.0) -> Frame:
        return Frame(x, y, width, height)
    return _make
