"""
Plain-text source documents and how they flow into a composer.

Source format:

    Paragraphs are separated by blank lines. Lines of one paragraph
    are joined with single spaces; E = mc^{2} and H_{2}O mark
    superscript and subscript spans.

    ::align justify
    ::indent 18
    ::space 12
    ::image figures/plot.png 240

Directive lines start with "::". ::align and ::indent apply to every
following paragraph, ::space to the next item only.
"""

import logging
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Union

from blockflow.composition.composer import BlockComposer
from blockflow.render.image import Graphic
from blockflow.types import X_ALIGNMENTS, ScriptMode, XAlignment

logger = logging.getLogger(__name__)

DIRECTIVE_PREFIX = "::"

# ^{...} superscript, _{...} subscript
_SCRIPT_SPAN = re.compile(r"([\^_])\{([^}]*)\}")

_SCRIPT_MODES: dict[str, ScriptMode] = {"^": "super", "_": "sub"}


@dataclass
class Span:
    """Text sharing one line alignment. None means the composer's default."""

    text: str
    line_alignment: ScriptMode | None = None


@dataclass
class Paragraph:
    """
    A run of spans laid out as one paragraph.

    Attributes:
        spans: Text spans in reading order.
        x_alignment: Horizontal alignment, None keeps the block's.
        indent: First-row indentation in points.
        space_before: Extra vertical space above the paragraph in points.
    """

    spans: list[Span] = field(default_factory=list)
    x_alignment: XAlignment | None = None
    indent: float = 0.0
    space_before: float = 0.0

    @property
    def text(self) -> str:
        return "".join(span.text for span in self.spans)


@dataclass
class Figure:
    """A graphic shown on a row of its own."""

    graphic: Graphic
    width: float | None = None
    x_alignment: XAlignment | None = None
    space_before: float = 0.0

    @property
    def size(self) -> tuple[float, float]:
        """Display (width, height) in points."""
        if self.width is None:
            return self.graphic.size
        return self.graphic.scaled_to_width(self.width)


Item = Union[Paragraph, Figure]


def parse_spans(text: str) -> list[Span]:
    """
    Split paragraph text into baseline, superscript and subscript spans.

    Args:
        text: Paragraph text.

    Returns:
        Non-empty spans in order.
    """
    spans: list[Span] = []
    position = 0
    for match in _SCRIPT_SPAN.finditer(text):
        if match.start() > position:
            spans.append(Span(text[position:match.start()]))
        if match.group(2):
            spans.append(Span(match.group(2), _SCRIPT_MODES[match.group(1)]))
        position = match.end()
    if position < len(text):
        spans.append(Span(text[position:]))
    return spans


def _parse_number(value: str, directive: str, line_number: int) -> float:
    try:
        return float(value)
    except ValueError as e:
        raise ValueError(f"Line {line_number}: {directive} expects a number, got {value!r}") from e


def parse_document(source: str, base_dir: Path | None = None) -> list[Item]:
    """
    Parse a source document into paragraphs and figures.

    Args:
        source: Document text.
        base_dir: Directory image paths are relative to. Defaults to the
                  current directory.

    Returns:
        Items in document order.

    Raises:
        ValueError: If a directive is malformed.
        FileNotFoundError: If an image doesn't exist.
    """
    base_dir = base_dir or Path.cwd()
    items: list[Item] = []
    lines: list[str] = []
    x_alignment: XAlignment | None = None
    indent = 0.0
    space_before = 0.0

    def flush() -> None:
        nonlocal space_before
        if not lines:
            return
        text = " ".join(lines)
        lines.clear()
        items.append(Paragraph(parse_spans(text), x_alignment, indent, space_before))
        space_before = 0.0

    for line_number, raw_line in enumerate(source.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            flush()
            continue
        if not line.startswith(DIRECTIVE_PREFIX):
            lines.append(line)
            continue

        # A directive ends the paragraph in progress
        flush()
        name, _, argument = line[len(DIRECTIVE_PREFIX):].partition(" ")
        args = argument.split()
        if name == "align":
            if len(args) != 1 or args[0] not in X_ALIGNMENTS:
                raise ValueError(
                    f"Line {line_number}: ::align expects one of {', '.join(X_ALIGNMENTS)}"
                )
            x_alignment = args[0]  # type: ignore[assignment]
        elif name == "indent":
            if len(args) != 1:
                raise ValueError(f"Line {line_number}: ::indent expects one value")
            indent = _parse_number(args[0], "::indent", line_number)
        elif name == "space":
            if len(args) != 1:
                raise ValueError(f"Line {line_number}: ::space expects one value")
            space_before += _parse_number(args[0], "::space", line_number)
        elif name == "image":
            if not args or len(args) > 2:
                raise ValueError(f"Line {line_number}: ::image expects PATH [WIDTH]")
            path = Path(args[0])
            if not path.is_absolute():
                path = base_dir / path
            width = _parse_number(args[1], "::image", line_number) if len(args) == 2 else None
            items.append(Figure(Graphic.from_path(path), width, x_alignment, space_before))
            space_before = 0.0
        else:
            raise ValueError(f"Line {line_number}: unknown directive {DIRECTIVE_PREFIX}{name}")
    flush()

    logger.info(f"Parsed {len(items)} item(s)")
    return items


def load_document(path: Path) -> list[Item]:
    """
    Load and parse a source document file.

    Args:
        path: Document path. Image paths inside are relative to its directory.

    Returns:
        Items in document order.

    Raises:
        FileNotFoundError: If the file doesn't exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Document not found: {path}")
    return parse_document(path.read_text(encoding="utf-8"), base_dir=path.parent)


def _start_item(composer: BlockComposer, item: Item, first: bool) -> None:
    """Open the paragraph an item starts."""
    indent = item.indent if isinstance(item, Paragraph) else 0.0
    if first:
        # Nothing to separate from at the top of a block
        if indent or item.x_alignment is not None:
            composer.show_break((indent, 0.0), item.x_alignment)
        return
    composer.show_break((indent, item.space_before), item.x_alignment)


def compose(items: list[Item], composer: BlockComposer) -> list[Item]:
    """
    Feed items into an open block until it is full.

    The first item continues the block's current row, every later one starts
    a new paragraph.

    Args:
        items: Items to show.
        composer: Composer with a block in progress.

    Returns:
        Items left over, starting with the unfitted remainder of a split
        paragraph. Empty when everything fit.
    """
    for index, item in enumerate(items):
        _start_item(composer, item, first=index == 0)

        if isinstance(item, Figure):
            if not composer.show_graphic(item.graphic, item.size):
                return items[index:]
            continue

        for span_index, span in enumerate(item.spans):
            reached = composer.show_text(span.text, span.line_alignment)
            if reached < len(span.text):
                rest = [Span(span.text[reached:], span.line_alignment)] + item.spans[span_index + 1:]
                remainder = replace(item, spans=rest, indent=0.0, space_before=0.0)
                logger.debug(f"Paragraph split, {len(remainder.text)} character(s) left over")
                return [remainder] + items[index + 1:]

    return []
