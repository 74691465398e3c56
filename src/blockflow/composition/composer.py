"""Block composer: flows text and graphics into aligned rows inside a frame."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Literal

from blockflow.composition.alignment import (
    LineAlignment,
    LineAlignmentLike,
    resolve_line_alignment,
    vertical_offset,
)
from blockflow.composition.fitter import LINE_BREAKS, TextFitter
from blockflow.composition.length import Length
from blockflow.composition.row import Block, Row, Run
from blockflow.render.sink import OutputSink, TextStyle
from blockflow.types import X_ALIGNMENTS, Y_ALIGNMENTS, RGBColor, XAlignment, YAlignment
from blockflow.utils.dimensions import Frame, compare

if TYPE_CHECKING:
    from blockflow.fonts import GlyphMetrics

logger = logging.getLogger(__name__)

ComposerState = Literal["idle", "open", "closed"]


def _check_x_alignment(value: str) -> XAlignment:
    if value not in X_ALIGNMENTS:
        raise ValueError(f"Unknown horizontal alignment {value!r}. Expected one of {', '.join(X_ALIGNMENTS)}.")
    return value  # type: ignore[return-value]


def _check_y_alignment(value: str) -> YAlignment:
    if value not in Y_ALIGNMENTS:
        raise ValueError(f"Unknown vertical alignment {value!r}. Expected one of {', '.join(Y_ALIGNMENTS)}.")
    return value  # type: ignore[return-value]


class BlockComposer:
    """
    Content block composer.

    Lays out text and graphics left-to-right, top-to-bottom inside a frame.
    Alignment happens at two levels: each row is aligned when it closes
    (horizontal alignment, justification, per-run line alignment), and the
    whole block is placed inside the frame when it ends. Nothing reaches the
    sink before end(): every run keeps its computed offsets and is emitted,
    in acceptance order, once the block translation is known.

    Usage:
        composer = BlockComposer(sink, FontMetrics("Helvetica"), 12)
        composer.begin(Frame(72, 72, 468, 648), "justify", "top")
        composer.show_text("Lorem ipsum dolor sit amet...")
        composer.show_break()
        composer.show_text("E = mc")
        composer.show_text("2", "super")
        block = composer.end()
    """

    def __init__(self, sink: OutputSink, font: GlyphMetrics, font_size: float = 12.0) -> None:
        """
        Initialize block composer.

        Args:
            sink: Receives the positioned content at end().
            font: Metrics of the initial font.
            font_size: Initial font size in points.
        """
        self.sink = sink
        self.font = font
        self.font_size = font_size
        self.color: RGBColor = (0.0, 0.0, 0.0)

        self.hyphenation = False
        self.hyphenation_character = "-"
        self.line_alignment: LineAlignmentLike = "baseline"
        self.line_space = Length.absolute(0.0)

        self._state: ComposerState = "idle"
        self._frame: Frame | None = None
        self._x_alignment: XAlignment = "left"
        self._y_alignment: YAlignment = "top"
        self._block: Block | None = None
        self._row: Row | None = None
        self._row_ended = True
        self._last_font_size = 0.0

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def frame(self) -> Frame | None:
        """Area where the block contents are placed."""
        return self._frame

    @property
    def block(self) -> Block | None:
        """Block being composed (or the last one ended)."""
        return self._block

    @property
    def bound_box(self) -> Frame | None:
        """Area occupied by the contents placed so far."""
        if self._block is None:
            return None
        return Frame(self._block.x, self._block.y, self._block.width, self._block.height)

    @property
    def x_alignment(self) -> XAlignment:
        """Horizontal alignment applied to the current paragraph."""
        return self._x_alignment

    @property
    def y_alignment(self) -> YAlignment:
        """Vertical alignment applied to the current block."""
        return self._y_alignment

    @property
    def state(self) -> ComposerState:
        """Lifecycle state: idle before begin(), open until end(), then closed."""
        return self._state

    @property
    def is_full(self) -> bool:
        """Whether the block stopped accepting content (vertical overflow)."""
        return self._state == "open" and self._row is None

    def set_font(self, font: GlyphMetrics, size: float | None = None) -> None:
        """
        Set the font used by subsequent show_text() calls.

        Args:
            font: Font metrics.
            size: Font size in points. Keeps the current size if None.
        """
        self.font = font
        if size is not None:
            self.font_size = size

    # ------------------------------------------------------------------
    # Block lifecycle
    # ------------------------------------------------------------------

    def begin(self, frame: Frame, x_alignment: XAlignment = "left", y_alignment: YAlignment = "top") -> None:
        """
        Begin a content block.

        Args:
            frame: Block boundaries.
            x_alignment: Horizontal alignment.
            y_alignment: Vertical alignment.

        Raises:
            ValueError: If an alignment is unknown.
        """
        self._x_alignment = _check_x_alignment(x_alignment)
        self._y_alignment = _check_y_alignment(y_alignment)
        self._frame = frame
        self._last_font_size = 0.0
        self._block = Block(frame=frame, x=frame.x, y=frame.y, width=frame.width, height=0.0)
        self._state = "open"
        logger.debug(f"Block begun in {frame} ({x_alignment}/{y_alignment})")
        self._begin_row()

    def end(self) -> Block:
        """
        End the content block and emit it to the sink.

        Returns:
            The finished block.

        Raises:
            RuntimeError: If no block is open.
        """
        block = self._require_open()
        self._end_row(broken=True)
        self._place_block()
        self._emit(block)
        self._state = "closed"
        logger.debug(
            f"Block ended: {len(block.rows)} row(s), height {block.height:.2f}pt, "
            f"y offset {block.y_offset:.2f}pt"
        )
        return block

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def show_break(
        self,
        offset: tuple[float, float] | None = None,
        x_alignment: XAlignment | None = None,
    ) -> None:
        """
        End the current paragraph.

        Args:
            offset: (dx, dy) location of the next paragraph relative to its
                    natural position: dx indents its first row, dy adds
                    vertical space.
            x_alignment: Horizontal alignment of the next paragraph.
        """
        self._require_open()
        if x_alignment is not None:
            x_alignment = _check_x_alignment(x_alignment)
        if self._row is None:
            # Block is full
            return

        self._end_row(broken=True)
        self._begin_row()
        if offset is not None:
            dx, dy = offset
            self._row.y += dy
            self._row.width = dx
        if x_alignment is not None:
            self._x_alignment = x_alignment

    def show_text(self, text: str, line_alignment: LineAlignmentLike | None = None) -> int:
        """
        Show text.

        Args:
            text: Text to show.
            line_alignment: Named mode, "super"/"sub", or a Length for an
                            arbitrary baseline shift. Defaults to
                            self.line_alignment.

        Returns:
            Index reached in text: less than len(text) if the block ran out
            of room.
        """
        self._require_open()
        if self._row is None or not text:
            return 0

        font, size = self.font, self.font_size
        line_height = font.line_height(size)
        ascent = font.ascent(size)
        alignment = self._resolve_line_alignment(line_alignment)
        style = TextStyle(font, size, self.color)
        fitter = TextFitter(
            text,
            lambda s: font.width(s, size),
            hyphenation=self.hyphenation,
            hyphenation_character=self.hyphenation_character,
        )

        text_length = len(text)
        index = 0
        while True:
            row = self._row
            if row.width == 0:
                # Skip leading whitespace of a fresh row, up to a line break
                while index < text_length and text[index].isspace() and text[index] not in LINE_BREAKS:
                    index += 1
                if index == text_length:
                    break

            if compare(row.y + line_height, self._frame.height) > 0:
                logger.debug(f"Text overflows the frame at index {index}")
                self._close_full_block()
                break

            fitted = fitter.fit(index, self._frame.width - row.width, row.space_count == 0)
            stop_index = fitter.end_index
            if not fitted and not row.runs:
                fitted = fitter.force_fit(index)
            if fitted:
                chunk = fitter.fitted_text
                self._add_run(Run(
                    kind="text",
                    content=chunk,
                    x=row.width,
                    width=fitter.fitted_width,
                    height=line_height,
                    baseline=ascent,
                    space_count=chunk.count(" "),
                    alignment=alignment,
                    style=style,
                ))
                index = fitter.end_index
            elif stop_index > index:
                # Only whitespace before a line break: skip it
                index = stop_index

            # Trailing text decides how the row goes on
            while index < text_length and text[index] == "\r":
                index += 1
            if index == text_length:
                break
            if text[index] == "\n":
                index += 1
                self.show_break()
            else:
                self._end_row(broken=False)
                self._begin_row()

        if alignment == "baseline":
            self._last_font_size = size
        return index

    def show_graphic(
        self,
        graphic: Any,
        size: tuple[float, float] | None = None,
        line_alignment: LineAlignmentLike | None = None,
    ) -> bool:
        """
        Show a fixed-size graphic.

        Args:
            graphic: Object handed to the sink (e.g. a Graphic image).
            size: (width, height) in points. Defaults to graphic.size.
            line_alignment: Line alignment. Defaults to self.line_alignment.

        Returns:
            Whether the graphic was placed.
        """
        self._require_open()
        if self._row is None or graphic is None:
            return False

        width, height = size if size is not None else graphic.size
        alignment = self._resolve_line_alignment(line_alignment)

        while True:
            row = self._row
            if compare(row.y + height, self._frame.height) > 0:
                logger.debug(f"Graphic {graphic!r} overflows the frame")
                self._close_full_block()
                return False
            if compare(row.width + width, self._frame.width) <= 0 or not row.runs:
                self._add_run(Run(
                    kind="graphic",
                    content=graphic,
                    x=row.width,
                    width=width,
                    height=height,
                    baseline=height,
                    space_count=0,
                    alignment=alignment,
                ))
                return True
            # Not enough room in the current row
            self._end_row(broken=False)
            self._begin_row()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_open(self) -> Block:
        if self._state != "open":
            raise RuntimeError(f"No block in progress (composer is {self._state}); call begin() first")
        return self._block

    def _resolve_line_alignment(self, line_alignment: LineAlignmentLike | None) -> LineAlignment:
        if line_alignment is None:
            line_alignment = self.line_alignment
        if self._last_font_size == 0:
            self._last_font_size = self.font_size
        return resolve_line_alignment(line_alignment, self._last_font_size)

    def _add_run(self, run: Run) -> None:
        self._row.add_run(run)

    def _close_full_block(self) -> None:
        """Stop accepting content: close the last row, dropping it if empty."""
        if self._row.runs:
            self._end_row(broken=False)
        else:
            self._row_ended = True
            self._row = None

    def _begin_row(self) -> None:
        """Begin a content row below the ones already closed."""
        self._row_ended = False
        row_y = self._block.height
        if row_y > 0:
            row_y += self.line_space.resolve(self.font.line_height(self.font_size))
        self._row = Row(y=row_y)

    def _end_row(self, broken: bool) -> None:
        """
        End the current row.

        Args:
            broken: Whether this is the end of a paragraph.
        """
        if self._row_ended:
            return
        self._row_ended = True

        row = self._row
        runs = row.runs
        frame_width = self._frame.width
        x_offsets = [0.0] * len(runs)
        word_space = 0.0
        row_x_offset = 0.0

        if self._x_alignment == "right":
            row_x_offset = frame_width - row.width
        elif self._x_alignment == "center":
            row_x_offset = (frame_width - row.width) / 2
        elif self._x_alignment == "justify" and row.space_count > 0 and not broken:
            # Spread the slack over the spaces; each run is pushed right by
            # the extra space of all spaces before it
            word_space = (frame_width - row.width) / row.space_count
            for index in range(1, len(runs)):
                x_offsets[index] = x_offsets[index - 1] + runs[index - 1].space_count * word_space
        # Justified rows without spaces, or ending a paragraph, stay left-aligned

        for run, x_offset in zip(runs, x_offsets):
            run.x_offset = x_offset + row_x_offset
            run.y_offset = vertical_offset(run.alignment, row.height, row.baseline, run.height, run.baseline)
        row.word_space = word_space

        block = self._block
        block.rows.append(row)
        block.height = row.y + row.height
        self._place_block()
        logger.debug(
            f"Row {len(block.rows) - 1} closed: {len(runs)} run(s), width {row.width:.2f}pt, "
            f"height {row.height:.2f}pt, word space {word_space:.3f}pt, broken={broken}"
        )
        self._row = None

    def _place_block(self) -> None:
        """Update the block's vertical location inside the frame."""
        block, frame = self._block, self._frame
        if self._y_alignment == "bottom":
            y_offset = frame.height - block.height
        elif self._y_alignment == "middle":
            y_offset = (frame.height - block.height) / 2
        else:
            y_offset = 0.0
        block.y = frame.y + y_offset

    def _emit(self, block: Block) -> None:
        """Hand the block's runs to the sink in acceptance order."""
        sink = self.sink
        block_scope = sink.open_scope()
        sink.translate(block.x, block.y)
        for row in block.rows:
            for run in row.runs:
                run_scope = sink.open_scope()
                # Layout space is y-down, run offsets are y-up
                sink.translate(run.x_offset, -run.y_offset)
                if run.kind == "text":
                    sink.set_word_space(row.word_space)
                    sink.place_text(run.content, (run.x, row.y + run.baseline), run.style)
                else:
                    sink.place_graphic(run.content, (run.x, row.y), (run.width, run.height))
                sink.close_scope(run_scope)
        sink.close_scope(block_scope)
