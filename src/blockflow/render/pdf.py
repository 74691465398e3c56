"""PDF generation using ReportLab."""

import logging
from pathlib import Path
from typing import Any

from reportlab.pdfgen import canvas

from blockflow.composition.composer import BlockComposer
from blockflow.config import Theme
from blockflow.document import Item, Paragraph, compose, load_document
from blockflow.fonts import FontMetrics
from blockflow.render.image import Graphic
from blockflow.render.sink import TextStyle

logger = logging.getLogger(__name__)


class CanvasSink:
    """
    Output sink drawing onto a ReportLab canvas.

    Layout space is y-down from the top of the page; PDF space is y-up from
    the bottom. Translations are flipped as they are applied and points are
    mirrored against the page height when drawn.
    """

    def __init__(self, c: canvas.Canvas, page_height: float) -> None:
        """
        Initialize canvas sink.

        Args:
            c: ReportLab canvas.
            page_height: Page height in points.
        """
        self.canvas = c
        self.page_height = page_height
        self._word_space = 0.0
        self._stack: list[float] = []

    def open_scope(self) -> int:
        self.canvas.saveState()
        self._stack.append(self._word_space)
        return len(self._stack)

    def close_scope(self, handle: int) -> None:
        if handle != len(self._stack):
            raise RuntimeError(f"Scope {handle} closed out of order (depth {len(self._stack)})")
        self._word_space = self._stack.pop()
        self.canvas.restoreState()

    def translate(self, dx: float, dy: float) -> None:
        self.canvas.translate(dx, -dy)

    def set_word_space(self, value: float) -> None:
        self._word_space = value

    def place_text(self, text: str, origin: tuple[float, float], style: TextStyle) -> None:
        x, y = origin
        text_obj = self.canvas.beginText(x, self.page_height - y)
        text_obj.setFont(style.font_name, style.size)
        text_obj.setFillColorRGB(*style.color)
        text_obj.setWordSpace(self._word_space)
        text_obj.textOut(text)
        self.canvas.drawText(text_obj)

    def place_graphic(self, graphic: Any, position: tuple[float, float], size: tuple[float, float]) -> None:
        if not isinstance(graphic, Graphic):
            raise TypeError(f"Cannot draw {type(graphic).__name__} on a PDF canvas")
        x, y = position
        width, height = size
        self.canvas.drawImage(
            graphic.image_reader(),
            x, self.page_height - y - height,
            width=width,
            height=height,
            mask="auto",
        )


class PDFRenderer:
    """Renders documents to PDF using ReportLab, one block per page."""

    def __init__(self, theme: Theme | None = None) -> None:
        """
        Initialize PDF renderer.

        Args:
            theme: Typography and page settings. Defaults to Theme().
        """
        self.theme = theme or Theme()
        self.page_width, self.page_height = self.theme.page_dimensions

    def render(self, items: list[Item], output_path: Path) -> int:
        """
        Render document items to a PDF file.

        Content that does not fit a page continues on the next one. An item
        that cannot be placed even on an empty page is skipped.

        Args:
            items: Parsed document items.
            output_path: Path to output PDF file.

        Returns:
            Number of pages written.
        """
        theme = self.theme
        c = canvas.Canvas(str(output_path), pagesize=(self.page_width, self.page_height))
        composer = BlockComposer(CanvasSink(c, self.page_height), FontMetrics(theme.font_name), theme.font_size)
        theme.apply(composer)
        frame = theme.content_frame

        pending = list(items)
        pages = 0
        while pending:
            composer.begin(frame, theme.x_align, theme.y_align)
            remaining = compose(pending, composer)
            block = composer.end()

            if not block.runs:
                if remaining:
                    self._skip(remaining.pop(0), frame.height)
                pending = remaining
                continue

            pages += 1
            logger.info(f"Page {pages}: {len(block.rows)} row(s), {len(pending) - len(remaining)} item(s) completed")
            pending = remaining
            if pending:
                c.showPage()

        c.save()
        return max(pages, 1)

    def _skip(self, item: Item, frame_height: float) -> None:
        if isinstance(item, Paragraph):
            if item.text.strip():
                logger.warning(
                    f"Skipping text that does not fit an empty {frame_height:.1f}pt frame: "
                    f"{item.text[:40]!r}"
                )
        else:
            logger.warning(
                f"Skipping {item.graphic!r}: {item.size[1]:.1f}pt is taller than the "
                f"{frame_height:.1f}pt frame"
            )


def render_document_to_pdf(source: Path, output_path: Path, theme: Theme | None = None) -> int:
    """
    Lay out a source document and save it as a PDF.

    Args:
        source: Source document path.
        output_path: Path to output PDF file.
        theme: Typography and page settings.

    Returns:
        Number of pages written.
    """
    items = load_document(source)
    renderer = PDFRenderer(theme)
    pages = renderer.render(items, output_path)
    logger.info(f"Rendered {source} to {output_path} ({pages} page(s))")
    return pages
