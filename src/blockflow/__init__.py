"""Flow layout of text and graphics into rectangular frames."""

__version__ = "0.1.0"

# High-level Python API
from blockflow.composition import BlockComposer, Length, TextFitter
from blockflow.config import Config, Theme, load_config
from blockflow.document import Figure, Paragraph, Span, compose, load_document, parse_document
from blockflow.fonts import FontMetrics, register_fonts, resolve_font
from blockflow.render.image import Graphic
from blockflow.render.pdf import CanvasSink, PDFRenderer, render_document_to_pdf
from blockflow.render.sink import RecordingSink, TextStyle
from blockflow.utils.dimensions import Frame

__all__ = [
    "BlockComposer",
    "CanvasSink",
    "Config",
    "Figure",
    "FontMetrics",
    "Frame",
    "Graphic",
    "Length",
    "PDFRenderer",
    "Paragraph",
    "RecordingSink",
    "Span",
    "TextFitter",
    "TextStyle",
    "Theme",
    "compose",
    "load_config",
    "load_document",
    "parse_document",
    "register_fonts",
    "render_document_to_pdf",
    "resolve_font",
]
