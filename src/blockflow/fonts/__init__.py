"""Font registration and glyph metrics."""

import logging
from pathlib import Path
from typing import Protocol

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

logger = logging.getLogger(__name__)

FONTS_DIR = Path(__file__).parent


class GlyphMetrics(Protocol):
    """Widths and vertical metrics of one font face, scaled to a font size."""

    name: str

    def ascent(self, size: float) -> float:
        """Distance from the baseline to the ascender line (positive)."""
        ...

    def line_height(self, size: float) -> float:
        """Distance from the ascender line to the descender line."""
        ...

    def width(self, text: str, size: float) -> float:
        """Advance width of a string (or a single character)."""
        ...


class FontMetrics:
    """GlyphMetrics backed by ReportLab's font registry."""

    def __init__(self, font_name: str) -> None:
        """
        Initialize metrics for a registered font.

        Args:
            font_name: ReportLab font name (built-in or registered TTF).

        Raises:
            ValueError: If the font is not known to ReportLab.
        """
        try:
            pdfmetrics.getFont(font_name)
        except Exception as e:
            raise ValueError(f"Font '{font_name}' is not registered") from e
        self.name = font_name

    def ascent(self, size: float) -> float:
        ascent, _ = pdfmetrics.getAscentDescent(self.name, size)
        return ascent

    def line_height(self, size: float) -> float:
        ascent, descent = pdfmetrics.getAscentDescent(self.name, size)
        return ascent - descent

    def width(self, text: str, size: float) -> float:
        return pdfmetrics.stringWidth(text, self.name, size)

    def __repr__(self) -> str:
        return f"FontMetrics({self.name!r})"


def _normalize_font_name(name: str) -> str:
    """
    Normalize a font name to TitleCase convention.

    Converts hyphen-separated parts to Title Case to match PostScript naming.

    Examples:
        "dejavu-sans" → "Dejavu-Sans"
        "helvetica-bold" → "Helvetica-Bold"
        "times-roman" → "Times-Roman"

    Args:
        name: Font name to normalize (can be any case)

    Returns:
        TitleCase font name
    """
    parts = name.split('-')
    return '-'.join(part.title() for part in parts)


def register_fonts(fonts_dir: Path | None = None) -> list[str]:
    """
    Register TTF fonts with ReportLab.

    Auto-discovers and registers all TTF font files in a directory. Each font
    is registered with a TitleCase name based on its filename (without
    extension), e.g. dejavu-sans.ttf → "Dejavu-Sans".

    Args:
        fonts_dir: Directory to scan. Defaults to the package fonts directory.

    Returns:
        Names of the fonts registered by this call.
    """
    fonts_dir = fonts_dir or FONTS_DIR
    ttf_files = sorted(fonts_dir.glob("*.ttf"))

    if not ttf_files:
        logger.debug(f"No TTF font files found in {fonts_dir}, using built-in fonts")

    registered: list[str] = []
    for font_path in ttf_files:
        font_name = _normalize_font_name(font_path.stem)

        try:
            pdfmetrics.registerFont(TTFont(font_name, str(font_path)))
        except Exception as e:
            logger.warning(
                f"Failed to register font {font_name} from {font_path.name}: {e}. "
                "Skipping this font."
            )
            continue
        logger.info(f"Registered font: {font_name} from {font_path.name}")
        registered.append(font_name)

    return registered


def _is_registered(font_name: str) -> bool:
    try:
        pdfmetrics.getFont(font_name)
    except Exception:
        return False
    return True


def resolve_font(font_spec: str, fallback: str = "Helvetica") -> str:
    """
    Resolve a font name to a registered font name (case-insensitive).

    Resolution priority:
    1. The name as given (built-in PDF fonts are mixed case, e.g. "Times-Roman")
    2. The TitleCase-normalized name (registered TTF fonts)
    3. The fallback font

    Args:
        font_spec: Font name, case-insensitive.
        fallback: Fallback font name (default: "Helvetica")

    Returns:
        Registered font name

    Examples:
        >>> resolve_font("helvetica-bold")
        "Helvetica-Bold"

        >>> resolve_font("NonExistentFont")
        "Helvetica"  # Falls back to Helvetica
    """
    font_spec = font_spec.strip()
    for candidate in (font_spec, _normalize_font_name(font_spec)):
        if _is_registered(candidate):
            logger.debug(f"Font '{candidate}' found in registry")
            return candidate

    logger.info(f"Using fallback font '{fallback}' for '{font_spec}'")
    return fallback

