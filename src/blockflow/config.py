"""Configuration loading and validation."""

import tomllib
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, field_validator

from blockflow.composition.length import Length
from blockflow.types import Inch, LineMode, RGBColor, ScriptMode, UnitMode, XAlignment, YAlignment
from blockflow.utils.dimensions import PAGE_SIZES, Frame, get_page_size, inches_to_points, page_frame

if TYPE_CHECKING:
    from blockflow.composition.composer import BlockComposer


class Theme(BaseModel):
    """
    Complete layout theme with all typographic settings.

    All parameters have sensible defaults. Override only what you need using
    Pydantic's model_copy():

        base = Theme(font_family="Times-Roman")
        variant = base.model_copy(update={"x_align": "justify"})
    """

    # ========================================================================
    # Fonts
    # ========================================================================
    font_family: str = "Helvetica"
    """Font name, case-insensitive (built-in PDF font or a registered TTF). Falls back to Helvetica."""

    font_size: float = Field(default=11.0, gt=0)
    """Font size in points."""

    # ========================================================================
    # Colors
    # ========================================================================
    text: RGBColor = (0.0, 0.0, 0.0)
    """Text color as RGB in 0-1 range. Default: black."""

    # ========================================================================
    # Alignment
    # ========================================================================
    x_align: XAlignment = "left"
    """Horizontal alignment of paragraphs: "left", "right", "center" or "justify"."""

    y_align: YAlignment = "top"
    """Vertical alignment of the block inside the page frame: "top", "middle" or "bottom"."""

    line_alignment: LineMode | ScriptMode = "baseline"
    """Default placement of runs inside their row."""

    # ========================================================================
    # Line Breaking
    # ========================================================================
    hyphenation: bool = False
    """Split words that overflow an empty row with a hyphen."""

    hyphenation_character: str = Field(default="-", min_length=1)
    """Character shown where a word was hyphenated."""

    line_space: float = 0.0
    """Extra space between rows (points, or a ratio of the line height in relative mode)."""

    line_space_mode: UnitMode = "absolute"
    """How line_space is measured: "absolute" (points) or "relative" (ratio of the line height)."""

    # ========================================================================
    # Page
    # ========================================================================
    page_size: str = "letter"
    """Page size name (see PAGE_SIZES)."""

    margin: Inch = Field(default=1.0, ge=0)
    """Page margin in inches, applied on all sides."""

    @field_validator("page_size")
    @classmethod
    def _check_page_size(cls, value: str) -> str:
        value = value.lower()
        if value not in PAGE_SIZES:
            raise ValueError(f"Unknown page size {value!r}. Available: {', '.join(PAGE_SIZES)}")
        return value

    # ========================================================================
    # Computed Properties
    # ========================================================================

    @property
    def line_space_length(self) -> Length:
        """Line spacing as a Length."""
        return Length(self.line_space, self.line_space_mode)

    @property
    def font_name(self) -> str:
        """Registered font name the family resolves to."""
        from blockflow.fonts import resolve_font
        return resolve_font(self.font_family)

    @property
    def page_dimensions(self) -> tuple[float, float]:
        """Page (width, height) in points."""
        ps = get_page_size(self.page_size)
        return (inches_to_points(ps.width), inches_to_points(ps.height))

    @property
    def content_frame(self) -> Frame:
        """Area inside the page margins, in points."""
        return page_frame(get_page_size(self.page_size), self.margin)

    def apply(self, composer: "BlockComposer") -> None:
        """
        Push the theme's typographic settings onto a composer.

        Args:
            composer: Composer to configure.
        """
        from blockflow.fonts import FontMetrics

        composer.set_font(FontMetrics(self.font_name), self.font_size)
        composer.color = self.text
        composer.hyphenation = self.hyphenation
        composer.hyphenation_character = self.hyphenation_character
        composer.line_alignment = self.line_alignment
        composer.line_space = self.line_space_length


class Config(BaseModel):
    """Root configuration."""

    theme: Theme = Field(default_factory=Theme)


def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, looks for blockflow.toml in current directory.

    Returns:
        Validated Config object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config is invalid.
    """
    if config_path is None:
        config_path = Path.cwd() / "blockflow.toml"

    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Copy config.toml.example to blockflow.toml and adjust the theme."
        )

    with open(config_path, "rb") as f:
        try:
            config_dict = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {config_path}: {e}") from e

    return Config(**config_dict)
