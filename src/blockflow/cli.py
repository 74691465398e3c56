"""CLI interface for blockflow."""

import logging
from pathlib import Path

import click

from blockflow.composition import BlockComposer
from blockflow.config import Config, Theme, load_config
from blockflow.fonts import FontMetrics, register_fonts, resolve_font
from blockflow.render.pdf import render_document_to_pdf
from blockflow.render.sink import RecordingSink
from blockflow.types import LINE_MODES, X_ALIGNMENTS, Y_ALIGNMENTS
from blockflow.utils.dimensions import PAGE_SIZES, Frame

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name="blockflow")
@click.option("-v", "--verbose", is_flag=True, help="Log layout decisions to stderr.")
def main(verbose: bool) -> None:
    """Lay out text and graphics into frames and pages."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    # Register bundled fonts at startup
    register_fonts()


@main.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    help="Output PDF file path. Defaults to SOURCE with a .pdf suffix.",
)
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to a TOML config file with a [theme] table.",
)
@click.option(
    "--page-size",
    type=click.Choice(list(PAGE_SIZES.keys()), case_sensitive=False),
    help="Page size.",
)
@click.option(
    "--align",
    type=click.Choice(X_ALIGNMENTS, case_sensitive=False),
    help="Horizontal alignment of paragraphs.",
)
@click.option(
    "--valign",
    type=click.Choice(Y_ALIGNMENTS, case_sensitive=False),
    help="Vertical alignment of each page's block inside the margins.",
)
@click.option("--font", type=str, help="Font name (built-in PDF font or a registered TTF).")
@click.option("--size", type=float, help="Font size in points.")
@click.option("--hyphenate/--no-hyphenate", default=None, help="Hyphenate words that overflow an empty row.")
@click.option("--line-space", type=float, help="Extra space between rows in points.")
@click.option("--margin", type=float, help="Page margin in inches.")
@click.option(
    "--fonts-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory of TTF fonts to register before rendering.",
)
def render(
    source: Path,
    output: Path | None,
    config: Path | None,
    page_size: str | None,
    align: str | None,
    valign: str | None,
    font: str | None,
    size: float | None,
    hyphenate: bool | None,
    line_space: float | None,
    margin: float | None,
    fonts_dir: Path | None,
) -> None:
    """
    Render a source document to PDF.

    Paragraphs are separated by blank lines; ^{..} and _{..} mark superscript
    and subscript. Directive lines: ::image PATH [WIDTH], ::align MODE,
    ::indent POINTS, ::space POINTS. Text that overflows a page continues on
    the next one.
    """
    try:
        if fonts_dir:
            registered = register_fonts(fonts_dir)
            click.echo(f"Registered {len(registered)} font(s) from {fonts_dir}")

        cfg = load_config(config) if config else Config()

        # Build theme configuration with CLI option overrides
        theme_updates = {
            "page_size": page_size,
            "x_align": align.lower() if align else None,
            "y_align": valign.lower() if valign else None,
            "font_family": font,
            "font_size": size,
            "hyphenation": hyphenate,
            "line_space": line_space,
            "margin": margin,
        }
        theme_updates = {k: v for k, v in theme_updates.items() if v is not None}
        theme = Theme.model_validate({**cfg.theme.model_dump(), **theme_updates})

        if output is None:
            output = source.with_suffix(".pdf")

        click.echo(f"Laying out {source} on {theme.page_size} pages with {theme.font_name} {theme.font_size:g}pt...")
        pages = render_document_to_pdf(source, output, theme)
        click.echo(f"✓ {pages} page(s) saved to: {output}")

    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


@main.command()
@click.argument("text")
@click.option("--width", type=float, default=200.0, show_default=True, help="Frame width in points.")
@click.option("--height", type=float, default=1000.0, show_default=True, help="Frame height in points.")
@click.option("--font", type=str, default="Helvetica", show_default=True, help="Font name.")
@click.option("--size", type=float, default=12.0, show_default=True, help="Font size in points.")
@click.option(
    "--align",
    type=click.Choice(X_ALIGNMENTS, case_sensitive=False),
    default="left",
    show_default=True,
    help="Horizontal alignment.",
)
@click.option(
    "--line-alignment",
    type=click.Choice(LINE_MODES + ("super", "sub"), case_sensitive=False),
    default="baseline",
    show_default=True,
    help="Line alignment of the text.",
)
@click.option("--hyphenate", is_flag=True, help="Hyphenate words that overflow an empty row.")
def wrap(
    text: str,
    width: float,
    height: float,
    font: str,
    size: float,
    align: str,
    line_alignment: str,
    hyphenate: bool,
) -> None:
    """
    Wrap TEXT into a frame and print where each chunk lands.

    Use "-" to read TEXT from stdin. Coordinates are in points from the
    frame's top-left corner; y is the baseline.
    """
    if text == "-":
        text = click.get_text_stream("stdin").read()

    sink = RecordingSink()
    composer = BlockComposer(sink, FontMetrics(resolve_font(font)), size)
    composer.hyphenation = hyphenate
    composer.begin(Frame(0.0, 0.0, width, height), align.lower())
    reached = composer.show_text(text, line_alignment.lower())
    block = composer.end()

    for placement in sink.placements:
        click.echo(f"{placement.x:8.2f} {placement.y:8.2f}  {placement.content!r}")
    click.echo(f"{len(block.rows)} row(s), {block.height:.2f}pt tall")
    if reached < len(text):
        click.echo(f"Overflow: {len(text) - reached} character(s) did not fit", err=True)


if __name__ == "__main__":
    main()
