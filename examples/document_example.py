#!/usr/bin/env python3
"""
Document Example: Rendering a Source Document to PDF

Writes a small document with directives and renders it with a custom theme.
"""

from pathlib import Path

from blockflow import Theme, render_document_to_pdf

source = Path("example.txt")
source.write_text(
    """::align center
A Short Note on Flow Layout

::align justify
::indent 18
::space 12
Text is fitted into rows word by word. When a word does not fit, the row is
closed and aligned, and the word moves on to the next row. Justified rows
spread their slack over the spaces between words.

Scripts ride on the shared baseline: x^{2} + y^{2} = r^{2}, and CO_{2}.
""",
    encoding="utf-8",
)

theme = Theme(font_family="Times-Roman", font_size=12, page_size="a5", margin=0.75, hyphenation=True)
pages = render_document_to_pdf(source, Path("example.pdf"), theme)

print(f"✓ {pages} page(s) saved to: example.pdf")
