"""Layout engine: length values, text fitting, rows and the block composer."""

from blockflow.composition.alignment import SUBSCRIPT, SUPERSCRIPT, Offset, resolve_line_alignment
from blockflow.composition.composer import BlockComposer
from blockflow.composition.fitter import TextFitter
from blockflow.composition.length import Length
from blockflow.composition.row import Block, Row, Run

__all__ = [
    "Block",
    "BlockComposer",
    "Length",
    "Offset",
    "Row",
    "Run",
    "SUBSCRIPT",
    "SUPERSCRIPT",
    "TextFitter",
    "resolve_line_alignment",
]
