#!/usr/bin/env python3
"""
Simple Example: Composing a Block by Hand

Lays out two paragraphs into a frame and prints where every chunk landed.
"""

from blockflow import BlockComposer, FontMetrics, Frame, RecordingSink

sink = RecordingSink()
composer = BlockComposer(sink, FontMetrics("Helvetica"), 12)
composer.hyphenation = True

composer.begin(Frame(72, 72, 180, 400), "justify", "top")
composer.show_text("The quick brown fox jumps over the lazy dog, twice, for good measure.")
composer.show_break((18, 6))
composer.show_text("E = mc")
composer.show_text("2", "super")
composer.show_text(" and H")
composer.show_text("2", "sub")
composer.show_text("O.")
block = composer.end()

for placement in sink.placements:
    print(f"{placement.x:7.2f} {placement.y:7.2f}  {placement.content!r}")

print(f"\n✓ {len(block.rows)} rows, {block.height:.1f}pt tall")
