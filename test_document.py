"""Tests for source document parsing and composition."""

import pytest
from PIL import Image

from blockflow.composition import BlockComposer
from blockflow.document import Figure, Paragraph, Span, compose, load_document, parse_document, parse_spans
from blockflow.render.sink import RecordingSink
from blockflow.utils.dimensions import Frame
from conftest import FixedMetrics


@pytest.fixture
def png_path(tmp_path):
    path = tmp_path / "dot.png"
    Image.new("RGB", (40, 20), "red").save(path)
    return path


class TestParseSpans:
    def test_plain_text(self):
        assert parse_spans("plain text") == [Span("plain text")]

    def test_superscript(self):
        assert parse_spans("E = mc^{2}") == [Span("E = mc"), Span("2", "super")]

    def test_subscript_inside_word(self):
        assert parse_spans("H_{2}O") == [Span("H"), Span("2", "sub"), Span("O")]

    def test_empty_script_dropped(self):
        assert parse_spans("x^{}y") == [Span("x"), Span("y")]

    def test_unclosed_marker_is_text(self):
        assert parse_spans("a^{b") == [Span("a^{b")]


class TestParseDocument:
    def test_paragraphs_and_directives(self):
        source = (
            "::align justify\n"
            "::indent 18\n"
            "First line\n"
            "  continues here.\n"
            "\n"
            "::space 12\n"
            "Second ^{para}.\n"
        )
        first, second = parse_document(source)

        assert first == Paragraph([Span("First line continues here.")], "justify", 18.0, 0.0)
        assert second.spans == [Span("Second "), Span("para", "super"), Span(".")]
        assert second.x_alignment == "justify"
        assert second.indent == 18.0
        assert second.space_before == 12.0

    def test_space_applies_once(self):
        items = parse_document("::space 6\none\n\ntwo\n")
        assert [item.space_before for item in items] == [6.0, 0.0]

    def test_directive_ends_paragraph(self):
        items = parse_document("one\n::align right\ntwo\n")
        assert [item.text for item in items] == ["one", "two"]
        assert [item.x_alignment for item in items] == [None, "right"]

    def test_multiple_blank_lines(self):
        items = parse_document("\n\none\n\n\n\ntwo\n\n")
        assert len(items) == 2

    def test_image(self, png_path):
        items = parse_document(f"::space 4\n::image {png_path.name}\n::image {png_path.name} 80\n", png_path.parent)
        natural, scaled = items
        assert isinstance(natural, Figure)
        assert natural.size == (40, 20)
        assert natural.space_before == 4
        assert scaled.size == (80, 40)

    @pytest.mark.parametrize(
        "source, message",
        [
            ("::align sideways", "::align expects"),
            ("::indent", "::indent expects one value"),
            ("::indent wide", "expects a number"),
            ("::space 1 2", "::space expects one value"),
            ("::image", "::image expects"),
            ("::columns 2", "unknown directive"),
        ],
    )
    def test_malformed_directives(self, source, message):
        with pytest.raises(ValueError, match=message):
            parse_document(f"text\n{source}\n")

    def test_missing_image(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_document("::image nope.png", tmp_path)

    def test_load_document(self, tmp_path, png_path):
        source = tmp_path / "doc.txt"
        source.write_text("Hello\n\n::image dot.png\n", encoding="utf-8")
        items = load_document(source)
        assert [type(item) for item in items] == [Paragraph, Figure]

    def test_load_missing_document(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_document(tmp_path / "missing.txt")


class TestCompose:
    def make_composer(self):
        sink = RecordingSink()
        return BlockComposer(sink, FixedMetrics(), 10), sink

    def test_everything_fits(self):
        composer, sink = self.make_composer()
        composer.begin(Frame(0, 0, 100, 100))
        items = parse_document("aa bb\n\ncc\n")
        assert compose(items, composer) == []
        block = composer.end()
        assert sink.texts == ["aa bb", "cc"]
        assert len(block.rows) == 2

    def test_paragraph_offsets(self):
        composer, _ = self.make_composer()
        composer.begin(Frame(0, 0, 100, 100))
        compose([Paragraph([Span("aa")]), Paragraph([Span("bb")], indent=10, space_before=5)], composer)
        block = composer.end()
        second = block.rows[1]
        assert second.y == 15
        assert second.runs[0].x == 10

    def test_first_paragraph_keeps_indent_not_space(self):
        composer, _ = self.make_composer()
        composer.begin(Frame(0, 0, 100, 100))
        compose([Paragraph([Span("aa")], indent=10, space_before=5)], composer)
        block = composer.end()
        run = block.runs[0]
        assert run.x == 10
        assert block.height == 10

    def test_scripts_reach_composer(self):
        composer, sink = self.make_composer()
        composer.begin(Frame(0, 0, 100, 100))
        compose(parse_document("x^{2}"), composer)
        composer.end()
        base, sup = sink.placements
        assert base.y - sup.y == pytest.approx(3.3)

    def test_overflow_returns_remainder(self):
        composer, sink = self.make_composer()
        items = parse_document("aa bb cc dd ee ff\n\nnext\n")

        composer.begin(Frame(0, 0, 50, 25))
        remaining = compose(items, composer)
        composer.end()
        assert sink.texts == ["aa bb", "cc dd"]
        assert [item.text for item in remaining] == ["ee ff", "next"]

        composer.begin(Frame(0, 0, 50, 25))
        assert compose(remaining, composer) == []
        composer.end()
        assert sink.texts[2:] == ["ee ff", "next"]

    def test_remainder_keeps_alignment_drops_offsets(self):
        composer, _ = self.make_composer()
        items = [Paragraph([Span("aa bb cc dd")], "center", indent=10, space_before=5)]
        composer.begin(Frame(0, 0, 50, 10))
        (remainder,) = compose(items, composer)
        composer.end()
        assert remainder.x_alignment == "center"
        assert (remainder.indent, remainder.space_before) == (0.0, 0.0)

    def test_remainder_keeps_following_spans(self):
        composer, _ = self.make_composer()
        items = parse_document("aa bb cc^{2} dd")
        composer.begin(Frame(0, 0, 50, 10))
        (remainder,) = compose(items, composer)
        composer.end()
        assert remainder.spans == [Span("cc"), Span("2", "super"), Span(" dd")]

    def test_figure_that_does_not_fit(self, png_path):
        composer, _ = self.make_composer()
        items = parse_document(f"::image {png_path.name}\n\nafter\n", png_path.parent)
        composer.begin(Frame(0, 0, 100, 15))
        remaining = compose(items, composer)
        composer.end()
        assert remaining == items
