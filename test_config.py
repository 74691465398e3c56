"""Tests for theme configuration and the command line interface."""

import pytest
from click.testing import CliRunner

from blockflow.cli import main
from blockflow.composition import BlockComposer, Length
from blockflow.config import Config, Theme, load_config
from blockflow.render.sink import RecordingSink
from blockflow.utils.dimensions import Frame
from conftest import FixedMetrics


class TestTheme:
    def test_defaults(self):
        theme = Theme()
        assert theme.font_name == "Helvetica"
        assert theme.x_align == "left"
        assert theme.line_space_length == Length.absolute(0.0)
        assert theme.content_frame == Frame(72, 72, 468, 648)

    def test_variant_with_model_copy(self):
        base = Theme(font_family="Times-Roman")
        variant = base.model_copy(update={"x_align": "justify"})
        assert variant.font_family == "Times-Roman"
        assert variant.x_align == "justify"

    def test_page_size_case_insensitive(self):
        theme = Theme(page_size="A5")
        assert theme.page_size == "a5"
        assert theme.page_dimensions == pytest.approx((5.83 * 72, 8.27 * 72))

    @pytest.mark.parametrize(
        "field, value",
        [
            ("page_size", "tabloid"),
            ("font_size", 0),
            ("x_align", "diagonal"),
            ("line_alignment", "sideways"),
            ("margin", -1),
            ("hyphenation_character", ""),
        ],
    )
    def test_invalid_values(self, field, value):
        with pytest.raises(ValueError):
            Theme(**{field: value})

    def test_apply_configures_composer(self):
        theme = Theme(
            font_family="Courier",
            font_size=9,
            text=(0.2, 0.2, 0.2),
            hyphenation=True,
            hyphenation_character="~",
            line_alignment="middle",
            line_space=0.5,
            line_space_mode="relative",
        )
        composer = BlockComposer(RecordingSink(), FixedMetrics(), 10)
        theme.apply(composer)

        assert composer.font.name == "Courier"
        assert composer.font_size == 9
        assert composer.color == (0.2, 0.2, 0.2)
        assert composer.hyphenation is True
        assert composer.hyphenation_character == "~"
        assert composer.line_alignment == "middle"
        assert composer.line_space == Length.relative(0.5)


class TestLoadConfig:
    def test_loads_theme_table(self, tmp_path):
        path = tmp_path / "blockflow.toml"
        path.write_text(
            '[theme]\nfont_family = "Times-Roman"\nfont_size = 10\nx_align = "justify"\n'
            'line_space = 0.2\nline_space_mode = "relative"\n',
            encoding="utf-8",
        )
        config = load_config(path)
        assert config.theme.font_family == "Times-Roman"
        assert config.theme.font_size == 10
        assert config.theme.x_align == "justify"
        assert config.theme.line_space_length == Length.relative(0.2)

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "blockflow.toml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == Config()

    def test_default_path_is_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "blockflow.toml").write_text("[theme]\nmargin = 0.5\n", encoding="utf-8")
        assert load_config().theme.margin == 0.5

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config(tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("[theme\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid TOML"):
            load_config(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("[theme]\nfont_size = -1\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(path)


class TestCli:
    def test_wrap_prints_rows(self):
        runner = CliRunner()
        result = runner.invoke(main, ["wrap", "aa bb cc", "--width", "40", "--font", "courier", "--size", "10"])
        assert result.exit_code == 0, result.output
        assert "'aa bb'" in result.output
        assert "'cc'" in result.output
        assert "2 row(s)" in result.output
        assert "Overflow" not in result.output

    def test_wrap_reports_overflow(self):
        runner = CliRunner()
        result = runner.invoke(main, ["wrap", "aa bb cc", "--height", "5", "--font", "Courier", "--size", "10"])
        assert result.exit_code == 0
        assert "Overflow: 8 character(s) did not fit" in result.output

    def test_wrap_reads_stdin(self):
        runner = CliRunner()
        result = runner.invoke(main, ["wrap", "-", "--width", "1000"], input="from stdin")
        assert result.exit_code == 0
        assert "'from stdin'" in result.output

    def test_render(self, tmp_path):
        source = tmp_path / "doc.txt"
        source.write_text("Hello there.\n\nSecond paragraph.\n", encoding="utf-8")
        output = tmp_path / "out.pdf"

        runner = CliRunner()
        result = runner.invoke(
            main,
            ["render", str(source), "-o", str(output), "--page-size", "a5", "--align", "justify", "--hyphenate"],
        )
        assert result.exit_code == 0, result.output
        assert "1 page(s) saved" in result.output
        assert output.read_bytes().startswith(b"%PDF")

    def test_render_default_output(self, tmp_path):
        source = tmp_path / "doc.txt"
        source.write_text("Hello.\n", encoding="utf-8")
        result = CliRunner().invoke(main, ["render", str(source)])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "doc.pdf").exists()

    def test_render_with_config(self, tmp_path):
        source = tmp_path / "doc.txt"
        source.write_text("Hello.\n", encoding="utf-8")
        config = tmp_path / "theme.toml"
        config.write_text('[theme]\nfont_family = "Times-Roman"\n', encoding="utf-8")

        result = CliRunner().invoke(main, ["render", str(source), "--config", str(config), "--size", "14"])
        assert result.exit_code == 0, result.output
        assert "Times-Roman 14pt" in result.output

    def test_render_invalid_config(self, tmp_path):
        source = tmp_path / "doc.txt"
        source.write_text("Hello.\n", encoding="utf-8")
        config = tmp_path / "theme.toml"
        config.write_text("[theme]\nfont_size = -1\n", encoding="utf-8")

        result = CliRunner().invoke(main, ["render", str(source), "--config", str(config)])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_render_bad_directive(self, tmp_path):
        source = tmp_path / "doc.txt"
        source.write_text("::columns 2\n", encoding="utf-8")
        result = CliRunner().invoke(main, ["render", str(source)])
        assert result.exit_code == 1
        assert "unknown directive" in result.output
