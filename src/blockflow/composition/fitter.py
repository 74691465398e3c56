"""Greedy text fitting with hyphenation fallback."""

import logging
import re
from typing import Callable

logger = logging.getLogger(__name__)

# Whitespace run followed by a word
_TOKEN = re.compile(r"(\s*)(\S*)")

LINE_BREAKS = "\n\r"

# A word chunk must be longer than this to be hyphenated
MIN_HYPHENATION_CHUNK = 4

WidthFunction = Callable[[str], float]


class TextFitter:
    """
    Measures how much of a text fits into an available width.

    The fitter works on a single line at a time: it never crosses a line
    break character. Widths come from ``width_of``, which measures a string
    at the current font and size.
    """

    def __init__(
        self,
        text: str,
        width_of: WidthFunction,
        hyphenation: bool = False,
        hyphenation_character: str = "-",
    ) -> None:
        """
        Initialize text fitter.

        Args:
            text: Text to fit.
            width_of: Width of a string (or single character) in points.
            hyphenation: Whether overflowing words may be hyphenated.
            hyphenation_character: Character shown at a hyphenation break.
        """
        self.text = text
        self.width_of = width_of
        self.hyphenation = hyphenation
        self.hyphenation_character = hyphenation_character

        self.width = 0.0
        self.begin_index = 0
        self.end_index = 0
        self.fitted_text = ""
        self.fitted_width = 0.0

    def fit(self, index: int, width: float, unspaced_fitting: bool) -> bool:
        """
        Fit the text starting at index inside the specified width.

        Args:
            index: Beginning index, inclusive.
            width: Available width.
            unspaced_fitting: Whether a word may be split when nothing has
                              fitted yet.

        Returns:
            Whether anything fitted (fitted_width > 0).
        """
        text = self.text
        self.begin_index = index
        self.width = width
        self.fitted_width = 0.0

        end = index
        hyphen = ""
        for match in _TOKEN.finditer(text, index):
            space_start, space_end = match.span(1)
            line_break = next(
                (i for i in range(space_start, space_end) if text[i] in LINE_BREAKS),
                None,
            )
            if line_break is not None:
                end = line_break
                break
            if match.start() == match.end():
                break

            token_width = self.width_of(match.group(0))
            if self.fitted_width + token_width > width:
                if end > index or not unspaced_fitting or text[index] == " ":
                    break
                end, hyphen = self._split_word(end, match.end(), width)
                break

            self.fitted_width += token_width
            end = match.end()

        self.fitted_text = text[index:end] + hyphen
        self.end_index = end
        return self.fitted_width > 0

    def force_fit(self, index: int) -> bool:
        """
        Accept the next token whole, regardless of the available width.

        Used for a word wider than an empty row: it overflows instead of
        blocking the layout.

        Args:
            index: Beginning index, inclusive.

        Returns:
            Whether a token was consumed.
        """
        text = self.text
        self.begin_index = index
        self.fitted_width = 0.0

        match = _TOKEN.match(text, index)
        end = index
        if match and not any(c in LINE_BREAKS for c in match.group(1)):
            end = match.end()

        self.fitted_text = text[index:end]
        self.end_index = end
        if end > index:
            self.fitted_width = self.width_of(self.fitted_text)
            logger.debug(
                f"Forced overflowing chunk {self.fitted_text!r} "
                f"({self.fitted_width:.2f}pt > {self.width:.2f}pt)"
            )
        return end > index

    def _split_word(self, start: int, word_end: int, width: float) -> tuple[int, str]:
        """
        Split an overflowing word one character at a time.

        Args:
            start: Index where the word chunk begins.
            word_end: Index where the word ends.
            width: Available width.

        Returns:
            Tuple of (end index of the accepted chunk, hyphen string).
        """
        text = self.text
        base_width = self.fitted_width
        chunk_end = start
        while chunk_end < word_end:
            char_width = self.width_of(text[chunk_end])
            if self.fitted_width + char_width > width:
                break
            self.fitted_width += char_width
            chunk_end += 1
        else:
            # Per-character widths can undercut the whole word's width
            return chunk_end, ""

        if self.hyphenation and chunk_end > start + MIN_HYPHENATION_CHUNK:
            # Make room for the hyphen
            chunk_end -= 1
            self.fitted_width -= self.width_of(text[chunk_end])
            self.fitted_width += self.width_of(self.hyphenation_character)
            return chunk_end, self.hyphenation_character

        # Chunk too short to hyphenate: drop it
        self.fitted_width = base_width
        return start, ""
