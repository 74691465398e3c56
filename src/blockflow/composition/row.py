"""Rows, the runs placed on them, and the block that collects them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from blockflow.composition.alignment import LineAlignment, is_baseline_family, split_alignment
from blockflow.types import RunKind

if TYPE_CHECKING:
    from blockflow.render.sink import TextStyle
    from blockflow.utils.dimensions import Frame


@dataclass
class Run:
    """
    One placed unit within a row: a text chunk or a graphic.

    Attributes:
        kind: "text" or "graphic".
        content: Text chunk, or the graphic object.
        x: Horizontal position inside the row when the run was accepted.
        width: Run width in points.
        height: Run height in points (line height for text).
        baseline: Distance from the run's top to its baseline.
        space_count: Number of space characters (0 for graphics).
        alignment: Resolved line alignment.
        style: Font and color for text runs.
        x_offset: Horizontal displacement computed at row close.
        y_offset: Vertical displacement computed at row close (y-up).
    """

    kind: RunKind
    content: Any
    x: float
    width: float
    height: float
    baseline: float
    space_count: int
    alignment: LineAlignment
    style: TextStyle | None = None
    x_offset: float = 0.0
    y_offset: float = 0.0


@dataclass
class Row:
    """A horizontal line of runs sharing a common vertical band."""

    y: float
    width: float = 0.0
    height: float = 0.0
    baseline: float = 0.0
    space_count: int = 0
    runs: list[Run] = field(default_factory=list)
    word_space: float = 0.0

    def add_run(self, run: Run) -> None:
        """
        Add a run and grow the row to accommodate it.

        Baseline-family runs share the row's baseline: a run whose baseline
        sits higher than the row's pushes the row top up, a run with deeper
        descent pushes the row bottom down. Top/middle/bottom runs only
        affect the row's height.

        Args:
            run: Run to add.
        """
        self.runs.append(run)
        self.width += run.width
        self.space_count += run.space_count

        if is_baseline_family(run.alignment):
            _, gap = split_alignment(run.alignment)
            super_gap = run.baseline + gap - self.baseline
            if super_gap > 0:
                self.height += super_gap
                self.baseline += super_gap
            sub_gap = self.baseline + (run.height - run.baseline) - gap - self.height
            if sub_gap > 0:
                self.height += sub_gap
        elif run.height > self.height:
            self.height = run.height


@dataclass
class Block:
    """
    Rows laid out between begin() and end(), plus their bounding box.

    The bounding box spans the frame's width; its height grows as rows
    close and its y is the frame's y plus the vertical alignment offset.
    """

    frame: Frame
    rows: list[Row] = field(default_factory=list)
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def runs(self) -> list[Run]:
        """All runs in acceptance order."""
        return [run for row in self.rows for run in row.runs]

    @property
    def y_offset(self) -> float:
        """Vertical displacement of the block inside its frame."""
        return self.y - self.frame.y
