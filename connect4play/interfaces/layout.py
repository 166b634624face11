"""
layout.py - Screen geometry for the graphical board view

The window is split into the board area (top nine tenths) and the move
history strip (bottom tenth). The board area holds one extra row at the top
where the ghost disk of the player to move hovers over the pointer's
column. All coordinates are pixels with the origin at the top-left corner.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from connect4play.utils import Coord

WINDOW_WIDTH = 800
WINDOW_HEIGHT = 800
BOARD_SCALE_Y = 0.9  # Share of the window height used by the board
HOLE_PADDING = 0.9
DISK_PADDING = 0.95 * HOLE_PADDING
WINNER_LINE_WIDTH = 0.5  # Relative to the smaller cell dimension
HISTORY_SLOTS = 10

Point = Tuple[float, float]
Box = Tuple[float, float, float, float]


@dataclass(frozen=True)
class BoardLayout:
    """Pixel geometry of a board of a given size in a window of a given size."""
    rows: int
    cols: int
    width: int = WINDOW_WIDTH
    height: int = WINDOW_HEIGHT

    @property
    def board_height(self) -> float:
        return self.height * BOARD_SCALE_Y

    @property
    def row_height(self) -> float:
        # Board rows plus the ghost row share the board area
        return self.board_height / (self.rows + 1)

    @property
    def col_width(self) -> float:
        return self.width / self.cols

    def column_at(self, x: float, y: Optional[float] = None) -> Optional[int]:
        """
        Map a pointer position to the column under it.

        Args:
            x: Pointer x coordinate
            y: Pointer y coordinate; positions in the history strip map to
               no column when given

        Returns:
            Column index, or None if the pointer is outside the board
        """
        if x < 0 or x >= self.width:
            return None
        if y is not None and not (0 <= y < self.board_height):
            return None
        return min(int(x // self.col_width), self.cols - 1)

    def cell_center(self, row: int, col: int) -> Point:
        return (self.col_width * (col + 0.5), self.row_height * (row + 1.5))

    def ghost_center(self, col: int) -> Point:
        return (self.col_width * (col + 0.5), self.row_height * 0.5)

    def _radius(self, padding: float) -> float:
        return min(self.col_width, self.row_height) * padding / 2

    def hole_box(self, row: int, col: int) -> Box:
        return _circle_box(self.cell_center(row, col), self._radius(HOLE_PADDING))

    def disk_box(self, row: int, col: int) -> Box:
        return _circle_box(self.cell_center(row, col), self._radius(DISK_PADDING))

    def ghost_box(self, col: int) -> Box:
        return _circle_box(self.ghost_center(col), self._radius(DISK_PADDING))

    def board_box(self) -> Box:
        """Rectangle behind the holes, below the ghost row."""
        return (0, self.row_height, self.width, self.board_height)

    def winner_line(self, line: List[Coord]) -> Optional[Tuple[Point, Point, float]]:
        """
        Geometry of the stroke drawn through a winning line.

        Args:
            line: Winning positions ordered from one end to the other

        Returns:
            (start, end, stroke width), or None for an empty line
        """
        if not line:
            return None
        start = self.cell_center(*line[0])
        end = self.cell_center(*line[-1])
        stroke = min(self.col_width, self.row_height) * WINNER_LINE_WIDTH
        return start, end, stroke

    def history_slot(self, index: int) -> Optional[Box]:
        """
        Rectangle of a move history entry.

        Args:
            index: 0 for the newest move, 1 for the one before, and so on

        Returns:
            The slot rectangle, or None once the strip is full
        """
        if not (0 <= index < HISTORY_SLOTS):
            return None
        slot_width = self.width / HISTORY_SLOTS
        left = slot_width * index
        return (left, self.board_height, left + slot_width, self.height)


def _circle_box(center: Point, radius: float) -> Box:
    x, y = center
    return (x - radius, y - radius, x + radius, y + radius)
