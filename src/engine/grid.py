"""Grid layout, text sizing, hit-testing and rendering utilities."""

import math
from typing import Dict, Iterable, Optional, Tuple

from pydantic import BaseModel, Field

from .models import PaletteTier, TextSizing, TrackedWord


# Base character cell in pixels
FONT_SIZE = 19
CHAR_WIDTH = 12
CHAR_HEIGHT = 24

# Smallest cell we will lay a grid out with
MIN_CHAR_WIDTH = 6
MIN_CHAR_HEIGHT = 10

PALETTE_TEXT_SCALE: Dict[str, float] = {
    "easy": 1.0,
    "average": 0.75,
    "hard": 0.55,
}


def text_sizing(palette: PaletteTier = "easy", level: Optional[int] = None) -> TextSizing:
    """
    Character cell size for a palette tier and level.

    Harder palettes draw smaller text. From level 14 the text shrinks
    further: to 85% by level 20, 70% by 30, 55% by 40, and 45% after.
    """
    palette_scale = PALETTE_TEXT_SCALE.get(palette, 1.0)

    level_scale = 1.0
    if level and level >= 14:
        if level <= 20:
            level_scale = 1.0 - (level - 14) / 6 * 0.15
        elif level <= 30:
            level_scale = 0.85 - (level - 21) / 9 * 0.15
        elif level <= 40:
            level_scale = 0.70 - (level - 31) / 9 * 0.15
        else:
            level_scale = 0.45

    scale = palette_scale * level_scale
    return TextSizing(
        font_size=round(FONT_SIZE * scale),
        char_width=round(CHAR_WIDTH * scale),
        char_height=round(CHAR_HEIGHT * scale),
    )


class GridLayout(BaseModel):
    """
    Character grid and the playable band between the UI exclusion rows.

    ``playable_start_row`` is inclusive, ``playable_end_row`` exclusive.
    """

    cols: int = Field(default=0, ge=0)
    rows: int = Field(default=0, ge=0)
    top_exclusion_rows: int = Field(default=0, ge=0)
    bottom_exclusion_rows: int = Field(default=0, ge=0)
    playable_start_row: int = 0
    playable_end_row: int = 1

    def model_post_init(self, __context) -> None:
        """Compute the playable band after model creation."""
        self._compute_band()

    def _compute_band(self) -> None:
        start = max(0, self.top_exclusion_rows)
        end = max(start + 1, self.rows - self.bottom_exclusion_rows)

        # Exclusions ate the grid: keep 10% margins instead
        if self.rows - self.bottom_exclusion_rows <= start or self.cols <= 0:
            start = max(0, math.floor(self.rows * 0.1))
            end = max(start + 1, math.floor(self.rows * 0.9))

        self.playable_start_row = start
        self.playable_end_row = end

    @classmethod
    def from_canvas(
        cls,
        canvas_width: float,
        canvas_height: float,
        char_width: float = CHAR_WIDTH,
        char_height: float = CHAR_HEIGHT,
        top_exclusion_px: float = 0,
        bottom_exclusion_px: float = 0,
    ) -> "GridLayout":
        """
        Build a layout from canvas pixels and a character cell size.

        Args:
            canvas_width: Canvas width in pixels
            canvas_height: Canvas height in pixels
            char_width: Character cell width in pixels
            char_height: Character cell height in pixels
            top_exclusion_px: Height of the UI band at the top
            bottom_exclusion_px: Height of the UI band at the bottom

        Returns:
            A GridLayout (possibly empty for a zero-sized canvas)
        """
        cell_w = max(char_width, MIN_CHAR_WIDTH)
        cell_h = max(char_height, MIN_CHAR_HEIGHT)

        return cls(
            cols=max(0, math.floor(canvas_width / cell_w)),
            rows=max(0, math.floor(canvas_height / cell_h)),
            top_exclusion_rows=max(0, math.ceil(top_exclusion_px / cell_h)),
            bottom_exclusion_rows=max(0, math.ceil(bottom_exclusion_px / cell_h)),
        )

    @property
    def playable_rows(self) -> int:
        return self.playable_end_row - self.playable_start_row

    @property
    def is_degenerate(self) -> bool:
        """True when no word can be placed at all."""
        return self.cols <= 0 or self.rows <= 0 or self.playable_rows <= 0

    def fits(self, word: TrackedWord) -> bool:
        """Whether the word's current cell range lies inside the playable band."""
        if word.origin is None:
            return False
        col, row = word.origin
        return (
            col >= 0
            and col + word.length <= self.cols
            and self.playable_start_row <= row < self.playable_end_row
        )


def hit_test(
    x: float,
    y: float,
    words: Iterable[TrackedWord],
    char_width: float = CHAR_WIDTH,
    char_height: float = CHAR_HEIGHT,
) -> Optional[TrackedWord]:
    """
    Resolve a click in pixels to a surfaced word.

    Each word's box is padded by two cells on every side so small targets
    stay clickable. Returns the first surfaced, non-found word hit.
    """
    pad_x = char_width * 2
    pad_y = char_height * 2

    for word in words:
        if word.found or not word.is_visible or word.origin is None:
            continue

        col, row = word.origin
        left = col * char_width - pad_x
        right = (col + word.length) * char_width + pad_x
        top = row * char_height - pad_y
        bottom = (row + 1) * char_height + pad_y

        if left <= x <= right and top <= y <= bottom:
            return word

    return None


def render_grid(words: Iterable[TrackedWord], layout: GridLayout) -> str:
    """Render the surfaced words onto a dotted grid of the playable band."""
    if layout.is_degenerate:
        return ""

    cells: Dict[Tuple[int, int], str] = {}
    for word in words:
        if not word.is_visible:
            continue
        for (col, row), letter in zip(word.cells(), word.text):
            cells[(col, row)] = letter

    lines = [
        "".join(cells.get((col, row), ".") for col in range(layout.cols))
        for row in range(layout.playable_start_row, layout.playable_end_row)
    ]

    return "\n".join(lines)
