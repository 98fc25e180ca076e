"""Terminal render target — an off-screen character canvas.

Shapes write their glyphs into a Buffer; ``flush`` then prints the whole
frame to a text stream in one write so the terminal never shows a
half-drawn neighborhood.
"""

from __future__ import annotations

import sys
from typing import TextIO

import numpy as np
from numpy.typing import NDArray

# Cursor home + clear screen
_CLEAR = "\x1b[H\x1b[2J"


class Buffer:
    """A ``width`` x ``height`` grid of characters.

    Attributes:
        width: Columns of characters.
        height: Rows of characters.
        canvas: Character array indexed as ``canvas[y, x]``.
        stream: Where ``flush`` writes the frame.
        clear_screen: Prefix each frame with an ANSI clear sequence.
    """

    def __init__(
        self,
        width: int,
        height: int,
        stream: TextIO | None = None,
        *,
        clear_screen: bool = True,
    ) -> None:
        """Create a blank canvas.

        Args:
            width: Total columns, typically grid width times glyph width.
            height: Total rows, typically grid height times glyph height.
            stream: Output stream; ``sys.stdout`` when None.
            clear_screen: Whether frames start by clearing the terminal.
        """
        self.width = width
        self.height = height
        self.stream = stream
        self.clear_screen = clear_screen
        self.canvas: NDArray[np.str_] = np.full((height, width), " ", dtype="<U1")

    def write(self, x: int, y: int, text: str) -> None:
        """Place ``text`` on row ``y`` starting at column ``x``.

        Characters falling outside the canvas are dropped.
        """
        if not 0 <= y < self.height:
            return
        for i, ch in enumerate(text):
            col = x + i
            if 0 <= col < self.width:
                self.canvas[y, col] = ch

    def clear(self) -> None:
        """Blank the whole canvas."""
        self.canvas.fill(" ")

    def to_text(self) -> str:
        """Return the canvas as newline-terminated rows."""
        return "".join("".join(row) + "\n" for row in self.canvas)

    def flush(self) -> None:
        """Write the current frame to the output stream."""
        out = self.stream if self.stream is not None else sys.stdout
        frame = self.to_text()
        if self.clear_screen:
            frame = _CLEAR + frame
        out.write(frame)
        out.flush()
