"""Shape — the occupant stored in each neighborhood slot.

A Shape is a small immutable value: copying it out of one slot and into
another never aliases state.  Each kind knows its ASCII glyph and the
shared happiness rule used to decide whether it wants to relocate.

Every glyph has the same fixed footprint of ``GLYPH_WIDTH`` by
``GLYPH_HEIGHT`` characters so the render target can be sized without
an instance.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from neighborhood.world.grid import Grid

GLYPH_WIDTH = 4
GLYPH_HEIGHT = 2

DEFAULT_MIN_ALIKE = 0.4


class ShapeKind(Enum):
    """Occupant tag.  EMPTY marks a free slot."""

    EMPTY = auto()
    TRIANGLE = auto()
    SQUARE = auto()


OCCUPIED_KINDS: tuple[ShapeKind, ...] = tuple(
    kind for kind in ShapeKind if kind is not ShapeKind.EMPTY
)

_GLYPHS: dict[ShapeKind, tuple[str, ...]] = {
    ShapeKind.EMPTY: ("    ", "    "),
    ShapeKind.TRIANGLE: (" /\\ ", "/__\\"),
    ShapeKind.SQUARE: ("+--+", "|__|"),
}


class DrawTarget(Protocol):
    """Anything a shape can paint its glyph into."""

    def write(self, x: int, y: int, text: str) -> None: ...


@dataclass(frozen=True)
class Shape:
    """A single occupant value.

    Attributes:
        kind: Which occupant this is (or EMPTY).
    """

    kind: ShapeKind = ShapeKind.EMPTY

    @property
    def is_empty(self) -> bool:
        """Return True if this slot holds no occupant."""
        return self.kind is ShapeKind.EMPTY

    @property
    def glyph(self) -> tuple[str, ...]:
        """Return the glyph rows for this kind, top to bottom."""
        return _GLYPHS[self.kind]

    def draw(self, target: DrawTarget, offset_x: int, offset_y: int) -> None:
        """Paint this shape's glyph with its top-left corner at the offset.

        Args:
            target: Render target accepting ``write(x, y, text)``.
            offset_x: Column of the glyph's left edge in the target.
            offset_y: Row of the glyph's top edge in the target.
        """
        for row, line in enumerate(self.glyph):
            target.write(offset_x, offset_y + row, line)

    def is_happy(
        self,
        grid: Grid,
        x: int,
        y: int,
        min_alike: float = DEFAULT_MIN_ALIKE,
    ) -> bool:
        """Decide whether this shape is content at ``(x, y)``.

        Looks at the up-to-eight surrounding cells.  Empty slots are
        always happy, and so is a shape with no occupied neighbours.
        Otherwise the shape is happy when the fraction of occupied
        neighbours sharing its kind is at least ``min_alike``.

        Args:
            grid: The neighborhood, inspected only through ``get``.
            x: Column of this shape.
            y: Row of this shape.
            min_alike: Required fraction of like-kind neighbours.

        Returns:
            True if the shape should stay where it is.
        """
        if self.is_empty:
            return True

        alike = 0
        different = 0
        for ny in range(max(0, y - 1), min(grid.height, y + 2)):
            for nx in range(max(0, x - 1), min(grid.width, x + 2)):
                if nx == x and ny == y:
                    continue
                neighbour = grid.get(nx, ny)
                if neighbour.is_empty:
                    continue
                if neighbour.kind is self.kind:
                    alike += 1
                else:
                    different += 1

        total = alike + different
        if total == 0:
            return True
        return alike / total >= min_alike


EMPTY = Shape(ShapeKind.EMPTY)
