"""Grid — the neighborhood of shapes and its animation loop.

The Grid owns a flat store of ``width * height`` Shape slots addressed
as ``y * width + x`` for both reads and writes.  Every slot always holds
a Shape; EMPTY is itself a valid value.

Free slots are tracked in an explicit index so that picking a random
empty cell is O(1).  Filling and relocation therefore always terminate,
and a full grid surfaces as :class:`NoEmptyCellError` instead of an
endless retry loop.
"""

from __future__ import annotations

import math
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from neighborhood.core.random_source import RandomSource, default_source
from neighborhood.ui.terminal import Buffer
from neighborhood.utils.logger import get_logger
from neighborhood.world.shape import (
    DEFAULT_MIN_ALIKE,
    EMPTY,
    GLYPH_HEIGHT,
    GLYPH_WIDTH,
    OCCUPIED_KINDS,
    Shape,
    ShapeKind,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from neighborhood.world.shape import DrawTarget

    BufferFactory = Callable[[int, int], Buffer]

logger = get_logger(__name__)

FRAME_DELAY = 0.1  # seconds between frames


class OutOfBoundsError(IndexError):
    """Raised when a coordinate falls outside the grid.

    Attributes:
        operation: Name of the failing operation, e.g. ``Grid.get``.
    """

    def __init__(
        self,
        operation: str,
        x: int,
        y: int,
        width: int,
        height: int,
    ) -> None:
        self.operation = operation
        self.x = x
        self.y = y
        msg = (
            f"ERROR: `{operation}`: index out of bounds "
            f"({x}, {y}) for {width}x{height}"
        )
        super().__init__(msg)


class NoEmptyCellError(RuntimeError):
    """Raised when an operation needs a free slot and the grid is full."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"ERROR: `{operation}`: no empty cell available")


def fill_target(width: int, height: int, fill_ratio: float) -> int:
    """Return how many slots a grid of this size fills, rounding half up."""
    return math.floor(width * height * fill_ratio + 0.5)


@dataclass
class Grid:
    """A fixed-size neighborhood of shapes.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        fill_ratio: Fraction of slots filled with shapes at construction.
        rng: Source used for every random choice the grid makes.
        min_alike: Like-kind neighbour fraction a shape needs to be happy.
        slots: Flat slot store indexed as ``y * width + x``.
    """

    width: int
    height: int
    fill_ratio: float = 0.5
    rng: RandomSource = field(default_factory=default_source)
    min_alike: float = DEFAULT_MIN_ALIKE
    slots: list[Shape] = field(init=False, repr=False)
    _empty: list[tuple[int, int]] = field(init=False, repr=False)
    _empty_pos: dict[tuple[int, int], int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Allocate all-empty slots, then fill them to ``fill_ratio``."""
        if self.width < 1 or self.height < 1:
            msg = f"grid must be at least 1x1, got {self.width}x{self.height}"
            raise ValueError(msg)
        if not 0.0 <= self.fill_ratio <= 1.0:
            msg = f"fill_ratio must be within [0, 1], got {self.fill_ratio}"
            raise ValueError(msg)
        if not 0.0 <= self.min_alike <= 1.0:
            msg = f"min_alike must be within [0, 1], got {self.min_alike}"
            raise ValueError(msg)

        self.slots = [EMPTY] * (self.width * self.height)
        self._empty = [(x, y) for y in range(self.height) for x in range(self.width)]
        self._empty_pos = {cell: i for i, cell in enumerate(self._empty)}
        self.populate(fill_target(self.width, self.height, self.fill_ratio))

    # -- Slot access ---------------------------------------------------------

    def _index(self, operation: str, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBoundsError(operation, x, y, self.width, self.height)
        return y * self.width + x

    def get(self, x: int, y: int) -> Shape:
        """Return the shape at ``(x, y)``.

        Raises:
            OutOfBoundsError: If the coordinates are outside the grid.
        """
        return self.slots[self._index("Grid.get", x, y)]

    def set(self, x: int, y: int, shape: Shape) -> None:
        """Overwrite the slot at ``(x, y)`` with ``shape``.

        Raises:
            OutOfBoundsError: If the coordinates are outside the grid.
        """
        i = self._index("Grid.set", x, y)
        was_empty = self.slots[i].is_empty
        self.slots[i] = shape
        if was_empty and not shape.is_empty:
            self._claim((x, y))
        elif not was_empty and shape.is_empty:
            self._release((x, y))

    # -- Empty-cell index ----------------------------------------------------

    def _claim(self, cell: tuple[int, int]) -> None:
        """Drop ``cell`` from the empty index (swap-remove)."""
        pos = self._empty_pos.pop(cell)
        last = self._empty.pop()
        if last != cell:
            self._empty[pos] = last
            self._empty_pos[last] = pos

    def _release(self, cell: tuple[int, int]) -> None:
        self._empty_pos[cell] = len(self._empty)
        self._empty.append(cell)

    def _random_empty_cell(self, operation: str) -> tuple[int, int]:
        if not self._empty:
            raise NoEmptyCellError(operation)
        return self._empty[self.rng.uniform(0, len(self._empty) - 1)]

    @property
    def empty_count(self) -> int:
        """Number of slots currently holding EMPTY."""
        return len(self._empty)

    @property
    def occupied_count(self) -> int:
        """Number of slots currently holding a shape."""
        return self.width * self.height - len(self._empty)

    # -- Population ----------------------------------------------------------

    def populate(self, count: int) -> None:
        """Place ``count`` shapes of random kind on random empty cells.

        Args:
            count: Number of shapes to add.

        Raises:
            NoEmptyCellError: If the grid runs out of empty cells.
        """
        for _ in range(count):
            x, y = self._random_empty_cell("Grid.populate")
            self.set(x, y, Shape(self.rng.choice(OCCUPIED_KINDS)))
        logger.debug(
            "Filled %d of %d cells on a %dx%d grid",
            self.occupied_count,
            self.width * self.height,
            self.width,
            self.height,
        )

    def move(self, old_x: int, old_y: int) -> tuple[int, int]:
        """Relocate the shape at ``(old_x, old_y)`` to a random empty cell.

        The source value is read before the source slot is cleared.
        Moving an EMPTY slot changes nothing.

        Args:
            old_x: Column of the shape to move.
            old_y: Row of the shape to move.

        Returns:
            The destination coordinates.

        Raises:
            OutOfBoundsError: If the source is outside the grid.
            NoEmptyCellError: If there is nowhere to move to.
        """
        shape = self.get(old_x, old_y)
        if shape.is_empty:
            return old_x, old_y

        x, y = self._random_empty_cell("Grid.move")
        self.set(x, y, shape)
        self.set(old_x, old_y, EMPTY)
        return x, y

    # -- Queries -------------------------------------------------------------

    def census(self) -> dict[ShapeKind, int]:
        """Return the number of slots holding each kind, EMPTY included."""
        counts = Counter(shape.kind for shape in self.slots)
        return {kind: counts.get(kind, 0) for kind in ShapeKind}

    def unhappy_cells(self) -> list[tuple[int, int]]:
        """Return the coordinates of every currently unhappy shape."""
        return [
            (x, y)
            for y in range(self.height)
            for x in range(self.width)
            if not self.get(x, y).is_happy(self, x, y, self.min_alike)
        ]

    # -- Tick ----------------------------------------------------------------

    def render(self, target: DrawTarget) -> None:
        """Draw every cell into ``target`` at its glyph-scaled offset."""
        for y in range(self.height):
            for x in range(self.width):
                self.get(x, y).draw(target, x * GLYPH_WIDTH, y * GLYPH_HEIGHT)

    def relocate_unhappy(self) -> int:
        """Scan every cell once, moving each unhappy shape.

        A shape moved onto a cell not yet scanned is evaluated again when
        the scan reaches it.

        Returns:
            Number of relocations performed.
        """
        moved = 0
        for y in range(self.height):
            for x in range(self.width):
                if not self.get(x, y).is_happy(self, x, y, self.min_alike):
                    self.move(x, y)
                    moved += 1
        return moved

    def animate(
        self,
        frames: int,
        *,
        buffer_factory: BufferFactory | None = None,
        frame_delay: float = FRAME_DELAY,
        sleep: Callable[[float], None] = time.sleep,
        stop: Callable[[], bool] | None = None,
    ) -> list[int]:
        """Render, flush, relocate and pause, ``frames`` times.

        There is no early exit when the neighborhood settles; only the
        ``stop`` hook can end the run before ``frames`` ticks.

        Args:
            frames: Number of ticks to run.
            buffer_factory: Builds a render target from its total
                ``(width, height)`` in characters.  Defaults to a
                terminal :class:`Buffer`.
            frame_delay: Seconds to pause at the end of each tick.
            sleep: Pause function, replaceable for tests.
            stop: Polled before every tick; returning True cancels.

        Returns:
            Relocation count of each completed tick.
        """
        if frames < 0:
            msg = f"frames must be non-negative, got {frames}"
            raise ValueError(msg)
        factory = buffer_factory or Buffer

        history: list[int] = []
        for tick in range(frames):
            if stop is not None and stop():
                logger.info("Animation stopped after %d of %d frames", tick, frames)
                break

            target = factory(self.width * GLYPH_WIDTH, self.height * GLYPH_HEIGHT)
            self.render(target)
            target.flush()

            moved = self.relocate_unhappy()
            history.append(moved)
            logger.debug("Tick %d: relocated %d shapes", tick, moved)

            if frame_delay > 0:
                sleep(frame_delay)
        return history
