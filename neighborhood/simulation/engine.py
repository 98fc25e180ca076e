"""SimulationEngine — wires config, randomness, grid and render target.

Owns the top-level simulation state.  Each tick follows the order the
grid's animation loop defines:

1. Draw every cell into a fresh render target
2. Flush the frame
3. Relocate unhappy shapes
4. Pause for the configured frame delay
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TextIO

from neighborhood.core.random_source import RandomSource, default_source
from neighborhood.simulation.config import SimulationConfig
from neighborhood.ui.terminal import Buffer
from neighborhood.utils.logger import get_logger
from neighborhood.world.grid import Grid

if TYPE_CHECKING:
    from collections.abc import Callable

    from neighborhood.world.grid import BufferFactory
    from neighborhood.world.shape import ShapeKind

logger = get_logger(__name__)


@dataclass
class SimulationEngine:
    """Drives the neighborhood forward frame by frame.

    Attributes:
        config: Loaded simulation configuration.
        stream: Output stream for terminal frames (stdout when None).
        rng: Random source shared by every grid operation.
        grid: The neighborhood.
        tick: Number of frames completed so far.
        history: Relocation count of every completed frame.
    """

    config: SimulationConfig = field(default_factory=SimulationConfig)
    stream: TextIO | None = None
    rng: RandomSource = field(init=False)
    grid: Grid = field(init=False)
    tick: int = 0
    history: list[int] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        """Build the random source and the filled grid from config."""
        self.config.validate()
        if self.config.seed is None:
            self.rng = default_source()
        else:
            self.rng = RandomSource(self.config.seed)
        self.grid = Grid(
            width=self.config.width,
            height=self.config.height,
            fill_ratio=self.config.fill_ratio,
            rng=self.rng,
            min_alike=self.config.min_alike,
        )
        logger.info(
            "Neighborhood %dx%d with %d shapes (seed=%s)",
            self.grid.width,
            self.grid.height,
            self.grid.occupied_count,
            self.config.seed,
        )

    def terminal_buffer(self, width: int, height: int) -> Buffer:
        """Build a terminal render target honouring the config."""
        return Buffer(
            width,
            height,
            stream=self.stream,
            clear_screen=self.config.clear_screen,
        )

    def run(
        self,
        frames: int | None = None,
        *,
        buffer_factory: BufferFactory | None = None,
        stop: Callable[[], bool] | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> list[int]:
        """Animate the neighborhood.

        Args:
            frames: Ticks to run; defaults to ``config.frames``.
            buffer_factory: Render target builder; defaults to
                :meth:`terminal_buffer`.
            stop: Cancellation hook polled before every tick.
            sleep: Pause function used between ticks.

        Returns:
            Relocation count of each frame run by this call.
        """
        n = self.config.frames if frames is None else frames
        moved = self.grid.animate(
            n,
            buffer_factory=buffer_factory or self.terminal_buffer,
            frame_delay=self.config.frame_delay,
            sleep=sleep,
            stop=stop,
        )
        self.tick += len(moved)
        self.history.extend(moved)
        logger.info(
            "Ran %d frames with %d relocations, %d shapes still unhappy",
            len(moved),
            sum(moved),
            self.unhappy_count(),
        )
        return moved

    def census(self) -> dict[ShapeKind, int]:
        """Return per-kind slot counts for the current grid."""
        return self.grid.census()

    def unhappy_count(self) -> int:
        """Return how many shapes would move on the next tick."""
        return len(self.grid.unhappy_cells())
