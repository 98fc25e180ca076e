"""Shared fixtures for the Neighborhood test suite."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from neighborhood.core.random_source import RandomSource
from neighborhood.simulation.config import SimulationConfig
from neighborhood.ui.terminal import Buffer
from neighborhood.world.grid import Grid


class RecordingBuffer(Buffer):
    """A buffer whose flush appends the frame text to a shared list."""

    def __init__(self, width: int, height: int, frames: list[str]) -> None:
        super().__init__(width, height, clear_screen=False)
        self.frames = frames

    def flush(self) -> None:
        self.frames.append(self.to_text())


@dataclass
class FrameRecorder:
    """Collects the text of every flushed frame."""

    frames: list[str] = field(default_factory=list)

    def buffer(self, width: int, height: int) -> Buffer:
        """Buffer factory for ``Grid.animate``."""
        return RecordingBuffer(width, height, self.frames)


@pytest.fixture
def rng() -> RandomSource:
    """A deterministic random source for reproducible tests."""
    return RandomSource(seed=12345)


@pytest.fixture
def small_grid(rng: RandomSource) -> Grid:
    """A half-filled 8x8 grid for fast tests."""
    return Grid(width=8, height=8, fill_ratio=0.5, rng=rng)


@pytest.fixture
def empty_grid(rng: RandomSource) -> Grid:
    """A 3x3 grid with no shapes placed."""
    return Grid(width=3, height=3, fill_ratio=0.0, rng=rng)


@pytest.fixture
def default_config() -> SimulationConfig:
    """Small, fast, seeded config (no YAML file needed)."""
    return SimulationConfig(
        seed=42,
        width=6,
        height=5,
        frames=3,
        frame_delay_ms=0,
        clear_screen=False,
    )


@pytest.fixture
def recorder() -> FrameRecorder:
    """Records frames flushed by an animation."""
    return FrameRecorder()
