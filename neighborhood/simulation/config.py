"""Config — load simulation parameters from YAML files.

Grid size, fill ratio, the happiness threshold and frame pacing live in
YAML and are parsed into a typed dataclass here.  Missing keys fall back
to the dataclass defaults.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        seed: RNG seed for deterministic replay, or None to seed from
            OS entropy.
        width: Number of grid columns.
        height: Number of grid rows.
        fill_ratio: Fraction of cells holding a shape at start.  Must lie
            strictly between 0 and 1.
        min_alike: Fraction of like-kind neighbours a shape needs to be
            happy.
        frames: Number of ticks to animate.
        frame_delay_ms: Pause at the end of each tick, in milliseconds.
        clear_screen: Clear the terminal before drawing each frame.
    """

    seed: int | None = None
    width: int = 20
    height: int = 20
    fill_ratio: float = 0.5
    min_alike: float = 0.4
    frames: int = 100
    frame_delay_ms: int = 100
    clear_screen: bool = True

    @property
    def frame_delay(self) -> float:
        """Frame delay in seconds."""
        return self.frame_delay_ms / 1000.0

    def validate(self) -> None:
        """Check every field is usable.

        Raises:
            ValueError: If any value is out of range.
        """
        if self.width < 1 or self.height < 1:
            msg = f"grid must be at least 1x1, got {self.width}x{self.height}"
            raise ValueError(msg)
        if not 0.0 < self.fill_ratio < 1.0:
            msg = f"fill_ratio must be between 0 and 1, got {self.fill_ratio}"
            raise ValueError(msg)
        if not 0.0 <= self.min_alike <= 1.0:
            msg = f"min_alike must be within [0, 1], got {self.min_alike}"
            raise ValueError(msg)
        if self.frames < 0:
            msg = f"frames must be non-negative, got {self.frames}"
            raise ValueError(msg)
        if self.frame_delay_ms < 0:
            msg = f"frame_delay_ms must be non-negative, got {self.frame_delay_ms}"
            raise ValueError(msg)

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated, validated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ValueError: If a value is out of range.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        config = cls(
            seed=data.get("seed", cls.seed),
            width=data.get("width", cls.width),
            height=data.get("height", cls.height),
            fill_ratio=data.get("fill_ratio", cls.fill_ratio),
            min_alike=data.get("min_alike", cls.min_alike),
            frames=data.get("frames", cls.frames),
            frame_delay_ms=data.get("frame_delay_ms", cls.frame_delay_ms),
            clear_screen=data.get("clear_screen", cls.clear_screen),
        )
        config.validate()
        return config
