"""Smoke tests for the viewers and the CLI (no display required)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from neighborhood.simulation.engine import SimulationEngine
from neighborhood.ui.pygame_client import PygameBuffer, PygameViewer
from neighborhood.world.grid import OutOfBoundsError

if TYPE_CHECKING:
    from pathlib import Path


def test_pygame_viewer_importable() -> None:
    """PygameViewer class is importable without initialising pygame."""
    assert PygameViewer is not None
    assert PygameBuffer is not None


def test_main_module_importable() -> None:
    """The __main__ module is importable and exposes main()."""
    from neighborhood.__main__ import main

    assert callable(main)


def test_overrides_apply_on_top_of_yaml(tmp_path: Path) -> None:
    from neighborhood.__main__ import build_parser, load_config

    yaml_file = tmp_path / "cfg.yaml"
    yaml_file.write_text("width: 9\nheight: 7\nframes: 50\n")
    args = build_parser().parse_args(
        ["-c", str(yaml_file), "--frames", "2", "--seed", "5"],
    )
    cfg = load_config(args)
    assert cfg.width == 9
    assert cfg.height == 7
    assert cfg.frames == 2
    assert cfg.seed == 5


def test_main_runs_in_terminal(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    from neighborhood.__main__ import main

    main(
        [
            "-c",
            str(tmp_path / "missing.yaml"),
            "--frames",
            "2",
            "--width",
            "3",
            "--height",
            "2",
            "--delay-ms",
            "0",
            "--seed",
            "3",
        ],
    )
    out = capsys.readouterr().out
    assert out.count("\x1b[H\x1b[2J") == 2


def test_main_rejects_bad_config(tmp_path: Path) -> None:
    from neighborhood.__main__ import main

    with pytest.raises(SystemExit) as excinfo:
        main(["-c", str(tmp_path / "missing.yaml"), "--fill-ratio", "1.5"])
    assert excinfo.value.code == 2


def test_out_of_bounds_is_fatal(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    from neighborhood.__main__ import main

    def explode(self: SimulationEngine, *args: object, **kwargs: object) -> None:
        raise OutOfBoundsError("Grid.get", 3, 0, 3, 2)

    monkeypatch.setattr(SimulationEngine, "run", explode)
    with pytest.raises(SystemExit) as excinfo:
        main(["-c", str(tmp_path / "missing.yaml"), "--width", "3", "--height", "2"])
    assert excinfo.value.code == 1
    assert "ERROR: `Grid.get`: index out of bounds" in capsys.readouterr().err
