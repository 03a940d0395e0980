"""Frontend launching from the command-line entry point."""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

import main


@pytest.fixture
def launched(monkeypatch: pytest.MonkeyPatch) -> dict:
    calls: dict = {}

    def import_module(name: str) -> SimpleNamespace:
        calls["module"] = name
        return SimpleNamespace(run=lambda **kwargs: calls.update(kwargs))

    monkeypatch.setattr(main, "importlib", SimpleNamespace(import_module=import_module))
    return calls


@pytest.mark.parametrize("frontend", [main.Frontend.pygame, main.Frontend.pyqt])
def test_gui_images_do_not_follow_data_dir(
    frontend: main.Frontend, launched: dict, tmp_path: Path
) -> None:
    main._launch(frontend, 6, tmp_path / "elsewhere", 7)

    assert launched["module"] == main._RUNNERS[frontend]
    assert launched["images_dir"] == main.ASSETS_DIR / "images"
    assert launched["data_dir"] == tmp_path / "elsewhere"
    assert (launched["pairs"], launched["seed"]) == (6, 7)


@pytest.mark.parametrize("frontend", [main.Frontend.vanilla, main.Frontend.rich])
def test_terminal_frontends_get_no_images(
    frontend: main.Frontend, launched: dict, tmp_path: Path
) -> None:
    main._launch(frontend, 4, tmp_path, None)
    assert "images_dir" not in launched
    assert launched["data_dir"] == tmp_path
