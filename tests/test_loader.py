from pathlib import Path

import pytest

from shapeclick.app.loader import available_games, load_game_manifest, load_game_module
from shapeclick.core.config import GameConfig, TerminationPolicy

REPO_GAMES = Path(__file__).resolve().parents[1] / "games"


def write_game(root: Path, manifest: str = "options: {}\n", main: str = "def get_game():\n    return 42\n"):
    root.mkdir(parents=True)
    if manifest is not None:
        (root / "manifest.yaml").write_text(manifest, encoding="utf-8")
    if main is not None:
        (root / "main.py").write_text(main, encoding="utf-8")
    return root


def test_loads_manifest_and_module(tmp_path):
    root = write_game(tmp_path / "demo", manifest="title: Demo\n")
    manifest = load_game_manifest(root)
    assert manifest == {"title": "Demo", "options": {}}
    assert load_game_module(root).get_game() == 42


def test_missing_manifest(tmp_path):
    root = write_game(tmp_path / "demo", manifest=None)
    with pytest.raises(FileNotFoundError):
        load_game_manifest(root)


def test_manifest_must_be_a_mapping(tmp_path):
    root = write_game(tmp_path / "demo", manifest="- just\n- a list\n")
    with pytest.raises(ValueError):
        load_game_manifest(root)


def test_module_without_factory(tmp_path):
    root = write_game(tmp_path / "demo", main="X = 1\n")
    with pytest.raises(AttributeError):
        load_game_module(root)


def test_available_games_skips_incomplete_folders(tmp_path):
    write_game(tmp_path / "b-game")
    write_game(tmp_path / "a-game")
    write_game(tmp_path / "broken", main=None)
    assert available_games(tmp_path) == ["a-game", "b-game"]
    assert available_games(tmp_path / "nope") == []


def test_bundled_manifest_builds_a_valid_config():
    assert "shape-click" in available_games(REPO_GAMES)
    manifest = load_game_manifest(REPO_GAMES / "shape-click")
    cfg = GameConfig.from_options(manifest["options"], placement_size=(900, 600)).validate()
    assert cfg.policy == TerminationPolicy.first_to(5)
    assert cfg.shape_count == 8
