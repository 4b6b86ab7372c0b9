from __future__ import annotations
import importlib.util
import logging
from pathlib import Path
import yaml
from typing import Dict, Any, List

logger = logging.getLogger(__name__)

GAMES_DIR = Path(__file__).resolve().parents[2] / "games"


def available_games(games_dir: Path = GAMES_DIR) -> List[str]:
    """Folder names under games/ that carry both a manifest and a main.py."""
    if not games_dir.is_dir():
        return []
    return sorted(
        p.name for p in games_dir.iterdir()
        if p.is_dir() and (p / "manifest.yaml").exists() and (p / "main.py").exists()
    )


def load_game_manifest(game_root: Path) -> Dict[str, Any]:
    manifest = game_root / "manifest.yaml"
    if not manifest.exists():
        raise FileNotFoundError(f"Missing manifest.yaml in {game_root}")
    with open(manifest, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{manifest} must contain a mapping, got {type(data).__name__}")
    data.setdefault("options", {})
    logger.debug("loaded manifest %s: %s", manifest, data)
    return data


def load_game_module(game_root: Path):
    """
    Loads games/<id>/main.py module and returns the module object.
    The file must define a get_game() -> Game factory.
    """
    main_py = game_root / "main.py"
    if not main_py.exists():
        raise FileNotFoundError(f"Missing main.py in {game_root}")
    spec = importlib.util.spec_from_file_location(
        f"games.{game_root.name.replace('-', '_')}.main", main_py)
    module = importlib.util.module_from_spec(spec)
    assert spec and spec.loader
    spec.loader.exec_module(module)  # type: ignore[attr-defined]
    if not hasattr(module, "get_game"):
        raise AttributeError("Game module must define get_game()")
    return module
