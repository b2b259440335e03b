"""Scenario files.

A scenario is a GameConfig stored as JSON under ``scenarios/``. Filenames
may be given with or without the ``.json`` suffix.
"""

import json
import logging
from pathlib import Path
from typing import Any, List

from ..schemas import GameConfig

logger = logging.getLogger(__name__)

SCENARIO_DIR = Path.cwd() / "scenarios"
SUFFIX = ".json"


def _scenario_path(filename: str, directory: Path | None = None) -> Path:
    if not filename.endswith(SUFFIX):
        filename += SUFFIX
    return (directory or SCENARIO_DIR) / filename


def list_scenarios(directory: Path | None = None) -> List[str]:
    """Scenario filenames in ``directory`` (default SCENARIO_DIR), sorted."""
    folder = directory or SCENARIO_DIR
    if not folder.is_dir():
        return []
    return sorted(f.name for f in folder.glob(f"*{SUFFIX}"))


def load_scenario(filename: str, directory: Path | None = None) -> GameConfig:
    """Read and validate one scenario.

    Raises:
        FileNotFoundError: No such scenario file.
        ValidationError: The file does not describe a valid GameConfig.
    """
    path = _scenario_path(filename, directory)
    if not path.exists():
        raise FileNotFoundError(f"Scenario file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        config = GameConfig.model_validate(json.load(f))
    logger.info(f"Loaded scenario {config.name!r} from {path.name}")
    return config


def describe_scenarios(directory: Path | None = None) -> List[dict[str, Any]]:
    """One summary row per scenario for a picker: file, name, player archetype."""
    rows = []
    for filename in list_scenarios(directory):
        config = load_scenario(filename, directory)
        rows.append(
            {
                "file": filename,
                "name": config.name,
                "description": config.description,
                "participant_type": config.participant_type,
                "rules": len(config.automation),
                "network": config.network.enabled,
            }
        )
    return rows


def save_scenario(
    config: GameConfig, filename: str, directory: Path | None = None
) -> Path:
    """Write ``config`` as indented JSON and return the file path."""
    path = _scenario_path(filename, directory)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(config.model_dump_json(indent=2))
    logger.info(f"Saved scenario {config.name!r} to {path}")
    return path
