"""Load and save overlay configuration from/to JSON files.

A config file holds canvas size, cell counts and the targeting parameters
(see ``OverlayConfig.to_dict`` for the layout). Any key that is missing falls
back to the reference 720x720 px / 24x24 cell configuration, so an empty
object ``{}`` is a valid file.

Used by ``frontend/app.py`` for its ``--config`` option.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .types import OverlayConfig

logger = logging.getLogger(__name__)


def load_config(path: Path | str) -> OverlayConfig:
    """Load a JSON config file and return a typed ``OverlayConfig``.

    Raises ValueError if the file is not a JSON object or holds invalid
    values. I/O and JSON decode errors propagate unchanged.
    """
    with open(path) as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(
            f"Config file must contain a JSON object, got {type(data).__name__}"
        )
    config = OverlayConfig.from_dict(data)
    logger.info("Loaded config from %s", path)
    return config


def save_config(config: OverlayConfig, path: Path | str) -> None:
    """Write a config to a JSON file.

    Creates parent directories if they don't exist.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(config.to_dict(), f, indent=2)
        f.write("\n")
