"""Generator settings for Towerforge.

Settings come from three layers, later ones winning:
1. Defaults (the original 2x2 tower, four layers high)
2. An optional YAML file with a ``generator`` section
3. TOWERFORGE_* environment variables (the CLI loads .env first)

Dimensions are not range-checked here; building the grid rejects bad
extents with InvalidDimensionsError.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

import yaml
from pydantic import BaseModel, ConfigDict


ENV_PREFIX = "TOWERFORGE_"

# Environment variable suffix -> settings field
_ENV_FIELDS: dict[str, str] = {
    "SIZE_X": "size_x",
    "HEIGHT": "height",
    "SIZE_Z": "size_z",
    "TILE_SIZE": "tile_size",
    "SEED": "seed",
    "TILES": "tiles_path",
    "STEP_DELAY": "step_delay",
}


class GeneratorSettings(BaseModel):
    """Parameters for one generation run.

    tile_size is not used by the generator itself; it is handed through to
    whatever places the tiles.
    """

    model_config = ConfigDict(frozen=True)

    size_x: int = 2
    height: int = 4
    size_z: int = 2
    tile_size: float = 2.0
    seed: int | None = None
    tiles_path: Path | None = None
    step_delay: float = 0.0  # Seconds between animated steps

    def with_overrides(self, **overrides) -> GeneratorSettings:
        """Return new settings with every non-None override applied."""
        update = {k: v for k, v in overrides.items() if v is not None}
        return self.model_validate({**self.model_dump(), **update})


def _read_yaml(path: Path) -> dict:
    """Read the generator section of a YAML settings file."""
    with open(path) as f:
        data = yaml.safe_load(f)
    if not data:
        return {}
    return dict(data.get("generator", {}) or {})


def _read_env(environ: Mapping[str, str]) -> dict:
    values = {}
    for suffix, field_name in _ENV_FIELDS.items():
        raw = environ.get(ENV_PREFIX + suffix)
        if raw is not None and raw != "":
            values[field_name] = raw
    return values


def load_settings(
    path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> GeneratorSettings:
    """
    Load settings from defaults, an optional YAML file and the environment.

    Args:
        path: YAML file to read (None = skip)
        environ: Environment mapping (None = os.environ)

    Raises:
        FileNotFoundError: If path is given but missing
        pydantic.ValidationError: If a value has the wrong type
    """
    values: dict = {}
    if path is not None:
        values.update(_read_yaml(Path(path)))
    values.update(_read_env(os.environ if environ is None else environ))
    return GeneratorSettings.model_validate(values)
