"""
Project configuration.

A forge project is a folder with a ``forge.toml`` file naming the
definition to compile, the runtime modules generated code imports, and the
single generation target to build.
"""

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from forge.parser.shared.constants import (
    DEFAULT_BOUNDARY_MODULE,
    DEFAULT_CODEC_MODULE,
    DEFAULT_CONFIG_FILE,
    DEFAULT_OUTPUT_DIR,
    GENERATION_TARGETS,
    SUPPORTED_SCHEMA_FORMATS,
    TARGET_DATA_DRIVER,
    TARGET_WRAPPERS,
)
from forge.parser.shared.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class ForgeConfig:
    project_path: Path
    definition: Path
    module: str
    boundary: str = DEFAULT_BOUNDARY_MODULE
    codec: str = DEFAULT_CODEC_MODULE
    features: list[str] = field(default_factory=list)
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    schema_format: str = "json"

    @property
    def output_path(self) -> Path:
        return self.output_dir if self.output_dir.is_absolute() else self.project_path / self.output_dir

    @property
    def target(self) -> str:
        return select_target(self.features)


def select_target(features: list[str]) -> str:
    """
    Pick the single generation target.

    Raises:
        ConfigurationError: If no target, more than one, or an unknown one is selected
    """
    unknown = [feature for feature in features if feature not in GENERATION_TARGETS]
    if unknown:
        raise ConfigurationError(
            f"Unknown generation target(s): {', '.join(unknown)}. "
            f"Supported: {', '.join(GENERATION_TARGETS)}"
        )
    selected = list(dict.fromkeys(features))
    if not selected:
        raise ConfigurationError(
            f"No generation target selected; enable one of: {', '.join(GENERATION_TARGETS)}"
        )
    if len(selected) > 1:
        raise ConfigurationError(
            f"Generation targets are mutually exclusive, got: {', '.join(selected)}"
        )
    return selected[0]


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigurationError(f"[{name}] in {DEFAULT_CONFIG_FILE} must be a table")
    return section


def load_config(
    project_folder: str | Path,
    wrappers: bool = False,
    data_driver: bool = False,
) -> ForgeConfig:
    """
    Load ``forge.toml`` from a project folder.

    Args:
        project_folder: Path to the project folder
        wrappers: Select the wrapper target, overriding the file
        data_driver: Select the dispatch target, overriding the file

    Returns:
        The loaded configuration

    Raises:
        FileNotFoundError: If the folder has no forge.toml
        ConfigurationError: If the configuration is invalid
    """
    project_path = Path(project_folder).resolve()
    config_path = project_path / DEFAULT_CONFIG_FILE
    if not config_path.exists():
        raise FileNotFoundError(f"{DEFAULT_CONFIG_FILE} not found in {project_folder}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid {DEFAULT_CONFIG_FILE}: {e}") from e

    component = _section(data, "component")
    runtime = _section(data, "runtime")
    build = _section(data, "build")

    if "definition" not in component:
        raise ConfigurationError(f"{DEFAULT_CONFIG_FILE} must set 'definition' in [component]")
    definition = project_path / component["definition"]

    features = build.get("features", [])
    if isinstance(features, str):
        features = [features]
    if wrappers or data_driver:
        features = [TARGET_WRAPPERS] * wrappers + [TARGET_DATA_DRIVER] * data_driver
        logger.debug(f"Command line selects targets: {features}")

    schema_format = build.get("schema_format", "json")
    if schema_format not in SUPPORTED_SCHEMA_FORMATS:
        raise ConfigurationError(
            f"Invalid schema_format '{schema_format}'. Must be 'json' or 'yaml'."
        )

    return ForgeConfig(
        project_path=project_path,
        definition=definition,
        module=component.get("module", definition.stem),
        boundary=runtime.get("boundary", DEFAULT_BOUNDARY_MODULE),
        codec=runtime.get("codec", DEFAULT_CODEC_MODULE),
        features=list(features),
        output_dir=Path(build.get("output_dir", DEFAULT_OUTPUT_DIR)),
        schema_format=schema_format,
    )
