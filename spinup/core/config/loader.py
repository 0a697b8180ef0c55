"""
Configuration loader — reads a spinup file into domain models.

Accepts TOML, YAML or JSON.  The syntax is guessed from the file
extension; files with an unknown (or no) extension are tried as TOML,
then YAML, then JSON.  The parsed mapping is validated against the
pydantic schema and bound to the resolved host.
"""

from __future__ import annotations

import json
import logging
import tomllib
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from spinup.core.errors import SpinupError
from spinup.core.models.configuration import Configuration
from spinup.core.models.system import SystemDetails

logger = logging.getLogger(__name__)


class ConfigError(SpinupError):
    """Raised when the configuration file is missing, unreadable or invalid."""


class FileSyntax(str, Enum):
    TOML = "toml"
    YAML = "yaml"
    JSON = "json"
    UNKNOWN = "unknown"


_EXTENSIONS = {
    ".toml": FileSyntax.TOML,
    ".yaml": FileSyntax.YAML,
    ".yml": FileSyntax.YAML,
    ".json": FileSyntax.JSON,
}


def guess_file_syntax(path: Path) -> FileSyntax:
    """Guess the syntax from the file extension (case-insensitive)."""
    return _EXTENSIONS.get(path.suffix.lower(), FileSyntax.UNKNOWN)


def _parse_as(contents: str, syntax: FileSyntax) -> Any:
    if syntax is FileSyntax.TOML:
        return tomllib.loads(contents)
    if syntax is FileSyntax.YAML:
        return yaml.safe_load(contents)
    return json.loads(contents)


_PARSE_ERRORS = (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError)


def parse_file_contents(contents: str, syntax: FileSyntax) -> dict[str, Any]:
    """Parse raw text into a mapping.

    Raises:
        ConfigError: The text does not parse as ``syntax`` (or, for
            ``UNKNOWN``, as any supported syntax), or is not a mapping.
    """
    if syntax is not FileSyntax.UNKNOWN:
        try:
            data = _parse_as(contents, syntax)
        except _PARSE_ERRORS as e:
            raise ConfigError(f"Invalid {syntax.value.upper()}: {e}") from e
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"Expected a {syntax.value.upper()} mapping, got {type(data).__name__}"
            )
        return data

    for candidate in (FileSyntax.TOML, FileSyntax.YAML, FileSyntax.JSON):
        try:
            data = _parse_as(contents, candidate)
        except _PARSE_ERRORS:
            continue
        # A bare scalar parses as YAML but is not a configuration
        if isinstance(data, dict):
            logger.debug("Parsed configuration as %s", candidate.value)
            return data

    raise ConfigError("Was unable to parse config file contents using any syntax")


def build_configuration(
    data: dict[str, Any],
    system_details: SystemDetails | None = None,
) -> Configuration:
    """Validate a parsed mapping and bind it to the host."""
    data = {k: v for k, v in data.items() if k != "system_details"}
    try:
        config = Configuration.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    if system_details is None:
        from spinup.core.services.host_detect import detect_system_details

        system_details = detect_system_details()

    return config.with_system(system_details)


def load_configuration(
    path: Path | str,
    system_details: SystemDetails | None = None,
) -> Configuration:
    """Load and validate a spinup configuration file.

    Args:
        path: Path to a ``.toml``, ``.yaml``/``.yml`` or ``.json`` file.
        system_details: Host identity to bind; probed from os-release
            when omitted.

    Returns:
        Validated Configuration.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    path = Path(path).expanduser()

    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    if not path.is_file():
        raise ConfigError(f"{path} is not a file")

    logger.debug("Loading configuration from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = parse_file_contents(raw, guess_file_syntax(path))
    except ConfigError as e:
        raise ConfigError(f"{path}: {e}") from e

    config = build_configuration(data, system_details)
    logger.info(
        "Loaded configuration from %s (host: %s)", path, config.system_details.target_os.value,
    )
    return config


def dump_configuration(config: Configuration, fmt: str = "yaml") -> str:
    """Render a parsed configuration back as YAML or JSON."""
    data = config.model_dump(mode="json", by_alias=True, exclude_none=True)
    if fmt == "json":
        return json.dumps(data, indent=2)
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False)
    raise ConfigError(f"Unsupported output format: {fmt}")
