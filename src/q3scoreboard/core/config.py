"""
Configuration Management for q3scoreboard

Provides configuration loading from multiple sources:
- Default values
- Configuration files (YAML, TOML, JSON)
- Environment variables
- Command line arguments

Configuration precedence (highest to lowest):
1. Command line arguments
2. Environment variables (Q3SCOREBOARD_*)
3. Configuration file
4. Default values
"""

import codecs
import json
import logging
import os
import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from q3scoreboard.core.constants import CAUSE_MARKER, WORLD_ID, ColorMode
from q3scoreboard.core.errors import ConfigError

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Dataclasses
# ============================================================================


@dataclass
class ParserConfig:
    """Configuration for log message parsing."""

    # Killer id used by the server for environmental deaths
    world_id: int = WORLD_ID
    # Death causes start at the last occurrence of this marker
    cause_marker: str = CAUSE_MARKER
    encoding: str = "utf-8"


@dataclass
class SummaryConfig:
    """Configuration for match summaries."""

    # Only output this match number (None = every match)
    game_to_show: int | None = None
    # Output the last match even when the log ends without ShutdownGame
    finish_unterminated: bool = True


@dataclass
class OutputConfig:
    """Configuration for JSON output."""

    color: str = ColorMode.AUTO
    json_indent: int = 2
    # rich color system used when highlighting ("standard", "256", "truecolor")
    color_system: str = "truecolor"


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: str | None = None
    file_max_bytes: int = 10 * 1024 * 1024  # 10MB
    file_backup_count: int = 5


@dataclass
class Q3ScoreboardConfig:
    """Main configuration container."""

    parser: ParserConfig = field(default_factory=ParserConfig)
    summary: SummaryConfig = field(default_factory=SummaryConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Version of the config format
    config_version: str = "1.0"


SECTIONS = ("parser", "summary", "output", "logging")

# Color systems understood by rich
COLOR_SYSTEMS = ("standard", "256", "truecolor", "windows")


# ============================================================================
# Configuration Loading
# ============================================================================


def get_default_config_paths() -> list[Path]:
    """Get the default paths to search for configuration files."""
    paths = []

    # Current directory
    paths.append(Path.cwd() / "q3scoreboard.yaml")
    paths.append(Path.cwd() / "q3scoreboard.toml")
    paths.append(Path.cwd() / "q3scoreboard.json")
    paths.append(Path.cwd() / ".q3scoreboard.yaml")

    # User home directory
    home = Path.home()
    paths.append(home / ".config" / "q3scoreboard" / "config.yaml")
    paths.append(home / ".config" / "q3scoreboard" / "config.toml")

    # XDG config directory
    xdg_config = os.environ.get("XDG_CONFIG_HOME", str(home / ".config"))
    paths.append(Path(xdg_config) / "q3scoreboard" / "config.yaml")

    return paths


def load_yaml_config(path: Path) -> dict[str, Any]:
    """Load configuration from a YAML file."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_toml_config(path: Path) -> dict[str, Any]:
    """Load configuration from a TOML file."""
    with open(path, "rb") as f:
        return tomllib.load(f)


def load_json_config(path: Path) -> dict[str, Any]:
    """Load configuration from a JSON file."""
    with open(path) as f:
        return json.load(f)


def load_config_file(path: Path) -> dict[str, Any]:
    """
    Load configuration from a file, detecting format from extension.

    Raises:
        ConfigError: The file has an unknown extension or can't be parsed.
    """
    if not path.exists():
        return {}

    suffix = path.suffix.lower()
    try:
        if suffix in (".yaml", ".yml"):
            data = load_yaml_config(path)
        elif suffix == ".toml":
            data = load_toml_config(path)
        elif suffix == ".json":
            data = load_json_config(path)
        else:
            raise ConfigError(f"Unknown config file format: '{suffix}'")
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config file '{path}'") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{path}' must contain a mapping")
    return data


def _convert_env_value(value: str) -> Any:
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    elif value.lower() in ("none", "null", ""):
        return None
    elif value.isdigit():
        return int(value)
    return value


def load_env_config() -> dict[str, Any]:
    """Load configuration from environment variables."""
    config: dict[str, Any] = {}

    env_mappings = {
        "Q3SCOREBOARD_WORLD_ID": ("parser", "world_id"),
        "Q3SCOREBOARD_CAUSE_MARKER": ("parser", "cause_marker"),
        "Q3SCOREBOARD_ENCODING": ("parser", "encoding"),
        "Q3SCOREBOARD_GAME": ("summary", "game_to_show"),
        "Q3SCOREBOARD_FINISH_UNTERMINATED": ("summary", "finish_unterminated"),
        "Q3SCOREBOARD_COLOR": ("output", "color"),
        "Q3SCOREBOARD_JSON_INDENT": ("output", "json_indent"),
        "Q3SCOREBOARD_LOG_LEVEL": ("logging", "level"),
        "Q3SCOREBOARD_LOG_FILE": ("logging", "file"),
    }

    for env_var, (section, key) in env_mappings.items():
        value = os.environ.get(env_var)
        if value is not None:
            config.setdefault(section, {})[key] = _convert_env_value(value)

    return config


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge two configuration dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def dict_to_config(data: dict[str, Any]) -> Q3ScoreboardConfig:
    """Convert a dictionary to Q3ScoreboardConfig, ignoring unknown keys."""
    config = Q3ScoreboardConfig()

    for section_name in SECTIONS:
        section_data = data.get(section_name) or {}
        section = getattr(config, section_name)
        known = {f.name for f in fields(section)}
        for key, value in section_data.items():
            if key in known:
                setattr(section, key, value)
            else:
                logger.warning(f"Unknown config key: {section_name}.{key}")

    if "config_version" in data:
        config.config_version = str(data["config_version"])

    validate_config(config)
    return config


def _invalid(name: str, value: Any, expected: str) -> ConfigError:
    return ConfigError(f"Invalid {name} {value!r} (expected {expected})")


def _is_int(value: Any) -> bool:
    # bool is an int subclass
    return isinstance(value, int) and not isinstance(value, bool)


def _check_int(name: str, value: Any, minimum: int = 0) -> None:
    if not _is_int(value) or value < minimum:
        raise _invalid(name, value, f"an integer >= {minimum}")


def validate_config(config: Q3ScoreboardConfig) -> None:
    """
    Check every setting, normalizing the ones read as plain strings.

    Raises:
        ConfigError: A setting has the wrong type or an unsupported value.
    """
    parser, summary, output, log = config.parser, config.summary, config.output, config.logging

    _check_int("parser.world_id", parser.world_id)
    if not isinstance(parser.cause_marker, str) or not parser.cause_marker:
        raise _invalid("parser.cause_marker", parser.cause_marker, "a non-empty string")
    try:
        codecs.lookup(parser.encoding)
    except (LookupError, TypeError) as e:
        raise _invalid("parser.encoding", parser.encoding, "a known text encoding") from e

    if summary.game_to_show is not None:
        _check_int("summary.game_to_show", summary.game_to_show, minimum=1)
    if not isinstance(summary.finish_unterminated, bool):
        raise _invalid("summary.finish_unterminated", summary.finish_unterminated, "true or false")

    try:
        output.color = ColorMode(output.color)
    except ValueError as e:
        choices = ", ".join(mode.value for mode in ColorMode)
        raise _invalid("output.color", output.color, f"one of: {choices}") from e
    _check_int("output.json_indent", output.json_indent)
    # YAML reads `color_system: 256` as a number
    if _is_int(output.color_system):
        output.color_system = str(output.color_system)
    if output.color_system not in COLOR_SYSTEMS:
        raise _invalid("output.color_system", output.color_system, f"one of: {', '.join(COLOR_SYSTEMS)}")

    if not isinstance(log.level, str) or not isinstance(logging.getLevelName(log.level.upper()), int):
        raise _invalid("logging.level", log.level, "DEBUG, INFO, WARNING, ERROR or CRITICAL")
    if log.file is not None and not isinstance(log.file, str):
        raise _invalid("logging.file", log.file, "a file path")
    _check_int("logging.file_max_bytes", log.file_max_bytes)
    _check_int("logging.file_backup_count", log.file_backup_count)


def load_config(config_file: Path | None = None, include_env: bool = True) -> Q3ScoreboardConfig:
    """
    Load configuration from all sources.

    Args:
        config_file: Explicit path to a config file (optional)
        include_env: Whether to include environment variables

    Returns:
        Merged Q3ScoreboardConfig
    """
    config_data: dict[str, Any] = {}

    # Try to find and load a config file
    if config_file:
        if not config_file.exists():
            raise ConfigError(f"Config file not found: '{config_file}'")
        config_data = load_config_file(config_file)
        logger.info(f"Loaded config from: {config_file}")
    else:
        for path in get_default_config_paths():
            if path.exists():
                config_data = load_config_file(path)
                logger.info(f"Loaded config from: {path}")
                break

    # Merge environment variables
    if include_env:
        env_config = load_env_config()
        config_data = merge_configs(config_data, env_config)

    return dict_to_config(config_data)


# ============================================================================
# Configuration Saving
# ============================================================================


def config_to_dict(config: Q3ScoreboardConfig) -> dict[str, Any]:
    """Convert Q3ScoreboardConfig to a dictionary."""
    data = asdict(config)
    # Plain strings, not enum members, so every format can serialize them
    data["output"]["color"] = str(data["output"]["color"])
    return data


def save_config(config: Q3ScoreboardConfig, path: Path) -> None:
    """
    Save configuration to a file.

    Args:
        config: Configuration to save
        path: Path to save to (YAML or JSON, detected from extension)
    """
    data = config_to_dict(config)
    suffix = path.suffix.lower()

    if suffix in (".yaml", ".yml"):
        with open(path, "w") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)

    elif suffix == ".json":
        with open(path, "w") as f:
            json.dump(data, f, indent=2)

    else:
        raise ConfigError(f"Unsupported config format for saving: '{suffix}'")

    logger.info(f"Saved config to: {path}")


# ============================================================================
# Global Configuration
# ============================================================================

_global_config: Q3ScoreboardConfig | None = None


def get_config() -> Q3ScoreboardConfig:
    """Get the global configuration, loading it if necessary."""
    global _global_config

    if _global_config is None:
        _global_config = load_config()

    return _global_config


def set_config(config: Q3ScoreboardConfig) -> None:
    """Set the global configuration."""
    global _global_config
    _global_config = config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _global_config
    _global_config = None


# ============================================================================
# Configuration Templates
# ============================================================================

DEFAULT_CONFIG_YAML = """# q3scoreboard configuration

# Log parsing
parser:
  world_id: 1022        # killer id of environmental deaths
  cause_marker: MOD_    # death causes start at the last occurrence of this
  encoding: utf-8

# Match summaries
summary:
  # game_to_show: 3     # only output this match
  finish_unterminated: true

# JSON output
output:
  color: auto           # auto, always or never
  json_indent: 2
  color_system: truecolor

# Logging settings (logs go to stderr)
logging:
  level: WARNING
  # file: /path/to/q3scoreboard.log
"""

DEFAULT_CONFIG_TOML = """# q3scoreboard configuration

[parser]
world_id = 1022
cause_marker = "MOD_"
encoding = "utf-8"

[summary]
# game_to_show = 3
finish_unterminated = true

[output]
color = "auto"
json_indent = 2
color_system = "truecolor"

[logging]
level = "WARNING"
"""


def generate_default_config(path: Path) -> None:
    """Generate a default configuration file."""
    suffix = path.suffix.lower()

    if suffix in (".yaml", ".yml"):
        path.write_text(DEFAULT_CONFIG_YAML)
    elif suffix == ".toml":
        path.write_text(DEFAULT_CONFIG_TOML)
    else:
        save_config(Q3ScoreboardConfig(), path)

    logger.info(f"Generated default config at: {path}")
