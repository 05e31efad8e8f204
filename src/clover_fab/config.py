"""
Configuration file support for clover-fab.

Provides hierarchical configuration loading from:
1. Project config: .clover-fab.toml or clover-fab.toml in project root
2. User config: ~/.config/clover-fab/config.toml

CLI arguments override config file values, and project config overrides user config.
"""

import sys
import warnings
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from clover_fab.exceptions import ConfigurationError

# Config file names to search for in project directories
CONFIG_FILENAMES = [".clover-fab.toml", "clover-fab.toml"]

# User-level config path
USER_CONFIG_PATH = Path.home() / ".config" / "clover-fab" / "config.toml"

# All known config keys for validation
KNOWN_KEYS = {
    "defaults": {"format", "verbose", "quiet"},
    "export": {"output_dir", "workers", "compression_level", "keep_layer_files"},
    "pricing": {"manufacturer", "file", "shipping", "currency"},
}

OUTPUT_FORMATS = ("table", "json")
SHIPPING_TIERS = ("economy", "standard", "express")


@dataclass
class DefaultsConfig:
    """Default options for CLI commands."""

    format: str = "table"
    verbose: bool = False
    quiet: bool = False


@dataclass
class ExportConfig:
    """Gerber package configuration."""

    output_dir: str = "./manufacturing"
    workers: int = 0  # 0 = compress serially
    compression_level: int = -1
    keep_layer_files: bool = True


@dataclass
class PricingConfig:
    """Quote configuration."""

    manufacturer: str = "jlcpcb"
    file: str | None = None  # YAML pricing table overriding the bundled one
    shipping: str = "standard"
    currency: str = "USD"


@dataclass
class Config:
    """Merged configuration from all sources."""

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    pricing: PricingConfig = field(default_factory=PricingConfig)

    # Track which file each setting came from (for --show)
    _sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> "Config":
        """
        Load configuration with precedence: project > user > defaults.

        Args:
            start_dir: Directory to start searching from (default: current directory)

        Returns:
            Merged configuration object

        Raises:
            ConfigError: If a config file is unreadable, invalid TOML, or has bad values
        """
        if start_dir is None:
            start_dir = Path.cwd()

        config = cls()
        sources: dict[str, str] = {}

        # Load user config first (lower precedence)
        if USER_CONFIG_PATH.exists():
            _merge_config(config, _load_toml_file(USER_CONFIG_PATH), str(USER_CONFIG_PATH), sources)

        # Load project config (higher precedence)
        project_config = _find_project_config(start_dir)
        if project_config:
            _merge_config(config, _load_toml_file(project_config), str(project_config), sources)

        config._sources = sources
        return config

    def get_source(self, key: str) -> str:
        """Get the source file for a config key."""
        return self._sources.get(key, "default")

    def items(self) -> list[tuple[str, Any]]:
        """Flattened ``section.key`` / value pairs in declaration order."""
        result = []
        for section in KNOWN_KEYS:
            section_config = getattr(self, section)
            for f in fields(section_config):
                result.append((f"{section}.{f.name}", getattr(section_config, f.name)))
        return result

    def pricing_table(self):
        """
        Pricing table selected by the [pricing] section.

        Raises:
            ConfigError: If the manufacturer is unknown
            ConfigurationError: If the pricing file cannot be loaded
        """
        from clover_fab.cost import PricingTable
        from clover_fab.manufacturers import get_manufacturer_ids, get_profile

        try:
            profile = get_profile(self.pricing.manufacturer)
        except ValueError as e:
            source = self.get_source("pricing.manufacturer")
            raise ConfigError(
                f"Invalid value for 'pricing.manufacturer' in {source}: {e}",
                suggestions=[f"Valid manufacturers: {', '.join(get_manufacturer_ids())}"],
            ) from e

        if self.pricing.file:
            table = PricingTable.load(Path(self.pricing.file).expanduser())
        else:
            table = PricingTable.for_manufacturer(profile.pricing_table_id)
        if "pricing.currency" in self._sources:
            table.currency = self.pricing.currency
        return table


class ConfigError(ConfigurationError):
    """Configuration-related errors."""


def _find_project_config(start_dir: Path) -> Path | None:
    """
    Find project config by walking up the directory tree.

    Stops at .git directory or filesystem root.
    """
    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        # Stop at .git directory (project root)
        if (current / ".git").exists():
            break

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """
    Load a TOML file.

    Raises:
        ConfigError: If TOML is invalid or the file cannot be read
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}", context={"file": str(path)}) from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}", context={"file": str(path)}) from e


def _check_value(section: str, key: str, value: Any, source: str) -> None:
    """Reject values the commands could not use."""
    problem = None
    if section == "defaults" and key == "format" and value not in OUTPUT_FORMATS:
        problem = f"must be one of {', '.join(OUTPUT_FORMATS)}"
    elif section == "pricing" and key == "shipping" and value not in SHIPPING_TIERS:
        problem = f"must be one of {', '.join(SHIPPING_TIERS)}"
    elif section == "pricing" and key == "manufacturer" and not isinstance(value, str):
        problem = "must be a manufacturer id string"
    elif section == "export" and key == "workers" and (
        not isinstance(value, int) or isinstance(value, bool) or value < 0
    ):
        problem = "must be an integer >= 0"
    elif section == "export" and key == "compression_level" and (
        not isinstance(value, int) or isinstance(value, bool) or not -1 <= value <= 9
    ):
        problem = "must be an integer from -1 to 9"
    elif key in ("verbose", "quiet", "keep_layer_files") and not isinstance(value, bool):
        problem = "must be true or false"

    if problem:
        raise ConfigError(
            f"Invalid value for '{section}.{key}' in {source}: {problem}",
            context={"file": source, "value": repr(value)},
        )


def _merge_config(
    config: Config, data: dict[str, Any], source: str, sources: dict[str, str]
) -> None:
    """
    Merge loaded config data into Config object.

    Args:
        config: Config object to update
        data: Raw config data from TOML
        source: Source file path (for tracking)
        sources: Dict to update with source info
    """
    # Warn about unknown top-level keys
    for key in data:
        if key not in KNOWN_KEYS:
            warnings.warn(f"Unknown config key '{key}' in {source}", stacklevel=3)

    for section, known in KNOWN_KEYS.items():
        section_data = data.get(section)
        if not isinstance(section_data, dict):
            continue
        _warn_unknown_keys(section_data, known, section, source)

        section_config = getattr(config, section)
        for key in sorted(known & section_data.keys()):
            value = section_data[key]
            _check_value(section, key, value, source)
            setattr(section_config, key, value)
            sources[f"{section}.{key}"] = source


def _warn_unknown_keys(data: dict[str, Any], known: set[str], section: str, source: str) -> None:
    """Warn about unknown keys in a config section."""
    for key in data:
        if key not in known:
            warnings.warn(f"Unknown config key '{section}.{key}' in {source}", stacklevel=4)


def generate_template() -> str:
    """
    Generate a template config file with all options documented.

    Returns:
        Template TOML string
    """
    return """# clover-fab configuration file
# Place as .clover-fab.toml in project root or ~/.config/clover-fab/config.toml for user defaults

[defaults]
# Output format: table, json
# format = "table"

# Enable verbose output by default
# verbose = false

# Enable quiet mode by default
# quiet = false

[export]
# Default output directory for Gerber packages
# output_dir = "./manufacturing"

# Compression threads (0 = serial)
# workers = 0

# zlib compression level: -1 (default) or 0-9
# compression_level = -1

# Keep the individual layer files next to the ZIP archive
# keep_layer_files = true

[pricing]
# Bundled pricing table to use
# manufacturer = "jlcpcb"

# YAML pricing table overriding the bundled one
# file = "~/pricing.yaml"

# Shipping tier: economy, standard, express
# shipping = "standard"

# Currency label shown on quotes
# currency = "USD"
"""


def get_config_paths() -> dict[str, Path | None]:
    """
    Get paths to config files that would be loaded.

    Returns:
        Dict with 'user' and 'project' keys
    """
    project_config = _find_project_config(Path.cwd())

    return {
        "user": USER_CONFIG_PATH if USER_CONFIG_PATH.exists() else None,
        "project": project_config,
    }
