"""temploc configuration system.

Configuration is YAML-based with minimal CLI overrides (--path).
Supports environment variable substitution (${VAR}) in config files.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.temploc/config.yaml
3. ./temploc.yaml

Example:
    loader: file
    path:
      - templates
      - ${SHARED_TEMPLATES}
"""

import codecs
import os
import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

# Sentinel root: template names are used as absolute paths
ABSOLUTE_ROOT = ""

# =============================================================================
# Root Set
# =============================================================================


@dataclass(frozen=True)
class RootSet:
    """Ordered, immutable set of template search roots.

    Order defines search priority (first match wins). Duplicates are kept.
    The empty string is the root-less sentinel: names are absolute paths.

    Attributes:
        roots: Root directory strings in search order
    """

    roots: tuple[str, ...] = (ABSOLUTE_ROOT,)

    @classmethod
    def from_option(cls, value: str | Sequence[str] | None) -> "RootSet":
        """Build a root set from the raw "path" option.

        Args:
            value: A list of directories, a comma-separated string, or None

        Returns:
            RootSet with whitespace-trimmed entries (root-less if value is None)

        Raises:
            ValueError: If an entry is not a string
        """
        if value is None:
            return cls()

        if isinstance(value, str):
            entries: Sequence[Any] = value.split(",")
        elif isinstance(value, (list, tuple)):
            entries = value
        else:
            raise ValueError(f"Template path must be a list or string (got {value!r})")

        roots = []
        for entry in entries:
            if not isinstance(entry, str):
                raise ValueError(f"Template root must be a string (got {entry!r})")
            roots.append(entry.strip())

        return cls(tuple(roots))

    @property
    def directories(self) -> tuple[str, ...]:
        """Roots that name directories, without the absolute path sentinel."""
        return tuple(root for root in self.roots if root != ABSOLUTE_ROOT)

    def __iter__(self) -> Iterator[str]:
        return iter(self.roots)

    def __len__(self) -> int:
        return len(self.roots)

    def __getitem__(self, index: int) -> str:
        return self.roots[index]


# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class LoaderConfig:
    """Top-level loader configuration.

    Attributes:
        loader: Loader kind to use (registered in the loader registry)
        path: Template search roots
        encoding: Source encoding used by the Jinja2 adapter
    """

    loader: str = "file"
    path: RootSet = field(default_factory=RootSet)
    encoding: str = "utf-8"

    # Set when loaded from a file
    _config_path: Path | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Validate loader configuration."""
        if not self.loader:
            raise ValueError("Loader kind must not be empty")

        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ValueError(f"Unknown template encoding: {self.encoding}") from e

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path


# =============================================================================
# Environment Variable Substitution
# =============================================================================


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in config values.

    Supports ${VAR} syntax for environment variable substitution.
    Example: ${SHARED_TEMPLATES} -> value of SHARED_TEMPLATES

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted
    """
    if isinstance(value, str):
        # Pattern: ${VAR_NAME}
        pattern = re.compile(r"\$\{([^}]+)\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return pattern.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Search order:
    1. ./.temploc/config.yaml
    2. ./temploc.yaml

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    # Check standard locations
    candidates = [
        start_path / ".temploc" / "config.yaml",
        start_path / "temploc.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def load_config_from_dict(data: dict[str, Any]) -> LoaderConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        LoaderConfig instance
    """
    # Apply environment variable substitution
    data = substitute_env_vars(data)

    # Roots: absent means absolute path mode, a string is comma-separated
    return LoaderConfig(
        loader=data.get("loader", "file"),
        path=RootSet.from_option(data.get("path")),
        encoding=data.get("encoding", "utf-8"),
    )


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> LoaderConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        LoaderConfig instance

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
    """
    # Find config file
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    # Load config
    if found_path is not None:
        with open(found_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        config = load_config_from_dict(data)
        config._config_path = found_path
    else:
        config = LoaderConfig()

    return config


def create_default_config() -> str:
    """Create default configuration YAML content.

    Returns:
        YAML string with default configuration and comments
    """
    return '''# temploc configuration

# Loader kind (registered loaders: file)
loader: "file"

# Template search roots, searched in order; the first match wins.
# Omit "path" to treat template names as absolute file paths.
path:
  - "templates"
  # - "${SHARED_TEMPLATES}"

# Encoding of template sources
encoding: "utf-8"
'''
