# =============================================================================
# Configuration Management
# =============================================================================
# Handles loading, saving, and validating Navim configuration.
#
# XDG Base Directory Compliance (https://specifications.freedesktop.org/basedir-spec/):
#   - Config:  $XDG_CONFIG_HOME/navim/  (default: ~/.config/navim/)
#   - Data:    $XDG_DATA_HOME/navim/    (default: ~/.local/share/navim/)
#   - State:   $XDG_STATE_HOME/navim/   (default: ~/.local/state/navim/)
#
# Files:
#   - config.toml: User configuration (rendering limits, network, search)
#   - history.db:  SQLite browsing history (in data directory)
#   - navim.log:   Log file (in state directory)
#
# The rendering heuristics (image cap, content threshold, minimum image size)
# were tuned by hand against real pages. They live here as named settings so
# they can be adjusted without touching the renderer.
# =============================================================================

import os
import tomllib  # Built into Python 3.11+
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w  # For writing TOML (tomllib is read-only)


# =============================================================================
# XDG Directory Management
# =============================================================================

# Application identifier used in all XDG paths
APP_NAME = "navim"


def _xdg_base(env_var: str, *fallback: str) -> Path:
    value = os.environ.get(env_var)
    if value:
        return Path(value)
    return Path.home().joinpath(*fallback)


def get_xdg_config_home() -> Path:
    """
    Returns the XDG config directory for Navim.

    Respects $XDG_CONFIG_HOME if set, otherwise uses ~/.config/navim/
    """
    return _xdg_base("XDG_CONFIG_HOME", ".config") / APP_NAME


def get_xdg_data_home() -> Path:
    """
    Returns the XDG data directory for Navim.

    Respects $XDG_DATA_HOME if set, otherwise uses ~/.local/share/navim/
    This is where the history database lives.
    """
    return _xdg_base("XDG_DATA_HOME", ".local", "share") / APP_NAME


def get_xdg_state_home() -> Path:
    """
    Returns the XDG state directory for Navim.

    Respects $XDG_STATE_HOME if set, otherwise uses ~/.local/state/navim/
    The log file is written here.
    """
    return _xdg_base("XDG_STATE_HOME", ".local", "state") / APP_NAME


def ensure_directories() -> dict[str, Path]:
    """
    Creates all required XDG directories if they don't exist.

    Returns:
        Dictionary mapping directory type to path.
    """
    dirs = {
        "config": get_xdg_config_home(),
        "data": get_xdg_data_home(),
        "state": get_xdg_state_home(),
    }

    for dir_path in dirs.values():
        dir_path.mkdir(parents=True, exist_ok=True)

    return dirs


# =============================================================================
# Configuration Data Structures
# =============================================================================

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


@dataclass
class RenderingConfig:
    """
    Configuration for the page renderer.

    Attributes:
        max_images: Maximum number of images converted per page.
        image_width: Maximum width of an ASCII image in characters.
        min_content_length: Serialized size (in characters) a candidate
                            content root must exceed to be accepted.
        min_image_bytes: Image bodies smaller than this are treated as
                         tracking pixels and dropped.
    """
    max_images: int = 3
    image_width: int = 60
    min_content_length: int = 500
    min_image_bytes: int = 1000


@dataclass
class NetworkConfig:
    """
    Configuration for HTTP requests.

    Attributes:
        page_timeout: Timeout in seconds for page and search requests.
        image_timeout: Timeout in seconds for each image request.
        user_agent: User-Agent header sent with every request.
    """
    page_timeout: float = 15.0
    image_timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT


@dataclass
class SearchConfig:
    """
    Configuration for the search backend.

    Attributes:
        endpoint: Search page URL; the query is sent as the "q" parameter.
        max_results: Maximum number of results shown.
    """
    endpoint: str = "https://search.brave.com/search"
    max_results: int = 10


@dataclass
class HistoryConfig:
    """
    Configuration for browsing history.

    Attributes:
        enabled: Record opened pages.
        max_entries: Number of newest entries kept.
    """
    enabled: bool = True
    max_entries: int = 100


@dataclass
class Config:
    """
    Main configuration container for Navim.

    Usage:
        >>> config = Config.load()
        >>> config.rendering.max_images
        3
    """
    rendering: RenderingConfig = field(default_factory=RenderingConfig)
    network: NetworkConfig = field(default_factory=NetworkConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)

    # -------------------------------------------------------------------------
    # File Paths
    # -------------------------------------------------------------------------

    @staticmethod
    def config_file_path() -> Path:
        """Returns the path to the main config file."""
        return get_xdg_config_home() / "config.toml"

    @staticmethod
    def database_path() -> Path:
        """Returns the path to the history database."""
        return get_xdg_data_home() / "history.db"

    @staticmethod
    def log_file_path() -> Path:
        """Returns the path to the log file."""
        return get_xdg_state_home() / "navim.log"

    # -------------------------------------------------------------------------
    # Loading and Saving
    # -------------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """
        Load configuration from the config file.

        If the config file doesn't exist, returns default configuration.

        Args:
            path: Config file to read. Defaults to the XDG location.

        Returns:
            Loaded Config object.

        Raises:
            ConfigError: If the config file exists but is invalid.
        """
        config_path = path or cls.config_file_path()

        if not config_path.exists():
            # No config file yet - return defaults
            return cls()

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file: {e}") from e

        return cls._from_dict(data)

    def save(self, path: Path | None = None) -> None:
        """
        Save configuration to the config file.

        Creates the parent directory if it doesn't exist.
        """
        config_path = path or self.config_file_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "wb") as f:
            tomli_w.dump(self._to_dict(), f)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "Config":
        """
        Create a Config object from a dictionary (parsed TOML).

        Unknown keys are ignored; values of the wrong type raise ConfigError.
        """
        config = cls()

        rendering = data.get("rendering", {})
        config.rendering = RenderingConfig(
            max_images=_get(rendering, "max_images", 3, int),
            image_width=_get(rendering, "image_width", 60, int),
            min_content_length=_get(rendering, "min_content_length", 500, int),
            min_image_bytes=_get(rendering, "min_image_bytes", 1000, int),
        )

        network = data.get("network", {})
        config.network = NetworkConfig(
            page_timeout=float(_get(network, "page_timeout", 15.0, (int, float))),
            image_timeout=float(_get(network, "image_timeout", 10.0, (int, float))),
            user_agent=_get(network, "user_agent", DEFAULT_USER_AGENT, str),
        )

        search = data.get("search", {})
        config.search = SearchConfig(
            endpoint=_get(search, "endpoint", SearchConfig.endpoint, str),
            max_results=_get(search, "max_results", 10, int),
        )

        history = data.get("history", {})
        config.history = HistoryConfig(
            enabled=_get(history, "enabled", True, bool),
            max_entries=_get(history, "max_entries", 100, int),
        )

        if config.rendering.max_images < 0:
            raise ConfigError("rendering.max_images must not be negative")
        if config.rendering.image_width < 10:
            raise ConfigError("rendering.image_width must be at least 10")

        return config

    def _to_dict(self) -> dict[str, Any]:
        """Convert Config to a dictionary for TOML serialization."""
        return {
            "rendering": {
                "max_images": self.rendering.max_images,
                "image_width": self.rendering.image_width,
                "min_content_length": self.rendering.min_content_length,
                "min_image_bytes": self.rendering.min_image_bytes,
            },
            "network": {
                "page_timeout": self.network.page_timeout,
                "image_timeout": self.network.image_timeout,
                "user_agent": self.network.user_agent,
            },
            "search": {
                "endpoint": self.search.endpoint,
                "max_results": self.search.max_results,
            },
            "history": {
                "enabled": self.history.enabled,
                "max_entries": self.history.max_entries,
            },
        }


def _get(section: dict[str, Any], key: str, default: Any, expected: type | tuple) -> Any:
    value = section.get(key, default)
    # bool is a subclass of int; don't accept it for numeric settings
    if not isinstance(value, expected) or (
        isinstance(value, bool) and expected is not bool
    ):
        raise ConfigError(f"Invalid value for {key!r}: {value!r}")
    return value


# =============================================================================
# Exceptions
# =============================================================================

class ConfigError(Exception):
    """Raised when there's an error loading or parsing configuration."""
    pass


# =============================================================================
# Utility Functions
# =============================================================================

def print_paths() -> None:
    """
    Print all XDG paths for debugging.
    Useful for users wondering where their config/data is stored.
    """
    print(f"Config:  {get_xdg_config_home()}")
    print(f"Data:    {get_xdg_data_home()}")
    print(f"State:   {get_xdg_state_home()}")
    print()
    print(f"Config file:  {Config.config_file_path()}")
    print(f"History:      {Config.database_path()}")
    print(f"Log file:     {Config.log_file_path()}")
