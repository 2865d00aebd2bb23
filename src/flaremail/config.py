# =============================================================================
# Configuration Management
# =============================================================================
# Handles loading, saving, and validating FlareMail configuration.
#
# XDG Base Directory Compliance (https://specifications.freedesktop.org/basedir-spec/):
#   - Config:  $XDG_CONFIG_HOME/flaremail/  (default: ~/.config/flaremail/)
#   - Data:    $XDG_DATA_HOME/flaremail/    (default: ~/.local/share/flaremail/)
#   - State:   $XDG_STATE_HOME/flaremail/   (default: ~/.local/state/flaremail/)
#
# Files:
#   - config.toml: User preferences (separator, page size, folder terms...)
#   - flaremail.db: SQLite database (in data directory)
#   - flaremail.log: Application log (in state directory)
# =============================================================================

import os
import tomllib  # Built into Python 3.11+
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w  # For writing TOML (tomllib is read-only)

from flaremail.core.errors import FlareMailError
from flaremail.core.folder import DEFAULT_JUNK_TERMS


# =============================================================================
# XDG Directory Management
# =============================================================================

# Application identifier used in all XDG paths
APP_NAME = "flaremail"


def _xdg_home(env_var: str, *default_parts: str) -> Path:
    """Resolve an XDG base directory, falling back to a path under $HOME."""
    value = os.environ.get(env_var)
    if value:
        base = Path(value)
    else:
        base = Path.home().joinpath(*default_parts)
    return base / APP_NAME


def get_xdg_config_home() -> Path:
    """Returns the config directory (config.toml lives here)."""
    return _xdg_home("XDG_CONFIG_HOME", ".config")


def get_xdg_data_home() -> Path:
    """Returns the data directory (the SQLite database lives here)."""
    return _xdg_home("XDG_DATA_HOME", ".local", "share")


def get_xdg_state_home() -> Path:
    """Returns the state directory (the log file lives here)."""
    return _xdg_home("XDG_STATE_HOME", ".local", "state")


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

@dataclass
class ImportConfig:
    """
    Configuration for bulk import.

    Attributes:
        separator: Token between the four fields of an import line.
    """
    separator: str = "----"


@dataclass
class DirectoryConfig:
    """
    Configuration for the account list.

    Attributes:
        page_size: Accounts shown per page.
        page_size_options: Page sizes the user may switch between.
    """
    page_size: int = 10
    page_size_options: list[int] = field(default_factory=lambda: [10, 20, 50])


@dataclass
class SessionConfig:
    """
    Configuration for mailbox sessions.

    Attributes:
        default_folder: Folder opened when none is given ("INBOX" or "JUNK").
        report_sync_failures: Tell the user when the remote check failed and
                              cached mail is being shown instead. When off,
                              failures are only logged.
    """
    default_folder: str = "INBOX"
    report_sync_failures: bool = True


@dataclass
class FolderConfig:
    """
    Configuration for folder classification.

    Attributes:
        junk_terms: Substrings that mark a raw folder label as junk.
    """
    junk_terms: list[str] = field(default_factory=lambda: list(DEFAULT_JUNK_TERMS))


@dataclass
class NotificationConfig:
    """
    Configuration for toast notifications.

    Attributes:
        duration_ms: How long confirmations stay visible (0 = until dismissed).
    """
    duration_ms: int = 2000


@dataclass
class UpdateConfig:
    """
    Configuration for update announcements.

    Attributes:
        release_url: Page that lists releases, attached to update toasts.
    """
    release_url: str = "https://github.com/hulisang/flaremail/releases/latest"


@dataclass
class Config:
    """
    Main configuration container for FlareMail.

    Usage:
        >>> config = Config.load()
        >>> config.importing.separator
        '----'
    """
    importing: ImportConfig = field(default_factory=ImportConfig)
    directory: DirectoryConfig = field(default_factory=DirectoryConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    folders: FolderConfig = field(default_factory=FolderConfig)
    notifications: NotificationConfig = field(default_factory=NotificationConfig)
    updates: UpdateConfig = field(default_factory=UpdateConfig)

    # -------------------------------------------------------------------------
    # File Paths
    # -------------------------------------------------------------------------

    @staticmethod
    def config_file_path() -> Path:
        """Returns the path to the main config file."""
        return get_xdg_config_home() / "config.toml"

    @staticmethod
    def database_path() -> Path:
        """Returns the path to the SQLite database."""
        return get_xdg_data_home() / "flaremail.db"

    @staticmethod
    def log_file_path() -> Path:
        """Returns the path to the log file."""
        return get_xdg_state_home() / "flaremail.log"

    # -------------------------------------------------------------------------
    # Loading and Saving
    # -------------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """
        Load configuration from the config file.

        If the file doesn't exist, returns the default configuration.

        Args:
            path: Config file to read. Defaults to the XDG location.

        Raises:
            ConfigError: If the config file exists but is invalid.
        """
        config_path = path or cls.config_file_path()

        if not config_path.exists():
            return cls()

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file: {e}") from e

        return cls._from_dict(data)

    def save(self, path: Path | None = None) -> None:
        """Save configuration, creating the config directory if needed."""
        config_path = path or self.config_file_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "wb") as f:
            tomli_w.dump(self._to_dict(), f)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "Config":
        """
        Create a Config object from a dictionary (parsed TOML).

        Raises:
            ConfigError: If a value has the wrong type or is out of range.
        """
        config = cls()

        importing = _section(data, "import")
        config.importing = ImportConfig(
            separator=_value(importing, "import.separator", str, "----"),
        )
        if not config.importing.separator:
            raise ConfigError("import.separator must not be empty")

        directory = _section(data, "directory")
        config.directory = DirectoryConfig(
            page_size=_value(directory, "directory.page_size", int, 10),
            page_size_options=_list(
                directory, "directory.page_size_options", int, [10, 20, 50]
            ),
        )
        if any(size <= 0 for size in config.directory.page_size_options):
            raise ConfigError("directory.page_size_options must be positive")
        if config.directory.page_size not in config.directory.page_size_options:
            raise ConfigError(
                f"directory.page_size must be one of {config.directory.page_size_options}"
            )

        session = _section(data, "session")
        config.session = SessionConfig(
            default_folder=_value(session, "session.default_folder", str, "INBOX").upper(),
            report_sync_failures=_value(
                session, "session.report_sync_failures", bool, True
            ),
        )
        if config.session.default_folder not in ("INBOX", "JUNK"):
            raise ConfigError("session.default_folder must be INBOX or JUNK")

        folders = _section(data, "folders")
        config.folders = FolderConfig(
            junk_terms=_list(folders, "folders.junk_terms", str, list(DEFAULT_JUNK_TERMS)),
        )

        notifications = _section(data, "notifications")
        config.notifications = NotificationConfig(
            duration_ms=_value(notifications, "notifications.duration_ms", int, 2000),
        )
        if config.notifications.duration_ms < 0:
            raise ConfigError("notifications.duration_ms must not be negative")

        updates = _section(data, "updates")
        config.updates = UpdateConfig(
            release_url=_value(
                updates, "updates.release_url", str, UpdateConfig.release_url
            ),
        )

        return config

    def _to_dict(self) -> dict[str, Any]:
        """Convert Config to a dictionary for TOML serialization."""
        return {
            "import": {
                "separator": self.importing.separator,
            },
            "directory": {
                "page_size": self.directory.page_size,
                "page_size_options": list(self.directory.page_size_options),
            },
            "session": {
                "default_folder": self.session.default_folder,
                "report_sync_failures": self.session.report_sync_failures,
            },
            "folders": {
                "junk_terms": list(self.folders.junk_terms),
            },
            "notifications": {
                "duration_ms": self.notifications.duration_ms,
            },
            "updates": {
                "release_url": self.updates.release_url,
            },
        }


# =============================================================================
# Exceptions
# =============================================================================

class ConfigError(FlareMailError):
    """Raised when there's an error loading or parsing configuration."""
    pass


# =============================================================================
# Value Checking
# =============================================================================

def _type_name(kind: type) -> str:
    return {str: "a string", int: "an integer", bool: "true or false"}.get(kind, kind.__name__)


def _is_kind(value: Any, kind: type) -> bool:
    # TOML booleans are ints to isinstance(); they never count as integers here
    if kind is int and isinstance(value, bool):
        return False
    return isinstance(value, kind)


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    """A [section] table, or {} when the file leaves it out."""
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table")
    return section


def _value(section: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    """Read one scalar, raising ConfigError when it has the wrong type."""
    value = section.get(key.rsplit(".", 1)[-1], default)
    if not _is_kind(value, kind):
        raise ConfigError(f"{key} must be {_type_name(kind)}, got {value!r}")
    return value


def _list(section: dict[str, Any], key: str, kind: type, default: list[Any]) -> list[Any]:
    """Read a list whose items must all have one type."""
    values = section.get(key.rsplit(".", 1)[-1], default)
    if not isinstance(values, list):
        raise ConfigError(f"{key} must be a list, got {values!r}")
    for item in values:
        if not _is_kind(item, kind):
            raise ConfigError(f"{key} items must be {_type_name(kind)}, got {item!r}")
    return list(values)


# =============================================================================
# Utility Functions
# =============================================================================

def print_paths() -> None:
    """Print all XDG paths so users can find their config and data."""
    print(f"Config:  {get_xdg_config_home()}")
    print(f"Data:    {get_xdg_data_home()}")
    print(f"State:   {get_xdg_state_home()}")
    print()
    print(f"Config file:  {Config.config_file_path()}")
    print(f"Database:     {Config.database_path()}")
    print(f"Log file:     {Config.log_file_path()}")
