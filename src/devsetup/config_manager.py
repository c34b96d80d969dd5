"""Configuration management module.

This module handles the optional TOML configuration file that overrides the
package lists, kernel parameters and paths used during provisioning. Every
key is optional; the defaults reproduce a stock Linux Mint / Ubuntu setup.

Security:
- Config file permissions: 0600 (owner read/write only)
- Path validation
- Type checking of every value
"""

import logging
import os
import tempfile
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from devsetup.errors import DevSetupError

logger = logging.getLogger(__name__)


class ConfigError(DevSetupError):
    """Raised when configuration operations fail."""

    pass


DEFAULT_SYSCTL_SETTINGS = {
    "vm.swappiness": "10",  # Prefer RAM over swap on machines with plenty of memory
    "fs.inotify.max_user_watches": "524288",  # File watchers for IDEs and dev servers
}

DEFAULT_FLATPAK_APPS = {
    "com.jetbrains.IntelliJ-IDEA-Community": "IntelliJ IDEA Community",
    "com.jetbrains.WebStorm": "WebStorm",
    "com.jetbrains.PyCharm-Community": "PyCharm Community",
}


@dataclass(frozen=True)
class DevSetupConfig:
    """Provisioning configuration data."""

    supported_os_ids: tuple[str, ...] = ("linuxmint", "ubuntu")
    os_release_path: str = "/etc/os-release"
    apt_packages: tuple[str, ...] = ("curl", "wget", "vim", "git", "build-essential")
    homebrew_install_url: str = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"
    brew_prefix: str = "/home/linuxbrew/.linuxbrew"
    brew_formulae: tuple[str, ...] = ("gh", "node", "python@3.12", "go")
    brew_cli_utilities: tuple[str, ...] = ("tree", "htop", "ripgrep", "fd", "fzf")
    sysctl_conf_path: str = "/etc/sysctl.conf"
    sysctl_settings: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_SYSCTL_SETTINGS))
    flatpak_remote_name: str = "flathub"
    flatpak_remote_url: str = "https://flathub.org/repo/flathub.flatpakrepo"
    flatpak_apps: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_FLATPAK_APPS))
    ssh_key_path: str = "~/.ssh/id_ed25519"
    shell_profile_path: str = "~/.bashrc"
    git_host: str = "github.com"

    @property
    def key_path(self) -> Path:
        """SSH private key path with ~ expanded."""
        return Path(self.ssh_key_path).expanduser()

    @property
    def profile_path(self) -> Path:
        """Shell profile path with ~ expanded."""
        return Path(self.shell_profile_path).expanduser()

    def to_dict(self) -> dict[str, Any]:
        """Convert to a TOML-friendly dictionary (tuples become lists)."""
        data: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, tuple):
                value = list(value)
            elif isinstance(value, dict):
                value = dict(value)
            data[f.name] = value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DevSetupConfig":
        """Create from dictionary, validating value types.

        Unknown keys are ignored with a warning.

        Raises:
            ConfigError: If a known key has a value of the wrong type
        """
        defaults = cls()
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}

        for key, value in data.items():
            if key not in known:
                logger.warning(f"Ignoring unknown config key: {key}")
                continue

            default = getattr(defaults, key)
            if isinstance(default, tuple):
                if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                    raise ConfigError(f"Config key '{key}' must be a list of strings")
                kwargs[key] = tuple(value)
            elif isinstance(default, dict):
                if not isinstance(value, dict):
                    raise ConfigError(f"Config key '{key}' must be a table")
                for k, v in value.items():
                    # An unquoted dotted key parses as a nested table
                    if isinstance(v, bool) or not isinstance(v, (str, int, float)):
                        raise ConfigError(
                            f"Config key '{key}.{k}' must be a string or number "
                            "(quote dotted names such as \"vm.swappiness\")"
                        )
                kwargs[key] = {str(k): str(v) for k, v in value.items()}
            else:
                if not isinstance(value, str):
                    raise ConfigError(f"Config key '{key}' must be a string")
                kwargs[key] = value

        return cls(**kwargs)


class ConfigManager:
    """Manage the devsetup configuration file.

    Configuration is stored at ~/.devsetup/config.toml with secure permissions.
    """

    DEFAULT_CONFIG_DIR = Path.home() / ".devsetup"
    DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

    @classmethod
    def _validate_config_path(cls, path: Path) -> Path:
        """Validate configuration file path.

        The path must resolve inside ~/.devsetup/, the current working
        directory or the system temporary directory.

        Raises:
            ConfigError: If path is outside allowed directories
        """
        resolved_path = path.resolve()

        allowed_dirs = [
            cls.DEFAULT_CONFIG_DIR.resolve(),
            Path.cwd().resolve(),
            Path(tempfile.gettempdir()).resolve(),
        ]

        for allowed_dir in allowed_dirs:
            if resolved_path.is_relative_to(allowed_dir):
                return resolved_path

        allowed = "\n".join(f"  - {d}" for d in allowed_dirs)
        raise ConfigError(
            f"Config path outside allowed directories: {resolved_path}\n"
            f"Allowed directories:\n{allowed}"
        )

    @classmethod
    def get_config_path(cls, custom_path: str | None = None) -> Path:
        """Get configuration file path.

        Args:
            custom_path: Custom config file path (optional)

        Raises:
            ConfigError: If path is outside allowed directories
        """
        if custom_path:
            return cls._validate_config_path(Path(custom_path).expanduser())
        return cls.DEFAULT_CONFIG_FILE

    @classmethod
    def load_config(cls, custom_path: str | None = None) -> DevSetupConfig:
        """Load configuration from file.

        A missing default config file means defaults. A missing custom
        config file is an error.

        Raises:
            ConfigError: If loading fails
        """
        config_path = cls.get_config_path(custom_path)

        if not config_path.exists():
            if custom_path:
                raise ConfigError(f"Config file not found: {config_path}")
            logger.debug("Config file not found, using defaults")
            return DevSetupConfig()

        mode = config_path.stat().st_mode & 0o777
        if mode & 0o077:
            logger.warning(f"Config file has insecure permissions: {oct(mode)}. Fixing to 0600...")
            os.chmod(config_path, 0o600)

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Failed to load config: {e}") from e

        logger.debug(f"Loaded config from: {config_path}")
        return DevSetupConfig.from_dict(data)

    @classmethod
    def save_config(cls, config: DevSetupConfig, custom_path: str | None = None) -> Path:
        """Save configuration to file.

        Existing comments and formatting are preserved via tomlkit; the file
        is written to a temporary sibling and renamed into place.

        Returns:
            Path the configuration was written to

        Raises:
            ConfigError: If saving fails
        """
        config_path = cls.get_config_path(custom_path)
        temp_path = config_path.with_suffix(".tmp")

        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            if config_path.parent == cls.DEFAULT_CONFIG_DIR:
                os.chmod(config_path.parent, 0o700)

            if config_path.exists():
                with open(config_path) as f:
                    doc = tomlkit.load(f)
            else:
                doc = tomlkit.document()
                doc.add(tomlkit.comment("devsetup configuration"))

            # Plain keys must precede tables in TOML
            items = sorted(config.to_dict().items(), key=lambda kv: isinstance(kv[1], dict))
            for key, value in items:
                doc[key] = value

            with open(temp_path, "w") as f:
                tomlkit.dump(doc, f)

            os.chmod(temp_path, 0o600)
            temp_path.replace(config_path)

        except (OSError, TOMLKitError) as e:
            if temp_path.exists():
                temp_path.unlink()
            raise ConfigError(f"Failed to save config: {e}") from e

        logger.debug(f"Saved config to: {config_path}")
        return config_path


__all__ = ["ConfigError", "ConfigManager", "DevSetupConfig"]
