"""
System Compatibility Checker Module

Identify the running Linux distribution and confirm it is supported.

Requirements:
- Read-only system checks (/etc/os-release)
- Unsupported distributions need explicit operator confirmation
- Missing OS identification is fatal
"""

import logging
import shlex
from dataclasses import dataclass
from pathlib import Path

from devsetup.config_manager import DevSetupConfig
from devsetup.errors import SetupAbortedError
from devsetup.log_format import SUCCESS
from devsetup.modules.interaction_handler import InteractionHandler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OSInfo:
    """Operating system identification from os-release."""

    id: str
    name: str
    version_id: str | None = None


def parse_os_release(text: str) -> dict[str, str]:
    """
    Parse os-release content into a dictionary.

    Values may be quoted with single or double quotes; comments and blank
    lines are skipped.

    Example:
        >>> parse_os_release('ID=ubuntu\\nNAME="Ubuntu"\\n')
        {'ID': 'ubuntu', 'NAME': 'Ubuntu'}
    """
    values: dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        try:
            parts = shlex.split(value)
        except ValueError:
            parts = [value.strip("'\"")]
        values[key.strip()] = parts[0] if parts else ""
    return values


class SystemChecker:
    """Check the host distribution against the supported list."""

    @classmethod
    def detect(cls, os_release_path: str | Path) -> OSInfo | None:
        """
        Read OS identification.

        Returns:
            OSInfo, or None if the os-release file does not exist
        """
        path = Path(os_release_path)
        if not path.is_file():
            logger.debug(f"os-release not found at {path}")
            return None

        values = parse_os_release(path.read_text(errors="replace"))
        return OSInfo(
            id=values.get("ID", ""),
            name=values.get("PRETTY_NAME") or values.get("NAME", ""),
            version_id=values.get("VERSION_ID"),
        )

    @classmethod
    def check(cls, config: DevSetupConfig, interaction: InteractionHandler) -> OSInfo:
        """
        Verify the system is supported, asking the operator otherwise.

        Raises:
            SetupAbortedError: If the OS cannot be identified or the operator
                declines to continue on an unsupported OS
        """
        logger.info("Checking system compatibility...")

        os_info = cls.detect(config.os_release_path)
        if os_info is None:
            logger.error("Cannot determine OS. This script is for Linux systems.")
            raise SetupAbortedError(f"OS identification file not found: {config.os_release_path}")

        if os_info.id not in config.supported_os_ids:
            supported = " and ".join(config.supported_os_ids)
            logger.warning(f"This script is tested on {supported}. Your system: {os_info.id}")
            if not interaction.confirm("Continue anyway? (y/n): "):
                raise SetupAbortedError(f"Unsupported OS declined: {os_info.id}")

        logger.log(SUCCESS, "System check passed")
        return os_info


__all__ = ["OSInfo", "SystemChecker", "parse_os_release"]
