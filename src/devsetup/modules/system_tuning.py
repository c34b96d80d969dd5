"""
System Tuning Module

Apply workstation optimizations: SSD TRIM and kernel parameters.

Kernel parameters are appended to the sysctl configuration file and applied
immediately. Appending is not deduplicated, so running the optimization
twice leaves each line in the file twice.
"""

import logging

from devsetup.config_manager import DevSetupConfig
from devsetup.log_format import SUCCESS
from devsetup.modules.command_runner import CommandRunner, cmd

logger = logging.getLogger(__name__)

SETTING_DESCRIPTIONS = {
    "vm.swappiness": "Optimizing memory usage...",
    "fs.inotify.max_user_watches": "Increasing file watch limits...",
}


def enable_trim(runner: CommandRunner) -> None:
    """Enable and start the periodic SSD TRIM timer."""
    logger.info("Enabling SSD TRIM...")
    runner.run(cmd("sudo", "systemctl", "enable", "fstrim.timer"))
    runner.run(cmd("sudo", "systemctl", "start", "fstrim.timer"))


def apply_sysctl(runner: CommandRunner, conf_path: str, key: str, value: str) -> None:
    """
    Persist a kernel parameter and apply it to the running kernel.

    The ``key=value`` line is appended via ``sudo tee -a`` because the
    configuration file is owned by root.
    """
    setting = f"{key}={value}"
    runner.run(cmd("sudo", "tee", "-a", conf_path, input_text=f"{setting}\n"))
    runner.run(cmd("sudo", "sysctl", setting))


def optimize_system(config: DevSetupConfig, runner: CommandRunner) -> None:
    """
    Apply all system optimizations.

    Raises:
        CommandFailedError: If any command fails
    """
    logger.info("Applying system optimizations...")
    enable_trim(runner)

    for key, value in config.sysctl_settings.items():
        logger.info(SETTING_DESCRIPTIONS.get(key, f"Setting {key}..."))
        apply_sysctl(runner, config.sysctl_conf_path, key, value)

    logger.log(SUCCESS, "System optimizations applied")


__all__ = ["apply_sysctl", "enable_trim", "optimize_system"]
