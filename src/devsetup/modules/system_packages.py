"""
System Package Module

Update apt packages and install desktop applications via Flatpak.

Requirements:
- Commands run in order, first failure aborts (CommandFailedError)
- Package manager idempotency is delegated to apt/flatpak themselves
"""

import logging

from devsetup.config_manager import DevSetupConfig
from devsetup.log_format import SUCCESS
from devsetup.modules.command_runner import CommandRunner, cmd

logger = logging.getLogger(__name__)


def update_system(config: DevSetupConfig, runner: CommandRunner) -> None:
    """
    Update system packages and install the base toolchain.

    Runs ``apt update``, ``apt upgrade -y`` and installs the configured
    base packages (curl, wget, vim, git, build-essential by default).

    Raises:
        CommandFailedError: If any apt command fails
    """
    logger.info("Updating system packages...")
    runner.run(cmd("sudo", "apt", "update"))
    runner.run(cmd("sudo", "apt", "upgrade", "-y"))
    if config.apt_packages:
        runner.run(cmd("sudo", "apt", "install", "-y", *config.apt_packages))
    logger.log(SUCCESS, "System updated")


def ensure_flatpak(config: DevSetupConfig, runner: CommandRunner) -> bool:
    """
    Install Flatpak and register its remote when flatpak is missing.

    Returns:
        bool: True if flatpak was installed by this call
    """
    if runner.which("flatpak"):
        logger.debug("Flatpak already available")
        return False

    logger.info("Installing Flatpak...")
    runner.run(cmd("sudo", "apt", "install", "-y", "flatpak"))
    runner.run(
        cmd(
            "flatpak",
            "remote-add",
            "--if-not-exists",
            config.flatpak_remote_name,
            config.flatpak_remote_url,
        )
    )
    return True


def install_jetbrains(config: DevSetupConfig, runner: CommandRunner) -> None:
    """
    Install JetBrains IDEs from Flathub.

    Each configured app is installed unconditionally; flatpak treats an
    already installed app as a no-op.

    Raises:
        CommandFailedError: If any install command fails
    """
    logger.info("Installing JetBrains IDEs via Flatpak...")
    ensure_flatpak(config, runner)

    for app_id, label in config.flatpak_apps.items():
        logger.info(f"Installing {label}...")
        runner.run(cmd("flatpak", "install", "-y", config.flatpak_remote_name, app_id))

    logger.log(SUCCESS, "JetBrains IDEs installed")


__all__ = ["ensure_flatpak", "install_jetbrains", "update_system"]
