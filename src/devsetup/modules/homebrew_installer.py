"""Homebrew installation and development tool setup.

Philosophy:
- Single responsibility: get brew and the brew-managed tools onto the box
- Skip the installer when brew is already on PATH
- Zero-BS: every command is a real invocation, failures propagate

Public API (the "studs"):
    InstallStatus: Installation status enum
    HomebrewInstaller: Installer class
    install_dev_tools: Install formulae and fzf shell integration
"""

import logging
from enum import Enum
from pathlib import Path

from devsetup.config_manager import DevSetupConfig
from devsetup.log_format import SUCCESS
from devsetup.modules.command_runner import CommandRunner, cmd

logger = logging.getLogger(__name__)


class InstallStatus(Enum):
    """Installation status."""

    SUCCESS = "success"
    ALREADY_INSTALLED = "already_installed"


def shellenv_line(brew_prefix: str) -> str:
    """Shell profile line that puts Homebrew on PATH for new shells."""
    return f'eval "$({brew_prefix}/bin/brew shellenv)"'


class HomebrewInstaller:
    """Install Homebrew on Linux."""

    def __init__(self, config: DevSetupConfig, runner: CommandRunner):
        self.config = config
        self.runner = runner

    def is_installed(self) -> bool:
        return self.runner.which("brew") is not None

    def install(self) -> InstallStatus:
        """
        Install Homebrew unless it is already present.

        Returns:
            InstallStatus.ALREADY_INSTALLED when brew is on PATH (nothing is
            run), InstallStatus.SUCCESS otherwise

        Raises:
            CommandFailedError: If download, installer or follow-up commands fail
        """
        logger.info("Installing Homebrew...")

        if self.is_installed():
            logger.warning("Homebrew already installed")
            return InstallStatus.ALREADY_INSTALLED

        script = self.runner.run(
            cmd("curl", "-fsSL", self.config.homebrew_install_url, capture=True)
        ).stdout
        self.runner.run(cmd("/bin/bash", "-c", script))

        self.add_to_profile(self.config.profile_path)
        self.activate()

        # Build dependencies for formulae compiled from source
        self.runner.run(cmd("sudo", "apt-get", "install", "-y", "build-essential"))
        self.runner.run(cmd("brew", "install", "gcc"))

        logger.log(SUCCESS, "Homebrew installed")
        return InstallStatus.SUCCESS

    def add_to_profile(self, profile_path: Path) -> None:
        """Append the shellenv snippet to the shell profile.

        The snippet is appended on every call; the profile is not checked
        for an existing copy.
        """
        profile_path.parent.mkdir(parents=True, exist_ok=True)
        with open(profile_path, "a") as f:
            f.write("\n")
            f.write(shellenv_line(self.config.brew_prefix) + "\n")
        logger.debug(f"Added Homebrew shellenv to {profile_path}")

    def activate(self) -> None:
        """Make brew visible to the commands that follow in this run."""
        prefix = self.config.brew_prefix
        self.runner.prepend_path(f"{prefix}/sbin")
        self.runner.prepend_path(f"{prefix}/bin")
        self.runner.set_env("HOMEBREW_PREFIX", prefix)
        self.runner.set_env("HOMEBREW_CELLAR", f"{prefix}/Cellar")
        self.runner.set_env("HOMEBREW_REPOSITORY", f"{prefix}/Homebrew")


def install_homebrew(config: DevSetupConfig, runner: CommandRunner) -> InstallStatus:
    """Install Homebrew (convenience function)."""
    return HomebrewInstaller(config, runner).install()


def install_dev_tools(config: DevSetupConfig, runner: CommandRunner) -> None:
    """
    Install development tools via Homebrew.

    Raises:
        CommandFailedError: If any brew command fails
    """
    logger.info("Installing development tools via Homebrew...")

    if config.brew_formulae:
        runner.run(cmd("brew", "install", *config.brew_formulae))
    if config.brew_cli_utilities:
        runner.run(cmd("brew", "install", *config.brew_cli_utilities))

    logger.info("Setting up fzf shell integration...")
    prefix = runner.run(cmd("brew", "--prefix", capture=True)).stdout.strip()
    prefix = prefix or config.brew_prefix
    runner.run(
        cmd(f"{prefix}/opt/fzf/install", "--key-bindings", "--completion", "--update-rc")
    )

    logger.log(SUCCESS, "Development tools installed")


__all__ = ["HomebrewInstaller", "InstallStatus", "install_dev_tools", "install_homebrew", "shellenv_line"]
